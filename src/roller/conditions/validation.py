"""Conversion of editable clauses into validated condition variants."""

from collections.abc import Sequence
from dataclasses import replace

from roller.conditions.models import (
    AggregateCondition,
    Conjunction,
    EachCondition,
    RawCondition,
    Reduction,
    RunCondition,
    SequenceCondition,
    ValidatedCondition,
)
from roller.errors import InvalidCondition, InvalidConjunctionStructure


def validate(raw: RawCondition, is_first: bool = False, index: int = 0) -> ValidatedCondition:
    """Validate one clause.

    Args:
        raw: Clause as built by the caller (not modified)
        is_first: Force the conjunction to `first` (the lead clause has no predecessor)
        index: Position of the clause in the caller's list, reported on failure

    Returns:
        The ValidatedCondition variant matching the clause's reduction

    Raises:
        InvalidCondition: If a field required by the reduction is missing
    """
    if is_first:
        raw = replace(raw, conjunction=Conjunction.FIRST)

    reduction = raw.reduction
    if raw.dice_kind is None or raw.conjunction is None:
        raise InvalidCondition(index)

    if reduction is Reduction.SEQUENCE:
        return SequenceCondition(
            dice_kind=raw.dice_kind,
            conjunction=raw.conjunction,
            value_range=raw.value_range,
        )

    if raw.comparison is None:
        raise InvalidCondition(index)

    if reduction is not None and reduction.is_aggregate:
        return AggregateCondition(
            dice_kind=raw.dice_kind,
            conjunction=raw.conjunction,
            reduction=reduction,
            comparison=raw.comparison,
            value=raw.value,
            value_range=raw.value_range,
        )

    if reduction is None or raw.bound is None:
        raise InvalidCondition(index)

    variant = EachCondition if reduction is Reduction.EACH else RunCondition
    return variant(
        dice_kind=raw.dice_kind,
        conjunction=raw.conjunction,
        bound=raw.bound,
        quantity=raw.quantity,
        comparison=raw.comparison,
        value=raw.value,
        value_range=raw.value_range,
    )


def validate_all(raws: Sequence[RawCondition]) -> list[ValidatedCondition]:
    """Validate a condition list, forcing `first` on the lead clause.

    Raises:
        InvalidConjunctionStructure: If the list is empty
        InvalidCondition: For the first clause that fails validation
    """
    if not raws:
        raise InvalidConjunctionStructure("Specify at least one condition")

    return [validate(raw, is_first=index == 0, index=index) for index, raw in enumerate(raws)]
