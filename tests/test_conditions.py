"""Unit tests for the condition model and clause validation."""

import pytest

from roller.conditions import (
    AggregateCondition,
    Bound,
    Comparison,
    Conjunction,
    DiceKind,
    EachCondition,
    RawCondition,
    Reduction,
    RunCondition,
    SequenceCondition,
    SweepAxis,
    ValueRange,
    validate,
    validate_all,
)
from roller.errors import InvalidCondition, InvalidConjunctionStructure, SimulationError


# ========== Model ==========


class TestModel:
    """Tests for enums, ranges and raw clause helpers."""

    def test_dice_kind_faces(self):
        """Dice kinds are valued by their face count."""
        assert DiceKind.D6.faces == 6
        assert DiceKind.D100.faces == 100
        assert [kind.faces for kind in DiceKind][:5] == [2, 3, 4, 5, 6]

    def test_aggregate_reductions(self):
        """Only the statistic reductions are aggregates."""
        aggregates = {r for r in Reduction if r.is_aggregate}
        assert aggregates == {
            Reduction.SUM,
            Reduction.AVERAGE,
            Reduction.MEDIAN,
            Reduction.MINIMUM,
            Reduction.MAXIMUM,
            Reduction.MODE,
        }

    def test_value_range_orientation(self):
        """Range endpoints keep their entry order but expose sorted bounds."""
        ascending = ValueRange(2, 5)
        descending = ValueRange(5, 2)

        assert not ascending.descending
        assert descending.descending
        assert descending.lowest == 2 and descending.highest == 5
        assert descending.contains(2) and descending.contains(5)
        assert not descending.contains(6)

    def test_with_defaults(self):
        """Editor defaults fill bound, reduction and comparison only."""
        raw = RawCondition(quantity=2, value=4)
        filled = raw.with_defaults(DiceKind.D8)

        assert filled.dice_kind is DiceKind.D8
        assert filled.bound is Bound.EXACTLY
        assert filled.reduction is Reduction.EACH
        assert filled.comparison is Comparison.EQUALS
        assert filled.conjunction is None
        assert raw.bound is None, "with_defaults() must return a copy"

    def test_with_defaults_keeps_existing_fields(self):
        """Fields already chosen survive with_defaults()."""
        raw = RawCondition(bound=Bound.AT_LEAST, reduction=Reduction.SUM)
        filled = raw.with_defaults(DiceKind.D6)

        assert filled.bound is Bound.AT_LEAST
        assert filled.reduction is Reduction.SUM


# ========== Validation ==========


class TestValidate:
    """Tests for validate() on single clauses."""

    def test_each_clause(self):
        raw = RawCondition(
            bound=Bound.AT_LEAST,
            quantity=3,
            dice_kind=DiceKind.D6,
            reduction=Reduction.EACH,
            comparison=Comparison.EQUALS,
            value=4,
            conjunction=Conjunction.AND,
        )
        validated = validate(raw)

        assert isinstance(validated, EachCondition)
        assert validated.bound is Bound.AT_LEAST
        assert validated.quantity == 3
        assert validated.value == 4
        assert validated.conjunction is Conjunction.AND

    def test_consecutive_clause(self):
        raw = RawCondition(
            bound=Bound.EXACTLY,
            dice_kind=DiceKind.D6,
            reduction=Reduction.CONSECUTIVE,
            comparison=Comparison.AT_MOST,
            conjunction=Conjunction.OR,
        )
        validated = validate(raw)

        assert isinstance(validated, RunCondition)
        assert validated.reduction is Reduction.CONSECUTIVE

    def test_aggregate_forces_exactly(self):
        """Aggregate clauses ignore the caller's bound."""
        raw = RawCondition(
            bound=Bound.AT_LEAST,
            dice_kind=DiceKind.D6,
            reduction=Reduction.SUM,
            comparison=Comparison.GREATER_THAN,
            value=20,
            conjunction=Conjunction.OR,
        )
        validated = validate(raw)

        assert isinstance(validated, AggregateCondition)
        assert validated.bound is Bound.EXACTLY
        assert validated.comparison is Comparison.GREATER_THAN

    def test_aggregate_without_bound(self):
        """A missing bound is fine for aggregates."""
        raw = RawCondition(
            dice_kind=DiceKind.D6,
            reduction=Reduction.MEDIAN,
            comparison=Comparison.EQUALS,
            conjunction=Conjunction.AND,
        )

        assert isinstance(validate(raw), AggregateCondition)

    def test_sequence_forces_between(self):
        """Sequence clauses need only the die, conjunction and range."""
        raw = RawCondition(
            dice_kind=DiceKind.D6,
            reduction=Reduction.SEQUENCE,
            comparison=Comparison.EQUALS,
            value_range=ValueRange(1, 4),
            conjunction=Conjunction.OR,
        )
        validated = validate(raw)

        assert isinstance(validated, SequenceCondition)
        assert validated.bound is Bound.EXACTLY
        assert validated.comparison is Comparison.BETWEEN
        assert validated.value_range == ValueRange(1, 4)

    def test_is_first_forces_first(self):
        """The lead clause is always `first`, whatever the caller set."""
        raw = RawCondition(dice_kind=DiceKind.D6, conjunction=Conjunction.AND).with_defaults(DiceKind.D6)
        assert validate(raw, is_first=True).conjunction is Conjunction.FIRST

        missing = RawCondition().with_defaults(DiceKind.D6)
        assert validate(missing, is_first=True).conjunction is Conjunction.FIRST

    @pytest.mark.parametrize(
        "raw",
        [
            RawCondition(
                bound=Bound.EXACTLY,
                reduction=Reduction.EACH,
                comparison=Comparison.EQUALS,
                conjunction=Conjunction.OR,
            ),
            RawCondition(
                bound=Bound.EXACTLY,
                dice_kind=DiceKind.D6,
                reduction=Reduction.EACH,
                comparison=Comparison.EQUALS,
            ),
            RawCondition(
                bound=Bound.EXACTLY,
                dice_kind=DiceKind.D6,
                reduction=Reduction.EACH,
                conjunction=Conjunction.OR,
            ),
            RawCondition(
                dice_kind=DiceKind.D6,
                reduction=Reduction.EACH,
                comparison=Comparison.EQUALS,
                conjunction=Conjunction.OR,
            ),
            RawCondition(
                bound=Bound.EXACTLY,
                dice_kind=DiceKind.D6,
                comparison=Comparison.EQUALS,
                conjunction=Conjunction.OR,
            ),
        ],
        ids=["no-dice", "no-conjunction", "no-comparison", "no-bound", "no-reduction"],
    )
    def test_incomplete_clause_rejected(self, raw):
        with pytest.raises(InvalidCondition) as exc_info:
            validate(raw, index=3)

        assert exc_info.value.index == 3
        assert "Condition 3" in str(exc_info.value)

    def test_invalid_condition_is_value_error(self):
        """Engine errors stay catchable as ValueError."""
        with pytest.raises(ValueError):
            validate(RawCondition())
        assert issubclass(InvalidCondition, SimulationError)


class TestValidateAll:
    """Tests for validate_all() over clause lists."""

    def test_empty_list(self):
        with pytest.raises(InvalidConjunctionStructure):
            validate_all([])

    def test_lead_clause_forced_first(self, clause):
        validated = validate_all([clause(1, 6, conjunction=Conjunction.AND), clause(1, 5)])

        assert validated[0].conjunction is Conjunction.FIRST
        assert validated[1].conjunction is Conjunction.OR

    def test_reports_failing_index(self, clause):
        """The error names the first incomplete clause."""
        broken = RawCondition(dice_kind=DiceKind.D6, conjunction=Conjunction.AND)

        with pytest.raises(InvalidCondition) as exc_info:
            validate_all([clause(1, 6), clause(1, 5), broken, broken])

        assert exc_info.value.index == 2

    def test_missing_conjunction_after_lead(self, clause):
        """Only the lead clause may omit its conjunction."""
        trailing = clause(1, 5)
        trailing.conjunction = None

        with pytest.raises(InvalidCondition) as exc_info:
            validate_all([clause(1, 6, conjunction=None), trailing])

        assert exc_info.value.index == 1


# ========== Sweep overrides ==========


class TestWithParameter:
    """Tests for overriding one parameter on a validated clause."""

    def test_each_overrides(self, clause):
        validated = validate(clause(2, 4), is_first=True)

        assert validated.with_parameter(SweepAxis.VALUE, 6).value == 6
        assert validated.with_parameter(SweepAxis.QUANTITY, 0).quantity == 0
        assert validated.with_parameter(SweepAxis.RANGE_LOWER, 3).value_range == ValueRange(3, 1)
        assert validated.with_parameter(SweepAxis.RANGE_UPPER, 5).value_range == ValueRange(1, 5)
        assert validated.value == 4, "Overrides must not mutate the clause"

    def test_sequence_ignores_value_and_quantity(self):
        validated = validate(
            RawCondition(
                dice_kind=DiceKind.D6,
                reduction=Reduction.SEQUENCE,
                value_range=ValueRange(2, 4),
            ),
            is_first=True,
        )

        assert validated.with_parameter(SweepAxis.VALUE, 6) == validated
        assert validated.with_parameter(SweepAxis.QUANTITY, 3) == validated
        assert validated.with_parameter(SweepAxis.RANGE_UPPER, 6).value_range == ValueRange(2, 6)

    def test_aggregate_ignores_quantity(self):
        validated = validate(
            RawCondition(
                dice_kind=DiceKind.D6,
                reduction=Reduction.SUM,
                comparison=Comparison.EQUALS,
                value=10,
            ),
            is_first=True,
        )

        assert validated.with_parameter(SweepAxis.QUANTITY, 3) == validated
        assert validated.with_parameter(SweepAxis.VALUE, 12).value == 12
