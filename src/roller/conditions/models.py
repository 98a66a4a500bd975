"""Condition data model for dice "where" clauses.

A RawCondition is the editable shape a caller builds clause by clause; every
field except the numeric ones may still be missing. Validation turns it into
one of the ValidatedCondition variants, each carrying only the fields its
reduction actually scores with.
"""

from dataclasses import dataclass, field, replace
from enum import Enum, IntEnum


class DiceKind(IntEnum):
    """Supported dice, valued by face count."""

    D2 = 2
    D3 = 3
    D4 = 4
    D5 = 5
    D6 = 6
    D7 = 7
    D8 = 8
    D9 = 9
    D10 = 10
    D11 = 11
    D12 = 12
    D20 = 20
    D40 = 40
    D100 = 100

    @property
    def faces(self) -> int:
        return int(self.value)


class Bound(str, Enum):
    """Comparator between a derived count and the condition's quantity."""

    EXACTLY = "exactly"
    AT_MOST = "at_most"
    AT_LEAST = "at_least"
    LESS_THAN = "less_than"
    GREATER_THAN = "greater_than"


class Reduction(str, Enum):
    """How a batch is reduced before it is compared."""

    EACH = "each"
    CONSECUTIVE = "consecutive"
    SEQUENCE = "sequence"
    SUM = "sum"
    AVERAGE = "average"
    MEDIAN = "median"
    MINIMUM = "minimum"
    MAXIMUM = "maximum"
    MODE = "mode"

    @property
    def is_aggregate(self) -> bool:
        return self in AGGREGATE_REDUCTIONS


AGGREGATE_REDUCTIONS = frozenset(
    {
        Reduction.SUM,
        Reduction.AVERAGE,
        Reduction.MEDIAN,
        Reduction.MINIMUM,
        Reduction.MAXIMUM,
        Reduction.MODE,
    }
)


class Comparison(str, Enum):
    """Comparator between a die value (or aggregate scalar) and the target value."""

    EQUALS = "equals"
    NOT_EQUALS = "not_equals"
    AT_MOST = "at_most"
    AT_LEAST = "at_least"
    LESS_THAN = "less_than"
    GREATER_THAN = "greater_than"
    BETWEEN = "between"


class Conjunction(str, Enum):
    """Boolean link between a condition and its predecessor."""

    FIRST = "first"
    AND = "and"
    OR = "or"


class SweepAxis(str, Enum):
    """Condition parameter varied by a 1-D sweep."""

    VALUE = "value"
    RANGE_LOWER = "range_lower"
    RANGE_UPPER = "range_upper"
    QUANTITY = "quantity"


@dataclass(frozen=True)
class ValueRange:
    """Two range endpoints in the order the caller entered them."""

    lower: int
    upper: int

    @property
    def lowest(self) -> int:
        return min(self.lower, self.upper)

    @property
    def highest(self) -> int:
        return max(self.lower, self.upper)

    @property
    def descending(self) -> bool:
        """True when a sequence over this range should run high to low."""
        return self.upper < self.lower

    def contains(self, x: int) -> bool:
        return self.lowest <= x <= self.highest


@dataclass
class RawCondition:
    """Editable clause; optional fields are unset while the user is still editing."""

    bound: Bound | None = None
    quantity: int = 1
    dice_kind: DiceKind | None = None
    reduction: Reduction | None = None
    comparison: Comparison | None = None
    value: int = 1
    value_range: ValueRange = field(default_factory=lambda: ValueRange(1, 1))
    conjunction: Conjunction | None = None

    def with_dice_kind(self, dice_kind: DiceKind | None) -> "RawCondition":
        """Return a copy targeting a different die."""
        return replace(self, dice_kind=dice_kind)

    def with_defaults(self, dice_kind: DiceKind | None) -> "RawCondition":
        """Return a copy with the editor's defaults filled in.

        Unset bound, reduction and comparison become exactly, each and equals.
        The conjunction is left alone.
        """
        return replace(
            self,
            dice_kind=dice_kind,
            bound=self.bound or Bound.EXACTLY,
            reduction=self.reduction or Reduction.EACH,
            comparison=self.comparison or Comparison.EQUALS,
        )


# ---------------------------------------------------------------------------
# Validated variants
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class EachCondition:
    """Count dice matching the comparison, then bound the count."""

    dice_kind: DiceKind
    conjunction: Conjunction
    bound: Bound
    quantity: int
    comparison: Comparison
    value: int
    value_range: ValueRange

    @property
    def reduction(self) -> Reduction:
        return Reduction.EACH

    def with_parameter(self, axis: SweepAxis, x: int) -> "EachCondition":
        return _override(self, axis, x)


@dataclass(frozen=True)
class RunCondition:
    """Bound the length of any run of consecutive matching dice."""

    dice_kind: DiceKind
    conjunction: Conjunction
    bound: Bound
    quantity: int
    comparison: Comparison
    value: int
    value_range: ValueRange

    @property
    def reduction(self) -> Reduction:
        return Reduction.CONSECUTIVE

    def with_parameter(self, axis: SweepAxis, x: int) -> "RunCondition":
        return _override(self, axis, x)


@dataclass(frozen=True)
class SequenceCondition:
    """Require the range's values as a contiguous slice of the batch."""

    dice_kind: DiceKind
    conjunction: Conjunction
    value_range: ValueRange

    @property
    def reduction(self) -> Reduction:
        return Reduction.SEQUENCE

    @property
    def bound(self) -> Bound:
        return Bound.EXACTLY

    @property
    def comparison(self) -> Comparison:
        return Comparison.BETWEEN

    def with_parameter(self, axis: SweepAxis, x: int) -> "SequenceCondition":
        return _override(self, axis, x)


@dataclass(frozen=True)
class AggregateCondition:
    """Reduce the batch to one statistic and compare it to the target."""

    dice_kind: DiceKind
    conjunction: Conjunction
    reduction: Reduction
    comparison: Comparison
    value: int
    value_range: ValueRange

    @property
    def bound(self) -> Bound:
        return Bound.EXACTLY

    def with_parameter(self, axis: SweepAxis, x: int) -> "AggregateCondition":
        return _override(self, axis, x)


ValidatedCondition = EachCondition | RunCondition | SequenceCondition | AggregateCondition


def _override(condition, axis: SweepAxis, x: int):
    # Parameters the variant never scores with leave it unchanged.
    if axis is SweepAxis.VALUE and hasattr(condition, "value"):
        return replace(condition, value=x)
    if axis is SweepAxis.QUANTITY and hasattr(condition, "quantity"):
        return replace(condition, quantity=x)
    if axis is SweepAxis.RANGE_LOWER:
        return replace(condition, value_range=replace(condition.value_range, lower=x))
    if axis is SweepAxis.RANGE_UPPER:
        return replace(condition, value_range=replace(condition.value_range, upper=x))
    return condition
