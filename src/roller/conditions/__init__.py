"""Condition model and validation for dice "where" clauses."""

from roller.conditions.models import (
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
    ValidatedCondition,
    ValueRange,
)
from roller.conditions.validation import validate, validate_all

__all__ = [
    # Enums
    "DiceKind",
    "Bound",
    "Reduction",
    "Comparison",
    "Conjunction",
    "SweepAxis",
    # Models
    "ValueRange",
    "RawCondition",
    "EachCondition",
    "RunCondition",
    "SequenceCondition",
    "AggregateCondition",
    "ValidatedCondition",
    # Validation
    "validate",
    "validate_all",
]
