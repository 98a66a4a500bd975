"""And/or folding of per-condition verdicts.

`and` binds tighter than `or`, left to right, with no grouping syntax:

    T and F and T or T and T or F and T
    -> and pass: [T and F and T, T and T, F and T] = [F, T, F]
    -> or pass:  F or T or F = T

Verdicts may be plain bools or boolean arrays (one entry per batch); the
same fold applies elementwise.
"""

import operator
from collections.abc import Sequence
from functools import reduce
from typing import Any

from roller.conditions.models import Conjunction
from roller.errors import InvalidConjunctionStructure


def count_or_conjunctions(conditions: Sequence[Any]) -> int:
    """Count `or` links, ignoring the lead condition's own conjunction."""
    return sum(1 for condition in conditions[1:] if condition.conjunction is Conjunction.OR)


def resolve(scores: Sequence[Any], conditions: Sequence[Any]):
    """Combine per-condition verdicts into one verdict.

    Args:
        scores: One verdict (bool or boolean array) per condition
        conditions: Objects exposing `.conjunction`, in the same order

    Returns:
        The combined verdict, of the same kind as the inputs

    Raises:
        InvalidConjunctionStructure: If the list is empty, lengths differ, a
            conjunction is missing, or the chain does not fold into
            1 + (number of `or` links) groups
    """
    if not conditions:
        raise InvalidConjunctionStructure("Specify at least one condition")
    if len(scores) != len(conditions):
        raise InvalidConjunctionStructure(
            f"Got {len(scores)} scores for {len(conditions)} conditions"
        )

    groups = [scores[0]]
    for index in range(1, len(conditions)):
        conjunction = conditions[index].conjunction
        if conjunction is Conjunction.AND:
            groups[-1] = groups[-1] & scores[index]
        elif conjunction is Conjunction.OR or conjunction is Conjunction.FIRST:
            groups.append(scores[index])
        else:
            raise InvalidConjunctionStructure(f"Condition {index} has no conjunction")

    if len(groups) - 1 != count_or_conjunctions(conditions):
        raise InvalidConjunctionStructure("Incorrect or-conjunction clauses")

    return reduce(operator.or_, groups)
