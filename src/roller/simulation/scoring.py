"""Per-condition scoring of dice batches.

Every scorer works on a whole batch set at once and returns one verdict per
batch (row). score() wraps the vectorised form for a single batch.

Reductions:
- each: count matching dice, bound the count
- consecutive: bound the length of any run of matching dice
- sequence: look for the range's values as a contiguous slice
- sum/average/median/minimum/maximum/mode: compare one statistic per batch
"""

import numpy as np
from numpy.lib.stride_tricks import sliding_window_view
from numpy.typing import NDArray

from roller.conditions.models import (
    AggregateCondition,
    Bound,
    Comparison,
    EachCondition,
    Reduction,
    RunCondition,
    SequenceCondition,
    ValidatedCondition,
    ValueRange,
)
from roller.simulation.batches import BatchSet, as_batch_set

Verdicts = NDArray[np.bool_]


def compare(
    x: NDArray[np.int64], comparison: Comparison, value: int, value_range: ValueRange
) -> Verdicts:
    """Elementwise comparison of dice values (or statistics) against the target."""
    if comparison is Comparison.EQUALS:
        return x == value
    if comparison is Comparison.NOT_EQUALS:
        return x != value
    if comparison is Comparison.AT_MOST:
        return x <= value
    if comparison is Comparison.AT_LEAST:
        return x >= value
    if comparison is Comparison.LESS_THAN:
        return x < value
    if comparison is Comparison.GREATER_THAN:
        return x > value
    if comparison is Comparison.BETWEEN:
        return (x >= value_range.lowest) & (x <= value_range.highest)
    raise ValueError(f"Unknown comparison: {comparison}")


def within_bound(counts: NDArray[np.int64], bound: Bound, quantity: int) -> Verdicts:
    """Elementwise check of derived counts against the condition's quantity."""
    if bound is Bound.EXACTLY:
        return counts == quantity
    if bound is Bound.AT_MOST:
        return counts <= quantity
    if bound is Bound.AT_LEAST:
        return counts >= quantity
    if bound is Bound.LESS_THAN:
        return counts < quantity
    if bound is Bound.GREATER_THAN:
        return counts > quantity
    raise ValueError(f"Unknown bound: {bound}")


def _score_each(batches: BatchSet, condition: EachCondition) -> Verdicts:
    # Exactly 3 d6 equal to 4: [4, 2, 4, 1, 4, 1] -> 3 matches -> True
    matches = compare(batches, condition.comparison, condition.value, condition.value_range)
    return within_bound(matches.sum(axis=1), condition.bound, condition.quantity)


def _score_run(batches: BatchSet, condition: RunCondition) -> Verdicts:
    # Exactly 3 d6 in a row equal to 4: [4, 2, 4, 4, 4, 1, 2] -> runs [1, 3] -> True
    matches = compare(batches, condition.comparison, condition.value, condition.value_range)
    n, k = matches.shape
    run = np.zeros(n, dtype=np.int64)
    satisfied = np.zeros(n, dtype=bool)
    for j in range(k):
        run = np.where(matches[:, j], run + 1, 0)
        if j + 1 < k:
            ends = matches[:, j] & ~matches[:, j + 1]
        else:
            ends = matches[:, j]
        satisfied |= ends & within_bound(run, condition.bound, condition.quantity)
    return satisfied


def _score_sequence(batches: BatchSet, condition: SequenceCondition) -> Verdicts:
    # Sequence 1..4 in [5, 1, 2, 3, 4, 3] -> True; 4..1 needs [4, 3, 2, 1]
    value_range = condition.value_range
    target = np.arange(value_range.lowest, value_range.highest + 1)
    if value_range.descending:
        target = target[::-1]

    n, k = batches.shape
    if len(target) > k:
        return np.zeros(n, dtype=bool)

    windows = sliding_window_view(batches, len(target), axis=1)
    return (windows == target).all(axis=2).any(axis=1)


def _mode(batches: BatchSet) -> NDArray[np.int64]:
    # bincount().argmax() picks the lowest face among equally frequent faces
    return np.apply_along_axis(lambda row: np.bincount(row).argmax(), 1, batches)


def _median(batches: BatchSet) -> NDArray[np.int64]:
    ordered = np.sort(batches, axis=1)
    k = ordered.shape[1]
    if k % 2 == 0:
        return (ordered[:, k // 2] + ordered[:, k // 2 - 1]) // 2
    return ordered[:, (k - 1) // 2]


def aggregate(batches: BatchSet, reduction: Reduction) -> NDArray[np.int64]:
    """Reduce every batch to one integer statistic."""
    if reduction is Reduction.SUM:
        return batches.sum(axis=1)
    if reduction is Reduction.AVERAGE:
        return batches.sum(axis=1) // batches.shape[1]
    if reduction is Reduction.MEDIAN:
        return _median(batches)
    if reduction is Reduction.MINIMUM:
        return batches.min(axis=1)
    if reduction is Reduction.MAXIMUM:
        return batches.max(axis=1)
    if reduction is Reduction.MODE:
        return _mode(batches)
    raise ValueError(f"Not an aggregate reduction: {reduction}")


def _score_aggregate(batches: BatchSet, condition: AggregateCondition) -> Verdicts:
    # Bound and quantity play no part; the statistic is compared directly.
    stats = aggregate(batches, condition.reduction)
    return compare(stats, condition.comparison, condition.value, condition.value_range)


_SCORERS = {
    EachCondition: _score_each,
    RunCondition: _score_run,
    SequenceCondition: _score_sequence,
    AggregateCondition: _score_aggregate,
}


def score_batches(batches: BatchSet, condition: ValidatedCondition) -> Verdicts:
    """Score one condition against every batch in a set.

    Args:
        batches: 2-D array of shape (n_batches, dice_count)
        condition: Validated condition

    Returns:
        Boolean array of shape (n_batches,)
    """
    try:
        scorer = _SCORERS[type(condition)]
    except KeyError as exc:
        raise TypeError(f"Not a validated condition: {condition!r}") from exc
    return scorer(batches, condition)


def score(batch, condition: ValidatedCondition) -> bool:
    """Score one condition against a single batch.

    Raises:
        MissingDiceCount: If the batch is empty
    """
    batches = as_batch_set(batch)
    return bool(score_batches(batches, condition)[0])
