"""Parameter sweeps over a single condition.

Every sweep scores all parameter settings against one fixed batch set, so
differences between points come from the condition alone and not from
resampling.
"""

import logging
import math
from collections.abc import Mapping
from dataclasses import dataclass

import numpy as np
from numpy.typing import NDArray

from roller.conditions.models import DiceKind, RawCondition, Reduction, SweepAxis, ValidatedCondition
from roller.conditions.validation import validate
from roller.simulation.batches import BatchSet, as_batch_set, sample_configured
from roller.simulation.engine import evaluate, summarize

logger = logging.getLogger(__name__)


def _normalize(y: NDArray[np.float64]) -> NDArray[np.float64]:
    peak = float(np.max(y)) if y.size else 0.0
    if peak <= 0.0:
        return np.zeros_like(y, dtype=np.float64)
    return y / peak


@dataclass
class Series:
    """One statistic as a function of the swept parameter."""

    x: NDArray[np.int64]
    y: NDArray[np.float64]

    @property
    def normalized(self) -> NDArray[np.float64]:
        """y divided by its own maximum (all zeros when the maximum is 0)."""
        return _normalize(self.y)


@dataclass
class Sweep1D:
    axis: SweepAxis
    probability: Series
    sum: Series
    average: Series


@dataclass
class Grid:
    """One statistic over (quantity, value); rows are quantities, columns values."""

    quantities: NDArray[np.int64]
    values: NDArray[np.int64]
    data: NDArray[np.float64]

    @property
    def normalized(self) -> NDArray[np.float64]:
        """data divided by its grid-wide maximum (all zeros when the maximum is 0)."""
        return _normalize(self.data)


@dataclass
class Sweep2D:
    probability: Grid
    sum: Grid
    average: Grid


def _point(batches: BatchSet, condition: ValidatedCondition) -> tuple[float, float, float]:
    result = summarize(batches, evaluate(batches, [condition]))
    # Plotted series carry 0 where nothing succeeded.
    total = 0.0 if math.isnan(result.sum) else result.sum
    average = 0.0 if math.isnan(result.average) else result.average
    return result.probability, total, average


def _prepare(
    condition: RawCondition,
    batch_size: int | None,
    dice_kind: DiceKind | None,
    dice_count: int | None,
    pinned: Mapping[int, int] | None,
    include_frozen: bool | None,
    batches: BatchSet | None,
    rng: np.random.Generator | None,
) -> tuple[ValidatedCondition, BatchSet]:
    validated = validate(condition, is_first=True)
    if batches is None:
        batches = sample_configured(batch_size, dice_kind, dice_count, pinned, include_frozen, rng)
    else:
        batches = as_batch_set(batches)
    return validated, batches


def sweep_domain(axis: SweepAxis, condition: ValidatedCondition, dice_count: int) -> NDArray[np.int64]:
    """Parameter values visited by a 1-D sweep.

    Value-like axes run 1..faces and quantity runs 0..dice_count; the upper
    end is scaled by dice_count for `sum` conditions.
    """
    if axis is SweepAxis.QUANTITY:
        start, stop = 0, dice_count
    else:
        start, stop = 1, condition.dice_kind.faces
    if condition.reduction is Reduction.SUM:
        stop *= dice_count
    return np.arange(start, stop + 1, dtype=np.int64)


def sweep_1d(
    condition: RawCondition,
    axis: SweepAxis,
    dice_kind: DiceKind | None = None,
    dice_count: int | None = None,
    pinned: Mapping[int, int] | None = None,
    include_frozen: bool | None = None,
    batch_size: int | None = None,
    batches: BatchSet | None = None,
    rng: np.random.Generator | None = None,
) -> Sweep1D:
    """Sweep one parameter of the lead condition.

    Args:
        condition: Lead condition (its conjunction is forced to `first`)
        axis: Parameter to vary
        dice_kind: Die to roll
        dice_count: Dice per batch
        pinned: Position -> face for frozen dice
        include_frozen: Keep frozen dice
        batch_size: Batches to sample
        batches: Precomputed batch set to reuse; disables sampling
        rng: Random generator for sampling

    Returns:
        Sweep1D with probability, conditional sum and conditional average series

    Raises:
        InvalidCondition: If the condition is incomplete
        MissingDiceKind, MissingDiceCount: If sampling fails
    """
    validated, batches = _prepare(
        condition, batch_size, dice_kind, dice_count, pinned, include_frozen, batches, rng
    )
    xs = sweep_domain(axis, validated, batches.shape[1])
    logger.debug(f"1-D sweep over {axis.value}: {len(xs)} points x {len(batches)} batches")

    points = np.array(
        [_point(batches, validated.with_parameter(axis, int(x))) for x in xs],
        dtype=np.float64,
    ).reshape(len(xs), 3)

    return Sweep1D(
        axis=axis,
        probability=Series(x=xs, y=points[:, 0]),
        sum=Series(x=xs, y=points[:, 1]),
        average=Series(x=xs, y=points[:, 2]),
    )


def sweep_2d(
    condition: RawCondition,
    dice_kind: DiceKind | None = None,
    dice_count: int | None = None,
    pinned: Mapping[int, int] | None = None,
    include_frozen: bool | None = None,
    batch_size: int | None = None,
    batches: BatchSet | None = None,
    rng: np.random.Generator | None = None,
) -> Sweep2D:
    """Sweep quantity (0..dice_count) against value (1..faces) jointly.

    Arguments and errors as for sweep_1d().
    """
    validated, batches = _prepare(
        condition, batch_size, dice_kind, dice_count, pinned, include_frozen, batches, rng
    )
    quantities = np.arange(0, batches.shape[1] + 1, dtype=np.int64)
    values = np.arange(1, validated.dice_kind.faces + 1, dtype=np.int64)
    logger.debug(f"2-D sweep: {len(quantities) * len(values)} cells x {len(batches)} batches")

    cells = np.zeros((len(quantities), len(values), 3), dtype=np.float64)
    for i, quantity in enumerate(quantities):
        by_quantity = validated.with_parameter(SweepAxis.QUANTITY, int(quantity))
        for j, value in enumerate(values):
            cells[i, j] = _point(batches, by_quantity.with_parameter(SweepAxis.VALUE, int(value)))

    return Sweep2D(
        probability=Grid(quantities=quantities, values=values, data=cells[:, :, 0]),
        sum=Grid(quantities=quantities, values=values, data=cells[:, :, 1]),
        average=Grid(quantities=quantities, values=values, data=cells[:, :, 2]),
    )
