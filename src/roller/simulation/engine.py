"""Monte Carlo orchestration over dice batches.

Implements:
- simulate() probability / conditional sum / conditional average over a batch set
- simulate_single_batch() verdict for one already-rolled batch
- simulate_sets() comparison of several condition sets on one shared batch set
- async wrappers that run the work in a worker thread
"""

import asyncio
import logging
import math
from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from enum import Enum

import numpy as np

from roller.conditions.models import DiceKind, RawCondition, ValidatedCondition
from roller.conditions.validation import validate_all
from roller.errors import SimulationError
from roller.simulation.batches import BatchSet, as_batch_set, sample_configured
from roller.simulation.conjunctions import resolve
from roller.simulation.scoring import Verdicts, score_batches

logger = logging.getLogger(__name__)


class SimulationStatus(str, Enum):
    EMPTY = "empty"
    POPULATED = "populated"
    ERROR = "error"


@dataclass
class SimulationResult:
    """Aggregated outcome of one condition set over a batch set."""

    probability: float = 0.0  # successes / total
    sum: float = 0.0  # mean pip total over successful batches, NaN if none
    average: float = 0.0  # mean per-die average over successful batches, NaN if none
    status: SimulationStatus = SimulationStatus.EMPTY
    successes: int = 0
    total: int = 0
    error: SimulationError | None = None  # set only when status is ERROR

    @classmethod
    def failed(cls, error: SimulationError, total: int = 0) -> "SimulationResult":
        """Result for a condition set the engine rejected."""
        return cls(
            probability=math.nan,
            sum=math.nan,
            average=math.nan,
            status=SimulationStatus.ERROR,
            total=total,
            error=error,
        )

    @property
    def safe_sum(self) -> str:
        return "--" if math.isnan(self.sum) else f"{self.sum:.2f}"

    @property
    def safe_average(self) -> str:
        return "--" if math.isnan(self.average) else f"{self.average:.2f}"


def evaluate(batches: BatchSet, conditions: Sequence[ValidatedCondition]) -> Verdicts:
    """Per-batch verdict of a validated condition list.

    Returns:
        Boolean array of shape (n_batches,)
    """
    scores = [score_batches(batches, condition) for condition in conditions]
    return np.asarray(resolve(scores, conditions), dtype=bool)


def summarize(batches: BatchSet, verdicts: Verdicts) -> SimulationResult:
    """Aggregate verdicts into probability and conditional sum/average.

    Per-batch averages are floor(total / dice_count), matching the `average`
    reduction.
    """
    total = len(batches)
    successes = int(verdicts.sum())
    if successes == 0:
        return SimulationResult(
            probability=0.0,
            sum=math.nan,
            average=math.nan,
            status=SimulationStatus.POPULATED,
            successes=0,
            total=total,
        )

    pips = batches[verdicts].sum(axis=1)
    per_die = pips // batches.shape[1]
    return SimulationResult(
        probability=successes / total,
        sum=float(pips.mean()),
        average=float(per_die.mean()),
        status=SimulationStatus.POPULATED,
        successes=successes,
        total=total,
    )


def simulate(
    conditions: Sequence[RawCondition],
    batch_size: int | None = None,
    dice_kind: DiceKind | None = None,
    dice_count: int | None = None,
    pinned: Mapping[int, int] | None = None,
    include_frozen: bool | None = None,
    batches: BatchSet | None = None,
    rng: np.random.Generator | None = None,
) -> SimulationResult:
    """Estimate how often a condition list holds.

    Args:
        conditions: Clauses in order; the first is treated as `first`
        batch_size: Batches to sample (None = config default_batch_size)
        dice_kind: Die to roll
        dice_count: Dice per batch (None = config default_dice_count)
        pinned: Position -> face for frozen dice
        include_frozen: Keep frozen dice (None = config include_frozen)
        batches: Precomputed batch set to reuse; disables sampling
        rng: Random generator for sampling

    Returns:
        Populated SimulationResult

    Raises:
        InvalidCondition: If a clause is incomplete
        InvalidConjunctionStructure: If the and/or chain is malformed
        MissingDiceKind: If sampling without a dice kind
        MissingDiceCount: If the effective dice count is not positive
        InvalidPinnedFace: If a frozen die is pinned outside the die's faces
    """
    try:
        validated = validate_all(conditions)
        if batches is None:
            batches = sample_configured(batch_size, dice_kind, dice_count, pinned, include_frozen, rng)
        else:
            batches = as_batch_set(batches)
        verdicts = evaluate(batches, validated)
    except SimulationError as e:
        logger.warning(f"Simulation rejected: {e}")
        raise

    result = summarize(batches, verdicts)
    logger.debug(
        f"Simulated {len(validated)} conditions over {result.total} batches: "
        f"p={result.probability:.4f}"
    )
    return result


def simulate_single_batch(
    conditions: Sequence[RawCondition],
    batch: Sequence[int],
    dice_kind: DiceKind | None = None,
) -> bool:
    """Decide whether one concrete roll satisfies a condition list.

    Args:
        conditions: Clauses in order; the first is treated as `first`
        batch: Face values of the rolled dice
        dice_kind: Applied to clauses that do not name a die

    Raises:
        InvalidCondition: If a clause is incomplete
        InvalidConjunctionStructure: If the and/or chain is malformed
        MissingDiceCount: If the batch is empty
    """
    if dice_kind is not None:
        conditions = [
            c if c.dice_kind is not None else c.with_dice_kind(dice_kind) for c in conditions
        ]
    validated = validate_all(conditions)
    batches = as_batch_set([list(batch)])
    return bool(evaluate(batches, validated)[0])


def _simulate_set(
    conditions: Sequence[RawCondition], batches: BatchSet, raise_errors: bool
) -> SimulationResult:
    try:
        return simulate(conditions, batches=batches)
    except SimulationError as e:
        if raise_errors:
            raise
        return SimulationResult.failed(e, total=len(batches))


def simulate_sets(
    condition_sets: Mapping[str, Sequence[RawCondition]],
    batch_size: int | None = None,
    dice_kind: DiceKind | None = None,
    dice_count: int | None = None,
    pinned: Mapping[int, int] | None = None,
    include_frozen: bool | None = None,
    batches: BatchSet | None = None,
    rng: np.random.Generator | None = None,
    raise_errors: bool = True,
) -> dict[str, SimulationResult]:
    """Simulate several named condition sets against one shared batch set.

    Args:
        condition_sets: Set name -> clauses
        raise_errors: Re-raise the first rejected set (default). When False a
            rejected set is reported as an ERROR result and the rest still run.
        Remaining arguments as for simulate()

    Returns:
        Mapping of set name -> SimulationResult

    Raises:
        MissingDiceKind, MissingDiceCount, InvalidPinnedFace: If sampling fails
        InvalidCondition, InvalidConjunctionStructure: If a set is rejected and
            raise_errors is True
    """
    if batches is None:
        batches = sample_configured(batch_size, dice_kind, dice_count, pinned, include_frozen, rng)
    else:
        batches = as_batch_set(batches)
    return {
        name: _simulate_set(conditions, batches, raise_errors)
        for name, conditions in condition_sets.items()
    }


async def simulate_async(
    conditions: Sequence[RawCondition],
    batch_size: int | None = None,
    dice_kind: DiceKind | None = None,
    dice_count: int | None = None,
    pinned: Mapping[int, int] | None = None,
    include_frozen: bool | None = None,
    batches: BatchSet | None = None,
    rng: np.random.Generator | None = None,
) -> SimulationResult:
    """Run simulate() in a worker thread."""
    return await asyncio.to_thread(
        simulate,
        conditions,
        batch_size=batch_size,
        dice_kind=dice_kind,
        dice_count=dice_count,
        pinned=pinned,
        include_frozen=include_frozen,
        batches=batches,
        rng=rng,
    )


async def simulate_sets_async(
    condition_sets: Mapping[str, Sequence[RawCondition]],
    batch_size: int | None = None,
    dice_kind: DiceKind | None = None,
    dice_count: int | None = None,
    pinned: Mapping[int, int] | None = None,
    include_frozen: bool | None = None,
    batches: BatchSet | None = None,
    rng: np.random.Generator | None = None,
    raise_errors: bool = True,
) -> dict[str, SimulationResult]:
    """Score several condition sets concurrently against one shared batch set.

    The batch set is read-only, so worker threads never contend on it.
    Arguments and errors as for simulate_sets().
    """
    if batches is None:
        batches = await asyncio.to_thread(
            sample_configured, batch_size, dice_kind, dice_count, pinned, include_frozen, rng
        )
    else:
        batches = as_batch_set(batches)

    names = list(condition_sets)
    results = await asyncio.gather(
        *(asyncio.to_thread(_simulate_set, condition_sets[name], batches, raise_errors) for name in names)
    )
    return dict(zip(names, results))


