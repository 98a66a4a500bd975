"""Random batch generation with optional pinned (frozen) dice.

A batch is one roll of `dice_count` dice. A batch set is a read-only 2-D
array of shape (n_batches, dice_count) so it can be shared between
concurrent scorers and reused across sweep steps.
"""

import logging
from collections.abc import Mapping

import numpy as np
from numpy.typing import NDArray

from roller.conditions.models import DiceKind
from roller.config.settings import get_config
from roller.errors import InvalidPinnedFace, MissingDiceCount, MissingDiceKind

logger = logging.getLogger(__name__)

Batch = NDArray[np.int64]
BatchSet = NDArray[np.int64]


def make_rng(seed: int | None = None) -> np.random.Generator:
    """Create a Generator, falling back to the configured seed when none is given."""
    if seed is None:
        seed = get_config().random_seed
    return np.random.default_rng(seed)


def effective_dice_count(dice_count: int, pinned: Mapping[int, int], include_frozen: bool) -> int:
    """Number of dice actually rolled per batch.

    When frozen dice are excluded from the simulation they are removed from
    the roll entirely rather than resampled.
    """
    if include_frozen:
        return dice_count
    return dice_count - len(pinned)


def sample_many(
    n: int,
    dice_kind: DiceKind | None,
    dice_count: int,
    pinned: Mapping[int, int] | None = None,
    include_frozen: bool = True,
    rng: np.random.Generator | None = None,
) -> BatchSet:
    """Sample `n` independent batches.

    Args:
        n: Number of batches
        dice_kind: Die to roll (None is rejected)
        dice_count: Dice per batch before excluding frozen dice
        pinned: Position -> face for frozen dice
        include_frozen: Keep pinned positions at their values; otherwise the
            pinned dice are dropped from the roll
        rng: Random generator (None = make_rng())

    Returns:
        Read-only int64 array of shape (n, count)

    Raises:
        MissingDiceKind: If dice_kind is None
        MissingDiceCount: If the effective dice count is zero or negative
        InvalidPinnedFace: If a frozen die is pinned outside 1..faces
        ValueError: If n < 1
    """
    pinned = pinned or {}
    if dice_kind is None:
        raise MissingDiceKind()

    count = effective_dice_count(dice_count, pinned, include_frozen)
    if count <= 0:
        raise MissingDiceCount(count)

    for position, face in pinned.items():
        if not 1 <= face <= dice_kind.faces:
            raise InvalidPinnedFace(position, face, dice_kind.faces)

    if n < 1:
        raise ValueError(f"Number of batches must be >= 1, got {n}")

    if rng is None:
        rng = make_rng()

    batches = rng.integers(1, dice_kind.faces + 1, size=(n, count), dtype=np.int64)

    if include_frozen:
        for position, face in pinned.items():
            if 0 <= position < count:
                batches[:, position] = face

    batches.flags.writeable = False
    logger.debug(f"Sampled {n} batches of {count} {dice_kind.name}")
    return batches


def sample(
    dice_kind: DiceKind | None,
    dice_count: int,
    pinned: Mapping[int, int] | None = None,
    include_frozen: bool = True,
    rng: np.random.Generator | None = None,
) -> Batch:
    """Sample a single batch. See sample_many() for arguments and errors."""
    return sample_many(1, dice_kind, dice_count, pinned, include_frozen, rng)[0]


def sample_configured(
    batch_size: int | None,
    dice_kind: DiceKind | None,
    dice_count: int | None,
    pinned: Mapping[int, int] | None = None,
    include_frozen: bool | None = None,
    rng: np.random.Generator | None = None,
) -> BatchSet:
    """sample_many() with unset arguments taken from the application config."""
    config = get_config()
    if batch_size is None:
        batch_size = config.default_batch_size
    if dice_count is None:
        dice_count = config.default_dice_count
    if include_frozen is None:
        include_frozen = config.include_frozen
    return sample_many(batch_size, dice_kind, dice_count, pinned, include_frozen, rng)


def as_batch_set(batches) -> BatchSet:
    """Coerce caller-supplied batches into a read-only 2-D int64 array.

    Raises:
        MissingDiceCount: If there are no batches or the batches are empty
    """
    arr = np.array(batches, dtype=np.int64)
    if arr.ndim == 1:
        arr = arr.reshape(1, -1)
    if arr.ndim != 2 or arr.shape[0] == 0 or arr.shape[1] == 0:
        raise MissingDiceCount(0 if arr.ndim != 2 else arr.shape[-1])
    arr.flags.writeable = False
    return arr
