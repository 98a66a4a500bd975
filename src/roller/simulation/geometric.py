"""Rolls-until-success distribution for a simulated probability.

Once simulate() has estimated p, the number of rolls needed for the first
success is geometric: P(K = k) = (1 - p)^(k - 1) * p for k = 1, 2, ...
"""

import math
from dataclasses import dataclass
from enum import IntEnum

import numpy as np
from numpy.typing import NDArray
from scipy import stats

from roller.config.settings import get_config
from roller.simulation.engine import SimulationStatus


class PlotKSize(IntEnum):
    """Horizons offered for plotting; each is shown as about ten points."""

    SMALL = 10
    MEDIUM = 100
    LARGE = 1_000
    EXTRA_LARGE = 10_000


@dataclass
class RollsUntilSuccess:
    """PMF and CDF of the roll on which the first success lands."""

    p: float
    k: NDArray[np.int64]
    pmf: NDArray[np.float64]
    cdf: NDArray[np.float64]
    status: SimulationStatus = SimulationStatus.EMPTY

    @property
    def expected_rolls(self) -> float:
        """Mean number of rolls to the first success (inf when p = 0)."""
        if self.p == 0.0:
            return math.inf
        return float(stats.geom.mean(self.p))

    def at_resolution(self, size: PlotKSize) -> tuple[NDArray[np.int64], NDArray[np.float64], NDArray[np.float64]]:
        """Down-sample to every (size / 10)-th roll up to `size`.

        Horizons above 10 also keep the very first roll.

        Returns:
            (k, pmf, cdf) arrays; empty when the distribution is not populated

        Raises:
            ValueError: If size exceeds the computed horizon
        """
        if self.status is not SimulationStatus.POPULATED:
            empty = np.array([], dtype=np.float64)
            return np.array([], dtype=np.int64), empty, empty
        if size > len(self.k):
            raise ValueError(f"Resolution {int(size)} exceeds horizon {len(self.k)}")

        step = int(size) // 10
        idx = [k - 1 for k in range(step, int(size) + 1, step)]
        if size != PlotKSize.SMALL:
            idx = [0] + idx
        return self.k[idx], self.pmf[idx], self.cdf[idx]


def rolls_until_success(p: float, k_max: int | None = None) -> RollsUntilSuccess:
    """Geometric distribution of rolls until the first success.

    Args:
        p: Per-roll success probability in [0, 1]
        k_max: Horizon (None = config plot_k_max)

    Returns:
        Populated RollsUntilSuccess over k = 1..k_max

    Raises:
        ValueError: If p is outside [0, 1] or k_max < 1
    """
    if not 0.0 <= p <= 1.0:
        raise ValueError(f"p must be in [0, 1], got {p}")
    if k_max is None:
        k_max = get_config().plot_k_max
    if k_max < 1:
        raise ValueError(f"k_max must be >= 1, got {k_max}")

    k = np.arange(1, k_max + 1, dtype=np.int64)
    if p == 0.0:
        # scipy's geom is undefined at p = 0; the event simply never happens.
        pmf = np.zeros(k_max, dtype=np.float64)
        cdf = np.zeros(k_max, dtype=np.float64)
    else:
        pmf = stats.geom.pmf(k, p)
        cdf = stats.geom.cdf(k, p)
    return RollsUntilSuccess(p=p, k=k, pmf=pmf, cdf=cdf, status=SimulationStatus.POPULATED)
