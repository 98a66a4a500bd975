"""Monte Carlo simulation engine for dice conditions.

This module provides batch sampling, per-condition scoring, and/or folding,
the simulation orchestrator and parameter sweeps.
Consumes RawCondition lists (roller.conditions).
Produces SimulationResult, Sweep1D / Sweep2D and RollsUntilSuccess.
"""

from roller.simulation.batches import sample, sample_many
from roller.simulation.conjunctions import count_or_conjunctions, resolve
from roller.simulation.engine import (
    SimulationResult,
    SimulationStatus,
    evaluate,
    simulate,
    simulate_async,
    simulate_sets,
    simulate_sets_async,
    simulate_single_batch,
)
from roller.simulation.geometric import PlotKSize, RollsUntilSuccess, rolls_until_success
from roller.simulation.scoring import score, score_batches
from roller.simulation.sweep import Grid, Series, Sweep1D, Sweep2D, sweep_1d, sweep_2d

sample_batches = sample_many

__all__ = [
    "sample",
    "sample_many",
    "sample_batches",
    "score",
    "score_batches",
    "resolve",
    "count_or_conjunctions",
    "evaluate",
    "simulate",
    "simulate_single_batch",
    "simulate_sets",
    "simulate_async",
    "simulate_sets_async",
    "SimulationResult",
    "SimulationStatus",
    "sweep_1d",
    "sweep_2d",
    "Series",
    "Grid",
    "Sweep1D",
    "Sweep2D",
    "rolls_until_success",
    "RollsUntilSuccess",
    "PlotKSize",
]
