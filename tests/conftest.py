"""Pytest configuration and shared fixtures."""

import numpy as np
import pytest

from roller.conditions import (
    Bound,
    Comparison,
    Conjunction,
    DiceKind,
    RawCondition,
    Reduction,
)
from roller.config.settings import reset_config

CONFIG_ENV_VARS = [
    "DEFAULT_BATCH_SIZE",
    "DEFAULT_DICE_COUNT",
    "INCLUDE_FROZEN",
    "RANDOM_SEED",
    "PLOT_K_MAX",
    "LOG_LEVEL",
]


@pytest.fixture(autouse=True)
def fresh_config(monkeypatch):
    """Isolate every test from the caller's environment and the config singleton."""
    for var in CONFIG_ENV_VARS:
        monkeypatch.delenv(var, raising=False)
    reset_config()
    yield
    reset_config()


@pytest.fixture
def rng() -> np.random.Generator:
    """Deterministic generator so Monte Carlo assertions are reproducible."""
    return np.random.default_rng(20220729)


@pytest.fixture
def clause():
    """Factory for `bound quantity dice equal to value` clauses on a d6."""

    def _make(
        quantity: int,
        value: int,
        bound: Bound = Bound.EXACTLY,
        conjunction: Conjunction = Conjunction.OR,
        dice_kind: DiceKind | None = DiceKind.D6,
    ) -> RawCondition:
        return RawCondition(
            bound=bound,
            quantity=quantity,
            dice_kind=dice_kind,
            reduction=Reduction.EACH,
            comparison=Comparison.EQUALS,
            value=value,
            conjunction=conjunction,
        )

    return _make
