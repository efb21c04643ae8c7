"""Shared pytest fixtures."""

import numpy as np
import pytest


@pytest.fixture
def rng():
    """Seeded generator so stochastic tests are repeatable."""
    return np.random.default_rng(1234)
