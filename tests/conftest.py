#!/usr/bin/env python3
# =============================================================================
#     File: conftest.py
#  Created: 2026-10-16 16:00
#
"""
Description: Shared fixtures for the contrast pipeline tests.
"""
# =============================================================================

import matplotlib
matplotlib.use('Agg')

import matplotlib.pyplot as plt
import numpy as np
import pytest

import howell_contrast as hc


@pytest.fixture
def rng():
    return np.random.default_rng(seed=5656)


@pytest.fixture
def posterior(rng):
    """Two groups, 1000 draws, differing in intercept by 10."""
    N = 1000
    return hc.PosteriorSample(
        intercept={1: 45 + rng.normal(0, 0.5, N),
                   2: 55 + rng.normal(0, 0.5, N)},
        slope={1: np.zeros(N), 2: np.zeros(N)},
        scale=np.full(N, 0.5),
    )


@pytest.fixture
def grid():
    return np.arange(130, 181, 5, dtype=float)


@pytest.fixture(autouse=True)
def close_figures():
    yield
    plt.close('all')

# =============================================================================
# =============================================================================
