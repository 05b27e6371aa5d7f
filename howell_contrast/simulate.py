#!/usr/bin/env python3
# =============================================================================
#     File: simulate.py
#  Created: 2026-10-16 11:30
#
"""
  Description: Generative simulations of the height/weight/sex system, used to
  check that the models recover known parameters.
"""
# =============================================================================

import numpy as np
import pandas as pd

from scipy import stats

from .errors import InvalidInputError
from .utils import as_rng

# Mean height [cm] of each sex in the synthetic population
HEIGHT_BY_SEX = {1: 150, 2: 160}
HEIGHT_SD = 5


def sim_weight(height, beta, sigma, rng=None):
    """Simulate weights of individuals from height: W = β H + U."""
    rng = as_rng(rng)
    height = np.asarray(height, dtype=float)
    U = stats.norm(0, sigma).rvs(height.shape, random_state=rng)
    return beta * height + U


def sim_hw(sex, alpha, beta, rng=None, sigma=5):
    """Simulate height and weight of individuals of the given sex.

    Parameters
    ----------
    sex : (N,) array_like of int
        Sex of each individual, 1 = female, 2 = male.
    alpha, beta : dict of int -> float
        Intercept and slope of weight on height for each sex.
    rng : numpy.random.Generator or int, optional
        Source of randomness.
    sigma : float, optional
        Standard deviation of weight about the linear model.

    Returns
    -------
    result : DataFrame
        Columns ['sex', 'height', 'weight'].
    """
    rng = as_rng(rng)
    sex = np.asarray(sex, dtype=int)

    unknown = set(np.unique(sex)) - (set(alpha) & set(beta) & set(HEIGHT_BY_SEX))
    if unknown:
        raise InvalidInputError(f"No parameters for sex {sorted(unknown)}.")

    N = sex.size
    H_mean = np.array([HEIGHT_BY_SEX[s] for s in sex], dtype=float)
    height = H_mean + stats.norm(0, HEIGHT_SD).rvs(N, random_state=rng)

    a = np.array([alpha[s] for s in sex], dtype=float)
    b = np.array([beta[s] for s in sex], dtype=float)
    weight = a + b * height + stats.norm(0, sigma).rvs(N, random_state=rng)

    return pd.DataFrame({'sex': sex, 'height': height, 'weight': weight})


def total_effect(alpha, beta, N=10_000, rng=None):
    """Total causal effect of sex on weight, by simulating all-male and
    all-female populations of size `N`."""
    rng = as_rng(rng)
    females = sim_hw(np.full(N, 1), alpha, beta, rng=rng)
    males = sim_hw(np.full(N, 2), alpha, beta, rng=rng)
    return np.mean(males['weight'] - females['weight'])


def sim_prior_lines(N=100, rng=None):
    """Sample the priors α ~ N(0, 10), β ~ U(0, 1) of the linear model."""
    rng = as_rng(rng)
    return pd.DataFrame({
        'α': stats.norm(0, 10).rvs(N, random_state=rng),
        'β': stats.uniform(0, 1).rvs(N, random_state=rng),
    })

# =============================================================================
# =============================================================================
