#!/usr/bin/env python3
# =============================================================================
#     File: test_plots.py
#  Created: 2026-10-16 18:10
#
"""
Description: Smoke tests of the plotting functions.
"""
# =============================================================================

import matplotlib.pyplot as plt
import numpy as np

import howell_contrast as hc


def test_plot_prior_lines(rng):
    prior = hc.sim_prior_lines(20, rng=rng)
    fig, ax = plt.subplots()
    out = hc.plot_prior_lines(prior, xmax=100, ax=ax)
    assert out is ax
    assert len(ax.lines) == 20
    assert ax.get_xlim() == (0, 100)


def test_plot_by_group(rng):
    df = hc.sim_hw(rng.choice([1, 2], 200), {1: 45, 2: 55}, {1: 0, 2: 0},
                   rng=rng)
    fig, ax = plt.subplots()
    hc.plot_by_group(df, 'weight', ax=ax)
    assert len(ax.lines) == 2
    labels = [t.get_text() for t in ax.get_legend().get_texts()]
    assert labels == ['female', 'male']


def test_plot_regression_lines(rng):
    df = hc.sim_hw(rng.choice([1, 2], 200), {1: 45, 2: 55}, {1: 0.5, 2: 0.6},
                   rng=rng)
    coef = {'α': {1: 45, 2: 55}, 'β': {1: 0.5, 2: 0.6}}
    fig, ax = plt.subplots()
    hc.plot_regression_lines(df, coef, xbar=df['height'].mean(), ax=ax)
    assert len(ax.collections) == 2
    assert len(ax.lines) == 2


def test_plot_contrast(posterior):
    grid = np.arange(130, 181, 10, dtype=float)
    pred = hc.simulate_predictions(posterior, grid, 155, 200, rng=1)
    summary = hc.compute_contrast_bands(
        hc.compute_difference_series(pred, 1, 2)
    )
    fig, ax = plt.subplots()
    hc.plot_contrast(summary, ax=ax)
    assert len(ax.collections) == len(summary)
    assert len(ax.lines) == 1  # zero line


def test_plot_sign_split():
    fig, ax = plt.subplots()
    hc.plot_sign_split(np.r_[-3, -2, -1, 0, 1, 2], ax=ax, bins=6)
    heights = [p.get_height() for p in ax.patches]
    assert sum(heights) == 5  # zero is in neither

# =============================================================================
# =============================================================================
