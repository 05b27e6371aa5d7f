#!/usr/bin/env python3
# =============================================================================
#     File: plots.py
#  Created: 2026-10-16 15:10
#
"""
  Description: Plots of the Howell data, prior predictive lines, and the
  posterior contrasts between sexes.
"""
# =============================================================================

import matplotlib.pyplot as plt
import numpy as np
import seaborn as sns

from .data import GROUP_LABELS


def plot_prior_lines(prior, xmax=50, ax=None, alpha=0.2):
    """Plot one line y = α + β x, x in [0, xmax], per row of `prior`.

    Parameters
    ----------
    prior : DataFrame
        Samples of the intercept and slope, as the first two columns.
    xmax : float, optional
        Right edge of the lines.
    ax : plt.Axes, optional
        Axes object in which to draw the plot.
    alpha : float, optional
        Opacity of each line.

    Returns
    -------
    ax : plt.Axes
        The axes in which the plot was drawn.
    """
    if ax is None:
        ax = plt.gca()
    a = prior.iloc[:, 0].to_numpy()
    b = prior.iloc[:, 1].to_numpy()
    x = np.r_[0, xmax]
    ax.plot(x, a + b * x[:, np.newaxis], c='k', alpha=alpha)
    ax.set(xlim=(0, xmax))
    return ax


def plot_by_group(df, var, group='sex', labels=None, ax=None, **kwargs):
    """Plot the kernel density of `var` for each group in `df`."""
    if ax is None:
        ax = plt.gca()
    if labels is None:
        labels = GROUP_LABELS
    for g, tf in df.groupby(group):
        sns.kdeplot(tf[var], label=labels.get(g, g), lw=2, ax=ax, **kwargs)
    ax.set(xlabel=var, ylabel='density')
    ax.legend()
    return ax


def plot_regression_lines(df, coef, xbar, x='height', y='weight',
                          group='sex', labels=None, ax=None):
    """Scatter the data of each group with its posterior mean regression line.

    Parameters
    ----------
    df : DataFrame
        The observed data.
    coef : dict of str -> dict of group -> float
        Posterior means, e.g. ``{'α': {1: 45.2, 2: 45.8}, 'β': {...}}``.
    xbar : float
        The value at which `x` was centered in the model.

    Returns
    -------
    ax : plt.Axes
        The axes in which the plot was drawn.
    """
    if ax is None:
        ax = plt.gca()
    if labels is None:
        labels = GROUP_LABELS
    a, b = coef['α'], coef['β']
    for i, (g, tf) in enumerate(df.groupby(group)):
        c = f"C{i}"
        label = labels.get(g, g)
        ax.scatter(tf[x], tf[y], c=c, alpha=0.5, label=f"{label} observed")
        ax.axline((xbar, a[g]), slope=b[g], c=c, lw=2,
                  label=f"{label} estimate")
    ax.set(xlabel=x, ylabel=y)
    ax.legend()
    return ax


def plot_contrast(summary, ax=None, color='0.2', alpha=0.2):
    """Plot the nested credible-interval bands of a `ContrastSummary`.

    Each band is drawn with the same translucent color, so that the inner
    intervals appear darker.
    """
    if ax is None:
        ax = plt.gca()
    for cb in summary:
        x = [ib.covariate for ib in cb.bands]
        lo = [ib.lower for ib in cb.bands]
        hi = [ib.upper for ib in cb.bands]
        ax.fill_between(x, lo, hi, facecolor=color, alpha=alpha,
                        interpolate=True, lw=0,
                        label=f"{100*(cb.upper_q - cb.lower_q):g}%")
    ax.axhline(0, c='k', ls='--', lw=1)
    ax.set(xlabel='height [cm]', ylabel='weight contrast [kg]')
    return ax


def plot_sign_split(diffs, ax=None, bins=30):
    """Histogram of the contrast, with positive and negative values in
    separate colors."""
    if ax is None:
        ax = plt.gca()
    diffs = np.asarray(diffs, dtype=float)
    edges = np.histogram_bin_edges(diffs, bins=bins)
    ax.hist(diffs[diffs > 0], bins=edges, alpha=0.5, label='> 0')
    ax.hist(diffs[diffs < 0], bins=edges, alpha=0.5, label='< 0')
    ax.set(xlabel='posterior weight contrast', ylabel='count')
    return ax

# =============================================================================
# =============================================================================
