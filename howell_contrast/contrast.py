#!/usr/bin/env python3
# =============================================================================
#     File: contrast.py
#  Created: 2026-10-16 10:40
#
"""
  Description: Posterior-predictive simulation and causal contrasts between
  two groups over a grid of covariate values.

  The pipeline runs in three stages:

  >>> pred = simulate_predictions(post, grid, reference_offset=hbar,
  ...                             draw_count=1000, rng=rng)
  >>> diffs = compute_difference_series(pred, 1, 2)
  >>> summary = compute_contrast_bands(diffs)
"""
# =============================================================================

import numpy as np
import pandas as pd
import warnings

from collections import namedtuple
from collections.abc import Mapping

from .errors import InvalidInputError, MismatchedGroupsError, InvalidQuantileError
from .utils import as_rng, percentiles, quantile, stack_samples


# Nested central intervals: 99%, 95%, 90%, 80%, 70%, 60%, 50%
DEFAULT_QUANTILE_PAIRS = (
    (0.005, 0.995),
    (0.025, 0.975),
    (0.05, 0.95),
    (0.1, 0.9),
    (0.15, 0.85),
    (0.2, 0.8),
    (0.25, 0.75),
)

PARAM_NAMES = ('intercept', 'slope', 'scale')

PredictionKey = namedtuple('PredictionKey', ['group', 'covariate'])
IntervalBand = namedtuple('IntervalBand', ['covariate', 'lower', 'upper'])
ContrastBand = namedtuple('ContrastBand', ['lower_q', 'upper_q', 'bands'])


class PosteriorSample:
    """Posterior draws of a linear model, split by group.

    Parameters
    ----------
    intercept, slope : dict of group -> (N,) array_like
        Draws of the intercept and slope for each group. Every sequence must
        have the same length N, the number of posterior draws.
    scale : (N,) array_like or dict of group -> (N,) array_like
        Draws of the residual standard deviation. A single sequence is shared
        by all groups.

    Attributes
    ----------
    groups : tuple
        The group ids, in the order of `intercept`.
    n_draws : int
        The number of posterior draws.
    """

    def __init__(self, intercept, slope, scale):
        if not intercept:
            raise InvalidInputError('Posterior has no groups!')

        self.groups = tuple(intercept.keys())

        if set(slope.keys()) != set(self.groups):
            raise InvalidInputError(
                f"Slope groups {sorted(slope.keys())} do not match "
                f"intercept groups {sorted(self.groups)}."
            )

        if not isinstance(scale, dict):
            scale = {g: scale for g in self.groups}
        elif set(scale.keys()) != set(self.groups):
            raise InvalidInputError(
                f"Scale groups {sorted(scale.keys())} do not match "
                f"intercept groups {sorted(self.groups)}."
            )

        self._params = dict()
        for name, param in zip(PARAM_NAMES, (intercept, slope, scale)):
            self._params[name] = {g: self._as_draws(param[g], name, g)
                                  for g in self.groups}

        lengths = {x.size for p in self._params.values() for x in p.values()}
        if len(lengths) > 1:
            raise InvalidInputError(
                f"Posterior sequences have mismatched lengths {sorted(lengths)}."
            )
        self.n_draws = lengths.pop()

        if any(np.any(x < 0) for x in self._params['scale'].values()):
            raise InvalidInputError('Residual scale must be non-negative.')

    @staticmethod
    def _as_draws(x, name, group):
        x = np.array(x, dtype=float)
        if x.ndim != 1:
            raise InvalidInputError(
                f"'{name}' draws for group {group} must be 1-D, "
                f"got shape {x.shape}."
            )
        if x.size == 0:
            raise InvalidInputError(
                f"'{name}' draws for group {group} are empty."
            )
        if not np.all(np.isfinite(x)):
            raise InvalidInputError(
                f"'{name}' draws for group {group} are not all finite."
            )
        x.flags.writeable = False
        return x

    @classmethod
    def from_dataset(cls, ds, intercept='α', slope='β', scale='σ',
                     groups=None):
        """Build a sample from an ArviZ posterior `Dataset`.

        Parameters
        ----------
        ds : xarray.Dataset
            Posterior with ('chain', 'draw') dimensions, or just 'draw'.
            Vector parameters index the group along their last dimension.
        intercept, slope, scale : str
            Names of the variables in `ds`. If `slope` is None, the slope is
            taken to be zero for every group. A scalar `scale` variable is
            shared by all groups.
        groups : list, optional
            Group ids matching the positions of the vector parameters.
            Defaults to 1, 2, ..., G.

        Returns
        -------
        result : PosteriorSample
        """
        ds = stack_samples(ds)

        a = np.asarray(ds[intercept]).reshape(ds.sizes['sample'], -1)
        Ng = a.shape[1]
        if groups is None:
            groups = list(range(1, Ng + 1))
        if len(groups) != Ng:
            raise InvalidInputError(
                f"Got {len(groups)} group ids for {Ng} intercepts."
            )

        def split(name):
            x = np.asarray(ds[name]).reshape(ds.sizes['sample'], -1)
            if x.shape[1] == 1:
                return {g: x[:, 0] for g in groups}
            if x.shape[1] != Ng:
                raise InvalidInputError(
                    f"'{name}' has {x.shape[1]} groups, expected {Ng}."
                )
            return {g: x[:, i] for i, g in enumerate(groups)}

        b = (split(slope) if slope is not None
             else {g: np.zeros(a.shape[0]) for g in groups})

        return cls(
            intercept={g: a[:, i] for i, g in enumerate(groups)},
            slope=b,
            scale=split(scale),
        )

    def __getitem__(self, name):
        return self._params[name]

    def __repr__(self):
        return (f"<{self.__class__.__name__}: groups={list(self.groups)}, "
                f"n_draws={self.n_draws}>")


class ContrastSummary:
    """Nested credible-interval bands of a difference series.

    Iterating yields one `ContrastBand` per quantile pair, in the order the
    pairs were requested. Each band holds one `IntervalBand` per covariate,
    in grid order.
    """

    def __init__(self, bands):
        self.bands = tuple(bands)

    def __iter__(self):
        return iter(self.bands)

    def __len__(self):
        return len(self.bands)

    def __getitem__(self, idx):
        return self.bands[idx]

    @property
    def covariates(self):
        if not self.bands:
            return np.array([])
        return np.array([b.covariate for b in self.bands[0].bands])

    def to_frame(self):
        """Return a long DataFrame indexed by (lower_q, upper_q, covariate)."""
        df = pd.DataFrame(
            [(cb.lower_q, cb.upper_q, ib.covariate, ib.lower, ib.upper)
             for cb in self.bands for ib in cb.bands],
            columns=['lower_q', 'upper_q', 'covariate', 'lower', 'upper'],
        )
        return df.set_index(['lower_q', 'upper_q', 'covariate'])

    def __repr__(self):
        qs = ', '.join(f"({b.lower_q:g}, {b.upper_q:g})" for b in self.bands)
        return (f"<{self.__class__.__name__}: {len(self.covariates)} "
                f"covariates, quantiles=[{qs}]>")


def _check_grid(grid):
    grid = np.array(grid, dtype=float)
    if grid.ndim != 1 or grid.size == 0:
        raise InvalidInputError('Covariate grid must be a non-empty 1-D sequence.')
    if not np.all(np.isfinite(grid)):
        raise InvalidInputError('Covariate grid must be finite.')
    if np.any(np.diff(grid) <= 0):
        raise InvalidInputError('Covariate grid must be strictly increasing.')
    return grid


# -----------------------------------------------------------------------------
#         Pipeline
# -----------------------------------------------------------------------------
def simulate_predictions(posterior, grid, reference_offset, draw_count,
                         rng=None, resample=True):
    """Simulate the outcome of `draw_count` individuals in each group at each
    covariate value.

    Each simulated individual `i` is assigned one posterior draw `d[i]`, which
    is the same in every group and at every covariate value, so that
    ``pred[A, x][i] - pred[B, x][i]`` is a paired comparison. Its outcome is

        intercept[g][d[i]] + slope[g][d[i]] * (x - reference_offset) + e,

    where e ~ N(0, scale[g][d[i]]) is drawn independently for every cell.

    Parameters
    ----------
    posterior : PosteriorSample or dict
        Posterior draws of the model parameters. A dict with keys
        'intercept', 'slope' and 'scale' is converted to a `PosteriorSample`.
    grid : (M,) array_like
        Strictly increasing covariate values.
    reference_offset : float
        Value subtracted from the covariate, e.g. the mean height of the data
        to which the model was fit.
    draw_count : int
        Number of individuals to simulate.
    rng : numpy.random.Generator or int, optional
        Source of randomness. An int is used as a seed.
    resample : bool, optional
        If True, posterior draws are chosen uniformly with replacement. If
        False, `draw_count` must equal ``posterior.n_draws`` and each draw is
        used exactly once, in order.

    Returns
    -------
    result : dict of PredictionKey -> (draw_count,) ndarray
        Keys are ordered by group, then by covariate.
    """
    if isinstance(posterior, Mapping):
        missing = set(PARAM_NAMES) - set(posterior)
        if missing:
            raise InvalidInputError(
                f"Posterior mapping is missing {sorted(missing)}."
            )
        posterior = PosteriorSample(**{k: posterior[k] for k in PARAM_NAMES})
    elif not isinstance(posterior, PosteriorSample):
        raise InvalidInputError(
            f"`posterior` of type '{type(posterior)}' is unsupported!"
        )
    grid = _check_grid(grid)
    if (isinstance(draw_count, bool)
            or not isinstance(draw_count, (int, np.integer))
            or draw_count <= 0):
        raise InvalidInputError(
            f"`draw_count` must be a positive integer, got {draw_count!r}."
        )
    if not np.isfinite(reference_offset):
        raise InvalidInputError('`reference_offset` must be finite.')

    rng = as_rng(rng)

    if resample:
        idx = rng.integers(0, posterior.n_draws, size=draw_count)
    else:
        if draw_count != posterior.n_draws:
            raise InvalidInputError(
                f"Without resampling, `draw_count` ({draw_count}) must equal "
                f"the number of posterior draws ({posterior.n_draws})."
            )
        idx = np.arange(draw_count)

    x = grid - reference_offset

    out = dict()
    for g in posterior.groups:
        α = posterior['intercept'][g][idx]
        β = posterior['slope'][g][idx]
        σ = posterior['scale'][g][idx]
        # (M, draw_count) linear predictor + noise
        μ = α + β * x[:, np.newaxis]
        sims = μ + rng.normal(size=μ.shape) * σ
        for xi, s in zip(grid, sims):
            s.flags.writeable = False
            out[PredictionKey(g, float(xi))] = s

    return out


def compute_difference_series(predictions, group_a, group_b):
    """Compute the paired difference ``A - B`` at each covariate value.

    Parameters
    ----------
    predictions : dict of PredictionKey -> (N,) array_like
        Output of `simulate_predictions`.
    group_a, group_b : hashable
        Group ids to compare.

    Returns
    -------
    result : dict of float -> (N,) ndarray
        Ordered by covariate as listed for `group_a`.
    """
    def covariates(g):
        return [x for grp, x in predictions if grp == g]

    cov_a, cov_b = covariates(group_a), covariates(group_b)

    for g, c in [(group_a, cov_a), (group_b, cov_b)]:
        if not c:
            raise MismatchedGroupsError(f"Group {g!r} has no predictions.")

    if set(cov_a) != set(cov_b):
        raise MismatchedGroupsError(
            f"Groups {group_a!r} and {group_b!r} were not simulated over the "
            "same covariate grid."
        )

    out = dict()
    for x in cov_a:
        a = np.asarray(predictions[PredictionKey(group_a, x)], dtype=float)
        b = np.asarray(predictions[PredictionKey(group_b, x)], dtype=float)
        if a.shape != b.shape:
            raise MismatchedGroupsError(
                f"At covariate {x:g}, group {group_a!r} has {a.size} draws "
                f"but group {group_b!r} has {b.size}."
            )
        out[x] = a - b

    return out


def _check_quantile_pair(pair):
    try:
        lo, hi = pair
        lo, hi = float(lo), float(hi)
    except (TypeError, ValueError):
        raise InvalidQuantileError(
            f"Quantile pair {pair!r} must be two numbers (lower, upper)."
        )
    if not (np.isfinite(lo) and np.isfinite(hi)):
        raise InvalidQuantileError(f"Quantile pair {pair!r} is not finite.")
    if not 0 <= lo < hi <= 1:
        raise InvalidQuantileError(
            f"Quantile pair {pair!r} must satisfy 0 <= lower < upper <= 1."
        )
    return lo, hi


def compute_contrast_bands(difference_series,
                           quantile_pairs=DEFAULT_QUANTILE_PAIRS):
    """Compute the credible-interval bands of the differences.

    Quantiles are computed with linear interpolation between order
    statistics, at rank ``q * (n - 1)``.

    Parameters
    ----------
    difference_series : dict of float -> (N,) array_like
        Output of `compute_difference_series`.
    quantile_pairs : sequence of (float, float)
        The (lower, upper) quantiles of each band.

    Returns
    -------
    result : ContrastSummary
        One band per quantile pair, each with one interval per covariate.
    """
    pairs = [_check_quantile_pair(p) for p in quantile_pairs]

    if not difference_series:
        raise InvalidInputError('Difference series is empty.')

    series = dict()
    for x, d in difference_series.items():
        d = np.asarray(d, dtype=float)
        if d.size == 0:
            raise InvalidInputError(f"No differences at covariate {x:g}.")
        series[x] = d

    n = min(d.size for d in series.values())
    tails = [t for lo, hi in pairs for t in (lo, 1 - hi) if t > 0]
    if tails and n * min(tails) < 1:
        warnings.warn(f"Only {n} differences for a tail of {min(tails):g}; "
                      "the outer bands reduce to the sample extremes.")

    bands = []
    for lo, hi in pairs:
        intervals = []
        for x, d in series.items():
            lower, upper = quantile(d, (lo, hi))
            intervals.append(IntervalBand(x, float(lower), float(upper)))
        bands.append(ContrastBand(lo, hi, tuple(intervals)))

    return ContrastSummary(bands)


def summarize_sign(difference_series, covariate):
    """Return the fractions of differences strictly above and below zero.

    Exact zeros count toward neither fraction.

    Examples
    --------
    >>> summarize_sign({150.0: [-2, -1, 0, 1, 2]}, 150.0)
    === (0.4, 0.4)
    """
    try:
        d = np.asarray(difference_series[covariate], dtype=float)
    except KeyError:
        raise InvalidInputError(
            f"Covariate {covariate!r} not in the difference series."
        )
    if d.size == 0:
        raise InvalidInputError(f"No differences at covariate {covariate!r}.")
    return float(np.mean(d > 0)), float(np.mean(d < 0))


# -----------------------------------------------------------------------------
#         Summaries
# -----------------------------------------------------------------------------
def summarize_contrast(difference_series, q=0.89, digits=4, verbose=False):
    """Summarize the differences at each covariate value.

    Parameters
    ----------
    difference_series : dict of float -> (N,) array_like
        Output of `compute_difference_series`.
    q : float in [0, 1]
        Width of the central percentile interval.
    digits : int
        Number of digits in the printed output if `verbose=True`.
    verbose : bool
        If True, print the output.

    Returns
    -------
    result : DataFrame
        Indexed by covariate, with columns mean, std (``ddof=1``, as in
        `precis`), the low/high percentiles, and the probability of each sign.
    """
    a = (1 - q) / 2
    pp = 100*np.array([a, 1-a])
    rows = []
    for x, d in difference_series.items():
        d = np.asarray(d, dtype=float)
        lo, hi = percentiles(d, q=q)
        p_pos, p_neg = summarize_sign(difference_series, x)
        rows.append((x, d.mean(), d.std(ddof=1), lo, hi, p_pos, p_neg))
    df = pd.DataFrame(
        rows,
        columns=['covariate', 'mean', 'std', f"{pp[0]:g}%", f"{pp[1]:g}%",
                 'p_positive', 'p_negative'],
    ).set_index('covariate')

    if verbose:
        with pd.option_context('display.float_format',
                               f"{{:.{digits}f}}".format):
            print(df)

    return df


def mean_contrast(posterior, param, group_a, group_b):
    """Return the draw-wise contrast ``param[A] - param[B]`` of the posterior.

    This is the contrast in the expected value, without residual noise.
    """
    p = posterior[param]
    for g in [group_a, group_b]:
        if g not in p:
            raise MismatchedGroupsError(f"Group {g!r} not in the posterior.")
    return p[group_a] - p[group_b]


def predictions_to_frame(predictions):
    """Convert predictions to a long DataFrame for plotting.

    Returns
    -------
    result : DataFrame
        Columns ['group', 'covariate', 'sample', 'value'].
    """
    dfs = [
        pd.DataFrame({
            'group': k.group,
            'covariate': k.covariate,
            'sample': np.arange(len(v)),
            'value': np.asarray(v, dtype=float),
        })
        for k, v in predictions.items()
    ]
    if not dfs:
        return pd.DataFrame(columns=['group', 'covariate', 'sample', 'value'])
    return pd.concat(dfs, ignore_index=True)

# =============================================================================
# =============================================================================
