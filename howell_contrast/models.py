#!/usr/bin/env python3
# =============================================================================
#     File: models.py
#  Created: 2026-10-16 13:05
#
"""
  Description: PyMC models of weight as a function of sex and height, and
  a wrapper around `pymc.sample` that hands the posterior to the contrast
  pipeline.

  Sex is coded 1 = female, 2 = male in the data, and shifted to a 0-based
  index inside each model.
"""
# =============================================================================

import arviz as az
import numpy as np
import pandas as pd
import pymc as pm
import warnings

from copy import deepcopy

from .contrast import PosteriorSample
from .errors import InvalidInputError
from .utils import dataset_to_frame


def _sex_index(sex):
    """Convert 1-based sex codes to 0-based indices."""
    sex = np.asarray(sex, dtype=int)
    if sex.size == 0 or sex.min() < 1:
        raise InvalidInputError('Sex codes must be integers >= 1.')
    return sex - 1, int(sex.max())


def linear_model(x, y):
    """Linear regression of `y` on `x` with wide priors.

    .. note:: The priors here are those of the prior-predictive check: they
        allow absurd intercepts, but the data overwhelm them.
    """
    with pm.Model() as model:
        X = pm.Data('X', np.asarray(x, dtype=float))
        α = pm.Normal('α', 0, 10)
        β = pm.Uniform('β', 0, 1)
        σ = pm.Uniform('σ', 0, 10)
        μ = pm.Deterministic('μ', α + β * X)
        pm.Normal('y', μ, σ, observed=np.asarray(y, dtype=float),
                  shape=X.shape)
    return model


def sex_weight_model(sex, weight):
    """Weight as a function of sex alone: W ~ N(α[S], σ)."""
    S_idx, Ns = _sex_index(sex)
    with pm.Model() as model:
        S = pm.Data('S', S_idx)
        α = pm.Normal('α', 60, 10, shape=(Ns,))
        σ = pm.Uniform('σ', 0, 10)
        μ = pm.Deterministic('μ', α[S])
        pm.Normal('W', μ, σ, observed=np.asarray(weight, dtype=float),
                  shape=S.shape)
    return model


def sex_height_weight_model(sex, height, weight):
    """Direct effect of sex on weight, stratified by centered height:
    W ~ N(α[S] + β[S] (H - H̄), σ).
    """
    S_idx, Ns = _sex_index(sex)
    height = np.asarray(height, dtype=float)
    with pm.Model() as model:
        S = pm.Data('S', S_idx)
        H = pm.Data('H', height)
        Hbar = height.mean()
        α = pm.Normal('α', 60, 10, shape=(Ns,))
        β = pm.Uniform('β', 0, 1, shape=(Ns,))
        σ = pm.Uniform('σ', 0, 10)
        μ = pm.Deterministic('μ', α[S] + β[S] * (H - Hbar))
        pm.Normal('W', μ, σ, observed=np.asarray(weight, dtype=float),
                  shape=S.shape)
    return model


def full_model(sex, height, weight):
    """Joint model of height and weight given sex.

    Height depends on sex, and weight depends on both, so the posterior
    contains both the direct and the total effect of sex on weight.
    """
    S_idx, Ns = _sex_index(sex)
    height = np.asarray(height, dtype=float)
    with pm.Model() as model:
        S = pm.Data('S', S_idx)
        Hbar = height.mean()
        # height
        γ = pm.Normal('γ', 160, 10, shape=(Ns,))
        τ = pm.Uniform('τ', 0, 10)
        ν = pm.Deterministic('ν', γ[S])
        H = pm.Normal('H', ν, τ, observed=height, shape=S.shape)
        # weight
        α = pm.Normal('α', 60, 10, shape=(Ns,))
        β = pm.Uniform('β', 0, 1, shape=(Ns,))
        σ = pm.Uniform('σ', 0, 10)
        μ = pm.Deterministic('μ', α[S] + β[S] * (H - Hbar))
        pm.Normal('W', μ, σ, observed=np.asarray(weight, dtype=float),
                  shape=S.shape)
    return model


# -----------------------------------------------------------------------------
#         MCMC fit
# -----------------------------------------------------------------------------
class Ulam:
    """Hamiltonian Monte Carlo approximation.

    Attributes
    ----------
    samples : xarray.Dataset
        Posterior samples of the free parameters, with ('chain', 'draw')
        dimensions.
    coef : xarray.Dataset
        Posterior means of the parameters.
    cov : (M, M) DataFrame
        Covariance matrix of the parameters.
    data : DataFrame
        The data to which the model was fit.
    model : :class:`pymc.Model`
        The pymc model object used to define the posterior.
    """

    def __init__(self, samples, data=None, model=None):
        self.samples = samples
        self.data = data
        self.model = model
        self.coef = samples.mean(('chain', 'draw'))
        self.cov = dataset_to_frame(samples).cov()

    @property
    def std(self):
        return pd.Series(np.sqrt(np.diag(self.cov)), index=self.cov.index)

    def posterior_sample(self, intercept='α', slope='β', scale='σ',
                         groups=None):
        """Return the posterior as a `PosteriorSample` for the contrast
        pipeline. See `PosteriorSample.from_dataset`."""
        return PosteriorSample.from_dataset(
            self.samples,
            intercept=intercept,
            slope=slope,
            scale=scale,
            groups=groups,
        )

    def plot_trace(self, title=None):
        """Plot the MCMC sample chains for each parameter.

        Returns
        -------
        fig : plt.Figure
            The figure handle containing the trace plots.
        axes : ndarray of plt.Axes
            An array corresponding to the axes of each trace plot.
        """
        p = az.plot_trace(self.samples)
        fig = p[0, 0].figure
        fig.suptitle(title)
        return fig, p

    def __repr__(self):
        with np.printoptions(precision=4):
            means = {k: v.values for k, v in self.coef.items()}
            return f"<{self.__class__.__name__}: posterior means {means}>"


def ulam(var_names=None, model=None, data=None, start=None, **kwargs):
    """Sample the posterior of the model with NUTS.

    Parameters
    ----------
    var_names : list of str, optional
        Names of the variables to keep. Defaults to the free variables.
    model : pymc.Model (optional if in `with` context)
    data : pd.DataFrame, optional
        The data to which this model was fit.
    start : dict[str] -> ndarray, optional
        Dictionary of initial parameter values.
    **kwargs : dict
        Additional argumements to be passed to `pymc.sample()`, e.g. `draws`,
        `chains`, `random_seed`.

    Returns
    -------
    result : Ulam
        Object containing the posterior samples.
    """
    model = pm.modelcontext(model)

    if var_names is None:
        # filter out internally used variables
        var_names = [x.name for x in model.free_RVs
                     if not x.name.endswith('__')]

    with warnings.catch_warnings():
        # Small demo models trip the "fewer than 4 chains" warning.
        warnings.filterwarnings('ignore', '.*chains.*', UserWarning)
        idata = pm.sample(model=model, initvals=start, **kwargs)

    post = idata.posterior[list(var_names)]

    return Ulam(
        samples=post,
        data=deepcopy(data),
        model=model,
    )

# =============================================================================
# =============================================================================
