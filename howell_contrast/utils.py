#!/usr/bin/env python3
# =============================================================================
#     File: utils.py
#  Created: 2026-10-16 10:15
#
"""
  Description: Summary and conversion helpers shared by the Howell analyses.
"""
# =============================================================================

import numpy as np
import pandas as pd
import xarray as xr

from scipy import stats
from sparkline import sparkify


def as_rng(rng=None):
    """Return a `numpy.random.Generator`. An int or None is used as a seed;
    the global numpy random state is never touched."""
    if isinstance(rng, np.random.Generator):
        return rng
    return np.random.default_rng(rng)


def quantile(data, qs=0.89, width=6, precision=4,
             q_func=np.quantile, verbose=False, **kwargs):
    """Pretty-print the desired quantile values from the data.

    Parameters
    ----------
    data : (M, N) array_like
        Matrix of M vectors in N dimensions.
    qs : array_like of float
        Quantile or sequence of quantiles to compute, which must be between
        0 and 1 inclusive.
    width : int, optional, default=6
        Width of printing field.
    precision : int, optional, default=4
        Number of decimal places to print.
    q_func : callable, optional, default=numpy.quantile
        Function to compute the quantile outputs from the data.
    verbose : bool, optional, default=False
        Print the output quantile percentages names and values.
    **kwargs
        Additional arguments to `q_func`.

    Returns
    -------
    quantile : scalar or ndarray
        The requested quantiles. See documentation for `numpy.quantile`.

    Examples
    --------
    >>> quantile([-2, -1, 0, 1, 2], qs=[0.25, 0.75])
    === array([-1.,  1.])

    See Also
    --------
    `numpy.quantile`
    """
    qs = np.asarray(qs)
    quantiles = q_func(data, qs, **kwargs)
    if verbose:
        fstr = f"{width}.{precision}f"
        name_str = ' '.join([f"{100*p:{width-1}g}%" for p in np.atleast_1d(qs)])
        value_str = ' '.join([f"{q:{fstr}}" for q in np.atleast_1d(quantiles)])
        print(f"{name_str}\n{value_str}")
    return quantiles


def percentiles(data, q=0.89, **kwargs):
    r"""Return the central percentile interval of width `q`.

    .. note:: A wrapper around `quantile`, called with the bounds
    .. math:: a = \frac{1 - q}{2}, \quad (a, 1 - a)

    Parameters
    ----------
    data : array_like
        The samples.
    q : float in [0, 1]
        Probability mass covered by the interval.
    **kwargs
        See `quantile` for additional options. An xarray `dim` is translated
        to the corresponding `axis`.

    Returns
    -------
    percentiles : ndarray
        The low boundary is index 0, and the high boundary is index 1.
    """
    a = (1 - q) / 2
    if 'axis' in kwargs and 'dim' in kwargs:
        raise ValueError('Only one of `axis` or `dim` may be given!')
    if 'dim' in kwargs:
        kwargs['axis'] = data.get_axis_num(kwargs.pop('dim'))
    return quantile(data, (a, 1-a), **kwargs)


def density(data, adjust=0.5, **kwargs):
    """Return the kernel density estimate of the data, consistent with
    R function of the same name.

    .. note:: `adjust` scales the Silverman bandwidth, the way R's
      ``density(data, adjust=0.5)`` scales ``bw="nrd0"``.

    Returns
    -------
    kde : scipy.stats.gaussian_kde
        Call kde.pdf(x) to evaluate the density.
    """
    kde = stats.gaussian_kde(data, **kwargs)
    kde.set_bandwidth(adjust * kde.silverman_factor())
    return kde


def sparklines_from_dataframe(df, width=12):
    """Generate list of sparklines from a DataFrame."""
    sparklines = []
    for col in df:
        data = df[col].dropna()
        sparklines.append(sparkify(np.histogram(data, bins=width)[0]))
    return sparklines


def sparklines_from_array(arr, width=12):
    """Generate list of sparklines from the columns of an array."""
    sparklines = []
    for col in np.atleast_2d(arr.T):
        data = col[np.isfinite(col)]
        sparklines.append(sparkify(np.histogram(data, bins=width)[0]))
    return sparklines


def precis(obj, q=0.89, digits=4, verbose=True, hist=True):
    """Return a `DataFrame` of the mean, standard deviation, and percentile
    interval of each variable in `obj`.

    Parameters
    ----------
    obj : DataFrame, ndarray, xarray.Dataset, or xarray.DataArray
        Samples of each variable. Arrays are (samples, variables).
    q : float in [0, 1]
        The quantile of which to compute the interval.
    digits : int
        Number of digits in the printed output if `verbose=True`.
    verbose : bool
        If True, print the output.
    hist : bool
        If True, include a sparkline histogram column.

    Returns
    -------
    result : DataFrame
        A DataFrame with a row for each variable, and columns for mean,
        standard deviation, and low/high percentiles of the variable.
    """
    if not isinstance(obj, (xr.DataArray, xr.Dataset, pd.DataFrame, np.ndarray)):
        raise TypeError(f"`obj` of type '{type(obj)}' is unsupported!")

    a = (1-q)/2
    pp = 100*np.array([a, 1-a])  # percentiles for printing
    cols = ['mean', 'std', f"{pp[0]:g}%", f"{pp[1]:g}%"]

    if isinstance(obj, xr.DataArray):
        obj = obj.to_dataset(name=obj.name or 'var')

    if isinstance(obj, xr.Dataset):
        if 'draw' not in obj.dims:
            raise TypeError("Expected dimensions ['draw'] in `obj`")
        obj = dataset_to_frame(obj)

    if isinstance(obj, pd.DataFrame):
        obj = obj.select_dtypes(include=np.number)
        title = f"'DataFrame': {obj.shape[0]:d} obs. of {obj.shape[1]} variables:"
        df = pd.concat([obj.mean(), obj.std(), obj.quantile([a, 1-a]).T],
                       axis=1)
        df.columns = cols
        if hist:
            df['histogram'] = sparklines_from_dataframe(obj)

    if isinstance(obj, np.ndarray):
        obj = obj.reshape(obj.shape[0], -1)
        title = f"'ndarray': {obj.shape[0]:d} obs. of {obj.shape[1]} variables:"
        vals = np.vstack([np.nanmean(obj, axis=0),
                          np.nanstd(obj, axis=0, ddof=1),
                          np.nanpercentile(obj, pp[0], axis=0),
                          np.nanpercentile(obj, pp[1], axis=0)]).T
        df = pd.DataFrame(vals, columns=cols)
        if hist:
            df['histogram'] = sparklines_from_array(obj)

    if verbose:
        print(title)
        with pd.option_context('display.float_format',
                               f"{{:.{digits}f}}".format):
            print(df)

    return df


# -----------------------------------------------------------------------------
#         Dataset/Frame conversion utilities
# -----------------------------------------------------------------------------
def stack_samples(ds):
    """Stack the ('chain', 'draw') dimensions into a single 'sample'."""
    if 'chain' not in ds.dims and 'draw' in ds.dims:
        ds = ds.expand_dims('chain')
    return ds.stack(sample=('chain', 'draw')).transpose('sample', ...)


def dataset_to_frame(ds):
    """Convert ArviZ Dataset to DataFrame by separating columns with
    multi-dimensional parameters, e.g. β (N,) into β[0], β[1], ..., β[N].

    Parameters
    ----------
    ds : xarray.Dataset
        Dataset of posterior samples with a 'draw' dimension, and optionally
        a 'chain' dimension.

    Returns
    -------
    result : pandas.DataFrame
        DataFrame with one row per sample. Vector variables are separated
        into columns.
    """
    ds = stack_samples(ds)
    dfs = list()
    for vname, da in ds.items():
        data = da.values.reshape(da.sizes['sample'], -1)
        if da.ndim == 1:
            columns = [vname]
        elif da.ndim == 2:
            columns = _names_from_vec(vname, data.shape[1])
        else:
            raise ValueError(f"{vname} has invalid dimension {da.ndim}.")
        dfs.append(pd.DataFrame(data=data, columns=columns))
    df = pd.concat(dfs, axis=1)
    df.index.name = 'sample'
    return df


def _names_from_vec(vname, ncols):
    """Create a list of strings ['x[0]', 'x[1]', ..., 'x[``ncols``]'],
    where 'x' is ``vname``."""
    return [f"{vname}[{i:d}]" for i in range(ncols)]

# =============================================================================
# =============================================================================
