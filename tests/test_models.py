#!/usr/bin/env python3
# =============================================================================
#     File: test_models.py
#  Created: 2026-10-16 17:30
#
"""
Description: Test the structure of the PyMC models and the `Ulam` wrapper.
No MCMC sampling is done here.
"""
# =============================================================================

import numpy as np
import pytest
import xarray as xr

import howell_contrast as hc


@pytest.fixture
def sim_df(rng):
    sex = rng.choice([1, 2], 100)
    return hc.sim_hw(sex, {1: 45, 2: 55}, {1: 0.1, 2: 0.2}, rng=rng)


def names(rvs):
    return {x.name for x in rvs}


def test_linear_model(rng):
    H = rng.uniform(130, 170, 20)
    model = hc.linear_model(H, hc.sim_weight(H, 0.5, 0.5, rng=rng))
    assert names(model.free_RVs) == {'α', 'β', 'σ'}
    assert names(model.observed_RVs) == {'y'}


def test_sex_weight_model(sim_df):
    model = hc.sex_weight_model(sim_df['sex'], sim_df['weight'])
    assert names(model.free_RVs) == {'α', 'σ'}
    assert names(model.observed_RVs) == {'W'}
    assert model.eval_rv_shapes()['α'] == (2,)


def test_sex_height_weight_model(sim_df):
    model = hc.sex_height_weight_model(sim_df['sex'], sim_df['height'],
                                       sim_df['weight'])
    assert names(model.free_RVs) == {'α', 'β', 'σ'}
    assert model.eval_rv_shapes()['β'] == (2,)
    # 0-based sex index inside the model
    np.testing.assert_array_equal(model['S'].get_value(),
                                  sim_df['sex'].to_numpy() - 1)


def test_full_model(sim_df):
    model = hc.full_model(sim_df['sex'], sim_df['height'], sim_df['weight'])
    assert names(model.free_RVs) == {'γ', 'τ', 'α', 'β', 'σ'}
    assert names(model.observed_RVs) == {'H', 'W'}


def test_invalid_sex_codes():
    with pytest.raises(hc.InvalidInputError):
        hc.sex_weight_model([0, 1], [40., 50.])


@pytest.fixture
def fake_fit():
    rng = np.random.default_rng(8)
    Nc, Nd = 2, 50
    samples = xr.Dataset({
        'α': (('chain', 'draw', 'α_dim_0'),
              rng.normal([45, 55], 1, size=(Nc, Nd, 2))),
        'β': (('chain', 'draw', 'β_dim_0'),
              rng.uniform(0.5, 0.7, size=(Nc, Nd, 2))),
        'σ': (('chain', 'draw'), rng.uniform(4, 5, size=(Nc, Nd))),
    })
    return hc.Ulam(samples=samples)


def test_ulam_summaries(fake_fit):
    assert fake_fit.cov.shape == (5, 5)
    assert list(fake_fit.std.index) == ['α[0]', 'α[1]', 'β[0]', 'β[1]', 'σ']
    np.testing.assert_allclose(fake_fit.coef['α'], [45, 55], atol=0.5)


def test_ulam_posterior_sample(fake_fit):
    post = fake_fit.posterior_sample()
    assert post.groups == (1, 2)
    assert post.n_draws == 100
    diffs = hc.compute_difference_series(
        hc.simulate_predictions(post, [150., 160.], 155, 200, rng=1), 1, 2
    )
    assert diffs[150.].mean() < 0

# =============================================================================
# =============================================================================
