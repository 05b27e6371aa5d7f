#!/usr/bin/env python3
# =============================================================================
#     File: L03_linear_regression.py
#  Created: 2026-10-16 19:00
#
"""
  Description: Lecture 3. Linear regression of adult weight on height, with
  a prior predictive check.
"""
# =============================================================================

import matplotlib.pyplot as plt
import numpy as np

import howell_contrast as hc

plt.style.use('seaborn-v0_8-darkgrid')
rng = np.random.default_rng(seed=5656)

# -----------------------------------------------------------------------------
#        Load Dataset
# -----------------------------------------------------------------------------
# df: height [cm], weight [kg], age [int], male [0,1], sex [1, 2]
df = hc.load_howell()

# -----------------------------------------------------------------------------
#        Simulate weights from heights
# -----------------------------------------------------------------------------
W = hc.sim_weight(df['height'], 0.5, 5, rng=rng)

fig = plt.figure(1, clear=True, constrained_layout=True)
ax = fig.add_subplot()
ax.scatter(df['height'], W, alpha=0.5)
ax.set(xlabel='height [cm]', ylabel='simulated weight [kg]')

# -----------------------------------------------------------------------------
#        Prior predictive simulation
# -----------------------------------------------------------------------------
# Some of these intercepts and slopes are far too extreme, but the model
# learns the proper relationship anyway.
prior = hc.sim_prior_lines(1000, rng=rng)

fig = plt.figure(2, clear=True, constrained_layout=True)
ax = fig.add_subplot()
hc.plot_prior_lines(prior, xmax=100, ax=ax)
ax.set(xlabel='height [cm]', ylabel='weight [kg]', title='Prior lines')

# -----------------------------------------------------------------------------
#        Recover known parameters from simulated people
# -----------------------------------------------------------------------------
H = rng.uniform(130, 170, 1000)
W = hc.sim_weight(H, 0.5, 0.5, rng=rng)

with hc.linear_model(H, W):
    sim_fit = hc.ulam(chains=3, draws=2000, tune=2000, random_seed=5656)

hc.precis(sim_fit.samples)

# -----------------------------------------------------------------------------
#        Fit the real data
# -----------------------------------------------------------------------------
with hc.linear_model(df['height'], df['weight']):
    fit = hc.ulam(data=df, chains=3, draws=2000, tune=2000, random_seed=5656)

hc.precis(fit.samples)
fit.plot_trace(title='Weight ~ height')

# Plot 20 posterior lines over the data
post = hc.dataset_to_frame(fit.samples)
idx = rng.choice(len(post), 20, replace=False)

fig = plt.figure(4, clear=True, constrained_layout=True)
ax = fig.add_subplot()
hc.plot_prior_lines(post.iloc[idx][['α', 'β']], xmax=180, ax=ax)
ax.scatter(df['height'], df['weight'], alpha=0.5)
ax.set(xlim=(130, 180),
       ylim=(30, 65),
       xlabel='height [cm]',
       ylabel='weight [kg]')

# Percentile interval of the posterior prediction
h_seq = np.arange(130, 181, dtype=float)
post_sample = hc.PosteriorSample(
    intercept={1: post['α']},
    slope={1: post['β']},
    scale=post['σ'],
)
pred = hc.simulate_predictions(post_sample, h_seq, 0.0, 1000, rng=rng)
pi = np.array([hc.percentiles(v, q=0.89) for v in pred.values()])
ax.fill_between(h_seq, pi[:, 0], pi[:, 1], alpha=0.3, label='89% PI')
ax.legend()

plt.ion()
plt.show()

# =============================================================================
# =============================================================================
