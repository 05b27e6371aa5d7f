#!/usr/bin/env python3
# =============================================================================
#     File: L04_categories.py
#  Created: 2026-10-16 19:40
#
"""
  Description: Lecture 4. Categorical predictors: the causal effect of sex on
  weight, directly and through height.
"""
# =============================================================================

import matplotlib.pyplot as plt
import numpy as np

import howell_contrast as hc

plt.style.use('seaborn-v0_8-darkgrid')
rng = np.random.default_rng(seed=56)

N = 1000  # number of simulated individuals

# -----------------------------------------------------------------------------
#        Load Dataset
# -----------------------------------------------------------------------------
df = hc.load_howell()
Hbar = df['height'].mean()

fig = plt.figure(1, clear=True, constrained_layout=True)
ax = fig.add_subplot()
for s, tf in df.groupby('sex'):
    ax.scatter(tf['height'], tf['weight'], alpha=0.5,
               label=hc.GROUP_LABELS[s])
ax.set(xlabel='height [cm]', ylabel='weight [kg]')
ax.legend()

fig = plt.figure(2, clear=True, constrained_layout=True)
ax_h, ax_w = fig.subplots(ncols=2)
hc.plot_by_group(df, 'height', ax=ax_h)
hc.plot_by_group(df, 'weight', ax=ax_w)

# -----------------------------------------------------------------------------
#        Simulate the generative model
# -----------------------------------------------------------------------------
sex = rng.choice([1, 2], 10_000)
alpha = {1: 45, 2: 55}
beta = {1: 0, 2: 0}

# Expect mean height 155 and mean weight 50 (because β == 0)
sim_df = hc.sim_hw(sex, alpha, beta, rng=rng)
hc.precis(sim_df[['height', 'weight']])

# Total causal effect of sex, isolating β by setting α == 0
print('total effect:',
      hc.total_effect({1: 0, 2: 0}, {1: 0.5, 2: 0.6}, rng=rng))

# -----------------------------------------------------------------------------
#        Weight by sex
# -----------------------------------------------------------------------------
with hc.sex_weight_model(sim_df['sex'], sim_df['weight']):
    sim_fit1 = hc.ulam(chains=3, draws=1000, random_seed=56)

hc.precis(sim_fit1.samples)  # α ≈ [45, 55]

with hc.sex_weight_model(df['sex'], df['weight']):
    fit1 = hc.ulam(data=df, chains=3, draws=1000, random_seed=56)

hc.precis(fit1.samples)

post1 = fit1.posterior_sample(slope=None)

# Posterior mean weight of each sex
fig = plt.figure(3, clear=True, constrained_layout=True)
ax_m, ax_p = fig.subplots(ncols=2)
for g in post1.groups:
    x = np.sort(post1['intercept'][g])
    ax_m.plot(x, hc.density(x).pdf(x), lw=2, label=hc.GROUP_LABELS[g])
ax_m.set(xlabel='posterior mean weight [kg]', ylabel='density')
ax_m.legend()

# Posterior predicted weight, a single grid point since there is no slope
pred1 = hc.simulate_predictions(post1, [Hbar], Hbar, N, rng=rng)
for k, v in pred1.items():
    x = np.sort(v)
    ax_p.plot(x, hc.density(x).pdf(x), lw=2, label=hc.GROUP_LABELS[k.group])
ax_p.set(xlabel='posterior predicted weight [kg]', ylabel='density')
ax_p.legend()

# Causal contrast in means
μ_contrast = hc.mean_contrast(post1, 'intercept', 2, 1)
hc.precis(μ_contrast[:, np.newaxis])

# Contrast of the predicted weights
diffs1 = hc.compute_difference_series(pred1, 2, 1)
p_pos, p_neg = hc.summarize_sign(diffs1, Hbar)
print(f"P(male heavier) = {p_pos:.3f}, P(female heavier) = {p_neg:.3f}")

fig = plt.figure(4, clear=True, constrained_layout=True)
ax = fig.add_subplot()
hc.plot_sign_split(diffs1[Hbar], ax=ax)

# -----------------------------------------------------------------------------
#        Direct effect of sex, stratified by height
# -----------------------------------------------------------------------------
with hc.sex_height_weight_model(sim_df['sex'], sim_df['height'],
                                sim_df['weight']):
    sim_fit2 = hc.ulam(chains=3, draws=1000, random_seed=56)

hc.precis(sim_fit2.samples)  # parameters recovered

with hc.sex_height_weight_model(df['sex'], df['height'], df['weight']):
    fit2 = hc.ulam(data=df, chains=3, draws=1000, random_seed=56)

hc.precis(fit2.samples)

coef = {
    'α': dict(zip([1, 2], fit2.coef['α'].values)),
    'β': dict(zip([1, 2], fit2.coef['β'].values)),
}
fig = plt.figure(5, clear=True, constrained_layout=True)
ax = fig.add_subplot()
hc.plot_regression_lines(df, coef, xbar=Hbar, ax=ax)

# Contrast at each height: positive = female heavier, negative = male heavier
post2 = fit2.posterior_sample()
h_seq = np.arange(130, 181, dtype=float)
pred2 = hc.simulate_predictions(post2, h_seq, Hbar, N, rng=rng)
diffs2 = hc.compute_difference_series(pred2, 1, 2)
summary = hc.compute_contrast_bands(diffs2)
hc.summarize_contrast(diffs2, verbose=True)

fig = plt.figure(6, clear=True, constrained_layout=True)
ax = fig.add_subplot()
hc.plot_contrast(summary, ax=ax)

# -----------------------------------------------------------------------------
#        Height and weight together
# -----------------------------------------------------------------------------
with hc.full_model(df['sex'], df['height'], df['weight']):
    fit3 = hc.ulam(data=df, chains=3, draws=1000, random_seed=56)

hc.precis(fit3.samples)

# Direct effect from the full model, at the observed heights
post3 = fit3.posterior_sample()
pred3 = hc.simulate_predictions(post3, h_seq, Hbar, N, rng=rng)
summary3 = hc.compute_contrast_bands(hc.compute_difference_series(pred3, 1, 2))

fig = plt.figure(7, clear=True, constrained_layout=True)
ax = fig.add_subplot()
hc.plot_contrast(summary3, ax=ax)
ax.set_title('Direct effect of sex, full model')

plt.ion()
plt.show()

# =============================================================================
# =============================================================================
