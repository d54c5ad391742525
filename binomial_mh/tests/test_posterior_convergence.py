import numpy as np

from binomial_mh import run


def test_back_half_mean_matches_beta_posterior():
    # Beta(1,1) prior with 4/10 successes -> Beta(5, 7), mean 5/12.
    target = 5.0 / 12.0
    for seed in (0, 1, 2, 3, 4):
        chain = run(10000, 4, 10, seed=seed)
        back_half = chain[len(chain) // 2 :]
        assert abs(back_half.mean() - target) < 0.05


def test_all_successes_drift_to_upper_boundary():
    for seed in (0, 1, 2):
        chain = run(5000, 10, 10, seed=seed)
        back_half = chain[len(chain) // 2 :]
        assert back_half.mean() > 0.85
        assert np.median(back_half) > 0.9


def test_no_successes_drift_to_lower_boundary():
    for seed in (0, 1, 2):
        chain = run(5000, 0, 10, seed=seed)
        back_half = chain[len(chain) // 2 :]
        assert back_half.mean() < 0.15
        assert np.median(back_half) < 0.1
