import math

import numpy as np

from binomial_mh.mcmc.metropolis import (
    EVAL_LOWER,
    EVAL_UPPER,
    MetropolisBinomialSampler,
    acceptance_probability,
    clamp_to_evaluation_interval,
)
from binomial_mh.priors.beta_prior import BetaPrior


class UpperTailPrior(BetaPrior):
    """Zero density below 0.9, so a chain started at 0.5 sits on 0/0 ratios."""

    def log_pdf(self, p):
        return 0.0 if p >= 0.9 else -math.inf


def test_clamp_to_evaluation_interval():
    assert clamp_to_evaluation_interval(-3.0) == EVAL_LOWER
    assert clamp_to_evaluation_interval(1.7) == EVAL_UPPER
    assert clamp_to_evaluation_interval(0.25) == 0.25
    assert clamp_to_evaluation_interval(EVAL_UPPER) == EVAL_UPPER


def test_ordinary_ratios():
    assert acceptance_probability(-1.0, -2.0) == (1.0, None)
    prob, resolution = acceptance_probability(-3.0, -1.0)
    assert resolution is None
    assert math.isclose(prob, math.exp(-2.0))
    assert acceptance_probability(-math.inf, -1.0) == (0.0, None)


def test_indeterminate_ratios_follow_policy():
    assert acceptance_probability(-math.inf, -math.inf) == (0.0, "reject")
    assert acceptance_probability(math.inf, math.inf) == (0.0, "reject")
    assert acceptance_probability(float("nan"), -1.0) == (0.0, "reject")
    assert acceptance_probability(-1.0, float("nan")) == (0.0, "reject")
    assert acceptance_probability(-5.0, -math.inf) == (1.0, "accept")


def test_zero_density_start_never_emits_nan():
    sampler = MetropolisBinomialSampler(proposal_scale=0.3, prior=UpperTailPrior(), seed=7)
    result = sampler.sample(3000, 5, 10)
    assert not np.isnan(result.samples).any()
    assert result.degenerate_steps > 0

    moved = np.flatnonzero(result.accepted)
    assert moved.size > 0
    first = moved[0]
    # Every step before the first move was a rejected 0/0 and kept the seed value.
    assert np.all(result.samples[:first] == 0.5)
    assert np.all(result.samples[first:] >= 0.9)
