import numpy as np

from binomial_mh import run
from binomial_mh.mcmc.metropolis import EVAL_LOWER, EVAL_UPPER, MetropolisBinomialSampler


def test_chain_length_and_seed_value():
    for n in (1, 2, 17, 500):
        chain = run(n, 4, 10, seed=3)
        assert len(chain) == n
        assert chain[0] == 0.5


def test_values_stay_in_evaluation_interval():
    for successes, trials in [(4, 10), (0, 10), (10, 10), (1, 1)]:
        chain = run(2000, successes, trials, proposal_scale=0.5, seed=11)
        assert np.all(chain >= EVAL_LOWER)
        assert np.all(chain <= EVAL_UPPER)


def test_same_seed_is_bit_identical():
    a = run(3000, 4, 10, seed=1234)
    b = run(3000, 4, 10, seed=1234)
    assert np.array_equal(a, b)
    c = run(3000, 4, 10, seed=1235)
    assert not np.array_equal(a, c)


def test_injected_generator_matches_seed():
    a = run(1000, 7, 20, rng=np.random.default_rng(99))
    b = MetropolisBinomialSampler(seed=99).run(1000, 7, 20)
    assert np.array_equal(a, b)


def test_rejected_steps_repeat_previous_value():
    result = MetropolisBinomialSampler(seed=5).sample(5000, 4, 10)
    samples, accepted = result.samples, result.accepted
    assert not accepted[0]
    rejected = np.flatnonzero(~accepted[1:]) + 1
    assert rejected.size > 0
    assert np.array_equal(samples[rejected], samples[rejected - 1])
    assert 0.0 < result.acceptance_rate < 1.0


def test_independent_samplers_do_not_share_state():
    s1 = MetropolisBinomialSampler(seed=8)
    s2 = MetropolisBinomialSampler(seed=8)
    first = s1.run(200, 4, 10)
    s1.run(200, 4, 10)
    assert np.array_equal(first, s2.run(200, 4, 10))
