"""
Binomial likelihood, the unnormalized posterior target, and the conjugate
Beta-Binomial update used as the analytic reference for sampled chains.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Tuple

from binomial_mh.errors import require_argument, require_int
from binomial_mh.priors.beta_prior import BetaPrior


@dataclass(frozen=True)
class BinomialObservation:
    """Observed (successes, trials); fixed for the lifetime of a chain."""

    successes: int
    trials: int

    def __post_init__(self):
        successes = require_int(self.successes, "successes")
        trials = require_int(self.trials, "trials")
        require_argument(trials > 0, "trials", "trials must be positive", data={"trials": trials})
        require_argument(
            successes >= 0, "successes", "successes must be non-negative", data={"successes": successes}
        )
        require_argument(
            successes <= trials,
            "successes",
            "successes must not exceed trials",
            data={"successes": successes, "trials": trials},
        )
        object.__setattr__(self, "successes", successes)
        object.__setattr__(self, "trials", trials)

    @property
    def failures(self) -> int:
        return self.trials - self.successes


def log_binomial_coefficient(n: int, k: int) -> float:
    return math.lgamma(n + 1) - math.lgamma(k + 1) - math.lgamma(n - k + 1)


def binomial_log_pmf(successes: int, trials: int, p: float) -> float:
    """log Binomial(successes; trials, p); -inf where the pmf is exactly zero."""

    if p <= 0.0:
        return 0.0 if successes == 0 else -math.inf
    if p >= 1.0:
        return 0.0 if successes == trials else -math.inf
    return (
        log_binomial_coefficient(trials, successes)
        + successes * math.log(p)
        + (trials - successes) * math.log1p(-p)
    )


def log_target_density(p: float, obs: BinomialObservation, prior: BetaPrior) -> float:
    """log f(p) = log Beta_pdf(p) + log Binomial_pmf(successes; trials, p)."""

    log_prior = prior.log_pdf(p)
    if log_prior == -math.inf:
        return -math.inf
    return log_prior + binomial_log_pmf(obs.successes, obs.trials, p)


def target_density(p: float, obs: BinomialObservation, prior: BetaPrior) -> float:
    return math.exp(log_target_density(p, obs, prior))


def beta_binomial_update(alpha0: float, beta0: float, y: float, n: float) -> Tuple[float, float]:
    """Beta prior + Binomial likelihood -> Beta posterior."""

    assert alpha0 > 0.0 and beta0 > 0.0
    assert n >= 0.0 and 0.0 <= y <= n
    return alpha0 + y, beta0 + (n - y)


def posterior_moments(alpha: float, beta: float) -> Tuple[float, float]:
    """Closed-form Beta mean and variance."""

    assert alpha > 0.0 and beta > 0.0
    denom = alpha + beta
    mean = alpha / denom
    var = (alpha * beta) / (denom * denom * (denom + 1.0))
    return mean, var


def conjugate_posterior(prior: BetaPrior, obs: BinomialObservation) -> Tuple[float, float]:
    return beta_binomial_update(prior.alpha, prior.beta, obs.successes, obs.trials)
