"""
Beta prior on the success probability.

Defaults to Beta(1,1) = Uniform. Kept as an explicit factor of the target
density so another Beta can be swapped in without touching the sampler loop.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Tuple

from binomial_mh.errors import require_argument


def _log_beta(a: float, b: float) -> float:
    return math.lgamma(a) + math.lgamma(b) - math.lgamma(a + b)


def _power_term(exponent: float, x: float) -> float:
    """exponent * log(x), with x**0 == 1 at x == 0."""

    if exponent == 0.0:
        return 0.0
    if x == 0.0:
        return math.inf if exponent < 0.0 else -math.inf
    return exponent * math.log(x)


@dataclass(frozen=True)
class BetaPrior:
    """Beta(alpha, beta) prior density."""

    alpha: float = 1.0
    beta: float = 1.0

    def __post_init__(self):
        require_argument(
            math.isfinite(self.alpha) and self.alpha > 0.0,
            "alpha",
            "prior alpha must be positive and finite",
            data={"alpha": self.alpha},
        )
        require_argument(
            math.isfinite(self.beta) and self.beta > 0.0,
            "beta",
            "prior beta must be positive and finite",
            data={"beta": self.beta},
        )

    def params(self) -> Tuple[float, float]:
        return self.alpha, self.beta

    def log_pdf(self, p: float) -> float:
        if p < 0.0 or p > 1.0:
            return -math.inf
        a, b = self.alpha, self.beta
        return _power_term(a - 1.0, p) + _power_term(b - 1.0, 1.0 - p) - _log_beta(a, b)

    def pdf(self, p: float) -> float:
        return math.exp(self.log_pdf(p))
