"""
Random-walk Metropolis sampler for a binomial success probability.

Target: f(p) = Beta_pdf(p; prior) * Binomial_pmf(successes; trials, p).
Proposals are p' ~ Normal(p, proposal_scale), clamped into the evaluation
interval [0.001, 0.999]; the clamped value is the proposal that is stored on
acceptance. The kernel is symmetric so no Hastings correction is applied.

Each sampler owns its numpy Generator. The normal and uniform draws for a
chain are taken in two vectorized blocks up front and the scalar loop only
does density arithmetic, so a given seed reproduces the chain bit for bit.
"""

from __future__ import annotations

import logging
import math
import numbers
import time
from dataclasses import dataclass
from typing import Optional, Tuple

import numpy as np
import pandas as pd

from binomial_mh.errors import DegeneracyLog, DegeneracyRecord, InvalidArgument, require_argument, require_int
from binomial_mh.likelihood import BinomialObservation, log_target_density
from binomial_mh.priors.beta_prior import BetaPrior

EVAL_LOWER = 0.001
EVAL_UPPER = 0.999
INITIAL_VALUE = 0.5
DEFAULT_PROPOSAL_SCALE = 0.16


def clamp_to_evaluation_interval(x: float, lower: float = EVAL_LOWER, upper: float = EVAL_UPPER) -> float:
    """Pull a probability into [lower, upper] before any density evaluation."""

    return min(max(x, lower), upper)


def acceptance_probability(log_target_candidate: float, log_target_current: float) -> Tuple[float, Optional[str]]:
    """
    min(1, f(candidate) / f(current)) from log densities.

    Returns (probability, resolution). resolution is None for an ordinary
    ratio, otherwise "accept" or "reject" for an indeterminate form:
    0/0, inf/inf and NaN reject; x/0 with x > 0 accepts.
    """

    if math.isnan(log_target_candidate) or math.isnan(log_target_current):
        return 0.0, "reject"
    if math.isinf(log_target_current):
        if log_target_candidate == log_target_current:
            return 0.0, "reject"
        if log_target_current < 0.0:
            return 1.0, "accept"
    diff = log_target_candidate - log_target_current
    if diff >= 0.0:
        return 1.0, None
    return math.exp(diff), None


@dataclass
class ChainResult:
    samples: np.ndarray
    accepted: np.ndarray
    degenerate_steps: int
    observation: BinomialObservation
    proposal_scale: float
    seed: Optional[int] = None

    def __len__(self) -> int:
        return int(self.samples.shape[0])

    @property
    def acceptance_rate(self) -> float:
        if len(self) < 2:
            return 0.0
        return float(self.accepted[1:].mean())

    def to_frame(self) -> pd.DataFrame:
        return pd.DataFrame(
            {
                "index": np.arange(len(self), dtype=np.int64),
                "p": self.samples,
                "accepted": self.accepted,
            }
        )


class MetropolisBinomialSampler:
    def __init__(
        self,
        proposal_scale: float = DEFAULT_PROPOSAL_SCALE,
        prior: Optional[BetaPrior] = None,
        rng: Optional[np.random.Generator] = None,
        seed: Optional[int] = None,
        logger: Optional[logging.Logger] = None,
    ):
        require_argument(
            isinstance(proposal_scale, numbers.Real)
            and not isinstance(proposal_scale, bool)
            and math.isfinite(proposal_scale)
            and proposal_scale > 0.0,
            "proposal_scale",
            "proposal_scale must be a positive finite number",
            data={"proposal_scale": proposal_scale},
        )
        if rng is not None and seed is not None:
            raise InvalidArgument("rng", "pass either rng or seed, not both", data={"seed": seed})
        if rng is not None and not isinstance(rng, np.random.Generator):
            raise InvalidArgument("rng", "rng must be a numpy.random.Generator", data={"rng": type(rng).__name__})
        if seed is not None:
            seed = require_int(seed, "seed")

        self.proposal_scale = float(proposal_scale)
        self.prior = prior if prior is not None else BetaPrior()
        self.seed = seed
        self.rng = rng if rng is not None else np.random.default_rng(seed)
        self.log = logger if logger is not None else logging.getLogger("binomial_mh")

    def _validate(self, sample_count, successes, trials) -> Tuple[int, BinomialObservation]:
        n = require_int(sample_count, "sample_count")
        require_argument(n >= 1, "sample_count", "sample_count must be at least 1", data={"sample_count": n})
        return n, BinomialObservation(successes=successes, trials=trials)

    def sample(self, sample_count: int, successes: int, trials: int) -> ChainResult:
        """Run one chain and keep the per-step acceptance record."""

        n, obs = self._validate(sample_count, successes, trials)
        t0 = time.time()
        self.log.debug(
            "Metropolis chain start: n=%d successes=%d trials=%d scale=%.4f",
            n,
            obs.successes,
            obs.trials,
            self.proposal_scale,
        )

        chain = np.empty(n, dtype=np.float64)
        accepted = np.zeros(n, dtype=bool)
        chain[0] = INITIAL_VALUE
        degeneracies = DegeneracyLog(logger=self.log)

        if n > 1:
            steps = (self.rng.standard_normal(n - 1) * self.proposal_scale).tolist()
            uniforms = self.rng.random(n - 1).tolist()
            prior = self.prior
            current = INITIAL_VALUE
            log_current = log_target_density(clamp_to_evaluation_interval(current), obs, prior)

            for i in range(1, n):
                candidate = clamp_to_evaluation_interval(current + steps[i - 1])
                log_candidate = log_target_density(candidate, obs, prior)
                prob, resolution = acceptance_probability(log_candidate, log_current)
                if resolution is not None:
                    degeneracies.record(DegeneracyRecord(i, resolution, log_candidate, log_current))
                if resolution != "reject" and prob >= uniforms[i - 1]:
                    current = candidate
                    log_current = log_candidate
                    accepted[i] = True
                chain[i] = current

        result = ChainResult(
            samples=chain,
            accepted=accepted,
            degenerate_steps=len(degeneracies),
            observation=obs,
            proposal_scale=self.proposal_scale,
            seed=self.seed,
        )
        self.log.info(
            "Metropolis chain completed: n=%d acceptance_rate=%.3f degenerate_steps=%d elapsed=%.2fs",
            n,
            result.acceptance_rate,
            result.degenerate_steps,
            time.time() - t0,
        )
        return result

    def run(self, sample_count: int, successes: int, trials: int) -> np.ndarray:
        """Chain of length sample_count; element 0 is always 0.5."""

        return self.sample(sample_count, successes, trials).samples


def run(
    sample_count: int,
    successes: int,
    trials: int,
    proposal_scale: float = DEFAULT_PROPOSAL_SCALE,
    seed: Optional[int] = None,
    rng: Optional[np.random.Generator] = None,
    prior: Optional[BetaPrior] = None,
) -> np.ndarray:
    sampler = MetropolisBinomialSampler(proposal_scale=proposal_scale, prior=prior, rng=rng, seed=seed)
    return sampler.run(sample_count, successes, trials)
