"""
Point summary of a finished chain against the conjugate Beta posterior.
Robust to very short chains: at least one post-burn-in sample is kept.
"""

from __future__ import annotations

import math
from typing import Optional

import numpy as np
import pandas as pd

from binomial_mh.errors import require_argument
from binomial_mh.likelihood import conjugate_posterior, posterior_moments
from binomial_mh.mcmc.metropolis import ChainResult
from binomial_mh.priors.beta_prior import BetaPrior


def burn_in_length(n: int, burn_in_fraction: float) -> int:
    require_argument(
        0.0 <= burn_in_fraction < 1.0,
        "burn_in_fraction",
        "burn_in_fraction must be in [0, 1)",
        data={"burn_in_fraction": burn_in_fraction},
    )
    return min(int(math.floor(n * burn_in_fraction)), n - 1)


def summarize_chain(
    result: ChainResult,
    burn_in_fraction: float = 0.5,
    prior: Optional[BetaPrior] = None,
) -> pd.DataFrame:
    prior = prior if prior is not None else BetaPrior()
    samples = np.asarray(result.samples, dtype=float)
    n = int(samples.shape[0])
    burn = burn_in_length(n, burn_in_fraction)
    kept = samples[burn:]

    mean = float(kept.mean())
    sd = float(kept.std(ddof=1)) if kept.size >= 2 else float("nan")
    q05, q50, q95 = (float(q) for q in np.quantile(kept, [0.05, 0.5, 0.95]))

    alpha_post, beta_post = conjugate_posterior(prior, result.observation)
    analytic_mean, analytic_var = posterior_moments(alpha_post, beta_post)

    return pd.DataFrame(
        {
            "sample_count": [n],
            "burn_in": [burn],
            "posterior_mean": [mean],
            "posterior_sd": [sd],
            "q05": [q05],
            "q50": [q50],
            "q95": [q95],
            "acceptance_rate": [result.acceptance_rate],
            "degenerate_steps": [result.degenerate_steps],
            "analytic_mean": [analytic_mean],
            "analytic_sd": [math.sqrt(analytic_var)],
            "abs_error_mean": [abs(mean - analytic_mean)],
        }
    )
