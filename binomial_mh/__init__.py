"""
Random-walk Metropolis sampler for the success probability of a binomial
experiment under a Beta prior.

The sampler lives in ``binomial_mh.mcmc.metropolis``; the YAML-driven run
driver and CLI sit on top of it and only marshal inputs and artifacts.
"""

from binomial_mh.mcmc.metropolis import MetropolisBinomialSampler, run

__all__ = ["MetropolisBinomialSampler", "run"]
