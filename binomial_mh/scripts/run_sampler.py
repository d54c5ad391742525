#!/usr/bin/env python
"""
CLI entrypoint for a single Metropolis sampler run.
"""

from __future__ import annotations

import argparse
import datetime as dt
from pathlib import Path

from binomial_mh.simulation.runner import RunConfig, SamplerRunner

DEFAULT_CONFIG = str(Path(__file__).resolve().parent.parent / "config" / "default_sampler.yaml")


def parse_args(argv=None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Sample the posterior of a binomial success probability.")
    parser.add_argument("--samples", type=int, default=None, help="Chain length (default: from config).")
    parser.add_argument("--successes", type=int, default=None, help="Observed successes.")
    parser.add_argument("--trials", type=int, default=None, help="Observed trials.")
    parser.add_argument(
        "--proposal-scale",
        type=float,
        default=None,
        help="Standard deviation of the random-walk step (default: 0.16).",
    )
    parser.add_argument("--seed", type=int, default=None, help="Seed for the chain's random source.")
    parser.add_argument("--config", default=DEFAULT_CONFIG, help="Run config YAML.")
    parser.add_argument(
        "--out",
        default=None,
        help="Output directory (default: results/run_<timestamp>).",
    )
    return parser.parse_args(argv)


def main(argv=None):
    args = parse_args(argv)
    out_dir = args.out
    if out_dir is None:
        stamp = dt.datetime.now(dt.timezone.utc).strftime("%Y%m%d_%H%M%S")
        out_dir = f"results/run_{stamp}"

    run_cfg = RunConfig(
        cfg_path=args.config,
        out_dir=out_dir,
        sample_count=args.samples,
        successes=args.successes,
        trials=args.trials,
        proposal_scale=args.proposal_scale,
        seed=args.seed,
    )
    SamplerRunner(run_cfg).run()


if __name__ == "__main__":
    main()
