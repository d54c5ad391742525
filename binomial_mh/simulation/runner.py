"""
End-to-end driver for a single sampler run.

Pipeline:
1) Load the YAML config and apply CLI overrides.
2) Build the Beta prior and the Metropolis sampler.
3) Sample one chain for the configured (successes, trials).
4) Summarize against the conjugate posterior.
5) Emit chain.csv, summary.csv and manifest.json under out_dir.
"""

from __future__ import annotations

import hashlib
import json
import logging
import time
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Optional

import yaml

from binomial_mh.diagnostics.chain_summary import summarize_chain
from binomial_mh.errors import InvalidArgument
from binomial_mh.mcmc.metropolis import DEFAULT_PROPOSAL_SCALE, ChainResult, MetropolisBinomialSampler
from binomial_mh.priors.beta_prior import BetaPrior

DEFAULTS: Dict[str, Dict[str, Any]] = {
    "sampler": {"sample_count": 10000, "proposal_scale": DEFAULT_PROPOSAL_SCALE, "seed": None},
    "observation": {"successes": 4, "trials": 10},
    "prior": {"alpha": 1.0, "beta": 1.0},
    "summary": {"burn_in_fraction": 0.5},
    "logging": {"level": "INFO"},
}


@dataclass
class RunConfig:
    cfg_path: Optional[str]
    out_dir: str
    sample_count: Optional[int] = None
    successes: Optional[int] = None
    trials: Optional[int] = None
    proposal_scale: Optional[float] = None
    seed: Optional[int] = None


def load_run_config(path: Optional[str]) -> Dict[str, Any]:
    """Read a run config YAML; missing sections fall back to DEFAULTS."""

    raw: Dict[str, Any] = {}
    if path is not None:
        with open(path, "r", encoding="utf-8") as f:
            raw = yaml.safe_load(f) or {}
        if not isinstance(raw, dict):
            raise InvalidArgument("cfg_path", "config root must be a mapping", data={"path": path})

    cfg: Dict[str, Dict[str, Any]] = {}
    for section, defaults in DEFAULTS.items():
        given = raw.get(section) or {}
        if not isinstance(given, dict):
            raise InvalidArgument(section, "config section must be a mapping", data={"path": path})
        cfg[section] = {**defaults, **given}
    return cfg


def stable_config_hash(cfg: Dict) -> str:
    """Deterministic hash for config snapshots."""

    payload = json.dumps(cfg, sort_keys=True, default=str).encode("utf-8")
    return hashlib.sha256(payload).hexdigest()


class SamplerRunner:
    def __init__(self, run_cfg: RunConfig):
        self.run_cfg = run_cfg
        self.cfg = load_run_config(run_cfg.cfg_path)
        self._apply_overrides()

        self.log = logging.getLogger("binomial_mh")
        level = str(self.cfg["logging"].get("level", "INFO")).upper()
        self.log.setLevel(getattr(logging, level, logging.INFO))
        ch = logging.StreamHandler()
        ch.setFormatter(logging.Formatter("%(asctime)s %(levelname)s %(message)s"))
        if not self.log.handlers:
            self.log.addHandler(ch)

        Path(run_cfg.out_dir).mkdir(parents=True, exist_ok=True)

    def _apply_overrides(self) -> None:
        rc = self.run_cfg
        overrides = {
            ("sampler", "sample_count"): rc.sample_count,
            ("sampler", "proposal_scale"): rc.proposal_scale,
            ("sampler", "seed"): rc.seed,
            ("observation", "successes"): rc.successes,
            ("observation", "trials"): rc.trials,
        }
        for (section, key), value in overrides.items():
            if value is not None:
                self.cfg[section][key] = value

    def _build_sampler(self) -> MetropolisBinomialSampler:
        prior_cfg = self.cfg["prior"]
        sampler_cfg = self.cfg["sampler"]
        prior = BetaPrior(alpha=float(prior_cfg["alpha"]), beta=float(prior_cfg["beta"]))
        return MetropolisBinomialSampler(
            proposal_scale=sampler_cfg["proposal_scale"],
            prior=prior,
            seed=sampler_cfg.get("seed"),
            logger=self.log,
        )

    def run(self) -> ChainResult:
        run_start = time.time()
        sampler_cfg = self.cfg["sampler"]
        obs_cfg = self.cfg["observation"]
        self.log.info(
            "Sampler run start (sample_count=%s, successes=%s, trials=%s, out_dir=%s)",
            sampler_cfg["sample_count"],
            obs_cfg["successes"],
            obs_cfg["trials"],
            self.run_cfg.out_dir,
        )

        sampler = self._build_sampler()
        result = sampler.sample(sampler_cfg["sample_count"], obs_cfg["successes"], obs_cfg["trials"])
        summary = summarize_chain(
            result,
            burn_in_fraction=float(self.cfg["summary"]["burn_in_fraction"]),
            prior=sampler.prior,
        )
        row = summary.iloc[0].to_dict()
        self.log.info(
            "Posterior mean %.4f (analytic %.4f, abs error %.4f, acceptance %.3f)",
            row["posterior_mean"],
            row["analytic_mean"],
            row["abs_error_mean"],
            row["acceptance_rate"],
        )

        out_dir = Path(self.run_cfg.out_dir)
        result.to_frame().to_csv(out_dir / "chain.csv", index=False)
        summary.to_csv(out_dir / "summary.csv", index=False)
        manifest = {
            "config": self.cfg,
            "config_hash": stable_config_hash(self.cfg),
            "summary": {k: (v.item() if hasattr(v, "item") else v) for k, v in row.items()},
            "elapsed_seconds": time.time() - run_start,
        }
        with open(out_dir / "manifest.json", "w", encoding="utf-8") as f:
            json.dump(manifest, f, indent=2, default=str)

        self.log.info(
            "Sampler run complete. Outputs stored under %s (total_elapsed=%.2fs)",
            self.run_cfg.out_dir,
            time.time() - run_start,
        )
        return result
