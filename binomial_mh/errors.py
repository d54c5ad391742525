"""
Argument guards and numeric-degeneracy bookkeeping for the sampler.

Invalid input fails fast with InvalidArgument before any random draw is
consumed. Indeterminate acceptance ratios inside the chain are never raised;
they are resolved by policy and recorded on a DegeneracyLog instead.
"""

from __future__ import annotations

import logging
import numbers
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional


class InvalidArgument(ValueError):
    """Raised when a sampler or run input violates its precondition."""

    def __init__(self, argument: str, message: str, data: Optional[Dict[str, Any]] = None):
        self.argument = argument
        self.data = data or {}
        super().__init__(f"[InvalidArgument:{argument}] {message} | data={self.data}")


@dataclass
class DegeneracyRecord:
    """One resolved indeterminate acceptance ratio (NumericDegeneracy)."""

    step: int
    resolution: str  # "accept" or "reject"
    log_target_candidate: float
    log_target_current: float


@dataclass
class DegeneracyLog:
    records: List[DegeneracyRecord] = field(default_factory=list)
    logger: Optional[logging.Logger] = None

    def record(self, rec: DegeneracyRecord) -> None:
        self.records.append(rec)
        if self.logger is not None:
            self.logger.debug(
                "Numeric degeneracy at step %d resolved as %s (log f candidate=%s, current=%s)",
                rec.step,
                rec.resolution,
                rec.log_target_candidate,
                rec.log_target_current,
            )

    def __len__(self) -> int:
        return len(self.records)


def require_argument(condition: bool, argument: str, message: str, data: Optional[Dict[str, Any]] = None) -> None:
    """Fail-closed argument check."""

    if not condition:
        raise InvalidArgument(argument, message, data=data)


def require_int(value: Any, argument: str) -> int:
    """Accept Python/numpy integers only; bools and floats are rejected."""

    if isinstance(value, bool) or not isinstance(value, numbers.Integral):
        raise InvalidArgument(argument, "must be an integer", data={argument: value})
    return int(value)
