"""
/**
 * @file summarizer/services/poll_policy_service.py
 * @description 轮询策略：尝试次数、固定/指数退避、抖动、网络错误重试次数。
 */
"""

from __future__ import annotations

import random
from dataclasses import dataclass
from typing import Callable, Optional

from summarizer.config import Settings, load_settings
from summarizer.services.errors import ConfigurationError


STRATEGIES = ("fixed", "exponential")


@dataclass(frozen=True)
class PollPolicy:
    max_attempts: int = 30
    interval: float = 1.0
    strategy: str = "fixed"
    multiplier: float = 2.0
    max_interval: float = 30.0
    jitter: float = 0.0
    transport_retries: int = 0

    def __post_init__(self):
        if not isinstance(self.max_attempts, int) or self.max_attempts < 1:
            raise ConfigurationError(f"max_attempts must be a positive integer, got {self.max_attempts!r}")
        if self.interval < 0:
            raise ConfigurationError(f"interval must not be negative, got {self.interval!r}")
        if self.strategy not in STRATEGIES:
            raise ConfigurationError(f"Unknown backoff strategy: {self.strategy!r}")
        if self.multiplier < 1:
            raise ConfigurationError(f"multiplier must be >= 1, got {self.multiplier!r}")
        if not 0 <= self.jitter <= 1:
            raise ConfigurationError(f"jitter must be between 0 and 1, got {self.jitter!r}")
        if not isinstance(self.transport_retries, int) or self.transport_retries < 0:
            raise ConfigurationError(f"transport_retries must be >= 0, got {self.transport_retries!r}")

    def delay(self, attempt: int, rng: Optional[Callable[[float, float], float]] = None) -> float:
        """Seconds to wait after the ``attempt``-th (0-based) non-terminal status."""
        if self.strategy == "exponential":
            base = self.interval
            # grow step by step so a large attempt index never overflows the power
            for _ in range(attempt):
                if base >= self.max_interval:
                    break
                base *= self.multiplier
            base = min(base, self.max_interval)
        else:
            base = self.interval
        if self.jitter:
            uniform = rng or random.uniform
            base += uniform(0, base * self.jitter)
        return base

    @classmethod
    def from_settings(cls, settings: Optional[Settings] = None) -> "PollPolicy":
        s = settings or load_settings()
        cfg = s.polling
        try:
            return cls(
                max_attempts=int(cfg.get("max_attempts", 30)),
                interval=float(cfg.get("interval_seconds", 1.0)),
                strategy=str(cfg.get("strategy", "fixed")),
                multiplier=float(cfg.get("multiplier", 2.0)),
                max_interval=float(cfg.get("max_interval_seconds", 30.0)),
                jitter=float(cfg.get("jitter", 0.0)),
                transport_retries=int(cfg.get("transport_retries", 0)),
            )
        except (TypeError, ValueError) as e:
            raise ConfigurationError(f"Invalid polling configuration: {e}")
