"""
Timestamped console logging for the CLI and batch generation.

- One line per message on stderr, prefixed with local time.
- `quiet=True` silences everything (stdout carries the JSON result).
- BatchProgress reports generated puzzles against the batch size, throttled
  by count and by elapsed seconds.
"""

from __future__ import annotations

import sys
import time
from dataclasses import dataclass


def ts() -> str:
    return time.strftime("%Y-%m-%d %H:%M:%S")


def log(msg: str, *, quiet: bool = False) -> None:
    if not quiet:
        print(f"[{ts()}] {msg}", file=sys.stderr, flush=True)


@dataclass
class ProgressConfig:
    log_every: int  # puzzles; 0 = only by time
    log_every_secs: float


class BatchProgress:
    def __init__(self, cfg: ProgressConfig, total: int, *, quiet: bool = False) -> None:
        self.cfg = cfg
        self.total = total
        self.quiet = quiet
        self.steps = 0
        self._t0 = time.time()
        self._t_last = self._t0

    def update(self, done: int, steps: int = 0) -> None:
        """Count one finished puzzle and the solver steps it took; log when due."""
        self.steps += steps
        now = time.time()
        due = (self.cfg.log_every > 0 and done % self.cfg.log_every == 0) or done == self.total
        if not due and (now - self._t_last) < self.cfg.log_every_secs:
            return
        self._t_last = now
        elapsed = now - self._t0
        rate = done / elapsed if elapsed > 0 else 0.0
        log(
            f"generated {done}/{self.total} puzzles, {self.steps:,} solver steps, {elapsed:.1f}s ({rate:.1f}/s)",
            quiet=self.quiet,
        )
