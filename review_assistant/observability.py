"""Logging setup and run telemetry."""

from __future__ import annotations

import logging
import sys
from dataclasses import dataclass

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def configure_logging(*, verbose: bool = False) -> None:
    """Route package logs to stderr, DEBUG when verbose and WARNING otherwise."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format=LOG_FORMAT,
        stream=sys.stderr,
    )
    # httpx logs every request at INFO; keep it quiet unless asked.
    logging.getLogger("httpx").setLevel(logging.INFO if verbose else logging.WARNING)


@dataclass(slots=True)
class RunTelemetry:
    """Usage and latency summary for one review run."""

    model_used: str
    prompt_tokens: int = 0
    completion_tokens: int = 0
    latency_seconds_llm: float = 0.0
    latency_seconds_e2e: float = 0.0

    @property
    def tokens_used(self) -> int:
        return self.prompt_tokens + self.completion_tokens
