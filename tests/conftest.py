"""Shared pytest fixtures and test-run configuration."""

from __future__ import annotations

import os

import pytest


def pytest_addoption(parser: pytest.Parser) -> None:
    """Add an opt-in flag for tests that call live GitHub/OpenAI APIs."""
    parser.addoption(
        "--run-integration",
        action="store_true",
        default=False,
        help="Run tests marked as integration (live API calls).",
    )


def pytest_collection_modifyitems(config: pytest.Config, items: list[pytest.Item]) -> None:
    """Skip integration tests unless explicitly enabled."""
    if config.getoption("--run-integration") or os.getenv("RUN_INTEGRATION_TESTS") == "1":
        return

    skip_marker = pytest.mark.skip(
        reason="Live API tests are disabled. Use --run-integration or RUN_INTEGRATION_TESTS=1."
    )
    for item in items:
        if "integration" in item.keywords:
            item.add_marker(skip_marker)
