"""Pytest configuration and fixtures for cratepure tests."""
import logging
from pathlib import Path

import pytest


def pytest_sessionfinish(session, exitstatus):
    """Fail the run when --cov was requested but no coverage data was collected."""
    cov_enabled = any("--cov" in str(arg) for arg in session.config.args)

    if not cov_enabled:
        return

    coverage_files = list(Path.cwd().glob(".coverage*"))

    if not coverage_files:
        pytest.exit(
            "Coverage was enabled but no data was collected. "
            "Check that tests import from 'cratepure' (the package) not 'src/cratepure' (filesystem path).",
            returncode=1
        )


@pytest.fixture(autouse=True)
def _isolate_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep host configuration out of CLI tests."""
    monkeypatch.delenv("CRATEPURE_POLICY", raising=False)
    monkeypatch.delenv("CRATEPURE_CARGO", raising=False)


@pytest.fixture(autouse=True)
def _reset_cratepure_logger():
    """Drop handlers and level set by CLI runs so they do not leak between tests."""
    yield
    logger = logging.getLogger("cratepure")
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
    logger.setLevel(logging.NOTSET)
    logger.propagate = True
