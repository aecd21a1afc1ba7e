"""Shared pytest fixtures and test helpers for threeway tests."""

from __future__ import annotations

import functools
import logging
from collections.abc import Callable, Generator
from pathlib import Path
from typing import Any

import pytest
from click.testing import CliRunner

from threeway.config.logging import LOGGER_NAMESPACE
from threeway.config.settings import ThreewaySettings
from threeway.domain.counting import ComparisonCounter, CountingInt
from threeway.services.telemetry import enable_telemetry


@pytest.fixture
def cli_runner() -> CliRunner:
    """Provide a Click CLI test runner."""
    return CliRunner()


@pytest.fixture(autouse=True)
def _isolated_environment(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch
) -> Generator[None]:
    """Run every test from an empty directory with no config env vars.

    Also restores the threeway logger and the telemetry switch, which the
    CLI reconfigures on every invocation.
    """
    monkeypatch.chdir(tmp_path)
    monkeypatch.delenv("THREEWAY_CONFIG", raising=False)
    logger = logging.getLogger(LOGGER_NAMESPACE)
    handlers, level, propagate = logger.handlers[:], logger.level, logger.propagate
    yield
    logger.handlers[:] = handlers
    logger.setLevel(level)
    logger.propagate = propagate
    enable_telemetry(False)


@pytest.fixture
def settings(tmp_path: Path) -> ThreewaySettings:
    """Default settings with no config file."""
    return ThreewaySettings.from_cli(start=tmp_path)


@pytest.fixture
def counter() -> ComparisonCounter:
    return ComparisonCounter()


@pytest.fixture
def counting_leaf(counter: ComparisonCounter) -> Callable[[], Any]:
    """Zero-value constructor for CountingInt bound to the shared counter."""
    return functools.partial(CountingInt, counter=counter)
