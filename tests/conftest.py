"""Shared test fixtures for nominatim_client.

Provides a controllable clock for cache expiry tests, an isolated config
environment, and automatic reset of the global output manager. These
fixtures are discovered by pytest and available to every test module.
"""

from __future__ import annotations

from pathlib import Path

import pytest

from nominatim_client.output import reset_output


class FakeClock:
    """Monotonic clock that only moves when told to."""

    def __init__(self, start: float = 1000.0) -> None:
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


# ---------------------------------------------------------------------------
# Auto-reset global output state between tests
# ---------------------------------------------------------------------------


@pytest.fixture(autouse=True)
def _reset_output_between_tests() -> None:
    """Reset the global OutputManager after every test.

    The OutputManager caches references to sys.stdout/sys.stderr at
    creation time; Typer's CliRunner swaps those streams per invocation.
    """
    yield
    reset_output()


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def isolated_config(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Point config and data directories at *tmp_path* and clear env overrides.

    Returns:
        The directory that will hold ``config.json``.
    """
    monkeypatch.setattr("nominatim_client.config._is_xdg_platform", lambda: True)
    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path / "config"))
    monkeypatch.setenv("XDG_DATA_HOME", str(tmp_path / "data"))
    monkeypatch.delenv("NOMINATIM_CLIENT_PRODUCT_NAME", raising=False)
    monkeypatch.delenv("NOMINATIM_CLIENT_NO_CACHE", raising=False)
    return tmp_path / "config" / "nominatim-client"
