"""Tests for the output formatting system.

Covers:
- OutputFormat resolution (auto -> rich/json based on TTY)
- NO_COLOR / TERM=dumb color disabling
- stdout vs stderr discipline
- Quiet and verbose modes
- format_response in JSON and plain modes, including pydantic models
- Global instance management
"""

from __future__ import annotations

import json

import pytest
from pydantic import BaseModel, Field

from nominatim_client import output as output_module
from nominatim_client.output import (
    OutputFormat,
    OutputManager,
    _should_disable_color,
    get_output,
    reset_output,
    set_output,
)


class Place(BaseModel):
    place_id: int
    name: str = Field(alias="display_name")


# ------------------------------------------------------------------ #
# Fixtures
# ------------------------------------------------------------------ #


@pytest.fixture()
def non_tty(monkeypatch):
    """Patch stdout.isatty() to return False."""
    monkeypatch.setattr("nominatim_client.output._is_tty", lambda: False)


@pytest.fixture()
def tty(monkeypatch):
    """Patch stdout.isatty() to return True."""
    monkeypatch.setattr("nominatim_client.output._is_tty", lambda: True)


# ------------------------------------------------------------------ #
# OutputFormat resolution
# ------------------------------------------------------------------ #


class TestOutputFormatResolution:
    def test_auto_resolves_to_json_when_not_tty(self, non_tty):
        assert OutputManager(format=OutputFormat.AUTO).format == OutputFormat.JSON

    def test_auto_resolves_to_rich_when_tty(self, tty, monkeypatch):
        monkeypatch.delenv("NO_COLOR", raising=False)
        monkeypatch.delenv("TERM", raising=False)
        assert OutputManager(format=OutputFormat.AUTO).format == OutputFormat.RICH

    def test_auto_with_no_color_is_json(self, tty):
        assert OutputManager(format=OutputFormat.AUTO, no_color=True).format == OutputFormat.JSON

    def test_explicit_format_kept(self, tty):
        assert OutputManager(format=OutputFormat.PLAIN).format == OutputFormat.PLAIN


class TestColorDisabling:
    def test_no_color_env(self, monkeypatch):
        monkeypatch.setenv("NO_COLOR", "")
        assert _should_disable_color() is True

    def test_term_dumb(self, monkeypatch):
        monkeypatch.delenv("NO_COLOR", raising=False)
        monkeypatch.setenv("TERM", "dumb")
        assert _should_disable_color() is True

    def test_colour_allowed(self, monkeypatch):
        monkeypatch.delenv("NO_COLOR", raising=False)
        monkeypatch.setenv("TERM", "xterm-256color")
        assert _should_disable_color() is False


# ------------------------------------------------------------------ #
# Data output
# ------------------------------------------------------------------ #


class TestFormatResponse:
    def test_json_dict(self, capsys):
        OutputManager(format=OutputFormat.JSON).format_response({"name": "Berlin"})
        out = capsys.readouterr()
        assert json.loads(out.out) == {"name": "Berlin"}
        assert out.err == ""

    def test_json_keeps_unicode(self, capsys):
        OutputManager(format=OutputFormat.JSON).format_response({"name": "Straße"})
        assert "Straße" in capsys.readouterr().out

    def test_json_model_list_dumped_by_field_name(self, capsys):
        places = [Place(place_id=1, display_name="Berlin")]
        OutputManager(format=OutputFormat.JSON).format_response(places)
        assert json.loads(capsys.readouterr().out) == [{"place_id": 1, "name": "Berlin"}]

    def test_plain_dict(self, capsys):
        OutputManager(format=OutputFormat.PLAIN).format_response({"a": 1, "b": "x"})
        assert capsys.readouterr().out == "a\t1\nb\tx\n"

    def test_plain_list_of_dicts(self, capsys):
        OutputManager(format=OutputFormat.PLAIN).format_response([{"id": 1, "n": "a"}, {"id": 2, "n": "b"}])
        assert capsys.readouterr().out == "1\ta\n2\tb\n"

    def test_plain_scalar(self, capsys):
        OutputManager(format=OutputFormat.PLAIN).format_response(42)
        assert capsys.readouterr().out == "42\n"


# ------------------------------------------------------------------ #
# Diagnostics
# ------------------------------------------------------------------ #


class TestDiagnostics:
    def test_info_goes_to_stderr(self, capsys):
        OutputManager(format=OutputFormat.JSON, no_color=True).info("hello")
        out = capsys.readouterr()
        assert out.out == ""
        assert out.err == "hello\n"

    def test_quiet_suppresses_info_and_success(self, capsys):
        mgr = OutputManager(format=OutputFormat.JSON, no_color=True, quiet=True)
        mgr.info("hidden")
        mgr.success("hidden")
        assert capsys.readouterr().err == ""

    def test_quiet_keeps_errors_and_warnings(self, capsys):
        mgr = OutputManager(format=OutputFormat.JSON, no_color=True, quiet=True)
        mgr.warning("careful")
        mgr.error("broken")
        assert capsys.readouterr().err == "Warning: careful\nError: broken\n"

    def test_debug_only_when_verbose(self, capsys):
        OutputManager(format=OutputFormat.JSON, no_color=True).debug("nope")
        OutputManager(format=OutputFormat.JSON, no_color=True, verbose=True).debug("yes")
        assert capsys.readouterr().err == "[debug] yes\n"


# ------------------------------------------------------------------ #
# Global instance
# ------------------------------------------------------------------ #


class TestGlobalOutput:
    def test_get_output_creates_default(self):
        reset_output()
        assert isinstance(get_output(), OutputManager)
        assert get_output() is get_output()

    def test_set_output(self):
        mgr = OutputManager(format=OutputFormat.PLAIN)
        set_output(mgr)
        assert get_output() is mgr

    def test_convenience_functions_delegate(self, capsys):
        set_output(OutputManager(format=OutputFormat.JSON, no_color=True))
        output_module.print_data("data")
        output_module.error("bad")
        out = capsys.readouterr()
        assert out.out == "data\n"
        assert out.err == "Error: bad\n"
