"""Tests for the output system.

Covers:
- DisplayMode resolution (auto -> rich/plain based on TTY)
- NO_COLOR / TERM=dumb color disabling
- stdout vs stderr discipline
- Quiet mode suppression rules
- Verbose mode debug output
- Resource printing (verbatim in plain mode, highlighted in rich mode)
- Global instance management
- Convenience functions
"""

from __future__ import annotations

import pytest

from openapi_explorer import output as output_module
from openapi_explorer.output import (
    DisplayMode,
    OutputManager,
    _should_disable_color,
    get_output,
    reset_output,
    set_output,
)


# ------------------------------------------------------------------ #
# Fixtures
# ------------------------------------------------------------------ #


@pytest.fixture(autouse=True)
def _reset_global_output():
    """Ensure the global output instance is reset between tests."""
    reset_output()
    yield
    reset_output()


@pytest.fixture()
def non_tty(monkeypatch):
    """Patch stdout.isatty() to return False."""
    monkeypatch.setattr("openapi_explorer.output._is_tty", lambda: False)


@pytest.fixture()
def tty(monkeypatch):
    """Patch stdout.isatty() to return True."""
    monkeypatch.setattr("openapi_explorer.output._is_tty", lambda: True)


# ------------------------------------------------------------------ #
# DisplayMode resolution
# ------------------------------------------------------------------ #


class TestDisplayModeResolution:
    """Test that AUTO mode resolves correctly based on environment."""

    def test_auto_resolves_to_plain_when_not_tty(self, non_tty):
        mgr = OutputManager(mode=DisplayMode.AUTO)
        assert mgr.mode == DisplayMode.PLAIN

    def test_auto_resolves_to_rich_when_tty(self, tty, monkeypatch):
        monkeypatch.delenv("NO_COLOR", raising=False)
        monkeypatch.delenv("TERM", raising=False)
        mgr = OutputManager(mode=DisplayMode.AUTO)
        assert mgr.mode == DisplayMode.RICH

    def test_auto_resolves_to_plain_when_tty_but_no_color(self, tty, monkeypatch):
        monkeypatch.setenv("NO_COLOR", "1")
        mgr = OutputManager(mode=DisplayMode.AUTO)
        assert mgr.mode == DisplayMode.PLAIN

    def test_explicit_plain_stays_plain(self, tty, monkeypatch):
        monkeypatch.delenv("NO_COLOR", raising=False)
        mgr = OutputManager(mode=DisplayMode.PLAIN)
        assert mgr.mode == DisplayMode.PLAIN

    def test_explicit_rich_stays_rich(self, non_tty):
        mgr = OutputManager(mode=DisplayMode.RICH)
        assert mgr.mode == DisplayMode.RICH


# ------------------------------------------------------------------ #
# NO_COLOR / TERM=dumb detection
# ------------------------------------------------------------------ #


class TestColorDisabling:
    """Test that NO_COLOR and TERM=dumb are respected."""

    def test_no_color_env_any_value(self, monkeypatch):
        monkeypatch.setenv("NO_COLOR", "")
        assert _should_disable_color() is True

    def test_term_dumb_disables_color(self, monkeypatch):
        monkeypatch.delenv("NO_COLOR", raising=False)
        monkeypatch.setenv("TERM", "dumb")
        assert _should_disable_color() is True

    def test_normal_term_keeps_color(self, monkeypatch):
        monkeypatch.delenv("NO_COLOR", raising=False)
        monkeypatch.setenv("TERM", "xterm-256color")
        assert _should_disable_color() is False

    def test_no_color_flag_overrides(self, tty, monkeypatch):
        monkeypatch.delenv("NO_COLOR", raising=False)
        monkeypatch.delenv("TERM", raising=False)
        mgr = OutputManager(mode=DisplayMode.AUTO, no_color=True)
        assert mgr.mode == DisplayMode.PLAIN


# ------------------------------------------------------------------ #
# stdout vs stderr discipline
# ------------------------------------------------------------------ #


class TestStdoutStderrDiscipline:
    """Test that data goes to stdout and diagnostics go to stderr."""

    def test_print_data_goes_to_stdout(self, capfd, non_tty):
        mgr = OutputManager(mode=DisplayMode.PLAIN, no_color=True)
        mgr.print_data("hello world")
        captured = capfd.readouterr()
        assert captured.out == "hello world\n"
        assert captured.err == ""

    def test_print_data_keeps_existing_newline(self, capfd, non_tty):
        mgr = OutputManager(mode=DisplayMode.PLAIN, no_color=True)
        mgr.print_data("title: x\n")
        assert capfd.readouterr().out == "title: x\n"

    @pytest.mark.parametrize("method", ["info", "error", "debug"])
    def test_diagnostics_go_to_stderr(self, capfd, non_tty, method):
        mgr = OutputManager(mode=DisplayMode.PLAIN, no_color=True, verbose=True)
        getattr(mgr, method)("diagnostic text")
        captured = capfd.readouterr()
        assert captured.out == ""
        assert "diagnostic text" in captured.err

    def test_error_is_prefixed(self, capfd, non_tty):
        mgr = OutputManager(mode=DisplayMode.PLAIN, no_color=True)
        mgr.error("something broke")
        assert capfd.readouterr().err == "Error: something broke\n"


# ------------------------------------------------------------------ #
# Quiet / verbose
# ------------------------------------------------------------------ #


class TestQuietAndVerbose:
    """Test suppression rules."""

    def test_quiet_suppresses_info(self, capfd, non_tty):
        mgr = OutputManager(mode=DisplayMode.PLAIN, no_color=True, quiet=True)
        mgr.info("info")
        assert capfd.readouterr().err == ""

    def test_quiet_keeps_errors(self, capfd, non_tty):
        mgr = OutputManager(mode=DisplayMode.PLAIN, no_color=True, quiet=True)
        mgr.error("broken")
        assert capfd.readouterr().err == "Error: broken\n"

    def test_debug_hidden_without_verbose(self, capfd, non_tty):
        mgr = OutputManager(mode=DisplayMode.PLAIN, no_color=True)
        mgr.debug("hidden")
        assert capfd.readouterr().err == ""

    def test_debug_shown_with_verbose(self, capfd, non_tty):
        mgr = OutputManager(mode=DisplayMode.PLAIN, no_color=True, verbose=True)
        mgr.debug("Resolving openapi://info")
        assert capfd.readouterr().err == "[debug] Resolving openapi://info\n"

    def test_flags_are_exposed(self, non_tty):
        mgr = OutputManager(quiet=True, verbose=True)
        assert mgr.is_quiet and mgr.is_verbose


class TestMarkupEscaping:
    """Interpolated text is printed literally, never parsed as Rich markup."""

    @pytest.fixture()
    def colour(self, monkeypatch):
        monkeypatch.delenv("NO_COLOR", raising=False)
        monkeypatch.setenv("TERM", "xterm-256color")

    @pytest.mark.parametrize("method", ["info", "error", "debug"])
    def test_stray_closing_tag(self, capfd, colour, method):
        mgr = OutputManager(verbose=True)
        getattr(mgr, method)("Failed to resolve openapi://bogus/[/x]/y")
        assert "openapi://bogus/[/x]/y" in capfd.readouterr().err

    def test_bracketed_title(self, capfd, colour):
        mgr = OutputManager()
        mgr.info("Loaded OpenAPI document '[bold]Pets[/bold]'")
        assert "[bold]Pets[/bold]" in capfd.readouterr().err


# ------------------------------------------------------------------ #
# Resource printing
# ------------------------------------------------------------------ #


class TestPrintResource:
    """Test how rendered resources are written to stdout."""

    def test_plain_mode_prints_verbatim(self, capfd, non_tty):
        mgr = OutputManager(mode=DisplayMode.PLAIN, no_color=True)
        mgr.print_resource('{\n  "a": 1\n}', "application/json")
        assert capfd.readouterr().out == '{\n  "a": 1\n}\n'

    def test_rich_mode_prints_text_lists_verbatim(self, capfd, non_tty):
        mgr = OutputManager(mode=DisplayMode.RICH)
        mgr.print_resource("GET POST /tasks", "text/plain")
        assert capfd.readouterr().out == "GET POST /tasks\n"

    def test_rich_mode_highlights_detail_views(self, capfd, non_tty, monkeypatch):
        monkeypatch.delenv("NO_COLOR", raising=False)
        monkeypatch.setenv("TERM", "xterm-256color")
        mgr = OutputManager(mode=DisplayMode.RICH)
        mgr.print_resource("title: Tasks\n", "text/yaml")
        out = capfd.readouterr().out
        assert "title" in out
        assert "Tasks" in out
        assert "\x1b[" in out


# ------------------------------------------------------------------ #
# Global instance
# ------------------------------------------------------------------ #


class TestGlobalInstance:
    """Test get/set/reset of the module-level manager."""

    def test_get_output_creates_default(self):
        assert isinstance(get_output(), OutputManager)
        assert get_output() is get_output()

    def test_set_output_installs_instance(self):
        mgr = OutputManager(mode=DisplayMode.PLAIN)
        set_output(mgr)
        assert get_output() is mgr

    def test_reset_output_clears_instance(self):
        mgr = OutputManager(mode=DisplayMode.PLAIN)
        set_output(mgr)
        reset_output()
        assert get_output() is not mgr

    def test_convenience_functions_delegate(self, capfd, non_tty):
        set_output(OutputManager(mode=DisplayMode.PLAIN, no_color=True, verbose=True))
        output_module.print_data("data")
        output_module.info("note")
        output_module.debug("trace")
        captured = capfd.readouterr()
        assert captured.out == "data\n"
        assert "note" in captured.err
        assert "[debug] trace" in captured.err
