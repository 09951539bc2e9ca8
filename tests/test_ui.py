#!/usr/bin/env python3
"""Unit tests for ui.py and theme.py - stderr diagnostics and the plain command line."""

import io

from uwu.theme import PALETTE, create_console, resolve_palette
from uwu.ui import UIManager


def make_ui(config=None):
    out = io.StringIO()
    ui = UIManager(config, out=out)
    ui.console = create_console(config, file=io.StringIO(), width=80, color_system=None)
    return ui, out


class TestPalette:
    """Tests for palette resolution."""

    def test_defaults(self):
        assert resolve_palette() == PALETTE
        assert resolve_palette({}) == PALETTE

    def test_override_applied(self):
        palette = resolve_palette({"theme": {"error": "bold red"}})
        assert palette["error"] == "bold red"
        assert palette["accent"] == PALETTE["accent"]

    def test_default_palette_not_mutated(self):
        resolve_palette({"theme": {"muted": "dim"}})
        assert PALETTE["muted"] == "#555555"

    def test_console_on_stderr(self):
        assert create_console().stderr is True


class TestUIManager:
    """Tests for UIManager output routing."""

    def test_command_goes_to_out_plain(self):
        ui, out = make_ui()
        ui.show_command("ls -la [abc]")
        assert out.getvalue() == "ls -la [abc]\n"
        assert ui.console.file.getvalue() == ""

    def test_error_panel_on_console(self):
        ui, out = make_ui()
        ui.show_error("Something broke", hint="Check the config")
        text = ui.console.file.getvalue()
        assert "Error" in text
        assert "Something broke" in text
        assert "Check the config" in text
        assert out.getvalue() == ""

    def test_error_with_brackets_is_not_markup(self):
        ui, _ = make_ui()
        ui.show_error("Error generating command: [Errno 111] Connection refused")
        assert "[Errno 111]" in ui.console.file.getvalue()

    def test_usage(self):
        ui, out = make_ui()
        ui.show_usage()
        text = ui.console.file.getvalue()
        assert "Usage: uwu <command description>" in text
        assert out.getvalue() == ""

    def test_theme_override_used_for_border(self):
        ui, _ = make_ui({"theme": {"error": "bold red"}})
        assert ui.palette["error"] == "bold red"
