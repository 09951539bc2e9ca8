#!/usr/bin/env python

import sys

from rich.markup import escape
from rich.panel import Panel

from .theme import create_console, resolve_palette


class UIManager:
    """Diagnostics go to stderr through Rich; the command itself is written plainly to stdout"""

    def __init__(self, config=None, out=None):
        self.palette = resolve_palette(config)
        self.console = create_console(config)
        self.out = out or sys.stdout

    def show_usage(self):
        """Display usage information"""
        self.console.print("[error]Error: No command description provided.[/error]")
        self.console.print("Usage: [accent]uwu[/accent] [accent_alt]<command description>[/accent_alt]")

    def show_error(self, error_message, hint=None):
        """Display error message"""
        # Exception text can contain brackets, e.g. "[Errno 111]"
        text = f"[error]{escape(error_message)}[/error]"
        if hint:
            text += f"\n[muted]{escape(hint)}[/muted]"
        panel = Panel(
            text,
            title="Error",
            title_align="left",
            border_style=self.palette["error"]
        )
        self.console.print(panel)

    def show_command(self, command):
        # No markup or wrapping: the output is meant to be piped or eval'd
        self.out.write(command + "\n")
        self.out.flush()
