#!/usr/bin/env python

"""
Console styling for uwu diagnostics.

Only stderr output is styled; the generated command is printed plain.
Colors can be overridden under the 'theme' key of config.yaml.
"""

from rich.console import Console
from rich.theme import Theme

# Style names used in markup across uwu
PALETTE = {
    "accent": "#0066cc",
    "accent_alt": "#00cc66",
    "muted": "#555555",
    "error": "#ff5555",
}


def resolve_palette(config: dict | None = None) -> dict:
    """Default palette with any validated 'theme' overrides applied"""
    palette = dict(PALETTE)
    palette.update((config or {}).get("theme") or {})
    return palette


def create_console(config: dict | None = None, **kwargs) -> Console:
    """Rich console on stderr using the uwu palette"""
    kwargs.setdefault("stderr", True)
    return Console(theme=Theme(resolve_palette(config)), **kwargs)
