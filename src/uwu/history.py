#!/usr/bin/env python

"""
Shell history extraction for the recent-commands prompt context.

Finds the active shell's history file, reads only its tail (history files can
grow to tens of MB), and normalizes zsh, bash, fish and PowerShell formats into
an ordered list of commands, oldest first.

History is optional enrichment: every failure path ends in "no history",
never in an exception.
"""

import os
import re
import sys
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Callable, Dict, List, Mapping, Optional, Sequence, Tuple

from .constants import (
    DEFAULT_CONTEXT_CONFIG, DEFAULT_MAX_HISTORY_COMMANDS,
    HISTORY_CHUNK_SIZE, HISTORY_READ_FACTOR,
)
from .logger import get_logger

log = get_logger("history")


class ShellFamily(Enum):
    ZSH = "zsh"
    BASH = "bash"
    FISH = "fish"
    POWERSHELL = "powershell"
    UNKNOWN = "unknown"


# Default history locations relative to the home directory
FISH_LINUX_PATH = (".local", "share", "fish", "fish_history")
FISH_MACOS_PATH = ("Library", "Application Support", "fish", "fish_history")

DEFAULT_HISTORY_PATHS: Dict[ShellFamily, Tuple[Tuple[str, ...], ...]] = {
    ShellFamily.ZSH: ((".zsh_history",),),
    ShellFamily.BASH: ((".bash_history",),),
    # macOS location first, Linux location is the fallback
    ShellFamily.FISH: (FISH_MACOS_PATH, FISH_LINUX_PATH),
    # pwsh outside Windows
    ShellFamily.POWERSHELL: ((".local", "share", "powershell", "PSReadLine", "ConsoleHost_history.txt"),),
}

# Tried in order when the shell is unknown or its default file is missing
FALLBACK_HISTORY_PATHS: Tuple[Tuple[ShellFamily, Tuple[str, ...]], ...] = (
    (ShellFamily.ZSH, (".zsh_history",)),
    (ShellFamily.BASH, (".bash_history",)),
    (ShellFamily.FISH, FISH_LINUX_PATH),
    (ShellFamily.FISH, FISH_MACOS_PATH),
)

# PSReadLine history, relative to %APPDATA%: Windows PowerShell 5.x, then PowerShell 7+
POWERSHELL_HISTORY_PATHS: Tuple[Tuple[str, ...], ...] = (
    ("Microsoft", "Windows", "PowerShell", "PSReadLine", "ConsoleHost_history.txt"),
    ("Microsoft", "PowerShell", "PSReadLine", "ConsoleHost_history.txt"),
)

# Shells that honour $HISTFILE
HISTFILE_SHELLS = {ShellFamily.ZSH, ShellFamily.BASH}


@dataclass(frozen=True)
class HistorySource:
    """A located history file and the shell family whose format it uses"""
    family: ShellFamily
    path: Path

    @property
    def parser(self) -> Callable[[Sequence[str]], List[str]]:
        return PARSERS.get(self.family, parse_plain)


def classify_shell(shell: Optional[str]) -> ShellFamily:
    """Map the value of $SHELL (or any shell name) to a shell family"""
    name = (shell or "").lower()
    for family in (ShellFamily.ZSH, ShellFamily.BASH, ShellFamily.FISH):
        if family.value in name:
            return family
    if "pwsh" in name or "powershell" in name:
        return ShellFamily.POWERSHELL
    return ShellFamily.UNKNOWN


def is_windows(platform: Optional[str] = None) -> bool:
    return (platform or sys.platform).startswith(("win", "cygwin"))


def candidate_paths(family: ShellFamily, home: Path, environ: Mapping[str, str]) -> List[Path]:
    """Ordered candidate history files for a shell family, before any existence checks"""
    if family in HISTFILE_SHELLS and environ.get("HISTFILE"):
        # A user-set HISTFILE replaces the default instead of adding to it
        return [Path(environ["HISTFILE"]).expanduser()]
    return [home.joinpath(*parts) for parts in DEFAULT_HISTORY_PATHS.get(family, ())]


def locate(
    environ: Optional[Mapping[str, str]] = None,
    home: Optional[Path] = None,
    platform: Optional[str] = None,
    exists: Callable[[Path], bool] = os.path.exists,
) -> Optional[HistorySource]:
    """Find the history file of the active shell.

    Returns None when no known or fallback history file exists.
    """
    environ = os.environ if environ is None else environ
    home = Path.home() if home is None else Path(home)

    if is_windows(platform):
        appdata = environ.get("APPDATA")
        if appdata:
            for parts in POWERSHELL_HISTORY_PATHS:
                path = Path(appdata).joinpath(*parts)
                if exists(path):
                    return HistorySource(ShellFamily.POWERSHELL, path)

    family = classify_shell(environ.get("SHELL"))
    candidates = candidate_paths(family, home, environ)
    if family is ShellFamily.FISH:
        # The Linux path is used when the macOS one is absent
        macos_path, linux_path = candidates
        candidates = [macos_path if exists(macos_path) else linux_path]
    for path in candidates:
        if exists(path):
            return HistorySource(family, path)
        log.debug("History file for %s not found at %s", family.value, path)

    for fallback_family, parts in FALLBACK_HISTORY_PATHS:
        path = home.joinpath(*parts)
        if exists(path):
            return HistorySource(fallback_family, path)

    log.debug("No shell history file found")
    return None


def _complete_lines(window: bytes) -> int:
    """Non-blank lines in a window read from the middle of a file; the first piece may be partial"""
    return sum(1 for line in window.split(b"\n")[1:] if line.strip())


def read_tail(path, max_lines: int, chunk_size: int = HISTORY_CHUNK_SIZE) -> List[str]:
    """Return the last max_lines non-blank lines of a file without reading all of it.

    Chunks are read backward from the end until the window holds max_lines
    non-blank lines after its first newline, so blank lines never count toward
    the total. I/O errors yield an empty list.
    """
    if max_lines <= 0:
        return []

    try:
        with open(path, "rb") as f:
            size = os.fstat(f.fileno()).st_size
            if size == 0:
                return []

            position = size
            window = b""
            while position > 0 and _complete_lines(window) < max_lines:
                read_length = min(chunk_size, position)
                position -= read_length
                f.seek(position)
                window = f.read(read_length) + window
    except OSError as e:
        log.debug("Could not read history file %s: %s", path, e)
        return []

    if position > 0:
        # Window starts mid-line
        window = window[window.index(b"\n") + 1:]

    text = window.decode("utf-8", errors="replace")
    lines = [line.rstrip("\r") for line in text.split("\n") if line.strip()]
    return lines[-max_lines:]


_ZSH_ENTRY = re.compile(r"^: \d+:\d+;(.*)$")
_FISH_ENTRY = re.compile(r"^- cmd: (.*)$")
_FISH_METADATA = re.compile(r"^  (when|paths):")


def _strip_newline(line: str) -> str:
    return line.rstrip("\r\n")


def parse_zsh(lines: Sequence[str]) -> List[str]:
    """zsh EXTENDED_HISTORY: ': <start>:<elapsed>;<command>' plus continuation lines"""
    lines = [_strip_newline(line) for line in lines]
    if not any(_ZSH_ENTRY.match(line) for line in lines):
        return parse_plain(lines)

    entries: List[str] = []
    for line in lines:
        match = _ZSH_ENTRY.match(line)
        if match:
            entries.append(match.group(1))
        elif line.startswith(":"):
            entries.append(line)
        elif entries:
            entries[-1] += "\n" + line
        # else: tail of an entry that started before the read window
    return entries


def parse_fish(lines: Sequence[str]) -> List[str]:
    """fish YAML-like history: '- cmd: <command>' with two-space indented continuations"""
    entries: List[str] = []
    in_entry = False
    in_metadata = False
    for line in lines:
        line = _strip_newline(line)
        match = _FISH_ENTRY.match(line)
        if match:
            entries.append(match.group(1))
            in_entry, in_metadata = True, False
        elif in_entry and line.startswith("  "):
            if in_metadata or _FISH_METADATA.match(line):
                # when: / paths: and the path items under them
                in_metadata = True
                continue
            entries[-1] += "\n" + line[2:]
        else:
            in_entry = in_metadata = False
    return entries


def parse_powershell(lines: Sequence[str]) -> List[str]:
    """PSReadLine history: one command per line, a trailing backtick continues it"""
    entries: List[str] = []
    continued = False
    for line in lines:
        line = _strip_newline(line)
        if not line.strip() and not continued:
            continue
        if continued:
            entries[-1] += "\n" + line
        else:
            entries.append(line)
        continued = line.endswith("`")
    return entries


def parse_plain(lines: Sequence[str]) -> List[str]:
    """bash and unknown shells: one command per line, '#' timestamp lines skipped"""
    entries = []
    for line in lines:
        line = _strip_newline(line)
        if not line.strip() or line.startswith("#"):
            continue
        entries.append(line)
    return entries


PARSERS: Dict[ShellFamily, Callable[[Sequence[str]], List[str]]] = {
    ShellFamily.ZSH: parse_zsh,
    ShellFamily.FISH: parse_fish,
    ShellFamily.POWERSHELL: parse_powershell,
    ShellFamily.BASH: parse_plain,
    ShellFamily.UNKNOWN: parse_plain,
}


def parse(raw_lines: Sequence[str], source: HistorySource, max_lines: int = DEFAULT_MAX_HISTORY_COMMANDS) -> List[str]:
    """Turn raw history lines into the last max_lines commands, oldest first"""
    if max_lines <= 0:
        return []
    return source.parser(raw_lines)[-max_lines:]


def recent_commands(
    max_commands: int = DEFAULT_MAX_HISTORY_COMMANDS,
    raw: bool = False,
    source: Optional[HistorySource] = None,
) -> List[str]:
    """Most recent commands from the user's shell history.

    The default mode parses the history format so multi-line commands come back
    as single entries. With raw=True the last lines of the file are returned as-is.
    """
    if source is None:
        source = locate()
    if source is None:
        return []

    if raw:
        return read_tail(source.path, max_commands)

    raw_lines = read_tail(source.path, max_commands * HISTORY_READ_FACTOR)
    commands = parse(raw_lines, source, max_commands)
    log.debug("Read %d commands from %s history at %s", len(commands), source.family.value, source.path)
    return commands


def build_context_history(context_config: Optional[Mapping] = None, source: Optional[HistorySource] = None) -> str:
    """Render the recent-commands block for the system prompt, or "" when disabled or empty"""
    context_config = {**DEFAULT_CONTEXT_CONFIG, **(context_config or {})}
    if context_config["enabled"] is not True:
        return ""

    max_commands = context_config["max_history_commands"] or DEFAULT_MAX_HISTORY_COMMANDS
    commands = recent_commands(max_commands, raw=bool(context_config["raw_history"]), source=source)
    if not commands:
        return ""

    history_context = "\n--- RECENT COMMANDS ---\n"
    history_context += "Recent shell commands (most recent last):\n"
    for idx, cmd in enumerate(commands, start=1):
        history_context += f"{idx}. {cmd}\n"
    history_context += "--- END COMMAND HISTORY ---\n"
    return history_context
