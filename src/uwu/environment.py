#!/usr/bin/env python

"""Facts about the host that help the model pick the right command"""

import os
import platform
import subprocess
import sys
from pathlib import Path
from typing import Optional, Tuple

from .constants import COMMAND_TIMEOUT
from .logger import get_logger

log = get_logger("environment")

DIRECTORY_LISTING_FALLBACK = "Unable to get directory listing"


def get_memory_mb() -> Tuple[Optional[int], Optional[int]]:
    """(total, free) physical memory in MB, None where the platform doesn't say"""
    try:
        page_size = os.sysconf("SC_PAGE_SIZE")
        total = os.sysconf("SC_PHYS_PAGES") * page_size
    except (AttributeError, ValueError, OSError):
        return None, None
    try:
        free = os.sysconf("SC_AVPHYS_PAGES") * page_size
    except (ValueError, OSError):
        free = None
    mb = 1024 * 1024
    return total // mb, (free // mb if free is not None else None)


def get_cpu_model() -> str:
    """CPU model name, from /proc/cpuinfo on Linux"""
    try:
        with open("/proc/cpuinfo", "r", encoding="utf-8", errors="replace") as f:
            for line in f:
                if line.startswith("model name"):
                    return line.split(":", 1)[1].strip()
    except OSError:
        pass
    return platform.processor() or "unknown"


def build_environment_context() -> str:
    total_mb, free_mb = get_memory_mb()
    lines = [
        f"Operating System: {platform.system()} {platform.release()} ({sys.platform} - {platform.machine()})",
        f"Python Version: {platform.python_version()}",
        f"Shell: {os.environ.get('SHELL') or 'unknown'}",
        f"Current Working Directory: {os.getcwd()}",
        f"Home Directory: {Path.home()}",
        f"CPU Info: {get_cpu_model()} ({os.cpu_count() or 'unknown'} cores)",
    ]
    if total_mb is not None:
        lines.append(f"Total Memory: {total_mb} MB")
    if free_mb is not None:
        lines.append(f"Free Memory: {free_mb} MB")
    return "\n" + "\n".join(lines) + "\n"


def get_directory_listing() -> str:
    """`ls` of the working directory (`dir /b` on Windows)"""
    if sys.platform == "win32":
        args = ["cmd", "/c", "dir", "/b"]
    else:
        args = ["ls"]
    try:
        result = subprocess.run(args, capture_output=True, text=True, timeout=COMMAND_TIMEOUT, check=True)
    except (OSError, subprocess.SubprocessError) as e:
        log.debug("Directory listing failed: %s", e)
        return DIRECTORY_LISTING_FALLBACK
    return result.stdout
