#!/usr/bin/env python

import logging
import os
from pathlib import Path
from typing import Any, Dict, Optional
from rich.console import Console
from rich.logging import RichHandler

from .constants import (
    LOGS_DIR, LOG_FILE_NAME, LOG_FORMAT, LOG_DATE_FORMAT, LOG_LEVEL_ENV_VAR,
    DEFAULT_SETTINGS,
)


class UwuLogger:
    """Centralized logging system for uwu"""

    _instance: Optional['UwuLogger'] = None

    def __new__(cls) -> 'UwuLogger':
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __init__(self):
        if hasattr(self, '_initialized'):
            return

        self._initialized = True
        self._configured = False
        self.console = Console(stderr=True)
        self.logger = logging.getLogger("uwu")
        # Child loggers (uwu.history, uwu.chat, ...) stay quiet until configure() runs
        self.logger.addHandler(logging.NullHandler())
        self.logger.propagate = False

    def configure(self, settings: Optional[Dict[str, Any]] = None, log_dir: Path = LOGS_DIR):
        """Setup logging configuration from the 'settings' config section"""
        if self._configured:
            return
        self._configured = True
        settings = {**DEFAULT_SETTINGS, **(settings or {})}

        level_name = os.environ.get(LOG_LEVEL_ENV_VAR) or settings["log_level"]
        level = logging.getLevelName(str(level_name).upper())
        if not isinstance(level, int):
            level = logging.WARNING

        # Console handler with Rich, always on stderr so stdout carries only the command
        console_handler = RichHandler(
            console=self.console,
            show_time=False,
            show_path=False,
            markup=False
        )
        console_handler.setLevel(level)
        self.logger.addHandler(console_handler)

        if settings["log_file"]:
            try:
                log_dir.mkdir(parents=True, exist_ok=True)
                file_handler = logging.FileHandler(log_dir / LOG_FILE_NAME)
            except OSError as e:
                self.logger.warning("Could not open log file in %s: %s", log_dir, e)
            else:
                file_handler.setLevel(logging.DEBUG)
                file_handler.setFormatter(logging.Formatter(LOG_FORMAT, LOG_DATE_FORMAT))
                self.logger.addHandler(file_handler)
                level = logging.DEBUG

        self.logger.setLevel(level)

    def debug(self, message: str, *args, **kwargs):
        """Log debug message"""
        self.logger.debug(message, *args, **kwargs)

    def log_api_request(self, provider: str, model: str, prompt_length: int, response_length: int):
        """Log API request details"""
        self.debug(
            "API Request - Provider: %s, Model: %s, Prompt: %d chars, Response: %d chars",
            provider, model, prompt_length, response_length,
        )


def get_logger(name: str) -> logging.Logger:
    """Child logger under the application logger, e.g. get_logger("history") -> uwu.history"""
    UwuLogger()
    return logging.getLogger(f"uwu.{name}")


# Global logger instance
logger = UwuLogger()
