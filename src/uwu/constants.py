#!/usr/bin/env python

"""Constants and configuration values for uwu"""

from pathlib import Path

# File and Directory Constants
DEFAULT_CONFIG_FILE = "config.yaml"
HOME_DIR = Path.home()
CONFIG_DIR = HOME_DIR / ".config" / "uwu"
APP_DATA_DIR = HOME_DIR / ".uwu"
LOGS_DIR = APP_DATA_DIR / "logs"

# Full paths to config files
CONFIG_FILE_PATH = CONFIG_DIR / DEFAULT_CONFIG_FILE
CONFIG_PATH_ENV_VAR = "UWU_CONFIG"

# File Size Limits
MAX_CONFIG_FILE_SIZE = 1024 * 1024  # 1MB

# Providers
PROVIDER_TYPES = ["OpenAI", "Custom", "Claude", "Gemini"]
DEFAULT_PROVIDER = "OpenAI"
DEFAULT_MODEL = "gpt-4.1"
API_KEY_ENV_VARS = {
    "OpenAI": "OPENAI_API_KEY",
    "Custom": "OPENAI_API_KEY",
    "Claude": "ANTHROPIC_API_KEY",
    "Gemini": "GEMINI_API_KEY",
}
CLAUDE_MAX_TOKENS = 1024

# Shell history context
DEFAULT_MAX_HISTORY_COMMANDS = 10
HISTORY_CHUNK_SIZE = 64 * 1024
# Raw lines read per requested command in format-aware mode
HISTORY_READ_FACTOR = 4

DEFAULT_CONTEXT_CONFIG = {
    "enabled": False,
    "max_history_commands": DEFAULT_MAX_HISTORY_COMMANDS,
    "raw_history": False,
}

DEFAULT_SETTINGS = {
    "log_level": "WARNING",
    "log_file": False,
}

# Response sanitization
MAX_COMMAND_LENGTH = 2000
COMMENTARY_WORDS = [
    "user", "want", "should", "shouldn't", "think", "explain", "error", "note",
]

# Logging Configuration
LOG_FILE_NAME = "uwu.log"
LOG_LEVEL_ENV_VAR = "UWU_LOG_LEVEL"
LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
LOG_DATE_FORMAT = '%Y-%m-%d %H:%M:%S'

# Command Exit Codes
SUCCESS_EXIT_CODE = 0
ERROR_EXIT_CODE = 1

# Timeouts (in seconds)
COMMAND_TIMEOUT = 5
