#!/usr/bin/env python

import os
import sys
import yaml
from typing import Dict, Any, Optional
from pathlib import Path
from rich.console import Console
from rich.errors import StyleSyntaxError
from rich.markup import escape
from rich.style import Style

from .constants import (
    CONFIG_FILE_PATH, CONFIG_PATH_ENV_VAR, MAX_CONFIG_FILE_SIZE,
    DEFAULT_PROVIDER, DEFAULT_MODEL, PROVIDER_TYPES, API_KEY_ENV_VARS,
    DEFAULT_CONTEXT_CONFIG, DEFAULT_SETTINGS, ERROR_EXIT_CODE,
)
from .theme import PALETTE, create_console

# Keys written by the JSON config of earlier releases
LEGACY_KEYS = {
    "apiKey": "api_key",
    "baseURL": "base_url",
}
LEGACY_CONTEXT_KEYS = {
    "maxHistoryCommands": "max_history_commands",
    "rawHistory": "raw_history",
}


def default_config() -> Dict[str, Any]:
    """The configuration written on first run"""
    return {
        "type": DEFAULT_PROVIDER,
        "api_key": "",
        "model": DEFAULT_MODEL,
        "base_url": None,
        "context": dict(DEFAULT_CONTEXT_CONFIG),
        "settings": dict(DEFAULT_SETTINGS),
    }


def get_config_path() -> Path:
    override = os.environ.get(CONFIG_PATH_ENV_VAR)
    if override:
        return Path(override).expanduser()
    return CONFIG_FILE_PATH


def write_default_config(config_path: Path, console: Console) -> Dict[str, Any]:
    """Create the config file with defaults; the API key comes from the environment until the user edits it"""
    config = default_config()
    try:
        config_path.parent.mkdir(parents=True, exist_ok=True)
        with open(config_path, 'w') as f:
            yaml.dump(config, f, default_flow_style=False, sort_keys=False, allow_unicode=True)
    except OSError as e:
        console.print(f"[error]Error creating the configuration file at: {config_path}[/error]")
        console.print(f"[error]Please check your permissions for the directory. ({e})[/error]")
        sys.exit(ERROR_EXIT_CODE)

    console.print(f"[muted]Created default configuration at {config_path}[/muted]")
    return _validate_and_normalize_config(config, console)


def load_config(config_path: Optional[Path] = None) -> Dict[str, Any]:
    """Load and validate configuration from YAML file"""
    console = create_console()
    if config_path is None:
        config_path = get_config_path()

    if not config_path.exists():
        return write_default_config(config_path, console)

    # Check if file is readable
    if not config_path.is_file() or not os.access(config_path, os.R_OK):
        console.print(f"[error]Error: Config file '{config_path}' is not readable![/error]")
        sys.exit(ERROR_EXIT_CODE)

    # Check file size (prevent loading massive files)
    try:
        file_size = config_path.stat().st_size
        if file_size > MAX_CONFIG_FILE_SIZE:
            console.print(f"[error]Error: Config file '{config_path}' is too large (>1MB)![/error]")
            sys.exit(ERROR_EXIT_CODE)
    except OSError as e:
        console.print(f"[error]Error accessing config file '{config_path}': {e}[/error]")
        sys.exit(ERROR_EXIT_CODE)

    try:
        with open(config_path, 'r') as file:
            config = yaml.safe_load(file)
    except yaml.YAMLError as e:
        console.print(f"[error]Error: Invalid YAML in config file '{config_path}': {e}[/error]")
        sys.exit(ERROR_EXIT_CODE)
    except OSError as e:
        console.print(f"[error]Error reading config file '{config_path}': {e}[/error]")
        sys.exit(ERROR_EXIT_CODE)

    return _validate_and_normalize_config(config, console)


def _validate_and_normalize_config(config: Any, console: Console) -> Dict[str, Any]:
    """Validate and normalize configuration, converting legacy formats"""
    if config is None:
        config = {}
    if not isinstance(config, dict):
        console.print("[error]Error: Config file must contain a mapping of settings[/error]")
        sys.exit(ERROR_EXIT_CODE)

    for legacy_key, key in LEGACY_KEYS.items():
        if legacy_key in config:
            config.setdefault(key, config.pop(legacy_key))

    merged = default_config()
    merged.update(config)
    config = merged

    if config["type"] not in PROVIDER_TYPES:
        console.print(
            f"[error]Error: Unknown provider type \"{config['type']}\" in config. "
            f"Expected one of: {', '.join(PROVIDER_TYPES)}[/error]"
        )
        sys.exit(ERROR_EXIT_CODE)

    if not config.get("model"):
        config["model"] = DEFAULT_MODEL

    # Fall back to the provider's environment variable for the API key
    if not config.get("api_key"):
        config["api_key"] = os.environ.get(API_KEY_ENV_VARS[config["type"]], "")

    config["context"] = _normalize_context(config.get("context"))
    config["settings"] = _normalize_settings(config.get("settings"), console)
    config["theme"] = _normalize_theme(config.get("theme"), console)
    return config


def _normalize_context(context: Any) -> Dict[str, Any]:
    """Ensure the context section has all defaults filled in"""
    if not isinstance(context, dict):
        return dict(DEFAULT_CONTEXT_CONFIG)

    context = dict(context)
    for legacy_key, key in LEGACY_CONTEXT_KEYS.items():
        if legacy_key in context:
            context.setdefault(key, context.pop(legacy_key))

    normalized = {**DEFAULT_CONTEXT_CONFIG, **context}
    try:
        normalized["max_history_commands"] = int(normalized["max_history_commands"])
    except (TypeError, ValueError):
        normalized["max_history_commands"] = DEFAULT_CONTEXT_CONFIG["max_history_commands"]
    return normalized


def _require_mapping(value: Any, key: str, console: Console) -> Dict[str, Any]:
    """An absent section is empty; anything other than a mapping is fatal"""
    if value is None:
        return {}
    if not isinstance(value, dict):
        console.print(f"[error]Error: '{key}' in config must be a mapping, got {type(value).__name__}[/error]")
        sys.exit(ERROR_EXIT_CODE)
    return value


def _normalize_settings(settings: Any, console: Console) -> Dict[str, Any]:
    return {**DEFAULT_SETTINGS, **_require_mapping(settings, "settings", console)}


def _normalize_theme(theme: Any, console: Console) -> Dict[str, str]:
    """Keep overrides for known style names, each of which must be a valid Rich style"""
    overrides = {}
    for name, value in _require_mapping(theme, "theme", console).items():
        if name not in PALETTE:
            continue
        if not _is_valid_style(value):
            console.print(f"[error]Error: Invalid style for theme.{name}: {escape(repr(value))}[/error]")
            sys.exit(ERROR_EXIT_CODE)
        overrides[name] = value
    return overrides


def _is_valid_style(value: Any) -> bool:
    if not isinstance(value, str):
        return False
    try:
        Style.parse(value)
    except StyleSyntaxError:
        return False
    return True
