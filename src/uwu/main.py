#!/usr/bin/env python
"""
uwu - Main Entry Point

Turns a natural-language description into a single shell command.

Usage:
    uwu <command description>

Configuration:
    - ~/.config/uwu/config.yaml (override with $UWU_CONFIG)

The script is split into several modules:
- config.py: Configuration handling
- history.py: Shell history context
- environment.py: Host environment context
- prompt.py: System prompt assembly
- chat.py: Provider calls
- sanitizer.py: Extracting the command from the model response
- ui.py: Terminal output
- logger.py: Logging system
- constants.py: Application constants
"""

import sys
import os

# Add parent directory to path for direct execution
if __name__ == "__main__":
    current_dir = os.path.dirname(os.path.abspath(__file__))
    parent_dir = os.path.dirname(current_dir)
    if parent_dir not in sys.path:
        sys.path.insert(0, parent_dir)

from uwu.chat import CommandGenerator
from uwu.config import load_config
from uwu.constants import API_KEY_ENV_VARS, ERROR_EXIT_CODE, SUCCESS_EXIT_CODE
from uwu.logger import logger
from uwu.sanitizer import sanitize
from uwu.ui import UIManager


def run(argv) -> int:
    """Generate and print a command for the description in argv; returns the exit status"""
    ui = UIManager()

    description = " ".join(argv).strip()
    if not description:
        ui.show_usage()
        return ERROR_EXIT_CODE

    config = load_config()
    logger.configure(config.get("settings"))
    ui = UIManager(config)

    if not config.get("api_key"):
        env_var = API_KEY_ENV_VARS.get(config["type"], "OPENAI_API_KEY")
        ui.show_error(
            "API key not found.",
            hint=f"Please provide an API key in your config.yaml file or by setting the {env_var} environment variable."
        )
        return ERROR_EXIT_CODE

    try:
        raw_response = CommandGenerator(config).generate(description)
    except Exception as e:
        logger.debug("Command generation failed", exc_info=True)
        ui.show_error(f"Error generating command: {e}")
        return ERROR_EXIT_CODE

    command = sanitize(raw_response)
    if not command:
        logger.debug("Unusable model response: %r", raw_response)
        ui.show_error("No command could be extracted from the model response.")
        return ERROR_EXIT_CODE

    ui.show_command(command)
    return SUCCESS_EXIT_CODE


def main() -> None:
    """Main entry point for uwu"""
    try:
        sys.exit(run(sys.argv[1:]))
    except KeyboardInterrupt:
        sys.exit(130)


if __name__ == "__main__":
    main()
