#!/usr/bin/env python

"""System prompt assembly"""

from typing import Any, Dict, Optional

from .environment import build_environment_context, get_directory_listing
from .history import build_context_history

INSTRUCTIONS = """
You live in a developer's CLI, helping them convert natural language into CLI commands.
Based on the description of the command given, generate the command. Output only the command and nothing else.
Make sure to escape characters when appropriate. The result of `ls -l` is given with the command.
This may be helpful depending on the description given. Do not include any other text in your response, except for the command.
Do not wrap the command in quotes.
"""


def build_system_prompt(
    config: Dict[str, Any],
    environment_context: Optional[str] = None,
    directory_listing: Optional[str] = None,
    history_context: Optional[str] = None,
) -> str:
    """Render the system prompt; any section not passed in is gathered from the host"""
    if environment_context is None:
        environment_context = build_environment_context()
    if directory_listing is None:
        directory_listing = get_directory_listing()
    if history_context is None:
        history_context = build_context_history(config.get("context"))

    return f"""{INSTRUCTIONS}
--- ENVIRONMENT CONTEXT ---
{environment_context}
--- END ENVIRONMENT CONTEXT ---

Result of `ls -l` in working directory:
{directory_listing}
{history_context}"""


def build_user_message(description: str) -> str:
    return f"Command description: {description}"
