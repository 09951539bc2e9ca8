#!/usr/bin/env python

"""
Reduce a model response to a single shell command line.

Models are told to answer with the command only, but some still wrap it in a
reasoning block, a markdown fence, or add a closing remark. This is a
heuristic: it picks the most command-looking line and never raises.
"""

import re
from typing import List, Optional

from .constants import COMMENTARY_WORDS, MAX_COMMAND_LENGTH
from .logger import get_logger

log = get_logger("sanitizer")

_REASONING_BLOCK = re.compile(r"<(think|thinking)>.*?</\1>", re.IGNORECASE | re.DOTALL)

# Opening fence with an optional info string (language tag and attributes) up to end of line
_FENCED_BLOCK = re.compile(r"```[^\n`]*\r?\n(.*?)```", re.DOTALL)

_SENTENCE = re.compile(r"^[A-Z].*[.?!]$")
_COMMENTARY = re.compile(
    r"\b(?:" + "|".join(re.escape(word) for word in COMMENTARY_WORDS) + r")\b",
    re.IGNORECASE,
)


def strip_reasoning(text: str) -> str:
    """Remove <think>...</think> blocks"""
    return _REASONING_BLOCK.sub("", text)


def extract_fenced_block(text: str) -> Optional[str]:
    """Content of the last fenced code block, or None when there is none"""
    blocks = _FENCED_BLOCK.findall(text)
    if not blocks:
        return None
    return blocks[-1]


def looks_like_prose(line: str) -> bool:
    """True for lines that read like an explanation rather than a command.

    A capitalized sentence ending in '.', '?' or '!' counts as prose, as does
    any line containing one of the commentary words.
    """
    return bool(_SENTENCE.match(line) or _COMMENTARY.search(line))


def candidate_lines(text: str) -> List[str]:
    return [line.strip() for line in text.splitlines() if line.strip()]


def sanitize(raw: Optional[str]) -> str:
    """Extract the single command line from a raw model response, or "" if none"""
    if not raw:
        return ""

    text = strip_reasoning(raw)

    block = extract_fenced_block(text)
    if block is not None:
        text = block
    else:
        # No fence: stray backticks are inline-code noise
        text = text.replace("`", "")

    lines = candidate_lines(text)
    if not lines:
        return ""

    for line in reversed(lines):
        if len(line) <= MAX_COMMAND_LENGTH and not looks_like_prose(line):
            return line

    log.debug("No command-like line in response, falling back to the last line")
    return lines[-1]
