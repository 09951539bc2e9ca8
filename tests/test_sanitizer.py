#!/usr/bin/env python3
"""Unit tests for sanitizer.py - extracting one command line from a model reply."""

import pytest

from uwu.sanitizer import (
    extract_fenced_block, looks_like_prose, sanitize, strip_reasoning,
)


class TestLooksLikeProse:
    """Tests for the prose/commentary line predicate."""

    @pytest.mark.parametrize("line", [
        "This lists all files.",
        "Is this what you need?",
        "Careful!",
        "Note: this assumes bash",
        "the user asked for a listing",
        "you might want sudo here",
        "you should back up first",
        "you shouldn't run this as root",
        "I think this works",
        "let me explain",
        "NOTE this is destructive",
    ])
    def test_prose(self, line):
        assert looks_like_prose(line)

    @pytest.mark.parametrize("line", [
        "ls -la",
        "git commit -m 'Fix bug.'",
        "find . -name '*.py' | xargs wc -l",
        "Get-ChildItem -Recurse",
        "echo Done",
        "grep -r errors logs/",
        "cat notes.txt",
        "wanted=1 ./run.sh",
    ])
    def test_command(self, line):
        assert not looks_like_prose(line)


class TestStripReasoning:
    """Tests for reasoning block removal."""

    def test_multiline_block(self):
        assert strip_reasoning("<think>\nstep 1\nstep 2\n</think>ls") == "ls"

    def test_case_insensitive(self):
        assert strip_reasoning("<THINK>hmm</Think>pwd") == "pwd"

    def test_thinking_tag(self):
        assert strip_reasoning("<thinking>hmm</thinking>pwd") == "pwd"

    def test_non_greedy(self):
        assert strip_reasoning("<think>a</think>ls<think>b</think>") == "ls"


class TestExtractFencedBlock:
    """Tests for fenced code block extraction."""

    def test_no_fence(self):
        assert extract_fenced_block("ls -la") is None

    def test_language_tag(self):
        assert extract_fenced_block("```bash\nls -la\n```") == "ls -la\n"

    def test_info_string_with_attributes(self):
        assert extract_fenced_block("```bash title=x\nls -la\n```") == "ls -la\n"

    def test_last_block_wins(self):
        text = "```sh\nls\n```\nor better:\n```\npwd\n```"
        assert extract_fenced_block(text) == "pwd\n"


class TestSanitize:
    """Tests for the full sanitization pipeline."""

    def test_empty(self):
        assert sanitize("") == ""

    def test_none(self):
        assert sanitize(None) == ""

    def test_whitespace_only(self):
        assert sanitize("   \n\t\n") == ""

    def test_plain_command(self):
        assert sanitize("  ls -la  \n") == "ls -la"

    def test_last_fenced_block_wins(self):
        raw = "First try:\n```bash\nls -la\n```\nActually use this:\n```\nrm -rf /tmp/x\n```\n"
        assert sanitize(raw) == "rm -rf /tmp/x"

    def test_last_block_wins_when_first_has_attributes(self):
        raw = "```bash title=x\nls\n```\nthen\n```\npwd\n```"
        assert sanitize(raw) == "pwd"

    def test_skips_trailing_prose(self):
        assert sanitize("Note: this is destructive.\nrm file.txt") == "rm file.txt"

    def test_skips_caveat_after_command(self):
        assert sanitize("tar -czf backup.tgz src\nThis creates a compressed archive.") == "tar -czf backup.tgz src"

    def test_strips_reasoning(self):
        assert sanitize("<think>considering options</think>\nls -la") == "ls -la"

    def test_reasoning_containing_fence(self):
        raw = "<think>maybe ```\nrm -rf /\n```</think>\n```bash\ndu -sh .\n```"
        assert sanitize(raw) == "du -sh ."

    def test_all_prose_returns_last_line(self):
        raw = "I cannot help with that.\nPlease rephrase the request."
        assert sanitize(raw) == "Please rephrase the request."

    def test_inline_backticks_removed(self):
        assert sanitize("`ls -la`") == "ls -la"

    def test_inline_triple_backticks_removed(self):
        assert sanitize("```ls -la```") == "ls -la"

    def test_empty_fenced_block(self):
        assert sanitize("```bash\n```") == ""

    def test_fenced_block_with_comment_line(self):
        raw = "```bash\n# list everything\nls -la\n```"
        assert sanitize(raw) == "ls -la"

    def test_overlong_line_skipped(self):
        raw = "ls\n" + "a" * 2001
        assert sanitize(raw) == "ls"

    def test_line_at_length_limit_kept(self):
        line = "a" * 2000
        assert sanitize("ls\n" + line) == line

    def test_only_overlong_line_falls_back(self):
        line = "a" * 3000
        assert sanitize(line) == line

    def test_reasoning_only(self):
        assert sanitize("<think>nothing to say</think>") == ""

    def test_result_is_single_line(self):
        raw = "```\nls\ncd /tmp\n```"
        assert "\n" not in sanitize(raw)

    @pytest.mark.parametrize("command", [
        "ls -la",
        "git status",
        "docker ps -a",
        "find . -name '*.py' -mtime -1",
        "du -sh * | sort -h",
    ])
    def test_idempotent_on_clean_commands(self, command):
        once = sanitize(command)
        assert once == command
        assert sanitize(once) == once
