#!/usr/bin/env python3
"""Unit tests for prompt.py and environment.py - system prompt context."""

import subprocess
from unittest.mock import patch

from uwu import environment
from uwu.environment import (
    DIRECTORY_LISTING_FALLBACK, build_environment_context, get_directory_listing,
)
from uwu.prompt import build_system_prompt, build_user_message


class TestBuildSystemPrompt:
    """Tests for system prompt assembly."""

    def test_sections(self):
        prompt = build_system_prompt(
            {},
            environment_context="\nShell: /bin/zsh\n",
            directory_listing="README.md\nsrc\n",
            history_context="\n--- RECENT COMMANDS ---\n1. ls\n--- END COMMAND HISTORY ---\n",
        )
        assert "Output only the command and nothing else." in prompt
        assert "--- ENVIRONMENT CONTEXT ---\n\nShell: /bin/zsh\n\n--- END ENVIRONMENT CONTEXT ---" in prompt
        assert "Result of `ls -l` in working directory:\nREADME.md\nsrc\n" in prompt
        assert prompt.endswith("--- END COMMAND HISTORY ---\n")

    def test_history_from_config(self):
        with patch("uwu.prompt.build_context_history", return_value="HISTORY") as build:
            prompt = build_system_prompt(
                {"context": {"enabled": True}},
                environment_context="ENV",
                directory_listing="LS",
            )
        build.assert_called_once_with({"enabled": True})
        assert prompt.endswith("HISTORY")

    def test_gathers_missing_sections(self):
        with patch("uwu.prompt.build_environment_context", return_value="ENV"), \
                patch("uwu.prompt.get_directory_listing", return_value="LS"):
            prompt = build_system_prompt({}, history_context="")
        assert "ENV" in prompt
        assert "LS" in prompt

    def test_user_message(self):
        assert build_user_message("list big files") == "Command description: list big files"


class TestEnvironment:
    """Tests for host environment context."""

    def test_context_fields(self, monkeypatch):
        monkeypatch.setenv("SHELL", "/usr/bin/fish")
        context = build_environment_context()
        assert "Operating System:" in context
        assert "Shell: /usr/bin/fish" in context
        assert "Current Working Directory:" in context
        assert "cores)" in context

    def test_unknown_shell(self, monkeypatch):
        monkeypatch.delenv("SHELL", raising=False)
        assert "Shell: unknown" in build_environment_context()

    def test_directory_listing(self, tmp_path, monkeypatch):
        (tmp_path / "notes.txt").write_text("hi")
        monkeypatch.chdir(tmp_path)
        monkeypatch.setattr(environment.sys, "platform", "linux")
        assert "notes.txt" in get_directory_listing()

    def test_directory_listing_failure(self, monkeypatch):
        def broken_run(*args, **kwargs):
            raise FileNotFoundError("ls")

        monkeypatch.setattr(environment.subprocess, "run", broken_run)
        assert get_directory_listing() == DIRECTORY_LISTING_FALLBACK

    def test_directory_listing_nonzero_exit(self, monkeypatch):
        def failing_run(args, **kwargs):
            raise subprocess.CalledProcessError(2, args)

        monkeypatch.setattr(environment.subprocess, "run", failing_run)
        assert get_directory_listing() == DIRECTORY_LISTING_FALLBACK
