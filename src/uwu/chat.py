#!/usr/bin/env python

import anthropic
from openai import OpenAI

from .constants import CLAUDE_MAX_TOKENS
from .logger import logger
from .prompt import build_system_prompt, build_user_message


class CommandGenerator:
    """Sends the description to the configured provider and returns the raw reply text"""

    def __init__(self, config, system_prompt=None):
        self.config = config
        self.provider = config["type"]
        self.model = config["model"]
        self._system_prompt = system_prompt
        self.client = None

    @property
    def system_prompt(self):
        if self._system_prompt is None:
            self._system_prompt = build_system_prompt(self.config)
        return self._system_prompt

    def get_client(self):
        """Create the SDK client for the configured provider on first use"""
        if self.client is not None:
            return self.client

        api_key = self.config.get("api_key")
        if self.provider in ("OpenAI", "Custom"):
            self.client = OpenAI(api_key=api_key, base_url=self.config.get("base_url") or None)
        elif self.provider == "Claude":
            self.client = anthropic.Anthropic(api_key=api_key)
        elif self.provider == "Gemini":
            from google import genai
            self.client = genai.Client(api_key=api_key)
        else:
            raise ValueError(f'Unknown provider type "{self.provider}" in config.')
        return self.client

    def generate(self, description):
        """Ask the model for a command; the reply is returned unsanitized"""
        handlers = {
            "OpenAI": self._generate_openai,
            "Custom": self._generate_openai,
            "Claude": self._generate_claude,
            "Gemini": self._generate_gemini,
        }
        if self.provider not in handlers:
            raise ValueError(f'Unknown provider type "{self.provider}" in config.')

        system_prompt = self.system_prompt
        reply = handlers[self.provider](system_prompt, build_user_message(description))
        logger.log_api_request(self.provider, self.model, len(system_prompt), len(reply))
        return reply

    def _generate_openai(self, system_prompt, user_message):
        response = self.get_client().chat.completions.create(
            model=self.model,
            messages=[
                {"role": "system", "content": system_prompt},
                {"role": "user", "content": user_message},
            ],
        )
        if not response.choices:
            return ""
        return (response.choices[0].message.content or "").strip()

    def _generate_claude(self, system_prompt, user_message):
        response = self.get_client().messages.create(
            model=self.model,
            system=system_prompt,
            max_tokens=CLAUDE_MAX_TOKENS,
            messages=[{"role": "user", "content": user_message}],
        )
        for block in response.content:
            if getattr(block, "type", None) == "text":
                return block.text.strip()
        return ""

    def _generate_gemini(self, system_prompt, user_message):
        response = self.get_client().models.generate_content(
            model=self.model,
            contents=f"{system_prompt}\n\n{user_message}",
        )
        return (response.text or "").strip()
