# Copyright (c) 2026 Beijing Volcano Engine Technology Co., Ltd.
# SPDX-License-Identifier: Apache-2.0
"""Prompt providers used by interactive type resolution."""

import sys
from abc import ABC, abstractmethod
from typing import Optional, TextIO

from rich.console import Console
from rich.markup import escape
from rich.prompt import Prompt

from bank_cli.core.types import EntryType
from bank_cli.exceptions import PromptUnavailableError


class PromptProvider(ABC):
    """Answers "file or directory?" for an ambiguous path."""

    @abstractmethod
    def choose_type(self, path: str) -> EntryType:
        """Return the entry type the user picked for ``path``."""


class TerminalPrompt(PromptProvider):
    """Ask on the controlling terminal, refusing when stdin is not a TTY."""

    def __init__(self, stdin: Optional[TextIO] = None, console: Optional[Console] = None):
        self._stdin = stdin
        self._console = console

    def choose_type(self, path: str) -> EntryType:
        stdin = self._stdin if self._stdin is not None else sys.stdin
        if stdin is None or not stdin.isatty():
            raise PromptUnavailableError(path)

        console = self._console or Console(stderr=True)
        answer = Prompt.ask(
            f"What should [bold]{escape(path)}[/bold] be?",
            choices=[EntryType.FILE.value, EntryType.DIRECTORY.value],
            default=EntryType.FILE.value,
            console=console,
            stream=stdin,
        )
        return EntryType(answer)


class FixedPrompt(PromptProvider):
    """Always answer with the same type. Useful for scripting and tests."""

    def __init__(self, answer: EntryType):
        self.answer = answer
        self.asked: list = []

    def choose_type(self, path: str) -> EntryType:
        self.asked.append(path)
        return self.answer
