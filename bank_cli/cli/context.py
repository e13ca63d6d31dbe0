# Copyright (c) 2026 Beijing Volcano Engine Technology Co., Ltd.
# SPDX-License-Identifier: Apache-2.0
"""Runtime context for one CLI invocation."""

from dataclasses import dataclass, field
from typing import Optional

from bank_cli.core.prompt import PromptProvider, TerminalPrompt
from bank_cli.utils.config import BankConfig, BankConfigSingleton
from bank_cli.utils.logger import configure_logging


class CliConfigError(ValueError):
    """Raised when the bank.conf file is missing or invalid."""


@dataclass
class CLIContext:
    """Shared state for one CLI invocation."""

    output_format: str = "plain"
    verbose: bool = False
    now: Optional[float] = None
    config: BankConfig = field(default_factory=BankConfig)
    _prompt: Optional[PromptProvider] = field(default=None, init=False, repr=False)

    def get_prompt(self) -> PromptProvider:
        """Create the terminal prompt provider on first use."""
        if self._prompt is None:
            self._prompt = TerminalPrompt()
        return self._prompt


def load_cli_config(config_path: Optional[str]) -> BankConfig:
    """Load bank.conf through the resolution chain."""
    try:
        return BankConfigSingleton.initialize(config_path=config_path)
    except (FileNotFoundError, ValueError) as e:
        raise CliConfigError(str(e)) from e


def configure_cli_logging(config: BankConfig) -> None:
    """Apply the logging settings of bank.conf."""
    try:
        configure_logging(config)
    except OSError as e:
        raise CliConfigError(f"Cannot open log_output {config.log_output!r}: {e}") from e
