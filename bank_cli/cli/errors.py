# Copyright (c) 2026 Beijing Volcano Engine Technology Co., Ltd.
# SPDX-License-Identifier: Apache-2.0
"""Exception handling helpers for the CLI."""

from typing import Any, Callable

import typer

from bank_cli.cli.context import CliConfigError, CLIContext
from bank_cli.cli.output import output_error
from bank_cli.exceptions import BankError, ConfigurationConflictError, ParseError

EXIT_FAILURE = 1
EXIT_USAGE = 2
EXIT_CONFIG = 3


def handle_command_error(ctx: CLIContext, exc: Exception) -> None:
    """Normalize exceptions into user-facing output and exit codes."""
    if isinstance(exc, typer.Exit):
        raise exc

    if isinstance(exc, CliConfigError):
        output_error(
            ctx,
            message=str(exc),
            code="CLI_CONFIG",
            details={"config_file": "bank.conf"},
            exit_code=EXIT_CONFIG,
        )

    elif isinstance(exc, (ConfigurationConflictError, ParseError)):
        output_error(
            ctx,
            message=exc.message,
            code=exc.code,
            details=exc.details,
            exit_code=EXIT_USAGE,
        )

    elif isinstance(exc, BankError):
        output_error(
            ctx,
            message=exc.message,
            code=exc.code,
            details=exc.details,
            exit_code=EXIT_FAILURE,
        )

    else:
        output_error(
            ctx,
            message=str(exc),
            code="CLI_ERROR",
            exit_code=EXIT_FAILURE,
            details={"exception": type(exc).__name__},
        )


def execute(ctx: CLIContext, operation: Callable[[], Any]) -> Any:
    """Run ``operation`` with consistent error handling."""
    try:
        return operation()
    except Exception as exc:  # noqa: BLE001
        handle_command_error(ctx, exc)
