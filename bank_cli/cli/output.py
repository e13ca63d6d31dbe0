# Copyright (c) 2026 Beijing Volcano Engine Technology Co., Ltd.
# SPDX-License-Identifier: Apache-2.0
"""CLI output helpers."""

import json
from dataclasses import asdict, is_dataclass
from enum import Enum
from typing import Any, Dict, List, Optional

import typer
from tabulate import tabulate

from bank_cli import __version__
from bank_cli.cli.context import CLIContext
from bank_cli.core.types import PathResult, PathStatus

_MAX_COL_WIDTH = 256


class OutputFormat(str, Enum):
    PLAIN = "plain"
    TABLE = "table"
    JSON = "json"


def _to_serializable(value: Any) -> Any:
    """Convert rich Python values to JSON-serializable primitives."""
    if value is None or isinstance(value, (str, int, float, bool)):
        return value
    if isinstance(value, Enum):
        return value.value
    if hasattr(value, "to_dict"):
        return _to_serializable(value.to_dict())
    if is_dataclass(value):
        return _to_serializable(asdict(value))
    if isinstance(value, dict):
        return {str(k): _to_serializable(v) for k, v in value.items()}
    if isinstance(value, (list, tuple, set)):
        return [_to_serializable(item) for item in value]
    return str(value)


def _truncate(val: Any) -> Any:
    """Truncate a value to _MAX_COL_WIDTH for table display."""
    s = str(val) if not isinstance(val, str) else val
    return s[: _MAX_COL_WIDTH - 3] + "..." if len(s) > _MAX_COL_WIDTH else val


def _format_results_table(results: List[PathResult]) -> str:
    rows = [
        [
            _truncate(r.path),
            r.entry_type.value if r.entry_type else "",
            r.status.value,
            _truncate(r.error or ""),
        ]
        for r in results
    ]
    headers = ["path", "type", "status", "error"]
    if not any(r.error for r in results):
        headers = headers[:3]
        rows = [row[:3] for row in rows]
    return tabulate(rows, headers=headers, tablefmt="plain")


def output_banner(ctx: CLIContext, path_count: int) -> None:
    """Print the verbose-mode header."""
    if not ctx.verbose or ctx.output_format != OutputFormat.PLAIN.value:
        return
    typer.echo(
        typer.style("Bank", fg=typer.colors.BRIGHT_GREEN, bold=True)
        + " "
        + typer.style(f"v{__version__}", fg=typer.colors.CYAN)
    )
    if path_count > 1:
        typer.echo(f"Processing {typer.style(str(path_count), fg=typer.colors.CYAN)} paths...")


def _echo_plain_result(ctx: CLIContext, result: PathResult, multiple: bool) -> None:
    check = typer.style("✓", fg=typer.colors.BRIGHT_GREEN)
    path = typer.style(result.path, fg=typer.colors.GREEN)

    if not ctx.verbose:
        if multiple and result.ok and result.status != PathStatus.SKIPPED:
            typer.echo(f"{check} {path}")
        return

    if result.status == PathStatus.SKIPPED:
        typer.echo(
            typer.style("-", fg=typer.colors.YELLOW)
            + " Skipped: "
            + typer.style(result.path, fg=typer.colors.YELLOW)
        )
    elif result.status == PathStatus.FAILED:
        typer.echo(
            typer.style("✗", fg=typer.colors.RED)
            + " Failed: "
            + typer.style(result.path, fg=typer.colors.RED)
        )
    elif result.status == PathStatus.CREATED:
        kind = result.entry_type.value if result.entry_type else "path"
        typer.echo(f"{check} Created {kind}: {path}")
    else:
        typer.echo(f"{check} Updated timestamps: {path}")


def output_path_errors(results: List[PathResult]) -> None:
    """Report each failed path on stderr."""
    for r in results:
        if r.status == PathStatus.FAILED:
            typer.secho(f"bank: {r.path}: {r.error}", fg=typer.colors.RED, err=True)


def output_results(ctx: CLIContext, results: List[PathResult]) -> None:
    """Print per-path results in the selected format."""
    if ctx.output_format == OutputFormat.JSON.value:
        payload = {
            "ok": all(r.ok for r in results),
            "result": _to_serializable(results),
        }
        typer.echo(json.dumps(payload, ensure_ascii=False))
        return

    if ctx.output_format == OutputFormat.TABLE.value:
        if results:
            typer.echo(_format_results_table(results))
        output_path_errors(results)
        return

    multiple = len(results) > 1
    for r in results:
        _echo_plain_result(ctx, r, multiple)
    output_path_errors(results)


def output_error(
    ctx: CLIContext,
    *,
    message: str,
    code: str,
    exit_code: int,
    details: Optional[Dict[str, Any]] = None,
) -> None:
    """Print error in JSON or plain format then exit."""
    details = details or {}
    if ctx.output_format == OutputFormat.JSON.value:
        payload = {
            "ok": False,
            "error": {
                "code": code,
                "message": message,
                "details": _to_serializable(details),
            },
        }
        typer.echo(json.dumps(payload, ensure_ascii=False), err=True)
    else:
        typer.echo(f"bank: ERROR[{code}]: {message}", err=True)
    raise typer.Exit(exit_code)
