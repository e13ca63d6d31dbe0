# Copyright (c) 2026 Beijing Volcano Engine Technology Co., Ltd.
# SPDX-License-Identifier: Apache-2.0
"""Typer entrypoint for the bank CLI."""

from typing import List, Optional

import typer

from bank_cli.cli.context import CLIContext, configure_cli_logging, load_cli_config
from bank_cli.cli.errors import EXIT_FAILURE, execute
from bank_cli.cli.output import OutputFormat, output_banner, output_results
from bank_cli.core.actions import parse_mode, process_batch
from bank_cli.core.timestamps import capture_now, resolve_times
from bank_cli.core.type_resolver import validate_type_flags
from bank_cli.core.types import EntryType, PathRequest
from bank_cli.utils.logger import get_logger

logger = get_logger(__name__)

app = typer.Typer(
    help="Bank - create files and directories (mkdir + touch) with type detection",
    add_completion=False,
)


def _version_callback(value: bool) -> None:
    if value:
        from bank_cli import __version__

        typer.echo(f"bank {__version__}")
        raise typer.Exit()


@app.command()
def main(
    paths: List[str] = typer.Argument(
        ..., metavar="PATH...", help="The paths to create (files or directories)"
    ),
    directory: bool = typer.Option(
        False, "--directory", "-d", help="Force creation as directory (mkdir mode)"
    ),
    file: bool = typer.Option(False, "--file", "-f", help="Force creation as file (touch mode)"),
    parents: bool = typer.Option(
        False, "--parents", "-p", help="Create parent directories as needed"
    ),
    mode: Optional[str] = typer.Option(
        None, "--mode", "-m", help="Set permissions (octal format, e.g. 755)"
    ),
    interactive: bool = typer.Option(
        False, "--interactive", "-i", help="Ask whether ambiguous paths are files or directories"
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Verbose output"),
    no_create: bool = typer.Option(
        False, "--no-create", "-c", help="Do not create anything, only update existing paths"
    ),
    date: Optional[str] = typer.Option(
        None, "--date", metavar="STRING", help="Parse STRING and use it instead of current time"
    ),
    timestamp: Optional[str] = typer.Option(
        None,
        "--timestamp",
        "-t",
        metavar="STAMP",
        help="Use [[CC]YY]MMDDhhmm[.ss] instead of current time",
    ),
    reference: Optional[str] = typer.Option(
        None, "--reference", "-r", metavar="FILE", help="Use this file's times instead of current time"
    ),
    atime: bool = typer.Option(False, "--atime", "-a", help="Change only the access time"),
    mtime: bool = typer.Option(False, "--mtime", help="Change only the modification time"),
    no_dereference: bool = typer.Option(
        False, "--no-dereference", help="Affect symbolic links instead of referenced files"
    ),
    output_format: Optional[OutputFormat] = typer.Option(
        None, "--output", "-o", help="Output format: plain (default), table, json"
    ),
    config_file: Optional[str] = typer.Option(
        None, "--config", metavar="PATH", help="Path to bank.conf"
    ),
    version: Optional[bool] = typer.Option(
        None,
        "--version",
        callback=_version_callback,
        is_eager=True,
        help="Show version and exit",
    ),
) -> None:
    """Create files and directories, or update their timestamps."""
    fmt = output_format.value if output_format is not None else None
    ctx = CLIContext(output_format=fmt or OutputFormat.PLAIN.value, verbose=verbose)

    config = execute(ctx, lambda: load_cli_config(config_file))
    ctx.config = config
    ctx.output_format = fmt or config.output
    execute(ctx, lambda: configure_cli_logging(config))
    ctx.now = capture_now()

    def _build_requests() -> List[PathRequest]:
        # Every flag and timestamp source is validated before the first path is touched.
        validate_type_flags(file, directory)
        parsed_mode = parse_mode(mode) if mode is not None else None
        times = resolve_times(
            ctx.now,
            date_str=date,
            stamp=timestamp,
            reference_file=reference,
            atime_only=atime,
            mtime_only=mtime,
            tz=config.timezone,
        )
        return [
            PathRequest(
                path=p,
                times=times,
                explicit_file=file,
                explicit_dir=directory,
                parents=parents,
                mode=parsed_mode,
                interactive=interactive,
                no_create=no_create,
                no_dereference=no_dereference,
            )
            for p in paths
        ]

    requests = execute(ctx, _build_requests)
    output_banner(ctx, len(requests))

    prompt = ctx.get_prompt() if interactive else None
    results = execute(
        ctx,
        lambda: process_batch(requests, prompt=prompt, default_type=EntryType(config.default_type)),
    )
    output_results(ctx, results)

    failed = [r for r in results if not r.ok]
    if failed:
        logger.info(f"{len(failed)} of {len(results)} paths failed")
        raise typer.Exit(EXIT_FAILURE)


if __name__ == "__main__":
    app()
