# Copyright (c) 2026 Beijing Volcano Engine Technology Co., Ltd.
# SPDX-License-Identifier: Apache-2.0
"""
Decide whether a path should be treated as a file or a directory.

Decision order, first match wins:
  1. Explicit ``--file`` / ``--directory`` flag
  2. Existing path keeps its type
  3. Trailing path separator means directory
  4. Extension on the final segment means file
  5. Interactive prompt, when enabled
  6. Fallback type (file unless configured otherwise)
"""

import os
from typing import Optional

from bank_cli.core.prompt import PromptProvider, TerminalPrompt
from bank_cli.core.types import EntryType
from bank_cli.exceptions import ConfigurationConflictError
from bank_cli.utils.logger import get_logger

logger = get_logger(__name__)


def _separators() -> tuple:
    seps = [os.sep, "/"]
    if os.altsep:
        seps.append(os.altsep)
    return tuple(set(seps))


def ends_with_separator(path: str) -> bool:
    """Return True if ``path`` ends with a path separator."""
    return path.endswith(_separators())


def has_extension(path: str) -> bool:
    """Return True if the final segment of ``path`` has a non-empty suffix.

    Dotfiles such as ``.bashrc`` and names ending in a dot have no extension.
    """
    name = os.path.basename(path.rstrip("".join(_separators())))
    _, ext = os.path.splitext(name)
    return len(ext) > 1


def existing_type(path: str, no_dereference: bool = False) -> Optional[EntryType]:
    """Return the type of an existing path, or None if nothing is there."""
    if no_dereference and os.path.islink(path):
        return EntryType.FILE
    if os.path.isdir(path):
        return EntryType.DIRECTORY
    if os.path.lexists(path):
        return EntryType.FILE
    return None


def validate_type_flags(explicit_file: bool, explicit_dir: bool) -> None:
    if explicit_file and explicit_dir:
        raise ConfigurationConflictError(
            "Cannot specify both --directory and --file flags",
            options=["--directory", "--file"],
        )


def resolve_type(
    path: str,
    explicit_file: bool = False,
    explicit_dir: bool = False,
    interactive: bool = False,
    prompt: Optional[PromptProvider] = None,
    no_dereference: bool = False,
    default: EntryType = EntryType.FILE,
) -> EntryType:
    """
    Resolve the entry type for ``path``.

    Args:
        path: Path as given on the command line (trailing separator kept)
        explicit_file: ``-f`` was given
        explicit_dir: ``-d`` was given
        interactive: ``-i`` was given
        prompt: Prompt provider for interactive mode, defaults to TerminalPrompt
        no_dereference: Treat an existing symlink as the entry itself
        default: Type used when no rule matches

    Returns:
        EntryType.FILE or EntryType.DIRECTORY

    Raises:
        ConfigurationConflictError: Both explicit flags are set
        PromptUnavailableError: Interactive mode without a terminal
    """
    validate_type_flags(explicit_file, explicit_dir)

    if explicit_dir:
        return EntryType.DIRECTORY
    if explicit_file:
        return EntryType.FILE

    current = existing_type(path, no_dereference=no_dereference)
    if current is not None:
        logger.debug(f"{path}: exists as {current.value}")
        return current

    if ends_with_separator(path):
        logger.debug(f"{path}: trailing separator, treating as directory")
        return EntryType.DIRECTORY

    if has_extension(path):
        logger.debug(f"{path}: has extension, treating as file")
        return EntryType.FILE

    if interactive:
        chosen = (prompt or TerminalPrompt()).choose_type(path)
        logger.debug(f"{path}: user chose {chosen.value}")
        return chosen

    logger.debug(f"{path}: ambiguous, defaulting to {default.value}")
    return default
