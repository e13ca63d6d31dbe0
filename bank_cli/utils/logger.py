# Copyright (c) 2026 Beijing Volcano Engine Technology Co., Ltd.
# SPDX-License-Identifier: Apache-2.0
"""
Logging utilities for bank.

All module loggers live under the ``bank_cli`` namespace and share one handler
attached to the namespace root, so reconfiguring after ``--config`` is read
affects loggers created at import time.
"""

import logging
import sys
from typing import TYPE_CHECKING, Optional

if TYPE_CHECKING:
    from bank_cli.utils.config import BankConfig

ROOT_LOGGER = "bank_cli"


def configure_logging(
    config: Optional["BankConfig"] = None,
    format_string: Optional[str] = None,
) -> logging.Logger:
    """
    (Re)configure the ``bank_cli`` root logger.

    Args:
        config: Config to read level, format and output from; built-in defaults if None
        format_string: Custom format string (overrides config)

    Returns:
        The configured root logger

    Raises:
        OSError: If a log file path cannot be opened. Existing handlers are kept.
    """
    if config is not None:
        log_level_str = config.log_level.upper()
        log_format = config.log_format
        log_output = config.log_output
    else:
        log_level_str = "WARNING"
        log_format = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
        log_output = "stderr"

    level = getattr(logging, log_level_str, logging.WARNING)

    if log_output == "stdout":
        handler = logging.StreamHandler(sys.stdout)
    elif log_output == "stderr":
        handler = logging.StreamHandler(sys.stderr)
    else:
        handler = logging.FileHandler(log_output)

    if format_string is None:
        format_string = log_format

    handler.setFormatter(logging.Formatter(format_string))

    root = logging.getLogger(ROOT_LOGGER)
    for old in list(root.handlers):
        root.removeHandler(old)
        old.close()
    root.addHandler(handler)
    root.propagate = False
    root.setLevel(level)
    return root


def get_logger(name: str = ROOT_LOGGER) -> logging.Logger:
    """
    Get a logger under the ``bank_cli`` namespace.

    The namespace root is configured from the global BankConfig on first use,
    falling back to stderr when the configured log file cannot be opened.
    """
    root = logging.getLogger(ROOT_LOGGER)
    if not root.handlers:
        try:
            from bank_cli.utils.config import get_bank_config

            config = get_bank_config()
        except Exception:
            config = None
        try:
            configure_logging(config)
        except OSError:
            configure_logging(None)

    if name != ROOT_LOGGER and not name.startswith(ROOT_LOGGER + "."):
        name = f"{ROOT_LOGGER}.{name}"
    return logging.getLogger(name)

