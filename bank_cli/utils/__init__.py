# Copyright (c) 2026 Beijing Volcano Engine Technology Co., Ltd.
# SPDX-License-Identifier: Apache-2.0
"""Utility functions and helpers."""

from bank_cli.utils.logger import configure_logging, get_logger

__all__ = [
    "configure_logging",
    "get_logger",
]
