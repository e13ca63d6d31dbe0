# Copyright (c) 2026 Beijing Volcano Engine Technology Co., Ltd.
# SPDX-License-Identifier: Apache-2.0
"""Type resolution, timestamp resolution and per-path actions."""

from bank_cli.core.actions import parse_mode, process_batch, process_path
from bank_cli.core.prompt import FixedPrompt, PromptProvider, TerminalPrompt
from bank_cli.core.timestamps import capture_now, resolve_times
from bank_cli.core.type_resolver import resolve_type
from bank_cli.core.types import (
    EntryType,
    PathRequest,
    PathResult,
    PathStatus,
    TimePair,
    TimestampSource,
    TimestampSpec,
)

__all__ = [
    "EntryType",
    "FixedPrompt",
    "PathRequest",
    "PathResult",
    "PathStatus",
    "PromptProvider",
    "TerminalPrompt",
    "TimePair",
    "TimestampSource",
    "TimestampSpec",
    "capture_now",
    "parse_mode",
    "process_batch",
    "process_path",
    "resolve_times",
    "resolve_type",
]
