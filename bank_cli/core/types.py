# Copyright (c) 2026 Beijing Volcano Engine Technology Co., Ltd.
# SPDX-License-Identifier: Apache-2.0
"""
Data types shared by the type resolver, timestamp resolver and dispatcher.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Optional


class EntryType(str, Enum):
    """What a path should be created as."""

    FILE = "file"
    DIRECTORY = "directory"


class TimestampSource(str, Enum):
    """Where the timestamps applied to each path come from."""

    NOW = "now"
    DATE = "date"
    STAMP = "stamp"
    REFERENCE = "reference"
    UNSET = "unset"


class PathStatus(str, Enum):
    """Outcome of processing a single path."""

    CREATED = "created"
    UPDATED = "updated"
    SKIPPED = "skipped"
    FAILED = "failed"


@dataclass(frozen=True)
class TimestampSpec:
    """
    A single timestamp source selected on the command line.

    Attributes:
        source: Which source was selected
        value: Date string, stamp or reference path; None for NOW/UNSET
    """

    source: TimestampSource = TimestampSource.UNSET
    value: Optional[str] = None


@dataclass(frozen=True)
class TimePair:
    """
    Resolved (access, modification) times in POSIX seconds.

    ``apply_access`` / ``apply_modification`` say which of the two fields
    is written; the other keeps the target's existing value, or ``now``
    when the target was just created.
    """

    access_time: float
    modification_time: float
    apply_access: bool = True
    apply_modification: bool = True
    now: Optional[float] = None


@dataclass
class PathRequest:
    """Everything needed to act on one command-line path."""

    path: str
    times: TimePair
    explicit_file: bool = False
    explicit_dir: bool = False
    parents: bool = False
    mode: Optional[int] = None
    interactive: bool = False
    no_create: bool = False
    no_dereference: bool = False


@dataclass
class PathResult:
    """Outcome of one PathRequest."""

    path: str
    status: PathStatus
    entry_type: Optional[EntryType] = None
    error_code: Optional[str] = None
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.status != PathStatus.FAILED

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for serialization."""
        result: Dict[str, Any] = {
            "path": self.path,
            "type": self.entry_type.value if self.entry_type else None,
            "status": self.status.value,
        }
        if self.error:
            result["error"] = {"code": self.error_code, "message": self.error}
        return result
