# Copyright (c) 2026 Beijing Volcano Engine Technology Co., Ltd.
# SPDX-License-Identifier: Apache-2.0
"""
Timestamp resolution for ``--date``, ``--timestamp``, ``--reference``,
``--atime`` and ``--mtime``.

All functions take the invocation time explicitly so that every path in a
batch receives the same "now".
"""

import math
import os
import re
import time
from datetime import datetime, timedelta, timezone
from typing import Optional, Tuple

from bank_cli.core.types import TimePair, TimestampSource, TimestampSpec
from bank_cli.exceptions import ConfigurationConflictError, NotFoundError, ParseError, from_os_error

TIMEZONES = ("local", "utc")

_DATE_FORMATS = [
    "%Y-%m-%d %H:%M:%S",
    "%Y-%m-%d %H:%M",
    "%Y-%m-%d",
    "%m/%d/%Y %H:%M:%S",
    "%m/%d/%Y %H:%M",
    "%m/%d/%Y",
    "%d.%m.%Y %H:%M:%S",
    "%d.%m.%Y %H:%M",
    "%d.%m.%Y",
]

_RELATIVE_DAYS = {"today": 0, "yesterday": -1, "tomorrow": 1}

_STAMP_RE = re.compile(r"^(?P<base>\d{8}|\d{10}|\d{12})(?:\.(?P<seconds>\d{2}))?$")


def capture_now() -> float:
    """Capture the invocation time once, as POSIX seconds."""
    return time.time()


def _tzinfo(tz: str):
    if tz not in TIMEZONES:
        raise ParseError(tz, kind="timezone", reason="expected 'local' or 'utc'")
    return timezone.utc if tz == "utc" else None


def _to_epoch(dt: datetime, tz: str) -> float:
    """Convert ``dt`` to POSIX seconds, reading naive values in ``tz``."""
    if dt.tzinfo is None and tz == "utc":
        dt = dt.replace(tzinfo=timezone.utc)
    return dt.timestamp()


def _now_datetime(now: float, tz: str) -> datetime:
    tzinfo = _tzinfo(tz)
    if tzinfo is None:
        return datetime.fromtimestamp(now)
    return datetime.fromtimestamp(now, tzinfo).replace(tzinfo=None)


def _checked_epoch(value: float, original: str, kind: str) -> float:
    """Reject epoch values that cannot be represented as a file timestamp."""
    if not math.isfinite(value):
        raise ParseError(original, kind=kind, reason="not a finite number")
    try:
        datetime.fromtimestamp(value, timezone.utc)
    except (OverflowError, ValueError, OSError):
        raise ParseError(original, kind=kind, reason="timestamp out of range") from None
    return value


def parse_date_string(date_str: str, now: float, tz: str = "local") -> float:
    """
    Parse a free-form date string into POSIX seconds.

    Accepts ISO-8601, ``YYYY-MM-DD``, ``MM/DD/YYYY`` and ``DD.MM.YYYY`` with an
    optional ``HH:MM[:SS]``, the words now/today/yesterday/tomorrow, and
    ``@<epoch seconds>``.

    Raises:
        ParseError: If the string matches none of the accepted forms, or the
            result is not a representable timestamp
    """
    try:
        value = _parse_date_value(date_str, now, tz)
    except (OverflowError, OSError):
        raise ParseError(date_str, kind="date", reason="timestamp out of range") from None
    return _checked_epoch(value, date_str, "date")


def _parse_date_value(date_str: str, now: float, tz: str) -> float:
    text = date_str.strip()
    lowered = text.lower()

    if lowered == "now":
        return now
    if lowered in _RELATIVE_DAYS:
        midnight = _now_datetime(now, tz).replace(hour=0, minute=0, second=0, microsecond=0)
        return _to_epoch(midnight + timedelta(days=_RELATIVE_DAYS[lowered]), tz)
    if text.startswith("@"):
        try:
            return float(text[1:])
        except ValueError:
            raise ParseError(date_str, kind="date", reason="bad epoch seconds") from None

    for fmt in _DATE_FORMATS:
        try:
            parsed = datetime.strptime(text, fmt)
        except ValueError:
            continue
        return _to_epoch(parsed, tz)

    try:
        parsed = datetime.fromisoformat(text.replace("Z", "+00:00"))
    except ValueError:
        raise ParseError(date_str, kind="date", reason="unrecognized date format") from None
    return _to_epoch(parsed, tz)


def parse_stamp(stamp: str, now: float, tz: str = "local") -> float:
    """
    Parse a ``[[CC]YY]MMDDhhmm[.ss]`` stamp into POSIX seconds.

    Without a year the year of ``now`` is used. Two-digit years 69-99 are
    19xx, 00-68 are 20xx. A seconds value of 60 is clamped to 59.

    Raises:
        ParseError: On a malformed stamp or out-of-range fields
    """
    match = _STAMP_RE.match(stamp.strip())
    if not match:
        raise ParseError(
            stamp, kind="timestamp", reason="expected [[CC]YY]MMDDhhmm[.ss]"
        )

    base = match.group("base")
    seconds = int(match.group("seconds") or 0)

    if len(base) == 12:
        year = int(base[:4])
        base = base[4:]
    elif len(base) == 10:
        yy = int(base[:2])
        year = 1900 + yy if yy >= 69 else 2000 + yy
        base = base[2:]
    else:
        year = _now_datetime(now, tz).year

    month, day, hour, minute = (int(base[i : i + 2]) for i in range(0, 8, 2))

    if seconds == 60:
        seconds = 59
    try:
        dt = datetime(year, month, day, hour, minute, seconds)
    except ValueError as e:
        raise ParseError(stamp, kind="timestamp", reason=str(e)) from None
    try:
        value = _to_epoch(dt, tz)
    except (OverflowError, OSError):
        raise ParseError(stamp, kind="timestamp", reason="timestamp out of range") from None
    return _checked_epoch(value, stamp, "timestamp")


def read_reference_times(reference_file: str) -> Tuple[float, float]:
    """Return the (atime, mtime) of ``reference_file``."""
    try:
        st = os.stat(reference_file)
    except FileNotFoundError:
        raise NotFoundError(reference_file, resource_type="reference file") from None
    except OSError as e:
        raise from_os_error(e, reference_file, "read reference file") from e
    return st.st_atime, st.st_mtime


def build_timestamp_spec(
    date_str: Optional[str] = None,
    stamp: Optional[str] = None,
    reference_file: Optional[str] = None,
) -> TimestampSpec:
    """Select the single timestamp source, rejecting combinations."""
    given = [
        (TimestampSource.DATE, "--date", date_str),
        (TimestampSource.STAMP, "--timestamp", stamp),
        (TimestampSource.REFERENCE, "--reference", reference_file),
    ]
    selected = [(src, flag, value) for src, flag, value in given if value is not None]
    if len(selected) > 1:
        flags = [flag for _, flag, _ in selected]
        raise ConfigurationConflictError(
            "Cannot specify multiple time sources (--date, --timestamp, --reference)",
            options=flags,
        )
    if not selected:
        return TimestampSpec(TimestampSource.NOW)
    src, _, value = selected[0]
    return TimestampSpec(src, value)


def resolve_times(
    now: float,
    date_str: Optional[str] = None,
    stamp: Optional[str] = None,
    reference_file: Optional[str] = None,
    atime_only: bool = False,
    mtime_only: bool = False,
    tz: str = "local",
) -> TimePair:
    """
    Compute the (access, modification) pair to apply.

    Args:
        now: Invocation time captured once at startup
        date_str: ``--date`` value
        stamp: ``--timestamp`` value
        reference_file: ``--reference`` value
        atime_only: Only apply the access time
        mtime_only: Only apply the modification time
        tz: How naive dates and stamps are read: "local" or "utc"

    Returns:
        TimePair. With both ``atime_only`` and ``mtime_only`` set, both fields apply.

    Raises:
        ConfigurationConflictError: More than one source given
        ParseError: Unparsable date or stamp
        NotFoundError: Missing reference file
    """
    spec = build_timestamp_spec(date_str, stamp, reference_file)
    _tzinfo(tz)

    if spec.source == TimestampSource.DATE:
        access = modification = parse_date_string(spec.value, now, tz)
    elif spec.source == TimestampSource.STAMP:
        access = modification = parse_stamp(spec.value, now, tz)
    elif spec.source == TimestampSource.REFERENCE:
        access, modification = read_reference_times(spec.value)
    else:
        access = modification = now

    only_one = atime_only != mtime_only
    return TimePair(
        access_time=access,
        modification_time=modification,
        apply_access=atime_only or not only_one,
        apply_modification=mtime_only or not only_one,
        now=now,
    )
