# Copyright (c) 2026 Beijing Volcano Engine Technology Co., Ltd.
# SPDX-License-Identifier: Apache-2.0
"""
Per-path action dispatcher: create the entry, set permissions, apply times.

Each path is processed independently. Filesystem failures are captured in the
returned PathResult so the rest of the batch still runs.
"""

import os
from typing import Iterable, List, Optional

from bank_cli.core.prompt import PromptProvider
from bank_cli.core.type_resolver import (
    existing_type,
    resolve_type,
    validate_type_flags,
)
from bank_cli.core.types import EntryType, PathRequest, PathResult, PathStatus, TimePair
from bank_cli.exceptions import (
    BankError,
    ConfigurationConflictError,
    FilesystemError,
    ParseError,
    from_os_error,
)
from bank_cli.utils.logger import get_logger

logger = get_logger(__name__)

_MAX_MODE = 0o7777


def parse_mode(mode_str: str) -> int:
    """Parse an octal permission string such as ``755``, ``0644`` or ``0o700``."""
    text = mode_str.strip().lower()
    if text.startswith("0o"):
        text = text[2:]
    if not text or any(c not in "01234567" for c in text):
        raise ParseError(mode_str, kind="mode", reason="expected an octal number such as 755")
    mode = int(text, 8)
    if mode > _MAX_MODE:
        raise ParseError(mode_str, kind="mode", reason="out of range")
    return mode


def _target(path: str) -> str:
    """Strip trailing separators, keeping a bare root intact."""
    stripped = path.rstrip(os.sep + (os.altsep or "") + "/")
    return stripped or path


def _exists(target: str, no_dereference: bool) -> bool:
    if no_dereference:
        return os.path.lexists(target)
    return os.path.exists(target)


def create_directory(target: str, parents: bool = False, mode: Optional[int] = None) -> bool:
    """
    Create ``target`` as a directory.

    Returns:
        True if the directory was created, False if it already existed
    """
    if os.path.isdir(target):
        logger.debug(f"Directory already exists: {target}")
        created = False
    elif os.path.lexists(target):
        raise FilesystemError(f"Path exists but is not a directory: {target}", resource=target)
    else:
        if parents:
            os.makedirs(target, exist_ok=True)
        else:
            os.mkdir(target)
        created = True

    if mode is not None:
        os.chmod(target, mode)
    return created


def create_file(
    target: str,
    parents: bool = False,
    mode: Optional[int] = None,
    no_dereference: bool = False,
) -> bool:
    """
    Create ``target`` as an empty file if absent.

    ``mode`` only applies to a newly created file.

    Returns:
        True if the file was created, False if something already existed
    """
    if _exists(target, no_dereference):
        logger.debug(f"File already exists: {target}")
        return False

    parent = os.path.dirname(target)
    if parents and parent and not os.path.isdir(parent):
        os.makedirs(parent, exist_ok=True)
        logger.debug(f"Created parent directories: {parent}")

    with open(target, "a"):
        pass
    if mode is not None:
        os.chmod(target, mode)
    return True


def apply_times(
    target: str,
    times: TimePair,
    created: bool = False,
    no_dereference: bool = False,
) -> None:
    """Write the resolved access/modification times to ``target``."""
    follow = not no_dereference
    if not follow and os.path.islink(target) and os.utime not in os.supports_follow_symlinks:
        raise FilesystemError(
            f"Setting timestamps on symlinks is not supported on this platform: {target}",
            resource=target,
        )

    if times.apply_access and times.apply_modification:
        access, modification = times.access_time, times.modification_time
    else:
        if created and times.now is not None:
            current = (times.now, times.now)
        else:
            st = os.stat(target, follow_symlinks=follow)
            current = (st.st_atime, st.st_mtime)
        access = times.access_time if times.apply_access else current[0]
        modification = times.modification_time if times.apply_modification else current[1]

    try:
        os.utime(target, (access, modification), follow_symlinks=follow)
    except (ValueError, OverflowError) as e:
        raise FilesystemError(
            f"Failed to set timestamps on {target}: {e}", resource=target, cause=e
        ) from e
    logger.debug(f"Updated timestamps for {target}: atime={access} mtime={modification}")


def process_path(
    request: PathRequest,
    prompt: Optional[PromptProvider] = None,
    default_type: EntryType = EntryType.FILE,
) -> PathResult:
    """
    Process one path.

    Raises:
        ConfigurationConflictError: Both ``--file`` and ``--directory`` are set.
            Every other error is returned as a FAILED PathResult.
    """
    validate_type_flags(request.explicit_file, request.explicit_dir)

    path = request.path
    target = _target(path)
    entry_type = None
    try:
        if request.no_create:
            if not _exists(target, request.no_dereference):
                logger.info(f"Skipping non-existent path in no-create mode: {path}")
                return PathResult(path=path, status=PathStatus.SKIPPED)
            entry_type = existing_type(target, no_dereference=request.no_dereference)
            apply_times(target, request.times, no_dereference=request.no_dereference)
            return PathResult(path=path, status=PathStatus.UPDATED, entry_type=entry_type)

        entry_type = resolve_type(
            path,
            explicit_file=request.explicit_file,
            explicit_dir=request.explicit_dir,
            interactive=request.interactive,
            prompt=prompt,
            no_dereference=request.no_dereference,
            default=default_type,
        )

        if entry_type == EntryType.DIRECTORY:
            created = create_directory(target, parents=request.parents, mode=request.mode)
        else:
            created = create_file(
                target,
                parents=request.parents,
                mode=request.mode,
                no_dereference=request.no_dereference,
            )

        if not created:
            entry_type = existing_type(target, no_dereference=request.no_dereference) or entry_type
        apply_times(target, request.times, created=created, no_dereference=request.no_dereference)
        status = PathStatus.CREATED if created else PathStatus.UPDATED
        return PathResult(path=path, status=status, entry_type=entry_type)

    except ConfigurationConflictError:
        raise
    except BankError as e:
        error = e
    except OSError as e:
        error = from_os_error(e, path, f"process {entry_type.value if entry_type else 'path'}")
    except (ValueError, OverflowError) as e:
        error = FilesystemError(f"Failed to process {path}: {e}", resource=path, cause=e)

    logger.info(f"Failed to process {path}: {error.message}")
    return PathResult(
        path=path,
        status=PathStatus.FAILED,
        entry_type=entry_type,
        error_code=error.code,
        error=error.message,
    )


def process_batch(
    requests: Iterable[PathRequest],
    prompt: Optional[PromptProvider] = None,
    default_type: EntryType = EntryType.FILE,
) -> List[PathResult]:
    """
    Process requests in order, one result per request.

    Flag conflicts are checked for every request before anything is touched.
    """
    requests = list(requests)
    for request in requests:
        validate_type_flags(request.explicit_file, request.explicit_dir)
    return [process_path(r, prompt=prompt, default_type=default_type) for r in requests]
