# Copyright (c) 2026 Beijing Volcano Engine Technology Co., Ltd.
# SPDX-License-Identifier: Apache-2.0
"""
Unified exception classes for bank.

Every error carries a stable code so the CLI can map it to output and exit status.
"""

from typing import Optional


class BankError(Exception):
    """Base exception for all bank errors."""

    def __init__(self, message: str, code: str = "UNKNOWN", details: Optional[dict] = None):
        super().__init__(message)
        self.message = message
        self.code = code
        self.details = details or {}


# ============= Argument Errors =============


class ConfigurationConflictError(BankError):
    """Mutually exclusive options were given together."""

    def __init__(self, message: str, options: Optional[list] = None):
        details = {"options": options} if options else {}
        super().__init__(message, code="CONFIGURATION_CONFLICT", details=details)


class ParseError(BankError):
    """A date, stamp or mode string could not be parsed."""

    def __init__(self, value: str, kind: str = "value", reason: str = ""):
        message = f"Invalid {kind}: {value!r}"
        if reason:
            message += f" ({reason})"
        super().__init__(
            message, code="PARSE_ERROR", details={"value": value, "kind": kind, "reason": reason}
        )


# ============= Filesystem Errors =============


class NotFoundError(BankError):
    """Path not found."""

    def __init__(self, resource: str, resource_type: str = "path", message: Optional[str] = None):
        message = message or f"{resource_type.capitalize()} not found: {resource}"
        super().__init__(
            message, code="NOT_FOUND", details={"resource": resource, "type": resource_type}
        )


class PromptUnavailableError(NotFoundError):
    """Interactive type selection was requested without a terminal."""

    def __init__(self, path: str):
        super().__init__(
            path,
            resource_type="terminal",
            message=f"Cannot ask whether {path!r} is a file or directory: stdin is not a terminal",
        )


class PermissionDeniedError(BankError):
    """Permission denied for the requested operation."""

    def __init__(self, message: str = "Permission denied", resource: Optional[str] = None):
        details = {"resource": resource} if resource else {}
        super().__init__(message, code="PERMISSION_DENIED", details=details)


class FilesystemError(BankError):
    """Generic create, chmod or timestamp syscall failure."""

    def __init__(self, message: str, resource: Optional[str] = None, cause: Optional[Exception] = None):
        details = {}
        if resource:
            details["resource"] = resource
        if cause:
            details["cause"] = str(cause)
        super().__init__(message, code="IO_ERROR", details=details)


def from_os_error(exc: OSError, path: str, action: str) -> BankError:
    """Translate an OSError raised while performing ``action`` on ``path``."""
    reason = exc.strerror or str(exc)
    if isinstance(exc, PermissionError):
        return PermissionDeniedError(f"Failed to {action}: {reason}", resource=path)
    if isinstance(exc, FileNotFoundError):
        return NotFoundError(path)
    return FilesystemError(f"Failed to {action}: {reason}", resource=path, cause=exc)
