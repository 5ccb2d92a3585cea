"""Error presentation utilities.

Every failure is rendered as a single line naming the pipeline stage and
the underlying cause, and mapped to a stable exit code.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from relsync.core.errors import ErrorCode
from relsync.services.sync_errors import (
    FieldMissingError,
    ReadError,
    SyncError,
    SyncFailure,
    VersionControlError,
    WriteError,
)

if TYPE_CHECKING:
    from relsync.output.console import ConsoleProtocol

__all__ = ["describe_sync_error", "print_sync_failure", "sync_failure_exit_code"]


def describe_sync_error(error: SyncError) -> str:
    match error:
        case ReadError(path=path, reason=reason):
            return f"{reason} ({path})" if path is not None else reason
        case FieldMissingError(field=field, path=path, reason=reason):
            where = f" in {path}" if path is not None else ""
            return f"field '{field}'{where}: {reason}"
        case WriteError(path=path, reason=reason):
            return f"{reason} ({path})"
        case VersionControlError(command=command, message=message):
            return f"{command} failed: {message}"
    # Fallback for exhaustiveness
    return str(error)


def print_sync_failure(failure: SyncFailure, console: ConsoleProtocol) -> None:
    """Print a pipeline failure to console as one diagnostic line."""
    console.error(f"[{failure.stage}] {describe_sync_error(failure.error)}")


def sync_failure_exit_code(failure: SyncFailure) -> int:
    """Get exit code for a pipeline failure."""
    match failure.error:
        case ReadError() | FieldMissingError():
            return int(ErrorCode.MANIFEST_ERROR)
        case WriteError():
            return int(ErrorCode.WRITE_ERROR)
        case VersionControlError():
            return int(ErrorCode.VCS_ERROR)
    return int(ErrorCode.USER_ERROR)
