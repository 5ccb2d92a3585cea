from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from pathlib import Path


class Stage(Enum):
    """Pipeline states that can fail, in execution order."""

    READ_PRIMARY = "read_primary"
    PARSE_SECONDARY = "parse_secondary"
    PATCH = "patch"
    WRITE = "write"
    STAGE = "stage"
    AMEND = "amend"

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True, slots=True)
class ReadError:
    path: Path | None
    reason: str


@dataclass(frozen=True, slots=True)
class FieldMissingError:
    field: str
    path: Path | None = None
    reason: str = "missing"


@dataclass(frozen=True, slots=True)
class WriteError:
    path: Path
    reason: str


@dataclass(frozen=True, slots=True)
class VersionControlError:
    command: str
    message: str
    returncode: int = 1


SyncError = ReadError | FieldMissingError | WriteError | VersionControlError


@dataclass(frozen=True, slots=True)
class SyncFailure:
    stage: Stage
    error: SyncError
