"""Exit codes for the relsync CLI.

Values are process exit statuses and must stay stable for release scripts
that branch on them:
- 0: Success
- 1: User error (bad options, invalid relsync.toml)
- 2: Manifest error (manifest unreadable, malformed, or missing a field)
- 3: Write error (secondary manifest could not be persisted)
- 4: Version-control error (staging or amending failed)
"""

from enum import IntEnum

__all__ = ["ErrorCode"]


class ErrorCode(IntEnum):
    """Exit codes for CLI commands."""

    OK = 0
    USER_ERROR = 1
    MANIFEST_ERROR = 2
    WRITE_ERROR = 3
    VCS_ERROR = 4

    def __str__(self) -> str:
        return self.name.lower().replace("_", " ")

    @property
    def is_success(self) -> bool:
        return self == ErrorCode.OK
