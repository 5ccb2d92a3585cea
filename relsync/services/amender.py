"""Fold the rewritten secondary manifest into the release commit.

The version-control side is a two-operation capability so the pipeline
can run against a real git checkout (:class:`GitVersionControl`) or an
in-memory recorder (:class:`RecordingVersionControl`).

A failure here leaves the secondary manifest modified but uncommitted;
the earlier write is not rolled back.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Literal, Protocol

from relsync.core.result import Err, Ok, Result
from relsync.git.repository import GitError, Repository
from relsync.services.sync_errors import Stage, SyncFailure, VersionControlError

__all__ = [
    "CommitAmender",
    "GitVersionControl",
    "RecordingVersionControl",
    "VersionControl",
]


class VersionControl(Protocol):
    """The version-control operations the release step needs."""

    def stage(self, path: str) -> Result[None, VersionControlError]:
        """Add one path (relative to the repository root) to the index."""
        ...

    def amend_head_commit(self) -> Result[None, VersionControlError]:
        """Rewrite HEAD with the index, keeping its message and skipping hooks."""
        ...


def _from_git(error: GitError) -> VersionControlError:
    return VersionControlError(
        command=f"git {error.command}",
        message=error.message,
        returncode=error.returncode,
    )


class GitVersionControl:
    """VersionControl backed by the git CLI."""

    def __init__(self, repo: Repository) -> None:
        self._repo = repo

    def stage(self, path: str) -> Result[None, VersionControlError]:
        return self._repo.add(path).map_err(_from_git)

    def amend_head_commit(self) -> Result[None, VersionControlError]:
        return self._repo.amend_head(no_verify=True).map_err(_from_git)


Operation = Literal["stage", "amend"]


def _empty_calls() -> list[tuple[str, str | None]]:
    return []


@dataclass
class RecordingVersionControl:
    """VersionControl that records calls instead of touching a repository.

    Set ``fail_on`` to make one operation fail with ``failure_message``.
    """

    fail_on: Operation | None = None
    failure_message: str = "simulated failure"
    calls: list[tuple[str, str | None]] = field(default_factory=_empty_calls)

    def stage(self, path: str) -> Result[None, VersionControlError]:
        self.calls.append(("stage", path))
        if self.fail_on == "stage":
            return Err(VersionControlError(command="stage", message=self.failure_message))
        return Ok(None)

    def amend_head_commit(self) -> Result[None, VersionControlError]:
        self.calls.append(("amend", None))
        if self.fail_on == "amend":
            return Err(VersionControlError(command="amend", message=self.failure_message))
        return Ok(None)

    @property
    def staged(self) -> list[str]:
        return [p for op, p in self.calls if op == "stage" and p is not None]

    @property
    def amended(self) -> bool:
        return ("amend", None) in self.calls


class CommitAmender:
    """Stages one file and amends it into HEAD."""

    def __init__(self, vcs: VersionControl) -> None:
        self._vcs = vcs

    def amend(self, relative_path: str) -> Result[None, SyncFailure]:
        staged = self._vcs.stage(relative_path)
        if isinstance(staged, Err):
            return Err(SyncFailure(Stage.STAGE, staged.error))

        amended = self._vcs.amend_head_commit()
        if isinstance(amended, Err):
            return Err(SyncFailure(Stage.AMEND, amended.error))

        return Ok(None)
