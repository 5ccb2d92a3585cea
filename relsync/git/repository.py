"""Git repository abstraction.

The Repository class wraps the two git operations the release step needs.
Both return Result types; git's own diagnostics are kept verbatim in
:class:`GitError`.

Usage:
    repo = Repository(Path("/path/to/repo"))

    match repo.add("src-tauri/Cargo.toml"):
        case Err(e):
            print(f"add failed: {e.message}")
        case Ok(_):
            pass

    match repo.amend_head(no_verify=True):
        case Ok(_):
            print("HEAD amended")
        case Err(e):
            print(f"amend failed: {e.message}")
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from relsync.core.result import Err, Ok, Result
from relsync.platform.process import ProcessError
from relsync.platform.process import run as run_process

__all__ = [
    "GitError",
    "Repository",
]


@dataclass(frozen=True, slots=True)
class GitError:
    """Error from a git operation.

    Attributes:
        command: The git command that failed
        message: Error message
        returncode: Process return code
    """

    command: str
    message: str
    returncode: int = 1


class Repository:
    """A single git working tree.

    Attributes:
        path: Path to the repository root
    """

    def __init__(self, path: Path) -> None:
        self.path = path

    def add(self, path: str) -> Result[None, GitError]:
        """Stage exactly one path.

        Blocks until git exits; there is no timeout.
        """
        result = self._run(["add", "--", path])
        match result:
            case Err(e):
                return Err(self._error("add", e))
            case Ok(_):
                return Ok(None)

    def amend_head(self, *, no_verify: bool = True) -> Result[None, GitError]:
        """Fold the index into HEAD, keeping its message.

        Runs ``git commit --amend --no-edit`` (plus ``--no-verify`` to skip
        pre-commit and commit-msg hooks). Fails when there is no commit to
        amend or a merge is in progress.
        """
        args = ["commit", "--amend", "--no-edit"]
        if no_verify:
            args.append("--no-verify")
        result = self._run(args)
        match result:
            case Err(e):
                return Err(self._error("commit --amend", e))
            case Ok(_):
                return Ok(None)

    def _run(self, args: list[str]) -> Result[str, ProcessError]:
        """Run a git command in this repository."""
        return run_process(["git", "-C", str(self.path), *args], cwd=self.path)

    @staticmethod
    def _error(command: str, e: ProcessError) -> GitError:
        return GitError(command=command, message=e.diagnostic, returncode=e.returncode)
