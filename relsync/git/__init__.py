"""Git operations module.

Usage:
    from relsync.git import Repository

    repo = Repository(Path("/path/to/repo"))
    repo.add("src-tauri/Cargo.toml")
    repo.amend_head(no_verify=True)
"""

from relsync.git.repository import (
    GitError,
    Repository,
)

__all__ = [
    "GitError",
    "Repository",
]
