from __future__ import annotations

from pathlib import Path

import pytest

from relsync.test.helpers import git, write_cargo_toml, write_package_json


@pytest.fixture
def isolated_git_env(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep the developer's git config and hooks out of the tests."""
    global_config = tmp_path / "gitconfig"
    global_config.write_text(
        "[user]\n\tname = Release Bot\n\temail = release@example.com\n"
        "[commit]\n\tgpgsign = false\n"
        "[init]\n\tdefaultBranch = main\n",
        encoding="utf-8",
    )
    monkeypatch.setenv("GIT_CONFIG_GLOBAL", str(global_config))
    monkeypatch.setenv("GIT_CONFIG_NOSYSTEM", "1")


@pytest.fixture
def empty_repo(tmp_path: Path, isolated_git_env: None) -> Path:
    """A git repository with no commits."""
    repo = tmp_path / "app"
    repo.mkdir()
    git(repo, "init", "--quiet")
    return repo


@pytest.fixture
def release_repo(empty_repo: Path) -> Path:
    """A repository whose HEAD is a release commit bumping package.json to 0.1.7."""
    write_cargo_toml(empty_repo)
    write_package_json(empty_repo, "0.1.4")
    git(empty_repo, "add", "-A")
    git(empty_repo, "commit", "--quiet", "-m", "chore: initial")

    write_package_json(empty_repo, "0.1.7")
    git(empty_repo, "add", "package.json")
    git(empty_repo, "commit", "--quiet", "-m", "chore(release): 0.1.7")
    return empty_repo
