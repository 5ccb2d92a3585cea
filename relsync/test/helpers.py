"""Manifest fixtures and git helpers shared by the tests."""

from __future__ import annotations

import json
import shutil
import subprocess
from pathlib import Path

import pytest

requires_git = pytest.mark.skipif(shutil.which("git") is None, reason="git not installed")

CARGO_TOML = """\
# Native shell for the flow editor
[package]
name = "flow-editor"
version = "0.1.4" # kept in step with package.json
description = "Node graph editor"
authors = ["flow team"]
edition = "2021"

[package.metadata.bundle]
version = "bundle-1"

[build-dependencies]
tauri-build = { version = "2", features = [] }

[dependencies]
serde = { version = "1", features = ["derive"] }
tauri = { version = "2", features = [] }
"""


def write_package_json(root: Path, version: object = "0.1.7") -> Path:
    path = root / "package.json"
    data: dict[str, object] = {"name": "flow-editor", "private": True}
    if version is not None:
        data["version"] = version
    path.write_text(json.dumps(data, indent=2) + "\n", encoding="utf-8")
    return path


def write_cargo_toml(root: Path, text: str = CARGO_TOML) -> Path:
    path = root / "src-tauri" / "Cargo.toml"
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_bytes(text.encode("utf-8"))
    return path


def git(repo: Path, *args: str) -> str:
    proc = subprocess.run(
        ["git", "-C", str(repo), *args],
        capture_output=True,
        text=True,
        check=True,
    )
    return proc.stdout.strip()


def head_sha(repo: Path) -> str | None:
    proc = subprocess.run(
        ["git", "-C", str(repo), "rev-parse", "--verify", "--quiet", "HEAD"],
        capture_output=True,
        text=True,
        check=False,
    )
    return proc.stdout.strip() or None


def commit_count(repo: Path) -> int:
    if head_sha(repo) is None:
        return 0
    return int(git(repo, "rev-list", "--count", "HEAD"))


def is_clean(repo: Path, *paths: str) -> bool:
    args = ["status", "--porcelain=v1"]
    if paths:
        args += ["--", *paths]
    return git(repo, *args) == ""
