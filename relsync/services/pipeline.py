"""The release sync pipeline.

    Idle -> ReadPrimary -> ParseSecondary -> Patch -> Write -> Stage -> Amend -> Done

Any failure stops the run at that stage and is returned as a
:class:`SyncFailure`; nothing is retried or rolled back.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path, PurePath

from relsync.core.config import ManifestsConfig
from relsync.core.result import Err, Ok, Result
from relsync.output.console import ConsoleProtocol, Style
from relsync.services.amender import CommitAmender, VersionControl
from relsync.services.manifest import load_manifest
from relsync.services.sync_errors import Stage, SyncFailure
from relsync.services.synchronizer import SyncOutcome, VersionSynchronizer, read_secondary_version
from relsync.services.version_reader import read_version

__all__ = ["SyncReport", "check_sync", "run_sync"]


@dataclass(frozen=True, slots=True)
class SyncReport:
    primary_version: str
    secondary_version: str

    @property
    def in_sync(self) -> bool:
        return self.primary_version == self.secondary_version


def _git_path(relative: str) -> str:
    return PurePath(relative).as_posix()


def run_sync(
    *,
    root: Path,
    manifests: ManifestsConfig,
    vcs: VersionControl,
    console: ConsoleProtocol,
) -> Result[SyncOutcome, SyncFailure]:
    """Sync the secondary manifest's version and amend it into HEAD."""
    synchronizer = VersionSynchronizer(
        primary_field=manifests.primary_field,
        secondary_field=manifests.secondary_field,
    )
    synced = synchronizer.sync(
        primary_path=manifests.primary_path(root),
        secondary_path=manifests.secondary_path(root),
    )
    if isinstance(synced, Err):
        return synced
    outcome = synced.value

    console.info(f"Current version: {outcome.new_version}")
    if outcome.changed:
        console.print(f"{manifests.secondary}: {outcome.old_version} -> {outcome.new_version}")
    else:
        console.print(f"{manifests.secondary}: already {outcome.new_version}", Style.DIM)
    console.success(f"Updated {manifests.secondary} to {outcome.new_version}")

    amended = CommitAmender(vcs).amend(_git_path(manifests.secondary))
    if isinstance(amended, Err):
        return amended

    console.success(f"Amended {manifests.secondary} into the release commit")
    return Ok(outcome)


def check_sync(*, root: Path, manifests: ManifestsConfig) -> Result[SyncReport, SyncFailure]:
    """Compare both manifests without writing anything."""
    primary = read_version(path=manifests.primary_path(root), field=manifests.primary_field)
    if isinstance(primary, Err):
        return Err(SyncFailure(Stage.READ_PRIMARY, primary.error))

    doc = load_manifest(manifests.secondary_path(root))
    if isinstance(doc, Err):
        return Err(SyncFailure(Stage.PARSE_SECONDARY, doc.error))

    current = read_secondary_version(doc.value, manifests.secondary_field)
    if isinstance(current, Err):
        return Err(SyncFailure(Stage.PATCH, current.error))

    return Ok(SyncReport(primary_version=primary.value, secondary_version=current.value))
