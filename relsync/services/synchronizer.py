"""Copy the primary manifest's version into the secondary manifest.

The secondary manifest is rewritten on every successful run, even when the
version already matches: the contract is "set and persist", which keeps
repeated runs safe without a separate comparison step.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from relsync.core.result import Err, Ok, Result
from relsync.platform.files import atomic_write_text
from relsync.services.manifest import ManifestDocument, load_manifest
from relsync.services.sync_errors import (
    FieldMissingError,
    Stage,
    SyncFailure,
    WriteError,
)
from relsync.services.version_reader import read_version


@dataclass(frozen=True, slots=True)
class SyncOutcome:
    """What a sync run did to the secondary manifest."""

    path: Path
    old_version: str
    new_version: str

    @property
    def changed(self) -> bool:
        return self.old_version != self.new_version


def read_secondary_version(
    manifest: ManifestDocument, field: str
) -> Result[str, FieldMissingError]:
    """The version string at field, rejecting tables and non-string values."""
    current = manifest.get(field)
    if isinstance(current, Err):
        return current
    if not isinstance(current.value, str):
        return Err(FieldMissingError(field=field, path=manifest.path, reason="not a string"))
    return Ok(current.value)


class VersionSynchronizer:
    """Reads the primary version and writes it into the secondary manifest."""

    def __init__(
        self,
        *,
        primary_field: str = "version",
        secondary_field: str = "package.version",
    ) -> None:
        self._primary_field = primary_field
        self._secondary_field = secondary_field

    def sync(
        self, *, primary_path: Path, secondary_path: Path
    ) -> Result[SyncOutcome, SyncFailure]:
        version = read_version(path=primary_path, field=self._primary_field)
        if isinstance(version, Err):
            return Err(SyncFailure(Stage.READ_PRIMARY, version.error))
        new_version = version.value

        doc = load_manifest(secondary_path)
        if isinstance(doc, Err):
            return Err(SyncFailure(Stage.PARSE_SECONDARY, doc.error))
        manifest = doc.value

        current = read_secondary_version(manifest, self._secondary_field)
        if isinstance(current, Err):
            return Err(SyncFailure(Stage.PATCH, current.error))
        old_version = current.value

        patched = manifest.set(self._secondary_field, new_version)
        if isinstance(patched, Err):
            return Err(SyncFailure(Stage.PATCH, patched.error))

        try:
            atomic_write_text(secondary_path, manifest.serialize(), encoding="utf-8")
        except OSError as e:
            return Err(
                SyncFailure(
                    Stage.WRITE,
                    WriteError(
                        path=secondary_path,
                        reason=f"failed to write {secondary_path.name}: {e}",
                    ),
                )
            )

        return Ok(
            SyncOutcome(path=secondary_path, old_version=old_version, new_version=new_version)
        )
