"""Tests for VersionSynchronizer."""

from __future__ import annotations

import tomllib
from pathlib import Path

import pytest

from relsync.core.result import Err, Ok, Result
from relsync.services import synchronizer as synchronizer_module
from relsync.services.sync_errors import (
    FieldMissingError,
    ReadError,
    Stage,
    SyncFailure,
    WriteError,
)
from relsync.services.manifest import ManifestDocument
from relsync.services.synchronizer import SyncOutcome, VersionSynchronizer, read_secondary_version
from relsync.test.helpers import CARGO_TOML, write_cargo_toml, write_package_json


@pytest.fixture
def manifests(tmp_path: Path) -> tuple[Path, Path]:
    return write_package_json(tmp_path, "0.1.7"), write_cargo_toml(tmp_path)


def sync(primary: Path, secondary: Path) -> Result[SyncOutcome, SyncFailure]:
    return VersionSynchronizer().sync(primary_path=primary, secondary_path=secondary)


class TestReadSecondaryVersion:
    def test_string_value(self) -> None:
        doc = ManifestDocument.parse(CARGO_TOML)
        assert isinstance(doc, Ok)

        assert read_secondary_version(doc.value, "package.version") == Ok("0.1.4")

    @pytest.mark.parametrize("field", ["package.metadata", "package.authors"])
    def test_non_string_value(self, field: str) -> None:
        doc = ManifestDocument.parse(CARGO_TOML)
        assert isinstance(doc, Ok)

        assert read_secondary_version(doc.value, field) == Err(
            FieldMissingError(field=field, reason="not a string")
        )

    def test_missing_value(self) -> None:
        doc = ManifestDocument.parse("[package]\n")
        assert isinstance(doc, Ok)

        assert read_secondary_version(doc.value, "package.version") == Err(
            FieldMissingError(field="package.version")
        )


class TestSync:
    def test_updates_version(self, manifests: tuple[Path, Path]) -> None:
        primary, secondary = manifests

        result = sync(primary, secondary)

        assert result == Ok(SyncOutcome(path=secondary, old_version="0.1.4", new_version="0.1.7"))
        assert result.value.changed
        assert secondary.read_text(encoding="utf-8") == CARGO_TOML.replace(
            'version = "0.1.4"', 'version = "0.1.7"'
        )

    @pytest.mark.parametrize("version", ["0.0.1", "1.0.0-rc.1", "2.3.4+meta.7", "10.20.30"])
    def test_secondary_matches_primary_exactly(self, tmp_path: Path, version: str) -> None:
        primary = write_package_json(tmp_path, version)
        secondary = write_cargo_toml(tmp_path)

        assert isinstance(sync(primary, secondary), Ok)

        assert tomllib.loads(secondary.read_text(encoding="utf-8"))["package"]["version"] == version

    def test_equal_version_still_rewrites_file(self, tmp_path: Path) -> None:
        primary = write_package_json(tmp_path, "0.1.4")
        secondary = write_cargo_toml(tmp_path)
        inode_before = secondary.stat().st_ino

        result = sync(primary, secondary)

        assert isinstance(result, Ok)
        assert not result.value.changed
        assert secondary.read_text(encoding="utf-8") == CARGO_TOML
        assert secondary.stat().st_ino != inode_before

    def test_custom_fields(self, tmp_path: Path) -> None:
        primary = tmp_path / "app.json"
        primary.write_text('{"appVersion": "3.0.0"}', encoding="utf-8")
        secondary = write_cargo_toml(tmp_path)

        result = VersionSynchronizer(
            primary_field="appVersion",
            secondary_field="package.metadata.bundle.version",
        ).sync(primary_path=primary, secondary_path=secondary)

        assert isinstance(result, Ok)
        assert result.value.old_version == "bundle-1"
        assert 'version = "3.0.0"' in secondary.read_text(encoding="utf-8")
        assert 'version = "0.1.4"' in secondary.read_text(encoding="utf-8")


class TestFailures:
    def test_missing_primary_writes_nothing(self, tmp_path: Path) -> None:
        secondary = write_cargo_toml(tmp_path)

        result = sync(tmp_path / "package.json", secondary)

        assert isinstance(result, Err)
        assert result.error.stage is Stage.READ_PRIMARY
        assert isinstance(result.error.error, ReadError)
        assert secondary.read_text(encoding="utf-8") == CARGO_TOML

    def test_primary_without_version_writes_nothing(self, tmp_path: Path) -> None:
        primary = write_package_json(tmp_path, None)
        secondary = write_cargo_toml(tmp_path)

        result = sync(primary, secondary)

        assert result == Err(
            SyncFailure(Stage.READ_PRIMARY, FieldMissingError(field="version", path=primary))
        )
        assert secondary.read_text(encoding="utf-8") == CARGO_TOML

    def test_malformed_secondary(self, tmp_path: Path) -> None:
        primary = write_package_json(tmp_path)
        secondary = write_cargo_toml(tmp_path, "[package\n")

        result = sync(primary, secondary)

        assert isinstance(result, Err)
        assert result.error.stage is Stage.PARSE_SECONDARY
        assert isinstance(result.error.error, ReadError)

    def test_missing_package_table_leaves_file_unchanged(self, tmp_path: Path) -> None:
        text = '[workspace]\nmembers = ["src-tauri"]\n'
        primary = write_package_json(tmp_path)
        secondary = write_cargo_toml(tmp_path, text)

        result = sync(primary, secondary)

        assert result == Err(
            SyncFailure(Stage.PATCH, FieldMissingError(field="package.version", path=secondary))
        )
        assert secondary.read_bytes() == text.encode("utf-8")

    def test_non_string_version(self, tmp_path: Path) -> None:
        text = "[package]\nversion.workspace = true\n"
        primary = write_package_json(tmp_path)
        secondary = write_cargo_toml(tmp_path, text)

        result = sync(primary, secondary)

        assert isinstance(result, Err)
        assert result.error.stage is Stage.PATCH
        assert result.error.error == FieldMissingError(
            field="package.version", path=secondary, reason="not a string"
        )
        assert secondary.read_text(encoding="utf-8") == text

    def test_write_failure(
        self, manifests: tuple[Path, Path], monkeypatch: pytest.MonkeyPatch
    ) -> None:
        primary, secondary = manifests

        def fail_write(_path: Path, _content: str, *, encoding: str = "utf-8") -> None:
            raise OSError("No space left on device")

        monkeypatch.setattr(synchronizer_module, "atomic_write_text", fail_write)

        result = sync(primary, secondary)

        assert isinstance(result, Err)
        assert result.error.stage is Stage.WRITE
        assert isinstance(result.error.error, WriteError)
        assert "No space left" in result.error.error.reason
        assert secondary.read_text(encoding="utf-8") == CARGO_TOML
