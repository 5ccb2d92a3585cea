"""Format-preserving TOML manifest document.

``tomllib`` gives us a validated, ordered view of the document but cannot
write it back. The document therefore keeps the original lines and only
rewrites the value token of the line being set, so comments, key order,
spacing and line endings survive a read-modify-write cycle untouched.

Usage:
    match ManifestDocument.parse(text):
        case Ok(doc):
            doc.set("package.version", "0.1.7")
            path.write_text(doc.serialize())
        case Err(e):
            print(e.reason)
"""

from __future__ import annotations

import copy
import json
import re
import tomllib
from pathlib import Path

from relsync.core.result import Err, Ok, Result
from relsync.core.structured import StrDict, as_str_dict, lookup
from relsync.services.sync_errors import FieldMissingError, ReadError

__all__ = ["ManifestDocument", "load_manifest"]

_SEGMENT = r"""[A-Za-z0-9_-]+|"(?:[^"\\\n]|\\.)*"|'[^'\n]*'"""
_DOTTED = rf"(?:{_SEGMENT})(?:\s*\.\s*(?:{_SEGMENT}))*"

_TABLE_HEADER_RE = re.compile(rf"^\s*\[\s*(?P<key>{_DOTTED})\s*\]\s*(?:#.*)?$")
_ARRAY_HEADER_RE = re.compile(rf"^\s*\[\[\s*(?P<key>{_DOTTED})\s*\]\]\s*(?:#.*)?$")
_STRING_ENTRY_RE = re.compile(
    rf"""^(?P<lead>\s*(?P<key>{_SEGMENT})\s*=\s*)"""
    r"""(?P<value>"(?:[^"\\\n]|\\.)*"|'[^'\n]*')"""
    r"""(?P<trail>\s*(?:#.*)?)$"""
)
_SEGMENT_RE = re.compile(_SEGMENT)


def _decode_segment(raw: str) -> str:
    if raw[0] in "\"'":
        return tomllib.loads(f"k = {raw}")["k"]
    return raw


def _split_dotted(raw: str) -> tuple[str, ...]:
    return tuple(_decode_segment(m.group(0)) for m in _SEGMENT_RE.finditer(raw))


def _is_literal_safe(value: str) -> bool:
    return all(c == "\t" or (c >= " " and c not in "'\x7f") for c in value)


def _format_string(value: str, *, like: str) -> str:
    """Render value as a TOML string, keeping the literal quote style when possible."""
    if like.startswith("'") and _is_literal_safe(value):
        return f"'{value}'"
    return json.dumps(value, ensure_ascii=False).replace("\x7f", "\\u007f")


def _open_string_after(body: str, open_delimiter: str | None) -> str | None:
    """Multi-line string delimiter still open at the end of a line, if any.

    Single-line strings and comments are skipped so quote runs inside them
    are not mistaken for multi-line delimiters.
    """
    i, n = 0, len(body)
    while i < n:
        if open_delimiter is not None:
            quote = open_delimiter[0]
            c = body[i]
            if quote == '"' and c == "\\":
                i += 2
                continue
            if c != quote:
                i += 1
                continue
            run = len(body[i:]) - len(body[i:].lstrip(quote))
            i += run
            # A closing run may carry up to two quotes of content before it.
            if run >= 3:
                open_delimiter = None
            continue

        c = body[i]
        if c == "#":
            break
        if c not in "\"'":
            i += 1
            continue
        if body.startswith(c * 3, i):
            open_delimiter = c * 3
            i += 3
            continue
        i += 1
        while i < n and body[i] != c:
            i += 2 if c == '"' and body[i] == "\\" else 1
        i += 1
    return open_delimiter


def _split_path(path: str) -> tuple[str, ...] | None:
    parts = tuple(path.split("."))
    if not path or any(not p for p in parts):
        return None
    return parts


class ManifestDocument:
    """A parsed TOML manifest that serializes back to its original text.

    Attributes:
        path: Where the text came from, if loaded from disk (used in errors)
    """

    def __init__(self, lines: list[str], data: StrDict, *, path: Path | None = None) -> None:
        self._lines = lines
        self._data = data
        self.path = path

    @classmethod
    def parse(
        cls, text: str, *, path: Path | None = None
    ) -> Result[ManifestDocument, ReadError]:
        """Parse TOML text.

        Returns:
            Ok(ManifestDocument) on success
            Err(ReadError) if the text is not valid TOML
        """
        try:
            data = tomllib.loads(text)
        except tomllib.TOMLDecodeError as e:
            name = path.name if path is not None else "manifest"
            return Err(ReadError(path=path, reason=f"invalid TOML in {name}: {e}"))
        return Ok(cls(text.splitlines(keepends=True), data, path=path))

    def serialize(self) -> str:
        return "".join(self._lines)

    def as_dict(self) -> StrDict:
        """The structured view, in document order."""
        return self._data

    def get(self, path: str) -> Result[object, FieldMissingError]:
        """Value at a dotted path such as ``package.version``."""
        parts = _split_path(path)
        if parts is None:
            return Err(FieldMissingError(field=path, path=self.path, reason="empty field path"))
        found, value = lookup(self._data, parts)
        if not found:
            return Err(FieldMissingError(field=path, path=self.path))
        return Ok(value)

    def set(self, path: str, value: str) -> Result[None, FieldMissingError]:
        """Replace the string at a dotted path, touching only its value token.

        The field must already exist as a single-line string declared under
        its own table header (or at the top level). Nothing is ever created.
        """
        parts = _split_path(path)
        if parts is None:
            return Err(FieldMissingError(field=path, path=self.path, reason="empty field path"))

        parent, key = parts[:-1], parts[-1]
        found, table_obj = lookup(self._data, parent)
        table = as_str_dict(table_obj) if found else None
        if table is None:
            missing = ".".join(parent) or path
            return Err(FieldMissingError(field=missing, path=self.path))
        if key not in table:
            return Err(FieldMissingError(field=path, path=self.path))

        located = self._find_string_entry(parent, key)
        if located is None:
            return Err(
                FieldMissingError(
                    field=path,
                    path=self.path,
                    reason="not a single-line string under its table header",
                )
            )

        index, m = located
        line = self._lines[index]
        ending = line[len(line.rstrip("\r\n")) :]
        rendered = _format_string(value, like=m.group("value"))
        self._lines[index] = m.group("lead") + rendered + m.group("trail") + ending

        # The rewritten text must parse to the old data with only this field changed.
        expected = copy.deepcopy(self._data)
        expected_table = as_str_dict(lookup(expected, parent)[1])
        if expected_table is not None:
            expected_table[key] = value
        try:
            reparsed = tomllib.loads(self.serialize())
        except tomllib.TOMLDecodeError:
            reparsed = None
        if reparsed != expected:
            self._lines[index] = line
            return Err(
                FieldMissingError(field=path, path=self.path, reason="rewrite did not round-trip")
            )
        self._data = expected
        return Ok(None)

    def _find_string_entry(
        self, table: tuple[str, ...], key: str
    ) -> tuple[int, re.Match[str]] | None:
        current: tuple[str, ...] | None = ()
        open_delimiter: str | None = None

        for index, line in enumerate(self._lines):
            body = line.rstrip("\r\n")

            if open_delimiter is not None:
                open_delimiter = _open_string_after(body, open_delimiter)
                continue

            opened = _open_string_after(body, None)
            if opened is not None:
                open_delimiter = opened
                continue

            header = _TABLE_HEADER_RE.match(body)
            if header is not None:
                current = _split_dotted(header.group("key"))
                continue
            if _ARRAY_HEADER_RE.match(body) is not None:
                # Entries of [[array]] tables are not addressable by path.
                current = None
                continue

            if current != table:
                continue
            entry = _STRING_ENTRY_RE.match(body)
            if entry is not None and _decode_segment(entry.group("key")) == key:
                return (index, entry)
        return None


def load_manifest(path: Path) -> Result[ManifestDocument, ReadError]:
    """Read and parse a TOML manifest from disk, keeping its line endings."""
    try:
        text = path.read_bytes().decode("utf-8")
    except FileNotFoundError:
        return Err(ReadError(path=path, reason=f"{path.name} not found"))
    except (OSError, UnicodeDecodeError) as e:
        return Err(ReadError(path=path, reason=f"failed to read {path.name}: {e}"))
    return ManifestDocument.parse(text, path=path)
