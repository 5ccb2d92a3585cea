"""Read the authoritative version from the primary (JSON) manifest."""

from __future__ import annotations

import json
from pathlib import Path

from relsync.core.result import Err, Ok, Result
from relsync.core.structured import as_str_dict
from relsync.services.sync_errors import FieldMissingError, ReadError


def read_version(
    *, path: Path, field: str = "version"
) -> Result[str, ReadError | FieldMissingError]:
    try:
        text = path.read_text(encoding="utf-8")
    except FileNotFoundError:
        return Err(ReadError(path=path, reason=f"{path.name} not found"))
    except (OSError, UnicodeDecodeError) as e:
        return Err(ReadError(path=path, reason=f"failed to read {path.name}: {e}"))

    try:
        obj: object = json.loads(text)
    except json.JSONDecodeError as e:
        return Err(ReadError(path=path, reason=f"invalid JSON in {path.name}: {e}"))

    data = as_str_dict(obj)
    if data is None:
        return Err(ReadError(path=path, reason=f"invalid JSON root in {path.name}"))

    if field not in data:
        return Err(FieldMissingError(field=field, path=path))
    value = data[field]
    if not isinstance(value, str):
        return Err(FieldMissingError(field=field, path=path, reason="not a string"))
    if not value.strip():
        return Err(FieldMissingError(field=field, path=path, reason="empty"))
    return Ok(value)
