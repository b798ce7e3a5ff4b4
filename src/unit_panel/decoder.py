"""Normalize ``systemctl`` output into :class:`ServiceRecord` rows.

The JSON emitted by ``systemctl list-units --output=json`` differs between
systemd releases: keys may be short (``unit``, ``sub``), PascalCase
(``Unit``, ``SubState``) or snake/camel case, and the rows may come bare or
wrapped in an object. Each record field is resolved by probing an ordered
tuple of candidate keys and taking the first one that carries a usable value.
"""

from __future__ import annotations

import json
import logging
from typing import Any, Iterable, Mapping

from .errors import DecodeError, SchemaError
from .models import ServiceRecord, UnitStatus

logger = logging.getLogger(__name__)


COLLECTION_KEYS: tuple[str, ...] = ("units", "Units", "services", "Services")

NAME_KEYS: tuple[str, ...] = ("unit", "Unit", "name", "Name", "id", "Id")
DESCRIPTION_KEYS: tuple[str, ...] = ("description", "Description", "desc")
LOAD_KEYS: tuple[str, ...] = ("load", "Load", "load_state", "LoadState", "loadState")
ACTIVE_KEYS: tuple[str, ...] = ("active", "Active", "active_state", "ActiveState", "activeState")
SUB_KEYS: tuple[str, ...] = ("sub", "Sub", "sub_state", "SubState", "subState")
UNIT_FILE_KEYS: tuple[str, ...] = (
    "unit_file_state",
    "UnitFileState",
    "unitFileState",
    "unit_file",
    "UnitFile",
)
FOLLOWED_BY_KEYS: tuple[str, ...] = (
    "followed_by",
    "FollowedBy",
    "followedBy",
    "following",
    "Following",
)


def _scalar_text(value: Any) -> str:
    # bool first: it is a subclass of int
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, str):
        return value
    if isinstance(value, (int, float)):
        return str(value)
    # null, arrays and objects count as absent for scalar fields
    return ""


def probe_text(row: Mapping[str, Any], candidates: Iterable[str]) -> str:
    """Return the first non-empty scalar value among ``candidates``."""
    for key in candidates:
        if key not in row:
            continue
        text = _scalar_text(row[key])
        if text:
            return text
    return ""


def _parse_int(digits: str) -> int | str:
    # Past the interpreter's int conversion limit the digits are kept as text
    try:
        return int(digits)
    except ValueError:
        return digits


def _has_value(value: Any) -> bool:
    if value is None:
        return False
    if isinstance(value, (str, list, dict)):
        return len(value) > 0
    return True


def probe_names(row: Mapping[str, Any], candidates: Iterable[str]) -> tuple[str, ...]:
    """Resolve a list-of-units field.

    A list keeps only its string elements, a single non-empty string becomes
    a one-element tuple, any other shape resolves to an empty tuple.
    """
    for key in candidates:
        value = row.get(key)
        if not _has_value(value):
            continue
        if isinstance(value, list):
            return tuple(v for v in value if isinstance(v, str))
        if isinstance(value, str):
            return (value,)
        return ()
    return ()


def record_from_row(row: Any) -> ServiceRecord | None:
    """Build a record from one row, or None when no name can be resolved."""
    if not isinstance(row, Mapping):
        return None
    name = probe_text(row, NAME_KEYS)
    if not name:
        return None
    return ServiceRecord(
        name=name,
        description=probe_text(row, DESCRIPTION_KEYS),
        load_state=probe_text(row, LOAD_KEYS),
        active_state=probe_text(row, ACTIVE_KEYS),
        sub_state=probe_text(row, SUB_KEYS),
        unit_file_state=probe_text(row, UNIT_FILE_KEYS),
        followed_by=probe_names(row, FOLLOWED_BY_KEYS),
    )


def locate_rows(doc: Any) -> list[Any]:
    if isinstance(doc, list):
        return doc
    if isinstance(doc, dict):
        for key in COLLECTION_KEYS:
            rows = doc.get(key)
            if isinstance(rows, list):
                return rows
    raise SchemaError("unexpected output format")


def decode_units(raw: bytes | str) -> list[ServiceRecord]:
    """Parse ``list-units --output=json`` output into records.

    Raises DecodeError when the text is not JSON and SchemaError when no row
    collection can be found. Rows without a name are skipped silently; every
    other field falls back to an empty value.
    """
    text = raw.decode("utf-8", errors="replace") if isinstance(raw, bytes) else raw
    try:
        doc = json.loads(text, parse_int=_parse_int)
    except (ValueError, RecursionError) as e:
        raise DecodeError(f"Failed to parse JSON: {e}") from e

    rows = locate_rows(doc)
    records = [rec for rec in (record_from_row(r) for r in rows) if rec is not None]
    logger.debug("decoded %d of %d rows", len(records), len(rows))
    return records


def decode_unit_status(name: str, raw: bytes | str) -> UnitStatus:
    """Parse ``systemctl show --property=...`` Key=Value lines."""
    text = raw.decode("utf-8", errors="replace") if isinstance(raw, bytes) else raw
    active = ""
    sub = ""
    pid: int | None = None
    for line in text.splitlines():
        key, sep, value = line.partition("=")
        if not sep:
            continue
        key = key.strip()
        value = value.strip()
        if key == "ActiveState":
            active = value
        elif key == "SubState":
            sub = value
        elif key == "MainPID":
            pid = int(value) if value.isascii() and value.isdigit() else None
    return UnitStatus(name=name, active_state=active, sub_state=sub, main_pid=pid)
