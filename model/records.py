from __future__ import annotations
from dataclasses import fields, is_dataclass
from enum import Enum


def _plain(value):
    if isinstance(value, Enum):
        return value.name
    if is_dataclass(value):
        return record_to_dict(value)
    if isinstance(value, list):
        return [_plain(v) for v in value]
    return value


def record_to_dict(record) -> dict:
    """Return a JSON-serializable dict; enums are rendered by member name."""
    return {f.name: _plain(getattr(record, f.name)) for f in fields(record)}


class HeaderRecord:
    """Mixin for the value objects decoded from header blocks."""

    def to_dict(self) -> dict:
        return record_to_dict(self)
