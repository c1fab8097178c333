"""Typed field extraction for decoded hub JSON."""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from enum import Enum
from typing import Any

from ..exceptions import DecodeError

_LOGGER = logging.getLogger(__name__)


class TimestampMode(Enum):
    """
    How a malformed timestamp is treated.
    REQUIRED fails the whole record, OPTIONAL degrades the field to None.
    """
    REQUIRED = "required"
    OPTIONAL = "optional"

def ensure_object(value: Any, what: str) -> dict[str, Any]:
    if not isinstance(value, dict):
        raise DecodeError(f"Expected {what} to be an object, got {type(value).__name__}")
    return value

def ensure_list(value: Any, what: str) -> list[Any]:
    if not isinstance(value, list):
        raise DecodeError(f"Expected {what} to be a list, got {type(value).__name__}")
    return value

def get_value(data: dict[str, Any], wire_name: str, expected: type, required: bool = True, default: Any = None) -> Any:
    """
    Reads one field by its wire name and checks it against the expected type.
    Enum types are converted from their wire value.
    Missing or null optional fields return the default.
    """
    value = data.get(wire_name)
    if value is None:
        if required:
            raise DecodeError(f"Missing field '{wire_name}'")
        return default

    if issubclass(expected, Enum):
        try:
            return expected(value)
        except ValueError as ex:
            raise DecodeError(f"Unknown value {value!r} for field '{wire_name}'") from ex

    if not _matches_type(value, expected):
        raise DecodeError(f"Field '{wire_name}' should be {expected.__name__}, got {type(value).__name__}")

    return float(value) if expected is float else value

def get_string_list(data: dict[str, Any], wire_name: str, required: bool = False) -> list[str] | None:
    values = get_value(data, wire_name, list, required=required)
    if values is None:
        return None
    if not all(isinstance(value, str) for value in values):
        raise DecodeError(f"Field '{wire_name}' should only contain strings")
    return list(values)

def parse_timestamp(data: dict[str, Any], wire_name: str, mode: TimestampMode = TimestampMode.REQUIRED) -> datetime | None:
    """Parses a hub timestamp into an aware UTC datetime, following the given mode."""
    value = data.get(wire_name)

    match mode:
        case TimestampMode.REQUIRED:
            if value is None:
                raise DecodeError(f"Missing field '{wire_name}'")
            try:
                return _parse_hub_timestamp(value)
            except ValueError as ex:
                raise DecodeError(f"Invalid date format for '{wire_name}': {value!r}") from ex
        case TimestampMode.OPTIONAL:
            if value is None:
                return None
            try:
                return _parse_hub_timestamp(value)
            except ValueError:
                _LOGGER.debug("Ignoring malformed optional timestamp '%s': %r", wire_name, value)
                return None

def _parse_hub_timestamp(value: Any) -> datetime:
    if not isinstance(value, str):
        raise ValueError(f"timestamp must be a string, got {type(value).__name__}")

    parsed = datetime.fromisoformat(value)
    if parsed.tzinfo is None:
        raise ValueError("timestamp has no UTC offset")

    try:
        return parsed.astimezone(timezone.utc)
    except OverflowError as ex:
        raise ValueError(f"timestamp out of range: {ex}") from ex

def _matches_type(value: Any, expected: type) -> bool:
    # bool is a subclass of int, but never a valid number on the wire
    if expected in (int, float) and isinstance(value, bool):
        return False
    if expected is float:
        return isinstance(value, (int, float))
    return isinstance(value, expected)
