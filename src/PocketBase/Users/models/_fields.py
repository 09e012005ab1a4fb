# Copyright (c) Microsoft Corporation.
# Licensed under the MIT license.

"""Typed field extraction for decoding API payloads."""

from __future__ import annotations

from typing import Any, Dict, List, Mapping

from ..core.errors import DecodeError
from ..core._error_codes import DECODE_MISSING_FIELD, DECODE_WRONG_TYPE

_JSON_TYPE_NAMES = {str: "string", bool: "boolean", int: "integer", list: "array", dict: "object"}


def _require_object(data: Any, model: str) -> Mapping[str, Any]:
    if not isinstance(data, dict):
        raise DecodeError(
            f"{model} payload must be a JSON object, got {type(data).__name__}",
            subcode=DECODE_WRONG_TYPE,
            details={"model": model},
        )
    return data


def _get(data: Mapping[str, Any], key: str, kind: type, model: str) -> Any:
    if key not in data:
        raise DecodeError(
            f"{model} payload is missing required field '{key}'",
            subcode=DECODE_MISSING_FIELD,
            details={"model": model, "field": key},
        )
    value = data[key]
    # bool is an int subclass; a JSON true must not pass as a number
    if not isinstance(value, kind) or (kind is int and isinstance(value, bool)):
        raise DecodeError(
            f"{model} field '{key}' must be a JSON {_JSON_TYPE_NAMES[kind]}, got {type(value).__name__}",
            subcode=DECODE_WRONG_TYPE,
            details={"model": model, "field": key},
        )
    return value


def _str(data: Mapping[str, Any], key: str, model: str) -> str:
    return _get(data, key, str, model)


def _optional_str(data: Mapping[str, Any], key: str, model: str) -> str:
    """Like :func:`_str` but an absent or null field decodes to ``""``."""
    if data.get(key) is None:
        return ""
    return _get(data, key, str, model)


def _bool(data: Mapping[str, Any], key: str, model: str) -> bool:
    return _get(data, key, bool, model)


def _int(data: Mapping[str, Any], key: str, model: str) -> int:
    return _get(data, key, int, model)


def _list(data: Mapping[str, Any], key: str, model: str) -> List[Any]:
    return _get(data, key, list, model)


def _object(data: Mapping[str, Any], key: str, model: str) -> Dict[str, Any]:
    return _get(data, key, dict, model)
