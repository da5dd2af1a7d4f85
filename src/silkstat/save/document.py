from __future__ import annotations

import math
from collections.abc import Mapping
from typing import Any

import msgspec

from .codec import FormatError

RawDocument = dict[str, Any]

_MISSING: Any = object()


def parse_document(text: str) -> RawDocument:
    try:
        root = msgspec.json.decode(text)
    except msgspec.DecodeError as exc:
        raise FormatError(f"save text is not valid JSON: {exc}") from exc
    if not isinstance(root, dict):
        raise FormatError(f"save root must be an object, got {type(root).__name__}")
    return root


def key_variants(key: str) -> tuple[str, ...]:
    """Spellings a save field may use: as given, PascalCase, camelCase, lower, upper.

    `Data.IsUnlocked` and `data.isUnlocked` both occur, as do `ID` and `id`.
    """

    if not key:
        return (key,)
    out: list[str] = []
    for variant in (key, key[0].upper() + key[1:], key[0].lower() + key[1:], key.lower(), key.upper()):
        if variant not in out:
            out.append(variant)
    return tuple(out)


def safe_list(value: object) -> list[Any]:
    return value if isinstance(value, list) else []


def safe_mapping(value: object) -> Mapping[str, Any]:
    return value if isinstance(value, Mapping) else {}


def _walk_parts(node: object, parts: list[str], *, exact: bool) -> Any:
    if not parts:
        return node
    if not isinstance(node, Mapping):
        return _MISSING
    head, rest = parts[0], parts[1:]
    keys = (head,) if exact else key_variants(head)
    # A variant that resolves but misses deeper down falls through to the next one.
    for candidate in keys:
        value = node.get(candidate)
        if value is None:
            continue
        found = _walk_parts(value, rest, exact=exact)
        if found is not _MISSING:
            return found
    return _MISSING


def _walk(node: object, path: str, *, exact: bool) -> Any:
    return _walk_parts(node, path.split("."), exact=exact)


def lookup(node: object, *paths: str, default: Any = None, exact: bool = False) -> Any:
    """Return the value at the first dotted path that resolves, else `default`.

    Every segment is matched against its casing variants unless `exact` is set.
    Explicit `null` counts as absent.
    """

    for path in paths:
        value = _walk(node, path, exact=exact)
        if value is not _MISSING:
            return value
    return default


def string_field(node: object, *paths: str, default: str = "", exact: bool = False) -> str:
    value = lookup(node, *paths, exact=exact)
    if value is None or isinstance(value, (dict, list)):
        return default
    return str(value)


def bool_field(node: object, *paths: str, exact: bool = False) -> bool:
    return bool(lookup(node, *paths, default=False, exact=exact))


def int_field(node: object, *paths: str, default: int = 0, exact: bool = False) -> int:
    return coerce_int(lookup(node, *paths, exact=exact), default=default)


def list_field(node: object, *paths: str, exact: bool = False) -> list[Any]:
    return safe_list(lookup(node, *paths, exact=exact))


def mapping_field(node: object, *paths: str, exact: bool = False) -> Mapping[str, Any]:
    return safe_mapping(lookup(node, *paths, exact=exact))


def coerce_int(value: object, *, default: int = 0) -> int:
    if value is None:
        return default
    if isinstance(value, bool):
        return int(value)
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        return int(value) if math.isfinite(value) else default
    if isinstance(value, str):
        text = value.strip()
        if not text:
            return default
        try:
            return int(text)
        except ValueError:
            pass
        try:
            number = float(text)
        except ValueError:
            return default
        return int(number) if math.isfinite(number) else default
    return default
