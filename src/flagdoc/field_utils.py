"""Helpers describing pydantic model fields for documentation."""

from __future__ import annotations

import types
from datetime import datetime, timedelta
from enum import Enum
from pathlib import PurePath
from typing import Annotated, Any, Literal, Union, get_args, get_origin

from pydantic import BaseModel
from pydantic.fields import FieldInfo

from flagdoc.exceptions import ConfigStructureError
from flagdoc.schemas import FieldCategory

# Order matters: bool is a subclass of int.
_SCALAR_TYPE_NAMES: tuple[tuple[type, str], ...] = (
    (bool, "boolean"),
    (int, "int"),
    (float, "float"),
    (str, "string"),
    (bytes, "string"),
    (PurePath, "string"),
    (timedelta, "duration"),
    (datetime, "time"),
)

_SEQUENCE_ORIGINS = (list, tuple, set, frozenset)

_DURATION_UNITS = (("h", 3_600_000), ("m", 60_000), ("s", 1_000), ("ms", 1))


def unwrap_optional(annotation: Any) -> Any:
    """Strip ``Annotated`` metadata and a ``None`` member from a union."""
    if get_origin(annotation) is Annotated:
        annotation = get_args(annotation)[0]
    if get_origin(annotation) in (Union, types.UnionType):
        members = [arg for arg in get_args(annotation) if arg is not type(None)]
        if len(members) == 1:
            return unwrap_optional(members[0])
    return annotation


def model_type_of(annotation: Any) -> type[BaseModel] | None:
    """Return the model class if the annotation is a (possibly optional) model."""
    annotation = unwrap_optional(annotation)
    if get_origin(annotation) is None and isinstance(annotation, type) and issubclass(annotation, BaseModel):
        return annotation
    return None


def field_type_name(annotation: Any) -> str:
    """Map a field annotation to the type name shown in the documentation.

    Raises:
        ConfigStructureError: If the annotation has no documented type name.
    """
    annotation = unwrap_optional(annotation)
    origin = get_origin(annotation)

    if origin is Literal:
        return "string"

    if origin in _SEQUENCE_ORIGINS:
        args = [arg for arg in get_args(annotation) if arg is not Ellipsis]
        item = args[0] if args else str
        if model_type_of(item) is not None:
            return "list of objects"
        return f"list of {field_type_name(item)}s"

    if origin is dict:
        args = get_args(annotation)
        key, value = args if args else (str, str)
        return f"map of {field_type_name(key)} to {field_type_name(value)}"

    if isinstance(annotation, type):
        if issubclass(annotation, Enum):
            return "string"
        for base, name in _SCALAR_TYPE_NAMES:
            if issubclass(annotation, base):
                return name

    raise ConfigStructureError(f"unsupported data type {annotation!r}")


def format_duration(value: timedelta) -> str:
    """Format a duration the way the documented CLI prints it (e.g. ``1m30s``)."""
    total_ms = value // timedelta(milliseconds=1)
    if total_ms == 0:
        return "0s"

    sign = "-" if total_ms < 0 else ""
    remaining = abs(total_ms)
    parts: list[str] = []
    for unit, size in _DURATION_UNITS:
        count, remaining = divmod(remaining, size)
        if count:
            parts.append(f"{count}{unit}")
    return sign + "".join(parts)


def format_default(value: Any) -> str:
    """Render a default value as a flag default string."""
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, Enum):
        return format_default(value.value)
    if isinstance(value, timedelta):
        return format_duration(value)
    if isinstance(value, float):
        text = repr(value)
        return text[:-2] if text.endswith(".0") else text
    if isinstance(value, (set, frozenset)):
        return "[" + ", ".join(sorted(format_default(item) for item in value)) + "]"
    if isinstance(value, (list, tuple)):
        return "[" + ", ".join(format_default(item) for item in value) + "]"
    if isinstance(value, dict):
        items = (f"{format_default(k)}: {format_default(v)}" for k, v in value.items())
        return "{" + ", ".join(items) + "}"
    return str(value)


def field_extra(info: FieldInfo) -> dict[str, Any]:
    extra = info.json_schema_extra
    return extra if isinstance(extra, dict) else {}


def is_hidden(info: FieldInfo) -> bool:
    """Fields excluded from serialization or marked ``doc: hidden`` are not documented."""
    return bool(info.exclude) or field_extra(info).get("doc") == "hidden"


def is_inline(info: FieldInfo) -> bool:
    return bool(field_extra(info).get("inline"))


def field_category(info: FieldInfo) -> FieldCategory:
    raw = field_extra(info).get("category", FieldCategory.BASIC.value)
    try:
        return FieldCategory(raw)
    except ValueError as exc:
        raise ConfigStructureError(f"unknown field category {raw!r}") from exc


def yaml_name(name: str, info: FieldInfo) -> str:
    """Return the YAML key of a field: its alias when set."""
    return info.alias or name
