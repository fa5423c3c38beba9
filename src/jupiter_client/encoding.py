"""Declarative wire encoding for request parameter objects.

Each parameter class lists its fields as WireField descriptors in a
``wire_fields`` class attribute. A single generic encoder turns any such
object into query-string pairs (GET) or a JSON object (POST), so the rule
for which optional fields are omitted lives next to the field declaration.
"""

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, Optional

from pydantic import BaseModel

from jupiter_client.errors import ParamEncodingError

logger = logging.getLogger(__name__)


def is_zero(value: Any) -> bool:
    """Omit predicate for plain optional fields: None, "", 0, False, empty containers."""
    if value is None:
        return True
    if isinstance(value, (str, bytes, list, tuple, dict)):
        return len(value) == 0
    if isinstance(value, (bool, int, float)):
        return not value
    return False


def is_unset(value: Any) -> bool:
    """Omit predicate for pointer-style fields: only None is omitted.

    An explicit False or 0 is still sent.
    """
    return value is None


def never(value: Any) -> bool:
    """Required fields are always encoded, even at a zero-like value."""
    return False


@dataclass(frozen=True)
class WireField:
    """How one attribute of a parameter object appears on the wire."""

    name: str  # Python attribute name
    key: str  # query key / JSON key
    omit: Callable[[Any], bool] = is_zero

    @classmethod
    def required(cls, name: str, key: str) -> "WireField":
        return cls(name, key, omit=never)

    @classmethod
    def pointer(cls, name: str, key: str) -> "WireField":
        return cls(name, key, omit=is_unset)


def _wire_fields(params: Any) -> tuple[WireField, ...]:
    fields = getattr(params, "wire_fields", None)
    if fields is None:
        raise TypeError(f"{type(params).__name__} does not declare wire_fields")
    return fields


def _iter_present(params: Any):
    for field in _wire_fields(params):
        value = getattr(params, field.name)
        if field.omit(value):
            continue
        yield field, value


def format_query_value(value: Any) -> str:
    """Render a scalar the way the API expects it in a query string."""
    if isinstance(value, Enum):
        value = value.value
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, int):
        return str(value)
    if isinstance(value, float):
        # shortest form, no trailing ".0" for whole numbers
        if value.is_integer():
            return str(int(value))
        return repr(value)
    if isinstance(value, str):
        return value
    if isinstance(value, (list, tuple)):
        return ",".join(format_query_value(v) for v in value)
    raise TypeError(f"cannot encode {type(value).__name__} as a query value")


def to_json_value(value: Any) -> Any:
    """Convert a field value into plain JSON-compatible data."""
    if isinstance(value, Enum):
        return value.value
    if isinstance(value, BaseModel):
        to_wire = getattr(value, "to_wire", None)
        if to_wire is not None:
            return to_wire()
        return value.model_dump(mode="json", by_alias=True)
    if hasattr(value, "wire_fields"):
        return encode_json(value)
    if isinstance(value, (list, tuple)):
        return [to_json_value(v) for v in value]
    if isinstance(value, dict):
        return {str(k): to_json_value(v) for k, v in value.items()}
    if value is None or isinstance(value, (str, bool, int, float)):
        return value
    raise TypeError(f"cannot encode {type(value).__name__} as JSON")


def encode_query(params: Any, operation: Optional[str] = None) -> list[tuple[str, str]]:
    """Flatten a parameter object into ordered query-string pairs.

    Raises:
        ParamEncodingError: the object does not declare wire fields, or a
            value has no query representation
    """
    try:
        return [(f.key, format_query_value(v)) for f, v in _iter_present(params)]
    except (TypeError, ValueError, AttributeError) as e:
        logger.debug(f"Query encoding failed for {type(params).__name__}: {e}")
        raise ParamEncodingError(
            f"failed to convert params to query values: {e}", operation=operation
        ) from e


def encode_json(params: Any, operation: Optional[str] = None) -> dict[str, Any]:
    """Serialize a parameter object into a JSON-compatible dict.

    Raises:
        ParamEncodingError: the object does not declare wire fields, or a
            value has no JSON representation
    """
    try:
        return {f.key: to_json_value(v) for f, v in _iter_present(params)}
    except ParamEncodingError:
        raise
    except (TypeError, ValueError, AttributeError) as e:
        logger.debug(f"JSON encoding failed for {type(params).__name__}: {e}")
        raise ParamEncodingError(
            f"failed to marshal params: {e}", operation=operation
        ) from e
