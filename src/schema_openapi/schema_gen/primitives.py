"""
Mappers for leaf node kinds.

Each mapper takes a leaf SchemaNode and returns a fresh Descriptor. Constraint
facts are applied in the order they were declared on the node, so a later
fact overrides an earlier one that targets the same field (e.g. `nonempty`
followed by `min`).
"""
import copy
import datetime
import enum
import re
from collections.abc import Mapping
from decimal import Decimal
from typing import Any, Callable, Dict, List

import structlog

from ..models.common import Descriptor, NodeKind
from ..models.node import SchemaNode

logger = structlog.get_logger(__name__)

ConstraintRule = Callable[[Descriptor, Any], None]


def _set(field: str, value: Any = None) -> ConstraintRule:
    """Rule that sets `field` to a fixed value, or to the constraint's own value."""
    def rule(descriptor: Descriptor, constraint_value: Any) -> None:
        descriptor[field] = constraint_value if value is None else value
    return rule


def _exact_length(min_field: str, max_field: str) -> ConstraintRule:
    def rule(descriptor: Descriptor, length: Any) -> None:
        descriptor[min_field] = length
        descriptor[max_field] = length
    return rule


def _regex(descriptor: Descriptor, pattern: Any) -> None:
    descriptor["regex"] = pattern.pattern if isinstance(pattern, re.Pattern) else pattern


def _integer(descriptor: Descriptor, enabled: Any) -> None:
    if enabled:
        descriptor["type"] = "integer"


STRING_RULES: Dict[str, ConstraintRule] = {
    "max": _set("maxLength"),
    "min": _set("minLength"),
    "length": _exact_length("minLength", "maxLength"),
    "email": _set("format", "email"),
    "url": _set("format", "uri"),
    "uuid": _set("format", "uuid"),
    "regex": _regex,
    "pattern": _regex,
    "nonempty": _set("minLength", 1),
}

NUMBER_RULES: Dict[str, ConstraintRule] = {
    "int": _integer,
    "min": _set("minimum"),
    "max": _set("maximum"),
    "positive": _set("minimum", 1),
    "nonnegative": _set("minimum", 0),
    "negative": _set("maximum", -1),
    "nonpositive": _set("maximum", 0),
    "multiple_of": _set("multipleOf"),
}

ARRAY_RULES: Dict[str, ConstraintRule] = {
    "min": _set("minItems"),
    "max": _set("maxItems"),
    "length": _exact_length("minItems", "maxItems"),
    "nonempty": _set("minItems", 1),
}


def apply_constraints(descriptor: Descriptor, node: SchemaNode, rules: Dict[str, ConstraintRule]) -> Descriptor:
    """Applies the node's constraint facts to `descriptor` in declaration order."""
    for name, value in node.constraints.items():
        rule = rules.get(name)
        if rule is None:
            logger.warning("Skipping unsupported constraint.", node_kind=node.kind.value, constraint=name)
            continue
        # Flag-style constraints may be switched off explicitly
        if value is False:
            continue
        rule(descriptor, value)
    return descriptor


def runtime_type_descriptor(value: Any) -> Descriptor:
    """Descriptor for the runtime type of a scalar value."""
    if value is None:
        return {"nullable": True}
    # bool before int: bool is an int subclass
    if isinstance(value, bool):
        return {"type": "boolean"}
    if isinstance(value, (int, float, Decimal)):
        return {"type": "number"}
    if isinstance(value, str):
        return {"type": "string"}
    if isinstance(value, (datetime.date, datetime.datetime)):
        return {"type": "string", "format": "date-time"}
    return {"type": "object"}


def _is_index_key(key: Any) -> bool:
    """True for keys that enumerate before all others in a keyed enum object."""
    if isinstance(key, bool):
        return False
    if isinstance(key, int):
        return key >= 0
    return isinstance(key, str) and key.isdigit() and str(int(key)) == key


def native_enum_values(source: Any) -> List[Any]:
    """
    Values of a native enumeration, in the order they appear in the source.

    Mappings list integer-like keys ascending first, then the remaining keys in
    insertion order. A reverse-mapped numeric enum such as
    {0: "A", 1: "B", "A": 0, "B": 1} therefore yields ["A", "B", 0, 1]; names
    and numbers are not deduplicated.
    """
    if isinstance(source, type) and issubclass(source, enum.Enum):
        return [member.value for member in source]
    if isinstance(source, Mapping):
        keys = list(source)
        index_keys = sorted((k for k in keys if _is_index_key(k)), key=int)
        other_keys = [k for k in keys if not _is_index_key(k)]
        return [source[k] for k in index_keys + other_keys]
    raise TypeError(f"Native enum source must be an Enum subclass or a mapping, got {type(source).__name__}")


def map_string(node: SchemaNode) -> Descriptor:
    return apply_constraints({"type": "string"}, node, STRING_RULES)


def map_number(node: SchemaNode) -> Descriptor:
    return apply_constraints({"type": "number"}, node, NUMBER_RULES)


def map_bigint(node: SchemaNode) -> Descriptor:
    return {"type": "integer", "format": "int64"}


def map_boolean(node: SchemaNode) -> Descriptor:
    return {"type": "boolean"}


def map_date(node: SchemaNode) -> Descriptor:
    return {"type": "string", "format": "date-time"}


def map_undefined(node: SchemaNode) -> Descriptor:
    return {}


def map_null(node: SchemaNode) -> Descriptor:
    # Kept as the established output even though it ties null to the string type.
    return {"nullable": True, "type": "string", "format": "null"}


def map_nullable_any(node: SchemaNode) -> Descriptor:
    return {"nullable": True}


def map_never(node: SchemaNode) -> Descriptor:
    return {"readOnly": True}


def map_literal(node: SchemaNode) -> Descriptor:
    value = node.constraints["value"]
    descriptor = runtime_type_descriptor(value)
    descriptor["enum"] = [copy.deepcopy(value)]
    return descriptor


def map_enum(node: SchemaNode) -> Descriptor:
    return {"type": "string", "enum": list(node.constraints["values"])}


def map_native_enum(node: SchemaNode) -> Descriptor:
    return {"type": "string", "enum": native_enum_values(node.constraints["enum"])}


PRIMITIVE_MAPPERS: Dict[NodeKind, Callable[[SchemaNode], Descriptor]] = {
    NodeKind.STRING: map_string,
    NodeKind.NUMBER: map_number,
    NodeKind.BIGINT: map_bigint,
    NodeKind.BOOLEAN: map_boolean,
    NodeKind.DATE: map_date,
    NodeKind.UNDEFINED: map_undefined,
    NodeKind.NULL: map_null,
    NodeKind.VOID: map_nullable_any,
    NodeKind.ANY: map_nullable_any,
    NodeKind.UNKNOWN: map_nullable_any,
    NodeKind.NEVER: map_never,
    NodeKind.LITERAL: map_literal,
    NodeKind.ENUM: map_enum,
    NodeKind.NATIVE_ENUM: map_native_enum,
}
