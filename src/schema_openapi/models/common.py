from enum import Enum
from typing import Any, Dict

from pydantic import BaseModel

# OpenAPI 3.x Schema Object under construction. Plain dict so it serializes as-is.
Descriptor = Dict[str, Any]


class BasePydanticModel(BaseModel):
    model_config = {
        "extra": "forbid",
        "populate_by_name": True,
    }

class Mode(str, Enum):
    INPUT = "input"    # shape before any transformation step
    OUTPUT = "output"  # shape after transformation steps

class NodeKind(str, Enum):
    # Leaf kinds
    STRING = "string"
    NUMBER = "number"
    BIGINT = "bigint"
    BOOLEAN = "boolean"
    DATE = "date"
    UNDEFINED = "undefined"
    NULL = "null"
    VOID = "void"
    ANY = "any"
    UNKNOWN = "unknown"
    NEVER = "never"
    ENUM = "enum"
    NATIVE_ENUM = "native_enum"
    LITERAL = "literal"
    # Composite kinds
    OBJECT = "object"
    ARRAY = "array"
    UNION = "union"
    INTERSECTION = "intersection"
    # Wrapper kinds
    OPTIONAL = "optional"
    NULLABLE = "nullable"
    NULLISH = "nullish"
    DEFAULT = "default"
    READ_ONLY = "read_only"
    REFINEMENT = "refinement"
    TRANSFORM = "transform"

    @property
    def is_wrapper(self) -> bool:
        return self in WRAPPER_KINDS


WRAPPER_KINDS = frozenset({
    NodeKind.OPTIONAL,
    NodeKind.NULLABLE,
    NodeKind.NULLISH,
    NodeKind.DEFAULT,
    NodeKind.READ_ONLY,
    NodeKind.REFINEMENT,
})

# Kinds that hold exactly one inner node
SINGLE_CHILD_KINDS = WRAPPER_KINDS | {NodeKind.TRANSFORM, NodeKind.ARRAY}
