"""
Pydantic models for schema-openapi.
"""
from .common import (
    WRAPPER_KINDS,
    BasePydanticModel,
    Descriptor,
    Mode,
    NodeKind,
)
from .node import SchemaNode, attach_annotation

__all__ = [
    "BasePydanticModel",
    "Descriptor",
    "Mode",
    "NodeKind",
    "SchemaNode",
    "WRAPPER_KINDS",
    "attach_annotation",
]
