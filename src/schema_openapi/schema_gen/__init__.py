"""
Schema generation for schema-openapi.

Converts schema node trees to OpenAPI 3.x schema objects: leaf and container
mapping, wrapper handling, required-set calculation, annotation merging and
transform output probing.
"""
from .merge import merge
from .probe import TransformOutputProber
from .schema_converter_service import SchemaConverterService, convert

__all__ = [
    "SchemaConverterService",
    "TransformOutputProber",
    "convert",
    "merge",
]
