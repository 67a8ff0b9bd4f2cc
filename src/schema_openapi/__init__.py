"""schema-openapi - OpenAPI schema generation from composable validation schemas.

A single schema node tree drives both runtime validation and API
documentation. Conversion runs in input mode (shape before transformations)
or output mode (shape after them, inferred by probing transformation
functions with a synthetic sample).
"""

__version__ = "0.1.0"

from .config import Config
from .exceptions import ProbeRejectedError, SchemaConversionError, UnsupportedNodeKindError
from .models import Descriptor, Mode, NodeKind, SchemaNode, attach_annotation
from .schema_gen import SchemaConverterService, convert

__all__ = [
    "Config",
    "Descriptor",
    "Mode",
    "NodeKind",
    "ProbeRejectedError",
    "SchemaConversionError",
    "SchemaConverterService",
    "SchemaNode",
    "UnsupportedNodeKindError",
    "attach_annotation",
    "convert",
]
