"""
Custom exceptions for schema conversion.
"""
from typing import Any, Optional

class SchemaConversionError(Exception):
    """Base class for all schema conversion errors."""
    pass

class UnsupportedNodeKindError(SchemaConversionError):
    """Raised when a node kind has no mapper in the dispatch table.
    This means the dispatch table is out of sync with NodeKind and must not be masked."""
    def __init__(self, kind: Any, message: Optional[str] = None):
        super().__init__(message or f"No mapper registered for node kind {kind!r}")
        self.kind = kind

class ProbeRejectedError(SchemaConversionError):
    """Raised when a refinement predicate rejects the synthetic sample used to
    probe a transformation's output shape."""
    def __init__(self, message: str, sample: Any = None):
        super().__init__(message)
        self.message = message
        self.sample = sample
