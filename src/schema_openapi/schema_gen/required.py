"""Required-set calculation for object nodes."""
from typing import List

from ..models.common import NodeKind
from ..models.node import SchemaNode

# Wrappers that make a property's presence optional
_OPTIONAL_KINDS = frozenset({NodeKind.OPTIONAL, NodeKind.NULLISH})


def is_optional_property(node: SchemaNode) -> bool:
    """
    True if the node's immediate wrapper chain contains an optional or nullish
    wrapper. Nullable and default wrappers do not count: the key must still be
    present, only its value may be null or substituted.
    """
    current = node
    while current.kind.is_wrapper or current.kind == NodeKind.TRANSFORM:
        if current.kind in _OPTIONAL_KINDS:
            return True
        current = current.inner
    return False


def required_keys(node: SchemaNode) -> List[str]:
    """Keys of an object node that must be present, in declaration order."""
    if node.constraints.get("partial"):
        return []
    return [key for key, child in node.shape.items() if not is_optional_property(child)]
