"""
Mappers for container node kinds. Children are converted through `recurse`,
the dispatcher's own entry point, with the caller's mode.
"""
from typing import Callable, Dict

from ..models.common import Descriptor, Mode, NodeKind
from ..models.node import SchemaNode
from .primitives import ARRAY_RULES, apply_constraints
from .required import required_keys

Recurse = Callable[[SchemaNode, Mode], Descriptor]
CompositeMapper = Callable[[SchemaNode, Mode, Recurse], Descriptor]


def map_object(node: SchemaNode, mode: Mode, recurse: Recurse) -> Descriptor:
    properties = {key: recurse(child, mode) for key, child in node.shape.items()}
    return {
        "type": "object",
        "properties": properties,
        "required": required_keys(node),
    }


def map_array(node: SchemaNode, mode: Mode, recurse: Recurse) -> Descriptor:
    descriptor = {"type": "array", "items": recurse(node.inner, mode)}
    return apply_constraints(descriptor, node, ARRAY_RULES)


def map_union(node: SchemaNode, mode: Mode, recurse: Recurse) -> Descriptor:
    # Member order and duplicates are kept as declared
    return {"oneOf": [recurse(member, mode) for member in node.children]}


def map_intersection(node: SchemaNode, mode: Mode, recurse: Recurse) -> Descriptor:
    return {"allOf": [recurse(member, mode) for member in node.children]}


COMPOSITE_MAPPERS: Dict[NodeKind, CompositeMapper] = {
    NodeKind.OBJECT: map_object,
    NodeKind.ARRAY: map_array,
    NodeKind.UNION: map_union,
    NodeKind.INTERSECTION: map_intersection,
}
