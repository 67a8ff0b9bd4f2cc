"""
Wrapper (modifier) handling.

A wrapper converts its inner node with the same mode and then re-applies its
own effect to the result. Optional and refinement wrappers add no field:
optional only matters to the parent object's required set, and refinement
predicates cannot be expressed in the descriptor.
"""
import copy
from typing import Callable, Dict

from ..models.common import Descriptor, Mode, NodeKind
from ..models.node import SchemaNode
from .composites import Recurse


def _nullable(node: SchemaNode, inner: Descriptor) -> Descriptor:
    # Inner type is kept so the result is "nullable string", not "nullable anything"
    result: Descriptor = {"nullable": True}
    result.update(inner)
    result["nullable"] = True
    return result


def _default(node: SchemaNode, inner: Descriptor) -> Descriptor:
    return {**inner, "default": copy.deepcopy(node.constraints["default"])}


def _read_only(node: SchemaNode, inner: Descriptor) -> Descriptor:
    return {**inner, "readOnly": True}


def _transparent(node: SchemaNode, inner: Descriptor) -> Descriptor:
    return inner


MODIFIER_EFFECTS: Dict[NodeKind, Callable[[SchemaNode, Descriptor], Descriptor]] = {
    NodeKind.OPTIONAL: _transparent,
    NodeKind.NULLABLE: _nullable,
    NodeKind.NULLISH: _nullable,
    NodeKind.DEFAULT: _default,
    NodeKind.READ_ONLY: _read_only,
    NodeKind.REFINEMENT: _transparent,
}


def unwrap_modifier(node: SchemaNode, mode: Mode, recurse: Recurse) -> Descriptor:
    """Converts a wrapper node: inner node first, then the wrapper's effect."""
    effect = MODIFIER_EFFECTS[node.kind]
    return effect(node, recurse(node.inner, mode))
