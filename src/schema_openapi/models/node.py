"""Immutable schema node tree consumed by the converter."""
from typing import Any, Callable, Dict, Optional, Tuple

from pydantic import Field, model_validator

from .common import BasePydanticModel, NodeKind, SINGLE_CHILD_KINDS

# Payload a kind cannot be converted without
_REQUIRED_PAYLOAD: Dict[NodeKind, str] = {
    NodeKind.LITERAL: "value",
    NodeKind.ENUM: "values",
    NodeKind.NATIVE_ENUM: "enum",
    NodeKind.DEFAULT: "default",
    NodeKind.TRANSFORM: "transform",
    NodeKind.REFINEMENT: "check",
}


class SchemaNode(BasePydanticModel):
    """
    A single node of a validation schema tree.

    Nodes are frozen: the wrap helpers (`optional()`, `nullable()`, `transform()`...)
    return a new node around this one, so a subtree can be reused in several
    compositions without one use leaking into another.
    """
    model_config = {
        "extra": "forbid",
        "frozen": True,
        "populate_by_name": True,
    }

    kind: NodeKind
    children: Tuple["SchemaNode", ...] = ()
    shape: Dict[str, "SchemaNode"] = Field(default_factory=dict, description="Ordered property nodes of an object node.")
    constraints: Dict[str, Any] = Field(default_factory=dict, description="Constraint facts and kind payload (literal value, transform callable...).")
    annotation: Optional[Dict[str, Any]] = Field(default=None, description="Partial OpenAPI schema merged over the generated one.")

    @model_validator(mode="after")
    def check_structure(self) -> "SchemaNode":
        if self.kind in SINGLE_CHILD_KINDS and len(self.children) != 1:
            raise ValueError(f"'{self.kind.value}' node requires exactly one child, got {len(self.children)}")
        if self.kind in (NodeKind.UNION, NodeKind.INTERSECTION) and not self.children:
            raise ValueError(f"'{self.kind.value}' node requires at least one member")
        if self.shape and self.kind != NodeKind.OBJECT:
            raise ValueError(f"'{self.kind.value}' node cannot declare properties")

        payload_key = _REQUIRED_PAYLOAD.get(self.kind)
        if payload_key is not None and payload_key not in self.constraints:
            raise ValueError(f"'{self.kind.value}' node requires constraint '{payload_key}'")
        if self.kind == NodeKind.TRANSFORM and not callable(self.constraints["transform"]):
            raise ValueError("'transform' constraint must be callable")
        if self.kind == NodeKind.REFINEMENT and not callable(self.constraints["check"]):
            raise ValueError("'check' constraint must be callable")
        return self

    @property
    def inner(self) -> "SchemaNode":
        """The wrapped node of a wrapper, transform or array node."""
        return self.children[0]

    def _wrap(self, kind: NodeKind, **constraints: Any) -> "SchemaNode":
        return SchemaNode(kind=kind, children=(self,), constraints=constraints)

    def optional(self) -> "SchemaNode":
        return self._wrap(NodeKind.OPTIONAL)

    def nullable(self) -> "SchemaNode":
        return self._wrap(NodeKind.NULLABLE)

    def nullish(self) -> "SchemaNode":
        return self._wrap(NodeKind.NULLISH)

    def default(self, value: Any) -> "SchemaNode":
        return self._wrap(NodeKind.DEFAULT, default=value)

    def read_only(self) -> "SchemaNode":
        return self._wrap(NodeKind.READ_ONLY)

    def refine(self, check: Callable[[Any], bool], message: Optional[str] = None) -> "SchemaNode":
        return self._wrap(NodeKind.REFINEMENT, check=check, message=message or "Invalid input")

    def transform(self, fn: Callable[[Any], Any]) -> "SchemaNode":
        return self._wrap(NodeKind.TRANSFORM, transform=fn)

    def partial(self) -> "SchemaNode":
        """Object whose properties are all individually optional."""
        if self.kind != NodeKind.OBJECT:
            raise ValueError("partial() only applies to object nodes")
        return self.model_copy(update={"constraints": {**self.constraints, "partial": True}})

    def annotate(self, fragment: Dict[str, Any]) -> "SchemaNode":
        return attach_annotation(self, fragment)


SchemaNode.model_rebuild()


def attach_annotation(node: SchemaNode, fragment: Dict[str, Any]) -> SchemaNode:
    """
    Returns a new node carrying `fragment` as its annotation. An existing
    annotation is kept and shallow-merged under the new fragment.
    """
    merged = {**(node.annotation or {}), **fragment}
    return node.model_copy(update={"annotation": merged})
