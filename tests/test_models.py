"""
Unit tests for the schema node models in src/schema_openapi/models/
"""
import pytest
from pydantic import ValidationError

from schema_openapi.models.common import Mode, NodeKind
from schema_openapi.models.node import SchemaNode, attach_annotation


def string_node(**constraints) -> SchemaNode:
    return SchemaNode(kind=NodeKind.STRING, constraints=constraints)


# --- Structure validation ---

def test_leaf_node_defaults():
    node = SchemaNode(kind=NodeKind.BOOLEAN)
    assert node.children == ()
    assert node.shape == {}
    assert node.constraints == {}
    assert node.annotation is None


def test_kind_accepts_enum_value_string():
    node = SchemaNode(kind="string")
    assert node.kind == NodeKind.STRING


def test_unknown_kind_rejected():
    with pytest.raises(ValidationError):
        SchemaNode(kind="tuple")


@pytest.mark.parametrize("kind", [NodeKind.OPTIONAL, NodeKind.NULLABLE, NodeKind.ARRAY])
def test_single_child_kinds_require_one_child(kind: NodeKind):
    with pytest.raises(ValidationError):
        SchemaNode(kind=kind)
    with pytest.raises(ValidationError):
        SchemaNode(kind=kind, children=(string_node(), string_node()))


def test_union_requires_members():
    with pytest.raises(ValidationError):
        SchemaNode(kind=NodeKind.UNION)


def test_shape_only_on_objects():
    with pytest.raises(ValidationError):
        SchemaNode(kind=NodeKind.STRING, shape={"a": string_node()})


@pytest.mark.parametrize("kind, children", [
    (NodeKind.LITERAL, ()),
    (NodeKind.ENUM, ()),
    (NodeKind.NATIVE_ENUM, ()),
    (NodeKind.DEFAULT, ("child",)),
])
def test_payload_required(kind: NodeKind, children: tuple):
    resolved = tuple(string_node() for _ in children)
    with pytest.raises(ValidationError):
        SchemaNode(kind=kind, children=resolved)


def test_transform_requires_callable():
    with pytest.raises(ValidationError):
        SchemaNode(kind=NodeKind.TRANSFORM, children=(string_node(),), constraints={"transform": "len"})


def test_refinement_requires_callable():
    with pytest.raises(ValidationError):
        SchemaNode(kind=NodeKind.REFINEMENT, children=(string_node(),), constraints={"check": True})


# --- Immutability and wrap helpers ---

def test_node_is_frozen():
    node = string_node(max=5)
    with pytest.raises(ValidationError):
        node.kind = NodeKind.NUMBER


def test_wrappers_return_new_nodes():
    base = string_node()
    optional = base.optional()
    nullable = base.nullable()

    assert optional is not base
    assert optional.kind == NodeKind.OPTIONAL
    assert optional.inner is base
    assert nullable.inner is base
    # The shared subtree is untouched by either wrap
    assert base.kind == NodeKind.STRING
    assert base.children == ()


def test_default_and_refine_store_payload():
    check = lambda value: bool(value)
    node = string_node().default("x").refine(check, message="must not be empty")

    assert node.kind == NodeKind.REFINEMENT
    assert node.constraints["check"] is check
    assert node.constraints["message"] == "must not be empty"
    assert node.inner.kind == NodeKind.DEFAULT
    assert node.inner.constraints["default"] == "x"


def test_transform_wraps_callable():
    node = string_node().transform(len)
    assert node.kind == NodeKind.TRANSFORM
    assert node.constraints["transform"] is len


def test_partial_only_on_objects():
    obj = SchemaNode(kind=NodeKind.OBJECT, shape={"a": string_node()})
    partial = obj.partial()
    assert partial.constraints["partial"] is True
    assert "partial" not in obj.constraints

    with pytest.raises(ValueError):
        string_node().partial()


# --- Annotations ---

def test_attach_annotation_returns_new_node():
    node = string_node()
    annotated = attach_annotation(node, {"description": "A name"})

    assert annotated is not node
    assert annotated.annotation == {"description": "A name"}
    assert node.annotation is None
    assert annotated.kind == node.kind


def test_attach_annotation_merges_over_existing_fragment():
    node = string_node().annotate({"description": "old", "format": "name"})
    annotated = attach_annotation(node, {"description": "new"})

    assert annotated.annotation == {"description": "new", "format": "name"}
    assert node.annotation == {"description": "old", "format": "name"}


def test_mode_values():
    assert Mode("input") is Mode.INPUT
    assert Mode("output") is Mode.OUTPUT
