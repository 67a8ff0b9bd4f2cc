"""
Transform output probing.

A transformation node carries an arbitrary callable and no static description
of what it returns. To document its output shape the prober builds a
structurally minimal sample for the inner node, runs it through the inner
node's refinements, defaults and transformations, calls the transformation and
classifies whatever comes back.

This is a best-effort heuristic. The sample does not try to satisfy bounds,
patterns or custom predicates, so a transformation whose output shape depends
on the actual input can be misclassified. Probing executes author code as a
side effect of documentation generation; it can be switched off through
`Config.probing.enabled`.
"""
import copy
import datetime
import inspect
from collections.abc import Mapping
from typing import Any, Optional

import structlog

from ..exceptions import ProbeRejectedError
from ..models.common import Descriptor, Mode, NodeKind
from ..models.node import SchemaNode
from .composites import Recurse
from .primitives import runtime_type_descriptor

logger = structlog.get_logger(__name__)

SAMPLE_TIMESTAMP = datetime.datetime(1970, 1, 1, tzinfo=datetime.timezone.utc)

# Sample per descriptor type a leaf maps to
_TYPE_SAMPLES = {
    "string": "",
    "number": 0,
    "integer": 0,
    "boolean": True,
}

_LEAF_SAMPLES = {
    NodeKind.STRING: "",
    NodeKind.ENUM: "",
    NodeKind.NATIVE_ENUM: "",
    NodeKind.NUMBER: 0,
    NodeKind.BIGINT: 0,
    NodeKind.BOOLEAN: True,
}

# Wrappers whose value passes through unchanged while preparing a sample
_PASS_THROUGH_KINDS = frozenset({
    NodeKind.OPTIONAL,
    NodeKind.NULLABLE,
    NodeKind.NULLISH,
    NodeKind.READ_ONLY,
})


def synthesize_sample(node: SchemaNode) -> Any:
    """
    Canonical sample value for the input shape of `node`. Chosen by node kind,
    not by the converted descriptor, so annotations such as a `format`
    override cannot change the sample's Python type.
    """
    kind = node.kind
    if kind in _LEAF_SAMPLES:
        return _LEAF_SAMPLES[kind]
    if kind == NodeKind.DATE:
        return SAMPLE_TIMESTAMP
    if kind == NodeKind.LITERAL:
        return _TYPE_SAMPLES.get(runtime_type_descriptor(node.constraints["value"]).get("type"))
    if kind.is_wrapper or kind == NodeKind.TRANSFORM:
        return synthesize_sample(node.inner)
    if kind == NodeKind.ARRAY:
        return []
    if kind == NodeKind.OBJECT:
        return {key: synthesize_sample(child) for key, child in node.shape.items()}
    if kind == NodeKind.UNION:
        return synthesize_sample(node.children[0])
    if kind == NodeKind.INTERSECTION:
        sample = {}
        for member in node.children:
            member_sample = synthesize_sample(member)
            if isinstance(member_sample, Mapping):
                sample.update(member_sample)
        return sample
    return None


def prepare_sample(node: SchemaNode, value: Any) -> Any:
    """
    Runs `value` through the refinements, defaults and transformations found
    in `node`. Raises ProbeRejectedError when a refinement rejects the value;
    exceptions raised by author callables propagate.
    """
    kind = node.kind
    if kind in _PASS_THROUGH_KINDS:
        return value if value is None else prepare_sample(node.inner, value)
    if kind == NodeKind.DEFAULT:
        if value is None:
            value = copy.deepcopy(node.constraints["default"])
        return prepare_sample(node.inner, value)
    if kind == NodeKind.REFINEMENT:
        prepared = prepare_sample(node.inner, value)
        if not node.constraints["check"](prepared):
            raise ProbeRejectedError(node.constraints.get("message") or "Invalid input", sample=prepared)
        return prepared
    if kind == NodeKind.TRANSFORM:
        return node.constraints["transform"](prepare_sample(node.inner, value))
    if kind == NodeKind.OBJECT and isinstance(value, Mapping):
        return {
            key: prepare_sample(node.shape[key], item) if key in node.shape else item
            for key, item in value.items()
        }
    if kind == NodeKind.ARRAY and isinstance(value, list):
        return [prepare_sample(node.inner, item) for item in value]
    if kind == NodeKind.UNION:
        # The sample was synthesized from the first member
        return prepare_sample(node.children[0], value)
    if kind == NodeKind.INTERSECTION:
        for member in node.children:
            value = prepare_sample(member, value)
        return value
    return value


def classify_value(value: Any) -> Descriptor:
    """Minimal descriptor for the runtime shape of a transformation result."""
    if inspect.isawaitable(value):
        # Only the immediately returned value is inspected; it is never awaited.
        if inspect.iscoroutine(value):
            value.close()
        logger.warning("Transformation returned an awaitable; its eventual result is not inspected.")
        return {"type": "object"}
    if isinstance(value, Mapping):
        return {"type": "object"}
    if isinstance(value, (list, tuple)):
        return {"type": "array", "items": classify_value(value[0]) if value else {}}
    return runtime_type_descriptor(value)


class TransformOutputProber:
    """Infers the output shape of transformation nodes by sample execution."""

    def __init__(self, recurse: Recurse, enabled: bool = True, parent_logger: Optional[Any] = None):
        self.recurse = recurse
        self.enabled = enabled
        self.logger = (parent_logger or logger).bind(component="TransformOutputProber")

    def probe(self, node: SchemaNode) -> Descriptor:
        inner = node.inner
        input_descriptor = self.recurse(inner, Mode.INPUT)
        if not self.enabled:
            self.logger.debug("Transform probing disabled; using input shape.")
            return input_descriptor

        sample = synthesize_sample(inner)
        transform = node.constraints["transform"]
        try:
            result = transform(prepare_sample(inner, sample))
        except ProbeRejectedError as e:
            self.logger.warning(
                "Refinement rejected the synthetic sample; using input shape.",
                reason=e.message,
                sample=repr(e.sample),
            )
            return input_descriptor
        except Exception as e:
            self.logger.warning(
                "Transformation failed on the synthetic sample; using input shape.",
                error=str(e),
                error_type=type(e).__name__,
                sample=repr(sample),
            )
            return input_descriptor

        output_descriptor = classify_value(result)
        self.logger.debug("Transform output probed.", output_type=output_descriptor.get("type"))
        return output_descriptor
