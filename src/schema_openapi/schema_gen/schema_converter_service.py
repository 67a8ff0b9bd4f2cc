"""
Service responsible for converting schema node trees into OpenAPI 3.x schema
objects, in either input (pre-transformation) or output (post-transformation)
mode.
"""
import functools
from typing import Callable, Dict, Optional

import structlog

from ..config import Config
from ..exceptions import UnsupportedNodeKindError
from ..models.common import Descriptor, Mode, NodeKind, WRAPPER_KINDS
from ..models.node import SchemaNode
from .composites import COMPOSITE_MAPPERS, CompositeMapper
from .merge import merge
from .modifiers import unwrap_modifier
from .primitives import PRIMITIVE_MAPPERS
from .probe import TransformOutputProber

logger = structlog.get_logger(__name__)

NodeHandler = Callable[[SchemaNode, Mode], Descriptor]


class SchemaConverterService:
    """
    Recursive dispatcher from schema nodes to descriptors.

    Every NodeKind has exactly one handler; the table is checked when the
    service is built so a kind added to NodeKind without a mapper fails
    immediately instead of degrading to an unconstrained schema.
    """

    def __init__(self, app_config: Optional[Config] = None):
        self.app_config = app_config or Config()
        self.logger = logger.bind(service="SchemaConverterService")
        self.prober = TransformOutputProber(
            recurse=self.convert,
            enabled=self.app_config.probing.enabled,
            parent_logger=self.logger,
        )
        self._handlers = self._build_dispatch_table()

    def _build_dispatch_table(self) -> Dict[NodeKind, NodeHandler]:
        handlers: Dict[NodeKind, NodeHandler] = {}
        for kind, mapper in PRIMITIVE_MAPPERS.items():
            handlers[kind] = lambda node, mode, mapper=mapper: mapper(node)
        for kind, composite_mapper in COMPOSITE_MAPPERS.items():
            handlers[kind] = functools.partial(self._convert_composite, composite_mapper)
        for kind in WRAPPER_KINDS:
            handlers[kind] = self._convert_wrapper
        handlers[NodeKind.TRANSFORM] = self._convert_transform

        missing = [kind.value for kind in NodeKind if kind not in handlers]
        if missing:
            raise UnsupportedNodeKindError(missing, f"Dispatch table has no handler for node kinds: {', '.join(missing)}")
        return handlers

    def _convert_composite(self, composite_mapper: CompositeMapper, node: SchemaNode, mode: Mode) -> Descriptor:
        return composite_mapper(node, mode, self.convert)

    def _convert_wrapper(self, node: SchemaNode, mode: Mode) -> Descriptor:
        return unwrap_modifier(node, mode, self.convert)

    def _convert_transform(self, node: SchemaNode, mode: Mode) -> Descriptor:
        if mode == Mode.OUTPUT:
            return self.prober.probe(node)
        return self.convert(node.inner, Mode.INPUT)

    def convert(self, node: SchemaNode, mode: Mode = Mode.INPUT) -> Descriptor:
        """
        Converts `node` to a descriptor. The node's own annotation is merged
        last, after its children were converted and merged, so a parent
        annotation overrides anything derived from below.
        """
        handler = self._handlers.get(node.kind)
        if handler is None:
            raise UnsupportedNodeKindError(node.kind)
        descriptor = handler(node, Mode(mode))
        if node.annotation:
            descriptor = merge(descriptor, node.annotation)
        return descriptor


@functools.lru_cache(maxsize=1)
def _default_service() -> SchemaConverterService:
    """
    Shared service behind the module-level `convert`. Built once per process,
    so configuration is read from the environment on first use only; later
    SCHEMA_OPENAPI_* changes need `_default_service.cache_clear()` or an
    explicit SchemaConverterService.
    """
    return SchemaConverterService(app_config=Config())


def convert(node: SchemaNode, mode: Mode = Mode.INPUT) -> Descriptor:
    """
    Converts `node` with a service configured from the environment when first
    called. Create a SchemaConverterService to convert with other settings.
    """
    return _default_service().convert(node, mode)
