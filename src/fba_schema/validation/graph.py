"""Flattened view of an object graph.

The validator never walks nested structures directly. :func:`build_graph`
walks a root record once, following the RECORDS fields of the schema
descriptors, and produces the list of record nodes and reference sites that
every check iterates over.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from pydantic import BaseModel

from fba_schema.validation.base import GraphStructureError
from fba_schema.validation.schemas import (
    ENTITY_SCHEMAS,
    FBAMODEL_TYPE,
    ROOT_ENTITIES,
    EntitySchema,
    FieldSpec,
    FieldType,
    RefKind,
    ReferenceType,
    get_reference_type,
)

logger = logging.getLogger(__name__)


class Scope(str, Enum):
    """Where a reference must resolve."""

    LOCAL = "local"  # an element of the graph itself
    TARGET_MODEL = "target_model"  # an element of the model named by fbamodel_ref
    EXTERNAL = "external"  # anything else


def join_path(parent: str, child: str) -> str:
    """Join graph path segments."""
    if not parent:
        return child
    if child.startswith("["):
        return f"{parent}{child}"
    return f"{parent}.{child}"


def to_plain(value: Any) -> Any:
    """Replace pydantic entities anywhere inside ``value`` with wire-named dicts."""
    if isinstance(value, BaseModel):
        return value.model_dump(by_alias=True)
    if isinstance(value, Mapping):
        return {key: to_plain(item) for key, item in value.items()}
    if isinstance(value, list):
        return [to_plain(item) for item in value]
    return value


def as_mapping(obj: Any, what: str = "root") -> Mapping[str, Any]:
    """Return a record as a plain mapping keyed by wire names.

    Pydantic entities nested anywhere inside are dumped too.

    Raises:
        GraphStructureError: If ``obj`` is neither a pydantic entity nor a mapping
    """
    if isinstance(obj, (BaseModel, Mapping)):
        return to_plain(obj)
    raise GraphStructureError(f"Expected a record at {what}, got {type(obj).__name__}")


@dataclass(frozen=True)
class RecordNode:
    """One record of the graph and where it sits."""

    path: str
    schema: EntitySchema
    record: Mapping[str, Any]


@dataclass(frozen=True)
class ReferenceSite:
    """One reference string occurring in the graph."""

    path: str
    spec: FieldSpec
    ref_type: ReferenceType
    value: str
    node: RecordNode


@dataclass
class ObjectGraph:
    """A root record with all nested records and references flattened.

    Attributes:
        root_type: Entity name of the root
        nodes: Records in pre-order (root first)
        references: String reference occurrences in traversal order
    """

    root_type: str
    nodes: list[RecordNode] = field(default_factory=list)
    references: list[ReferenceSite] = field(default_factory=list)
    _element_ids: dict[str, set[str]] = field(default_factory=dict, repr=False)

    @property
    def root(self) -> RecordNode:
        return self.nodes[0]

    @property
    def root_schema(self) -> EntitySchema:
        return self.root.schema

    @property
    def root_id(self) -> str | None:
        id_field = self.root_schema.id_field
        value = self.root.record.get(id_field) if id_field else None
        return value if isinstance(value, str) else None

    def element_ids(self, list_name: str) -> set[str]:
        """ids of the elements of one of the root's lists."""
        return self._element_ids.get(list_name, set())

    def scope_of(self, ref_type: ReferenceType) -> Scope:
        """Where a reference of this type must resolve when found in this graph."""
        return reference_scope(ref_type, self.root_schema)


def reference_scope(ref_type: ReferenceType, root_schema: EntitySchema) -> Scope:
    """Decide where a reference must resolve, given the root it occurs in."""
    if ref_type.kind == RefKind.ABSOLUTE:
        return Scope.EXTERNAL
    if ref_type.target_type == root_schema.type_string:
        return Scope.LOCAL
    if ref_type.target_type == FBAMODEL_TYPE and root_schema.get_field("fbamodel_ref") is not None:
        return Scope.TARGET_MODEL
    return Scope.EXTERNAL


def index_element_ids(record: Mapping[str, Any], schema: EntitySchema) -> dict[str, set[str]]:
    """Collect ids of the elements of each top-level list of a record.

    Elements that are not records or have no string id are skipped.
    """
    index: dict[str, set[str]] = {}
    for spec in schema.record_fields:
        child_schema = ENTITY_SCHEMAS[spec.entity or ""]
        id_field = child_schema.id_field
        items = record.get(spec.name)
        if id_field is None or not isinstance(items, list):
            continue
        index[spec.name] = {
            item[id_field]
            for item in items
            if isinstance(item, Mapping) and isinstance(item.get(id_field), str)
        }
    return index


def _collect_references(node: RecordNode, graph: ObjectGraph) -> None:
    for spec in node.schema.reference_fields:
        value = node.record.get(spec.name)
        if value is None:
            continue
        ref_type = get_reference_type(spec.ref_type or spec.name)
        path = join_path(node.path, spec.name)

        if spec.field_type == FieldType.REF:
            candidates = [(path, value)]
        elif spec.field_type == FieldType.REF_LIST:
            items = value if isinstance(value, list) else []
            candidates = [(join_path(path, f"[{i}]"), item) for i, item in enumerate(items)]
        else:
            keys = list(value) if isinstance(value, Mapping) else []
            candidates = [(join_path(path, f"[{key}]"), key) for key in keys]

        for site_path, candidate in candidates:
            if isinstance(candidate, str):
                graph.references.append(ReferenceSite(site_path, spec, ref_type, candidate, node))


def _walk(node: RecordNode, graph: ObjectGraph) -> None:
    graph.nodes.append(node)
    _collect_references(node, graph)

    for spec in node.schema.record_fields:
        items = node.record.get(spec.name)
        if items is None:
            continue
        path = join_path(node.path, spec.name)
        if not isinstance(items, list):
            raise GraphStructureError(f"Expected a list of {spec.entity} records at {path}, got {type(items).__name__}")

        child_schema = ENTITY_SCHEMAS[spec.entity or ""]
        for i, item in enumerate(items):
            item_path = join_path(path, f"[{i}]")
            if not isinstance(item, Mapping):
                raise GraphStructureError(
                    f"Expected a {spec.entity} record at {item_path}, got {type(item).__name__}"
                )
            _walk(RecordNode(item_path, child_schema, item), graph)


def build_graph(root: Any, root_type: str | None = None) -> ObjectGraph:
    """Flatten a root entity and everything nested in it.

    Args:
        root: Pydantic root entity or mapping keyed by wire names
        root_type: Entity name of the root; inferred for pydantic entities

    Returns:
        ObjectGraph with nodes and reference sites in traversal order

    Raises:
        GraphStructureError: If the root type is unknown or a container has
            the wrong shape
    """
    if root_type is None:
        if not isinstance(root, BaseModel):
            raise GraphStructureError("root_type is required when validating a plain mapping")
        root_type = type(root).__name__

    if root_type not in ROOT_ENTITIES:
        raise GraphStructureError(f"Unknown root type: {root_type}. Available: {list(ROOT_ENTITIES)}")

    if isinstance(root, BaseModel) and type(root).__name__ != root_type:
        raise GraphStructureError(f"Expected a {root_type} root, got {type(root).__name__}")

    record = as_mapping(root)
    schema = ENTITY_SCHEMAS[root_type]

    graph = ObjectGraph(root_type=root_type)
    _walk(RecordNode("", schema, record), graph)
    graph._element_ids = index_element_ids(record, schema)

    logger.debug(f"Built {root_type} graph: {len(graph.nodes)} records, {len(graph.references)} references")
    return graph
