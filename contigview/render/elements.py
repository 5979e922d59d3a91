#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
ContigView v0.1.0

Element Graph — headless model of the rendering engine's element store.

Holds every node (including compound/cluster nodes) and edge of the drawn
component, keyed by id. Elements can be:

- removed: hidden from the graph but kept, so they can be restored later
  (used when collapsing a cluster)
- deleted: dropped for good (used when collapsing SPQR metanodes, whose
  contents are redrawn from the database on the next expansion)

Removing or deleting a node takes its incident visible edges with it, the
same way the canvas engine does.

Author: ContigView Development Team
License: Dual License (Academic/Commercial) - See LICENSE_ACADEMIC.md and LICENSE_COMMERCIAL.md
"""

from __future__ import annotations
import logging
from collections import defaultdict
from contextlib import contextmanager
from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, Iterator, List, Optional, Set

from ..errors import ElementGraphError
from ..geometry.curves import CurveDescriptor
from ..geometry.transform import Point
from ..kinds import CurveStyle

logger = logging.getLogger(__name__)


# ============================================================================
#                               ELEMENTS
# ============================================================================

@dataclass
class NodeElement:
    """A node or compound (cluster) node."""
    id: str
    position: Point
    classes: Set[str] = field(default_factory=set)
    data: Dict[str, Any] = field(default_factory=dict)
    parent: Optional[str] = None
    locked: bool = False
    removed: bool = False

    @property
    def is_cluster(self) -> bool:
        return "cluster" in self.classes

    def has_class(self, name: str) -> bool:
        return name in self.classes


@dataclass
class EdgeElement:
    """
    An edge.

    ``curve`` is the geometry the edge was drawn with; ``style`` is the style
    it is currently shown with. The two diverge while an endpoint is moved
    onto a collapsed cluster, or after the edge is reduced to a straight line.
    ``canonical_source``/``canonical_target`` remember the endpoints the edge
    was drawn between.
    """
    id: str
    source: str
    target: str
    classes: Set[str] = field(default_factory=set)
    data: Dict[str, Any] = field(default_factory=dict)
    curve: CurveDescriptor = field(default_factory=CurveDescriptor.straight)
    style: CurveStyle = CurveStyle.BASIC
    canonical_source: str = ""
    canonical_target: str = ""
    reduced: bool = False
    removed: bool = False

    @property
    def has_control_points(self) -> bool:
        return not self.curve.is_straight

    def has_class(self, name: str) -> bool:
        return name in self.classes

    def restyle(self, style: CurveStyle):
        """Show the edge with another curve style, keeping its style class in sync."""
        for s in CurveStyle:
            self.classes.discard(s.value)
        self.classes.add(style.value)
        self.style = style


# ============================================================================
#                               ELEMENT GRAPH
# ============================================================================

class ElementGraph:
    """In-memory element store with compound nesting and edge adjacency."""

    def __init__(self):
        self._nodes: Dict[str, NodeElement] = {}
        self._edges: Dict[str, EdgeElement] = {}
        # Adjacency over every (non-deleted) edge; visibility filtered on query
        self._out: Dict[str, Set[str]] = defaultdict(set)
        self._in: Dict[str, Set[str]] = defaultdict(set)
        self._children: Dict[str, Set[str]] = defaultdict(set)
        self._batch_depth = 0
        self.revision = 0

    # ------------------------------------------------------------------
    # Batching
    # ------------------------------------------------------------------

    @contextmanager
    def batch(self):
        """Group structural edits; the revision counter bumps once at the end."""
        self._batch_depth += 1
        try:
            yield self
        finally:
            self._batch_depth -= 1
            if self._batch_depth == 0:
                self._touch()

    @property
    def in_batch(self) -> bool:
        return self._batch_depth > 0

    def _touch(self):
        if self._batch_depth == 0:
            self.revision += 1

    # ------------------------------------------------------------------
    # Adding
    # ------------------------------------------------------------------

    def add_node(self, node_id: str, position: Point,
                 classes: Iterable[str] = (), data: Optional[Dict[str, Any]] = None,
                 parent: Optional[str] = None, locked: bool = False) -> NodeElement:
        if node_id in self._nodes or node_id in self._edges:
            raise ElementGraphError(f"Duplicate element id: {node_id}")
        node = NodeElement(node_id, Point(*position), set(classes),
                           dict(data or {}), parent, locked)
        self._nodes[node_id] = node
        if parent is not None:
            self._children[parent].add(node_id)
        self._touch()
        return node

    def unique_edge_id(self, source: str, target: str) -> str:
        """``src->tgt``, suffixed with ``#n`` for parallel edges."""
        base = f"{source}->{target}"
        if base not in self._edges:
            return base
        n = 2
        while f"{base}#{n}" in self._edges:
            n += 1
        return f"{base}#{n}"

    def add_edge(self, source: str, target: str, classes: Iterable[str] = (),
                 data: Optional[Dict[str, Any]] = None,
                 curve: Optional[CurveDescriptor] = None,
                 edge_id: Optional[str] = None) -> EdgeElement:
        for endpoint in (source, target):
            if not self.contains(endpoint):
                raise ElementGraphError(
                    f"Can not create edge {source}->{target}: "
                    f"endpoint {endpoint} is not in the graph"
                )
        if edge_id is None:
            edge_id = self.unique_edge_id(source, target)
        elif edge_id in self._edges or edge_id in self._nodes:
            raise ElementGraphError(f"Duplicate element id: {edge_id}")
        curve = curve or CurveDescriptor.straight()
        edge = EdgeElement(edge_id, source, target, set(classes), dict(data or {}),
                           curve=curve, style=curve.style,
                           canonical_source=source, canonical_target=target)
        edge.classes.add(curve.style.value)
        self._edges[edge_id] = edge
        self._out[source].add(edge_id)
        self._in[target].add(edge_id)
        self._touch()
        return edge

    # ------------------------------------------------------------------
    # Lookup
    # ------------------------------------------------------------------

    def get_node(self, node_id: str) -> Optional[NodeElement]:
        """Node by id, whether visible or removed."""
        return self._nodes.get(node_id)

    def get_edge(self, edge_id: str) -> Optional[EdgeElement]:
        return self._edges.get(edge_id)

    def node(self, node_id: str) -> NodeElement:
        try:
            return self._nodes[node_id]
        except KeyError:
            raise ElementGraphError(f"No node with id {node_id}") from None

    def edge(self, edge_id: str) -> EdgeElement:
        try:
            return self._edges[edge_id]
        except KeyError:
            raise ElementGraphError(f"No edge with id {edge_id}") from None

    def contains(self, element_id: str) -> bool:
        """True if the element exists and is currently visible."""
        ele = self._nodes.get(element_id) or self._edges.get(element_id)
        return ele is not None and not ele.removed

    def nodes(self, include_removed: bool = False) -> Iterator[NodeElement]:
        return (n for n in list(self._nodes.values())
                if include_removed or not n.removed)

    def edges(self, include_removed: bool = False) -> Iterator[EdgeElement]:
        return (e for e in list(self._edges.values())
                if include_removed or not e.removed)

    def node_count(self, include_removed: bool = False) -> int:
        return sum(1 for _ in self.nodes(include_removed))

    def edge_count(self, include_removed: bool = False) -> int:
        return sum(1 for _ in self.edges(include_removed))

    def children(self, parent_id: str) -> List[str]:
        """Visible child node ids of a compound node."""
        return [c for c in sorted(self._children.get(parent_id, ()))
                if not self._nodes[c].removed]

    def incoming_edges(self, node_ids: Iterable[str]) -> List[str]:
        """Visible edges whose target is in node_ids."""
        ids = set(node_ids)
        return sorted(e for n in ids for e in self._in.get(n, ())
                      if not self._edges[e].removed)

    def outgoing_edges(self, node_ids: Iterable[str]) -> List[str]:
        """Visible edges whose source is in node_ids."""
        ids = set(node_ids)
        return sorted(e for n in ids for e in self._out.get(n, ())
                      if not self._edges[e].removed)

    def connected_edges(self, node_ids: Iterable[str]) -> List[str]:
        ids = list(node_ids)
        return sorted(set(self.incoming_edges(ids)) | set(self.outgoing_edges(ids)))

    def outgoers(self, node_id: str) -> List[str]:
        """Ids of the nodes reached by the visible outgoing edges of a node."""
        seen: Dict[str, None] = {}
        for edge_id in self.outgoing_edges([node_id]):
            seen.setdefault(self._edges[edge_id].target, None)
        return list(seen)

    # ------------------------------------------------------------------
    # Mutation
    # ------------------------------------------------------------------

    def set_position(self, node_id: str, position: Point):
        self.node(node_id).position = Point(*position)
        self._touch()

    def move_edge(self, edge_id: str, source: Optional[str] = None,
                  target: Optional[str] = None):
        """Reattach one or both endpoints of an edge."""
        edge = self.edge(edge_id)
        if source is not None and source != edge.source:
            self._require_node(source)
            self._out[edge.source].discard(edge_id)
            self._out[source].add(edge_id)
            edge.source = source
        if target is not None and target != edge.target:
            self._require_node(target)
            self._in[edge.target].discard(edge_id)
            self._in[target].add(edge_id)
            edge.target = target
        self._touch()

    def remove(self, element_ids: Iterable[str]) -> List[str]:
        """
        Hide elements. Removing a node also hides its visible incident edges.

        Returns:
            Ids of every element that went from visible to removed
        """
        removed = []
        for element_id in element_ids:
            if element_id in self._nodes:
                node = self._nodes[element_id]
                if node.removed:
                    continue
                for edge_id in self.connected_edges([element_id]):
                    self._edges[edge_id].removed = True
                    removed.append(edge_id)
                node.removed = True
                removed.append(element_id)
            elif element_id in self._edges:
                edge = self._edges[element_id]
                if not edge.removed:
                    edge.removed = True
                    removed.append(element_id)
            else:
                raise ElementGraphError(f"No element with id {element_id}")
        self._touch()
        return removed

    def restore(self, element_ids: Iterable[str]):
        """Make removed elements visible again. Nodes are restored first."""
        ids = list(element_ids)
        for element_id in ids:
            if element_id in self._nodes:
                self._nodes[element_id].removed = False
        for element_id in ids:
            if element_id in self._edges:
                edge = self._edges[element_id]
                for endpoint in (edge.source, edge.target):
                    if not self.contains(endpoint):
                        raise ElementGraphError(
                            f"Can not restore edge {element_id}: endpoint "
                            f"{endpoint} is not visible"
                        )
                edge.removed = False
            elif element_id not in self._nodes:
                raise ElementGraphError(f"No element with id {element_id}")
        self._touch()

    def delete(self, element_ids: Iterable[str]) -> List[str]:
        """
        Drop elements for good. Deleting a node deletes every edge incident
        on it, visible or not, and detaches its children.
        """
        deleted = []
        for element_id in element_ids:
            if element_id in self._nodes:
                for edge_id in list(self._in.get(element_id, ())) + \
                        list(self._out.get(element_id, ())):
                    if edge_id in self._edges:
                        self._drop_edge(edge_id)
                        deleted.append(edge_id)
                node = self._nodes.pop(element_id)
                if node.parent is not None:
                    self._children[node.parent].discard(element_id)
                for child_id in self._children.pop(element_id, set()):
                    self._nodes[child_id].parent = None
                self._in.pop(element_id, None)
                self._out.pop(element_id, None)
                deleted.append(element_id)
            elif element_id in self._edges:
                self._drop_edge(element_id)
                deleted.append(element_id)
        self._touch()
        return deleted

    def clear(self):
        self._nodes.clear()
        self._edges.clear()
        self._out.clear()
        self._in.clear()
        self._children.clear()
        self._touch()

    def _drop_edge(self, edge_id: str):
        edge = self._edges.pop(edge_id)
        self._out[edge.source].discard(edge_id)
        self._in[edge.target].discard(edge_id)

    def _require_node(self, node_id: str):
        if node_id not in self._nodes:
            raise ElementGraphError(f"No node with id {node_id}")

    def __repr__(self) -> str:
        return (f"ElementGraph(nodes={self.node_count()}, "
                f"edges={self.edge_count()}, revision={self.revision})")

# ContigView v0.1.0
# Any usage is subject to this software's license.
