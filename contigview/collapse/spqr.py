#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
ContigView v0.1.0

SPQR metanode expansion — collapse/uncollapse over the SPQR trees of the
biconnected components drawn in the SPQR view.

Every metanode starts out collapsed, showing only its own skeleton. Uncollapsing
it reveals its immediate descendants in the tree:

- explicit mode: each descendant metanode is drawn as its own compound node,
  with metanode edges from the parent and its skeleton's singlenodes and
  singleedges. Collapsing recursively collapses the descendants and deletes
  their contents and the descendant metanodes themselves.
- implicit mode: the descendants' singlenodes and singleedges are inlined
  into the view. Singlenodes already visible in the same biconnected
  component are reused rather than drawn again. Only descendants that have
  descendants of their own get a (collapsed) metanode element. The parent
  metanode and its virtual edges are deleted. Collapsing deletes the inlined
  elements again and redraws the metanode with its virtual edges.

The rows needed for an expansion are loaded from the layout database the
first time a metanode is uncollapsed and cached on its entity.

Author: ContigView Development Team
License: Dual License (Academic/Commercial) - See LICENSE_ACADEMIC.md and LICENSE_COMMERCIAL.md
"""

from __future__ import annotations
import logging
from typing import Dict, Iterable, Optional

from ..errors import ElementGraphError
from ..kinds import EdgeKind, ViewType
from ..records import ClusterRecord
from ..render.renderer import GraphElementRenderer
from ..render.session import ClusterEntity, MetanodeExpansion, ViewSession

logger = logging.getLogger(__name__)


class SPQRMetanodeEngine:
    """
    Expands and compresses SPQR metanodes.

    Args:
        session: SPQR-view session
        renderer: Renderer drawing into the session
        db: Layout database the expansions are loaded from
    """

    def __init__(self, session: ViewSession, renderer: GraphElementRenderer, db):
        self.session = session
        self.renderer = renderer
        self.graph = session.graph
        self.db = db

    def toggle_metanode(self, metanode_id: str) -> bool:
        """
        Uncollapse a collapsed metanode, or collapse an uncollapsed one.

        Returns:
            False for metanodes without descendants (nothing to show)
        """
        entity = self._entity(metanode_id)
        if entity.descendant_count <= 0:
            return False
        with self.graph.batch():
            if entity.collapsed:
                return self.uncollapse_metanode(metanode_id)
            return self.collapse_metanode(metanode_id)

    # ========================================================================
    # Expansion loading
    # ========================================================================

    def load_expansion(self, entity: ClusterEntity) -> MetanodeExpansion:
        """Rows for the metanode's immediate descendants (loaded once)."""
        if entity.expansion is None:
            metanode_edges = list(self.db.metanode_outgoing_edges(entity.id))
            descendant_ids = [e.target_id for e in metanode_edges]
            entity.expansion = MetanodeExpansion(
                metanode_edges=metanode_edges,
                descendants=list(self.db.metanodes_by_id(descendant_ids)),
                singlenodes=list(self.db.singlenodes_in(descendant_ids)),
                singleedges=list(self.db.singleedges_in(descendant_ids)),
            )
            logger.debug(f"Loaded expansion of {entity.id}: "
                         f"{len(descendant_ids)} descendant metanodes")
        return entity.expansion

    # ========================================================================
    # Uncollapse
    # ========================================================================

    def uncollapse_metanode(self, metanode_id: str) -> bool:
        entity = self._entity(metanode_id)
        if not entity.collapsed:
            return False
        expansion = self.load_expansion(entity)
        session = self.session
        renderer = self.renderer
        implicit = session.is_implicit

        with self.graph.batch():
            positions = {metanode_id: self.graph.node(metanode_id).position}
            for descendant in expansion.descendants:
                if not implicit or descendant.descendant_metanode_count > 0:
                    cluster_id, pos = self._render_metanode(descendant)
                    positions[cluster_id] = pos
                    if implicit:
                        entity.inlined_metanode_ids.append(cluster_id)

            if not implicit:
                for edge in expansion.metanode_edges:
                    renderer.render_edge(edge, positions, None,
                                         EdgeKind.METANODE_EDGE, ViewType.SPQR)

            id_remap: Dict[str, str] = {}
            for node in expansion.singlenodes:
                if implicit:
                    visible = self._visible_instance(node.parent_bicomponent_id, node.id)
                    if visible is not None:
                        id_remap[node.id] = visible
                        continue
                element_id = node.element_id(ViewType.SPQR)
                renderer.render_node(node, None, ViewType.SPQR, element_id)
                if implicit:
                    entity.inlined_node_ids.append(element_id)

            for edge in expansion.singleedges:
                drawn = renderer.render_edge(edge, None, None, EdgeKind.SINGLE_EDGE,
                                             ViewType.SPQR, id_remap)
                if implicit and drawn is not None:
                    entity.inlined_edge_ids.append(drawn.id)

            if implicit:
                # The metanode is replaced by its descendants' contents
                self._delete_existing(entity.virtual_edge_ids)
                entity.virtual_edge_ids = []
                self._delete_existing([metanode_id])
                renderer.positions.pop(metanode_id, None)
            else:
                self.graph.node(metanode_id).data["isCollapsed"] = False
            entity.collapsed = False
        return True

    # ========================================================================
    # Collapse
    # ========================================================================

    def collapse_metanode(self, metanode_id: str) -> bool:
        entity = self._entity(metanode_id)
        if entity.collapsed:
            return False
        with self.graph.batch():
            if self.session.is_implicit:
                self._collapse_implicit(entity)
            else:
                self._collapse_explicit(entity)
        return True

    def _collapse_explicit(self, entity: ClusterEntity):
        for descendant_id in entity.descendant_ids or ():
            descendant = self.session.clusters.get(descendant_id)
            if descendant is None:
                continue
            if descendant.descendant_count > 0 and not descendant.collapsed:
                self._collapse_explicit(descendant)
            # Deleting a singlenode deletes its skeleton edges with it
            self._delete_existing(descendant.singlenode_ids)
            descendant.singlenode_ids = []
            self._delete_existing([descendant_id])
        entity.collapsed = True
        self.graph.node(entity.id).data["isCollapsed"] = True

    def _collapse_implicit(self, entity: ClusterEntity):
        self._delete_inlined(entity)
        # Redraw the metanode together with its virtual edges
        virtual_edges = list(entity.virtual_edge_records)
        cluster_id, _ = self._render_metanode(entity.record)
        for record in virtual_edges:
            self.renderer.render_edge(record, None, None, EdgeKind.SINGLE_EDGE,
                                      ViewType.SPQR, self._virtual_edge_remap(entity, record))

    def _delete_inlined(self, entity: ClusterEntity):
        """Delete everything an implicitly uncollapsed metanode added, recursively."""
        for child_id in entity.inlined_metanode_ids:
            child = self.session.clusters.get(child_id)
            if child is None:
                continue
            if not child.collapsed:
                self._delete_inlined(child)
            self._delete_existing(child.virtual_edge_ids)
            child.virtual_edge_ids = []
            child.collapsed = True
            self._delete_existing([child_id])
        self._delete_existing(entity.inlined_edge_ids)
        self._delete_existing(entity.inlined_node_ids)

        bicomponent_id = entity.record.parent_bicomponent_id
        visible = self.session.bicomponent_visible_singlenodes.get(bicomponent_id)
        if visible is not None:
            gone = set(entity.inlined_node_ids)
            visible[:] = [n for n in visible if n not in gone]
        entity.inlined_metanode_ids = []
        entity.inlined_edge_ids = []
        entity.inlined_node_ids = []

    def _virtual_edge_remap(self, entity: ClusterEntity, record) -> Dict[str, str]:
        remap = {}
        for base_id in (record.source_id, record.target_id):
            if self.graph.contains(f"{base_id}_{entity.id}"):
                continue
            visible = self._visible_instance(entity.record.parent_bicomponent_id, base_id)
            if visible is not None:
                remap[base_id] = visible
        return remap

    # ------------------------------------------------------------------

    def _render_metanode(self, record: ClusterRecord):
        """Render a metanode, keeping any expansion cached on a previous entity."""
        previous = self.session.clusters.get(record.id)
        cluster_id, pos = self.renderer.render_cluster(record)
        if previous is not None:
            self.session.clusters[cluster_id].expansion = previous.expansion
        return cluster_id, pos

    def _visible_instance(self, bicomponent_id: Optional[str], node_id: str) -> Optional[str]:
        """First visible element of a singlenode in a biconnected component."""
        for element_id in self.session.bicomponent_visible_singlenodes.get(bicomponent_id, ()):
            parent = self.session.ele2parent.get(element_id)
            if parent is None:
                if element_id == node_id:
                    return element_id
            elif element_id == f"{node_id}_{parent}":
                return element_id
        return None

    def _delete_existing(self, element_ids: Iterable[str]):
        ids = [e for e in element_ids
               if self.graph.get_node(e) is not None or self.graph.get_edge(e) is not None]
        self.graph.delete(ids)
        for element_id in ids:
            self.renderer.positions.pop(element_id, None)

    def _entity(self, metanode_id: str) -> ClusterEntity:
        entity = self.session.clusters.get(metanode_id)
        if entity is None or not entity.kind.is_metanode:
            raise ElementGraphError(f"{metanode_id} is not an SPQR metanode")
        return entity

# ContigView v0.1.0
# Any usage is subject to this software's license.
