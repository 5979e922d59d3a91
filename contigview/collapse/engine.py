#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
ContigView v0.1.0

Cluster Collapse Engine — collapse/uncollapse state machine for structural
pattern clusters (chains, cyclic chains, bubbles, frayed ropes, misc.
patterns), plus the edge filtering and edge straightening features that have
to cooperate with it.

Collapsing a cluster:
1. Moves every boundary edge onto the cluster itself (incoming edges get the
   cluster as their target, outgoing edges as their source) and draws them
   straight, since their control points are meaningless once an endpoint
   has moved.
2. Hides the cluster's interior nodes and interior edges.

Uncollapsing restores the interior elements and moves the boundary edges
back onto their canonical endpoints, restoring their curves where that is
still valid. The pair is lossless: collapse followed by uncollapse gives back
the same edge endpoints, apart from edges culled in the meantime.

Boundary/interior bookkeeping is computed once, by init_clusters(), after the
whole component has been drawn.

Author: ContigView Development Team
License: Dual License (Academic/Commercial) - See LICENSE_ACADEMIC.md and LICENSE_COMMERCIAL.md
"""

from __future__ import annotations
import logging
from typing import Optional

from ..errors import ElementGraphError
from ..kinds import CurveStyle
from ..render.elements import EdgeElement
from ..render.session import ClusterEntity, ViewSession

logger = logging.getLogger(__name__)

TENTATIVE_CLASS = "tentative"
REDUCED_EDGE_CLASS = "reducededge"


class ClusterCollapseEngine:
    """Collapses and uncollapses the structural patterns of a ViewSession."""

    def __init__(self, session: ViewSession):
        self.session = session
        self.graph = session.graph

    # ========================================================================
    # Initialization
    # ========================================================================

    def init_clusters(self):
        """
        Record the boundary edge maps and interior elements of every
        uncollapsed cluster. Must run after all nodes and edges exist.
        """
        session = self.session
        graph = self.graph
        for cluster_id in sorted(session.uncollapsed):
            entity = session.clusters[cluster_id]
            children = graph.children(cluster_id)
            all_incoming = set(graph.incoming_edges(children))
            all_outgoing = set(graph.outgoing_edges(children))
            # Edges with both endpoints inside show up in both sets
            incoming = all_incoming - all_outgoing
            outgoing = all_outgoing - all_incoming
            interior_edges = (all_incoming & all_outgoing)

            entity.incoming_edge_map = {
                e: (graph.edge(e).source, graph.edge(e).target) for e in sorted(incoming)
            }
            entity.outgoing_edge_map = {
                e: (graph.edge(e).source, graph.edge(e).target) for e in sorted(outgoing)
            }
            entity.interior_node_ids = list(children)
            entity.interior_edge_ids = sorted(interior_edges)
            entity.interior_node_count = len(children)
            entity.initialized = True

            node = graph.node(cluster_id)
            node.data["interiorNodeCount"] = entity.interior_node_count
            # From here on w/h are the collapsed dimensions
            node.data["w"] = entity.collapsed_width
            node.data["h"] = entity.collapsed_height
        logger.debug(f"Initialized {len(session.uncollapsed)} clusters")

    # ========================================================================
    # Single cluster transitions
    # ========================================================================

    def toggle_cluster(self, cluster_id: str) -> bool:
        """Collapse an uncollapsed cluster or uncollapse a collapsed one."""
        entity = self._entity(cluster_id)
        with self.graph.batch():
            if entity.collapsed:
                return self.uncollapse_cluster(cluster_id)
            return self.collapse_cluster(cluster_id)

    def collapse_cluster(self, cluster_id: str) -> bool:
        """
        Collapse a cluster.

        Returns:
            True if the cluster was collapsed; False if it already was, or if
            it holds a tentative node while finishing is active
        """
        entity = self._entity(cluster_id)
        if entity.collapsed:
            return False
        if self._holds_tentative(entity):
            logger.debug(f"Not collapsing {cluster_id}: it holds a tentative node")
            return False

        graph = self.graph
        removed = self.session.removed_edges
        with graph.batch():
            for edge_id in entity.incoming_edge_map:
                if edge_id in removed:
                    continue
                graph.edge(edge_id).restyle(CurveStyle.BASIC)
                graph.move_edge(edge_id, target=cluster_id)
            for edge_id in entity.outgoing_edge_map:
                if edge_id in removed:
                    continue
                graph.edge(edge_id).restyle(CurveStyle.BASIC)
                graph.move_edge(edge_id, source=cluster_id)
            graph.remove(entity.interior_node_ids + entity.interior_edge_ids)
            self.session.mark_collapsed(cluster_id, True)
            graph.node(cluster_id).data["isCollapsed"] = True
        return True

    def uncollapse_cluster(self, cluster_id: str) -> bool:
        """
        Uncollapse a cluster.

        Returns:
            True if the cluster was uncollapsed; False if it wasn't
            collapsed, or if it is tentative while finishing is active
        """
        entity = self._entity(cluster_id)
        if not entity.collapsed:
            return False
        if self._holds_tentative(entity):
            logger.debug(f"Not uncollapsing {cluster_id}: it is tentative")
            return False

        graph = self.graph
        removed = self.session.removed_edges
        with graph.batch():
            graph.restore(entity.interior_node_ids)
            graph.restore(e for e in entity.interior_edge_ids if e not in removed)
            for edge_id, (_, target) in entity.incoming_edge_map.items():
                if edge_id in removed:
                    continue
                edge = graph.edge(edge_id)
                self._restore_curve(edge, graph.node(edge.source).is_cluster)
                graph.move_edge(edge_id, target=target)
            for edge_id, (source, _) in entity.outgoing_edge_map.items():
                if edge_id in removed:
                    continue
                edge = graph.edge(edge_id)
                self._restore_curve(edge, graph.node(edge.target).is_cluster)
                graph.move_edge(edge_id, source=source)
            self.session.mark_collapsed(cluster_id, False)
            graph.node(cluster_id).data["isCollapsed"] = False
        return True

    # ========================================================================
    # Global transitions
    # ========================================================================

    def collapse_all(self) -> int:
        """Collapse every uncollapsed cluster. Returns how many were collapsed."""
        with self.graph.batch():
            count = sum(1 for c in sorted(self.session.uncollapsed)
                        if self.collapse_cluster(c))
        logger.info(f"Collapsed {count} clusters")
        return count

    def uncollapse_all(self) -> int:
        """Uncollapse every collapsed cluster. Returns how many were uncollapsed."""
        with self.graph.batch():
            count = sum(1 for c in sorted(self.session.collapsed)
                        if self.uncollapse_cluster(c))
        logger.info(f"Uncollapsed {count} clusters")
        return count

    # ========================================================================
    # Edge filtering
    # ========================================================================

    def cull_edges(self, threshold: int) -> bool:
        """
        Hide edges whose multiplicity is below a threshold.

        Edges hidden by an earlier, higher threshold that now pass are
        restored first. An endpoint currently hidden inside a collapsed
        cluster is replaced by that cluster; an edge lying entirely inside
        one collapsed cluster stays hidden until the cluster is uncollapsed.

        Returns:
            False if the threshold equals the previous one (nothing done)
        """
        session = self.session
        if session.prev_edge_weight_threshold == threshold:
            return False

        graph = self.graph
        restored = 0
        culled = 0
        with graph.batch():
            for edge_id in sorted(session.removed_edges):
                edge = graph.edge(edge_id)
                multiplicity = edge.data.get("multiplicity")
                if multiplicity is None or multiplicity < threshold:
                    continue
                session.removed_edges.discard(edge_id)
                if self._restore_culled_edge(edge):
                    restored += 1

            # Hidden interior edges are culled too, so uncollapsing leaves them out
            for edge in graph.edges(include_removed=True):
                if edge.id in session.removed_edges:
                    continue
                multiplicity = edge.data.get("multiplicity")
                if multiplicity is not None and multiplicity < threshold:
                    if not edge.removed:
                        graph.remove([edge.id])
                    session.removed_edges.add(edge.id)
                    culled += 1

        session.prev_edge_weight_threshold = threshold
        logger.info(f"Edge weight threshold {threshold}: restored {restored}, "
                    f"culled {culled} edges")
        return True

    def _restore_culled_edge(self, edge: EdgeElement) -> bool:
        source = self._visible_endpoint(edge.canonical_source)
        target = self._visible_endpoint(edge.canonical_target)
        if source == target and self.graph.node(source).is_cluster \
                and source != edge.canonical_source:
            # Interior edge of a collapsed cluster
            return False
        moved = source != edge.canonical_source or target != edge.canonical_target
        self.graph.move_edge(edge.id, source=source, target=target)
        if moved:
            edge.restyle(CurveStyle.BASIC)
        else:
            edge.restyle(CurveStyle.BASIC if edge.reduced else edge.curve.style)
        self.graph.restore([edge.id])
        return True

    def _visible_endpoint(self, node_id: str) -> str:
        """The node itself if visible, else its (collapsed) parent cluster."""
        if self.graph.contains(node_id):
            return node_id
        parent = self.graph.node(node_id).parent
        if parent is None or not self.graph.contains(parent):
            raise ElementGraphError(f"Node {node_id} is hidden outside any visible cluster")
        return parent

    # ========================================================================
    # Edge straightening
    # ========================================================================

    def reduce_edges_to_straight_lines(self) -> int:
        """
        Draw every edge as a straight line from now on, including edges
        currently hidden. Uncollapsing never brings back their curves.
        """
        count = 0
        with self.graph.batch():
            for edge in self.graph.edges(include_removed=True):
                edge.reduced = True
                edge.classes.add(REDUCED_EDGE_CLASS)
                edge.restyle(CurveStyle.BASIC)
                count += 1
        logger.info(f"Reduced {count} edges to straight lines")
        return count

    # ------------------------------------------------------------------

    def _restore_curve(self, edge: EdgeElement, other_end_is_cluster: bool):
        if edge.has_control_points and not other_end_is_cluster and not edge.reduced:
            edge.restyle(CurveStyle.UNBUNDLED)

    def _holds_tentative(self, entity: ClusterEntity) -> bool:
        if not self.session.finishing_active:
            return False
        node = self.graph.get_node(entity.id)
        if node is not None and node.has_class(TENTATIVE_CLASS):
            return True
        return any(self.graph.node(c).has_class(TENTATIVE_CLASS)
                   for c in self.graph.children(entity.id))

    def _entity(self, cluster_id: str) -> ClusterEntity:
        entity: Optional[ClusterEntity] = self.session.clusters.get(cluster_id)
        if entity is None or not entity.kind.is_structural_pattern:
            raise ElementGraphError(f"{cluster_id} is not a structural pattern cluster")
        if not entity.initialized:
            raise ElementGraphError(
                f"Cluster {cluster_id} has not been initialized; "
                "init_clusters() runs after drawing completes"
            )
        return entity

# ContigView v0.1.0
# Any usage is subject to this software's license.
