#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
ContigView v0.1.0

Graph Element Renderer — turns layout database records into elements of the
session's element graph.

Nodes are positioned with the coordinate transform, classed by shape,
orientation and colorization, and indexed by id so that edges drawn later can
look up their endpoint positions. Edges are run through the curve
parameterizer unless they are self loops or SPQR skeleton edges. Clusters
(structural patterns, bicomponents and SPQR metanodes) become compound nodes
centred on their transformed bounding rectangles.

Nodes must all be rendered before any edge that references them; an edge
whose endpoint was never indexed is a precondition violation.

Author: ContigView Development Team
License: Dual License (Academic/Commercial) - See LICENSE_ACADEMIC.md and LICENSE_COMMERCIAL.md
"""

from __future__ import annotations
import logging
from typing import Dict, Mapping, Optional, Tuple

from ..errors import MissingBoundingBoxError, UnindexedEndpointError
from ..geometry.curves import CurveDescriptor, parameterize_curve
from ..geometry.transform import (
    BoundingBox,
    Point,
    parse_control_points,
    rotate_coordinate,
    transform_point,
)
from ..kinds import ClusterKind, Colorization, EdgeKind, ViewType, is_spqr_parent_id
from ..records import ClusterRecord, EdgeRecord, NodeRecord
from ..utils.colors import gradient_color
from .elements import EdgeElement
from .session import ClusterEntity, ViewSession

logger = logging.getLogger(__name__)

BB_ENFORCING_IDS = ("bottom_left", "top_right")

NODE_DIRECTION_CLASSES = ("updir", "downdir", "leftdir", "rightdir")
CLUSTER_DIRECTION_CLASSES = ("updowndir", "leftrightdir")

# Multiplier used when a cluster row has no collapsed size
DEFAULT_COLLAPSED_SIZE = 2

# Metanode edges carry no thickness metadata
METANODE_EDGE_THICKNESS = 0.5


def node_coord_class(rotation: int, is_house: bool) -> str:
    """Orientation class for a non-cluster node at the given rotation."""
    if rotation == 0:
        return "updir" if is_house else "downdir"
    if rotation == 90:
        return "leftdir" if is_house else "rightdir"
    if rotation == 180:
        return "downdir" if is_house else "updir"
    return "rightdir" if is_house else "leftdir"


def cluster_coord_class(rotation: int) -> str:
    """Orientation class for a cluster (only up/down vs. left/right)."""
    if rotation in (0, 180):
        return "updowndir"
    return "leftrightdir"


class GraphElementRenderer:
    """
    Renders database records into a ViewSession's element graph.

    Attributes:
        session: The session being drawn into
        positions: Element id -> render-space position, for edge geometry
    """

    def __init__(self, session: ViewSession):
        self.session = session
        self.graph = session.graph
        self.positions: Dict[str, Point] = {}

    # ========================================================================
    # Nodes
    # ========================================================================

    def render_node(self, record: NodeRecord,
                    bounding_box: Optional[BoundingBox] = None,
                    mode: Optional[ViewType] = None,
                    element_id: Optional[str] = None) -> Point:
        """
        Render a node (or SPQR singlenode) record.

        Args:
            record: Node row
            bounding_box: Bounding box of the component (session's if None)
            mode: View the node is drawn in (session's if None)
            element_id: Id to use in the element graph; defaults to the
                record's view-dependent id

        Returns:
            The node's render-space position, which is also indexed
        """
        session = self.session
        mode = mode or session.view_type
        bounding_box = self._require_bounding_box(bounding_box, record.id)
        if element_id is None:
            element_id = record.element_id(mode)

        if mode is ViewType.SPQR and session.is_implicit:
            nx, ny = record.i_x, record.i_y
        else:
            nx, ny = record.x, record.y
        pos = transform_point(nx, ny, bounding_box, session.rotation_delta)

        if mode is ViewType.SPQR:
            shape_class = "singlenode"
        else:
            shape_class = node_coord_class(session.current_rotation, record.is_house)

        # Scaffold lookup keys: labels for GML assemblies, ids otherwise
        if session.asm_filetype == "GML":
            if record.label is not None:
                session.node_keys.append(record.label)
                label = record.label
            else:
                label = record.id
        else:
            session.node_keys.append(record.id)
            label = record.id

        if (mode is ViewType.SPQR and session.is_implicit
                and record.parent_bicomponent_id is not None):
            session.bicomponent_visible_singlenodes.setdefault(
                record.parent_bicomponent_id, []).append(element_id)

        settings = session.settings
        gc_color = None
        if record.gc_content is not None:
            gc_color = gradient_color(record.gc_content, settings.min_colorization,
                                      settings.max_colorization)
        repeat_color = None
        if record.has_repeat_info:
            if record.is_repeat is None:
                repeat_color = settings.default_node_color
            elif record.is_repeat == 1:
                repeat_color = settings.max_colorization
            else:
                repeat_color = settings.min_colorization

        data = {
            "label": label,
            # Layout sizes are in inches, and the axes are swapped
            "w": settings.inches_to_pixels * record.height,
            "h": settings.inches_to_pixels * record.width,
            "house": record.is_house,
            "depth": record.depth,
            "length": record.length,
            "gc_content": record.gc_content,
            "gc_color": gc_color,
            "repeat_color": repeat_color,
            "is_repeat": record.is_repeat,
        }

        parent = None
        parent_id = record.parent_id(mode)
        if parent_id is not None:
            if not is_spqr_parent_id(parent_id):
                parent = parent_id
            elif session.is_spqr and not session.is_implicit:
                # Metanodes don't nest their singlenodes; track them instead
                entity = session.clusters.get(parent_id)
                if entity is not None:
                    entity.singlenode_ids.append(element_id)
            session.ele2parent[element_id] = parent_id
            if record.label is not None:
                session.ele2parent[record.label] = parent_id

        self.graph.add_node(
            element_id, pos,
            classes=("noncluster", session.colorization.value, shape_class),
            data=data, parent=parent,
        )
        self.positions[element_id] = pos
        return pos

    # ========================================================================
    # Edges
    # ========================================================================

    def render_edge(self, record: EdgeRecord,
                    position_index: Optional[Mapping[str, Point]] = None,
                    bounding_box: Optional[BoundingBox] = None,
                    edge_kind: EdgeKind = EdgeKind.DOUBLE_EDGE,
                    mode: Optional[ViewType] = None,
                    id_remap: Optional[Mapping[str, str]] = None
                    ) -> Optional[EdgeElement]:
        """
        Render an edge, SPQR singleedge or metanode edge record.

        Args:
            record: Edge row
            position_index: Element id -> position (renderer's index if None)
            bounding_box: Bounding box of the component (session's if None)
            edge_kind: Which table the row came from
            mode: View the edge is drawn in (session's if None)
            id_remap: Singlenode id -> visible element id, for skeleton edges
                whose endpoints were already drawn in another metanode

        Returns:
            The new edge, or None for an implicit-mode virtual edge whose
            metanode is no longer drawn

        Raises:
            UnindexedEndpointError: If an endpoint position is unknown
        """
        mode = mode or self.session.view_type
        if position_index is None:
            position_index = self.positions

        if edge_kind is not EdgeKind.METANODE_EDGE and mode is ViewType.SPQR:
            return self._render_single_edge(record, id_remap or {})

        session = self.session
        settings = session.settings
        source_id = record.source_id
        target_id = record.target_id

        if mode is not ViewType.SPQR:
            multiplicity = record.multiplicity
            thickness = record.thickness
            is_outlier = record.is_outlier
            if multiplicity is not None:
                session.edge_weights.append(float(multiplicity))
        else:
            multiplicity = None
            thickness = METANODE_EDGE_THICKNESS
            is_outlier = 0

        edge_id = self.graph.unique_edge_id(source_id, target_id)
        if record.parent_cluster_id is not None:
            session.ele2parent[edge_id] = record.parent_cluster_id

        width = settings.min_edge_thickness
        if thickness is not None:
            width += thickness * settings.edge_thickness_range
        classes = {"oriented"}
        if is_outlier == 1:
            classes.add("high_outlier")
        elif is_outlier == -1:
            classes.add("low_outlier")
        data = {
            "thickness": width,
            "multiplicity": multiplicity,
            "orientation": record.orientation,
            "mean": record.mean,
            "stdev": record.stdev,
        }

        if record.is_loop:
            # Control point math is undefined for a zero-length chord
            curve = CurveDescriptor.straight()
        else:
            src_pos = self._endpoint_position(position_index, source_id, record)
            tgt_pos = self._endpoint_position(position_index, target_id, record)
            bounding_box = self._require_bounding_box(bounding_box, edge_id)
            points = parse_control_points(record.control_point_string,
                                          bounding_box, session.rotation_delta)
            curve = parameterize_curve(points, src_pos, tgt_pos,
                                       settings.ctrl_pt_dist_epsilon)
            if not curve.is_straight:
                data["cpd"] = curve.cpd
                data["cpw"] = curve.cpw
        if edge_kind is EdgeKind.METANODE_EDGE:
            classes.add(EdgeKind.METANODE_EDGE.value)

        return self.graph.add_edge(source_id, target_id, classes=classes,
                                   data=data, curve=curve, edge_id=edge_id)

    def _render_single_edge(self, record: EdgeRecord,
                            id_remap: Mapping[str, str]) -> Optional[EdgeElement]:
        """SPQR singleedges are always drawn straight."""
        session = self.session
        source_id = record.source_id
        target_id = record.target_id
        classes = {"basicbezier"}
        if source_id == target_id:
            classes.add("unoriented_loop")

        parent_mn_id = record.parent_metanode_id
        is_virtual = False
        if parent_mn_id is not None:
            # Skeleton edge: endpoints carry the metanode suffix unless they
            # were drawn in another metanode already
            source_id = id_remap.get(source_id, f"{source_id}_{parent_mn_id}")
            target_id = id_remap.get(target_id, f"{target_id}_{parent_mn_id}")
            if record.is_virtual:
                classes.add("virtual")
                is_virtual = True

        track_virtual = False
        if session.is_implicit and is_virtual:
            if not self.graph.contains(parent_mn_id):
                return None
            track_virtual = True

        for endpoint in (source_id, target_id):
            if not self.graph.contains(endpoint):
                logger.error(f"Singleedge {record.source_id}->{record.target_id} "
                             f"references undrawn node {endpoint}")
                raise UnindexedEndpointError(
                    f"Edge endpoint {endpoint} has not been drawn"
                )

        edge = self.graph.add_edge(
            source_id, target_id, classes=classes,
            data={"dispsrc": record.source_id, "disptgt": record.target_id,
                  "thickness": session.settings.max_edge_thickness},
        )
        if track_virtual:
            entity = session.clusters[parent_mn_id]
            entity.virtual_edge_ids.append(edge.id)
            entity.virtual_edge_records.append(record)
        return edge

    def _endpoint_position(self, position_index: Mapping[str, Point],
                           node_id: str, record: EdgeRecord) -> Point:
        try:
            return position_index[node_id]
        except KeyError:
            logger.error(f"Edge {record.source_id}->{record.target_id} drawn "
                         f"before endpoint {node_id}")
            raise UnindexedEndpointError(
                f"No position indexed for edge endpoint {node_id}"
            ) from None

    # ========================================================================
    # Clusters
    # ========================================================================

    def render_cluster(self, record: ClusterRecord,
                       bounding_box: Optional[BoundingBox] = None,
                       kind: Optional[ClusterKind] = None) -> Tuple[str, Point]:
        """
        Render a structural pattern, bicomponent or metanode record.

        Returns:
            (cluster id, render-space position of the cluster's centre)
        """
        session = self.session
        settings = session.settings
        kind = kind or record.kind
        cluster_id = record.id
        spqr_related = kind.is_spqr
        bounding_box = self._require_bounding_box(bounding_box, cluster_id)

        rect = record.rect
        if spqr_related and session.is_implicit and record.implicit_rect is not None:
            rect = record.implicit_rect
        left, bottom, right, top = rect
        delta = session.rotation_delta
        bottom_left = transform_point(left, bottom, bounding_box, delta)
        top_right = transform_point(right, top, bounding_box, delta)

        data = {
            "w": abs(top_right.x - bottom_left.x),
            "h": abs(top_right.y - bottom_left.y),
            "isCollapsed": False,
        }
        parent = None
        if kind.is_metanode and not session.is_implicit:
            parent = record.parent_bicomponent_id
        pos = Point((bottom_left.x + top_right.x) / 2,
                    (bottom_left.y + top_right.y) / 2)

        classes = {kind.value, "cluster", cluster_coord_class(session.current_rotation)}
        if not spqr_related:
            classes.add("structuralPattern")
            session.node_keys.append(cluster_id)
            data["length"] = record.length
            if kind is ClusterKind.MISC:
                data["cluster_type"] = record.cluster_type
        elif kind.is_metanode:
            classes.add("spqrMetanode")
            data["descendantCount"] = record.descendant_metanode_count
            # Metanodes start out collapsed
            data["isCollapsed"] = True
        if spqr_related:
            classes.add("pseudoparent")
            if session.is_implicit and kind is ClusterKind.BICOMPONENT:
                data["interiorNodeCount"] = "N/A"
            else:
                data["interiorNodeCount"] = record.node_count

        self.graph.add_node(cluster_id, pos, classes=classes, data=data,
                            parent=parent, locked=spqr_related)

        entity = ClusterEntity(cluster_id, kind, record, collapsed=kind.is_metanode)
        if record.width is None or record.height is None:
            entity.collapsed_width = DEFAULT_COLLAPSED_SIZE * settings.inches_to_pixels
            entity.collapsed_height = DEFAULT_COLLAPSED_SIZE * settings.inches_to_pixels
        else:
            entity.collapsed_width = settings.inches_to_pixels * record.height
            entity.collapsed_height = settings.inches_to_pixels * record.width
        session.clusters[cluster_id] = entity

        if kind is ClusterKind.BICOMPONENT:
            if session.is_implicit:
                session.bicomponent_visible_singlenodes[cluster_id] = []
        elif not kind.is_metanode:
            session.uncollapsed.add(cluster_id)

        self.positions[cluster_id] = pos
        return cluster_id, pos

    # ========================================================================
    # Bounding box enforcing nodes
    # ========================================================================

    def draw_bounding_box_enforcing_nodes(self, bounding_box: Optional[BoundingBox] = None):
        """Pin the drawing's extent while it is being drawn."""
        bounding_box = self._require_bounding_box(bounding_box, "bounding box")
        delta = self.session.rotation_delta
        corners = (
            transform_point(0, 0, bounding_box, delta),
            transform_point(bounding_box.width, bounding_box.height, bounding_box, delta),
        )
        for node_id, pos in zip(BB_ENFORCING_IDS, corners):
            self.graph.add_node(node_id, pos, classes=("bb_enforcing",))

    def remove_bounding_box_enforcing_nodes(self):
        self.graph.delete(n for n in BB_ENFORCING_IDS if self.graph.get_node(n))

    # ========================================================================
    # Restyling
    # ========================================================================

    def change_node_colorization(self, colorization: Colorization) -> bool:
        """
        Switch every non-cluster node to another colorization class,
        including nodes hidden inside collapsed clusters.

        Returns:
            False if the colorization was already active
        """
        session = self.session
        old = session.colorization
        if colorization is old:
            return False
        with self.graph.batch():
            for node in self.graph.nodes(include_removed=True):
                if node.has_class("noncluster"):
                    node.classes.discard(old.value)
                    node.classes.add(colorization.value)
        session.colorization = colorization
        logger.debug(f"Node colorization changed: {old.value} -> {colorization.value}")
        return True

    def rotate_view(self, rotation: int):
        """
        Rotate the drawn view in place to a new absolute rotation.

        Node positions (hidden interior nodes included) are rotated by the
        delta between the previous and the new rotation. Edge curve
        parameters are relative to their endpoints and need no update.
        """
        session = self.session
        session.previous_rotation = session.current_rotation
        session.current_rotation = rotation
        delta = session.rotation_delta
        node_class = {True: node_coord_class(rotation, True),
                      False: node_coord_class(rotation, False)}
        with self.graph.batch():
            for node in self.graph.nodes(include_removed=True):
                new_pos = rotate_coordinate(node.position.x, node.position.y, delta)
                self.graph.set_position(node.id, new_pos)
                if node.id in self.positions:
                    self.positions[node.id] = new_pos
                if node.has_class("noncluster"):
                    if "singlenode" in node.classes:
                        continue
                    node.classes.difference_update(NODE_DIRECTION_CLASSES)
                    node.classes.add(node_class[bool(node.data.get("house"))])
                elif node.is_cluster:
                    entity = session.clusters.get(node.id)
                    if entity is not None and entity.kind.is_directional:
                        node.classes.difference_update(CLUSTER_DIRECTION_CLASSES)
                        node.classes.add(cluster_coord_class(rotation))
        logger.info(f"Rotated view from {session.previous_rotation} to {rotation} degrees")

    # ------------------------------------------------------------------

    def _require_bounding_box(self, bounding_box: Optional[BoundingBox],
                              what: str) -> BoundingBox:
        bounding_box = bounding_box or self.session.bounding_box
        if bounding_box is None:
            logger.error(f"No bounding box available to render {what}")
            raise MissingBoundingBoxError(f"Can not render {what} without a bounding box")
        return bounding_box

# ContigView v0.1.0
# Any usage is subject to this software's license.
