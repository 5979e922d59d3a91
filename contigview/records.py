#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
ContigView v0.1.0

Layout database records — typed views over the rows returned by the layout
database for nodes, edges and clusters (structural patterns, bicomponents and
SPQR metanodes).

Records are immutable snapshots of a single row. They are materialized once
per drawn component and thrown away when another component is drawn.

Author: ContigView Development Team
License: Dual License (Academic/Commercial) - See LICENSE_ACADEMIC.md and LICENSE_COMMERCIAL.md
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import Any, Mapping, Optional, Tuple

from .errors import ControlPointFormatError
from .kinds import ClusterKind, ViewType


# ============================================================================
#                               NODES
# ============================================================================

@dataclass(frozen=True)
class NodeRecord:
    """A node (or SPQR singlenode) row."""
    id: str
    x: float
    y: float
    width: float   # layout units (inches)
    height: float
    i_x: Optional[float] = None  # implicit SPQR coordinates
    i_y: Optional[float] = None
    label: Optional[str] = None
    shape: Optional[str] = None
    depth: Optional[float] = None
    length: Optional[int] = None
    gc_content: Optional[float] = None
    is_repeat: Optional[int] = None
    has_repeat_info: bool = False  # False when the column is absent entirely
    parent_cluster_id: Optional[str] = None
    parent_metanode_id: Optional[str] = None
    parent_bicomponent_id: Optional[str] = None

    @classmethod
    def from_row(cls, row: Mapping[str, Any]) -> "NodeRecord":
        return cls(
            id=str(row["id"]),
            x=row["x"],
            y=row["y"],
            width=row.get("w"),
            height=row.get("h"),
            i_x=row.get("i_x"),
            i_y=row.get("i_y"),
            label=row.get("label"),
            shape=row.get("shape"),
            depth=row.get("depth"),
            length=row.get("length"),
            gc_content=row.get("gc_content"),
            is_repeat=row.get("is_repeat"),
            has_repeat_info="is_repeat" in row,
            parent_cluster_id=row.get("parent_cluster_id"),
            parent_metanode_id=row.get("parent_metanode_id"),
            parent_bicomponent_id=row.get("parent_bicomponent_id"),
        )

    @property
    def is_house(self) -> bool:
        return self.shape == "house"

    def parent_id(self, view: ViewType) -> Optional[str]:
        """Parent compound node id as seen from the given view."""
        if view is ViewType.SPQR:
            return self.parent_metanode_id
        return self.parent_cluster_id

    def element_id(self, view: ViewType) -> str:
        """
        Id used for this node in the element graph.

        The same singlenode may appear in several metanode skeletons, so SPQR
        singlenodes with a parent metanode are suffixed by that metanode's id.
        """
        if view is ViewType.SPQR and self.parent_metanode_id is not None:
            return f"{self.id}_{self.parent_metanode_id}"
        return self.id


# ============================================================================
#                               EDGES
# ============================================================================

def _control_point_count(row: Mapping[str, Any]) -> int:
    """Read the stored point count, which must match the control point string."""
    count = row.get("control_point_count") or 0
    coordinates = (row.get("control_point_string") or "").split()
    if len(coordinates) != 2 * count:
        raise ControlPointFormatError(
            f"Edge {row.get('source_id', row.get('source_metanode_id'))}->"
            f"{row.get('target_id', row.get('target_metanode_id'))} has "
            f"{len(coordinates)} control point coordinates but a count of {count}"
        )
    return count

@dataclass(frozen=True)
class EdgeRecord:
    """An edge, SPQR singleedge or metanode edge row."""
    source_id: str
    target_id: str
    control_point_string: str = ""
    control_point_count: int = 0
    multiplicity: Optional[float] = None
    thickness: Optional[float] = None
    is_outlier: Optional[int] = None
    orientation: Optional[str] = None
    mean: Optional[float] = None
    stdev: Optional[float] = None
    parent_cluster_id: Optional[str] = None
    parent_metanode_id: Optional[str] = None
    is_virtual: bool = False

    @classmethod
    def from_row(cls, row: Mapping[str, Any]) -> "EdgeRecord":
        return cls(
            source_id=str(row["source_id"]),
            target_id=str(row["target_id"]),
            control_point_string=row.get("control_point_string") or "",
            control_point_count=_control_point_count(row),
            multiplicity=row.get("multiplicity"),
            thickness=row.get("thickness"),
            is_outlier=row.get("is_outlier"),
            orientation=row.get("orientation"),
            mean=row.get("mean"),
            stdev=row.get("stdev"),
            parent_cluster_id=row.get("parent_cluster_id"),
            parent_metanode_id=row.get("parent_metanode_id"),
            is_virtual=bool(row.get("is_virtual") or 0),
        )

    @classmethod
    def from_metanode_edge_row(cls, row: Mapping[str, Any]) -> "EdgeRecord":
        """Edges between metanodes carry no metadata beyond geometry."""
        return cls(
            source_id=str(row["source_metanode_id"]),
            target_id=str(row["target_metanode_id"]),
            control_point_string=row.get("control_point_string") or "",
            control_point_count=_control_point_count(row),
        )

    @property
    def is_loop(self) -> bool:
        return self.source_id == self.target_id


# ============================================================================
#                               CLUSTERS
# ============================================================================

Rect = Tuple[float, float, float, float]  # left, bottom, right, top


@dataclass(frozen=True)
class ClusterRecord:
    """A structural pattern, bicomponent or SPQR metanode row."""
    id: str
    kind: ClusterKind
    rect: Rect
    implicit_rect: Optional[Rect] = None
    width: Optional[float] = None   # collapsed size, layout units
    height: Optional[float] = None
    length: Optional[int] = None
    cluster_type: Optional[str] = None
    node_count: Optional[int] = None
    descendant_metanode_count: int = 0
    parent_bicomponent_id: Optional[str] = None
    root_metanode_id: Optional[str] = None

    @staticmethod
    def _rect(row: Mapping[str, Any], prefix: str = "") -> Optional[Rect]:
        if row.get(prefix + "left") is None:
            return None
        return (row[prefix + "left"], row[prefix + "bottom"],
                row[prefix + "right"], row[prefix + "top"])

    @classmethod
    def from_cluster_row(cls, row: Mapping[str, Any]) -> "ClusterRecord":
        cluster_id = str(row["cluster_id"])
        return cls(
            id=cluster_id,
            kind=ClusterKind.from_id(cluster_id),
            rect=cls._rect(row),
            width=row.get("w"),
            height=row.get("h"),
            length=row.get("length"),
            cluster_type=row.get("cluster_type"),
            node_count=row.get("node_count"),
        )

    @classmethod
    def from_bicomponent_row(cls, row: Mapping[str, Any]) -> "ClusterRecord":
        root = row.get("root_metanode_id")
        return cls(
            id=f"I{row['id_num']}",
            kind=ClusterKind.BICOMPONENT,
            rect=cls._rect(row),
            implicit_rect=cls._rect(row, "i_"),
            width=row.get("w"),
            height=row.get("h"),
            node_count=row.get("node_count"),
            root_metanode_id=str(root) if root is not None else None,
        )

    @classmethod
    def from_metanode_row(cls, row: Mapping[str, Any]) -> "ClusterRecord":
        metanode_id = str(row["metanode_id"])
        return cls(
            id=metanode_id,
            kind=ClusterKind.from_id(metanode_id),
            rect=cls._rect(row),
            implicit_rect=cls._rect(row, "i_"),
            width=row.get("w"),
            height=row.get("h"),
            node_count=row.get("node_count"),
            descendant_metanode_count=row.get("descendant_metanode_count") or 0,
            parent_bicomponent_id=f"I{row['parent_bicomponent_id_num']}",
        )

# ContigView v0.1.0
# Any usage is subject to this software's license.
