#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
ContigView v0.1.0

View Session — all state belonging to the one component currently drawn.

A new ViewSession is created for every draw and replaces the previous one
wholesale; nothing carries over between components. The session owns the
element graph, the cluster/metanode entity arena and the lookup tables built
while drawing.

Author: ContigView Development Team
License: Dual License (Academic/Commercial) - See LICENSE_ACADEMIC.md and LICENSE_COMMERCIAL.md
"""

from __future__ import annotations
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Set, Tuple

from ..config.schema import DrawSettings
from ..geometry.transform import BoundingBox, rotation_delta
from ..kinds import ClusterKind, Colorization, SPQRMode, ViewType
from ..records import ClusterRecord, EdgeRecord, NodeRecord
from .elements import ElementGraph

EdgeEnds = Tuple[str, str]


@dataclass
class MetanodeExpansion:
    """Rows needed to expand a metanode one level, loaded once."""
    metanode_edges: List[EdgeRecord]
    descendants: List[ClusterRecord]
    singlenodes: List[NodeRecord]
    singleedges: List[EdgeRecord]

    @property
    def descendant_ids(self) -> List[str]:
        return [d.id for d in self.descendants]


@dataclass
class ClusterEntity:
    """
    A compound node: structural pattern, bicomponent or SPQR metanode.

    Interior elements are stored as element ids, not live references.
    """
    id: str
    kind: ClusterKind
    record: ClusterRecord
    collapsed: bool = False

    # Structural patterns (filled in by ClusterCollapseEngine.init_clusters)
    incoming_edge_map: Dict[str, EdgeEnds] = field(default_factory=dict)
    outgoing_edge_map: Dict[str, EdgeEnds] = field(default_factory=dict)
    interior_node_ids: List[str] = field(default_factory=list)
    interior_edge_ids: List[str] = field(default_factory=list)
    interior_node_count: Optional[Any] = None
    collapsed_width: float = 0.0
    collapsed_height: float = 0.0
    initialized: bool = False

    # SPQR metanodes
    singlenode_ids: List[str] = field(default_factory=list)       # explicit
    virtual_edge_ids: List[str] = field(default_factory=list)     # implicit
    virtual_edge_records: List[EdgeRecord] = field(default_factory=list)
    expansion: Optional[MetanodeExpansion] = None
    inlined_node_ids: List[str] = field(default_factory=list)     # implicit
    inlined_edge_ids: List[str] = field(default_factory=list)
    inlined_metanode_ids: List[str] = field(default_factory=list)

    @property
    def descendant_count(self) -> int:
        return self.record.descendant_metanode_count

    @property
    def descendant_ids(self) -> Optional[List[str]]:
        """Ids of the immediate descendant metanodes, once discovered."""
        if self.expansion is None:
            return None
        return self.expansion.descendant_ids


@dataclass
class ViewSession:
    """Context object for the component currently drawn."""
    view_type: ViewType
    settings: DrawSettings = field(default_factory=DrawSettings)
    spqr_mode: SPQRMode = SPQRMode.IMPLICIT
    db: Optional[Any] = None
    asm_filetype: Optional[str] = None
    component_rank: Optional[int] = None
    bounding_box: Optional[BoundingBox] = None
    previous_rotation: int = 0
    current_rotation: int = 90
    colorization: Colorization = Colorization.NONE
    graph: ElementGraph = field(default_factory=ElementGraph)

    # Entity arena, plus complementary collapsed/uncollapsed id sets for the
    # structural-pattern clusters
    clusters: Dict[str, ClusterEntity] = field(default_factory=dict)
    collapsed: Set[str] = field(default_factory=set)
    uncollapsed: Set[str] = field(default_factory=set)

    # Lookup tables built while drawing
    ele2parent: Dict[str, str] = field(default_factory=dict)
    node_keys: List[str] = field(default_factory=list)
    edge_weights: List[float] = field(default_factory=list)
    bicomponent_visible_singlenodes: Dict[str, List[str]] = field(default_factory=dict)

    # Edge filtering
    removed_edges: Set[str] = field(default_factory=set)
    prev_edge_weight_threshold: Optional[int] = None

    # Finishing
    finishing_active: bool = False

    @classmethod
    def create(cls, view_type: ViewType, settings: Optional[DrawSettings] = None,
               **kwargs) -> "ViewSession":
        """New session with rotation and SPQR mode taken from the settings."""
        settings = settings or DrawSettings()
        kwargs.setdefault("previous_rotation", settings.previous_rotation)
        kwargs.setdefault("current_rotation", settings.current_rotation)
        kwargs.setdefault("spqr_mode", SPQRMode(settings.spqr_mode))
        return cls(view_type=view_type, settings=settings, **kwargs)

    @property
    def rotation_delta(self) -> int:
        return rotation_delta(self.previous_rotation, self.current_rotation)

    @property
    def is_spqr(self) -> bool:
        return self.view_type is ViewType.SPQR

    @property
    def is_implicit(self) -> bool:
        return self.is_spqr and self.spqr_mode is SPQRMode.IMPLICIT

    def cluster(self, cluster_id: str) -> ClusterEntity:
        try:
            return self.clusters[cluster_id]
        except KeyError:
            raise KeyError(f"No cluster with id {cluster_id}") from None

    def mark_collapsed(self, cluster_id: str, collapsed: bool):
        """Keep the collapsed/uncollapsed sets complementary."""
        self.clusters[cluster_id].collapsed = collapsed
        if collapsed:
            self.uncollapsed.discard(cluster_id)
            self.collapsed.add(cluster_id)
        else:
            self.collapsed.discard(cluster_id)
            self.uncollapsed.add(cluster_id)

# ContigView v0.1.0
# Any usage is subject to this software's license.
