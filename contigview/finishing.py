#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
ContigView v0.1.0

Path finishing — manual construction of a path through the drawn graph.

While finishing is active, the user picks nodes one at a time. After each
pick the nodes reachable over one outgoing edge become "tentative" and only
those may be picked next. When the picked node has a single way forward the
path is extended automatically ("autofinishing") until it branches, dead-ends
or runs into a node already visited during this autofinishing run.

Collapsed cyclic chains count as leading back to themselves, so repeats can
be walked through as many times as needed. Uncollapsed clusters can't be
picked; collapsed clusters can.

A finished path can be exported as a comma separated id list or as AGP lines
describing a single scaffold.

Author: ContigView Development Team
License: Dual License (Academic/Commercial) - See LICENSE_ACADEMIC.md and LICENSE_COMMERCIAL.md
"""

import logging
from typing import List

from .collapse.engine import TENTATIVE_CLASS
from .errors import ElementGraphError
from .render.session import ViewSession

logger = logging.getLogger(__name__)

CURRENT_PATH_CLASS = "currpath"
PATH_EXPORT_FORMATS = ("csv", "agp")


class FinishingSession:
    """
    Path finishing state for one drawn component.

    Args:
        session: Session of the drawn component
    """

    def __init__(self, session: ViewSession):
        self.session = session
        self.graph = session.graph
        self.active = False
        self.previously_done = False
        self.path: List[str] = []
        self.next_nodes: List[str] = []

    def start(self):
        """Enter finishing mode, discarding a previously finished path."""
        if self.active:
            return
        if self.previously_done:
            self.path = []
        self.active = True
        self.session.finishing_active = True
        logger.debug("Finishing started")

    def end(self):
        """Leave finishing mode, keeping the path for export."""
        with self.graph.batch():
            self._set_class(self.next_nodes, TENTATIVE_CLASS, False)
            self._set_class(self.path, CURRENT_PATH_CLASS, False)
        self.next_nodes = []
        self.active = False
        self.previously_done = True
        self.session.finishing_active = False
        logger.info(f"Finishing ended with a path of {len(self.path)} nodes")

    def add_node(self, node_id: str) -> bool:
        """
        Add a node to the path, then autofinish from it where possible.

        Returns:
            False if the node can't be added (finishing inactive, an
            uncollapsed cluster, or not one of the tentative next nodes)
        """
        if not self.active:
            return False
        if not self.graph.contains(node_id):
            raise ElementGraphError(f"Node {node_id} is not visible")
        node = self.graph.node(node_id)
        if node.is_cluster and not node.data.get("isCollapsed"):
            return False

        if self.path:
            if node_id not in self.next_nodes:
                return False
            self._set_class(self.next_nodes, TENTATIVE_CLASS, False)

        self.next_nodes = self._next_nodes(node_id)
        if len(self.next_nodes) == 1 and self.next_nodes[0] != node_id:
            seen = []
            while len(self.next_nodes) == 1:
                self._append(node_id)
                seen.append(node_id)
                node_id = self.next_nodes[0]
                if node_id in seen:
                    # Stuck in a cycle; let the user choose how to go on
                    logger.debug(f"Autofinishing stopped at cycle through {node_id}")
                    self._mark_tentative()
                    return True
                self.next_nodes = self._next_nodes(node_id)

        self._append(node_id)
        if not self.next_nodes:
            self.end()
        else:
            self._mark_tentative()
        return True

    # ------------------------------------------------------------------

    def _next_nodes(self, node_id: str) -> List[str]:
        next_nodes = self.graph.outgoers(node_id)
        if self.graph.node(node_id).has_class("Y") and node_id not in next_nodes:
            next_nodes.append(node_id)
        return next_nodes

    def _append(self, node_id: str):
        self.path.append(node_id)
        self.graph.node(node_id).classes.add(CURRENT_PATH_CLASS)

    def _mark_tentative(self):
        self._set_class(self.next_nodes, TENTATIVE_CLASS, True)

    def _set_class(self, node_ids: List[str], name: str, present: bool):
        for node_id in node_ids:
            node = self.graph.get_node(node_id)
            if node is None:
                continue
            if present:
                node.classes.add(name)
            else:
                node.classes.discard(name)

    # ========================================================================
    # Export
    # ========================================================================

    def export_path(self, file_format: str = "csv") -> str:
        """
        Text of the finished path.

        Args:
            file_format: 'csv' (comma separated ids) or 'agp' (one scaffold)
        """
        file_format = file_format.lower()
        if file_format not in PATH_EXPORT_FORMATS:
            raise ValueError(f"Unknown path export format: {file_format}")
        if file_format == "csv":
            return ",".join(self.path)

        lines = []
        start = 1
        for i, node_id in enumerate(self.path):
            node = self.graph.node(node_id)
            length = node.data.get("length") or 0
            if node.is_cluster:
                component_type, orientation = "O", "na"
            else:
                # Forward nodes point right at the default rotation
                component_type = "W"
                orientation = "+" if node.has_class("rightdir") else "-"
            if component_type == "W" and self.session.asm_filetype == "GML":
                key = node.data.get("label")
            else:
                key = node_id
            end = start - 1 + length
            lines.append(f"scaffold_1\t{start}\t{end}\t{i + 1}\t{component_type}\t"
                         f"{key}\t1\t{length}\t{orientation}\n")
            start = end + 1
        return "".join(lines)

# ContigView v0.1.0
# Any usage is subject to this software's license.
