#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
ContigView v0.1.0

Element Export — drawn element graph as cytoscape-style element JSON, and
finished paths as CSV/AGP text files.

Author: ContigView Development Team
License: Dual License (Academic/Commercial) - See LICENSE_ACADEMIC.md and LICENSE_COMMERCIAL.md
"""

from __future__ import annotations
import json
import logging
from pathlib import Path
from typing import Any

from ..kinds import CurveStyle
from ..render.elements import EdgeElement, NodeElement
from ..render.session import ViewSession

logger = logging.getLogger(__name__)


def _node_json(node: NodeElement) -> dict[str, Any]:
    data = {"id": node.id, **node.data}
    if node.parent is not None:
        data["parent"] = node.parent
    return {
        "group": "nodes",
        "data": data,
        "position": {"x": node.position.x, "y": node.position.y},
        "classes": " ".join(sorted(node.classes)),
        "locked": node.locked,
    }


def _edge_json(edge: EdgeElement) -> dict[str, Any]:
    data = {"id": edge.id, "source": edge.source, "target": edge.target, **edge.data}
    if edge.style is not CurveStyle.UNBUNDLED:
        # Curve parameters only apply while the edge is drawn curved
        data.pop("cpd", None)
        data.pop("cpw", None)
    return {
        "group": "edges",
        "data": data,
        "classes": " ".join(sorted(edge.classes)),
    }


def element_graph_to_json(session: ViewSession, include_removed: bool = False) -> dict[str, Any]:
    """
    Convert a session's element graph to cytoscape element JSON.

    Args:
        session: Session of the drawn component
        include_removed: Also include hidden elements (collapsed cluster
            interiors, culled edges)

    Returns:
        Dictionary with view metadata and an ``elements`` list
    """
    graph = session.graph
    elements = [_node_json(n) for n in graph.nodes(include_removed)]
    elements.extend(_edge_json(e) for e in graph.edges(include_removed))
    return {
        "view": session.view_type.value,
        "spqr_mode": session.spqr_mode.value if session.is_spqr else None,
        "component_rank": session.component_rank,
        "rotation": session.current_rotation,
        "colorization": session.colorization.value,
        "collapsed_clusters": sorted(session.collapsed),
        "elements": elements,
    }


def export_elements_json(
    session: ViewSession,
    output_path: str | Path,
    include_removed: bool = False
) -> dict[str, Any]:
    """
    Write the drawn component to a JSON file.

    Returns:
        The exported dictionary
    """
    output_path = Path(output_path)
    payload = element_graph_to_json(session, include_removed)
    with open(output_path, 'w') as f:
        json.dump(payload, f, indent=2)

    logger.info(f"Exported {len(payload['elements'])} elements to {output_path}")
    return payload


def export_path_file(finishing, output_path: str | Path, file_format: str = "csv") -> None:
    """
    Write a finished path as CSV or AGP.

    Args:
        finishing: FinishingSession holding the path
        output_path: Path to output file
        file_format: 'csv' or 'agp'
    """
    output_path = Path(output_path)
    text = finishing.export_path(file_format)
    with open(output_path, 'w') as f:
        f.write(text)
    logger.info(f"Exported path of {len(finishing.path)} nodes to {output_path}")

# ContigView v0.1.0
# Any usage is subject to this software's license.
