#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
ContigView v0.1.0

Tests for element graph JSON export.

Author: ContigView Development Team
License: Dual License (Academic/Commercial) - See LICENSE_ACADEMIC.md and LICENSE_COMMERCIAL.md
"""

import json

from contigview.io_utils import element_graph_to_json, export_elements_json


def _by_id(payload):
    return {e["data"]["id"]: e for e in payload["elements"]}


class TestElementJSON:
    """Test the cytoscape-style element export."""

    def test_metadata(self, session):
        """Test view metadata."""
        payload = element_graph_to_json(session)
        assert payload["view"] == "double"
        assert payload["spqr_mode"] is None
        assert payload["component_rank"] == 1
        assert payload["rotation"] == 90
        assert payload["colorization"] == "noncolorized"
        assert payload["collapsed_clusters"] == []
        assert len(payload["elements"]) == 13

    def test_node_elements(self, session):
        """Test node groups, positions and parents."""
        elements = _by_id(element_graph_to_json(session))
        node = elements["2"]
        assert node["group"] == "nodes"
        assert node["data"]["parent"] == "C1"
        assert node["position"] == {"x": 250, "y": -150}
        assert "noncluster" in node["classes"].split()
        assert elements["C1"]["data"]["isCollapsed"] is False

    def test_edge_elements(self, session):
        """Test that only curved edges carry curve parameters."""
        elements = _by_id(element_graph_to_json(session))
        curved = elements["2->3"]
        assert curved["group"] == "edges"
        assert curved["data"]["source"] == "2"
        assert curved["data"]["cpd"] == "0.00 30.00 0.00"
        assert "cpd" not in elements["1->2"]["data"]

    def test_collapsed_export(self, drawn):
        """Test that hidden elements are only exported on request."""
        drawn.engine.collapse_all()
        visible = element_graph_to_json(drawn.session)
        everything = element_graph_to_json(drawn.session, include_removed=True)
        assert visible["collapsed_clusters"] == ["C1"]
        assert len(visible["elements"]) == 10
        assert len(everything["elements"]) == 13
        # Boundary edges are drawn straight onto the collapsed cluster
        boundary = _by_id(visible)["3->4"]
        assert "cpd" not in boundary["data"]
        assert "basicbezier" in boundary["classes"].split()
        assert boundary["data"]["source"] == "C1"

    def test_reduced_edges_drop_curves(self, drawn):
        """Test that straightened edges lose their curve parameters."""
        drawn.engine.reduce_edges_to_straight_lines()
        elements = _by_id(element_graph_to_json(drawn.session))
        assert "cpd" not in elements["2->3"]["data"]
        assert "reducededge" in elements["2->3"]["classes"].split()

    def test_spqr_metadata(self, scheduler):
        """Test that SPQR exports name their mode."""
        session = scheduler.run(scheduler.draw_spqr_component(1, "explicit"))
        payload = element_graph_to_json(session)
        assert payload["view"] == "SPQR"
        assert payload["spqr_mode"] == "explicit"

    def test_export_file(self, session, tmp_path):
        """Test writing the JSON file."""
        output = tmp_path / "elements.json"
        payload = export_elements_json(session, output)
        with open(output) as f:
            loaded = json.load(f)
        assert len(loaded["elements"]) == len(payload["elements"])
        assert loaded["component_rank"] == 1

# ContigView v0.1.0
# Any usage is subject to this software's license.
