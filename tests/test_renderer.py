#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
ContigView v0.1.0

Tests for the graph element renderer and the element graph.

Author: ContigView Development Team
License: Dual License (Academic/Commercial) - See LICENSE_ACADEMIC.md and LICENSE_COMMERCIAL.md
"""

import pytest

from contigview.errors import (
    ElementGraphError,
    MissingBoundingBoxError,
    UnindexedEndpointError,
)
from contigview.geometry import BoundingBox, Point
from contigview.kinds import ClusterKind, Colorization, CurveStyle, ViewType
from contigview.records import ClusterRecord, EdgeRecord, NodeRecord
from contigview.render import GraphElementRenderer, ViewSession
from contigview.render.elements import ElementGraph


def _node(node_id, x, y, **kwargs):
    return NodeRecord(id=node_id, x=x, y=y, width=0.5, height=0.5, **kwargs)


@pytest.fixture
def bare_renderer():
    """Renderer over an empty standard-view session with a 500x400 box."""
    session = ViewSession.create(ViewType.DOUBLE, bounding_box=BoundingBox(500, 400))
    return GraphElementRenderer(session)


class TestRenderNode:
    """Test node rendering."""

    def test_position_is_indexed(self, bare_renderer):
        """Test that the rendered position is returned and indexed."""
        pos = bare_renderer.render_node(_node("1", 50, 150))
        assert pos == (250, -50)
        assert bare_renderer.positions["1"] == pos
        assert bare_renderer.graph.node("1").position == pos

    def test_size_in_pixels(self, bare_renderer):
        """Test that layout sizes are converted with the pixel multiplier."""
        bare_renderer.render_node(NodeRecord("1", 0, 0, width=1.0, height=0.5))
        data = bare_renderer.graph.node("1").data
        assert data["w"] == 27
        assert data["h"] == 54

    def test_orientation_classes(self, bare_renderer):
        """Test orientation classes at the default rotation."""
        bare_renderer.render_node(_node("1", 0, 0, shape="invhouse"))
        bare_renderer.render_node(_node("2", 0, 0, shape="house"))
        assert bare_renderer.graph.node("1").has_class("rightdir")
        assert bare_renderer.graph.node("2").has_class("leftdir")

    def test_missing_bounding_box(self):
        """Test that nodes can't be rendered without a bounding box."""
        renderer = GraphElementRenderer(ViewSession.create(ViewType.DOUBLE))
        with pytest.raises(MissingBoundingBoxError):
            renderer.render_node(_node("1", 0, 0))

    def test_gml_keys_use_labels(self, bare_renderer):
        """Test that GML assemblies are keyed by node label."""
        bare_renderer.session.asm_filetype = "GML"
        bare_renderer.render_node(_node("1", 0, 0, label="contig_A"))
        assert bare_renderer.session.node_keys == ["contig_A"]
        assert bare_renderer.graph.node("1").data["label"] == "contig_A"

    def test_duplicate_node_rejected(self, bare_renderer):
        """Test that a node id can only be drawn once."""
        bare_renderer.render_node(_node("1", 0, 0))
        with pytest.raises(ElementGraphError):
            bare_renderer.render_node(_node("1", 10, 10))


class TestRenderEdge:
    """Test edge rendering."""

    def test_unindexed_endpoint_raises(self, bare_renderer):
        """Test that edges can't be drawn before their endpoints."""
        bare_renderer.render_node(_node("1", 0, 0))
        with pytest.raises(UnindexedEndpointError):
            bare_renderer.render_edge(EdgeRecord("1", "2", "0 0 10 10"))

    def test_loop_is_straight(self, bare_renderer):
        """Test that self loops skip curve parameterization."""
        bare_renderer.render_node(_node("1", 0, 0))
        edge = bare_renderer.render_edge(EdgeRecord("1", "1", "0 0 5 5 10 0 0 0"))
        assert edge.style is CurveStyle.BASIC
        assert "cpd" not in edge.data

    def test_parallel_edges_get_unique_ids(self, bare_renderer):
        """Test that parallel edges are suffixed."""
        bare_renderer.render_node(_node("1", 0, 0))
        bare_renderer.render_node(_node("2", 100, 0))
        first = bare_renderer.render_edge(EdgeRecord("1", "2", "0 0 100 0"))
        second = bare_renderer.render_edge(EdgeRecord("1", "2", "0 0 100 0"))
        assert first.id == "1->2"
        assert second.id == "1->2#2"

    def test_multiplicity_collected(self, bare_renderer):
        """Test that edge weights are collected for the histogram."""
        bare_renderer.render_node(_node("1", 0, 0))
        bare_renderer.render_node(_node("2", 100, 0))
        bare_renderer.render_edge(EdgeRecord("1", "2", "0 0 100 0", multiplicity=7))
        bare_renderer.render_edge(EdgeRecord("2", "1", "100 0 0 0"))
        assert bare_renderer.session.edge_weights == [7.0]


class TestDrawnComponent:
    """Test the elements of the drawn sample component."""

    def test_counts(self, session):
        """Test that every node, edge and cluster was drawn."""
        graph = session.graph
        assert graph.node_count() == 7
        assert graph.edge_count() == 6
        assert graph.get_node("bottom_left") is None
        assert graph.get_node("top_right") is None

    def test_cluster_nesting(self, session):
        """Test that cluster members are nested in the cluster."""
        graph = session.graph
        assert graph.node("2").parent == "C1"
        assert graph.children("C1") == ["2", "3"]
        assert graph.node("1").parent is None

    def test_cluster_geometry(self, session):
        """Test the cluster's position and collapsed size."""
        node = session.graph.node("C1")
        assert node.position == (250, -200)
        assert node.data["w"] == 108
        assert node.data["h"] == 54
        assert node.data["interiorNodeCount"] == 2
        assert {"C", "cluster", "structuralPattern", "leftrightdir"} <= node.classes
        assert session.clusters["C1"].kind is ClusterKind.CHAIN

    def test_curved_and_straight_edges(self, session):
        """Test which edges are drawn curved."""
        graph = session.graph
        curved = graph.edge("2->3")
        assert curved.style is CurveStyle.UNBUNDLED
        assert curved.has_class("unbundledbezier")
        assert curved.data["cpd"] == "0.00 30.00 0.00"
        assert curved.data["cpw"] == "0.01 0.50 0.99"
        for edge_id in ("1->2", "4->5", "4->6", "6->6"):
            assert graph.edge(edge_id).style is CurveStyle.BASIC

    def test_edge_thickness_and_outliers(self, session):
        """Test edge widths and outlier classes."""
        graph = session.graph
        assert graph.edge("1->2").data["thickness"] == pytest.approx(5.8)
        assert graph.edge("2->3").has_class("high_outlier")
        assert graph.edge("4->5").has_class("low_outlier")

    def test_lookup_tables(self, session):
        """Test the parent lookup table and node keys."""
        assert session.ele2parent["2"] == "C1"
        assert session.ele2parent["contig_3"] == "C1"
        assert session.ele2parent["2->3"] == "C1"
        assert "1" not in session.ele2parent
        assert set(session.node_keys) == {"1", "2", "3", "4", "5", "6", "C1"}
        assert sorted(session.edge_weights) == [1, 2, 3, 5, 8, 10]

    def test_colors(self, session):
        """Test GC and repeat colors."""
        graph = session.graph
        assert graph.node("1").data["gc_color"] == "#4022bf"
        assert graph.node("5").data["gc_color"] is None
        assert graph.node("1").data["repeat_color"] == "#0022ff"
        assert graph.node("2").data["repeat_color"] == "#ff2200"
        assert graph.node("3").data["repeat_color"] == "#888888"


class TestRestyling:
    """Test colorization changes and view rotation."""

    def test_change_colorization(self, drawn):
        """Test switching every node to GC colorization."""
        renderer = drawn.renderer
        assert renderer.change_node_colorization(Colorization.GC)
        assert not renderer.change_node_colorization(Colorization.GC)
        node = drawn.session.graph.node("1")
        assert node.has_class("gc")
        assert not node.has_class("noncolorized")

    def test_colorization_reaches_hidden_nodes(self, drawn):
        """Test that nodes inside collapsed clusters are recolored too."""
        drawn.engine.collapse_cluster("C1")
        drawn.renderer.change_node_colorization(Colorization.REPEAT)
        assert drawn.session.graph.node("2").has_class("repeat")

    def test_rotate_view(self, drawn):
        """Test rotating the drawn view to 180 degrees."""
        drawn.renderer.rotate_view(180)
        graph = drawn.session.graph
        assert graph.node("1").position == (-50, -250)
        assert drawn.renderer.positions["1"] == (-50, -250)
        assert graph.node("1").has_class("updir")
        assert not graph.node("1").has_class("rightdir")
        assert graph.node("4").has_class("downdir")
        assert drawn.session.current_rotation == 180
        assert drawn.session.previous_rotation == 90


class TestElementGraph:
    """Test element graph bookkeeping."""

    def test_remove_hides_incident_edges(self):
        """Test that removing a node hides its edges, and restore brings them back."""
        graph = ElementGraph()
        graph.add_node("a", Point(0, 0))
        graph.add_node("b", Point(1, 0))
        graph.add_edge("a", "b")
        graph.remove(["a"])
        assert not graph.contains("a->b")
        graph.restore(["a", "a->b"])
        assert graph.contains("a->b")

    def test_restore_edge_needs_visible_endpoints(self):
        """Test that an edge can't be restored onto a hidden node."""
        graph = ElementGraph()
        graph.add_node("a", Point(0, 0))
        graph.add_node("b", Point(1, 0))
        graph.add_edge("a", "b")
        graph.remove(["b"])
        with pytest.raises(ElementGraphError):
            graph.restore(["a->b"])

    def test_batch_bumps_revision_once(self):
        """Test that a batch counts as a single revision."""
        graph = ElementGraph()
        before = graph.revision
        with graph.batch():
            graph.add_node("a", Point(0, 0))
            graph.add_node("b", Point(1, 0))
            graph.add_edge("a", "b")
        assert graph.revision == before + 1

    def test_delete_drops_edges_and_detaches_children(self):
        """Test that deleting a node drops incident edges for good."""
        graph = ElementGraph()
        graph.add_node("p", Point(0, 0), classes=("cluster",))
        graph.add_node("a", Point(0, 0), parent="p")
        graph.add_node("b", Point(1, 0))
        graph.add_edge("p", "b")
        graph.delete(["p"])
        assert graph.get_edge("p->b") is None
        assert graph.node("a").parent is None

    def test_cluster_record_kinds(self):
        """Test that cluster kinds come from the id prefix."""
        record = ClusterRecord.from_cluster_row(
            {"cluster_id": "B7", "left": 0, "bottom": 0, "right": 1, "top": 1})
        assert record.kind is ClusterKind.BUBBLE
        assert record.kind.is_directional
        assert record.kind.is_structural_pattern

# ContigView v0.1.0
# Any usage is subject to this software's license.
