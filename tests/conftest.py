#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
ContigView v0.1.0

Pytest configuration and shared fixtures.

The sample layout database holds one connected component:

    1 -> [2 -> 3] -> 4 -> 5
                     4 -> 6 -> 6 (loop)

where nodes 2 and 3 form chain C1 (and, in the two-cluster variant, nodes
4, 5 and 6 form C2 so that 3 -> 4 runs between clusters), and one single
component for the SPQR
view: bicomponent I1 with SPQR tree S1 -> P2 (singlenodes a, b, c) plus a
d -> e edge outside any tree.

Author: ContigView Development Team
License: Dual License (Academic/Commercial) - See LICENSE_ACADEMIC.md and LICENSE_COMMERCIAL.md
"""

import sqlite3

import pytest

from contigview.drawing.scheduler import IncrementalDrawScheduler
from contigview.io_utils.layout_db import LayoutDatabase


SCHEMA = """
CREATE TABLE assembly (
    filename TEXT, filetype TEXT, node_count INTEGER, edge_count INTEGER,
    all_edge_count INTEGER, total_length INTEGER, n50 INTEGER,
    component_count INTEGER, single_component_count INTEGER,
    bicomponent_count INTEGER, gc_content REAL, dna_given INTEGER,
    repeats_given INTEGER
);
CREATE TABLE components (
    size_rank INTEGER, boundingbox_x REAL, boundingbox_y REAL,
    node_count INTEGER, edge_count INTEGER
);
CREATE TABLE clusters (
    cluster_id TEXT, component_rank INTEGER, "left" REAL, bottom REAL,
    "right" REAL, top REAL, w REAL, h REAL, length INTEGER,
    node_count INTEGER, cluster_type TEXT
);
CREATE TABLE nodes (
    id TEXT, label TEXT, component_rank INTEGER, x REAL, y REAL, w REAL,
    h REAL, shape TEXT, depth REAL, length INTEGER, gc_content REAL,
    is_repeat INTEGER, parent_cluster_id TEXT
);
CREATE TABLE edges (
    source_id TEXT, target_id TEXT, component_rank INTEGER,
    multiplicity INTEGER, thickness REAL, is_outlier INTEGER,
    orientation TEXT, mean REAL, stdev REAL, control_point_string TEXT,
    control_point_count INTEGER, parent_cluster_id TEXT
);
CREATE TABLE singlecomponents (
    size_rank INTEGER, boundingbox_x REAL, boundingbox_y REAL,
    i_boundingbox_x REAL, i_boundingbox_y REAL,
    ex_uncompressed_node_count INTEGER, ex_uncompressed_edge_count INTEGER,
    im_uncompressed_node_count INTEGER, im_uncompressed_edge_count INTEGER,
    compressed_node_count INTEGER, compressed_edge_count INTEGER,
    bicomponent_count INTEGER
);
CREATE TABLE bicomponents (
    id_num INTEGER, scc_rank INTEGER, root_metanode_id TEXT, node_count INTEGER,
    "left" REAL, bottom REAL, "right" REAL, top REAL,
    i_left REAL, i_bottom REAL, i_right REAL, i_top REAL
);
CREATE TABLE metanodes (
    metanode_id TEXT, scc_rank INTEGER, parent_bicomponent_id_num INTEGER,
    descendant_metanode_count INTEGER, node_count INTEGER,
    "left" REAL, bottom REAL, "right" REAL, top REAL,
    i_left REAL, i_bottom REAL, i_right REAL, i_top REAL
);
CREATE TABLE metanodeedges (
    source_metanode_id TEXT, target_metanode_id TEXT, scc_rank INTEGER,
    control_point_string TEXT, control_point_count INTEGER
);
CREATE TABLE singlenodes (
    id TEXT, label TEXT, scc_rank INTEGER, parent_metanode_id TEXT,
    parent_bicomponent_id TEXT, x REAL, y REAL, i_x REAL, i_y REAL,
    w REAL, h REAL, length INTEGER
);
CREATE TABLE singleedges (
    source_id TEXT, target_id TEXT, scc_rank INTEGER,
    parent_metanode_id TEXT, is_virtual INTEGER
);
"""

ASSEMBLY_ROW = ("sample.LastGraph", "LastGraph", 6, 6, 12, 500, 100, 1, 1, 1,
                0.4567, 1, 0)

# cluster_id, rank, left, bottom, right, top, w, h, length, node_count, type
CLUSTER_ROWS = [
    ("C1", 1, 100, 100, 300, 200, 1, 2, 200, 2, None),
]

# id, label, rank, x, y, w, h, shape, depth, length, gc, is_repeat, parent
NODE_ROWS = [
    ("1", "contig_1", 1, 50, 150, 0.5, 0.5, "invhouse", 10.0, 100, 0.25, 0, None),
    ("2", "contig_2", 1, 150, 150, 0.5, 0.5, "invhouse", 12.0, 100, 0.5, 1, "C1"),
    ("3", "contig_3", 1, 250, 150, 0.5, 0.5, "invhouse", 11.0, 100, 0.5, None, "C1"),
    ("4", "contig_4", 1, 350, 150, 0.5, 0.5, "house", 9.0, 100, 0.75, 0, None),
    ("5", "contig_5", 1, 450, 100, 0.5, 0.5, "invhouse", 8.0, 50, None, 0, None),
    ("6", "contig_6", 1, 450, 200, 0.5, 0.5, "invhouse", 8.0, 50, 1.0, 1, None),
]

# source, target, rank, multiplicity, thickness, outlier, orientation, mean,
# stdev, control points, control point count, parent cluster
EDGE_ROWS = [
    ("1", "2", 1, 5, 0.4, 0, "+", None, None, "50 150 100 150 150 150", 3, None),
    ("2", "3", 1, 10, 0.8, 1, "+", None, None, "150 150 200 180 250 150", 3, "C1"),
    ("3", "4", 1, 3, 0.2, 0, "+", None, None, "250 150 300 190 350 150", 3, None),
    ("4", "5", 1, 1, 0.0, -1, "+", None, None, "350 150 400 125 450 100", 3, None),
    ("4", "6", 1, 8, 0.6, 0, "+", None, None, "350 150 400 175 450 200", 3, None),
    ("6", "6", 1, 2, 0.1, 0, "+", None, None, "450 200 480 230 420 230 450 200", 4, None),
]

SECOND_CLUSTER_ROW = ("C2", 1, 320, 80, 480, 240, 1, 2, 200, 3, None)
SECOND_CLUSTER_NODES = {"4", "5", "6"}


def _in_second_cluster(rows, endpoints):
    """Reparent rows whose endpoint columns all lie in C2."""
    return [row[:-1] + ("C2",) if all(row[i] in SECOND_CLUSTER_NODES for i in endpoints)
            else row for row in rows]


SINGLECOMPONENT_ROWS = [
    (1, 400, 300, 400, 300, 10, 7, 6, 4, 7, 4, 1),
]

BICOMPONENT_ROWS = [
    (1, 1, "S1", 3, 50, 50, 250, 250, 50, 50, 250, 250),
]

METANODE_ROWS = [
    ("S1", 1, 1, 1, 3, 60, 60, 160, 240, 60, 60, 240, 240),
    ("P2", 1, 1, 0, 2, 180, 60, 240, 240, 180, 60, 240, 240),
]

METANODE_EDGE_ROWS = [
    ("S1", "P2", 1, "", 0),
]

# id, label, rank, parent metanode, parent bicomponent, x, y, i_x, i_y, w, h, length
SINGLENODE_ROWS = [
    ("a", None, 1, "S1", "I1", 100, 200, 100, 200, 0.3, 0.3, 10),
    ("b", None, 1, "S1", "I1", 80, 100, 80, 100, 0.3, 0.3, 10),
    ("c", None, 1, "S1", "I1", 140, 100, 140, 100, 0.3, 0.3, 10),
    ("a", None, 1, "P2", "I1", 210, 200, 100, 200, 0.3, 0.3, 10),
    ("c", None, 1, "P2", "I1", 210, 100, 140, 100, 0.3, 0.3, 10),
    ("d", None, 1, None, None, 300, 150, 300, 150, 0.3, 0.3, 10),
    ("e", None, 1, None, None, 370, 150, 370, 150, 0.3, 0.3, 10),
]

SINGLEEDGE_ROWS = [
    ("a", "b", 1, "S1", 0),
    ("b", "c", 1, "S1", 0),
    ("c", "a", 1, "S1", 1),
    ("a", "c", 1, "P2", 0),
    ("a", "c", 1, "P2", 1),
    ("d", "e", 1, None, 0),
]


def _insert(conn, table, rows):
    if not rows:
        return
    placeholders = ",".join("?" for _ in rows[0])
    conn.executemany(f"INSERT INTO {table} VALUES ({placeholders})", rows)


def build_layout_db(path, filetype="LastGraph", two_clusters=False):
    """Write the sample layout database to ``path``."""
    clusters, nodes, edges = CLUSTER_ROWS, NODE_ROWS, EDGE_ROWS
    if two_clusters:
        clusters = CLUSTER_ROWS + [SECOND_CLUSTER_ROW]
        nodes = _in_second_cluster(NODE_ROWS, (0,))
        edges = _in_second_cluster(EDGE_ROWS, (0, 1))
    conn = sqlite3.connect(str(path))
    try:
        conn.executescript(SCHEMA)
        assembly = (ASSEMBLY_ROW[0], filetype) + ASSEMBLY_ROW[2:]
        _insert(conn, "assembly", [assembly])
        _insert(conn, "components", [(1, 500, 400, 6, 6)])
        _insert(conn, "clusters", clusters)
        _insert(conn, "nodes", nodes)
        _insert(conn, "edges", edges)
        _insert(conn, "singlecomponents", SINGLECOMPONENT_ROWS)
        _insert(conn, "bicomponents", BICOMPONENT_ROWS)
        _insert(conn, "metanodes", METANODE_ROWS)
        _insert(conn, "metanodeedges", METANODE_EDGE_ROWS)
        _insert(conn, "singlenodes", SINGLENODE_ROWS)
        _insert(conn, "singleedges", SINGLEEDGE_ROWS)
        conn.commit()
    finally:
        conn.close()
    return path


@pytest.fixture
def layout_db_path(tmp_path):
    """Path to a freshly written sample layout database."""
    return build_layout_db(tmp_path / "sample.db")


@pytest.fixture
def make_layout_db(tmp_path):
    """Factory writing sample databases with another assembly filetype."""
    def _make(name, filetype="LastGraph"):
        return build_layout_db(tmp_path / name, filetype)
    return _make


@pytest.fixture
def layout_db(layout_db_path):
    """Open LayoutDatabase over the sample database."""
    db = LayoutDatabase(layout_db_path)
    yield db
    db.close()


@pytest.fixture
def scheduler(layout_db):
    """Draw scheduler over the sample database (nothing drawn yet)."""
    return IncrementalDrawScheduler(layout_db)


@pytest.fixture
def drawn(scheduler):
    """Scheduler after drawing standard component #1."""
    scheduler.run(scheduler.draw_component(1))
    return scheduler


@pytest.fixture
def two_cluster_drawn(tmp_path):
    """Scheduler after drawing component #1 with both C1 and C2."""
    path = build_layout_db(tmp_path / "two_clusters.db", two_clusters=True)
    db = LayoutDatabase(path)
    scheduler = IncrementalDrawScheduler(db)
    scheduler.run(scheduler.draw_component(1))
    yield scheduler
    db.close()


@pytest.fixture
def session(drawn):
    """Session of the drawn standard component."""
    return drawn.session

# ContigView v0.1.0
# Any usage is subject to this software's license.
