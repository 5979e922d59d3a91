#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
ContigView v0.1.0

Layout database — read-only query interface over the SQLite database written
by the upstream layout tool.

Only the query shapes the viewer consumes are covered. The tables read are:

- assembly: one row of assembly-wide statistics
- components / clusters / nodes / edges: the standard (double) view, keyed by
  component size rank
- singlecomponents / bicomponents / metanodes / metanodeedges / singlenodes /
  singleedges: the SPQR view, keyed by single component size rank

Every row is turned into a plain dict before it is wrapped in a record, so
records never hold on to a live cursor. Iterators step the cursor lazily, one
row at a time.

Author: ContigView Development Team
License: Dual License (Academic/Commercial) - See LICENSE_ACADEMIC.md and LICENSE_COMMERCIAL.md
"""

from __future__ import annotations
import logging
import sqlite3
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Iterator, List, Optional, Sequence, Union

from ..errors import ComponentNotFoundError
from ..geometry.transform import BoundingBox
from ..records import ClusterRecord, EdgeRecord, NodeRecord

logger = logging.getLogger(__name__)

# Filetypes whose graphs hold both strands of every sequence
UNORIENTED_FILETYPES = ("LastGraph", "GFA", "FASTG")


# ============================================================================
#                               SUMMARIES
# ============================================================================

@dataclass(frozen=True)
class AssemblySummary:
    """Assembly-wide statistics from the assembly table."""
    filename: str
    filetype: str
    node_count: int
    edge_count: int
    all_edge_count: int
    total_length: int
    n50: int
    component_count: int
    single_component_count: int
    bicomponent_count: int
    gc_content: Optional[float] = None
    dna_given: bool = False
    repeats_given: bool = False

    @property
    def length_units(self) -> str:
        """nt for graphs that draw both strands, bp for oriented graphs."""
        return "nt" if self.filetype in UNORIENTED_FILETYPES else "bp"

    @property
    def gc_percent(self) -> Optional[str]:
        """Assembly GC content as a percentage string, if DNA was given."""
        if not self.dna_given or self.gc_content is None:
            return None
        return f"{round(self.gc_content * 100, 2)}%"

    def to_dict(self) -> Dict[str, Any]:
        units = self.length_units
        return {
            "filename": self.filename,
            "filetype": self.filetype,
            "node_count": self.node_count,
            "edge_count": self.edge_count,
            "total_length": f"{self.total_length:,} {units}",
            "n50": f"{self.n50:,} {units}",
            "component_count": self.component_count,
            "single_component_count": self.single_component_count,
            "bicomponent_count": self.bicomponent_count,
            "gc_content": self.gc_percent,
        }


@dataclass(frozen=True)
class ComponentInfo:
    """Size information for a connected component of the standard view."""
    rank: int
    bounding_box: BoundingBox
    node_count: int
    edge_count: int

    @property
    def total_work(self) -> float:
        return self.node_count + 0.5 * self.edge_count


@dataclass(frozen=True)
class SPQRComponentInfo:
    """
    Size information for a single component of the SPQR view.

    Compressed counts are what is drawn with every SPQR tree collapsed to
    its root; uncompressed counts are what is shown with every tree fully
    uncollapsed (these depend on the SPQR mode).
    """
    rank: int
    bounding_box: BoundingBox
    compressed_node_count: int
    compressed_edge_count: int
    uncompressed_node_count: int
    uncompressed_edge_count: int
    bicomponent_count: int

    @property
    def total_work(self) -> float:
        return self.compressed_node_count + 0.5 * self.compressed_edge_count


# ============================================================================
#                               DATABASE
# ============================================================================

class LayoutDatabase:
    """
    Read-only access to a layout database.

    Args:
        path: Path to the .db file
    """

    def __init__(self, path: Union[str, Path]):
        self.path = Path(path)
        if not self.path.exists():
            raise FileNotFoundError(f"Layout database not found: {self.path}")
        self._conn = sqlite3.connect(str(self.path))
        self._conn.row_factory = sqlite3.Row
        logger.debug(f"Opened layout database {self.path}")

    @classmethod
    def from_connection(cls, conn: sqlite3.Connection) -> "LayoutDatabase":
        """Wrap an already open connection (e.g. an in-memory database)."""
        db = cls.__new__(cls)
        db.path = None
        conn.row_factory = sqlite3.Row
        db._conn = conn
        return db

    def close(self):
        if self._conn is not None:
            self._conn.close()
            self._conn = None

    def __enter__(self) -> "LayoutDatabase":
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()

    # ------------------------------------------------------------------
    # Row helpers
    # ------------------------------------------------------------------

    def _rows(self, query: str, params: Sequence[Any] = ()) -> Iterator[Dict[str, Any]]:
        cursor = self._conn.execute(query, tuple(params))
        try:
            for row in cursor:
                yield dict(row)
        finally:
            cursor.close()

    def _one(self, query: str, params: Sequence[Any] = ()) -> Optional[Dict[str, Any]]:
        row = self._conn.execute(query, tuple(params)).fetchone()
        return dict(row) if row is not None else None

    @staticmethod
    def _placeholders(values: Sequence[Any]) -> str:
        return "(" + ",".join("?" for _ in values) + ")"

    # ========================================================================
    # Assembly
    # ========================================================================

    def assembly_summary(self) -> AssemblySummary:
        row = self._one("SELECT * FROM assembly")
        if row is None:
            raise ComponentNotFoundError("Layout database has no assembly row")
        return AssemblySummary(
            filename=row.get("filename"),
            filetype=row.get("filetype"),
            node_count=row.get("node_count") or 0,
            edge_count=row.get("edge_count") or 0,
            all_edge_count=row.get("all_edge_count") or 0,
            total_length=row.get("total_length") or 0,
            n50=row.get("n50") or 0,
            component_count=row.get("component_count") or 0,
            single_component_count=row.get("single_component_count") or 0,
            bicomponent_count=row.get("bicomponent_count") or 0,
            gc_content=row.get("gc_content"),
            dna_given=row.get("dna_given") == 1,
            repeats_given=row.get("repeats_given") == 1,
        )

    # ========================================================================
    # Standard view
    # ========================================================================

    def component_info(self, rank: int) -> ComponentInfo:
        row = self._one(
            "SELECT boundingbox_x, boundingbox_y, node_count, edge_count "
            "FROM components WHERE size_rank = ? LIMIT 1", (rank,))
        if row is None:
            raise ComponentNotFoundError(f"No connected component with size rank {rank}")
        return ComponentInfo(
            rank=rank,
            bounding_box=BoundingBox.from_row(row),
            node_count=row["node_count"],
            edge_count=row["edge_count"],
        )

    def iter_clusters(self, rank: int) -> Iterator[ClusterRecord]:
        for row in self._rows("SELECT * FROM clusters WHERE component_rank = ?", (rank,)):
            yield ClusterRecord.from_cluster_row(row)

    def iter_nodes(self, rank: int) -> Iterator[NodeRecord]:
        for row in self._rows("SELECT * FROM nodes WHERE component_rank = ?", (rank,)):
            yield NodeRecord.from_row(row)

    def iter_edges(self, rank: int) -> Iterator[EdgeRecord]:
        for row in self._rows("SELECT * FROM edges WHERE component_rank = ?", (rank,)):
            yield EdgeRecord.from_row(row)

    # ========================================================================
    # SPQR view
    # ========================================================================

    def spqr_component_info(self, rank: int, spqr_mode: str = "implicit") -> SPQRComponentInfo:
        if spqr_mode == "explicit":
            bb_cols = "boundingbox_x, boundingbox_y"
            count_prefix = "ex"
        else:
            bb_cols = "i_boundingbox_x, i_boundingbox_y"
            count_prefix = "im"
        row = self._one(
            f"SELECT {bb_cols}, {count_prefix}_uncompressed_node_count, "
            f"{count_prefix}_uncompressed_edge_count, compressed_node_count, "
            "compressed_edge_count, bicomponent_count "
            "FROM singlecomponents WHERE size_rank = ? LIMIT 1", (rank,))
        if row is None:
            raise ComponentNotFoundError(f"No single component with size rank {rank}")
        return SPQRComponentInfo(
            rank=rank,
            bounding_box=BoundingBox.from_row(row, implicit=spqr_mode != "explicit"),
            compressed_node_count=row["compressed_node_count"],
            compressed_edge_count=row["compressed_edge_count"],
            uncompressed_node_count=row[f"{count_prefix}_uncompressed_node_count"],
            uncompressed_edge_count=row[f"{count_prefix}_uncompressed_edge_count"],
            bicomponent_count=row["bicomponent_count"],
        )

    def iter_bicomponents(self, rank: int) -> Iterator[ClusterRecord]:
        for row in self._rows("SELECT * FROM bicomponents WHERE scc_rank = ?", (rank,)):
            yield ClusterRecord.from_bicomponent_row(row)

    def iter_root_metanodes(self, rank: int, root_ids: Sequence[str]) -> Iterator[ClusterRecord]:
        if not root_ids:
            return
        query = ("SELECT * FROM metanodes WHERE scc_rank = ? AND metanode_id IN "
                 + self._placeholders(root_ids))
        for row in self._rows(query, [rank, *root_ids]):
            yield ClusterRecord.from_metanode_row(row)

    def _root_filter(self, rank: int, root_ids: Sequence[str]):
        """WHERE clause selecting rows outside any tree or in a root metanode."""
        if not root_ids:
            return "WHERE scc_rank = ? AND parent_metanode_id IS NULL", [rank]
        return ("WHERE scc_rank = ? AND (parent_metanode_id IS NULL OR "
                "parent_metanode_id IN " + self._placeholders(root_ids) + ")",
                [rank, *root_ids])

    def iter_root_singlenodes(self, rank: int, root_ids: Sequence[str]) -> Iterator[NodeRecord]:
        where, params = self._root_filter(rank, root_ids)
        for row in self._rows("SELECT * FROM singlenodes " + where, params):
            yield NodeRecord.from_row(row)

    def iter_root_singleedges(self, rank: int, root_ids: Sequence[str]) -> Iterator[EdgeRecord]:
        where, params = self._root_filter(rank, root_ids)
        for row in self._rows("SELECT * FROM singleedges " + where, params):
            yield EdgeRecord.from_row(row)

    # ------------------------------------------------------------------
    # Metanode expansion
    # ------------------------------------------------------------------

    def metanode_outgoing_edges(self, metanode_id: str) -> List[EdgeRecord]:
        return [EdgeRecord.from_metanode_edge_row(row) for row in self._rows(
            "SELECT * FROM metanodeedges WHERE source_metanode_id = ?", (metanode_id,))]

    def metanodes_by_id(self, metanode_ids: Sequence[str]) -> List[ClusterRecord]:
        if not metanode_ids:
            return []
        query = "SELECT * FROM metanodes WHERE metanode_id IN " + self._placeholders(metanode_ids)
        return [ClusterRecord.from_metanode_row(row) for row in self._rows(query, metanode_ids)]

    def singlenodes_in(self, metanode_ids: Sequence[str]) -> List[NodeRecord]:
        if not metanode_ids:
            return []
        query = ("SELECT * FROM singlenodes WHERE parent_metanode_id IN "
                 + self._placeholders(metanode_ids))
        return [NodeRecord.from_row(row) for row in self._rows(query, metanode_ids)]

    def singleedges_in(self, metanode_ids: Sequence[str]) -> List[EdgeRecord]:
        if not metanode_ids:
            return []
        query = ("SELECT * FROM singleedges WHERE parent_metanode_id IN "
                 + self._placeholders(metanode_ids))
        return [EdgeRecord.from_row(row) for row in self._rows(query, metanode_ids)]

    def __repr__(self) -> str:
        return f"LayoutDatabase(path={self.path})"

# ContigView v0.1.0
# Any usage is subject to this software's license.
