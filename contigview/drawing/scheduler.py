#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
ContigView v0.1.0

Incremental Draw Scheduler — drives the renderer over the rows of one
component in fixed-size chunks, handing control back to the caller between
chunks.

A draw is a generator of DrawProgress values. The caller (a progress bar, an
event loop, or run()) decides when to resume it; nothing is computed between
two yields. Drawing order within one component:

1. clusters (standard view) or bicomponents and root metanodes (SPQR view)
2. the bounding box enforcing nodes
3. every node, indexing its position
4. every edge (endpoint positions are all known by now)
5. cluster initialization (standard view only)
6. removal of the bounding box enforcing nodes

Starting a draw throws away the previous session in full.

Author: ContigView Development Team
License: Dual License (Academic/Commercial) - See LICENSE_ACADEMIC.md and LICENSE_COMMERCIAL.md
"""

from __future__ import annotations
import logging
import math
import time
from dataclasses import dataclass
from typing import Callable, Generator, Iterable, Iterator, List, Optional, TypeVar, Union

from ..collapse.engine import ClusterCollapseEngine
from ..collapse.spqr import SPQRMetanodeEngine
from ..config.schema import DrawSettings
from ..geometry.transform import BoundingBox
from ..kinds import SPQRMode, ViewType
from ..render.renderer import GraphElementRenderer
from ..render.session import ViewSession

logger = logging.getLogger(__name__)

T = TypeVar("T")


@dataclass(frozen=True)
class DrawProgress:
    """Where a draw is at a chunk boundary."""
    stage: str     # "clusters", "nodes", "edges" or "done"
    done: float    # work units drawn so far (nodes count 1, edges 0.5)
    total: float   # estimated work units for the component

    @property
    def fraction(self) -> float:
        if self.total <= 0:
            return 1.0
        return min(1.0, self.done / self.total)


DrawGenerator = Generator[DrawProgress, None, None]


def batched(rows: Iterable[T], size: int) -> Iterator[List[T]]:
    """
    Split a row iterator into lists of ``size`` rows (the last may be shorter).

    Consumes the iterator; it can't be restarted.
    """
    if size < 1:
        raise ValueError(f"Batch size must be positive, got {size}")
    chunk: List[T] = []
    for row in rows:
        chunk.append(row)
        if len(chunk) == size:
            yield chunk
            chunk = []
    if chunk:
        yield chunk


def progress_frequency(node_count: int, edge_count: int, percent: float = 0.05) -> int:
    """Rows per chunk: a fixed share of the component's estimated work."""
    return max(1, math.floor(percent * (node_count + 0.5 * edge_count)))


class IncrementalDrawScheduler:
    """
    Draws components of a layout database into fresh ViewSessions.

    Attributes:
        session: Session of the most recent draw (None before the first)
        renderer: Renderer bound to that session
        engine: Cluster collapse engine bound to that session
        spqr: SPQR metanode engine (SPQR draws only)
    """

    def __init__(self, db, settings: Optional[DrawSettings] = None):
        self.db = db
        self.settings = settings or DrawSettings()
        self.assembly = db.assembly_summary()
        self.session: Optional[ViewSession] = None
        self.renderer: Optional[GraphElementRenderer] = None
        self.engine: Optional[ClusterCollapseEngine] = None
        self.spqr: Optional[SPQRMetanodeEngine] = None

    def _new_session(self, view_type: ViewType, rank: int,
                     bounding_box: BoundingBox, **kwargs) -> ViewSession:
        if self.session is not None:
            self.session.graph.clear()
        session = ViewSession.create(
            view_type, self.settings,
            db=self.db,
            asm_filetype=self.assembly.filetype,
            component_rank=rank,
            bounding_box=bounding_box,
            **kwargs,
        )
        self.session = session
        self.renderer = GraphElementRenderer(session)
        self.engine = ClusterCollapseEngine(session)
        self.spqr = None
        return session

    # ========================================================================
    # Standard view
    # ========================================================================

    def draw_component(self, rank: int) -> DrawGenerator:
        """Draw a connected component of the standard view."""
        start = time.perf_counter()
        info = self.db.component_info(rank)
        session = self._new_session(ViewType.DOUBLE, rank, info.bounding_box)
        renderer = self.renderer
        graph = session.graph
        total = info.total_work
        frequency = progress_frequency(info.node_count, info.edge_count,
                                       self.settings.progress_freq_percent)
        logger.debug(f"Drawing component #{rank}: {info.node_count} nodes, "
                     f"{info.edge_count} edges, chunks of {frequency}")

        with graph.batch():
            for record in self.db.iter_clusters(rank):
                renderer.render_cluster(record)
            renderer.draw_bounding_box_enforcing_nodes()
        yield DrawProgress("clusters", 0, total)

        done = yield from self._draw_rows(
            "nodes", self.db.iter_nodes(rank), renderer.render_node, frequency, 0, total, 1)
        done = yield from self._draw_rows(
            "edges", self.db.iter_edges(rank), renderer.render_edge, frequency, done, total, 0.5)

        with graph.batch():
            self.engine.init_clusters()
            renderer.remove_bounding_box_enforcing_nodes()
        self._log_draw_time("standard", rank, start)
        yield DrawProgress("done", done, total)

    # ========================================================================
    # SPQR view
    # ========================================================================

    def draw_spqr_component(self, rank: int,
                            spqr_mode: Optional[Union[str, SPQRMode]] = None) -> DrawGenerator:
        """
        Draw a single component of the SPQR view with every SPQR tree
        collapsed to its root metanode.
        """
        start = time.perf_counter()
        mode = SPQRMode(spqr_mode or self.settings.spqr_mode)
        info = self.db.spqr_component_info(rank, mode.value)
        session = self._new_session(ViewType.SPQR, rank, info.bounding_box, spqr_mode=mode)
        renderer = self.renderer
        self.spqr = SPQRMetanodeEngine(session, renderer, self.db)
        graph = session.graph
        total = info.total_work
        frequency = progress_frequency(info.compressed_node_count,
                                       info.compressed_edge_count,
                                       self.settings.progress_freq_percent)

        root_ids = []
        with graph.batch():
            for record in self.db.iter_bicomponents(rank):
                renderer.render_cluster(record)
                if record.root_metanode_id is not None:
                    root_ids.append(record.root_metanode_id)
            for record in self.db.iter_root_metanodes(rank, root_ids):
                renderer.render_cluster(record)
            renderer.draw_bounding_box_enforcing_nodes()
        yield DrawProgress("clusters", 0, total)

        done = yield from self._draw_rows(
            "nodes", self.db.iter_root_singlenodes(rank, root_ids), renderer.render_node,
            frequency, 0, total, 1)
        # Metanode edges are only drawn once a tree is uncollapsed
        done = yield from self._draw_rows(
            "edges", self.db.iter_root_singleedges(rank, root_ids), renderer.render_edge,
            frequency, done, total, 0.5)

        renderer.remove_bounding_box_enforcing_nodes()
        self._log_draw_time(f"{mode.value} SPQR", rank, start)
        yield DrawProgress("done", done, total)

    # ------------------------------------------------------------------

    def _draw_rows(self, stage: str, rows: Iterable, render: Callable, frequency: int,
                   done: float, total: float, weight: float):
        graph = self.session.graph
        for chunk in batched(rows, frequency):
            with graph.batch():
                for record in chunk:
                    render(record)
            done += weight * len(chunk)
            logger.debug(f"Drew {len(chunk)} {stage} ({done}/{total})")
            yield DrawProgress(stage, done, total)
        return done

    def _log_draw_time(self, what: str, rank: int, start: float):
        elapsed_ms = round((time.perf_counter() - start) * 1000)
        logger.info(f"Drawing {what} component #{rank} took {elapsed_ms}ms")

    def run(self, draw: DrawGenerator,
            callback: Optional[Callable[[DrawProgress], None]] = None) -> ViewSession:
        """Drain a draw, reporting each chunk boundary to ``callback``."""
        for progress in draw:
            if callback is not None:
                callback(progress)
        return self.session

# ContigView v0.1.0
# Any usage is subject to this software's license.
