"""
ContigView v0.1.0

I/O Module for ContigView.

1. layout_db.py - Read-only query interface over the layout database
2. export.py - Element graph JSON export, finished path export

Author: ContigView Development Team
License: Dual License (Academic/Commercial) - See LICENSE_ACADEMIC.md and LICENSE_COMMERCIAL.md
"""

from .layout_db import (
    LayoutDatabase,
    AssemblySummary,
    ComponentInfo,
    SPQRComponentInfo,
)
from .export import (
    element_graph_to_json,
    export_elements_json,
    export_path_file,
)

__all__ = [
    "LayoutDatabase",
    "AssemblySummary",
    "ComponentInfo",
    "SPQRComponentInfo",
    "element_graph_to_json",
    "export_elements_json",
    "export_path_file",
]
