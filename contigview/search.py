#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
ContigView v0.1.0

Element search — resolve user-entered names to elements of the drawn graph.

Names are comma separated. Names starting with "contig" or "NODE" are looked
up by node label (the naming schemes of common assemblers); any other name is
looked up by element id. A name whose element is hidden inside a collapsed
cluster resolves to that cluster instead.

Author: ContigView Development Team
License: Dual License (Academic/Commercial) - See LICENSE_ACADEMIC.md and LICENSE_COMMERCIAL.md
"""

import logging
from typing import Dict, List

from .errors import ElementNotFoundError
from .render.session import ViewSession

logger = logging.getLogger(__name__)

LABEL_PREFIXES = ("contig", "NODE")


def search_for_elements(session: ViewSession, text: str) -> List[str]:
    """
    Find the elements named in a comma separated list.

    Args:
        session: Session of the drawn component
        text: Names to search for, e.g. "contig_1, 40, B5"

    Returns:
        Ids of the matched visible elements, in the order first matched

    Raises:
        ValueError: If no names were given
        ElementNotFoundError: If a name isn't in the drawn component
    """
    if not text.strip():
        raise ValueError("Enter element name(s) to search for")

    graph = session.graph
    found: Dict[str, None] = {}
    for raw_name in text.split(","):
        name = raw_name.strip()
        if name.startswith(LABEL_PREFIXES):
            matches = [n.id for n in graph.nodes() if n.data.get("label") == name]
        elif graph.contains(name):
            matches = [name]
        else:
            matches = []

        if not matches:
            parent_id = session.ele2parent.get(name)
            if parent_id is None:
                raise ElementNotFoundError(
                    f"Element ID/label {name} is not in this component"
                )
            # Hidden by a collapsed parent
            matches = [parent_id]
        for element_id in matches:
            found.setdefault(element_id, None)

    logger.debug(f"Search for {text!r} matched {len(found)} elements")
    return list(found)

# ContigView v0.1.0
# Any usage is subject to this software's license.
