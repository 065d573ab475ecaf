"""Close gaps between explicitly placed sections."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Iterator

from flashmap.schemas import Section

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class _Level:
    """Children still to visit in one container and its address cursor."""

    children: Iterator[Section]
    cursor: int = 0


def defrag_section(node: Section) -> bool:
    """Defragment ``node`` so no empty space is left between its sections.

    At every level a cursor starts at 0 and advances by each child's byte
    size. A child whose explicit start lies beyond the cursor is moved back to
    the cursor. Implicit starts are never assigned, and starts below the
    cursor (overlaps) are left alone. Every child is then defragmented in
    turn.

    Returns:
        True if any start offset in the subtree was rewritten.
    """
    changed = False
    levels = [_Level(iter(node.children))]
    while levels:
        level = levels[-1]
        child = next(level.children, None)
        if child is None:
            levels.pop()
            continue
        if child.start is not None and child.start > level.cursor:
            logger.info(
                "Compacting section %s: 0x%x -> 0x%x", child.name, child.start, level.cursor
            )
            child.start = level.cursor
            changed = True
        level.cursor += child.byte_size
        levels.append(_Level(iter(child.children)))
    return changed
