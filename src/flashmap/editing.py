"""Layout edits composed from find, remove and defrag."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field

from flashmap.config import (
    FLASHMAP_GROW_PATH,
    FLASHMAP_RECLAIM_CONTAINER,
    FLASHMAP_RECLAIM_SECTION,
)
from flashmap.defrag import defrag_section
from flashmap.exceptions import LayoutError, SectionNotFoundError
from flashmap.schemas import Section
from flashmap.sections import find_section, locate_section
from flashmap.units import SizeUnit, bytes_to_size

logger = logging.getLogger(__name__)


@dataclass
class ReclaimOptions:
    """Options for reclaiming a section's space.

    Attributes:
        container: Name of the section holding the region to drop.
        remove: Name of the direct child of ``container`` to drop.
        grow_path: Names of the sections to enlarge, each the last child of
            the previous one (the first is the last child of ``container``).
        recursive_container: If True, look for ``container`` anywhere below
            the root instead of only among its direct children.
    """

    container: str = FLASHMAP_RECLAIM_CONTAINER
    remove: str = FLASHMAP_RECLAIM_SECTION
    grow_path: tuple[str, ...] = FLASHMAP_GROW_PATH
    recursive_container: bool = False


@dataclass
class ReclaimResult:
    """Outcome of a reclaim edit."""

    freed_bytes: int
    defragmented: bool
    grown: list[str] = field(default_factory=list)


def reclaim_section(root: Section, options: ReclaimOptions | None = None) -> ReclaimResult:
    """Drop a region and give its space to the trailing sections.

    The region is removed from its container, the container is defragmented,
    and every section on the grow path is enlarged by the removed region's
    byte size.

    Args:
        root: Root of the flashmap tree, edited in place.
        options: Edit parameters. Uses defaults if None.

    Returns:
        A ReclaimResult describing the edit.

    Raises:
        SectionNotFoundError: If the container or the region is missing.
        LayoutError: If a grow path entry is not the last child of its parent.
    """
    opts = options or ReclaimOptions()

    container = find_section(root, opts.container, recursive=opts.recursive_container)
    if container is None:
        raise SectionNotFoundError(f"No {opts.container} section found")

    location = locate_section(container, opts.remove)
    if location is None:
        raise SectionNotFoundError(f"Could not find {opts.remove} in {opts.container}")
    freed = location.section.byte_size
    del location.parent.children[location.index]
    logger.info("Removed %s (0x%x bytes) from %s", opts.remove, freed, opts.container)

    defragmented = defrag_section(container)
    if defragmented:
        logger.info("Defragmented %s", opts.container)

    result = ReclaimResult(freed_bytes=freed, defragmented=defragmented)
    parent = container
    for name in opts.grow_path:
        if not parent.children:
            raise LayoutError(f"{parent.name} has no sections, expected {name}")
        last = parent.children[-1]
        if last.name != name:
            raise LayoutError(f"Last section of {parent.name} is {last.name}, expected {name}")
        grow_section(last, freed)
        result.grown.append(name)
        logger.info("Expanded %s by 0x%x", name, freed)
        parent = last
    return result


def grow_section(section: Section, nbytes: int) -> None:
    """Enlarge ``section`` by ``nbytes``, keeping its unit when possible."""
    total = section.byte_size + nbytes
    size = bytes_to_size(total, section.unit)
    if size is None:
        section.size, section.unit = total, None
    else:
        section.size = size


def resize_section(section: Section, size: int, unit: SizeUnit | None = None) -> None:
    """Set a section's size magnitude and unit."""
    if size < 0:
        raise LayoutError(f"Negative size for {section.name}: {size}")
    section.size = size
    section.unit = unit
