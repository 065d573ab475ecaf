"""Section lookup and removal."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterator

from flashmap.schemas import Section


@dataclass(frozen=True)
class SectionLocation:
    """Where a located section sits in the tree."""

    section: Section
    index: int
    parent: Section


def locate_section(
    root: Section,
    name: str,
    *,
    recursive: bool = False,
) -> SectionLocation | None:
    """Find a descendant of ``root`` by name, with its parent and index.

    Direct children are scanned first. Only if none matches, and ``recursive``
    is set, each child's subtree is searched in sibling order with the same
    rule. The root's own name is never matched.
    """
    found = _match_child(root, name)
    if found is not None or not recursive:
        return found

    pending = [iter(root.children)]
    while pending:
        child = next(pending[-1], None)
        if child is None:
            pending.pop()
            continue
        found = _match_child(child, name)
        if found is not None:
            return found
        pending.append(iter(child.children))
    return None


def _match_child(parent: Section, name: str) -> SectionLocation | None:
    for idx, child in enumerate(parent.children):
        if child.name == name:
            return SectionLocation(section=child, index=idx, parent=parent)
    return None


def find_section(
    root: Section,
    name: str,
    *,
    recursive: bool = False,
) -> Section | None:
    """Return the first descendant named ``name``, or None.

    The returned section is part of the tree, not a copy.
    """
    location = locate_section(root, name, recursive=recursive)
    if location is None:
        return None
    return location.section


def remove_section(
    root: Section,
    name: str,
    *,
    recursive: bool = False,
) -> bool:
    """Detach the first descendant named ``name`` from its parent.

    Returns:
        True if a section was removed, False if none matched.
    """
    location = locate_section(root, name, recursive=recursive)
    if location is None:
        return False
    siblings = location.parent.children
    assert siblings[location.index] is location.section, "stale section location"
    del siblings[location.index]
    return True


def iter_sections(root: Section) -> Iterator[tuple[int, Section]]:
    """Yield ``(depth, section)`` for every descendant in pre-order."""
    pending = [iter(root.children)]
    while pending:
        child = next(pending[-1], None)
        if child is None:
            pending.pop()
            continue
        yield len(pending), child
        pending.append(iter(child.children))


def count_sections(root: Section) -> int:
    """Count all descendants of ``root``."""
    return sum(1 for _ in iter_sections(root))
