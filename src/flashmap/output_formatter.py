"""Render Section trees as flashmap text and diagnostic outlines."""

from __future__ import annotations

from typing import Final

from flashmap.schemas import Section
from flashmap.sections import iter_sections
from flashmap.units import KIB, MIB

CANONICAL_INDENT: Final[str] = "\t"


def format_flashmap(section: Section, *, prefix: str = CANONICAL_INDENT, level: int = 0) -> str:
    """Render ``section`` and its subtree in canonical descriptor syntax.

    Args:
        section: Section to render.
        prefix: Indentation unit, repeated once per nesting level.
        level: Nesting level of ``section`` itself.

    Returns:
        Descriptor text that parses back into an equivalent tree.
    """
    parts: list[str] = []
    # None marks the closing brace of a container
    pending: list[tuple[Section | None, int]] = [(section, level)]
    while pending:
        node, depth = pending.pop()
        indent = prefix * depth
        if node is None:
            parts.append(indent + "}\n")
            continue
        line = indent + _format_header(node)
        if not node.children:
            parts.append(line + "\n")
            continue
        parts.append(line + " {\n")
        pending.append((None, depth))
        for child in reversed(node.children):
            pending.append((child, depth + 1))
    return "".join(parts)


def _format_header(section: Section) -> str:
    line = section.name
    if section.annotation is not None:
        line += f"({section.annotation})"
    if section.start is not None:
        line += f"@0x{section.start:x}"
    if section.unit:
        line += f" {section.size}{section.unit}"
    else:
        line += f" 0x{section.size:x}"
    return line


def format_section_tree(section: Section) -> str:
    """Create an outline of absolute address windows for each section.

    A child's base is its parent's base plus its explicit start or, when the
    start is implicit, the running sum of the preceding sibling sizes.
    """
    base = section.start or 0
    lines = [_format_tree_line(section, base, depth=0)]
    # [base, cursor] of each open container, indexed by depth - 1
    frames: list[list[int]] = [[base, 0]]
    for depth, child in iter_sections(section):
        del frames[depth:]
        parent_base, cursor = frames[-1]
        offset = child.start if child.start is not None else cursor
        frames[-1][1] = cursor + child.byte_size
        child_base = parent_base + offset
        lines.append(_format_tree_line(child, child_base, depth=depth))
        frames.append([child_base, 0])
    return "\n".join(lines)


def _format_tree_line(section: Section, base: int, *, depth: int) -> str:
    end = base + section.byte_size
    placement = "" if section.start is not None else " (implicit)"
    return (
        f"{'    ' * depth}{section.name} "
        f"[0x{base:08x}, 0x{end:08x}) {_format_size(section.byte_size)}{placement}"
    )


def _format_size(nbytes: int) -> str:
    if nbytes and nbytes % MIB == 0:
        return f"{nbytes // MIB} MiB"
    if nbytes and nbytes % KIB == 0:
        return f"{nbytes // KIB} KiB"
    return f"{nbytes} B"
