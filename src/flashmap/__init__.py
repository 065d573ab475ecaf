"""flashmap: parse, edit and re-serialize flashmap descriptors."""

from flashmap.defrag import defrag_section
from flashmap.editing import ReclaimOptions, ReclaimResult, reclaim_section
from flashmap.exceptions import (
    FlashmapError,
    LayoutError,
    ParseError,
    SectionNotFoundError,
)
from flashmap.output_formatter import format_flashmap, format_section_tree
from flashmap.parser import parse_flashmap, parse_size_spec, read_flashmap
from flashmap.schemas import Section
from flashmap.sections import (
    SectionLocation,
    count_sections,
    find_section,
    locate_section,
    remove_section,
)
from flashmap.units import size_in_bytes

__all__ = [
    "FlashmapError",
    "LayoutError",
    "ParseError",
    "ReclaimOptions",
    "ReclaimResult",
    "Section",
    "SectionLocation",
    "SectionNotFoundError",
    "count_sections",
    "defrag_section",
    "find_section",
    "format_flashmap",
    "format_section_tree",
    "locate_section",
    "parse_flashmap",
    "parse_size_spec",
    "read_flashmap",
    "reclaim_section",
    "remove_section",
    "size_in_bytes",
]
