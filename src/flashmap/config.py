"""Local configuration for flashmap."""

from __future__ import annotations

import os


DEFAULT_LOG_LEVEL = "WARNING"
DEFAULT_INDENT = "\t"
DEFAULT_RECLAIM_CONTAINER = "SI_BIOS"
DEFAULT_RECLAIM_SECTION = "RW_SECTION_B"
DEFAULT_GROW_PATH = "WP_RO,RO_SECTION,COREBOOT"
DEFAULT_LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"

FLASHMAP_LOG_LEVEL = os.getenv("FLASHMAP_LOG_LEVEL", DEFAULT_LOG_LEVEL).upper()
FLASHMAP_LOG_FORMAT = os.getenv("FLASHMAP_LOG_FORMAT", DEFAULT_LOG_FORMAT)

# Indentation unit used when rendering nested sections.
FLASHMAP_INDENT = os.getenv("FLASHMAP_INDENT", DEFAULT_INDENT)

# Defaults for the `reclaim` layout edit.
FLASHMAP_RECLAIM_CONTAINER = os.getenv("FLASHMAP_RECLAIM_CONTAINER", DEFAULT_RECLAIM_CONTAINER)
FLASHMAP_RECLAIM_SECTION = os.getenv("FLASHMAP_RECLAIM_SECTION", DEFAULT_RECLAIM_SECTION)
FLASHMAP_GROW_PATH = tuple(
    name.strip()
    for name in os.getenv("FLASHMAP_GROW_PATH", DEFAULT_GROW_PATH).split(",")
    if name.strip()
)
