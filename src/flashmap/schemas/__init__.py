"""Shared schemas for flashmap."""

from flashmap.schemas.sections import Section

__all__ = ["Section"]
