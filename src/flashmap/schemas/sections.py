"""Section tree models."""

from __future__ import annotations

from pydantic import BaseModel, Field

from flashmap.units import SizeUnit, size_in_bytes


class Section(BaseModel):
    """A named flashmap region, possibly containing nested regions.

    Attributes:
        name: Region identifier.
        annotation: Opaque annotation text from ``(...)``; ``""`` for ``()``.
        start: Explicit offset relative to the parent, or None when implicit.
        size: Size magnitude, interpreted together with ``unit``.
        unit: Optional size unit suffix (``k``/``K`` or ``m``/``M``).
        children: Nested regions, ordered from low to high address.
    """

    name: str = Field(..., min_length=1)
    annotation: str | None = None
    start: int | None = Field(default=None, ge=0)
    size: int = Field(..., ge=0)
    unit: SizeUnit | None = None
    children: list["Section"] = Field(default_factory=list)

    @property
    def byte_size(self) -> int:
        """Effective size in bytes, recomputed from the current fields."""
        return size_in_bytes(self.size, self.unit)

    @property
    def annotation_flags(self) -> list[str]:
        """Identifiers listed in the annotation."""
        if self.annotation is None:
            return []
        return self.annotation.split()
