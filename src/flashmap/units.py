"""Size unit handling for flashmap sections."""

from __future__ import annotations

from typing import Final, Literal, TypeAlias

SizeUnit: TypeAlias = Literal["k", "K", "m", "M"]

KIB: Final[int] = 1024
MIB: Final[int] = 1024 * 1024

UNIT_MULTIPLIERS: Final[dict[str, int]] = {
    "k": KIB,
    "K": KIB,
    "m": MIB,
    "M": MIB,
}


def size_in_bytes(size: int, unit: str | None) -> int:
    """Return the byte count for a magnitude expressed in ``unit``.

    A missing unit leaves the value in bytes.
    """
    if not unit:
        return size
    return size * UNIT_MULTIPLIERS[unit]


def bytes_to_size(nbytes: int, unit: str | None) -> int | None:
    """Express ``nbytes`` as a magnitude of ``unit``.

    Returns None when ``nbytes`` is not a whole multiple of the unit.
    """
    if not unit:
        return nbytes
    quotient, remainder = divmod(nbytes, UNIT_MULTIPLIERS[unit])
    if remainder:
        return None
    return quotient
