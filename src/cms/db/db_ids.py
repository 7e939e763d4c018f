"""Integer id helpers bound to the range of a 64-bit INTEGER column."""

from __future__ import annotations

from typing import Any

MIN_ROW_ID = -(2**63)
MAX_ROW_ID = 2**63 - 1


def fits_int_column(value: int) -> bool:
    return MIN_ROW_ID <= value <= MAX_ROW_ID


def coerce_row_id(value: Any) -> int | None:
    """Return ``value`` as a storable integer id, or ``None`` when it is not one."""
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, int):
        number = value
    else:
        try:
            number = int(str(value).strip())
        except ValueError:
            return None
    return number if fits_int_column(number) else None
