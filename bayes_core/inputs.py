from __future__ import annotations

from typing import Optional, Union

# exact in float64 and far beyond anything drawable
MAX_COUNT = 10**12


def parse_count(value: Union[str, int, None]) -> Optional[int]:
    """Normalize a raw ball-count field.

    A blank field counts as zero. Returns ``None`` when the value is
    negative, above ``MAX_COUNT`` or not a whole number.
    """
    if value is None:
        return 0
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value if 0 <= value <= MAX_COUNT else None

    text = str(value).strip()
    if not text:
        return 0
    if not text.isdecimal():
        return None
    try:
        count = int(text)
    except ValueError:  # longer than the interpreter's int string limit
        return None
    return count if count <= MAX_COUNT else None
