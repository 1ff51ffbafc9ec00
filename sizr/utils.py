from __future__ import annotations
import re
from decimal import Decimal
from .errors import InvalidSizeSpec

UNIT_MULTIPLIERS = {
    "B": 1,
    "KB": 1024,
    "MB": 1024 ** 2,
    "GB": 1024 ** 3,
    "TB": 1024 ** 4,
}

_SIZE_RE = re.compile(r"^\s*(?P<num>\d+(?:\.\d*)?|\.\d+)\s*(?P<unit>[A-Za-z]*)\s*$")

def format_bytes(num: int) -> str:
    if num < 0:
        return str(num)
    units = ["B", "KB", "MB", "GB", "TB", "PB"]
    x = float(num)
    for u in units:
        if x < 1024.0 or u == units[-1]:
            return f"{x:.2f} {u}" if u != "B" else f"{int(x)} {u}"
        x /= 1024.0
    return f"{x:.2f} PB"

def parse_size(text: str) -> int:
    """Parse a threshold like ``"500KB"`` or ``"1.5 gb"`` into bytes (1 KB = 1024 B).

    A bare number is bytes. Raises ``InvalidSizeSpec`` for anything else.
    """
    m = _SIZE_RE.match(text or "")
    if not m:
        raise InvalidSizeSpec(text, "expected a number optionally followed by B, KB, MB, GB or TB")
    unit = m.group("unit").upper() or "B"
    if unit not in UNIT_MULTIPLIERS:
        raise InvalidSizeSpec(text, f"unknown unit '{m.group('unit')}'")
    return int(Decimal(m.group("num")) * UNIT_MULTIPLIERS[unit])

def shorten_path(path: str, width: int) -> str:
    # keep the tail, it carries the file name
    if width <= 3 or len(path) <= width:
        return path
    return "..." + path[len(path) - (width - 3):]
