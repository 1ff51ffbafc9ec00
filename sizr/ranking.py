from __future__ import annotations
from enum import Enum
from typing import Iterable, List, Optional, Tuple
from .models import Entry

class TotalPolicy(str, Enum):
    FILES = "files"    # each file byte counted once
    LISTED = "listed"  # legacy: sum of whatever is listed, directories overlap their files

def sort_entries(entries: Iterable[Entry]) -> List[Entry]:
    """Largest first; equal sizes fall back to path order so output is stable."""
    return sorted(entries, key=lambda e: (-e.size, e.path))

def take_top(entries: List[Entry], limit: int) -> Tuple[List[Entry], int]:
    if limit < 1:
        raise ValueError("limit must be >= 1")
    shown = entries[:limit]
    return shown, len(entries) - len(shown)

def total_size(entries: Iterable[Entry],
               policy: TotalPolicy = TotalPolicy.FILES,
               file_bytes: Optional[int] = None) -> int:
    """Total for the summary line.

    ``FILES`` prefers ``file_bytes`` (what the scanner counted, see
    ``ScanResult.file_bytes``) so hiding files from the listing does not zero
    the total; without it the file rows are summed. ``LISTED`` sums every row.
    """
    if policy is TotalPolicy.LISTED:
        return sum(e.size for e in entries)
    if file_bytes is not None:
        return file_bytes
    return sum(e.size for e in entries if not e.is_dir)
