from __future__ import annotations
from dataclasses import dataclass, field
from enum import Enum
from typing import List, Dict

# normalized directory path -> bytes of every file beneath it
DirectorySizeMap = Dict[str, int]

class EntryKind(str, Enum):
    FILE = "file"
    DIRECTORY = "directory"

@dataclass(frozen=True)
class Entry:
    path: str
    size: int
    kind: EntryKind

    @property
    def is_dir(self) -> bool:
        return self.kind is EntryKind.DIRECTORY

@dataclass
class ScanResult:
    root: str
    entries: List[Entry]                  # unordered, already filtered
    dir_sizes: DirectorySizeMap = field(default_factory=dict)
    files: int = 0
    dirs: int = 0
    bytes_scanned: int = 0
    file_bytes: int = 0                   # files of at least min_size, listed or not
    skipped: int = 0
    elapsed_sec: float = 0.0
