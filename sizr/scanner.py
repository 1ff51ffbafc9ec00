from __future__ import annotations
import logging
import os
import stat as statmod
import time
from typing import Callable, Iterator, List, Optional, Tuple
from .errors import InvalidRoot, MetadataReadFailure
from .models import DirectorySizeMap, Entry, EntryKind, ScanResult

logger = logging.getLogger(__name__)

PROGRESS_INTERVAL = 0.10

ProgressCb = Callable[[str, int, int, int], None]  # (current_path, files, dirs, bytes_scanned)
SkipCb = Callable[[str, OSError], None]

def dir_key(path: str) -> str:
    """Aggregation key for a directory: absolute, case-normalized where the OS folds case."""
    return os.path.normcase(os.path.abspath(path))

def walk_tree(root: str,
              follow_symlinks: bool = False,
              on_skip: Optional[SkipCb] = None) -> Iterator[Tuple[str, bool]]:
    """Yield ``(path, is_dir)`` for every file and directory strictly below ``root``.

    Depth-first, explicit stack. Entries that cannot be listed or classified
    go to ``on_skip`` and are dropped. Symlinks are skipped unless
    ``follow_symlinks`` is set; then they are classified by their target and
    directory links are descended into. Fifos, sockets and devices are ignored.
    """
    def skip(path: str, err: OSError):
        if on_skip:
            on_skip(path, err)

    stack = [root]
    while stack:
        dir_path = stack.pop()
        try:
            it = os.scandir(dir_path)
        except OSError as e:
            if dir_path == root:
                raise InvalidRoot(root, f"cannot be read ({e.strerror or e})") from e
            skip(dir_path, e)
            continue

        subdirs: List[str] = []
        with it:
            while True:
                try:
                    entry = next(it)
                except StopIteration:
                    break
                except OSError as e:
                    skip(dir_path, e)
                    break

                try:
                    if entry.is_symlink() and not follow_symlinks:
                        continue
                    if entry.is_dir(follow_symlinks=follow_symlinks):
                        is_dir = True
                    elif entry.is_file(follow_symlinks=follow_symlinks):
                        is_dir = False
                    else:
                        continue
                except OSError as e:
                    skip(entry.path, e)
                    continue

                yield entry.path, is_dir
                if is_dir:
                    subdirs.append(entry.path)
        # keep listing order when popping
        stack.extend(reversed(subdirs))

def _file_size(path: str, follow_symlinks: bool) -> int:
    try:
        st = os.stat(path, follow_symlinks=follow_symlinks)
    except OSError as e:
        raise MetadataReadFailure(path, e) from e
    return int(st.st_size)

def _accumulate(dir_sizes: DirectorySizeMap, file_path: str, root_key: str, size: int):
    current = dir_key(os.path.dirname(file_path))
    while True:
        dir_sizes[current] = dir_sizes.get(current, 0) + size
        if current == root_key:
            break
        parent = os.path.dirname(current)
        if parent == current:  # filesystem root, never above the scan root
            break
        current = parent

def scan_path(root: str,
              include_files: bool = True,
              include_directories: bool = True,
              min_size: int = 0,
              follow_symlinks: bool = False,
              progress: Optional[ProgressCb] = None) -> ScanResult:
    """Scan ``root`` and return every file/directory entry of at least ``min_size`` bytes.

    Pass 1 walks the tree, stats each file and adds its size to every
    directory from its parent up to ``root``. Pass 2 walks again and emits the
    directories strictly below ``root`` with their accumulated totals. Entries
    come back unordered; see ``ranking.sort_entries``.
    """
    t0 = time.time()
    if not os.path.exists(root):
        raise InvalidRoot(root)

    entries: List[Entry] = []
    dir_sizes: DirectorySizeMap = {}
    files = 0
    dirs = 0
    bytes_scanned = 0
    file_bytes = 0
    skipped = 0

    last_emit = 0.0
    def emit(cur: str):
        nonlocal last_emit
        if not progress:
            return
        now = time.time()
        if now - last_emit >= PROGRESS_INTERVAL:
            last_emit = now
            progress(cur, files, dirs, bytes_scanned)

    def count_skip(path: str, err: OSError):
        nonlocal skipped
        skipped += 1
        logger.debug("skipping %s: %s", path, err)

    try:
        root_st = os.stat(root)
    except OSError as e:
        raise InvalidRoot(root, f"cannot be read ({e.strerror or e})") from e
    if statmod.S_ISREG(root_st.st_mode):
        # a plain file given as root is reported on its own
        size = _file_size(root, True)
        if include_files and size >= min_size:
            entries.append(Entry(path=root, size=size, kind=EntryKind.FILE))
        return ScanResult(root=root, entries=entries, dir_sizes=dir_sizes, files=1,
                          bytes_scanned=size, file_bytes=size if size >= min_size else 0,
                          elapsed_sec=time.time() - t0)

    root_key = dir_key(root)
    dir_sizes[root_key] = 0

    # pass 1: file sizes into every ancestor up to the root
    for path, is_dir in walk_tree(root, follow_symlinks, on_skip=count_skip):
        if is_dir:
            dirs += 1
            emit(path)
            continue
        size = _file_size(path, follow_symlinks)
        files += 1
        bytes_scanned += size
        _accumulate(dir_sizes, path, root_key, size)
        if size >= min_size:
            file_bytes += size
        if include_files and size >= min_size:
            entries.append(Entry(path=path, size=size, kind=EntryKind.FILE))
        emit(path)
    logger.debug("file pass: %d files, %d dirs, %d bytes, %d skipped",
                 files, dirs, bytes_scanned, skipped)

    # pass 2: directories below the root, totals are final now
    if include_directories:
        def log_skip(path: str, err: OSError):
            logger.debug("skipping %s: %s", path, err)

        for path, is_dir in walk_tree(root, follow_symlinks, on_skip=log_skip):
            if not is_dir:
                continue
            emit(path)
            size = dir_sizes.get(dir_key(path), 0)
            if size >= min_size:
                entries.append(Entry(path=path, size=size, kind=EntryKind.DIRECTORY))

    elapsed = time.time() - t0
    logger.debug("scan of %s finished in %.2fs, %d entries", root, elapsed, len(entries))
    return ScanResult(
        root=root,
        entries=entries,
        dir_sizes=dir_sizes,
        files=files,
        dirs=dirs,
        bytes_scanned=bytes_scanned,
        file_bytes=file_bytes,
        skipped=skipped,
        elapsed_sec=elapsed
    )
