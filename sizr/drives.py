from __future__ import annotations
import os
from typing import Dict, Optional
import psutil

def volume_for(path: str) -> Optional[Dict[str, object]]:
    """Mountpoint and usage of the filesystem that holds ``path``, or None if psutil can't tell."""
    ap = os.path.abspath(path)
    best = None
    try:
        partitions = psutil.disk_partitions(all=True)
    except (OSError, psutil.Error):
        partitions = []
    for p in partitions:
        mp = p.mountpoint
        if not mp:
            continue
        mp_norm = os.path.abspath(mp)
        try:
            inside = os.path.commonpath([mp_norm, ap]) == mp_norm
        except ValueError:  # different drives on Windows
            continue
        if inside and (best is None or len(mp_norm) > len(best[0])):
            best = (mp_norm, p.fstype)
    try:
        u = psutil.disk_usage(ap)
    except (OSError, psutil.Error):
        return None
    mountpoint, fstype = best if best else (ap, "")
    return {
        "mountpoint": mountpoint,
        "fstype": fstype,
        "total": int(u.total),
        "used": int(u.used),
        "free": int(u.free),
        "percent": float(u.percent),
    }
