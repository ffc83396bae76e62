"""Launcher item type detection from a path (pattern only, no filesystem access)."""

from __future__ import annotations

import ntpath

from launcher_sync.domain.editing import LauncherItemType

__all__ = ["detect_item_type"]

EXECUTABLE_EXTENSIONS = frozenset({".exe", ".bat", ".cmd", ".com", ".lnk"})
STANDARD_URL_SCHEMES = frozenset({"http", "https", "ftp"})


def detect_item_type(path: str) -> LauncherItemType:
    if "://" in path:
        scheme = path.split("://", 1)[0]
        return "url" if scheme in STANDARD_URL_SCHEMES else "customUri"
    if path.startswith("shell:"):
        return "folder"
    if path.endswith(("/", "\\")):
        return "folder"
    # ntpath splits on both separators, data files are written on Windows
    ext = ntpath.splitext(path)[1].lower()
    if ext in EXECUTABLE_EXTENSIONS:
        return "app"
    if not ext:
        return "folder"
    return "file"
