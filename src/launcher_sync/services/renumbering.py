"""Contiguous per-file line numbering.

Every structural operation (add, delete, duplicate, move, sort) ends with
:func:`renumber`, so at rest each file's lines are numbered ``1..N``.
"""

from __future__ import annotations

from typing import Dict, Iterable, List

from launcher_sync.domain.models import RawLine

__all__ = ["group_by_file", "renumber"]


def group_by_file(lines: Iterable[RawLine]) -> Dict[str, List[RawLine]]:
    """Group lines by ``source_file``.

    Files appear in order of first appearance; lines keep their input order
    inside each group.
    """
    groups: Dict[str, List[RawLine]] = {}
    for line in lines:
        groups.setdefault(line.source_file, []).append(line)
    return groups


def renumber(lines: Iterable[RawLine]) -> List[RawLine]:
    """Return the lines grouped by file with ``line_number`` = position + 1.

    Only ``line_number`` changes; applying it twice gives the same result.
    """
    result: List[RawLine] = []
    for group in group_by_file(lines).values():
        result.extend(line.with_number(index + 1) for index, line in enumerate(group))
    return result
