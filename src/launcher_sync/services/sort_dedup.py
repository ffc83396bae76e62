"""Sorting and duplicate removal over a subset of data files.

Sorting and removal are split in two steps so the UI can ask for
confirmation in between::

    plan = plan_sort_and_dedup(lines, {"data2.json"})
    if plan.duplicate_count and not confirm(plan.duplicate_count):
        result = apply_plan(plan, remove_duplicates=False)
    else:
        result = apply_plan(plan)

Lines of files outside the scope pass through untouched. The result keeps
the files in the order they first appeared in the input, then renumbers.
"""

from __future__ import annotations

import locale
from dataclasses import dataclass
from typing import Callable, Collection, Iterable, List, Sequence, Set, Tuple

from launcher_sync.config import settings
from launcher_sync.domain.models import LineType, RawLine
from launcher_sync.services.renumbering import group_by_file, renumber
from launcher_sync.utils.csv_fields import parse_csv_line

__all__ = [
    "SortKey",
    "SortDedupPlan",
    "LINE_SORT_KEYS",
    "type_rank",
    "path_and_args",
    "line_name",
    "dedup_key",
    "multi_key_sort",
    "plan_sort_and_dedup",
    "apply_plan",
]

_TYPE_RANK = {
    LineType.DIRECTIVE: 0,
    LineType.ITEM: 1,
    LineType.COMMENT: 2,
    LineType.EMPTY: 3,
}
_UNKNOWN_RANK = 99


@dataclass(frozen=True)
class SortKey:
    key_func: Callable[[RawLine], object]
    ascending: bool = True


def multi_key_sort(lines: Iterable[RawLine], keys: Sequence[SortKey]) -> List[RawLine]:
    # Apply from lowest precedence to highest; list.sort is stable
    result = list(lines)
    for sk in reversed(keys):
        result.sort(key=sk.key_func, reverse=not sk.ascending)
    return result


def _collation_key(text: str) -> str:
    return locale.strxfrm(text.casefold())


def type_rank(line: RawLine) -> int:
    return _TYPE_RANK.get(line.type, _UNKNOWN_RANK)


def path_and_args(line: RawLine) -> str:
    """Text compared on the second key: the path plus its arguments."""
    if line.type is LineType.ITEM:
        parts = parse_csv_line(line.content)
        if len(parts) < 2:
            return line.content
        if len(parts) > 2 and parts[2]:
            return f"{parts[1]} {parts[2]}"
        return parts[1]
    if line.type is LineType.DIRECTIVE:
        parts = parse_csv_line(line.content)
        if len(parts) < 2:
            return line.content
        if len(parts) > 2:
            return f"{parts[1]} {','.join(parts[2:])}"
        return parts[1]
    return line.content or settings.EMPTY_LINE_PLACEHOLDER


def line_name(line: RawLine) -> str:
    if line.type is not LineType.ITEM:
        return ""
    parts = parse_csv_line(line.content)
    return parts[0] if parts else ""


def dedup_key(line: RawLine) -> Tuple[str, str]:
    return (line.type.value, line.content)


LINE_SORT_KEYS: Tuple[SortKey, ...] = (
    SortKey(type_rank),
    SortKey(lambda line: _collation_key(path_and_args(line))),
    SortKey(lambda line: _collation_key(line_name(line))),
)


@dataclass(frozen=True, slots=True)
class SortDedupPlan:
    scope_files: frozenset[str]
    passthrough: Tuple[RawLine, ...]
    sorted_scope: Tuple[RawLine, ...]
    deduplicated_scope: Tuple[RawLine, ...]
    # files in order of first appearance in the planned lines
    file_order: Tuple[str, ...] = ()

    @property
    def duplicate_count(self) -> int:
        return len(self.sorted_scope) - len(self.deduplicated_scope)

    @property
    def duplicates(self) -> Tuple[RawLine, ...]:
        kept = {id(line) for line in self.deduplicated_scope}
        return tuple(line for line in self.sorted_scope if id(line) not in kept)


def plan_sort_and_dedup(lines: Iterable[RawLine], scope_files: Collection[str]) -> SortDedupPlan:
    """Sort the in-scope lines and find duplicates without removing anything."""
    scope = frozenset(scope_files)
    all_lines = list(lines)
    passthrough: List[RawLine] = []
    in_scope: List[RawLine] = []
    for line in all_lines:
        (in_scope if line.source_file in scope else passthrough).append(line)

    ordered = multi_key_sort(in_scope, LINE_SORT_KEYS)
    seen: Set[Tuple[str, str]] = set()
    unique: List[RawLine] = []
    for line in ordered:
        key = dedup_key(line)
        if key in seen:
            continue
        seen.add(key)
        unique.append(line)
    return SortDedupPlan(
        scope_files=scope,
        passthrough=tuple(passthrough),
        sorted_scope=tuple(ordered),
        deduplicated_scope=tuple(unique),
        file_order=tuple(group_by_file(all_lines)),
    )


def apply_plan(plan: SortDedupPlan, remove_duplicates: bool = True) -> List[RawLine]:
    processed = plan.deduplicated_scope if remove_duplicates else plan.sorted_scope
    groups = group_by_file([*plan.passthrough, *processed])
    order = plan.file_order or tuple(groups)
    return renumber(line for name in order for line in groups.get(name, ()))
