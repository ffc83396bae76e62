"""CSV field helpers for line content.

Only fields that *start* with a double quote follow the quoting rules; a
quote in the middle of an unquoted field is kept verbatim, which is how
hand-written data files have always been read.
"""

from __future__ import annotations

from typing import Iterable, List

__all__ = ["escape_csv_field", "parse_csv_line", "join_csv_fields"]


def escape_csv_field(value: str) -> str:
    if '"' in value or "," in value:
        return '"' + value.replace('"', '""') + '"'
    return value


def join_csv_fields(values: Iterable[str]) -> str:
    return ",".join(escape_csv_field(v) for v in values)


def parse_csv_line(line: str) -> List[str]:
    r'''Split ``line`` into trimmed fields.

    >>> parse_csv_line('"Company ""X""",path,exe')
    ['Company "X"', 'path', 'exe']
    '''
    result: List[str] = []
    current: List[str] = []
    in_quotes = False
    starts_with_quote = False
    i = 0
    n = len(line)
    while i < n:
        char = line[i]
        if not current and not in_quotes and char not in (" ", "\t"):
            starts_with_quote = char == '"'
        if char == '"' and starts_with_quote:
            if in_quotes and i + 1 < n and line[i + 1] == '"':
                current.append('"')
                i += 2
                continue
            in_quotes = not in_quotes
            i += 1
        elif char == "," and not in_quotes:
            result.append("".join(current).strip())
            current = []
            starts_with_quote = False
            i += 1
        else:
            current.append(char)
            i += 1
    if current or in_quotes:
        result.append("".join(current).strip())
    return result
