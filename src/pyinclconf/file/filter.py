# -*- encoding: utf-8 -*-
# @File   : filter.py
# @Time   : 2026/10/17 11:40:26

from collections.abc import Iterable, Iterator

from .includer import chomp


def trailing_backslashes(line: str) -> int:
    return len(line) - len(line.rstrip('\\'))


class BackslashContinuedLines(Iterator[str]):
    """Join physical lines ending with a continuation backslash.

    An odd count of trailing backslashes continues the line; an even one
    (zero included) does not. Either way each trailing *pair* stands
    for one literal backslash:

        'a\\'   + 'b' -> 'ab'
        'a\\\\' + 'b' -> 'a\\', 'b'
        'a\\\\\\' + 'b' -> 'a\\b'

    No separator is inserted between joined pieces. Input left hanging
    at the end (last line continued) is flushed as is.
    """
    def __init__(self, source: Iterable[str]) -> None:
        self._source = iter(source)

    def __next__(self) -> str:
        buf: list[str] = []
        for i in self._source:
            i = chomp(i)
            cnt = trailing_backslashes(i)
            buf.append(i[:len(i) - cnt] + '\\' * (cnt >> 1))
            if cnt % 2 == 0:
                return ''.join(buf)
        if buf:
            return ''.join(buf)
        raise StopIteration
