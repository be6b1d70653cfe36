# -*- encoding: utf-8 -*-
# @File   : includer.py
# @Time   : 2026/10/17 11:05:33

"""Process "include" directives, flattening nested sources into one
stream of lines.

Any line *fully* matching the include pattern is a directive; the
pattern's only capture group is the target. With the default pattern:

    %include "/absolute/path/to/file"
    %include "../relative/path/to/file"
    %include "local_reference"
    %include "http://localhost/path/to/my.cfg"

A relative target is resolved against the *directory* of whichever
source contains the directive, so `bar.cfg` included from
`http://host/cfg/foo.cfg` means `http://host/cfg/bar.cfg`.

注：include cycles are NOT detected, they just run into `max_nesting`.
"""

import logging
import posixpath
from collections.abc import Iterator
from dataclasses import dataclass
from io import TextIOBase
from os import PathLike, unlink
from os.path import dirname, isabs, join
from re import Pattern
from re import compile as regex
from tempfile import NamedTemporaryFile
from typing import Self
from urllib.parse import SplitResult, urlsplit

from ..abstract import LineSource
from ..consts import DEFAULT_INCLUDE, DEFAULT_MAX_NESTING, DEFAULT_TIMEOUT
from ..exceptions import IncludeNestingException
from .source import is_url, location_str, open_location, open_source

logger = logging.getLogger(__name__)

IncludeTarget = str | PathLike[str] | TextIOBase | LineSource


def chomp(line: str) -> str:
    """Strip ONE trailing line separator, whatever flavour it is."""
    if line.endswith('\r\n'):
        return line[:-2]
    if line.endswith(('\n', '\r')):
        return line[:-1]
    return line


def resolve_include(base: SplitResult, target: str) -> SplitResult:
    """Resolve a relative `target` against the directory of `base`.

    Only the path changes. An absolute path target keeps the rest of
    `base` (scheme, host...) but replaces its path entirely.
    """
    if not base.scheme:  # plain filesystem path
        if isabs(target):
            return base._replace(path=target)
        parent = dirname(base.path)
        return base._replace(path=join(parent, target) if parent else target)

    if target.startswith('/'):
        return base._replace(path=target)
    parent = posixpath.dirname(base.path)
    if parent.endswith('/'):
        return base._replace(path=f'{parent}{target}')
    return base._replace(path=f'{parent}/{target}')


@dataclass
class IncludeFrame:
    source: LineSource
    lineno: int = 0

    @property
    def location(self) -> SplitResult:
        return self.source.location


class Includer(Iterator[str]):
    """Iterate over the lines of `source` with every include expanded.

    Use it as a context manager (or call `close()`); every source
    still open is then closed, whether or not the iteration finished.
    """
    def __init__(
        self,
        source: IncludeTarget,
        include_pattern: str | Pattern[str] = DEFAULT_INCLUDE,
        max_nesting: int = DEFAULT_MAX_NESTING, *,
        encoding: str | None = None,
        timeout: float = DEFAULT_TIMEOUT
    ) -> None:
        if isinstance(include_pattern, str):
            include_pattern = regex(include_pattern)
        if include_pattern.groups != 1:
            raise ValueError(
                'include pattern must have exactly one capture group, '
                f'got {include_pattern.groups}: {include_pattern.pattern!r}')
        if max_nesting < 1:
            raise ValueError(f'max_nesting must be positive: {max_nesting}')

        self._pattern = include_pattern
        self._max_nesting = max_nesting
        self._codec = encoding
        self._timeout = timeout
        # the bottom is the root source, the top is the one being read.
        self._stack: list[IncludeFrame] = [
            IncludeFrame(open_source(source, encoding, timeout))]
        logger.debug('Opened root source %s', self.location)

    @property
    def depth(self) -> int:
        return len(self._stack)

    @property
    def location(self) -> str | None:
        """The source currently being read, if any."""
        if not self._stack:
            return None
        return str(self._stack[-1].source)

    @property
    def lineno(self) -> int | None:
        """The physical line number last read from `self.location`."""
        if not self._stack:
            return None
        return self._stack[-1].lineno

    def __next__(self) -> str:
        while self._stack:
            frame = self._stack[-1]
            try:
                line = next(frame.source)
            except StopIteration:
                self._pop()
                continue
            frame.lineno += 1
            line = chomp(line)
            if (m := self._pattern.fullmatch(line)) is None:
                return line
            self._push(m.group(1))
        raise StopIteration

    def _push(self, target: str) -> None:
        if len(self._stack) >= self._max_nesting:
            raise IncludeNestingException(
                f'Max nesting level ({self._max_nesting}) exceeded '
                f'while including "{target}".',
                self.location, self.lineno)

        location = (
            urlsplit(target) if is_url(target)
            else resolve_include(self._stack[-1].location, target)
        )
        self._stack.append(IncludeFrame(
            open_location(location, self._codec, self._timeout)))
        logger.debug(
            'Included %s (depth %d)', location_str(location), self.depth)

    def _pop(self) -> None:
        frame = self._stack.pop()
        frame.source.close()
        logger.debug(
            'Finished %s after %d lines',
            location_str(frame.location), frame.lineno)

    def close(self) -> None:
        while self._stack:
            self._pop()

    def __enter__(self) -> Self:
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    @classmethod
    def preprocess(
        cls,
        source: str | PathLike[str],
        prefix: str = 'pyinclconf',
        suffix: str = '.cfg',
        **kwargs
    ) -> str:
        """Write `source`, includes expanded, to a temporary file.

        Returns the temporary file's path; the caller owns (and should
        remove) it.
        """
        with NamedTemporaryFile(
            'w', prefix=prefix, suffix=suffix,
            encoding='utf-8', delete=False
        ) as fp:
            try:
                with cls(source, **kwargs) as includer:
                    for i in includer:
                        fp.write(f'{i}\n')
            except BaseException:
                fp.close()
                unlink(fp.name)
                raise
        return fp.name
