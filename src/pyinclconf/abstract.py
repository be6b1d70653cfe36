# -*- encoding: utf-8 -*-
# @File   : abstract.py
# @Time   : 2026/10/17 10:31:52

from abc import ABCMeta, abstractmethod
from collections.abc import Iterator
from typing import Generic, Self, TypeVar
from urllib.parse import SplitResult

T = TypeVar('T')


class LineSource(Iterator[str], metaclass=ABCMeta):
    """An opened file or URL, yielding raw lines (separators kept).

    Must be closed exactly once; `close()` on a closed source is a no-op.
    """

    @property
    @abstractmethod
    def location(self) -> SplitResult:
        """Where the lines come from. Used to resolve relative includes."""
        raise NotImplementedError

    @abstractmethod
    def __next__(self) -> str:
        raise NotImplementedError

    @abstractmethod
    def close(self) -> None:
        raise NotImplementedError

    @property
    @abstractmethod
    def closed(self) -> bool:
        raise NotImplementedError

    def __enter__(self) -> Self:
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()


class SourceReader(Generic[T], metaclass=ABCMeta):
    def __init__(self, filename: str) -> None:
        self._fn = filename

    @abstractmethod
    def read(self) -> T:
        raise NotImplementedError

    def __str__(self) -> str:
        return self._fn
