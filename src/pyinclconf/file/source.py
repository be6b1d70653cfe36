# -*- encoding: utf-8 -*-
# @File   : source.py
# @Time   : 2026/10/17 10:48:17

"""Line sources: local files, remote URLs, and caller-owned streams.

Locations are kept as `urllib.parse.SplitResult`, so a relative include
can swap the path while scheme / host / query / fragment stay put.
A plain filesystem path is a location with an empty scheme.
"""

import logging
from io import StringIO, TextIOBase
from os import PathLike, fspath
from os.path import abspath
from urllib.parse import SplitResult, urlsplit, urlunsplit
from urllib.request import url2pathname

import chardet
import requests

from ..abstract import LineSource
from ..consts import DEFAULT_TIMEOUT, URL_SCHEMES

logger = logging.getLogger(__name__)


def is_url(target: str) -> bool:
    """Only absolute URLs of a scheme we can open count.
    Anything else (`C:\\foo`, `../bar.cfg`) is a file path."""
    try:
        parts = urlsplit(target)
    except ValueError:  # e.g. unbalanced `[` in an IPv6 host
        return False
    return parts.scheme.lower() in URL_SCHEMES and bool(
        parts.netloc or parts.path)


def to_location(target: str | PathLike[str]) -> SplitResult:
    target = fspath(target)
    if is_url(target):
        return urlsplit(target)
    return SplitResult('', '', abspath(target), '', '')


def location_str(location: SplitResult) -> str:
    return location.path if not location.scheme else urlunsplit(location)


def decode_bytes(raw: bytes, encoding: str | None = None) -> str:
    """Decode with `encoding` if given, otherwise guess it.

    Guessing goes `chardet` -> utf-8 (low confidence) -> gbk.
    """
    if encoding is not None:
        return raw.decode(encoding)

    codec = chardet.detect(raw)
    if codec['encoding'] is None or codec['confidence'] < 0.8:
        codec = {'encoding': 'utf-8'}

    # fallbacks
    try:
        return raw.decode(codec['encoding'])
    except UnicodeDecodeError:
        return raw.decode('gbk')


class _BufferedLineSource(LineSource):
    def __init__(self, location: SplitResult, buf: TextIOBase) -> None:
        self._location = location
        self._buf = buf

    @property
    def location(self) -> SplitResult:
        return self._location

    @property
    def closed(self) -> bool:
        return self._buf.closed

    def __next__(self) -> str:
        if self._buf.closed:
            raise StopIteration
        if not (i := self._buf.readline()):
            raise StopIteration
        return i

    def close(self) -> None:
        if not self._buf.closed:
            logger.debug('Closing %s', location_str(self._location))
            self._buf.close()

    def __str__(self) -> str:
        return location_str(self._location)


class FileLineSource(_BufferedLineSource):
    """A local file.

    With an explicit `encoding` the file is read lazily; without one
    the bytes are read at once and decoded by `decode_bytes()`.
    """
    def __init__(
        self, path: str | PathLike[str], encoding: str | None = None,
        location: SplitResult | None = None
    ) -> None:
        path = fspath(path)
        if location is None:
            location = SplitResult('', '', abspath(path), '', '')
        if encoding is not None:
            buf = open(path, 'r', encoding=encoding, newline='')
        else:
            with open(path, 'rb') as fp:
                raw = fp.read()
            buf = StringIO(decode_bytes(raw), newline='')
        super().__init__(location, buf)


class UrlLineSource(_BufferedLineSource):
    """A remote resource, fetched with `requests`.

    HTTP errors surface as `requests.HTTPError`; the body is decoded
    with the declared charset if there is one, else guessed.
    """
    def __init__(
        self, url: str | SplitResult, encoding: str | None = None,
        timeout: float = DEFAULT_TIMEOUT
    ) -> None:
        location = url if isinstance(url, SplitResult) else urlsplit(url)
        self._response = requests.get(urlunsplit(location), timeout=timeout)
        try:
            self._response.raise_for_status()
            if (
                encoding is None
                and 'charset' in self._response.headers.get('content-type', '')
            ):
                encoding = self._response.encoding
            text = decode_bytes(self._response.content, encoding)
        except BaseException:
            self._response.close()
            raise
        super().__init__(location, StringIO(text, newline=''))

    def close(self) -> None:
        if not self.closed:
            self._response.close()
        super().close()


class StreamLineSource(LineSource):
    """Wraps an already-open text stream owned by the caller.

    `close()` only detaches, the stream itself is left open.
    Relative includes are resolved against the working directory.
    """
    def __init__(
        self, buf: TextIOBase, location: SplitResult | None = None
    ) -> None:
        self._buf = buf
        self._location = location or SplitResult('', '', '.', '', '')
        self._detached = False

    @property
    def location(self) -> SplitResult:
        return self._location

    @property
    def closed(self) -> bool:
        return self._detached

    def __next__(self) -> str:
        if self._detached or not (i := self._buf.readline()):
            raise StopIteration
        return i

    def close(self) -> None:
        self._detached = True

    def __str__(self) -> str:
        return '<stream>'


def open_location(
    location: SplitResult, encoding: str | None = None,
    timeout: float = DEFAULT_TIMEOUT
) -> LineSource:
    match location.scheme.lower():
        case '':
            return FileLineSource(location.path, encoding, location)
        case 'file':
            return FileLineSource(
                url2pathname(location.path), encoding, location)
        case _:
            return UrlLineSource(location, encoding, timeout)


def open_source(
    target: str | PathLike[str] | TextIOBase | LineSource,
    encoding: str | None = None,
    timeout: float = DEFAULT_TIMEOUT
) -> LineSource:
    """Open a path, a URL, or wrap a stream, as a `LineSource`."""
    if isinstance(target, LineSource):
        return target
    if isinstance(target, TextIOBase):
        return StreamLineSource(target)
    return open_location(to_location(target), encoding, timeout)
