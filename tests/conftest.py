"""Shared fixtures for pyinclconf tests."""

from pathlib import Path

import pytest

from pyinclconf import properties


@pytest.fixture
def write_cfg(tmp_path):
    """Write a text file under tmp_path, creating parent directories."""
    def _write(name: str, text: str, encoding: str = 'utf-8') -> Path:
        path = tmp_path / name
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(text, encoding=encoding)
        return path
    return _write


@pytest.fixture
def clean_properties():
    """Give each test a fresh process property table."""
    properties._props = None
    yield properties
    properties._props = None


class FakeResponse:
    def __init__(self, url: str, text: str | None, charset: str | None = None):
        self.url = url
        self.status_code = 200 if text is not None else 404
        self.content = (text or '').encode(charset or 'utf-8')
        self.headers = {
            'content-type':
                f'text/plain; charset={charset}' if charset else 'text/plain'
        }
        self.encoding = charset
        self.closed = False

    def raise_for_status(self) -> None:
        import requests
        if self.status_code >= 400:
            raise requests.HTTPError(f'{self.status_code} for {self.url}')

    def close(self) -> None:
        self.closed = True


@pytest.fixture
def fake_http(monkeypatch):
    """Serve `pages` (url -> text) instead of going to the network.

    Returns the dict of pages; a value may also be a `(text, charset)`
    pair. Requested URLs are collected in `pages.requested`, the
    `timeout` each request was made with in `pages.timeouts`.
    """
    import requests

    class Pages(dict):
        requested: list[str]
        timeouts: list[float | None]

    pages = Pages()
    pages.requested = []
    pages.timeouts = []

    def fake_get(url, timeout=None, **kwargs):
        pages.requested.append(url)
        pages.timeouts.append(timeout)
        page = pages.get(url)
        if isinstance(page, tuple):
            return FakeResponse(url, *page)
        return FakeResponse(url, page)

    monkeypatch.setattr(requests, 'get', fake_get)
    return pages
