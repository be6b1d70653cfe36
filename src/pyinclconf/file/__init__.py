# -*- encoding: utf-8 -*-
# @File   : __init__.py
# @Time   : 2026/10/17 11:44:02

from .filter import BackslashContinuedLines
from .includer import IncludeFrame, Includer, resolve_include
from .source import (
    FileLineSource,
    StreamLineSource,
    UrlLineSource,
    decode_bytes,
    is_url,
    open_source
)
