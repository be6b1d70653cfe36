# -*- encoding: utf-8 -*-
# @File   : consts.py
# @Time   : 2026/10/17 10:20:05

from enum import Enum
from re import compile as regex


class PseudoSection(str, Enum):
    ENV = 'env'
    SYSTEM = 'system'


RESERVED_SECTIONS = frozenset(i.value for i in PseudoSection)

SECTION_NAME = r'[A-Za-z0-9_]+'
VARIABLE_NAME = r'[A-Za-z0-9_.]+'

DEFAULT_COMMENT = regex(r'^\s*#.*$')
DEFAULT_INCLUDE = regex(r'^%include\s+"([^"]+)"\s*$')
DEFAULT_MAX_NESTING = 100

BLANK_LINE = regex(r'^\s*$')
BAD_SECTION_FORMAT = regex(r'^\s*(\[[^\]]*)$')
BAD_SECTION_NAME = regex(r'^\s*\[(.*)\]\s*$')
RAW_ASSIGNMENT = regex(rf'^\s*({VARIABLE_NAME})\s*->\s*(.*)$')
ASSIGNMENT = regex(rf'^\s*({VARIABLE_NAME})\s*[:=]\s*(.*)$')

# schemes `Includer` treats as "already a URL".
URL_SCHEMES = ('http', 'https', 'file')
DEFAULT_TIMEOUT = 30.0

# probably a bit more than people do expect.
TRUE_LITERALS = frozenset(('true', 't', 'yes', 'y', '1', 'on'))
FALSE_LITERALS = frozenset(('false', 'f', 'no', 'n', '0', 'off'))
INT_LITERAL = regex(r'^[+-]?[0-9]+$')
LIST_SEPARATORS = regex(r'[\s,]+')
