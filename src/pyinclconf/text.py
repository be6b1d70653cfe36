# -*- encoding: utf-8 -*-
# @File   : text.py
# @Time   : 2026/10/17 12:02:51

from re import Match
from re import compile as regex

from .consts import FALSE_LITERALS, INT_LITERAL, TRUE_LITERALS

_METACHAR = regex(r'\\(u[0-9a-fA-F]{4}|[tnr\\ ])')
_METACHAR_MAP = {'t': '\t', 'n': '\n', 'r': '\r', '\\': '\\', ' ': ' '}


def _metachar(m: Match[str]) -> str:
    seq = m.group(1)
    if seq[0] == 'u':
        return chr(int(seq[1:], 16))
    return _METACHAR_MAP[seq]


def translate_metachars(s: str) -> str:
    """Expand `\\t \\n \\r \\\\ \\<space> \\uXXXX`.

    Unknown sequences (`\\a`, `\\u12x`, `\\$`...) are kept verbatim.
    """
    return _METACHAR.sub(_metachar, s)


def str_to_bool(s: str) -> bool:
    """Raises `ValueError` if `s` is not a boolean literal."""
    match s.strip().lower():
        case i if i in TRUE_LITERALS:
            return True
        case i if i in FALSE_LITERALS:
            return False
        case _:
            raise ValueError(f'Can\'t convert "{s}" to boolean.')


def str_to_int(s: str) -> int:
    """Like `int()`, but only plain decimal digits with an optional sign
    (no `_`). Surrounding blanks are ignored, as in `str_to_bool()`."""
    if INT_LITERAL.fullmatch(i := s.strip()) is None:
        raise ValueError(f'Can\'t convert "{s}" to integer.')
    return int(i)
