# -*- encoding: utf-8 -*-
# @File   : resolver.py
# @Time   : 2026/10/17 13:15:48

"""`${...}` substitution.

A reference is `${option}` (current section) or `${section.option}`;
the first dot splits section from option, so `${system.user.home}`
means option `user.home` of `system`. Lookups only see what the store
holds *right now*, which is what forbids forward references (and with
them, cycles).

Substitution is single pass: a substituted value is never rescanned.
`\\$` gives a literal `$`.
"""

import logging
from collections.abc import Callable
from re import Match
from re import compile as regex

from ..consts import VARIABLE_NAME
from ..exceptions import (
    NoSuchOptionException,
    NoSuchSectionException,
    SubstitutionException
)
from .model import Configuration

logger = logging.getLogger(__name__)

_REFERENCE = regex(rf'\\\$|\$\{{({VARIABLE_NAME})\}}')


def substitute(s: str, resolve: Callable[[str], str]) -> str:
    def _sub(m: Match[str]) -> str:
        return '$' if m.group(1) is None else resolve(m.group(1))
    return _REFERENCE.sub(_sub, s)


def resolve_reference(
    store: Configuration, current_section: str, ref: str
) -> str:
    if '.' in ref:
        section, _, option = ref.partition('.')
    else:
        section, option = current_section, ref
    try:
        return store.option(section, option)
    except NoSuchSectionException:
        raise SubstitutionException(
            current_section, ref,
            f'reference to nonexistent section "{section}"') from None
    except NoSuchOptionException:
        raise SubstitutionException(
            current_section, ref,
            f'reference to nonexistent option "{option}" '
            f'in section "{section}"') from None


class VariableResolver:
    """Binds `resolve_reference()` to one store and the safe flag.

    In safe mode an unresolvable reference becomes `''` (and a warning
    in the log) instead of a `SubstitutionException`.
    """
    def __init__(self, store: Configuration, safe: bool = False) -> None:
        self._store = store
        self._safe = safe

    def resolve(self, current_section: str, ref: str) -> str:
        try:
            return resolve_reference(self._store, current_section, ref)
        except SubstitutionException as e:
            if not self._safe:
                raise
            logger.warning('%s (substituting an empty value)', e)
            return ''

    def substitute(self, current_section: str, value: str) -> str:
        return substitute(
            value, lambda ref: self.resolve(current_section, ref))
