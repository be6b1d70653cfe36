# -*- encoding: utf-8 -*-
# @File   : model.py
# @Time   : 2026/10/17 12:40:14

"""
The in-memory configuration: sections of (option -> string value).

Writes are strict (`add_section()`, `add_option()` validate everything),
reads are tolerant (`get()`, `options()` never raise for a missing
section or option). Typed accessors convert on every access, so a bad
literal is only an error for whoever asks for it as a number/boolean.
"""

import os
from collections.abc import Callable, Iterator, Mapping
from io import TextIOBase
from os import PathLike
from re import Pattern
from re import compile as regex

from ..consts import LIST_SEPARATORS, RESERVED_SECTIONS, PseudoSection
from ..exceptions import (
    ConfigException,
    ConversionException,
    DuplicateOptionException,
    DuplicateSectionException,
    NoSuchOptionException,
    NoSuchSectionException
)
from ..properties import get_property
from ..text import str_to_bool, str_to_int

OptionNormalizer = Callable[[str], str]
# (section, option) -> value, or None when it has nothing either.
NotFoundHook = Callable[[str, str], str | None]
PredefinedSections = Mapping[str, Mapping[str, str]]


class Section(Mapping[str, str]):
    """Read-only view of one section's options.

    Lookups go through the owning configuration's option normalizer,
    so `section['Foo']` finds `foo` by default.
    """
    def __init__(
        self, name: str, options: dict[str, str],
        normalize: OptionNormalizer = str.lower
    ) -> None:
        self._name = name
        self._data = options
        self._normalize = normalize

    @property
    def name(self) -> str:
        return self._name

    def __getitem__(self, key: str) -> str:
        return self._data[self._normalize(key)]

    def __contains__(self, key: object) -> bool:
        return isinstance(key, str) and self._normalize(key) in self._data

    def __iter__(self) -> Iterator[str]:
        return iter(self._data)

    def __len__(self) -> int:
        return len(self._data)

    def __str__(self) -> str:
        return f'[{self._name}]'

    def __repr__(self) -> str:
        return '[%s] { .cnt = %d }' % (self._name, len(self._data))

    def to_dict(self) -> dict[str, str]:
        return self._data.copy()


class Configuration(Mapping[str, Section]):
    """Ordered `section name -> Section` mapping.

    Predefined sections are added first, raw (no substitution), exactly
    as if they preceded the parsed text. `env` and `system` are never
    stored, but `get()` & co. read them from `os.environ` and
    `pyinclconf.properties`.

    `not_found` is asked last, whenever a lookup finds nothing.
    """
    def __init__(
        self,
        predefined: PredefinedSections | None = None, *,
        normalize_option: OptionNormalizer = str.lower,
        not_found: NotFoundHook | None = None
    ) -> None:
        self.__sections: dict[str, dict[str, str]] = {}
        self.__normalize = normalize_option
        self.__not_found = not_found
        if predefined:
            self.add_sections(predefined)

    # ----- Mapping protocol

    def __getitem__(self, key: str) -> Section:
        return Section(key, self.__sections[key], self.__normalize)

    def __contains__(self, key: object) -> bool:
        return key in self.__sections

    def __iter__(self) -> Iterator[str]:
        return iter(self.__sections)

    def __len__(self) -> int:
        return len(self.__sections)

    def __repr__(self) -> str:
        return f'<Configuration {list(self.__sections)}>'

    # ----- writes

    def transform_option_name(self, option_name: str) -> str:
        return self.__normalize(option_name)

    def add_section(self, section_name: str) -> None:
        if section_name in self.__sections or \
                section_name in RESERVED_SECTIONS:
            raise DuplicateSectionException(section_name)
        self.__sections[section_name] = {}

    def add_sections(self, sections: PredefinedSections) -> None:
        for name, options in sections.items():
            self.add_section(name)
            for k, v in options.items():
                self.add_option(name, k, v)

    def __writable(self, section_name: str) -> dict[str, str]:
        if section_name in RESERVED_SECTIONS:
            raise ConfigException(
                'Can\'t add an option to read-only section '
                f'"{section_name}"')
        if section_name not in self.__sections:
            raise NoSuchSectionException(section_name)
        return self.__sections[section_name]

    def add_option(
        self, section_name: str, option_name: str, value: str
    ) -> None:
        options = self.__writable(section_name)
        key = self.__normalize(option_name)
        if key in options:
            raise DuplicateOptionException(section_name, option_name)
        options[key] = value

    def set_option(
        self, section_name: str, option_name: str, value: str
    ) -> None:
        """Like `add_option()`, but overwrites an existing value."""
        self.__writable(section_name)[self.__normalize(option_name)] = value

    # ----- reads

    def has_section(self, section_name: str) -> bool:
        return section_name in self.__sections

    def section_names(self) -> list[str]:
        return list(self.__sections)

    def option_names(self, section_name: str) -> list[str]:
        return list(self.options(section_name))

    def options(self, section_name: str) -> dict[str, str]:
        """A copy of the section's options; `{}` for unknown sections,
        including `env` and `system`."""
        return self.__sections.get(section_name, {}).copy()

    def option(self, section_name: str, option_name: str) -> str:
        """Strict lookup.

        Raises `NoSuchSectionException` or `NoSuchOptionException`
        unless the `not_found` hook supplies a value.
        """
        known = True
        match section_name:
            case PseudoSection.ENV:
                value = os.environ.get(option_name)
            case PseudoSection.SYSTEM:
                value = get_property(option_name)
            case _ if section_name not in self.__sections:
                known, value = False, None
            case _:
                value = self.__sections[section_name].get(
                    self.__normalize(option_name))
        if value is None and self.__not_found is not None:
            value = self.__not_found(section_name, option_name)
        if value is not None:
            return value
        if not known:
            raise NoSuchSectionException(section_name)
        raise NoSuchOptionException(section_name, option_name)

    def get(
        self, section_name: str, option_name: str | None = None,
        default: str | None = None
    ) -> str | Section | None:
        """`get(section, option)` returns the value or `None`.

        For `Mapping` compatibility, `get(section)` returns the `Section`.
        """
        if option_name is None:
            return super().get(section_name, default)
        try:
            return self.option(section_name, option_name)
        except (NoSuchSectionException, NoSuchOptionException):
            return default

    def get_or_else(
        self, section_name: str, option_name: str, default: str
    ) -> str:
        value = self.get(section_name, option_name)
        return default if value is None else value

    def get_int(self, section_name: str, option_name: str) -> int | None:
        """Raises `ConversionException` if the value isn't an integer."""
        if (value := self.get(section_name, option_name)) is None:
            return None
        try:
            return str_to_int(value)
        except ValueError:
            raise ConversionException(
                section_name, option_name, value, 'integer') from None

    def get_int_or_else(
        self, section_name: str, option_name: str, default: int
    ) -> int:
        value = self.get_int(section_name, option_name)
        return default if value is None else value

    def get_boolean(
        self, section_name: str, option_name: str
    ) -> bool | None:
        """Accepts `true/t/yes/y/1/on` and `false/f/no/n/0/off`, in any
        case. Raises `ConversionException` for anything else."""
        if (value := self.get(section_name, option_name)) is None:
            return None
        try:
            return str_to_bool(value)
        except ValueError:
            raise ConversionException(
                section_name, option_name, value, 'boolean') from None

    def get_boolean_or_else(
        self, section_name: str, option_name: str, default: bool
    ) -> bool:
        value = self.get_boolean(section_name, option_name)
        return default if value is None else value

    def get_list(
        self, section_name: str, option_name: str,
        separators: str | Pattern[str] = LIST_SEPARATORS
    ) -> list[str] | None:
        """Split a value on blanks and commas (by default), dropping
        empty pieces."""
        if (value := self.get(section_name, option_name)) is None:
            return None
        if isinstance(separators, str):
            separators = regex(separators)
        return [i for i in separators.split(value) if i]

    def matching_sections(self, pattern: str | Pattern[str]) -> list[Section]:
        """Sections whose name *contains* a match for `pattern`."""
        if isinstance(pattern, str):
            pattern = regex(pattern)
        return [self[i] for i in self.__sections if pattern.search(i)]

    def for_matching_sections(
        self, pattern: str | Pattern[str], func: Callable[[Section], None]
    ) -> None:
        for i in self.matching_sections(pattern):
            func(i)

    # ----- whole-store operations

    def copy(self) -> 'Configuration':
        ret = Configuration(
            normalize_option=self.__normalize, not_found=self.__not_found)
        ret.__sections = {k: v.copy() for k, v in self.__sections.items()}
        return ret

    def load(
        self,
        source: str | PathLike[str] | TextIOBase,
        safe: bool = False,
        **kwargs
    ) -> 'Configuration':
        """Parse `source` on top of what's already here.

        All or nothing: the text is parsed into a copy, which replaces
        the current contents only if parsing succeeds.
        """
        from .parser import ConfigParser

        staged = self.copy()
        ConfigParser(
            source, safe=safe, normalize_option=self.__normalize, **kwargs
        ).load(staged, source)
        self.__sections = staged.__sections
        return self
