# -*- encoding: utf-8 -*-
# @File   : parser.py
# @Time   : 2026/10/17 13:42:09

"""Configuration text -> `Configuration`.

    # comment
    [section]
    option = value with ${other_option} and ${section2.option}
    option2: \\ttabbed, \\u2122
    raw -> ${not substituted}, \\t kept
    long = first part \\
           second part
    %include "more.cfg"

Lines go through `Includer`, then `BackslashContinuedLines`, then get
classified one by one. The first error aborts the whole parse.
"""

import logging
from collections.abc import Callable
from enum import Enum
from io import TextIOBase
from os import PathLike, fspath
from re import Pattern
from re import compile as regex
from typing import NamedTuple

from ..abstract import SourceReader
from ..consts import (
    ASSIGNMENT,
    BAD_SECTION_FORMAT,
    BAD_SECTION_NAME,
    BLANK_LINE,
    DEFAULT_COMMENT,
    DEFAULT_INCLUDE,
    DEFAULT_MAX_NESTING,
    DEFAULT_TIMEOUT,
    RAW_ASSIGNMENT,
    SECTION_NAME
)
from ..exceptions import (
    AssignmentOutsideSectionException,
    ConfigException,
    ConfigParseException,
    SectionFormatException,
    SectionNameException,
    UnrecognizedLineException
)
from ..file import BackslashContinuedLines, Includer
from ..text import translate_metachars
from .model import Configuration, NotFoundHook, PredefinedSections
from .resolver import VariableResolver

logger = logging.getLogger(__name__)

ConfigSource = str | PathLike[str] | TextIOBase


class LineKind(Enum):
    COMMENT = 'comment'
    BLANK = 'blank'
    SECTION = 'section'
    BAD_SECTION_FORMAT = 'bad section format'
    BAD_SECTION_NAME = 'bad section name'
    RAW_ASSIGNMENT = 'raw assignment'
    ASSIGNMENT = 'assignment'
    UNRECOGNIZED = 'unrecognized'


class ParsedLine(NamedTuple):
    kind: LineKind
    text: str
    name: str | None = None  # section or option name
    value: str | None = None


class LineClassifier:
    """Ordered checks; the first pattern that fully matches wins."""
    def __init__(
        self,
        comment_pattern: str | Pattern[str] = DEFAULT_COMMENT,
        section_name_pattern: str | Pattern[str] = SECTION_NAME
    ) -> None:
        if isinstance(comment_pattern, str):
            comment_pattern = regex(comment_pattern)
        if isinstance(section_name_pattern, Pattern):
            section_name_pattern = section_name_pattern.pattern
        self._comment = comment_pattern
        self._section = regex(rf'^\s*\[({section_name_pattern})\]\s*$')

    def classify(self, line: str) -> ParsedLine:
        if self._comment.fullmatch(line):
            return ParsedLine(LineKind.COMMENT, line)
        if BLANK_LINE.fullmatch(line):
            return ParsedLine(LineKind.BLANK, line)
        if m := self._section.fullmatch(line):
            return ParsedLine(LineKind.SECTION, line, m.group(1))
        if m := BAD_SECTION_FORMAT.fullmatch(line):
            return ParsedLine(LineKind.BAD_SECTION_FORMAT, line, m.group(1))
        if m := BAD_SECTION_NAME.fullmatch(line):
            return ParsedLine(LineKind.BAD_SECTION_NAME, line, m.group(1))
        if m := RAW_ASSIGNMENT.fullmatch(line):
            return ParsedLine(LineKind.RAW_ASSIGNMENT, line, *m.groups())
        if m := ASSIGNMENT.fullmatch(line):
            return ParsedLine(LineKind.ASSIGNMENT, line, *m.groups())
        return ParsedLine(LineKind.UNRECOGNIZED, line)


class ConfigParser(SourceReader[Configuration]):
    def __init__(
        self,
        source: ConfigSource,
        encoding: str | None = None, *,
        safe: bool = False,
        predefined: PredefinedSections | None = None,
        include_pattern: str | Pattern[str] = DEFAULT_INCLUDE,
        max_nesting: int = DEFAULT_MAX_NESTING,
        comment_pattern: str | Pattern[str] = DEFAULT_COMMENT,
        section_name_pattern: str | Pattern[str] = SECTION_NAME,
        normalize_option: Callable[[str], str] = str.lower,
        not_found: NotFoundHook | None = None,
        timeout: float = DEFAULT_TIMEOUT
    ) -> None:
        """`encoding=None` means "guess it" (see `file.decode_bytes()`).

        `safe=True` turns unresolvable `${...}` into empty strings.
        `predefined` sections are added, raw, before any parsed text.
        `not_found(section, option)` is asked for anything a lookup
        misses, `${...}` references included.
        """
        super().__init__(
            '<stream>' if isinstance(source, TextIOBase) else fspath(source))
        self._source = source
        self._codec = encoding
        self._safe = safe
        self._predefined = predefined
        self._include = include_pattern
        self._max_nesting = max_nesting
        self._normalize = normalize_option
        self._not_found = not_found
        self._timeout = timeout
        self._classifier = LineClassifier(
            comment_pattern, section_name_pattern)

    def read(self) -> Configuration:
        return self.load(Configuration(
            self._predefined, normalize_option=self._normalize,
            not_found=self._not_found))

    def readstream(
        self, buf: TextIOBase, ins: Configuration | None = None
    ) -> Configuration:
        """Parse an already decoded text stream.

        如没有特殊需求，直接调用`self.read()`便是。
        """
        if ins is None:
            ins = Configuration(
                self._predefined, normalize_option=self._normalize,
                not_found=self._not_found)
        return self.load(ins, buf)

    def load(
        self, ins: Configuration, source: ConfigSource | None = None
    ) -> Configuration:
        """Parse into `ins` in place. `ins` is left half-filled if this
        raises; `Configuration.load()` is the all-or-nothing variant."""
        if source is None:
            source = self._source
        with Includer(
            source, self._include, self._max_nesting,
            encoding=self._codec, timeout=self._timeout
        ) as includer:
            logger.info('Parsing configuration from %s', includer.location)
            resolver = VariableResolver(ins, self._safe)
            current: str | None = None
            for i in BackslashContinuedLines(includer):
                try:
                    current = self.__process(
                        ins, resolver, current,
                        self._classifier.classify(i), includer)
                except ConfigParseException:
                    raise
                except ConfigException as e:
                    e.add_note(
                        f'at {includer.location}:{includer.lineno}: "{i}"')
                    raise
        return ins

    @staticmethod
    def __process(
        ins: Configuration,
        resolver: VariableResolver,
        current: str | None,
        line: ParsedLine,
        includer: Includer
    ) -> str | None:
        """Act on one logical line; returns the section open afterwards."""
        match line.kind:
            case LineKind.COMMENT | LineKind.BLANK:
                return current

            case LineKind.SECTION:
                ins.add_section(line.name)
                logger.debug('Section [%s]', line.name)
                return line.name

            case LineKind.BAD_SECTION_FORMAT:
                raise SectionFormatException(
                    f'Badly formatted section: "{line.name}"',
                    includer.location, includer.lineno)

            case LineKind.BAD_SECTION_NAME:
                raise SectionNameException(
                    f'Bad section name: "{line.name}"',
                    includer.location, includer.lineno)

            case LineKind.RAW_ASSIGNMENT | LineKind.ASSIGNMENT:
                if current is None:
                    raise AssignmentOutsideSectionException(
                        f'Assignment "{line.name}={line.value}" occurs '
                        'before the first section.',
                        includer.location, includer.lineno)
                value = line.value
                if line.kind is LineKind.ASSIGNMENT:
                    value = resolver.substitute(
                        current, translate_metachars(value))
                ins.add_option(current, line.name, value)
                return current

            case _:
                raise UnrecognizedLineException(
                    f'Unrecognized configuration line: "{line.text}"',
                    includer.location, includer.lineno)


def parse(
    source: ConfigSource,
    predefined_sections: PredefinedSections | None = None,
    safe: bool = False,
    **kwargs
) -> Configuration:
    """Parse a path, URL or text stream into a new `Configuration`.

    Extra keyword arguments go to `ConfigParser`. Raises a
    `ConfigException` (or the source's own I/O error); never returns a
    partially filled store.
    """
    parser = ConfigParser(
        source, safe=safe, predefined=predefined_sections, **kwargs)
    if isinstance(source, TextIOBase):
        return parser.readstream(source)
    return parser.read()
