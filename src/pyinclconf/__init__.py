# -*- encoding: utf-8 -*-
# @File   : __init__.py
# @Time   : 2026/10/17 14:33:48

from .config import (
    ConfigParser,
    Configuration,
    Section,
    load_predefined,
    parse
)
from .exceptions import (
    AssignmentOutsideSectionException,
    ConfigException,
    ConfigParseException,
    ConversionException,
    DuplicateOptionException,
    DuplicateSectionException,
    IncludeNestingException,
    NoSuchOptionException,
    NoSuchSectionException,
    SectionFormatException,
    SectionNameException,
    SubstitutionException,
    UnrecognizedLineException
)
from .file import BackslashContinuedLines, Includer

__all__ = [
    'parse', 'ConfigParser', 'Configuration', 'Section', 'load_predefined',
    'Includer', 'BackslashContinuedLines',
    'ConfigException', 'DuplicateSectionException',
    'DuplicateOptionException', 'NoSuchSectionException',
    'NoSuchOptionException', 'SubstitutionException', 'ConversionException',
    'ConfigParseException', 'SectionFormatException', 'SectionNameException',
    'UnrecognizedLineException', 'AssignmentOutsideSectionException',
    'IncludeNestingException'
]
