# -*- encoding: utf-8 -*-
# @File   : exceptions.py
# @Time   : 2026/10/17 10:12:40

"""Everything raised by this package derives from `ConfigException`,
so callers can catch a single type for "the configuration is unusable".

I/O errors (`OSError`, `requests.RequestException`) are NOT wrapped.
"""


class ConfigException(Exception):
    """Base class for all configuration errors."""
    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class DuplicateSectionException(ConfigException):
    def __init__(self, section_name: str) -> None:
        super().__init__(f'Duplicate section name: "{section_name}"')
        self.section_name = section_name


class DuplicateOptionException(ConfigException):
    def __init__(self, section_name: str, option_name: str) -> None:
        super().__init__(
            f'Duplicate option "{option_name}" '
            f'in section "{section_name}"')
        self.section_name = section_name
        self.option_name = option_name


class NoSuchSectionException(ConfigException):
    def __init__(self, section_name: str) -> None:
        super().__init__(f'Section "{section_name}" does not exist.')
        self.section_name = section_name


class NoSuchOptionException(ConfigException):
    def __init__(self, section_name: str, option_name: str) -> None:
        super().__init__(
            f'Section "{section_name}" does not have '
            f'an option named "{option_name}".')
        self.section_name = section_name
        self.option_name = option_name


class SubstitutionException(ConfigException):
    """A `${...}` reference that can't be resolved (yet)."""
    def __init__(
        self, section_name: str, variable: str, reason: str
    ) -> None:
        super().__init__(
            f'Section "{section_name}" has a bad variable '
            f'reference "${{{variable}}}": {reason}')
        self.section_name = section_name
        self.variable = variable


class ConversionException(ConfigException):
    def __init__(
        self, section_name: str, option_name: str,
        value: str, target: str
    ) -> None:
        super().__init__(
            f'Section "{section_name}", option "{option_name}": '
            f'"{value}" is not a valid {target}.')
        self.section_name = section_name
        self.option_name = option_name
        self.value = value


class ConfigParseException(ConfigException):
    """Structural problem in the source text.

    `location` and `lineno` point at the physical line the parser
    stopped on (for a continued line, its last physical line).
    """
    def __init__(
        self, message: str,
        location: str | None = None, lineno: int | None = None
    ) -> None:
        if location is not None:
            message = f'{location}:{lineno}: {message}'
        super().__init__(message)
        self.location = location
        self.lineno = lineno


class SectionFormatException(ConfigParseException):
    """Unbalanced brackets, like `[section`."""


class SectionNameException(ConfigParseException):
    """Brackets are fine, but the name holds illegal characters."""


class UnrecognizedLineException(ConfigParseException):
    pass


class AssignmentOutsideSectionException(ConfigParseException):
    pass


class IncludeNestingException(ConfigParseException):
    pass
