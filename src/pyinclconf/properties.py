# -*- encoding: utf-8 -*-
# @File   : properties.py
# @Time   : 2026/10/17 12:21:37

"""Process-wide properties, i.e. what `${system.xxx}` looks up.

Seeded on first use with a handful of facts about the running process
(`user.home`, `os.name`, ...). Programs may add their own with
`set_property()`.
"""

import getpass
import os
import platform
import sys

__all__ = ['get_property', 'set_property', 'clear_property', 'properties']

_props: dict[str, str] | None = None


def _username() -> str:
    try:
        return getpass.getuser()
    except (OSError, KeyError):  # no login name, no matching passwd entry
        return ''


def _defaults() -> dict[str, str]:
    return {
        'user.home': os.path.expanduser('~'),
        'user.name': _username(),
        'user.dir': os.getcwd(),
        'os.name': platform.system(),
        'os.arch': platform.machine(),
        'os.version': platform.release(),
        'file.separator': os.sep,
        'path.separator': os.pathsep,
        'line.separator': os.linesep,
        'python.version': platform.python_version(),
        'python.executable': sys.executable,
    }


def properties() -> dict[str, str]:
    """The live table. Mutating it is the same as `set_property()`."""
    global _props
    if _props is None:
        _props = _defaults()
    return _props


def get_property(name: str) -> str | None:
    return properties().get(name)


def set_property(name: str, value: str) -> None:
    properties()[name] = str(value)


def clear_property(name: str) -> None:
    properties().pop(name, None)
