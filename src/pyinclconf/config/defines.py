# -*- encoding: utf-8 -*-
# @File   : defines.py
# @Time   : 2026/10/17 14:20:33

"""Predefined sections from a YAML file, e.g.

    ```yaml
    paths:
      root: /opt/app
      cache: /var/cache/app
    build:
      jobs: 4         # becomes "4"
    ```

Values must be scalars; they are stored as strings, raw.
"""

from os import PathLike
from warnings import warn

import yaml

from ..exceptions import ConfigException


def _to_option_value(section: str, key: str, val: object) -> str:
    if val is None:
        return ''
    if isinstance(val, str):
        return val
    if isinstance(val, (dict, list)):
        raise ConfigException(
            f'Predefined option "{section}.{key}" must be a scalar, '
            f'got {type(val).__name__}.')
    # may there be some pure digits or booleans parsed as non-str.
    warn(f'Predefined option "{section}.{key}" = {val!r} '
         'is not a string, converting with str().')
    return str(val)


def predefined_from_mapping(data: object) -> dict[str, dict[str, str]]:
    """Validate an already-loaded YAML document."""
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigException(
            'Predefined sections must be a mapping of section -> options, '
            f'got {type(data).__name__}.')
    ret: dict[str, dict[str, str]] = {}
    for section, options in data.items():
        section = str(section)
        if options is None:
            options = {}
        if not isinstance(options, dict):
            raise ConfigException(
                f'Predefined section "{section}" must be a mapping, '
                f'got {type(options).__name__}.')
        ret[section] = {
            str(k): _to_option_value(section, str(k), v)
            for k, v in options.items()
        }
    return ret


def load_predefined(
    filename: str | PathLike[str], encoding: str = 'utf-8'
) -> dict[str, dict[str, str]]:
    with open(filename, 'r', encoding=encoding) as fp:
        try:
            data = yaml.safe_load(fp)
        except yaml.YAMLError as e:
            raise ConfigException(
                f'Can\'t read predefined sections from "{filename}": {e}'
            ) from e
    return predefined_from_mapping(data)
