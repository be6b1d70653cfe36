# -*- encoding: utf-8 -*-
# @File   : __init__.py
# @Time   : 2026/10/17 14:31:17

from .defines import load_predefined, predefined_from_mapping
from .model import Configuration, NotFoundHook, Section
from .parser import ConfigParser, LineClassifier, LineKind, ParsedLine, parse
from .resolver import VariableResolver, resolve_reference, substitute
