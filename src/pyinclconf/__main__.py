# -*- encoding: utf-8 -*-
# @File   : __main__.py
# @Time   : 2026/10/17 15:03:27

import sys

from .cli import main

sys.exit(main())
