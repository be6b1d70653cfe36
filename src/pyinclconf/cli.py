# -*- encoding: utf-8 -*-
# @File   : cli.py
# @Time   : 2026/10/17 14:52:10

"""Command line front end.

    pyinclconf get app.cfg server port
    pyinclconf sections app.cfg
    pyinclconf options app.cfg server
    pyinclconf preprocess app.cfg     # prints the temp file's path
"""

import argparse
import logging
import sys
from collections.abc import Sequence

import requests

from .config import Configuration, load_predefined, parse
from .exceptions import ConfigException
from .file import Includer

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_ERROR = 1
EXIT_MISSING = 2


def setup_logging(verbose: bool = False) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format='[%(asctime)s] %(levelname)s: %(message)s')


def positive_int(value: str) -> int:
    try:
        ret = int(value)
    except ValueError:
        raise argparse.ArgumentTypeError(
            f'not an integer: {value!r}') from None
    if ret < 1:
        raise argparse.ArgumentTypeError(f'must be at least 1: {ret}')
    return ret


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog='pyinclconf',
        description='Read include-enabled INI-like configuration files.')
    parser.add_argument(
        '-v', '--verbose', action='store_true',
        help='Enable verbose logging')
    parser.add_argument(
        '--safe', action='store_true',
        help='Substitute unresolvable ${...} references with ""')
    parser.add_argument(
        '--defines', metavar='YAML',
        help='YAML file of predefined sections')
    parser.add_argument(
        '--max-nesting', type=positive_int, default=None,
        help='Maximum include nesting depth')
    parser.add_argument(
        '--encoding', default=None,
        help='Source encoding (detected when omitted)')

    sub = parser.add_subparsers(dest='command', required=True)

    get = sub.add_parser('get', help='Print one option value')
    get.add_argument('source', help='Path or URL')
    get.add_argument('section')
    get.add_argument('option')

    sections = sub.add_parser('sections', help='List section names')
    sections.add_argument('source', help='Path or URL')

    options = sub.add_parser('options', help='List a section\'s options')
    options.add_argument('source', help='Path or URL')
    options.add_argument('section')

    pre = sub.add_parser(
        'preprocess', help='Expand includes into a temporary file')
    pre.add_argument('source', help='Path or URL')
    return parser


def _load(args: argparse.Namespace) -> Configuration:
    kwargs = {'encoding': args.encoding}
    if args.max_nesting is not None:
        kwargs['max_nesting'] = args.max_nesting
    predefined = load_predefined(args.defines) if args.defines else None
    return parse(args.source, predefined, args.safe, **kwargs)


def run(args: argparse.Namespace) -> int:
    match args.command:
        case 'get':
            value = _load(args).get(args.section, args.option)
            if value is None:
                logger.warning(
                    'No option "%s" in section "%s"',
                    args.option, args.section)
                return EXIT_MISSING
            print(value)
        case 'sections':
            for i in _load(args).section_names():
                print(i)
        case 'options':
            config = _load(args)
            if not config.has_section(args.section):
                logger.warning('No section "%s"', args.section)
                return EXIT_MISSING
            for k, v in config.options(args.section).items():
                print(f'{k} = {v}')
        case 'preprocess':
            kwargs = {'encoding': args.encoding}
            if args.max_nesting is not None:
                kwargs['max_nesting'] = args.max_nesting
            print(Includer.preprocess(args.source, **kwargs))
    return EXIT_OK


def main(argv: Sequence[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    setup_logging(args.verbose)
    try:
        return run(args)
    except ConfigException as e:
        for i in getattr(e, '__notes__', ()):
            print(i, file=sys.stderr)
        print(f'error: {e}', file=sys.stderr)
    except (
        OSError, LookupError, UnicodeDecodeError, requests.RequestException
    ) as e:
        print(f'error: {e}', file=sys.stderr)
    return EXIT_ERROR


if __name__ == '__main__':
    sys.exit(main())
