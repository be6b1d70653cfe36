"""Parsing tests, mostly through `parse()` on in-memory text."""

import logging
import os
from io import StringIO

import pytest

from pyinclconf import ConfigParser, Configuration, parse
from pyinclconf.config import LineClassifier, LineKind
from pyinclconf.exceptions import (
    AssignmentOutsideSectionException,
    ConfigException,
    DuplicateOptionException,
    DuplicateSectionException,
    IncludeNestingException,
    SectionFormatException,
    SectionNameException,
    SubstitutionException,
    UnrecognizedLineException
)


def parse_text(text: str, *args, **kwargs) -> Configuration:
    return parse(StringIO(text), *args, **kwargs)


def test_basic_section_and_assignment() -> None:
    config = parse_text('[main]\nfoo=bar\n')
    assert config.get('main', 'foo') == 'bar'


def test_separators_and_blanks() -> None:
    config = parse_text(
        '# leading comment\n'
        '\n'
        '  [main]  \n'
        '   # indented comment\n'
        'a = 1\n'
        'b: two words \n'
        'c=\n')
    assert config.options('main') == {'a': '1', 'b': 'two words ', 'c': ''}


def test_backward_reference() -> None:
    config = parse_text('[a]\nx=1\n[b]\ny=${a.x}\n')
    assert config.get('b', 'y') == '1'


def test_forward_reference_is_rejected() -> None:
    with pytest.raises(SubstitutionException) as exc:
        parse_text('[a]\ny=${b.x}\n[b]\nx=1\n')
    assert exc.value.section_name == 'a'
    assert exc.value.variable == 'b.x'


def test_same_section_reference() -> None:
    config = parse_text('[a]\nx=1\ny=${x}/2\n')
    assert config.get('a', 'y') == '1/2'


def test_reference_to_later_option_in_same_section_fails() -> None:
    with pytest.raises(SubstitutionException):
        parse_text('[a]\ny=${x}\nx=1\n')


def test_first_dot_splits_section_from_option() -> None:
    config = parse_text('[a]\nx.y = 1\nz = ${a.x.y}\n')
    assert config.get('a', 'z') == '1'
    with pytest.raises(SubstitutionException):
        parse_text('[a]\nx.y = 1\nz = ${x.y}\n')


def test_env_reference(monkeypatch) -> None:
    monkeypatch.setenv('SOME_VAR', 'hello')
    config = parse_text('[a]\np=${env.SOME_VAR}\n')
    assert config.get('a', 'p') == 'hello'


def test_missing_env_reference(monkeypatch) -> None:
    monkeypatch.delenv('SOME_VAR', raising=False)
    with pytest.raises(SubstitutionException):
        parse_text('[a]\np=${env.SOME_VAR}\n')


def test_system_reference(clean_properties) -> None:
    config = parse_text('[a]\nhome=${system.user.home}\n')
    assert config.get('a', 'home') == os.path.expanduser('~')


def test_pseudo_sections_cannot_be_declared() -> None:
    with pytest.raises(DuplicateSectionException):
        parse_text('[env]\nx=1\n')


def test_duplicate_section() -> None:
    with pytest.raises(DuplicateSectionException):
        parse_text('[main]\n[main]\n')


def test_duplicate_option() -> None:
    with pytest.raises(DuplicateOptionException) as exc:
        parse_text('[main]\nfoo=1\nFOO=2\n')
    assert any('<stream>:3' in i for i in exc.value.__notes__)


def test_raw_assignment_is_verbatim() -> None:
    config = parse_text('[a]\nr -> ${nope}\\t = x\n')
    assert config.get('a', 'r') == '${nope}\\t = x'


def test_escaped_dollar() -> None:
    config = parse_text('[a]\np = cost \\${x}\n')
    assert config.get('a', 'p') == 'cost ${x}'


def test_substitution_is_single_pass() -> None:
    config = parse_text('[a]\nx -> ${y}\\t\nz = ${x}\n')
    assert config.get('a', 'z') == '${y}\\t'


def test_metachars() -> None:
    config = parse_text('[a]\nv = a\\tb\\u00e9\\\\\\ \n')
    assert config.get('a', 'v') == 'a\tbé\\ '


def test_continued_assignment() -> None:
    config = parse_text('[a]\nlong = one \\\n  two \\\nthree\nnext = 1\n')
    assert config.get('a', 'long') == 'one   two three'
    assert config.get('a', 'next') == '1'


def test_bad_section_format() -> None:
    with pytest.raises(SectionFormatException) as exc:
        parse_text('[a]\n[oops\n')
    assert 'Badly formatted section' in str(exc.value)
    assert exc.value.lineno == 2


def test_bad_section_name() -> None:
    with pytest.raises(SectionNameException) as exc:
        parse_text('[a-b]\n')
    assert 'Bad section name' in str(exc.value)


def test_assignment_outside_section() -> None:
    with pytest.raises(AssignmentOutsideSectionException):
        parse_text('# header\nx=1\n[a]\n')


def test_unrecognized_line() -> None:
    with pytest.raises(UnrecognizedLineException) as exc:
        parse_text('[a]\n???\n')
    assert exc.value.location == '<stream>'
    assert exc.value.lineno == 2
    assert str(exc.value).startswith('<stream>:2: ')


def test_all_errors_share_a_base_class() -> None:
    for text in ('[a\n', '[a]\n[a]\n', 'x=1\n', '[a]\n!\n', '[a]\nx=${y}\n'):
        with pytest.raises(ConfigException):
            parse_text(text)


def test_safe_mode(caplog) -> None:
    with caplog.at_level(logging.WARNING):
        config = parse_text('[a]\nx=${nope}y${b.z}\n', safe=True)
    assert config.get('a', 'x') == 'y'
    assert 'bad variable reference' in caplog.text


def test_predefined_sections() -> None:
    config = parse_text(
        '[b]\ny=${paths.root}/bin\n', {'paths': {'root': '/opt'}})
    assert config.section_names() == ['paths', 'b']
    assert config.get('b', 'y') == '/opt/bin'


def test_predefined_values_are_raw() -> None:
    config = parse_text('[b]\n', {'paths': {'root': '${x}\\t'}})
    assert config.get('paths', 'root') == '${x}\\t'


def test_predefined_section_clash() -> None:
    with pytest.raises(DuplicateSectionException):
        parse_text('[paths]\n', {'paths': {}})


def test_custom_option_normalizer() -> None:
    config = parse_text('[a]\nKey=1\nkey=2\n', normalize_option=str)
    assert config.options('a') == {'Key': '1', 'key': '2'}


def test_custom_comment_pattern() -> None:
    config = parse_text('; note\n[a]\n', comment_pattern=r'^\s*;.*$')
    assert config.section_names() == ['a']
    with pytest.raises(UnrecognizedLineException):
        parse_text('# note\n', comment_pattern=r'^\s*;.*$')


def test_custom_section_name_pattern() -> None:
    config = parse_text('[a-b]\nx=1\n', section_name_pattern=r'[a-z-]+')
    assert config.get('a-b', 'x') == '1'


def test_includes_in_files(write_cfg) -> None:
    root = write_cfg(
        'app.cfg',
        '[paths]\nroot = /opt/app\n'
        '%include "conf.d/server.cfg"\n'
        '[late]\nport = ${server.port}\n')
    write_cfg(
        'conf.d/server.cfg',
        '[server]\nport = 8080\nlogs = ${paths.root}/logs\n')

    config = parse(root)
    assert config.section_names() == ['paths', 'server', 'late']
    assert config.get('server', 'logs') == '/opt/app/logs'
    assert config.get_int('late', 'port') == 8080


def test_include_keeps_current_section(write_cfg) -> None:
    root = write_cfg('a.cfg', '[a]\n%include "b.cfg"\nafter = 2\n')
    write_cfg('b.cfg', 'inside = 1\n')

    assert parse(root).options('a') == {'inside': '1', 'after': '2'}


def test_error_in_included_file_reports_its_location(write_cfg) -> None:
    root = write_cfg('a.cfg', '[a]\n%include "b.cfg"\n')
    write_cfg('b.cfg', 'x = 1\nnot valid\n')

    with pytest.raises(UnrecognizedLineException) as exc:
        parse(root)
    assert exc.value.location.endswith('b.cfg')
    assert exc.value.lineno == 2


def test_custom_include_pattern(write_cfg) -> None:
    root = write_cfg('a.cfg', '[a]\n@import b.cfg\n')
    write_cfg('b.cfg', 'x = 1\n')

    config = parse(root, include_pattern=r'^@import\s+(\S+)$')
    assert config.get('a', 'x') == '1'


def test_nesting_limit_through_parse(write_cfg) -> None:
    root = write_cfg('loop.cfg', '%include "loop.cfg"\n')
    with pytest.raises(IncludeNestingException):
        parse(root, max_nesting=3)


def test_explicit_encoding(write_cfg) -> None:
    root = write_cfg('a.cfg', '[a]\nname = Zoë\n', encoding='latin-1')
    assert parse(root, encoding='latin-1').get('a', 'name') == 'Zoë'


def test_config_parser_read_and_readstream(write_cfg) -> None:
    root = write_cfg('a.cfg', '[a]\nx = 1\n')
    parser = ConfigParser(root, predefined={'p': {'k': 'v'}})
    assert str(parser) == str(root)
    assert parser.read().section_names() == ['p', 'a']
    config = parser.readstream(StringIO('[b]\ny = ${p.k}\n'))
    assert config.section_names() == ['p', 'b']
    assert config.get('b', 'y') == 'v'


def test_configuration_load_layers_sources() -> None:
    config = parse_text('[base]\nx = 1\n')
    config.load(StringIO('[extra]\ny = ${base.x}2\n'))
    assert config.section_names() == ['base', 'extra']
    assert config.get('extra', 'y') == '12'


def test_configuration_load_is_all_or_nothing() -> None:
    config = parse_text('[base]\nx = 1\n')
    with pytest.raises(DuplicateSectionException):
        config.load(StringIO('[extra]\ny = 2\n[base]\n'))
    assert config.section_names() == ['base']
    assert not config.has_section('extra')


@pytest.mark.parametrize(
    ('line', 'kind', 'name', 'value'),
    [
        ('# c', LineKind.COMMENT, None, None),
        ('   ', LineKind.BLANK, None, None),
        ('', LineKind.BLANK, None, None),
        (' [sec_1] ', LineKind.SECTION, 'sec_1', None),
        ('[sec', LineKind.BAD_SECTION_FORMAT, '[sec', None),
        ('[se c]', LineKind.BAD_SECTION_NAME, 'se c', None),
        ('a.b -> v', LineKind.RAW_ASSIGNMENT, 'a.b', 'v'),
        ('a = b -> c', LineKind.ASSIGNMENT, 'a', 'b -> c'),
        ('a: b', LineKind.ASSIGNMENT, 'a', 'b'),
        ('what?', LineKind.UNRECOGNIZED, None, None),
    ],
)
def test_line_classifier(line, kind, name, value) -> None:
    parsed = LineClassifier().classify(line)
    assert parsed.kind is kind
    assert parsed.text == line
    assert parsed.name == name
    assert parsed.value == value


def test_not_found_hook_feeds_substitution() -> None:
    asked = []

    def lookup(section: str, option: str) -> str | None:
        asked.append((section, option))
        return 'db.local' if (section, option) == ('remote', 'host') else None

    config = parse_text(
        '[a]\nurl = http://${remote.host}/\n', not_found=lookup)
    assert config.get('a', 'url') == 'http://db.local/'
    assert config.get('remote', 'host') == 'db.local'
    assert asked[0] == ('remote', 'host')


def test_not_found_hook_returning_none_keeps_errors() -> None:
    def lookup(section: str, option: str) -> None:
        return None

    with pytest.raises(SubstitutionException):
        parse_text('[a]\nx = ${nope}\n', not_found=lookup)
    config = parse_text('[a]\nx = ${nope}\n', safe=True, not_found=lookup)
    assert config.get('a', 'x') == ''


def test_not_found_hook_survives_configuration_load() -> None:
    config = parse_text('[a]\n', not_found=lambda s, o: f'{s}/{o}')
    config.load(StringIO('[b]\ny = ${c.d}\n'))
    assert config.get('b', 'y') == 'c/d'


def test_int_value_with_trailing_blanks() -> None:
    config = parse_text('[server]\nport = 8080 \n')
    assert config.get('server', 'port') == '8080 '
    assert config.get_int('server', 'port') == 8080


def test_timeout_reaches_url_includes(write_cfg, fake_http) -> None:
    fake_http['http://example.com/remote.cfg'] = 'x = 1\n'
    root = write_cfg(
        'a.cfg', '[a]\n%include "http://example.com/remote.cfg"\n')

    assert parse(root, timeout=5).get('a', 'x') == '1'
    assert fake_http.timeouts == [5]


def test_default_timeout_for_url_includes(write_cfg, fake_http) -> None:
    from pyinclconf.consts import DEFAULT_TIMEOUT

    fake_http['http://example.com/remote.cfg'] = 'x = 1\n'
    root = write_cfg(
        'a.cfg', '[a]\n%include "http://example.com/remote.cfg"\n')

    parse(root)
    assert fake_http.timeouts == [DEFAULT_TIMEOUT]
