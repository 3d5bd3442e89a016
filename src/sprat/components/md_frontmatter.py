"""
Front matter splitting and parsing for source files.
"""
from __future__ import annotations

import re
import tomllib
import typing as t


FRONTMATTER_RE = re.compile(r'\A---[ \t]*\r?\n(?P<meta>.*?)^---[ \t]*(?:\r?\n|\Z)', re.DOTALL | re.MULTILINE)


class FrontMatterError(ValueError):
    """
    Raised when a front matter block cannot be parsed into a mapping.
    """


def simple_frontmatter_parser(content: str) -> dict:
    """
    Read `key: value` lines in a very simple YAML-like format, without value
    parsing.
    """
    meta = {}
    for line in content.splitlines():
        if ':' not in line:
            break
        key, value = line.split(':', 1)
        if not key.strip().isidentifier():
            break
        meta[key.strip()] = value.strip()
    return meta


def get_toml_frontmatter_parser():
    return tomllib.loads


def get_yaml_frontmatter_parser():
    from ruamel.yaml import YAML
    return YAML(typ='safe', pure=True).load


FrontMatterParser = t.Callable[[str], t.Any]
FrontMatterParserName = t.Literal['simple', 'toml', 'yaml']

FRONTMATTER_PARSER_FACTORIES: dict[FrontMatterParserName, t.Callable[[], FrontMatterParser]] = {
    'simple': lambda: simple_frontmatter_parser,
    'toml': get_toml_frontmatter_parser,
    'yaml': get_yaml_frontmatter_parser,
}


def get_frontmatter_parser(parser: FrontMatterParserName | FrontMatterParser) -> FrontMatterParser:
    if callable(parser):
        return parser
    return FRONTMATTER_PARSER_FACTORIES[parser]()


def split_frontmatter(text: str, parser: FrontMatterParser) -> tuple[dict[str, t.Any], str]:
    """
    Separate a `---` delimited front matter block from the body of @text and
    parse it with @parser. Text without a block yields empty metadata.
    """
    match = FRONTMATTER_RE.match(text)
    if not match:
        return {}, text

    try:
        meta = parser(match['meta'])
    except Exception as e:
        raise FrontMatterError(f'Invalid front matter: {e}') from e
    if meta is None:
        meta = {}
    if not isinstance(meta, dict):
        raise FrontMatterError(f'Front matter must be a mapping, not {type(meta).__name__}')
    return dict(meta), text[match.end():]
