"""
Path matchers for selecting FileMap keys, and helpers for computing output
paths.
"""
from __future__ import annotations

import abc
import re
import typing as t
import unicodedata
from pathlib import PurePosixPath

from .core import ConfigurationError


def glob_to_regex(pattern: str) -> re.Pattern[str]:
    """
    Translate a glob into a compiled regular expression over POSIX paths.

    `*` and `?` never cross a `/`, `**` matches across directories (`**/`
    also matches zero directories), `[...]` is a character class (`[!...]`
    negates it) and `{a,b}` is an alternation.
    """
    parts: list[str] = []
    depth = 0
    i = 0
    n = len(pattern)
    while i < n:
        char = pattern[i]
        if char == '*':
            if pattern.startswith('**', i):
                i += 2
                if pattern.startswith('/', i):
                    i += 1
                    parts.append('(?:.*/)?')
                else:
                    parts.append('.*')
                continue
            parts.append('[^/]*')
        elif char == '?':
            parts.append('[^/]')
        elif char == '[':
            end = pattern.find(']', i + 2)
            if end == -1:
                raise ConfigurationError(f'Unterminated character class in glob {pattern!r}')
            body = pattern[i + 1:end]
            if body.startswith('!'):
                body = '^' + body[1:]
            elif body.startswith('^'):
                body = '\\' + body
            parts.append(f'[{body.replace("/", "")}]')
            i = end
        elif char == '{':
            depth += 1
            parts.append('(?:')
        elif char == ',' and depth:
            parts.append('|')
        elif char == '}' and depth:
            depth -= 1
            parts.append(')')
        else:
            parts.append(re.escape(char))
        i += 1

    if depth:
        raise ConfigurationError(f'Unbalanced braces in glob {pattern!r}')
    try:
        return re.compile(''.join(parts) + r'\Z')
    except re.error as e:
        raise ConfigurationError(f'Invalid glob {pattern!r}: {e}') from e


class Matcher(abc.ABC):
    """
    Abstract base class for FileMap key matchers. Provides pre-baked ability to
    combine Matchers with | and &.
    """
    @abc.abstractmethod
    def __call__(self, path: str) -> bool:
        ...

    def __or__(self, other: Matcher):
        return _OrMatcher(self, other)

    def __and__(self, other: Matcher):
        return _AndMatcher(self, other)


class _OrMatcher(Matcher):
    def __init__(self, left: Matcher, right: Matcher):
        self.left = left
        self.right = right

    def __call__(self, path: str):
        return self.left(path) or self.right(path)


class _AndMatcher(Matcher):
    def __init__(self, left: Matcher, right: Matcher):
        self.left = left
        self.right = right

    def __call__(self, path: str):
        return self.left(path) and self.right(path)


class GlobMatcher(Matcher):
    """
    Matcher using a glob pattern; see `glob_to_regex()` for the syntax.
    Patterns are validated when the Matcher is created.
    """
    def __init__(self, pattern: str):
        self.pattern = pattern
        self.regex = glob_to_regex(pattern)

    def __repr__(self):
        return f'GlobMatcher({self.pattern!r})'

    def __call__(self, path: str):
        return bool(self.regex.match(path))


class REMatcher(Matcher):
    """
    Matcher using regular expressions. @re_flags will be passed to
    `re.compile()`.
    """
    def __init__(self, re_string: str, re_flags: int = 0):
        self.regex = re.compile(re_string, re_flags)

    def __call__(self, path: str):
        return bool(self.regex.match(path))


PatternLike = t.Union[str, Matcher]


def as_matcher(pattern: PatternLike) -> Matcher:
    """
    Turn a glob string into a GlobMatcher, passing Matchers through.
    """
    if isinstance(pattern, Matcher):
        return pattern
    return GlobMatcher(pattern)


def replace_suffix(path: str, ext: str) -> str:
    return PurePosixPath(path).with_suffix(ext).as_posix()


def web_index_path(path: str, index_base: str = 'index') -> str:
    """
    Transform a/b.c to a/b/index.c, while leaving a/index.c as-is.
    """
    pure = PurePosixPath(path)
    if pure.stem == index_base:
        return path
    return (pure.with_suffix('') / index_base).with_suffix(pure.suffix).as_posix()


def url_path(path: str) -> str:
    """
    Public URL path for a FileMap key, dropping a trailing index.html.
    """
    if path == 'index.html':
        return ''
    if path.endswith('/index.html'):
        return path[:-len('index.html')]
    return path


def slugify(value: t.Any) -> str:
    """
    Lowercase, ASCII-fold, and hyphenate a value for use in a URL.
    """
    text = unicodedata.normalize('NFKD', str(value)).encode('ascii', 'ignore').decode('ascii')
    text = re.sub(r'[^\w\s-]', '', text.lower())
    return re.sub(r'[-\s_]+', '-', text).strip('-')
