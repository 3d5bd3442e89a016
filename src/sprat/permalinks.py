"""
Pretty URLs: moving HTML files into index structures so extensions can be
omitted in links.
"""
from __future__ import annotations

import re
import typing as t
from pathlib import PurePosixPath

from .core import ConfigurationError, FileMap, FileRecord, PipelineError, Plugin
from .paths import PatternLike, as_matcher, slugify, url_path, web_index_path


PLACEHOLDER_RE = re.compile(r':(?P<key>[A-Za-z_]\w*)')


class Linkset(t.TypedDict):
    """
    A permalink pattern applied to files whose metadata matches @match. A
    `collection` key in @match tests collection membership; other keys test
    equality.
    """
    match: dict[str, t.Any]
    pattern: str


def expand_pattern(pattern: str, metadata: dict[str, t.Any]) -> str:
    """
    Replace `:key` placeholders in @pattern with slugified metadata values.
    """
    def replace(match: re.Match[str]):
        key = match['key']
        if metadata.get(key) is None:
            raise ConfigurationError(f'Permalink pattern {pattern!r} needs {key!r} metadata')
        return slugify(metadata[key])
    return PLACEHOLDER_RE.sub(replace, pattern).strip('/')


def linkset_matches(linkset: Linkset, record: FileRecord) -> bool:
    for key, expected in linkset['match'].items():
        if key == 'collection':
            if expected not in record.metadata.get('collection', []):
                return False
        elif record.metadata.get(key) != expected:
            return False
    return True


class Permalinks(Plugin):
    """
    Move `a/b.html` to `a/b/index.html` and record the public path (`a/b/`)
    as `path` metadata. Files matching a link set are moved to that link set's
    pattern instead. Files with `permalink: false` keep their key.
    """
    def __init__(self,
                 linksets: list[Linkset] | None = None,
                 pattern: PatternLike = '**/*.html'):
        self.linksets = linksets or []
        self.matcher = as_matcher(pattern)

    def target_path(self, key: str, record: FileRecord) -> str:
        for linkset in self.linksets:
            if linkset_matches(linkset, record):
                directory = expand_pattern(linkset['pattern'], record.metadata)
                return (PurePosixPath(directory) / 'index.html').as_posix()
        return web_index_path(key)

    def __call__(self, files: FileMap):
        moves: dict[str, str] = {}
        for key, record in files.items():
            if not self.matcher(key):
                continue
            if record.metadata.get('permalink') is False:
                record.metadata.setdefault('path', key)
                continue
            moves[key] = self.target_path(key, record)

        targets: dict[str, str] = {}
        for key, target in moves.items():
            if target in targets:
                raise PipelineError(f'Permalinks for {targets[target]} and {key} clash at {target}')
            if target in files and target not in moves:
                raise PipelineError(f'Permalink for {key} clashes with existing {target}')
            targets[target] = key

        records = {key: files.pop(key) for key in moves}
        for key, target in moves.items():
            record = records[key]
            record.metadata['path'] = url_path(target)
            files[target] = record
