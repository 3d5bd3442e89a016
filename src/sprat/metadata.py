"""
Plugins enriching or filtering file metadata: defaults, drafts, change
tracking, and authors.
"""
from __future__ import annotations

import datetime
import hashlib
import json
import typing as t
from pathlib import Path

from .core import ConfigurationError, FileMap, Plugin
from .paths import PatternLike, as_matcher


def checksum(content: bytes, hashname: str = 'sha1'):
    """
    Calculate a hex digest of a FileRecord's content.
    """
    return hashlib.new(hashname, content).hexdigest()


def utcnow():
    return datetime.datetime.now(datetime.timezone.utc).replace(microsecond=0)


class DefaultRule(t.TypedDict):
    pattern: PatternLike
    defaults: dict[str, t.Any]


class DefaultValues(Plugin):
    """
    Fill in metadata keys missing from files matching each rule's pattern.
    Rules are applied in order, so earlier rules win for overlapping keys.
    """
    def __init__(self, rules: list[DefaultRule]):
        self.rules = [(as_matcher(rule['pattern']), rule['defaults']) for rule in rules]

    def __call__(self, files: FileMap):
        for key, record in files.items():
            for matcher, defaults in self.rules:
                if matcher(key):
                    for name, value in defaults.items():
                        record.metadata.setdefault(name, value)


class Drafts(Plugin):
    """
    Remove every file whose `draft` metadata is truthy.
    """
    def __call__(self, files: FileMap):
        for key in [k for k, record in files.items() if record.metadata.get('draft')]:
            del files[key]


class Updated(Plugin):
    """
    Track when files first appeared and when their content last changed,
    persisting the record as JSON in @tracking_file between builds.

    Sets `created` (unless the front matter already has one) and, for files
    changed since they were first seen, `updated`. A relative @tracking_file
    is resolved against the parent of the destination directory. The tracking
    file is only saved once a build has succeeded and been written.
    """
    encoding = 'utf-8'
    newline = '\n'

    def __init__(self,
                 tracking_file: Path,
                 pattern: PatternLike = '**',
                 now: t.Callable[[], datetime.datetime] = utcnow):
        self.tracking_file = tracking_file
        self.matcher = as_matcher(pattern)
        self.now = now
        self.pending: dict[str, dict[str, t.Any]] | None = None

    @property
    def tracking_path(self) -> Path:
        if self.tracking_file.is_absolute():
            return self.tracking_file
        return self.context['destination_dir'].parent / self.tracking_file

    def load(self) -> dict[str, dict[str, t.Any]]:
        if not self.tracking_path.exists():
            return {}
        return json.loads(self.tracking_path.read_text(self.encoding))

    def dump(self, data: dict[str, dict[str, t.Any]]):
        self.tracking_path.parent.mkdir(parents=True, exist_ok=True)
        with self.tracking_path.open('w', encoding=self.encoding, newline=self.newline) as file:
            json.dump(data, file, indent=2, sort_keys=True)

    def __call__(self, files: FileMap):
        prior = self.load()
        timestamp = self.now().isoformat()
        current: dict[str, dict[str, t.Any]] = {}

        for key, record in files.items():
            if not self.matcher(key):
                continue
            digest = checksum(record.content)
            entry = dict(prior.get(key) or {'sha1': digest, 'created': timestamp, 'updated': None})
            if entry['sha1'] != digest:
                entry['sha1'] = digest
                entry['updated'] = timestamp
            current[key] = entry

            record.metadata.setdefault('created', datetime.datetime.fromisoformat(entry['created']))
            if entry['updated']:
                record.metadata['updated'] = datetime.datetime.fromisoformat(entry['updated'])

        self.pending = current

    def finish(self):
        if self.pending is not None:
            self.dump(self.pending)
            self.pending = None


class Author(Plugin):
    """
    Replace the `author` key of every file in @collection with the matching
    record from @authors.
    """
    def __init__(self, collection: str, authors: dict[str, dict[str, t.Any]]):
        self.collection = collection
        self.authors = authors

    def __call__(self, files: FileMap):
        for record in self.context.collections.get(self.collection, []):
            author = record.metadata.get('author')
            if author is None or isinstance(author, dict):
                continue
            try:
                record.metadata['author'] = self.authors[author]
            except KeyError as e:
                raise ConfigurationError(f'Unknown author {author!r}') from e
