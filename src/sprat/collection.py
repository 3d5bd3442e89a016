"""
Named, filtered and sorted views over the FileMap.
"""
from __future__ import annotations

import datetime
import typing as t

from .core import ConfigurationError, FileMap, FileRecord, Plugin
from .paths import PatternLike, as_matcher


class CollectionOptions(t.TypedDict, total=False):
    """
    Options for a single collection.

    :param pattern: Glob or Matcher selecting FileMap keys.
    :param sort_by: Metadata field to sort ascending by.
    :param reverse: Reverse the sorted sequence afterwards.
    """
    pattern: PatternLike
    sort_by: str | None
    reverse: bool


def sort_key(value: t.Any):
    """
    Key for sorting a metadata value. Missing values sort first, like the
    oldest possible date, and plain dates compare as midnight datetimes.
    """
    if value is None:
        return (False,)
    if isinstance(value, datetime.date) and not isinstance(value, datetime.datetime):
        value = datetime.datetime.combine(value, datetime.time())
    if isinstance(value, datetime.datetime) and value.tzinfo is not None:
        value = value.astimezone(datetime.timezone.utc).replace(tzinfo=None)
    return (True, value)


def build_collection(files: FileMap,
                     pattern: PatternLike,
                     sort_by: str | None = None,
                     reverse: bool = False) -> list[FileRecord]:
    """
    Select the records of @files whose keys match @pattern, in encounter
    order. With @sort_by, stable-sort them ascending on that metadata field;
    with @reverse, reverse the sorted result afterwards.
    """
    matcher = as_matcher(pattern)
    members = [record for key, record in files.items() if matcher(key)]
    if sort_by:
        members.sort(key=lambda record: sort_key(record.metadata.get(sort_by)))
    if reverse:
        members.reverse()
    return members


def collection_names(record: FileRecord) -> list[str]:
    """
    The record's `collection` metadata as a list, accepting the single-name
    string form used in front matter.
    """
    names = record.metadata.get('collection')
    if isinstance(names, str):
        names = [names]
    record.metadata['collection'] = names = list(names or [])
    return names


class Collections(Plugin):
    """
    Build the declared collections into `Context.collections`. Every member's
    `collection` metadata lists the collections it belongs to.
    """
    def __init__(self, collections: dict[str, CollectionOptions]):
        self.collections = {}
        for name, options in collections.items():
            if 'pattern' not in options:
                raise ConfigurationError(f'Collection {name!r} needs a pattern')
            options = dict(options)
            options['pattern'] = as_matcher(options['pattern'])
            self.collections[name] = options

    def __call__(self, files: FileMap):
        for name, options in self.collections.items():
            members = build_collection(
                files,
                options['pattern'],
                options.get('sort_by'),
                options.get('reverse', False),
            )
            for record in members:
                names = collection_names(record)
                if name not in names:
                    names.append(name)
            self.context.collections[name] = members
