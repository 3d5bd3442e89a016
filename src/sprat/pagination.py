"""
Splitting collections into fixed-size pages of index files.
"""
from __future__ import annotations

import math
import typing as t
from dataclasses import dataclass

from .core import ConfigurationError, FileMap, FileRecord, PipelineError, Plugin


PAGE_NUMBER_PLACEHOLDER = ':num'


@dataclass
class Page:
    """
    One page of a paginated collection.
    """
    files: list[FileRecord]
    path: str
    page_number: int
    total_pages: int
    first_page_path: str
    previous_page_path: str | None = None
    next_page_path: str | None = None

    @property
    def is_first(self):
        return self.page_number == 1

    @property
    def is_last(self):
        return self.page_number == self.total_pages


def validate_options(per_page: int, path: str):
    if per_page <= 0:
        raise ConfigurationError(f'per_page must be positive, got {per_page}')
    if PAGE_NUMBER_PLACEHOLDER not in path:
        raise ConfigurationError(f'Pagination path {path!r} has no {PAGE_NUMBER_PLACEHOLDER} placeholder')


def page_path(template: str, number: int, first: str | None = None, no_page_one: bool = False) -> str:
    """
    Destination path for page @number (1-based).
    """
    if number == 1 and no_page_one and first:
        return first
    return template.replace(PAGE_NUMBER_PLACEHOLDER, str(number))


def paginate(items: t.Sequence[FileRecord],
             per_page: int,
             path: str,
             first: str | None = None,
             no_page_one: bool = False) -> list[Page]:
    """
    Split @items into `ceil(len(items) / per_page)` pages and link them
    together.

    :param per_page: Maximum number of items per page; must be positive.
    :param path: Destination path template containing `:num`.
    :param first: Destination of page one when @no_page_one is set.
    :param no_page_one: Write page one to @first instead of the numbered path.
    """
    validate_options(per_page, path)
    if no_page_one and not first:
        raise ConfigurationError('no_page_one requires a first path')

    total = math.ceil(len(items) / per_page)
    paths = [page_path(path, number, first, no_page_one) for number in range(1, total + 1)]
    return [
        Page(
            files=list(items[index * per_page:min((index + 1) * per_page, len(items))]),
            path=paths[index],
            page_number=index + 1,
            total_pages=total,
            first_page_path=paths[0],
            previous_page_path=paths[index - 1] if index > 0 else None,
            next_page_path=paths[index + 1] if index + 1 < total else None,
        )
        for index in range(total)
    ]


class PaginationOptions(t.TypedDict, total=False):
    """
    Options for paginating one collection.
    """
    per_page: int
    layout: str
    path: str
    first: str | None
    no_page_one: bool
    page_metadata: dict[str, t.Any]


class Pagination(Plugin):
    """
    Create an index file for every page of the configured collections. Each
    page file gets the configured `layout`, any `page_metadata`, and its `Page`
    under the `pagination` key.

    If `first` is set without `no_page_one`, page one is written both at its
    numbered path and at `first`.
    """
    def __init__(self, collections: dict[str, PaginationOptions]):
        for name, options in collections.items():
            if 'per_page' not in options or 'path' not in options:
                raise ConfigurationError(f'Pagination of {name!r} needs per_page and path')
            validate_options(options['per_page'], options['path'])
        self.collections = collections

    def __call__(self, files: FileMap):
        for name, options in self.collections.items():
            try:
                items = self.context.collections[name]
            except KeyError as e:
                raise ConfigurationError(f'Cannot paginate unknown collection {name!r}') from e

            first = options.get('first')
            no_page_one = options.get('no_page_one', False)
            pages = paginate(items, options['per_page'], options['path'], first, no_page_one)
            for page in pages:
                self._add_page(files, page.path, page, options)
                if page.is_first and first and not no_page_one:
                    self._add_page(files, first, page, options)

    def _add_page(self, files: FileMap, path: str, page: Page, options: PaginationOptions):
        if path in files:
            raise PipelineError(f'Pagination path {path!r} already exists')
        metadata: dict[str, t.Any] = dict(options.get('page_metadata', {}))
        if layout := options.get('layout'):
            metadata['layout'] = layout
        metadata['pagination'] = page
        files[path] = FileRecord(b'', metadata)
