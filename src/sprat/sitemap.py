"""
XML sitemap generation.
"""
from __future__ import annotations

import datetime
import typing as t
from urllib.parse import urljoin
from xml.etree import ElementTree

from .core import FileMap, FileRecord, Plugin
from .paths import PatternLike, as_matcher, url_path


SITEMAP_NS = 'http://www.sitemaps.org/schemas/sitemap/0.9'


def lastmod(record: FileRecord) -> str | None:
    value = record.metadata.get('updated') or record.metadata.get('created')
    if isinstance(value, (datetime.date, datetime.datetime)):
        return value.isoformat()
    return str(value) if value else None


class Sitemap(Plugin):
    """
    Add an XML sitemap listing every matching file that is not marked
    `private`. URLs are resolved against @hostname, defaulting to the site's
    `siteurl`.
    """
    def __init__(self,
                 hostname: str | None = None,
                 output: str = 'sitemap.xml',
                 pattern: PatternLike = '**/*.html',
                 omit_index: bool = False):
        self.hostname = hostname
        self.output = output
        self.matcher = as_matcher(pattern)
        self.omit_index = omit_index

    def location(self, hostname: str, key: str, record: FileRecord) -> str:
        path = record.metadata.get('path')
        if path is None:
            path = url_path(key) if self.omit_index else key
        return urljoin(hostname, path)

    def entries(self, files: FileMap) -> t.Iterator[tuple[str, str | None]]:
        hostname = self.hostname or self.context.siteurl
        for key, record in files.items():
            if self.matcher(key) and not record.metadata.get('private'):
                yield self.location(hostname, key, record), lastmod(record)

    def __call__(self, files: FileMap):
        urlset = ElementTree.Element('urlset', xmlns=SITEMAP_NS)
        for loc, modified in sorted(self.entries(files), key=lambda entry: entry[0]):
            url = ElementTree.SubElement(urlset, 'url')
            ElementTree.SubElement(url, 'loc').text = loc
            if modified:
                ElementTree.SubElement(url, 'lastmod').text = modified
        ElementTree.indent(urlset)
        body = ElementTree.tostring(urlset, encoding='utf-8', xml_declaration=True)
        files[self.output] = FileRecord(body + b'\n')
