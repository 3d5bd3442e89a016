"""
Plugins injecting third-party social markup into rendered HTML: Disqus
comment threads and Twitter card meta tags.
"""
from __future__ import annotations

import json
import typing as t
from urllib.parse import urljoin

from markupsafe import escape

from .core import ConfigurationError, FileMap, FileRecord, Plugin
from .paths import PatternLike, as_matcher, url_path


def page_url(siteurl: str, key: str, record: FileRecord) -> str:
    return urljoin(siteurl, record.metadata.get('path', url_path(key)))


def insert_before(html: str, tag: str, snippet: str) -> str:
    """
    Insert @snippet before the last occurrence of the closing @tag, or append
    it if @html has no such tag.
    """
    index = html.rfind(tag)
    if index == -1:
        return html + snippet
    return html[:index] + snippet + html[index:]


DISQUS_TEMPLATE = '''<div id="disqus_thread"></div>
<script>
var disqus_config = function () {{
  this.page.url = {url};
  this.page.identifier = {identifier};
}};
(function() {{
  var d = document, s = d.createElement('script');
  s.src = 'https://{shortname}.disqus.com/embed.js';
  s.setAttribute('data-timestamp', +new Date());
  (d.head || d.body).appendChild(s);
}})();
</script>
'''


class Disqus(Plugin):
    """
    Add a Disqus comment thread before `</body>` of HTML files whose
    `comments` metadata is truthy.
    """
    def __init__(self, shortname: str, pattern: PatternLike = '**/*.html'):
        if not shortname:
            raise ConfigurationError('Disqus needs a shortname')
        self.shortname = shortname
        self.matcher = as_matcher(pattern)

    def embed(self, url: str, identifier: str) -> str:
        return DISQUS_TEMPLATE.format(
            url=json.dumps(url),
            identifier=json.dumps(identifier),
            shortname=self.shortname,
        )

    def __call__(self, files: FileMap):
        for key, record in files.items():
            if not self.matcher(key) or not record.metadata.get('comments'):
                continue
            url = page_url(self.context.siteurl, key, record)
            record.set_text(insert_before(record.text(), '</body>', self.embed(url, key)))


class TwitterCard(Plugin):
    """
    Add `twitter:*` meta tags to the `<head>` of HTML files whose `twitter`
    metadata is truthy.

    :param card: The card type, such as `summary_large_image`.
    :param site: The site's Twitter handle.
    :param fields: Card fields mapped to the metadata keys supplying them.
        Files lacking a key simply omit that field.
    :param image_key: Metadata key of the card image; falls back to the
        site's `siteogimg`. Relative images are resolved against `siteurl`.
    """
    default_fields = {
        'title': 'title',
        'description': 'description',
        'image:alt': 'title',
    }

    def __init__(self,
                 card: str = 'summary',
                 site: str | None = None,
                 fields: dict[str, str] | None = None,
                 image_key: str = 'image',
                 pattern: PatternLike = '**/*.html'):
        self.card = card
        self.site = site
        self.fields = fields if fields is not None else dict(self.default_fields)
        self.image_key = image_key
        self.matcher = as_matcher(pattern)

    def card_values(self, record: FileRecord) -> dict[str, t.Any]:
        values: dict[str, t.Any] = {'card': self.card}
        if self.site:
            values['site'] = self.site
        for name, meta_key in self.fields.items():
            if record.metadata.get(meta_key) is not None:
                values[name] = record.metadata[meta_key]
        image = record.metadata.get(self.image_key) or self.context.metadata.get('siteogimg')
        if image:
            values['image'] = urljoin(self.context.siteurl, str(image))
        return values

    def meta_tags(self, record: FileRecord) -> str:
        return ''.join(
            f'<meta name="twitter:{escape(name)}" content="{escape(value)}">\n'
            for name, value in self.card_values(record).items()
        )

    def __call__(self, files: FileMap):
        for key, record in files.items():
            if not self.matcher(key) or not record.metadata.get('twitter'):
                continue
            record.set_text(insert_before(record.text(), '</head>', self.meta_tags(record)))
