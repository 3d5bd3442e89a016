import asyncio
from pathlib import Path

import pytest

from sprat.core import BuildSettings, ConfigurationError, Context, FileRecord
from sprat.social import Disqus, TwitterCard, insert_before


SITEURL = 'https://blog.example.com/'
PAGE = b'<html><head><title>x</title></head><body><p>x</p></body></html>'


def build(tmp_path: Path, files, plugins):
    context = Context(
        BuildSettings(source_dir=tmp_path, destination_dir=tmp_path / 'build'),
        {'siteurl': SITEURL, 'siteogimg': 'images/og.jpg'},
        plugins,
    )
    return asyncio.run(context.process(files))


def test_insert_before():
    assert insert_before('<body></body>', '</body>', 'x') == '<body>x</body>'
    assert insert_before('<p>no body</p>', '</body>', 'x') == '<p>no body</p>x'


def test_disqus(tmp_path: Path):
    files = {
        'blog/post/index.html': FileRecord(PAGE, {'comments': True, 'path': 'blog/post/'}),
        'about/index.html': FileRecord(PAGE, {'comments': False}),
    }
    assert build(tmp_path, files, [Disqus('example')]).ok
    html = files['blog/post/index.html'].text()
    assert html.index('<div id="disqus_thread">') < html.index('</body>')
    assert 'this.page.url = "https://blog.example.com/blog/post/";' in html
    assert "https://example.disqus.com/embed.js" in html
    assert files['about/index.html'].content == PAGE


def test_disqus_requires_shortname():
    with pytest.raises(ConfigurationError):
        Disqus('')


def test_twitter_card(tmp_path: Path):
    files = {
        'post/index.html': FileRecord(PAGE, {
            'twitter': True,
            'title': 'Fish & Chips',
            'description': 'A post',
        }),
        'plain/index.html': FileRecord(PAGE),
    }
    plugin = TwitterCard(card='summary_large_image', site='@example')
    assert build(tmp_path, files, [plugin]).ok
    html = files['post/index.html'].text()
    head = html[:html.index('</head>')]
    assert '<meta name="twitter:card" content="summary_large_image">' in head
    assert '<meta name="twitter:site" content="@example">' in head
    assert '<meta name="twitter:title" content="Fish &amp; Chips">' in head
    assert '<meta name="twitter:description" content="A post">' in head
    assert '<meta name="twitter:image:alt" content="Fish &amp; Chips">' in head
    assert '<meta name="twitter:image" content="https://blog.example.com/images/og.jpg">' in head
    assert files['plain/index.html'].content == PAGE


def test_twitter_card_post_image(tmp_path: Path):
    files = {'post/index.html': FileRecord(PAGE, {'twitter': True, 'image': '/images/post.jpg'})}
    assert build(tmp_path, files, [TwitterCard()]).ok
    html = files['post/index.html'].text()
    assert 'content="https://blog.example.com/images/post.jpg"' in html
    assert 'twitter:title' not in html
