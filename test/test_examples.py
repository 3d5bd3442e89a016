import json
import pathlib
from xml.etree import ElementTree

import pytest

from sprat.test_harness import read_output, run_example


EXAMPLE_PATH = pathlib.Path(__file__).parent.parent / 'examples' / 'blog.py'


@pytest.fixture(scope='module')
def built(tmp_path_factory: pytest.TempPathFactory):
    tmp_path = tmp_path_factory.mktemp('blog')
    context, result = run_example(EXAMPLE_PATH, tmp_path)
    result.raise_for_error()
    return context, result, tmp_path


def test_example_outputs(built):
    context, _, _ = built
    output = context['destination_dir']
    assert sorted(p.relative_to(output).as_posix() for p in output.rglob('*') if p.is_file()) == [
        'about/index.html',
        'blog/2017/hello-world/index.html',
        'blog/2018/javascript-tips/index.html',
        'images/site.css',
        'index.html',
        'sitemap.xml',
    ]


def test_example_drafts_removed(built):
    _, result, _ = built
    assert not any('work-in-progress' in key for key in result.files)


def test_example_index_lists_newest_first(built):
    context, _, _ = built
    index = read_output(context, 'index.html')
    assert index.index('JavaScript Tips') < index.index('Hello World')
    assert 'Page 1 of 1' in index
    assert 'mdl-cell--12-col-desktop' in index
    assert '<picture class="safe-picture">' in index
    assert 'href="/about/"' in index


def test_example_post(built):
    context, result, _ = built
    post = read_output(context, 'blog/2018/javascript-tips/index.html')
    assert '<title>JavaScript Tips | Example Blog</title>' in post
    assert 'class="language-js highlight"' in post
    assert 'target="_blank" rel="noopener noreferrer"' in post
    assert '//twitter.com/home?status=https://blog.example.com/blog/2018/javascript-tips/' in post
    assert '<meta name="twitter:image" content="https://blog.example.com/images/js-tips.jpg">' in post
    assert 'disqus_thread' in post
    assert '<p class="post__author">Jane Doe</p>' in post
    record = result.files['blog/2018/javascript-tips/index.html']
    assert record.metadata['excerpt'].startswith('<p>Some tips')


def test_example_sitemap(built):
    context, _, _ = built
    root = ElementTree.fromstring(read_output(context, 'sitemap.xml'))
    locs = [el.text for el in root.iter('{http://www.sitemaps.org/schemas/sitemap/0.9}loc')]
    assert locs == [
        'https://blog.example.com/',
        'https://blog.example.com/about/',
        'https://blog.example.com/blog/2017/hello-world/',
        'https://blog.example.com/blog/2018/javascript-tips/',
    ]


def test_example_tracking_file(built):
    _, _, tmp_path = built
    data = json.loads((tmp_path / 'service-files' / '.updated.json').read_text())
    assert 'blog/2017/hello-world.md' in data
    assert 'blog/2018/work-in-progress.md' in data


def test_example_url_override(tmp_path: pathlib.Path):
    context, result = run_example(EXAMPLE_PATH, tmp_path, url='https://preview.example.net/')
    assert result.ok
    post = read_output(context, 'blog/2017/hello-world/index.html')
    assert '//www.facebook.com/sharer.php?u=https://preview.example.net/blog/2017/hello-world/' in post
