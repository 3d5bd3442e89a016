import asyncio
from pathlib import Path

import pytest

from sprat.collection import Collections
from sprat.core import BuildSettings, ConfigurationError, Context, FileRecord, PipelineError
from sprat.pagination import Pagination, paginate


def records(count: int) -> list[FileRecord]:
    return [FileRecord(b'', {'title': str(i)}) for i in range(count)]


def test_paginate_sizes_and_links():
    items = records(17)
    pages = paginate(items, 8, 'blog/page/:num/index.html')
    assert [len(p.files) for p in pages] == [8, 8, 1]
    assert [p.page_number for p in pages] == [1, 2, 3]
    assert all(p.total_pages == 3 for p in pages)
    assert pages[0].previous_page_path is None
    assert pages[0].next_page_path == 'blog/page/2/index.html'
    assert pages[1].previous_page_path == 'blog/page/1/index.html'
    assert pages[2].next_page_path is None
    assert pages[2].files[0] is items[16]


def test_paginate_no_page_one():
    pages = paginate(records(17), 8, 'blog/page/:num/index.html', first='index.html', no_page_one=True)
    assert pages[0].path == 'index.html'
    assert pages[1].path == 'blog/page/2/index.html'
    assert pages[1].previous_page_path == 'index.html'
    assert all(p.first_page_path == 'index.html' for p in pages)


def test_paginate_exact_multiple():
    pages = paginate(records(16), 8, ':num.html')
    assert [len(p.files) for p in pages] == [8, 8]
    assert pages[-1].is_last


def test_paginate_empty():
    assert paginate([], 8, ':num.html') == []


@pytest.mark.parametrize('per_page', [0, -3])
def test_paginate_rejects_non_positive_page_size(per_page: int):
    with pytest.raises(ConfigurationError):
        paginate(records(3), per_page, ':num.html')


def test_paginate_requires_placeholder():
    with pytest.raises(ConfigurationError):
        paginate(records(3), 2, 'blog/page.html')


def test_pagination_plugin_rejects_bad_options():
    with pytest.raises(ConfigurationError):
        Pagination({'posts': {'per_page': 0, 'path': ':num.html'}})
    with pytest.raises(ConfigurationError):
        Pagination({'posts': {'per_page': 2}})


def build(tmp_path: Path, files, plugins):
    context = Context(BuildSettings(source_dir=tmp_path, destination_dir=tmp_path / 'build'), {}, plugins)
    return context, asyncio.run(context.process(files))


def post_files(count: int):
    return {f'blog/{i:02}.md': FileRecord(b'', {'created': i}) for i in range(count)}


def test_pagination_plugin_creates_page_files(tmp_path: Path):
    files = post_files(10)
    _, result = build(tmp_path, files, [
        Collections({'posts': {'pattern': 'blog/*.md', 'sort_by': 'created', 'reverse': True}}),
        Pagination({'posts': {
            'per_page': 4,
            'layout': 'blog.html',
            'first': 'index.html',
            'no_page_one': True,
            'path': 'blog/page/:num/index.html',
            'page_metadata': {'title': 'Blog'},
        }}),
    ])
    assert result.ok
    assert 'blog/page/1/index.html' not in files
    first = files['index.html']
    assert first.metadata['layout'] == 'blog.html'
    assert first.metadata['title'] == 'Blog'
    page = first.metadata['pagination']
    assert page.page_number == 1
    assert [r.metadata['created'] for r in page.files] == [9, 8, 7, 6]
    assert files['blog/page/3/index.html'].metadata['pagination'].next_page_path is None


def test_pagination_plugin_copies_first_page(tmp_path: Path):
    files = post_files(3)
    _, result = build(tmp_path, files, [
        Collections({'posts': {'pattern': 'blog/*.md'}}),
        Pagination({'posts': {'per_page': 2, 'first': 'index.html', 'path': 'page/:num.html'}}),
    ])
    assert result.ok
    assert files['index.html'].metadata['pagination'] is files['page/1.html'].metadata['pagination']
    assert 'page/2.html' in files


def test_pagination_plugin_path_clash(tmp_path: Path):
    files = post_files(3)
    files['index.html'] = FileRecord(b'home')
    _, result = build(tmp_path, files, [
        Collections({'posts': {'pattern': 'blog/*.md'}}),
        Pagination({'posts': {'per_page': 2, 'first': 'index.html', 'no_page_one': True, 'path': 'page/:num.html'}}),
    ])
    assert isinstance(result.error, PipelineError)


def test_pagination_plugin_unknown_collection(tmp_path: Path):
    _, result = build(tmp_path, post_files(1), [
        Pagination({'posts': {'per_page': 2, 'path': 'page/:num.html'}}),
    ])
    assert isinstance(result.error, ConfigurationError)
