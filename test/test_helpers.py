import re

import pytest

from sprat.helpers import post_cell, post_illustration, post_share


def desktop(classes: str) -> int:
    match = re.match(r'mdl-cell--(\d+)-col-desktop mdl-cell--8-col-tablet mdl-cell--4-col-phone$', classes)
    assert match
    return int(match[1])


@pytest.mark.parametrize('index,expected', [
    (0, 12), (1, 6), (2, 6), (3, 12), (4, 7), (5, 5), (6, 5), (7, 7), (8, 12), (9, 12), (15, 12),
])
def test_post_cell_long_lists(index: int, expected: int):
    assert desktop(post_cell(index, 8)) == expected
    assert desktop(post_cell(index, 20)) == expected


def test_post_cell_output():
    assert post_cell(1, 10) == 'mdl-cell--6-col-desktop mdl-cell--8-col-tablet mdl-cell--4-col-phone'


@pytest.mark.parametrize('length', range(1, 8))
def test_post_cell_short_lists_wrap_last_two(length: int):
    table = [12, 6, 6, 12, 7, 5, 5, 7]
    for index in range(length):
        if index >= length - 2:
            assert desktop(post_cell(index, length)) == 12
        else:
            assert desktop(post_cell(index, length)) == table[index]


def test_post_cell_short_list_example():
    assert [desktop(post_cell(i, 6)) for i in range(6)] == [12, 6, 6, 12, 12, 12]
    assert [desktop(post_cell(i, 7)) for i in range(7)] == [12, 6, 6, 12, 7, 12, 12]


def test_post_illustration():
    markup = str(post_illustration('/images/post', 'A "quoted" post'))
    sources = re.findall(r'<source[^>]*>', markup)
    assert len(sources) == 6
    assert 'media="(min-width: 1025px)"' in sources[0]
    assert 'type="image/webp"' in sources[0]
    assert 'srcset="/images/post.jpg 1x, /images/post@2x.jpg 2x"' in sources[1]
    assert 'media="(min-width: 768px)"' in sources[2]
    assert '/images/post-tablet@2x.webp 2x' in sources[2]
    assert 'media' not in sources[4]
    assert '/images/post-mobile.jpg 1x' in sources[5]
    assert '<img src="/images/post.jpg" alt="A &#34;quoted&#34; post" class="safe-picture__img">' in markup


@pytest.mark.parametrize('siteurl,path,link', [
    ('https://blog.example.com/', 'blog/post/', 'https://blog.example.com/blog/post/'),
    ('https://blog.example.com/sub/', 'post/', 'https://blog.example.com/sub/post/'),
    ('https://blog.example.com/sub/', '/post/', 'https://blog.example.com/post/'),
    ('https://blog.example.com/', 'https://other.example.org/x', 'https://other.example.org/x'),
])
def test_post_share(siteurl: str, path: str, link: str):
    markup = str(post_share(siteurl, path, id=3))
    assert f'href="//twitter.com/home?status={link}"' in markup
    assert f'href="//www.facebook.com/sharer.php?u={link}"' in markup
    assert 'id="share-menu-3"' in markup
    assert 'for="share-menu-3"' in markup
