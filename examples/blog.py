from pathlib import Path

from sprat import (
    Author,
    BuildSettings,
    CodeHighlight,
    Collections,
    DefaultValues,
    Disqus,
    Drafts,
    Excerpts,
    Layouts,
    Markdown,
    Pagination,
    Permalinks,
    SiteMetadata,
    Sitemap,
    TwitterCard,
    Updated,
)
from sprat.cli import run_from_plugins


ROOT = Path(__file__).parent / 'blog'
SITEURL = 'https://blog.example.com/'

PAGES_PATTERN = 'pages/*.md'
POSTS_PATTERN = 'blog/**/*.md'

SETTINGS = BuildSettings(
    source_dir=ROOT / 'source',
    destination_dir=Path('build/blog'),
    clean=False,
)
METADATA = SiteMetadata(
    locale='en',
    sitename='Example Blog',
    siteurl=SITEURL,
    sitelogo='/images/logo',
    siteogimg='images/blog-og.jpg',
    description='Blog about web development, but not only...',
    theme_color='#00bcd4',
    generatorname='sprat',
)
PLUGINS = [
    Updated(Path('service-files/.updated.json')),
    DefaultValues([
        {
            'pattern': PAGES_PATTERN,
            'defaults': {'layout': 'page.html'},
        },
        {
            'pattern': POSTS_PATTERN,
            'defaults': {
                'draft': False,
                'author': 'me',
                'comments': True,
                'twitter': True,
            },
        },
    ]),
    Drafts(),
    Collections({
        'pages': {'pattern': PAGES_PATTERN},
        'posts': {'pattern': POSTS_PATTERN, 'sort_by': 'created', 'reverse': True},
    }),
    Author('posts', {
        'me': {
            'name': 'Jane Doe',
            'url': SITEURL,
            'avatar': '/images/authors/jane/avatar',
            'github': 'https://github.com/example',
        },
    }),
    Pagination({
        'posts': {
            'per_page': 8,
            'layout': 'blog.html',
            'first': 'index.html',
            'no_page_one': True,
            'path': 'blog/page/:num/index.html',
        },
    }),
    Markdown(),
    CodeHighlight(languages=['js', 'html', 'css'], tab_replace='  '),
    Permalinks([
        {'match': {'collection': 'pages'}, 'pattern': ':title'},
    ]),
    Excerpts(),
    Layouts(ROOT / 'layouts', default='post.html', partials=ROOT / 'partials'),
    Disqus('example-blog'),
    TwitterCard(card='summary_large_image', site='@example'),
    Sitemap(),
]


if __name__ == '__main__':
    run_from_plugins(SETTINGS, METADATA, PLUGINS)
