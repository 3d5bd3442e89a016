"""
Sprat is a small static blog builder: an ordered chain of plugins transforming
an in-memory map of source files into a rendered site.
"""
from .collection import Collections, build_collection
from .content import CodeHighlight, Excerpts, Markdown
from .core import (
    BuildResult,
    BuildSettings,
    ConfigurationError,
    Context,
    FileMap,
    FileRecord,
    PipelineError,
    Plugin,
    PluginUnavailableException,
    SiteMetadata,
    SpratError,
)
from .helpers import post_cell, post_illustration, post_share
from .jinja import Layouts
from .metadata import Author, DefaultValues, Drafts, Updated
from .pagination import Page, Pagination, paginate
from .paths import GlobMatcher, REMatcher
from .permalinks import Permalinks
from .sitemap import Sitemap
from .social import Disqus, TwitterCard
