"""
Plugins turning Markdown into HTML and post-processing HTML content: syntax
highlighting and excerpts.
"""
from __future__ import annotations

import html
import re
import typing as t
from urllib.parse import urlsplit

from .core import FileMap, PipelineError, Plugin
from .dependencies import PipDependency
from .paths import PatternLike, as_matcher, replace_suffix


class Markdown(Plugin):
    """
    Render Markdown files to HTML with markdown-it-py, renaming `.md` keys to
    `.html`.

    Parses CommonMark with tables and strikethrough, supports `{.class}`
    attributes, and opens links to hosts other than the site's in a new tab.
    """
    @classmethod
    def get_dependencies(cls):
        return {
            PipDependency('markdown-it-py', check_name='markdown_it'),
            PipDependency('mdit_py_plugins', source='mdit-py-plugins'),
        }

    def __init__(self,
                 pattern: PatternLike = '**/*.md',
                 *,
                 typographer: bool = True,
                 external_links: bool = True,
                 anchors: bool = False):
        """
        :param pattern: Glob or Matcher selecting the files to render.
        :param typographer: Whether to enable smartquotes and replacements.
        :param external_links: Whether links to other hosts get
            `target="_blank"`.
        :param anchors: Whether to add ids to headings with
            `mdit_py_plugins.anchors`.
        """
        self.matcher = as_matcher(pattern)
        self.typographer = typographer
        self.external_links = external_links
        self.anchors = anchors
        self._md_processor: t.Callable[[str], str] | None = None

    @property
    def md_processor(self):
        """
        Returns the markdown processor for this Plugin, creating it if
        necessary.
        """
        if not self._md_processor:
            self._md_processor = self._build_processor()
        return self._md_processor

    def _build_processor(self):
        import markdown_it
        from mdit_py_plugins.anchors import anchors_plugin
        from mdit_py_plugins.attrs import attrs_block_plugin, attrs_plugin
        from .components import md_rendering

        processor = markdown_it.MarkdownIt(
            'commonmark',
            {'typographer': self.typographer},
            renderer_cls=md_rendering.SpratRendererHTML,
        )
        processor.enable(['strikethrough', 'table'])
        if self.typographer:
            processor.enable(['smartquotes', 'replacements'])
        if self.anchors:
            anchors_plugin(processor)
        attrs_plugin(processor)
        attrs_block_plugin(processor)

        def convert(md_string: str) -> str:
            env = {
                'site_host': urlsplit(self.context.siteurl).hostname,
                'external_links': self.external_links,
            }
            return processor.render(md_string, env=env)

        return convert

    def __call__(self, files: FileMap):
        for key in [k for k in files if self.matcher(k)]:
            record = files.pop(key)
            record.set_text(self.md_processor(record.text()))
            target = replace_suffix(key, '.html')
            if target in files:
                raise PipelineError(f'Rendering {key} would overwrite {target}')
            files[target] = record


CODE_BLOCK_RE = re.compile(
    r'<pre><code class="language-(?P<lang>[\w+#-]+)">(?P<code>.*?)</code></pre>',
    re.DOTALL,
)


class CodeHighlight(Plugin):
    """
    Highlight fenced code blocks in HTML files with Pygments.
    """
    @classmethod
    def get_dependencies(cls):
        return {
            PipDependency('Pygments', check_name='pygments'),
        }

    def __init__(self,
                 languages: list[str] | None = None,
                 tab_replace: str | None = None,
                 pattern: PatternLike = '**/*.html',
                 pygments_params: dict[str, t.Any] | None = None):
        """
        :param languages: Languages to highlight; all known languages if None.
        :param tab_replace: String replacing tab characters in code.
        :param pattern: Glob or Matcher selecting the files to process.
        :param pygments_params: Parameters to supply to
            `pygments.formatters.html.HtmlFormatter`.
        """
        self.languages = set(languages) if languages is not None else None
        self.tab_replace = tab_replace
        self.matcher = as_matcher(pattern)
        self.pygments_params = pygments_params or {}

    def highlight_code(self, code: str, lang: str) -> str | None:
        """
        Apply pygments syntax highlighting to the provided code, returning
        HTML markup, or None if @lang is unknown.
        """
        from pygments import highlight
        from pygments.formatters.html import HtmlFormatter
        from pygments.lexers import get_lexer_by_name
        from pygments.util import ClassNotFound
        try:
            lexer = get_lexer_by_name(lang)
        except ClassNotFound:
            return None
        return highlight(code, lexer, HtmlFormatter(nowrap=True, **self.pygments_params))

    def _replace(self, match: re.Match[str]) -> str:
        lang = match['lang']
        if self.languages is not None and lang not in self.languages:
            return match[0]
        code = html.unescape(match['code'])
        if self.tab_replace is not None:
            code = code.replace('\t', self.tab_replace)
        highlighted = self.highlight_code(code, lang)
        if highlighted is None:
            return match[0]
        return f'<pre><code class="language-{lang} highlight">{highlighted}</code></pre>'

    def __call__(self, files: FileMap):
        for key, record in files.items():
            if self.matcher(key) and record.content:
                record.set_text(CODE_BLOCK_RE.sub(self._replace, record.text()))


FIRST_PARAGRAPH_RE = re.compile(r'<p\b[^>]*>.*?</p>', re.DOTALL)


class Excerpts(Plugin):
    """
    Set `excerpt` to the first paragraph of HTML files that do not already
    have one.
    """
    def __init__(self, pattern: PatternLike = '**/*.html'):
        self.matcher = as_matcher(pattern)

    def __call__(self, files: FileMap):
        for key, record in files.items():
            if not self.matcher(key) or 'excerpt' in record.metadata:
                continue
            match = FIRST_PARAGRAPH_RE.search(record.text())
            record.metadata['excerpt'] = match[0] if match else ''
