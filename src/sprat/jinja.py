"""
Rendering files into Jinja layouts.
"""
from __future__ import annotations

import typing as t
from pathlib import Path

from .core import FileMap, FileRecord, Plugin
from .dependencies import PipDependency
from .helpers import HELPERS
from .paths import PatternLike, as_matcher

if t.TYPE_CHECKING:
    from jinja2 import Environment


class Layouts(Plugin):
    """
    Render each matching file into a Jinja layout. The layout is the file's
    `layout` metadata, or @default if it has none.

    Templates receive the site metadata, the file's own metadata (which takes
    precedence), `site`, `collections`, `key` (the FileMap key), and the
    file's content as `contents`. The template helpers from `sprat.helpers`
    and any @extra_globals are available globally.
    """
    encoding = 'utf-8'

    @classmethod
    def get_dependencies(cls):
        return {
            PipDependency('jinja2'),
        }

    def __init__(self,
                 directory: Path,
                 default: str | None = None,
                 partials: Path | None = None,
                 pattern: PatternLike = '**/*.html',
                 env: Environment | None = None,
                 extra_globals: dict[str, t.Any] | None = None):
        """
        :param directory: Directory holding the layouts.
        :param default: Layout for files without `layout` metadata. Files
            with neither are left untouched.
        :param partials: Optional directory searched for included templates.
        :param pattern: Glob or Matcher selecting the files to render.
        :param env: A custom Jinja2 `Environment`. A reasonable default will be
            provided if not specified.
        :param extra_globals: Extra globals for every template.
        """
        self.directory = directory
        self.default = default
        self.partials = partials
        self.matcher = as_matcher(pattern)
        self.extra_globals = extra_globals or {}
        self._env = env
        if env:
            self._install_globals(env)

    @property
    def env(self):
        """
        Returns the Jinja `Environment` for this Plugin, creating and caching
        it if necessary.
        """
        if not self._env:
            from jinja2 import Environment, FileSystemLoader, select_autoescape
            search_path = [self.directory]
            if self.partials:
                search_path.append(self.partials)
            self._env = Environment(
                loader=FileSystemLoader(search_path),
                autoescape=select_autoescape(),
            )
            self._install_globals(self._env)
        return self._env

    def _install_globals(self, env: Environment):
        env.globals.update(HELPERS)
        env.globals.update(self.extra_globals)

    def template_params(self, key: str, record: FileRecord) -> dict[str, t.Any]:
        from markupsafe import Markup
        return {
            **self.context.metadata,
            **record.metadata,
            'site': self.context.metadata,
            'collections': self.context.collections,
            'key': key,
            'contents': Markup(record.text(self.encoding)),
        }

    def __call__(self, files: FileMap):
        for key, record in files.items():
            if not self.matcher(key):
                continue
            layout = record.metadata.get('layout', self.default)
            if not layout:
                continue
            template = self.env.get_template(layout)
            record.set_text(template.render(self.template_params(key, record)), self.encoding)
