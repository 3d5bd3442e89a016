"""
A customized HTML renderer based on markdown-it-py.
"""
from __future__ import annotations

import typing as t
from urllib.parse import urlsplit

from markdown_it.renderer import RendererHTML

if t.TYPE_CHECKING:
    from collections.abc import Sequence
    from markdown_it.token import Token
    from markdown_it.utils import EnvType, OptionsDict


EXTERNAL_LINK_ATTRS = {
    'target': '_blank',
    'rel': 'noopener noreferrer',
}


def is_external(href: str, host: str | None) -> bool:
    """
    Whether @href points to an http(s) host other than @host.
    """
    parts = urlsplit(href)
    if parts.scheme not in ('http', 'https', ''):
        return False
    if not parts.netloc:
        return False
    return parts.hostname != host


class SpratRendererHTML(RendererHTML):
    """
    A markdown-it-py HTML renderer which opens links to other hosts in a new
    tab. The site host is read from `env['site_host']`.
    """
    def link_open(self, tokens: Sequence[Token], idx: int, options: OptionsDict, env: EnvType):
        token = tokens[idx]
        href = str(token.attrGet('href') or '')
        if env.get('external_links', True) and is_external(href, env.get('site_host')):
            for name, value in EXTERNAL_LINK_ATTRS.items():
                if token.attrGet(name) is None:
                    token.attrSet(name, value)
        return self.renderToken(tokens, idx, options, env)
