"""
This is the toolkit for Sprat's own CLI, but offers an accessible API for
building project-specific CLIs.
"""
from __future__ import annotations

import argparse
import importlib
import runpy
import sys
import typing as t
from pathlib import Path

from .core import (
    BuildResult,
    BuildSettings,
    Context,
    Plugin,
    PluginUnavailableException,
    SiteMetadata,
    SpratError,
)
from .pretty_utils import print_with_style


def add_url_argument(parser: argparse.ArgumentParser):
    parser.add_argument('--url',
                        help="override the site's base URL for this build",
                        dest='url',
                        default=None)


def parse_url_args(argv: list[str] | None = None, **kw):
    """
    Parse the only option a config file's own CLI accepts, `--url`.
    """
    parser = argparse.ArgumentParser(**kw)
    add_url_argument(parser)
    return parser.parse_args(argv)


def with_url(metadata: SiteMetadata | None, url: str | None) -> SiteMetadata:
    """
    Return a copy of @metadata with `siteurl` replaced by @url, if given.
    """
    final = SiteMetadata(**(metadata or {}))
    if url:
        final['siteurl'] = url
    return final


def report(result: BuildResult):
    """
    Print a single line describing the outcome of a build.
    """
    if result.ok:
        print_with_style('Build completed', style='green')
    elif result.plugin:
        print_with_style(
            f'Build failed in {result.plugin.name}: {result.error!r}',
            file='stderr',
            style='red'
        )
    else:
        print_with_style(f'Build failed: {result.error!r}', file='stderr', style='red')


def pprint_missing_deps(plugin: Plugin):
    """
    Prettily display an error for the given Plugin with missing dependencies.
    """
    print_with_style(
        f'{plugin} is unavailable due to missing dependencies!',
        file='stderr',
        style='red'
    )
    for dep in plugin.get_dependencies():
        if dep.satisfied:
            print_with_style(f'✓ {dep}', style='green')
        else:
            print_with_style(f'✗ {dep}: {dep.install_hint}', style='red')


def build(settings: BuildSettings,
          metadata: SiteMetadata | None,
          plugins: list[Plugin],
          url: str | None = None,
          context_cls: t.Type[Context] = Context) -> BuildResult:
    """
    Build a new Context, apply a base URL override, run it, and report the
    outcome.
    """
    context = context_cls(settings, with_url(metadata, url), plugins)
    result = context.run()
    report(result)
    return result


def run_from_plugins(settings: BuildSettings,
                     metadata: SiteMetadata | None,
                     plugins: list[Plugin],
                     context_cls: t.Type[Context] = Context,
                     argv: list[str] | None = None,
                     **kw):
    """
    Entry point for config files run as scripts. Parses `--url`, builds, and
    exits with status 1 if the build failed.
    """
    args = parse_url_args(argv, **kw)
    try:
        result = build(settings, metadata, plugins, args.url, context_cls)
    except PluginUnavailableException as e:
        pprint_missing_deps(e.plugin)
        sys.exit(1)
    if not result.ok:
        sys.exit(1)


def load_config(args: argparse.Namespace) -> dict[str, t.Any]:
    if args.config_file:
        return runpy.run_path(str(args.config_file))
    return vars(importlib.import_module(args.module))


def main(arguments: list[str] | None = None):
    """
    Sprat main function. Loads `SETTINGS`, `METADATA` and `PLUGINS` from a
    config file or module, then executes a build with them.
    """
    parser = argparse.ArgumentParser(prog='sprat', description='Build a sprat site.')
    group = parser.add_mutually_exclusive_group(required=True)
    group.add_argument('-m',
                       help='import path of a config module to build',
                       type=str,
                       dest='module',
                       default=None)
    group.add_argument('config_file',
                       nargs='?',
                       help='file path to a config file to build',
                       type=Path,
                       default=None)
    add_url_argument(parser)

    args = parser.parse_args(arguments)
    try:
        namespace = load_config(args)
    except PluginUnavailableException as e:
        pprint_missing_deps(e.plugin)
        sys.exit(1)
    except (ImportError, SpratError) as e:
        print_with_style(f'Build failed: {e!r}', file='stderr', style='red')
        sys.exit(1)

    settings: BuildSettings | None = namespace.get('SETTINGS')
    metadata: SiteMetadata | None = namespace.get('METADATA')
    plugins: list[Plugin] | None = namespace.get('PLUGINS')
    if settings is None or plugins is None:
        print_with_style(
            'Sprat config files must have SETTINGS and PLUGINS attributes!',
            file='stderr',
            style='red'
        )
        sys.exit(1)

    try:
        result = build(settings, metadata, plugins, args.url)
    except PluginUnavailableException as e:
        pprint_missing_deps(e.plugin)
        sys.exit(1)
    except SpratError as e:
        print_with_style(f'Build failed: {e!r}', file='stderr', style='red')
        sys.exit(1)
    if not result.ok:
        sys.exit(1)
