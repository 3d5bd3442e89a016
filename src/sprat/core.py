"""
Core classes and types for the Sprat build pipeline.
"""
from __future__ import annotations

import abc
import asyncio
import inspect
import typing as t
from dataclasses import dataclass, field
from pathlib import Path

from .dependencies import Dependency
from .components.md_frontmatter import FrontMatterError
from .files import FileMap, FileRecord, load_files, write_files

if t.TYPE_CHECKING:
    from collections.abc import Set
    from .components.md_frontmatter import FrontMatterParserName


SettingsDir = t.Literal['source_dir', 'destination_dir']


class BuildSettings(t.TypedDict, total=False):
    """
    TypedDict for defining build settings in a Sprat config file.
    """
    source_dir: Path
    destination_dir: Path
    clean: bool
    frontmatter: FrontMatterParserName


class SiteMetadata(t.TypedDict, total=False):
    """
    TypedDict for the site-wide metadata shared with every plugin and
    template. Unlisted keys are allowed and passed through untouched.
    """
    locale: str
    sitename: str
    siteurl: str
    sitelogo: str
    siteogimg: str
    description: str
    theme_color: str


@dataclass
class BuildResult:
    """
    Outcome of running the plugin chain. A failed result names the plugin that
    raised, if any, and carries the exception.
    """
    files: FileMap
    error: BaseException | None = None
    plugin: Plugin | None = None
    completed: list[str] = field(default_factory=list)

    @property
    def ok(self):
        return self.error is None

    def raise_for_error(self):
        if self.error is not None:
            raise self.error


class Context:
    """
    A context and configuration class for Sprat builds. Holds the build
    settings, the site metadata, the bound plugins, and the collections built
    during a run.
    """
    def __init__(self,
                 settings: BuildSettings,
                 metadata: SiteMetadata | None = None,
                 plugins: list[Plugin] | None = None):
        self.settings = settings
        self.metadata: dict[str, t.Any] = dict(metadata or {})
        self.collections: dict[str, list[FileRecord]] = {}
        self.plugins: list[Plugin] = []
        for plugin in plugins or []:
            self.plugins.append(plugin)
            self.bind(plugin)

    @t.overload
    def __getitem__(self, key: SettingsDir) -> Path: ...
    @t.overload
    def __getitem__(self, key: t.Literal['clean']) -> bool: ...
    @t.overload
    def __getitem__(self, key: t.Literal['frontmatter']) -> FrontMatterParserName: ...
    def __getitem__(self, key):
        if key == 'clean':
            return self.settings.get('clean', False)
        if key == 'frontmatter':
            return self.settings.get('frontmatter', 'yaml')
        return self.settings[key]

    @property
    def siteurl(self) -> str:
        return self.metadata.get('siteurl', '')

    def bind(self, plugin: Plugin):
        """
        Bind a Plugin to this Context, checking to ensure its availability.
        """
        if not plugin.is_available():
            raise PluginUnavailableException(plugin)
        plugin.bind(self)

    def read(self) -> FileMap:
        """
        Load the source directory into a new FileMap.
        """
        return load_files(self['source_dir'], self['frontmatter'])

    def write(self, files: FileMap):
        """
        Write a FileMap to the destination directory.
        """
        write_files(files, self['destination_dir'], clean=self['clean'])

    def finish(self):
        """
        Let every plugin persist state kept between builds. Called once the
        output of a successful build has been written.
        """
        for plugin in self.plugins:
            plugin.finish()

    async def process(self, files: FileMap) -> BuildResult:
        """
        Apply every plugin to @files in order. Plugins returning an awaitable
        are awaited before the next one starts. The first failure stops the
        chain.
        """
        self.collections = {}
        result = BuildResult(files)
        for plugin in self.plugins:
            try:
                outcome = plugin(files)
                if inspect.isawaitable(outcome):
                    await outcome
            except Exception as e:
                result.error = e
                result.plugin = plugin
                return result
            result.completed.append(plugin.name)
        return result

    def run(self) -> BuildResult:
        """
        Read the source directory, process it, and write the destination
        directory if and only if every plugin succeeded.
        """
        try:
            files = self.read()
        except (OSError, FrontMatterError, SpratError) as e:
            return BuildResult({}, error=e)

        result = asyncio.run(self.process(files))
        if result.ok:
            try:
                self.write(result.files)
                self.finish()
            except OSError as e:
                result.error = e
        return result


class Plugin(abc.ABC):
    """
    Abstract base class for Plugins, the individual transforms making up a
    Sprat build chain.
    """
    context: Context
    _plugin_registry: list[t.Type[Plugin]] = []

    def __init_subclass__(cls, **kw):
        super().__init_subclass__(**kw)
        cls._plugin_registry.append(cls)

    @classmethod
    def get_all_plugins(cls):
        """
        Return a list of all currently known Plugins.
        """
        return list(cls._plugin_registry)

    @classmethod
    def is_available(cls) -> bool:
        """
        Return whether this Plugin's requirements are installed.
        """
        return all(d.satisfied for d in cls.get_dependencies())

    @classmethod
    def get_dependencies(cls) -> Set[Dependency]:
        """
        Return the requirements for this Plugin.
        """
        return set()

    @property
    def name(self) -> str:
        return self.__class__.__name__

    def __repr__(self):
        return f'{self.name}()'

    def bind(self, context: Context):
        """
        Bind this Plugin to a Context.
        """
        self.context = context

    def finish(self):
        """
        Persist any state this Plugin keeps between builds. Does nothing by
        default.
        """

    @abc.abstractmethod
    def __call__(self, files: FileMap) -> None | t.Awaitable[None]:
        ...


class SpratError(Exception):
    """
    Base class for errors raised by Sprat.
    """


class ConfigurationError(SpratError):
    """
    Raised for invalid plugin options, patterns, or missing required metadata.
    """


class PipelineError(SpratError):
    """
    Raised when a plugin cannot complete its transform, such as when two files
    would be written to the same path.
    """


class PluginUnavailableException(SpratError):
    """
    Exception raised when a plugin to be used is unavailable due to missing
    dependencies.
    """
    def __init__(self, plugin: Plugin, *args: t.Any):
        self.plugin = plugin
        super().__init__(*args)
