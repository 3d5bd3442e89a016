"""
Loading a source tree into a FileMap and writing a FileMap back to disk.
"""
from __future__ import annotations

import shutil
import typing as t
from dataclasses import dataclass, field
from pathlib import Path

from .components.md_frontmatter import (
    FrontMatterParser,
    FrontMatterParserName,
    get_frontmatter_parser,
    split_frontmatter,
)
from .pretty_utils import track_progress


ENCODING = 'utf-8'


@dataclass
class FileRecord:
    """
    A single file in the build, keyed by its relative path in a `FileMap`.
    """
    content: bytes
    metadata: dict[str, t.Any] = field(default_factory=dict)

    def text(self, encoding: str = ENCODING) -> str:
        return self.content.decode(encoding)

    def set_text(self, text: str, encoding: str = ENCODING):
        self.content = text.encode(encoding)


FileMap = dict[str, FileRecord]


def find_inputs(path: Path):
    """
    Recursively yield every file below @path in a stable order, skipping the
    directories themselves.
    """
    for candidate in sorted(path.iterdir()):
        if candidate.is_dir():
            yield from find_inputs(candidate)
        else:
            yield candidate


def read_record(path: Path, parser: FrontMatterParser) -> FileRecord:
    """
    Read a single file. UTF-8 text gets its front matter split off into
    metadata; anything else is kept as raw bytes.
    """
    raw = path.read_bytes()
    try:
        text = raw.decode(ENCODING)
    except UnicodeDecodeError:
        return FileRecord(raw)

    meta, body = split_frontmatter(text, parser)
    if not meta and body == text:
        return FileRecord(raw)
    return FileRecord(body.encode(ENCODING), meta)


def load_files(source_dir: Path, frontmatter: FrontMatterParserName | FrontMatterParser = 'yaml') -> FileMap:
    """
    Read every file below @source_dir into a FileMap keyed by POSIX-style
    relative path.
    """
    if not source_dir.is_dir():
        raise NotADirectoryError(f'Source directory {source_dir} does not exist')
    parser = get_frontmatter_parser(frontmatter)
    return {
        path.relative_to(source_dir).as_posix(): read_record(path, parser)
        for path in find_inputs(source_dir)
    }


def _rm_children(path: Path):
    if not path.exists():
        return
    for child in path.iterdir():
        if child.is_dir():
            shutil.rmtree(child)
        else:
            child.unlink()


def write_files(files: FileMap, destination_dir: Path, clean: bool = False):
    """
    Write every record in @files below @destination_dir. Existing files that
    are not part of the FileMap are left alone unless @clean is set.
    """
    if clean:
        _rm_children(destination_dir)
    for key, record in track_progress(list(files.items()), 'Writing...'):
        target_path = destination_dir / key
        target_path.parent.mkdir(parents=True, exist_ok=True)
        target_path.write_bytes(record.content)
