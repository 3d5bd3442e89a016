"""
Internal utilities for progress bars and styled console output.
"""
import typing as t

import rich.console
import rich.progress


_consoles = {
    'stdout': rich.console.Console(),
    'stderr': rich.console.Console(stderr=True),
}

T = t.TypeVar('T')


def track_progress(iterable: t.Sequence[T], desc: str) -> t.Iterable[T]:
    """
    Progress tracker drawing a transient rich progress bar on stdout.
    """
    yield from rich.progress.track(
        iterable,
        desc,
        console=_consoles['stdout'],
        transient=True,
    )


def print_with_style(*args, sep=' ', end='\n', file: str = 'stdout', style=None):
    """
    print() replacement writing through a rich console with an optional style.
    """
    _consoles[file].print(*args, sep=sep, end=end, style=style)
