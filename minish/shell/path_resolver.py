"""
Path Resolver Module

Owns the shell's search path and finds the directory that holds an
executable for a bare command name.

Author: minish developers
Version: 1.0.0
"""

import os
from dataclasses import dataclass
from enum import Enum, auto
from typing import Iterable, Optional, Tuple

from minish.logger import get_logger


# Directories that are always taken verbatim by set_paths()
DEFAULT_DIRECTORIES: Tuple[str, ...] = ('/bin', '/usr/bin')


class ResolutionStatus(Enum):
    """Outcome of a command lookup."""
    FOUND = auto()
    NOT_FOUND = auto()
    EMPTY_COMMAND = auto()


@dataclass(frozen=True)
class Resolution:
    """Result of resolving a command name against the search path."""
    status: ResolutionStatus
    index: Optional[int] = None
    directory: Optional[str] = None

    @property
    def found(self) -> bool:
        return self.status is ResolutionStatus.FOUND


NOT_FOUND = Resolution(ResolutionStatus.NOT_FOUND)
EMPTY_COMMAND = Resolution(ResolutionStatus.EMPTY_COMMAND)


class PathResolver:
    """
    Search path for external commands.

    The path list is an immutable tuple. set_paths() swaps in a new
    tuple, so a lookup never sees a half-built list.

    Example:
        >>> resolver = PathResolver(['/bin'])
        >>> resolver.resolve('ls')
        Resolution(status=<ResolutionStatus.FOUND: 1>, index=0, directory='/bin')
    """

    def __init__(self, initial: Iterable[str] = ('/bin',)):
        self._logger = get_logger('path')
        self._paths: Tuple[str, ...] = ()
        self.set_paths(initial)

    @property
    def paths(self) -> Tuple[str, ...]:
        return self._paths

    def __len__(self) -> int:
        return len(self._paths)

    def set_paths(self, entries: Iterable[str]) -> None:
        """
        Replace the whole search path.

        Known default directories and absolute entries are kept as
        given. Relative entries are resolved against the current
        working directory right now, not at lookup time.

        Args:
            entries: Directories in lookup order; may be empty
        """
        self._paths = tuple(self._absolute(entry) for entry in entries)
        self._logger.debug(
            "Search path replaced",
            context={'paths': ':'.join(self._paths)}
        )

    @staticmethod
    def _absolute(entry: str) -> str:
        if entry in DEFAULT_DIRECTORIES or entry.startswith('/'):
            return entry
        return os.path.join(os.getcwd(), entry)

    def clear(self) -> None:
        """Release the search path."""
        self._paths = ()

    def resolve(self, command: str) -> Resolution:
        """
        Find the first search path entry holding an executable.

        Args:
            command: Command name as typed

        Returns:
            FOUND with the entry's index and directory, NOT_FOUND, or
            EMPTY_COMMAND for an empty name (nothing to run, not an error)
        """
        if command == '':
            return EMPTY_COMMAND

        for index, directory in enumerate(self._paths):
            candidate = f"{directory}/{command}"
            if os.path.isfile(candidate) and os.access(candidate, os.X_OK):
                return Resolution(ResolutionStatus.FOUND, index, directory)

        return NOT_FOUND
