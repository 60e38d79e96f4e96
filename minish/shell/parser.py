"""
Command Parser Module

Turns a raw input line into tokens and splits the tokens into
command groups at parallel separators.

Author: minish developers
Version: 1.0.0
"""

import re
from dataclasses import dataclass
from typing import List, Sequence, Tuple


REDIRECT_MARKER = '>'
PARALLEL_MARKER = '&'

# Characters that always form a token of their own
_SPECIAL_CHARS = re.compile(r'([>&])')
_WHITESPACE_RUN = re.compile(r'\s+')


CommandLine = Tuple[str, ...]


@dataclass(frozen=True)
class CommandGroup:
    """
    One command's tokens within a command line.

    A group is a view into the line: it stores where the command
    starts and how many tokens it spans, not the tokens themselves.
    """
    start: int
    length: int

    @property
    def end(self) -> int:
        return self.start + self.length

    def is_empty(self) -> bool:
        return self.length == 0

    def tokens(self, line: Sequence[str]) -> Sequence[str]:
        """Return this group's slice of the line."""
        return line[self.start:self.end]


class CommandParser:
    """
    Parses shell command lines.

    Handles:
    - Whitespace normalization (tabs, repeated spaces)
    - Standalone '>' and '&' markers, with or without surrounding spaces
    - Splitting a line into '&'-separated command groups

    Example:
        >>> parser = CommandParser()
        >>> line = parser.parse("ls -la>out.txt & echo hi")
        >>> parser.split_groups(line)
        [CommandGroup(start=0, length=4), CommandGroup(start=5, length=2)]
    """

    def parse(self, line: str) -> CommandLine:
        """
        Tokenize a command line.

        Args:
            line: Command line with the line terminator stripped

        Returns:
            Tuple of non-empty tokens; empty for a blank line
        """
        normalized = self._normalize(self._isolate_markers(line))
        if not normalized:
            return ()
        return tuple(normalized.split(' '))

    @staticmethod
    def _isolate_markers(line: str) -> str:
        """Surround every '>' and '&' with a space on each side."""
        return _SPECIAL_CHARS.sub(r' \1 ', line)

    @staticmethod
    def _normalize(line: str) -> str:
        """Collapse whitespace runs to one space and trim both ends."""
        return _WHITESPACE_RUN.sub(' ', line).strip(' ')

    @staticmethod
    def count_groups(line: Sequence[str]) -> int:
        """Number of command groups: one more than the '&' count."""
        return sum(1 for token in line if token == PARALLEL_MARKER) + 1

    def split_groups(self, line: Sequence[str]) -> List[CommandGroup]:
        """
        Split a token sequence into command groups.

        Every '&' closes the current group and the next group starts
        right after it; the marker itself belongs to neither group.
        A line without '&' is a single group covering every token.
        Leading, trailing or repeated markers produce empty groups.

        Args:
            line: Tokens of one command line

        Returns:
            Groups in line order, exactly count_groups(line) of them
        """
        groups: List[CommandGroup] = []
        start = 0

        for index, token in enumerate(line):
            if token == PARALLEL_MARKER:
                groups.append(CommandGroup(start=start, length=index - start))
                start = index + 1

        groups.append(CommandGroup(start=start, length=len(line) - start))
        return groups
