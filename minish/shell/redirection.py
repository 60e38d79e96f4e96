"""
Output Redirection Detection

Validates the position of the '>' marker in one command's tokens.
The only accepted form is `command [args...] > file`, with the
marker and the file as the last two tokens.

Author: minish developers
Version: 1.0.0
"""

from dataclasses import dataclass
from enum import Enum, auto
from typing import Optional, Sequence

from .parser import REDIRECT_MARKER


class RedirectionStatus(Enum):
    """Outcome of redirection detection."""
    NONE = auto()
    VALID = auto()
    INVALID = auto()


class RedirectionFault(Enum):
    """Why a redirection was rejected."""
    TOO_MANY_MARKERS = "too many redirection markers"
    MISSING_COMMAND = "no command before redirection marker"
    MISSING_FILE = "no file after redirection marker"
    TOO_MANY_DESTINATIONS = "more than one token after redirection marker"


@dataclass(frozen=True)
class Redirection:
    """Result of scanning a command for output redirection."""
    status: RedirectionStatus
    position: Optional[int] = None
    target: Optional[str] = None
    fault: Optional[RedirectionFault] = None

    @property
    def is_valid(self) -> bool:
        return self.status is RedirectionStatus.VALID

    @property
    def is_invalid(self) -> bool:
        return self.status is RedirectionStatus.INVALID

    def argv(self, tokens: Sequence[str]) -> Sequence[str]:
        """
        Effective argument vector for the command.

        With a valid redirection the marker and the target are cut
        off; otherwise the tokens are returned unchanged.
        """
        if self.is_valid:
            return tokens[:self.position]
        return tokens


NO_REDIRECTION = Redirection(RedirectionStatus.NONE)


def detect_redirection(tokens: Sequence[str]) -> Redirection:
    """
    Scan a command's tokens for an output redirection.

    Rules, first match wins:
    1. no marker: no redirection
    2. more than one marker: invalid
    3. marker first: invalid, there is no command
    4. marker last: invalid, there is no file
    5. marker anywhere but second-to-last: invalid, `cmd > a b`
       is rejected instead of picking one of the files
    6. otherwise: redirect to the last token

    Args:
        tokens: One command group's tokens

    Returns:
        Redirection describing the outcome
    """
    positions = [i for i, token in enumerate(tokens) if token == REDIRECT_MARKER]

    if not positions:
        return NO_REDIRECTION

    if len(positions) > 1:
        return _invalid(RedirectionFault.TOO_MANY_MARKERS)

    position = positions[0]
    last = len(tokens) - 1

    if position == 0:
        return _invalid(RedirectionFault.MISSING_COMMAND)
    if position == last:
        return _invalid(RedirectionFault.MISSING_FILE)
    if position != last - 1:
        return _invalid(RedirectionFault.TOO_MANY_DESTINATIONS)

    return Redirection(
        status=RedirectionStatus.VALID,
        position=position,
        target=tokens[last],
    )


def _invalid(fault: RedirectionFault) -> Redirection:
    return Redirection(status=RedirectionStatus.INVALID, fault=fault)
