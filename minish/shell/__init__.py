"""
minish Shell Module

Provides the command-line shell:
- Command parsing and parallel grouping
- Output redirection detection
- Search path resolution
- Built-in commands
"""

from .parser import CommandParser, CommandGroup, CommandLine
from .redirection import (
    Redirection,
    RedirectionFault,
    RedirectionStatus,
    detect_redirection,
)
from .path_resolver import PathResolver, Resolution, ResolutionStatus
from .builtins import BuiltinCommands
from .shell import Shell, create_shell

__all__ = [
    'CommandParser',
    'CommandGroup',
    'CommandLine',
    'Redirection',
    'RedirectionFault',
    'RedirectionStatus',
    'detect_redirection',
    'PathResolver',
    'Resolution',
    'ResolutionStatus',
    'BuiltinCommands',
    'Shell',
    'create_shell',
]
