"""
minish - A minimal command-line shell

Reads command lines interactively or from a batch file, resolves
commands against a configurable search path and runs them as child
processes, with optional output redirection and '&'-separated
parallel batches.
"""

__version__ = "1.0.0"
__author__ = "minish developers"

from .shell.shell import Shell, create_shell

__all__ = [
    'Shell',
    'create_shell',
]
