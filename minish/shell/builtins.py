"""
Shell Built-in Commands

Implements the commands the shell runs itself: exit, cd and path.

Author: minish developers
Version: 1.0.0
"""

import os
from typing import Callable, Sequence

from minish.exceptions import BuiltinUsageError, DirectoryChangeError
from minish.logger import get_logger


class BuiltinCommands:
    """
    Built-in shell commands.

    These commands are executed directly by the shell without
    creating a new process, so they never count toward a parallel
    batch's join. Failures are raised; the shell reports them.
    """

    def __init__(self, shell):
        """
        Initialize built-in commands.

        Args:
            shell: The shell session the commands act on
        """
        self._shell = shell
        self._logger = get_logger('builtins')
        self._commands: dict[str, Callable[[Sequence[str]], None]] = {
            'exit': self.cmd_exit,
            'cd': self.cmd_cd,
            'path': self.cmd_path,
        }

    def get_commands(self) -> dict[str, Callable[[Sequence[str]], None]]:
        """Get all built-in commands."""
        return self._commands

    def is_builtin(self, name: str) -> bool:
        """Check if a command is built-in."""
        return name in self._commands

    def execute(self, name: str, args: Sequence[str]) -> None:
        """
        Execute a built-in command.

        Args:
            name: Command name
            args: Arguments after the command name

        Raises:
            KeyError: If `name` is not a built-in
            ShellException: If the command fails
        """
        self._logger.debug(f"Running built-in {name}", context={'args': ' '.join(args)})
        self._commands[name](args)

    # Command implementations

    def cmd_exit(self, args: Sequence[str]) -> None:
        """Terminate the shell immediately. Takes no arguments."""
        if args:
            raise BuiltinUsageError('exit', expected=0, received=len(args))
        self._shell.terminate(0)

    def cmd_cd(self, args: Sequence[str]) -> None:
        """Change the working directory. Takes exactly one argument."""
        if len(args) != 1:
            raise BuiltinUsageError('cd', expected=1, received=len(args))

        target = args[0]
        try:
            os.chdir(target)
        except (OSError, ValueError) as e:
            reason = getattr(e, 'strerror', None) or str(e)
            raise DirectoryChangeError(target, reason=reason) from e

    def cmd_path(self, args: Sequence[str]) -> None:
        """Replace the search path with the given directories."""
        self._shell.path_resolver.set_paths(args)
