"""
minish Shell Module

The shell session: reads lines, splits them into command groups and
dispatches each group to a built-in or to the process launcher.

Author: minish developers
Version: 1.0.0
"""

import sys
from typing import Iterable, NoReturn, Optional, Sequence

from .builtins import BuiltinCommands
from .parser import CommandParser
from .path_resolver import PathResolver, ResolutionStatus
from .redirection import detect_redirection
from minish.core.config_loader import Config, get_config
from minish.core.diagnostics import write_diagnostic
from minish.exceptions import (
    ShellException,
    RedirectionError,
    CommandNotFoundError,
)
from minish.logger import get_logger
from minish.process import ChildSet, ProcessLauncher


class Shell:
    """
    minish shell session.

    Owns everything that lives longer than one line: the search
    path, the built-in table and the launcher. A line with a single
    command group runs serially; a line with several '&'-separated
    groups launches them all and then joins exactly the children
    that were started.

    Example:
        >>> shell = Shell()
        >>> shell.execute_line("path /bin /usr/bin")
        >>> shell.execute_line("echo hi > out.txt & sleep 1")
    """

    def __init__(
        self,
        config: Optional[Config] = None,
        path_resolver: Optional[PathResolver] = None,
        launcher: Optional[ProcessLauncher] = None
    ):
        self._config = config or get_config()
        self._logger = get_logger('shell')
        self._parser = CommandParser()
        self._builtins = BuiltinCommands(self)
        self._path_resolver = path_resolver or PathResolver(self._config.shell.default_paths)
        self._launcher = launcher or ProcessLauncher(
            self._config.shell.system_bin_dir,
            self._config.shell.error_message,
        )

    @property
    def config(self) -> Config:
        return self._config

    @property
    def parser(self) -> CommandParser:
        return self._parser

    @property
    def builtins(self) -> BuiltinCommands:
        return self._builtins

    @property
    def path_resolver(self) -> PathResolver:
        return self._path_resolver

    @property
    def launcher(self) -> ProcessLauncher:
        return self._launcher

    def run(self) -> int:
        """
        Run the interactive shell.

        Prompts, reads a line from standard input and executes it,
        until end of input or the exit built-in.

        Returns:
            Exit status for the process
        """
        prompt = self._config.shell.prompt

        while True:
            try:
                line = input(prompt)
            except EOFError:
                break
            except KeyboardInterrupt:
                sys.stdout.write("\n")
                continue

            self.execute_line(line)

        return 0

    def run_script(self, lines: Iterable[str]) -> int:
        """
        Run commands from a batch source, one line at a time.

        Args:
            lines: Lines with or without their terminators

        Returns:
            Exit status for the process
        """
        for line in lines:
            self.execute_line(line.rstrip('\r\n'))

        return 0

    def execute_line(self, line: str) -> None:
        """
        Execute one command line.

        Args:
            line: Command line with the terminator stripped
        """
        tokens = self._parser.parse(line)

        if not tokens:
            return

        if self._parser.count_groups(tokens) == 1:
            self._dispatch(tokens)
            return

        children = ChildSet()
        groups = self._parser.split_groups(tokens)
        for group in groups:
            self._dispatch(group.tokens(tokens), children)

        self._logger.debug(
            "Joining parallel batch",
            context={'groups': len(groups), 'pids': sorted(children.pids)}
        )
        children.join()

    def _dispatch(
        self,
        command: Sequence[str],
        children: Optional[ChildSet] = None
    ) -> None:
        """Run one command group, reporting any recoverable failure."""
        try:
            self._execute_command(command, children)
        except ShellException as e:
            self.report_error(e)

    def _execute_command(
        self,
        command: Sequence[str],
        children: Optional[ChildSet] = None
    ) -> Optional[int]:
        """
        Route one command group.

        Args:
            command: The group's tokens (may be empty)
            children: Batch the command belongs to, None when serial

        Returns:
            PID of the launched child, or None if nothing was launched
        """
        name = command[0] if command else ''

        if self._builtins.is_builtin(name):
            self._builtins.execute(name, command[1:])
            return None

        return self._execute_external(name, command, children)

    def _execute_external(
        self,
        name: str,
        command: Sequence[str],
        children: Optional[ChildSet]
    ) -> Optional[int]:
        """Validate redirection, resolve the command and launch it."""
        redirection = detect_redirection(command)
        if redirection.is_invalid:
            raise RedirectionError(redirection.fault, list(command))

        resolution = self._path_resolver.resolve(name)

        if resolution.status is ResolutionStatus.EMPTY_COMMAND:
            return None
        if resolution.status is ResolutionStatus.NOT_FOUND:
            raise CommandNotFoundError(name, self._path_resolver.paths)

        return self._launcher.launch(
            redirection.argv(command),
            resolution.directory,
            redirect_to=redirection.target,
            children=children,
        )

    def report_error(self, error: ShellException) -> None:
        """Log the details and show the user the generic error line."""
        self._logger.warning(str(error))
        write_diagnostic(self._config.shell.error_message)

    def terminate(self, status: int = 0) -> NoReturn:
        """
        Stop the whole shell right away.

        Children of a batch that is still running are not waited for.
        """
        self._logger.info("Shell exiting", context={'status': status})
        self._path_resolver.clear()
        sys.exit(status)


def create_shell(config: Optional[Config] = None) -> Shell:
    """Factory function to create a shell."""
    return Shell(config)
