"""
Process Launcher Module

Runs external commands as child processes:
- fork() a child
- In the child: apply output redirection, set PATH, exec()
- In the parent: wait for the child now (serial) or record it in the
  batch's ChildSet (parallel)

Author: minish developers
Version: 1.0.0
"""

import os
import sys
from typing import Optional, Sequence, NoReturn

from .child_set import ChildSet
from minish.core.config_loader import get_config
from minish.core.diagnostics import write_diagnostic
from minish.exceptions import (
    ShellException,
    ForkError,
    ExecError,
    RedirectionOpenError,
)
from minish.logger import get_logger


# Exit status of a child whose exec() never happened
EXIT_EXEC_FAILURE = 127

# Owner read/write/execute
REDIRECT_MODE = 0o700
REDIRECT_FLAGS = os.O_CREAT | os.O_WRONLY | os.O_TRUNC

STDOUT_FILENO = 1
STDERR_FILENO = 2


def _child_exit(status: int) -> NoReturn:
    """
    Terminate a forked child without running any parent logic.

    os._exit() skips atexit handlers, finally blocks further up the
    stack and buffered stdio flushing inherited from the parent.
    """
    os._exit(status)


class ProcessLauncher:
    """
    Forks and execs external commands.

    Example:
        >>> launcher = ProcessLauncher()
        >>> launcher.launch(['echo', 'hi'], '/bin')              # serial
        >>> children = ChildSet()
        >>> launcher.launch(['sleep', '1'], '/bin', children=children)
        >>> children.join()
    """

    def __init__(
        self,
        system_bin_dir: Optional[str] = None,
        error_message: Optional[str] = None
    ):
        self._logger = get_logger('launcher')
        if system_bin_dir is None:
            system_bin_dir = get_config().shell.system_bin_dir
        self._system_bin_dir = system_bin_dir
        self._error_message = error_message

    @property
    def system_bin_dir(self) -> str:
        return self._system_bin_dir

    def child_environment(self, directory: str) -> dict[str, str]:
        """
        Environment for a child resolved in `directory`.

        PATH is the system binary directory followed by the
        resolved directory, so exec finds the command there.
        """
        env = dict(os.environ)
        env['PATH'] = f"{self._system_bin_dir}:{directory}"
        return env

    def launch(
        self,
        argv: Sequence[str],
        directory: str,
        redirect_to: Optional[str] = None,
        children: Optional[ChildSet] = None
    ) -> int:
        """
        Start one external command.

        Args:
            argv: Argument vector, redirection tokens already removed
            directory: Search path entry the command was resolved in
            redirect_to: File for the child's output; None to inherit
            children: Batch to join later; None to wait right away

        Returns:
            PID of the child

        Raises:
            ForkError: If the child could not be created
        """
        # Anything still buffered would otherwise be written twice
        sys.stdout.flush()
        sys.stderr.flush()

        try:
            pid = os.fork()
        except OSError as e:
            raise ForkError(
                f"Fork failed: {e.strerror}",
                parent_pid=os.getpid(),
                context={'command': argv[0]}
            ) from e

        if pid == 0:
            self._run_child(argv, directory, redirect_to)

        self._logger.debug(
            "Launched child",
            pid=pid,
            context={
                'argv': ' '.join(argv),
                'parallel': children is not None,
                'redirect': redirect_to,
            }
        )

        if children is None:
            self.wait(pid)
        else:
            children.add(pid)

        return pid

    def wait(self, pid: int) -> Optional[int]:
        """
        Block until one specific child exits.

        Returns:
            The child's exit code, or None if it was already reaped
        """
        try:
            _, status = os.waitpid(pid, 0)
        except ChildProcessError:
            self._logger.warning("Child already reaped", pid=pid)
            return None

        exit_code = os.waitstatus_to_exitcode(status)
        self._logger.debug("Child exited", pid=pid, context={'exit_code': exit_code})
        return exit_code

    def _run_child(
        self,
        argv: Sequence[str],
        directory: str,
        redirect_to: Optional[str]
    ) -> NoReturn:
        """
        Child side of fork(). Never returns.

        On success exec() replaces this process; every failure is
        reported and ends in _child_exit().
        """
        try:
            if redirect_to is not None:
                self._redirect_output(redirect_to)
            self._exec(argv, directory)
        except ShellException as e:
            self._logger.error(str(e), pid=os.getpid())
            write_diagnostic(self._error_message)
        finally:
            _child_exit(EXIT_EXEC_FAILURE)

    @staticmethod
    def _redirect_output(target: str) -> None:
        """Send standard output and standard error to `target`."""
        try:
            fd = os.open(target, REDIRECT_FLAGS, REDIRECT_MODE)
        except (OSError, ValueError) as e:
            reason = getattr(e, 'strerror', None) or str(e)
            raise RedirectionOpenError(target, pid=os.getpid(), reason=reason) from e

        os.dup2(fd, STDOUT_FILENO)
        os.dup2(fd, STDERR_FILENO)
        if fd > STDERR_FILENO:
            os.close(fd)

    def _exec(self, argv: Sequence[str], directory: str) -> NoReturn:
        env = self.child_environment(directory)
        try:
            os.execvpe(argv[0], list(argv), env)
        except (OSError, ValueError) as e:
            reason = getattr(e, 'strerror', None) or str(e)
            raise ExecError(
                f"Exec failed: {reason}",
                pid=os.getpid(),
                path=os.path.join(directory, argv[0])
            ) from e
