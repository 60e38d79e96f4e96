"""
Process Exceptions

Exceptions related to launching child processes: fork, exec and
output redirection inside the child.

Author: minish developers
Version: 1.0.0
"""

from typing import Optional, Any

from .shell_exceptions import ShellException


class ProcessException(ShellException):
    """
    Base exception for all process-related errors.

    Attributes:
        message: Human-readable error description
        pid: Process ID associated with the error (if applicable)
        error_code: Numeric error code for programmatic handling
    """

    def __init__(
        self,
        message: str,
        pid: Optional[int] = None,
        error_code: Optional[int] = None,
        context: Optional[dict[str, Any]] = None
    ) -> None:
        ctx = context or {}
        if pid is not None:
            ctx["pid"] = pid
        super().__init__(
            message=message,
            error_code=error_code or 2000,
            recoverable=True,
            context=ctx
        )
        self.pid = pid


class ForkError(ProcessException):
    """
    Error during the fork() system call.

    Common causes include:
    - Memory allocation failure for the child process
    - Process limit exceeded

    Example:
        >>> raise ForkError("Resource temporarily unavailable", parent_pid=1)
    """

    def __init__(
        self,
        message: str,
        parent_pid: int,
        context: Optional[dict[str, Any]] = None
    ) -> None:
        super().__init__(
            message=message,
            pid=parent_pid,
            error_code=2005,
            context=context
        )
        self.parent_pid = parent_pid


class ExecError(ProcessException):
    """
    Error during the exec() system call.

    Raised inside the child only. The child reports it and
    terminates without returning to the shell loop.

    Example:
        >>> raise ExecError("Exec format error", pid=42, path="/bin/broken")
    """

    def __init__(
        self,
        message: str,
        pid: int,
        path: Optional[str] = None,
        context: Optional[dict[str, Any]] = None
    ) -> None:
        ctx = context or {}
        if path:
            ctx["path"] = path
        super().__init__(
            message=message,
            pid=pid,
            error_code=2006,
            context=ctx
        )
        self.path = path


class RedirectionOpenError(ProcessException):
    """The child could not open its output redirection target."""

    def __init__(
        self,
        path: str,
        pid: int,
        reason: Optional[str] = None
    ) -> None:
        ctx: dict[str, Any] = {"target": path}
        if reason:
            ctx["reason"] = reason
        super().__init__(
            message=f"Cannot open {path} for writing",
            pid=pid,
            error_code=2007,
            context=ctx
        )
        self.path = path
