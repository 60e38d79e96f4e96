"""
Shell Exceptions

Exceptions raised while reading, parsing, resolving and dispatching
command lines. Everything except UsageError is recoverable: the shell
reports it and moves on to the next command.

Author: minish developers
Version: 1.0.0
"""

from typing import Optional, Any


class ShellException(Exception):
    """
    Base exception for all shell errors.

    Attributes:
        message: Human-readable error description
        error_code: Numeric error code for programmatic handling
        recoverable: Whether the session can continue after the error
        context: Additional context about the error

    Example:
        >>> raise ShellException("Something went wrong", error_code=1000)
    """

    def __init__(
        self,
        message: str,
        error_code: Optional[int] = None,
        recoverable: bool = True,
        context: Optional[dict[str, Any]] = None
    ) -> None:
        super().__init__(message)
        self.message = message
        self.error_code = error_code or 1000
        self.recoverable = recoverable
        self.context = context or {}

    def __str__(self) -> str:
        base = f"[Error {self.error_code}] {self.message}"
        if self.context:
            context_str = ", ".join(f"{k}={v}" for k, v in self.context.items())
            base = f"{base} ({context_str})"
        return base

    def __repr__(self) -> str:
        return (
            f"{self.__class__.__name__}("
            f"message={self.message!r}, "
            f"error_code={self.error_code}, "
            f"recoverable={self.recoverable})"
        )


class UsageError(ShellException):
    """
    Fatal invocation error.

    Raised when the shell is started with the wrong number of
    arguments or when the batch file cannot be opened. The entry
    point reports it and exits with status 1.

    Example:
        >>> raise UsageError("Too many arguments", context={'argc': 4})
    """

    def __init__(
        self,
        message: str,
        context: Optional[dict[str, Any]] = None
    ) -> None:
        super().__init__(
            message=message,
            error_code=1001,
            recoverable=False,
            context=context
        )


class ParseError(ShellException):
    """Malformed command line."""

    def __init__(
        self,
        message: str,
        error_code: int = 1100,
        context: Optional[dict[str, Any]] = None
    ) -> None:
        super().__init__(
            message=message,
            error_code=error_code,
            recoverable=True,
            context=context
        )


class RedirectionError(ParseError):
    """
    Misplaced or repeated output redirection marker.

    The fault describes which rule was violated: too many
    markers, no command before the marker, no file after it,
    or more than one token after it.

    Example:
        >>> raise RedirectionError(RedirectionFault.MISSING_FILE, ['ls', '>'])
    """

    def __init__(
        self,
        fault: Any,
        tokens: Optional[list[str]] = None,
        context: Optional[dict[str, Any]] = None
    ) -> None:
        ctx = context or {}
        ctx["fault"] = getattr(fault, 'name', fault)
        if tokens is not None:
            ctx["tokens"] = " ".join(tokens)
        super().__init__(
            message="Invalid output redirection",
            error_code=1101,
            context=ctx
        )
        self.fault = fault


class BuiltinUsageError(ParseError):
    """
    A built-in command was called with the wrong number of arguments.

    Example:
        >>> raise BuiltinUsageError('cd', expected=1, received=2)
    """

    def __init__(
        self,
        builtin: str,
        expected: int,
        received: int,
        context: Optional[dict[str, Any]] = None
    ) -> None:
        ctx = context or {}
        ctx.update({
            "builtin": builtin,
            "expected": expected,
            "received": received,
        })
        super().__init__(
            message=f"{builtin}: wrong number of arguments",
            error_code=1102,
            context=ctx
        )
        self.builtin = builtin
        self.expected = expected
        self.received = received


class CommandNotFoundError(ShellException):
    """No search path entry holds an executable with this name."""

    def __init__(
        self,
        command: str,
        search_paths: Optional[tuple[str, ...]] = None
    ) -> None:
        ctx: dict[str, Any] = {"command": command}
        if search_paths is not None:
            ctx["search_paths"] = ":".join(search_paths)
        super().__init__(
            message=f"{command}: command not found",
            error_code=1200,
            recoverable=True,
            context=ctx
        )
        self.command = command


class DirectoryChangeError(ShellException):
    """
    The cd built-in could not change the working directory.

    Common causes:
    - Directory does not exist
    - Path is not a directory
    - Permission denied
    """

    def __init__(
        self,
        path: str,
        reason: Optional[str] = None
    ) -> None:
        ctx: dict[str, Any] = {"path": path}
        if reason:
            ctx["reason"] = reason
        super().__init__(
            message=f"cd: cannot change directory to {path}",
            error_code=1300,
            recoverable=True,
            context=ctx
        )
        self.path = path
