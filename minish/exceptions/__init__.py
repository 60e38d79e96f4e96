"""
minish Exception Hierarchy

All shell errors inherit from ShellException. Only UsageError is
fatal; every other error is reported with the generic diagnostic
and the session continues.

Architecture:
    ShellException (Base)
    ├── UsageError
    ├── ParseError
    │   ├── RedirectionError
    │   └── BuiltinUsageError
    ├── CommandNotFoundError
    ├── DirectoryChangeError
    └── ProcessException
        ├── ForkError
        ├── ExecError
        └── RedirectionOpenError
"""

from .shell_exceptions import (
    ShellException,
    UsageError,
    ParseError,
    RedirectionError,
    BuiltinUsageError,
    CommandNotFoundError,
    DirectoryChangeError,
)

from .process_exceptions import (
    ProcessException,
    ForkError,
    ExecError,
    RedirectionOpenError,
)

__all__ = [
    # Shell exceptions
    "ShellException",
    "UsageError",
    "ParseError",
    "RedirectionError",
    "BuiltinUsageError",
    "CommandNotFoundError",
    "DirectoryChangeError",
    # Process exceptions
    "ProcessException",
    "ForkError",
    "ExecError",
    "RedirectionOpenError",
]
