"""
User-visible diagnostics.

Every recoverable failure is reported with the same single line on
file descriptor 2, written with one os.write() so it is never
interleaved with a child's output and never sits in a Python buffer
across fork().
"""

import os
from typing import Optional

from .config_loader import get_config


STDERR_FILENO = 2


def write_diagnostic(message: Optional[str] = None) -> None:
    """Write the generic error line (or `message`) to standard error."""
    if message is None:
        message = get_config().shell.error_message
    os.write(STDERR_FILENO, (message + "\n").encode())
