#!/usr/bin/env python3
"""
minish - A minimal command-line shell

This is the main entry point for minish.

Usage:
    minish              interactive mode, prompts on standard output
    minish BATCH_FILE   run every line of BATCH_FILE, no prompt

Any other number of arguments is a fatal usage error.

Environment:
    MINISH_CONFIG       optional JSON configuration file

Author: minish developers
Version: 1.0.0
"""

import os
import sys
from typing import List, Optional

from minish.core.config_loader import Config, ConfigLoader, get_config
from minish.core.diagnostics import write_diagnostic
from minish.exceptions import UsageError
from minish.logger import Logger, LogLevel, get_logger
from minish.shell.shell import Shell


CONFIG_ENV_VAR = 'MINISH_CONFIG'


def load_config() -> Config:
    """Load the file named by MINISH_CONFIG, or fall back to defaults."""
    config_path = os.environ.get(CONFIG_ENV_VAR)
    if config_path:
        return ConfigLoader().load(config_path)
    return get_config()


def setup_logging(config: Config) -> None:
    """Initialize logging from the configuration."""
    try:
        level = LogLevel.from_name(config.logging.level)
    except ValueError:
        level = LogLevel.WARNING

    Logger.initialize(
        level=level,
        log_file=config.logging.log_file,
        console_output=config.logging.console_output,
    )


def interactive_mode(shell: Shell) -> int:
    """Read commands from standard input until end of input or exit."""
    return shell.run()


def batch_mode(shell: Shell, batch_file: str) -> int:
    """
    Run every line of a batch file.

    Raises:
        UsageError: If the file cannot be opened
    """
    try:
        f = open(batch_file, 'r', encoding='utf-8', errors='replace')
    except OSError as e:
        raise UsageError(
            f"Cannot open batch file: {e.strerror}",
            context={'path': batch_file}
        ) from e

    with f:
        return shell.run_script(f)


def controller(argv: List[str]) -> int:
    """
    Pick interactive or batch mode from the argument count.

    Args:
        argv: Full argument vector, program name included

    Returns:
        Exit status

    Raises:
        UsageError: On a wrong argument count or unreadable batch file
    """
    if len(argv) > 2:
        raise UsageError(
            "Too many arguments",
            context={'argc': len(argv)}
        )

    config = load_config()
    setup_logging(config)
    logger = get_logger('main')

    shell = Shell(config)

    if len(argv) == 1:
        logger.info("Starting interactive mode")
        return interactive_mode(shell)

    logger.info("Starting batch mode", context={'file': argv[1]})
    return batch_mode(shell, argv[1])


def main(argv: Optional[List[str]] = None) -> int:
    """
    Main entry point for minish.

    Returns:
        0 on normal termination, 1 on a usage error
    """
    if argv is None:
        argv = sys.argv

    try:
        return controller(argv)
    except UsageError as e:
        get_logger('main').error(str(e))
        write_diagnostic(get_config().shell.error_message)
        return 1
    finally:
        Logger.shutdown()


if __name__ == '__main__':
    sys.exit(main())
