"""
Batch Join Barrier

Tracks the children launched by one parallel batch and waits for
all of them, in whatever order they finish.

Author: minish developers
Version: 1.0.0
"""

import os
from typing import List, Tuple

from minish.logger import get_logger


class ChildSet:
    """
    Children launched by one '&'-separated batch.

    Only launched processes are added. Built-ins, skipped empty
    groups and commands that failed before fork() never show up
    here, so join() waits exactly as often as fork() succeeded.

    Example:
        >>> children = ChildSet()
        >>> launcher.launch(['sleep', '1'], '/bin', children=children)
        >>> launcher.launch(['sleep', '2'], '/bin', children=children)
        >>> children.join()
    """

    def __init__(self):
        self._logger = get_logger('launcher')
        self._pids: set[int] = set()
        self._outstanding = 0

    @property
    def outstanding(self) -> int:
        """Number of launched children not yet reaped."""
        return self._outstanding

    @property
    def pids(self) -> frozenset[int]:
        return frozenset(self._pids)

    def __len__(self) -> int:
        return self._outstanding

    def add(self, pid: int) -> None:
        """Record one more outstanding child."""
        self._pids.add(pid)
        self._outstanding += 1

    def join(self) -> List[Tuple[int, int]]:
        """
        Block until every outstanding child has exited.

        Calls os.wait() once per outstanding child, so completion
        order does not need to match launch order.

        Returns:
            (pid, exit code) for each reaped child, in reaping order
        """
        reaped: List[Tuple[int, int]] = []

        while self._outstanding > 0:
            try:
                pid, status = os.wait()
            except ChildProcessError:
                self._logger.warning(
                    "No children left to wait for",
                    context={'outstanding': self._outstanding}
                )
                self._outstanding = 0
                break

            self._outstanding -= 1
            self._pids.discard(pid)
            exit_code = os.waitstatus_to_exitcode(status)
            reaped.append((pid, exit_code))
            self._logger.debug(
                "Reaped batch child",
                pid=pid,
                context={'exit_code': exit_code, 'outstanding': self._outstanding}
            )

        return reaped
