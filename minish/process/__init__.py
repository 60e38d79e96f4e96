"""
minish Process Module

Child process management:
- Fork/exec of external commands with output redirection
- Join barrier for parallel batches
"""

from .child_set import ChildSet
from .launcher import ProcessLauncher, EXIT_EXEC_FAILURE

__all__ = [
    'ChildSet',
    'ProcessLauncher',
    'EXIT_EXEC_FAILURE',
]
