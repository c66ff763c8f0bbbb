"""
Scoped working-directory changes.

Each repository is entered through ``working_directory`` so that the
previous directory is restored on every exit path, including errors
raised by the operation in between.
"""

import logging
import os
from contextlib import contextmanager
from typing import Generator

logger = logging.getLogger(__name__)


class WorkingDirectoryError(Exception):
    """Raised when a repository directory cannot be entered."""


@contextmanager
def working_directory(path: str) -> Generator[str, None, None]:
    """
    Context manager that runs its body inside ``path``.

    Usage:
        with working_directory(repo.path):
            ...  # cwd is repo.path here, restored afterwards

    Raises:
        WorkingDirectoryError: if the current directory cannot be read
            or ``path`` cannot be entered
    """
    try:
        previous = os.getcwd()
    except OSError as e:
        raise WorkingDirectoryError(f"Error getting working directory: {e}") from e

    try:
        os.chdir(path)
    except OSError as e:
        raise WorkingDirectoryError(f"Error changing to {path}: {e}") from e

    try:
        yield path
    finally:
        try:
            os.chdir(previous)
        except OSError as e:
            logger.error(f"Could not restore working directory {previous}: {e}")
