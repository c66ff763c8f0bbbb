"""
Repository classification for gitair.

Decides per cycle whether a working tree is simple or composite
(declares submodules or contains nested working trees). Nothing is
cached, so editing ``.gitmodules`` takes effect on the next cycle.
"""

import logging
import os

from ..domain import Classification

logger = logging.getLogger(__name__)

GITMODULES = ".gitmodules"
GIT_DIR = ".git"


class RepositoryClassifier:
    """
    Classifies working trees as SIMPLE or COMPOSITE.

    Args:
        force_composite: Treat every repository as composite
    """

    def __init__(self, force_composite: bool = False):
        self.force_composite = force_composite

    def classify(self, repo_path: str) -> Classification:
        if self.is_composite(repo_path):
            return Classification.COMPOSITE
        return Classification.SIMPLE

    def is_composite(self, repo_path: str) -> bool:
        """True if forced, if .gitmodules exists, or if a nested .git directory exists."""
        if self.force_composite:
            return True

        if os.path.isfile(os.path.join(repo_path, GITMODULES)):
            return True

        return self._has_nested_repo(repo_path)

    @staticmethod
    def _has_nested_repo(repo_path: str) -> bool:
        """Walk beneath repo_path and stop at the first nested .git directory."""
        for dirpath, dirnames, _ in os.walk(repo_path, onerror=lambda e: None):
            if dirpath != repo_path and GIT_DIR in dirnames:
                return True
            # Never look inside any .git directory, the root's included
            dirnames[:] = [d for d in dirnames if d != GIT_DIR]
        return False
