"""
Repository discovery for gitair.

Walks a directory tree once at startup and reports every working
tree found. The resulting list is never re-scanned while the loop runs.
"""

import logging
import os
from typing import Iterable, List, Optional

from ..domain import RepositoryRecord

logger = logging.getLogger(__name__)

# Directories that are never reported nor walked
SKIP_DIRECTORIES = ("node_modules", "vendor")
GIT_DIR = ".git"


class RepositoryLocator:
    """
    Finds working-tree roots beneath a directory.

    A directory literally named ``.git`` marks its parent as a
    repository. Excluded directory names are matched exactly.

    Example:
        locator = RepositoryLocator()
        for repo in locator.discover("~/projects"):
            print(repo.name)
    """

    def __init__(self, skip_directories: Optional[Iterable[str]] = None):
        if skip_directories is None:
            skip_directories = SKIP_DIRECTORIES
        self.skip_directories = frozenset(skip_directories)

    def discover(self, root: str) -> List[RepositoryRecord]:
        """
        Discover git repositories beneath root.

        Unreadable entries are skipped; discovery never aborts.

        Args:
            root: Directory to search

        Returns:
            RepositoryRecords in walk order
        """
        repos: List[RepositoryRecord] = []
        root = os.path.expanduser(root)

        # The root is subject to the same pruning as any directory under it
        if os.path.basename(os.path.normpath(root)) in self.skip_directories:
            logger.debug(f"Root {root} is a skipped directory")
            return repos

        def on_error(error: OSError) -> None:
            logger.debug(f"Skipping unreadable entry: {error}")

        for dirpath, dirnames, _ in os.walk(root, onerror=on_error):
            if GIT_DIR in dirnames:
                repos.append(RepositoryRecord.from_path(dirpath))

            # Prune in place so os.walk never descends into these
            dirnames[:] = sorted(
                d for d in dirnames
                if d != GIT_DIR and d not in self.skip_directories
            )

        return repos
