"""
Submodule synchronization for composite repositories.

Runs before the parent repository is inspected for changes so that
updated submodule pointers are committed together with the parent.
"""

import logging
import os
from typing import Generator, Optional

from ..domain import OperationResult
from ..infra import GitClient

logger = logging.getLogger(__name__)

GITMODULES = ".gitmodules"


class SubmoduleSynchronizer:
    """
    Updates submodules to their remote branches and stages the new pointers.

    Each step must succeed before the next starts. A failure means the
    whole repository is skipped for this pass.

    Example:
        sync = SubmoduleSynchronizer()
        for line in sync.sync("/path/to/monorepo"):
            print(line)
        if sync.last_result.failed:
            ...
    """

    def __init__(self, git_client: Optional[GitClient] = None):
        self.git = git_client or GitClient()
        self.last_result: Optional[OperationResult] = None

    def sync(self, repo_path: str) -> Generator[str, None, OperationResult]:
        """
        Synchronize submodules of one repository.

        Yields:
            Progress messages

        Returns:
            SUCCESS when submodules were updated and staged, NOOP when
            there is no .gitmodules, FAILED otherwise
        """
        result = yield from self._sync(repo_path)
        self.last_result = result
        return result

    def _sync(self, repo_path: str) -> Generator[str, None, OperationResult]:
        # Composite status may come from nested non-submodule repos; leave those alone
        if not os.path.isfile(os.path.join(repo_path, GITMODULES)):
            return OperationResult.noop("no_submodules")

        if not self.git.submodule_update(repo_path):
            yield "  📦 Syncing submodules... ✗ failed"
            return OperationResult.failure("submodule_update", "submodule update failed")

        if not self.git.add_all(repo_path):
            yield "  📦 Syncing submodules... ⚠️  failed to stage submodule changes"
            return OperationResult.failure("submodule_stage", "failed to stage submodule changes")

        yield "  📦 Syncing submodules... ✓"
        return OperationResult.success("submodules_updated")
