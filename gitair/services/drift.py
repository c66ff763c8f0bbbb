"""Drift detection between a local branch and a remote-tracking branch."""

import logging
from typing import Optional

from ..domain import RemoteDescriptor
from ..infra import GitClient

logger = logging.getLogger(__name__)


class DriftDetector:
    """
    Compares HEAD with ``<remote>/<branch>``.

    Only local refs are consulted; callers fetch first. An unresolved
    ref on either side counts as no drift, so an unknown state never
    triggers a pull.
    """

    def __init__(self, git_client: Optional[GitClient] = None):
        self.git = git_client or GitClient()

    def has_drift(self, repo_path: str, remote: RemoteDescriptor) -> bool:
        local = self.git.rev_parse(repo_path, "HEAD")
        if not local:
            logger.debug(f"Cannot resolve HEAD in {repo_path}")
            return False

        tracked = self.git.rev_parse(repo_path, remote.tracking_ref)
        if not tracked:
            logger.debug(f"Cannot resolve {remote.tracking_ref} in {repo_path}")
            return False

        return local != tracked
