"""
Remote enumeration for gitair.

Pure read of a working tree's configured remotes and current branch.
"""

import logging
from typing import List, Optional

from ..domain import RemoteDescriptor
from ..infra import GitClient

logger = logging.getLogger(__name__)

DEFAULT_BRANCH = "main"


class RemoteSet:
    """
    Lists the remotes of a repository paired with its current branch.

    When the branch cannot be determined (detached HEAD, git error)
    the configured default branch name is used instead.
    """

    def __init__(
        self,
        git_client: Optional[GitClient] = None,
        default_branch: str = DEFAULT_BRANCH
    ):
        self.git = git_client or GitClient()
        self.default_branch = default_branch

    def branch(self, repo_path: str) -> str:
        branch = self.git.current_branch(repo_path)
        if not branch:
            logger.debug(f"No current branch in {repo_path}, using {self.default_branch}")
            return self.default_branch
        return branch

    def query(self, repo_path: str) -> List[RemoteDescriptor]:
        """
        Describe every configured remote.

        Returns:
            RemoteDescriptors in the order git lists the remotes;
            empty if there are none
        """
        names = self.git.remotes(repo_path)
        if not names:
            return []
        branch = self.branch(repo_path)
        return [RemoteDescriptor(name=name, branch=branch) for name in names]
