"""
Push fan-out for gitair.

Pushes the current branch to every configured remote independently.
Partial success is success; nothing is retried within a cycle.
"""

import logging
from typing import Generator, Optional

from ..domain import OperationStatus, PublishReport, RemoteOutcome
from ..infra import GitClient
from .remotes import RemoteSet

logger = logging.getLogger(__name__)


class MultiRemotePublisher:
    """
    Pushes one repository to all of its remotes.

    Example:
        publisher = MultiRemotePublisher()
        for line in publisher.publish("/path/to/repo"):
            print(line)
        report = publisher.last_result
        print(f"{report.succeeded}/{report.attempted}")
    """

    def __init__(
        self,
        git_client: Optional[GitClient] = None,
        remote_set: Optional[RemoteSet] = None
    ):
        self.git = git_client or GitClient()
        self.remote_set = remote_set or RemoteSet(self.git)
        self.last_result: Optional[PublishReport] = None

    def publish(self, repo_path: str) -> Generator[str, None, PublishReport]:
        """
        Push the current branch to every remote.

        Yields:
            Progress messages

        Returns:
            PublishReport with attempted/succeeded counts
        """
        report = PublishReport()
        self.last_result = report

        remotes = self.remote_set.query(repo_path)
        if not remotes:
            report.skipped_no_remotes = True
            yield "  ⚠️  No remotes configured, skipping push"
            return report

        for remote in remotes:
            if self.git.push(repo_path, remote.name, remote.branch):
                outcome = RemoteOutcome(
                    remote=remote.name,
                    branch=remote.branch,
                    status=OperationStatus.SUCCESS,
                    action="pushed",
                )
                yield f"  🚀 Pushing to {remote.name}... ✓"
            else:
                outcome = RemoteOutcome(
                    remote=remote.name,
                    branch=remote.branch,
                    status=OperationStatus.FAILED,
                    action="push_failed",
                    reason="push failed",
                )
                yield f"  🚀 Pushing to {remote.name}... ✗ failed"
            report.add_outcome(outcome)

        if report.succeeded:
            yield f"  ✓ Successfully pushed to {report.succeeded}/{report.attempted} remotes"
        else:
            yield f"  ✗ Push failed for all {report.attempted} remotes"

        return report
