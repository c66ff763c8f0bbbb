"""
Fetch-and-pull fan-out for gitair.

This is how repositories hear about each other: commits published by
one repository reach another only when the other's pull pass sees
drift against a shared remote.
"""

import logging
import os
from typing import Generator, Optional

from ..domain import OperationStatus, PullReport, RemoteOutcome
from ..infra import GitClient
from .drift import DriftDetector
from .remotes import RemoteSet

logger = logging.getLogger(__name__)


class MultiRemotePuller:
    """
    Fetches every remote and pulls only from those that drifted.

    Example:
        puller = MultiRemotePuller()
        for line in puller.reconcile("/path/to/repo"):
            print(line)
    """

    def __init__(
        self,
        git_client: Optional[GitClient] = None,
        remote_set: Optional[RemoteSet] = None,
        drift_detector: Optional[DriftDetector] = None
    ):
        self.git = git_client or GitClient()
        self.remote_set = remote_set or RemoteSet(self.git)
        self.drift = drift_detector or DriftDetector(self.git)
        self.last_result: Optional[PullReport] = None

    def reconcile(self, repo_path: str) -> Generator[str, None, PullReport]:
        """
        Fetch each remote, then pull where the remote tip differs from HEAD.

        Failures are reported per remote and never stop the others.

        Yields:
            Progress messages

        Returns:
            PullReport with one outcome per remote
        """
        report = PullReport()
        self.last_result = report

        remotes = self.remote_set.query(repo_path)
        name = os.path.basename(os.path.normpath(repo_path))

        for remote in remotes:
            if not self.git.fetch(repo_path, remote.name):
                yield f"  📥 {name}: Checking {remote.name} for updates... ✗ fetch failed"
                report.outcomes.append(RemoteOutcome(
                    remote=remote.name,
                    branch=remote.branch,
                    status=OperationStatus.FAILED,
                    action="fetch_failed",
                    reason="fetch failed",
                ))
                continue

            if not self.drift.has_drift(repo_path, remote):
                yield f"  📥 {name}: Checking {remote.name} for updates... ✓ up to date"
                report.outcomes.append(RemoteOutcome(
                    remote=remote.name,
                    branch=remote.branch,
                    status=OperationStatus.NOOP,
                    action="up_to_date",
                ))
                continue

            if self.git.pull(repo_path, remote.name, remote.branch):
                yield f"  📡 {name}: Pulling updates from {remote.name}... ✓"
                report.outcomes.append(RemoteOutcome(
                    remote=remote.name,
                    branch=remote.branch,
                    status=OperationStatus.SUCCESS,
                    action="pulled",
                ))
            else:
                yield f"  📡 {name}: Pulling updates from {remote.name}... ✗ pull failed"
                report.outcomes.append(RemoteOutcome(
                    remote=remote.name,
                    branch=remote.branch,
                    status=OperationStatus.FAILED,
                    action="pull_failed",
                    reason="pull failed (possible merge conflict)",
                ))

        return report
