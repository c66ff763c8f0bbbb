"""
Reconciliation scheduler for gitair.

Drives two periodic passes over the repositories discovered at startup:

- commit/push every ``check_interval``:
  classify -> (composite) sync submodules -> commit -> (committed) push
- pull every ``pull_interval``, checked once per commit/push iteration

Everything runs sequentially on one thread. No state survives a cycle
except the time of the last pull pass; the next cycle is the retry.
"""

import logging
import time
from typing import Callable, Generator, List, Optional, Sequence

from ..config import SyncConfig
from ..domain import (
    CycleContext,
    PullReport,
    RepositoryRecord,
    RepositorySyncResult,
)
from ..infra import GitClient, GeminiMessageProvider
from .classifier import RepositoryClassifier
from .commit_stager import CommitStager
from .publisher import MultiRemotePublisher
from .puller import MultiRemotePuller
from .remotes import RemoteSet
from .submodules import SubmoduleSynchronizer
from .workdir import WorkingDirectoryError, working_directory

logger = logging.getLogger(__name__)


class ReconciliationScheduler:
    """
    Top-level control loop.

    All collaborators can be injected; anything left as None is built
    from the SyncConfig.

    Example:
        scheduler = ReconciliationScheduler(settings, repos)
        for line in scheduler.run():
            print(line)  # never returns on its own
    """

    def __init__(
        self,
        config: SyncConfig,
        repos: Sequence[RepositoryRecord],
        git_client: Optional[GitClient] = None,
        classifier: Optional[RepositoryClassifier] = None,
        submodules: Optional[SubmoduleSynchronizer] = None,
        stager: Optional[CommitStager] = None,
        publisher: Optional[MultiRemotePublisher] = None,
        puller: Optional[MultiRemotePuller] = None,
        clock: Callable[[], float] = time.monotonic,
        sleep: Callable[[float], None] = time.sleep
    ):
        self.config = config
        self.repos = tuple(repos)
        self.git = git_client or GitClient()
        remote_set = RemoteSet(self.git, config.default_branch)

        self.classifier = classifier or RepositoryClassifier(config.force_composite)
        self.submodules = submodules or SubmoduleSynchronizer(self.git)
        self.stager = stager or CommitStager(self.git, self._build_provider(config))
        self.publisher = publisher or MultiRemotePublisher(self.git, remote_set)
        self.puller = puller or MultiRemotePuller(self.git, remote_set)

        self.clock = clock
        self.sleep = sleep
        self.last_pull: Optional[float] = None
        self.last_cycle: Optional[CycleContext] = None

    @staticmethod
    def _build_provider(config: SyncConfig) -> Optional[GeminiMessageProvider]:
        if not config.use_ai:
            return None
        return GeminiMessageProvider(
            command=config.provider_command,
            timeout=config.provider_timeout,
            max_diff_chars=config.max_diff_chars,
            max_length=config.max_message_length,
        )

    def sync_repository(
        self,
        repo: RepositoryRecord
    ) -> Generator[str, None, RepositorySyncResult]:
        """
        Run the commit/push sequence for one repository.

        A submodule failure skips the repository for this pass; the
        parent's own changes wait for the next cycle.
        """
        result = RepositorySyncResult(repo=repo)
        try:
            with working_directory(repo.path):
                classification = self.classifier.classify(repo.path)
                result.classification = classification

                if classification.is_composite:
                    result.submodules = yield from self.submodules.sync(repo.path)
                    if result.submodules.failed:
                        yield f"  ❌ Skipping {repo.name} - submodule sync failed"
                        return result

                result.commit = yield from self.stager.stage_and_commit(
                    repo.path, classification
                )
                if result.commit.succeeded:
                    result.publish = yield from self.publisher.publish(repo.path)
        except WorkingDirectoryError as e:
            logger.warning(f"{repo.name}: {e}")
            result.error = str(e)
            yield f"  ❌ {e}"

        return result

    def pull_repository(
        self,
        repo: RepositoryRecord
    ) -> Generator[str, None, Optional[PullReport]]:
        """Fetch and conditionally pull one repository from all remotes."""
        try:
            with working_directory(repo.path):
                report = yield from self.puller.reconcile(repo.path)
        except WorkingDirectoryError as e:
            logger.warning(f"{repo.name}: {e}")
            yield f"  ❌ {e}"
            return None
        return report

    def commit_push_pass(
        self,
        context: CycleContext
    ) -> Generator[str, None, List[RepositorySyncResult]]:
        results = []
        for repo in self.repos:
            result = yield from self.sync_repository(repo)
            if result.changed:
                context.changes_found = True
            results.append(result)

        if not context.changes_found:
            yield "  ✓ No changes detected"
        return results

    def pull_pass(self) -> Generator[str, None, List[Optional[PullReport]]]:
        yield "📡 Checking for inter-project updates..."
        reports = []
        for repo in self.repos:
            report = yield from self.pull_repository(repo)
            reports.append(report)
        return reports

    def pull_due(self) -> bool:
        """True once pull_interval has elapsed since the last pull pass."""
        if self.last_pull is None:
            return False
        return self.clock() - self.last_pull >= self.config.pull_interval

    def run_cycle(self, iteration: int) -> Generator[str, None, CycleContext]:
        """One commit/push pass, followed by a pull pass when one is due."""
        context = CycleContext(iteration=iteration)
        yield f"🔄 Check cycle #{iteration}"

        yield from self.commit_push_pass(context)

        if self.pull_due():
            yield from self.pull_pass()
            context.pulled = True
            self.last_pull = self.clock()

        self.last_cycle = context
        return context

    def run(self, max_cycles: Optional[int] = None) -> Generator[str, None, None]:
        """
        Loop forever (or for max_cycles iterations), sleeping check_interval between cycles.

        Yields:
            One status line per event
        """
        self.last_pull = self.clock()
        iteration = 0

        while max_cycles is None or iteration < max_cycles:
            iteration += 1
            yield from self.run_cycle(iteration)

            yield f"💤 Sleeping for {self.config.check_interval_minutes:.1f} minutes..."
            self.sleep(self.config.check_interval)
