"""
Commit staging for gitair.

Detects local changes in one repository, stages everything, picks a
commit message and commits. A failed commit is not an error for the
loop: the next cycle simply tries again.
"""

import logging
import os
from datetime import datetime
from typing import Callable, Generator, Optional

from ..domain import Classification, OperationResult
from ..infra import GitClient, CommitMessageProvider, MessageProviderError

logger = logging.getLogger(__name__)

TIMESTAMP_FORMAT = "%Y-%m-%d %H:%M:%S"


def timestamp_message(classification: Classification, now: datetime) -> str:
    """Deterministic fallback commit message."""
    stamp = now.strftime(TIMESTAMP_FORMAT)
    if classification.is_composite:
        return f"auto commit (monorepo) - {stamp}"
    return f"auto commit - {stamp}"


class CommitStager:
    """
    Stage-and-commit state machine for one repository.

    Args:
        git_client: GitClient instance (creates new if None)
        message_provider: Optional generative provider; None means
            timestamp messages only
        clock: Returns the current time (for the timestamp message)

    Example:
        stager = CommitStager(message_provider=GeminiMessageProvider())
        for line in stager.stage_and_commit(path, Classification.SIMPLE):
            print(line)
        if stager.last_result.succeeded:
            ...
    """

    def __init__(
        self,
        git_client: Optional[GitClient] = None,
        message_provider: Optional[CommitMessageProvider] = None,
        clock: Callable[[], datetime] = datetime.now
    ):
        self.git = git_client or GitClient()
        self.message_provider = message_provider
        self.clock = clock
        self.last_result: Optional[OperationResult] = None

    def stage_and_commit(
        self,
        repo_path: str,
        classification: Classification
    ) -> Generator[str, None, OperationResult]:
        """
        Commit all local changes in repo_path.

        Yields:
            Progress messages

        Returns:
            SUCCESS with the commit message if a commit was created,
            NOOP if there was nothing to commit, FAILED otherwise
        """
        result = yield from self._stage_and_commit(repo_path, classification)
        self.last_result = result
        return result

    def _stage_and_commit(
        self,
        repo_path: str,
        classification: Classification
    ) -> Generator[str, None, OperationResult]:
        if not self.git.has_changes(repo_path):
            return OperationResult.noop("no_changes")

        name = os.path.basename(os.path.normpath(repo_path))
        marker = " [MONOREPO]" if classification.is_composite else ""
        yield f"📝 {name}{marker}: Auto committing changes..."

        if not self.git.add_all(repo_path):
            yield f"  ❌ Error staging changes in {name}"
            return OperationResult.failure("stage", "git add failed")

        message = yield from self._choose_message(repo_path, classification)

        if not self.git.commit(repo_path, message):
            yield f"  ⚠️  Commit failed in {name} (may be empty or have errors)"
            return OperationResult.failure("commit", "git commit failed")

        yield f"  ✓ Committed changes in {name}"
        return OperationResult.success("committed", message=message)

    def _choose_message(
        self,
        repo_path: str,
        classification: Classification
    ) -> Generator[str, None, str]:
        fallback = timestamp_message(classification, self.clock())
        if self.message_provider is None:
            return fallback

        diff = self.git.staged_diff(repo_path)
        if not diff:
            yield "  🤖 No diff available, using timestamp commit"
            return fallback

        try:
            message = self.message_provider.generate(diff)
        except MessageProviderError as e:
            logger.debug(f"Message provider failed in {repo_path}: {e}")
            yield f"  🤖 AI commit message failed ({e})"
            yield "  ⚠️  Falling back to timestamp commit"
            return fallback

        if not message or not message.strip():
            yield "  ⚠️  Empty AI message, falling back to timestamp commit"
            return fallback

        yield f"  💬 AI message: \"{message}\""
        return message
