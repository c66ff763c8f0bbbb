"""
Operation result domain objects for gitair.

Every step of a reconciliation pass reports one of three outcomes:
it did something (SUCCESS), there was nothing to do (NOOP), or it
could not complete (FAILED, with a reason). Callers branch on the
status instead of inferring meaning from a boolean.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional

from .repository import Classification, RepositoryRecord


class OperationStatus(Enum):
    """Status of an individual operation."""
    SUCCESS = "success"
    NOOP = "noop"
    FAILED = "failed"


@dataclass(frozen=True)
class OperationResult:
    """
    Outcome of a single step on one repository.

    Example:
        result = OperationResult.failure("submodule_sync", "merge conflict")
        if result.failed:
            print(result.reason)
    """
    status: OperationStatus
    action: str  # e.g., "committed", "submodules_updated", "no_changes"
    reason: Optional[str] = None
    message: Optional[str] = None

    @classmethod
    def success(cls, action: str, message: Optional[str] = None) -> 'OperationResult':
        return cls(OperationStatus.SUCCESS, action, message=message)

    @classmethod
    def noop(cls, action: str, reason: Optional[str] = None) -> 'OperationResult':
        return cls(OperationStatus.NOOP, action, reason=reason)

    @classmethod
    def failure(cls, action: str, reason: str) -> 'OperationResult':
        return cls(OperationStatus.FAILED, action, reason=reason)

    @property
    def failed(self) -> bool:
        return self.status == OperationStatus.FAILED

    @property
    def succeeded(self) -> bool:
        return self.status == OperationStatus.SUCCESS


@dataclass(frozen=True)
class RemoteOutcome:
    """Result of one push, fetch or pull against one remote."""
    remote: str
    branch: str
    status: OperationStatus
    action: str  # "pushed", "push_failed", "pulled", "up_to_date", ...
    reason: Optional[str] = None


@dataclass
class PublishReport:
    """
    Summary of a push fan-out across every configured remote.

    A repository with no remotes is reported with skipped_no_remotes
    set and nothing attempted; that is not a failure.
    """
    attempted: int = 0
    succeeded: int = 0
    skipped_no_remotes: bool = False
    outcomes: List[RemoteOutcome] = field(default_factory=list)

    @property
    def failed(self) -> int:
        return self.attempted - self.succeeded

    def add_outcome(self, outcome: RemoteOutcome) -> None:
        """Add a per-remote outcome and update counts."""
        self.outcomes.append(outcome)
        self.attempted += 1
        if outcome.status == OperationStatus.SUCCESS:
            self.succeeded += 1


@dataclass
class PullReport:
    """Per-remote outcomes of one fetch-and-pull fan-out."""
    outcomes: List[RemoteOutcome] = field(default_factory=list)

    def _count(self, action: str) -> int:
        return sum(1 for o in self.outcomes if o.action == action)

    @property
    def pulled(self) -> int:
        return self._count("pulled")

    @property
    def up_to_date(self) -> int:
        return self._count("up_to_date")

    @property
    def fetch_failed(self) -> int:
        return self._count("fetch_failed")

    @property
    def pull_failed(self) -> int:
        return self._count("pull_failed")


@dataclass
class RepositorySyncResult:
    """Everything that happened to one repository during a commit/push pass."""
    repo: RepositoryRecord
    classification: Optional[Classification] = None
    submodules: Optional[OperationResult] = None
    commit: Optional[OperationResult] = None
    publish: Optional[PublishReport] = None
    error: Optional[str] = None

    @property
    def changed(self) -> bool:
        """True iff a commit was created."""
        return self.commit is not None and self.commit.succeeded


@dataclass
class CycleContext:
    """Per-iteration scratch state. Discarded at the end of the cycle."""
    iteration: int
    changes_found: bool = False
    pulled: bool = False
