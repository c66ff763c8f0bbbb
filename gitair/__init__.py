"""
gitair - Keep many independent Git working trees converged with their remotes.

A level-triggered reconciliation loop: every cycle it re-checks each
repository from scratch, commits local changes, pushes them to every
configured remote and pulls from remotes whose tip has moved. There is
no retry queue; the next cycle is the retry.

Quick Start:
    from gitair import SyncConfig, RepositoryLocator, ReconciliationScheduler

    settings = SyncConfig(root="~/projects", check_interval=60)
    repos = RepositoryLocator().discover(settings.root)

    scheduler = ReconciliationScheduler(settings, repos)
    for line in scheduler.run(max_cycles=1):
        print(line)

Domain Objects:
    RepositoryRecord - A working tree found at startup
    RemoteDescriptor - A remote and the branch compared against it
    OperationResult - SUCCESS / NOOP / FAILED outcome of one step

Services:
    RepositoryLocator, RepositoryClassifier, SubmoduleSynchronizer,
    CommitStager, MultiRemotePublisher, MultiRemotePuller,
    ReconciliationScheduler
"""

__version__ = "0.3.0"

# Domain objects
from .domain import (
    RepositoryRecord,
    Classification,
    RemoteDescriptor,
    OperationStatus,
    OperationResult,
    PublishReport,
    PullReport,
)

# Configuration
from .config import SyncConfig, load_config, parse_interval

# Services
from .services import (
    RepositoryLocator,
    RepositoryClassifier,
    RemoteSet,
    DriftDetector,
    SubmoduleSynchronizer,
    CommitStager,
    MultiRemotePublisher,
    MultiRemotePuller,
    ReconciliationScheduler,
)

__all__ = [
    # Version
    "__version__",
    # Domain objects
    "RepositoryRecord",
    "Classification",
    "RemoteDescriptor",
    "OperationStatus",
    "OperationResult",
    "PublishReport",
    "PullReport",
    # Configuration
    "SyncConfig",
    "load_config",
    "parse_interval",
    # Services
    "RepositoryLocator",
    "RepositoryClassifier",
    "RemoteSet",
    "DriftDetector",
    "SubmoduleSynchronizer",
    "CommitStager",
    "MultiRemotePublisher",
    "MultiRemotePuller",
    "ReconciliationScheduler",
]
