"""
Service layer for gitair.

Contains the reconciliation components that orchestrate domain
objects and infrastructure:
- RepositoryLocator / RepositoryClassifier: Discovery and classification
- SubmoduleSynchronizer / CommitStager: Local change handling
- MultiRemotePublisher / MultiRemotePuller: Remote fan-out
- ReconciliationScheduler: The control loop
"""

from .locator import RepositoryLocator
from .classifier import RepositoryClassifier
from .remotes import RemoteSet
from .drift import DriftDetector
from .submodules import SubmoduleSynchronizer
from .commit_stager import CommitStager, timestamp_message
from .publisher import MultiRemotePublisher
from .puller import MultiRemotePuller
from .scheduler import ReconciliationScheduler
from .workdir import working_directory, WorkingDirectoryError

__all__ = [
    'RepositoryLocator',
    'RepositoryClassifier',
    'RemoteSet',
    'DriftDetector',
    'SubmoduleSynchronizer',
    'CommitStager',
    'timestamp_message',
    'MultiRemotePublisher',
    'MultiRemotePuller',
    'ReconciliationScheduler',
    'working_directory',
    'WorkingDirectoryError',
]
