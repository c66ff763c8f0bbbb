"""
Domain layer for gitair.

Contains pure domain objects with no I/O or side effects:
- RepositoryRecord: A working tree discovered at startup
- RemoteDescriptor: A remote and the branch compared against it
- OperationResult and reports: Outcomes of reconciliation steps
"""

from .repository import RepositoryRecord, Classification
from .remote import RemoteDescriptor
from .operation import (
    OperationStatus,
    OperationResult,
    RemoteOutcome,
    PublishReport,
    PullReport,
    RepositorySyncResult,
    CycleContext,
)

__all__ = [
    'RepositoryRecord',
    'Classification',
    'RemoteDescriptor',
    'OperationStatus',
    'OperationResult',
    'RemoteOutcome',
    'PublishReport',
    'PullReport',
    'RepositorySyncResult',
    'CycleContext',
]
