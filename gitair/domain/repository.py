"""
Repository domain objects for gitair.

RepositoryRecord identifies one working tree found at startup.
It is immutable for the lifetime of the process; classification is
deliberately not stored on it because submodule configuration can
change between cycles.
"""

from dataclasses import dataclass
from enum import Enum
from pathlib import Path


class Classification(Enum):
    """How a working tree is synchronized."""
    SIMPLE = "simple"
    COMPOSITE = "composite"

    @property
    def is_composite(self) -> bool:
        return self is Classification.COMPOSITE

    @property
    def label(self) -> str:
        """Short display label used in console output."""
        return "MONOREPO" if self.is_composite else "repo"


@dataclass(frozen=True)
class RepositoryRecord:
    """
    Immutable reference to a discovered working-tree root.

    Example:
        repo = RepositoryRecord.from_path("./projects/api")
        print(repo.name)  # "api"
    """

    path: str
    name: str

    @classmethod
    def from_path(cls, path: str) -> 'RepositoryRecord':
        """
        Create a RepositoryRecord from a filesystem path.

        The path is resolved to an absolute path so that later changes
        of the process working directory cannot change its meaning.

        Args:
            path: Path to the working-tree root

        Returns:
            RepositoryRecord instance
        """
        resolved = Path(path).resolve()
        return cls(path=str(resolved), name=resolved.name)

    def __str__(self) -> str:
        return f"{self.name} ({self.path})"
