"""Remote descriptor for gitair."""

from dataclasses import dataclass


@dataclass(frozen=True)
class RemoteDescriptor:
    """
    A configured remote plus the branch compared against it.

    Recomputed every cycle because remotes and the current branch
    can change between cycles.
    """
    name: str
    branch: str

    @property
    def tracking_ref(self) -> str:
        """Remote-tracking ref, e.g. ``origin/main``."""
        return f"{self.name}/{self.branch}"

    def __str__(self) -> str:
        return self.tracking_ref
