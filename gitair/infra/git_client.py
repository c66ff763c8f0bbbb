"""
Git client infrastructure for gitair.

Provides a clean abstraction over git command execution.
All git operations go through this client, making them:
- Easy to mock for testing
- Consistent in error handling
- Isolated from reconciliation logic

Commands are passed as argument vectors, never through a shell.
The exit code is the only success signal; stdout is parsed only
where a value is needed.
"""

import subprocess
from typing import Optional, List, Tuple
import logging

logger = logging.getLogger(__name__)


class GitClient:
    """
    Abstraction over git commands.

    Example:
        client = GitClient()
        if client.has_changes("/path/to/repo"):
            client.add_all("/path/to/repo")
    """

    def __init__(self, executable: str = "git", timeout: Optional[float] = None):
        """
        Initialize GitClient.

        Args:
            executable: Name or path of the git binary
            timeout: Command timeout in seconds (None blocks until git exits)
        """
        self.executable = executable
        self.timeout = timeout

    def _run(self, args: List[str], cwd: str) -> Tuple[Optional[str], int]:
        """
        Run a git command.

        Args:
            args: Arguments after the git executable
            cwd: Working directory

        Returns:
            Tuple of (stdout, returncode). Return code -1 means git
            could not be started or timed out.
        """
        cmd = [self.executable, *args]
        logger.debug(f"Running in '{cwd}': {' '.join(cmd)}")
        try:
            result = subprocess.run(
                cmd,
                cwd=cwd,
                capture_output=True,
                text=True,
                encoding="utf-8",
                errors="replace",
                timeout=self.timeout
            )
        except subprocess.TimeoutExpired:
            logger.warning(f"Git command timed out: {' '.join(cmd)}")
            return None, -1
        except Exception as e:
            logger.error(f"Git command failed: {' '.join(cmd)} - {e}")
            return None, -1

        if result.returncode != 0 and result.stderr:
            logger.debug(result.stderr.strip())

        output = result.stdout
        return output.strip() if output else None, result.returncode

    def has_changes(self, path: str) -> bool:
        """True if the working tree has tracked or untracked changes."""
        output, code = self._run(["status", "--porcelain"], cwd=path)
        if code != 0:
            return False
        return bool(output)

    def add_all(self, path: str) -> bool:
        """Stage everything, including deletions."""
        _, code = self._run(["add", "-A"], cwd=path)
        return code == 0

    def staged_diff(self, path: str) -> Optional[str]:
        """Return the staged diff, or None if unavailable or empty."""
        output, code = self._run(["diff", "--staged"], cwd=path)
        if code != 0 or not output:
            return None
        return output

    def commit(self, path: str, message: str) -> bool:
        """Commit the index with the given message."""
        _, code = self._run(["commit", "-m", message], cwd=path)
        return code == 0

    def remotes(self, path: str) -> List[str]:
        """Remote names, in the order git lists them."""
        output, code = self._run(["remote"], cwd=path)
        if code != 0 or not output:
            return []
        return output.split()

    def current_branch(self, path: str) -> Optional[str]:
        """Get current branch name (None when detached or on error)."""
        output, code = self._run(["branch", "--show-current"], cwd=path)
        if code == 0 and output:
            return output.strip()
        return None

    def fetch(self, path: str, remote: str = "origin") -> bool:
        """
        Fetch from remote.

        Returns:
            True if successful
        """
        _, code = self._run(["fetch", remote], cwd=path)
        return code == 0

    def pull(self, path: str, remote: str, branch: str) -> bool:
        """
        Pull (fetch and merge) a branch from a remote.

        Returns:
            True if successful
        """
        _, code = self._run(["pull", remote, branch], cwd=path)
        return code == 0

    def push(self, path: str, remote: str, branch: str) -> bool:
        """
        Push a branch to a remote.

        Returns:
            True if successful
        """
        _, code = self._run(["push", remote, branch], cwd=path)
        return code == 0

    def rev_parse(self, path: str, ref: str) -> Optional[str]:
        """Resolve a ref to a commit id, or None if it does not resolve."""
        output, code = self._run(["rev-parse", "--verify", "--quiet", ref], cwd=path)
        if code == 0 and output:
            return output.strip()
        return None

    def submodule_update(self, path: str) -> bool:
        """Update submodules to their remote tracking branch, merging local work."""
        _, code = self._run(["submodule", "update", "--remote", "--merge"], cwd=path)
        return code == 0
