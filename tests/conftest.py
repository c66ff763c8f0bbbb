"""Shared fixtures for gitair tests."""

import shutil
import subprocess
from unittest.mock import MagicMock

import pytest

from gitair.infra.git_client import GitClient

requires_git = pytest.mark.skipif(shutil.which("git") is None, reason="git not installed")


def run_git(cwd, *args):
    """Run git for test setup and return stripped stdout."""
    result = subprocess.run(
        ["git", *args],
        cwd=str(cwd),
        capture_output=True,
        text=True,
        check=True,
    )
    return result.stdout.strip()


@pytest.fixture
def drain():
    """Exhaust a progress generator, returning (messages, return value)."""
    def _drain(gen):
        messages = []
        while True:
            try:
                messages.append(next(gen))
            except StopIteration as stop:
                return messages, stop.value
    return _drain


@pytest.fixture
def mock_git_client():
    """Create a mock git client for a clean repo with one remote."""
    client = MagicMock(spec=GitClient)
    client.has_changes.return_value = False
    client.add_all.return_value = True
    client.staged_diff.return_value = "diff --git a/x b/x\n+hello"
    client.commit.return_value = True
    client.remotes.return_value = ["origin"]
    client.current_branch.return_value = "main"
    client.fetch.return_value = True
    client.pull.return_value = True
    client.push.return_value = True
    client.rev_parse.return_value = "abc123"
    client.submodule_update.return_value = True
    return client


@pytest.fixture
def git_env(tmp_path, monkeypatch):
    """Isolate git from the user's configuration and give it an identity."""
    home = tmp_path / "home"
    home.mkdir()
    monkeypatch.setenv("HOME", str(home))
    monkeypatch.setenv("GIT_CONFIG_NOSYSTEM", "1")
    monkeypatch.setenv("GIT_AUTHOR_NAME", "Test User")
    monkeypatch.setenv("GIT_AUTHOR_EMAIL", "test@example.com")
    monkeypatch.setenv("GIT_COMMITTER_NAME", "Test User")
    monkeypatch.setenv("GIT_COMMITTER_EMAIL", "test@example.com")
    return tmp_path
