"""
End-to-end tests against real git repositories.

Each test builds a bare "origin" and one or two working clones under
tmp_path, then drives the scheduler and services with a real GitClient.
"""

import os
import re

import pytest

from conftest import requires_git, run_git
from gitair.config import SyncConfig
from gitair.domain import RepositoryRecord
from gitair.infra.git_client import GitClient
from gitair.services import MultiRemotePuller, ReconciliationScheduler, RepositoryLocator

pytestmark = requires_git

TIMESTAMP_MESSAGE = re.compile(r"^auto commit - \d{4}-\d{2}-\d{2} \d{2}:\d{2}:\d{2}$")


@pytest.fixture
def origin(git_env):
    bare = git_env / "origin.git"
    bare.mkdir()
    run_git(bare, "init", "--bare", "--quiet")
    run_git(bare, "symbolic-ref", "HEAD", "refs/heads/main")
    return bare


@pytest.fixture
def work(git_env, origin):
    """A working tree on main with one commit already pushed to origin."""
    path = git_env / "work"
    path.mkdir()
    run_git(path, "init", "--quiet")
    run_git(path, "symbolic-ref", "HEAD", "refs/heads/main")
    (path / "README.md").write_text("hello\n")
    run_git(path, "add", "-A")
    run_git(path, "commit", "--quiet", "-m", "initial")
    run_git(path, "remote", "add", "origin", str(origin))
    run_git(path, "push", "--quiet", "origin", "main")
    return path


@pytest.fixture
def other(git_env, origin, work):
    """A second clone of origin, standing in for another machine."""
    run_git(git_env, "clone", "--quiet", str(origin), "other")
    return git_env / "other"


def make_scheduler(*paths):
    repos = [RepositoryRecord.from_path(str(p)) for p in paths]
    return ReconciliationScheduler(SyncConfig(), repos, sleep=lambda seconds: None)


class TestCommitPushCycle:

    def test_commit_and_push(self, work, origin, drain):
        (work / "notes.txt").write_text("draft\n")
        scheduler = make_scheduler(work)

        messages, context = drain(scheduler.run_cycle(1))

        assert context.changes_found
        subject = run_git(work, "log", "-1", "--format=%s")
        assert TIMESTAMP_MESSAGE.match(subject)
        assert run_git(origin, "rev-parse", "main") == run_git(work, "rev-parse", "HEAD")
        assert run_git(work, "status", "--porcelain") == ""
        assert "  ✓ Successfully pushed to 1/1 remotes" in messages

    def test_second_cycle_is_idempotent(self, work, drain):
        (work / "notes.txt").write_text("draft\n")
        scheduler = make_scheduler(work)
        drain(scheduler.run_cycle(1))
        head = run_git(work, "rev-parse", "HEAD")

        messages, context = drain(scheduler.run_cycle(2))

        assert not context.changes_found
        assert "  ✓ No changes detected" in messages
        assert run_git(work, "rev-parse", "HEAD") == head

    def test_clean_tree_makes_no_commit(self, work, drain):
        head = run_git(work, "rev-parse", "HEAD")

        messages, _ = drain(make_scheduler(work).run_cycle(1))

        assert run_git(work, "rev-parse", "HEAD") == head
        assert messages[-1] == "  ✓ No changes detected"

    def test_push_fans_out_to_every_remote(self, work, git_env, drain):
        mirror = git_env / "mirror.git"
        mirror.mkdir()
        run_git(mirror, "init", "--bare", "--quiet")
        run_git(work, "remote", "add", "mirror", str(mirror))
        (work / "notes.txt").write_text("draft\n")

        messages, _ = drain(make_scheduler(work).run_cycle(1))

        head = run_git(work, "rev-parse", "HEAD")
        assert run_git(mirror, "rev-parse", "main") == head
        assert "  ✓ Successfully pushed to 2/2 remotes" in messages

    def test_commit_without_remotes(self, git_env, drain):
        path = git_env / "local"
        path.mkdir()
        run_git(path, "init", "--quiet")
        (path / "a.txt").write_text("a\n")

        messages, context = drain(make_scheduler(path).run_cycle(1))

        assert context.changes_found
        assert "  ⚠️  No remotes configured, skipping push" in messages


@pytest.mark.skipif(os.name != "posix", reason="needs a POSIX shell")
class TestNonUtf8Content:
    """Bytes that are not UTF-8 must never stop the loop."""

    @pytest.fixture
    def latin1_change(self, work):
        (work / "menu.txt").write_bytes(b"caf\xe9 cr\xe8me\n")
        return work

    def make_ai_scheduler(self, git_env, path, provider_body):
        script = git_env / "fake-provider"
        script.write_text(f"#!/bin/sh\n{provider_body}\n")
        script.chmod(0o755)
        settings = SyncConfig(use_ai=True, provider_command=str(script), provider_timeout=10)
        repos = [RepositoryRecord.from_path(str(path))]
        return ReconciliationScheduler(settings, repos, sleep=lambda seconds: None)

    def test_commit_lands_with_provider_message(self, git_env, latin1_change, origin, drain):
        scheduler = self.make_ai_scheduler(git_env, latin1_change, "echo 'feat: Add menu'")

        messages, context = drain(scheduler.run_cycle(1))

        assert context.changes_found
        assert run_git(latin1_change, "log", "-1", "--format=%s") == "Add menu"
        assert run_git(origin, "rev-parse", "main") == run_git(latin1_change, "rev-parse", "HEAD")
        assert '  💬 AI message: "Add menu"' in messages

    def test_undecodable_provider_output_falls_back(self, git_env, latin1_change, drain):
        scheduler = self.make_ai_scheduler(git_env, latin1_change, r"printf 'Add caf\351\n'")

        messages, context = drain(scheduler.run_cycle(1))

        assert context.changes_found
        assert TIMESTAMP_MESSAGE.match(run_git(latin1_change, "log", "-1", "--format=%s"))
        assert "  ⚠️  Falling back to timestamp commit" in messages
        assert run_git(latin1_change, "status", "--porcelain") == ""


class TestPullDrift:

    def test_pulls_when_remote_moved(self, work, other, drain):
        (other / "from_other.txt").write_text("hi\n")
        run_git(other, "add", "-A")
        run_git(other, "commit", "--quiet", "-m", "remote change")
        run_git(other, "push", "--quiet", "origin", "main")

        puller = MultiRemotePuller(GitClient())
        messages, report = drain(puller.reconcile(str(work)))

        assert report.pulled == 1
        assert (work / "from_other.txt").exists()
        assert run_git(work, "rev-parse", "HEAD") == run_git(other, "rev-parse", "HEAD")
        assert any("Pulling updates from origin" in m for m in messages)

        _, report = drain(puller.reconcile(str(work)))
        assert report.up_to_date == 1
        assert report.pulled == 0

    def test_changes_travel_between_clones(self, work, other, drain):
        (work / "shared.txt").write_text("v1\n")
        scheduler = make_scheduler(work, other)
        scheduler.last_pull = scheduler.clock() - 3600

        _, context = drain(scheduler.run_cycle(1))

        assert context.pulled
        assert (other / "shared.txt").read_text() == "v1\n"


class TestDiscoveryOnDisk:

    def test_finds_working_trees_not_bare(self, git_env, work, other):
        repos = RepositoryLocator().discover(str(git_env))

        assert [r.name for r in repos] == ["other", "work"]
