"""Tests for commit message providers."""

import os
import subprocess
from unittest.mock import patch

import pytest

from gitair.infra.message_provider import (
    GeminiMessageProvider,
    MessageProviderError,
    build_prompt,
    sanitize_message,
    truncate_diff,
)


class TestSanitizeMessage:
    """Tests for extracting a usable line from provider output."""

    def test_first_non_empty_line(self):
        assert sanitize_message("\n\n  Add login form  \nsecond line\n") == "Add login form"

    def test_skips_credentials_boilerplate(self):
        output = "Loaded cached credentials.\nUpdate README\n"
        assert sanitize_message(output) == "Update README"

    @pytest.mark.parametrize("raw, expected", [
        ("feat: Add parser", "Add parser"),
        ("fix: Handle empty input", "Handle empty input"),
        ("chore: Bump version", "Bump version"),
        ("docs: Explain flags", "docs: Explain flags"),
        ("feat: fix: Handle stacked prefixes", "Handle stacked prefixes"),
        ("feat: fix: chore: x", "x"),
        ("fix: feat: Keep later prefix", "feat: Keep later prefix"),
    ])
    def test_strips_conventional_prefixes(self, raw, expected):
        assert sanitize_message(raw) == expected

    def test_truncates_to_72(self):
        message = sanitize_message("x" * 100)
        assert len(message) == 72

    def test_nothing_usable(self):
        assert sanitize_message("") is None
        assert sanitize_message("Loaded cached credentials.\n\n") is None


class TestPrompt:
    def test_truncate_diff(self):
        diff = "a" * 2500
        truncated = truncate_diff(diff, 2000)
        assert truncated.startswith("a" * 2000)
        assert truncated.endswith("... (truncated)")
        assert len(truncated) == 2000 + len("\n... (truncated)")

    def test_short_diff_untouched(self):
        assert truncate_diff("small", 2000) == "small"

    def test_prompt_contains_diff(self):
        prompt = build_prompt("+added line")
        assert "+added line" in prompt
        assert prompt.rstrip().endswith("Commit message:")


class TestGeminiMessageProvider:
    """Tests for the subprocess-backed provider."""

    @pytest.fixture
    def mock_run(self):
        with patch("gitair.infra.message_provider.subprocess.run") as run:
            yield run

    def test_generate(self, mock_run):
        mock_run.return_value = subprocess.CompletedProcess(
            args=[], returncode=0, stdout="Loaded cached credentials.\nfeat: Add cache layer\n", stderr=""
        )

        message = GeminiMessageProvider().generate("+cache")

        assert message == "Add cache layer"
        args, kwargs = mock_run.call_args
        assert args[0][0] == "gemini"
        assert "+cache" in args[0][1]
        assert kwargs["timeout"] == 30

    def test_custom_command(self, mock_run):
        mock_run.return_value = subprocess.CompletedProcess(
            args=[], returncode=0, stdout="Tidy\n", stderr=""
        )
        GeminiMessageProvider(command="llm", timeout=5).generate("diff")
        assert mock_run.call_args.args[0][0] == "llm"
        assert mock_run.call_args.kwargs["timeout"] == 5

    def test_timeout(self, mock_run):
        mock_run.side_effect = subprocess.TimeoutExpired(cmd="gemini", timeout=30)
        with pytest.raises(MessageProviderError, match="timeout"):
            GeminiMessageProvider().generate("diff")

    def test_missing_command(self, mock_run):
        mock_run.side_effect = FileNotFoundError("gemini")
        with pytest.raises(MessageProviderError):
            GeminiMessageProvider().generate("diff")

    def test_non_zero_exit(self, mock_run):
        mock_run.return_value = subprocess.CompletedProcess(
            args=[], returncode=1, stdout="", stderr="quota exceeded"
        )
        with pytest.raises(MessageProviderError, match="exit status 1"):
            GeminiMessageProvider().generate("diff")

    def test_empty_output(self, mock_run):
        mock_run.return_value = subprocess.CompletedProcess(
            args=[], returncode=0, stdout="\n\n", stderr=""
        )
        with pytest.raises(MessageProviderError, match="no valid response"):
            GeminiMessageProvider().generate("diff")

    def test_output_is_decoded_as_utf8(self, mock_run):
        mock_run.return_value = subprocess.CompletedProcess(
            args=[], returncode=0, stdout="Tidy\n", stderr=""
        )
        GeminiMessageProvider().generate("diff")
        assert mock_run.call_args.kwargs["encoding"] == "utf-8"

    def test_undecodable_output(self, mock_run):
        mock_run.side_effect = UnicodeDecodeError("utf-8", b"Add caf\xe9", 7, 8, "invalid continuation byte")
        with pytest.raises(MessageProviderError, match="not valid UTF-8"):
            GeminiMessageProvider().generate("diff")


@pytest.mark.skipif(os.name != "posix", reason="needs a POSIX shell")
class TestGeminiMessageProviderProcess:
    """Runs a stand-in provider script as a real subprocess."""

    def make_provider(self, tmp_path, body):
        script = tmp_path / "fake-provider"
        script.write_text(f"#!/bin/sh\n{body}\n")
        script.chmod(0o755)
        return GeminiMessageProvider(command=str(script), timeout=10)

    def test_real_output(self, tmp_path):
        provider = self.make_provider(tmp_path, "echo 'feat: Add notes'")
        assert provider.generate("+notes") == "Add notes"

    def test_invalid_utf8_output_raises_provider_error(self, tmp_path):
        provider = self.make_provider(tmp_path, r"printf 'Add caf\351\n'")
        with pytest.raises(MessageProviderError):
            provider.generate("+notes")
