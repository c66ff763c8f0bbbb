"""
Commit message providers for gitair.

A provider turns a staged diff into a one-line commit message or
raises MessageProviderError. Callers always have a deterministic
fallback, so a provider never blocks a commit.
"""

import logging
import subprocess
from typing import Optional, Protocol

logger = logging.getLogger(__name__)

PROMPT_TEMPLATE = """You are a git commit message generator. Based on the following git diff output, generate ONE concise commit message.

Rules:
- ONE line only
- Max 50 characters
- Use imperative mood (e.g., "Add feature" not "Added feature")
- Be specific about what changed
- No explanations, just the commit message

Git diff:
---
{diff}
---

Commit message:"""

TRUNCATION_MARKER = "\n... (truncated)"

# Lines printed by provider CLIs that are never part of the answer
BOILERPLATE_MARKERS = ("Loaded cached credentials", "credentials")

CONVENTIONAL_PREFIXES = ("feat: ", "fix: ", "chore: ")


class MessageProviderError(Exception):
    """Raised when a provider cannot produce a usable message."""


class CommitMessageProvider(Protocol):
    """Anything that can describe a staged diff in one line."""

    def generate(self, diff: str) -> str:
        ...


def truncate_diff(diff: str, max_chars: int = 2000) -> str:
    """Cut the diff to max_chars, marking that it was cut."""
    if len(diff) > max_chars:
        return diff[:max_chars] + TRUNCATION_MARKER
    return diff


def build_prompt(diff: str, max_chars: int = 2000) -> str:
    return PROMPT_TEMPLATE.format(diff=truncate_diff(diff, max_chars))


def sanitize_message(output: str, max_length: int = 72) -> Optional[str]:
    """
    Extract a commit message from raw provider output.

    Takes the first non-empty line that is not provider boilerplate,
    strips the feat:, fix: and chore: prefixes in that order and
    truncates the result.

    Args:
        output: Raw stdout of the provider
        max_length: Maximum message length

    Returns:
        The message, or None if no usable line was found
    """
    for line in output.splitlines():
        line = line.strip()
        if not line:
            continue
        if any(marker in line for marker in BOILERPLATE_MARKERS):
            continue
        for prefix in CONVENTIONAL_PREFIXES:
            if line.startswith(prefix):
                line = line[len(prefix):]
        line = line[:max_length]
        # A bare prefix leaves nothing behind
        if line.strip():
            return line
    return None


class GeminiMessageProvider:
    """
    Generates commit messages by running a generative text CLI.

    The CLI is invoked as ``[command, prompt]`` and must print the
    answer on stdout. The call is abandoned after ``timeout`` seconds.

    Example:
        provider = GeminiMessageProvider(timeout=30)
        message = provider.generate(diff)
    """

    def __init__(
        self,
        command: str = "gemini",
        timeout: float = 30,
        max_diff_chars: int = 2000,
        max_length: int = 72,
        cwd: Optional[str] = None
    ):
        self.command = command
        self.timeout = timeout
        self.max_diff_chars = max_diff_chars
        self.max_length = max_length
        self.cwd = cwd

    def generate(self, diff: str) -> str:
        """
        Ask the provider for a commit message.

        Raises:
            MessageProviderError: on timeout, non-zero exit, missing
                executable, undecodable output or output with no
                usable line
        """
        prompt = build_prompt(diff, self.max_diff_chars)
        try:
            result = subprocess.run(
                [self.command, prompt],
                capture_output=True,
                text=True,
                encoding="utf-8",
                timeout=self.timeout,
                cwd=self.cwd
            )
        except subprocess.TimeoutExpired:
            raise MessageProviderError(f"{self.command} timeout after {self.timeout:g}s")
        except OSError as e:
            raise MessageProviderError(f"{self.command} error: {e}")
        except UnicodeDecodeError as e:
            raise MessageProviderError(f"{self.command} output is not valid UTF-8: {e.reason}")

        if result.returncode != 0:
            logger.debug(f"{self.command} stderr: {(result.stderr or '').strip()}")
            raise MessageProviderError(f"{self.command} error: exit status {result.returncode}")

        message = sanitize_message(result.stdout or "", self.max_length)
        if not message:
            raise MessageProviderError(f"no valid response from {self.command}")
        return message
