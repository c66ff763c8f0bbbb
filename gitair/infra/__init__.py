"""
Infrastructure layer for gitair.

Contains abstractions for external processes:
- GitClient: Git command execution
- GeminiMessageProvider: Generative commit messages via a CLI

These provide clean interfaces that can be mocked for testing.
"""

from .git_client import GitClient
from .message_provider import (
    CommitMessageProvider,
    GeminiMessageProvider,
    MessageProviderError,
    sanitize_message,
)

__all__ = [
    'GitClient',
    'CommitMessageProvider',
    'GeminiMessageProvider',
    'MessageProviderError',
    'sanitize_message',
]
