from __future__ import annotations


class PromptError(Exception):
    """Raised when a prompt segment cannot be rendered at all"""


class GitError(PromptError):
    """Raised when ``git status`` fails inside a repository"""
