"""Shared fixtures for jenkins_auth tests."""

from __future__ import annotations

import io
from pathlib import Path

import pytest
from rich.console import Console

from jenkins_auth.auth_store import AuthStore
from jenkins_auth.config import AuthSettings
from jenkins_auth.prompts import Prompter


class ScriptedPrompter(Prompter):
    """Prompter that replays canned answers.

    An empty answer falls back to the default, like a real terminal prompt.
    An exception instance in the answers is raised instead of answering.
    """

    def __init__(self, answers: list | None = None) -> None:
        self.answers = list(answers or [])
        self.asked: list[tuple[str, str, bool]] = []

    def ask(self, message: str, default: str = "", secret: bool = False) -> str:
        self.asked.append((message, default, secret))
        if not self.answers:
            raise AssertionError(f"Unexpected prompt: {message}")
        answer = self.answers.pop(0)
        if isinstance(answer, BaseException):
            raise answer
        return answer if answer else default


@pytest.fixture
def console() -> Console:
    """Console writing to an in-memory buffer, wide enough to avoid wrapping."""
    return Console(file=io.StringIO(), width=200)


@pytest.fixture
def tmp_store(tmp_path: Path) -> AuthStore:
    return AuthStore(path=tmp_path / "jenkins_auth" / "config.json")


@pytest.fixture
def no_env_settings(tmp_store: AuthStore) -> AuthSettings:
    """Settings with no credentials in the environment."""
    return AuthSettings(config_path=tmp_store.path)
