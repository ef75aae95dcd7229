"""Shared fixtures: a throwaway git repository and a fake Anthropic client."""

import json
from pathlib import Path
from types import SimpleNamespace

import git
import pytest

# 2024-01-15 10:00:00 UTC in git's raw date format
DEFAULT_DATE = "1705312800 +0000"


class RepoBuilder:
    """Creates commits with fixed authors and dates in a temporary repository."""

    def __init__(self, root: Path) -> None:
        self.repo = git.Repo.init(root)
        self.path = root
        self._counter = 0

    def commit(
        self,
        message: str,
        name: str = "Jane Doe",
        email: str = "jane@example.com",
        date: str = DEFAULT_DATE,
    ):
        self._counter += 1
        changed = self.path / "notes.txt"
        with changed.open("a", encoding="utf-8") as f:
            f.write(f"change {self._counter}\n")
        self.repo.index.add([str(changed)])
        actor = git.Actor(name, email)
        return self.repo.index.commit(
            message,
            author=actor,
            committer=actor,
            author_date=date,
            commit_date=date,
        )


@pytest.fixture
def repo_builder(tmp_path):
    return RepoBuilder(tmp_path / "repo")


def report_payload(summary: str = "Did things.", **lists) -> dict:
    """A well-formed model answer; list fields default to empty."""
    payload = {
        "summary": summary,
        "keyAchievements": [],
        "technicalSkills": [],
        "businessImpact": [],
        "problemSolving": [],
        "leadership": [],
    }
    payload.update(lists)
    return payload


class FakeClient:
    """Stands in for anthropic.Anthropic; replays canned texts or raises queued errors."""

    def __init__(self, responses: list) -> None:
        self.responses = list(responses)
        self.calls: list[dict] = []
        self.messages = SimpleNamespace(create=self._create)

    def _create(self, **kwargs):
        self.calls.append(kwargs)
        text = self.responses.pop(0)
        if isinstance(text, Exception):
            raise text
        content = [SimpleNamespace(type="text", text=text)] if text is not None else []
        return SimpleNamespace(content=content)


@pytest.fixture
def fake_client_factory():
    def build(*payloads) -> FakeClient:
        texts = [
            p if isinstance(p, (str, Exception)) or p is None else json.dumps(p)
            for p in payloads
        ]
        return FakeClient(texts)
    return build
