"""Serializable git metadata sent with a job."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

import pygit2


@dataclass(frozen=True, slots=True)
class Head:
    """The HEAD revision of a git repository."""

    id: str
    author_name: str = ""
    author_email: str = ""
    committer_name: str = ""
    committer_email: str = ""
    message: str = ""

    @classmethod
    def from_pygit2(cls, commit: pygit2.Commit) -> Head:
        return cls(
            id=str(commit.id),
            author_name=commit.author.name,
            author_email=commit.author.email,
            committer_name=commit.committer.name,
            committer_email=commit.committer.email,
            message=first_line(commit.message),
        )

    def to_payload(self) -> dict[str, Any]:
        payload: dict[str, Any] = {"id": self.id}
        # Empty identity fields are left out, the message is always sent
        for key in ("author_name", "author_email", "committer_name", "committer_email"):
            value = getattr(self, key)
            if value:
                payload[key] = value
        payload["message"] = self.message
        return payload


@dataclass(frozen=True, slots=True)
class Remote:
    """A named remote of a git repository."""

    name: str
    url: str

    def to_payload(self) -> dict[str, Any]:
        return {"name": self.name, "url": self.url}


@dataclass(frozen=True, slots=True)
class GitInfo:
    """Head commit, branch and remotes of the repository under test."""

    head: Head
    branch: str
    remotes: tuple[Remote, ...] = field(default_factory=tuple)

    def to_payload(self) -> dict[str, Any]:
        payload: dict[str, Any] = {"head": self.head.to_payload(), "branch": self.branch}
        if self.remotes:
            payload["remotes"] = [r.to_payload() for r in self.remotes]
        return payload


def first_line(text: str) -> str:
    """Get first line of text."""
    return text.splitlines()[0] if text else ""
