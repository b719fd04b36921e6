"""Domain models for GitHub references and gh CLI responses.

These models mirror the JSON returned by `gh ... --json`, providing type-safe
access to the few PR and repository fields the diff view needs.
"""

from __future__ import annotations

import json
from dataclasses import dataclass
from urllib.parse import urlparse


@dataclass(frozen=True)
class LinkTarget:
    """Line and side a deep link into the hosted diff view points at.

    Attributes:
        line: Line number on the given side
        side: "R" for the new file, "L" for the old file
    """

    line: int
    side: str = "R"


@dataclass(frozen=True)
class PullRequestRef:
    """A pull request reference given by URL or by bare number.

    owner/repo are empty for a bare number; they are resolved from the
    current repository by the caller.
    """

    number: int
    owner: str = ""
    repo: str = ""

    @classmethod
    def from_string(cls, value: str) -> PullRequestRef:
        """Parse "123" or "https://github.com/owner/repo/pull/123[/files]".

        Raises:
            ValueError: If the value is neither a PR number nor a github.com PR URL
        """
        value = value.strip()
        if value.isdigit():
            return cls(number=int(value))

        parsed = urlparse(value)
        parts = [part for part in parsed.path.split("/") if part]
        if (
            parsed.hostname == "github.com"
            and len(parts) >= 4
            and parts[2] == "pull"
            and parts[3].isdigit()
        ):
            return cls(number=int(parts[3]), owner=parts[0], repo=parts[1])

        raise ValueError(f"Invalid pull request reference: {value!r}")

    @property
    def has_repo(self) -> bool:
        return bool(self.owner and self.repo)

    @property
    def full_repo(self) -> str:
        return f"{self.owner}/{self.repo}"


@dataclass
class Repository:
    """GitHub repository identity."""

    owner: str
    name: str

    @classmethod
    def from_dict(cls, data: dict) -> Repository:
        owner = data.get("owner") or {}
        return cls(
            owner=owner.get("login", "") if isinstance(owner, dict) else str(owner),
            name=data.get("name", ""),
        )

    @classmethod
    def from_json(cls, json_str: str) -> Repository:
        return cls.from_dict(json.loads(json_str))

    @property
    def full_name(self) -> str:
        return f"{self.owner}/{self.name}"


@dataclass
class PullRequest:
    """GitHub Pull Request metadata."""

    number: int
    url: str = ""
    title: str = ""
    head_ref_oid: str = ""

    @classmethod
    def from_dict(cls, data: dict) -> PullRequest:
        return cls(
            number=data.get("number", 0),
            url=data.get("url", ""),
            title=data.get("title", ""),
            head_ref_oid=data.get("headRefOid", ""),
        )

    @classmethod
    def from_json(cls, json_str: str) -> PullRequest:
        return cls.from_dict(json.loads(json_str))
