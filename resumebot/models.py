"""Data models shared by the git reader, the analyzer and the web API."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

# Report list fields, in display order, mapped to their JSON keys
REPORT_LIST_FIELDS: dict[str, str] = {
    "key_achievements": "keyAchievements",
    "technical_skills": "technicalSkills",
    "business_impact": "businessImpact",
    "problem_solving": "problemSolving",
    "leadership": "leadership",
}


# ── Git Models ───────────────────────────────────────────────────────────────

@dataclass(frozen=True)
class CommitRecord:
    """A single commit parsed from one line of `git log` output."""
    hash: str
    date: str
    author_name: str
    author_email: str
    subject: str
    body: str = ""

    @property
    def short_hash(self) -> str:
        return self.hash[:7]

    def to_dict(self) -> dict[str, str]:
        return {
            "hash": self.hash,
            "date": self.date,
            "author": self.author_name,
            "email": self.author_email,
            "subject": self.subject,
            "body": self.body,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "CommitRecord":
        """Build a record from the JSON shape the web UI posts back."""
        if not isinstance(data, dict):
            raise ValueError(f"Commit entry must be an object, got {type(data).__name__}")
        return cls(
            hash=str(data.get("hash") or ""),
            date=str(data.get("date") or ""),
            author_name=str(data.get("author") or data.get("authorName") or ""),
            author_email=str(data.get("email") or data.get("authorEmail") or ""),
            subject=str(data.get("subject") or ""),
            body=str(data.get("body") or ""),
        )

    def to_log_line(self) -> str:
        """Serialize back to the tab-delimited `git log` line format."""
        return "\t".join(
            [self.hash, self.date, self.author_name, self.author_email, self.subject, self.body]
        )


# ── Analysis Models ──────────────────────────────────────────────────────────

@dataclass
class AnalysisReport:
    """
    Experience report produced by the model.

    The same shape is used for a single batch (partial report) and for the
    merged result of a whole run.
    """
    summary: str = ""
    key_achievements: list[str] = field(default_factory=list)
    technical_skills: list[str] = field(default_factory=list)
    business_impact: list[str] = field(default_factory=list)
    problem_solving: list[str] = field(default_factory=list)
    leadership: list[str] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        d: dict[str, Any] = {"summary": self.summary}
        for attr, key in REPORT_LIST_FIELDS.items():
            d[key] = list(getattr(self, attr))
        return d

    @classmethod
    def from_dict(cls, data: Any) -> "AnalysisReport":
        """
        Validate and convert a decoded model response.

        Raises ValueError when the payload does not have the report shape:
        `summary` must be a string and every list field a list of strings.
        """
        if not isinstance(data, dict):
            raise ValueError(f"Expected a JSON object, got {type(data).__name__}")

        summary = data.get("summary")
        if not isinstance(summary, str):
            raise ValueError("Field 'summary' must be a string")

        lists: dict[str, list[str]] = {}
        for attr, key in REPORT_LIST_FIELDS.items():
            value = data.get(key)
            if not isinstance(value, list) or not all(isinstance(v, str) for v in value):
                raise ValueError(f"Field '{key}' must be a list of strings")
            lists[attr] = list(value)

        return cls(summary=summary, **lists)
