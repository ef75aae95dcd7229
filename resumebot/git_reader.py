"""Git repository reader — extracts and filters an author's commit history."""

from collections.abc import Iterable
from pathlib import Path

import git

from resumebot.models import CommitRecord

# One commit per line: hash, short date, author name, author email, subject, body
LOG_FORMAT = "format:%H%x09%ad%x09%an%x09%ae%x09%s%x09%b"

MIN_SUBJECT_LENGTH = 3

# Lower-cased, trimmed subjects that carry no information
MEANINGLESS_EXACT = frozenset({"", "*"})

# Conventional-commit prefixes that are meaningless when nothing follows them
MEANINGLESS_PREFIXES = ("feat:", "fix:", "chore:", "docs:", "style:", "refactor:", "test:")


class GitLogError(RuntimeError):
    """The underlying `git log` invocation failed."""


def validate_repo(repo_path: str | Path) -> Path:
    """Check that `repo_path` exists and is a git working tree."""
    path = Path(repo_path).expanduser()
    if not path.exists():
        raise ValueError(f"Repository path does not exist: {repo_path}")
    if not (path / ".git").exists():
        raise ValueError(f"Not a git repository: {repo_path}")
    return path


def read_git_log(repo_path: str | Path, author: str, since: str) -> str:
    """Run `git log` for one author since a date and return the raw output."""
    try:
        repo = git.Repo(str(repo_path))
        return repo.git.log(
            f"--author={author}",
            f"--since={since}",
            f"--pretty={LOG_FORMAT}",
            "--date=short",
        )
    except git.exc.GitError as e:
        raise GitLogError(f"Git command failed: {e}") from e


def parse_log_line(line: str) -> CommitRecord:
    """Split one tab-delimited log line; missing fields become empty strings."""
    parts = line.split("\t")
    padded = parts[:5] + [""] * (5 - len(parts[:5]))
    sha, date, name, email, subject = padded
    body = "\t".join(parts[5:]).strip()
    return CommitRecord(
        hash=sha,
        date=date,
        author_name=name,
        author_email=email,
        subject=subject,
        body=body,
    )


def is_meaningless_subject(subject: str) -> bool:
    """True when the subject is empty, a bare bullet or a bare commit-type prefix."""
    normalized = subject.lower().strip()
    if normalized in MEANINGLESS_EXACT:
        return True
    for prefix in MEANINGLESS_PREFIXES:
        if normalized.startswith(prefix) and not normalized[len(prefix):].strip():
            return True
    return False


def is_valid_commit(commit: CommitRecord) -> bool:
    """Apply the structural and semantic checks a commit must pass."""
    if not commit.hash or not commit.date or not commit.author_name or not commit.subject:
        return False
    if len(commit.subject.strip()) < MIN_SUBJECT_LENGTH:
        return False
    if not commit.author_name.strip() or not commit.author_email.strip():
        return False
    return not is_meaningless_subject(commit.subject)


def _iter_lines(raw: str | Iterable[str]) -> Iterable[str]:
    if isinstance(raw, str):
        yield from raw.split("\n")
        return
    for chunk in raw:
        yield from chunk.split("\n")


def filter_commits(raw: str | Iterable[str]) -> list[CommitRecord]:
    """
    Parse raw `git log` output into commits, dropping unusable entries.

    Accepts the whole output as one string or an iterable of lines. Blank
    lines, records missing required fields, too-short subjects and
    placeholder subjects such as "fix:" are silently skipped. Input order
    is preserved.
    """
    commits: list[CommitRecord] = []
    for line in _iter_lines(raw):
        if not line.strip():
            continue
        commit = parse_log_line(line)
        if is_valid_commit(commit):
            commits.append(commit)
    return commits


def fetch_commits(repo_path: str | Path, author: str, since: str) -> list[CommitRecord]:
    """
    Validate the repository, read its log and return the filtered commits.

    Raises ValueError for an invalid repository path and GitLogError when
    git itself fails.
    """
    path = validate_repo(repo_path)
    return filter_commits(read_git_log(path, author, since))
