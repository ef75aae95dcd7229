"""Analyzer — sends batches of commits to Claude and merges the partial reports."""

from __future__ import annotations

import json
import re
import time
from collections.abc import Callable, Iterator, Sequence

import anthropic
from rich.console import Console
from rich.markup import escape

from resumebot.config import Config, get_default_model
from resumebot.context import build_project_context
from resumebot.llm import create_client
from resumebot.models import REPORT_LIST_FIELDS, AnalysisReport, CommitRecord

MAX_LIST_ITEMS = 5
MAX_SUBJECT_CHARS = 100
MAX_BODY_CHARS = 150
MAX_TOKENS = 2000
TEMPERATURE = 0.7

SYSTEM_PROMPT = """\
You are ResumeBot, a senior engineering recruiter who turns git commit logs into
experience-focused resume material.
Balance technical detail with business impact, highlight concrete achievements,
and prefer measurable outcomes and specific technical challenges.
"""

USER_PROMPT = """\
Analyze the following git commit log and summarize the developer's experience for a resume.

Project context:
{context}

Commit log (batch {batch_num}/{total_batches}):
{commits}

Focus on:
- Technical depth and complexity
- Business impact, with numbers where the commits support them
- Problem-solving process and the reasoning behind decisions
- Leadership and collaboration

Return ONLY valid JSON — no markdown fences, no preamble, no explanation.

JSON schema:
{{
  "summary": "2-3 sentences on the work in this batch (stack, scale, role)",
  "keyAchievements": ["concrete technical or business achievements"],
  "technicalSkills": ["technologies, architecture patterns, tooling and process improvements"],
  "businessImpact": ["user experience, operational efficiency, business goals served"],
  "problemSolving": ["complex problems solved, risk handling, performance or scaling fixes"],
  "leadership": ["decision making, code quality and process work, mentoring and knowledge sharing"]
}}
"""


class AnalysisFailure(RuntimeError):
    """A batch could not be analyzed; the whole run is aborted."""

    def __init__(self, batch_index: int, total_batches: int, reason: str) -> None:
        self.batch_index = batch_index
        self.total_batches = total_batches
        self.reason = reason
        super().__init__(f"Batch {batch_index}/{total_batches} analysis failed: {reason}")


# ── Helpers ──────────────────────────────────────────────────────────────────

def partition(commits: Sequence[CommitRecord], size: int) -> Iterator[list[CommitRecord]]:
    """Yield contiguous, order-preserving slices of at most `size` commits."""
    if size < 1:
        raise ValueError(f"Batch size must be positive, got {size}")
    for start in range(0, len(commits), size):
        yield list(commits[start:start + size])


def format_commits_for_llm(batch: Sequence[CommitRecord]) -> str:
    """Compact text representation of a batch for the prompt."""
    entries = []
    for c in batch:
        entry = f"[{c.date}] {c.subject[:MAX_SUBJECT_CHARS]}"
        if c.body:
            entry += f"\n  {c.body[:MAX_BODY_CHARS]}"
        entries.append(entry)
    return "\n\n".join(entries)


def parse_report(text: str) -> AnalysisReport:
    """Decode a model response into a report; raises ValueError on bad shape."""
    # Strip an accidental markdown fence around the payload
    clean = re.sub(r"^\s*```(?:json)?\s*|\s*```\s*$", "", text).strip()
    return AnalysisReport.from_dict(json.loads(clean))


def _response_text(message) -> str:
    parts = [getattr(block, "text", "") for block in (message.content or [])]
    return "".join(p for p in parts if p)


def _dedupe(items: list[str]) -> list[str]:
    seen: set[str] = set()
    result: list[str] = []
    for item in items:
        if item not in seen:
            seen.add(item)
            result.append(item)
    return result


# ── Batch analyzer ───────────────────────────────────────────────────────────

class BatchAnalyzer:
    """
    Sends commits to Claude in fixed-size batches, one request at a time.

    The client is passed in explicitly; one analyzer instance serves one run.
    """

    def __init__(
        self,
        client: anthropic.Anthropic,
        model: str | None = None,
        batch_size: int | None = None,
        delay: float | None = None,
        sleep: Callable[[float], None] = time.sleep,
        console: Console | None = None,
    ) -> None:
        self.client = client
        self.model = model or get_default_model()
        self.batch_size = batch_size or Config.batch_size()
        self.delay = Config.batch_delay() if delay is None else delay
        self._sleep = sleep
        self.console = console or Console()

    def analyze(self, commits: Sequence[CommitRecord], context: str) -> list[AnalysisReport]:
        """
        Analyze every batch in order and return one partial report per batch.

        Raises AnalysisFailure on the first batch that fails; nothing from
        earlier batches is returned in that case.
        """
        batches = list(partition(commits, self.batch_size))
        total = len(batches)
        if total:
            self.console.print(
                f"[cyan]Analyzing[/cyan] {len(commits)} commits in {total} batch(es)..."
            )

        reports: list[AnalysisReport] = []
        for index, batch in enumerate(batches, start=1):
            self.console.print(f"[dim]Batch {index}/{total} ({len(batch)} commits)[/dim]")
            reports.append(self.analyze_batch(batch, index, total, context))
            # Rate limiting between requests
            if index < total and self.delay > 0:
                self._sleep(self.delay)
        return reports

    def analyze_batch(
        self,
        batch: Sequence[CommitRecord],
        batch_num: int,
        total_batches: int,
        context: str,
    ) -> AnalysisReport:
        """Send one batch to the model and parse its JSON answer."""
        user_message = USER_PROMPT.format(
            context=context,
            batch_num=batch_num,
            total_batches=total_batches,
            commits=format_commits_for_llm(batch),
        )

        try:
            message = self.client.messages.create(
                model=self.model,
                max_tokens=MAX_TOKENS,
                temperature=TEMPERATURE,
                system=SYSTEM_PROMPT,
                messages=[{"role": "user", "content": user_message}],
            )
        except anthropic.APIError as e:
            raise AnalysisFailure(batch_num, total_batches, f"API error: {e}") from e

        text = _response_text(message)
        if not text.strip():
            raise AnalysisFailure(batch_num, total_batches, "empty response from model")

        try:
            return parse_report(text)
        except json.JSONDecodeError as e:
            raise AnalysisFailure(batch_num, total_batches, f"JSON parse error: {e}") from e
        except ValueError as e:
            raise AnalysisFailure(batch_num, total_batches, f"unexpected response shape: {e}") from e


# ── Merging ──────────────────────────────────────────────────────────────────

def merge_reports(partials: Sequence[AnalysisReport]) -> AnalysisReport:
    """
    Combine per-batch reports into the final report.

    Summaries are joined in batch order. Each list field is concatenated in
    batch order, de-duplicated keeping the first occurrence, and capped at
    MAX_LIST_ITEMS entries.
    """
    merged = AnalysisReport(summary=" ".join(p.summary for p in partials))
    for attr in REPORT_LIST_FIELDS:
        pooled = [item for p in partials for item in getattr(p, attr)]
        setattr(merged, attr, _dedupe(pooled)[:MAX_LIST_ITEMS])
    return merged


# ── Programmatic API ─────────────────────────────────────────────────────────

def analyze_commits(
    commits: Sequence[CommitRecord],
    client: anthropic.Anthropic | None = None,
    context: str | None = None,
    model: str | None = None,
    console: Console | None = None,
) -> AnalysisReport:
    """
    Full analysis run: build context, analyze every batch, merge the results.

    With no commits the empty report is returned without contacting the model.
    A missing API key fails the run even then.
    """
    client = client or create_client()
    if not commits:
        return merge_reports([])

    console = console or Console()
    analyzer = BatchAnalyzer(client, model=model, console=console)

    if context is None:
        context = build_project_context()
    console.print(f"[dim]Project context: {escape(context[:100])}...[/dim]")

    return merge_reports(analyzer.analyze(commits, context))
