"""Plain-text and Markdown rendering of commits and reports."""

from collections.abc import Sequence

from resumebot.models import AnalysisReport, CommitRecord

SEPARATOR = "─" * 50

# Section titles for each report list field, in display order
REPORT_SECTIONS = [
    ("🏆 Key Achievements", "key_achievements"),
    ("💻 Technical Skills", "technical_skills"),
    ("💼 Business Impact", "business_impact"),
    ("🧩 Problem Solving", "problem_solving"),
    ("👥 Leadership & Collaboration", "leadership"),
]


def format_commits(commits: Sequence[CommitRecord]) -> str:
    """Render the commit list the CLI prints when no analysis is requested."""
    if not commits:
        return "📝 No commits match the given filters."

    lines = [f"📊 Found {len(commits)} commit(s):", ""]
    for c in commits:
        lines.append(f"📅 {c.date}")
        lines.append(f"👤 {c.author_name} ({c.author_email})")
        lines.append(f"🔗 {c.short_hash}")
        lines.append(f"📝 {c.subject}")
        if c.body:
            lines.append(f"📄 {c.body}")
        lines.append("")
        lines.append(SEPARATOR)
        lines.append("")
    return "\n".join(lines)


def format_report(report: AnalysisReport) -> str:
    """Render a merged report as Markdown."""
    lines = ["# 🎯 Development Experience Report", ""]
    lines.append("## 📋 Summary")
    lines.append(report.summary)
    lines.append("")

    for title, attr in REPORT_SECTIONS:
        lines.append(f"## {title}")
        for i, item in enumerate(getattr(report, attr), start=1):
            lines.append(f"{i}. {item}")
        lines.append("")

    return "\n".join(lines).rstrip() + "\n"
