"""ResumeBot — turns a developer's git history into an experience report."""

__version__ = "0.1.0"

from resumebot.analyzer import AnalysisFailure, BatchAnalyzer, analyze_commits, merge_reports
from resumebot.git_reader import GitLogError, fetch_commits, filter_commits
from resumebot.models import AnalysisReport, CommitRecord

__all__ = [
    # analyzer
    "AnalysisFailure",
    "BatchAnalyzer",
    "analyze_commits",
    "merge_reports",
    # git_reader
    "GitLogError",
    "fetch_commits",
    "filter_commits",
    # models
    "AnalysisReport",
    "CommitRecord",
]
