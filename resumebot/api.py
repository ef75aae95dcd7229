"""REST API handlers for the web interface.

Each handler takes the decoded JSON body and returns `(payload, status)`.
"""

from resumebot.analyzer import AnalysisFailure, analyze_commits
from resumebot.config import Config
from resumebot.git_reader import GitLogError, fetch_commits
from resumebot.models import CommitRecord
from resumebot.report import format_report


def git_log(data):
    """POST /api/git-log — fetch filtered commits for one author."""
    for key in ("repoPath", "author", "since"):
        value = data.get(key)
        if value is not None and not isinstance(value, str):
            return {"error": f"{key} must be a string."}, 400

    repo_path = (data.get("repoPath") or "").strip()
    author = (data.get("author") or "").strip()
    since = (data.get("since") or "").strip() or Config.default_since()

    if not repo_path or not author:
        return {"error": "repoPath and author are required."}, 400

    try:
        commits = fetch_commits(repo_path, author, since)
    except ValueError as e:
        return {"error": f"Invalid repository path: {e}"}, 400
    except GitLogError as e:
        return {"error": str(e)}, 500

    return {"commits": [c.to_dict() for c in commits], "count": len(commits)}, 200


def analyze_resume(data):
    """POST /api/analyze-resume — run the model analysis over posted commits."""
    raw_commits = data.get("commits")
    if not isinstance(raw_commits, list) or not raw_commits:
        return {"error": "A non-empty commits array is required."}, 400

    try:
        commits = [CommitRecord.from_dict(c) for c in raw_commits]
    except ValueError as e:
        return {"error": str(e)}, 400

    try:
        analysis = analyze_commits(commits)
    except (AnalysisFailure, EnvironmentError) as e:
        return {"error": str(e)}, 500

    return {
        "analysis": analysis.to_dict(),
        "formatted": format_report(analysis),
        "success": True,
    }, 200
