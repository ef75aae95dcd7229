"""Tests for the command-line interface."""

from typer.testing import CliRunner

from resumebot import cli
from resumebot.analyzer import AnalysisFailure
from resumebot.models import AnalysisReport

runner = CliRunner()


def test_help_exits_zero():
    for flag in ("-h", "--help"):
        result = runner.invoke(cli.app, [flag])
        assert result.exit_code == 0
        assert "--analyze" in result.output


def test_invalid_repo_exits_one(tmp_path):
    result = runner.invoke(cli.app, ["--repo", str(tmp_path / "missing")])
    assert result.exit_code == 1
    assert "Error:" in result.output


def test_lists_commits(repo_builder):
    repo_builder.commit("Add upload endpoint")
    repo_builder.commit("fix:")

    result = runner.invoke(cli.app, ["--repo", str(repo_builder.path), "--author", "jane@example.com"])

    assert result.exit_code == 0
    assert "Found 1 commit(s)" in result.output
    assert "Add upload endpoint" in result.output


def test_git_failure_exits_one(repo_builder):
    result = runner.invoke(cli.app, ["--repo", str(repo_builder.path)])
    assert result.exit_code == 1
    assert "Git command failed" in result.output


def test_analyze_prints_report(repo_builder, monkeypatch):
    repo_builder.commit("Add upload endpoint")
    captured = {}

    def fake_analyze(commits, context, console):
        captured["commits"] = commits
        captured["context"] = context
        return AnalysisReport(summary="Built the uploader.", key_achievements=["Shipped uploads"])

    monkeypatch.setattr(cli, "analyze_commits", fake_analyze)

    result = runner.invoke(cli.app, ["--repo", str(repo_builder.path), "--analyze"])

    assert result.exit_code == 0
    assert "Built the uploader." in result.output
    assert "Shipped uploads" in result.output
    assert [c.subject for c in captured["commits"]] == ["Add upload endpoint"]
    # No pyproject.toml in the analyzed repository
    assert captured["context"] == "Project context unavailable."


def test_analysis_failure_exits_one(repo_builder, monkeypatch):
    repo_builder.commit("Add upload endpoint")

    def failing(commits, context, console):
        raise AnalysisFailure(1, 1, "empty response from model")

    monkeypatch.setattr(cli, "analyze_commits", failing)

    result = runner.invoke(cli.app, ["--repo", str(repo_builder.path), "--analyze"])

    assert result.exit_code == 1
    assert "Batch 1/1" in result.output


def test_web_flag_starts_server(monkeypatch):
    started = {}
    monkeypatch.setattr("resumebot.server.run_server", lambda port: started.setdefault("port", port))

    result = runner.invoke(cli.app, ["--web", "--port", "4000"])

    assert result.exit_code == 0
    assert started == {"port": 4000}
