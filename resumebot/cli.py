"""ResumeBot CLI."""

from pathlib import Path
from typing import Annotated

import typer
from rich.console import Console
from rich.markup import escape
from rich.markdown import Markdown
from rich.rule import Rule

from resumebot.analyzer import AnalysisFailure, analyze_commits
from resumebot.config import Config, load_env
from resumebot.context import build_project_context
from resumebot.git_reader import GitLogError, fetch_commits
from resumebot.report import format_commits, format_report

load_env()

app = typer.Typer(
    name="resumebot",
    help="🎯 ResumeBot — turn your git history into an experience report",
    add_completion=False,
    context_settings={"help_option_names": ["-h", "--help"]},
)
console = Console()


@app.command()
def main(
    repo: Annotated[Path, typer.Option("--repo", help="Path to the local git repository")] = Path("."),
    author: Annotated[str, typer.Option("--author", help="Author email (empty matches everyone)")] = "",
    since: Annotated[str, typer.Option("--since", help="Only commits on or after this date (YYYY-MM-DD)")] = Config.default_since(),
    web: Annotated[bool, typer.Option("--web", help="Start the web server instead of the CLI")] = False,
    port: Annotated[int, typer.Option("--port", help="Web server port")] = Config.default_port(),
    analyze: Annotated[bool, typer.Option("--analyze", help="Analyze commits with Claude for a resume")] = False,
):
    """
    List an author's commits or turn them into an experience report.

    Examples:\\n
      resumebot --repo ~/src/app --author me@example.com\\n
      resumebot --repo ~/src/app --author me@example.com --analyze\\n
      resumebot --web --port 3000
    """
    if web:
        from resumebot.server import run_server
        run_server(port)
        return

    console.print("[cyan]Reading git log...[/cyan]")
    console.print(f"📁 Repository: {escape(str(repo))}")
    console.print(f"👤 Author: {escape(author)}")
    console.print(f"📅 Since: {escape(since)}")
    console.print()

    try:
        commits = fetch_commits(repo, author, since)
    except (ValueError, GitLogError) as e:
        console.print(f"[red]Error:[/red] {escape(str(e))}")
        raise typer.Exit(1)

    if not analyze:
        console.print(format_commits(commits), markup=False, highlight=False)
        return

    console.print("[cyan]Analyzing commits with Claude...[/cyan]")
    try:
        report = analyze_commits(
            commits,
            context=build_project_context(repo),
            console=console,
        )
    except (AnalysisFailure, EnvironmentError) as e:
        console.print(f"[red]Error:[/red] {escape(str(e))}")
        raise typer.Exit(1)

    console.print()
    console.print(Rule("[dim]ResumeBot Report[/dim]"))
    console.print(Markdown(format_report(report)))


if __name__ == "__main__":
    app()
