"""Project context — a short description of the host project for the model prompt."""

import re
import tomllib
from pathlib import Path

CONTEXT_UNAVAILABLE = "Project context unavailable."

MAX_DEPENDENCIES = 10
MAX_DEV_DEPENDENCIES = 5

_DEV_GROUPS = ("dev", "test", "tests")

# Everything after the distribution name in a requirement string
_REQUIREMENT_TAIL = re.compile(r"[\s\[<>=!~;@(]")


def _requirement_name(requirement: str) -> str:
    return _REQUIREMENT_TAIL.split(requirement.strip(), maxsplit=1)[0]


def _names(requirements: list, limit: int) -> list[str]:
    names = [_requirement_name(r) for r in requirements if isinstance(r, str)]
    return [n for n in names if n][:limit]


def _dev_requirements(data: dict) -> list:
    """Collect dev requirements from optional-dependencies or PEP 735 groups."""
    optional = data.get("project", {}).get("optional-dependencies", {})
    groups = data.get("dependency-groups", {})
    requirements: list = []
    for source in (optional, groups):
        for group in _DEV_GROUPS:
            requirements.extend(source.get(group, []))
    return requirements


def build_project_context(root: str | Path | None = None) -> str:
    """
    Render name, description and dependencies from `pyproject.toml`.

    Reads `root/pyproject.toml` (default: the working directory). Never
    raises: a missing or unreadable file yields CONTEXT_UNAVAILABLE.
    """
    pyproject = Path(root or Path.cwd()) / "pyproject.toml"
    try:
        with pyproject.open("rb") as f:
            data = tomllib.load(f)

        project = data.get("project", {})
        dependencies = _names(project.get("dependencies", []), MAX_DEPENDENCIES)
        dev_dependencies = _names(_dev_requirements(data), MAX_DEV_DEPENDENCIES)

        return (
            f"Project: {project.get('name') or 'Unknown'}\n"
            f"Description: {project.get('description') or 'No description'}\n"
            f"Main dependencies: {', '.join(dependencies)}\n"
            f"Dev dependencies: {', '.join(dev_dependencies)}"
        )
    except (OSError, ValueError, AttributeError, TypeError):
        return CONTEXT_UNAVAILABLE
