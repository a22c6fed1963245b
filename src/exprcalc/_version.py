"""Version lookup for exprcalc."""

import tomllib
from importlib.metadata import PackageNotFoundError, version
from pathlib import Path

# Present only in a source checkout (src/exprcalc/_version.py -> repo root)
_PYPROJECT = Path(__file__).resolve().parents[2] / "pyproject.toml"


def get_version() -> str:
    """Version from the checkout's pyproject.toml, else the installed metadata."""
    if _PYPROJECT.is_file():
        with _PYPROJECT.open("rb") as f:
            project = tomllib.load(f).get("project", {})
        if project.get("name") == "exprcalc" and "version" in project:
            return str(project["version"])
    try:
        return version("exprcalc")
    except PackageNotFoundError:
        return "0.0.0"
