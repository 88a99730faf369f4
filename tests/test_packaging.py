"""Tests for the project metadata."""

import tomllib
from pathlib import Path

ROOT = Path(__file__).resolve().parent.parent


def test_readme_is_the_user_guide():
    project = tomllib.loads((ROOT / "pyproject.toml").read_text(encoding="utf-8"))["project"]

    assert project["readme"] == "README.md"
    readme = (ROOT / project["readme"]).read_text(encoding="utf-8")
    assert readme.startswith("# cashplan")
    assert "split --ref" in readme
