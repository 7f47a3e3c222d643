"""Shared test fixtures."""

import json
from pathlib import Path

import pytest

from tutorhost.config import Config, ContentConfig, ServerConfig


def write_exercise(
    chapter_dir: Path,
    name: str,
    markdown: str,
    *,
    starting: dict[str, str] | None = None,
    solution: dict[str, str] | None = None,
) -> Path:
    """Create an exercise directory with narrative and app files."""
    exercise_dir = chapter_dir / name
    exercise_dir.mkdir(parents=True)
    (exercise_dir / "index.md").write_text(markdown)
    for app_dir, files in (("app-a", starting), ("app-b", solution)):
        for rel_path, contents in (files or {}).items():
            path = exercise_dir / app_dir / rel_path
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_text(contents)
    return exercise_dir


def write_section(directory: Path, title: str) -> Path:
    """Create a part or chapter directory with its meta.json."""
    directory.mkdir(parents=True, exist_ok=True)
    (directory / "meta.json").write_text(json.dumps({"title": title}))
    return directory


@pytest.fixture
def tutorial_dir(tmp_path: Path) -> Path:
    """Create a small tutorial tree.

    Exercises in order: intro-to-svelte, dynamic-attributes, global-transitions.
    """
    root = tmp_path / "tutorial"
    basics = write_section(root / "01-basics", "Basic Svelte")

    introduction = write_section(basics / "01-introduction", "Introduction")
    write_exercise(
        introduction,
        "01-intro-to-svelte",
        "---\n"
        "title: Welcome to Svelte\n"
        "focus: /src/lib/App.svelte\n"
        "---\n"
        "\n"
        "Welcome to the **tutorial**.\n"
        "\n"
        "## Your first component\n"
        "\n"
        "Edit the file.\n",
        starting={"src/lib/App.svelte": "<h1>Hello</h1>\n", "src/app.css": "body {}\n"},
        solution={"src/lib/App.svelte": "<h1>Hello world</h1>\n"},
    )
    write_exercise(
        introduction,
        "02-dynamic-attributes",
        "---\ntitle: Dynamic attributes\n---\n\nUse curly braces.\n",
    )

    transitions = write_section(basics / "02-transitions", "Transitions")
    write_exercise(
        transitions,
        "01-global-transitions",
        "---\ntitle: Global transitions\n---\n\nTransitions everywhere.\n",
    )
    return root


@pytest.fixture
def test_config(tmp_path: Path, tutorial_dir: Path) -> Config:
    """Create a test configuration pointing at the sample tutorial."""
    return Config(
        server=ServerConfig(),
        content=ContentConfig(source_dir=tutorial_dir, cache_dir=tmp_path / ".cache"),
    )
