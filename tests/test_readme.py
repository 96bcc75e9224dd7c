"""Repository-level checks: the README and example inputs ship at the root."""

from pathlib import Path


def test_readme_exists(project_root: Path) -> None:
    """README.md sits at the project root and documents the example CLI."""
    readme = project_root / "README.md"
    assert readme.exists(), "README.md should exist at the project root"
    assert "src.example" in readme.read_text(encoding="utf-8")


def test_example_metadata_ships_with_sources(project_root: Path) -> None:
    assert (project_root / "src" / "example_metadata.json").exists()
