"""Integration tests for the clir workflow.

These tests drive the CLI end to end on a temporary project tree:
registering rules, listing the reclaimable space, and cleaning it.
"""

import json
from pathlib import Path

import pytest
from clir.cli.main import app
from typer.testing import CliRunner

runner = CliRunner()


@pytest.fixture
def project(data_dir: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """A small workspace with build output, caches and sources."""
    (data_dir / "app" / "target" / "debug").mkdir(parents=True)
    (data_dir / "app" / "target" / "debug" / "app.bin").write_bytes(b"x" * 3000)
    (data_dir / "app" / "target" / "debug" / "app.d").write_bytes(b"x" * 200)
    (data_dir / "app" / "src").mkdir()
    (data_dir / "app" / "src" / "main.rs").write_text("fn main() {}\n")
    (data_dir / "app" / "run.log").write_bytes(b"l" * 50)
    (data_dir / "lib" / ".cache").mkdir(parents=True)
    (data_dir / "lib" / ".cache" / "blob").write_bytes(b"c" * 1000)
    (data_dir / "lib" / "old.log").write_bytes(b"l" * 25)
    monkeypatch.chdir(data_dir)
    return data_dir


def _invoke(*args: str, input: str | None = None):
    result = runner.invoke(app, list(args), input=input)
    assert result.exit_code == 0, result.output
    return result


def _entries() -> list[tuple[str, int, int, int]]:
    data = json.loads(_invoke("list", "--format", "json").stdout)
    return [(e["pattern"], e["size"], e["file_count"], e["dir_count"]) for e in data["entries"]]


class TestWorkflow:
    """End-to-end add, list and clean."""

    def test_add_list_clean(self, project: Path) -> None:
        """Overlapping rules are listed once and cleaned completely."""
        _invoke("add", "app/target", "app/target/**/*.d", "**/*.log", "lib/.cache")

        assert _entries() == [
            (f"{project}/**/*.log", 75, 2, 0),
            (f"{project}/lib/.cache", 1000, 0, 1),
            (f"{project}/app/target", 3200, 0, 1),
        ]

        _invoke("clean", input="y\n")

        assert not (project / "app" / "target").exists()
        assert not (project / "lib" / ".cache").exists()
        assert not (project / "app" / "run.log").exists()
        assert (project / "app" / "src" / "main.rs").exists()

        result = _invoke()
        assert "There is nothing to do :)" in result.output

    def test_remove_rule_changes_listing(self, project: Path) -> None:
        """Removing the directory rule lets the file rule count again."""
        _invoke("add", "app/target", "app/target/**/*.d")
        assert _entries() == [(f"{project}/app/target", 3200, 0, 1)]

        _invoke("remove", "app/target")

        assert _entries() == [(f"{project}/app/target/**/*.d", 200, 1, 0)]

    def test_dry_run_then_clean(self, project: Path) -> None:
        """A dry-run leaves the listing unchanged."""
        _invoke("add", "lib")
        before = _entries()

        _invoke("clean", "--dry-run")

        assert _entries() == before
        _invoke("clean", "-y")
        assert not (project / "lib").exists()
