"""Tests for the ``postmeta new`` command."""

from __future__ import annotations

import json
from datetime import date
from pathlib import Path

import pytest
from click.testing import CliRunner

from postmeta.cli import cli
from postmeta.domain.frontmatter import parse_frontmatter

_HELLO = [
    "new",
    "--title",
    "Hello World",
    "--date",
    "2024-01-05",
    "--categories",
    "tech",
    "--tags",
    "rust,gui",
]


@pytest.mark.usefixtures("_isolated_dir")
class TestNewCommand:
    def test_creates_file(self, cli_runner: CliRunner, tmp_path: Path) -> None:
        result = cli_runner.invoke(cli, _HELLO)
        assert result.exit_code == 0, result.output
        assert "save_article" in result.output

        path = tmp_path / "2024-01-05-Hello-World.md"
        content = path.read_text(encoding="utf-8")
        assert content.startswith("---\n")
        assert content.endswith("\n---\n")
        fm, _ = parse_frontmatter(content)
        assert fm["title"] == "Hello World"
        assert fm["date"] == "2024-01-05"
        assert list(fm["categories"]) == ["tech"]
        assert list(fm["tags"]) == ["rust", "gui"]

    def test_json_output(self, cli_runner: CliRunner, tmp_path: Path) -> None:
        result = cli_runner.invoke(cli, ["--json", *_HELLO])
        assert result.exit_code == 0, result.output
        data = json.loads(result.output)
        assert data["ok"] is True
        assert data["op"] == "save_article"
        assert data["data"]["path"] == str(tmp_path.resolve() / "2024-01-05-Hello-World.md")
        assert data["data"]["tags"] == ["rust", "gui"]

    def test_quiet_prints_path(self, cli_runner: CliRunner, tmp_path: Path) -> None:
        result = cli_runner.invoke(cli, ["-q", *_HELLO])
        assert result.exit_code == 0
        assert result.output.strip() == str(tmp_path.resolve() / "2024-01-05-Hello-World.md")

    def test_second_save_refused(self, cli_runner: CliRunner, tmp_path: Path) -> None:
        assert cli_runner.invoke(cli, _HELLO).exit_code == 0
        path = tmp_path / "2024-01-05-Hello-World.md"
        original = path.read_bytes()

        result = cli_runner.invoke(cli, [*_HELLO, "--tags", "extra"])
        assert result.exit_code == 1
        assert "already exists" in result.output
        assert path.read_bytes() == original

    def test_empty_title(self, cli_runner: CliRunner, tmp_path: Path) -> None:
        result = cli_runner.invoke(cli, ["new", "--date", "2024-01-05"])
        assert result.exit_code == 1
        assert "Title is empty" in result.output
        assert list(tmp_path.glob("*.md")) == []

    def test_invalid_date(self, cli_runner: CliRunner, tmp_path: Path) -> None:
        result = cli_runner.invoke(cli, ["new", "--title", "T", "--date", "2024-1-5"])
        assert result.exit_code == 1
        assert "not in the format YYYY-MM-DD" in result.output
        assert list(tmp_path.glob("*.md")) == []

    def test_unsafe_title(self, cli_runner: CliRunner, tmp_path: Path) -> None:
        result = cli_runner.invoke(cli, ["new", "--title", "a/b"])
        assert result.exit_code == 1
        assert "not allowed in a filename" in result.output

    def test_default_date_is_today(self, cli_runner: CliRunner, tmp_path: Path) -> None:
        result = cli_runner.invoke(cli, ["new", "--title", "Today"])
        assert result.exit_code == 0, result.output
        assert (tmp_path / f"{date.today().isoformat()}-Today.md").is_file()

    def test_repeated_and_comma_values(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(
            cli,
            ["--json", "new", "--title", "T", "--tags", "a, b,", "--tags", "c", "--dry-run"],
        )
        assert result.exit_code == 0, result.output
        fm, _ = parse_frontmatter(json.loads(result.output)["data"]["frontmatter"])
        assert list(fm["tags"]) == ["a", "b", "c"]

    def test_duplicate_values_warn(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["new", "--title", "T", "--tags", "a,a"])
        assert result.exit_code == 0
        assert "WARNING: Tag 'a' already exists" in result.output

    def test_dry_run_writes_nothing(self, cli_runner: CliRunner, tmp_path: Path) -> None:
        result = cli_runner.invoke(cli, [*_HELLO, "--dry-run"])
        assert result.exit_code == 0, result.output
        assert "preview_article" in result.output
        assert "filename: 2024-01-05-Hello-World.md" in result.output
        assert "title: Hello World" in result.output
        assert list(tmp_path.glob("*.md")) == []

    def test_output_dir(self, cli_runner: CliRunner, tmp_path: Path) -> None:
        result = cli_runner.invoke(cli, [*_HELLO, "--output-dir", "content/posts"])
        assert result.exit_code == 0, result.output
        assert (tmp_path / "content" / "posts" / "2024-01-05-Hello-World.md").is_file()

    def test_config_defaults(self, cli_runner: CliRunner, tmp_path: Path) -> None:
        (tmp_path / "postmeta.toml").write_text(
            '[output]\ndirectory = "posts"\n[article]\ncategories = ["blog", "tech"]\n'
        )
        result = cli_runner.invoke(cli, ["--json", *_HELLO])
        assert result.exit_code == 0, result.output
        data = json.loads(result.output)["data"]
        assert data["categories"] == ["blog", "tech"]
        assert (tmp_path / "posts" / "2024-01-05-Hello-World.md").is_file()

    def test_no_interact_skips_prompt(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["--no-interact", "new"], input="Ignored\n")
        assert result.exit_code == 1
        assert "Title is empty" in result.output

    def test_dry_run_reports_empty_title(self, cli_runner: CliRunner, tmp_path: Path) -> None:
        result = cli_runner.invoke(cli, ["new", "--date", "2024-01-05", "--dry-run"])
        assert result.exit_code == 1
        assert "preview_article" in result.output
        assert "Title is empty" in result.output

    def test_dry_run_reports_existing_file(self, cli_runner: CliRunner) -> None:
        assert cli_runner.invoke(cli, _HELLO).exit_code == 0
        result = cli_runner.invoke(cli, [*_HELLO, "--dry-run"])
        assert result.exit_code == 1
        assert "already exists" in result.output

    def test_output_dir_is_a_file(self, cli_runner: CliRunner, tmp_path: Path) -> None:
        (tmp_path / "notadir").write_text("", encoding="utf-8")
        (tmp_path / "postmeta.toml").write_text('[output]\ndirectory = "notadir"\n')
        result = cli_runner.invoke(cli, ["--json", *_HELLO])
        assert result.exit_code == 1
        assert '"WRITE_FAILED"' in result.output

    def test_verbose_shows_file_meta(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["-v", *_HELLO])
        assert result.exit_code == 0, result.output
        assert "meta:" in result.output
        assert "bytes:" in result.output
        assert "duration_ms:" in result.output
