"""Tests for ``depends project``."""

from __future__ import annotations

import json

from click.testing import CliRunner

from depends.cli.main import cli
from tests.helpers import SAMPLE_TARGETS, flat, write_assets, write_project


class TestFormats:
    """Each output format for a restored project."""

    def test_summary(self, runner: CliRunner, restored_project) -> None:
        result = runner.invoke(cli, ["project", str(restored_project)])
        assert result.exit_code == 0, result.output
        assert "App.csproj" in result.output
        assert "Packages" in result.output
        assert "Serilog" in result.output

    def test_summary_to_file(self, runner: CliRunner, restored_project, tmp_path) -> None:
        out = tmp_path / "summary.txt"
        result = runner.invoke(cli, ["project", str(restored_project), "-o", str(out)])
        assert result.exit_code == 0, result.output
        assert "Wrote summary output" in flat(result.output)
        text = out.read_text(encoding="utf-8")
        assert "Packages" in text
        assert "Serilog" in text
        assert "Serilog" not in result.output

    def test_dot_to_stdout(self, runner: CliRunner, restored_project) -> None:
        result = runner.invoke(cli, ["project", str(restored_project), "--format", "dot"])
        assert result.exit_code == 0, result.output
        assert result.output.startswith('digraph "depends" {\n')
        assert '"App.csproj" -> "Serilog" [label="2.10.0" color="blue"];' in result.output
        assert result.output.endswith("}\n")

    def test_json(self, runner: CliRunner, restored_project) -> None:
        result = runner.invoke(cli, ["project", str(restored_project), "--format", "json"])
        assert result.exit_code == 0, result.output
        data = json.loads(result.output)
        assert data["root"] == "App.csproj"
        assert {"start": "Serilog", "end": "System.Memory", "label": "[4.5.4, )", "end_kind": "Package"} in data["edges"]

    def test_html_to_file(self, runner: CliRunner, restored_project, tmp_path) -> None:
        out = tmp_path / "out" / "deps.html"
        result = runner.invoke(
            cli, ["project", str(restored_project), "--format", "html", "-o", str(out)]
        )
        assert result.exit_code == 0, result.output
        assert "Wrote html output" in flat(result.output)
        assert out.read_text(encoding="utf-8").startswith("<!DOCTYPE html>")

    def test_solution(self, runner: CliRunner, tmp_path) -> None:
        write_project(tmp_path / "App", "App", package_references=[("Serilog", "2.10.0")])
        write_assets(tmp_path / "App", SAMPLE_TARGETS)
        sln = tmp_path / "All.sln"
        sln.write_text(
            'Project("{FAE04EC0-301F-11D3-BF4B-00C04F79EFBC}") = "App", "App\\App.csproj", '
            '"{11111111-1111-1111-1111-111111111111}"\nEndProject\n'
        )
        result = runner.invoke(cli, ["project", str(sln), "--format", "dot"])
        assert result.exit_code == 0, result.output
        assert '"All.sln" -> "App.csproj"' in result.output


class TestErrors:
    """Failures exit with status 1 and a red error line."""

    def test_not_restored(self, runner: CliRunner, tmp_path) -> None:
        path = write_project(tmp_path / "App")
        result = runner.invoke(cli, ["project", str(path)])
        assert result.exit_code == 1
        assert "Please run 'dotnet restore' first." in flat(result.output)

    def test_legacy_project(self, runner: CliRunner, tmp_path) -> None:
        path = write_project(tmp_path / "Old", sdk=False)
        result = runner.invoke(cli, ["project", str(path)])
        assert result.exit_code == 1
        assert "not an SDK-style project" in flat(result.output)

    def test_missing_path(self, runner: CliRunner, tmp_path) -> None:
        result = runner.invoke(cli, ["project", str(tmp_path / "Missing.csproj")])
        assert result.exit_code == 1
        assert "Error:" in result.output

    def test_wrong_framework(self, runner: CliRunner, restored_project) -> None:
        result = runner.invoke(cli, ["project", str(restored_project), "-f", "net48"])
        assert result.exit_code == 1
        assert "does not target net48" in flat(result.output)

    def test_bad_format(self, runner: CliRunner, restored_project) -> None:
        result = runner.invoke(cli, ["project", str(restored_project), "--format", "svg"])
        assert result.exit_code == 2
