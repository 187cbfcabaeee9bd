"""Tests for the command-line interface."""
import json

from click.testing import CliRunner

from comps_extractor.cli import cli


class TestCLI:
    """Test CLI commands."""

    def test_extract_json_output(self, write_document, primary_row, tmp_path):
        source = write_document([[primary_row]])
        output = tmp_path / "result.json"

        result = CliRunner().invoke(cli, ["extract", str(source), "-f", "json", "-o", str(output)])

        assert result.exit_code == 0, result.output
        data = json.loads(output.read_text(encoding="utf-8"))
        assert data["salesComparables"][0]["propertyName"] == "640 Columbia Street"

    def test_extract_unknown_profile(self, write_document, primary_row, tmp_path):
        source = write_document([[primary_row]])

        result = CliRunner().invoke(cli, ["extract", str(source), "-f", "csv", "--profile", "nope"])

        assert result.exit_code == 1

    def test_rows(self, write_document, primary_row):
        source = write_document([[primary_row]])

        result = CliRunner().invoke(cli, ["rows", str(source), "--page", "1"])

        assert result.exit_code == 0, result.output
        assert "Jun-22" in result.output

    def test_profiles(self):
        result = CliRunner().invoke(cli, ["profiles"])

        assert result.exit_code == 0
        assert "default" in result.output

    def test_batch(self, write_document, primary_row, tmp_path):
        write_document([[primary_row]], name="a.json")
        output_dir = tmp_path / "out"

        result = CliRunner().invoke(cli, ["batch", str(tmp_path), "-o", str(output_dir), "-f", "json"])

        assert result.exit_code == 0, result.output
        assert (output_dir / "a.json").exists()
        assert (output_dir / "batch_summary.json").exists()
