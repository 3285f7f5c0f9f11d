"""Tests for the a11yreport CLI entry point."""

from __future__ import annotations

from pathlib import Path
from unittest.mock import AsyncMock, patch

from click.testing import CliRunner

from a11yreport.cli.report import report_cli


class TestReportCli:
    def test_requires_scan_json(self):
        runner = CliRunner()
        result = runner.invoke(report_cli, [])
        assert result.exit_code == 2

    def test_writes_stdout(self, scan_file: Path):
        runner = CliRunner()
        result = runner.invoke(report_cli, [str(scan_file)])
        assert result.exit_code == 0
        assert "<!DOCTYPE html>" in result.output
        assert "scan-test-001" in result.output

    def test_writes_output_file(self, scan_file: Path, tmp_path: Path):
        out = tmp_path / "report.html"
        runner = CliRunner()
        result = runner.invoke(report_cli, [str(scan_file), "-o", str(out)])
        assert result.exit_code == 0
        html = out.read_text(encoding="utf-8")
        assert html.startswith("<!DOCTYPE html>")
        assert 'data-report-version="v2"' in html

    def test_query_options(self, scan_file: Path, tmp_path: Path):
        out = tmp_path / "report.html"
        runner = CliRunner()
        result = runner.invoke(
            report_cli,
            [
                str(scan_file), "-o", str(out),
                "--color", "#0F766E",
                "--company", "Acme",
                "--branding", "false",
                "--report-style", "corporate",
            ],
        )
        assert result.exit_code == 0
        html = out.read_text(encoding="utf-8")
        assert "#0F766E" in html
        assert "Generated by Acme</span>" in html
        assert 'class="cover-score-card-corp"' in html

    def test_settings_file(self, scan_file: Path, settings_file: Path, tmp_path: Path):
        out = tmp_path / "report.html"
        runner = CliRunner()
        result = runner.invoke(report_cli, [str(scan_file), "-o", str(out), "--settings", str(settings_file)])
        assert result.exit_code == 0
        html = out.read_text(encoding="utf-8")
        assert "Generated by Acme Audits</span>" in html
        assert "Prepared by Acme Audits" in html
        assert '<img src="https://res.cloudinary.com/acme/logo.png"' in html
        assert "axe-core v4.9" in html

    def test_cli_beats_settings(self, scan_file: Path, settings_file: Path, tmp_path: Path):
        out = tmp_path / "report.html"
        runner = CliRunner()
        result = runner.invoke(
            report_cli,
            [str(scan_file), "-o", str(out), "--settings", str(settings_file),
             "--company", "Other Co", "--engine-version", "4.11"],
        )
        assert result.exit_code == 0
        html = out.read_text(encoding="utf-8")
        assert "Generated by Other Co</span>" in html
        assert "axe-core v4.11" in html

    def test_invalid_json(self, tmp_path: Path):
        bad = tmp_path / "bad.json"
        bad.write_text("{not json", encoding="utf-8")
        runner = CliRunner()
        result = runner.invoke(report_cli, [str(bad)])
        assert result.exit_code == 1
        assert "Cannot read scan record" in result.output

    def test_invalid_scan_record(self, tmp_path: Path):
        bad = tmp_path / "scan.json"
        bad.write_text('{"id": "x"}', encoding="utf-8")
        runner = CliRunner()
        result = runner.invoke(report_cli, [str(bad)])
        assert result.exit_code == 1
        assert "Invalid scan record" in result.output

    def test_non_mapping_settings_section(self, scan_file: Path, tmp_path: Path):
        settings = tmp_path / "settings.yaml"
        settings.write_text("report: nope\n", encoding="utf-8")
        out = tmp_path / "report.html"
        runner = CliRunner()
        result = runner.invoke(report_cli, [str(scan_file), "-o", str(out), "-s", str(settings)])
        assert result.exit_code == 0
        assert "axe-core v4.10" in out.read_text(encoding="utf-8")

    def test_bad_pages_analyzed(self, scan_file: Path, tmp_path: Path):
        settings = tmp_path / "settings.yaml"
        settings.write_text("report:\n  pages_analyzed: many\n", encoding="utf-8")
        runner = CliRunner()
        result = runner.invoke(report_cli, [str(scan_file), "-s", str(settings)])
        assert result.exit_code == 1
        assert "Invalid pages_analyzed setting" in result.output
        assert not isinstance(result.exception, ValueError)

    @patch("a11yreport.cli.report.fetch_images_as_data_urls", new_callable=AsyncMock)
    def test_embed_logo(self, mock_fetch, scan_file: Path, tmp_path: Path):
        mock_fetch.return_value = ["data:image/png;base64,AAAA", ""]
        out = tmp_path / "report.html"
        runner = CliRunner()
        result = runner.invoke(
            report_cli,
            [str(scan_file), "-o", str(out), "--logo", "https://res.cloudinary.com/acme/logo.png", "--embed-logo"],
        )
        assert result.exit_code == 0
        mock_fetch.assert_called_once()
        assert mock_fetch.call_args.args[0] == ["https://res.cloudinary.com/acme/logo.png", ""]
        assert '<img src="data:image/png;base64,AAAA"' in out.read_text(encoding="utf-8")

    @patch("a11yreport.cli.report.fetch_images_as_data_urls", new_callable=AsyncMock)
    def test_embed_logo_failure_falls_back_to_monogram(self, mock_fetch, scan_file: Path, tmp_path: Path):
        mock_fetch.return_value = ["", ""]
        out = tmp_path / "report.html"
        runner = CliRunner()
        result = runner.invoke(
            report_cli,
            [str(scan_file), "-o", str(out), "--logo", "https://res.cloudinary.com/acme/logo.png", "--embed-logo"],
        )
        assert result.exit_code == 0
        assert 'class="cover-monogram"' in out.read_text(encoding="utf-8")

    @patch("a11yreport.cli.report.fetch_images_as_data_urls", new_callable=AsyncMock)
    def test_no_fetch_without_flag(self, mock_fetch, scan_file: Path):
        runner = CliRunner()
        runner.invoke(report_cli, [str(scan_file), "--logo", "https://res.cloudinary.com/acme/logo.png"])
        mock_fetch.assert_not_called()
