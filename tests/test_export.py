"""Report rendering and export formats."""

import json
from datetime import datetime

from openpyxl import load_workbook

from webrecon.core.models import Category, Finding, ScanReport, Severity
from webrecon.reporters.console import ConsoleReporter, Log, strip_ansi
from webrecon.reporters.export import (
    default_filename, export_report, guess_format,
)


def _report() -> ScanReport:
    report = ScanReport(target="https://example.test")
    report.add(Category.METHODS, [
        Finding("GET", "allowed (HTTP 200)", Severity.INFO, Category.METHODS),
        Finding("PUT", "allowed (HTTP 200)", Severity.CRITICAL, Category.METHODS),
    ])
    report.add(Category.HEADERS, [
        Finding("Content-Security-Policy", "missing", Severity.CRITICAL, Category.HEADERS),
        Finding("Cache-Control", "no-store, " * 10, Severity.INFO, Category.HEADERS),
    ])
    return report.finish()


def test_console_rendering_has_sections_and_summary() -> None:
    text = strip_ansi(ConsoleReporter(Log(), 50).render(_report()))
    assert "Security Report for: https://example.test" in text
    assert "=== HTTP Methods ===" in text
    assert "PUT: allowed (HTTP 200) [CRITICAL]" in text
    assert "Critical: 2" in text


def test_text_export_strips_colors(tmp_path) -> None:
    path = export_report(_report(), "txt", str(tmp_path / "r.txt"))
    content = open(path, encoding="utf-8").read()
    assert "\x1b[" not in content
    assert "=== Security Headers ===" in content
    # rendered value is truncated, stored value is not
    assert "Cache-Control: " + ("no-store, " * 5) + "..." in content


def test_json_export_keyed_by_category(tmp_path) -> None:
    path = export_report(_report(), "json", str(tmp_path / "r.json"))
    data = json.load(open(path, encoding="utf-8"))
    assert list(data["categories"]) == ["methods", "headers"]
    assert data["categories"]["headers"][1]["observed"] == "no-store, " * 10
    assert data["summary"] == {"info": 2, "warning": 0, "critical": 2}


def test_xlsx_export(tmp_path) -> None:
    path = export_report(_report(), "xlsx", str(tmp_path / "r.xlsx"))
    wb = load_workbook(path)
    assert wb.sheetnames == ["Summary", "methods", "headers"]
    rows = list(wb["methods"].iter_rows(values_only=True))
    assert rows[0] == ("Check", "Observed", "Severity", "Evidence")
    assert rows[2][:3] == ("PUT", "allowed (HTTP 200)", "critical")


def test_pdf_export(tmp_path) -> None:
    path = export_report(_report(), "pdf", str(tmp_path / "r.pdf"))
    with open(path, "rb") as f:
        assert f.read(5) == b"%PDF-"


def test_format_helpers() -> None:
    assert guess_format("out/report.JSON") == "json"
    assert guess_format("report.md") == "txt"
    assert default_filename("pdf", datetime(2026, 3, 4, 5, 6, 7)) == \
        "security_report_20260304_050607.pdf"
