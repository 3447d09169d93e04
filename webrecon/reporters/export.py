"""Report exporters: plain text, JSON, XLSX and PDF."""

import json
from datetime import datetime
from html import escape
from pathlib import Path
from typing import Callable, Dict, Optional

from openpyxl import Workbook
from openpyxl.styles import Font, PatternFill
from reportlab.lib import colors
from reportlab.lib.pagesizes import A4
from reportlab.lib.styles import getSampleStyleSheet
from reportlab.lib.units import mm
from reportlab.platypus import Paragraph, SimpleDocTemplate, Spacer, Table, TableStyle

from webrecon.core.models import CATEGORY_TITLES, ScanReport
from webrecon.reporters.console import ConsoleReporter, Log, strip_ansi

FORMATS = ("txt", "json", "xlsx", "pdf")

_XLSX_FILLS = {
    "critical": PatternFill("solid", fgColor="F8CBAD"),
    "warning": PatternFill("solid", fgColor="FFE699"),
}
_PDF_COLORS = {
    "critical": colors.HexColor("#C0392B"),
    "warning": colors.HexColor("#B7950B"),
    "info": colors.HexColor("#1F618D"),
}


def default_filename(fmt: str, now: Optional[datetime] = None) -> str:
    now = now or datetime.now()
    return f"security_report_{now.strftime('%Y%m%d_%H%M%S')}.{fmt}"


def guess_format(path: str, fallback: str = "txt") -> str:
    suffix = Path(path).suffix.lower().lstrip(".")
    return suffix if suffix in FORMATS else fallback


# ── writers ────────────────────────────────────────────────────

def export_text(report: ScanReport, path: str, display_limit: int = 50) -> str:
    """Terminal rendering with the color codes stripped."""
    rendered = ConsoleReporter(Log(verbose=0), display_limit).render(report)
    Path(path).write_text(strip_ansi(rendered) + "\n", encoding="utf-8")
    return path


def export_json(report: ScanReport, path: str, **_) -> str:
    with open(path, "w", encoding="utf-8") as f:
        json.dump(report.to_dict(), f, indent=2)
        f.write("\n")
    return path


def export_xlsx(report: ScanReport, path: str, **_) -> str:
    wb = Workbook()
    ws = wb.active
    ws.title = "Summary"
    ws.append(["Target", report.target])
    ws.append(["Generated", report.timestamp.isoformat()])
    ws.append([])
    ws.append(["Severity", "Count"])
    for sev, n in report.count_by_severity().items():
        ws.append([sev, n])

    for category in report.categories():
        sheet = wb.create_sheet(title=category.value)
        sheet.append(["Check", "Observed", "Severity", "Evidence"])
        for cell in sheet[1]:
            cell.font = Font(bold=True)
        for f in report.findings(category):
            sheet.append([f.check_name, f.observed, f.severity.value, f.evidence])
            fill = _XLSX_FILLS.get(f.severity.value)
            if fill is not None:
                for cell in sheet[sheet.max_row]:
                    cell.fill = fill
        sheet.column_dimensions["A"].width = 32
        sheet.column_dimensions["B"].width = 60
        sheet.column_dimensions["C"].width = 10
        sheet.column_dimensions["D"].width = 60

    wb.save(path)
    return path


def export_pdf(report: ScanReport, path: str, display_limit: int = 50) -> str:
    styles = getSampleStyleSheet()
    cell = styles["BodyText"]
    doc = SimpleDocTemplate(path, pagesize=A4,
                            leftMargin=15 * mm, rightMargin=15 * mm,
                            topMargin=15 * mm, bottomMargin=15 * mm)

    story = [
        Paragraph(f"Security Report for {escape(report.target)}", styles["Title"]),
        Paragraph(f"Generated on {report.timestamp.strftime('%Y-%m-%d %H:%M:%S %Z')}",
                  styles["Normal"]),
        Spacer(1, 6 * mm),
    ]

    counts = report.count_by_severity()
    summary = Table([["Critical", "Warning", "Info"],
                     [counts["critical"], counts["warning"], counts["info"]]])
    summary.setStyle(TableStyle([
        ("FONTNAME", (0, 0), (-1, 0), "Helvetica-Bold"),
        ("GRID", (0, 0), (-1, -1), 0.5, colors.grey),
        ("ALIGN", (0, 0), (-1, -1), "CENTER"),
    ]))
    story.append(summary)

    width = A4[0] - 30 * mm
    for category in report.categories():
        story.append(Spacer(1, 6 * mm))
        story.append(Paragraph(CATEGORY_TITLES[category], styles["Heading2"]))
        rows = [["Check", "Observed", "Severity"]]
        style = [
            ("FONTNAME", (0, 0), (-1, 0), "Helvetica-Bold"),
            ("BACKGROUND", (0, 0), (-1, 0), colors.HexColor("#EEF2F7")),
            ("GRID", (0, 0), (-1, -1), 0.25, colors.grey),
            ("VALIGN", (0, 0), (-1, -1), "TOP"),
        ]
        for i, f in enumerate(report.findings(category), start=1):
            rows.append([Paragraph(escape(f.check_name), cell),
                         Paragraph(escape(f.display_value(display_limit)), cell),
                         f.severity.value])
            style.append(("TEXTCOLOR", (2, i), (2, i), _PDF_COLORS[f.severity.value]))
        table = Table(rows, colWidths=[width * 0.32, width * 0.53, width * 0.15],
                      repeatRows=1)
        table.setStyle(TableStyle(style))
        story.append(table)

    doc.build(story)
    return path


EXPORTERS: Dict[str, Callable[..., str]] = {
    "txt": export_text,
    "json": export_json,
    "xlsx": export_xlsx,
    "pdf": export_pdf,
}


def export_report(report: ScanReport, fmt: str, path: Optional[str] = None,
                  display_limit: int = 50) -> str:
    if fmt not in EXPORTERS:
        raise ValueError(f"Unknown export format {fmt!r}; expected one of {FORMATS}.")
    path = path or default_filename(fmt)
    return EXPORTERS[fmt](report, path, display_limit=display_limit)
