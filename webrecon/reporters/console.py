import re
from datetime import datetime
from typing import Dict, List

from colorama import init as colorama_init, Fore, Style

from webrecon.core.models import CATEGORY_TITLES, Finding, ScanReport, Severity
colorama_init(autoreset=True)

_ANSI_RX = re.compile(r"\x1b\[[0-9;]*[a-zA-Z]")


def strip_ansi(text: str) -> str:
    return _ANSI_RX.sub("", text)


DEFAULT_PALETTE: Dict[str, str] = {
    "info": Fore.CYAN,
    "warning": Fore.YELLOW,
    "critical": Fore.RED,
    "ok": Fore.GREEN,
    "debug": Fore.MAGENTA,
    "title": Fore.BLUE,
    "reset": Style.RESET_ALL,
    "dim": Style.DIM,
}


class Log:
    def __init__(self, verbose: int = 1, color: bool = True,
                 palette: Dict[str, str] = None):
        self.verbose = verbose
        self.palette = dict(palette or DEFAULT_PALETTE)
        if not color:
            self.palette = {k: "" for k in self.palette}

    def c(self, key: str) -> str:
        return self.palette.get(key, "")

    def _time(self):
        return datetime.now().strftime("[%H:%M:%S]")

    def _fmt(self, level: str, color: str):
        return f"{self._time()} {self.c(color)}[{level}]{self.c('reset')}"

    def info(self, msg: str):
        if self.verbose >= 1:
            print(f"{self._fmt('INFO', 'info')} {msg}")

    def warn(self, msg: str):
        if self.verbose >= 0:
            print(f"{self._fmt('WARNING', 'warning')} {msg}")

    def ok(self, msg: str):
        if self.verbose >= 0:
            print(f"{self._fmt('SUCCESS', 'ok')} {msg}")

    def fail(self, msg: str):
        print(f"{self._fmt('FAIL', 'critical')} {msg}")

    def debug(self, msg: str):
        if self.verbose >= 2:
            print(f"{self._fmt('DEBUG', 'debug')} {msg}")

    def finding(self, f: Finding, limit: int = 50):
        # info findings only at -vv
        if self.verbose < 1 or (f.severity is Severity.INFO and self.verbose < 2):
            return
        print(f"{self._fmt(f.severity.value.upper(), f.severity.value)} "
              f"{f.category.value}/{f.check_name} = {f.display_value(limit)}")


class ConsoleReporter:
    """Renders a finished ScanReport as terminal text."""

    def __init__(self, log: Log, display_limit: int = 50):
        self.log = log
        self.display_limit = display_limit

    def _line(self, f: Finding) -> str:
        c = self.log.c
        sev = f.severity.value
        line = (f"{f.check_name}: {c(sev)}{f.display_value(self.display_limit)}"
                f"{c('reset')}")
        if f.severity is not Severity.INFO:
            line += f" {c('dim')}[{sev.upper()}]{c('reset')}"
        return line

    def render_lines(self, report: ScanReport) -> List[str]:
        c = self.log.c
        lines = [
            f"Security Report for: {report.target}",
            f"Generated on: {report.timestamp.strftime('%Y-%m-%d %H:%M:%S %Z')}",
        ]
        for category in report.categories():
            lines.append("")
            lines.append(f"{c('title')}=== {CATEGORY_TITLES[category]} ==="
                         f"{c('reset')}")
            for f in report.findings(category):
                lines.append(self._line(f))

        counts = report.count_by_severity()
        lines.append("")
        lines.append(f"{c('title')}=== Summary ==={c('reset')}")
        lines.append(f"Total findings: {sum(counts.values())}")
        lines.append(f"{c('critical')}Critical: {counts['critical']}{c('reset')}")
        lines.append(f"{c('warning')}Warning:  {counts['warning']}{c('reset')}")
        lines.append(f"{c('info')}Info:     {counts['info']}{c('reset')}")
        return lines

    def render(self, report: ScanReport) -> str:
        return "\n".join(self.render_lines(report))

    def print(self, report: ScanReport):
        print(self.render(report))
