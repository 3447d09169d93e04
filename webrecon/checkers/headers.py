"""Security response header check."""

from typing import List

from webrecon.checkers.base import BaseChecker
from webrecon.core.errors import ProbeFailed, Unreachable
from webrecon.core.models import Category, Finding, Severity


class HeadersChecker(BaseChecker):

    name = "Security Headers"
    category = Category.HEADERS

    def run(self, probe, target: str) -> List[Finding]:
        try:
            resp = probe.head(target, timeout=self.config.timeout)
        except Unreachable as exc:
            return [self.unreachable(exc)]
        except ProbeFailed as exc:
            return [self.finding(
                "connectivity", "probe failed", Severity.WARNING, str(exc))]

        findings: List[Finding] = []
        for check in self.config.header_checks():
            value = resp.header(check.name)
            if value is not None:
                findings.append(self.finding(check.name, value, Severity.INFO))
            elif check.critical:
                findings.append(self.finding(
                    check.name, "missing", Severity.CRITICAL))
            else:
                findings.append(self.finding(
                    check.name, "missing", Severity.WARNING))
        return findings
