"""HTTP method support check."""

from typing import List

from webrecon.checkers.base import BaseChecker
from webrecon.core.errors import ProbeFailed, Unreachable
from webrecon.core.models import Category, Finding, Severity


class MethodsChecker(BaseChecker):

    name = "HTTP Methods"
    category = Category.METHODS

    def run(self, probe, target: str) -> List[Finding]:
        findings: List[Finding] = []

        for i, check in enumerate(self.config.method_checks()):
            try:
                resp = probe.request(check.name, target,
                                     timeout=self.config.timeout)
            except Unreachable as exc:
                if i == 0:
                    # nothing else will answer either
                    return [self.unreachable(exc)]
                findings.append(self.finding(
                    check.name, "probe failed", Severity.WARNING, str(exc)))
                continue
            except ProbeFailed as exc:
                findings.append(self.finding(
                    check.name, "probe failed", Severity.WARNING, str(exc)))
                continue

            if not resp.allowed:
                findings.append(self.finding(
                    check.name, f"blocked (HTTP {resp.status_code})",
                    Severity.INFO))
                continue

            observed = f"allowed (HTTP {resp.status_code})"
            evidence = ""
            if check.name == "OPTIONS":
                allow = resp.header("Allow")
                if allow is not None:
                    evidence = allow
                    observed += f", Allow: {allow}"

            severity = Severity.CRITICAL if check.dangerous else Severity.INFO
            findings.append(self.finding(
                check.name, observed, severity, evidence))

        return findings
