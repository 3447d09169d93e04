"""Common / sensitive path probing."""

from typing import List

from webrecon.checkers.base import BaseChecker
from webrecon.core.errors import ProbeFailed, Unreachable
from webrecon.core.models import Category, Finding, Severity

_STATUS_LABELS = {
    200: "Found",
    301: "Redirect",
    302: "Redirect",
    403: "Forbidden",
    404: "Not Found",
    500: "Server Error",
}


def status_label(code: int) -> str:
    return _STATUS_LABELS.get(code, f"Unknown ({code})")


class ResourcesChecker(BaseChecker):

    name = "Resource Probe"
    category = Category.RESOURCES

    def run(self, probe, target: str) -> List[Finding]:
        findings: List[Finding] = []

        for check in self.config.resource_checks():
            url = f"{target}{check.path}"
            try:
                resp = probe.get(url, timeout=self.config.probe_timeout)
            except (Unreachable, ProbeFailed) as exc:
                findings.append(self.finding(
                    check.path, "probe failed", Severity.WARNING, str(exc)))
                continue

            code = resp.status_code
            label = status_label(code)
            exposed = code == 200 or label == "Redirect"
            severity = Severity.CRITICAL if exposed and check.sensitive \
                else Severity.INFO
            observed = label if label.startswith("Unknown") \
                else f"{label} ({code})"
            evidence = (resp.header("Location") or "") if label == "Redirect" else ""
            findings.append(self.finding(check.path, observed, severity, evidence))

        return findings
