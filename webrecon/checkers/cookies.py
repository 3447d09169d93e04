"""Cookie attribute check (Secure / HttpOnly / SameSite)."""

from typing import List

from webrecon.checkers.base import BaseChecker
from webrecon.core.errors import ProbeFailed, Unreachable
from webrecon.core.models import Category, Finding, Severity
from webrecon.parsers.cookie import parse_set_cookie


class CookiesChecker(BaseChecker):

    name = "Cookie Analysis"
    category = Category.COOKIES

    def run(self, probe, target: str) -> List[Finding]:
        try:
            resp = probe.get(target, timeout=self.config.timeout)
        except Unreachable as exc:
            return [self.unreachable(exc)]
        except ProbeFailed as exc:
            return [self.finding(
                "connectivity", "probe failed", Severity.WARNING, str(exc))]

        lines = resp.header_lines("Set-Cookie")
        if not lines:
            return [self.finding("no-cookies", "no cookies set", Severity.INFO)]

        findings: List[Finding] = []
        for line in lines:
            cookie = parse_set_cookie(line)
            name = cookie.name

            if not cookie.secure:
                findings.append(self.finding(
                    f"{name}:Secure", "missing", Severity.WARNING, line))
            if not cookie.http_only:
                findings.append(self.finding(
                    f"{name}:HttpOnly", "missing", Severity.WARNING, line))

            same_site = cookie.same_site
            if same_site is None:
                findings.append(self.finding(
                    f"{name}:SameSite", "missing (defaulted by browser)",
                    Severity.INFO, line))
            else:
                findings.append(self.finding(
                    f"{name}:SameSite", same_site or "(empty)",
                    Severity.INFO, line))
        return findings
