"""TLS/SSL configuration check: certificate, protocol versions, ciphers."""

from datetime import datetime, timezone
from typing import List, Optional
from urllib.parse import urlsplit

from webrecon.checkers.base import BaseChecker
from webrecon.core.errors import ProbeFailed, Unreachable, UnsupportedCapability
from webrecon.core.models import Category, Finding, Severity
from webrecon.core.target import target_host, target_port
from webrecon.core.tls import CertificateInfo, TlsProbe


class TlsChecker(BaseChecker):

    name = "TLS/SSL Scan"
    category = Category.TLS

    def __init__(self, config=None, tls: Optional[TlsProbe] = None, now=None):
        super().__init__(config)
        self.tls = tls or TlsProbe(timeout=self.config.timeout)
        self._now = now or (lambda: datetime.now(timezone.utc))

    def endpoint(self, target: str):
        host = target_host(target)
        if self.config.tls_port:
            return host, self.config.tls_port
        if urlsplit(target).scheme.lower() == "https":
            return host, target_port(target, 443)
        return host, 443

    def run(self, probe, target: str) -> List[Finding]:
        # *probe* is the HTTP client; TLS goes through self.tls
        if not self.tls.available():
            return [self.finding("tls-unavailable",
                                 "no TLS support in this environment",
                                 Severity.WARNING)]

        host, port = self.endpoint(target)
        try:
            baseline = self.tls.handshake(host, port)
        except (Unreachable, ProbeFailed, UnsupportedCapability) as exc:
            return [self.finding("handshake-failed", f"{host}:{port}",
                                 Severity.CRITICAL, str(exc))]

        findings = [self.finding(
            "negotiated", f"{baseline.version} {baseline.cipher}".strip(),
            Severity.INFO)]
        findings += self._certificate(baseline.certificate)
        findings += self._protocols(host, port)
        findings += self._ciphers(host, port)
        return findings

    # ── certificate ────────────────────────────────────────────

    def _certificate(self, cert: Optional[CertificateInfo]) -> List[Finding]:
        if cert is None:
            return [self.finding("certificate", "not available",
                                 Severity.WARNING)]

        out = [
            self.finding("subject", cert.subject or "(empty)", Severity.INFO),
            self.finding("issuer", cert.issuer or "(empty)", Severity.INFO),
        ]
        if cert.not_before is not None:
            out.append(self.finding(
                "not-before", cert.not_before.isoformat(), Severity.INFO))
        if cert.not_after is not None:
            days = (cert.not_after - self._now()).days
            if days < 0:
                sev, note = Severity.CRITICAL, "expired"
            elif days < self.config.expiry_warning_days:
                sev, note = Severity.WARNING, f"expires in {days} days"
            else:
                sev, note = Severity.INFO, f"{days} days left"
            out.append(self.finding(
                "not-after", f"{cert.not_after.isoformat()} ({note})", sev))
        out.append(self.finding(
            "san", ", ".join(cert.sans) if cert.sans else "(none)",
            Severity.INFO))
        return out

    # ── protocols / ciphers ────────────────────────────────────

    def _protocols(self, host: str, port: int) -> List[Finding]:
        out = []
        for proto in self.config.protocols:
            if not self.tls.supports_protocol(proto.name):
                out.append(self.finding(
                    proto.name, "not testable locally", Severity.INFO))
                continue
            try:
                self.tls.handshake(host, port, protocol=proto.name)
            except (Unreachable, ProbeFailed, UnsupportedCapability):
                out.append(self.finding(
                    proto.name, "not supported", Severity.INFO))
                continue
            sev = Severity.CRITICAL if proto.insecure else Severity.INFO
            out.append(self.finding(proto.name, "supported", sev))
        return out

    def _ciphers(self, host: str, port: int) -> List[Finding]:
        out = []
        for name in self.tls.cipher_names():
            if len(out) >= self.config.cipher_limit:
                break
            try:
                result = self.tls.handshake(host, port, cipher=name)
            except (Unreachable, ProbeFailed, UnsupportedCapability):
                continue
            observed = f"available ({result.version})" if result.version \
                else "available"
            out.append(self.finding(f"cipher:{name}", observed, Severity.INFO))
        return out
