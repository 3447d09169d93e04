"""
TLS handshake helper.

Opens one-shot connections with a forced protocol version or cipher and
extracts the peer certificate. Certificates are parsed with ``cryptography``
because ``getpeercert()`` returns nothing useful once verification is off.
"""

import socket
from dataclasses import dataclass, field
from datetime import datetime
from typing import List, Optional

from cryptography import x509

from webrecon.core.errors import ProbeFailed, Unreachable, UnsupportedCapability

try:
    import ssl
except ImportError:  # interpreter built without OpenSSL
    ssl = None


# protocol label -> (ssl.TLSVersion member name, ssl.HAS_* flag name)
_PROTOCOLS = {
    "SSLv2": (None, "HAS_SSLv2"),
    "SSLv3": ("SSLv3", "HAS_SSLv3"),
    "TLS1.0": ("TLSv1", "HAS_TLSv1"),
    "TLS1.1": ("TLSv1_1", "HAS_TLSv1_1"),
    "TLS1.2": ("TLSv1_2", "HAS_TLSv1_2"),
    "TLS1.3": ("TLSv1_3", "HAS_TLSv1_3"),
}


@dataclass
class CertificateInfo:
    subject: str = ""
    issuer: str = ""
    not_before: Optional[datetime] = None
    not_after: Optional[datetime] = None
    sans: List[str] = field(default_factory=list)


@dataclass
class HandshakeResult:
    version: str = ""
    cipher: str = ""
    certificate: Optional[CertificateInfo] = None


def parse_certificate(der: bytes) -> CertificateInfo:
    """Subject, issuer, validity window and DNS/IP SANs of a DER certificate."""
    cert = x509.load_der_x509_certificate(der)
    sans: List[str] = []
    try:
        ext = cert.extensions.get_extension_for_class(x509.SubjectAlternativeName)
    except x509.ExtensionNotFound:
        ext = None
    if ext is not None:
        sans = [str(v) for v in ext.value.get_values_for_type(x509.DNSName)]
        sans += [str(v) for v in ext.value.get_values_for_type(x509.IPAddress)]
    return CertificateInfo(
        subject=cert.subject.rfc4514_string(),
        issuer=cert.issuer.rfc4514_string(),
        not_before=cert.not_valid_before_utc,
        not_after=cert.not_valid_after_utc,
        sans=sans,
    )


class TlsProbe:
    def __init__(self, timeout: float = 10.0, logger=None):
        self.timeout = timeout
        self.logger = logger

    def available(self) -> bool:
        return ssl is not None

    def supports_protocol(self, name: str) -> bool:
        """Whether the local OpenSSL build can offer protocol *name* at all."""
        if ssl is None or name not in _PROTOCOLS:
            return False
        version, flag = _PROTOCOLS[name]
        if version is None or not hasattr(ssl.TLSVersion, version):
            return False
        return bool(getattr(ssl, flag, False))

    def cipher_names(self) -> List[str]:
        """Every TLS <= 1.2 cipher the local library knows, OpenSSL order."""
        ctx = self._context()
        names: List[str] = []
        for c in ctx.get_ciphers():
            # TLS 1.3 suites cannot be restricted through set_ciphers()
            if c.get("protocol") == "TLSv1.3" or c["name"] in names:
                continue
            names.append(c["name"])
        return names

    def handshake(self, host: str, port: int = 443,
                  protocol: Optional[str] = None,
                  cipher: Optional[str] = None) -> HandshakeResult:
        """
        Complete one handshake. Socket-level failures raise Unreachable,
        a refused handshake raises ProbeFailed.
        """
        if ssl is None:
            raise UnsupportedCapability("Python was built without ssl support.")

        ctx = self._context()
        if protocol is not None:
            if not self.supports_protocol(protocol):
                raise UnsupportedCapability(f"{protocol} is not available locally.")
            v = getattr(ssl.TLSVersion, _PROTOCOLS[protocol][0])
            try:
                ctx.minimum_version = v
                ctx.maximum_version = v
            except ValueError as exc:
                raise UnsupportedCapability(f"{protocol}: {exc}") from exc
        if cipher is not None:
            ctx.maximum_version = ssl.TLSVersion.TLSv1_2
            try:
                ctx.set_ciphers(cipher)
            except ssl.SSLError as exc:
                raise UnsupportedCapability(f"Cipher {cipher}: {exc}") from exc

        if self.logger:
            self.logger.debug(
                f"→ TLS {host}:{port} protocol={protocol or '*'} cipher={cipher or '*'}")
        try:
            with socket.create_connection((host, port), timeout=self.timeout) as sock:
                with ctx.wrap_socket(sock, server_hostname=host) as ssock:
                    der = ssock.getpeercert(binary_form=True)
                    negotiated = ssock.cipher()
                    version = ssock.version() or ""
        except ssl.SSLError as exc:
            raise ProbeFailed(f"TLS handshake with {host}:{port}: {exc}") from exc
        except OSError as exc:
            raise Unreachable(f"{host}:{port}: {exc}") from exc

        result = HandshakeResult(version=version,
                                 cipher=negotiated[0] if negotiated else "")
        if der:
            try:
                result.certificate = parse_certificate(der)
            except ValueError as exc:
                if self.logger:
                    self.logger.warn(f"Unparseable certificate from {host}: {exc}")
        return result

    @staticmethod
    def _context():
        ctx = ssl.SSLContext(ssl.PROTOCOL_TLS_CLIENT)
        ctx.check_hostname = False
        ctx.verify_mode = ssl.CERT_NONE
        # let legacy protocols and weak ciphers through so they can be detected
        try:
            ctx.set_ciphers("ALL:eNULL:@SECLEVEL=0")
        except ssl.SSLError:
            ctx.set_ciphers("ALL")
        return ctx
