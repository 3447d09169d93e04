"""Checklist tables and scan configuration."""

from dataclasses import dataclass
from typing import FrozenSet, Iterable, Optional, Tuple


@dataclass(frozen=True)
class MethodCheck:
    name: str
    dangerous: bool = False


@dataclass(frozen=True)
class HeaderCheck:
    name: str
    critical: bool = False


@dataclass(frozen=True)
class ResourceCheck:
    path: str
    sensitive: bool = False


@dataclass(frozen=True)
class ProtocolCheck:
    name: str
    insecure: bool = False


# ── default tables ─────────────────────────────────────────────

HTTP_METHODS = ("GET", "POST", "PUT", "DELETE", "PATCH",
                "OPTIONS", "HEAD", "TRACE", "CONNECT")
DANGEROUS_METHODS = frozenset({"PUT", "DELETE", "TRACE", "CONNECT"})

SECURITY_HEADERS = (
    "Strict-Transport-Security",
    "X-Frame-Options",
    "X-Content-Type-Options",
    "Content-Security-Policy",
    "X-XSS-Protection",
    "Referrer-Policy",
    "Permissions-Policy",
    "Cache-Control",
    "Pragma",
)
EXTENDED_HEADERS = ("Feature-Policy", "Expires")
CRITICAL_HEADERS = frozenset({
    "Strict-Transport-Security", "Content-Security-Policy", "X-Frame-Options",
})

RESOURCE_PATHS = (
    "/robots.txt",
    "/sitemap.xml",
    "/admin",
    "/wp-admin",
    "/login",
    "/api",
    "/.git/HEAD",
    "/.env",
    "/backup",
    "/test",
    "/phpinfo.php",
)
SENSITIVE_PATHS = frozenset({
    "/admin", "/wp-admin", "/.env", "/.git/HEAD", "/phpinfo.php",
})

TLS_PROTOCOLS = (
    ProtocolCheck("SSLv2", insecure=True),
    ProtocolCheck("SSLv3", insecure=True),
    ProtocolCheck("TLS1.0", insecure=True),
    ProtocolCheck("TLS1.1"),
    ProtocolCheck("TLS1.2"),
    ProtocolCheck("TLS1.3"),
)


def _fold(names: Iterable[str]) -> FrozenSet[str]:
    return frozenset(n.lower() for n in names)


@dataclass
class ScanConfig:
    """Everything a scan needs besides the target itself."""
    timeout: float = 10.0
    probe_timeout: float = 5.0
    verify_tls: bool = False
    proxy: Optional[str] = None
    user_agent: str = "webrecon/1.0"
    dangerous_methods: FrozenSet[str] = DANGEROUS_METHODS
    critical_headers: FrozenSet[str] = CRITICAL_HEADERS
    sensitive_paths: FrozenSet[str] = SENSITIVE_PATHS
    extended_headers: bool = False
    display_limit: int = 50
    cipher_limit: int = 10
    expiry_warning_days: int = 30
    tls_port: Optional[int] = None
    protocols: Tuple[ProtocolCheck, ...] = TLS_PROTOCOLS

    @classmethod
    def from_args(cls, args) -> "ScanConfig":
        cfg = cls(
            timeout=args.timeout,
            probe_timeout=args.probe_timeout,
            verify_tls=args.verify_tls,
            proxy=args.proxy,
            extended_headers=args.extended_headers,
        )
        if args.dangerous_method:
            cfg.dangerous_methods = frozenset(
                m.upper() for m in args.dangerous_method)
        if args.critical_header:
            cfg.critical_headers = frozenset(args.critical_header)
        if args.sensitive_path:
            cfg.sensitive_paths = frozenset(
                p if p.startswith("/") else f"/{p}" for p in args.sensitive_path)
        return cfg

    def method_checks(self) -> Tuple[MethodCheck, ...]:
        dangerous = {m.upper() for m in self.dangerous_methods}
        return tuple(MethodCheck(m, m in dangerous) for m in HTTP_METHODS)

    def header_checks(self) -> Tuple[HeaderCheck, ...]:
        names = SECURITY_HEADERS + \
            (EXTENDED_HEADERS if self.extended_headers else ())
        critical = _fold(self.critical_headers)
        return tuple(HeaderCheck(h, h.lower() in critical) for h in names)

    def resource_checks(self) -> Tuple[ResourceCheck, ...]:
        return tuple(ResourceCheck(p, p in self.sensitive_paths)
                     for p in RESOURCE_PATHS)
