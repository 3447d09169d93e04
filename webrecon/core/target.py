"""Target URL normalization."""

import re
from typing import Optional
from urllib.parse import urlsplit

from webrecon.core.errors import InvalidTarget

_SCHEME_RX = re.compile(r"^https?://", re.I)


def normalize_target(raw: str) -> str:
    """
    Canonical target URL: scheme-qualified (``https://`` is assumed when
    missing) with exactly one trailing ``/`` removed.

        >>> normalize_target("example.com/")
        'https://example.com'
    """
    url = (raw or "").strip()
    if not url:
        raise InvalidTarget("Empty target.")
    if not _SCHEME_RX.match(url):
        url = f"https://{url}"
    if url.endswith("/"):
        url = url[:-1]

    if target_host(url) is None:
        raise InvalidTarget(f"No host in target {raw!r}.")
    return url


def target_host(url: str) -> Optional[str]:
    try:
        parts = urlsplit(url)
        host = parts.hostname
        parts.port  # raises on a malformed port
    except ValueError:
        return None
    if not host or any(ch.isspace() for ch in parts.netloc):
        return None
    return host


def target_port(url: str, default: int = 443) -> int:
    port = urlsplit(url).port
    return port if port else default
