"""Test setup: repo root on sys.path plus shared fakes for HTTP and TLS."""

import sys
from pathlib import Path
from typing import Callable, Dict, Iterable, List, Optional, Tuple

import httpx
import pytest

REPO_ROOT = Path(__file__).resolve().parents[1]
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))

from webrecon.core.checklists import ScanConfig  # noqa: E402
from webrecon.core.errors import ProbeFailed, UnsupportedCapability  # noqa: E402
from webrecon.core.probe import ProbeClient  # noqa: E402
from webrecon.core.tls import CertificateInfo, HandshakeResult  # noqa: E402

TARGET = "https://example.test"

Handler = Callable[[httpx.Request], httpx.Response]


def routes(table: Dict[Tuple[str, str], int], default: int = 404,
           headers: Optional[Iterable[Tuple[str, str]]] = None) -> Handler:
    """Handler answering ``(METHOD, path) -> status``; '*' matches any method."""
    def handler(request: httpx.Request) -> httpx.Response:
        key = (request.method, request.url.path or "/")
        status = table.get(key, table.get(("*", key[1]), default))
        return httpx.Response(status, headers=list(headers or []))
    return handler


def refuse(request: httpx.Request) -> httpx.Response:
    raise httpx.ConnectError("connection refused", request=request)


@pytest.fixture
def config() -> ScanConfig:
    return ScanConfig()


@pytest.fixture
def make_probe(config):
    clients: List[ProbeClient] = []

    def factory(handler: Handler, cfg: Optional[ScanConfig] = None) -> ProbeClient:
        client = ProbeClient(cfg or config, transport=httpx.MockTransport(handler))
        clients.append(client)
        return client

    yield factory
    for c in clients:
        c.close()


class FakeTls:
    """Scripted stand-in for TlsProbe."""

    def __init__(self, available: bool = True, baseline_error: Exception = None,
                 certificate: Optional[CertificateInfo] = None,
                 accepted_protocols: Iterable[str] = ("TLS1.2", "TLS1.3"),
                 local_protocols: Iterable[str] = ("SSLv3", "TLS1.0", "TLS1.1",
                                                   "TLS1.2", "TLS1.3"),
                 ciphers: Iterable[str] = (),
                 accepted_ciphers: Iterable[str] = ()):
        self._available = available
        self.baseline_error = baseline_error
        self.certificate = certificate
        self.accepted_protocols = set(accepted_protocols)
        self.local_protocols = set(local_protocols)
        self.ciphers = list(ciphers)
        self.accepted_ciphers = set(accepted_ciphers)
        self.calls: List[Tuple[str, int, Optional[str], Optional[str]]] = []

    def available(self) -> bool:
        return self._available

    def supports_protocol(self, name: str) -> bool:
        return name in self.local_protocols

    def cipher_names(self) -> List[str]:
        return list(self.ciphers)

    def handshake(self, host, port=443, protocol=None, cipher=None) -> HandshakeResult:
        self.calls.append((host, port, protocol, cipher))
        if protocol is None and cipher is None:
            if self.baseline_error is not None:
                raise self.baseline_error
            return HandshakeResult(version="TLSv1.3", cipher="TLS_AES_256_GCM_SHA384",
                                   certificate=self.certificate)
        if protocol is not None:
            if protocol not in self.local_protocols:
                raise UnsupportedCapability(protocol)
            if protocol not in self.accepted_protocols:
                raise ProbeFailed(f"{protocol} refused")
            return HandshakeResult(version=protocol)
        if cipher not in self.accepted_ciphers:
            raise ProbeFailed(f"{cipher} refused")
        return HandshakeResult(version="TLSv1.2", cipher=cipher)


