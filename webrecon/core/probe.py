"""HTTP probe client — a thin httpx wrapper that never reads response bodies."""

from dataclasses import dataclass
from typing import List, Optional

import httpx

from webrecon.core.checklists import ScanConfig
from webrecon.core.errors import ProbeFailed, Unreachable


@dataclass
class ProbeResponse:
    """Status line and headers of one probe."""
    method: str
    url: str
    status_code: int
    headers: httpx.Headers
    http_version: str = "HTTP/1.1"

    @property
    def allowed(self) -> bool:
        return 200 <= self.status_code < 400

    def header(self, name: str) -> Optional[str]:
        """First occurrence of *name*, trimmed; None when absent."""
        values = self.headers.get_list(name)
        if not values:
            return None
        return values[0].strip()

    def header_lines(self, name: str) -> List[str]:
        """Every occurrence of *name*, unmerged."""
        return [v.strip() for v in self.headers.get_list(name)]


class ProbeClient:
    def __init__(self, config: Optional[ScanConfig] = None, logger=None,
                 transport: Optional[httpx.BaseTransport] = None):
        self.config = config or ScanConfig()
        self.logger = logger
        opts = {}
        if self.config.proxy:
            opts["proxy"] = self.config.proxy
        if transport is not None:
            opts["transport"] = transport
        self.client = httpx.Client(
            verify=self.config.verify_tls,
            follow_redirects=False,
            timeout=self.config.timeout,
            headers={"User-Agent": self.config.user_agent},
            **opts)

    def close(self):
        self.client.close()

    def __enter__(self):
        return self

    def __exit__(self, *exc):
        self.close()

    def request(self, method: str, url: str,
                timeout: Optional[float] = None) -> ProbeResponse:
        """
        Send *method* to *url* without following redirects and without
        downloading the body. Connect/timeout errors raise Unreachable,
        any other transport error raises ProbeFailed.
        """
        method = method.upper()
        if self.logger:
            self.logger.debug(f"→ {method} {url}")
        try:
            with self.client.stream(
                    method, url,
                    timeout=self.config.timeout if timeout is None else timeout,
            ) as resp:
                result = ProbeResponse(
                    method=method,
                    url=url,
                    status_code=resp.status_code,
                    headers=resp.headers,
                    http_version=resp.http_version,
                )
        except (httpx.ConnectError, httpx.TimeoutException) as exc:
            raise Unreachable(f"{method} {url}: {exc}") from exc
        except httpx.HTTPError as exc:
            raise ProbeFailed(f"{method} {url}: {exc}") from exc

        if self.logger:
            self.logger.debug(f"← {result.status_code} {method} {url}")
        return result

    def head(self, url: str, timeout: Optional[float] = None) -> ProbeResponse:
        return self.request("HEAD", url, timeout=timeout)

    def get(self, url: str, timeout: Optional[float] = None) -> ProbeResponse:
        return self.request("GET", url, timeout=timeout)
