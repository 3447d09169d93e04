"""Cookie runner."""

import httpx

from conftest import TARGET, refuse
from webrecon.checkers.cookies import CookiesChecker
from webrecon.core.models import Severity


def _cookies(*lines):
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, headers=[("Set-Cookie", line) for line in lines])
    return handler


def test_plain_session_cookie(make_probe) -> None:
    findings = CookiesChecker().run(make_probe(_cookies("sid=abc123; Path=/")), TARGET)

    warnings = [f.check_name for f in findings if f.severity is Severity.WARNING]
    infos = [f for f in findings if f.severity is Severity.INFO]
    assert warnings == ["sid:Secure", "sid:HttpOnly"]
    assert len(infos) == 1
    assert infos[0].check_name == "sid:SameSite"
    assert "defaulted" in infos[0].observed
    assert len(findings) == 3


def test_no_cookies(make_probe) -> None:
    findings = CookiesChecker().run(make_probe(_cookies()), TARGET)
    assert [(f.check_name, f.severity) for f in findings] == [("no-cookies", Severity.INFO)]


def test_each_line_is_a_separate_cookie(make_probe) -> None:
    probe = make_probe(_cookies(
        "a=1; Secure; HttpOnly; SameSite=Strict",
        "b=2; HttpOnly",
    ))
    findings = CookiesChecker().run(probe, TARGET)
    assert [(f.check_name, f.severity, f.observed) for f in findings] == [
        ("a:SameSite", Severity.INFO, "Strict"),
        ("b:Secure", Severity.WARNING, "missing"),
        ("b:SameSite", Severity.INFO, "missing (defaulted by browser)"),
    ]
    assert findings[1].evidence == "b=2; HttpOnly"


def test_request_failure(make_probe) -> None:
    findings = CookiesChecker().run(make_probe(refuse), TARGET)
    assert len(findings) == 1
    assert findings[0].check_name == "connectivity"
    assert findings[0].severity is Severity.CRITICAL


def test_malformed_response_is_a_warning(make_probe) -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.RemoteProtocolError("bad status line", request=request)

    [finding] = CookiesChecker().run(make_probe(handler), TARGET)
    assert finding.check_name == "connectivity"
    assert finding.observed == "probe failed"
    assert finding.severity is Severity.WARNING
