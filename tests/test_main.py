"""Command line entry point."""

import json

import httpx
import pytest

from conftest import FakeTls, routes
from webrecon import main as cli
from webrecon.core.checklists import ScanConfig
from webrecon.core.engine import Engine
from webrecon.core.models import Category


@pytest.fixture
def fake_engine(monkeypatch):
    """Route the CLI's Engine through a mock transport."""
    def factory(config=None, logger=None):
        handler = routes({("GET", "/"): 200, ("PUT", "/"): 200, ("GET", "/.env"): 200})
        return Engine(config=config, logger=logger,
                      transport=httpx.MockTransport(handler),
                      tls=FakeTls(available=False))
    monkeypatch.setattr(cli, "Engine", factory)


def test_selected_categories() -> None:
    assert cli.selected_categories(None) == list(Category)
    assert cli.selected_categories(["all", "tls"]) == list(Category)
    assert cli.selected_categories(["tls", "methods"]) == [Category.METHODS, Category.TLS]


def test_invalid_target_exit_code() -> None:
    assert cli.main(["https://"]) == cli.EXIT_USAGE


def test_scan_with_json_export(fake_engine, tmp_path) -> None:
    out = tmp_path / "report.json"
    code = cli.main(["example.test", "-q", "-c", "methods", "-c", "resources",
                     "-o", str(out)])
    assert code == cli.EXIT_CRITICAL

    data = json.loads(out.read_text(encoding="utf-8"))
    assert data["target"] == "https://example.test"
    assert list(data["categories"]) == ["methods", "resources"]


def test_no_critical_findings_exit_zero(fake_engine) -> None:
    assert cli.main(["example.test", "-q", "-c", "tls"]) == cli.EXIT_OK


def test_config_overrides_from_args() -> None:
    args = cli.build_parser().parse_args([
        "x.test", "--sensitive-path", "backup", "--dangerous-method", "patch",
        "--critical-header", "Referrer-Policy", "--extended-headers", "--timeout", "3",
    ])
    cfg = ScanConfig.from_args(args)
    assert cfg.sensitive_paths == frozenset({"/backup"})
    assert cfg.dangerous_methods == frozenset({"PATCH"})
    assert cfg.critical_headers == frozenset({"Referrer-Policy"})
    assert cfg.extended_headers is True
    assert cfg.timeout == 3.0


def test_interactive_menu(fake_engine, monkeypatch, tmp_path) -> None:
    monkeypatch.chdir(tmp_path)
    answers = iter(["2", "8", "json", "42", "9"])
    monkeypatch.setattr("builtins.input", lambda prompt="": next(answers))

    assert cli.main(["example.test", "-i", "-q"]) == cli.EXIT_CRITICAL
    exported = list(tmp_path.glob("security_report_*.json"))
    assert len(exported) == 1
