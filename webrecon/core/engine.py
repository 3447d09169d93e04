from typing import Dict, Iterable, List, Optional

import httpx

from webrecon.checkers.base import BaseChecker
from webrecon.checkers.cookies import CookiesChecker
from webrecon.checkers.headers import HeadersChecker
from webrecon.checkers.methods import MethodsChecker
from webrecon.checkers.resources import ResourcesChecker
from webrecon.checkers.tls import TlsChecker
from webrecon.core.checklists import ScanConfig
from webrecon.core.models import CATEGORY_ORDER, Category, Finding, ScanReport, Severity
from webrecon.core.probe import ProbeClient
from webrecon.core.target import normalize_target
from webrecon.core.tls import TlsProbe


def default_checkers(config: ScanConfig, tls: Optional[TlsProbe] = None,
                     logger=None) -> Dict[Category, BaseChecker]:
    tls = tls or TlsProbe(timeout=config.timeout, logger=logger)
    return {
        Category.METHODS: MethodsChecker(config),
        Category.HEADERS: HeadersChecker(config),
        Category.COOKIES: CookiesChecker(config),
        Category.RESOURCES: ResourcesChecker(config),
        Category.TLS: TlsChecker(config, tls=tls),
    }


class Engine:
    def __init__(self, config: Optional[ScanConfig] = None, logger=None,
                 transport: Optional[httpx.BaseTransport] = None,
                 tls: Optional[TlsProbe] = None,
                 checkers: Optional[Dict[Category, BaseChecker]] = None):
        self.name = "WebRecon"
        self.version = "1.0.0"
        self.config = config or ScanConfig()
        self.logger = logger
        self.probe = ProbeClient(self.config, logger=logger, transport=transport)
        self.checkers = (checkers if checkers is not None
                         else default_checkers(self.config, tls, logger))

    def close(self):
        self.probe.close()

    def __enter__(self):
        return self

    def __exit__(self, *exc):
        self.close()

    def run_checker(self, checker: BaseChecker, target: str) -> List[Finding]:
        """Run one checker; whatever it raises becomes a single finding."""
        if self.logger:
            self.logger.info(f"Running {checker.name} on {target}")
        try:
            findings = checker.run(self.probe, target)
        except Exception as exc:
            if self.logger:
                self.logger.fail(f"{checker.name} crashed: {exc!r}")
            return [Finding(check_name="runner-error", observed=type(exc).__name__,
                            severity=Severity.CRITICAL, category=checker.category,
                            evidence=str(exc))]

        if self.logger:
            for f in findings:
                self.logger.finding(f, self.config.display_limit)
            issues = [f for f in findings if f.severity is not Severity.INFO]
            if not issues:
                self.logger.ok(f"No issues for {checker.name}")
        return findings

    def scan(self, target: str,
             categories: Optional[Iterable[Category]] = None) -> ScanReport:
        """
        Normalize *target* (InvalidTarget propagates, nothing is probed),
        run the selected checkers one after another and return the
        finished report.
        """
        url = normalize_target(target)
        wanted = set(categories) if categories else set(CATEGORY_ORDER)
        report = ScanReport(target=url)

        for category in CATEGORY_ORDER:
            if category not in wanted or category not in self.checkers:
                continue
            report.add(category, self.run_checker(self.checkers[category], url))

        return report.finish()
