"""Abstract base for all check runners."""

from abc import ABC, abstractmethod
from typing import List

from webrecon.core.checklists import ScanConfig
from webrecon.core.models import Category, Finding, Severity


class BaseChecker(ABC):
    """Every checker declares its category and implements run()."""

    name: str = "Unnamed Checker"
    category: Category

    def __init__(self, config: ScanConfig = None):
        self.config = config or ScanConfig()

    # ── public API ──────────────────────────────────────────────

    @abstractmethod
    def run(self, probe, target: str) -> List[Finding]:
        """
        Probe *target* and return findings in checklist order.
        Network failures must come back as findings, not exceptions.
        """
        ...

    # ── shared helpers ──────────────────────────────────────────

    def finding(self, check_name: str, observed: str, severity: Severity,
                evidence: str = "") -> Finding:
        return Finding(check_name=check_name, observed=observed,
                       severity=severity, category=self.category,
                       evidence=evidence)

    def unreachable(self, exc: Exception) -> Finding:
        return self.finding("connectivity", "unreachable",
                            Severity.CRITICAL, evidence=str(exc))
