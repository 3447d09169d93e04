"""Shared data models for the recon scanner."""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from types import MappingProxyType
from typing import Dict, Iterable, List, Mapping, Optional, Tuple


class Severity(str, Enum):
    INFO = "info"
    WARNING = "warning"
    CRITICAL = "critical"

    @property
    def rank(self) -> int:
        return _SEVERITY_RANK[self]


_SEVERITY_RANK = {Severity.INFO: 0, Severity.WARNING: 1, Severity.CRITICAL: 2}


class Category(str, Enum):
    METHODS = "methods"
    HEADERS = "headers"
    COOKIES = "cookies"
    RESOURCES = "resources"
    TLS = "tls"


# Canonical report order
CATEGORY_ORDER = (Category.METHODS, Category.HEADERS, Category.COOKIES,
                  Category.RESOURCES, Category.TLS)

CATEGORY_TITLES = {
    Category.METHODS: "HTTP Methods",
    Category.HEADERS: "Security Headers",
    Category.COOKIES: "Cookies",
    Category.RESOURCES: "Resource Probe",
    Category.TLS: "TLS/SSL Scan",
}


@dataclass(frozen=True)
class Finding:
    """A single observation produced by a check runner."""
    check_name: str        # method, header, path, cookie attribute, cipher
    observed: str          # what was seen, never truncated
    severity: Severity
    category: Category
    evidence: str = ""     # raw supplementary data (Allow header, cookie line)

    def display_value(self, limit: int = 50) -> str:
        if limit <= 0 or len(self.observed) <= limit:
            return self.observed
        return self.observed[:limit] + "..."

    def to_dict(self) -> Dict[str, str]:
        data = {
            "check": self.check_name,
            "observed": self.observed,
            "severity": self.severity.value,
        }
        if self.evidence:
            data["evidence"] = self.evidence
        return data

    def __str__(self):
        return f"[{self.severity.value.upper()}] {self.check_name}: {self.observed}"


@dataclass
class ScanReport:
    """All findings for one target, grouped by category in checklist order."""
    target: str
    timestamp: datetime = field(
        default_factory=lambda: datetime.now(timezone.utc))
    findings_by_category: Mapping[Category, Tuple[Finding, ...]] = field(
        default_factory=dict)
    finished: bool = False

    def add(self, category: Category, findings: Iterable[Finding]) -> None:
        if self.finished:
            raise RuntimeError("Scan report is already finished.")
        if category in self.findings_by_category:
            raise RuntimeError(f"Category {category.value!r} already recorded.")
        findings = tuple(findings)
        for f in findings:
            if f.category is not category:
                raise ValueError(
                    f"Finding {f.check_name!r} belongs to {f.category.value!r}, "
                    f"not {category.value!r}.")
        self.findings_by_category[category] = findings

    def finish(self) -> "ScanReport":
        self.findings_by_category = MappingProxyType(dict(self.findings_by_category))
        self.finished = True
        return self

    def categories(self) -> List[Category]:
        return [c for c in CATEGORY_ORDER if c in self.findings_by_category]

    def findings(self, category: Optional[Category] = None) -> List[Finding]:
        if category is not None:
            return list(self.findings_by_category.get(category, []))
        out: List[Finding] = []
        for c in self.categories():
            out.extend(self.findings_by_category[c])
        return out

    def count_by_severity(self) -> Dict[str, int]:
        counts = {s.value: 0 for s in Severity}
        for f in self.findings():
            counts[f.severity.value] += 1
        return counts

    def worst_severity(self) -> Optional[Severity]:
        found = self.findings()
        if not found:
            return None
        return max((f.severity for f in found), key=lambda s: s.rank)

    def to_dict(self) -> Dict:
        return {
            "target": self.target,
            "timestamp": self.timestamp.isoformat(),
            "summary": self.count_by_severity(),
            "categories": {
                c.value: [f.to_dict() for f in self.findings_by_category[c]]
                for c in self.categories()
            },
        }
