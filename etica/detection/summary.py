"""
Detection summaries — statistics and short texts over a set of findings.

Also provides a quick risk read of the profile alone, usable before any
graph has been mapped.
"""

from collections import Counter
from typing import Iterable

from pydantic import BaseModel, Field

from etica.detection.context import SENSITIVE_DATA_TYPES
from etica.detection.rules import LARGE_SCALES, PUBLIC_SECTORS
from etica.schemas.enums import DecisionType, RuleFamily
from etica.schemas.graph import SystemProfile
from etica.schemas.tension import DetectedTension

TOP_DOMAIN_PAIRS = 10


# ── Profile-only risk summary ─────────────────────────────────────────


class RiskSummary(BaseModel):
    level: str              # LOW | MEDIUM | HIGH | CRITICAL
    factors: list[str] = Field(default_factory=list)


def metadata_risk_summary(profile: SystemProfile) -> RiskSummary:
    """Count coarse risk factors on the profile and bucket them."""
    factors: list[str] = []

    if profile.decision_type == DecisionType.AUTO_DECISION:
        factors.append("Fully automated decisions")
    if profile.has_vulnerable:
        factors.append("Vulnerable populations affected")
    if profile.user_scale in LARGE_SCALES:
        factors.append("Large-scale deployment")
    if profile.data_types_lower & SENSITIVE_DATA_TYPES:
        factors.append("Sensitive data processed")
    if profile.sector in PUBLIC_SECTORS:
        factors.append("Sensitive public sector")

    if len(factors) >= 4:
        level = "CRITICAL"
    elif len(factors) >= 3:
        level = "HIGH"
    elif factors:
        level = "MEDIUM"
    else:
        level = "LOW"

    return RiskSummary(level=level, factors=factors)


# ── Statistics over findings ──────────────────────────────────────────


class SeverityBreakdown(BaseModel):
    critical: int = 0       # 5
    high: int = 0           # 4
    medium: int = 0         # 3
    low: int = 0            # 1-2


class DomainPairCount(BaseModel):
    domain_a: str
    domain_b: str
    count: int


class DetectionStats(BaseModel):
    total: int = 0
    by_family: dict[str, int] = Field(default_factory=dict)
    by_severity: SeverityBreakdown = Field(default_factory=SeverityBreakdown)
    by_domain: dict[str, int] = Field(default_factory=dict)
    top_domain_pairs: list[DomainPairCount] = Field(default_factory=list)


def detection_stats(tensions: Iterable[DetectedTension]) -> DetectionStats:
    tensions = list(tensions)
    by_family = {str(f): 0 for f in RuleFamily}
    by_domain: Counter[str] = Counter()
    pairs: Counter[tuple[str, str]] = Counter()

    for t in tensions:
        by_family[str(t.family)] = by_family.get(str(t.family), 0) + 1
        by_domain[str(t.domain_a)] += 1
        by_domain[str(t.domain_b)] += 1
        pairs[(str(t.domain_a), str(t.domain_b))] += 1

    severity = SeverityBreakdown(
        critical=sum(1 for t in tensions if t.severity >= 5),
        high=sum(1 for t in tensions if t.severity == 4),
        medium=sum(1 for t in tensions if t.severity == 3),
        low=sum(1 for t in tensions if t.severity <= 2),
    )

    # most_common keeps first-seen order among equal counts
    top_pairs = [
        DomainPairCount(domain_a=a, domain_b=b, count=n)
        for (a, b), n in pairs.most_common(TOP_DOMAIN_PAIRS)
    ]

    return DetectionStats(
        total=len(tensions),
        by_family=by_family,
        by_severity=severity,
        by_domain=dict(by_domain),
        top_domain_pairs=top_pairs,
    )


def summarize(tensions: Iterable[DetectedTension]) -> str:
    """One-paragraph English summary of the findings."""
    tensions = list(tensions)
    if not tensions:
        return (
            "No major ethical tension detected from the mapping provided. "
            "This does not mean there is no risk; tensions can still be added manually "
            "for specific points of attention."
        )

    stats = detection_stats(tensions)
    priority = stats.by_severity.critical + stats.by_severity.high

    text = f"{stats.total} ethical tension(s) detected"
    if priority:
        text += f", {priority} of which to address first"
    text += "."

    top_domains = [d for d, _ in Counter(stats.by_domain).most_common(3)]
    if top_domains:
        text += f" Most affected domains: {', '.join(top_domains)}."

    return text
