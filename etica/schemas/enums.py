"""
Enumerated constants shared by the detector and the scorer.

Input models keep these fields typed as plain ``str`` so that values added
by newer callers still validate; ``StrEnum`` members compare equal to their
string value, so ``edge.nature == FlowNature.DECISION`` works either way.
"""

from enum import StrEnum


# ── System profile ─────────────────────────────────────────────────────


class Sector(StrEnum):
    HEALTH = "HEALTH"
    FINANCE = "FINANCE"
    HR = "HR"
    COMMERCE = "COMMERCE"
    JUSTICE = "JUSTICE"
    ADMINISTRATION = "ADMINISTRATION"
    EDUCATION = "EDUCATION"
    TRANSPORT = "TRANSPORT"
    INSURANCE = "INSURANCE"
    SECURITY = "SECURITY"
    MARKETING = "MARKETING"
    MEDIA = "MEDIA"
    OTHER = "OTHER"


class DecisionType(StrEnum):
    """Ordered by increasing automation."""
    INFORMATIVE = "INFORMATIVE"
    RECOMMENDATION = "RECOMMENDATION"
    ASSISTED_DECISION = "ASSISTED_DECISION"
    AUTO_DECISION = "AUTO_DECISION"


class UserScale(StrEnum):
    TINY = "TINY"
    SMALL = "SMALL"
    MEDIUM = "MEDIUM"
    LARGE = "LARGE"
    VERY_LARGE = "VERY_LARGE"


# ── Graph ──────────────────────────────────────────────────────────────


class NodeType(StrEnum):
    HUMAN = "HUMAN"
    AI = "AI"
    INFRA = "INFRA"
    ORG = "ORG"


class FlowNature(StrEnum):
    COLLECT = "COLLECT"
    INFERENCE = "INFERENCE"
    ENRICHMENT = "ENRICHMENT"
    DECISION = "DECISION"
    RECOMMENDATION = "RECOMMENDATION"
    NOTIFICATION = "NOTIFICATION"
    LEARNING = "LEARNING"
    CONTROL = "CONTROL"
    TRANSFER = "TRANSFER"
    STORAGE = "STORAGE"


class Sensitivity(StrEnum):
    STANDARD = "STANDARD"
    SENSITIVE = "SENSITIVE"
    HIGHLY_SENSITIVE = "HIGHLY_SENSITIVE"


class AutomationLevel(StrEnum):
    INFORMATIVE = "INFORMATIVE"
    ASSISTED = "ASSISTED"
    SEMI_AUTO = "SEMI_AUTO"
    AUTO_WITH_RECOURSE = "AUTO_WITH_RECOURSE"
    AUTO_NO_RECOURSE = "AUTO_NO_RECOURSE"


# ── Lifecycle ──────────────────────────────────────────────────────────


class TensionStatus(StrEnum):
    DETECTED = "DETECTED"
    QUALIFIED = "QUALIFIED"
    IN_PROGRESS = "IN_PROGRESS"
    ARBITRATED = "ARBITRATED"
    RESOLVED = "RESOLVED"
    DISMISSED = "DISMISSED"       # Terminal "ignore" state


class ActionStatus(StrEnum):
    TODO = "TODO"
    IN_PROGRESS = "IN_PROGRESS"
    DONE = "DONE"
    CANCELLED = "CANCELLED"


# ── Detection ──────────────────────────────────────────────────────────


class Confidence(StrEnum):
    """Design-time reliability of a rule's heuristic."""
    LOW = "LOW"
    MEDIUM = "MEDIUM"
    HIGH = "HIGH"
    VERY_HIGH = "VERY_HIGH"

    @property
    def rank(self) -> int:
        return _CONFIDENCE_RANK[self]


_CONFIDENCE_RANK = {
    Confidence.LOW: 1,
    Confidence.MEDIUM: 2,
    Confidence.HIGH: 3,
    Confidence.VERY_HIGH: 4,
}


class RuleFamily(StrEnum):
    CONTEXTUAL = "CONTEXTUAL"     # Profile metadata (sector, automation, populations)
    DATA = "DATA"                 # Flow natures, sensitivity, data categories
    STRUCTURAL = "STRUCTURAL"     # Graph shape (loops, supervision)
    DEPENDENCY = "DEPENDENCY"     # External providers and components
    GOVERNANCE = "GOVERNANCE"     # Organisation around the system


# ── Ethical domains ────────────────────────────────────────────────────


class Circle(StrEnum):
    PERSONS = "PERSONS"
    ORGANIZATION = "ORGANIZATION"
    SOCIETY = "SOCIETY"


class EthicalDomain(StrEnum):
    # Persons
    PRIVACY = "PRIVACY"
    EQUITY = "EQUITY"
    TRANSPARENCY = "TRANSPARENCY"
    AUTONOMY = "AUTONOMY"
    SECURITY = "SECURITY"
    RECOURSE = "RECOURSE"
    # Organization
    MASTERY = "MASTERY"
    RESPONSIBILITY = "RESPONSIBILITY"
    SOVEREIGNTY = "SOVEREIGNTY"
    # Society
    SUSTAINABILITY = "SUSTAINABILITY"
    LOYALTY = "LOYALTY"
    SOCIETAL_BALANCE = "SOCIETAL_BALANCE"
