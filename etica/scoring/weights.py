"""
Vigilance weight tables.

Every lookup has a documented default so that enum values added by newer
callers are scored instead of rejected:

    decision type   unknown -> 0.3
    user scale      unknown -> 0.3
    sensitivity     unknown or absent -> 0.2 (same as STANDARD)
    domain          unknown -> decision weight 0.5, no profile weights
    flow nature     unknown -> relevant to no domain
"""

from typing import Optional

from etica.schemas.enums import (
    DecisionType,
    EthicalDomain as D,
    FlowNature,
    Sensitivity,
    UserScale,
)

# ── Intrinsic exposure ────────────────────────────────────────────────

DECISION_TYPE_WEIGHTS: dict[str, float] = {
    DecisionType.INFORMATIVE: 0.1,
    DecisionType.RECOMMENDATION: 0.3,
    DecisionType.ASSISTED_DECISION: 0.6,
    DecisionType.AUTO_DECISION: 1.0,
}
DEFAULT_DECISION_TYPE_WEIGHT: float = 0.3

SCALE_WEIGHTS: dict[str, float] = {
    UserScale.TINY: 0.1,
    UserScale.SMALL: 0.2,
    UserScale.MEDIUM: 0.4,
    UserScale.LARGE: 0.7,
    UserScale.VERY_LARGE: 1.0,
}
DEFAULT_SCALE_WEIGHT: float = 0.3

# How strongly automated decisions bear on each domain
DOMAIN_DECISION_WEIGHTS: dict[str, float] = {
    D.RECOURSE: 1.0,
    D.AUTONOMY: 1.0,
    D.TRANSPARENCY: 0.9,
    D.EQUITY: 0.8,
}
DEFAULT_DOMAIN_DECISION_WEIGHT: float = 0.5

# ── Flow-derived exposure ─────────────────────────────────────────────

SENSITIVITY_WEIGHTS: dict[str, float] = {
    Sensitivity.STANDARD: 0.2,
    Sensitivity.SENSITIVE: 0.6,
    Sensitivity.HIGHLY_SENSITIVE: 1.0,
}
DEFAULT_SENSITIVITY_WEIGHT: float = 0.2

FLOW_NATURE_DOMAINS: dict[str, tuple[str, ...]] = {
    FlowNature.COLLECT: (D.PRIVACY, D.SECURITY),
    FlowNature.INFERENCE: (D.PRIVACY, D.EQUITY, D.TRANSPARENCY),
    FlowNature.ENRICHMENT: (D.PRIVACY,),
    FlowNature.DECISION: (D.TRANSPARENCY, D.RECOURSE, D.EQUITY, D.AUTONOMY),
    FlowNature.RECOMMENDATION: (D.AUTONOMY, D.TRANSPARENCY),
    FlowNature.NOTIFICATION: (D.TRANSPARENCY,),
    FlowNature.LEARNING: (D.SUSTAINABILITY, D.RESPONSIBILITY),
    FlowNature.CONTROL: (D.RESPONSIBILITY,),
    FlowNature.TRANSFER: (D.PRIVACY, D.SECURITY),
    FlowNature.STORAGE: (D.PRIVACY, D.SECURITY),
}

# Ethical-profile dimensions each domain cares about
PROFILE_WEIGHTS: dict[str, dict[str, float]] = {
    # Persons
    D.PRIVACY: {"asymmetry": 0.4, "opacity": 0.3, "scalability": 0.3},
    D.EQUITY: {"scalability": 0.4, "opacity": 0.3, "agentivity": 0.3},
    D.TRANSPARENCY: {"opacity": 0.6, "asymmetry": 0.4},
    D.AUTONOMY: {"agentivity": 0.6, "asymmetry": 0.2, "irreversibility": 0.2},
    D.SECURITY: {"irreversibility": 0.5, "scalability": 0.5},
    D.RECOURSE: {"irreversibility": 0.4, "agentivity": 0.3, "opacity": 0.3},
    # Organization
    D.MASTERY: {"opacity": 0.5, "asymmetry": 0.3, "agentivity": 0.2},
    D.RESPONSIBILITY: {"opacity": 0.5, "irreversibility": 0.3, "scalability": 0.2},
    D.SOVEREIGNTY: {"asymmetry": 0.5, "scalability": 0.3, "opacity": 0.2},
    # Society
    D.SUSTAINABILITY: {"scalability": 0.8, "irreversibility": 0.2},
    D.LOYALTY: {"asymmetry": 0.5, "agentivity": 0.3, "opacity": 0.2},
    D.SOCIETAL_BALANCE: {"scalability": 0.6, "agentivity": 0.2, "irreversibility": 0.2},
}

# ── Tension exposure (qualification factors, 1-5 each) ────────────────

TENSION_FACTOR_WEIGHTS: dict[str, float] = {
    "severity": 0.25,
    "probability": 0.2,
    "scale": 0.15,
    "vulnerability": 0.15,
    "irreversibility": 0.15,
    "detectability": 0.1,
}

# ── Edge vigilance level (additive points) ────────────────────────────

EDGE_SENSITIVITY_POINTS: dict[str, int] = {
    Sensitivity.STANDARD: 10,
    Sensitivity.SENSITIVE: 30,
    Sensitivity.HIGHLY_SENSITIVE: 50,
}
DEFAULT_EDGE_SENSITIVITY_POINTS: int = 10

EDGE_AUTOMATION_POINTS: dict[str, int] = {
    "INFORMATIVE": 5,
    "ASSISTED": 10,
    "SEMI_AUTO": 20,
    "AUTO_WITH_RECOURSE": 35,
    "AUTO_NO_RECOURSE": 50,
}
DEFAULT_EDGE_AUTOMATION_POINTS: int = 10

# ── Levels ────────────────────────────────────────────────────────────

# Upper bounds (exclusive) of levels 1-4; anything above is level 5
LEVEL_THRESHOLDS: tuple[float, ...] = (20.0, 40.0, 60.0, 80.0)


# ── Lookups ───────────────────────────────────────────────────────────


def decision_type_weight(decision_type: Optional[str]) -> float:
    return DECISION_TYPE_WEIGHTS.get(decision_type, DEFAULT_DECISION_TYPE_WEIGHT)


def scale_weight(user_scale: Optional[str]) -> float:
    return SCALE_WEIGHTS.get(user_scale, DEFAULT_SCALE_WEIGHT)


def sensitivity_weight(sensitivity: Optional[str]) -> float:
    return SENSITIVITY_WEIGHTS.get(sensitivity, DEFAULT_SENSITIVITY_WEIGHT)


def domain_decision_weight(domain: str) -> float:
    return DOMAIN_DECISION_WEIGHTS.get(domain.upper(), DEFAULT_DOMAIN_DECISION_WEIGHT)


def domains_for_nature(nature: Optional[str]) -> tuple[str, ...]:
    return FLOW_NATURE_DOMAINS.get(nature, ())


def profile_weights(domain: str) -> dict[str, float]:
    return PROFILE_WEIGHTS.get(domain.upper(), {})
