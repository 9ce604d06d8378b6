"""
Standalone scoring metrics: level conversion, tension exposure,
edge ethical-profile score and edge vigilance level.
"""

from typing import Optional

from etica.schemas.graph import Edge
from etica.scoring.weights import (
    DEFAULT_EDGE_AUTOMATION_POINTS,
    DEFAULT_EDGE_SENSITIVITY_POINTS,
    EDGE_AUTOMATION_POINTS,
    EDGE_SENSITIVITY_POINTS,
    LEVEL_THRESHOLDS,
    TENSION_FACTOR_WEIGHTS,
)

RATING_MAX = 5


def score_to_level(score: float, thresholds: tuple[float, ...] = LEVEL_THRESHOLDS) -> int:
    """Map a 0-100 score to a 1-5 vigilance level."""
    for level, bound in enumerate(thresholds, start=1):
        if score < bound:
            return level
    return len(thresholds) + 1


def tension_exposure_score(
    severity: float,
    probability: float,
    scale: float,
    vulnerability: float,
    irreversibility: float,
    detectability: float,
) -> int:
    """
    Weighted 0-100 exposure of one qualified tension.

    Each factor is a 1-5 rating; weights sum to 1.
    """
    factors = {
        "severity": severity,
        "probability": probability,
        "scale": scale,
        "vulnerability": vulnerability,
        "irreversibility": irreversibility,
        "detectability": detectability,
    }
    score = sum(
        (value / RATING_MAX) * TENSION_FACTOR_WEIGHTS[name]
        for name, value in factors.items()
    )
    return round(score * 100)


def ethical_profile_score(edge: Edge) -> int:
    """0-100 mean of the qualified dimensions; 0 when none is qualified."""
    values = list(edge.profile_values().values())
    if not values:
        return 0
    return round(sum(values) / (len(values) * RATING_MAX) * 100)


def edge_vigilance_level(edge: Edge, profile_score: Optional[float] = None) -> int:
    """Level 1-5 of a single flow from its sensitivity, automation and profile."""
    if profile_score is None:
        profile_score = ethical_profile_score(edge)
    points = (
        EDGE_SENSITIVITY_POINTS.get(edge.sensitivity, DEFAULT_EDGE_SENSITIVITY_POINTS)
        + EDGE_AUTOMATION_POINTS.get(edge.automation, DEFAULT_EDGE_AUTOMATION_POINTS)
        + profile_score * 0.5
    )
    return score_to_level(points)
