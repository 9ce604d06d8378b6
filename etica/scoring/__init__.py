"""Vigilance scoring, standalone metrics and framework coverage."""

from etica.scoring.frameworks import (
    CoverageReport,
    FrameworkCoverageChecker,
    LensCoverage,
    ManualCheck,
    RequirementCoverage,
    check_coverage,
)
from etica.scoring.metrics import (
    edge_vigilance_level,
    ethical_profile_score,
    score_to_level,
    tension_exposure_score,
)
from etica.scoring.vigilance import VigilanceScorer, score

__all__ = [
    "CoverageReport",
    "FrameworkCoverageChecker",
    "LensCoverage",
    "ManualCheck",
    "RequirementCoverage",
    "check_coverage",
    "edge_vigilance_level",
    "ethical_profile_score",
    "score_to_level",
    "tension_exposure_score",
    "VigilanceScorer",
    "score",
]
