"""
Vigilance Scorer — per-domain and global residual risk.

For every ethical domain:
1. Exposure  = intrinsic (profile) + flow-derived (edges) + tension-derived
2. Coverage  = share of the domain's active tensions handled by actions
3. Residual  = exposure × (1 − coverage × max reduction)

The global score applies the same residual formula to the mean exposure and
mean coverage over the twelve domains. Scores are recomputed from scratch on
every call; nothing is cached between calls.
"""

from typing import Iterable, Optional

import structlog

from etica.config import Settings
from etica.config import settings as default_settings
from etica.domains.catalog import DOMAIN_IDS
from etica.schemas.graph import Edge, SystemProfile
from etica.schemas.scores import DomainScore, VigilanceScores
from etica.schemas.tension import Action, Tension
from etica.scoring.metrics import RATING_MAX, score_to_level
from etica.scoring.weights import (
    LEVEL_THRESHOLDS,
    decision_type_weight,
    domain_decision_weight,
    domains_for_nature,
    profile_weights,
    scale_weight,
    sensitivity_weight,
)

logger = structlog.get_logger(__name__)

# ── Configuration ─────────────────────────────────────────────────────────

DECISION_FACTOR: float = 0.35
VULNERABLE_BONUS: float = 0.3
SCALE_FACTOR: float = 0.1
FLOW_SENSITIVITY_FACTOR: float = 0.05
FLOW_PROFILE_FACTOR: float = 0.05
TENSION_FACTOR: float = 0.15
MAX_COVERAGE_REDUCTION: float = 0.7

IN_PROGRESS_CREDIT: float = 0.5


def _clamp_score(value: float) -> float:
    return min(100.0, max(0.0, value))


class VigilanceScorer:
    """Compute vigilance scores for one assessment."""

    def __init__(
        self,
        decision_factor: float = DECISION_FACTOR,
        vulnerable_bonus: float = VULNERABLE_BONUS,
        scale_factor: float = SCALE_FACTOR,
        flow_sensitivity_factor: float = FLOW_SENSITIVITY_FACTOR,
        flow_profile_factor: float = FLOW_PROFILE_FACTOR,
        tension_factor: float = TENSION_FACTOR,
        max_coverage_reduction: float = MAX_COVERAGE_REDUCTION,
        level_thresholds: tuple[float, ...] = LEVEL_THRESHOLDS,
        domains: Iterable[str] = DOMAIN_IDS,
    ):
        self.decision_factor = decision_factor
        self.vulnerable_bonus = vulnerable_bonus
        self.scale_factor = scale_factor
        self.flow_sensitivity_factor = flow_sensitivity_factor
        self.flow_profile_factor = flow_profile_factor
        self.tension_factor = tension_factor
        self.max_coverage_reduction = max_coverage_reduction
        self.level_thresholds = tuple(level_thresholds)
        self.domains: tuple[str, ...] = tuple(domains)

    @classmethod
    def from_settings(cls, settings: Optional[Settings] = None) -> "VigilanceScorer":
        """Build a scorer from environment-driven settings."""
        settings = settings or default_settings
        return cls(
            decision_factor=settings.decision_factor,
            vulnerable_bonus=settings.vulnerable_bonus,
            scale_factor=settings.scale_factor,
            flow_sensitivity_factor=settings.flow_sensitivity_factor,
            flow_profile_factor=settings.flow_profile_factor,
            tension_factor=settings.tension_factor,
            max_coverage_reduction=settings.max_coverage_reduction,
        )

    # ── Public API ────────────────────────────────────────────────────────

    def score(
        self,
        profile: SystemProfile,
        edges: Iterable[Edge] = (),
        tensions: Iterable[Tension] = (),
        actions: Iterable[Action] = (),
    ) -> VigilanceScores:
        edges = list(edges)
        tensions = list(tensions)
        actions = list(actions)
        active = [t for t in tensions if t.is_active]

        by_domain: dict[str, DomainScore] = {}
        for domain in self.domains:
            exposure = self.domain_exposure(profile, edges, active, domain)
            coverage = self.domain_coverage(active, actions, domain)
            residual = self.residual(exposure, coverage)
            by_domain[domain] = DomainScore(
                score=residual,
                level=self.level(residual),
                exposure=exposure,
                coverage=coverage,
                tension_count=sum(1 for t in active if t.impacts(domain)),
            )

        n = len(by_domain) or 1
        mean_exposure = _clamp_score(sum(d.exposure for d in by_domain.values()) / n)
        mean_coverage = min(1.0, sum(d.coverage for d in by_domain.values()) / n)
        global_score = self.residual(mean_exposure, mean_coverage)

        result = VigilanceScores(
            global_score=global_score,
            global_level=self.level(global_score),
            global_exposure=mean_exposure,
            global_exposure_level=self.level(mean_exposure),
            by_domain=by_domain,
            coverage=self.overall_coverage(actions),
            tension_count=len(active),
            active_action_count=sum(1 for a in actions if a.is_in_progress),
        )

        logger.info(
            "vigilance_scores_computed",
            profile_id=profile.id,
            global_score=round(result.global_score, 2),
            global_level=result.global_level,
            global_exposure_level=result.global_exposure_level,
            tension_count=result.tension_count,
            edges=len(edges),
            actions=len(actions),
        )
        return result

    def level(self, score: float) -> int:
        return score_to_level(score, self.level_thresholds)

    def residual(self, exposure: float, coverage: float) -> float:
        return _clamp_score(exposure * (1 - coverage * self.max_coverage_reduction))

    # ── Exposure ──────────────────────────────────────────────────────────

    def domain_exposure(
        self,
        profile: SystemProfile,
        edges: list[Edge],
        tensions: list[Tension],
        domain: str,
    ) -> float:
        """Raw exposure of a domain, 0-100, before any coverage."""
        exposure = (
            self.intrinsic_exposure(profile, domain)
            + self.flow_exposure(edges, domain)
            + self.tension_exposure(tensions, domain)
        )
        return _clamp_score(exposure * 100)

    def intrinsic_exposure(self, profile: SystemProfile, domain: str) -> float:
        """Contribution of the system's metadata alone, in [0, 1]-ish units."""
        exposure = (
            decision_type_weight(profile.decision_type)
            * domain_decision_weight(domain)
            * self.decision_factor
        )
        if profile.has_vulnerable:
            exposure += self.vulnerable_bonus
        exposure += scale_weight(profile.user_scale) * self.scale_factor
        return exposure

    def flow_exposure(self, edges: Iterable[Edge], domain: str) -> float:
        """Sum over the edges whose nature bears on the domain."""
        domain = domain.upper()
        exposure = 0.0
        for edge in edges:
            if domain not in domains_for_nature(edge.nature):
                continue
            exposure += sensitivity_weight(edge.sensitivity) * self.flow_sensitivity_factor
            exposure += self.edge_profile_score(edge, domain) * self.flow_profile_factor
        return exposure

    def tension_exposure(self, tensions: Iterable[Tension], domain: str) -> float:
        # Unqualified tensions (no exposure score yet) add nothing
        exposure = 0.0
        for tension in tensions:
            if not tension.is_active or not tension.impacts(domain):
                continue
            if tension.exposure_score is None:
                continue
            exposure += tension.exposure_score / 100 * self.tension_factor
        return exposure

    @staticmethod
    def edge_profile_score(edge: Edge, domain: str) -> float:
        """
        Weighted mean (0-1) of the edge's qualified dimensions for a domain.

        Unqualified dimensions leave both numerator and denominator; an edge
        with none of the domain's dimensions scores 0.
        """
        weights = profile_weights(domain)
        values = edge.profile_values()
        total = 0.0
        total_weight = 0.0
        for name, weight in weights.items():
            if name not in values:
                continue
            total += values[name] / RATING_MAX * weight
            total_weight += weight
        return total / total_weight if total_weight > 0 else 0.0

    # ── Coverage ──────────────────────────────────────────────────────────

    def domain_coverage(
        self,
        tensions: Iterable[Tension],
        actions: Iterable[Action],
        domain: str,
    ) -> float:
        """
        Share of the domain's active tensions handled by actions, in [0, 1].

        An action tied to a tension counts only through that tension; an
        untied action counts when its impact map names the domain.
        """
        domain_tensions = [t for t in tensions if t.is_active and t.impacts(domain)]
        if not domain_tensions:
            return 1.0

        tension_ids = {t.id for t in domain_tensions}
        relevant = [
            a for a in actions
            if (a.tension_id in tension_ids if a.tension_id else a.targets_domain(domain))
        ]
        if not relevant:
            return 0.0

        return min(1.0, self._credit(relevant) / len(domain_tensions))

    def overall_coverage(self, actions: Iterable[Action]) -> float:
        linked = [a for a in actions if a.is_linked]
        if not linked:
            return 0.0
        return min(1.0, self._credit(linked) / len(linked))

    @staticmethod
    def _credit(actions: list[Action]) -> float:
        done = sum(1 for a in actions if a.is_done)
        in_progress = sum(1 for a in actions if a.is_in_progress)
        return done + in_progress * IN_PROGRESS_CREDIT


_default_scorer = VigilanceScorer()


def score(
    profile: SystemProfile,
    edges: Iterable[Edge] = (),
    tensions: Iterable[Tension] = (),
    actions: Iterable[Action] = (),
) -> VigilanceScores:
    """Score with the calibrated default coefficients."""
    return _default_scorer.score(profile, edges, tensions, actions)
