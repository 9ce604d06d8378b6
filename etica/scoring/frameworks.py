"""
Framework Coverage — how well a set of tensions covers external frameworks.

For each requirement of an ethical lens (EU Trustworthy AI, NIST AI RMF,
UNESCO), the score is the share of its mapped domains touched by at least
one tension. Lens score is the mean over requirements; overall score is the
mean over lenses. Uncovered domains, plus the requirement checklist when the
score is below one half, are reported as gaps.
"""

from typing import Iterable, Optional, Union

import structlog
from pydantic import BaseModel, Field

from etica.config import Settings
from etica.config import settings as default_settings
from etica.domains.lenses import ETHICAL_LENSES, EthicalLens, LensRequirement, get_lens
from etica.schemas.tension import DetectedTension, Tension

logger = structlog.get_logger(__name__)

# ── Configuration ─────────────────────────────────────────────────────────

MAX_GAPS_PER_LENS: int = 10
MAX_GAPS_TOTAL: int = 20
CHECKLIST_THRESHOLD: float = 0.5
LOW_REQUIREMENT_THRESHOLD: float = 0.3
LOW_LENS_THRESHOLD: float = 0.5
LOW_OVERALL_THRESHOLD: float = 0.3
MODERATE_OVERALL_THRESHOLD: float = 0.6
GOOD_OVERALL_THRESHOLD: float = 0.8

AnyTension = Union[DetectedTension, Tension]


# ── Schemas ───────────────────────────────────────────────────────────────


class RequirementCoverage(BaseModel):
    requirement_id: str
    name: str
    score: float = Field(ge=0.0, le=1.0)
    covered_by: list[str] = Field(default_factory=list)     # Rule (or tension) ids
    gaps: list[str] = Field(default_factory=list)


class LensCoverage(BaseModel):
    lens_id: str
    lens_name: str
    score: float = Field(ge=0.0, le=1.0)                    # Rounded to 2 decimals
    requirement_scores: dict[str, float] = Field(default_factory=dict)
    requirements: list[RequirementCoverage] = Field(default_factory=list)
    gaps: list[str] = Field(default_factory=list)


class CoverageReport(BaseModel):
    lenses: list[LensCoverage] = Field(default_factory=list)
    overall_score: float = Field(ge=0.0, le=1.0)
    gaps: list[str] = Field(default_factory=list)


class ManualCheck(BaseModel):
    lens: str
    requirement: str
    checks: list[str]


# ── Helpers ───────────────────────────────────────────────────────────────


def _tension_domains(tension: AnyTension) -> list[str]:
    if isinstance(tension, Tension):
        # Dismissed tensions cover nothing
        return tension.domains if tension.is_active else []
    return [tension.domain_a.upper(), tension.domain_b.upper()]


def _tension_ref(tension: AnyTension) -> str:
    if isinstance(tension, Tension):
        return tension.rule_id or tension.id
    return tension.rule_id


def _percent(score: float) -> int:
    return round(score * 100)


# ── Checker ───────────────────────────────────────────────────────────────


class FrameworkCoverageChecker:
    """Score detected or persisted tensions against ethical lenses."""

    def __init__(
        self,
        max_gaps_per_lens: int = MAX_GAPS_PER_LENS,
        max_gaps_total: int = MAX_GAPS_TOTAL,
        lenses: Optional[dict[str, EthicalLens]] = None,
    ):
        self.max_gaps_per_lens = max_gaps_per_lens
        self.max_gaps_total = max_gaps_total
        self.lenses = lenses if lenses is not None else ETHICAL_LENSES

    @classmethod
    def from_settings(cls, settings: Optional[Settings] = None) -> "FrameworkCoverageChecker":
        settings = settings or default_settings
        return cls(
            max_gaps_per_lens=settings.max_gaps_per_lens,
            max_gaps_total=settings.max_gaps_total,
        )

    def check(
        self,
        tensions: Iterable[AnyTension],
        lens_ids: Optional[Iterable[str]] = None,
    ) -> CoverageReport:
        """
        Build the coverage report.

        Args:
            tensions: DetectedTension or Tension records
            lens_ids: lenses to check; all known lenses when None

        Raises:
            UnknownReferenceError: a requested lens id is not known
        """
        tensions = list(tensions)
        lenses = self._select_lenses(lens_ids)

        coverages = [self.lens_coverage(lens, tensions) for lens in lenses]
        overall = sum(c.score for c in coverages) / len(coverages) if coverages else 0.0

        gaps: list[str] = []
        for coverage in coverages:
            for gap in coverage.gaps:
                if gap not in gaps:
                    gaps.append(gap)

        report = CoverageReport(
            lenses=coverages,
            overall_score=round(overall, 2),
            gaps=gaps[: self.max_gaps_total],
        )
        logger.info(
            "framework_coverage_checked",
            lenses=[c.lens_id for c in coverages],
            overall_score=report.overall_score,
            gaps=len(report.gaps),
        )
        return report

    def lens_coverage(self, lens: EthicalLens, tensions: list[AnyTension]) -> LensCoverage:
        requirements = [self.requirement_coverage(r, tensions) for r in lens.requirements]
        score = (
            sum(r.score for r in requirements) / len(requirements) if requirements else 0.0
        )
        gaps = [gap for r in requirements for gap in r.gaps]
        return LensCoverage(
            lens_id=lens.id,
            lens_name=lens.name,
            score=round(score, 2),
            requirement_scores={r.requirement_id: r.score for r in requirements},
            requirements=requirements,
            gaps=gaps[: self.max_gaps_per_lens],
        )

    @staticmethod
    def requirement_coverage(
        requirement: LensRequirement,
        tensions: list[AnyTension],
    ) -> RequirementCoverage:
        mapped = [str(d) for d in requirement.mapped_domains]
        covered_domains: set[str] = set()
        covered_by: list[str] = []

        for tension in tensions:
            hits = [d for d in _tension_domains(tension) if d in mapped]
            if not hits:
                continue
            covered_domains.update(hits)
            ref = _tension_ref(tension)
            if ref not in covered_by:
                covered_by.append(ref)

        score = len(covered_domains) / len(mapped) if mapped else 0.0

        gaps = [
            f'Domain {domain} not covered for requirement "{requirement.name}"'
            for domain in mapped
            if domain not in covered_domains
        ]
        if score < CHECKLIST_THRESHOLD:
            gaps.extend(f"To check: {item}" for item in requirement.checklist)

        return RequirementCoverage(
            requirement_id=requirement.id,
            name=requirement.name,
            score=score,
            covered_by=covered_by,
            gaps=gaps,
        )

    def _select_lenses(self, lens_ids: Optional[Iterable[str]]) -> list[EthicalLens]:
        if lens_ids is None:
            return list(self.lenses.values())
        selected = []
        for lens_id in lens_ids:
            lens = self.lenses.get(lens_id) or get_lens(lens_id)
            selected.append(lens)
        return selected

    # ── Follow-ups ────────────────────────────────────────────────────────

    def recommendations(self, report: CoverageReport) -> list[str]:
        recs: list[str] = []

        for lens in report.lenses:
            if lens.score < LOW_LENS_THRESHOLD:
                recs.append(
                    f'Low coverage ({_percent(lens.score)}%) of "{lens.lens_name}". '
                    "Consider reviewing the uncovered requirements."
                )

            low = [r.name for r in lens.requirements if r.score < LOW_REQUIREMENT_THRESHOLD]
            if low:
                recs.append(f'Weakly covered requirements in "{lens.lens_name}": {", ".join(low)}')

        if report.overall_score < LOW_OVERALL_THRESHOLD:
            recs.append(
                "Overall coverage is low. Consider adding tensions manually "
                "for the ethical domains that are not represented."
            )
        elif report.overall_score < MODERATE_OVERALL_THRESHOLD:
            recs.append(
                "Coverage is moderate. Check that the main ethical risks are identified."
            )
        elif report.overall_score >= GOOD_OVERALL_THRESHOLD:
            recs.append(
                "Good coverage of the ethical frameworks. Make sure arbitrations are documented."
            )

        return recs

    @staticmethod
    def suggest_manual_checks(report: CoverageReport) -> list[ManualCheck]:
        """Checklists of every requirement scoring below one half."""
        suggestions: list[ManualCheck] = []
        for lens_cov in report.lenses:
            lens = ETHICAL_LENSES.get(lens_cov.lens_id)
            if lens is None:
                continue
            for req_cov in lens_cov.requirements:
                if req_cov.score >= CHECKLIST_THRESHOLD:
                    continue
                requirement = lens.requirement(req_cov.requirement_id)
                if requirement is not None:
                    suggestions.append(
                        ManualCheck(
                            lens=lens.name,
                            requirement=requirement.name,
                            checks=list(requirement.checklist),
                        )
                    )
        return suggestions

    def format_report(self, report: CoverageReport) -> str:
        """Markdown rendering of a coverage report."""
        lines = [
            "# Ethical coverage report",
            "",
            f"Overall score: {_percent(report.overall_score)}%",
            "",
            "## Coverage by framework",
            "",
        ]
        for lens in report.lenses:
            lines += [f"### {lens.lens_name}", f"Score: {_percent(lens.score)}%", ""]
            if lens.requirements:
                lines += ["| Requirement | Score |", "|-------------|-------|"]
                for req in lens.requirements:
                    if req.score >= 0.7:
                        mark = "OK"
                    elif req.score >= LOW_REQUIREMENT_THRESHOLD:
                        mark = "PARTIAL"
                    else:
                        mark = "MISSING"
                    lines.append(f"| {req.name} | {mark} {_percent(req.score)}% |")
                lines.append("")

        if report.gaps:
            lines += ["## Identified gaps", ""]
            lines += [f"- {gap}" for gap in report.gaps]
            lines.append("")

        recs = self.recommendations(report)
        if recs:
            lines += ["## Recommendations", ""]
            lines += [f"- {rec}" for rec in recs]

        return "\n".join(lines) + "\n"


_default_checker = FrameworkCoverageChecker()


def check_coverage(
    tensions: Iterable[AnyTension],
    lens_ids: Optional[Iterable[str]] = None,
) -> CoverageReport:
    return _default_checker.check(tensions, lens_ids)
