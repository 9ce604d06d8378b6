"""
Vigilance score schemas.

Scores are ephemeral: recomputed on demand from the current graph, tensions
and actions, never stored as authoritative state.
"""

from pydantic import BaseModel, Field
from pydantic.alias_generators import to_camel


class DomainScore(BaseModel):
    """Residual score for one ethical domain."""

    score: float = Field(ge=0.0, le=100.0)        # Residual, after coverage
    level: int = Field(ge=1, le=5)
    exposure: float = Field(ge=0.0, le=100.0)     # Raw, before coverage
    coverage: float = Field(ge=0.0, le=1.0)
    tension_count: int = Field(ge=0)

    model_config = {"populate_by_name": True, "alias_generator": to_camel}


class VigilanceScores(BaseModel):
    """
    Per-domain and global vigilance scores.

    ``global_score`` serialises as ``global`` with ``by_alias=True``.
    ``global_exposure`` / ``global_exposure_level`` carry the unmitigated
    mean so callers can show raw risk next to the residual.
    """

    global_score: float = Field(ge=0.0, le=100.0, alias="global")
    global_level: int = Field(ge=1, le=5)
    global_exposure: float = Field(ge=0.0, le=100.0)
    global_exposure_level: int = Field(ge=1, le=5)
    by_domain: dict[str, DomainScore] = Field(default_factory=dict)
    coverage: float = Field(ge=0.0, le=1.0)
    tension_count: int = Field(ge=0)
    active_action_count: int = Field(ge=0)

    model_config = {"populate_by_name": True, "alias_generator": to_camel}

    def domain(self, domain: str) -> DomainScore:
        return self.by_domain[domain.upper()]

    def highest_domains(self, limit: int = 3) -> list[tuple[str, DomainScore]]:
        """Domains with the highest residual score, ties kept in catalogue order."""
        ranked = sorted(self.by_domain.items(), key=lambda item: -item[1].score)
        return ranked[:limit]
