"""
Tension and remediation-action schemas.

``DetectedTension`` is what the detector emits; ``Tension`` and ``Action``
are the persisted records the scorer consumes. Status transitions belong to
the caller; nothing here moves a tension through its lifecycle.
"""

from typing import Any, Optional

from pydantic import BaseModel, Field, computed_field, field_validator
from pydantic.alias_generators import to_camel

from etica.schemas.enums import ActionStatus, TensionStatus

SEVERITY_MIN = 1
SEVERITY_MAX = 5


def clamp_severity(value: int) -> int:
    return max(SEVERITY_MIN, min(SEVERITY_MAX, value))


def _clamp_rating(value: Any) -> Optional[int]:
    if value is None or value == "":
        return None
    return clamp_severity(int(round(float(value))))


class DetectedTension(BaseModel):
    """One finding of one rule, with everything that triggered it."""

    pattern_id: str
    rule_id: str
    rule_name: str
    family: str
    description: str = ""
    domain_a: str
    domain_b: str
    severity: int = Field(ge=SEVERITY_MIN, le=SEVERITY_MAX)
    severity_base: int = Field(ge=SEVERITY_MIN, le=SEVERITY_MAX)
    confidence: str
    related_edge_ids: list[str] = Field(default_factory=list)
    related_node_ids: list[str] = Field(default_factory=list)
    aggravating_factors: list[str] = Field(default_factory=list)
    mitigating_factors: list[str] = Field(default_factory=list)
    suggested_actions: list[str] = Field(default_factory=list)
    questions: list[str] = Field(default_factory=list)

    model_config = {"populate_by_name": True, "alias_generator": to_camel, "frozen": True}

    @computed_field
    @property
    def impacted_domains(self) -> list[str]:
        return [self.domain_a, self.domain_b]


class Tension(BaseModel):
    """
    A persisted tension record as read back for scoring.

    Domains may be given as ``impacted_domains`` or as the ``domain_a`` /
    ``domain_b`` pair; ``domains`` merges both.
    """

    id: str
    status: str = TensionStatus.DETECTED
    impacted_domains: list[str] = Field(default_factory=list, alias="impactedDomains")
    domain_a: Optional[str] = Field(default=None, alias="domainA")
    domain_b: Optional[str] = Field(default=None, alias="domainB")
    pattern_id: Optional[str] = Field(default=None, alias="patternId")
    rule_id: Optional[str] = Field(default=None, alias="ruleId")
    exposure_score: Optional[float] = Field(default=None, alias="exposureScore")

    # Qualification factors (1-5) filled in by the assessor
    severity: Optional[int] = None
    probability: Optional[int] = None
    scale: Optional[int] = None
    vulnerability: Optional[int] = None
    irreversibility: Optional[int] = None
    detectability: Optional[int] = None

    model_config = {"from_attributes": True, "populate_by_name": True}

    @field_validator("impacted_domains", mode="before")
    @classmethod
    def _domains_not_null(cls, value: Any) -> Any:
        return [] if value is None else value

    @field_validator("exposure_score", mode="before")
    @classmethod
    def _clamp_exposure(cls, value: Any) -> Optional[float]:
        if value is None:
            return None
        return max(0.0, min(100.0, float(value)))

    @field_validator(
        "severity", "probability", "scale", "vulnerability", "irreversibility", "detectability",
        mode="before",
    )
    @classmethod
    def _clamp_factor(cls, value: Any) -> Optional[int]:
        return _clamp_rating(value)

    @property
    def domains(self) -> list[str]:
        merged: list[str] = []
        for domain in [*self.impacted_domains, self.domain_a, self.domain_b]:
            if domain and domain.upper() not in merged:
                merged.append(domain.upper())
        return merged

    @property
    def is_active(self) -> bool:
        return self.status != TensionStatus.DISMISSED

    def impacts(self, domain: str) -> bool:
        return domain.upper() in self.domains

    @classmethod
    def from_detected(
        cls,
        detected: DetectedTension,
        tension_id: Optional[str] = None,
        status: str = TensionStatus.DETECTED,
    ) -> "Tension":
        """Build the record a caller would persist for a fresh finding."""
        return cls(
            id=tension_id or detected.rule_id,
            status=status,
            domain_a=detected.domain_a,
            domain_b=detected.domain_b,
            pattern_id=detected.pattern_id,
            rule_id=detected.rule_id,
            severity=detected.severity,
        )


class Action(BaseModel):
    """A remediation task, optionally tied to a tension or to domains."""

    id: str
    status: str = ActionStatus.TODO
    tension_id: Optional[str] = Field(default=None, alias="tensionId")
    estimated_impact: Optional[dict[str, float]] = Field(default=None, alias="estimatedImpact")

    model_config = {"from_attributes": True, "populate_by_name": True}

    @property
    def is_done(self) -> bool:
        return self.status == ActionStatus.DONE

    @property
    def is_in_progress(self) -> bool:
        return self.status == ActionStatus.IN_PROGRESS

    @property
    def is_linked(self) -> bool:
        """Counts toward overall coverage: tied to a tension or to domains."""
        return bool(self.tension_id) or self.estimated_impact is not None

    def targets_domain(self, domain: str) -> bool:
        if not self.estimated_impact:
            return False
        wanted = domain.lower()
        return any(key.lower() == wanted for key in self.estimated_impact)
