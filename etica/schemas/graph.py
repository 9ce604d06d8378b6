"""
Graph input schemas — the mapped AI system.

A ``SystemProfile`` describes the system as a whole; ``Node`` and ``Edge``
describe its actors and the data/decision flows between them. All three are
read-only snapshots built by the caller from its own storage (ORM rows are
accepted directly through ``from_attributes``).
"""

from typing import Any, Optional

from pydantic import BaseModel, Field, field_validator

PROFILE_DIMENSIONS: tuple[str, ...] = (
    "agentivity",
    "asymmetry",
    "irreversibility",
    "scalability",
    "opacity",
)

DIMENSION_MIN = 1
DIMENSION_MAX = 5

HIGH_RISK_LEVELS = ("high", "critical")


def _camel(name: str) -> str:
    head, *rest = name.split("_")
    return head + "".join(part.title() for part in rest)


def _none_to_list(value: Any) -> Any:
    return [] if value is None else value


class SystemProfile(BaseModel):
    """Immutable snapshot of the assessed system's metadata."""

    id: Optional[str] = None
    name: str = ""
    sector: str = "OTHER"
    decision_type: str = Field(default="INFORMATIVE", alias="decisionType")
    user_scale: str = Field(default="SMALL", alias="userScale")
    has_vulnerable: bool = Field(default=False, alias="hasVulnerable")
    data_types: list[str] = Field(default_factory=list, alias="dataTypes")
    populations: list[str] = Field(default_factory=list)

    # Governance declarations, None means "not declared yet"
    has_responsible: Optional[bool] = Field(default=None, alias="hasResponsible")
    has_incident_procedure: Optional[bool] = Field(default=None, alias="hasIncidentProcedure")
    has_recourse_mechanism: Optional[bool] = Field(default=None, alias="hasRecourseMechanism")
    has_review_schedule: Optional[bool] = Field(default=None, alias="hasReviewSchedule")
    has_operator_training: Optional[bool] = Field(default=None, alias="hasOperatorTraining")
    has_ethical_documentation: Optional[bool] = Field(default=None, alias="hasEthicalDocumentation")
    has_impact_monitoring: Optional[bool] = Field(default=None, alias="hasImpactMonitoring")
    has_ethics_consultation: Optional[bool] = Field(default=None, alias="hasEthicsConsultation")
    has_stakeholder_consultation: Optional[bool] = Field(default=None, alias="hasStakeholderConsultation")
    has_kill_switch: Optional[bool] = Field(default=None, alias="hasKillSwitch")
    risk_level: Optional[str] = Field(default=None, alias="riskLevel")

    model_config = {"from_attributes": True, "populate_by_name": True, "frozen": True}

    @field_validator("data_types", "populations", mode="before")
    @classmethod
    def _lists_not_null(cls, value: Any) -> Any:
        return _none_to_list(value)

    @property
    def data_types_lower(self) -> set[str]:
        return {dt.lower() for dt in self.data_types}

    @property
    def is_high_risk(self) -> bool:
        """Declared risk level is high or critical."""
        return (self.risk_level or "").lower() in HIGH_RISK_LEVELS


class Node(BaseModel):
    """An actor or component of the mapped architecture."""

    id: str
    type: str
    label: str = ""
    attributes: dict[str, Any] = Field(default_factory=dict)

    model_config = {"from_attributes": True, "populate_by_name": True, "frozen": True}

    @field_validator("attributes", mode="before")
    @classmethod
    def _attributes_not_null(cls, value: Any) -> Any:
        return {} if value is None else value

    def attribute(self, name: str, default: Any = None) -> Any:
        """Read an attribute by snake_case name, accepting the camelCase key too."""
        if name in self.attributes:
            return self.attributes[name]
        return self.attributes.get(_camel(name), default)

    def flag(self, name: str) -> bool:
        """True only when the attribute is literally ``True``."""
        return self.attribute(name) is True

    def flag_is_false(self, name: str) -> bool:
        """True only when the attribute is literally ``False`` (absent is not false)."""
        return self.attribute(name) is False


class Edge(BaseModel):
    """
    A directed data or decision flow between two nodes.

    The five ethical-profile dimensions are optional 1-5 ratings. ``None``
    means "not yet qualified": it is kept as-is and excluded from every
    average. Out-of-range numbers are clamped into [1, 5].
    """

    id: str
    source_id: str = Field(alias="sourceId")
    target_id: str = Field(alias="targetId")
    nature: str
    sensitivity: Optional[str] = None
    automation: Optional[str] = None
    data_categories: list[str] = Field(default_factory=list, alias="dataCategories")

    agentivity: Optional[int] = None
    asymmetry: Optional[int] = None
    irreversibility: Optional[int] = None
    scalability: Optional[int] = None
    opacity: Optional[int] = None

    model_config = {"from_attributes": True, "populate_by_name": True, "frozen": True}

    @field_validator("data_categories", mode="before")
    @classmethod
    def _categories_not_null(cls, value: Any) -> Any:
        return _none_to_list(value)

    @field_validator(*PROFILE_DIMENSIONS, mode="before")
    @classmethod
    def _clamp_dimension(cls, value: Any) -> Optional[int]:
        if value is None or value == "":
            return None
        return max(DIMENSION_MIN, min(DIMENSION_MAX, int(round(float(value)))))

    def dimension(self, name: str) -> Optional[int]:
        return getattr(self, name)

    def profile_values(self) -> dict[str, int]:
        """Only the dimensions that have been qualified."""
        return {
            name: value
            for name in PROFILE_DIMENSIONS
            if (value := getattr(self, name)) is not None
        }

    def has_category(self, *categories: str) -> bool:
        wanted = {c.lower() for c in categories}
        return any(c.lower() in wanted for c in self.data_categories)
