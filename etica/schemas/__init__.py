"""Data model shared by the detector and the scorer."""

from etica.schemas.enums import (
    ActionStatus,
    AutomationLevel,
    Circle,
    Confidence,
    DecisionType,
    EthicalDomain,
    FlowNature,
    NodeType,
    RuleFamily,
    Sector,
    Sensitivity,
    TensionStatus,
    UserScale,
)
from etica.schemas.graph import PROFILE_DIMENSIONS, Edge, Node, SystemProfile
from etica.schemas.scores import DomainScore, VigilanceScores
from etica.schemas.tension import Action, DetectedTension, Tension

__all__ = [
    "ActionStatus",
    "AutomationLevel",
    "Circle",
    "Confidence",
    "DecisionType",
    "EthicalDomain",
    "FlowNature",
    "NodeType",
    "RuleFamily",
    "Sector",
    "Sensitivity",
    "TensionStatus",
    "UserScale",
    "PROFILE_DIMENSIONS",
    "Edge",
    "Node",
    "SystemProfile",
    "DomainScore",
    "VigilanceScores",
    "Action",
    "DetectedTension",
    "Tension",
]
