"""Tension detection: rule catalog, evaluation context and detector."""

from etica.detection.context import DetectionContext
from etica.detection.detector import (
    DetectionReport,
    TensionDetector,
    deduplicate_by_rule,
    detect,
)
from etica.detection.rules import RULES, DetectionRule, SeverityFactor, get_rule, list_rules
from etica.detection.summary import detection_stats, metadata_risk_summary, summarize

__all__ = [
    "DetectionContext",
    "DetectionReport",
    "TensionDetector",
    "deduplicate_by_rule",
    "detect",
    "RULES",
    "DetectionRule",
    "SeverityFactor",
    "get_rule",
    "list_rules",
    "detection_stats",
    "metadata_risk_summary",
    "summarize",
]
