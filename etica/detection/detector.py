"""
Tension Detector — evaluates the rule catalog against one assessment.

Pipeline per rule:
1. Evaluate the predicate
2. Collect the related edges and nodes (input order, de-duplicated)
3. Apply aggravating / mitigating factors, clamp severity to [1, 5]
4. Emit one DetectedTension

Rules are independent: none sees another's output, and a rule that
raises is skipped and reported without aborting the others.
"""

from dataclasses import dataclass, field
from typing import Iterable, Optional

import structlog

from etica.detection.context import DetectionContext
from etica.detection.rules import RULES, DetectionRule
from etica.domains.patterns import get_pattern
from etica.exceptions import RuleEvaluationError
from etica.schemas.graph import Edge, Node, SystemProfile
from etica.schemas.tension import DetectedTension, clamp_severity

logger = structlog.get_logger(__name__)


@dataclass(frozen=True)
class DetectionReport:
    """Findings plus the rules that failed while being evaluated."""
    tensions: list[DetectedTension] = field(default_factory=list)
    errors: list[RuleEvaluationError] = field(default_factory=list)

    @property
    def failed_rule_ids(self) -> list[str]:
        return [e.rule_id for e in self.errors]


def _unique_ids(items: Iterable) -> list[str]:
    seen: list[str] = []
    for item in items:
        if item.id not in seen:
            seen.append(item.id)
    return seen


class TensionDetector:
    """
    Stateless rule evaluator.

    The detector never deduplicates across rules: two rules pointing at the
    same pattern both produce a finding. Callers that persist findings use
    ``deduplicate_by_rule``.
    """

    def __init__(self, rules: Iterable[DetectionRule] = RULES):
        self.rules: tuple[DetectionRule, ...] = tuple(rules)

    def detect(
        self,
        profile: SystemProfile,
        nodes: Iterable[Node] = (),
        edges: Iterable[Edge] = (),
    ) -> list[DetectedTension]:
        return self.detect_with_report(profile, nodes, edges).tensions

    def detect_with_report(
        self,
        profile: SystemProfile,
        nodes: Iterable[Node] = (),
        edges: Iterable[Edge] = (),
    ) -> DetectionReport:
        ctx = DetectionContext.build(profile, nodes, edges)
        report = DetectionReport()

        for rule in self.rules:
            try:
                tension = self.evaluate_rule(rule, ctx)
            except RuleEvaluationError as exc:
                logger.warning(
                    "rule_evaluation_failed",
                    rule_id=exc.rule_id,
                    stage=exc.stage,
                    error_type=type(exc.cause).__name__,
                    error=str(exc.cause),
                )
                report.errors.append(exc)
                continue
            if tension is not None:
                report.tensions.append(tension)

        logger.info(
            "tension_detection_complete",
            profile_id=profile.id,
            rules_evaluated=len(self.rules),
            tensions_detected=len(report.tensions),
            rules_failed=len(report.errors),
        )
        return report

    def evaluate_rule(self, rule: DetectionRule, ctx: DetectionContext) -> Optional[DetectedTension]:
        """
        Evaluate a single rule.

        Returns:
            DetectedTension if the rule fires, None otherwise

        Raises:
            RuleEvaluationError: wrapping whatever the rule's callables raised
        """
        stage = "predicate"
        try:
            if not rule.predicate(ctx):
                return None

            stage = "related_edges"
            related_edges = list(rule.related_edges(ctx)) if rule.related_edges else []
            edge_ids = _unique_ids(related_edges)

            stage = "related_nodes"
            if rule.related_nodes is not None:
                node_ids = _unique_ids(rule.related_nodes(ctx))
            else:
                node_ids = self._endpoint_ids(related_edges, ctx)

            stage = "severity"
            aggravating = [f for f in rule.aggravating if f.applies(ctx)]
            mitigating = [f for f in rule.mitigating if f.applies(ctx)]

            stage = "build"
            modifier = sum(f.modifier for f in aggravating) + sum(f.modifier for f in mitigating)
            pattern = get_pattern(rule.pattern_id)
            return DetectedTension(
                pattern_id=rule.pattern_id,
                rule_id=rule.id,
                rule_name=rule.name,
                family=rule.family,
                description=rule.description,
                domain_a=rule.domain_a,
                domain_b=rule.domain_b,
                severity=clamp_severity(rule.severity_base + modifier),
                severity_base=clamp_severity(rule.severity_base),
                confidence=rule.confidence,
                related_edge_ids=edge_ids,
                related_node_ids=node_ids,
                aggravating_factors=[f.label for f in aggravating],
                mitigating_factors=[f.label for f in mitigating],
                suggested_actions=list(rule.suggested_actions or pattern.default_actions),
                questions=list(rule.questions or pattern.arbitration_questions),
            )
        except Exception as exc:
            raise RuleEvaluationError(rule.id, exc, stage) from exc

    @staticmethod
    def _endpoint_ids(edges: list[Edge], ctx: DetectionContext) -> list[str]:
        ids: list[str] = []
        for e in edges:
            for node_id in (e.source_id, e.target_id):
                if node_id in ctx.node_map and node_id not in ids:
                    ids.append(node_id)
        return ids


_default_detector = TensionDetector()


def detect(
    profile: SystemProfile,
    nodes: Iterable[Node] = (),
    edges: Iterable[Edge] = (),
) -> list[DetectedTension]:
    """Run the full catalog with the default detector."""
    return _default_detector.detect(profile, nodes, edges)


def deduplicate_by_rule(
    detected: Iterable[DetectedTension],
    existing_rule_ids: Iterable[str] = (),
) -> list[DetectedTension]:
    """
    Drop findings whose rule id is already persisted (or repeated).

    ``rule_id`` is the canonical identity of a finding; two rules sharing a
    pattern are distinct findings.
    """
    seen = set(existing_rule_ids)
    fresh: list[DetectedTension] = []
    for tension in detected:
        if tension.rule_id in seen:
            continue
        seen.add(tension.rule_id)
        fresh.append(tension)
    return fresh
