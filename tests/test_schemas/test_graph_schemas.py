"""
Schema Tests.

Tests:
- Edge dimension clamping and None preservation
- camelCase input accepted alongside snake_case
- Tension domain merging, activity and factor clamping
- Action linking helpers
- VigilanceScores serialisation alias
"""

import pytest
from pydantic import ValidationError

from conftest import make_action, make_edge, make_node
from etica.schemas import (
    Action,
    DetectedTension,
    DomainScore,
    Edge,
    SystemProfile,
    Tension,
    VigilanceScores,
)


class TestEdge:
    def test_out_of_range_dimensions_are_clamped(self):
        edge = make_edge(opacity=9, agentivity=0, asymmetry=-3)
        assert edge.opacity == 5
        assert edge.agentivity == 1
        assert edge.asymmetry == 1

    def test_missing_dimension_stays_none(self):
        edge = make_edge(opacity=3)
        assert edge.scalability is None
        assert edge.profile_values() == {"opacity": 3}

    def test_fractional_dimension_rounds(self):
        assert make_edge(opacity=3.6).opacity == 4

    def test_camel_case_payload(self):
        edge = Edge.model_validate({
            "id": "e1",
            "sourceId": "a",
            "targetId": "b",
            "nature": "COLLECT",
            "dataCategories": ["Health"],
        })
        assert edge.source_id == "a"
        assert edge.has_category("health")

    def test_null_categories_become_empty(self):
        assert make_edge(data_categories=None).data_categories == []

    def test_edge_is_immutable(self):
        edge = make_edge()
        with pytest.raises(ValidationError):
            edge.opacity = 3


class TestNodeAndProfile:
    def test_attribute_reads_camel_case_key(self):
        node = make_node("ai", "AI", isExternal=True)
        assert node.attribute("is_external") is True
        assert node.flag("is_external")

    def test_flag_requires_literal_true(self):
        node = make_node("ai", "AI", has_fallback="yes")
        assert not node.flag("has_fallback")
        assert not node.flag_is_false("has_fallback")
        assert not node.flag("missing")

    def test_profile_from_camel_case(self):
        profile = SystemProfile.model_validate({
            "decisionType": "AUTO_DECISION",
            "userScale": "LARGE",
            "hasVulnerable": True,
            "dataTypes": ["Health", "LOCATION"],
        })
        assert profile.has_vulnerable
        assert profile.data_types_lower == {"health", "location"}
        assert profile.has_responsible is None


class TestTension:
    def test_domains_merge_both_spellings(self):
        tension = Tension(id="t1", impacted_domains=["privacy"], domain_a="PRIVACY", domain_b="equity")
        assert tension.domains == ["PRIVACY", "EQUITY"]
        assert tension.impacts("Equity")
        assert not tension.impacts("RECOURSE")

    def test_dismissed_is_inactive(self):
        assert not Tension(id="t1", status="DISMISSED").is_active
        assert Tension(id="t1", status="RESOLVED").is_active

    def test_exposure_and_factors_clamped(self):
        tension = Tension(id="t1", exposure_score=140, severity=7, probability=0)
        assert tension.exposure_score == 100.0
        assert tension.severity == 5
        assert tension.probability == 1
        assert tension.detectability is None

    def test_from_detected(self):
        detected = DetectedTension(
            pattern_id="AUTOMATION_VS_RECOURSE",
            rule_id="C-01",
            rule_name="Fully automated decisions",
            family="CONTEXTUAL",
            domain_a="RECOURSE",
            domain_b="AUTONOMY",
            severity=4,
            severity_base=4,
            confidence="HIGH",
        )
        tension = Tension.from_detected(detected, tension_id="t-9")
        assert tension.id == "t-9"
        assert tension.domains == ["RECOURSE", "AUTONOMY"]
        assert tension.status == "DETECTED"
        assert detected.impacted_domains == ["RECOURSE", "AUTONOMY"]

    def test_detected_tension_rejects_out_of_range_severity(self):
        with pytest.raises(ValidationError):
            DetectedTension(
                pattern_id="OTHER", rule_id="X", rule_name="x", family="DATA",
                domain_a="PRIVACY", domain_b="EQUITY",
                severity=6, severity_base=3, confidence="LOW",
            )

    def test_detected_tension_serialises_camel_case(self):
        detected = DetectedTension(
            pattern_id="OTHER", rule_id="S-05", rule_name="x", family="STRUCTURAL",
            domain_a="MASTERY", domain_b="RESPONSIBILITY",
            severity=3, severity_base=3, confidence="MEDIUM",
        )
        dumped = detected.model_dump(by_alias=True)
        assert dumped["ruleId"] == "S-05"
        assert dumped["impactedDomains"] == ["MASTERY", "RESPONSIBILITY"]


class TestAction:
    def test_linked_by_tension_or_impact(self):
        assert make_action("a1", tension_id="t1").is_linked
        assert make_action("a2", estimated_impact={"privacy": 0.5}).is_linked
        assert not make_action("a3").is_linked

    def test_targets_domain_case_insensitive(self):
        action = Action.model_validate({"id": "a", "status": "TODO", "estimatedImpact": {"Privacy": 1}})
        assert action.targets_domain("PRIVACY")
        assert not action.targets_domain("EQUITY")


class TestScores:
    def test_global_alias(self):
        scores = VigilanceScores(
            global_score=12.5,
            global_level=1,
            global_exposure=41.0,
            global_exposure_level=3,
            by_domain={
                "PRIVACY": DomainScore(score=12.5, level=1, exposure=41.0, coverage=1.0, tension_count=0),
            },
            coverage=0.0,
            tension_count=0,
            active_action_count=0,
        )
        dumped = scores.model_dump(by_alias=True)
        assert dumped["global"] == 12.5
        assert dumped["byDomain"]["PRIVACY"]["tensionCount"] == 0
        assert scores.domain("privacy").exposure == 41.0
