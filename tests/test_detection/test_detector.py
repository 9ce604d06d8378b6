"""
Tension Detector Tests.

Tests:
- Which rules fire on profiles and graphs
- Severity modifiers and clamping
- Related edges/nodes ordering and de-duplication
- Fail-closed handling of undeclared fields
- Isolation of a rule that raises
- Determinism and rule-id deduplication
"""

import pytest
from structlog.testing import capture_logs

from conftest import make_edge, make_node, make_profile
from etica.detection import (
    RULES,
    DetectionRule,
    SeverityFactor,
    TensionDetector,
    deduplicate_by_rule,
    detect,
)
from etica.domains.patterns import get_pattern
from etica.exceptions import ErrorCode
from etica.schemas.enums import Confidence, EthicalDomain as D, RuleFamily


def _rule(rule_id: str = "X-01", predicate=lambda ctx: True, **fields) -> DetectionRule:
    data = {
        "id": rule_id,
        "pattern_id": "OTHER",
        "name": f"Rule {rule_id}",
        "family": RuleFamily.DATA,
        "domain_a": D.PRIVACY,
        "domain_b": D.EQUITY,
        "severity_base": 3,
        "confidence": Confidence.LOW,
        "predicate": predicate,
    }
    data.update(fields)
    return DetectionRule(**data)


def _ids(tensions) -> list[str]:
    return [t.rule_id for t in tensions]


class TestContextualDetection:
    """Rules that only look at the profile."""

    def test_quiet_profile_yields_nothing(self, minimal_profile):
        assert detect(minimal_profile) == []

    def test_critical_profile(self, critical_profile):
        tensions = detect(critical_profile)
        assert _ids(tensions) == ["C-01", "C-02", "C-03", "C-06"]

        c01 = tensions[0]
        assert (c01.domain_a, c01.domain_b) == ("RECOURSE", "AUTONOMY")
        assert c01.pattern_id == "AUTOMATION_VS_RECOURSE"
        assert c01.severity == 4
        assert c01.related_edge_ids == []

    def test_missing_recourse_aggravates(self):
        profile = make_profile(decision_type="AUTO_DECISION", has_recourse_mechanism=False)
        c01 = next(t for t in detect(profile) if t.rule_id == "C-01")
        assert c01.severity == 5
        assert c01.severity_base == 4
        assert c01.aggravating_factors == ["No recourse mechanism declared"]

    def test_modifiers_cancel_out(self):
        profile = make_profile(decision_type="AUTO_DECISION", has_recourse_mechanism=False)
        nodes = [make_node("user", "HUMAN", can_contest=True)]
        c01 = next(t for t in detect(profile, nodes) if t.rule_id == "C-01")
        assert c01.severity == 4
        assert c01.mitigating_factors == ["Affected people can contest"]

    def test_minor_keywords_match_population(self):
        profile = make_profile(populations=["High-school Students"])
        assert "C-10" in _ids(detect(profile))

    def test_minor_keywords_match_human_label(self):
        nodes = [make_node("kid", "HUMAN", "Enfants inscrits"), make_node("ai", "AI")]
        edges = [make_edge("COLLECT", "kid", "ai", edge_id="c1")]
        c10 = next(t for t in detect(make_profile(), nodes, edges) if t.rule_id == "C-10")
        assert c10.related_node_ids == ["kid"]
        assert c10.related_edge_ids == ["c1"]

    def test_public_sector_decisions(self):
        profile = make_profile(sector="JUSTICE", decision_type="RECOMMENDATION")
        assert "C-08" in _ids(detect(profile))


class TestGraphDetection:
    """Rules that inspect flows and graph shape."""

    def test_scoring_graph(self, minimal_profile, scoring_graph):
        nodes, edges = scoring_graph
        tensions = detect(minimal_profile, nodes, edges)
        assert _ids(tensions) == ["D-01", "D-02", "D-07", "D-08", "S-05"]

    def test_opaque_decision_details(self, minimal_profile, scoring_graph):
        nodes, edges = scoring_graph
        d01 = detect(minimal_profile, nodes, edges)[0]
        assert d01.related_edge_ids == ["decide"]
        assert d01.related_node_ids == ["ai", "user"]
        assert d01.severity == 4
        assert d01.aggravating_factors == ["Very high opacity"]

    def test_related_edges_keep_input_order(self, minimal_profile, scoring_graph):
        nodes, edges = scoring_graph
        d07 = next(t for t in detect(minimal_profile, nodes, edges) if t.rule_id == "D-07")
        assert d07.related_edge_ids == ["infer", "decide"]

    def test_missing_supervisor_lists_ai_nodes(self, minimal_profile, scoring_graph):
        nodes, edges = scoring_graph
        s05 = detect(minimal_profile, nodes, edges)[-1]
        assert s05.related_node_ids == ["ai"]
        assert s05.suggested_actions == ["DESIGNATE_AI_OWNER", "MONITORING"]

    def test_human_control_edge_removes_missing_supervisor(self, minimal_profile, scoring_graph):
        nodes, edges = scoring_graph
        edges = edges + [make_edge("CONTROL", "user", "ai", edge_id="ctl")]
        assert "S-05" not in _ids(detect(minimal_profile, nodes, edges))

    def test_closed_automated_loop(self, minimal_profile):
        nodes = [make_node("a1", "AI"), make_node("a2", "AI"), make_node("u", "HUMAN")]
        edges = [
            make_edge("DECISION", "a1", "a2", edge_id="l1", automation="AUTO_WITH_RECOURSE"),
            make_edge("CONTROL", "a2", "a1", edge_id="l2", automation="AUTO_NO_RECOURSE",
                      sensitivity="SENSITIVE"),
            make_edge("DECISION", "a1", "u", edge_id="out", automation="AUTO_WITH_RECOURSE"),
        ]
        s01 = next(t for t in detect(minimal_profile, nodes, edges) if t.rule_id == "S-01")
        assert s01.related_edge_ids == ["l1", "l2"]
        assert s01.severity == 5

    def test_sensitive_transfer_to_external_org(self, minimal_profile):
        nodes = [make_node("db", "INFRA"), make_node("partner", "ORG", location="outside_eu")]
        edges = [make_edge("TRANSFER", "db", "partner", edge_id="t1", sensitivity="HIGHLY_SENSITIVE")]
        d10 = next(t for t in detect(minimal_profile, nodes, edges) if t.rule_id == "D-10")
        assert d10.severity == 4

    def test_external_ai_without_fallback(self, minimal_profile):
        nodes = [make_node("api", "AI", is_external=True, has_fallback=False), make_node("u", "HUMAN")]
        edges = [make_edge("DECISION", "api", "u", edge_id="d")]
        e01 = next(t for t in detect(minimal_profile, nodes, edges) if t.rule_id == "E-01")
        assert e01.related_node_ids == ["api"]
        assert e01.related_edge_ids == ["d"]


class TestFailClosed:
    """Undeclared fields never satisfy a rule."""

    def test_unqualified_opacity_does_not_fire(self, minimal_profile):
        edges = [make_edge("DECISION", edge_id="d")]
        assert "D-01" not in _ids(detect(minimal_profile, [], edges))

    def test_undeclared_governance_does_not_fire(self, minimal_profile):
        edges = [make_edge("DECISION", edge_id="d")]
        assert "G-01" not in _ids(detect(minimal_profile, [], edges))

    def test_declared_missing_responsible_fires(self):
        profile = make_profile(has_responsible=False)
        edges = [make_edge("DECISION", edge_id="d")]
        assert "G-01" in _ids(detect(profile, [], edges))

    def test_missing_responsible_needs_decisions(self):
        profile = make_profile(has_responsible=False)
        assert "G-01" not in _ids(detect(profile))

    def test_absent_fallback_is_not_false(self, minimal_profile):
        nodes = [make_node("api", "AI", is_external=True), make_node("u", "HUMAN")]
        edges = [make_edge("DECISION", "api", "u")]
        assert "E-01" not in _ids(detect(minimal_profile, nodes, edges))


class TestDetectorMechanics:

    def test_severity_clamped_to_five(self, minimal_profile):
        rule = _rule(
            severity_base=5,
            aggravating=(SeverityFactor("a", +1, lambda ctx: True), SeverityFactor("b", +1, lambda ctx: True)),
        )
        [tension] = TensionDetector([rule]).detect(minimal_profile)
        assert tension.severity == 5

    def test_severity_clamped_to_one(self, minimal_profile):
        rule = _rule(severity_base=1, mitigating=(SeverityFactor("m", -1, lambda ctx: True),))
        [tension] = TensionDetector([rule]).detect(minimal_profile)
        assert tension.severity == 1

    def test_related_edges_deduplicated(self, minimal_profile):
        e1 = make_edge(edge_id="e1", source_id="a", target_id="b")
        e2 = make_edge(edge_id="e2", source_id="b", target_id="c")
        nodes = [make_node("a"), make_node("b")]
        rule = _rule(related_edges=lambda ctx: [e2, e1, e2])
        [tension] = TensionDetector([rule]).detect(minimal_profile, nodes, [e1, e2])
        assert tension.related_edge_ids == ["e2", "e1"]
        # "c" is not a known node
        assert tension.related_node_ids == ["b", "a"]

    def test_pattern_defaults_fill_actions_and_questions(self, minimal_profile):
        rule = _rule(pattern_id="SECURITY_VS_PRIVACY")
        [tension] = TensionDetector([rule]).detect(minimal_profile)
        pattern = get_pattern("SECURITY_VS_PRIVACY")
        assert tension.suggested_actions == list(pattern.default_actions)
        assert tension.questions == list(pattern.arbitration_questions)

    def test_failing_rule_is_isolated(self, minimal_profile):
        rules = [
            _rule("X-01", predicate=lambda ctx: 1 / 0),
            _rule("X-02"),
        ]
        with capture_logs() as logs:
            report = TensionDetector(rules).detect_with_report(minimal_profile)

        assert _ids(report.tensions) == ["X-02"]
        assert report.failed_rule_ids == ["X-01"]
        error = report.errors[0]
        assert error.stage == "predicate"
        assert isinstance(error.cause, ZeroDivisionError)
        assert error.code == ErrorCode.RULE_EVALUATION_FAILED

        failures = [e for e in logs if e["event"] == "rule_evaluation_failed"]
        assert failures[0]["rule_id"] == "X-01"
        assert failures[0]["log_level"] == "warning"

    def test_failing_selector_reports_stage(self, minimal_profile):
        rule = _rule(related_edges=lambda ctx: [][0])
        report = TensionDetector([rule]).detect_with_report(minimal_profile)
        assert report.tensions == []
        assert report.errors[0].stage == "related_edges"

    def test_failing_severity_factor_reports_stage(self, minimal_profile):
        rule = _rule(aggravating=(SeverityFactor("bad", +1, lambda ctx: {}["x"]),))
        report = TensionDetector([rule]).detect_with_report(minimal_profile)
        assert report.errors[0].stage == "severity"

    def test_invalid_rule_metadata_reports_build_stage(self, critical_profile):
        broken = _rule("X-01", domain_a=None)
        report = TensionDetector((broken,) + RULES).detect_with_report(critical_profile)

        assert {"C-01", "C-03"} <= set(_ids(report.tensions))
        assert report.failed_rule_ids == ["X-01"]
        assert report.errors[0].stage == "build"

    def test_non_integer_severity_reports_build_stage(self, minimal_profile):
        rules = [_rule("X-01", severity_base="high"), _rule("X-02")]
        report = TensionDetector(rules).detect_with_report(minimal_profile)
        assert _ids(report.tensions) == ["X-02"]
        assert report.errors[0].stage == "build"

    def test_detection_is_deterministic(self, critical_profile, scoring_graph):
        nodes, edges = scoring_graph
        first = detect(critical_profile, nodes, edges)
        second = detect(critical_profile, nodes, edges)
        assert [t.model_dump() for t in first] == [t.model_dump() for t in second]

    def test_completion_is_logged(self, critical_profile):
        with capture_logs() as logs:
            detect(critical_profile)
        done = [e for e in logs if e["event"] == "tension_detection_complete"]
        assert done[0]["tensions_detected"] == 4


class TestDeduplicateByRule:

    def test_drops_persisted_rule_ids(self, critical_profile):
        fresh = deduplicate_by_rule(detect(critical_profile), existing_rule_ids=["C-01", "C-06"])
        assert _ids(fresh) == ["C-02", "C-03"]

    def test_drops_repeats_within_batch(self, critical_profile):
        detected = detect(critical_profile)
        assert _ids(deduplicate_by_rule(detected + detected)) == _ids(detected)

    @pytest.mark.parametrize("existing", [(), ["UNKNOWN"]])
    def test_nothing_dropped_without_overlap(self, critical_profile, existing):
        detected = detect(critical_profile)
        assert len(deduplicate_by_rule(detected, existing)) == len(detected)
