"""
End-to-end Scenarios.

Detector output is persisted the way a caller would (``Tension.from_detected``)
and fed back to the scorer together with actions.
"""

import pytest

from conftest import make_action, make_edge, make_profile
from etica import detect, score
from etica.scoring import VigilanceScorer
from etica.schemas import Tension


def _persist(detected) -> list[Tension]:
    return [Tension.from_detected(t, tension_id=f"t-{t.rule_id}") for t in detected]


class TestAutomatedDecisionOnVulnerablePeople:
    """Auto decisions, vulnerable people, large scale, no graph yet."""

    def test_detects_recourse_and_vulnerability_rules(self, critical_profile):
        detected = detect(critical_profile)
        rule_ids = {t.rule_id for t in detected}
        assert {"C-01", "C-03"} <= rule_ids
        c01 = next(t for t in detected if t.rule_id == "C-01")
        assert {c01.domain_a, c01.domain_b} == {"RECOURSE", "AUTONOMY"}

    def test_exposure_and_global_level(self, critical_profile):
        result = score(critical_profile)
        for domain in ("RECOURSE", "AUTONOMY", "EQUITY"):
            assert result.domain(domain).exposure > 0
        assert result.global_exposure == pytest.approx(713.5 / 12)
        assert result.global_exposure_level >= 3

    def test_unhandled_findings_raise_residual(self, critical_profile):
        tensions = _persist(detect(critical_profile))
        result = score(critical_profile, [], tensions)
        assert result.tension_count == 4
        recourse = result.domain("RECOURSE")
        assert recourse.coverage == 0.0
        assert recourse.score == pytest.approx(72.0)
        assert recourse.level == 4


class TestDoneActionCoversItsTension:

    def test_recourse_residual_drops(self, critical_profile):
        tensions = _persist(detect(critical_profile))
        actions = [make_action("a1", "DONE", tension_id="t-C-01")]
        recourse = score(critical_profile, [], tensions, actions).domain("RECOURSE")
        assert recourse.coverage == 1.0
        assert recourse.score == pytest.approx(recourse.exposure * 0.3)
        assert recourse.score == pytest.approx(21.6)

    def test_other_domains_untouched(self, critical_profile):
        tensions = _persist(detect(critical_profile))
        actions = [make_action("a1", "DONE", tension_id="t-C-01")]
        # AUTONOMY is also impacted by C-06, which has no action
        autonomy = score(critical_profile, [], tensions, actions).domain("AUTONOMY")
        assert autonomy.coverage == pytest.approx(0.5)


class TestInformativeTinySystem:

    def test_nothing_detected_and_level_one(self):
        profile = make_profile(decision_type="INFORMATIVE", user_scale="TINY", has_vulnerable=False)
        assert detect(profile) == []
        result = score(profile)
        assert max(d.exposure for d in result.by_domain.values()) <= 5.0
        assert result.global_level == 1
        assert result.global_exposure_level == 1


class TestOpacityRaisesTransparencyExposure:

    @pytest.mark.parametrize("nature", ["DECISION", "INFERENCE", "RECOMMENDATION"])
    def test_opaque_flow_weighs_more(self, nature):
        scorer = VigilanceScorer()
        opaque = make_edge(nature, sensitivity="HIGHLY_SENSITIVE", opacity=5)
        clear = make_edge(nature, sensitivity="HIGHLY_SENSITIVE", opacity=1)
        assert scorer.flow_exposure([opaque], "TRANSPARENCY") > scorer.flow_exposure([clear], "TRANSPARENCY")

    def test_components(self):
        scorer = VigilanceScorer()
        opaque = make_edge("DECISION", sensitivity="HIGHLY_SENSITIVE", opacity=5)
        clear = make_edge("DECISION", sensitivity="HIGHLY_SENSITIVE", opacity=1)
        assert scorer.flow_exposure([opaque], "TRANSPARENCY") == pytest.approx(0.10)
        assert scorer.flow_exposure([clear], "TRANSPARENCY") == pytest.approx(0.06)

    def test_visible_in_domain_score(self, minimal_profile):
        opaque = make_edge("DECISION", sensitivity="HIGHLY_SENSITIVE", opacity=5)
        clear = make_edge("DECISION", sensitivity="HIGHLY_SENSITIVE", opacity=1)
        high = score(minimal_profile, [opaque]).domain("TRANSPARENCY").exposure
        low = score(minimal_profile, [clear]).domain("TRANSPARENCY").exposure
        assert high - low == pytest.approx(4.0)
