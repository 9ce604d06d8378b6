"""
Detection Summary Tests.
"""

import pytest

from conftest import make_profile
from etica.detection import detect, detection_stats, metadata_risk_summary, summarize


class TestMetadataRiskSummary:

    def test_quiet_profile_is_low(self, minimal_profile):
        summary = metadata_risk_summary(minimal_profile)
        assert summary.level == "LOW"
        assert summary.factors == []

    @pytest.mark.parametrize(
        "overrides,level",
        [
            ({"decision_type": "AUTO_DECISION"}, "MEDIUM"),
            ({"decision_type": "AUTO_DECISION", "has_vulnerable": True, "user_scale": "LARGE"}, "HIGH"),
            (
                {
                    "decision_type": "AUTO_DECISION",
                    "has_vulnerable": True,
                    "user_scale": "VERY_LARGE",
                    "data_types": ["Health"],
                },
                "CRITICAL",
            ),
        ],
    )
    def test_levels(self, overrides, level):
        assert metadata_risk_summary(make_profile(**overrides)).level == level

    def test_public_sector_counts(self):
        summary = metadata_risk_summary(make_profile(sector="ADMINISTRATION"))
        assert summary.factors == ["Sensitive public sector"]


class TestDetectionStats:

    def test_empty(self):
        stats = detection_stats([])
        assert stats.total == 0
        assert set(stats.by_family) == {"CONTEXTUAL", "DATA", "STRUCTURAL", "DEPENDENCY", "GOVERNANCE"}
        assert all(v == 0 for v in stats.by_family.values())
        assert stats.top_domain_pairs == []

    def test_counts(self, critical_profile):
        stats = detection_stats(detect(critical_profile))
        assert stats.total == 4
        assert stats.by_family["CONTEXTUAL"] == 4
        # C-01 and C-03 are 4, C-02 and C-06 are 3
        assert stats.by_severity.high == 2
        assert stats.by_severity.medium == 2
        assert stats.by_domain["EQUITY"] == 2
        assert stats.by_domain["RESPONSIBILITY"] == 2
        assert stats.top_domain_pairs[0].domain_a == "RECOURSE"


class TestSummarize:

    def test_no_tensions(self):
        assert summarize([]).startswith("No major ethical tension detected")

    def test_with_tensions(self, critical_profile):
        text = summarize(detect(critical_profile))
        assert text.startswith("4 ethical tension(s) detected, 2 of which to address first.")
        assert "Most affected domains:" in text
