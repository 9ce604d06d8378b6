"""
Rule Catalog Tests.

The catalog is static; these tests guard its invariants rather than the
behaviour of individual rules.
"""

from etica.detection import RULES, get_rule, list_rules
from etica.domains import PATTERN_IDS, is_domain
from etica.schemas.enums import Confidence, RuleFamily

FAMILY_ORDER = [
    RuleFamily.CONTEXTUAL,
    RuleFamily.DATA,
    RuleFamily.STRUCTURAL,
    RuleFamily.DEPENDENCY,
    RuleFamily.GOVERNANCE,
]


class TestRuleCatalog:

    def test_rule_ids_are_unique(self):
        ids = [r.id for r in RULES]
        assert len(ids) == len(set(ids))

    def test_families_in_evaluation_order(self):
        ranks = [FAMILY_ORDER.index(r.family) for r in RULES]
        assert ranks == sorted(ranks)

    def test_each_rule_names_two_distinct_known_domains(self):
        for rule in RULES:
            assert is_domain(rule.domain_a), rule.id
            assert is_domain(rule.domain_b), rule.id
            assert rule.domain_a != rule.domain_b, rule.id

    def test_base_severity_in_range(self):
        assert all(1 <= r.severity_base <= 5 for r in RULES)

    def test_confidence_is_a_known_tier(self):
        assert all(r.confidence in set(Confidence) for r in RULES)

    def test_patterns_exist(self):
        assert all(r.pattern_id in PATTERN_IDS for r in RULES)

    def test_get_rule(self):
        assert get_rule("C-01").name == "Fully automated decisions"
        assert get_rule("Z-99") is None

    def test_list_rules_has_no_callables(self):
        entries = list_rules()
        assert [e["id"] for e in entries] == [r.id for r in RULES]
        first = entries[0]
        assert first["domains"] == ["RECOURSE", "AUTONOMY"]
        assert first["aggravating"] == [("No recourse mechanism declared", 1)]
        assert not any(callable(v) for entry in entries for v in entry.values())
