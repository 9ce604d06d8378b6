"""
Reference Data Tests.

Domains, circles, tension patterns and ethical lenses are static; these
tests pin their shape and the lookups around them.
"""

import pytest

from etica.domains import (
    CIRCLES,
    DOMAIN_IDS,
    ETHICAL_DOMAINS,
    ETHICAL_LENSES,
    PATTERN_IDS,
    domains_by_circle,
    format_dilemma,
    get_domain,
    get_lens,
    get_pattern,
    is_domain,
)
from etica.domains.patterns import require_pattern
from etica.exceptions import ErrorCode, UnknownReferenceError
from etica.schemas.enums import Circle, EthicalDomain


class TestDomainCatalog:
    def test_twelve_domains_in_three_circles(self):
        assert len(DOMAIN_IDS) == 12
        assert set(DOMAIN_IDS) == {d.value for d in EthicalDomain}
        assert sum(len(c.domains) for c in CIRCLES.values()) == 12

    def test_each_circle_has_its_domains(self):
        assert len(domains_by_circle(Circle.PERSONS)) == 6
        assert len(domains_by_circle(Circle.ORGANIZATION)) == 3
        assert len(domains_by_circle(Circle.SOCIETY)) == 3

    def test_sub_dimension_weights_sum_to_one(self):
        for domain in ETHICAL_DOMAINS.values():
            total = sum(s.weight for s in domain.sub_dimensions)
            assert total == pytest.approx(1.0, abs=0.01), domain.id

    def test_lookup_is_case_insensitive(self):
        assert get_domain("recourse").id == EthicalDomain.RECOURSE
        assert is_domain("privacy")
        assert not is_domain("ACCOUNTABILITY")

    def test_unknown_domain_raises(self):
        with pytest.raises(UnknownReferenceError) as exc_info:
            get_domain("HAPPINESS")
        assert exc_info.value.code == ErrorCode.UNKNOWN_DOMAIN
        assert exc_info.value.to_dict()["details"]["identifier"] == "HAPPINESS"

    def test_format_dilemma(self):
        assert format_dilemma("RECOURSE", "AUTONOMY") == "Recourse ↔ Autonomy"


class TestPatterns:
    def test_other_is_always_available(self):
        assert "OTHER" in PATTERN_IDS

    def test_unknown_pattern_falls_back_to_other(self):
        assert get_pattern("NOT_A_PATTERN").id == "OTHER"

    def test_strict_lookup_raises(self):
        with pytest.raises(UnknownReferenceError) as exc_info:
            require_pattern("NOT_A_PATTERN")
        assert exc_info.value.code == ErrorCode.UNKNOWN_PATTERN

    def test_pattern_domains_are_known(self):
        for pattern_id in PATTERN_IDS:
            for domain in get_pattern(pattern_id).domains:
                assert is_domain(domain), (pattern_id, domain)


class TestLenses:
    def test_three_frameworks(self):
        assert set(ETHICAL_LENSES) == {"EU_TRUSTWORTHY_AI", "NIST_AI_RMF", "UNESCO_AI_ETHICS"}
        assert len(get_lens("EU_TRUSTWORTHY_AI").requirements) == 7
        assert len(get_lens("NIST_AI_RMF").requirements) == 4
        assert len(get_lens("UNESCO_AI_ETHICS").requirements) == 9

    def test_requirements_map_to_known_domains(self):
        for lens in ETHICAL_LENSES.values():
            for requirement in lens.requirements:
                assert requirement.mapped_domains
                assert all(is_domain(d) for d in requirement.mapped_domains)
                assert requirement.checklist

    def test_requirement_lookup(self):
        lens = get_lens("NIST_AI_RMF")
        assert lens.requirement("NIST-MAP").name == "Map"
        assert lens.requirement("NIST-UNKNOWN") is None

    def test_unknown_lens_raises(self):
        with pytest.raises(UnknownReferenceError) as exc_info:
            get_lens("ISO_42001")
        assert exc_info.value.code == ErrorCode.UNKNOWN_LENS
