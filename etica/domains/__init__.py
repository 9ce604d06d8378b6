"""Static reference data: domains, tension patterns and ethical lenses."""

from etica.domains.catalog import (
    CIRCLES,
    DOMAIN_IDS,
    ETHICAL_DOMAINS,
    DomainDefinition,
    domains_by_circle,
    format_dilemma,
    get_domain,
    is_domain,
)
from etica.domains.lenses import ETHICAL_LENSES, EthicalLens, LensRequirement, get_lens
from etica.domains.patterns import PATTERN_IDS, TENSION_PATTERNS, TensionPattern, get_pattern

__all__ = [
    "CIRCLES",
    "DOMAIN_IDS",
    "ETHICAL_DOMAINS",
    "DomainDefinition",
    "domains_by_circle",
    "format_dilemma",
    "get_domain",
    "is_domain",
    "ETHICAL_LENSES",
    "EthicalLens",
    "LensRequirement",
    "get_lens",
    "PATTERN_IDS",
    "TENSION_PATTERNS",
    "TensionPattern",
    "get_pattern",
]
