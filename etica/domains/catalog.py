"""
Ethical Domains — the twelve vigilance domains in three circles.

Static reference data. ``DOMAIN_IDS`` fixes the iteration order used
everywhere scores are listed.
"""

from dataclasses import dataclass

from etica.exceptions import UnknownReferenceError
from etica.schemas.enums import Circle, EthicalDomain


@dataclass(frozen=True)
class SubDimension:
    id: str
    label: str
    weight: float


@dataclass(frozen=True)
class DomainDefinition:
    id: EthicalDomain
    name: str
    circle: Circle
    key_question: str
    description: str
    sub_dimensions: tuple[SubDimension, ...]


@dataclass(frozen=True)
class CircleDefinition:
    id: Circle
    name: str
    domains: tuple[EthicalDomain, ...]


def _even(*items: tuple[str, str]) -> tuple[SubDimension, ...]:
    """Sub-dimensions sharing the weight equally."""
    weight = round(1.0 / len(items), 4)
    return tuple(SubDimension(id=i, label=label, weight=weight) for i, label in items)


# ── Circles ────────────────────────────────────────────────────────────

CIRCLES: dict[Circle, CircleDefinition] = {
    Circle.PERSONS: CircleDefinition(
        id=Circle.PERSONS,
        name="Persons",
        domains=(
            EthicalDomain.PRIVACY,
            EthicalDomain.EQUITY,
            EthicalDomain.TRANSPARENCY,
            EthicalDomain.AUTONOMY,
            EthicalDomain.SECURITY,
            EthicalDomain.RECOURSE,
        ),
    ),
    Circle.ORGANIZATION: CircleDefinition(
        id=Circle.ORGANIZATION,
        name="Organization",
        domains=(
            EthicalDomain.MASTERY,
            EthicalDomain.RESPONSIBILITY,
            EthicalDomain.SOVEREIGNTY,
        ),
    ),
    Circle.SOCIETY: CircleDefinition(
        id=Circle.SOCIETY,
        name="Society",
        domains=(
            EthicalDomain.SUSTAINABILITY,
            EthicalDomain.LOYALTY,
            EthicalDomain.SOCIETAL_BALANCE,
        ),
    ),
}


# ── Domains ────────────────────────────────────────────────────────────

ETHICAL_DOMAINS: dict[EthicalDomain, DomainDefinition] = {
    # Circle 1: persons
    EthicalDomain.PRIVACY: DomainDefinition(
        id=EthicalDomain.PRIVACY,
        name="Privacy",
        circle=Circle.PERSONS,
        key_question="Is personal data protected?",
        description="Protection of personal data, minimisation, consent",
        sub_dimensions=_even(
            ("data_minimization", "Data minimisation"),
            ("consent", "Informed consent"),
            ("access_rights", "Access, rectification and erasure rights"),
            ("profiling_protection", "Protection against profiling"),
            ("transfer_security", "Transfer security"),
        ),
    ),
    EthicalDomain.EQUITY: DomainDefinition(
        id=EthicalDomain.EQUITY,
        name="Equity",
        circle=Circle.PERSONS,
        key_question="Is everyone treated fairly?",
        description="Non-discrimination, absence of bias, equal access",
        sub_dimensions=_even(
            ("direct_discrimination", "No direct discrimination"),
            ("indirect_discrimination", "No indirect discrimination"),
            ("group_fairness", "Fairness between groups"),
            ("atypical_cases", "Handling of atypical cases"),
        ),
    ),
    EthicalDomain.TRANSPARENCY: DomainDefinition(
        id=EthicalDomain.TRANSPARENCY,
        name="Transparency",
        circle=Circle.PERSONS,
        key_question="Do people understand what is happening?",
        description="Disclosure of AI use, explanation of decisions, stated limitations",
        sub_dimensions=_even(
            ("ai_disclosure", "Disclosure of AI use"),
            ("criteria_explanation", "Explanation of criteria"),
            ("data_access", "Access to the data used"),
            ("limitations_communication", "Communication of limitations"),
        ),
    ),
    EthicalDomain.AUTONOMY: DomainDefinition(
        id=EthicalDomain.AUTONOMY,
        name="Autonomy",
        circle=Circle.PERSONS,
        key_question="Do people keep their freedom of choice?",
        description="Freedom of choice, right to refuse, available alternatives",
        sub_dimensions=_even(
            ("refusal_option", "Option to refuse"),
            ("alternatives", "Non-algorithmic alternatives"),
            ("no_manipulation", "No manipulation"),
            ("preference_respect", "Respect of preferences"),
        ),
    ),
    EthicalDomain.SECURITY: DomainDefinition(
        id=EthicalDomain.SECURITY,
        name="Security",
        circle=Circle.PERSONS,
        key_question="Does the system protect against harm?",
        description="Protection against errors, robustness, reliability",
        sub_dimensions=_even(
            ("error_protection", "Protection against errors"),
            ("attack_robustness", "Robustness against attacks"),
            ("result_reliability", "Reliability of results"),
            ("misuse_prevention", "Misuse prevention"),
        ),
    ),
    EthicalDomain.RECOURSE: DomainDefinition(
        id=EthicalDomain.RECOURSE,
        name="Recourse",
        circle=Circle.PERSONS,
        key_question="Can people contest and obtain redress?",
        description="Contestation procedure, human intervention, redress",
        sub_dimensions=_even(
            ("contestation_procedure", "Contestation procedure"),
            ("human_intervention", "Human intervention available"),
            ("response_time", "Reasonable response time"),
            ("effective_remedy", "Effective remedy"),
        ),
    ),
    # Circle 2: organization
    EthicalDomain.MASTERY: DomainDefinition(
        id=EthicalDomain.MASTERY,
        name="Mastery",
        circle=Circle.ORGANIZATION,
        key_question="Do you understand and control your system?",
        description="Technical understanding, ability to modify, traceability",
        sub_dimensions=_even(
            ("technical_understanding", "Technical understanding"),
            ("modification_capability", "Ability to modify"),
            ("decision_traceability", "Decision traceability"),
            ("internal_skills", "Internal skills"),
        ),
    ),
    EthicalDomain.RESPONSIBILITY: DomainDefinition(
        id=EthicalDomain.RESPONSIBILITY,
        name="Responsibility",
        circle=Circle.ORGANIZATION,
        key_question="Are responsibilities clear?",
        description="Named owner, chain of liability, escalation",
        sub_dimensions=_even(
            ("owner_identification", "Named owner"),
            ("liability_chain", "Chain of liability"),
            ("escalation_process", "Escalation process"),
            ("management_commitment", "Management commitment"),
        ),
    ),
    EthicalDomain.SOVEREIGNTY: DomainDefinition(
        id=EthicalDomain.SOVEREIGNTY,
        name="Sovereignty",
        circle=Circle.ORGANIZATION,
        key_question="Are you independent from your providers?",
        description="Dependence on external APIs, data location, reversibility",
        sub_dimensions=_even(
            ("provider_dependency", "Provider dependence"),
            ("data_location", "Data location"),
            ("switch_capability", "Ability to switch"),
            ("evolution_control", "Control over evolutions"),
        ),
    ),
    # Circle 3: society
    EthicalDomain.SUSTAINABILITY: DomainDefinition(
        id=EthicalDomain.SUSTAINABILITY,
        name="Sustainability",
        circle=Circle.SOCIETY,
        key_question="Is the environmental and social impact under control?",
        description="Carbon footprint, employment impact, digital sobriety",
        sub_dimensions=_even(
            ("energy_consumption", "Energy consumption"),
            ("carbon_footprint", "Carbon footprint"),
            ("employment_impact", "Employment impact"),
            ("digital_sobriety", "Digital sobriety"),
        ),
    ),
    EthicalDomain.LOYALTY: DomainDefinition(
        id=EthicalDomain.LOYALTY,
        name="Loyalty",
        circle=Circle.SOCIETY,
        key_question="Are stakeholder relationships balanced?",
        description="Partner transparency, value sharing, keeping commitments",
        sub_dimensions=_even(
            ("partner_transparency", "Partner transparency"),
            ("value_sharing", "Value sharing"),
            ("commitment_respect", "Keeping commitments"),
            ("risk_communication", "Risk communication"),
        ),
    ),
    EthicalDomain.SOCIETAL_BALANCE: DomainDefinition(
        id=EthicalDomain.SOCIETAL_BALANCE,
        name="Societal Balance",
        circle=Circle.SOCIETY,
        key_question="Does the system contribute positively to society?",
        description="Concentration of power, effects on inequality, common good",
        sub_dimensions=_even(
            ("power_concentration", "Concentration of power"),
            ("competition_effects", "Effects on competition"),
            ("inequality_impact", "Impact on inequality"),
            ("common_good", "Contribution to the common good"),
        ),
    ),
}

DOMAIN_IDS: tuple[str, ...] = tuple(d.value for d in ETHICAL_DOMAINS)


# ── Lookups ────────────────────────────────────────────────────────────


def is_domain(domain_id: str) -> bool:
    return domain_id.upper() in DOMAIN_IDS


def get_domain(domain_id: str) -> DomainDefinition:
    """Strict lookup; raises ``UnknownReferenceError`` outside the twelve domains."""
    key = domain_id.upper()
    if key not in DOMAIN_IDS:
        raise UnknownReferenceError("domain", domain_id)
    return ETHICAL_DOMAINS[EthicalDomain(key)]


def domains_by_circle(circle: str) -> list[DomainDefinition]:
    return [d for d in ETHICAL_DOMAINS.values() if d.circle == circle]


def format_dilemma(domain_a: str, domain_b: str) -> str:
    """Human-readable dilemma label, e.g. ``"Recourse ↔ Autonomy"``."""
    return f"{get_domain(domain_a).name} ↔ {get_domain(domain_b).name}"
