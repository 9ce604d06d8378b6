"""
Ethical Lenses — external frameworks mapped onto the twelve domains.

Each lens requirement lists the domains it is about; the framework
coverage checker (``etica.scoring.frameworks``) scores a set of detected
tensions against these mappings.
"""

from dataclasses import dataclass

from etica.exceptions import ErrorCode, UnknownReferenceError
from etica.schemas.enums import EthicalDomain as D


@dataclass(frozen=True)
class LensRequirement:
    id: str
    name: str
    description: str
    mapped_domains: tuple[str, ...]
    checklist: tuple[str, ...]


@dataclass(frozen=True)
class EthicalLens:
    id: str
    name: str
    source: str
    version: str
    requirements: tuple[LensRequirement, ...]

    def requirement(self, requirement_id: str) -> LensRequirement | None:
        return next((r for r in self.requirements if r.id == requirement_id), None)


# ── EU Trustworthy AI Guidelines (7 key requirements) ─────────────────

EU_TRUSTWORTHY_AI = EthicalLens(
    id="EU_TRUSTWORTHY_AI",
    name="EU Trustworthy AI Guidelines",
    source="European Commission High-Level Expert Group on AI",
    version="2019",
    requirements=(
        LensRequirement(
            "EU-1", "Human agency and oversight",
            "AI systems should support human autonomy and decision-making, with appropriate oversight mechanisms",
            (D.AUTONOMY, D.MASTERY, D.RECOURSE),
            (
                "Can users understand the system's decisions?",
                "Is there a human oversight mechanism?",
                "Can affected people contest decisions?",
                "Does the system respect users' autonomy?",
            ),
        ),
        LensRequirement(
            "EU-2", "Technical robustness and safety",
            "AI systems should be resilient, secure, and safe throughout their lifecycle",
            (D.SECURITY, D.MASTERY),
            (
                "Is the system resilient to attacks?",
                "Is there a recovery plan in case of failure?",
                "Is performance monitored?",
                "Has the system been thoroughly tested?",
            ),
        ),
        LensRequirement(
            "EU-3", "Privacy and data governance",
            "Ensuring privacy and data protection throughout the system lifecycle",
            (D.PRIVACY, D.SOVEREIGNTY),
            (
                "Is data collection minimised?",
                "Is consent properly obtained?",
                "Is the data secured?",
                "Does the system comply with the GDPR?",
            ),
        ),
        LensRequirement(
            "EU-4", "Transparency",
            "The data, system and business models should be transparent",
            (D.TRANSPARENCY,),
            (
                "Can the system's behaviour be explained?",
                "Are users told they are interacting with an AI?",
                "Is the data used documented?",
                "Can decisions be traced?",
            ),
        ),
        LensRequirement(
            "EU-5", "Diversity, non-discrimination and fairness",
            "AI systems should avoid unfair bias and ensure fairness",
            (D.EQUITY, D.SOCIETAL_BALANCE),
            (
                "Have bias audits been carried out?",
                "Does the system treat all groups fairly?",
                "Is the training data representative?",
                "Are corrective measures in place?",
            ),
        ),
        LensRequirement(
            "EU-6", "Societal and environmental wellbeing",
            "AI systems should benefit all, including future generations",
            (D.SUSTAINABILITY, D.SOCIETAL_BALANCE, D.LOYALTY),
            (
                "Is the environmental impact measured?",
                "Does the system contribute to the common good?",
                "Are negative externalities minimised?",
                "Has the social impact been assessed?",
            ),
        ),
        LensRequirement(
            "EU-7", "Accountability",
            "Mechanisms should be in place to ensure accountability",
            (D.RESPONSIBILITY, D.RECOURSE),
            (
                "Is an owner clearly identified?",
                "Are audits carried out regularly?",
                "Are incidents documented and analysed?",
                "Is there a recourse mechanism?",
            ),
        ),
    ),
)


# ── NIST AI Risk Management Framework ─────────────────────────────────

NIST_AI_RMF = EthicalLens(
    id="NIST_AI_RMF",
    name="NIST AI Risk Management Framework",
    source="National Institute of Standards and Technology",
    version="1.0 (2023)",
    requirements=(
        LensRequirement(
            "NIST-GOVERN", "Govern",
            "Cultivate a culture of risk management within organizations",
            (D.RESPONSIBILITY, D.MASTERY),
            (
                "Does an AI governance policy exist?",
                "Are roles and responsibilities defined?",
                "Is the risk management framework documented?",
                "Are teams trained?",
            ),
        ),
        LensRequirement(
            "NIST-MAP", "Map",
            "Establish context to understand AI system risks",
            (D.TRANSPARENCY, D.MASTERY),
            (
                "Are stakeholders identified?",
                "Is the system perimeter documented?",
                "Are data and models inventoried?",
                "Are potential risks mapped?",
            ),
        ),
        LensRequirement(
            "NIST-MEASURE", "Measure",
            "Employ quantitative and qualitative methods to analyze, assess, and track AI risks",
            (D.TRANSPARENCY, D.EQUITY, D.SECURITY),
            (
                "Are performance metrics defined?",
                "Is bias measured quantitatively?",
                "Is model drift monitored?",
                "Are incidents counted?",
            ),
        ),
        LensRequirement(
            "NIST-MANAGE", "Manage",
            "Allocate risk resources and implement plans to respond to, recover from, and communicate about risks",
            (D.SECURITY, D.RESPONSIBILITY, D.RECOURSE),
            (
                "Does a risk response plan exist?",
                "Are resources allocated?",
                "Is a communication plan in place?",
                "Are periodic reviews scheduled?",
            ),
        ),
    ),
)


# ── UNESCO Recommendation on the Ethics of AI ─────────────────────────

UNESCO_AI_ETHICS = EthicalLens(
    id="UNESCO_AI_ETHICS",
    name="UNESCO Recommendation on AI Ethics",
    source="UNESCO",
    version="2021",
    requirements=(
        LensRequirement(
            "UNESCO-1", "Proportionality and Do No Harm",
            "AI system methods should be appropriate and proportional to achieve legitimate aims",
            (D.SECURITY, D.EQUITY, D.AUTONOMY),
            (
                "Is the use of AI proportionate to the aim?",
                "Are the risks of harm assessed?",
                "Were less intrusive alternatives considered?",
                "Are negative impacts minimised?",
            ),
        ),
        LensRequirement(
            "UNESCO-2", "Safety and Security",
            "Unwanted harms should be avoided and addressed throughout the AI lifecycle",
            (D.SECURITY, D.MASTERY),
            (
                "Are vulnerabilities identified?",
                "Are security measures in place?",
                "Is the system resilient?",
                "Does a continuity plan exist?",
            ),
        ),
        LensRequirement(
            "UNESCO-3", "Right to Privacy",
            "Privacy must be protected and promoted throughout the AI lifecycle",
            (D.PRIVACY,),
            (
                "Is privacy protected by design?",
                "Is data collection minimised?",
                "Is consent informed?",
                "Is data anonymised where possible?",
            ),
        ),
        LensRequirement(
            "UNESCO-4", "Human Oversight and Determination",
            "Humans can choose to delegate tasks to AI systems while retaining the ability to override",
            (D.AUTONOMY, D.MASTERY, D.RECOURSE),
            (
                "Can a human override decisions?",
                "Is oversight effective?",
                "Is human control maintained?",
                "Can the system be switched off?",
            ),
        ),
        LensRequirement(
            "UNESCO-5", "Transparency and Explainability",
            "AI systems should be transparent and explainable to the degree possible",
            (D.TRANSPARENCY,),
            (
                "Is the system explainable?",
                "Are decisions traceable?",
                "Is the information accessible?",
                "Are limitations communicated?",
            ),
        ),
        LensRequirement(
            "UNESCO-6", "Responsibility and Accountability",
            "AI actors should be accountable for the proper functioning of AI systems",
            (D.RESPONSIBILITY, D.RECOURSE),
            (
                "Are responsibilities clear?",
                "Does a recourse mechanism exist?",
                "Are decisions auditable?",
                "Are incidents handled?",
            ),
        ),
        LensRequirement(
            "UNESCO-7", "Inclusiveness and Diversity",
            "AI systems should promote diversity and not create or exacerbate divides",
            (D.EQUITY, D.SOCIETAL_BALANCE),
            (
                "Is the system accessible to everyone?",
                "Are biases detected and corrected?",
                "Is diversity taken into account?",
                "Are inequalities reduced?",
            ),
        ),
        LensRequirement(
            "UNESCO-8", "Environmental and Societal Wellbeing",
            "AI actors should minimize environmental impact and promote sustainable development",
            (D.SUSTAINABILITY, D.SOCIETAL_BALANCE, D.LOYALTY),
            (
                "Is the environmental footprint measured?",
                "Is sustainable development promoted?",
                "Is the social impact positive?",
                "Are future generations considered?",
            ),
        ),
        LensRequirement(
            "UNESCO-9", "Data Governance",
            "Data collection and use should follow ethical principles",
            (D.PRIVACY, D.SOVEREIGNTY, D.TRANSPARENCY),
            (
                "Is data quality ensured?",
                "Is data provenance documented?",
                "Is the data lifecycle managed?",
                "Are data rights respected?",
            ),
        ),
    ),
)


ETHICAL_LENSES: dict[str, EthicalLens] = {
    lens.id: lens for lens in (EU_TRUSTWORTHY_AI, NIST_AI_RMF, UNESCO_AI_ETHICS)
}


def get_lens(lens_id: str) -> EthicalLens:
    if lens_id not in ETHICAL_LENSES:
        raise UnknownReferenceError("lens", lens_id, code=ErrorCode.UNKNOWN_LENS)
    return ETHICAL_LENSES[lens_id]
