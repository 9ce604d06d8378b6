"""
Tension Patterns — recurring ethical dilemmas.

A dilemma arises when a system simultaneously activates two legitimate
rights or values that pull in opposite directions. Every detection rule
points at one of these patterns; unknown ids resolve to ``OTHER``.
"""

from dataclasses import dataclass

from etica.exceptions import ErrorCode, UnknownReferenceError
from etica.schemas.enums import EthicalDomain as D


@dataclass(frozen=True)
class TensionPattern:
    id: str
    title: str
    description: str
    domains: tuple[str, ...]
    default_actions: tuple[str, ...] = ()
    arbitration_questions: tuple[str, ...] = ()


def _pattern(
    pid: str,
    title: str,
    description: str,
    domains: tuple[str, ...],
    actions: tuple[str, ...],
    questions: tuple[str, ...],
) -> tuple[str, TensionPattern]:
    return pid, TensionPattern(pid, title, description, domains, actions, questions)


TENSION_PATTERNS: dict[str, TensionPattern] = dict([
    _pattern(
        "SECURITY_VS_PRIVACY",
        "Security vs Privacy",
        "Protecting people against risks requires collection or monitoring that intrudes on their privacy.",
        (D.SECURITY, D.PRIVACY),
        ("TRANSPARENCY_NOTICE", "DATA_MINIMIZATION", "ACCESS_RIGHTS"),
        (
            "Is the monitoring proportionate to the risk?",
            "Do less intrusive alternatives exist?",
            "Is every collected item strictly necessary?",
            "Is a limited retention period enforced?",
        ),
    ),
    _pattern(
        "PERSONALIZATION_VS_AUTONOMY",
        "Personalization vs Autonomy",
        "Tailoring the service to user preferences can create filter bubbles and narrow freedom of discovery.",
        (D.AUTONOMY, D.PRIVACY),
        ("TRANSPARENCY_FACTORS", "USER_CONTROLS", "DIVERSE_OPTIONS"),
        (
            "Does personalization lock users into a bubble?",
            "Is diverse content offered?",
            "Can users control the level of personalization?",
            "Are personalization criteria transparent?",
        ),
    ),
    _pattern(
        "EFFICIENCY_VS_TRANSPARENCY",
        "Efficiency vs Transparency",
        "The best-performing models are often the least explainable.",
        (D.TRANSPARENCY, D.RECOURSE),
        ("EXPLAINABILITY_LAYER", "TRANSPARENCY_FACTORS", "HUMAN_REVIEW_THRESHOLD"),
        (
            "Does the performance gain justify the opacity?",
            "Can an explainability layer be added?",
            "Can high-impact cases be handled differently?",
            "Would a simpler model be acceptable?",
        ),
    ),
    _pattern(
        "PERFORMANCE_VS_EQUITY",
        "Performance vs Equity",
        "Optimising for performance can create or amplify discriminatory bias.",
        (D.EQUITY, D.RESPONSIBILITY),
        ("BIAS_TESTING", "FAIRNESS_METRICS", "REGULAR_AUDIT"),
        (
            "Have bias tests been run?",
            "Which fairness metric is prioritised?",
            "Is a performance/equity trade-off acceptable?",
            "Has the training data been corrected?",
        ),
    ),
    _pattern(
        "AUTOMATION_VS_RECOURSE",
        "Automation vs Recourse",
        "Fast automated decisions at scale can leave no room for individual contestation.",
        (D.RECOURSE, D.AUTONOMY),
        ("HUMAN_REVIEW_THRESHOLD", "APPEAL_PROCESS", "CONTACT_HUMAN"),
        (
            "Can every decision be contested?",
            "Can a human step in on request?",
            "Is the appeal delay reasonable?",
            "Does a contestation have a real chance of success?",
        ),
    ),
    _pattern(
        "PRECISION_VS_MINIMIZATION",
        "Precision vs Minimization",
        "Model quality may require more data than the minimisation principle allows.",
        (D.PRIVACY, D.RESPONSIBILITY),
        ("DATA_MINIMIZATION", "PURPOSE_LIMITATION", "RETENTION_POLICY"),
        (
            "Is each data item really useful to the model?",
            "Does the marginal gain justify more data?",
            "Are privacy-preserving techniques applicable?",
            "Is the user informed and consenting?",
        ),
    ),
    _pattern(
        "INNOVATION_VS_PRECAUTION",
        "Innovation vs Precaution",
        "Deploying new technologies can carry risks that are not yet identified.",
        (D.SECURITY, D.RESPONSIBILITY),
        ("STAGED_ROLLOUT", "MONITORING", "INCIDENT_PROCESS"),
        (
            "Have the risks been assessed in depth?",
            "Is a staged rollout planned?",
            "Do emergency stop mechanisms exist?",
            "Is post-deployment monitoring sufficient?",
        ),
    ),
    _pattern(
        "STANDARDIZATION_VS_SINGULARITY",
        "Standardization vs Singularity",
        "Uniform treatment can ignore the specific needs of some populations or situations.",
        (D.EQUITY, D.AUTONOMY),
        ("EXCEPTION_PROCESS", "ACCOMMODATION", "CASE_BY_CASE"),
        (
            "Does uniform treatment create de facto inequality?",
            "Are exceptions possible?",
            "Are special situations taken into account?",
            "Can the process adapt to context?",
        ),
    ),
    _pattern(
        "SPEED_VS_REFLECTION",
        "Speed vs Reflection",
        "Real-time decisions can prevent careful analysis of special cases.",
        (D.RECOURSE, D.RESPONSIBILITY),
        ("HUMAN_REVIEW_THRESHOLD", "OVERRIDE_CAPABILITY"),
        (
            "Is the speed really necessary?",
            "Can complex cases be put on hold?",
            "Is an after-the-fact review possible?",
            "Is the urgency real or artificial?",
        ),
    ),
    _pattern(
        "EXHAUSTIVITY_VS_OBLIVION",
        "Exhaustivity vs Oblivion",
        "Keeping historical data can conflict with the right to be forgotten and to a fresh start.",
        (D.PRIVACY, D.EQUITY),
        ("RETENTION_POLICY", "DATA_MINIMIZATION"),
        (
            "What retention period is justified?",
            "Is erasure actually possible?",
            "Can past mistakes be forgiven?",
        ),
    ),
    _pattern(
        "ACCESSIBILITY_VS_CONTROL",
        "Accessibility vs Control",
        "Opening data or algorithms can create security or abuse risks.",
        (D.TRANSPARENCY, D.SECURITY),
        ("TRANSPARENCY_NOTICE", "MONITORING"),
        (
            "What can be published without risk?",
            "How can gaming of the criteria be avoided?",
            "Can access be graded by audience?",
        ),
    ),
    _pattern(
        "PREDICTION_VS_FREEWILL",
        "Prediction vs Free Will",
        "Predictive systems can create self-fulfilling prophecies that lock people into their past.",
        (D.AUTONOMY, D.EQUITY),
        ("TRANSPARENCY_FACTORS", "APPEAL_PROCESS"),
        (
            "Does the prediction influence the outcome?",
            "Can the person escape the prediction?",
            "Do second-chance mechanisms exist?",
        ),
    ),
    _pattern(
        "PERSONALIZATION_VS_EQUALITY",
        "Personalization vs Equality",
        "Individually tailored treatment can create inequality between people in similar situations.",
        (D.EQUITY, D.TRANSPARENCY),
        ("TRANSPARENCY_NOTICE", "FAIRNESS_METRICS"),
        (
            "Is the differentiation objectively justified?",
            "Are similar people treated differently?",
            "Is a common baseline of service guaranteed?",
        ),
    ),
    _pattern(
        "CONFIDENTIALITY_VS_TRACEABILITY",
        "Confidentiality vs Traceability",
        "Anonymisation protects privacy but can prevent contesting and correcting errors.",
        (D.PRIVACY, D.RECOURSE),
        ("APPEAL_PROCESS",),
        (
            "Is anonymisation reversible when needed?",
            "Can a person find their own decision?",
            "Does contestation remain possible?",
        ),
    ),
    _pattern(
        "WELLBEING_VS_AUTONOMY",
        "Wellbeing vs Autonomy",
        "Protecting people from themselves can turn into paternalism that denies their agency.",
        (D.AUTONOMY, D.SECURITY),
        ("USER_CONTROLS", "TRANSPARENCY_NOTICE"),
        (
            "Is the intervention requested or imposed?",
            "Is the paternalism proportionate to the risk?",
            "Do opt-out options exist?",
        ),
    ),
    _pattern(
        "COLLECTIVE_VS_INDIVIDUAL",
        "Collective Interest vs Individual Rights",
        "Optimising for the common good can come at the expense of some individuals.",
        (D.EQUITY, D.AUTONOMY),
        ("TRANSPARENCY_NOTICE", "APPEAL_PROCESS"),
        (
            "Is the collective benefit proven and significant?",
            "Is the individual harm proportionate?",
            "Do safeguards against abuse exist?",
        ),
    ),
    _pattern(
        "EFFICIENCY_VS_PROTECTION",
        "Economic Efficiency vs Social Protection",
        "Cost optimisation can reduce access to services for less profitable populations.",
        (D.EQUITY, D.RECOURSE),
        ("APPEAL_PROCESS", "CONTACT_HUMAN"),
        (
            "Is the exclusion justified?",
            "Are alternatives offered to those excluded?",
            "Is a minimum universal service guaranteed?",
        ),
    ),
    _pattern(
        "OTHER",
        "Other tension",
        "Specific tension not covered by the standard patterns.",
        (),
        (),
        (),
    ),
])

PATTERN_IDS: tuple[str, ...] = tuple(TENSION_PATTERNS)


def get_pattern(pattern_id: str) -> TensionPattern:
    """Lenient lookup: unknown ids fall back to ``OTHER``."""
    return TENSION_PATTERNS.get(pattern_id, TENSION_PATTERNS["OTHER"])


def require_pattern(pattern_id: str) -> TensionPattern:
    if pattern_id not in TENSION_PATTERNS:
        raise UnknownReferenceError("pattern", pattern_id, code=ErrorCode.UNKNOWN_PATTERN)
    return TENSION_PATTERNS[pattern_id]
