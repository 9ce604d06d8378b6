"""
Detection Rules — the fixed, ordered rule catalog.

Each rule is an independent predicate over a ``DetectionContext`` plus
static metadata: the tension pattern it points at, one pair of impacted
domains, a base severity and a design-time confidence tier. Selectors
return the edges/nodes that triggered the rule; severity factors shift the
base severity up (aggravating) or down (mitigating).

Order:
    CONTEXTUAL  (C-xx) profile metadata only
    DATA        (D-xx) flow natures, sensitivity, categories, dimensions
    STRUCTURAL  (S-xx) graph shape
    DEPENDENCY  (E-xx) external components
    GOVERNANCE  (G-xx) organisation around the system
"""

from dataclasses import dataclass
from typing import Any, Callable, Optional

from etica.detection.context import (
    AUTO_LEVELS,
    BEHAVIORAL_DATA_TYPES,
    BIOMETRIC_DATA_TYPES,
    FINANCIAL_DATA_TYPES,
    MINOR_KEYWORDS,
    SENSITIVE_DATA_TYPES,
    SENSITIVE_LEVELS,
    WORKER_KEYWORDS,
    DetectionContext,
)
from etica.schemas.enums import (
    AutomationLevel,
    Confidence,
    DecisionType,
    EthicalDomain as D,
    FlowNature,
    NodeType,
    RuleFamily,
    Sector,
    Sensitivity,
    UserScale,
)
from etica.schemas.graph import Edge, Node

Predicate = Callable[[DetectionContext], bool]
EdgeSelector = Callable[[DetectionContext], list[Edge]]
NodeSelector = Callable[[DetectionContext], list[Node]]


@dataclass(frozen=True)
class SeverityFactor:
    """A condition that shifts severity by ``modifier`` when it applies."""
    label: str
    modifier: int
    applies: Predicate


@dataclass(frozen=True)
class DetectionRule:
    id: str
    pattern_id: str
    name: str
    family: str
    domain_a: str
    domain_b: str
    severity_base: int
    confidence: str
    predicate: Predicate
    description: str = ""
    related_edges: Optional[EdgeSelector] = None
    related_nodes: Optional[NodeSelector] = None      # None: endpoints of related edges
    aggravating: tuple[SeverityFactor, ...] = ()
    mitigating: tuple[SeverityFactor, ...] = ()
    suggested_actions: tuple[str, ...] = ()           # Empty: pattern defaults
    questions: tuple[str, ...] = ()                   # Empty: pattern defaults

    def describe(self) -> dict[str, Any]:
        """Catalog entry without the callables."""
        return {
            "id": self.id,
            "pattern_id": self.pattern_id,
            "name": self.name,
            "family": str(self.family),
            "domains": [str(self.domain_a), str(self.domain_b)],
            "severity_base": self.severity_base,
            "confidence": str(self.confidence),
            "description": self.description,
            "aggravating": [(f.label, f.modifier) for f in self.aggravating],
            "mitigating": [(f.label, f.modifier) for f in self.mitigating],
        }


# ── Shared selectors and conditions ───────────────────────────────────

PUBLIC_SECTORS = (Sector.JUSTICE, Sector.ADMINISTRATION)
SECURITY_SECTORS = (Sector.FINANCE, Sector.JUSTICE, Sector.SECURITY, Sector.ADMINISTRATION)
PERSONALIZATION_SECTORS = (Sector.COMMERCE, Sector.MARKETING, Sector.MEDIA)
LARGE_SCALES = (UserScale.LARGE, UserScale.VERY_LARGE)
DELEGATING_DECISIONS = (DecisionType.ASSISTED_DECISION, DecisionType.AUTO_DECISION)

PROFILING_CATEGORIES = ("behavior", "behavioral", "behaviour", "preferences", "inferred")
HEALTH_CATEGORIES = ("health", "medical", "biometric", "genetic")
PERSONAL_CATEGORIES = ("identifier", "health", "biometric", "judicial", "financial")
LLM_MODEL_TYPES = ("llm", "agent")
COMPUTE_MODEL_TYPES = ("llm", "ml_model")
OPAQUE_MODEL_TYPES = ("llm", "ml_model")
THIRD_PARTY_CATEGORIES = ("health", "biometric", "judicial", "financial")
OPERATOR_SUBTYPES = ("operator", "supervisor")
AFFECTED_SUBTYPES = ("subject", "population", "user")

CONCENTRATION_THRESHOLD = 3     # Decision flows on one component
HIGH_DEGREE = 5
CASCADE_MIN_DEPTH = 3
IRREVERSIBLE_THRESHOLD = 4
SUBCONTRACTING_DEPTH = 3        # Organisations in a chain before it aggravates


def _decision_edges(ctx: DetectionContext) -> list[Edge]:
    return ctx.decision_edges()


def _decision_or_recommendation(ctx: DetectionContext) -> list[Edge]:
    return ctx.edges_by_nature(FlowNature.DECISION, FlowNature.RECOMMENDATION)


def _automated_decisions(ctx: DetectionContext) -> list[Edge]:
    return [e for e in ctx.decision_edges() if e.automation in AUTO_LEVELS]


def _human_can_contest(ctx: DetectionContext) -> bool:
    return ctx.any_node_flag(NodeType.HUMAN, "can_contest")


def _ai_flag(flag: str) -> Predicate:
    return lambda ctx: ctx.any_node_flag(NodeType.AI, flag)


def _model_type(node: Node) -> str:
    value = node.attribute("model_type") or node.attribute("ai_subtype") or ""
    return str(value).lower()


def _external_ai(ctx: DetectionContext) -> list[Node]:
    return ctx.nodes_where(NodeType.AI, lambda n: n.flag("is_external"))


def _outside_eu(node: Optional[Node]) -> bool:
    return node is not None and str(node.attribute("location") or "").lower() == "outside_eu"


def _decision_is(*types: str) -> Predicate:
    return lambda ctx: ctx.profile.decision_type in types


# ── Family C: contextual rules (profile metadata) ─────────────────────


def _personalization_context(ctx: DetectionContext) -> bool:
    p = ctx.profile
    return ctx.has_data_type(BEHAVIORAL_DATA_TYPES) and (
        p.decision_type == DecisionType.RECOMMENDATION or p.sector in PERSONALIZATION_SECTORS
    )


def _multi_source_profiling(ctx: DetectionContext) -> bool:
    p = ctx.profile
    return (
        len(p.data_types) >= 4
        and ctx.has_data_type(BEHAVIORAL_DATA_TYPES)
        and p.decision_type != DecisionType.INFORMATIVE
    )


CONTEXTUAL_RULES: tuple[DetectionRule, ...] = (
    DetectionRule(
        id="C-01",
        pattern_id="AUTOMATION_VS_RECOURSE",
        name="Fully automated decisions",
        family=RuleFamily.CONTEXTUAL,
        domain_a=D.RECOURSE,
        domain_b=D.AUTONOMY,
        severity_base=4,
        confidence=Confidence.HIGH,
        description="The system decides without human intervention; affected people may have no way to contest.",
        predicate=_decision_is(DecisionType.AUTO_DECISION),
        related_edges=_decision_edges,
        aggravating=(
            SeverityFactor(
                "No recourse mechanism declared", +1,
                lambda ctx: ctx.profile.has_recourse_mechanism is False,
            ),
        ),
        mitigating=(SeverityFactor("Affected people can contest", -1, _human_can_contest),),
        questions=(
            "Can affected people contest a decision?",
            "Is a human review possible on request?",
            "How are contested decisions handled?",
        ),
    ),
    DetectionRule(
        id="C-02",
        pattern_id="EFFICIENCY_VS_TRANSPARENCY",
        name="Decisions that need explaining",
        family=RuleFamily.CONTEXTUAL,
        domain_a=D.TRANSPARENCY,
        domain_b=D.RESPONSIBILITY,
        severity_base=3,
        confidence=Confidence.MEDIUM,
        description="The system takes or shapes decisions; people are entitled to understand the criteria.",
        predicate=_decision_is(*DELEGATING_DECISIONS),
        related_edges=_decision_edges,
        mitigating=(SeverityFactor("Explainability layer in place", -1, _ai_flag("has_explainability")),),
    ),
    DetectionRule(
        id="C-03",
        pattern_id="PERFORMANCE_VS_EQUITY",
        name="Vulnerable populations affected",
        family=RuleFamily.CONTEXTUAL,
        domain_a=D.EQUITY,
        domain_b=D.RESPONSIBILITY,
        severity_base=4,
        confidence=Confidence.HIGH,
        description="The system affects vulnerable populations; fairness needs particular attention.",
        predicate=lambda ctx: ctx.profile.has_vulnerable,
        related_edges=_decision_or_recommendation,
        mitigating=(SeverityFactor("Bias tests performed", -1, _ai_flag("has_bias_tests")),),
    ),
    DetectionRule(
        id="C-04",
        pattern_id="SECURITY_VS_PRIVACY",
        name="Biometric or health data",
        family=RuleFamily.CONTEXTUAL,
        domain_a=D.PRIVACY,
        domain_b=D.SECURITY,
        severity_base=4,
        confidence=Confidence.HIGH,
        description="Biometric and health data are especially sensitive because they cannot be replaced.",
        predicate=lambda ctx: ctx.has_data_type(BIOMETRIC_DATA_TYPES),
        related_edges=lambda ctx: ctx.edges_where(
            lambda e: e.has_category(*HEALTH_CATEGORIES, "photo", "voice")
        ),
        mitigating=(
            SeverityFactor("Storage is encrypted", -1, lambda ctx: ctx.any_node_flag(NodeType.INFRA, "is_encrypted")),
        ),
    ),
    DetectionRule(
        id="C-05",
        pattern_id="PERSONALIZATION_VS_AUTONOMY",
        name="Behavioural personalization",
        family=RuleFamily.CONTEXTUAL,
        domain_a=D.AUTONOMY,
        domain_b=D.TRANSPARENCY,
        severity_base=3,
        confidence=Confidence.MEDIUM,
        description="Behavioural data drives personalization, which can narrow people's choices.",
        predicate=_personalization_context,
        related_edges=lambda ctx: ctx.edges_by_nature(FlowNature.RECOMMENDATION),
    ),
    DetectionRule(
        id="C-06",
        pattern_id="STANDARDIZATION_VS_SINGULARITY",
        name="Large-scale uniform decisions",
        family=RuleFamily.CONTEXTUAL,
        domain_a=D.EQUITY,
        domain_b=D.AUTONOMY,
        severity_base=3,
        confidence=Confidence.MEDIUM,
        description="Decisions at large scale must leave room for exceptions and atypical cases.",
        predicate=lambda ctx: (
            ctx.profile.user_scale in LARGE_SCALES
            and ctx.profile.decision_type in DELEGATING_DECISIONS
        ),
        related_edges=_decision_edges,
    ),
    DetectionRule(
        id="C-07",
        pattern_id="PRECISION_VS_MINIMIZATION",
        name="Financial data in the finance sector",
        family=RuleFamily.CONTEXTUAL,
        domain_a=D.PRIVACY,
        domain_b=D.RESPONSIBILITY,
        severity_base=2,
        confidence=Confidence.MEDIUM,
        description="Financial data processing must respect data minimisation.",
        predicate=lambda ctx: (
            ctx.has_data_type(FINANCIAL_DATA_TYPES) and ctx.profile.sector == Sector.FINANCE
        ),
        related_edges=lambda ctx: ctx.edges_where(lambda e: e.has_category("financial")),
    ),
    DetectionRule(
        id="C-08",
        pattern_id="AUTOMATION_VS_RECOURSE",
        name="Algorithmic decisions in the public sector",
        family=RuleFamily.CONTEXTUAL,
        domain_a=D.RECOURSE,
        domain_b=D.RESPONSIBILITY,
        severity_base=4,
        confidence=Confidence.HIGH,
        description="Public-sector algorithmic decisions require strengthened guarantees of recourse.",
        predicate=lambda ctx: (
            ctx.profile.sector in PUBLIC_SECTORS
            and ctx.profile.decision_type != DecisionType.INFORMATIVE
        ),
        related_edges=_decision_edges,
        questions=(
            "Does a human agent validate the decisions?",
            "Is the right to recourse guaranteed?",
            "Are decisions reasoned?",
        ),
    ),
    DetectionRule(
        id="C-09",
        pattern_id="PREDICTION_VS_FREEWILL",
        name="Multi-source profiling",
        family=RuleFamily.CONTEXTUAL,
        domain_a=D.AUTONOMY,
        domain_b=D.PRIVACY,
        severity_base=3,
        confidence=Confidence.MEDIUM,
        description="Combining many data sources for prediction can restrict free will.",
        predicate=_multi_source_profiling,
        related_edges=lambda ctx: ctx.edges_by_nature(FlowNature.INFERENCE),
        questions=(
            "Do people know they are being profiled?",
            "Can they object to the profiling?",
            "Do predictions influence important decisions?",
        ),
    ),
    DetectionRule(
        id="C-10",
        pattern_id="PERFORMANCE_VS_EQUITY",
        name="Minors concerned",
        family=RuleFamily.CONTEXTUAL,
        domain_a=D.PRIVACY,
        domain_b=D.EQUITY,
        severity_base=4,
        confidence=Confidence.HIGH,
        description="Processing minors' data requires strengthened protection.",
        predicate=lambda ctx: ctx.mentions_population(MINOR_KEYWORDS),
        related_edges=lambda ctx: ctx.edges_touching(
            [n.id for n in ctx.human_nodes_matching(MINOR_KEYWORDS)]
        ),
        related_nodes=lambda ctx: ctx.human_nodes_matching(MINOR_KEYWORDS),
        questions=(
            "Is parental consent required?",
            "Is minors' data better protected?",
            "Can minors exercise their rights?",
        ),
    ),
    DetectionRule(
        id="C-11",
        pattern_id="EFFICIENCY_VS_TRANSPARENCY",
        name="Workplace monitoring",
        family=RuleFamily.CONTEXTUAL,
        domain_a=D.TRANSPARENCY,
        domain_b=D.PRIVACY,
        severity_base=3,
        confidence=Confidence.MEDIUM,
        description="Monitoring employees or candidates must be proportionate and transparent.",
        predicate=lambda ctx: (
            ctx.profile.sector == Sector.HR and ctx.mentions_population(WORKER_KEYWORDS)
        ),
        related_edges=lambda ctx: ctx.edges_touching(
            [n.id for n in ctx.human_nodes_matching(WORKER_KEYWORDS)]
        ),
        related_nodes=lambda ctx: ctx.human_nodes_matching(WORKER_KEYWORDS),
        questions=(
            "Are employees informed of the monitoring?",
            "Is the monitoring proportionate?",
            "Is HR data compartmentalised?",
        ),
    ),
)


# ── Family D: data-flow rules ─────────────────────────────────────────


def _opaque_decisions(ctx: DetectionContext) -> list[Edge]:
    return [e for e in ctx.decision_edges() if (e.opacity or 0) >= 3]


def _no_recourse_decisions(ctx: DetectionContext) -> list[Edge]:
    return [e for e in ctx.decision_edges() if e.automation == AutomationLevel.AUTO_NO_RECOURSE]


def _vulnerable_nodes(ctx: DetectionContext) -> list[Node]:
    return ctx.nodes_where(NodeType.HUMAN, lambda n: n.flag("is_vulnerable") or n.flag("is_minor"))


def _sensitive_collection(ctx: DetectionContext) -> list[Edge]:
    if ctx.profile.sector not in SECURITY_SECTORS:
        return []
    return ctx.sensitive_edges(FlowNature.COLLECT)


def _profiling_edges(ctx: DetectionContext) -> list[Edge]:
    profiling = ctx.edges_where(lambda e: e.has_category(*PROFILING_CATEGORIES))
    if not profiling:
        return []
    consumers = ctx.edges_by_nature(FlowNature.RECOMMENDATION, FlowNature.INFERENCE)
    if not consumers:
        return []
    return profiling + consumers


def _collected_categories(ctx: DetectionContext) -> set[str]:
    return {c.lower() for e in ctx.edges_by_nature(FlowNature.COLLECT) for c in e.data_categories}


def _predictive_scoring(ctx: DetectionContext) -> list[Edge]:
    inference = ctx.edges_by_nature(FlowNature.INFERENCE)
    decision = ctx.decision_edges()
    if not (inference and decision and ctx.edges_with_dimension_at_least("irreversibility", 3)):
        return []
    return ctx.edges_by_nature(FlowNature.INFERENCE, FlowNature.DECISION)


def _sensitive_transfers_to_org(ctx: DetectionContext) -> list[Edge]:
    return [
        e for e in ctx.sensitive_edges(FlowNature.TRANSFER)
        if (target := ctx.target(e)) is not None and target.type == NodeType.ORG
    ]


def _external_recipient(ctx: DetectionContext) -> bool:
    for e in _sensitive_transfers_to_org(ctx):
        target = ctx.target(e)
        if target.flag("is_external") or _outside_eu(target):
            return True
    return False


DATA_RULES: tuple[DetectionRule, ...] = (
    DetectionRule(
        id="D-01",
        pattern_id="EFFICIENCY_VS_TRANSPARENCY",
        name="Opaque decision",
        family=RuleFamily.DATA,
        domain_a=D.TRANSPARENCY,
        domain_b=D.RECOURSE,
        severity_base=3,
        confidence=Confidence.HIGH,
        description="A decision flow is hard to explain, which makes it hard to contest.",
        predicate=lambda ctx: bool(_opaque_decisions(ctx)),
        related_edges=_opaque_decisions,
        aggravating=(
            SeverityFactor(
                "Very high opacity", +1,
                lambda ctx: any((e.opacity or 0) >= 4 for e in _opaque_decisions(ctx)),
            ),
        ),
        mitigating=(SeverityFactor("Explainability layer in place", -1, _ai_flag("has_explainability")),),
    ),
    DetectionRule(
        id="D-02",
        pattern_id="AUTOMATION_VS_RECOURSE",
        name="Automatic decision without recourse",
        family=RuleFamily.DATA,
        domain_a=D.RECOURSE,
        domain_b=D.AUTONOMY,
        severity_base=4,
        confidence=Confidence.VERY_HIGH,
        description="A decision is applied automatically and offers no way to appeal.",
        predicate=lambda ctx: bool(_no_recourse_decisions(ctx)),
        related_edges=_no_recourse_decisions,
        aggravating=(SeverityFactor("Vulnerable population", +1, lambda ctx: ctx.is_vulnerable()),),
        mitigating=(SeverityFactor("Affected people can contest", -1, _human_can_contest),),
    ),
    DetectionRule(
        id="D-03",
        pattern_id="PERFORMANCE_VS_EQUITY",
        name="Decision on a vulnerable population",
        family=RuleFamily.DATA,
        domain_a=D.EQUITY,
        domain_b=D.RESPONSIBILITY,
        severity_base=4,
        confidence=Confidence.HIGH,
        description="Decisions or recommendations reach a vulnerable population and may amplify bias.",
        predicate=lambda ctx: ctx.is_vulnerable() and bool(_decision_or_recommendation(ctx)),
        related_edges=_decision_or_recommendation,
        related_nodes=_vulnerable_nodes,
        mitigating=(SeverityFactor("Bias tests performed", -1, _ai_flag("has_bias_tests")),),
    ),
    DetectionRule(
        id="D-04",
        pattern_id="SECURITY_VS_PRIVACY",
        name="Sensitive collection for security purposes",
        family=RuleFamily.DATA,
        domain_a=D.PRIVACY,
        domain_b=D.SECURITY,
        severity_base=3,
        confidence=Confidence.MEDIUM,
        description="Sensitive data is collected in a sector where security justifies monitoring.",
        predicate=lambda ctx: bool(_sensitive_collection(ctx)),
        related_edges=_sensitive_collection,
        aggravating=(
            SeverityFactor(
                "Highly sensitive data", +1,
                lambda ctx: any(e.sensitivity == Sensitivity.HIGHLY_SENSITIVE for e in _sensitive_collection(ctx)),
            ),
        ),
        mitigating=(
            SeverityFactor("Storage is encrypted", -1, lambda ctx: ctx.any_node_flag(NodeType.INFRA, "is_encrypted")),
        ),
    ),
    DetectionRule(
        id="D-05",
        pattern_id="PERSONALIZATION_VS_AUTONOMY",
        name="Profiling for recommendation",
        family=RuleFamily.DATA,
        domain_a=D.AUTONOMY,
        domain_b=D.PRIVACY,
        severity_base=3,
        confidence=Confidence.MEDIUM,
        description="Behavioural or inferred data feeds recommendation or inference flows.",
        predicate=lambda ctx: bool(_profiling_edges(ctx)),
        related_edges=_profiling_edges,
    ),
    DetectionRule(
        id="D-06",
        pattern_id="PRECISION_VS_MINIMIZATION",
        name="Extensive collection",
        family=RuleFamily.DATA,
        domain_a=D.PRIVACY,
        domain_b=D.RESPONSIBILITY,
        severity_base=2,
        confidence=Confidence.LOW,
        description="Five or more data categories are collected.",
        predicate=lambda ctx: len(_collected_categories(ctx)) >= 5,
        related_edges=lambda ctx: [e for e in ctx.edges_by_nature(FlowNature.COLLECT) if e.data_categories],
    ),
    DetectionRule(
        id="D-07",
        pattern_id="PREDICTION_VS_FREEWILL",
        name="Predictive scoring",
        family=RuleFamily.DATA,
        domain_a=D.AUTONOMY,
        domain_b=D.EQUITY,
        severity_base=3,
        confidence=Confidence.MEDIUM,
        description="Inferences feed decisions with lasting consequences for the people scored.",
        predicate=lambda ctx: bool(_predictive_scoring(ctx)),
        related_edges=_predictive_scoring,
    ),
    DetectionRule(
        id="D-08",
        pattern_id="SPEED_VS_REFLECTION",
        name="Real-time automated decision",
        family=RuleFamily.DATA,
        domain_a=D.RECOURSE,
        domain_b=D.RESPONSIBILITY,
        severity_base=3,
        confidence=Confidence.MEDIUM,
        description="Decisions are executed automatically with no time for case-by-case review.",
        predicate=lambda ctx: bool(_automated_decisions(ctx)),
        related_edges=_automated_decisions,
        mitigating=(SeverityFactor("Human review in place", -1, _ai_flag("has_human_review")),),
    ),
    DetectionRule(
        id="D-09",
        pattern_id="EFFICIENCY_VS_TRANSPARENCY",
        name="Information asymmetry",
        family=RuleFamily.DATA,
        domain_a=D.TRANSPARENCY,
        domain_b=D.AUTONOMY,
        severity_base=3,
        confidence=Confidence.HIGH,
        description="The system knows far more about people than they know about it.",
        predicate=lambda ctx: bool(ctx.edges_with_dimension_at_least("asymmetry", 4)),
        related_edges=lambda ctx: ctx.edges_with_dimension_at_least("asymmetry", 4),
    ),
    DetectionRule(
        id="D-10",
        pattern_id="SECURITY_VS_PRIVACY",
        name="Sensitive transfer to an organisation",
        family=RuleFamily.DATA,
        domain_a=D.PRIVACY,
        domain_b=D.SECURITY,
        severity_base=3,
        confidence=Confidence.HIGH,
        description="Sensitive data leaves the system for another organisation.",
        predicate=lambda ctx: bool(_sensitive_transfers_to_org(ctx)),
        related_edges=_sensitive_transfers_to_org,
        aggravating=(SeverityFactor("External or non-EU recipient", +1, _external_recipient),),
    ),
)


# ── Family S: structural rules ────────────────────────────────────────


def _unsupervised_ai(ctx: DetectionContext) -> list[Node]:
    ai_nodes = ctx.nodes_by_type(NodeType.AI)
    if not ai_nodes:
        return []
    ai_ids = {n.id for n in ai_nodes}
    for e in ctx.edges_by_nature(FlowNature.CONTROL):
        source = ctx.source(e)
        if source is not None and source.type == NodeType.HUMAN and e.target_id in ai_ids:
            return []
    return ai_nodes


def _decision_flows(ctx: DetectionContext, node: Node) -> list[Edge]:
    return ctx.edges_touching([node.id], FlowNature.DECISION, FlowNature.RECOMMENDATION)


def _concentration_nodes(ctx: DetectionContext) -> list[Node]:
    return [
        n for n in ctx.nodes_by_type(NodeType.AI, NodeType.INFRA)
        if len(_decision_flows(ctx, n)) >= CONCENTRATION_THRESHOLD
    ]


def _concentrated_flows(ctx: DetectionContext) -> list[Edge]:
    return [e for n in _concentration_nodes(ctx) for e in _decision_flows(ctx, n)]


def _decision_cascade(ctx: DetectionContext) -> list[Edge]:
    chain = ctx.longest_chain(lambda e: e.nature == FlowNature.DECISION and e.automation in AUTO_LEVELS)
    return chain if len(chain) >= CASCADE_MIN_DEPTH else []


def _irreversible_decisions(ctx: DetectionContext) -> list[Edge]:
    if ctx.profile.decision_type not in DELEGATING_DECISIONS:
        return []
    return [
        e for e in ctx.decision_edges()
        if e.irreversibility is not None and e.irreversibility >= IRREVERSIBLE_THRESHOLD
    ]


STRUCTURAL_RULES: tuple[DetectionRule, ...] = (
    DetectionRule(
        id="S-01",
        pattern_id="AUTOMATION_VS_RECOURSE",
        name="Closed loop without human oversight",
        family=RuleFamily.STRUCTURAL,
        domain_a=D.RECOURSE,
        domain_b=D.MASTERY,
        severity_base=4,
        confidence=Confidence.HIGH,
        description="An automatic decision feeds another automatic decision with no point of human intervention.",
        predicate=lambda ctx: bool(ctx.automated_loop_edges()),
        related_edges=lambda ctx: ctx.automated_loop_edges(),
        aggravating=(
            SeverityFactor(
                "Sensitive data in the loop", +1,
                lambda ctx: any(e.sensitivity in SENSITIVE_LEVELS for e in ctx.automated_loop_edges()),
            ),
        ),
        mitigating=(SeverityFactor("Human review in place", -1, _ai_flag("has_human_review")),),
        suggested_actions=("MONITORING", "HUMAN_REVIEW_THRESHOLD", "OVERRIDE_CAPABILITY"),
        questions=(
            "What is the impact of an undetected error in this loop?",
            "How long can an error persist before it is detected?",
            "Is there an emergency stop mechanism?",
        ),
    ),
    DetectionRule(
        id="S-02",
        pattern_id="OTHER",
        name="Decision concentration",
        family=RuleFamily.STRUCTURAL,
        domain_a=D.MASTERY,
        domain_b=D.SECURITY,
        severity_base=3,
        confidence=Confidence.MEDIUM,
        description="One component centralises several decision flows and becomes a single point of failure.",
        predicate=lambda ctx: bool(_concentration_nodes(ctx)),
        related_edges=_concentrated_flows,
        related_nodes=_concentration_nodes,
        aggravating=(
            SeverityFactor(
                "More than five connected flows", +1,
                lambda ctx: any(ctx.degree(n.id) > HIGH_DEGREE for n in _concentration_nodes(ctx)),
            ),
            SeverityFactor(
                "Third-party component", +1,
                lambda ctx: any(n.flag("is_external") for n in _concentration_nodes(ctx)),
            ),
        ),
        mitigating=(
            SeverityFactor(
                "Fallback architecture", -1,
                lambda ctx: all(n.flag("has_fallback") for n in _concentration_nodes(ctx)),
            ),
        ),
        suggested_actions=("FALLBACK_PLAN", "MONITORING"),
        questions=(
            "What happens if this component fails?",
            "Is there redundancy or a fallback?",
        ),
    ),
    DetectionRule(
        id="S-03",
        pattern_id="EFFICIENCY_VS_TRANSPARENCY",
        name="Decision cascade",
        family=RuleFamily.STRUCTURAL,
        domain_a=D.TRANSPARENCY,
        domain_b=D.RECOURSE,
        severity_base=3,
        confidence=Confidence.MEDIUM,
        description="Automatic decisions trigger one another, making the final outcome hard to trace and contest.",
        predicate=lambda ctx: bool(_decision_cascade(ctx)),
        related_edges=_decision_cascade,
        aggravating=(
            SeverityFactor(
                "More than three cascade levels", +1,
                lambda ctx: len(_decision_cascade(ctx)) > CASCADE_MIN_DEPTH,
            ),
            SeverityFactor(
                "Irreversible decision in the chain", +1,
                lambda ctx: any(
                    e.irreversibility is not None and e.irreversibility >= IRREVERSIBLE_THRESHOLD
                    for e in _decision_cascade(ctx)
                ),
            ),
        ),
        mitigating=(SeverityFactor("End-to-end traceability", -1, _ai_flag("has_traceability")),),
        suggested_actions=("TRANSPARENCY_NOTICE", "APPEAL_PROCESS"),
        questions=(
            "Can the origin of a final decision be traced?",
            "Can the person contest at every step?",
        ),
    ),
    DetectionRule(
        id="S-04",
        pattern_id="AUTOMATION_VS_RECOURSE",
        name="Point of no return",
        family=RuleFamily.STRUCTURAL,
        domain_a=D.AUTONOMY,
        domain_b=D.RECOURSE,
        severity_base=4,
        confidence=Confidence.HIGH,
        description="Irreversible actions are triggered by the system without confirmation.",
        predicate=lambda ctx: bool(_irreversible_decisions(ctx)),
        related_edges=_irreversible_decisions,
        aggravating=(
            SeverityFactor(
                "Significant financial impact", +1,
                lambda ctx: ctx.has_data_type(FINANCIAL_DATA_TYPES)
                or any(e.has_category(*FINANCIAL_DATA_TYPES) for e in _irreversible_decisions(ctx)),
            ),
            SeverityFactor(
                "Personal data involved", +1,
                lambda ctx: any(e.sensitivity in SENSITIVE_LEVELS for e in _irreversible_decisions(ctx)),
            ),
        ),
        mitigating=(SeverityFactor("Grace period before execution", -1, _ai_flag("has_grace_period")),),
        suggested_actions=("HUMAN_REVIEW_THRESHOLD", "OVERRIDE_CAPABILITY"),
        questions=(
            "Is the user warned that the action cannot be undone?",
            "Is there a cooling-off period?",
        ),
    ),
    DetectionRule(
        id="S-05",
        pattern_id="OTHER",
        name="Missing supervisor",
        family=RuleFamily.STRUCTURAL,
        domain_a=D.MASTERY,
        domain_b=D.RESPONSIBILITY,
        severity_base=3,
        confidence=Confidence.MEDIUM,
        description="No human node controls the AI components; the chain of responsibility is unclear.",
        predicate=lambda ctx: bool(_unsupervised_ai(ctx)),
        related_nodes=_unsupervised_ai,
        suggested_actions=("DESIGNATE_AI_OWNER", "MONITORING"),
        questions=(
            "Who is responsible for the system working properly?",
            "How are anomalies detected and handled?",
        ),
    ),
)


# ── Family E: dependency rules ────────────────────────────────────────


def _external_ai_without_fallback(ctx: DetectionContext) -> list[Node]:
    return [n for n in _external_ai(ctx) if n.flag_is_false("has_fallback")]


def _critical_external_edges(ctx: DetectionContext) -> list[Edge]:
    nodes = _external_ai_without_fallback(ctx)
    if not nodes:
        return []
    return ctx.edges_touching([n.id for n in nodes], FlowNature.DECISION, FlowNature.INFERENCE)


def _opaque_external_paths(ctx: DetectionContext) -> list[tuple[Node, list[Edge]]]:
    """External models paired with their shortest path to a person through a decision."""
    models = [n for n in _external_ai(ctx) if _model_type(n) in OPAQUE_MODEL_TYPES]
    humans = ctx.nodes_by_type(NodeType.HUMAN)
    found = []
    for model in models:
        for human in humans:
            path = ctx.find_path(model.id, human.id, through=FlowNature.DECISION)
            if path:
                found.append((model, path))
    return found


def _third_party_infra_edges(ctx: DetectionContext) -> list[Edge]:
    infra = ctx.nodes_where(NodeType.INFRA, lambda n: n.flag("is_external"))
    return [e for e in ctx.edges_touching([n.id for n in infra]) if e.has_category(*THIRD_PARTY_CATEGORIES)]


def _third_party_infra(ctx: DetectionContext) -> list[Node]:
    ids = {node_id for e in _third_party_infra_edges(ctx) for node_id in (e.source_id, e.target_id)}
    return ctx.nodes_where(NodeType.INFRA, lambda n: n.id in ids and n.flag("is_external"))


def _single_providers(ctx: DetectionContext) -> list[Node]:
    return [
        n for n in _external_ai(ctx)
        if n.flag_is_false("has_alternative_provider")
        and ctx.edges_touching([n.id], FlowNature.DECISION, FlowNature.INFERENCE)
    ]


def _unversioned_providers(ctx: DetectionContext) -> list[Node]:
    return [n for n in _external_ai(ctx) if n.flag_is_false("has_version_control")]


def _subcontracting_chains(ctx: DetectionContext) -> list[list[Edge]]:
    orgs = ctx.nodes_where(NodeType.ORG, lambda n: n.flag("is_external"))
    return ctx.chains_within(n.id for n in orgs)


def _offshore_edges(ctx: DetectionContext) -> list[Edge]:
    offshore = [
        n for n in ctx.nodes_by_type(NodeType.AI, NodeType.INFRA)
        if n.flag("is_external") and _outside_eu(n)
    ]
    return [e for e in ctx.edges_touching([n.id for n in offshore]) if e.has_category(*PERSONAL_CATEGORIES)]


def _offshore_nodes(ctx: DetectionContext) -> list[Node]:
    ids = {node_id for e in _offshore_edges(ctx) for node_id in (e.source_id, e.target_id)}
    return [
        n for n in ctx.nodes_by_type(NodeType.AI, NodeType.INFRA)
        if n.id in ids and n.flag("is_external") and _outside_eu(n)
    ]


def _training_providers(ctx: DetectionContext) -> list[Node]:
    return [n for n in _external_ai(ctx) if n.flag("provider_can_train")]


def _compute_intensive_models(ctx: DetectionContext) -> list[Node]:
    return ctx.nodes_where(
        NodeType.AI,
        lambda n: _model_type(n) in COMPUTE_MODEL_TYPES and n.flag("is_compute_intensive"),
    )


def _generative_models(ctx: DetectionContext) -> list[Node]:
    return ctx.nodes_where(NodeType.AI, lambda n: _model_type(n) in LLM_MODEL_TYPES)


DEPENDENCY_RULES: tuple[DetectionRule, ...] = (
    DetectionRule(
        id="E-01",
        pattern_id="OTHER",
        name="External AI for a critical function without fallback",
        family=RuleFamily.DEPENDENCY,
        domain_a=D.SOVEREIGNTY,
        domain_b=D.SECURITY,
        severity_base=4,
        confidence=Confidence.HIGH,
        description="A decision or inference depends on an external AI service with no continuity plan.",
        predicate=lambda ctx: bool(_critical_external_edges(ctx)),
        related_edges=_critical_external_edges,
        related_nodes=_external_ai_without_fallback,
        aggravating=(
            SeverityFactor(
                "Provider outside the EU", +1,
                lambda ctx: any(_outside_eu(n) for n in _external_ai_without_fallback(ctx)),
            ),
        ),
        mitigating=(
            SeverityFactor(
                "Graceful degradation", -1,
                lambda ctx: any(n.flag("has_graceful_degradation") for n in _external_ai_without_fallback(ctx)),
            ),
        ),
        suggested_actions=("FALLBACK_PLAN", "SLA_REVIEW"),
        questions=(
            "What happens if the API is unavailable?",
            "Has the fallback been tested in real conditions?",
            "Are users informed when service degrades?",
        ),
    ),
    DetectionRule(
        id="E-02",
        pattern_id="EFFICIENCY_VS_TRANSPARENCY",
        name="Opaque external AI model",
        family=RuleFamily.DEPENDENCY,
        domain_a=D.TRANSPARENCY,
        domain_b=D.MASTERY,
        severity_base=4,
        confidence=Confidence.MEDIUM,
        description="A third-party model whose inner workings are not visible leads to decisions about people.",
        predicate=lambda ctx: bool(_opaque_external_paths(ctx)),
        related_edges=lambda ctx: [e for _, path in _opaque_external_paths(ctx) for e in path],
        related_nodes=lambda ctx: [model for model, _ in _opaque_external_paths(ctx)],
        aggravating=(
            SeverityFactor("Affects vulnerable people", +1, lambda ctx: ctx.is_vulnerable()),
            SeverityFactor(
                "No model card", +1,
                lambda ctx: any(m.flag_is_false("has_model_card") for m, _ in _opaque_external_paths(ctx)),
            ),
        ),
        mitigating=(
            SeverityFactor(
                "Model card available", -1,
                lambda ctx: all(m.flag("has_model_card") for m, _ in _opaque_external_paths(ctx)),
            ),
            SeverityFactor("Local explanations available", -1, _ai_flag("has_explainability")),
        ),
        suggested_actions=("EXPLAINABILITY_LAYER", "CONTRACT_REVIEW"),
        questions=(
            "What do you know about how the model was trained?",
            "Can its outputs be explained to the people concerned?",
            "Does a human validate the decisions it feeds?",
        ),
    ),
    DetectionRule(
        id="E-03",
        pattern_id="SECURITY_VS_PRIVACY",
        name="Sensitive data through third-party infrastructure",
        family=RuleFamily.DEPENDENCY,
        domain_a=D.PRIVACY,
        domain_b=D.SOVEREIGNTY,
        severity_base=4,
        confidence=Confidence.HIGH,
        description="Health, biometric, judicial or financial data transit through infrastructure run by a third party.",
        predicate=lambda ctx: bool(_third_party_infra_edges(ctx)),
        related_edges=_third_party_infra_edges,
        related_nodes=_third_party_infra,
        aggravating=(
            SeverityFactor(
                "Infrastructure outside the EU", +1,
                lambda ctx: any(_outside_eu(n) for n in _third_party_infra(ctx)),
            ),
            SeverityFactor(
                "No encryption", +1,
                lambda ctx: any(n.flag_is_false("has_encryption") for n in _third_party_infra(ctx)),
            ),
        ),
        mitigating=(
            SeverityFactor(
                "Data processing agreement signed", -1,
                lambda ctx: all(n.flag("has_dpa") for n in _third_party_infra(ctx)),
            ),
        ),
        suggested_actions=("CONTRACT_REVIEW", "DATA_MINIMIZATION"),
        questions=(
            "Is the data encrypted in transit and at rest?",
            "Which law applies to the provider?",
        ),
    ),
    DetectionRule(
        id="E-04",
        pattern_id="OTHER",
        name="Provider can train on your data",
        family=RuleFamily.DEPENDENCY,
        domain_a=D.SOVEREIGNTY,
        domain_b=D.PRIVACY,
        severity_base=4,
        confidence=Confidence.HIGH,
        description="Data sent to an external model may be reused by the provider for training.",
        predicate=lambda ctx: bool(_training_providers(ctx)),
        related_edges=lambda ctx: ctx.edges_touching([n.id for n in _training_providers(ctx)]),
        related_nodes=_training_providers,
        aggravating=(
            SeverityFactor(
                "Personal data sent to the provider", +1,
                lambda ctx: any(
                    e.has_category(*PERSONAL_CATEGORIES)
                    for e in ctx.edges_touching([n.id for n in _training_providers(ctx)])
                ),
            ),
        ),
        mitigating=(
            SeverityFactor(
                "Training opt-out available", -1,
                lambda ctx: any(n.flag("has_opt_out") for n in _training_providers(ctx)),
            ),
        ),
        suggested_actions=("CONTRACT_REVIEW", "DATA_MINIMIZATION"),
        questions=(
            "Does the contract forbid training on your data?",
            "Can you opt out of data reuse?",
            "Which personal data reaches the provider?",
        ),
    ),
    DetectionRule(
        id="E-05",
        pattern_id="OTHER",
        name="Single provider without alternative",
        family=RuleFamily.DEPENDENCY,
        domain_a=D.SOVEREIGNTY,
        domain_b=D.MASTERY,
        severity_base=3,
        confidence=Confidence.MEDIUM,
        description="A decision or inference relies on one provider with no identified alternative.",
        predicate=lambda ctx: bool(_single_providers(ctx)),
        related_edges=lambda ctx: ctx.edges_touching(
            [n.id for n in _single_providers(ctx)], FlowNature.DECISION, FlowNature.INFERENCE,
        ),
        related_nodes=_single_providers,
        aggravating=(
            SeverityFactor(
                "Core decision function", +1,
                lambda ctx: bool(ctx.edges_touching([n.id for n in _single_providers(ctx)], FlowNature.DECISION)),
            ),
        ),
        mitigating=(
            SeverityFactor(
                "Migration plan documented", -1,
                lambda ctx: all(n.flag("has_migration_plan") for n in _single_providers(ctx)),
            ),
        ),
        suggested_actions=("FALLBACK_PLAN", "CONTRACT_REVIEW"),
        questions=(
            "How long would switching provider take?",
            "Are data and models stored in standard formats?",
        ),
    ),
    DetectionRule(
        id="E-06",
        pattern_id="INNOVATION_VS_PRECAUTION",
        name="Uncontrolled updates from provider",
        family=RuleFamily.DEPENDENCY,
        domain_a=D.MASTERY,
        domain_b=D.SECURITY,
        severity_base=3,
        confidence=Confidence.MEDIUM,
        description="The provider can change the model's behaviour without notice.",
        predicate=lambda ctx: bool(_unversioned_providers(ctx)),
        related_edges=lambda ctx: ctx.edges_touching([n.id for n in _unversioned_providers(ctx)]),
        related_nodes=_unversioned_providers,
        aggravating=(
            SeverityFactor(
                "Used for decisions", +1,
                lambda ctx: bool(
                    ctx.edges_touching([n.id for n in _unversioned_providers(ctx)], FlowNature.DECISION)
                ),
            ),
        ),
        mitigating=(
            SeverityFactor(
                "Tests before each update", -1,
                lambda ctx: all(n.flag("has_test_before_update") for n in _unversioned_providers(ctx)),
            ),
        ),
        suggested_actions=("MONITORING", "SLA_REVIEW"),
        questions=(
            "Are you notified before the model changes?",
            "Can you pin or roll back a version?",
        ),
    ),
    DetectionRule(
        id="E-07",
        pattern_id="CONFIDENTIALITY_VS_TRACEABILITY",
        name="Subcontracting chain",
        family=RuleFamily.DEPENDENCY,
        domain_a=D.TRANSPARENCY,
        domain_b=D.RESPONSIBILITY,
        severity_base=3,
        confidence=Confidence.MEDIUM,
        description="Data or decisions pass through a chain of external organisations.",
        predicate=lambda ctx: bool(_subcontracting_chains(ctx)),
        related_edges=lambda ctx: [e for chain in _subcontracting_chains(ctx) for e in chain],
        aggravating=(
            SeverityFactor(
                "More than three levels", +1,
                lambda ctx: any(len(chain) + 1 > SUBCONTRACTING_DEPTH for chain in _subcontracting_chains(ctx)),
            ),
            SeverityFactor(
                "Sensitive data in the chain", +1,
                lambda ctx: any(
                    e.sensitivity in SENSITIVE_LEVELS for chain in _subcontracting_chains(ctx) for e in chain
                ),
            ),
        ),
        suggested_actions=("CONTRACT_REVIEW", "REGULAR_AUDIT"),
        questions=(
            "Is every subcontractor identified and documented?",
            "Do you hold an audit right over each of them?",
        ),
    ),
    DetectionRule(
        id="E-08",
        pattern_id="SECURITY_VS_PRIVACY",
        name="Data processing outside the EU",
        family=RuleFamily.DEPENDENCY,
        domain_a=D.SOVEREIGNTY,
        domain_b=D.PRIVACY,
        severity_base=4,
        confidence=Confidence.HIGH,
        description="Personal data are processed by an external component located outside the EU.",
        predicate=lambda ctx: bool(_offshore_edges(ctx)),
        related_edges=_offshore_edges,
        related_nodes=_offshore_nodes,
        aggravating=(
            SeverityFactor(
                "Subject to foreign law", +1,
                lambda ctx: any(n.flag("subject_to_foreign_law") for n in _offshore_nodes(ctx)),
            ),
        ),
        mitigating=(
            SeverityFactor(
                "Standard contractual clauses signed", -1,
                lambda ctx: all(n.flag("has_scc") for n in _offshore_nodes(ctx)),
            ),
        ),
        suggested_actions=("CONTRACT_REVIEW", "DATA_MINIMIZATION"),
        questions=(
            "Does an adequacy decision cover the destination country?",
            "Which transfer safeguards are in place?",
        ),
    ),
    DetectionRule(
        id="E-09",
        pattern_id="OTHER",
        name="Compute-intensive model",
        family=RuleFamily.DEPENDENCY,
        domain_a=D.SUSTAINABILITY,
        domain_b=D.MASTERY,
        severity_base=2,
        confidence=Confidence.LOW,
        description="Compute-intensive models have a significant environmental footprint.",
        predicate=lambda ctx: bool(_compute_intensive_models(ctx)),
        related_nodes=_compute_intensive_models,
        aggravating=(
            SeverityFactor("Used at large scale", +1, lambda ctx: ctx.profile.user_scale in LARGE_SCALES),
        ),
        suggested_actions=("MODEL_RIGHTSIZING", "ENERGY_MONITORING"),
        questions=(
            "Would a smaller model be sufficient?",
            "Is energy consumption measured?",
        ),
    ),
    DetectionRule(
        id="E-10",
        pattern_id="INNOVATION_VS_PRECAUTION",
        name="Generative model or agent",
        family=RuleFamily.DEPENDENCY,
        domain_a=D.SECURITY,
        domain_b=D.RESPONSIBILITY,
        severity_base=3,
        confidence=Confidence.MEDIUM,
        description="Language models and agents can behave in ways that are not yet well characterised.",
        predicate=lambda ctx: bool(_generative_models(ctx)),
        related_edges=lambda ctx: ctx.edges_touching([n.id for n in _generative_models(ctx)]),
        related_nodes=_generative_models,
        aggravating=(
            SeverityFactor(
                "Agent able to act", +1,
                lambda ctx: any(_model_type(n) == "agent" for n in _generative_models(ctx)),
            ),
        ),
        mitigating=(
            SeverityFactor(
                "Incident procedure declared", -1,
                lambda ctx: ctx.profile.has_incident_procedure is True,
            ),
        ),
    ),
)


# ── Family G: governance rules (explicit False only) ──────────────────


def _human_subtype(node: Node) -> str:
    return str(node.attribute("human_subtype") or "").lower()


def _operators(ctx: DetectionContext) -> list[Node]:
    return ctx.nodes_where(NodeType.HUMAN, lambda n: _human_subtype(n) in OPERATOR_SUBTYPES)


def _affected_people(ctx: DetectionContext) -> list[Node]:
    return ctx.nodes_where(NodeType.HUMAN, lambda n: _human_subtype(n) in AFFECTED_SUBTYPES)


GOVERNANCE_RULES: tuple[DetectionRule, ...] = (
    DetectionRule(
        id="G-01",
        pattern_id="OTHER",
        name="No designated responsible party",
        family=RuleFamily.GOVERNANCE,
        domain_a=D.RESPONSIBILITY,
        domain_b=D.RECOURSE,
        severity_base=4,
        confidence=Confidence.HIGH,
        description="The system takes decisions but nobody is clearly accountable for them.",
        predicate=lambda ctx: ctx.profile.has_responsible is False and bool(ctx.decision_edges()),
        related_edges=_decision_edges,
        aggravating=(SeverityFactor("Vulnerable population", +1, lambda ctx: ctx.is_vulnerable()),),
        suggested_actions=("DESIGNATE_AI_OWNER",),
        questions=(
            "Who answers for the system's decisions?",
            "Is the chain of responsibility documented?",
        ),
    ),
    DetectionRule(
        id="G-02",
        pattern_id="INNOVATION_VS_PRECAUTION",
        name="No incident procedure",
        family=RuleFamily.GOVERNANCE,
        domain_a=D.SECURITY,
        domain_b=D.RESPONSIBILITY,
        severity_base=3,
        confidence=Confidence.MEDIUM,
        description="No procedure is defined for handling incidents of the AI system.",
        predicate=lambda ctx: ctx.profile.has_incident_procedure is False,
        aggravating=(
            SeverityFactor("Handles sensitive data", +1, lambda ctx: ctx.has_data_type(SENSITIVE_DATA_TYPES)),
        ),
        suggested_actions=("INCIDENT_PROCESS", "MONITORING"),
    ),
    DetectionRule(
        id="G-03",
        pattern_id="OTHER",
        name="No regular review scheduled",
        family=RuleFamily.GOVERNANCE,
        domain_a=D.MASTERY,
        domain_b=D.SUSTAINABILITY,
        severity_base=3,
        confidence=Confidence.MEDIUM,
        description="The system's behaviour and relevance are never reviewed on a schedule.",
        predicate=lambda ctx: ctx.profile.has_review_schedule is False,
        aggravating=(
            SeverityFactor("No impact monitoring", +1, lambda ctx: ctx.profile.has_impact_monitoring is False),
        ),
        suggested_actions=("REGULAR_AUDIT", "MONITORING"),
    ),
    DetectionRule(
        id="G-04",
        pattern_id="OTHER",
        name="No training for operators",
        family=RuleFamily.GOVERNANCE,
        domain_a=D.MASTERY,
        domain_b=D.SECURITY,
        severity_base=3,
        confidence=Confidence.MEDIUM,
        description="People who operate or supervise the system are not trained to use it.",
        predicate=lambda ctx: ctx.profile.has_operator_training is False and bool(_operators(ctx)),
        related_nodes=_operators,
        aggravating=(
            SeverityFactor("High-stakes decisions", +1, _decision_is(*DELEGATING_DECISIONS)),
        ),
        questions=(
            "Do operators know the system's limits?",
            "Do they know when and how to override it?",
        ),
    ),
    DetectionRule(
        id="G-05",
        pattern_id="OTHER",
        name="No documentation of ethical choices",
        family=RuleFamily.GOVERNANCE,
        domain_a=D.TRANSPARENCY,
        domain_b=D.RESPONSIBILITY,
        severity_base=3,
        confidence=Confidence.MEDIUM,
        description="The trade-offs made while designing the system are not written down.",
        predicate=lambda ctx: ctx.profile.has_ethical_documentation is False,
        aggravating=(
            SeverityFactor("Public service", +1, lambda ctx: ctx.profile.sector in PUBLIC_SECTORS),
        ),
        mitigating=(
            SeverityFactor(
                "Ethics committee consulted", -1,
                lambda ctx: ctx.profile.has_ethics_consultation is True,
            ),
        ),
        suggested_actions=("TRANSPARENCY_NOTICE",),
    ),
    DetectionRule(
        id="G-06",
        pattern_id="EFFICIENCY_VS_PROTECTION",
        name="No recourse mechanism",
        family=RuleFamily.GOVERNANCE,
        domain_a=D.RECOURSE,
        domain_b=D.EQUITY,
        severity_base=4,
        confidence=Confidence.HIGH,
        description="Affected people have no way to contest decisions.",
        predicate=lambda ctx: ctx.profile.has_recourse_mechanism is False and bool(ctx.decision_edges()),
        related_edges=_decision_edges,
        aggravating=(SeverityFactor("Automated decision", +1, lambda ctx: bool(_automated_decisions(ctx))),),
        questions=(
            "Does an affected person know how to contest?",
            "Is recourse actually accessible?",
            "Are appeals handled fairly?",
        ),
    ),
    DetectionRule(
        id="G-07",
        pattern_id="PERFORMANCE_VS_EQUITY",
        name="No impact monitoring",
        family=RuleFamily.GOVERNANCE,
        domain_a=D.RESPONSIBILITY,
        domain_b=D.EQUITY,
        severity_base=3,
        confidence=Confidence.MEDIUM,
        description="The effects of the system's decisions on people are not tracked after deployment.",
        predicate=lambda ctx: ctx.profile.has_impact_monitoring is False and bool(ctx.decision_edges()),
        related_edges=_decision_edges,
        aggravating=(
            SeverityFactor("Vulnerable population", +1, lambda ctx: ctx.is_vulnerable()),
            SeverityFactor("Large-scale deployment", +1, lambda ctx: ctx.profile.user_scale in LARGE_SCALES),
        ),
        suggested_actions=("MONITORING", "FAIRNESS_METRICS"),
    ),
    DetectionRule(
        id="G-08",
        pattern_id="OTHER",
        name="No ethics committee consultation",
        family=RuleFamily.GOVERNANCE,
        domain_a=D.RESPONSIBILITY,
        domain_b=D.TRANSPARENCY,
        severity_base=4,
        confidence=Confidence.MEDIUM,
        description="A high-risk system was deployed without an ethics review.",
        predicate=lambda ctx: ctx.profile.is_high_risk and ctx.profile.has_ethics_consultation is False,
        aggravating=(
            SeverityFactor("Affects fundamental rights", +1, lambda ctx: ctx.profile.sector in PUBLIC_SECTORS),
        ),
        mitigating=(
            SeverityFactor(
                "Ethical choices documented", -1,
                lambda ctx: ctx.profile.has_ethical_documentation is True,
            ),
        ),
        suggested_actions=("REGULAR_AUDIT",),
    ),
    DetectionRule(
        id="G-09",
        pattern_id="COLLECTIVE_VS_INDIVIDUAL",
        name="No stakeholder consultation",
        family=RuleFamily.GOVERNANCE,
        domain_a=D.AUTONOMY,
        domain_b=D.TRANSPARENCY,
        severity_base=3,
        confidence=Confidence.MEDIUM,
        description="The people affected by the system were not consulted while it was designed.",
        predicate=lambda ctx: ctx.profile.has_stakeholder_consultation is False and bool(_affected_people(ctx)),
        related_nodes=_affected_people,
        aggravating=(
            SeverityFactor("Vulnerable population", +1, lambda ctx: ctx.is_vulnerable()),
            SeverityFactor("Public service", +1, lambda ctx: ctx.profile.sector in PUBLIC_SECTORS),
        ),
        questions=(
            "Who speaks for the people affected?",
            "How were their concerns collected?",
        ),
    ),
    DetectionRule(
        id="G-10",
        pattern_id="INNOVATION_VS_PRECAUTION",
        name="No kill switch or deactivation procedure",
        family=RuleFamily.GOVERNANCE,
        domain_a=D.MASTERY,
        domain_b=D.SECURITY,
        severity_base=4,
        confidence=Confidence.HIGH,
        description="The AI components cannot be stopped quickly when they misbehave.",
        predicate=lambda ctx: ctx.profile.has_kill_switch is False and bool(ctx.nodes_by_type(NodeType.AI)),
        related_nodes=lambda ctx: ctx.nodes_by_type(NodeType.AI),
        aggravating=(
            SeverityFactor("Autonomous system", +1, _decision_is(DecisionType.AUTO_DECISION)),
            SeverityFactor(
                "Irreversible actions possible", +1,
                lambda ctx: bool(ctx.edges_with_dimension_at_least("irreversibility", IRREVERSIBLE_THRESHOLD)),
            ),
        ),
        suggested_actions=("OVERRIDE_CAPABILITY", "INCIDENT_PROCESS"),
    ),
)


RULES: tuple[DetectionRule, ...] = (
    CONTEXTUAL_RULES
    + DATA_RULES
    + STRUCTURAL_RULES
    + DEPENDENCY_RULES
    + GOVERNANCE_RULES
)


def list_rules(rules: tuple[DetectionRule, ...] = RULES) -> list[dict[str, Any]]:
    """Introspect the catalog, in evaluation order."""
    return [rule.describe() for rule in rules]


def get_rule(rule_id: str, rules: tuple[DetectionRule, ...] = RULES) -> Optional[DetectionRule]:
    return next((r for r in rules if r.id == rule_id), None)
