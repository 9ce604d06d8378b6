"""
Pytest Configuration and Fixtures.

Provides factories for profiles, nodes, edges, tensions and actions so
that tests only spell out the fields they care about.
"""

import itertools

import pytest

from etica.schemas import Action, Edge, Node, SystemProfile, Tension

_ids = itertools.count(1)


def make_profile(**overrides) -> SystemProfile:
    data = {
        "id": "sys-1",
        "name": "Test system",
        "sector": "OTHER",
        "decision_type": "INFORMATIVE",
        "user_scale": "TINY",
        "has_vulnerable": False,
        "data_types": [],
        "populations": [],
    }
    data.update(overrides)
    return SystemProfile(**data)


def make_node(node_id: str, node_type: str = "HUMAN", label: str = "", **attributes) -> Node:
    return Node(id=node_id, type=node_type, label=label or node_id, attributes=attributes)


def make_edge(
    nature: str = "DECISION",
    source_id: str = "ai",
    target_id: str = "user",
    edge_id: str | None = None,
    **fields,
) -> Edge:
    return Edge(
        id=edge_id or f"e{next(_ids)}",
        source_id=source_id,
        target_id=target_id,
        nature=nature,
        **fields,
    )


def make_tension(tension_id: str, *domains: str, **fields) -> Tension:
    return Tension(id=tension_id, impacted_domains=list(domains), **fields)


def make_action(action_id: str, status: str = "DONE", **fields) -> Action:
    return Action(id=action_id, status=status, **fields)


# ============================================================================
# PROFILE FIXTURES
# ============================================================================


@pytest.fixture
def minimal_profile() -> SystemProfile:
    """Informative, tiny, no vulnerable people."""
    return make_profile()


@pytest.fixture
def critical_profile() -> SystemProfile:
    """Fully automated decisions at large scale on vulnerable people."""
    return make_profile(
        decision_type="AUTO_DECISION",
        user_scale="LARGE",
        has_vulnerable=True,
    )


# ============================================================================
# GRAPH FIXTURES
# ============================================================================


@pytest.fixture
def scoring_graph():
    """A human subject, an AI scorer and an automated decision between them."""
    nodes = [
        make_node("user", "HUMAN", "Applicant"),
        make_node("ai", "AI", "Credit model"),
        make_node("db", "INFRA", "Data warehouse"),
    ]
    edges = [
        make_edge("COLLECT", "user", "db", edge_id="collect", sensitivity="SENSITIVE",
                  data_categories=["financial", "identifier"]),
        make_edge("INFERENCE", "db", "ai", edge_id="infer", opacity=3),
        make_edge("DECISION", "ai", "user", edge_id="decide", sensitivity="HIGHLY_SENSITIVE",
                  automation="AUTO_NO_RECOURSE", opacity=4, irreversibility=4),
    ]
    return nodes, edges
