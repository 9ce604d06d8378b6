"""
Detection context — read-only view of the graph handed to every rule.

Helpers here are fail-closed: an absent sensitivity, automation level,
dimension or node attribute never satisfies a test.
"""

from collections import deque
from dataclasses import dataclass, field
from typing import Callable, Iterable, Optional

from etica.schemas.enums import AutomationLevel, FlowNature, NodeType, Sensitivity
from etica.schemas.graph import Edge, Node, SystemProfile

# ── Keyword lists (matched as case-insensitive substrings) ────────────

MINOR_KEYWORDS: tuple[str, ...] = (
    "minor", "child", "pupil", "student",
    "mineur", "enfant", "élève", "étudiant",
)

WORKER_KEYWORDS: tuple[str, ...] = (
    "employee", "worker", "candidate", "applicant",
    "employé", "salarié", "candidat",
)

# ── Data-type groups (profile.data_types, compared lower-case) ────────

SENSITIVE_DATA_TYPES = frozenset({
    "health", "medical", "biometric", "genetic", "sexual_orientation",
    "political_opinion", "religious_belief", "ethnic_origin", "criminal",
})
BIOMETRIC_DATA_TYPES = frozenset({"health", "medical", "biometric", "genetic", "photo", "voice"})
BEHAVIORAL_DATA_TYPES = frozenset({"behavior", "preferences", "navigation", "location", "social_graph"})
FINANCIAL_DATA_TYPES = frozenset({"financial", "income", "credit", "transactions", "debt"})

AUTO_LEVELS = (AutomationLevel.AUTO_WITH_RECOURSE, AutomationLevel.AUTO_NO_RECOURSE)
SENSITIVE_LEVELS = (Sensitivity.SENSITIVE, Sensitivity.HIGHLY_SENSITIVE)

MAX_CHAIN_DEPTH = 10


def matches_keywords(text: Optional[str], keywords: Iterable[str]) -> bool:
    if not text:
        return False
    lowered = text.lower()
    return any(k in lowered for k in keywords)


@dataclass(frozen=True)
class DetectionContext:
    """Profile, nodes and edges of one assessment, plus lookup helpers."""

    profile: SystemProfile
    nodes: tuple[Node, ...] = ()
    edges: tuple[Edge, ...] = ()
    node_map: dict[str, Node] = field(default_factory=dict)

    @classmethod
    def build(
        cls,
        profile: SystemProfile,
        nodes: Iterable[Node] = (),
        edges: Iterable[Edge] = (),
    ) -> "DetectionContext":
        nodes = tuple(nodes)
        return cls(
            profile=profile,
            nodes=nodes,
            edges=tuple(edges),
            node_map={n.id: n for n in nodes},
        )

    # ── Nodes ─────────────────────────────────────────────────────────

    def nodes_by_type(self, *types: str) -> list[Node]:
        return [n for n in self.nodes if n.type in types]

    def nodes_where(self, node_type: str, test: Callable[[Node], bool]) -> list[Node]:
        return [n for n in self.nodes if n.type == node_type and test(n)]

    def any_node_flag(self, node_type: str, flag: str) -> bool:
        return any(n.flag(flag) for n in self.nodes_by_type(node_type))

    def source(self, edge: Edge) -> Optional[Node]:
        return self.node_map.get(edge.source_id)

    def target(self, edge: Edge) -> Optional[Node]:
        return self.node_map.get(edge.target_id)

    # ── Edges ─────────────────────────────────────────────────────────

    def edges_by_nature(self, *natures: str) -> list[Edge]:
        return [e for e in self.edges if e.nature in natures]

    def edges_where(self, test: Callable[[Edge], bool]) -> list[Edge]:
        return [e for e in self.edges if test(e)]

    def edges_touching(self, node_ids: Iterable[str], *natures: str) -> list[Edge]:
        """Edges with either endpoint in ``node_ids``, optionally filtered by nature."""
        ids = set(node_ids)
        return [
            e for e in self.edges
            if (e.source_id in ids or e.target_id in ids)
            and (not natures or e.nature in natures)
        ]

    def decision_edges(self) -> list[Edge]:
        return self.edges_by_nature(FlowNature.DECISION)

    def sensitive_edges(self, *natures: str) -> list[Edge]:
        return [
            e for e in self.edges
            if e.sensitivity in SENSITIVE_LEVELS and (not natures or e.nature in natures)
        ]

    def edges_with_dimension_at_least(self, dimension: str, threshold: int) -> list[Edge]:
        return [
            e for e in self.edges
            if (value := e.dimension(dimension)) is not None and value >= threshold
        ]

    def automated_loop_edges(self) -> list[Edge]:
        """
        Automated edges that sit on a directed cycle made only of automated edges.

        An edge u -> v is on such a cycle when u is reachable from v through
        automated edges.
        """
        auto_edges = [e for e in self.edges if e.automation in AUTO_LEVELS]
        successors: dict[str, list[str]] = {}
        for e in auto_edges:
            successors.setdefault(e.source_id, []).append(e.target_id)

        def reaches(start: str, goal: str) -> bool:
            seen: set[str] = set()
            stack = [start]
            while stack:
                current = stack.pop()
                if current == goal:
                    return True
                if current in seen:
                    continue
                seen.add(current)
                stack.extend(successors.get(current, ()))
            return False

        return [e for e in auto_edges if reaches(e.target_id, e.source_id)]

    def degree(self, node_id: str, *natures: str) -> int:
        """Incoming plus outgoing edges of a node."""
        return len(self.edges_touching([node_id], *natures))

    def longest_chain(self, test: Callable[[Edge], bool], max_depth: int = MAX_CHAIN_DEPTH) -> list[Edge]:
        """
        Longest directed path made of edges passing ``test``, no node repeated.

        Ties keep the first path found in input order. The search stops
        extending a path at ``max_depth`` edges.
        """
        eligible = [e for e in self.edges if test(e)]
        outgoing: dict[str, list[Edge]] = {}
        for e in eligible:
            outgoing.setdefault(e.source_id, []).append(e)

        best: list[Edge] = []

        def extend(node_id: str, path: list[Edge], visited: set[str]) -> None:
            nonlocal best
            if len(path) > len(best):
                best = list(path)
            if len(path) >= max_depth:
                return
            for e in outgoing.get(node_id, ()):
                if e.target_id in visited:
                    continue
                path.append(e)
                visited.add(e.target_id)
                extend(e.target_id, path, visited)
                visited.discard(e.target_id)
                path.pop()

        starts: list[str] = []
        for e in eligible:
            if e.source_id not in starts:
                starts.append(e.source_id)
        for start in starts:
            extend(start, [], {start})
        return best

    def find_path(self, start_id: str, goal_id: str, through: Optional[str] = None) -> list[Edge]:
        """
        Shortest directed path from ``start_id`` to ``goal_id``.

        With ``through``, the path must use at least one edge of that nature.
        Returns the path's edges, or an empty list when there is none.
        """
        if start_id == goal_id:
            return []
        outgoing: dict[str, list[Edge]] = {}
        for e in self.edges:
            outgoing.setdefault(e.source_id, []).append(e)

        start = (start_id, through is None)
        queue: deque[tuple[tuple[str, bool], list[Edge]]] = deque([(start, [])])
        seen = {start}
        while queue:
            (node_id, satisfied), path = queue.popleft()
            for e in outgoing.get(node_id, ()):
                state = (e.target_id, satisfied or e.nature == through)
                if state in seen:
                    continue
                seen.add(state)
                if state == (goal_id, True):
                    return path + [e]
                queue.append((state, path + [e]))
        return []

    def chains_within(self, node_ids: Iterable[str]) -> list[list[Edge]]:
        """
        Chains of edges whose endpoints all belong to ``node_ids``.

        From each member, the chain follows the first outgoing edge to a
        member not yet on the chain. Members with no such edge yield nothing.
        """
        members = list(dict.fromkeys(node_ids))
        allowed = set(members)
        chains: list[list[Edge]] = []
        for start in members:
            chain: list[Edge] = []
            visited = {start}
            current = start
            while True:
                step = next(
                    (
                        e for e in self.edges
                        if e.source_id == current and e.target_id in allowed and e.target_id not in visited
                    ),
                    None,
                )
                if step is None:
                    break
                chain.append(step)
                visited.add(step.target_id)
                current = step.target_id
            if chain:
                chains.append(chain)
        return chains

    # ── Profile heuristics ────────────────────────────────────────────

    def has_data_type(self, group: Iterable[str]) -> bool:
        return bool(self.profile.data_types_lower & set(group))

    def is_vulnerable(self) -> bool:
        """Declared on the profile, or flagged on a HUMAN node."""
        if self.profile.has_vulnerable:
            return True
        return any(
            n.flag("is_vulnerable") or n.flag("is_minor")
            for n in self.nodes_by_type(NodeType.HUMAN)
        )

    def populations_matching(self, keywords: Iterable[str]) -> list[str]:
        keywords = tuple(keywords)
        return [p for p in self.profile.populations if matches_keywords(p, keywords)]

    def human_nodes_matching(self, keywords: Iterable[str]) -> list[Node]:
        keywords = tuple(keywords)
        return [n for n in self.nodes_by_type(NodeType.HUMAN) if matches_keywords(n.label, keywords)]

    def mentions_population(self, keywords: Iterable[str]) -> bool:
        keywords = tuple(keywords)
        return bool(self.populations_matching(keywords) or self.human_nodes_matching(keywords))
