# File: rank_spider/graph.py
"""rank_spider.graph: Directed link graph built while crawling.

Every vertex is keyed by the canonical URL string of a page. Vertices are
created through :meth:`LinkGraph.get_or_create_node`, which never produces
duplicates, and keep both outgoing and incoming edge lists so that a rank
computation can consume the graph directly::

    graph = LinkGraph()
    a = graph.get_or_create_node("http://example.com/")
    b = graph.get_or_create_node("http://example.com/about")
    graph.add_edge(a.id, b.id)
    print(graph.render())

Iteration order is always node creation order, which makes :meth:`render`
and :meth:`to_dict` deterministic for a given crawl.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Iterator, List, Optional, Set, Tuple

__all__ = ("Node", "LinkGraph")


@dataclass(slots=True, eq=False)
class Node:
    """A graph vertex with ordered outgoing and incoming edges."""

    id: str
    edges_out: List[str] = field(default_factory=list)
    edges_in: List[str] = field(default_factory=list)
    _targets: Set[str] = field(default_factory=set, init=False, repr=False)

    def __str__(self) -> str:
        return self.id


class LinkGraph:
    """Link structure of the crawled pages."""

    def __init__(self) -> None:
        self._nodes: Dict[str, Node] = {}

    def get_or_create_node(self, node_id: str) -> Node:
        """Return the node for *node_id*, creating it on first reference."""
        node = self._nodes.get(node_id)
        if node is None:
            node = Node(node_id)
            self._nodes[node_id] = node
        return node

    def get_node(self, node_id: str) -> Optional[Node]:
        return self._nodes.get(node_id)

    def add_edge(self, from_id: str, to_id: str) -> bool:
        """
        Insert the edge ``from_id -> to_id``.

        Both nodes must already exist. Returns False when the edge was
        already present.
        """
        try:
            source = self._nodes[from_id]
            target = self._nodes[to_id]
        except KeyError as exc:
            raise KeyError(f"Cannot add edge {from_id} -> {to_id}: unknown node {exc}") from None
        if to_id in source._targets:
            return False
        source._targets.add(to_id)
        source.edges_out.append(to_id)
        target.edges_in.append(from_id)
        return True

    def edges(self) -> Iterator[Tuple[str, str]]:
        for node in self._nodes.values():
            for target in node.edges_out:
                yield node.id, target

    @property
    def edge_count(self) -> int:
        return sum(len(node.edges_out) for node in self._nodes.values())

    def render(self) -> str:
        """Human-readable listing of every node and its edges in creation order."""
        lines: List[str] = []
        for node in self._nodes.values():
            lines.append(node.id)
            lines.append(f"  -> [{', '.join(node.edges_out)}]")
            lines.append(f"  <- [{', '.join(node.edges_in)}]")
        return "\n".join(lines)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "nodes": list(self._nodes),
            "edges": [[src, dst] for src, dst in self.edges()],
        }

    def __contains__(self, node_id: object) -> bool:
        return node_id in self._nodes

    def __len__(self) -> int:
        return len(self._nodes)

    def __iter__(self) -> Iterator[Node]:
        return iter(self._nodes.values())
