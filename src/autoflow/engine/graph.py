"""
Graph Resolver - adjacency and entry-point discovery.

Entry nodes are the set difference of node ids and edge targets, kept in
node-listing order. Successors keep edge-listing order, which is also the
execution order among siblings.
"""

from collections.abc import Iterable, Sequence
from dataclasses import dataclass, field

from .models import Edge, Node


@dataclass
class ResolvedGraph:
    """
    Result of resolving a node/edge set.
    """
    adjacency: dict[str, list[str]] = field(default_factory=dict)
    entry_nodes: list[str] = field(default_factory=list)

    def successors(self, node_id: str) -> list[str]:
        """Targets of a node's outgoing edges, in edge-listing order."""
        return self.adjacency.get(node_id, [])


class GraphResolver:
    """
    Builds adjacency and finds entry nodes for a workflow graph.

    Usage:
        resolved = GraphResolver().resolve(nodes, edges)
        resolved = GraphResolver().resolve(nodes, edges, start_node_id="n3")
    """

    def build_adjacency(self, edges: Iterable[Edge]) -> dict[str, list[str]]:
        """Map each source node id to its targets in edge-listing order."""
        adjacency: dict[str, list[str]] = {}
        for edge in edges:
            adjacency.setdefault(edge.source, []).append(edge.target)
        return adjacency

    def find_entry_nodes(self, nodes: Sequence[Node], edges: Iterable[Edge]) -> list[str]:
        """Node ids with no incoming edge, in node-listing order."""
        targets = {edge.target for edge in edges}
        return [node.id for node in nodes if node.id not in targets]

    def resolve(
        self,
        nodes: Sequence[Node],
        edges: Sequence[Edge],
        start_node_id: str | None = None,
    ) -> ResolvedGraph:
        """
        Resolve adjacency and entry nodes.

        Args:
            nodes: Workflow nodes
            edges: Workflow edges
            start_node_id: Explicit entry; replaces the computed entry set
                without checking incoming edges

        Returns:
            ResolvedGraph
        """
        adjacency = self.build_adjacency(edges)
        if start_node_id is not None:
            entry_nodes = [start_node_id]
        else:
            entry_nodes = self.find_entry_nodes(nodes, edges)
        return ResolvedGraph(adjacency=adjacency, entry_nodes=entry_nodes)

    def find_cycle(self, nodes: Sequence[Node], edges: Sequence[Edge]) -> list[str] | None:
        """
        Find one cycle in the graph, if any.

        Returns:
            Node ids along the cycle (first id repeated at the end), or None
        """
        adjacency = self.build_adjacency(edges)
        ids = [node.id for node in nodes]
        for source in adjacency:
            if source not in ids:
                ids.append(source)

        WHITE, GREY, BLACK = 0, 1, 2
        color = {node_id: WHITE for node_id in ids}

        for root in ids:
            if color.get(root, WHITE) != WHITE:
                continue
            path: list[str] = [root]
            stack = [iter(adjacency.get(root, []))]
            color[root] = GREY
            while stack:
                child = next(stack[-1], None)
                if child is None:
                    color[path.pop()] = BLACK
                    stack.pop()
                    continue
                state = color.get(child, WHITE)
                if state == GREY:
                    return path[path.index(child):] + [child]
                if state == WHITE:
                    color[child] = GREY
                    path.append(child)
                    stack.append(iter(adjacency.get(child, [])))
        return None


def resolve(
    nodes: Sequence[Node],
    edges: Sequence[Edge],
    start_node_id: str | None = None,
) -> ResolvedGraph:
    """Resolve a node/edge set with the default resolver."""
    return GraphResolver().resolve(nodes, edges, start_node_id)


__all__ = [
    "GraphResolver",
    "ResolvedGraph",
    "resolve",
]
