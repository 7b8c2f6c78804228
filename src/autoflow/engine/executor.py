"""
Graph Executor - depth-first, context-threading traversal.

Walks the graph from its entry node(s), validating and dispatching each
visited node and merging each result into the propagated context.

Traversal rules:
- Siblings are chained, not forked: the context handed to the next successor
  is whatever the previous successor's whole subtree returned.
- An invalid node, or a node whose handler raises, returns its incoming
  context unchanged; its subtree is skipped and the rest of the graph goes on.
- A node reachable through several edges runs once per edge.
- Depth and total visits are bounded; exceeding either fails the whole run.
- A run seeded with a payload (a webhook delivery) passes that payload
  through its trigger nodes unvalidated and undispatched, so a bare trigger
  node does not cut off its subtree.

Single-threaded and sequential: no two handlers run at the same time within
one run.
"""

from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from typing import Any, Protocol

from autoflow.config import get_settings
from autoflow.engine.errors import NodeExecutionError, TraversalLimitExceeded
from autoflow.engine.graph import GraphResolver, ResolvedGraph
from autoflow.engine.models import Edge, Node
from autoflow.engine.schemas import SchemaRegistry
from autoflow.engine.validation import validate_node
from autoflow.observability import get_logger, with_run_context

logger = get_logger(__name__)


class DispatcherProtocol(Protocol):
    """Protocol for action dispatchers."""

    def dispatch(
        self,
        node: Node,
        user_id: str,
        context: dict[str, Any],
    ) -> Mapping[str, Any] | None:
        """Execute a node and return its partial result."""
        ...


@dataclass
class _Traversal:
    """Per-run traversal state."""
    node_map: dict[str, Node]
    graph: ResolvedGraph
    user_id: str
    run_id: str | None
    seeded: bool = False
    visits: int = 0


class GraphExecutor:
    """
    Executes a workflow graph for one run.

    Usage:
        executor = GraphExecutor()
        final_context = executor.run(nodes, edges, user_id, {"body": {...}})
    """

    # Node types that stand for the payload a seeded run starts with
    PAYLOAD_TRIGGER_TYPES = frozenset({"webhook"})

    def __init__(
        self,
        dispatcher: DispatcherProtocol | None = None,
        schema_registry: SchemaRegistry | None = None,
        resolver: GraphResolver | None = None,
        max_depth: int | None = None,
        max_visits: int | None = None,
    ):
        """
        Initialize executor.

        Args:
            dispatcher: Action dispatcher (global action registry if not provided)
            schema_registry: Schema registry used for execution-time validation
            resolver: Graph resolver
            max_depth: Recursion depth limit (settings default)
            max_visits: Node visit limit per run (settings default)
        """
        settings = get_settings()
        if dispatcher is None:
            # Import here to avoid circular imports
            from autoflow.actions.registry import get_action_registry

            dispatcher = get_action_registry()
        self._dispatcher = dispatcher
        self._schema_registry = schema_registry
        self._resolver = resolver or GraphResolver()
        self._max_depth = max_depth or settings.max_traversal_depth
        self._max_visits = max_visits or settings.max_node_visits

    def run(
        self,
        nodes: Sequence[Node],
        edges: Sequence[Edge],
        user_id: str,
        initial_context: Mapping[str, Any] | None = None,
        start_node_id: str | None = None,
        *,
        run_id: str | None = None,
    ) -> dict[str, Any]:
        """
        Execute the graph and return the final context.

        Args:
            nodes: Workflow nodes
            edges: Workflow edges
            user_id: Owner of the run (passed to handlers)
            initial_context: Seed context, e.g. a webhook payload
            start_node_id: Re-enter the graph at this node only
            run_id: Run ID for log context

        Returns:
            Context after the last visited entry node's subtree

        Raises:
            TraversalLimitExceeded: If depth or visit limits are exceeded
        """
        traversal = _Traversal(
            node_map={node.id: node for node in nodes},
            graph=self._resolver.resolve(nodes, edges, start_node_id),
            user_id=user_id,
            run_id=run_id,
            seeded=bool(initial_context),
        )
        context: dict[str, Any] = dict(initial_context or {})

        logger.info(
            "Traversal started",
            extra=with_run_context(
                run_id=run_id,
                user_id=user_id,
                entry_nodes=traversal.graph.entry_nodes,
            ),
        )

        for entry_id in traversal.graph.entry_nodes:
            context = self._visit(traversal, entry_id, context, depth=1)

        logger.info(
            "Traversal finished",
            extra=with_run_context(run_id=run_id, user_id=user_id, visits=traversal.visits),
        )
        return context

    def _visit(
        self,
        traversal: _Traversal,
        node_id: str,
        context: dict[str, Any],
        depth: int,
    ) -> dict[str, Any]:
        """Visit one node and its successors; return the resulting context."""
        traversal.visits += 1
        if traversal.visits > self._max_visits:
            raise TraversalLimitExceeded(
                f"Run exceeded {self._max_visits} node visits (cyclic graph?)"
            )
        if depth > self._max_depth:
            raise TraversalLimitExceeded(
                f"Traversal exceeded depth {self._max_depth} at node {node_id} (cyclic graph?)"
            )

        node = traversal.node_map.get(node_id)
        if node is None:
            logger.debug(
                "Unknown node id, skipping",
                extra=with_run_context(run_id=traversal.run_id, node_id=node_id),
            )
            return context

        extra = with_run_context(
            run_id=traversal.run_id,
            user_id=traversal.user_id,
            node_id=node.id,
            node_type=node.type,
            label=node.label,
        )

        if traversal.seeded and node.type in self.PAYLOAD_TRIGGER_TYPES:
            logger.debug("Passing seed payload through trigger node", extra=extra)
            return self._visit_successors(traversal, node, context, depth)

        validation = validate_node(node, self._schema_registry)
        if not validation.ok:
            logger.warning(
                "Node has invalid configuration, skipping subtree",
                extra={**extra, "errors": validation.errors},
            )
            return context

        try:
            result = self._dispatcher.dispatch(node, traversal.user_id, context)
            if result is None:
                result = {}
            if not isinstance(result, Mapping):
                raise NodeExecutionError(
                    f"Node {node.id} returned {type(result).__name__}, expected a mapping"
                )
        except Exception as e:
            logger.error(
                "Node execution failed, skipping subtree",
                extra={**extra, "error": str(e)},
                exc_info=True,
            )
            return context

        return self._visit_successors(traversal, node, {**context, **result}, depth)

    def _visit_successors(
        self,
        traversal: _Traversal,
        node: Node,
        context: dict[str, Any],
        depth: int,
    ) -> dict[str, Any]:
        for successor_id in traversal.graph.successors(node.id):
            context = self._visit(traversal, successor_id, context, depth + 1)
        return context


__all__ = ["DispatcherProtocol", "GraphExecutor"]
