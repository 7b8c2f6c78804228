"""
Config Validator - checks a node's configuration against its schema.

Pure and synchronous: called before enqueuing to fail fast and again at
execution time to fail safe.
"""
from collections.abc import Iterable, Mapping, Sequence
from typing import Any

from autoflow.engine.models import Node, NodeValidationReport, ValidationResult
from autoflow.engine.schemas import ParameterKind, SchemaRegistry, get_schema_registry


def matches_kind(value: Any, kind: ParameterKind) -> bool:
    """Check a value against a JSON value kind (a boolean is not a number)."""
    if kind is ParameterKind.STRING:
        return isinstance(value, str)
    if kind is ParameterKind.NUMBER:
        return isinstance(value, (int, float)) and not isinstance(value, bool)
    if kind is ParameterKind.ARRAY:
        return isinstance(value, Sequence) and not isinstance(value, (str, bytes, bytearray))
    if kind is ParameterKind.OBJECT:
        return isinstance(value, Mapping)
    return False


def validate(
    node_type: str,
    config: Mapping[str, Any] | None,
    registry: SchemaRegistry | None = None,
) -> ValidationResult:
    """
    Validate a configuration mapping against the schema of ``node_type``.

    Args:
        node_type: Node type name
        config: Parameter values (None is treated as empty)
        registry: Schema registry (global registry if not provided)

    Returns:
        ValidationResult; ``errors`` lists every violation found
    """
    registry = registry or get_schema_registry()
    schema = registry.get(node_type)
    if schema is None:
        return ValidationResult(ok=False, errors=[f"unknown node type: {node_type}"])

    config = config or {}
    errors: list[str] = []
    for name, param in schema.parameters.items():
        # None is a present value: it is not "missing", it just fails every kind check
        present = name in config
        value = config.get(name)
        if param.required and (not present or value == ""):
            errors.append(f"missing required field: {name}")
        if present and not matches_kind(value, param.kind):
            errors.append(f"field {name} must be a {param.kind.value}")

    return ValidationResult(ok=not errors, errors=errors)


def validate_node(node: Node, registry: SchemaRegistry | None = None) -> ValidationResult:
    """Validate a node's configuration against its type's schema."""
    return validate(node.type, node.config, registry)


def validate_workflow_nodes(
    nodes: Iterable[Node],
    registry: SchemaRegistry | None = None,
) -> list[NodeValidationReport]:
    """
    Validate every node of a workflow.

    Returns:
        One report per failing node, in node-listing order (empty when all pass)
    """
    reports = []
    for node in nodes:
        result = validate_node(node, registry)
        if not result.ok:
            reports.append(
                NodeValidationReport(node_id=node.id, label=node.label, errors=result.errors)
            )
    return reports


__all__ = ["matches_kind", "validate", "validate_node", "validate_workflow_nodes"]
