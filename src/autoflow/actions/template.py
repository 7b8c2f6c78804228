"""
Placeholder templating for action parameters.

``{{ data.a.b }}`` is replaced by the value at path ``a.b`` of the template
namespace. Missing and falsy values render as an empty string.
"""
import json
import re
from collections.abc import Mapping, Sequence
from typing import Any

PLACEHOLDER_PATTERN = re.compile(r"{{\s*data\.([\w.]+)\s*}}")


def template_namespace(context: Mapping[str, Any]) -> dict[str, Any]:
    """
    Namespace placeholders resolve against.

    The context itself, with ``context["body"]`` merged on top when it is a
    mapping, so ``{{ data.email }}`` reaches a webhook body's ``email`` field.
    """
    namespace = dict(context)
    body = context.get("body")
    if isinstance(body, Mapping):
        namespace.update(body)
    return namespace


def lookup_path(obj: Any, path: str) -> Any:
    """Walk a dotted path through mappings and sequences (numeric segments)."""
    current = obj
    for key in path.split("."):
        if not current:
            return None
        if isinstance(current, Mapping):
            current = current.get(key)
        elif isinstance(current, Sequence) and not isinstance(current, str) and key.isdigit():
            index = int(key)
            current = current[index] if index < len(current) else None
        else:
            return None
    return current


def _stringify(value: Any) -> str:
    if not value:
        return ""
    if isinstance(value, bool):
        return "true"
    if isinstance(value, (Mapping, list, tuple)):
        return json.dumps(value, default=str)
    return str(value)


def render(template: str, namespace: Mapping[str, Any]) -> str:
    """Replace every placeholder in ``template``."""
    return PLACEHOLDER_PATTERN.sub(
        lambda match: _stringify(lookup_path(namespace, match.group(1))),
        template,
    )


__all__ = ["PLACEHOLDER_PATTERN", "lookup_path", "render", "template_namespace"]
