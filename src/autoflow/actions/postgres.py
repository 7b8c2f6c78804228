"""Read-only SQL query action."""
import re
from collections.abc import Mapping
from typing import Any, Callable

import psycopg
from psycopg.rows import dict_row

from autoflow.actions.base import Action, ActionSpec, SideEffect
from autoflow.config import get_settings
from autoflow.engine.errors import NodeExecutionError
from autoflow.observability import get_logger

logger = get_logger(__name__)

SELECT_PATTERN = re.compile(r"^\s*select", re.IGNORECASE)


def is_select(query: str) -> bool:
    """True when the statement is syntactically a SELECT."""
    return bool(SELECT_PATTERN.match(query or ""))


class PostgresQueryAction(Action):
    """
    Query Postgres - runs a SELECT on a read-only session.

    Anything that does not start with SELECT is refused before a connection
    is opened.
    """

    def __init__(self, dsn: str | None = None, connect: Callable[..., Any] | None = None):
        self._dsn = dsn
        self._connect = connect or psycopg.connect
        super().__init__()

    def spec(self) -> ActionSpec:
        """Return action specification."""
        return ActionSpec(node_type="postgres", side_effect=SideEffect.STORAGE, idempotent=True)

    def _execute(
        self,
        config: Mapping[str, Any],
        user_id: str,
        context: Mapping[str, Any],
    ) -> Mapping[str, Any]:
        query = config.get("query", "")
        if not is_select(query):
            raise NodeExecutionError("Only SELECT queries allowed")

        dsn = self._dsn or get_settings().postgres_dsn
        with self._connect(dsn, row_factory=dict_row) as conn:
            conn.read_only = True
            with conn.cursor() as cursor:
                cursor.execute(query)
                rows = cursor.fetchall()

        logger.info("Postgres query executed", extra={"row_count": len(rows)})
        return {"rows": [dict(row) for row in rows], "rowCount": len(rows)}
