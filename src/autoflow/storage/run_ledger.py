"""Redis-backed run ledger."""
import uuid
from datetime import datetime, timezone
from typing import Any

from autoflow.engine.errors import RunAlreadyFinalized
from autoflow.engine.models import Run, RunStatus
from autoflow.observability import get_logger, with_run_context
from autoflow.storage.base import RedisStore

logger = get_logger(__name__)


class RunLedger(RedisStore):
    """
    Append/update store of runs.

    Each run is a JSON document under ``run:{id}``; a sorted set per
    (workflow, user) indexes run IDs by start time for history queries.
    A run moves to a terminal status at most once.
    """

    _run_prefix = "run:"
    _index_prefix = "runs:"

    def _run_key(self, run_id: str) -> str:
        return f"{self._run_prefix}{run_id}"

    def _index_key(self, workflow_id: str, user_id: str) -> str:
        return f"{self._index_prefix}{workflow_id}:{user_id}"

    def create(self, run: Run) -> str:
        """
        Persist a new run.

        Args:
            run: Run to record; an ID is assigned when it has none

        Returns:
            Run ID
        """
        if run.id is None:
            run.id = str(uuid.uuid4())

        pipe = self.redis_client.pipeline()
        pipe.set(self._run_key(run.id), run.model_dump_json(by_alias=True))
        pipe.zadd(
            self._index_key(run.workflow_id, run.user_id),
            {run.id: run.started_at.timestamp()},
        )
        pipe.execute()

        logger.info(
            f"Run created: {run.status.value}",
            extra=with_run_context(
                run_id=run.id, workflow_id=run.workflow_id, user_id=run.user_id
            ),
        )
        return run.id

    def get(self, run_id: str) -> Run | None:
        """Get a run by ID, or None."""
        data = self.redis_client.get(self._run_key(run_id))
        if data is None:
            return None
        return Run.model_validate_json(data)

    def update(
        self,
        run_id: str,
        status: RunStatus,
        result: Any = None,
        finished_at: datetime | None = None,
    ) -> Run | None:
        """
        Update a run's status and result.

        Terminal updates stamp ``finished_at`` (now, unless given).

        Returns:
            Updated run, or None if the run does not exist

        Raises:
            RunAlreadyFinalized: If the run already has a terminal status
        """
        run = self.get(run_id)
        if run is None:
            logger.error(f"Run not found for update: {run_id}")
            return None

        if run.status.is_terminal:
            raise RunAlreadyFinalized(
                f"Run {run_id} already {run.status.value}, refusing {status.value}"
            )

        run.status = status
        if result is not None:
            run.result = result
        if status.is_terminal:
            run.finished_at = finished_at or datetime.now(timezone.utc)

        self.redis_client.set(self._run_key(run_id), run.model_dump_json(by_alias=True))

        logger.info(
            f"Run updated: {status.value}",
            extra=with_run_context(
                run_id=run_id, workflow_id=run.workflow_id, user_id=run.user_id
            ),
        )
        return run

    def list(
        self,
        workflow_id: str,
        user_id: str,
        limit: int | None = None,
        most_recent_first: bool = True,
    ) -> list[Run]:
        """
        Runs of one workflow for one user, ordered by start time.

        Args:
            workflow_id: Workflow ID
            user_id: Owner
            limit: Maximum number of runs (all when None)
            most_recent_first: Newest first when True
        """
        key = self._index_key(workflow_id, user_id)
        end = -1 if limit is None else limit - 1
        if limit is not None and limit <= 0:
            return []

        if most_recent_first:
            run_ids = self.redis_client.zrevrange(key, 0, end)
        else:
            run_ids = self.redis_client.zrange(key, 0, end)
        if not run_ids:
            return []

        documents = self.redis_client.mget([self._run_key(run_id) for run_id in run_ids])
        return [Run.model_validate_json(doc) for doc in documents if doc is not None]


def get_run_ledger() -> RunLedger:
    """Get or create run ledger instance."""
    return RunLedger()
