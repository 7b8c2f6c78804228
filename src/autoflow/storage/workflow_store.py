"""Redis-backed workflow document store."""
from autoflow.engine.models import Workflow
from autoflow.observability import get_logger
from autoflow.storage.base import RedisStore

logger = get_logger(__name__)


class WorkflowStore(RedisStore):
    """
    Workflow documents keyed by ID.

    The engine only reads workflows; ``save`` and ``delete`` exist for the
    editor-facing CRUD layer, seeding and tests.
    """

    _prefix = "workflow:"

    def _key(self, workflow_id: str) -> str:
        return f"{self._prefix}{workflow_id}"

    def save(self, workflow: Workflow) -> None:
        """Create or replace a workflow document."""
        self.redis_client.set(
            self._key(workflow.id),
            workflow.model_dump_json(by_alias=True),
        )
        logger.info("Workflow saved", extra={"workflow_id": workflow.id})

    def get(self, workflow_id: str, user_id: str | None = None) -> Workflow | None:
        """
        Get a workflow by ID.

        Args:
            workflow_id: Workflow ID
            user_id: When given, only a workflow owned by this user is returned

        Returns:
            Workflow if found (and owned), None otherwise
        """
        data = self.redis_client.get(self._key(workflow_id))
        if data is None:
            return None

        workflow = Workflow.model_validate_json(data)
        if user_id is not None and workflow.owner_id != user_id:
            return None
        return workflow

    def delete(self, workflow_id: str) -> bool:
        """Delete a workflow; True if it existed."""
        return bool(self.redis_client.delete(self._key(workflow_id)))


def get_workflow_store() -> WorkflowStore:
    """Get or create workflow store instance."""
    return WorkflowStore()
