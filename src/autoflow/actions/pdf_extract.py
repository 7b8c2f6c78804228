"""Remote PDF text extraction action."""
import io
from collections.abc import Mapping
from typing import Any

from pypdf import PdfReader

from autoflow.actions.base import Action, ActionSpec, SideEffect
from autoflow.actions.http import send_request
from autoflow.engine.errors import NodeExecutionError
from autoflow.observability import get_logger

logger = get_logger(__name__)


def pdf_to_text(content: bytes) -> str:
    """Extract the text of every page, pages separated by blank lines."""
    reader = PdfReader(io.BytesIO(content))
    return "\n\n".join(page.extract_text() or "" for page in reader.pages)


class PdfExtractAction(Action):
    """Extract PDF Text - downloads ``fileUrl`` and returns its text under ``text``."""

    def spec(self) -> ActionSpec:
        """Return action specification."""
        return ActionSpec(node_type="pdf_extract", side_effect=SideEffect.NETWORK, idempotent=True)

    def _execute(
        self,
        config: Mapping[str, Any],
        user_id: str,
        context: Mapping[str, Any],
    ) -> Mapping[str, Any]:
        file_url = config.get("fileUrl")
        if not file_url:
            raise NodeExecutionError("No PDF URL provided")

        response = send_request("GET", file_url, raise_for_status=False)
        if not response.ok:
            raise NodeExecutionError("Failed to download PDF")

        text = pdf_to_text(response.content)
        logger.info("PDF text extracted", extra={"file_url": file_url, "chars": len(text)})
        return {"text": text}
