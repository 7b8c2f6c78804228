"""
Schema Registry - declarative parameter contracts per node type.

The catalogue is data: each entry is a document in the shared NodeSchema
format ``{type, name, parameters: {name: {type, required, options?, description}}}``
consumed by both the validator and the editor. Adding a node type needs a new
entry here and an action handler, nothing else.
"""
from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class ParameterKind(str, Enum):
    """Runtime kind of a parameter value."""

    STRING = "string"
    NUMBER = "number"
    ARRAY = "array"
    OBJECT = "object"


class ParameterSpec(BaseModel):
    """Contract for a single node parameter."""

    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="ignore")

    kind: ParameterKind = Field(..., alias="type")
    required: bool = False
    allowed_values: tuple[str, ...] | None = Field(default=None, alias="options")
    description: str = ""


class NodeSchema(BaseModel):
    """Declared parameter contract of a node type."""

    model_config = ConfigDict(frozen=True)

    type: str
    name: str
    parameters: dict[str, ParameterSpec] = Field(default_factory=dict)

    def to_document(self) -> dict[str, Any]:
        """Dump in the shared NodeSchema format."""
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)


_CATALOGUE: list[dict[str, Any]] = [
    {
        "type": "webhook",
        "name": "Webhook Trigger",
        "parameters": {
            "httpMethod": {"type": "string", "options": ["GET", "POST", "PUT", "DELETE", "PATCH"], "required": True, "description": "HTTP method to listen for."},
            "path": {"type": "string", "required": True, "description": "The URL path for the webhook (e.g., /webhook/your-path)."},
            "authentication": {"type": "string", "options": ["none", "basic", "token"], "required": False, "description": "Authentication type for incoming requests."},
            "responseMode": {"type": "string", "options": ["immediate", "onLastNode"], "required": False, "description": "When to send the webhook response."},
            "responseData": {"type": "string", "options": ["firstEntryJson", "entireRunJson"], "required": False, "description": "What data to return in the webhook response."},
        },
    },
    {
        "type": "schedule",
        "name": "Scheduled Trigger",
        "parameters": {
            "cronExpression": {"type": "string", "required": True, "description": "Cron expression for scheduling (e.g., 0 9 * * *)."},
            "timezone": {"type": "string", "required": False, "description": "Timezone for the schedule (e.g., Asia/Kolkata)."},
        },
    },
    {
        "type": "send_email",
        "name": "Send Email",
        "parameters": {
            "provider": {"type": "string", "options": ["smtp", "gmail", "sendgrid"], "required": True, "description": "Email provider to use for sending."},
            "to": {"type": "string", "required": True, "description": "Recipient email address."},
            "subject": {"type": "string", "required": True, "description": "Email subject line."},
            "body": {"type": "string", "required": True, "description": "Email body (HTML allowed)."},
            "attachments": {"type": "array", "required": False, "description": "List of file URLs to attach."},
        },
    },
    {
        "type": "slack",
        "name": "Slack Notification",
        "parameters": {
            "webhookUrl": {"type": "string", "required": True, "description": "Slack webhook URL."},
            "channel": {"type": "string", "required": False, "description": "Slack channel (e.g., #notifications)."},
            "message": {"type": "string", "required": True, "description": "Message to send to Slack."},
        },
    },
    {
        "type": "api_request",
        "name": "API Request",
        "parameters": {
            "method": {"type": "string", "options": ["GET", "POST", "PUT", "DELETE"], "required": True, "description": "HTTP method for the request."},
            "url": {"type": "string", "required": True, "description": "API endpoint URL."},
            "headers": {"type": "object", "required": False, "description": "HTTP headers as a JSON object."},
            "body": {"type": "object", "required": False, "description": "Request body as a JSON object."},
        },
    },
    {
        "type": "if_else",
        "name": "Check Form Field",
        "parameters": {
            "conditions": {"type": "array", "required": True, "description": "List of conditions to check (left, operator, right)."},
        },
    },
    {
        "type": "loop",
        "name": "Loop Through Items",
        "parameters": {
            "inputArray": {"type": "string", "required": True, "description": "Array or list to loop through (e.g., {{data.items}})."},
            "maxIterations": {"type": "number", "required": False, "description": "Maximum number of iterations."},
        },
    },
    {
        "type": "postgres",
        "name": "Query Postgres",
        "parameters": {
            "query": {"type": "string", "required": True, "description": "SQL query to execute."},
        },
    },
    {
        "type": "firebase",
        "name": "Write to Firebase",
        "parameters": {
            "path": {"type": "string", "required": True, "description": "Firebase path (e.g., /users/{{data.userId}})."},
            "method": {"type": "string", "options": ["set", "update"], "required": True, "description": "Firebase write method."},
            "data": {"type": "object", "required": True, "description": "Data to write as a JSON object."},
        },
    },
    {
        "type": "redis",
        "name": "Redis Operation",
        "parameters": {
            "action": {"type": "string", "options": ["set", "get", "delete"], "required": True, "description": "Redis action to perform."},
            "key": {"type": "string", "required": True, "description": "Redis key."},
            "value": {"type": "string", "required": False, "description": "Value to set (for set action)."},
        },
    },
    {
        "type": "parse_csv",
        "name": "Parse CSV",
        "parameters": {
            "input": {"type": "string", "required": True, "description": "CSV file input or data."},
            "delimiter": {"type": "string", "required": False, "description": "CSV delimiter (default: ,)."},
        },
    },
    {
        "type": "pdf_extract",
        "name": "Extract PDF Text",
        "parameters": {
            "fileUrl": {"type": "string", "required": True, "description": "URL of the PDF file to extract text from."},
        },
    },
    {
        "type": "ai_summarizer",
        "name": "Summarize Text",
        "parameters": {
            "provider": {"type": "string", "options": ["openai", "huggingface"], "required": True, "description": "AI provider to use for summarization."},
            "promptTemplate": {"type": "string", "required": True, "description": "Prompt template for the AI model."},
        },
    },
    {
        "type": "airtable",
        "name": "Push to Airtable",
        "parameters": {
            "apiKey": {"type": "string", "required": True, "description": "Airtable API key."},
            "baseId": {"type": "string", "required": True, "description": "Airtable base ID."},
            "tableName": {"type": "string", "required": True, "description": "Airtable table name."},
            "record": {"type": "object", "required": True, "description": "Record data as a JSON object."},
        },
    },
    {
        "type": "s3file",
        "name": "S3 File Trigger",
        "parameters": {
            "bucket": {"type": "string", "required": True, "description": "S3 bucket name to watch for new files."},
            "prefix": {"type": "string", "required": False, "description": "Prefix (folder) to filter files."},
            "event": {"type": "string", "options": ["put", "delete"], "required": True, "description": "S3 event type to trigger on."},
        },
    },
    {
        "type": "fileupload",
        "name": "File Upload Trigger",
        "parameters": {
            "accept": {"type": "string", "required": False, "description": "Accepted file types (e.g., pdf,csv)."},
            "maxSizeMB": {"type": "number", "required": False, "description": "Maximum file size in MB."},
        },
    },
    {
        "type": "enrich",
        "name": "Enrich Data (API)",
        "parameters": {
            "apiUrl": {"type": "string", "required": True, "description": "API endpoint to enrich data."},
            "apiKey": {"type": "string", "required": False, "description": "API key for authentication."},
            "inputField": {"type": "string", "required": True, "description": "Field in the data to enrich."},
        },
    },
]


class SchemaRegistry:
    """Registry for managing node schemas."""

    def __init__(self, schemas: list[NodeSchema] | None = None):
        self._schemas: dict[str, NodeSchema] = {}
        for schema in schemas or []:
            self.register(schema)

    def register(self, schema: NodeSchema) -> None:
        """Register (or replace) the schema of a node type."""
        self._schemas[schema.type] = schema

    def get(self, node_type: str) -> NodeSchema | None:
        """Get the schema of a node type, or None if the type is unknown."""
        return self._schemas.get(node_type)

    def list_schemas(self) -> list[NodeSchema]:
        """All schemas in registration order."""
        return list(self._schemas.values())

    def __contains__(self, node_type: object) -> bool:
        return node_type in self._schemas


def build_default_registry() -> SchemaRegistry:
    """Build a registry holding the built-in catalogue."""
    return SchemaRegistry([NodeSchema.model_validate(doc) for doc in _CATALOGUE])


# Global registry
_schema_registry: SchemaRegistry | None = None


def get_schema_registry() -> SchemaRegistry:
    """Get or create the global schema registry."""
    global _schema_registry
    if _schema_registry is None:
        _schema_registry = build_default_registry()
    return _schema_registry


def get_schema(node_type: str) -> NodeSchema | None:
    """Look up a node type in the global registry."""
    return get_schema_registry().get(node_type)


def list_schemas() -> list[NodeSchema]:
    """List the global registry's schemas."""
    return get_schema_registry().list_schemas()


__all__ = [
    "NodeSchema",
    "ParameterKind",
    "ParameterSpec",
    "SchemaRegistry",
    "build_default_registry",
    "get_schema",
    "get_schema_registry",
    "list_schemas",
]
