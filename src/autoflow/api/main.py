"""FastAPI application."""
from fastapi import FastAPI

from autoflow import __version__
from autoflow.api.routes import health, webhook, workflows
from autoflow.observability import setup_logging

setup_logging()

app = FastAPI(
    title="Autoflow",
    description="Workflow automation engine",
    version=__version__,
)

app.include_router(health.router, tags=["health"])
app.include_router(workflows.router, tags=["workflows"])
app.include_router(webhook.router, tags=["webhook"])


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(app, host="0.0.0.0", port=8000)
