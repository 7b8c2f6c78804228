"""
Autoflow - workflow execution engine.

Users compose a directed graph of typed, configurable action nodes and run it
asynchronously, on demand or from an inbound webhook.

Architecture:
- engine/: schema registry, config validator, graph resolver, graph executor
- actions/: per-node-type action handlers and their dispatch registry
- storage/: Redis-backed workflow store, run ledger, credential store
- integrations/: Celery app, job queue and worker task
- services/: trigger paths (manual run, webhook) and the job worker
- api/: FastAPI surface
"""

__version__ = "0.1.0"
