"""Task Tracking API — FastAPI application entry point.

Invariants:
    - Routes registered explicitly (no auto-discovery)
    - Global error handlers map TaskTrackError → structured JSON responses
    - CORS configured from settings (not hardcoded)
    - One JsonTaskStore per process, built on startup and injected into the service
    - Agent tools reachable two ways: REST (/api/v1/tools) and MCP over SSE (/mcp)

Design Decisions:
    - Lifespan over @app.on_event: FastAPI recommended pattern, cleaner cleanup
    - Store and service live on app.state, not in module globals: tests swap them
      through dependency overrides
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from tasktrack.api.error_handlers import register_error_handlers
from tasktrack.api.mcp_server import create_mcp_server
from tasktrack.api.routes import agent_tools, health, tasks
from tasktrack.config import get_settings
from tasktrack.infrastructure.observability import setup_logging
from tasktrack.infrastructure.task_store import JsonTaskStore
from tasktrack.services.task_lifecycle import TaskLifecycleService
from tasktrack.services.tool_dispatch import ToolDispatch

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup/shutdown lifecycle."""
    settings = get_settings()
    setup_logging(settings.log_level, settings.log_format)
    store = JsonTaskStore(settings.tasks_path)
    app.state.task_store = store
    app.state.task_service = TaskLifecycleService(store)
    logger.info("Task tracking API started")
    yield
    logger.info("Task tracking API shutting down")


app = FastAPI(
    title="Task Tracking API", version="1.0.0", lifespan=lifespan,
)

settings = get_settings()
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Routes — explicit registration
app.include_router(health.router)
app.include_router(tasks.router)
app.include_router(agent_tools.router)

# MCP over SSE: GET /mcp/sse, POST /mcp/messages/
mcp_server = create_mcp_server(lambda: ToolDispatch(app.state.task_service))
app.mount("/mcp", mcp_server.sse_app())

register_error_handlers(app)
