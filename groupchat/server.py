"""Main FastAPI server for the group chat relay.

This module wires both transports to one shared chat room:

- REST endpoints for health checks (/healthz, /)
- WebSocket endpoint for the structured JSON protocol (/ws)
- Line-protocol listener on a Unix domain socket (or TCP)
- Graceful shutdown that disconnects every session

Server Lifecycle:
    1. On startup: validate config, build runtime deps, start the relay
       worker and bind the line socket (bind failure aborts startup)
    2. Accept WebSocket and line-protocol connections
    3. On shutdown: stop the line listener, close every session, stop the relay

Example:
    Run directly with uvicorn:
        $ uvicorn groupchat.server:app --host 0.0.0.0 --port 8000

    Or programmatically:
        from groupchat.server import app
        import uvicorn
        uvicorn.run(app, host="0.0.0.0", port=8000)
"""

from __future__ import annotations

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, WebSocket
from fastapi.responses import ORJSONResponse

from .config import WS_PATH
from .helpers.validation import validate_env
from .logging import configure_logging
from .runtime import RuntimeDeps, build_runtime_deps
from .handlers.websocket import handle_websocket_connection

logger = logging.getLogger(__name__)

configure_logging()
validate_env()


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Build and start runtime services before accepting traffic."""
    runtime_deps = build_runtime_deps()
    await runtime_deps.start()
    app.state.runtime_deps = runtime_deps
    logger.info("group chat relay ready")
    try:
        yield
    finally:
        await runtime_deps.shutdown()
        logger.info("group chat relay stopped")


app = FastAPI(default_response_class=ORJSONResponse, lifespan=lifespan)


def _runtime_deps(app_state) -> RuntimeDeps:
    runtime_deps = getattr(app_state, "runtime_deps", None)
    if runtime_deps is None:
        raise RuntimeError("Runtime dependencies are not initialized")
    return runtime_deps


@app.get("/")
async def root(request: Request):
    """Root endpoint for load balancer health checks."""
    return _runtime_deps(request.app.state).health()


@app.get("/healthz")
async def healthz(request: Request):
    """Health check endpoint."""
    return _runtime_deps(request.app.state).health()


@app.get("/favicon.ico", status_code=204)
async def favicon():
    """Suppress favicon requests from browsers/probes."""
    return None


@app.websocket(WS_PATH)
async def websocket_endpoint(websocket: WebSocket):
    """Structured-protocol chat endpoint."""
    await handle_websocket_connection(websocket, _runtime_deps(websocket.app.state))
