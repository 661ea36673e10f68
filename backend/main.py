# ---------------------------------------------------------------------------
# Author  : Blog API maintainers
# Version : 20261016v1
# ---------------------------------------------------------------------------
"""
FastAPI application.

Responsibilities
----------------
* Instantiate the FastAPI app.
* Register CORS and request-logging middleware.
* Register the error handlers that turn application errors into JSON.
* Mount the two feature routers (auth, posts).
* Create the database and tables on startup (idempotent).
* Expose a /health endpoint for container liveness checks.

Run with:
    uvicorn main:app --app-dir backend
"""

import asyncio
import time

from fastapi import FastAPI, Request
from starlette.middleware.base import BaseHTTPMiddleware
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import Response

from auth.router import router as auth_router
from posts.router import router as posts_router
from core.config import settings
from core.errors import register_error_handlers
from core.logger import logger
from core.security import get_client_ip
from database import init_db

app = FastAPI(title="Blog API", version="1.0.0")

# ---------------------------------------------------------------------------
# CORS
# ---------------------------------------------------------------------------
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_methods=["GET", "POST", "PUT", "DELETE"],
    allow_headers=["Authorization", "Content-Type"],
)


# ---------------------------------------------------------------------------
# Request-logging middleware
# ---------------------------------------------------------------------------
# Logs every inbound request: method, path, client IP, status, latency.
# Request bodies (passwords, post content) are NOT echoed.


class _RequestLogMiddleware(BaseHTTPMiddleware):
    """Log method, path, client IP, response status and latency (ms)."""

    async def dispatch(self, request: Request, call_next) -> Response:
        start = time.perf_counter()
        response: Response = await call_next(request)
        elapsed_ms = (time.perf_counter() - start) * 1000

        logger.info(
            "%s %s | client=%s status=%d latency=%.1fms",
            request.method,
            request.url.path,
            get_client_ip(request),
            response.status_code,
            elapsed_ms,
        )
        return response


app.add_middleware(_RequestLogMiddleware)

# ---------------------------------------------------------------------------
# Errors
# ---------------------------------------------------------------------------
register_error_handlers(app)

# ---------------------------------------------------------------------------
# Routers
# ---------------------------------------------------------------------------
app.include_router(auth_router)
app.include_router(posts_router)

# ---------------------------------------------------------------------------
# Lifecycle & health check
# ---------------------------------------------------------------------------


@app.on_event("startup")
async def _on_startup():
    logger.info("Blog API starting up")
    # init_db blocks on database I/O
    await asyncio.to_thread(init_db)


@app.on_event("shutdown")
async def _on_shutdown():
    logger.info("Blog API shutting down")


@app.get("/health")
def health():
    return {"status": "ok"}
