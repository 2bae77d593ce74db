"""FastAPI application entrypoint. No business logic; only wiring and middleware."""

from dotenv import load_dotenv

load_dotenv()

import logging
import time
import uuid

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware

from blogapi.api.errors import register_exception_handlers
from blogapi.api.responses import TRACE_ID_HEADER
from blogapi.api.v1 import router as v1_router
from blogapi.core.config import API_VERSION, get_settings
from blogapi.core.logging_config import configure_logging

settings = get_settings()
configure_logging(settings.LOG_LEVEL)
logger = logging.getLogger("blogapi.access")

app = FastAPI(
    title="Blog API",
    version=API_VERSION,
    docs_url="/docs",
    redoc_url="/redoc",
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["GET", "POST", "PUT", "PATCH", "DELETE"],
    allow_headers=["Origin", "Content-Type", "Accept", "Authorization", TRACE_ID_HEADER],
)


@app.middleware("http")
async def trace_and_log(request: Request, call_next):
    """Attach a trace id to the request and response, and log one line per request."""
    trace_id = request.headers.get(TRACE_ID_HEADER) or str(uuid.uuid4())
    request.state.trace_id = trace_id
    started = time.perf_counter()
    response = await call_next(request)
    elapsed_ms = (time.perf_counter() - started) * 1000
    response.headers[TRACE_ID_HEADER] = trace_id
    logger.info(
        "%s %s %s %.1fms trace_id=%s",
        request.method,
        request.url.path,
        response.status_code,
        elapsed_ms,
        trace_id,
    )
    return response


register_exception_handlers(app)
app.include_router(v1_router, prefix=settings.API_V1_PREFIX)


@app.get("/")
def root() -> dict[str, str]:
    """Root route; minimal payload for discovery."""
    return {"message": "Blog API"}
