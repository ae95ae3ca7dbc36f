# dailylog/main.py

import os
import sys
import logging
import time
from pathlib import Path
from dotenv import load_dotenv

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.exceptions import RequestValidationError
from fastapi.responses import FileResponse
from fastapi.staticfiles import StaticFiles

# Load .env into os.environ
load_dotenv()

# --- Configure logging FIRST ---
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
LOG_FILE = os.getenv("LOG_FILE", "app.log")

handlers = [logging.StreamHandler(sys.stdout)]
if LOG_FILE:
    handlers.append(logging.FileHandler(LOG_FILE, mode="a"))

logging.basicConfig(
    level=getattr(logging, LOG_LEVEL, logging.INFO),
    format="%(asctime)s [%(name)s:%(levelname)s] %(message)s",
    handlers=handlers,
)

logger = logging.getLogger("dailylog")
logger.setLevel(getattr(logging, LOG_LEVEL, logging.INFO))

# Set uvicorn loggers to same level
logging.getLogger("uvicorn.error").setLevel(getattr(logging, LOG_LEVEL, logging.INFO))
logging.getLogger("uvicorn.access").setLevel(getattr(logging, LOG_LEVEL, logging.INFO))

logger.info(f"Logging configured at {LOG_LEVEL} level")

from dailylog.api.logs import router as logs_router
from dailylog.core.database import connection_manager
from dailylog.core.exceptions import (
    LogServiceError,
    LogValidationError,
    log_service_exception_handler,
)

STATIC_DIR = Path(__file__).parent / "static"

app = FastAPI(
    title       = "Daily Log API",
    version     = "1.0.0",
    description = "Dated journal notes, typed or dictated"
)

@app.middleware("http")
async def log_requests(request: Request, call_next):
    start_time = time.time()
    logger.info(f"📥 Incoming request: {request.method} {request.url.path}")

    if logger.isEnabledFor(logging.DEBUG):
        body = await request.body()
        if body and len(body) < 500:
            try:
                logger.debug(f"Body: {body.decode('utf-8')}")
            except UnicodeDecodeError:
                logger.debug("Body: <binary data>")

    response = await call_next(request)

    process_time = time.time() - start_time
    logger.info(f"✅ Request completed in {process_time:.3f}s with status {response.status_code}")
    return response

# --- Validation-error handler: same {error} shape as every other failure ---
def _describe_validation_errors(errors) -> str:
    parts = []
    for err in errors:
        loc = ".".join(str(p) for p in err.get("loc", ()) if p != "body")
        parts.append(f"{loc}: {err.get('msg')}" if loc else str(err.get("msg")))
    return "; ".join(parts) or "Invalid request"

@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    message = _describe_validation_errors(exc.errors())
    logger.warning(f"❗️ Validation error for {request.method} {request.url.path}: {message}")
    return await log_service_exception_handler(request, LogValidationError(message))

app.add_exception_handler(LogServiceError, log_service_exception_handler)

app.add_middleware(
    CORSMiddleware,
    allow_origins     = ["*"],
    allow_credentials = True,
    allow_methods     = ["*"],
    allow_headers     = ["*"],
)

app.include_router(logs_router, tags=["Logs"])
app.mount("/static", StaticFiles(directory=STATIC_DIR), name="static")

@app.on_event("startup")
async def startup_event():
    logger.info("🚀 Starting Daily Log API")
    logger.info(f"📋 Env configuration: {{'DATABASE_URL': {bool(os.getenv('DATABASE_URL'))}}}")
    if not os.getenv("DATABASE_URL"):
        logger.warning("⚠️  DATABASE_URL not set → using local default storage")

@app.on_event("shutdown")
async def shutdown_event():
    connection_manager.dispose()
    logger.info("👋 Daily Log API stopped")

# --- Page & health endpoints ---
@app.get("/", include_in_schema=False)
async def index():
    """Serve the log page."""
    return FileResponse(STATIC_DIR / "index.html")

@app.get("/health", tags=["Health"])
async def health_check():
    return {"status": "healthy"}
