import logging

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from zoom_notify.config import settings
from zoom_notify.middleware import RequestSizeLimitMiddleware, SecurityHeadersMiddleware
from zoom_notify.response import INTERNAL_ERROR, notify_error, utc_timestamp, validation_error
from zoom_notify.routers import notifications

SERVICE_NAME = "zoom-notifications"
API_VERSION = "1.0.0"

logger = logging.getLogger(__name__)

logging.basicConfig(
    level=settings.log_level.upper(),
    format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
)

app = FastAPI(
    title="Zoom Notifications",
    description="Relay notifications to Zoom Team Chat users, channels and groups.",
    version=API_VERSION,
    docs_url=None,
    redoc_url=None,
    openapi_url=None,
)

# CORS
_cors_origins = (
    [o.strip() for o in settings.cors_origins.split(",") if o.strip()]
    if settings.cors_origins
    else ["*"]
)
app.add_middleware(
    CORSMiddleware,
    allow_origins=_cors_origins,
    allow_methods=["GET", "POST"],
    allow_headers=["*"],
)

app.add_middleware(RequestSizeLimitMiddleware)
app.add_middleware(SecurityHeadersMiddleware)


# --- Exception Handlers ---


@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    return JSONResponse(
        status_code=exc.status_code,
        content={"success": False, "error": exc.detail},
    )


@app.exception_handler(Exception)
async def general_exception_handler(request: Request, exc: Exception):
    logger.error("Unhandled error on %s %s", request.method, request.url.path, exc_info=exc)
    if request.url.path == "/validate":
        return validation_error(500, INTERNAL_ERROR)
    return notify_error(500, INTERNAL_ERROR)


# --- Routes ---

app.include_router(notifications.router)


@app.get("/health", summary="Health check")
async def health():
    return {
        "status": "healthy",
        "service": SERVICE_NAME,
        "version": API_VERSION,
        "timestamp": utc_timestamp(),
    }
