# pyright: reportMissingTypeStubs=false
"""
Medical Center Appointments API.

Wires the resource routers under /api and translates every error into the
{success, message, data} envelope:

- AppError subclasses carry their own status (400/401/403/404)
- malformed bodies, paths and query values become 400
- anything unexpected becomes 500 "Internal server error" with no details

Run with: uvicorn main:app --app-dir backend/src
"""

import logging
from contextlib import asynccontextmanager
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from api import appointments, auth, doctors, medical_centers, specialties, users
from api.responses import ApiResponse
from core.constants import CORS_ORIGINS
from core.exceptions import AppError

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    handlers=[logging.StreamHandler()],
)

logger = logging.getLogger(__name__)

API_VERSION = "1.0.0"


@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info(f"🏥 Medical Center API {API_VERSION} ready")
    yield
    logger.info("🛑 Medical Center API stopped")


app = FastAPI(
    title="Medical Center Appointments",
    description="Directory of medical centers, specialties and doctors, with appointment booking",
    version=API_VERSION,
    docs_url="/docs",
    redoc_url="/redoc",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["GET", "POST", "PUT", "PATCH", "DELETE", "OPTIONS"],
    allow_headers=["*"],
)

_ERROR_RESPONSES = {
    400: {"description": "Validation error or slot conflict"},
    401: {"description": "Missing or invalid bearer token"},
    403: {"description": "Role not permitted"},
    404: {"description": "Resource not found"},
    500: {"description": "Internal server error"},
}

_ROUTERS = [
    (auth.router, "/api/auth", "authentication"),
    (users.router, "/api/users", "users"),
    (medical_centers.router, "/api/medical-centers", "medical-centers"),
    (specialties.router, "/api/specialties", "specialties"),
    (doctors.router, "/api/doctors", "doctors"),
    (appointments.router, "/api/appointments", "appointments"),
]

for router, prefix, tag in _ROUTERS:
    app.include_router(router, prefix=prefix, tags=[tag], responses=_ERROR_RESPONSES)


@app.get("/", summary="Service information")
async def root() -> dict[str, str]:
    return {
        "message": "Medical Center Appointments API",
        "version": API_VERSION,
        "status": "running",
    }


@app.get("/health", summary="Liveness probe")
async def health_check() -> dict[str, str]:
    return {"status": "healthy"}


def _envelope(status_code: int, message: str, data: object = None) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content=ApiResponse.error(message, data).model_dump(),
    )


@app.exception_handler(AppError)
async def app_error_handler(request: Request, exc: AppError):
    """Domain errors map to the status code their class declares."""
    log = logger.error if exc.status_code >= 500 else logger.info
    log(f"{type(exc).__name__} on {request.method} {request.url.path}: {exc.message}")
    return _envelope(exc.status_code, exc.message, exc.data)


@app.exception_handler(RequestValidationError)
async def request_validation_error_handler(request: Request, exc: RequestValidationError):
    """Report the first invalid field as "field: reason" with status 400."""
    errors = exc.errors()
    first = errors[0] if errors else {}
    location = ".".join(str(part) for part in first.get("loc", ()) if part != "body")
    message = first.get("msg", "Validation error")
    if location:
        message = f"{location}: {message}"
    logger.info(f"Rejected request on {request.method} {request.url.path}: {message}")
    return _envelope(400, message)


@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    """Unknown routes and disallowed methods still answer with the envelope."""
    return _envelope(exc.status_code, str(exc.detail))


@app.exception_handler(Exception)
async def unhandled_exception_handler(request: Request, exc: Exception):
    """Last resort: log the traceback, reveal nothing to the client."""
    logger.exception(f"Unhandled error on {request.method} {request.url.path}")
    return _envelope(500, "Internal server error")
