"""Interview Experience platform — FastAPI Application Entry Point."""

import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from slowapi.errors import RateLimitExceeded
from starlette.exceptions import HTTPException as StarletteHTTPException

from interviewexp.config import settings
from interviewexp.database import engine, Base
from interviewexp.errors import AppError
from interviewexp.middleware.rate_limit import limiter
from interviewexp.routers import auth, users, experiences, admin, comments, chats, companies
from interviewexp.schemas.common import envelope, error_envelope
import interviewexp.models  # noqa: F401  (registers every table on Base.metadata)

logging.basicConfig(
    level=settings.LOG_LEVEL,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)

# Create all tables on startup
Base.metadata.create_all(bind=engine)

_cors_origins = [o.strip() for o in settings.ALLOWED_ORIGINS.split(",") if o.strip()]

app = FastAPI(
    title="Interview Experience API",
    description="Moderated interview experiences, comments and direct messages for college students.",
    version="1.0.0",
    docs_url="/docs",
    redoc_url="/redoc",
)

# Rate limiting
app.state.limiter = limiter

# CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=_cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# ── Error handlers: every failure leaves in the {success, message, error} envelope ──

@app.exception_handler(AppError)
async def app_error_handler(request: Request, exc: AppError):
    return JSONResponse(status_code=exc.status_code, content=error_envelope(exc.message, exc.error))


@app.exception_handler(RequestValidationError)
async def validation_error_handler(request: Request, exc: RequestValidationError):
    errors = exc.errors()
    if errors:
        first = errors[0]
        field = ".".join(str(part) for part in first.get("loc", ()) if part != "body")
        message = f"{field}: {first.get('msg')}" if field else first.get("msg", "Invalid request")
    else:
        message = "Invalid request"
    return JSONResponse(status_code=400, content=error_envelope(message, "Validation Error"))


@app.exception_handler(StarletteHTTPException)
async def http_error_handler(request: Request, exc: StarletteHTTPException):
    message = exc.detail if isinstance(exc.detail, str) else "Request failed"
    error = "Not Found" if exc.status_code == 404 else "HTTP Error"
    return JSONResponse(status_code=exc.status_code, content=error_envelope(message, error))


@app.exception_handler(RateLimitExceeded)
async def rate_limit_handler(request: Request, exc: RateLimitExceeded):
    return JSONResponse(
        status_code=429,
        content=error_envelope(f"Rate limit exceeded: {exc.detail}", "Too Many Requests"),
    )


@app.exception_handler(Exception)
async def unhandled_error_handler(request: Request, exc: Exception):
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    return JSONResponse(
        status_code=500,
        content=error_envelope("Something went wrong", "Internal Server Error"),
    )


# Routers
app.include_router(auth.router)
app.include_router(users.router)
app.include_router(experiences.router)
app.include_router(admin.router)
app.include_router(comments.router)
app.include_router(chats.router)
app.include_router(companies.router)


@app.get("/")
def root():
    return envelope({"name": "Interview Experience API", "version": "1.0.0", "docs": "/docs"})


@app.get("/health")
def health():
    return envelope({"status": "ok"}, message="Server is running")
