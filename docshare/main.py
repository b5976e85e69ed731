"""
docshare FastAPI application — share link builder and public viewer.
"""
import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from .routers.share_router import router as share_router
from .routers.view_router import router as view_router

from .config import get_settings
from .middleware.rate_limit import RateLimitMiddleware
from .utils.logs import configure_logging

settings = get_settings()
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    configure_logging()
    logger.info("docshare starting (%s), links point at %s", settings.environment, settings.share_base_url)
    yield


app = FastAPI(
    title="docshare API",
    description=(
        "Shareable estimate, invoice and booking links.\n\n"
        "- `POST /share/*` builds a link whose query string carries the whole document\n"
        "- `GET /view/*` and `GET /book/*` render it without any storage\n"
    ),
    version="1.0.0",
    docs_url="/docs" if settings.environment != "production" else None,
    redoc_url="/redoc" if settings.environment != "production" else None,
    lifespan=lifespan,
)

app.add_middleware(RateLimitMiddleware)

# Add EXTRA_ALLOWED_ORIGINS (comma-separated) for preview/staging front-ends.
_base_origins = [settings.share_base_url.rstrip("/")]
_dev_origins = [
    "http://localhost:3000",
    "http://localhost:8081",
    "http://127.0.0.1:3000",
    "http://127.0.0.1:8081",
]
_extra_origins = [o.strip() for o in settings.extra_allowed_origins.split(",") if o.strip()]

ALLOWED_ORIGINS = _base_origins + _extra_origins + (
    _dev_origins if settings.environment != "production" else []
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=ALLOWED_ORIGINS,
    allow_credentials=False,
    allow_methods=["GET", "POST"],
    allow_headers=["*"],
)

# 422 details leave out the rejected input; NaN or Infinity in it is not JSON-serialisable.
@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    errors = [{k: v for k, v in err.items() if k not in ("input", "ctx")} for err in exc.errors()]
    return JSONResponse(status_code=422, content={"detail": jsonable_encoder(errors)})


# Routers
app.include_router(share_router)
app.include_router(view_router)


@app.get("/", tags=["Health"])
async def root():
    return {"service": "docshare", "version": app.version, "status": "running", "docs": app.docs_url}


@app.api_route("/health", methods=["GET", "HEAD"], tags=["Health"])
async def health():
    return {
        "status": "ok",
        "environment": settings.environment,
        "share_base_url": settings.share_base_url,
    }
