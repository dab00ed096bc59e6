import logging

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.trustedhost import TrustedHostMiddleware
from fastapi.responses import JSONResponse
from slowapi import _rate_limit_exceeded_handler
from slowapi.errors import RateLimitExceeded
from slowapi.middleware import SlowAPIMiddleware
from starlette.exceptions import HTTPException as StarletteHTTPException

from crm_insights.api.api import api_router
from crm_insights.core.config import get_settings
from crm_insights.core.database import Base, engine
from crm_insights.core.exceptions import CRMInsightsError
from crm_insights.core.logging_config import setup_logging
from crm_insights.core.middleware import RequestIDMiddleware, SecurityHeadersMiddleware
from crm_insights.core.rate_limit import limiter
from crm_insights.models import campaign, client, lead, payment  # noqa: F401

settings = get_settings()
setup_logging()
logger = logging.getLogger(__name__)

app = FastAPI(
    title=settings.PROJECT_NAME,
    docs_url="/docs" if settings.ENABLE_API_DOCS else None,
    redoc_url="/redoc" if settings.ENABLE_API_DOCS else None,
    openapi_url="/openapi.json" if settings.ENABLE_API_DOCS else None,
)
app.state.limiter = limiter
app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)
app.add_middleware(SlowAPIMiddleware)
app.add_middleware(RequestIDMiddleware)
app.add_middleware(SecurityHeadersMiddleware)
app.add_middleware(TrustedHostMiddleware, allowed_hosts=settings.ALLOWED_HOSTS)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.BACKEND_CORS_ORIGINS,
    allow_credentials=False,
    allow_methods=["GET", "POST", "OPTIONS"],
    allow_headers=["Content-Type", "x-request-id"],
)


@app.on_event("startup")
def on_startup() -> None:
    Base.metadata.create_all(bind=engine)
    logger.info("%s started (%s)", settings.PROJECT_NAME, settings.ENVIRONMENT)


@app.get("/health")
@limiter.limit(settings.HEALTH_RATE_LIMIT)
def health(request: Request):
    return {"status": "ok"}


@app.get("/api", include_in_schema=False)
def api_root():
    return {
        "name": settings.PROJECT_NAME,
        "version": "v1",
        "base": settings.API_V1_STR,
        "health": "/health",
    }


@app.get(settings.API_V1_STR, include_in_schema=False)
def api_v1_root():
    return {
        "base": settings.API_V1_STR,
        "endpoints": [
            "/analytics/dashboard",
            "/analytics/performance",
            "/reports/dashboard.csv",
            "/reports/dashboard.pdf",
        ],
    }


@app.exception_handler(CRMInsightsError)
async def crm_insights_exception_handler(request: Request, exc: CRMInsightsError):
    if exc.status_code >= 500:
        logger.error("%s on %s: %s", exc.code, request.url.path, exc.message)
    else:
        logger.warning("%s on %s: %s", exc.code, request.url.path, exc.message)
    return JSONResponse(status_code=exc.status_code, content={"detail": exc.to_dict()})


@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    if exc.status_code == 404:
        return JSONResponse(
            status_code=404,
            content={"detail": "Not Found", "path": str(request.url.path)},
        )
    return JSONResponse(status_code=exc.status_code, content={"detail": exc.detail})


app.include_router(api_router, prefix=settings.API_V1_STR)
