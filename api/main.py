"""
FastAPI application initialization and configuration.
"""

import logging
from contextlib import asynccontextmanager
from typing import Optional
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from core.config import settings
from api.dependencies import RecruitmentServices, build_services_from_settings
from api.routes import health
from api.routes.v1 import (
    analytics,
    candidates,
    email,
    postings,
    requirements,
    resumes,
)

from core.middleware import (
    ErrorHandlingMiddleware,
    setup_error_handlers,
    StructuredLoggingMiddleware,
    setup_logging,
)

# Setup structured logging (do this first, before anything else)
setup_logging(
    log_level=settings.log_level,
    json_logs=settings.json_logs,
)

logger = logging.getLogger(__name__)

RECRUITMENT_PREFIX = f"{settings.api_v1_prefix}/recruitment"


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Build the service graph and run the notification queue."""
    logger.info(f"Starting {settings.app_name} in {settings.app_env} environment")

    if getattr(app.state, "services", None) is None:
        app.state.services = build_services_from_settings(settings)
    services: RecruitmentServices = app.state.services

    await services.queue.start()

    yield

    logger.info(f"Shutting down {settings.app_name}")
    await services.queue.stop(drain=True)


def create_app(services: Optional[RecruitmentServices] = None) -> FastAPI:
    """
    Create the FastAPI application.

    Args:
        services: Prebuilt service graph; built from settings at startup if omitted
    """
    app = FastAPI(
        title=settings.app_name,
        description="HRMS recruitment: requirements, postings, candidates and notifications",
        version="0.1.0",
        docs_url="/docs" if settings.debug else None,
        redoc_url="/redoc" if settings.debug else None,
        lifespan=lifespan,
    )
    app.state.services = services

    # Setup error handlers (before middleware)
    setup_error_handlers(app)

    # Middleware executes in reverse order of registration
    app.add_middleware(
        StructuredLoggingMiddleware,
        log_request_body=settings.log_request_body,
        log_response_body=settings.log_response_body,
        max_body_size=settings.log_max_body_size,
    )
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.allowed_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    # Outermost - catches anything the handlers above did not
    app.add_middleware(ErrorHandlingMiddleware, debug=settings.debug)

    # Health check routes
    app.include_router(health.router, tags=["Health"])

    # API v1 routes
    app.include_router(requirements.router, prefix=RECRUITMENT_PREFIX, tags=["Requirements"])
    app.include_router(postings.router, prefix=RECRUITMENT_PREFIX, tags=["Postings"])
    app.include_router(candidates.router, prefix=RECRUITMENT_PREFIX, tags=["Candidates"])
    app.include_router(analytics.router, prefix=RECRUITMENT_PREFIX, tags=["Analytics"])
    app.include_router(resumes.router, prefix=RECRUITMENT_PREFIX, tags=["Resumes"])
    app.include_router(email.router, prefix=RECRUITMENT_PREFIX, tags=["Email"])

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "api.main:app",
        host="0.0.0.0",
        port=8000,
        reload=settings.debug,
        log_level=settings.log_level.lower(),
    )
