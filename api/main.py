"""
Barakah AI Agents - Main FastAPI Application.

REST API for running AI agents and workflow templates that publish their
output through external integrations.
"""
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
import logging
import time

from api import dependencies
from api.middleware import RateLimitMiddleware
from api.routes import agents, analytics, health, integrations, workflows
from core.domain.exceptions import AgentPlatformError
from core.infrastructure.logging import configure_logging
from core.settings import AppSettings


# Setup logging
configure_logging()
logger = logging.getLogger(__name__)


def create_app(settings: Optional[AppSettings] = None) -> FastAPI:
    """
    Build the FastAPI application.

    Args:
        settings: Settings to build dependencies from (defaults to the environment)
    """
    if settings is not None:
        dependencies.use_settings(settings)
    settings = dependencies.get_settings()

    app = FastAPI(
        title="Barakah AI Agents API",
        description="""
    AI agents that don't just generate content, they execute workflows.

    Features:
    - Built-in agents (think, plan, execute, integrate, verify)
    - Workflow templates with variable substitution
    - Gmail, LinkedIn, Facebook, Twitter, Stripe, HubSpot and WordPress integrations
    - Execution progress polling and dashboard analytics
    """,
        version="1.0.0",
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_url="/openapi.json",
    )

    # =========================================================================
    # CORS MIDDLEWARE
    # =========================================================================

    app.add_middleware(
        CORSMiddleware,
        allow_origins=[settings.server.frontend_url],
        allow_credentials=True,
        allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS", "PATCH"],
        allow_headers=["*"],
        expose_headers=["Retry-After", "X-RateLimit-Limit", "X-RateLimit-Remaining"],
    )

    # =========================================================================
    # RATE LIMITING + REQUEST LOGGING MIDDLEWARE
    # =========================================================================

    app.middleware("http")(RateLimitMiddleware(settings.rate_limit))

    @app.middleware("http")
    async def log_requests(request: Request, call_next):
        """Log all requests with timing."""
        start_time = time.time()

        logger.info(f"→ {request.method} {request.url.path}")

        response = await call_next(request)

        duration = time.time() - start_time
        logger.info(
            f"← {request.method} {request.url.path} "
            f"[{response.status_code}] ({duration:.3f}s)"
        )

        return response

    # =========================================================================
    # EXCEPTION HANDLERS
    # =========================================================================

    @app.exception_handler(AgentPlatformError)
    async def platform_exception_handler(request: Request, exc: AgentPlatformError):
        logger.warning(f"{request.method} {request.url.path} failed: {exc.message}")
        return JSONResponse(
            status_code=exc.status_code,
            content={"success": False, "error": exc.message, "path": request.url.path},
        )

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(request: Request, exc: RequestValidationError):
        return JSONResponse(
            status_code=400,
            content={
                "success": False,
                "error": "Invalid request data",
                "details": jsonable_errors(exc),
            },
        )

    @app.exception_handler(Exception)
    async def global_exception_handler(request: Request, exc: Exception):
        """Handle all uncaught exceptions."""
        logger.error(f"Unhandled exception: {exc}", exc_info=True)

        return JSONResponse(
            status_code=500,
            content={
                "success": False,
                "error": "Internal server error",
                "detail": str(exc),
                "path": request.url.path,
            },
        )

    # =========================================================================
    # STARTUP/SHUTDOWN EVENTS
    # =========================================================================

    @app.on_event("startup")
    async def startup_event():
        """Run on application startup."""
        logger.info("🤖 Barakah AI Agents API starting up...")
        engine = dependencies.get_database_engine()
        if engine is not None:
            from core.infrastructure.database import init_database
            await init_database(engine)
        if not settings.llm.enabled:
            logger.warning("OPENAI_API_KEY not set - agents will produce mock content")
        logger.info("📚 Swagger UI available at: /docs")

    @app.on_event("shutdown")
    async def shutdown_event():
        """Run on application shutdown."""
        logger.info("👋 Barakah AI Agents API shutting down...")
        await dependencies.get_supervisor().shutdown()
        engine = dependencies.get_database_engine()
        if engine is not None:
            from core.infrastructure.database import close_database
            await close_database(engine)

    # =========================================================================
    # INCLUDE ROUTERS
    # =========================================================================

    app.include_router(health.router, tags=["Health"])
    app.include_router(agents.router, prefix="/api/agents", tags=["Agents"])
    app.include_router(workflows.router, prefix="/api/workflows", tags=["Workflows"])
    app.include_router(integrations.router, prefix="/api/integrations", tags=["Integrations"])
    app.include_router(analytics.router, prefix="/api/analytics", tags=["Analytics"])

    @app.get("/", tags=["Root"])
    async def root():
        """API root endpoint."""
        return {
            "message": "Barakah AI Agents API",
            "version": "1.0.0",
            "docs": "/docs",
            "health": "/health",
        }

    return app


def jsonable_errors(exc: RequestValidationError):
    """Validation errors without the raw input objects pydantic attaches."""
    return [
        {"loc": list(error.get("loc", ())), "msg": error.get("msg"), "type": error.get("type")}
        for error in exc.errors()
    ]


app = create_app()


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=8000)
