"""
FastAPI application entry point.

Uses structured logging from ghsync.logging.
Includes security validation on startup.
"""

from fastapi import FastAPI, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware
from fastapi.responses import JSONResponse

from ghsync.db import db
from ghsync.logging import RequestLoggingMiddleware, configure_logging, get_logger
from ghsync.security import SecurityConfigError, get_encryption_service, validate_security_config

from .config import get_settings
from .error_handlers import register_exception_handlers
from .middleware.request_id import RequestIDMiddleware
from .routers import auth as auth_router
from .routers import github as github_router

# Configure structured logging
settings = get_settings()
log_level = "DEBUG" if settings.debug else "INFO"
configure_logging(level=log_level)
logger = get_logger("api")


def validate_security_on_startup():
    """Validate security configuration before starting the app."""
    try:
        result = validate_security_config(
            session_secret=settings.session_secret,
            encryption_key=settings.token_encryption_key,
            cors_origins=settings.cors_origins_list,
            require_encryption=settings.require_encryption,
            strict=settings.strict_security,
        )

        for warning in result.warnings:
            logger.warning("security_warning", message=warning)

        config_errors, config_warnings = settings.validate_production_config()
        for warning in config_warnings:
            logger.warning("config_warning", message=warning)
        if settings.is_production and config_errors:
            raise SecurityConfigError(config_errors)

        logger.info("security_validation_passed")
        return True

    except SecurityConfigError as e:
        for error in e.errors:
            logger.error("security_config_error", error=error)
        raise


def create_app() -> FastAPI:
    # Integration routes live under /api/github
    github_prefix = f"{settings.api_prefix}/github"

    app = FastAPI(title=settings.app_name, debug=settings.debug)

    # CORS middleware - credentials are required for the session cookie
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins_list,
        allow_credentials=True,
        allow_methods=["GET", "DELETE", "OPTIONS"],
        allow_headers=[
            "Content-Type",
            "Accept",
            "Accept-Encoding",
            "Origin",
            "X-Requested-With",
            "X-Request-ID",
        ],
        expose_headers=["X-Request-ID"],
    )

    # GZip compression for responses > 500 bytes
    app.add_middleware(GZipMiddleware, minimum_size=500)

    # Structured request logging middleware
    app.add_middleware(RequestLoggingMiddleware)

    # Request ID middleware (outermost, so request logs carry the id)
    app.add_middleware(RequestIDMiddleware)

    # Exception handlers
    register_exception_handlers(app)

    @app.on_event("startup")
    async def startup_event():
        """Initialize services on startup."""
        logger.info("app_startup", app_name=settings.app_name, env=settings.env)

        # Security errors are only survivable in debug mode outside production
        allow_security_bypass = settings.debug and not settings.is_production
        try:
            validate_security_on_startup()
        except SecurityConfigError:
            if not allow_security_bypass:
                logger.error(
                    "security_validation_failed_fatal",
                    message="Security validation failed. Set valid secrets or use ENV=development with DEBUG=true to bypass.",
                )
                raise
            logger.warning(
                "security_validation_skipped",
                message="Security validation bypassed (DEBUG=true and ENV!=production)",
            )

        db.initialize(settings.database_url)
        logger.info("database_initialized")

        if settings.db_create_tables:
            db.create_all_tables()
            logger.info("database_tables_created")

        encryption = get_encryption_service()
        if encryption.is_available:
            logger.info("encryption_initialized")
        else:
            if settings.require_encryption:
                raise RuntimeError("Encryption required but not available")
            logger.warning("encryption_unavailable")

    @app.on_event("shutdown")
    async def shutdown_event():
        """Cleanup on shutdown."""
        logger.info("app_shutdown")

    @app.get("/", tags=["health"])
    def root():
        return {"message": "Server is running"}

    @app.get("/health", tags=["health"])
    def health_check():
        """
        Health check endpoint (liveness).

        Returns minimal information to avoid exposing infrastructure details.
        """
        return {"status": "ok"}

    @app.get("/health/ready", tags=["health"])
    def readiness_check():
        """
        Readiness check endpoint.

        Returns 200 if the database answers, 503 if not.
        """
        database = db.health_check()
        if not database["healthy"]:
            logger.warning("readiness_check_failed", error=database["error"])
            return JSONResponse(
                status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
                content={"status": "not_ready", "checks": {"database": False}},
            )

        return {"status": "ready", "checks": {"database": True}}

    app.include_router(auth_router.router, prefix=github_prefix)
    app.include_router(github_router.router, prefix=github_prefix)

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("backend.app.main:app", host="0.0.0.0", port=settings.port, reload=settings.debug)
