"""
storefront/main.py

Purpose: Application entry point

- Builds the FastAPI app (create_app) around an explicit AppContext
- Loads configuration and logging
- Registers API routes (auth, cart, favorites, menu) and error handlers
- Manages application lifecycle (MongoDB connect/close, indexes)
- No business logic should be written here
"""

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from contextlib import asynccontextmanager
from typing import Optional
import time

from storefront.core.config import settings, validate_settings
from storefront.core.context import AppContext
from storefront.core.errors import add_exception_handlers
from storefront.core.logging import setup_logging, get_logger
from storefront.db.mongo import create_app_context, close_mongo_connection, check_database_health
from storefront.db.indexes import create_indexes
from storefront.api import auth, cart, favorites, menu

VERSION = "1.0.0"

# Initialize logging first
setup_logging()
logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan manager.
    Connects to MongoDB unless a context was injected (tests, scripts).
    """
    logger.info("🚀 Starting storefront API...")

    owns_context = app.state.context is None

    try:
        if owns_context:
            logger.info("Validating configuration...")
            validate_settings(settings)
            logger.info("✅ Configuration validated")

            logger.info("Connecting to MongoDB...")
            app.state.context = await create_app_context(settings)
            logger.info("✅ MongoDB connected")

        logger.info("Creating database indexes...")
        await create_indexes(app.state.context)
        logger.info("✅ Database indexes created")

        logger.info(f"Environment: {app.state.context.settings.ENVIRONMENT}")

    except Exception as e:
        logger.critical(f"Failed to start application: {str(e)}", exc_info=True)
        raise

    yield  # Application runs here

    logger.info("🛑 Shutting down storefront API...")

    if owns_context:
        try:
            await close_mongo_connection(app.state.context)
            logger.info("✅ MongoDB connection closed")
        except Exception as e:
            logger.error(f"Error during shutdown: {str(e)}", exc_info=True)


def create_app(context: Optional[AppContext] = None) -> FastAPI:
    """
    Builds the application.

    Args:
        context: Pre-built AppContext; when omitted one is created at startup
            from the environment settings.
    """
    config = context.settings if context is not None else settings

    app = FastAPI(
        title="Storefront API",
        description="Session-authenticated food ordering API: accounts, cart, favorites, menu",
        version=VERSION,
        lifespan=lifespan,
        debug=config.DEBUG,
        docs_url="/docs" if config.is_development else None,  # Disable docs in production
        redoc_url="/redoc" if config.is_development else None,
    )
    app.state.context = context

    # Cookies are sent cross-origin by the frontend, so origins must be explicit
    app.add_middleware(
        CORSMiddleware,
        allow_origins=config.CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
        allow_headers=["*"],
    )

    @app.middleware("http")
    async def add_process_time_header(request: Request, call_next):
        """Add processing time header to all responses."""
        start_time = time.time()
        response = await call_next(request)
        process_time = time.time() - start_time
        response.headers["X-Process-Time"] = str(process_time)

        if process_time > 2.0:
            logger.warning(
                f"Slow request detected: {request.method} {request.url.path}",
                extra={"process_time": process_time}
            )

        return response

    add_exception_handlers(app)

    prefix = config.API_PREFIX
    app.include_router(auth.router, prefix=f"{prefix}/auth", tags=["Auth"])
    app.include_router(auth.session_router, tags=["Auth"])
    app.include_router(cart.router, prefix=f"{prefix}/cart", tags=["Cart"])
    app.include_router(favorites.router, prefix=f"{prefix}/favorites", tags=["Favorites"])
    app.include_router(menu.router, prefix=f"{prefix}/menu", tags=["Menu"])

    @app.get("/", tags=["Health"])
    async def root():
        """Root endpoint - basic info."""
        return {
            "name": "Storefront API",
            "version": VERSION,
            "status": "running",
            "environment": config.ENVIRONMENT
        }

    @app.get("/health", tags=["Health"])
    async def health_check(request: Request):
        """
        Health check endpoint; reports database connectivity.
        """
        db_healthy = await check_database_health(request.app.state.context.database)
        health_status = {
            "status": "healthy" if db_healthy else "unhealthy",
            "timestamp": time.time(),
            "environment": config.ENVIRONMENT,
            "version": VERSION,
            "checks": {"database": "healthy" if db_healthy else "unhealthy"}
        }
        return JSONResponse(content=health_status, status_code=200 if db_healthy else 503)

    @app.get("/ready", tags=["Health"])
    async def readiness_check(request: Request):
        """
        Readiness probe - indicates if app is ready to receive traffic.
        """
        if await check_database_health(request.app.state.context.database):
            return {"status": "ready"}
        return JSONResponse(
            status_code=503,
            content={"status": "not_ready", "reason": "database_unavailable"}
        )

    @app.get("/live", tags=["Health"])
    async def liveness_check():
        """
        Liveness probe - indicates if app is alive.
        """
        return {"status": "alive"}

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "storefront.main:app",
        host="0.0.0.0",
        port=8000,
        reload=settings.is_development,
        log_level=settings.LOG_LEVEL.lower()
    )
