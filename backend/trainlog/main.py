"""
Trainlog Backend - FastAPI Application
"""
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from trainlog.core.config import Settings, settings as default_settings
from trainlog.core.context import AppContext
from trainlog.core.exceptions import TrainlogError
from trainlog.core.logging import setup_logging, get_logger
from trainlog.api import dashboard, timeline, workouts

logger = get_logger(__name__)


def create_app(
    settings: Optional[Settings] = None,
    context: Optional[AppContext] = None,
) -> FastAPI:
    """
    Build the application.

    Args:
        settings: Settings to use; defaults to values from the environment
        context: Prebuilt context (tests inject one with a fixed clock)
    """
    settings = settings or (context.settings if context else default_settings)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """Application lifespan events."""
        # Startup
        setup_logging(settings)
        logger.info("Starting Trainlog Backend", version="1.0.0")
        app.state.context = context or AppContext.create(settings)
        await app.state.context.start()

        yield

        # Shutdown
        logger.info("Shutting down Trainlog Backend")
        await app.state.context.close()

    app = FastAPI(
        title="Trainlog API",
        description="Personal workout log: runs, weight training and weekly history",
        version="1.0.0",
        lifespan=lifespan,
    )

    # CORS middleware
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.exception_handler(TrainlogError)
    async def trainlog_error_handler(request: Request, exc: TrainlogError):
        logger.warning(
            "Request failed",
            path=request.url.path,
            error_type=type(exc).__name__,
            error=exc.message,
        )
        return JSONResponse(
            status_code=exc.status_code,
            content={"detail": exc.message},
        )

    # Include routers
    app.include_router(workouts.router, prefix="/api/workouts", tags=["workouts"])
    app.include_router(timeline.router, prefix="/api/timeline", tags=["timeline"])
    app.include_router(dashboard.router, prefix="/api/dashboard", tags=["dashboard"])

    @app.get("/health")
    async def health_check():
        """Health check endpoint."""
        return {"status": "healthy", "service": "trainlog-backend"}

    return app


app = create_app()
