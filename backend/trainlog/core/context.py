"""
Application context.

One AppContext is built per process in the FastAPI lifespan and stored on
``app.state``. Handlers reach it through ``get_context`` instead of importing
module-level engines or clients.
"""
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Callable, Optional

from fastapi import Request
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker

from trainlog.core.config import Settings
from trainlog.core.database import create_engine_and_session, init_db
from trainlog.core.logging import get_logger
from trainlog.services.timeline.locale import DateFormatter, get_formatter

logger = get_logger(__name__)


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


@dataclass
class AppContext:
    """Process-wide collaborators shared by request handlers."""
    settings: Settings
    engine: AsyncEngine
    session_factory: async_sessionmaker[AsyncSession]
    formatter: DateFormatter
    clock: Callable[[], datetime] = field(default=utc_now)

    @classmethod
    def create(
        cls,
        settings: Settings,
        clock: Optional[Callable[[], datetime]] = None,
    ) -> "AppContext":
        """
        Build a context with a fresh engine for ``settings.DATABASE_URL``.

        Raises:
            InvalidParameterError: if DISPLAY_LOCALE is not supported
        """
        formatter = get_formatter(settings.DISPLAY_LOCALE)
        engine, session_factory = create_engine_and_session(
            settings.DATABASE_URL,
            echo=settings.SQL_ECHO,
        )
        return cls(
            settings=settings,
            engine=engine,
            session_factory=session_factory,
            formatter=formatter,
            clock=clock or utc_now,
        )

    async def start(self) -> None:
        await init_db(self.engine)
        logger.info("Database initialized", dialect=self.engine.dialect.name)

    async def close(self) -> None:
        await self.engine.dispose()
        logger.info("Database engine disposed")


def get_context(request: Request) -> AppContext:
    """FastAPI dependency returning the process context."""
    return request.app.state.context
