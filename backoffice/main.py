import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from backoffice import __version__
from backoffice.core.config import get_settings
from backoffice.core.logging import configure_logging
from backoffice.infrastructure.database import dispose_engine, init_db
from backoffice.interfaces.http import create_api_router
from backoffice.interfaces.http.errors import register_exception_handlers

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    configure_logging()
    await init_db()
    logger.info("Back-office service started")
    yield
    await dispose_engine()


def create_app() -> FastAPI:
    settings = get_settings()
    app = FastAPI(
        title=settings.project_name,
        description="Review and float management for field sales agents",
        version=__version__,
        lifespan=lifespan,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    register_exception_handlers(app)

    app.include_router(create_api_router(settings.api_prefix))

    @app.get("/health")
    async def health():
        return {"status": "ok"}

    return app


app = create_app()
