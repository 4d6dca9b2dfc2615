from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from tourney_hub.config import get_settings
from tourney_hub.infrastructure.database import engine, initialize_database
from tourney_hub.infrastructure.scheduler import start_scheduler, stop_scheduler
from tourney_hub.interfaces.api.routes import register_routes


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Initialize the database and background jobs; release them on shutdown."""

    initialize_database()
    start_scheduler()
    yield
    stop_scheduler()
    engine.dispose()


def create_app() -> FastAPI:
    """Create and configure the FastAPI application."""

    settings = get_settings()
    app = FastAPI(title="Tourney Hub", lifespan=lifespan)

    # The browser client sends the session cookie on every call.
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    register_routes(app)
    return app


app = create_app()
