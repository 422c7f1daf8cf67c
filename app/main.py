import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from app.api.errors import register_error_handlers
from app.api.routes import songs
from app.core.config import CORS_HEADERS, CORS_METHODS, CORS_ORIGINS, load_settings
from app.core.database import init_db
from app.services.storage import ObjectStore

logger = logging.getLogger(__name__)


def create_app(settings=None, session_factory=None, object_store=None) -> FastAPI:
    """
    Build the application

    The database session factory and object store are created once at
    startup from settings unless they are passed in.
    """

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        engine = None
        resolved = settings

        if session_factory is None or object_store is None:
            resolved = resolved or load_settings()

        if session_factory is None:
            engine, app.state.session_factory = init_db(resolved.database_url)
        else:
            app.state.session_factory = session_factory

        if object_store is None:
            app.state.object_store = ObjectStore.from_settings(resolved)
            logger.info("Using bucket %s", resolved.bucket)
        else:
            app.state.object_store = object_store

        yield

        if engine is not None:
            engine.dispose()

    app = FastAPI(title="Song Upload Service", lifespan=lifespan)

    # Configure CORS
    app.add_middleware(
        CORSMiddleware,
        allow_origins=CORS_ORIGINS,
        allow_methods=CORS_METHODS,
        allow_headers=CORS_HEADERS,
    )

    register_error_handlers(app)
    app.include_router(songs.router)

    @app.get("/")
    def health_check():
        return {"status": "healthy"}

    return app
