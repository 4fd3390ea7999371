"""FastAPI application."""

from contextlib import asynccontextmanager

from dishka import AsyncContainer
from fastapi import FastAPI

from commenttree.config import Settings
from commenttree.interface.api.errors import register_error_handlers
from commenttree.interface.api.middleware import PermissiveCORSMiddleware
from commenttree.interface.api.routes import comments
from commenttree.util.di.container import create_container, setup_di
from commenttree.util.observability import instrument_fastapi


@asynccontextmanager
async def lifespan(app: FastAPI):
    yield
    # Disposes the connection pools held by the container
    await app.state.dishka_container.close()


def create_app(container: AsyncContainer | None = None) -> FastAPI:
    """Create FastAPI application.

    Note: Logfire should be configured before calling this function.
    In production, start_app.py handles this.
    In tests, conftest.py does.

    Args:
        container: DI container, the production one when omitted
    """
    settings = Settings()

    app_instance = FastAPI(
        title="Comment Tree API",
        description="Threaded comments with soft deletion and search",
        version="1.0.0",
        debug=settings.debug,
        lifespan=lifespan,
    )

    instrument_fastapi(app_instance)

    app_instance.add_middleware(PermissiveCORSMiddleware)
    register_error_handlers(app_instance)

    setup_di(app_instance, container or create_container())

    app_instance.include_router(comments.router)

    return app_instance


# Create app instance for uvicorn
# Note: Logfire must be configured before this module is imported
app = create_app()
