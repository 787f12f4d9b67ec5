"""
splitbox HTTP application.

Run with:
    uvicorn splitbox.web_api.main:app
"""
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from splitbox import __version__
from splitbox.web_api.config import Settings, settings
from splitbox.web_api.routers import health, split


@asynccontextmanager
async def lifespan(_app: FastAPI):
    yield
    # The worker outlives single requests; stop it with the app.
    split.shutdown_host()


def create_app(config: Settings = settings) -> FastAPI:
    """Build the FastAPI app; docs are only served with ``DEBUG`` on."""
    application = FastAPI(
        title="splitbox API",
        description="Prepare delimited item lists and split them into batches",
        version=__version__,
        docs_url="/docs" if config.DEBUG else None,
        redoc_url=None,
        lifespan=lifespan,
    )
    application.add_middleware(
        CORSMiddleware,
        allow_origins=config.CORS_ORIGINS,
        allow_methods=["GET", "POST"],
        allow_headers=["*"],
    )
    application.include_router(health.router, tags=["Health"])
    application.include_router(split.router, prefix="/split", tags=["Split"])

    @application.get("/")
    async def root():
        return {
            "name": "splitbox API",
            "version": __version__,
            "environment": config.ENVIRONMENT,
            "endpoints": ["/health", "/ready", "/split/", "/split/format"],
        }

    return application


app = create_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(app, host=settings.HOST, port=settings.PORT)
