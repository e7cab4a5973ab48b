"""FastAPI application entrypoint. No business logic; only wiring, middleware and error mapping."""

from dotenv import load_dotenv

load_dotenv()

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError

from chamalog import __version__
from chamalog.api.routes import router as api_router
from chamalog.core.config import Settings, get_settings
from chamalog.core.database import Database
from chamalog.core.errors import ChamaLogError
from chamalog.core.log_config import configure_logging

logger = logging.getLogger(__name__)


async def handle_domain_error(request: Request, exc: ChamaLogError) -> JSONResponse:
    if exc.status_code >= 500:
        logger.error("%s %s failed: %s", request.method, request.url.path, exc.message)
    return JSONResponse(status_code=exc.status_code, content={"detail": exc.message})


async def handle_request_validation_error(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """Malformed bodies, missing fields and bad path/query values are 400s."""
    return JSONResponse(status_code=400, content={"detail": jsonable_encoder(exc.errors())})


async def handle_database_error(request: Request, exc: SQLAlchemyError) -> JSONResponse:
    logger.exception("Database error on %s %s", request.method, request.url.path)
    return JSONResponse(status_code=500, content={"detail": "Internal server error"})


def create_app(database: Database | None = None, settings: Settings | None = None) -> FastAPI:
    """
    Build the application. The database client is created from settings unless
    one is passed in; either way it is disposed when the app shuts down.
    """
    explicit_settings = settings is not None
    settings = settings or get_settings()

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        logger.info("ChamaLog API starting (env=%s)", settings.APP_ENV)
        yield
        app.state.db.dispose()

    app = FastAPI(
        title="ChamaLog API",
        version=__version__,
        docs_url="/docs",
        redoc_url="/redoc",
        lifespan=lifespan,
    )
    app.state.db = database or Database(settings.DATABASE_URL, echo=settings.DEBUG)
    if explicit_settings:
        app.dependency_overrides[get_settings] = lambda: settings

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"] if settings.APP_ENV == "dev" else [settings.FRONTEND_URL],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.add_exception_handler(ChamaLogError, handle_domain_error)
    app.add_exception_handler(RequestValidationError, handle_request_validation_error)
    app.add_exception_handler(SQLAlchemyError, handle_database_error)

    app.include_router(api_router, prefix=settings.API_PREFIX)

    @app.get("/")
    def root() -> dict[str, str]:
        """Root route; minimal payload for discovery."""
        return {"message": "ChamaLog API"}

    return app


def main() -> None:
    import uvicorn

    settings = get_settings()
    configure_logging(settings.LOG_LEVEL)
    uvicorn.run(create_app(settings=settings), host=settings.HOST, port=settings.PORT)


if __name__ == "__main__":
    main()
