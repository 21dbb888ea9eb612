import logging
from contextlib import asynccontextmanager
from typing import Optional

import uvicorn
from fastapi import Depends, FastAPI, Request, Response
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from taskhub.core.config import Settings, get_settings
from taskhub.core.database import create_engine, create_schema, create_session_factory
from taskhub.core.errors import AuthError, TaskAPIError, ValidationError
from taskhub.core.security import TokenService
from taskhub.logging_setup import setup_logging
from taskhub.routers import auth, tasks
from taskhub.store.ports import TaskStore
from taskhub.store.sql import SqlAlchemyTaskStore

logger = logging.getLogger(__name__)

def create_app(settings: Optional[Settings] = None, store: Optional[TaskStore] = None) -> FastAPI:
    """Build the API. Pass ``store`` to run against an already constructed store."""
    settings = settings or get_settings()
    setup_logging(settings.LOG_LEVEL)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        if store is not None:
            app.state.store = store
            yield
            return

        engine = create_engine(settings)
        await create_schema(engine)
        app.state.store = SqlAlchemyTaskStore(create_session_factory(engine))
        logger.info("Connected to %s", engine.url.render_as_string(hide_password=True))
        try:
            yield
        finally:
            await engine.dispose()
            logger.info("Database connections closed")

    app = FastAPI(title="Taskhub API", lifespan=lifespan)
    app.state.settings = settings
    app.state.tokens = TokenService.from_settings(settings)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.exception_handler(TaskAPIError)
    async def task_api_error_handler(request: Request, exc: TaskAPIError):
        if isinstance(exc, AuthError):
            return Response(status_code=exc.status_code)
        return JSONResponse(status_code=exc.status_code, content=exc.to_body())

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(request: Request, exc: RequestValidationError):
        logger.warning("Rejected malformed request to %s: %s", request.url.path, exc.errors())
        error = ValidationError()
        return JSONResponse(status_code=error.status_code, content=error.to_body())

    gate = [Depends(auth.require_token)] if settings.ENFORCE_TOKEN_GATE else []
    app.include_router(tasks.router)
    app.include_router(tasks.records_router, dependencies=gate)
    app.include_router(auth.router)

    @app.get("/")
    async def root():
        return {"message": "Taskhub API is running"}

    return app

def run() -> None:
    settings = get_settings()
    uvicorn.run(
        "taskhub.main:create_app",
        factory=True,
        host=settings.API_HOST,
        port=settings.API_PORT,
    )

if __name__ == "__main__":
    run()
