# messenger/main.py
import logging
import sys
import time
from contextlib import asynccontextmanager
from pathlib import Path

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles
from sqlalchemy.ext.asyncio import create_async_engine

from messenger.api import auth, groups, messages, users
from messenger.config import AppConfig
from messenger.domain.exceptions import (
    ConflictError,
    ForbiddenError,
    InvalidAddressingError,
    MessengerError,
    NotFoundError,
    ValidationError,
)
from messenger.infrastructure.database import Database
from messenger.infrastructure.security import SecurityService

ERROR_STATUS_CODES = {
    NotFoundError: 404,
    ConflictError: 409,
    ForbiddenError: 403,
    InvalidAddressingError: 422,
    ValidationError: 422,
}


class Application:
    def __init__(self, config: AppConfig):
        self.config = config
        self.logger = self.setup_logger()
        engine = create_async_engine(config.DATABASE_URL, echo=False)
        self.database = Database(engine)
        self.security_service = SecurityService(config)

    @asynccontextmanager
    async def lifespan(self, app: FastAPI):
        await self.database.connect()
        self.logger.info("Database ready at %s", self.config.DATABASE_URL)
        yield
        await self.database.disconnect()

    def setup_logger(self):
        logger = logging.getLogger("MessengerAPI")
        logger.setLevel(self.config.LOG_LEVEL)

        if not logger.handlers:
            c_handler = logging.StreamHandler(sys.stdout)
            formatter = logging.Formatter(
                "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
            )
            c_handler.setFormatter(formatter)
            logger.addHandler(c_handler)

        return logger

    def create_app(self) -> FastAPI:
        app = FastAPI(
            title=self.config.PROJECT_NAME,
            version=self.config.PROJECT_VERSION,
            description=self.config.PROJECT_DESCRIPTION,
            openapi_url=f"{self.config.API_V1_STR}/openapi.json",
            lifespan=self.lifespan,
        )

        app.state.config = self.config
        app.state.security_service = self.security_service
        app.state.database = self.database
        app.state.logger = self.logger

        app.include_router(
            auth.router, prefix=f"{self.config.API_V1_STR}/auth", tags=["auth"]
        )
        app.include_router(
            users.router, prefix=f"{self.config.API_V1_STR}/users", tags=["users"]
        )
        app.include_router(
            messages.router,
            prefix=f"{self.config.API_V1_STR}/messages",
            tags=["messages"],
        )
        app.include_router(
            groups.router, prefix=f"{self.config.API_V1_STR}/groups", tags=["groups"]
        )

        upload_dir = Path(self.config.UPLOAD_DIR)
        upload_dir.mkdir(parents=True, exist_ok=True)
        app.mount("/uploads", StaticFiles(directory=upload_dir), name="uploads")

        logger = self.logger

        @app.middleware("http")
        async def log_requests(request: Request, call_next):
            start = time.perf_counter()
            response = await call_next(request)
            if request.url.path.startswith("/api"):
                duration = (time.perf_counter() - start) * 1000
                logger.info(
                    "%s %s %s in %.0fms",
                    request.method,
                    request.url.path,
                    response.status_code,
                    duration,
                )
            return response

        @app.exception_handler(MessengerError)
        async def messenger_error_handler(request: Request, exc: MessengerError):
            return JSONResponse(
                status_code=ERROR_STATUS_CODES.get(type(exc), 400),
                content={"detail": exc.detail},
            )

        @app.exception_handler(Exception)
        async def global_exception_handler(request: Request, exc: Exception):
            logger.exception("Unhandled error on %s %s", request.method, request.url.path)
            return JSONResponse(
                status_code=500,
                content={"message": f"An unexpected error occurred: {str(exc)}"},
            )

        @app.get("/")
        async def root():
            return {"message": "Welcome to the Messenger API"}

        return app


def create() -> FastAPI:
    config = AppConfig()
    application = Application(config)
    app = application.create_app()
    application.logger.info("Application created and configured")

    return app


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(create(), host="127.0.0.1", port=8000)
