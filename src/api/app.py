from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from fastapi.middleware.cors import CORSMiddleware
from sqlmodel import SQLModel
from config import DEV_ACCESS_TOKEN_SECRET, DEV_REFRESH_TOKEN_SECRET
from .error import ClientError, ServerError
import logging

logger = logging.getLogger(__name__)


def error_body(code: str, message: str) -> dict:
    return {
        "success": False,
        "message": message,
        "error": {"code": code, "message": message},
    }


async def handle_client_error(request: Request, exc: ClientError):
    logger.warning(f"Client error: {exc.base_error.code} on {request.url.path}")
    return JSONResponse(
        status_code=exc.status_code,
        content=error_body(exc.base_error.code, exc.base_error.message),
    )


async def handle_server_error(request: Request, exc: ServerError):
    logger.error(f"Server error: {exc.base_error.code} on {request.url.path}")
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content=error_body(exc.base_error.code, "Internal server error"),
    )


async def handle_validation_error(request: Request, exc: RequestValidationError):
    fields = [".".join(str(p) for p in err["loc"][1:]) for err in exc.errors()]
    logger.info(f"Validation error on {request.url.path}: {fields}")
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content=error_body("VALIDATION_ERROR", "Invalid request body"),
    )


def warn_on_default_secrets(ApplicationConfig) -> None:
    if ApplicationConfig.ACCESS_TOKEN_SECRET == DEV_ACCESS_TOKEN_SECRET:
        logger.warning("ACCESS_TOKEN_SECRET is the development default; set it in production")
    if ApplicationConfig.REFRESH_TOKEN_SECRET == DEV_REFRESH_TOKEN_SECRET:
        logger.warning("REFRESH_TOKEN_SECRET is the development default; set it in production")


def create_app(ApplicationConfig) -> FastAPI:
    @asynccontextmanager
    async def lifespan(app: FastAPI):
        warn_on_default_secrets(ApplicationConfig)
        if ApplicationConfig.CREATE_TABLES_ON_STARTUP:
            from src.depends import engine

            async with engine.begin() as conn:
                await conn.run_sync(SQLModel.metadata.create_all)
        yield

    app = FastAPI(title="CMS Auth API", version="0.1.0", lifespan=lifespan)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=ApplicationConfig.CORS_ORIGINS,
        allow_credentials=ApplicationConfig.CORS_ALLOW_CREDENTIALS,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    from src.api.routes import admin, auth, health_check

    app.include_router(health_check.router, tags=["Health"])
    app.include_router(auth.router, prefix=ApplicationConfig.API_PREFIX, tags=["Authentication"])
    app.include_router(admin.router, prefix=ApplicationConfig.API_PREFIX, tags=["Admin"])

    app.add_exception_handler(ClientError, handle_client_error)
    app.add_exception_handler(ServerError, handle_server_error)
    app.add_exception_handler(RequestValidationError, handle_validation_error)

    return app
