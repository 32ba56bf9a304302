import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from loguru import logger

from mealflow.api.v1 import api_router
from mealflow.core import settings
from mealflow.core.constant import FAIL_INTERNAL
from mealflow.core.events import create_start_app_handler, create_stop_app_handler
from mealflow.utils.custom_logging import CustomizeLogger
from mealflow.utils.init_admin import init_admin
from mealflow.utils.init_ingredients import init_ingredients


@asynccontextmanager
async def lifespan(app: FastAPI):
    await create_start_app_handler(app, settings)()

    await init_ingredients(app)
    await init_admin(app)

    yield

    await create_stop_app_handler(app)()


async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    errors = []
    for error in exc.errors():
        loc = [str(part) for part in error.get("loc", ()) if part != "body"]
        errors.append({"field": ".".join(loc), "message": error.get("msg", "")})
    return JSONResponse(status_code=status.HTTP_400_BAD_REQUEST, content={"detail": errors})


async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.opt(exception=exc).error(f"Unhandled error on {request.method} {request.url.path}")
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"detail": FAIL_INTERNAL},
    )


def create_app() -> FastAPI:
    _app = FastAPI(**settings.fastapi_kwargs, lifespan=lifespan)

    _app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.allowed_hosts,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    _app.logger = CustomizeLogger.make_logger(
        settings.logging_config_path,
        level=logging.getLevelName(settings.logging_level),
    )
    _app.include_router(api_router, prefix=settings.api_v1_prefix)

    _app.add_exception_handler(RequestValidationError, validation_exception_handler)
    _app.add_exception_handler(Exception, unhandled_exception_handler)

    @_app.middleware("http")
    async def log_requests(request: Request, call_next):
        logger.info(f"{request.method} {request.url.path}")
        return await call_next(request)

    @_app.get("/health", tags=["service"])
    async def health() -> dict:
        return {"status": "ok", "message": "MealFlow API is running"}

    @_app.get("/", tags=["service"])
    async def root() -> dict:
        return {
            "message": "Welcome to MealFlow API",
            "version": settings.version,
            "endpoints": {
                "docs": settings.docs_url,
                "health": "/health",
                "api": settings.api_v1_prefix,
            },
        }

    return _app


app = create_app()
