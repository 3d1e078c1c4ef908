from contextlib import asynccontextmanager

from fastapi import FastAPI, HTTPException, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from src.adapters.crud_store.exceptions import ItemDoesNotExist
from src.api.logged_api_route import LoggedAPIRoute
from src.api.RequestLoggingMiddleware import RequestLoggingMiddleware
from src.api.routes import health, orders, products
from src.config import dependencies
from src.config.dependencies import resolve_environment_variable_dependency
from src.config.environment_variables import EnvVarKeys
from src.domain.exceptions import GenericException
from src.utils.logging import make_logger

logger = make_logger(__name__)


@asynccontextmanager
async def lifespan(_: FastAPI):
    await dependencies.startup_global_dependencies()
    yield
    await dependencies.async_shutdown()


fastapi_app = FastAPI(
    title="Catalog API",
    openapi_url="/openapi.json",
    docs_url="/swagger",
    redoc_url="/api",
    root_path="",
    root_path_in_servers=False,
    lifespan=lifespan,
    route_class=LoggedAPIRoute,
    separate_input_output_schemas=False,
)

allowed_origins = resolve_environment_variable_dependency(EnvVarKeys.ALLOWED_ORIGINS)
allowed_origins_list = (
    [origin.strip() for origin in allowed_origins.split(",")]
    if allowed_origins and isinstance(allowed_origins, str)
    else ["*"]
)
fastapi_app.add_middleware(
    CORSMiddleware,
    allow_origins=allowed_origins_list,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)
fastapi_app.add_middleware(RequestLoggingMiddleware)


def format_error_response(detail: str, status_code: int) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content={"message": detail, "code": status_code, "data": None},
    )


@fastapi_app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    exc_str = f"{exc}".replace("\n", " ").replace("   ", " ")
    logger.error(f"{request.method} {request.url.path}: {exc_str}")
    return format_error_response(exc_str, status.HTTP_422_UNPROCESSABLE_ENTITY)


@fastapi_app.exception_handler(ItemDoesNotExist)
async def handle_missing(request: Request, exc: ItemDoesNotExist):
    return format_error_response(str(exc), status.HTTP_404_NOT_FOUND)


@fastapi_app.exception_handler(GenericException)
async def handle_generic(request: Request, exc: GenericException):
    if exc.code >= 500 or exc.detail:
        logger.error(
            f"{exc.__class__.__name__} on {request.method} {request.url.path}: "
            f"{exc.message} ({exc.detail})"
        )
    return format_error_response(exc.message, exc.code)


@fastapi_app.exception_handler(HTTPException)
async def handle_http_exc(request: Request, exc: HTTPException):
    return format_error_response(exc.detail, exc.status_code)


@fastapi_app.exception_handler(Exception)
async def handle_unexpected(request: Request, exc: Exception):
    logger.exception("Unhandled exception caught by exception handler", exc_info=exc)
    return format_error_response(
        f"Internal Server Error. Class: {exc.__class__}. Exception: {exc}", 500
    )


fastapi_app.include_router(health.router)
fastapi_app.include_router(orders.router)
fastapi_app.include_router(products.router)

app = fastapi_app
