import logging
from fastapi import Depends, FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy.ext.asyncio import AsyncSession
from starlette.exceptions import HTTPException as StarletteHTTPException

from src.config import settings
from src.core.health import ping_database, utc_timestamp
from src.core.logging import configure_logging
from src.database import get_db
from src.shared.exceptions import CatalogError
from src.shared.schemas import ErrorDetail, ErrorResponse

logger = logging.getLogger(__name__)

_ERROR_TYPES_BY_STATUS = {400: "InvalidInput", 404: "NotFound", 503: "StoreUnavailable"}


def _error_response(status_code: int, error_type: str, message: str) -> JSONResponse:
    body = ErrorResponse(error=ErrorDetail(type=error_type, message=message))
    return JSONResponse(status_code=status_code, content=body.model_dump(by_alias=True))


def register_exception_handlers(app: FastAPI) -> None:
    @app.exception_handler(CatalogError)
    async def catalog_error_handler(request: Request, exc: CatalogError):
        if exc.status_code >= 500:
            logger.warning(f"{request.method} {request.url.path} failed: {exc.message}")
        return _error_response(exc.status_code, exc.error_type, exc.message)

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(request: Request, exc: RequestValidationError):
        messages = "; ".join(
            f"{'.'.join(str(part) for part in err['loc'])}: {err['msg']}" for err in exc.errors()
        )
        return _error_response(400, "InvalidInput", messages or "Invalid request")

    @app.exception_handler(StarletteHTTPException)
    async def http_error_handler(request: Request, exc: StarletteHTTPException):
        error_type = _ERROR_TYPES_BY_STATUS.get(exc.status_code, "InternalError")
        return _error_response(exc.status_code, error_type, str(exc.detail))

    @app.exception_handler(Exception)
    async def unhandled_error_handler(request: Request, exc: Exception):
        logger.exception(f"Unhandled error on {request.method} {request.url.path}")
        return _error_response(500, "InternalError", "Internal server error")


def create_app() -> FastAPI:
    configure_logging(settings.LOG_LEVEL)

    app = FastAPI(
        title=settings.PROJECT_NAME,
        version=settings.VERSION,
        openapi_url=f"{settings.API_V1_STR}/openapi.json",
        docs_url=f"{settings.API_V1_STR}/docs",
        redoc_url=f"{settings.API_V1_STR}/redoc",
    )

    # Routers
    from src.routes.v1.api import api_router

    app.include_router(api_router, prefix=settings.API_V1_STR)
    register_exception_handlers(app)

    # Set all CORS enabled origins
    if settings.BACKEND_CORS_ORIGINS:
        app.add_middleware(
            CORSMiddleware,
            allow_origins=[str(origin) for origin in settings.BACKEND_CORS_ORIGINS],
            allow_credentials=True,
            allow_methods=["*"],
            allow_headers=["*"],
        )

    # Health Check
    @app.get("/health")
    async def health_check(db: AsyncSession = Depends(get_db)):
        try:
            await ping_database(db)
        except CatalogError as e:
            return JSONResponse(
                status_code=503,
                content={
                    "status": "unhealthy",
                    "version": settings.VERSION,
                    "database": "disconnected",
                    "error": e.message,
                    "timestamp": utc_timestamp(),
                },
            )
        return {
            "status": "healthy",
            "version": settings.VERSION,
            "database": "connected",
            "timestamp": utc_timestamp(),
        }

    return app

app = create_app()
