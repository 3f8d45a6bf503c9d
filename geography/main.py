import logging

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from starlette.responses import JSONResponse

from geography.api.routes import api_router
from geography.core.config import settings
from geography.core.errors import GeographyError
from geography.schemas.geography import ErrorResponse


logger = logging.getLogger(__name__)


async def handle_geography_error(request: Request, exc: GeographyError) -> JSONResponse:
    if exc.status_code >= 500:
        logger.error("%s %s failed: %s", request.method, request.url.path, exc.message)
    return JSONResponse(
        status_code=exc.status_code,
        content=ErrorResponse(detail=exc.code, message=exc.message).model_dump(),
    )


def create_app() -> FastAPI:
    logging.basicConfig(level=logging.INFO)
    app = FastAPI(title=settings.app_name)
    # CORS
    # credentials cannot be combined with a "*" origin
    cors_origins = settings.cors_origins
    allow_creds = cors_origins != "*"
    if cors_origins == "*":
        cors_origins = ["*"]

    app.add_middleware(
        CORSMiddleware,
        allow_origins=cors_origins,
        allow_credentials=allow_creds,
        allow_methods=["GET", "POST"],
        allow_headers=["*"],
    )
    app.add_exception_handler(GeographyError, handle_geography_error)
    app.include_router(api_router)
    return app


app = create_app()
