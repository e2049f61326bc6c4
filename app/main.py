from __future__ import annotations

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles
from starlette.exceptions import HTTPException as StarletteHTTPException

from app import startup
from app.environment import env_flag, get_upload_dir, get_upload_url_prefix
from app.routes import api

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    startup.configure_logging()
    app.state.database = startup.init_database()
    try:
        yield
    finally:
        app.state.database.dispose()


app = FastAPI(title="nomirate", lifespan=lifespan)


@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(
    _request: Request, exc: StarletteHTTPException
) -> JSONResponse:
    return JSONResponse(
        status_code=exc.status_code,
        content={"error": str(exc.detail)},
        headers=getattr(exc, "headers", None),
    )


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(
    _request: Request, exc: RequestValidationError
) -> JSONResponse:
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={
            "error": "Invalid request.",
            "details": jsonable_encoder(exc.errors(), exclude={"ctx", "url", "input"}),
        },
    )


@app.exception_handler(Exception)
async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("Unhandled error for %s %s", request.method, request.url.path)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"error": "Internal server error."},
    )


app.include_router(api.router, prefix="/api")

if env_flag("NOMIRATE_SERVE_UPLOADS", True):
    app.mount(
        get_upload_url_prefix(),
        StaticFiles(directory=get_upload_dir(), check_dir=False),
        name="uploads",
    )
