"""FastAPI application for KiraTakip, the rental management backend."""

import logging
from typing import Optional

import uvicorn
from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from . import chat, routes
from .config import Settings, get_settings
from .database import init_db
from .seed import seed_demo_data
from .storage import MemStorage

logger = logging.getLogger(__name__)


def configure_logging(level: str) -> None:
    logging.basicConfig(
        level=level.upper(),
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )


def register_error_handlers(app: FastAPI) -> None:
    @app.exception_handler(RequestValidationError)
    async def invalid_request(request: Request, exc: RequestValidationError):
        return JSONResponse(
            status_code=400,
            content={"message": "Invalid request data", "error": jsonable_encoder(exc.errors())},
        )

    @app.exception_handler(StarletteHTTPException)
    async def http_error(request: Request, exc: StarletteHTTPException):
        return JSONResponse(status_code=exc.status_code, content={"message": exc.detail}, headers=exc.headers)

    @app.exception_handler(Exception)
    async def server_error(request: Request, exc: Exception):
        logger.exception("Unhandled error on %s %s", request.method, request.url.path)
        return JSONResponse(status_code=500, content={"message": "Internal server error"})


def create_app(storage: Optional[MemStorage] = None, settings: Optional[Settings] = None) -> FastAPI:
    """Build the app around ``storage``; a fresh store is seeded when configured to."""
    settings = settings or get_settings()

    if storage is None:
        storage = MemStorage()
        if settings.seed_demo_data:
            seed_demo_data(storage)

    app = FastAPI(title=settings.app_name, version=settings.app_version, debug=settings.debug)
    app.state.storage = storage
    app.state.chat = chat.ChatRelay(response_delay=settings.chat_response_delay)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins, allow_credentials=True, allow_methods=["*"], allow_headers=["*"]
    )
    register_error_handlers(app)

    # user table (auth only)
    init_db()

    app.include_router(routes.router)
    app.include_router(chat.router)

    @app.get("/", tags=["Health"])
    def health():
        return {"name": settings.app_name, "status": "ok"}

    return app


def run() -> None:
    settings = get_settings()
    configure_logging(settings.log_level)
    uvicorn.run(create_app(settings=settings), host=settings.host, port=settings.port, log_level=settings.log_level.lower())


if __name__ == "__main__":
    run()
