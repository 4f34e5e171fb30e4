"""
Would You Rather API — FastAPI application entry-point.

Run with:
    uvicorn wyr.main:app --reload
or:
    wyr-api
"""

import logging
from contextlib import asynccontextmanager
from typing import Optional

import uvicorn
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from uvicorn.middleware.proxy_headers import ProxyHeadersMiddleware

from wyr.config import Settings, settings as default_settings
from wyr.database import build_engine, build_session_factory, init_db
from wyr.errors import InvalidInput, WyrError
from wyr.routers import questions
from wyr.utils.origins import build_allowed_origins

logger = logging.getLogger(__name__)


def configure_logging(level: str = "INFO") -> None:
    logging.basicConfig(
        level=level.upper(),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    settings = settings or default_settings

    # ── Lifespan: connect, create tables, dispose on shutdown ──
    @asynccontextmanager
    async def lifespan(app: FastAPI):
        engine = build_engine(settings)
        try:
            await init_db(engine)
        except WyrError:
            await engine.dispose()
            raise
        app.state.engine = engine
        app.state.session_factory = build_session_factory(engine)
        yield
        app.state.session_factory = None
        await engine.dispose()

    app = FastAPI(
        title=settings.APP_NAME,
        description="Would You Rather poll — random questions, votes, submissions and flags.",
        version="0.1.0",
        lifespan=lifespan,
    )

    # ── CORS ──
    allowed_origins = build_allowed_origins(settings.DEV_FRONTEND_URL, settings.FRONTEND_URL)
    logger.info(f"Allowed CORS origins: {allowed_origins}")
    app.add_middleware(
        CORSMiddleware,
        allow_origins=allowed_origins,
        allow_methods=["GET", "POST", "OPTIONS"],
        allow_headers=["*"],
    )
    app.add_middleware(ProxyHeadersMiddleware, trusted_hosts=("*",))

    # ── Error responses: {"error": "..."} ──
    @app.exception_handler(WyrError)
    async def wyr_error_handler(request: Request, exc: WyrError):
        return JSONResponse(status_code=exc.status_code, content={"error": exc.message})

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(request: Request, exc: RequestValidationError):
        logger.warning(f"Rejected malformed request to {request.url.path}: {exc.errors()}")
        return JSONResponse(status_code=InvalidInput.status_code, content={"error": InvalidInput.message})

    # ── Routes ──
    @app.get("/api")
    async def api_root():
        return {"message": "Would You Rather API!"}

    app.include_router(questions.router)

    return app


configure_logging(default_settings.LOG_LEVEL)
app = create_app()


def run() -> None:
    """Serve the default app with uvicorn on ``PORT``."""
    logger.info(f"Server starting on port {default_settings.PORT}")
    uvicorn.run(
        "wyr.main:app",
        host="0.0.0.0",
        port=default_settings.PORT,
        reload=default_settings.DEBUG,
    )


if __name__ == "__main__":
    run()
