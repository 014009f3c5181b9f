"""
Translation Relay Application

FastAPI application factory and uvicorn entry point.

Usage:
    OPENAI_API_KEY=sk-... python main.py
"""
import sys
from contextlib import asynccontextmanager
from typing import Optional

import uvicorn
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles
from starlette.exceptions import HTTPException as StarletteHTTPException

from config import ConfigurationError, RelayConfig, load_relay_config
from core import AllowListCORSMiddleware
from logs import get_llm_logger, setup_llm_logging
from translation import Translator, WordTranslator, router as translation_router
from translation.config import INVALID_BODY_MESSAGE

logger = get_llm_logger(__name__)


async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    return JSONResponse(
        status_code=exc.status_code,
        content={"error": str(exc.detail)},
        headers=getattr(exc, "headers", None),
    )


async def validation_exception_handler(request: Request, exc: RequestValidationError):
    logger.warning(f"[REQUEST] Invalid body | path={request.url.path} | errors={exc.errors()}")
    return JSONResponse(status_code=400, content={"error": INVALID_BODY_MESSAGE})


def create_app(config: RelayConfig, translator: Optional[WordTranslator] = None) -> FastAPI:
    """
    Build the relay application.

    Args:
        config: Immutable relay configuration
        translator: Upstream collaborator (built from config.api_key if not given)

    Returns:
        Configured FastAPI app
    """
    translator = translator or Translator.from_api_key(config.api_key)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        yield
        await translator.close()

    app = FastAPI(title="Chinook Jargon Translation Relay", lifespan=lifespan)
    app.state.config = config
    app.state.translator = translator

    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)

    app.add_middleware(AllowListCORSMiddleware, allowed_origins=config.allowed_origins)

    app.include_router(translation_router)

    # Mounted last so the explicit routes take precedence
    if config.static_root.is_dir():
        app.mount("/", StaticFiles(directory=str(config.static_root)), name="static")
    else:
        logger.warning(f"[STARTUP] Static root not found, static files disabled | path={config.static_root}")

    return app


def main() -> None:
    setup_llm_logging()

    try:
        config = load_relay_config()
    except ConfigurationError as e:
        logger.critical(f"[STARTUP] {e}")
        sys.exit(1)

    app = create_app(config)

    logger.info(f"Server running at http://localhost:{config.port}")
    logger.info(f"Serving static files from {config.static_root}")

    uvicorn.run(app, host=config.host, port=config.port, log_level="info")


if __name__ == "__main__":
    main()
