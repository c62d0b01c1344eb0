import logging
from contextlib import asynccontextmanager
from typing import Optional

import httpx
import uvicorn
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from app.api.routes import router
from app.logging_config import setup_logging
from app.services.shiprocket import ShiprocketClient
from config import Settings, get_settings

logger = logging.getLogger(__name__)


async def unhandled_error(request: Request, exc: Exception):
    # Runs outside CORSMiddleware, so the header has to be set here
    headers = {"Access-Control-Allow-Origin": "*"} if "origin" in request.headers else None
    logger.error(
        "Server error",
        exc_info=exc,
        extra={"context": {"path": request.url.path, "error": str(exc)}},
    )
    return JSONResponse(
        status_code=500,
        content={"success": False, "error": "Internal server error", "details": str(exc)},
        headers=headers,
    )


def create_app(settings: Settings, http_client: Optional[httpx.AsyncClient] = None) -> FastAPI:
    """
    Build the relay app around one settings value.
    A caller-supplied http_client is used as-is and left open on shutdown.
    """

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        # Startup
        logger.info("Starting up application...")
        if not settings.SHIPROCKET_TOKEN:
            logger.warning("SHIPROCKET_TOKEN is not set, Shiprocket will reject every order")

        owns_client = http_client is None
        client = http_client or httpx.AsyncClient()
        app.state.http_client = client
        app.state.shiprocket = ShiprocketClient(client, settings)
        yield
        # Shutdown
        logger.info("Shutting down application...")
        if owns_client:
            await client.aclose()

    app = FastAPI(lifespan=lifespan)
    app.state.settings = settings

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
        allow_headers=["Content-Type", "Authorization"],
    )
    app.add_exception_handler(Exception, unhandled_error)
    app.include_router(router)
    return app


settings = get_settings()
setup_logging(settings)
app = create_app(settings)


if __name__ == "__main__":
    logger.info(f"Server running on port {settings.PORT}")
    uvicorn.run(app, host=settings.HOST, port=settings.PORT)
