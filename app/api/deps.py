import asyncio
import logging
from typing import Awaitable, TypeVar

import httpx
from fastapi import Request

from app.services.shiprocket import ShiprocketClient
from config import Settings

logger = logging.getLogger(__name__)

T = TypeVar("T")

DISCONNECT_POLL_INTERVAL = 0.25  # seconds


class ClientDisconnected(Exception):
    """The caller went away before the outbound call finished"""


def settings_dep(request: Request) -> Settings:
    return request.app.state.settings


def get_http_client(request: Request) -> httpx.AsyncClient:
    return request.app.state.http_client


def get_shiprocket(request: Request) -> ShiprocketClient:
    return request.app.state.shiprocket


async def run_until_disconnect(request: Request, call: Awaitable[T]) -> T:
    """
    Await `call`, cancelling it if the client disconnects first.

    Raises ClientDisconnected in that case.
    """
    task = asyncio.ensure_future(call)
    try:
        while True:
            done, _ = await asyncio.wait({task}, timeout=DISCONNECT_POLL_INTERVAL)
            if done:
                return task.result()
            if await request.is_disconnected():
                task.cancel()
                await asyncio.wait({task})
                logger.warning(
                    "Client disconnected, outbound call cancelled",
                    extra={"context": {"path": request.url.path}},
                )
                raise ClientDisconnected()
    finally:
        if not task.done():
            task.cancel()
