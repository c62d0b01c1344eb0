import json
import logging
from dataclasses import dataclass
from typing import Any, Literal, Optional, Union

import httpx

from app.models.shiprocket import ShiprocketOrderPayload
from config import Settings

logger = logging.getLogger(__name__)

CREATE_ORDER_PATH = "/v1/external/orders/create/adhoc"


@dataclass(frozen=True)
class OrderCreated:
    order_id: Any


@dataclass(frozen=True)
class GatewayError:
    kind: Literal["auth", "rejected", "failure"]
    message: str
    status_code: Optional[int] = None
    details: Any = None


GatewayResult = Union[OrderCreated, GatewayError]


def _response_body(response: httpx.Response) -> Any:
    try:
        return response.json()
    except json.JSONDecodeError:
        return response.text


def _error_message(exc: Exception) -> str:
    return str(exc) or exc.__class__.__name__


class ShiprocketClient:
    """Single-attempt order submission to Shiprocket"""

    def __init__(self, http_client: httpx.AsyncClient, settings: Settings):
        self.http_client = http_client
        self.url = f"{settings.SHIPROCKET_API_URL.rstrip('/')}{CREATE_ORDER_PATH}"
        self.token = settings.SHIPROCKET_TOKEN
        self.timeout = settings.SHIPROCKET_TIMEOUT

    async def create_order(self, payload: ShiprocketOrderPayload) -> GatewayResult:
        headers = {
            "Content-Type": "application/json",
            "Authorization": f"Bearer {self.token}",
        }

        try:
            response = await self.http_client.post(
                self.url,
                headers=headers,
                json=payload.model_dump(),
                timeout=self.timeout,
            )
        except httpx.HTTPError as e:
            message = _error_message(e)
            logger.error(
                "[Shiprocket] Request failed",
                extra={"context": {"orderId": payload.order_id, "error": message}},
            )
            return GatewayError(kind="failure", message=message)

        if response.is_success:
            try:
                data = response.json()
            except json.JSONDecodeError as e:
                logger.error(
                    "[Shiprocket] Unreadable success response",
                    extra={"context": {"orderId": payload.order_id, "body": response.text}},
                )
                return GatewayError(kind="failure", message=_error_message(e), status_code=response.status_code)

            if not isinstance(data, dict):
                logger.error(
                    "[Shiprocket] Success response is not an object",
                    extra={"context": {"orderId": payload.order_id, "response": data}},
                )
                return GatewayError(
                    kind="failure",
                    message=f"Unexpected Shiprocket response: {data!r}",
                    status_code=response.status_code,
                )

            order_id = data.get("order_id")
            if order_id is None:
                logger.warning(
                    "[Shiprocket] Response carried no order_id",
                    extra={"context": {"orderId": payload.order_id, "response": data}},
                )
            return OrderCreated(order_id=order_id)

        status = response.status_code
        details = _response_body(response)
        logger.error(
            "Error creating Shiprocket order",
            extra={"context": {"orderId": payload.order_id, "status": status, "data": details}},
        )

        if status == 401:
            return GatewayError(kind="auth", message="Invalid or expired Shiprocket token", status_code=status)
        if status == 422:
            return GatewayError(kind="rejected", message="Invalid order data", status_code=status, details=details)
        return GatewayError(
            kind="failure",
            message=f"Request failed with status code {status}",
            status_code=status,
            details=details,
        )
