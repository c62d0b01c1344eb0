import json
import logging

import httpx
from fastapi import APIRouter, Depends, Request, Response
from fastapi.responses import JSONResponse, PlainTextResponse

from app.api.deps import (
    ClientDisconnected,
    get_http_client,
    get_shiprocket,
    run_until_disconnect,
    settings_dep,
)
from app.services.payload import build_order_payload
from app.services.public_ip import PublicIpLookupError, fetch_public_ip
from app.services.shiprocket import GatewayError, OrderCreated, ShiprocketClient
from app.services.validation import MISSING_ORDER_DATA, validate_checkout
from config import Settings

router = APIRouter()
logger = logging.getLogger(__name__)

# Never read by the client, which is already gone
CLIENT_CLOSED_REQUEST = 499


@router.get("/", response_class=PlainTextResponse)
async def root():
    return "Server is running"


@router.get("/health")
async def health():
    logger.info("Health check endpoint called")
    return {"status": "OK", "message": "Server is running"}


@router.get("/my-ip")
async def my_ip(
    request: Request,
    http_client: httpx.AsyncClient = Depends(get_http_client),
    settings: Settings = Depends(settings_dep),
):
    try:
        ip = await run_until_disconnect(
            request,
            fetch_public_ip(http_client, settings.IP_LOOKUP_URL, settings.IP_LOOKUP_TIMEOUT),
        )
    except ClientDisconnected:
        return Response(status_code=CLIENT_CLOSED_REQUEST)
    except PublicIpLookupError as e:
        logger.error("Error fetching public IP", extra={"context": {"error": str(e)}})
        return JSONResponse(status_code=500, content={"error": "Failed to fetch public IP"})

    logger.info(f"[IP] Public IP resolved: {ip}")
    return {"ip": ip}


def _gateway_error_response(result: GatewayError) -> JSONResponse:
    if result.kind == "auth":
        return JSONResponse(
            status_code=401,
            content={
                "success": False,
                "error": "Shiprocket authentication failed",
                "details": "Invalid or expired Shiprocket token",
            },
        )

    if result.kind == "rejected":
        return JSONResponse(
            status_code=422,
            content={
                "success": False,
                "error": "Invalid order data for Shiprocket",
                "details": result.details,
            },
        )

    return JSONResponse(
        status_code=500,
        content={
            "success": False,
            "error": "Failed to create order in Shiprocket",
            "details": result.message,
        },
    )


def _reject_constant(token: str):
    raise ValueError(f"Non-standard JSON constant: {token}")


@router.post("/api/create-order")
async def create_order(
    request: Request,
    settings: Settings = Depends(settings_dep),
    shiprocket: ShiprocketClient = Depends(get_shiprocket),
):
    try:
        body = json.loads(await request.body(), parse_constant=_reject_constant)
    except ValueError as e:
        logger.error("Unparseable order body", extra={"context": {"error": str(e)}})
        return JSONResponse(status_code=400, content={"success": False, "error": MISSING_ORDER_DATA})

    validation = validate_checkout(body)
    if not validation.ok:
        return JSONResponse(status_code=400, content={"success": False, "error": validation.error})

    submission = validation.submission
    payload = build_order_payload(submission, settings)

    logger.info(
        "Cart details",
        extra={"context": {
            "cart": [item.model_dump() for item in submission.cart],
            "orderItems": [item.model_dump() for item in payload.order_items],
        }},
    )
    logger.info(
        "Sending order to Shiprocket",
        extra={"context": {
            "orderId": submission.orderId,
            "totalAmount": submission.totalAmount,
            "itemCount": len(submission.cart),
        }},
    )

    try:
        result = await run_until_disconnect(request, shiprocket.create_order(payload))
    except ClientDisconnected:
        return Response(status_code=CLIENT_CLOSED_REQUEST)

    if isinstance(result, OrderCreated):
        logger.info(
            "Shiprocket order created successfully",
            extra={"context": {"orderId": submission.orderId, "shiprocketOrderId": result.order_id}},
        )
        return {
            "success": True,
            "shiprocketOrderId": result.order_id,
            "message": "Order created successfully in Shiprocket",
        }

    return _gateway_error_response(result)
