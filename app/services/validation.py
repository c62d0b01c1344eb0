import logging
import math
from dataclasses import dataclass, field
from typing import Any, List, Optional

from app.models.checkout import CheckoutSubmission

logger = logging.getLogger(__name__)

MISSING_ORDER_DATA = "Missing required order data"
INCOMPLETE_SHIPPING = "Incomplete shipping details"
INVALID_CART_ITEM = "Invalid cart item data"
INVALID_TOTAL = "Total amount must be a valid non-negative number"
INVALID_OPTIONAL_AMOUNT = "Shipping cost and coupon discount must be valid numbers"

SHIPPING_FIELDS = ("name", "email", "phone", "address", "pincode", "state")
OPTIONAL_AMOUNTS = ("shippingCost", "couponDiscount")


@dataclass
class ValidationResult:
    submission: Optional[CheckoutSubmission] = None
    error: Optional[str] = None
    warnings: List[str] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return self.error is None


def is_blank(value: Any) -> bool:
    """Missing in the JSON-client sense: null, "", false, 0 and NaN all count as absent"""
    if value is None or value is False:
        return True
    if isinstance(value, str):
        return value == ""
    if isinstance(value, float):
        return value == 0 or math.isnan(value)
    if isinstance(value, int) and not isinstance(value, bool):
        return value == 0
    return False


def is_finite_number(value: Any) -> bool:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return False
    try:
        return math.isfinite(value)
    except OverflowError:
        # ints beyond float range
        return False


def _invalid_item_reason(item: Any) -> Optional[str]:
    if not isinstance(item, dict):
        return "not an object"
    if is_blank(item.get("id")):
        return "id"
    if is_blank(item.get("name")):
        return "name"
    if not is_finite_number(item.get("price")):
        return "price"
    quantity = item.get("quantity")
    if not is_finite_number(quantity) or quantity <= 0:
        return "quantity"
    return None


def validate_checkout(body: Any) -> ValidationResult:
    """
    Run the checkout checks in order and stop at the first failure.
    A zero total is accepted but reported as a warning.
    """
    if not isinstance(body, dict):
        logger.error(
            "Invalid order data received",
            extra={"context": {"bodyType": type(body).__name__}},
        )
        return ValidationResult(error=MISSING_ORDER_DATA)

    order_id = body.get("orderId")
    cart = body.get("cart")
    form_data = body.get("formData")
    payment_id = body.get("paymentId")
    total_amount = body.get("totalAmount")

    if (
        is_blank(order_id)
        or not isinstance(cart, list)
        or len(cart) == 0
        or is_blank(form_data)
        or is_blank(payment_id)
    ):
        logger.error(
            "Invalid order data received",
            extra={"context": {
                "orderId": order_id,
                "cartLength": len(cart) if isinstance(cart, list) else None,
                "formData": form_data,
                "totalAmount": total_amount,
                "paymentId": payment_id,
            }},
        )
        return ValidationResult(error=MISSING_ORDER_DATA)

    if not isinstance(form_data, dict) or any(is_blank(form_data.get(f)) for f in SHIPPING_FIELDS):
        missing = [f for f in SHIPPING_FIELDS if not isinstance(form_data, dict) or is_blank(form_data.get(f))]
        logger.error(
            "Incomplete form data",
            extra={"context": {"formData": form_data, "missingFields": missing}},
        )
        return ValidationResult(error=INCOMPLETE_SHIPPING)

    for index, item in enumerate(cart):
        reason = _invalid_item_reason(item)
        if reason:
            logger.error(
                "Invalid cart item detected",
                extra={"context": {"invalidItem": item, "index": index, "field": reason}},
            )
            return ValidationResult(error=INVALID_CART_ITEM)

    if not is_finite_number(total_amount) or total_amount < 0:
        logger.error("Invalid total amount", extra={"context": {"totalAmount": total_amount}})
        return ValidationResult(error=INVALID_TOTAL)

    for name in OPTIONAL_AMOUNTS:
        amount = body.get(name)
        if not is_blank(amount) and not is_finite_number(amount):
            logger.error("Invalid optional amount", extra={"context": {name: amount}})
            return ValidationResult(error=INVALID_OPTIONAL_AMOUNT)

    warnings = []
    if total_amount == 0:
        logger.warning(
            "Total amount is zero, proceeding with warning",
            extra={"context": {"orderId": order_id, "totalAmount": total_amount}},
        )
        warnings.append("Total amount is zero")

    return ValidationResult(
        submission=CheckoutSubmission.model_validate(body),
        warnings=warnings,
    )
