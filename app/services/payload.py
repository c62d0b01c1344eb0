from datetime import date, datetime, timezone
from typing import Optional

from app.models.checkout import CheckoutSubmission
from app.models.shiprocket import ShiprocketOrderItem, ShiprocketOrderPayload
from app.services.validation import is_blank
from config import Settings

WEIGHT_PER_UNIT_KG = 0.5
HSN_CODE = "4901"  # printed books


def build_order_items(submission: CheckoutSubmission) -> list:
    return [
        ShiprocketOrderItem(
            name=item.name,
            sku=f"SKU-{item.id}",
            units=item.quantity,
            selling_price=item.price,
            discount=0,
            tax=0,
            hsn=HSN_CODE,
        )
        for item in submission.cart
    ]


def total_weight(submission: CheckoutSubmission) -> float:
    return WEIGHT_PER_UNIT_KG * sum(item.quantity for item in submission.cart)


def amount_or_zero(value):
    return 0 if is_blank(value) else value


def build_order_payload(
    submission: CheckoutSubmission,
    settings: Settings,
    order_date: Optional[date] = None,
) -> ShiprocketOrderPayload:
    """
    Map a validated checkout onto Shiprocket's adhoc order schema.
    The shipping address is always the billing address.
    """
    form = submission.formData
    city = form.city or ""
    order_date = order_date or datetime.now(timezone.utc).date()

    return ShiprocketOrderPayload(
        order_id=submission.orderId,
        order_date=order_date.strftime("%Y-%m-%d"),
        pickup_location=settings.SHIPROCKET_PICKUP_LOCATION,
        channel_id="",
        comment=settings.ORDER_COMMENT,
        billing_customer_name=form.name,
        billing_last_name="",
        billing_address=form.address,
        billing_city=city,
        billing_pincode=form.pincode,
        billing_state=form.state,
        billing_country=settings.ORDER_COUNTRY,
        billing_email=form.email,
        billing_phone=form.phone,
        shipping_is_billing=True,
        shipping_customer_name=form.name,
        shipping_last_name="",
        shipping_address=form.address,
        shipping_city=city,
        shipping_pincode=form.pincode,
        shipping_country=settings.ORDER_COUNTRY,
        shipping_state=form.state,
        shipping_email=form.email,
        shipping_phone=form.phone,
        order_items=build_order_items(submission),
        payment_method="Prepaid",
        shipping_charges=amount_or_zero(submission.shippingCost),
        giftwrap_charges=0,
        transaction_charges=0,
        total_discount=amount_or_zero(submission.couponDiscount),
        sub_total=submission.totalAmount,
        length=30,
        breadth=20,
        height=5,
        weight=total_weight(submission),
    )
