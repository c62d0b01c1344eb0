from pydantic import BaseModel
from typing import Any, List, Union

Number = Union[int, float]


class ShiprocketOrderItem(BaseModel):
    name: Any
    sku: str
    units: Number
    selling_price: Number
    discount: Number = 0
    tax: Number = 0
    hsn: str = "4901"


class ShiprocketOrderPayload(BaseModel):
    """Body of POST /v1/external/orders/create/adhoc"""

    order_id: Any
    order_date: str
    pickup_location: str
    channel_id: str = ""
    comment: str

    billing_customer_name: Any
    billing_last_name: str = ""
    billing_address: Any
    billing_city: Any
    billing_pincode: Any
    billing_state: Any
    billing_country: str
    billing_email: Any
    billing_phone: Any

    shipping_is_billing: bool = True
    shipping_customer_name: Any
    shipping_last_name: str = ""
    shipping_address: Any
    shipping_city: Any
    shipping_pincode: Any
    shipping_country: str
    shipping_state: Any
    shipping_email: Any
    shipping_phone: Any

    order_items: List[ShiprocketOrderItem]
    payment_method: str = "Prepaid"
    shipping_charges: Any = 0
    giftwrap_charges: Number = 0
    transaction_charges: Number = 0
    total_discount: Any = 0
    sub_total: Number

    length: Number = 30
    breadth: Number = 20
    height: Number = 5
    weight: Number
