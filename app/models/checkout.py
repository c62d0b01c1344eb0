from pydantic import BaseModel, ConfigDict
from typing import Any, List, Optional, Union

Number = Union[int, float]


class LineItem(BaseModel):
    model_config = ConfigDict(extra="ignore")

    id: Any
    name: Any
    price: Number
    quantity: Number


class ShippingForm(BaseModel):
    model_config = ConfigDict(extra="ignore")

    name: Any
    email: Any
    phone: Any
    address: Any
    pincode: Any
    state: Any
    city: Optional[Any] = None


class CheckoutSubmission(BaseModel):
    model_config = ConfigDict(extra="ignore")

    orderId: Any
    cart: List[LineItem]
    formData: ShippingForm
    totalAmount: Number
    shippingCost: Optional[Any] = None
    couponDiscount: Optional[Any] = None
    paymentId: Any
    deliveryDays: Optional[Any] = None
