"""Pydantic request/response schemas for the Ordering API.

These are external contracts (anti-corruption layer) — separate from
internal Protean commands.
"""

from pydantic import BaseModel, Field

from ordering.order.order import OrderType, PaymentMethod
from shared.schemas import RequestModel


# ---------------------------------------------------------------------------
# Shared sub-models
# ---------------------------------------------------------------------------
class CustomizationSchema(RequestModel):
    size: str | None = Field(default=None, pattern="^(small|regular|large)$")
    added_ingredients: list[str] = Field(default_factory=list)
    removed_ingredients: list[str] = Field(default_factory=list)


class DeliveryAddressSchema(RequestModel):
    street: str
    city: str
    state: str
    zip_code: str
    landmark: str | None = None


class OrderLineSchema(RequestModel):
    product_id: str
    name: str
    unit_price: float = Field(ge=0)
    quantity: int = Field(ge=1, default=1)
    customization: CustomizationSchema | None = None


# ---------------------------------------------------------------------------
# Cart Request Schemas
# ---------------------------------------------------------------------------
class CreateCartRequest(RequestModel):
    customer_id: str | None = None
    session_id: str | None = None

    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "session_id": "browser-7f3a",
                }
            ]
        }
    }


class AddToCartRequest(RequestModel):
    product_id: str
    name: str
    unit_price: float = Field(ge=0)
    quantity: int = Field(ge=1, default=1)
    customization: CustomizationSchema | None = None


class UpdateCartLineRequest(RequestModel):
    line_key: str
    quantity: int  # Zero or less removes the line


class ApplyCouponToCartRequest(RequestModel):
    coupon_code: str = Field(min_length=1)


class RestoreCartRequest(RequestModel):
    state: dict


class CheckoutRequest(RequestModel):
    order_type: OrderType
    payment_method: PaymentMethod
    delivery_address: DeliveryAddressSchema | None = None


# ---------------------------------------------------------------------------
# Order / Deal Request Schemas
# ---------------------------------------------------------------------------
class PlaceOrderRequest(RequestModel):
    items: list[OrderLineSchema]
    order_type: OrderType
    payment_method: PaymentMethod
    delivery_address: DeliveryAddressSchema | None = None
    coupon_code: str | None = None

    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "items": [
                        {
                            "productId": "prod-big-mac",
                            "name": "Big Mac",
                            "unitPrice": 229,
                            "quantity": 1,
                            "customization": {"size": "large"},
                        }
                    ],
                    "orderType": "takeaway",
                    "paymentMethod": "upi",
                    "couponCode": "FLAT50",
                }
            ]
        }
    }


class ValidateDealRequest(RequestModel):
    code: str = Field(min_length=1)
    order_amount: float = Field(ge=0)


# ---------------------------------------------------------------------------
# Response Schemas
# ---------------------------------------------------------------------------
class CartIdResponse(BaseModel):
    cart_id: str


class LineKeyResponse(BaseModel):
    line_key: str


class PricingSchema(BaseModel):
    subtotal: float
    discount: float
    tax: float
    total: float


class CartLineResponse(BaseModel):
    line_key: str
    product_id: str
    name: str
    unit_price: float
    quantity: int
    customization: dict | None = None


class CartResponse(BaseModel):
    id: str
    customer_id: str | None = None
    status: str
    coupon_code: str | None = None
    item_count: int
    lines: list[CartLineResponse]
    pricing: PricingSchema


class CouponQuoteSchema(BaseModel):
    code: str
    name: str
    description: str | None = None
    discount_kind: str
    discount_value: float
    discount: float


class ApplyCouponResponse(BaseModel):
    valid: bool = True
    deal: CouponQuoteSchema
    pricing: PricingSchema


class RestoreCartResponse(BaseModel):
    line_count: int


class ValidateDealResponse(BaseModel):
    valid: bool
    deal: CouponQuoteSchema


class OrderResponse(BaseModel):
    order: dict


class OrderListResponse(BaseModel):
    orders: list[dict]


class DealListResponse(BaseModel):
    deals: list[dict]
