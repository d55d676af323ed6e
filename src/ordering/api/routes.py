"""FastAPI routes for the Ordering domain — carts, deals and orders."""

import json

from fastapi import APIRouter, Depends
from protean.exceptions import ObjectNotFoundError, ValidationError
from protean.utils.globals import current_domain

from identity.auth.dependencies import AuthenticatedCustomer, require_customer
from ordering.api.schemas import (
    AddToCartRequest,
    ApplyCouponResponse,
    ApplyCouponToCartRequest,
    CartIdResponse,
    CartResponse,
    CheckoutRequest,
    CouponQuoteSchema,
    CreateCartRequest,
    DealListResponse,
    LineKeyResponse,
    OrderListResponse,
    OrderResponse,
    PlaceOrderRequest,
    RestoreCartRequest,
    RestoreCartResponse,
    UpdateCartLineRequest,
    ValidateDealRequest,
    ValidateDealResponse,
)
from ordering.cart.cart import CartStatus, ShoppingCart
from ordering.cart.conversion import ConvertToOrder
from ordering.cart.coupons import ApplyCouponToCart, RemoveCouponFromCart
from ordering.cart.items import AddToCart, RemoveFromCart, UpdateCartLineQuantity
from ordering.cart.management import ClearCart, CreateCart, RestoreCart
from ordering.cart.state import dump_cart_state
from ordering.coupon.validation import coupon_to_dict, list_active_coupons, validate_coupon
from ordering.order.history import get_order, list_orders
from ordering.order.placement import PlaceOrder, lines_from_cart
from ordering.pricing import price_lines, subtotal_of
from shared.schemas import StatusResponse


def _cart_discount(cart) -> float:
    """Discount of the previewed coupon, or zero if it no longer applies."""
    if not cart.coupon_code:
        return 0.0
    try:
        return validate_coupon(cart.coupon_code, subtotal_of(cart.lines)).discount
    except (ObjectNotFoundError, ValidationError):
        return 0.0


def _cart_response(cart) -> CartResponse:
    summary = price_lines(cart.lines, _cart_discount(cart))
    state = dump_cart_state(cart)
    return CartResponse(
        id=str(cart.id),
        customer_id=str(cart.customer_id) if cart.customer_id else None,
        status=cart.status,
        coupon_code=cart.coupon_code,
        item_count=cart.item_count,
        lines=[
            {
                "line_key": line["key"],
                "product_id": line["product_id"],
                "name": line["name"],
                "unit_price": line["unit_price"],
                "quantity": line["quantity"],
                "customization": line["customization"],
            }
            for line in state["lines"]
        ],
        pricing=summary.to_dict(),
    )


# ---------------------------------------------------------------------------
# Cart Router
# ---------------------------------------------------------------------------
cart_router = APIRouter(prefix="/carts", tags=["carts"])


@cart_router.post("", status_code=201, response_model=CartIdResponse)
async def create_cart(body: CreateCartRequest) -> CartIdResponse:
    command = CreateCart(
        customer_id=body.customer_id,
        session_id=body.session_id,
    )
    result = current_domain.process(command, asynchronous=False)
    return CartIdResponse(cart_id=result)


@cart_router.get("/{cart_id}", response_model=CartResponse)
async def get_cart(cart_id: str) -> CartResponse:
    cart = current_domain.repository_for(ShoppingCart).get(cart_id)
    return _cart_response(cart)


@cart_router.get("/{cart_id}/state")
async def get_cart_state(cart_id: str) -> dict:
    """The cart in the layout browsers persist locally."""
    cart = current_domain.repository_for(ShoppingCart).get(cart_id)
    return dump_cart_state(cart)


@cart_router.post("/{cart_id}/items", status_code=201, response_model=LineKeyResponse)
async def add_cart_item(cart_id: str, body: AddToCartRequest) -> LineKeyResponse:
    customization = body.customization
    command = AddToCart(
        cart_id=cart_id,
        product_id=body.product_id,
        name=body.name,
        unit_price=body.unit_price,
        quantity=body.quantity,
        size=customization.size if customization else None,
        added_ingredients=json.dumps(customization.added_ingredients) if customization else None,
        removed_ingredients=json.dumps(customization.removed_ingredients) if customization else None,
    )
    key = current_domain.process(command, asynchronous=False)
    return LineKeyResponse(line_key=key)


@cart_router.put("/{cart_id}/items", response_model=StatusResponse)
async def update_cart_item(cart_id: str, body: UpdateCartLineRequest) -> StatusResponse:
    command = UpdateCartLineQuantity(
        cart_id=cart_id,
        line_key=body.line_key,
        quantity=body.quantity,
    )
    current_domain.process(command, asynchronous=False)
    return StatusResponse()


@cart_router.delete("/{cart_id}/items", response_model=StatusResponse)
async def remove_cart_item(cart_id: str, line_key: str) -> StatusResponse:
    command = RemoveFromCart(cart_id=cart_id, line_key=line_key)
    current_domain.process(command, asynchronous=False)
    return StatusResponse()


@cart_router.post("/{cart_id}/clear", response_model=StatusResponse)
async def clear_cart(cart_id: str) -> StatusResponse:
    current_domain.process(ClearCart(cart_id=cart_id), asynchronous=False)
    return StatusResponse()


@cart_router.post("/{cart_id}/restore", response_model=RestoreCartResponse)
async def restore_cart(cart_id: str, body: RestoreCartRequest) -> RestoreCartResponse:
    command = RestoreCart(cart_id=cart_id, state=json.dumps(body.state))
    line_count = current_domain.process(command, asynchronous=False)
    return RestoreCartResponse(line_count=line_count)


@cart_router.post("/{cart_id}/coupon", response_model=ApplyCouponResponse)
async def apply_cart_coupon(cart_id: str, body: ApplyCouponToCartRequest) -> ApplyCouponResponse:
    command = ApplyCouponToCart(cart_id=cart_id, coupon_code=body.coupon_code)
    quote = current_domain.process(command, asynchronous=False)

    cart = current_domain.repository_for(ShoppingCart).get(cart_id)
    summary = price_lines(cart.lines, quote.discount)
    return ApplyCouponResponse(deal=CouponQuoteSchema(**quote.to_dict()), pricing=summary.to_dict())


@cart_router.delete("/{cart_id}/coupon", response_model=StatusResponse)
async def remove_cart_coupon(cart_id: str) -> StatusResponse:
    current_domain.process(RemoveCouponFromCart(cart_id=cart_id), asynchronous=False)
    return StatusResponse()


@cart_router.post("/{cart_id}/checkout", status_code=201, response_model=OrderResponse)
async def checkout_cart(
    cart_id: str,
    body: CheckoutRequest,
    customer: AuthenticatedCustomer = Depends(require_customer),
) -> OrderResponse:
    """Place an order from the cart, then mark the cart converted.

    The previewed coupon is re-validated during placement.
    """
    cart = current_domain.repository_for(ShoppingCart).get(cart_id)
    if cart.customer_id and str(cart.customer_id) != customer.id:
        raise ObjectNotFoundError({"_entity": ["Cart not found"]})
    if CartStatus(cart.status) != CartStatus.ACTIVE:
        raise ValidationError({"status": ["Cart has already been checked out"]})

    place_cmd = PlaceOrder(
        customer_id=customer.id,
        lines=json.dumps(lines_from_cart(cart)),
        order_type=body.order_type.value,
        delivery_address=json.dumps(body.delivery_address.model_dump()) if body.delivery_address else None,
        payment_method=body.payment_method.value,
        coupon_code=cart.coupon_code,
        cart_id=cart_id,
    )
    order_id = current_domain.process(place_cmd, asynchronous=False)

    current_domain.process(ConvertToOrder(cart_id=cart_id, order_id=order_id), asynchronous=False)

    return OrderResponse(order=get_order(customer.id, order_id).to_dict())


# ---------------------------------------------------------------------------
# Deal Router
# ---------------------------------------------------------------------------
deal_router = APIRouter(prefix="/deals", tags=["deals"])


@deal_router.get("", response_model=DealListResponse)
async def list_deals() -> DealListResponse:
    return DealListResponse(deals=[coupon_to_dict(coupon) for coupon in list_active_coupons()])


@deal_router.post("/validate", response_model=ValidateDealResponse)
async def validate_deal(body: ValidateDealRequest) -> ValidateDealResponse:
    """Preview a coupon against an order amount. Never counts a use."""
    quote = validate_coupon(body.code, body.order_amount)
    return ValidateDealResponse(valid=True, deal=CouponQuoteSchema(**quote.to_dict()))


# ---------------------------------------------------------------------------
# Order Router
# ---------------------------------------------------------------------------
order_router = APIRouter(prefix="/orders", tags=["orders"])


@order_router.post("", status_code=201, response_model=OrderResponse)
async def place_order(
    body: PlaceOrderRequest,
    customer: AuthenticatedCustomer = Depends(require_customer),
) -> OrderResponse:
    lines = []
    for item in body.items:
        customization = item.customization
        lines.append(
            {
                "product_id": item.product_id,
                "name": item.name,
                "unit_price": item.unit_price,
                "quantity": item.quantity,
                "customization": customization.model_dump() if customization else None,
            }
        )

    command = PlaceOrder(
        customer_id=customer.id,
        lines=json.dumps(lines),
        order_type=body.order_type.value,
        delivery_address=json.dumps(body.delivery_address.model_dump()) if body.delivery_address else None,
        payment_method=body.payment_method.value,
        coupon_code=body.coupon_code or None,
    )
    order_id = current_domain.process(command, asynchronous=False)
    return OrderResponse(order=get_order(customer.id, order_id).to_dict())


@order_router.get("", response_model=OrderListResponse)
async def get_orders(customer: AuthenticatedCustomer = Depends(require_customer)) -> OrderListResponse:
    return OrderListResponse(orders=[order.to_dict() for order in list_orders(customer.id)])


@order_router.get("/{order_id}", response_model=OrderResponse)
async def get_order_detail(
    order_id: str,
    customer: AuthenticatedCustomer = Depends(require_customer),
) -> OrderResponse:
    return OrderResponse(order=get_order(customer.id, order_id).to_dict())
