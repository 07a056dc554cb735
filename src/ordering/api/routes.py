"""FastAPI routes for the Ordering domain — carts, checkout and order administration."""

from fastapi import APIRouter, Depends

from catalogue.product import get_catalogue
from identity.customer.customer import Customer
from identity.customer.principal import current_admin, current_customer
from notifications.channel import get_email_channel
from ordering.api.schemas import (
    AddProductToCartRequest,
    ApplyCartActionRequest,
    CartResponse,
    CheckoutRequest,
    CheckoutResponse,
    MergeCartsRequest,
    OrderTransitionsResponse,
    QuoteRequest,
    UpdateOrderStatusRequest,
    UpdatePaymentStatusRequest,
)
from ordering.cart.cart import Cart
from ordering.cart.catalogue import add_to_cart_action
from ordering.cart.engine import apply
from ordering.cart.management import merge_carts
from ordering.checkout.checkout import checkout
from ordering.order.administration import change_order_status, change_payment_status
from ordering.order.lifecycle import next_payment_statuses, next_statuses
from ordering.order.order import Order, OrderStatus
from ordering.pricing.engine import amount_to_free_shipping, price
from ordering.pricing.policy import PricingPolicy
from ordering.store import get_order_store
from shared.config import load_settings


def get_pricing_policy() -> PricingPolicy:
    return load_settings().pricing_policy()


def _cart_response(cart: Cart, policy: PricingPolicy) -> CartResponse:
    return CartResponse(
        cart=cart,
        pricing=price(cart, policy),
        amount_to_free_shipping=amount_to_free_shipping(cart.subtotal, policy),
    )


# ---------------------------------------------------------------------------
# Cart Router
# ---------------------------------------------------------------------------
cart_router = APIRouter(prefix="/carts", tags=["carts"])


@cart_router.post("/apply", response_model=CartResponse)
async def apply_cart_action(
    body: ApplyCartActionRequest,
    policy: PricingPolicy = Depends(get_pricing_policy),
) -> CartResponse:
    """Apply one cart action to the supplied cart and return the priced result."""
    return _cart_response(apply(body.cart, body.action), policy)


@cart_router.post("/items", response_model=CartResponse)
async def add_product_to_cart(
    body: AddProductToCartRequest,
    policy: PricingPolicy = Depends(get_pricing_policy),
) -> CartResponse:
    """Add a catalogue product, checking its options and stock first."""
    action = add_to_cart_action(
        get_catalogue(),
        body.product_id,
        size=body.size,
        color=body.color,
        quantity=body.quantity,
        cart=body.cart,
    )
    return _cart_response(apply(body.cart, action), policy)


@cart_router.post("/merge", response_model=CartResponse)
async def merge_guest_cart(
    body: MergeCartsRequest,
    policy: PricingPolicy = Depends(get_pricing_policy),
) -> CartResponse:
    """Fold the guest cart into the customer's saved cart on sign-in."""
    return _cart_response(merge_carts(body.saved, body.guest), policy)


@cart_router.post("/quote", response_model=CartResponse)
async def quote_cart(
    body: QuoteRequest,
    policy: PricingPolicy = Depends(get_pricing_policy),
) -> CartResponse:
    return _cart_response(body.cart, policy)


# ---------------------------------------------------------------------------
# Checkout Router
# ---------------------------------------------------------------------------
checkout_router = APIRouter(prefix="/checkout", tags=["checkout"])


@checkout_router.post("", status_code=201, response_model=CheckoutResponse)
async def place_order(
    body: CheckoutRequest,
    customer: Customer = Depends(current_customer),
    policy: PricingPolicy = Depends(get_pricing_policy),
) -> CheckoutResponse:
    result = checkout(
        body.cart,
        policy,
        customer=customer,
        shipping_address=body.shipping_address,
        payment_method=body.payment_method,
        store=get_order_store(),
        notifier=get_email_channel(),
        notes=body.notes,
    )
    return CheckoutResponse(order_id=result.order_id, total=result.order.total, warnings=result.warnings)


# ---------------------------------------------------------------------------
# Order Router (admin)
# ---------------------------------------------------------------------------
order_router = APIRouter(prefix="/orders", tags=["orders"])


@order_router.get("", response_model=list[Order])
async def list_orders(
    status: OrderStatus | None = None,
    admin: Customer = Depends(current_admin),
) -> list[Order]:
    orders = get_order_store().list_orders()
    if status is not None:
        orders = [order for order in orders if order.status == status]
    return sorted(orders, key=lambda order: order.created_at, reverse=True)


@order_router.get("/{order_id}", response_model=Order)
async def get_order(order_id: str, admin: Customer = Depends(current_admin)) -> Order:
    return get_order_store().get_order(order_id)


@order_router.get("/{order_id}/transitions", response_model=OrderTransitionsResponse)
async def get_order_transitions(order_id: str, admin: Customer = Depends(current_admin)) -> OrderTransitionsResponse:
    """The status and payment edges an admin may take from the order's current state."""
    order = get_order_store().get_order(order_id)
    return OrderTransitionsResponse(
        order_id=order.id,
        status=order.status,
        payment_status=order.payment_status,
        next_statuses=next_statuses(order),
        next_payment_statuses=next_payment_statuses(order),
    )


@order_router.put("/{order_id}/status", response_model=Order)
async def update_order_status(
    order_id: str,
    body: UpdateOrderStatusRequest,
    admin: Customer = Depends(current_admin),
) -> Order:
    return change_order_status(get_order_store(), order_id, body.status, actor=admin)


@order_router.put("/{order_id}/payment", response_model=Order)
async def update_payment_status(
    order_id: str,
    body: UpdatePaymentStatusRequest,
    admin: Customer = Depends(current_admin),
) -> Order:
    return change_payment_status(get_order_store(), order_id, body.payment_status, actor=admin)
