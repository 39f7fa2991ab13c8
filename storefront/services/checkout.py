"""Checkout: turns a session cart into an Order.

Shipping is free from FREE_SHIPPING_THRESHOLD upwards, otherwise a flat fee.
Payment is simulated; nothing is charged.
"""
import random
from datetime import date, timedelta
from typing import Optional

from ..app.config import Config
from ..app.state import AppState
from ..data.models import Address, Order, OrderItem, OrderStatus, User
from ..utils.errors import AuthenticationError, EmptyCartError, InvalidArgumentError
from ..utils.logger import get_logger
from .cart import ShoppingCart

logger = get_logger()

PAYMENT_METHODS = ("card", "paypal", "africa")


def shipping_fee(subtotal: float) -> float:
    return 0.0 if subtotal >= Config.FREE_SHIPPING_THRESHOLD else Config.FLAT_SHIPPING_FEE


def order_total(cart: ShoppingCart) -> float:
    subtotal = cart.get_total()
    return round(subtotal + shipping_fee(subtotal), 2)


def quote(cart: ShoppingCart) -> dict:
    """Order summary shown beside the shipping form."""
    subtotal = cart.get_total()
    fee = shipping_fee(subtotal)
    return {"subtotal": subtotal, "shipping": fee, "total": round(subtotal + fee, 2)}


def _new_order_id(state: AppState, rng: random.Random) -> str:
    taken = {o.id for o in state.orders}
    free = [n for n in range(100, 1000) if f"BFX-{n:03d}" not in taken]
    if not free:
        raise InvalidArgumentError("No order numbers left")
    return f"BFX-{rng.choice(free):03d}"


def place_order(state: AppState, user: Optional[User], cart: ShoppingCart, address: Address,
                payment_method: str = "card", today: Optional[date] = None,
                rng: Optional[random.Random] = None) -> Order:
    if user is None:
        raise AuthenticationError("Please log in to check out.")
    if cart.is_empty():
        raise EmptyCartError("Your cart is empty.")
    if payment_method not in PAYMENT_METHODS:
        raise InvalidArgumentError(f"Unsupported payment method: {payment_method!r}")

    today = today or date.today()
    rng = rng or random.Random()

    # Lines and total both price the cart's copy of each product
    items = [OrderItem(product=item['product'], quantity=item['quantity']) for item in cart.items]

    order = Order(
        id=_new_order_id(state, rng),
        customer_id=user.id,
        customer_name=user.name,
        date=today.isoformat(),
        status=OrderStatus.processing,
        items=items,
        total=order_total(cart),
        shipping_address=address,
        estimated_delivery=(today + timedelta(days=Config.ESTIMATED_DELIVERY_DAYS)).isoformat(),
    )

    state.orders.insert(0, order)
    cart.clear()
    logger.info(f"[CHECKOUT] order {order.id} placed by user {user.id}: ${order.total:.2f} via {payment_method}")
    return order
