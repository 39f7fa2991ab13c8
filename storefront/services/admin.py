"""Back-office operations behind the admin dashboard.

Every product mutation goes through AppState so the catalog version moves and
open shop views re-run their query.
"""
from datetime import date, datetime, timedelta
from typing import Dict, List, Optional, Union

from ..app.config import Config
from ..app.state import AppState, next_id
from ..catalog.pagination import Page, paginate
from ..data.models import (
    ClaimStatus,
    ContactMessage,
    ExistingProduct,
    MeetingRequest,
    MeetingStatus,
    MessageStatus,
    NewProduct,
    Order,
    OrderStatus,
    Product,
    ProductDraft,
    User,
    UserRole,
    WarrantyClaim,
)
from ..utils.errors import InvalidArgumentError, NotFoundError, PermissionDeniedError
from ..utils.logger import get_logger

logger = get_logger()


def _coerce(enum_cls, value):
    try:
        return enum_cls(value)
    except ValueError as e:
        raise InvalidArgumentError(f"Invalid {enum_cls.__name__}: {value!r}") from e


def require_admin(user: Optional[User]) -> User:
    if user is None or not user.is_admin:
        raise PermissionDeniedError("Admin access required.")
    return user


# ---------------- Dashboard ----------------

def _parse_day(value: str) -> Optional[date]:
    try:
        return datetime.fromisoformat(value).date()
    except ValueError:
        return None


def dashboard_stats(state: AppState, today: Optional[date] = None) -> Dict:
    today = today or date.today()
    cutoff = today - timedelta(days=Config.NEW_USER_WINDOW_DAYS)
    revenue = sum(o.total for o in state.orders if o.status == OrderStatus.delivered)
    new_users = 0
    for u in state.users:
        joined = _parse_day(u.created_at)
        if joined is not None and cutoff <= joined <= today:
            new_users += 1
    return {
        "total_revenue": round(revenue, 2),
        "pending_orders": sum(1 for o in state.orders if o.status == OrderStatus.processing),
        "new_users": new_users,
        "low_stock_items": sum(1 for p in state.products if p.stock < Config.LOW_STOCK_THRESHOLD),
        "total_products": len(state.products),
        "total_orders": len(state.orders),
    }


# ---------------- Products ----------------

def save_product(state: AppState, draft: ProductDraft) -> Product:
    fields = draft.model_dump(exclude={"kind", "id"})
    if isinstance(draft, NewProduct):
        product = Product(id=next_id(state.products), rating=0.0, reviews=[], **fields)
        state.products.append(product)
        state.bump_catalog()
        logger.info(f"[ADMIN] product {product.id} added: {product.name}")
        return product
    if isinstance(draft, ExistingProduct):
        current = state.get_product(draft.id)
        product = current.model_copy(update=fields)
        state.replace_product(product)
        logger.info(f"[ADMIN] product {product.id} updated")
        return product
    raise InvalidArgumentError(f"Unsupported product form: {type(draft).__name__}")


def delete_product(state: AppState, product_id: int) -> None:
    product = state.get_product(product_id)
    state.products.remove(product)
    state.bump_catalog()
    logger.info(f"[ADMIN] product {product_id} deleted")


# ---------------- Orders ----------------

def list_orders(state: AppState, page: int = 1, per_page: Optional[int] = None) -> Page[Order]:
    return paginate(state.orders, page, per_page or Config.ADMIN_PAGE_SIZE)


def update_order_status(state: AppState, order_id: str, status: Union[str, OrderStatus]) -> Order:
    order = state.get_order(order_id)
    order.status = _coerce(OrderStatus, status)
    logger.info(f"[ADMIN] order {order_id} -> {order.status.value}")
    return order


# ---------------- Users ----------------

def update_user_role(state: AppState, user_id: int, role: Union[str, UserRole]) -> User:
    role = _coerce(UserRole, role)
    user = state.get_user(user_id)
    if user.role == UserRole.super_admin:
        raise PermissionDeniedError("SuperAdmin accounts cannot be changed.")
    if role == UserRole.super_admin:
        raise PermissionDeniedError("The SuperAdmin role cannot be granted.")
    user.role = role
    logger.info(f"[ADMIN] user {user_id} role -> {role.value}")
    return user


# ---------------- Inbox, bookings, claims ----------------

def _find(records: List, record_id: int, label: str):
    for r in records:
        if r.id == record_id:
            return r
    raise NotFoundError(f"{label} {record_id} not found")


def update_message_status(state: AppState, message_id: int, status: Union[str, MessageStatus]) -> ContactMessage:
    msg = _find(state.contact_messages, message_id, "Message")
    msg.status = _coerce(MessageStatus, status)
    return msg


def update_booking_status(state: AppState, booking_id: int, status: Union[str, MeetingStatus]) -> MeetingRequest:
    req = _find(state.meeting_requests, booking_id, "Booking")
    req.status = _coerce(MeetingStatus, status)
    return req


def update_claim_status(state: AppState, claim_id: int, status: Union[str, ClaimStatus]) -> WarrantyClaim:
    claim = _find(state.warranty_claims, claim_id, "Warranty claim")
    claim.status = _coerce(ClaimStatus, status)
    return claim
