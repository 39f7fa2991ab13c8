"""Application state container.

One AppState holds every list the storefront works with. It is created once
by the API module (or per test) and handed by reference to the services and
shop views; nothing in the package keeps a hidden global copy.
"""
from typing import List, Optional, Sequence

from ..catalog.query import category_facets
from ..data import fixtures
from ..data.models import (
    ContactMessage,
    MeetingRequest,
    Order,
    Product,
    Review,
    User,
    WarrantyClaim,
)
from ..utils.errors import NotFoundError


def next_id(records: Sequence) -> int:
    return max((r.id for r in records), default=0) + 1


class AppState:
    def __init__(
        self,
        products: List[Product],
        orders: List[Order],
        users: List[User],
        reviews: List[Review],
        contact_messages: List[ContactMessage],
        meeting_requests: Optional[List[MeetingRequest]] = None,
        warranty_claims: Optional[List[WarrantyClaim]] = None,
    ):
        self.products = products
        self.orders = orders
        self.users = users
        self.reviews = reviews
        self.contact_messages = contact_messages
        self.meeting_requests = meeting_requests or []
        self.warranty_claims = warranty_claims or []
        self.subscribers: List[str] = []
        # Bumped on every product add/update/delete and rating change so open
        # shop views know their result set changed.
        self.catalog_version = 0

    @classmethod
    def from_fixtures(cls) -> "AppState":
        reviews = fixtures.load_reviews()
        products = fixtures.load_products(reviews)
        users = fixtures.load_users()
        orders = fixtures.load_orders(products, users)
        return cls(
            products=products,
            orders=orders,
            users=users,
            reviews=reviews,
            contact_messages=fixtures.load_contact_messages(),
        )

    # ---------------- Catalog ----------------

    def categories(self) -> List[str]:
        return category_facets(self.products)

    def bump_catalog(self) -> None:
        self.catalog_version += 1

    def get_product(self, product_id: int) -> Product:
        for p in self.products:
            if p.id == product_id:
                return p
        raise NotFoundError(f"Product {product_id} not found")

    def replace_product(self, product: Product) -> None:
        for i, p in enumerate(self.products):
            if p.id == product.id:
                self.products[i] = product
                self.bump_catalog()
                return
        raise NotFoundError(f"Product {product.id} not found")

    # ---------------- People & orders ----------------

    def get_user(self, user_id: int) -> User:
        for u in self.users:
            if u.id == user_id:
                return u
        raise NotFoundError(f"User {user_id} not found")

    def find_user_by_email(self, email: str) -> Optional[User]:
        for u in self.users:
            if u.email == email:
                return u
        return None

    def get_order(self, order_id: str) -> Order:
        for o in self.orders:
            if o.id == order_id:
                return o
        raise NotFoundError(f"Order {order_id} not found")

    def orders_for(self, user_id: int) -> List[Order]:
        return [o for o in self.orders if o.customer_id == user_id]
