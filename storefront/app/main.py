#!/usr/bin/env python3
"""
Main FastAPI application for the Buyflex storefront.
"""

import math
import uuid
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from pydantic import ValidationError

from .config import Config
from .session import Session, SessionManager
from .state import AppState
from ..agents.chat_agent import FlexBotAgent
from ..catalog.pagination import Page, paginate
from ..catalog.query import FilterState, query_catalog
from ..catalog.shop_view import ShopSnapshot
from ..data.models import Order, Product, ProductDraft
from ..schemas.io_models import (
    BookingRequest,
    BookingStatusRequest,
    CartItemRequest,
    ChatMessage,
    ChatRequest,
    ChatResponse,
    CheckoutRequest,
    ClaimStatusRequest,
    ContactRequest,
    FiltersRequest,
    LoginRequest,
    MessageStatusRequest,
    OrderStatusRequest,
    QuantityRequest,
    RegisterRequest,
    RevealResponse,
    ReviewRequest,
    ReviewStatusRequest,
    RoleRequest,
    SearchRequest,
    SerialRequest,
    SessionCreateRequest,
    SessionCreateResponse,
    SortRequest,
    SubscribeRequest,
    WarrantyClaimRequest,
)
from ..services import accounts, admin, checkout, reviews, support
from ..utils.errors import InvalidArgumentError, NotFoundError, StorefrontError
from ..utils.logger import get_logger

logger = get_logger()

HOME_SECTION_SIZE = 4


@asynccontextmanager
async def lifespan(app: FastAPI):
    yield
    # Cancel outstanding debounce/reveal timers before the loop goes away
    app.state.sessions.close_all()


# Initialize FastAPI app
app = FastAPI(
    title="Buyflex Storefront API",
    description="Catalog, shop view, cart, checkout, support desk, admin back-office and FlexBot chat",
    version="1.0.0",
    lifespan=lifespan,
)

# Add CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],  # In production, specify your frontend domain
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


def init_state(state: Optional[AppState] = None, **view_options) -> AppState:
    """(Re)build the application state; tests call this for a clean store."""
    previous = getattr(app.state, "sessions", None)
    if previous is not None:
        previous.close_all()
    app.state.store = state or AppState.from_fixtures()
    app.state.sessions = SessionManager(app.state.store, **view_options)
    app.state.chatbot = FlexBotAgent(app.state.store)
    return app.state.store


init_state()


@app.exception_handler(StorefrontError)
async def storefront_error_handler(request: Request, exc: StorefrontError):
    logger.info(f"[API] {request.method} {request.url.path} -> {exc.status_code}: {exc}")
    return JSONResponse(status_code=exc.status_code, content={"detail": str(exc)})


def _store() -> AppState:
    return app.state.store


def _session(session_id: str) -> Session:
    return app.state.sessions.get(session_id)


def _admin_session(session_id: str) -> Session:
    session = _session(session_id)
    admin.require_admin(session.user)
    return session


# ---------------- Sessions ----------------

@app.post("/session", response_model=SessionCreateResponse)
async def create_session(request: Optional[SessionCreateRequest] = None):
    """Create a new storefront session."""
    session_id = (request.session_id if request else None) or str(uuid.uuid4())
    created = app.state.sessions.create_session(session_id)
    return SessionCreateResponse(session_id=session_id, created=created)


@app.delete("/session/{session_id}")
async def delete_session(session_id: str):
    if not app.state.sessions.delete_session(session_id):
        raise NotFoundError(f"Session {session_id} not found")
    return {"deleted": True}


@app.get("/health")
async def health_check():
    """Health check endpoint."""
    return {"status": "healthy", "products": len(_store().products), "llm": Config.has_gemini()}


# ---------------- Catalog ----------------

@app.get("/products", response_model=Page[Product])
async def list_products(category: str = "All", max_price: Optional[float] = None, min_rating: float = 0.0,
                        sort: str = "featured", q: str = "", page: int = 1,
                        per_page: int = Config.INITIAL_WINDOW_SIZE):
    """Stateless catalog query with page slicing."""
    try:
        filters = FilterState(
            category=category,
            price=math.inf if max_price is None else max_price,
            rating=min_rating,
        )
    except ValidationError as e:
        raise InvalidArgumentError(f"Invalid filters: {e.errors()[0]['msg']}") from e
    results = query_catalog(_store().products, filters, sort, q)
    return paginate(results, page, per_page)


@app.get("/products/{product_id}")
async def get_product(product_id: int):
    store = _store()
    product = store.get_product(product_id)
    related = [p for p in store.products if p.category == product.category and p.id != product.id]
    return {"product": product, "related": related[:HOME_SECTION_SIZE]}


@app.get("/categories")
async def list_categories():
    return {"categories": _store().categories()}


@app.get("/home")
async def home():
    """Homepage sections shown above the shop grid."""
    store = _store()
    return {
        "new_arrivals": store.products[:HOME_SECTION_SIZE],
        "best_sellers": store.products[HOME_SECTION_SIZE:2 * HOME_SECTION_SIZE],
        "testimonials": reviews.testimonials(store),
    }


# ---------------- Shop view ----------------

@app.get("/session/{session_id}/shop", response_model=ShopSnapshot)
async def shop_snapshot(session_id: str):
    return _session(session_id).view.snapshot()


@app.put("/session/{session_id}/shop/search", response_model=ShopSnapshot)
async def shop_search(session_id: str, request: SearchRequest):
    view = _session(session_id).view
    if request.submit:
        view.submit_search(request.query)
    else:
        view.type_search(request.query)
    return view.snapshot()


@app.put("/session/{session_id}/shop/filters", response_model=ShopSnapshot)
async def shop_filters(session_id: str, request: FiltersRequest):
    view = _session(session_id).view
    view.set_filters(category=request.category, price=request.price, rating=request.rating)
    return view.snapshot()


@app.put("/session/{session_id}/shop/sort", response_model=ShopSnapshot)
async def shop_sort(session_id: str, request: SortRequest):
    view = _session(session_id).view
    view.set_sort(request.sort)
    return view.snapshot()


@app.post("/session/{session_id}/shop/reveal", response_model=RevealResponse)
async def shop_reveal(session_id: str):
    view = _session(session_id).view
    triggered = view.reveal_more()
    visible = view.window.visible(view.results())
    return RevealResponse(triggered=triggered, is_loading=view.window.is_loading, visible_count=len(visible))


# ---------------- Cart & wishlist ----------------

def _cart_payload(session: Session) -> dict:
    return {**session.cart.to_dict(), **checkout.quote(session.cart)}


@app.get("/session/{session_id}/cart")
async def get_cart(session_id: str):
    return _cart_payload(_session(session_id))


@app.post("/session/{session_id}/cart")
async def add_to_cart(session_id: str, request: CartItemRequest):
    session = _session(session_id)
    product = _store().get_product(request.product_id)
    session.cart.add_item(product, request.quantity)
    return _cart_payload(session)


@app.put("/session/{session_id}/cart/{product_id}")
async def update_cart_item(session_id: str, product_id: int, request: QuantityRequest):
    session = _session(session_id)
    session.cart.update_quantity(product_id, request.quantity)
    return _cart_payload(session)


@app.delete("/session/{session_id}/cart/{product_id}")
async def remove_cart_item(session_id: str, product_id: int):
    session = _session(session_id)
    session.cart.remove_item(product_id)
    return _cart_payload(session)


@app.delete("/session/{session_id}/cart")
async def clear_cart(session_id: str):
    session = _session(session_id)
    session.cart.clear()
    return _cart_payload(session)


@app.get("/session/{session_id}/wishlist")
async def get_wishlist(session_id: str):
    session = _session(session_id)
    return {"products": session.wishlist.products(_store().products)}


@app.post("/session/{session_id}/wishlist/{product_id}")
async def toggle_wishlist(session_id: str, product_id: int):
    session = _session(session_id)
    product = _store().get_product(product_id)
    added = session.wishlist.toggle(product.id)
    message = f"{product.name} added to wishlist!" if added else f"{product.name} removed from wishlist."
    return {"wishlisted": added, "message": message, "count": len(session.wishlist)}


@app.post("/session/{session_id}/wishlist/{product_id}/move-to-cart")
async def move_to_cart(session_id: str, product_id: int):
    session = _session(session_id)
    product = _store().get_product(product_id)
    session.wishlist.move_to_cart(product, session.cart)
    return _cart_payload(session)


# ---------------- Accounts ----------------

@app.post("/session/{session_id}/login")
async def login(session_id: str, request: LoginRequest):
    session = _session(session_id)
    user = accounts.login(_store(), request.email, request.password)
    session.user_id = user.id
    return {"user": user.public(), "message": accounts.welcome_message(user)}


@app.post("/session/{session_id}/register")
async def register(session_id: str, request: RegisterRequest):
    session = _session(session_id)
    user = accounts.register(_store(), request.name, request.email, request.password)
    session.user_id = user.id
    return {"user": user.public(), "message": accounts.welcome_message(user, returning=False)}


@app.post("/session/{session_id}/logout")
async def logout(session_id: str):
    _session(session_id).user_id = None
    return {"message": "You have been logged out."}


@app.get("/session/{session_id}/profile")
async def profile(session_id: str):
    user = _session(session_id).require_user()
    store = _store()
    return {
        "user": user.public(),
        "orders": store.orders_for(user.id),
        "reviews": reviews.reviews_by_author(store, user.name),
    }


@app.post("/session/{session_id}/checkout", response_model=Order)
async def place_order(session_id: str, request: CheckoutRequest):
    session = _session(session_id)
    return checkout.place_order(_store(), session.user, session.cart, request.address, request.payment_method)


# ---------------- Support desk ----------------

@app.get("/orders/{order_id}/track", response_model=Order)
async def track_order(order_id: str):
    return support.track_order(_store().orders, order_id)


@app.post("/serials/verify")
async def verify_serial(request: SerialRequest):
    product = support.verify_serial(_store().products, request.serial)
    return {
        "authentic": True,
        "message": "This product is authentic!",
        "product": product,
        "issue_topic": support.report_issue_topic(request.serial.strip()),
    }


@app.post("/bookings")
async def book_meeting(request: BookingRequest):
    booking = support.book_meeting(_store(), request.name, request.email, request.date, request.time, request.topic)
    return {"booking": booking, "message": "Your meeting request has been sent! We'll be in touch to confirm."}


@app.post("/warranty-claims")
async def warranty_claim(request: WarrantyClaimRequest):
    claim = support.submit_warranty_claim(
        _store(), request.product_name, request.purchase_date, request.issue_description, request.file_name
    )
    return {"claim": claim, "message": "Your warranty claim has been submitted successfully!"}


@app.post("/contact")
async def contact(request: ContactRequest):
    msg = support.send_contact_message(_store(), request.name, request.email, request.subject, request.message)
    return {"contact_message": msg, "message": "Thank you for your message! We'll get back to you soon."}


@app.post("/subscribe")
async def subscribe(request: SubscribeRequest):
    return {"message": support.subscribe(_store(), request.email)}


@app.post("/products/{product_id}/reviews")
async def submit_review(product_id: int, request: ReviewRequest):
    review = reviews.submit_review(_store(), product_id, request.author, request.rating, request.comment)
    return {"review": review, "message": "Thank you! Your review has been submitted for approval."}


# ---------------- Chat ----------------

@app.post("/session/{session_id}/chat", response_model=ChatResponse)
def chat(session_id: str, request: ChatRequest):
    # Sync endpoint: the Gemini call blocks, so it runs in the threadpool
    session = _session(session_id)
    result = app.state.chatbot.handle(request.message, {"session_id": session_id})
    session.add_message(ChatMessage(role="user", text=request.message))
    reply = ChatMessage(role="bot", text=result.text_response, recommendations=result.recommendations)
    session.add_message(reply)
    return ChatResponse(session_id=session_id, reply=reply, history=session.messages)


# ---------------- Admin ----------------

@app.get("/session/{session_id}/admin/dashboard")
async def admin_dashboard(session_id: str):
    _admin_session(session_id)
    return admin.dashboard_stats(_store())


@app.get("/session/{session_id}/admin/products")
async def admin_products(session_id: str):
    _admin_session(session_id)
    return {"products": _store().products}


@app.post("/session/{session_id}/admin/products", response_model=Product)
async def admin_save_product(session_id: str, draft: ProductDraft):
    _admin_session(session_id)
    return admin.save_product(_store(), draft)


@app.delete("/session/{session_id}/admin/products/{product_id}")
async def admin_delete_product(session_id: str, product_id: int):
    _admin_session(session_id)
    admin.delete_product(_store(), product_id)
    return {"deleted": True}


@app.get("/session/{session_id}/admin/orders", response_model=Page[Order])
async def admin_orders(session_id: str, page: int = 1):
    _admin_session(session_id)
    return admin.list_orders(_store(), page)


@app.put("/session/{session_id}/admin/orders/{order_id}/status", response_model=Order)
async def admin_order_status(session_id: str, order_id: str, request: OrderStatusRequest):
    _admin_session(session_id)
    return admin.update_order_status(_store(), order_id, request.status)


@app.get("/session/{session_id}/admin/users")
async def admin_users(session_id: str):
    _admin_session(session_id)
    return {"users": [u.public() for u in _store().users]}


@app.put("/session/{session_id}/admin/users/{user_id}/role")
async def admin_user_role(session_id: str, user_id: int, request: RoleRequest):
    _admin_session(session_id)
    return admin.update_user_role(_store(), user_id, request.role).public()


@app.get("/session/{session_id}/admin/messages")
async def admin_messages(session_id: str):
    _admin_session(session_id)
    return {"messages": _store().contact_messages}


@app.put("/session/{session_id}/admin/messages/{message_id}/status")
async def admin_message_status(session_id: str, message_id: int, request: MessageStatusRequest):
    _admin_session(session_id)
    return admin.update_message_status(_store(), message_id, request.status)


@app.get("/session/{session_id}/admin/bookings")
async def admin_bookings(session_id: str):
    _admin_session(session_id)
    return {"bookings": _store().meeting_requests}


@app.put("/session/{session_id}/admin/bookings/{booking_id}/status")
async def admin_booking_status(session_id: str, booking_id: int, request: BookingStatusRequest):
    _admin_session(session_id)
    return admin.update_booking_status(_store(), booking_id, request.status)


@app.get("/session/{session_id}/admin/claims")
async def admin_claims(session_id: str):
    _admin_session(session_id)
    return {"claims": _store().warranty_claims}


@app.put("/session/{session_id}/admin/claims/{claim_id}/status")
async def admin_claim_status(session_id: str, claim_id: int, request: ClaimStatusRequest):
    _admin_session(session_id)
    return admin.update_claim_status(_store(), claim_id, request.status)


@app.get("/session/{session_id}/admin/reviews")
async def admin_reviews(session_id: str):
    _admin_session(session_id)
    return {"reviews": _store().reviews}


@app.put("/session/{session_id}/admin/reviews/{review_id}/status")
async def admin_review_status(session_id: str, review_id: int, request: ReviewStatusRequest):
    _admin_session(session_id)
    return reviews.moderate_review(_store(), review_id, request.status)


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=8000)
