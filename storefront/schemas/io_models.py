"""Pydantic models for API I/O and agent contracts."""
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field

from ..catalog.query import SortKey
from ..data.models import (
    Address,
    ClaimStatus,
    MeetingStatus,
    MessageStatus,
    OrderStatus,
    Product,
    ReviewStatus,
    UserRole,
)


# ---------------- Chat ----------------

class Recommendation(BaseModel):
    product: Product
    reason: str


class AgentResult(BaseModel):
    agent: str
    intent: str
    text_response: str
    recommendations: List[Recommendation] = Field(default_factory=list)
    facts: Dict[str, Any] = Field(default_factory=dict)


class ChatMessage(BaseModel):
    role: str
    text: str
    recommendations: List[Recommendation] = Field(default_factory=list)


class ChatRequest(BaseModel):
    message: str


class ChatResponse(BaseModel):
    session_id: str
    reply: ChatMessage
    history: List[ChatMessage]


# ---------------- Sessions ----------------

class SessionCreateRequest(BaseModel):
    session_id: Optional[str] = None


class SessionCreateResponse(BaseModel):
    session_id: str
    created: bool


# ---------------- Shop view ----------------

class SearchRequest(BaseModel):
    query: str = ""
    submit: bool = False


class FiltersRequest(BaseModel):
    category: Optional[str] = None
    price: Optional[float] = None
    rating: Optional[float] = None


class SortRequest(BaseModel):
    sort: SortKey


class RevealResponse(BaseModel):
    triggered: bool
    is_loading: bool
    visible_count: int


# ---------------- Cart, accounts, checkout ----------------

class CartItemRequest(BaseModel):
    product_id: int
    quantity: int = Field(default=1, ge=1)


class QuantityRequest(BaseModel):
    quantity: int


class LoginRequest(BaseModel):
    email: str
    password: str


class RegisterRequest(BaseModel):
    name: str
    email: str
    password: str


class CheckoutRequest(BaseModel):
    address: Address
    payment_method: str = "card"


# ---------------- Support ----------------

class SerialRequest(BaseModel):
    serial: str


class BookingRequest(BaseModel):
    name: str
    email: str
    date: str
    time: str
    topic: str


class WarrantyClaimRequest(BaseModel):
    product_name: str
    purchase_date: str
    issue_description: str
    file_name: Optional[str] = None


class ContactRequest(BaseModel):
    name: str
    email: str
    subject: str
    message: str


class SubscribeRequest(BaseModel):
    email: str


class ReviewRequest(BaseModel):
    author: str
    rating: int
    comment: str


# ---------------- Admin ----------------

class OrderStatusRequest(BaseModel):
    status: OrderStatus


class RoleRequest(BaseModel):
    role: UserRole


class MessageStatusRequest(BaseModel):
    status: MessageStatus


class BookingStatusRequest(BaseModel):
    status: MeetingStatus


class ClaimStatusRequest(BaseModel):
    status: ClaimStatus


class ReviewStatusRequest(BaseModel):
    status: ReviewStatus
