"""Domain models for the in-memory storefront.

- Status and role fields use str Enums so invalid values are rejected.
- Money is a plain float in currency units, as shown on the product cards.
"""
from enum import Enum
from typing import List, Literal, Optional, Union

from pydantic import BaseModel, Field, computed_field, field_validator


class OrderStatus(str, Enum):
    processing = "Processing"
    shipped = "Shipped"
    delivered = "Delivered"
    cancelled = "Cancelled"


class ReviewStatus(str, Enum):
    approved = "Approved"
    pending = "Pending"
    rejected = "Rejected"


class UserRole(str, Enum):
    customer = "Customer"
    admin = "Admin"
    super_admin = "SuperAdmin"


class MessageStatus(str, Enum):
    new = "New"
    read = "Read"
    archived = "Archived"


class MeetingStatus(str, Enum):
    pending = "Pending"
    confirmed = "Confirmed"
    completed = "Completed"


class ClaimStatus(str, Enum):
    pending = "Pending"
    approved = "Approved"
    rejected = "Rejected"


class Review(BaseModel):
    id: int
    product_id: int
    author: str
    rating: int = Field(ge=1, le=5)
    comment: str
    date: str
    status: ReviewStatus = ReviewStatus.pending


class Product(BaseModel):
    id: int
    name: str
    category: str
    price: float = Field(ge=0)
    image_url: str = ""
    description: str = ""
    rating: float = Field(default=0.0, ge=0, le=5)
    reviews: List[Review] = Field(default_factory=list)
    stock: int = Field(default=0, ge=0)
    manufacturing_date: str = ""


class Address(BaseModel):
    full_name: str
    street: str
    city: str
    state: str
    zip: str
    country: str
    phone: str

    @field_validator("*")
    @classmethod
    def _not_blank(cls, value: str) -> str:
        if not value or not value.strip():
            raise ValueError("address fields are required")
        return value.strip()


class User(BaseModel):
    id: int
    name: str
    email: str
    password: Optional[str] = None
    role: UserRole = UserRole.customer
    address: Optional[Address] = None
    created_at: str

    @property
    def first_name(self) -> str:
        return self.name.split(" ")[0]

    @property
    def is_admin(self) -> bool:
        return self.role in (UserRole.admin, UserRole.super_admin)

    def public(self) -> dict:
        """Serialized user without the password."""
        return self.model_dump(exclude={"password"})


class OrderItem(BaseModel):
    product: Product
    quantity: int = Field(ge=1)


class Carrier(BaseModel):
    name: str
    tracking_url: str


class Order(BaseModel):
    id: str
    customer_id: int
    customer_name: str
    date: str
    status: OrderStatus = OrderStatus.processing
    items: List[OrderItem]
    total: float
    shipping_address: Address
    carrier: Optional[Carrier] = None
    tracking_number: Optional[str] = None
    estimated_delivery: Optional[str] = None

    @computed_field
    @property
    def tracking_link(self) -> Optional[str]:
        if self.carrier and self.tracking_number:
            return f"{self.carrier.tracking_url}{self.tracking_number}"
        return None


class ContactMessage(BaseModel):
    id: int
    name: str
    email: str
    subject: str
    message: str
    date: str
    status: MessageStatus = MessageStatus.new


class MeetingRequest(BaseModel):
    id: int
    name: str
    email: str
    date: str
    time: str
    topic: str
    status: MeetingStatus = MeetingStatus.pending


class WarrantyClaim(BaseModel):
    id: int
    product_name: str
    purchase_date: str
    issue_description: str
    file_name: Optional[str] = None
    status: ClaimStatus = ClaimStatus.pending


# --- Admin product form: tagged variant instead of "has an id?" inspection ---

class _ProductFields(BaseModel):
    name: str = Field(min_length=1)
    category: str = Field(min_length=1)
    price: float = Field(ge=0)
    image_url: str = ""
    description: str = ""
    stock: int = Field(default=0, ge=0)
    manufacturing_date: str = ""


class NewProduct(_ProductFields):
    """Product form submitted from the 'Add Product' dialog."""
    kind: Literal["new"] = "new"


class ExistingProduct(_ProductFields):
    """Product form submitted from the 'Edit Product' dialog."""
    kind: Literal["existing"] = "existing"
    id: int


ProductDraft = Union[NewProduct, ExistingProduct]
