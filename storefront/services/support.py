"""Customer support desk: order tracking, serial authenticity checks,
meeting bookings, warranty claims, contact messages and the newsletter.
"""
import re
from datetime import date
from typing import Dict, List, Optional

from ..app.state import AppState, next_id
from ..data.models import (
    ContactMessage,
    MeetingRequest,
    MessageStatus,
    MeetingStatus,
    ClaimStatus,
    Order,
    Product,
    WarrantyClaim,
)
from ..utils.errors import InvalidArgumentError, NotFoundError
from ..utils.logger import get_logger

logger = get_logger()

# Demo serial format: PROD-<product id>-<5 alphanumerics>
SERIAL_REGEX = re.compile(r"^PROD-(\d+)-([A-Z0-9]{5})$", re.IGNORECASE)
EMAIL_REGEX = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")


def track_order(orders: List[Order], order_id: str) -> Order:
    order_id = (order_id or "").strip()
    if not order_id:
        raise InvalidArgumentError("Please enter an Order ID.")
    for o in orders:
        if o.id.lower() == order_id.lower():
            return o
    raise NotFoundError(f'Order ID "{order_id}" not found. Please check the ID and try again.')


def verify_serial(products: List[Product], serial: str) -> Product:
    """Return the product an authentic serial belongs to."""
    serial = (serial or "").strip()
    if not serial:
        raise InvalidArgumentError("Please enter a serial number.")
    m = SERIAL_REGEX.match(serial)
    if not m:
        raise InvalidArgumentError("Invalid serial number format. Please try again.")
    product_id = int(m.group(1))
    for p in products:
        if p.id == product_id:
            return p
    raise NotFoundError("This serial number is not associated with any of our products.")


def report_issue_topic(serial: str) -> str:
    return f"Issue with serial: {serial}"


def _require(fields: Dict[str, Optional[str]]) -> None:
    missing = [name for name, value in fields.items() if not value or not str(value).strip()]
    if missing:
        raise InvalidArgumentError(f"Please fill out all required fields: {', '.join(missing)}")


def _require_email(email: str) -> None:
    if not EMAIL_REGEX.match(email or ""):
        raise InvalidArgumentError("Please enter a valid email address.")


def book_meeting(state: AppState, name: str, email: str, date_str: str, time_str: str, topic: str) -> MeetingRequest:
    _require({"name": name, "email": email, "date": date_str, "time": time_str, "topic": topic})
    _require_email(email)
    req = MeetingRequest(
        id=next_id(state.meeting_requests),
        name=name.strip(),
        email=email.strip(),
        date=date_str,
        time=time_str,
        topic=topic.strip(),
        status=MeetingStatus.pending,
    )
    state.meeting_requests.append(req)
    logger.info(f"[SUPPORT] meeting request {req.id} booked for {req.date} {req.time}")
    return req


def submit_warranty_claim(state: AppState, product_name: str, purchase_date: str, issue_description: str,
                          file_name: Optional[str] = None) -> WarrantyClaim:
    _require({"product name": product_name, "purchase date": purchase_date, "issue description": issue_description})
    claim = WarrantyClaim(
        id=next_id(state.warranty_claims),
        product_name=product_name.strip(),
        purchase_date=purchase_date,
        issue_description=issue_description.strip(),
        file_name=file_name or None,
        status=ClaimStatus.pending,
    )
    state.warranty_claims.append(claim)
    logger.info(f"[SUPPORT] warranty claim {claim.id} for {claim.product_name}")
    return claim


def send_contact_message(state: AppState, name: str, email: str, subject: str, message: str,
                         today: Optional[date] = None) -> ContactMessage:
    _require({"name": name, "email": email, "subject": subject, "message": message})
    _require_email(email)
    msg = ContactMessage(
        id=next_id(state.contact_messages),
        name=name.strip(),
        email=email.strip(),
        subject=subject.strip(),
        message=message.strip(),
        date=(today or date.today()).isoformat(),
        status=MessageStatus.new,
    )
    state.contact_messages.append(msg)
    return msg


def subscribe(state: AppState, email: str) -> str:
    email = (email or "").strip()
    _require_email(email)
    if email.lower() not in (s.lower() for s in state.subscribers):
        state.subscribers.append(email)
    return f"{email} has been subscribed!"
