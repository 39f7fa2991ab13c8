"""Static seed data for the in-memory storefront.

Everything the shop starts with lives here: products, reviews, users, orders
and the contact inbox. ``load_*`` helpers return fresh model objects on every
call so one AppState never shares mutable objects with another.
"""
from typing import Dict, List

from .models import (
    Address,
    ContactMessage,
    Order,
    Product,
    Review,
    User,
)

REVIEWS: List[Dict] = [
    # FreePods Pro
    {"id": 1, "product_id": 1, "author": "Alice J.", "rating": 5, "comment": "Absolutely amazing sound quality! The ANC is top-notch.", "date": "2023-10-25", "status": "Approved"},
    {"id": 2, "product_id": 1, "author": "GadgetGuru", "rating": 4, "comment": "Great for the price, but the case feels a bit cheap.", "date": "2023-10-26", "status": "Approved"},
    {"id": 3, "product_id": 1, "author": "Mike P.", "rating": 5, "comment": "These are the best earbuds I've ever owned!", "date": "2023-10-28", "status": "Pending"},
    # Powerank 20K
    {"id": 4, "product_id": 2, "author": "Bob S.", "rating": 5, "comment": "This power bank is a beast! It lasts forever.", "date": "2023-10-22", "status": "Approved"},
    {"id": 5, "product_id": 2, "author": "TravelerTom", "rating": 4, "comment": "A bit heavy, but worth it for the capacity.", "date": "2023-10-24", "status": "Approved"},
    {"id": 6, "product_id": 2, "author": "Anonymous", "rating": 1, "comment": "Stopped working after a week.", "date": "2023-10-29", "status": "Rejected"},
    # WatchFit 2
    {"id": 7, "product_id": 3, "author": "FitnessFanatic", "rating": 5, "comment": "Tracks my workouts perfectly. The screen is gorgeous.", "date": "2023-10-20", "status": "Approved"},
    {"id": 8, "product_id": 3, "author": "Diana P.", "rating": 4, "comment": "I wish the battery life was a little longer, but otherwise it's great.", "date": "2023-10-21", "status": "Pending"},
    # BoomBass Speaker
    {"id": 9, "product_id": 4, "author": "PartyStarter", "rating": 5, "comment": "Loud, clear, and the bass is incredible for its size.", "date": "2023-10-18", "status": "Approved"},
    {"id": 10, "product_id": 4, "author": "BeachBum", "rating": 3, "comment": "It's waterproof which is cool but the connection can be spotty sometimes.", "date": "2023-10-27", "status": "Pending"},
    # ChargeFast Trio
    {"id": 11, "product_id": 5, "author": "Techie Tina", "rating": 5, "comment": "So convenient to have one spot for all my devices.", "date": "2023-10-15", "status": "Approved"},
    {"id": 12, "product_id": 5, "author": "Minimalist Max", "rating": 4, "comment": "Works great, reduces clutter on my nightstand.", "date": "2023-10-16", "status": "Approved"},
    # Aero Headset
    {"id": 13, "product_id": 6, "author": "Audiophile Andy", "rating": 5, "comment": "The sound stage is impressive for this price point. Very comfortable.", "date": "2023-10-14", "status": "Approved"},
    {"id": 14, "product_id": 6, "author": "Gamer Gail", "rating": 4, "comment": "Good for music, but the mic is just okay for gaming.", "date": "2023-10-17", "status": "Pending"},
    # CableWrap Kit
    {"id": 15, "product_id": 7, "author": "NeatFreak Nick", "rating": 5, "comment": "My desk has never looked better. The magnets are strong.", "date": "2023-10-12", "status": "Approved"},
    # DriveMount Pro
    {"id": 16, "product_id": 8, "author": "RoadWarrior Rita", "rating": 5, "comment": "Holds my phone securely even on bumpy roads.", "date": "2023-10-11", "status": "Approved"},
]

PRODUCTS: List[Dict] = [
    {"id": 1, "name": "FreePods Pro", "category": "Earbuds", "price": 89.99,
     "image_url": "https://picsum.photos/seed/freepods/400/400",
     "description": "Active Noise Cancellation earbuds with immersive sound and a comfortable fit.",
     "stock": 150, "manufacturing_date": "2023-08-15"},
    {"id": 2, "name": "Powerank 20K", "category": "Power Banks", "price": 45.50,
     "image_url": "https://picsum.photos/seed/powerbank/400/400",
     "description": "A massive 20,000mAh power bank with fast charging capabilities to keep all your devices running.",
     "stock": 300, "manufacturing_date": "2023-09-01"},
    {"id": 3, "name": "WatchFit 2", "category": "Smart Watches", "price": 120.00,
     "image_url": "https://picsum.photos/seed/watchfit/400/400",
     "description": "A sleek smartwatch with health tracking, GPS, and a vibrant AMOLED display.",
     "stock": 80, "manufacturing_date": "2023-07-20"},
    {"id": 4, "name": "BoomBass Speaker", "category": "Speakers", "price": 65.99,
     "image_url": "https://picsum.photos/seed/speaker/400/400",
     "description": "Portable waterproof bluetooth speaker with deep bass and a 24-hour battery life.",
     "stock": 120, "manufacturing_date": "2023-10-05"},
    {"id": 5, "name": "ChargeFast Trio", "category": "Chargers", "price": 39.99,
     "image_url": "https://picsum.photos/seed/charger/400/400",
     "description": "A 3-in-1 wireless charging station for your phone, watch, and earbuds.",
     "stock": 250, "manufacturing_date": "2023-09-22"},
    {"id": 6, "name": "Aero Headset", "category": "Headphones", "price": 150.75,
     "image_url": "https://picsum.photos/seed/headset/400/400",
     "description": "Over-ear headphones with studio-quality audio and supreme comfort for long listening sessions.",
     "stock": 65, "manufacturing_date": "2023-06-10"},
    {"id": 7, "name": "CableWrap Kit", "category": "Accessories", "price": 15.00,
     "image_url": "https://picsum.photos/seed/cablekit/400/400",
     "description": "A complete set of magnetic cable organizers to keep your desk tidy.",
     "stock": 500, "manufacturing_date": "2023-11-01"},
    {"id": 8, "name": "DriveMount Pro", "category": "Accessories", "price": 25.00,
     "image_url": "https://picsum.photos/seed/carmount/400/400",
     "description": "A sturdy and reliable car mount for your phone with quick-release mechanism.",
     "stock": 400, "manufacturing_date": "2023-10-15"},
]

USERS: List[Dict] = [
    {"id": 101, "name": "Alice Johnson", "email": "alice@example.com", "password": "password123", "role": "Customer",
     "address": {"full_name": "Alice Johnson", "street": "123 Maple St", "city": "Springfield", "state": "IL",
                 "zip": "62704", "country": "USA", "phone": "555-0101"},
     "created_at": "2023-01-15"},
    {"id": 102, "name": "Bob Smith", "email": "bob@example.com", "password": "password123", "role": "Customer",
     "address": {"full_name": "Bob Smith", "street": "456 Oak Ave", "city": "Metropolis", "state": "NY",
                 "zip": "10001", "country": "USA", "phone": "555-0102"},
     "created_at": "2023-02-20"},
    {"id": 103, "name": "Charlie Brown", "email": "charlie@example.com", "password": "password123", "role": "Customer",
     "created_at": "2023-03-10"},
    {"id": 201, "name": "Admin User", "email": "admin@buyflex.com", "password": "admin123", "role": "Admin",
     "created_at": "2023-01-01"},
    {"id": 202, "name": "Super Admin", "email": "super@buyflex.com", "password": "super123", "role": "SuperAdmin",
     "created_at": "2023-01-01"},
]

DEFAULT_ADDRESS = {
    "full_name": "Mock User",
    "street": "123 Mockingbird Lane",
    "city": "Faketown",
    "state": "CA",
    "zip": "90210",
    "country": "USA",
    "phone": "555-555-5555",
}

# (order id, customer id, date, status, [(product index, qty)], carrier, tracking number, eta)
ORDERS = [
    ("BFX-001", 101, "2023-10-28", "Delivered", [(0, 1), (5, 2)],
     {"name": "FedEx", "tracking_url": "https://www.fedex.com/apps/fedextrack/?tracknumbers="}, "FX123456789", "2023-10-31"),
    ("BFX-002", 102, "2023-10-29", "Shipped", [(2, 1)],
     {"name": "UPS", "tracking_url": "https://www.ups.com/track?tracknum="}, "UPS987654321", "2023-11-02"),
    ("BFX-003", 101, "2023-10-30", "Processing", [(3, 1), (6, 1)], None, None, "2023-11-05"),
    ("BFX-004", 103, "2023-10-25", "Cancelled", [(7, 1)], None, None, None),
]

CONTACT_MESSAGES: List[Dict] = [
    {"id": 1, "name": "John Doe", "email": "john.d@example.com", "subject": "Question about FreePods Pro",
     "message": "I was wondering if the FreePods Pro are compatible with Android devices. I couldn't find the information on the product page. Thanks!",
     "date": "2023-10-28", "status": "New"},
    {"id": 2, "name": "Jane Smith", "email": "jane.s@example.com", "subject": "Issue with my recent order (BFX-002)",
     "message": "Hi, my order BFX-002 shows as shipped but the tracking number isn't working. Can you please look into this for me?",
     "date": "2023-10-29", "status": "Read"},
    {"id": 3, "name": "Peter Jones", "email": "peter.j@example.com", "subject": "Bulk Order Inquiry",
     "message": "I am interested in purchasing 50 units of the Powerank 20K for my company. Do you offer corporate discounts? Please let me know.",
     "date": "2023-10-30", "status": "Archived"},
    {"id": 4, "name": "Emily White", "email": "emily.w@example.com", "subject": "Return Request",
     "message": "I would like to return the BoomBass Speaker I purchased. It's unopened. What is the process for returns?",
     "date": "2023-11-01", "status": "New"},
]


def average_approved_rating(reviews: List[Review], product_id: int) -> float:
    """Mean rating of a product's approved reviews, one decimal, 0 when none."""
    approved = [r.rating for r in reviews if r.product_id == product_id and r.status == "Approved"]
    if not approved:
        return 0.0
    return round(sum(approved) / len(approved), 1)


def load_reviews() -> List[Review]:
    return [Review(**r) for r in REVIEWS]


def load_products(reviews: List[Review] = None) -> List[Product]:
    reviews = reviews if reviews is not None else load_reviews()
    products = []
    for raw in PRODUCTS:
        pid = raw["id"]
        products.append(Product(
            **raw,
            rating=average_approved_rating(reviews, pid),
            reviews=[r for r in reviews if r.product_id == pid],
        ))
    return products


def load_users() -> List[User]:
    return [User(**u) for u in USERS]


def load_orders(products: List[Product], users: List[User]) -> List[Order]:
    by_id = {u.id: u for u in users}
    orders = []
    for oid, cid, date, status, lines, carrier, tracking, eta in ORDERS:
        customer = by_id.get(cid)
        items = [{"product": products[idx], "quantity": qty} for idx, qty in lines]
        orders.append(Order(
            id=oid,
            customer_id=cid,
            customer_name=customer.name if customer else "Unknown",
            date=date,
            status=status,
            items=items,
            total=round(sum(products[idx].price * qty for idx, qty in lines), 2),
            shipping_address=(customer.address if customer and customer.address else Address(**DEFAULT_ADDRESS)),
            carrier=carrier,
            tracking_number=tracking,
            estimated_delivery=eta,
        ))
    return orders


def load_contact_messages() -> List[ContactMessage]:
    return [ContactMessage(**m) for m in CONTACT_MESSAGES]
