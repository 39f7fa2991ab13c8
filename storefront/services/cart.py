"""Per-session shopping cart and wishlist."""
from typing import Dict, List

from ..data.models import Product
from ..utils.errors import InvalidArgumentError, NotFoundError


class ShoppingCart:
    def __init__(self):
        self.items: List[Dict] = []  # List of dicts: {'product': Product, 'quantity': int}

    def add_item(self, product: Product, quantity: int = 1):
        """Add an item to the cart or update quantity if it already exists."""
        if quantity <= 0:
            raise InvalidArgumentError("Quantity must be at least 1")
        for item in self.items:
            if item['product'].id == product.id:
                item['quantity'] += quantity
                return
        self.items.append({'product': product, 'quantity': quantity})

    def update_quantity(self, product_id: int, quantity: int):
        """Set a line's quantity; zero or less removes the line."""
        if quantity <= 0:
            self.remove_item(product_id)
            return
        for item in self.items:
            if item['product'].id == product_id:
                item['quantity'] = quantity
                return
        raise NotFoundError(f"Product {product_id} is not in the cart")

    def remove_item(self, product_id: int):
        """Remove an item from the cart."""
        self.items = [item for item in self.items if item['product'].id != product_id]

    def clear(self):
        """Clear the entire cart."""
        self.items = []

    def get_total(self) -> float:
        """Calculate the total price of items in the cart."""
        return round(sum(item['product'].price * item['quantity'] for item in self.items), 2)

    def get_count(self) -> int:
        """Number of units in the cart (the header badge)."""
        return sum(item['quantity'] for item in self.items)

    def is_empty(self) -> bool:
        return not self.items

    def to_dict(self) -> Dict:
        return {
            "items": [
                {"product": item['product'].model_dump(), "quantity": item['quantity'],
                 "line_total": round(item['product'].price * item['quantity'], 2)}
                for item in self.items
            ],
            "count": self.get_count(),
            "subtotal": self.get_total(),
        }


class Wishlist:
    def __init__(self):
        self.product_ids: List[int] = []

    def toggle(self, product_id: int) -> bool:
        """Add or remove a product. Returns True when it is now wishlisted."""
        if product_id in self.product_ids:
            self.product_ids.remove(product_id)
            return False
        self.product_ids.append(product_id)
        return True

    def contains(self, product_id: int) -> bool:
        return product_id in self.product_ids

    def products(self, catalog: List[Product]) -> List[Product]:
        """Wishlisted products still in the catalog, in catalog order."""
        return [p for p in catalog if p.id in self.product_ids]

    def move_to_cart(self, product: Product, cart: ShoppingCart) -> None:
        cart.add_item(product, 1)
        if product.id in self.product_ids:
            self.product_ids.remove(product.id)

    def __len__(self) -> int:
        return len(self.product_ids)
