# cart/services.py

"""
CART SERVICES

Glue between the pure cart store and the catalog / pricing rules:
- session_store(): the shopper's cart for this request
- snapshot_for(): freeze a catalog product into a cart snapshot
- clamp_to_stock(): how many units an add-to-cart may actually add
- summarize(): cart + shipping / tax / total preview
"""

from __future__ import annotations

from cart.state import ProductSnapshot
from cart.storage import SessionCartStorage
from cart.store import CartStore
from orders.services import pricing

DRAWER_SESSION_KEY = "justfits-cart-open"


def session_store(request) -> CartStore:
    store = CartStore(SessionCartStorage(request.session))
    if request.session.get(DRAWER_SESSION_KEY):
        store.open_cart()
    return store


def remember_drawer(request, store: CartStore) -> None:
    request.session[DRAWER_SESSION_KEY] = bool(store.is_open)


def snapshot_for(product, variant=None) -> ProductSnapshot:
    price = variant.price if variant is not None else product.base_price
    return ProductSnapshot(
        id=str(product.id),
        slug=product.slug,
        name=product.name,
        price=pricing.money(price),
        images=tuple(img.url for img in product.images.all()),
        category=product.category.name if product.category_id else "",
        sizes=tuple(product.sizes),
    )


def clamp_to_stock(variant, requested: int, already_in_cart: int = 0) -> int:
    """
    Units that can still be added without exceeding live stock.
    0 means nothing can be added.
    """
    if variant is None or not variant.is_sellable:
        return 0
    room = int(variant.stock_quantity or 0) - int(already_in_cart or 0)
    return max(0, min(int(requested), room))


def summarize(store: CartStore) -> dict:
    if store.items:
        totals = pricing.compute_totals(store.total_price)
    else:
        zero = pricing.money(0)
        totals = pricing.OrderTotals(subtotal=zero, shipping_cost=zero, tax=zero, total=zero)
    return {
        "items": [
            {
                "id": line.line_id,
                "product": line.product.to_dict(),
                "size": line.size,
                "quantity": line.quantity,
                "lineTotal": str(pricing.money(line.line_total)),
            }
            for line in store.items
        ],
        "isOpen": store.is_open,
        "totalItems": store.total_items,
        "subtotal": str(totals.subtotal),
        "shipping": str(totals.shipping_cost),
        "tax": str(totals.tax),
        "total": str(totals.total),
        "freeShippingThreshold": str(pricing.free_shipping_threshold()),
        "amountToFreeShipping": str(pricing.amount_to_free_shipping(totals.subtotal)),
    }
