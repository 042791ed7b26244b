from html import escape
from typing import Mapping, Optional, Sequence

from storefront.core.staging import DEFAULT_STAGED
from storefront.schemas import CartItem, InventoryItem


def render_inventory(inventory: Sequence[InventoryItem], staged: Mapping[int, int]) -> str:
    """One row per inventory item with its -, count, + and add-to-cart controls."""
    rows = []
    for item in inventory:
        amount = staged.get(item.id, DEFAULT_STAGED)
        rows.append(
            f'<li>{escape(item.content)} '
            f'<form method="post" action="/inventory/{item.id}/decrement"><button class="minus-btn">-</button></form>'
            f'<span class="num1" id="amount-{item.id}">{amount}</span>'
            f'<form method="post" action="/inventory/{item.id}/increment"><button class="plus-btn">+</button></form>'
            f'<form method="post" action="/inventory/{item.id}/add"><button class="add-btn">add to cart</button></form>'
            f"</li>"
        )
    return "\n".join(rows)


def render_cart(cart: Sequence[CartItem]) -> str:
    rows = []
    for item in cart:
        rows.append(
            f"<li>{escape(item.content)} x {item.amount} "
            f'<form method="post" action="/cart/{item.id}/delete"><button class="delete-btn">delete</button></form>'
            f"</li>"
        )
    return "\n".join(rows)


def render_page(inventory_html: str, cart_html: str, error: Optional[str] = None) -> str:
    banner = f'<p class="error">{escape(error)}</p>' if error else ""
    return f"""<!DOCTYPE html>
<html>
<head><meta charset="utf-8"><title>Shopping Cart</title></head>
<body>
{banner}
<div class="inventory-container">
<h2>Inventory</h2>
<ul>
{inventory_html}
</ul>
</div>
<div class="cart-container">
<h2>Shopping Cart</h2>
<ul>
{cart_html}
</ul>
<form method="post" action="/checkout"><button class="checkout-btn">checkout</button></form>
</div>
</body>
</html>
"""
