from .inventory import InventoryItem
from .cart import CartItem, CartItemCreate, CartItemUpdate

__all__ = ["InventoryItem", "CartItem", "CartItemCreate", "CartItemUpdate"]
