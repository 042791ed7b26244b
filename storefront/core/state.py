from typing import Callable, Iterable, Optional, Tuple

from storefront.schemas import CartItem, InventoryItem

Listener = Callable[[], None]


class ShopState:
    """
    Observable holder of the inventory and cart collections.

    Collections are only ever replaced as a whole and stored as tuples, so a
    snapshot read from ``inventory`` or ``cart`` never changes afterwards.
    A single listener is notified synchronously after every replacement,
    whether or not the new value differs from the old one.
    """

    def __init__(self) -> None:
        self._inventory: Tuple[InventoryItem, ...] = ()
        self._cart: Tuple[CartItem, ...] = ()
        self._listener: Optional[Listener] = None

    @property
    def inventory(self) -> Tuple[InventoryItem, ...]:
        return self._inventory

    @property
    def cart(self) -> Tuple[CartItem, ...]:
        return self._cart

    def set_inventory(self, items: Iterable[InventoryItem]) -> None:
        self._inventory = tuple(items)
        self._notify()

    def set_cart(self, items: Iterable[CartItem]) -> None:
        self._cart = tuple(items)
        self._notify()

    def subscribe(self, listener: Optional[Listener]) -> Optional[Listener]:
        """Install ``listener`` in the single slot and return the one it replaced."""
        previous, self._listener = self._listener, listener
        return previous

    def find_inventory_item(self, item_id: int) -> Optional[InventoryItem]:
        return next((item for item in self._inventory if item.id == item_id), None)

    def find_cart_item(self, item_id: int) -> Optional[CartItem]:
        return next((item for item in self._cart if item.id == item_id), None)

    def _notify(self) -> None:
        if self._listener is not None:
            self._listener()
