"""
Reconciliation between user intents and the remote store.

Each intent is a remote call followed, only once that call succeeds, by a
whole-collection replacement on ShopState. Deltas are captured when the
intent is issued; the replacement is derived from the state current at
resolution time. A failed call leaves State untouched.
"""

import asyncio
import logging
from contextlib import AsyncExitStack, asynccontextmanager
from typing import AsyncIterator, Dict, Literal, Optional, Protocol, Sequence, Set

from storefront.core.staging import StagedQuantities
from storefront.core.state import ShopState
from storefront.core.store_client import StoreError
from storefront.schemas import CartItem, CartItemCreate, InventoryItem

logger = logging.getLogger(__name__)

Outcome = Literal["applied", "not_found", "skipped"]


class CartStore(Protocol):
    async def fetch_inventory(self) -> Sequence[InventoryItem]: ...

    async def fetch_cart(self) -> Sequence[CartItem]: ...

    async def create_cart_item(self, item: CartItemCreate) -> Optional[CartItem]: ...

    async def update_cart_item(self, item_id: int, amount: int) -> Optional[CartItem]: ...

    async def delete_cart_item(self, item_id: int) -> None: ...


class ShopController:
    def __init__(self, state: ShopState, store: CartStore, staging: Optional[StagedQuantities] = None):
        self.state = state
        self.store = store
        self.staging = staging if staging is not None else StagedQuantities()
        self._locks: Dict[int, asyncio.Lock] = {}
        self._waiters: Dict[int, int] = {}

    @asynccontextmanager
    async def _item_lock(self, item_id: int) -> AsyncIterator[None]:
        # Serializes cart operations per id; distinct ids never wait on each other.
        lock = self._locks.setdefault(item_id, asyncio.Lock())
        self._waiters[item_id] = self._waiters.get(item_id, 0) + 1
        try:
            async with lock:
                yield
        finally:
            self._waiters[item_id] -= 1
            if not self._waiters[item_id]:
                del self._waiters[item_id]
                del self._locks[item_id]

    async def initialize(self) -> None:
        """Load inventory and cart concurrently; each lands in State on its own."""

        async def load_inventory() -> None:
            self.state.set_inventory(await self.store.fetch_inventory())

        async def load_cart() -> None:
            self.state.set_cart(await self.store.fetch_cart())

        results = await asyncio.gather(load_inventory(), load_cart(), return_exceptions=True)
        errors = [r for r in results if isinstance(r, BaseException)]
        for name, result in zip(("inventory", "cart"), results):
            if isinstance(result, BaseException):
                logger.error("Initial %s load failed: %s", name, result)
        if errors:
            raise errors[0]

    def stage_quantity(self, item_id: int, delta: int) -> int:
        # Only inventory rows carry a counter.
        if self.state.find_inventory_item(item_id) is None:
            logger.debug("stage_quantity: id %s is not in inventory", item_id)
            return self.staging.get(item_id)
        return self.staging.set(item_id, self.staging.get(item_id) + delta)

    async def add_to_cart(self, item_id: int) -> Outcome:
        amount = self.staging.get(item_id)
        if amount == 0:
            return "skipped"

        item = self.state.find_inventory_item(item_id)
        if item is None:
            logger.debug("add_to_cart: id %s is not in inventory", item_id)
            return "not_found"

        async with self._item_lock(item_id):
            existing = self.state.find_cart_item(item_id)
            try:
                if existing is not None:
                    await self.store.update_cart_item(item_id, existing.amount + amount)
                else:
                    await self.store.create_cart_item(CartItemCreate.from_inventory(item, amount))
            except StoreError:
                logger.exception("Adding %s x%s to cart failed; cart left unchanged", item_id, amount)
                raise

            if existing is not None:
                self.state.set_cart(
                    c.with_amount(c.amount + amount) if c.id == item_id else c for c in self.state.cart
                )
            else:
                new_item = CartItem(id=item.id, content=item.content, amount=amount)
                self.state.set_cart((*self.state.cart, new_item))

        logger.info("Added %s x%s to cart", item_id, amount)
        return "applied"

    async def delete_from_cart(self, item_id: int) -> Outcome:
        async with self._item_lock(item_id):
            present = self.state.find_cart_item(item_id) is not None
            try:
                await self.store.delete_cart_item(item_id)
            except StoreError:
                logger.exception("Deleting %s from cart failed; cart left unchanged", item_id)
                raise
            self.state.set_cart(c for c in self.state.cart if c.id != item_id)

        if not present:
            logger.debug("delete_from_cart: id %s was not in the cart", item_id)
            return "not_found"
        logger.info("Deleted %s from cart", item_id)
        return "applied"

    async def checkout(self) -> Outcome:
        """
        Delete every entry of the cart, then drop them locally once all deletes
        succeeded. Entries added for other ids meanwhile are kept.
        """
        async with AsyncExitStack() as stack:
            # Sorted acquisition keeps concurrent checkouts from deadlocking.
            locked = sorted({item.id for item in self.state.cart})
            for item_id in locked:
                await stack.enter_async_context(self._item_lock(item_id))
            return await self._checkout_locked(set(locked))

    async def _checkout_locked(self, locked: Set[int]) -> Outcome:
        snapshot = tuple(item for item in self.state.cart if item.id in locked)
        results = await asyncio.gather(
            *(self.store.delete_cart_item(item.id) for item in snapshot),
            return_exceptions=True,
        )
        errors = [r for r in results if isinstance(r, BaseException)]
        if errors:
            logger.error(
                "Checkout failed for %d of %d entries; cart left unchanged", len(errors), len(snapshot)
            )
            raise errors[0]

        checked_out = {item.id for item in snapshot}
        self.state.set_cart(c for c in self.state.cart if c.id not in checked_out)
        logger.info("Checked out %d entries", len(snapshot))
        return "applied"

    async def refresh_cart(self) -> None:
        try:
            cart = await self.store.fetch_cart()
        except StoreError:
            logger.exception("Refreshing cart failed")
            raise
        self.state.set_cart(cart)
