import asyncio
import json
import re
from typing import Dict, List, Optional

import httpx

from storefront.core.store_client import StoreError
from storefront.schemas import CartItem, CartItemCreate, InventoryItem


class FakeStore:
    """In-memory stand-in for the remote store that records every call."""

    def __init__(self, inventory=(), cart=()):
        self.inventory: List[InventoryItem] = list(inventory)
        self.cart: Dict[int, CartItem] = {item.id: item for item in cart}
        self.calls: List[tuple] = []
        self.fail_deletes: set = set()
        self.fail_all = False
        self.gate: Optional[asyncio.Event] = None

    async def _round_trip(self, *call):
        self.calls.append(call)
        if self.gate is not None:
            await self.gate.wait()
        else:
            await asyncio.sleep(0)
        if self.fail_all:
            raise StoreError(f"{call[0]} failed", status_code=500)

    async def fetch_inventory(self):
        await self._round_trip("fetch_inventory")
        return list(self.inventory)

    async def fetch_cart(self):
        await self._round_trip("fetch_cart")
        return list(self.cart.values())

    async def create_cart_item(self, item: CartItemCreate):
        await self._round_trip("create_cart_item", item.model_dump())
        created = CartItem(**item.model_dump())
        self.cart[created.id] = created
        return created

    async def update_cart_item(self, item_id: int, amount: int):
        await self._round_trip("update_cart_item", item_id, amount)
        self.cart[item_id] = self.cart[item_id].with_amount(amount)
        return self.cart[item_id]

    async def delete_cart_item(self, item_id: int):
        await self._round_trip("delete_cart_item", item_id)
        if item_id in self.fail_deletes:
            raise StoreError(f"DELETE /cart/{item_id} failed (404)", status_code=404)
        self.cart.pop(item_id, None)

    async def aclose(self):
        pass


class JsonServer:
    """httpx transport handler that behaves like json-server for /inventory and /cart."""

    def __init__(self, inventory=(), cart=()):
        self.inventory = [dict(row) for row in inventory]
        self.cart = [dict(row) for row in cart]
        self.requests: List[httpx.Request] = []
        self.fail_status: Optional[int] = None

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if self.fail_status is not None:
            return httpx.Response(self.fail_status, text="store is down")

        path = request.url.path
        match = re.fullmatch(r"/cart/(\d+)", path)
        if request.method == "GET" and path == "/inventory":
            return httpx.Response(200, json=self.inventory)
        if request.method == "GET" and path == "/cart":
            return httpx.Response(200, json=self.cart)
        if request.method == "POST" and path == "/cart":
            row = json.loads(request.content)
            self.cart.append(row)
            return httpx.Response(201, json=row)
        if match:
            item_id = int(match.group(1))
            row = next((r for r in self.cart if r["id"] == item_id), None)
            if row is None:
                return httpx.Response(404, json={})
            if request.method == "PATCH":
                row.update(json.loads(request.content))
                return httpx.Response(200, json=row)
            if request.method == "DELETE":
                self.cart.remove(row)
                return httpx.Response(200, json={})
        return httpx.Response(404, json={})


APPLE = InventoryItem(id=1, content="Apple")
BANANA = InventoryItem(id=2, content="Banana")


