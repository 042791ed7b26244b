"""
Async client for the remote store.

The store is a json-server style REST API exposing two resources:
- /inventory  (read-only catalog)
- /cart       (create / update / delete, keyed by inventory id)

Every call is one round trip and may fail. Failures are raised as StoreError;
nothing is retried here.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional

import httpx
from pydantic import ValidationError

from storefront.core.config import settings
from storefront.schemas import CartItem, CartItemCreate, CartItemUpdate, InventoryItem

logger = logging.getLogger(__name__)


class StoreError(RuntimeError):
    def __init__(self, detail: str, status_code: Optional[int] = None):
        super().__init__(detail)
        self.detail = detail
        self.status_code = status_code


class StoreClient:
    def __init__(
        self,
        base_url: Optional[str] = None,
        *,
        timeout: Optional[float] = None,
        http: Optional[httpx.AsyncClient] = None,
    ):
        self.base_url = (base_url or settings.store_api_url).rstrip("/")
        self._owns_http = http is None
        self._http = http or httpx.AsyncClient(
            base_url=self.base_url,
            timeout=timeout if timeout is not None else settings.store_api_timeout,
            headers={"Accept": "application/json"},
        )

    async def __aenter__(self) -> "StoreClient":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        if self._owns_http:
            await self._http.aclose()

    async def _request(self, method: str, path: str, *, json: Any = None) -> Any:
        try:
            resp = await self._http.request(method, path, json=json)
        except httpx.HTTPError as exc:
            raise StoreError(f"{method} {path} failed: {exc}") from exc

        if resp.status_code >= 400:
            raise StoreError(
                f"{method} {path} failed ({resp.status_code}): {resp.text}",
                status_code=resp.status_code,
            )

        logger.debug("%s %s -> %s", method, path, resp.status_code)
        if resp.status_code == 204 or not resp.content:
            return None
        return resp.json()

    # ----------------------------
    # Inventory
    # ----------------------------

    async def fetch_inventory(self) -> List[InventoryItem]:
        data = await self._request("GET", "/inventory")
        try:
            return [InventoryItem.model_validate(row) for row in data or []]
        except ValidationError as exc:
            raise StoreError(f"GET /inventory returned malformed items: {exc}") from exc

    # ----------------------------
    # Cart
    # ----------------------------

    async def fetch_cart(self) -> List[CartItem]:
        data = await self._request("GET", "/cart")
        try:
            return [CartItem.model_validate(row) for row in data or []]
        except ValidationError as exc:
            raise StoreError(f"GET /cart returned malformed items: {exc}") from exc

    async def create_cart_item(self, item: CartItemCreate) -> CartItem:
        """Calls: POST /cart with the inventory fields plus amount."""
        data = await self._request("POST", "/cart", json=item.model_dump())
        return self._confirmed(data, fallback=item.model_dump())

    async def update_cart_item(self, item_id: int, amount: int) -> Optional[CartItem]:
        """
        Calls: PATCH /cart/{id} with {"amount": amount}.
        Returns None when the store confirms without echoing the entry.
        """
        payload = CartItemUpdate(amount=amount).model_dump()
        data = await self._request("PATCH", f"/cart/{item_id}", json=payload)
        if not isinstance(data, dict):
            return None
        return self._confirmed(data, fallback={"id": item_id, **payload})

    async def delete_cart_item(self, item_id: int) -> None:
        """Calls: DELETE /cart/{id}."""
        await self._request("DELETE", f"/cart/{item_id}")

    @staticmethod
    def _confirmed(data: Any, fallback: Dict[str, Any]) -> CartItem:
        # Some stores answer with a partial body (or nothing) on write.
        merged = {**fallback, **(data if isinstance(data, dict) else {})}
        try:
            return CartItem.model_validate(merged)
        except ValidationError as exc:
            raise StoreError(f"store returned a malformed cart item: {exc}") from exc


def make_client_from_env() -> StoreClient:
    base_url = settings.store_api_url.strip()
    if not base_url:
        raise RuntimeError("Missing STORE_API_URL")
    return StoreClient(base_url=base_url)
