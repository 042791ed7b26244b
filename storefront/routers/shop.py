import logging
from typing import Dict, List

from fastapi import APIRouter, Depends, Request, status
from fastapi.responses import HTMLResponse, RedirectResponse

from storefront.core.session import ShopSession
from storefront.core.store_client import StoreError

logger = logging.getLogger(__name__)

router = APIRouter()


def get_session(request: Request) -> ShopSession:
    return request.app.state.session


def _back_to_shop() -> RedirectResponse:
    return RedirectResponse(url="/", status_code=status.HTTP_303_SEE_OTHER)


def _store_failed(session: ShopSession, exc: StoreError) -> HTMLResponse:
    # State is unchanged; show the same page with the failure on top.
    return HTMLResponse(
        session.view.page(error=f"Store request failed: {exc.detail}"),
        status_code=status.HTTP_502_BAD_GATEWAY,
    )


@router.get("/", response_class=HTMLResponse)
async def shop_page(session: ShopSession = Depends(get_session)):
    return session.view.page()


@router.get("/inventory", response_model=List[Dict])
async def list_inventory(session: ShopSession = Depends(get_session)):
    return [item.model_dump() for item in session.state.inventory]


@router.get("/cart", response_model=List[Dict])
async def list_cart(session: ShopSession = Depends(get_session)):
    return [item.model_dump() for item in session.state.cart]


@router.post("/inventory/{item_id}/increment")
async def increment(item_id: int, session: ShopSession = Depends(get_session)):
    session.controller.stage_quantity(item_id, 1)
    session.view.redraw_inventory()
    return _back_to_shop()


@router.post("/inventory/{item_id}/decrement")
async def decrement(item_id: int, session: ShopSession = Depends(get_session)):
    session.controller.stage_quantity(item_id, -1)
    session.view.redraw_inventory()
    return _back_to_shop()


@router.post("/inventory/{item_id}/add")
async def add_to_cart(item_id: int, session: ShopSession = Depends(get_session)):
    try:
        outcome = await session.controller.add_to_cart(item_id)
    except StoreError as exc:
        return _store_failed(session, exc)
    logger.debug("add %s -> %s", item_id, outcome)
    return _back_to_shop()


@router.post("/cart/{item_id}/delete")
async def delete_from_cart(item_id: int, session: ShopSession = Depends(get_session)):
    try:
        outcome = await session.controller.delete_from_cart(item_id)
    except StoreError as exc:
        return _store_failed(session, exc)
    logger.debug("delete %s -> %s", item_id, outcome)
    return _back_to_shop()


@router.post("/checkout")
async def checkout(session: ShopSession = Depends(get_session)):
    try:
        await session.controller.checkout()
    except StoreError as exc:
        return _store_failed(session, exc)
    return _back_to_shop()


@router.post("/refresh")
async def refresh(session: ShopSession = Depends(get_session)):
    try:
        await session.controller.refresh_cart()
    except StoreError as exc:
        return _store_failed(session, exc)
    return _back_to_shop()
