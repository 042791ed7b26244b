from typing import Optional

from storefront.core.staging import StagedQuantities
from storefront.core.state import ShopState
from storefront.views.render import render_cart, render_inventory, render_page


class Storefront:
    """
    The one subscriber of ShopState. Redraws both lists on every notification
    and keeps the latest markup for the page route to serve.

    Redrawing the inventory rebuilds every row with a fresh counter, so the
    staged quantities all go back to their default.
    """

    def __init__(self, state: ShopState, staging: StagedQuantities):
        self.state = state
        self.staging = staging
        self.inventory_html = ""
        self.cart_html = ""

    def attach(self) -> None:
        self.state.subscribe(self.redraw)

    def redraw(self) -> None:
        self.staging.reset()
        self.inventory_html = render_inventory(self.state.inventory, self.staging.as_dict())
        self.cart_html = render_cart(self.state.cart)

    def redraw_inventory(self) -> None:
        # Staging changes only touch the counters, not the synchronized model.
        self.inventory_html = render_inventory(self.state.inventory, self.staging.as_dict())

    def page(self, error: Optional[str] = None) -> str:
        return render_page(self.inventory_html, self.cart_html, error=error)
