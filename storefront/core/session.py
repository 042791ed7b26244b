import logging
from dataclasses import dataclass, field
from typing import Optional

from storefront.core.controller import ShopController
from storefront.core.staging import StagedQuantities
from storefront.core.state import ShopState
from storefront.core.store_client import StoreClient, StoreError
from storefront.views.storefront import Storefront

logger = logging.getLogger(__name__)


@dataclass
class ShopSession:
    """Everything one shopping session owns, wired together explicitly."""

    store: StoreClient
    state: ShopState = field(default_factory=ShopState)
    staging: StagedQuantities = field(default_factory=StagedQuantities)
    controller: Optional[ShopController] = None
    view: Optional[Storefront] = None

    def __post_init__(self):
        if self.controller is None:
            self.controller = ShopController(self.state, self.store, self.staging)
        if self.view is None:
            self.view = Storefront(self.state, self.staging)
        self.view.attach()

    async def start(self) -> None:
        try:
            await self.controller.initialize()
        except StoreError:
            # The page still comes up; the user can refresh once the store is reachable.
            logger.warning("Store unavailable at startup; serving an empty shop")

    async def close(self) -> None:
        self.state.subscribe(None)
        await self.store.aclose()
