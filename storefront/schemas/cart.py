from pydantic import BaseModel, ConfigDict, Field

from .inventory import InventoryItem


# One cart entry per inventory id; the id is the inventory id.
class CartItem(BaseModel):
    model_config = ConfigDict(frozen=True, extra="ignore")

    id: int
    content: str
    amount: int = Field(ge=1)

    def with_amount(self, amount: int) -> "CartItem":
        return self.model_copy(update={"amount": amount})


class CartItemCreate(BaseModel):
    id: int
    content: str
    amount: int = Field(ge=1)

    @classmethod
    def from_inventory(cls, item: InventoryItem, amount: int) -> "CartItemCreate":
        return cls(id=item.id, content=item.content, amount=amount)


class CartItemUpdate(BaseModel):
    amount: int = Field(ge=1)
