from pydantic import BaseModel, ConfigDict, field_validator


class InventoryItem(BaseModel):
    """Catalog entry as served by the store. Read-only on the client."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    id: int
    content: str

    @field_validator("content")
    @classmethod
    def _strip(cls, v: str) -> str:
        return (v or "").strip()
