from typing import Dict, Iterable, Optional

DEFAULT_STAGED = 1
MIN_STAGED = 1


class StagedQuantities:
    """Per-item quantity the next add-to-cart will request. Never below 1."""

    def __init__(self) -> None:
        self._staged: Dict[int, int] = {}

    def get(self, item_id: int) -> int:
        return self._staged.get(item_id, DEFAULT_STAGED)

    def set(self, item_id: int, value: int) -> int:
        # bool is an int subclass but never a valid quantity
        if not isinstance(value, int) or isinstance(value, bool):
            raise TypeError(f"staged quantity must be an int, got {type(value).__name__}")
        value = max(MIN_STAGED, value)
        self._staged[item_id] = value
        return value

    def reset(self, item_ids: Optional[Iterable[int]] = None) -> None:
        if item_ids is None:
            self._staged.clear()
            return
        for item_id in item_ids:
            self._staged.pop(item_id, None)

    def as_dict(self) -> Dict[int, int]:
        return dict(self._staged)
