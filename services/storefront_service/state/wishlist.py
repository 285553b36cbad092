"""Client-side wishlist."""

import uuid
from typing import Any, Optional

from libs.common.logging import get_logger
from libs.common.storage import StateStorage
from pydantic import ValidationError
from services.storefront_service.schemas import ProductSummary
from services.storefront_service.state.observable import Observable
from services.storefront_service.state.persistence import PersistedState

logger = get_logger(__name__)


def _as_uuid(value: Any) -> Optional[uuid.UUID]:
    if isinstance(value, uuid.UUID):
        return value
    try:
        return uuid.UUID(str(value))
    except ValueError:
        return None


class WishlistStore(Observable):
    """
    Saved products, deduplicated by product id, in insertion order.

    Entries are full product snapshots, so prices and stock shown from the
    wishlist can lag the live catalog.
    """

    def __init__(self, storage: StateStorage, key: str):
        super().__init__()
        self._persisted = PersistedState(storage, key)
        self._items: tuple[ProductSummary, ...] = self._hydrate()

    def _hydrate(self) -> tuple[ProductSummary, ...]:
        state = self._persisted.load()
        if state is None:
            return ()
        try:
            products = [ProductSummary.model_validate(p) for p in state.get("items", [])]
        except (ValidationError, TypeError):
            logger.warning("Ignoring unreadable saved wishlist", exc_info=True)
            return ()

        # Drop duplicates a hand-edited record might carry
        seen: set[uuid.UUID] = set()
        unique = []
        for product in products:
            if product.id not in seen:
                seen.add(product.id)
                unique.append(product)
        return tuple(unique)

    @property
    def items(self) -> tuple[ProductSummary, ...]:
        return self._items

    def _set_items(self, items: tuple[ProductSummary, ...]) -> None:
        self._items = items
        self._persisted.save({"items": [p.model_dump(mode="json") for p in items]})
        self._notify(self._items)

    def add_to_wishlist(self, product: Any) -> None:
        if not isinstance(product, ProductSummary):
            try:
                product = ProductSummary.model_validate(product)
            except ValidationError:
                logger.warning(
                    "Ignoring wishlist add for an incomplete product", exc_info=True
                )
                return
        if self.is_in_wishlist(product.id):
            return
        self._set_items(self._items + (product,))

    def remove_from_wishlist(self, product_id: Any) -> None:
        if not self.is_in_wishlist(product_id):
            return
        target = _as_uuid(product_id)
        self._set_items(tuple(p for p in self._items if p.id != target))

    def is_in_wishlist(self, product_id: Any) -> bool:
        target = _as_uuid(product_id)
        return target is not None and any(p.id == target for p in self._items)

    def clear_wishlist(self) -> None:
        self._set_items(())

    def get_total_items(self) -> int:
        return len(self._items)
