"""Client-side shopping cart."""

import uuid
from datetime import datetime
from decimal import Decimal
from typing import Any, Optional

from libs.common.datetime_utils import utc_now
from libs.common.logging import get_logger
from libs.common.storage import StateStorage
from pydantic import BaseModel, Field, ValidationError
from services.storefront_service.schemas import ProductSummary
from services.storefront_service.state.observable import Observable
from services.storefront_service.state.persistence import PersistedState
from services.storefront_service.state.selectors import (
    item_count,
    subtotal,
    total_items,
)

logger = get_logger(__name__)


class CartItem(BaseModel):
    """One cart line: a product (plus optional variant) and a quantity."""

    id: str = Field(default_factory=lambda: uuid.uuid4().hex)
    product: ProductSummary
    variant_id: Optional[uuid.UUID] = None
    # Display label only (e.g. "500g jar"); lines match on variant_id
    variant_name: Optional[str] = None
    quantity: int = Field(1, ge=1)
    added_at: datetime = Field(default_factory=utc_now)

    @property
    def line_total(self) -> Decimal:
        return self.product.selling_price * self.quantity

    def matches(self, product_id: uuid.UUID, variant_id: Optional[uuid.UUID]) -> bool:
        return self.product.id == product_id and self.variant_id == variant_id


class CartSnapshot(BaseModel):
    items: list[CartItem]
    is_open: bool


class CartStore(Observable):
    """
    Items the shopper intends to buy, persisted across sessions.

    Lines are keyed on (product id, variant id). Every operation is total:
    nothing here raises for bad input, and stock limits are left to the
    caller. Item changes are saved wholesale; the open/closed flag is not.
    """

    def __init__(self, storage: StateStorage, key: str):
        super().__init__()
        self._persisted = PersistedState(storage, key)
        self._items: tuple[CartItem, ...] = self._hydrate()
        self._is_open = False

    def _hydrate(self) -> tuple[CartItem, ...]:
        state = self._persisted.load()
        if state is None:
            return ()
        try:
            return tuple(CartItem.model_validate(raw) for raw in state.get("items", []))
        except (ValidationError, TypeError):
            logger.warning("Ignoring unreadable saved cart", exc_info=True)
            return ()

    # ------------------------------------------------------------------
    # State
    # ------------------------------------------------------------------

    @property
    def items(self) -> tuple[CartItem, ...]:
        return self._items

    @property
    def is_open(self) -> bool:
        return self._is_open

    @property
    def state(self) -> CartSnapshot:
        return CartSnapshot(items=list(self._items), is_open=self._is_open)

    def _set_items(self, items: tuple[CartItem, ...]) -> None:
        self._items = items
        self._persisted.save(
            {"items": [item.model_dump(mode="json") for item in items]}
        )
        self._notify(self.state)

    # ------------------------------------------------------------------
    # Item actions
    # ------------------------------------------------------------------

    def add_item(
        self,
        product: Any,
        quantity: int = 1,
        variant_id: Optional[uuid.UUID] = None,
        variant_name: Optional[str] = None,
    ) -> None:
        """Add ``quantity`` units, merging into an existing matching line."""
        if quantity <= 0:
            return
        if not isinstance(product, ProductSummary):
            try:
                product = ProductSummary.model_validate(product)
            except ValidationError:
                logger.warning(
                    "Ignoring cart add for an incomplete product", exc_info=True
                )
                return

        existing = self.find_item(product.id, variant_id)
        if existing is not None:
            self._set_items(
                tuple(
                    item.model_copy(update={"quantity": item.quantity + quantity})
                    if item.id == existing.id
                    else item
                    for item in self._items
                )
            )
            return

        line = CartItem(
            product=product,
            variant_id=variant_id,
            variant_name=variant_name,
            quantity=quantity,
        )
        self._set_items(self._items + (line,))

    def remove_item(self, item_id: str) -> None:
        if not any(item.id == item_id for item in self._items):
            return
        self._set_items(tuple(item for item in self._items if item.id != item_id))

    def update_quantity(self, item_id: str, quantity: int) -> None:
        """Overwrite a line's quantity; zero or less removes the line."""
        if quantity <= 0:
            self.remove_item(item_id)
            return
        if not any(item.id == item_id for item in self._items):
            return
        self._set_items(
            tuple(
                item.model_copy(update={"quantity": quantity})
                if item.id == item_id
                else item
                for item in self._items
            )
        )

    def clear_cart(self) -> None:
        self._set_items(())

    # ------------------------------------------------------------------
    # Drawer visibility
    # ------------------------------------------------------------------

    def open_cart(self) -> None:
        self._set_open(True)

    def close_cart(self) -> None:
        self._set_open(False)

    def toggle_cart(self) -> None:
        self._set_open(not self._is_open)

    def _set_open(self, is_open: bool) -> None:
        self._is_open = is_open
        self._notify(self.state)

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def find_item(
        self, product_id: uuid.UUID, variant_id: Optional[uuid.UUID] = None
    ) -> Optional[CartItem]:
        return next(
            (item for item in self._items if item.matches(product_id, variant_id)),
            None,
        )

    def get_total_items(self) -> int:
        return total_items(self._items)

    def get_total_price(self) -> Decimal:
        return subtotal(self._items)

    def get_item_count(self, product_id: uuid.UUID) -> int:
        return item_count(self._items, product_id)
