"""Per-session container for the client stores.

Stores are built once at startup with ``create_client_state`` and handed to
UI code through ``provide_client_state``; nothing in this package keeps a
module-level store instance.

Usage:
    state = create_client_state(storage=FileStorage(settings.STATE_DIR))
    with provide_client_state(state):
        use_client_state().cart.add_item(product)
"""

from contextlib import contextmanager
from contextvars import ContextVar
from dataclasses import dataclass
from typing import Iterator, Optional

import httpx
from libs.auth.supabase_client import SupabaseAuthClient
from libs.common.config import Settings, get_settings
from libs.common.storage import StateStorage
from services.storefront_service.state.auth import AuthStore
from services.storefront_service.state.cart import CartStore
from services.storefront_service.state.wishlist import WishlistStore

_current_state: ContextVar[Optional["ClientState"]] = ContextVar(
    "client_state", default=None
)


@dataclass
class ClientState:
    cart: CartStore
    wishlist: WishlistStore
    auth: AuthStore

    async def aclose(self) -> None:
        self.auth.close()
        await self.auth.client.aclose()


def create_client_state(
    storage: StateStorage,
    settings: Optional[Settings] = None,
    transport: Optional[httpx.AsyncBaseTransport] = None,
) -> ClientState:
    """Build the stores for one client session, hydrated from ``storage``."""
    settings = settings or get_settings()
    client = SupabaseAuthClient.from_settings(settings, storage, transport=transport)
    return ClientState(
        cart=CartStore(storage, settings.CART_STORAGE_KEY),
        wishlist=WishlistStore(storage, settings.WISHLIST_STORAGE_KEY),
        auth=AuthStore(client),
    )


@contextmanager
def provide_client_state(state: ClientState) -> Iterator[ClientState]:
    token = _current_state.set(state)
    try:
        yield state
    finally:
        _current_state.reset(token)


def use_client_state() -> ClientState:
    state = _current_state.get()
    if state is None:
        raise RuntimeError("use_client_state must be used within provide_client_state")
    return state
