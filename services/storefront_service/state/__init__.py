"""Client-side stores: cart, wishlist and auth."""

from services.storefront_service.state.auth import AuthSnapshot, AuthStatus, AuthStore
from services.storefront_service.state.cart import CartItem, CartSnapshot, CartStore
from services.storefront_service.state.context import (
    ClientState,
    create_client_state,
    provide_client_state,
    use_client_state,
)
from services.storefront_service.state.observable import Observable
from services.storefront_service.state.persistence import PersistedState
from services.storefront_service.state.selectors import CartSummary, summarize
from services.storefront_service.state.wishlist import WishlistStore

__all__ = [
    "AuthSnapshot",
    "AuthStatus",
    "AuthStore",
    "CartItem",
    "CartSnapshot",
    "CartStore",
    "CartSummary",
    "ClientState",
    "Observable",
    "PersistedState",
    "WishlistStore",
    "create_client_state",
    "provide_client_state",
    "summarize",
    "use_client_state",
]
