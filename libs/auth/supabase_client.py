"""Supabase auth for client sessions, on the SDK's async GoTrue client.

``SupabaseAuthClient`` is a thin layer over ``supabase_auth.AsyncGoTrueClient``:
the session is persisted through a ``StateStorage`` (via
``StateStorageAdapter``) and every backend failure surfaces as
``AuthApiError``, whatever the SDK or httpx raised.

Usage:
    client = SupabaseAuthClient.from_settings(get_settings(), storage)
    response = await client.sign_in_with_password(email, password)
"""

from contextlib import contextmanager
from typing import Any, Callable, Iterator, Optional

import httpx
from supabase_auth import AsyncGoTrueClient, AsyncMemoryStorage, AsyncSupportedStorage
from supabase_auth.errors import AuthError, AuthRetryableError
from supabase_auth.types import AuthChangeEvent, AuthResponse, Session, User

from libs.common.config import SUPABASE_PLACEHOLDER_URL, Settings
from libs.common.logging import get_logger
from libs.common.storage import StateStorage

logger = get_logger(__name__)

_DEFAULT_TIMEOUT = 10.0

NOT_CONFIGURED_MESSAGE = (
    "Supabase not configured. Please set up your environment variables."
)

__all__ = [
    "NOT_CONFIGURED_MESSAGE",
    "AuthApiError",
    "AuthChangeEvent",
    "AuthResponse",
    "Session",
    "StateStorageAdapter",
    "SupabaseAuthClient",
    "User",
]


class AuthApiError(Exception):
    """Failure reported by (or while reaching) the auth backend."""

    def __init__(self, message: str, status: Optional[int] = None):
        super().__init__(message)
        self.message = message
        self.status = status


AuthListener = Callable[[AuthChangeEvent, Optional[Session]], None]


@contextmanager
def auth_errors() -> Iterator[None]:
    """Rewrap SDK, transport and response-parsing failures as AuthApiError."""
    try:
        yield
    except AuthApiError:
        raise
    except AuthRetryableError as exc:
        logger.warning("Auth backend unavailable: %s", exc.message)
        raise AuthApiError(f"Auth service unavailable: {exc.message}", 503) from exc
    except AuthError as exc:
        raise AuthApiError(exc.message, getattr(exc, "status", None)) from exc
    except httpx.HTTPError as exc:
        logger.warning("Auth backend unreachable: %s", exc)
        raise AuthApiError(f"Auth service unavailable: {exc}", 503) from exc
    except ValueError as exc:
        # malformed JSON or an unexpected body on a 2xx response
        logger.error("Unexpected response from auth service", exc_info=True)
        raise AuthApiError("Invalid response from auth service", 502) from exc


class StateStorageAdapter(AsyncSupportedStorage):
    """Lets the SDK keep its session record in a ``StateStorage``."""

    def __init__(self, storage: StateStorage):
        self.storage = storage

    async def get_item(self, key: str) -> Optional[str]:
        try:
            return self.storage.get_item(key)
        except (OSError, UnicodeDecodeError):
            logger.warning("Could not read stored auth session", exc_info=True)
            return None

    async def set_item(self, key: str, value: str) -> None:
        try:
            self.storage.set_item(key, value)
        except OSError:
            logger.error("Could not persist auth session", exc_info=True)

    async def remove_item(self, key: str) -> None:
        try:
            self.storage.remove_item(key)
        except OSError:
            logger.error("Could not remove stored auth session", exc_info=True)


class SupabaseAuthClient:
    """Password auth against ``{url}/auth/v1`` with a persisted session."""

    def __init__(
        self,
        url: Optional[str],
        anon_key: str,
        *,
        storage: Optional[StateStorage] = None,
        storage_key: str = "ayurveda-auth-session",
        transport: Optional[httpx.AsyncBaseTransport] = None,
        timeout: float = _DEFAULT_TIMEOUT,
    ):
        self.url = url
        self.storage_key = storage_key
        self._storage: AsyncSupportedStorage = AsyncMemoryStorage()
        if storage is not None:
            self._storage = StateStorageAdapter(storage)
        self._http: Optional[httpx.AsyncClient] = None
        self._auth: Optional[AsyncGoTrueClient] = None
        if self.configured:
            self._http = httpx.AsyncClient(
                transport=transport, timeout=timeout, follow_redirects=True
            )
            self._auth = AsyncGoTrueClient(
                url=f"{url.rstrip('/')}/auth/v1",
                headers={"apikey": anon_key, "Authorization": f"Bearer {anon_key}"},
                storage_key=storage_key,
                storage=self._storage,
                auto_refresh_token=False,
                persist_session=True,
                http_client=self._http,
            )

    @classmethod
    def from_settings(
        cls,
        settings: Settings,
        storage: Optional[StateStorage] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> "SupabaseAuthClient":
        return cls(
            settings.SUPABASE_URL,
            settings.SUPABASE_ANON_KEY,
            storage=storage,
            storage_key=settings.AUTH_STORAGE_KEY,
            transport=transport,
        )

    @property
    def configured(self) -> bool:
        return bool(self.url) and self.url != SUPABASE_PLACEHOLDER_URL

    def _client(self) -> AsyncGoTrueClient:
        if self._auth is None:
            raise AuthApiError(NOT_CONFIGURED_MESSAGE)
        return self._auth

    # ------------------------------------------------------------------
    # Events
    # ------------------------------------------------------------------

    def on_auth_state_change(self, listener: AuthListener) -> Callable[[], None]:
        """Register ``listener(event, session)``; returns an unsubscribe callable."""
        if self._auth is None:
            return lambda: None

        def notify(event: AuthChangeEvent, session: Optional[Session]) -> None:
            try:
                listener(event, session)
            except Exception:
                logger.exception("Auth listener failed on %s", event)

        subscription = self._auth.on_auth_state_change(notify)
        active = [True]

        def unsubscribe() -> None:
            if active[0]:
                active[0] = False
                subscription.unsubscribe()

        return unsubscribe

    # ------------------------------------------------------------------
    # Auth operations
    # ------------------------------------------------------------------

    async def get_session(self) -> Optional[Session]:
        """Current session, restored from storage and refreshed when expired.

        A refresh the backend rejects drops the stored session.
        """
        auth = self._client()
        try:
            with auth_errors():
                return await auth.get_session()
        except AuthApiError as exc:
            if exc.status is None or not 400 <= exc.status < 500:
                raise
            logger.info("Stored session could not be refreshed: %s", exc.message)
            await self._storage.remove_item(self.storage_key)
            return None

    async def refresh_session(self) -> Optional[Session]:
        auth = self._client()
        with auth_errors():
            response = await auth.refresh_session()
        return response.session

    async def sign_in_with_password(self, email: str, password: str) -> AuthResponse:
        auth = self._client()
        with auth_errors():
            response = await auth.sign_in_with_password(
                {"email": email, "password": password}
            )
        if response.user is not None:
            logger.info("Signed in user %s", response.user.id)
        return response

    async def sign_up(
        self, email: str, password: str, data: Optional[dict[str, Any]] = None
    ) -> AuthResponse:
        """Register a user. The session is None until the email is confirmed."""
        auth = self._client()
        with auth_errors():
            return await auth.sign_up(
                {
                    "email": email,
                    "password": password,
                    "options": {"data": data or {}},
                }
            )

    async def get_user(self) -> Optional[User]:
        auth = self._client()
        with auth_errors():
            response = await auth.get_user()
        return response.user if response else None

    async def sign_out(self) -> None:
        """End the session. A token the backend already forgot still signs out."""
        auth = self._client()
        with auth_errors():
            await auth.sign_out()

    async def aclose(self) -> None:
        if self._http is not None:
            await self._http.aclose()
