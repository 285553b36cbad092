"""Client-side auth state over the Supabase auth client."""

import enum
from typing import Any, Callable, Optional

from libs.auth.supabase_client import (
    NOT_CONFIGURED_MESSAGE,
    AuthApiError,
    AuthChangeEvent,
    Session,
    SupabaseAuthClient,
    User,
)
from libs.common.logging import get_logger
from pydantic import BaseModel
from services.storefront_service.state.observable import Observable

logger = get_logger(__name__)


class AuthStatus(str, enum.Enum):
    UNINITIALIZED = "uninitialized"
    LOADING = "loading"
    AUTHENTICATED = "authenticated"
    ANONYMOUS = "anonymous"


class AuthSnapshot(BaseModel):
    status: AuthStatus
    user: Optional[User] = None
    session: Optional[Session] = None


class AuthStore(Observable):
    """
    Current user and session, kept in step with the auth backend.

    ``initialize`` resolves the starting session and then follows backend
    change events until ``close``. Without a configured backend the store
    still works: it stays anonymous and sign-out only clears local state.
    """

    def __init__(self, client: SupabaseAuthClient):
        super().__init__()
        self.client = client
        self._user: Optional[User] = None
        self._session: Optional[Session] = None
        self._status = AuthStatus.UNINITIALIZED
        self._unsubscribe_backend: Optional[Callable[[], None]] = None

    @property
    def user(self) -> Optional[User]:
        return self._user

    @property
    def session(self) -> Optional[Session]:
        return self._session

    @property
    def status(self) -> AuthStatus:
        return self._status

    @property
    def loading(self) -> bool:
        return self._status in (AuthStatus.UNINITIALIZED, AuthStatus.LOADING)

    @property
    def state(self) -> AuthSnapshot:
        return AuthSnapshot(status=self._status, user=self._user, session=self._session)

    def _set(self, **changes: Any) -> None:
        for name, value in changes.items():
            setattr(self, f"_{name}", value)
        self._notify(self.state)

    def _settled_status(self) -> AuthStatus:
        if self._session is not None:
            return AuthStatus.AUTHENTICATED
        return AuthStatus.ANONYMOUS

    def _apply_session(self, session: Optional[Session]) -> None:
        self._set(
            user=session.user if session else None,
            session=session,
            status=AuthStatus.AUTHENTICATED if session else AuthStatus.ANONYMOUS,
        )

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    async def initialize(self) -> None:
        if not self.client.configured:
            logger.warning("Supabase not configured, skipping auth initialization")
            self._set(status=self._settled_status())
            return

        self._set(status=AuthStatus.LOADING)
        try:
            session = await self.client.get_session()
        except AuthApiError as exc:
            logger.error("Error getting session: %s", exc.message)
            self._set(status=self._settled_status())
            return

        self._apply_session(session)
        if self._unsubscribe_backend is None:
            self._unsubscribe_backend = self.client.on_auth_state_change(
                self._on_backend_change
            )

    def _on_backend_change(
        self, event: AuthChangeEvent, session: Optional[Session]
    ) -> None:
        logger.debug("Auth state change: %s", event)
        self._apply_session(session)

    def close(self) -> None:
        """Stop following backend auth events."""
        if self._unsubscribe_backend is not None:
            self._unsubscribe_backend()
            self._unsubscribe_backend = None

    # ------------------------------------------------------------------
    # Actions
    # ------------------------------------------------------------------

    async def sign_in(self, email: str, password: str) -> None:
        await self._authenticate(self.client.sign_in_with_password, email, password)

    async def sign_up(
        self, email: str, password: str, user_data: Optional[dict[str, Any]] = None
    ) -> None:
        """Register; the user stays anonymous until the email is confirmed."""
        await self._authenticate(self.client.sign_up, email, password, user_data)

    async def _authenticate(self, action: Callable, *args: Any) -> None:
        self._set(status=AuthStatus.LOADING)
        try:
            if not self.client.configured:
                raise AuthApiError(NOT_CONFIGURED_MESSAGE)
            response = await action(*args)
        except AuthApiError:
            self._set(status=self._settled_status())
            raise

        self._user = response.user
        self._session = response.session
        self._set(status=self._settled_status())

    async def sign_out(self) -> None:
        if not self.client.configured:
            self._apply_session(None)
            return

        self._set(status=AuthStatus.LOADING)
        try:
            await self.client.sign_out()
        except AuthApiError:
            self._set(status=self._settled_status())
            raise
        self._apply_session(None)

    def set_user(self, user: Optional[User]) -> None:
        self._user = user
        self._set(status=self._settled_status())

    def set_session(self, session: Optional[Session]) -> None:
        self._session = session
        self._set(status=self._settled_status())
