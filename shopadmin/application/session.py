"""Authentication session.

An explicit session context passed to whatever needs the signed-in
user. It is hydrated once from the persisted token (verified against
the profile endpoint) and torn down on logout.
"""

import structlog

from shopadmin.catalog.schemas import LoginResponse, UserPayload
from shopadmin.domain.exceptions import AuthenticationError, NotAuthenticatedError
from shopadmin.infrastructure.api_client import AdminAPIClient
from shopadmin.infrastructure.config import Settings
from shopadmin.infrastructure.token_store import TokenStore, token_store_for

logger = structlog.get_logger()


class AuthSession:
    """Signed-in user and token for one dashboard process.

    Example usage:
        store = MemoryTokenStore()
        client = AdminAPIClient(url, token_provider=store.get)
        session = AuthSession(client, store)
        await session.hydrate()
        if not session.is_authenticated:
            await session.login("admin@example.com", "secret")
    """

    def __init__(self, client: AdminAPIClient, store: TokenStore) -> None:
        """Initialize session.

        Args:
            client: API client; should read its token from ``store``.
            store: Token persistence.
        """
        self.client = client
        self.store = store
        self.user: UserPayload | None = None
        self.loading = True

    @property
    def is_authenticated(self) -> bool:
        """Whether a verified user is present."""
        return self.user is not None

    @property
    def token(self) -> str | None:
        """The persisted token, if any."""
        return self.store.get()

    async def hydrate(self) -> UserPayload | None:
        """Restore the user from a persisted token.

        A token the backend no longer accepts is cleared.

        Returns:
            The verified user, or None.
        """
        try:
            if not self.store.get():
                return None
            response = await self.client.get_profile()
            if not response.success or not isinstance(response.data, dict):
                logger.info(
                    "Stored token rejected",
                    error_code=response.error.error_code if response.error else None,
                )
                self.store.clear()
                self.user = None
                return None
            self.user = UserPayload.model_validate(response.data)
            logger.info("Session restored", user_id=self.user.id)
            return self.user
        finally:
            self.loading = False

    async def login(self, email: str, password: str) -> UserPayload:
        """Sign in and persist the token.

        Args:
            email: User email.
            password: User password.

        Returns:
            The signed-in user.

        Raises:
            AuthenticationError: If the backend rejects the credentials.
        """
        response = await self.client.login(email, password)
        if not response.success or not isinstance(response.data, dict):
            message = response.error.message if response.error else "Login Failed"
            status_code = response.error.status_code if response.error else 401
            logger.warning("Login failed", email=email, status_code=status_code)
            raise AuthenticationError(message, status_code=status_code)

        payload = LoginResponse.model_validate(response.data)
        self.store.set(payload.token)
        self.user = UserPayload.model_validate(payload.model_dump(exclude={"token"}))
        self.loading = False
        logger.info("Logged in", user_id=self.user.id)
        return self.user

    def logout(self) -> None:
        """Clear the token and the in-memory user."""
        user_id = self.user.id if self.user else None
        self.store.clear()
        self.user = None
        logger.info("Logged out", user_id=user_id)

    def require_user(self) -> UserPayload:
        """Get the signed-in user.

        Raises:
            NotAuthenticatedError: If nobody is signed in.
        """
        if self.user is None:
            raise NotAuthenticatedError()
        return self.user

    async def close(self) -> None:
        """Close the underlying API client."""
        await self.client.close()


def create_session(settings: Settings) -> AuthSession:
    """Build a session, client and token store from settings.

    Args:
        settings: Application settings.

    Returns:
        AuthSession whose client sends the stored token.
    """
    store = token_store_for(settings.token_path)
    client = AdminAPIClient(
        base_url=settings.api_url,
        token_provider=store.get,
        timeout=settings.request_timeout,
    )
    return AuthSession(client, store)
