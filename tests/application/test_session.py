"""Tests for the authentication session."""

from unittest.mock import MagicMock

import pytest

from shopadmin.application.session import AuthSession, create_session
from shopadmin.domain.exceptions import AuthenticationError, NotAuthenticatedError
from shopadmin.infrastructure.config import Settings
from shopadmin.infrastructure.token_store import FileTokenStore, MemoryTokenStore
from tests.conftest import make_error_response, make_success_response

USER = {"_id": 1, "name": "Admin", "email": "admin@example.com", "isAdmin": True}


class TestAuthSession:
    """Tests for AuthSession."""

    @pytest.fixture
    def store(self) -> MemoryTokenStore:
        """Empty token store."""
        return MemoryTokenStore()

    @pytest.fixture
    def session(self, mock_api_client: MagicMock, store: MemoryTokenStore) -> AuthSession:
        """Session over the mock client."""
        return AuthSession(mock_api_client, store)

    @pytest.mark.asyncio
    async def test_hydrate_without_token(
        self, session: AuthSession, mock_api_client: MagicMock
    ) -> None:
        """No stored token means no profile call."""
        assert session.loading is True
        assert await session.hydrate() is None
        assert session.loading is False
        mock_api_client.get_profile.assert_not_called()

    @pytest.mark.asyncio
    async def test_hydrate_restores_user(
        self, session: AuthSession, store: MemoryTokenStore, mock_api_client: MagicMock
    ) -> None:
        """A valid stored token restores the user."""
        store.set("tok")
        mock_api_client.get_profile.return_value = make_success_response(USER)

        user = await session.hydrate()

        assert user is not None
        assert user.id == 1
        assert user.is_admin is True
        assert session.is_authenticated

    @pytest.mark.asyncio
    async def test_hydrate_clears_rejected_token(
        self, session: AuthSession, store: MemoryTokenStore, mock_api_client: MagicMock
    ) -> None:
        """A token the backend rejects is cleared."""
        store.set("expired")
        mock_api_client.get_profile.return_value = make_error_response(
            "UNAUTHORIZED", "Not authorized, token failed", 401
        )

        assert await session.hydrate() is None
        assert store.get() is None
        assert session.loading is False

    @pytest.mark.asyncio
    async def test_login_stores_token(
        self, session: AuthSession, store: MemoryTokenStore, mock_api_client: MagicMock
    ) -> None:
        """Signing in stores the token and user."""
        mock_api_client.login.return_value = make_success_response({**USER, "token": "new"})

        user = await session.login("admin@example.com", "secret")

        assert user.email == "admin@example.com"
        assert store.get() == "new"
        assert session.token == "new"
        assert session.require_user() is user
        mock_api_client.login.assert_called_once_with("admin@example.com", "secret")

    @pytest.mark.asyncio
    async def test_login_failure(
        self, session: AuthSession, store: MemoryTokenStore, mock_api_client: MagicMock
    ) -> None:
        """Rejected credentials raise with the backend message."""
        mock_api_client.login.return_value = make_error_response(
            "UNAUTHORIZED", "Invalid email or password", 401
        )

        with pytest.raises(AuthenticationError) as exc_info:
            await session.login("admin@example.com", "wrong")

        assert exc_info.value.message == "Invalid email or password"
        assert store.get() is None
        assert not session.is_authenticated

    @pytest.mark.asyncio
    async def test_logout(
        self, session: AuthSession, store: MemoryTokenStore, mock_api_client: MagicMock
    ) -> None:
        """Logging out clears the token and user."""
        mock_api_client.login.return_value = make_success_response({**USER, "token": "new"})
        await session.login("admin@example.com", "secret")

        session.logout()

        assert store.get() is None
        with pytest.raises(NotAuthenticatedError):
            session.require_user()

    @pytest.mark.asyncio
    async def test_close(self, session: AuthSession, mock_api_client: MagicMock) -> None:
        """Closing the session closes the client."""
        await session.close()
        mock_api_client.close.assert_awaited_once()


def test_create_session_uses_file_store(tmp_path) -> None:
    """A configured token path gives a file-backed session."""
    session = create_session(
        Settings(_env_file=None, token_path=str(tmp_path / "token"), api_url="http://x/api")
    )
    assert isinstance(session.store, FileTokenStore)
    assert session.client.base_url == "http://x/api"
    session.store.set("abc")
    assert session.client.token_provider() == "abc"
