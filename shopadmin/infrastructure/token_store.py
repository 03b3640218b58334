"""Auth token persistence.

The dashboard keeps its bearer token between runs the way a browser
keeps a cookie. ``MemoryTokenStore`` forgets it on exit;
``FileTokenStore`` writes it to a file readable only by the owner.
"""

import os
from pathlib import Path
from typing import Protocol


class TokenStore(Protocol):
    """Where the session token lives."""

    def get(self) -> str | None: ...

    def set(self, token: str) -> None: ...

    def clear(self) -> None: ...


class MemoryTokenStore:
    """Token kept for the lifetime of the process."""

    def __init__(self, token: str | None = None) -> None:
        self._token = token

    def get(self) -> str | None:
        return self._token

    def set(self, token: str) -> None:
        self._token = token

    def clear(self) -> None:
        self._token = None


class FileTokenStore:
    """Token persisted to a file."""

    def __init__(self, path: str | Path) -> None:
        self.path = Path(path).expanduser()

    def get(self) -> str | None:
        try:
            token = self.path.read_text(encoding="utf-8").strip()
        except FileNotFoundError:
            return None
        return token or None

    def set(self, token: str) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        fd = os.open(self.path, os.O_WRONLY | os.O_CREAT | os.O_TRUNC, 0o600)
        # The mode above only applies when the file is created
        os.fchmod(fd, 0o600)
        with os.fdopen(fd, "w", encoding="utf-8") as handle:
            handle.write(token)

    def clear(self) -> None:
        self.path.unlink(missing_ok=True)


def token_store_for(path: str | None) -> TokenStore:
    """File store when a path is configured, memory store otherwise."""
    return FileTokenStore(path) if path else MemoryTokenStore()
