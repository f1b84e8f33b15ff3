"""Bearer token storage.

Only the token survives a page reload; everything else is re-fetched.
"""

from abc import ABC, abstractmethod
from collections.abc import MutableMapping
from typing import Any


class TokenStore(ABC):
    @abstractmethod
    def get(self) -> str | None:
        pass

    @abstractmethod
    def set(self, token: str) -> None:
        pass

    @abstractmethod
    def clear(self) -> None:
        """Remove the token. Clearing an empty store is a no-op."""

    def has_token(self) -> bool:
        return bool(self.get())


class MemoryTokenStore(TokenStore):
    """Process-local store, used by the CLI and tests."""

    def __init__(self, token: str | None = None) -> None:
        self._token = token

    def get(self) -> str | None:
        return self._token

    def set(self, token: str) -> None:
        self._token = token

    def clear(self) -> None:
        self._token = None


class MappingTokenStore(TokenStore):
    """Store the token under one well-known key of a dict-like storage.

    In the web app the mapping is NiceGUI's ``app.storage.user``, which is
    persisted per browser and survives reloads.
    """

    def __init__(self, storage: MutableMapping[str, Any], key: str = "authToken") -> None:
        self._storage = storage
        self._key = key

    @property
    def key(self) -> str:
        return self._key

    def get(self) -> str | None:
        token = self._storage.get(self._key)
        return token if isinstance(token, str) and token else None

    def set(self, token: str) -> None:
        self._storage[self._key] = token

    def clear(self) -> None:
        self._storage.pop(self._key, None)
