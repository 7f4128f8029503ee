"""Session interface consumed by the OAuth flow."""

from typing import Any, Protocol


class Session(Protocol):
    """Per-visitor key/value storage owned by the host.

    The OAuth service keeps the pending AuthorizationState here between
    the redirect to the provider and the callback.
    """

    async def get(self, key: str) -> Any | None:
        """Return the stored value, or None if absent."""
        ...

    async def put(self, key: str, value: Any) -> None:
        """Store a value under key, replacing any previous one."""
        ...

    async def forget(self, key: str) -> None:
        """Remove key if present."""
        ...

    async def pull(self, key: str) -> Any | None:
        """Remove key and return its previous value, or None if absent.

        Must be atomic: of two concurrent pulls of one key, at most one
        sees the value. A networked store needs a single round trip
        (e.g. GETDEL) here, not a get followed by a forget.
        """
        ...
