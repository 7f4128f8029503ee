"""Anti-forgery state token generation."""

import secrets

from oauthlink.domain.error import EntropyUnavailable

# 256 bits; well above the 128-bit floor for an unguessable state
STATE_BYTES = 32


class StateGenerator:
    """Produces random URL-safe tokens for the OAuth ``state`` parameter."""

    def __init__(self, nbytes: int = STATE_BYTES) -> None:
        if nbytes < 16:
            raise ValueError("State tokens need at least 16 random bytes")
        self.nbytes = nbytes

    def generate(self) -> str:
        """Generate a new state token.

        Returns:
            Base64url token without padding

        Raises:
            EntropyUnavailable: If the OS random source fails
        """
        try:
            return secrets.token_urlsafe(self.nbytes)
        except (NotImplementedError, OSError) as e:
            raise EntropyUnavailable(f"OS random source unavailable: {e}") from e
