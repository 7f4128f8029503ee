"""Domain layer errors."""


class DomainError(Exception):
    """Base domain error."""

    pass


class ProviderNotRegistered(DomainError):
    """Raised when no provider is registered under the requested alias."""

    def __init__(self, alias: str):
        self.alias = alias
        super().__init__(f"No OAuth provider registered for alias '{alias}'")


class ProviderMisconfigured(DomainError):
    """Raised at startup when a provider cannot be built from configuration."""

    def __init__(self, alias: str, reason: str):
        self.alias = alias
        super().__init__(f"OAuth provider '{alias}' is misconfigured: {reason}")


class StateMismatch(DomainError):
    """Raised when the callback state does not match the stored authorization state.

    Always aborts the flow.
    """

    pass


class ProviderFlowError(DomainError):
    """Base for failures talking to the external provider."""

    def __init__(self, alias: str, message: str):
        self.alias = alias
        super().__init__(f"{alias}: {message}")


class TokenExchangeFailed(ProviderFlowError):
    """Raised when the authorization code cannot be exchanged for a token."""

    pass


class ProfileFetchFailed(ProviderFlowError):
    """Raised when the provider profile cannot be fetched or is incomplete."""

    pass


class DuplicateLink(DomainError):
    """Raised by link creation when the provider identity is already linked."""

    def __init__(self, provider: str, provider_user_id: str):
        self.provider = provider
        self.provider_user_id = provider_user_id
        super().__init__(
            f"Identity {provider}:{provider_user_id} is already linked to a user"
        )


class EntropyUnavailable(DomainError):
    """Raised when the OS random source cannot produce state tokens."""

    pass

