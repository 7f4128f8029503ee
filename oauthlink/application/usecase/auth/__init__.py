"""Authentication use cases."""

from .handle_callback import (
    HandleCallbackRequest,
    HandleCallbackResponse,
    HandleCallbackUseCase,
)
from .initiate_login import (
    InitiateLoginRequest,
    InitiateLoginResponse,
    InitiateLoginUseCase,
)
from .list_links import ListLinksRequest, ListLinksResponse, ListLinksUseCase

__all__ = [
    "HandleCallbackRequest",
    "HandleCallbackResponse",
    "HandleCallbackUseCase",
    "InitiateLoginRequest",
    "InitiateLoginResponse",
    "InitiateLoginUseCase",
    "ListLinksRequest",
    "ListLinksResponse",
    "ListLinksUseCase",
]
