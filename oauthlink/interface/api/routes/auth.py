"""Authentication routes."""

import logging
from urllib.parse import urlencode
from uuid import UUID

from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter, Cookie, Response, status
from fastapi.responses import RedirectResponse
from pydantic import BaseModel

from oauthlink.adapter.session import StoredSession
from oauthlink.application.usecase.auth import (
    HandleCallbackRequest,
    HandleCallbackUseCase,
    InitiateLoginRequest,
    InitiateLoginUseCase,
    ListLinksRequest,
    ListLinksResponse,
    ListLinksUseCase,
)
from oauthlink.config import Settings
from oauthlink.domain.error import ProviderFlowError, StateMismatch
from oauthlink.domain.service import JWTService
from oauthlink.domain.value import UserId
from oauthlink.interface.error import NotAuthenticatedError, callback_error_code

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/auth", tags=["authentication"], route_class=DishkaRoute)


class LogoutResponse(BaseModel):
    """Logout response."""

    success: bool
    message: str


class AuthStatusResponse(BaseModel):
    """Current authentication status."""

    authenticated: bool
    user_id: str | None = None


def _cookie_options(settings: Settings) -> dict:
    """Cookie flags shared by the session and auth cookies.

    Production serves over HTTPS, so cookies are marked secure there.
    """
    is_production = settings.environment == "production"
    return {
        "httponly": True,
        "secure": is_production,
        "samesite": "lax",
        "path": "/",
    }


def _error_redirect(settings: Settings, error: str, message: str) -> RedirectResponse:
    query = urlencode({"error": error, "message": message})
    return RedirectResponse(
        url=f"{settings.api.frontend_url}/auth/error?{query}",
        status_code=status.HTTP_302_FOUND,
    )


def _current_user_id(jwt_service: JWTService, auth_token: str | None) -> UserId | None:
    user_id = jwt_service.get_user_id_from_token(auth_token)
    if not user_id:
        return None
    try:
        return UserId(UUID(user_id))
    except ValueError:
        return None


@router.get("/{alias}/login")
async def initiate_login(
    alias: str,
    initiate_login_use_case: FromDishka[InitiateLoginUseCase],
    session: FromDishka[StoredSession],
    settings: FromDishka[Settings],
) -> RedirectResponse:
    """Redirect the user to the provider's authorization page.

    Unknown aliases answer 404 and store nothing.

    Example:
        GET /auth/github/login

        Redirects to: https://github.com/login/oauth/authorize?...&state=...
        Sets cookie: oauth_session
    """
    logger.info(f"Initiating {alias} login")

    response = await initiate_login_use_case.execute(InitiateLoginRequest(alias=alias))

    # Abandoned flows leave sessions behind
    await session.store.purge_expired()

    redirect = RedirectResponse(
        url=response.authorization_url, status_code=status.HTTP_302_FOUND
    )
    redirect.set_cookie(
        key=settings.session.cookie_name,
        value=session.session_id,
        max_age=settings.session.ttl_seconds,
        **_cookie_options(settings),
    )
    return redirect


@router.get("/{alias}/callback")
async def oauth_callback(
    alias: str,
    handle_callback_use_case: FromDishka[HandleCallbackUseCase],
    jwt_service: FromDishka[JWTService],
    settings: FromDishka[Settings],
    code: str | None = None,
    state: str | None = None,
    error: str | None = None,
    auth_token: str | None = Cookie(default=None),
) -> RedirectResponse:
    """Complete the provider login, set the auth cookie and go to the frontend.

    Failures redirect to the frontend error page; a rejected state is
    never turned into a login.

    Example:
        GET /auth/github/callback?code=abc123&state=xyz789

        Redirects to: http://localhost:3000
        Sets cookie: auth_token
    """
    logger.info(f"OAuth callback received: provider={alias}")

    if error:
        # User declined on the provider's page
        logger.info(f"Provider returned error: provider={alias}, error={error}")
        return _error_redirect(settings, "access_denied", error)

    if not code or not state:
        return _error_redirect(
            settings, "invalid_request", "Missing code or state parameter"
        )

    try:
        login_response = await handle_callback_use_case.execute(
            HandleCallbackRequest(
                alias=alias,
                state=state,
                code=code,
                current_user_id=_current_user_id(jwt_service, auth_token),
            )
        )
    except (StateMismatch, ProviderFlowError) as e:
        logger.warning(f"OAuth callback failed: provider={alias}, error={e}")
        return _error_redirect(settings, callback_error_code(e), str(e))

    logger.info(
        f"Login successful: user_id={login_response.user_id}, "
        f"branch={login_response.branch.value}"
    )

    redirect = RedirectResponse(
        url=settings.api.frontend_url, status_code=status.HTTP_302_FOUND
    )
    redirect.set_cookie(
        key=settings.auth.cookie_name,
        value=jwt_service.create_token(str(login_response.user_id)),
        max_age=settings.auth.jwt_expiry_days * 24 * 60 * 60,
        **_cookie_options(settings),
    )
    return redirect


@router.post("/logout", response_model=LogoutResponse)
async def logout(
    response: Response,
    settings: FromDishka[Settings],
) -> LogoutResponse:
    """Logout user by clearing the authentication cookie."""
    response.delete_cookie(key=settings.auth.cookie_name, path="/")
    return LogoutResponse(success=True, message="Successfully logged out")


@router.get("/me", response_model=AuthStatusResponse)
async def get_current_user(
    jwt_service: FromDishka[JWTService],
    auth_token: str | None = Cookie(default=None),
) -> AuthStatusResponse:
    """Report whether the caller is authenticated, without raising."""
    user_id = _current_user_id(jwt_service, auth_token)
    if user_id is None:
        return AuthStatusResponse(authenticated=False)
    return AuthStatusResponse(authenticated=True, user_id=str(user_id))


@router.get("/identities", response_model=ListLinksResponse)
async def list_identities(
    list_links_use_case: FromDishka[ListLinksUseCase],
    jwt_service: FromDishka[JWTService],
    auth_token: str | None = Cookie(default=None),
) -> ListLinksResponse:
    """List the providers linked to the authenticated user."""
    user_id = _current_user_id(jwt_service, auth_token)
    if user_id is None:
        raise NotAuthenticatedError("Authentication required")
    return await list_links_use_case.execute(ListLinksRequest(user_id=user_id))
