"""Unit tests for HandleCallbackUseCase."""

from urllib.parse import parse_qs, urlparse

import pytest
from dishka import AsyncContainer

from oauthlink.application.usecase.auth import (
    HandleCallbackRequest,
    HandleCallbackUseCase,
    InitiateLoginRequest,
    InitiateLoginUseCase,
)
from oauthlink.domain.error import StateMismatch
from oauthlink.domain.repository import OAuthLinkRepository, UserRepository
from oauthlink.domain.service import ProviderRegistry
from oauthlink.domain.value import LoginBranch
from tests.harness import create_env_fixture

# Unit test fixture
unit_env = create_env_fixture()


async def start_login(container: AsyncContainer, alias: str) -> str:
    """Initiate a login and return the state sent to the provider."""
    use_case = await container.get(InitiateLoginUseCase)
    response = await use_case.execute(InitiateLoginRequest(alias=alias))
    return parse_qs(urlparse(response.authorization_url).query)["state"][0]


class TestHandleCallbackUseCase:
    """Tests for HandleCallbackUseCase."""

    @pytest.mark.asyncio
    async def test_first_login_creates_user_and_link(self, unit_env: AsyncContainer):
        """A new identity should create a user linked to it."""
        use_case = await unit_env.get(HandleCallbackUseCase)
        user_repo = await unit_env.get(UserRepository)
        link_repo = await unit_env.get(OAuthLinkRepository)
        state = await start_login(unit_env, "github")

        response = await use_case.execute(
            HandleCallbackRequest(alias="github", state=state, code="code-1")
        )

        assert response.branch == LoginBranch.CREATED_USER
        user = await user_repo.find_by_id(response.user_id)
        assert user.email == "ada@example.com"
        link = await link_repo.find_by_provider_identity("github", "gh-1001")
        assert link.user_id == response.user_id
        assert link.access_token == "token-code-1"

    @pytest.mark.asyncio
    async def test_second_provider_links_by_email(self, unit_env: AsyncContainer):
        """Signing in with another provider sharing the email reaches the same user."""
        use_case = await unit_env.get(HandleCallbackUseCase)
        link_repo = await unit_env.get(OAuthLinkRepository)

        state = await start_login(unit_env, "github")
        first = await use_case.execute(
            HandleCallbackRequest(alias="github", state=state, code="code-1")
        )
        state = await start_login(unit_env, "google")
        second = await use_case.execute(
            HandleCallbackRequest(alias="google", state=state, code="code-2")
        )

        assert second.branch == LoginBranch.LINKED_BY_EMAIL
        assert second.user_id == first.user_id
        links = await link_repo.find_all_by_user_id(first.user_id)
        assert [link.provider for link in links] == ["github", "google"]

    @pytest.mark.asyncio
    async def test_logged_in_user_links_new_provider(self, unit_env: AsyncContainer):
        """The current user should receive the new link."""
        use_case = await unit_env.get(HandleCallbackUseCase)

        state = await start_login(unit_env, "mock")
        current = await use_case.execute(
            HandleCallbackRequest(alias="mock", state=state, code="code-1")
        )
        state = await start_login(unit_env, "github")
        response = await use_case.execute(
            HandleCallbackRequest(
                alias="github",
                state=state,
                code="code-2",
                current_user_id=current.user_id,
            )
        )

        assert response.branch == LoginBranch.LINKED_TO_CURRENT_USER
        assert response.user_id == current.user_id

    @pytest.mark.asyncio
    async def test_forged_state_never_logs_in(self, unit_env: AsyncContainer):
        """A wrong state is rejected before the provider is contacted."""
        use_case = await unit_env.get(HandleCallbackUseCase)
        user_repo = await unit_env.get(UserRepository)
        registry = await unit_env.get(ProviderRegistry)
        await start_login(unit_env, "github")

        with pytest.raises(StateMismatch):
            await use_case.execute(
                HandleCallbackRequest(alias="github", state="forged", code="code-1")
            )

        assert registry.get("github").exchanged_codes == []
        assert user_repo.all() == []
