"""Container-backed fixtures.

Integration tests need PostgreSQL at DATABASE__URL with migrations applied.
"""

import pytest_asyncio

from oauthlink.util.di import Component
from tests.di import build_test_container


def create_env_fixture(unmock: set[Component] | None = None):
    """Make a fixture yielding a REQUEST-scoped container.

    Each test gets a fresh APP container, so in-memory stores start empty::

        integration_env = create_env_fixture(unmock={"persistence"})

        async def test_link(integration_env):
            repo = await integration_env.get(OAuthLinkRepository)
    """

    @pytest_asyncio.fixture
    async def env():
        container = build_test_container(unmock=unmock)
        try:
            async with container() as request_container:
                yield request_container
        finally:
            await container.close()

    return env
