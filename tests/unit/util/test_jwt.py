"""Unit tests for JWT utilities."""

from datetime import datetime, timedelta, timezone
from uuid import uuid4

import jwt
import pytest

from oauthlink.config import AuthSettings
from oauthlink.domain.service import JWTService
from oauthlink.util.jwt import JWTError, create_token, verify_token


class TestJWT:
    """Tests for create_token() and verify_token()."""

    def test_round_trip(self):
        """A token verifies with the secret it was signed with."""
        settings = AuthSettings(jwt_secret="a" * 32)
        user_id = str(uuid4())

        payload = verify_token(create_token(user_id, settings), settings)

        assert payload.sub == user_id
        assert payload.iat < payload.exp

    def test_wrong_secret_is_rejected(self):
        """A token signed with another secret is invalid."""
        token = create_token("user", AuthSettings(jwt_secret="a" * 32))

        with pytest.raises(JWTError):
            verify_token(token, AuthSettings(jwt_secret="b" * 32))

    def test_expired_token_is_rejected(self):
        """Tokens past their expiry are invalid."""
        settings = AuthSettings(jwt_secret="a" * 32, jwt_expiry_days=-1)
        token = create_token("user", settings)

        with pytest.raises(JWTError, match="expired"):
            verify_token(token, settings)

    def test_garbage_is_rejected(self):
        """Malformed input raises JWTError rather than a library error."""
        with pytest.raises(JWTError, match="Invalid token"):
            verify_token("not-a-jwt", AuthSettings(jwt_secret="a" * 32))

    def test_token_without_subject_is_rejected(self):
        """Tokens must name the user they authenticate."""
        settings = AuthSettings(jwt_secret="a" * 32)
        token = jwt.encode(
            {"exp": datetime.now(timezone.utc) + timedelta(hours=1)},
            settings.jwt_secret,
            algorithm=settings.jwt_algorithm,
        )

        with pytest.raises(JWTError):
            verify_token(token, settings)


class TestJWTService:
    """Tests for JWTService.get_user_id_from_token()."""

    @pytest.fixture
    def service(self):
        return JWTService(AuthSettings(jwt_secret="a" * 32))

    def test_returns_subject_of_valid_token(self, service):
        token = service.create_token("user-1")

        assert service.get_user_id_from_token(token) == "user-1"

    @pytest.mark.parametrize("token", [None, "", "not-a-jwt"])
    def test_unusable_token_means_anonymous(self, service, token):
        assert service.get_user_id_from_token(token) is None
