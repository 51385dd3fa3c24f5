"""Login against the configured demo credential pair."""

from __future__ import annotations

import hmac
import logging
from typing import TYPE_CHECKING

from medialib.application.dtos.results import LoginResult
from medialib.domain.exceptions import AuthenticationException
from medialib.infrastructure.security.jwt import create_access_token
from medialib.shared.utils.datetime import utc_now

if TYPE_CHECKING:
    from medialib.application.interfaces.repositories import IRecordStore
    from medialib.core.config import Settings

logger = logging.getLogger(__name__)


class AuthService:
    """Issues a bearer token for the demo account; data endpoints do not check it."""

    def __init__(self, store: IRecordStore, settings: Settings) -> None:
        self.store = store
        self.settings = settings

    def login(self, email: str | None, password: str | None) -> LoginResult:
        """Check the credentials and return the current user with a signed token.

        Raises:
            AuthenticationException: Wrong email or password.
        """
        expected_password = self.settings.demo_user_password.get_secret_value()
        email_ok = bool(email) and email.strip().casefold() == self.settings.demo_user_email.casefold()
        password_ok = hmac.compare_digest((password or "").encode(), expected_password.encode())
        if not (email_ok and password_ok):
            logger.info("Login failed for %s", email)
            raise AuthenticationException("Invalid email or password")

        with self.store.lock:
            user = self.store.users.get(self.settings.current_user_id)
            if user is None:
                raise AuthenticationException("Account not available")
            user.last_active = utc_now()
            user = self.store.users.replace(user)
        token = create_access_token(
            user.id,
            {"email": user.email, "role": user.role.value},
            settings=self.settings,
        )
        logger.info("User %s logged in", user.id)
        return LoginResult(
            user=user,
            token=token,
            expires_in=self.settings.access_token_expire_seconds,
        )

    def logout(self, subject: str | None = None) -> None:
        """Tokens are stateless; ``subject`` comes from a verified bearer token, if any."""
        if subject is None:
            logger.info("Anonymous logout")
        else:
            logger.info("User %s logged out", subject)
