"""
JWT access tokens.

SessionIssuer is stateless: a token is valid as long as its signature
checks out and it has not passed its exp claim.
"""

from datetime import timedelta
from typing import Optional
from uuid import UUID

import jwt

from task_manager.core.config import Settings
from task_manager.errors import ExpiredToken, InvalidToken, MissingToken
from task_manager.utils.time import utc_now


class SessionIssuer:
    """Issues and verifies bearer tokens carrying a user id."""

    def __init__(self, secret_key: str, algorithm: str = "HS256", expires_in: timedelta = timedelta(hours=24)):
        self.secret_key = secret_key
        self.algorithm = algorithm
        self.expires_in = expires_in

    @classmethod
    def from_settings(cls, settings: Settings) -> "SessionIssuer":
        return cls(
            secret_key=settings.SECRET_KEY,
            algorithm=settings.ALGORITHM,
            expires_in=timedelta(hours=settings.ACCESS_TOKEN_EXPIRE_HOURS),
        )

    def issue(self, user_id: UUID, expires_in: Optional[timedelta] = None) -> str:
        """
        Create a signed access token for a user.

        Args:
            user_id: Identity the token stands for
            expires_in: Override for the configured lifetime

        Returns:
            Encoded JWT string
        """
        issued_at = utc_now()
        payload = {
            "user_id": str(user_id),
            "iat": issued_at,
            "exp": issued_at + (expires_in if expires_in is not None else self.expires_in),
        }
        return jwt.encode(payload, self.secret_key, algorithm=self.algorithm)

    def verify(self, token: Optional[str]) -> UUID:
        """
        Decode a token and return the user id it carries.

        Raises:
            MissingToken: token is empty or absent
            ExpiredToken: token is past its exp claim
            InvalidToken: bad signature, bad structure or bad user_id claim
        """
        if not token:
            raise MissingToken()

        try:
            payload = jwt.decode(
                token,
                self.secret_key,
                algorithms=[self.algorithm],
                options={"require": ["exp", "user_id"]},
            )
        except jwt.ExpiredSignatureError:
            raise ExpiredToken() from None
        except jwt.InvalidTokenError:
            raise InvalidToken() from None

        try:
            return UUID(str(payload["user_id"]))
        except ValueError:
            raise InvalidToken() from None
