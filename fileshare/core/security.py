# fileshare/core/security.py
import logging
from datetime import datetime, timedelta, timezone

import jwt
from jwt.exceptions import InvalidTokenError as JWTInvalidTokenError

from fileshare.core.exceptions import InvalidToken, MissingToken

logger = logging.getLogger(__name__)


class TokenIssuer:
    """Issues and verifies stateless identity tokens (JWT).

    The subject claim carries the user id. No server-side session exists,
    so a token stays valid until it expires; without ``expire_minutes``
    that is never.
    """

    def __init__(self, secret: str, algorithm: str = "HS256", expire_minutes: int | None = None):
        if not secret:
            raise ValueError("Token secret must not be empty")
        self.secret = secret
        self.algorithm = algorithm
        self.expire_minutes = expire_minutes

    def issue(self, user_id: int) -> str:
        now = datetime.now(timezone.utc)
        claims = {"sub": str(user_id), "iat": now}
        if self.expire_minutes is not None:
            claims["exp"] = now + timedelta(minutes=self.expire_minutes)
        return jwt.encode(claims, self.secret, algorithm=self.algorithm)

    def verify(self, token: str | None) -> int:
        if not token:
            raise MissingToken()

        try:
            # Only the configured algorithm is accepted
            claims = jwt.decode(
                token,
                self.secret,
                algorithms=[self.algorithm],
                options={"require": ["sub"]},
            )
        except JWTInvalidTokenError as e:
            logger.debug("Token rejected: %s", e)
            raise InvalidToken() from e

        try:
            return int(claims["sub"])
        except (TypeError, ValueError) as e:
            raise InvalidToken() from e
