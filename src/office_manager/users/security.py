from __future__ import annotations

from datetime import datetime, timedelta, timezone
from typing import Optional

import jwt
from flask_bcrypt import Bcrypt

from ..core.constants import DEFAULT_BCRYPT_ROUNDS, DEFAULT_TOKEN_DAYS
from ..core.exceptions import AuthenticationError

# bcrypt only looks at the first 72 bytes of a password.
MAX_PASSWORD_BYTES = 72

JWT_ALGORITHM = "HS256"


class PasswordHasher:
    """Salted bcrypt hashing with a fixed cost factor."""

    def __init__(self, rounds: int = DEFAULT_BCRYPT_ROUNDS):
        self._bcrypt = Bcrypt()
        self._rounds = int(rounds)

    @staticmethod
    def _truncate(password: str) -> bytes:
        return password.encode("utf-8")[:MAX_PASSWORD_BYTES]

    def hash(self, password: str) -> str:
        return self._bcrypt.generate_password_hash(self._truncate(password), rounds=self._rounds).decode("utf-8")

    def verify(self, password_hash: str, password: str) -> bool:
        try:
            return bool(self._bcrypt.check_password_hash(password_hash, self._truncate(password)))
        except (TypeError, ValueError):
            # e.g. placeholder hashes
            return False


class TokenService:
    """Issue and verify the bearer tokens handed out at sign-in."""

    def __init__(self, secret: str, *, expires_days: int = DEFAULT_TOKEN_DAYS):
        self._secret = secret
        self._expires = timedelta(days=int(expires_days))

    def issue(self, user_id: int, *, now: Optional[datetime] = None) -> str:
        issued = now or datetime.now(timezone.utc)
        payload = {"user_id": int(user_id), "iat": issued, "exp": issued + self._expires}
        return jwt.encode(payload, self._secret, algorithm=JWT_ALGORITHM)

    def verify(self, token: str) -> int:
        try:
            payload = jwt.decode(token, self._secret, algorithms=[JWT_ALGORITHM])
        except jwt.ExpiredSignatureError:
            raise AuthenticationError("Token expired")
        except jwt.InvalidTokenError:
            raise AuthenticationError("Invalid token")

        try:
            return int(payload["user_id"])
        except (KeyError, TypeError, ValueError):
            raise AuthenticationError("Invalid token")
