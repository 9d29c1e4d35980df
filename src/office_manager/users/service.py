from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional, Sequence

from ..common.validators import is_blank
from ..core.exceptions import AuthenticationError, ConflictError, NotFoundError, ValidationError
from ..files.repository import FileRepository
from ..files.storage import BlobStorage
from .model import SignUpForm, User
from .repository import UserRepository
from .security import PasswordHasher, TokenService

logger = logging.getLogger(__name__)

INVALID_CREDENTIALS = "Invalid email or password"


@dataclass(frozen=True)
class AuthResult:
    """What a client gets back after sign-up or sign-in."""

    user: User
    token: str


class AuthService:
    """Use cases: sign up, sign in."""

    def __init__(self, users: UserRepository, hasher: PasswordHasher, tokens: TokenService):
        self._users = users
        self._hasher = hasher
        self._tokens = tokens

    def sign_up(self, form: SignUpForm) -> AuthResult:
        values = (form.full_name, form.organization_name, form.email, form.phone_no, form.password)
        if any(is_blank(v) for v in values):
            raise ValidationError("All fields are required")

        email = str(form.email).strip()
        password = str(form.password)

        if self._users.get_by_email(email):
            raise ConflictError("Email already registered")

        user_id = self._users.create_user(
            full_name=str(form.full_name).strip(),
            organization_name=str(form.organization_name).strip(),
            email=email,
            phone_no=str(form.phone_no).strip(),
            password_hash=self._hasher.hash(password),
        )
        user = self._users.get_by_id(user_id)
        if user is None:
            raise NotFoundError("User not found")

        logger.info("Registered user %s", user_id)
        return AuthResult(user=user, token=self._tokens.issue(user_id))

    def sign_in(self, email: Optional[str], password: Optional[str]) -> AuthResult:
        if is_blank(email) or is_blank(password):
            raise ValidationError("Email and password are required")

        user = self._users.get_by_email(str(email).strip())
        # Same message for unknown email and wrong password.
        if not user or not self._hasher.verify(user.password_hash, str(password)):
            raise AuthenticationError(INVALID_CREDENTIALS)

        return AuthResult(user=user, token=self._tokens.issue(user.user_id))

    def authenticate_token(self, token: str) -> User:
        user_id = self._tokens.verify(token)
        user = self._users.get_by_id(user_id)
        if not user:
            raise AuthenticationError("Invalid token")
        return user


class UserService:
    """Use cases: inspect and remove accounts."""

    def __init__(self, users: UserRepository, files: FileRepository, storage: BlobStorage):
        self._users = users
        self._files = files
        self._storage = storage

    def list_users(self) -> Sequence[User]:
        return self._users.list_all()

    def get_user(self, user_id: int) -> User:
        user = self._users.get_by_id(user_id)
        if not user:
            raise NotFoundError("User not found")
        return user

    def delete_user(self, user_id: int) -> None:
        """Delete the account; rows cascade, stored blobs are unlinked afterwards."""
        self.get_user(user_id)

        paths = [f.file_path for f in self._files.list_for_user(user_id=user_id)]
        if not self._users.delete_by_id(user_id):
            raise NotFoundError("User not found")

        for path in paths:
            self._storage.remove_quietly(path)
        logger.info("Deleted user %s (%d stored files)", user_id, len(paths))
