from __future__ import annotations

import io
from datetime import datetime, timedelta, timezone

import pytest

from office_manager.core.exceptions import AuthenticationError, ConflictError, NotFoundError, ValidationError
from office_manager.employees.model import EmployeeFields
from office_manager.files.model import FileMetadata, IncomingFile
from office_manager.tasks.model import TaskFields
from office_manager.users.model import SignUpForm
from office_manager.users.security import TokenService


def _form(**overrides) -> SignUpForm:
    values = dict(
        full_name="A",
        organization_name="Org",
        email="a@x.com",
        phone_no="1",
        password="secret1",
    )
    values.update(overrides)
    return SignUpForm(**values)


def test_sign_up_then_sign_in_returns_same_user(container):
    created = container.auth_service.sign_up(_form())
    signed_in = container.auth_service.sign_in("a@x.com", "secret1")

    assert signed_in.user.user_id == created.user.user_id
    assert signed_in.token


def test_sign_up_stores_bcrypt_hash_not_password(container):
    result = container.auth_service.sign_up(_form())
    stored = container.users_repo.get_by_id(result.user.user_id)

    assert stored.password_hash != "secret1"
    assert stored.password_hash.startswith("$2")
    public = result.user.to_public_dict()
    assert "password" not in public
    assert stored.password_hash not in public.values()


def test_sign_up_missing_field_raises(container):
    with pytest.raises(ValidationError, match="All fields are required"):
        container.auth_service.sign_up(_form(phone_no="  "))


def test_sign_up_duplicate_email_conflicts_regardless_of_other_fields(container):
    container.auth_service.sign_up(_form())

    with pytest.raises(ConflictError, match="Email already registered"):
        container.auth_service.sign_up(_form(full_name="B", organization_name="Other", password="different"))


def test_long_password_signs_up_and_signs_in(container):
    password = "p" * 80
    created = container.auth_service.sign_up(_form(password=password))

    signed_in = container.auth_service.sign_in("a@x.com", password)

    assert signed_in.user.user_id == created.user.user_id


def test_long_password_compares_first_72_bytes(container):
    container.auth_service.sign_up(_form(password="\u00e9" * 40))

    # 36 two-byte characters fill the 72 bytes bcrypt reads.
    assert container.auth_service.sign_in("a@x.com", "\u00e9" * 36 + "tail").user.email == "a@x.com"
    with pytest.raises(AuthenticationError):
        container.auth_service.sign_in("a@x.com", "\u00e9" * 35)


def test_sign_in_message_identical_for_unknown_email_and_wrong_password(container):
    container.auth_service.sign_up(_form())

    with pytest.raises(AuthenticationError) as unknown:
        container.auth_service.sign_in("nobody@x.com", "secret1")
    with pytest.raises(AuthenticationError) as wrong:
        container.auth_service.sign_in("a@x.com", "wrong")

    assert str(unknown.value) == str(wrong.value) == "Invalid email or password"


def test_sign_in_requires_both_fields(container):
    with pytest.raises(ValidationError):
        container.auth_service.sign_in("a@x.com", "")


def test_token_round_trip_resolves_user(container):
    result = container.auth_service.sign_up(_form())

    user = container.auth_service.authenticate_token(result.token)

    assert user.user_id == result.user.user_id


def test_expired_token_rejected(tokens):
    issued = datetime.now(timezone.utc) - timedelta(days=3)
    token = tokens.issue(1, now=issued)

    with pytest.raises(AuthenticationError, match="Token expired"):
        tokens.verify(token)


def test_token_signed_with_other_secret_rejected(tokens):
    forged = TokenService("another-secret").issue(1)

    with pytest.raises(AuthenticationError, match="Invalid token"):
        tokens.verify(forged)


def test_delete_user_cascades_rows_and_removes_blobs(container, store, storage):
    owner = container.auth_service.sign_up(_form()).user.user_id
    other = container.auth_service.sign_up(_form(email="b@x.com")).user.user_id

    for uid in (owner, other):
        container.employee_service.create(
            EmployeeFields(
                user_id=uid, full_name="E", email="e@x.com", position="Dev", department="Eng", join_date="2024-01-01"
            )
        )
        container.task_service.create(TaskFields(user_id=uid, title="T"))
    file_id = container.file_service.upload(
        user_id=owner,
        incoming=IncomingFile(filename="notes.txt", mimetype="text/plain", stream=io.BytesIO(b"hello")),
        metadata=FileMetadata(),
    )
    blob_path = store.files[file_id].file_path

    container.user_service.delete_user(owner)

    assert all(e.user_id != owner for e in store.employees.values())
    assert all(t.user_id != owner for t in store.tasks.values())
    assert all(f.user_id != owner for f in store.files.values())
    assert not storage.exists(blob_path)
    assert len(container.employee_service.list_employees(other)) == 1


def test_delete_unknown_user_raises_not_found(container):
    with pytest.raises(NotFoundError):
        container.user_service.delete_user(999)
