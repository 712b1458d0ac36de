"""CredentialService and password hashing."""

import uuid

import pytest

from taskledger.auth.credentials import CredentialService
from taskledger.auth.password import hash_password, verify_password
from taskledger.errors import DuplicateUsername, InvalidCredentials


def test_hash_is_salted():
    h1 = hash_password("same-password")
    h2 = hash_password("same-password")
    assert h1 != h2
    assert h1.startswith("$2")
    assert "same-password" not in h1


def test_verify_password():
    h = hash_password("correct horse")
    assert verify_password("correct horse", h)
    assert not verify_password("wrong horse", h)


def test_verify_password_with_garbage_hash():
    assert not verify_password("anything", "not-a-bcrypt-hash")


@pytest.mark.asyncio
async def test_register_then_verify_returns_same_principal(db_session):
    svc = CredentialService(db_session)

    user = await svc.register("carol", "s3cret")
    verified = await svc.verify("carol", "s3cret")

    assert verified.id == user.id
    assert user.password_hash != "s3cret"


@pytest.mark.asyncio
async def test_register_duplicate_with_any_password(db_session):
    svc = CredentialService(db_session)
    await svc.register("dave", "first")

    with pytest.raises(DuplicateUsername):
        await svc.register("dave", "first")
    with pytest.raises(DuplicateUsername):
        await svc.register("dave", "something-else")


@pytest.mark.asyncio
async def test_bad_password_and_unknown_user_raise_same_error(db_session):
    svc = CredentialService(db_session)
    await svc.register("erin", "right")

    with pytest.raises(InvalidCredentials) as wrong_pw:
        await svc.verify("erin", "wrong")
    with pytest.raises(InvalidCredentials) as no_user:
        await svc.verify("nobody", "right")

    assert type(wrong_pw.value) is type(no_user.value)
    assert wrong_pw.value.message == no_user.value.message
    assert wrong_pw.value.status_code == no_user.value.status_code == 401


@pytest.mark.asyncio
async def test_get_principal(db_session):
    svc = CredentialService(db_session)
    user = await svc.register("frank", "pw")

    assert (await svc.get_principal(user.id)).username == "frank"
    assert await svc.get_principal(uuid.uuid4()) is None
