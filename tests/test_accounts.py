"""
Unit tests for the MongoDB account store, with the beanie document mocked out.
"""

from types import SimpleNamespace
from unittest.mock import AsyncMock, MagicMock, patch

import pytest

from bson import ObjectId
from pymongo.errors import DuplicateKeyError, ServerSelectionTimeoutError, WriteError

from models.users import User
from security.errors import AccountExists, ServiceUnavailable
from security.passwords import get_password_hash, verify_password
from services.accounts import AccountStore


@pytest.fixture
def account_store():
    return AccountStore()


@pytest.fixture
def user_model():
    with patch("services.accounts.User") as user_model:
        user_model.find_one = AsyncMock(return_value=None)
        user_model.get = AsyncMock(return_value=None)
        user_model.return_value.insert = AsyncMock()
        yield user_model


@pytest.mark.asyncio
async def test_create_hashes_password(account_store, user_model):
    user = await account_store.create("alice", "alice@x.com", "pw123")

    assert user is user_model.return_value
    kwargs = user_model.call_args.kwargs
    assert kwargs["username"] == "alice"
    assert kwargs["email"] == "alice@x.com"
    assert kwargs["password"] != "pw123"
    assert verify_password("pw123", kwargs["password"])
    user.insert.assert_awaited_once()


@pytest.mark.asyncio
async def test_create_duplicate_raises_account_exists(account_store, user_model):
    user_model.return_value.insert.side_effect = DuplicateKeyError("E11000 duplicate key error")

    with pytest.raises(AccountExists):
        await account_store.create("alice", "alice@x.com", "pw123")


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "error",
    [ServerSelectionTimeoutError("timed out"), WriteError("write failed")],
)
async def test_create_database_failure_raises_service_unavailable(account_store, user_model, error):
    user_model.return_value.insert.side_effect = error

    with pytest.raises(ServiceUnavailable):
        await account_store.create("alice", "alice@x.com", "pw123")


@pytest.mark.asyncio
async def test_find_by_email(account_store, user_model):
    existing = MagicMock()
    user_model.find_one.return_value = existing

    assert await account_store.find_by_email("alice@x.com") is existing
    user_model.find_one.assert_awaited_once()


@pytest.mark.asyncio
async def test_find_by_email_database_failure(account_store, user_model):
    user_model.find_one.side_effect = ServerSelectionTimeoutError("timed out")

    with pytest.raises(ServiceUnavailable):
        await account_store.find_by_email("alice@x.com")


@pytest.mark.asyncio
async def test_find_by_id(account_store, user_model):
    user_id = str(ObjectId())
    existing = MagicMock()
    user_model.get.return_value = existing

    assert await account_store.find_by_id(user_id) is existing
    assert str(user_model.get.call_args.args[0]) == user_id


@pytest.mark.asyncio
@pytest.mark.parametrize("user_id", ["not-an-object-id", "", None])
async def test_find_by_id_malformed_id(account_store, user_model, user_id):
    assert await account_store.find_by_id(user_id) is None
    user_model.get.assert_not_called()


@pytest.mark.asyncio
async def test_find_by_id_database_failure(account_store, user_model):
    user_model.get.side_effect = ServerSelectionTimeoutError("timed out")

    with pytest.raises(ServiceUnavailable):
        await account_store.find_by_id(str(ObjectId()))


def test_compare_password_uses_account_hash(account_store):
    account = SimpleNamespace(password=get_password_hash("pw123"))
    account.verify_password = lambda plain: User.verify_password(account, plain)

    assert account_store.compare_password(account, "pw123") is True
    assert account_store.compare_password(account, "wrongpw") is False


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "key_pattern, message",
    [
        ({"username": 1}, "A user with this username already exists"),
        ({"email": 1}, "A user with this email already exists"),
    ],
)
async def test_create_duplicate_names_colliding_field(account_store, user_model, key_pattern, message):
    user_model.return_value.insert.side_effect = DuplicateKeyError(
        "E11000 duplicate key error", 11000, {"keyPattern": key_pattern}
    )

    with pytest.raises(AccountExists) as exc_info:
        await account_store.create("alice", "alice@x.com", "pw123")

    assert exc_info.value.message == message
