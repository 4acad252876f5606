"""
Shared fixtures for the accounts API tests.
"""

import os

os.environ.setdefault("JWT_ACCESS_SECRET", "test-access-secret")
os.environ.setdefault("JWT_REFRESH_SECRET", "test-refresh-secret")

from dataclasses import dataclass, field
from datetime import datetime, timedelta, timezone

import logfire
import pytest

from bson import ObjectId

from security.errors import AccountExists
from security.passwords import get_password_hash, verify_password
from security.settings import AppSettings, TokenSettings
from security.tokens import TokenCodec
from services.auth import AuthService

logfire.configure(send_to_logfire=False, console=False)


class FrozenClock:
    """Clock that only moves when told to."""

    def __init__(self, now: datetime):
        self.now = now

    def __call__(self) -> datetime:
        return self.now

    def advance(self, delta: timedelta) -> None:
        self.now = self.now + delta


@dataclass
class FakeAccount:
    username: str
    email: str
    password: str
    id: str = field(default_factory=lambda: str(ObjectId()))
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    def verify_password(self, plain_password: str) -> bool:
        return verify_password(plain_password, self.password)


class FakeAccountStore:
    """In-memory account store with the same contract as `AccountStore`."""

    def __init__(self):
        self.accounts: dict[str, FakeAccount] = {}
        self.create_calls = 0
        self.lookups = 0

    async def find_by_email(self, email: str):
        self.lookups += 1
        return next((a for a in self.accounts.values() if a.email == email), None)

    async def find_by_id(self, user_id: str):
        self.lookups += 1
        return self.accounts.get(user_id)

    async def create(self, username: str, email: str, password: str):
        self.create_calls += 1
        if any(a.email == email for a in self.accounts.values()):
            raise AccountExists("A user with this email already exists")
        if any(a.username == username for a in self.accounts.values()):
            raise AccountExists("A user with this username already exists")
        account = FakeAccount(username=username, email=email, password=get_password_hash(password))
        self.accounts[account.id] = account
        return account

    def compare_password(self, account, plain_password: str) -> bool:
        return account.verify_password(plain_password)


@pytest.fixture
def clock():
    return FrozenClock(datetime(2026, 1, 1, 12, 0, tzinfo=timezone.utc))


@pytest.fixture
def token_settings():
    return TokenSettings(access_secret="access-secret", refresh_secret="refresh-secret")


@pytest.fixture
def app_settings(token_settings):
    return AppSettings(tokens=token_settings)


@pytest.fixture
def codec(token_settings, clock):
    return TokenCodec(token_settings, clock=clock)


@pytest.fixture
def store():
    return FakeAccountStore()


@pytest.fixture
def auth_service(store, codec):
    return AuthService(store=store, codec=codec)
