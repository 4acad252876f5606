"""Service handling registration, login, token refresh and logout."""

import logfire

from dataclasses import dataclass

from fastapi import Depends

from typing import Annotated

from models.users import User
from schema.security import TokenPair

from security.errors import AccountExists, AccountNotFound, InvalidCredentials, MissingToken
from security.tokens import TokenCodec, get_token_codec

from .accounts import AccountStore, get_account_store


@dataclass(frozen=True)
class AuthResult:
    """An account together with a freshly issued token pair."""

    account: User
    tokens: TokenPair


class AuthService:
    """Orchestrates the account store and the token codec."""

    def __init__(self, store: AccountStore, codec: TokenCodec):
        self.store = store
        self.codec = codec

    async def register(self, username: str, email: str, password: str) -> AuthResult:
        """Create a new account and issue its first token pair.

        Args:
            username (str): Username of the new account.
            email (str): Email of the new account.
            password (str): Plain text password; hashed by the store.

        Raises:
            AccountExists: If an account with `email` (or `username`) already exists.

        Returns:
            AuthResult: The created account and its tokens.
        """
        with logfire.span(f"Registering new user: {email}"):
            # The unique indexes on the collection close the race left open by this check
            if await self.store.find_by_email(email) is not None:
                logfire.warning(f"Attempt to register existing email: {email}")
                raise AccountExists()

            user = await self.store.create(username=username, email=email, password=password)
            tokens = self.codec.issue(str(user.id))

            logfire.info(f"User {email} registered with ID: {str(user.id)}")
            return AuthResult(account=user, tokens=tokens)

    async def login(self, email: str, password: str) -> AuthResult:
        """Authenticate by email and password and issue a fresh token pair.

        Raises:
            InvalidCredentials: If no account matches `email` or the password is wrong.
        """
        user = await self.store.find_by_email(email)

        if user is None or not self.store.compare_password(user, password):
            logfire.warning(f"Failed login attempt for email: {email}")
            raise InvalidCredentials()

        tokens = self.codec.issue(str(user.id))

        logfire.info(f"User {email} logged in successfully")
        return AuthResult(account=user, tokens=tokens)

    async def refresh(self, refresh_token: str | None) -> AuthResult:
        """Exchange a refresh token for a new token pair.

        Both tokens are re-issued. The refresh token that was presented is not
        revoked and stays valid until it expires on its own.

        Raises:
            MissingToken: If no refresh token was supplied.
            InvalidToken: If the refresh token is malformed, forged or expired.
            AccountNotFound: If the account the token was issued to no longer exists.
        """
        if not refresh_token:
            raise MissingToken()

        claims = self.codec.verify_refresh(refresh_token)

        user = await self.store.find_by_id(claims.sub)
        if user is None:
            logfire.warning(f"Refresh token presented for missing user {claims.sub}")
            raise AccountNotFound()

        tokens = self.codec.issue(str(user.id))

        logfire.info(f"Tokens refreshed for user {user.email}")
        return AuthResult(account=user, tokens=tokens)

    async def logout(self) -> bool:
        # No server-side session exists; the caller forgets its tokens
        return True


def get_auth_service(
    store: Annotated[AccountStore, Depends(get_account_store)],
    codec: Annotated[TokenCodec, Depends(get_token_codec)],
) -> AuthService:
    """Get the auth service wired to the account store and token codec."""
    return AuthService(store=store, codec=codec)
