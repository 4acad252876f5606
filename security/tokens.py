"""Creates and verifies the signed access and refresh tokens.
"""
from datetime import datetime, timezone
from functools import lru_cache

import logfire

from jose import JWTError, jwt
from pydantic import ValidationError

from typing import Callable

from schema.security import TokenClaims, TokenPair

from .errors import InvalidToken
from .settings import TokenSettings, get_settings


Clock = Callable[[], datetime]


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


class TokenCodec:
    """Mints and verifies token pairs.

    Access and refresh tokens are signed with different secrets so that a leaked
    access secret cannot be used to forge refresh tokens and vice versa.

    Tokens are not stored anywhere. A token is valid as long as its signature checks
    out and it has not expired; there is no way to revoke a single token early.
    """

    def __init__(self, settings: TokenSettings, clock: Clock | None = None):
        self.settings = settings
        self.clock = clock or utc_now

    def issue(self, identifier: str) -> TokenPair:
        """Issue a new access/refresh token pair for `identifier`.

        Args:
            identifier (str): ID of the account the tokens belong to.

        Returns:
            TokenPair: The signed access and refresh tokens.
        """
        issued_at = int(self.clock().timestamp())
        subject = str(identifier)

        access_token = self._encode(
            subject,
            issued_at,
            issued_at + int(self.settings.access_ttl.total_seconds()),
            self.settings.access_secret,
        )
        refresh_token = self._encode(
            subject,
            issued_at,
            issued_at + int(self.settings.refresh_ttl.total_seconds()),
            self.settings.refresh_secret,
        )

        return TokenPair(access_token=access_token, refresh_token=refresh_token)

    def verify_access(self, token: str) -> TokenClaims:
        """Verify an access token and return its claims.

        Raises:
            InvalidToken: If the token is malformed, forged or expired.
        """
        return self._decode(token, self.settings.access_secret)

    def verify_refresh(self, token: str) -> TokenClaims:
        """Verify a refresh token and return its claims.

        Raises:
            InvalidToken: If the token is malformed, forged or expired.
        """
        return self._decode(token, self.settings.refresh_secret)

    def _encode(self, subject: str, issued_at: int, expires_at: int, secret: str) -> str:
        to_encode = {"sub": subject, "iat": issued_at, "exp": expires_at}
        return jwt.encode(to_encode, secret, algorithm=self.settings.algorithm)

    def _decode(self, token: str, secret: str) -> TokenClaims:
        if not token or not isinstance(token, str):
            raise InvalidToken("Token is malformed")

        try:
            #* Expiry is checked below against the codec clock
            payload: dict = jwt.decode(
                token,
                secret,
                algorithms=[self.settings.algorithm],
                options={
                    "verify_exp": False,
                    "verify_aud": False,
                },
            )
            claims = TokenClaims(
                sub=payload.get("sub"),
                iat=payload.get("iat", 0),
                exp=payload.get("exp"),
            )
        except (JWTError, ValidationError, TypeError) as e:
            logfire.debug(f"Token verification failed: {type(e).__name__}")
            raise InvalidToken() from e

        if int(self.clock().timestamp()) >= claims.exp:
            raise InvalidToken("Token has expired")

        return claims


@lru_cache
def get_token_codec() -> TokenCodec:
    """Get the token codec configured from the environment."""
    return TokenCodec(get_settings().tokens)
