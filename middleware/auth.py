"""
Auth gate guarding protected routes.

A request either passes with the caller's identity attached, or is rejected with
a 401 that looks the same whatever went wrong with the token.
"""

import logfire

from fastapi import Depends, HTTPException, Request, status

from typing import Annotated

from schema.security import AuthenticatedUser

from security.cookies import read_access_token
from security.errors import InvalidToken, Unauthorized
from security.tokens import TokenCodec, get_token_codec


class AuthGate:
    """Checks access tokens and resolves them to an identity."""

    def __init__(self, codec: TokenCodec):
        self.codec = codec

    def authorize(self, token: str | None) -> AuthenticatedUser:
        """Resolve `token` to the identity it was issued to.

        Args:
            token (str | None): The access token taken from the request, if any.

        Raises:
            Unauthorized: If the token is missing, malformed, forged or expired.

        Returns:
            AuthenticatedUser: Identity of the caller.
        """
        if not token:
            logfire.debug("Rejected request without access token")
            raise Unauthorized()

        try:
            claims = self.codec.verify_access(token)
        except InvalidToken as e:
            logfire.debug(f"Rejected request with invalid access token: {e.message}")
            raise Unauthorized() from e

        return AuthenticatedUser(user_id=claims.sub)


def get_auth_gate(
    codec: Annotated[TokenCodec, Depends(get_token_codec)],
) -> AuthGate:
    """Get the auth gate wired to the token codec."""
    return AuthGate(codec)


def unauthorized_exception() -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail=Unauthorized.default_message,
        headers={"WWW-Authenticate": "Cookie"},
    )


async def require_user(
    request: Request,
    gate: Annotated[AuthGate, Depends(get_auth_gate)],
) -> AuthenticatedUser:
    """Dependency enforcing a valid access token on the request.

    The resolved identity is also stored on `request.state.user`.

    Raises:
        HTTPException: 401, identical for every kind of token failure.

    Returns:
        AuthenticatedUser: Identity of the caller.
    """
    try:
        user = gate.authorize(read_access_token(request))
    except Unauthorized:
        raise unauthorized_exception()

    request.state.user = user
    return user
