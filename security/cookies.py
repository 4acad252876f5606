"""Reads and writes the token cookies."""

from fastapi import Request, Response

from schema.security import TokenPair

from .settings import AppSettings

ACCESS_TOKEN_COOKIE = "access_token"
REFRESH_TOKEN_COOKIE = "refresh_token"


def read_access_token(request: Request) -> str | None:
    return request.cookies.get(ACCESS_TOKEN_COOKIE) or None


def read_refresh_token(request: Request) -> str | None:
    return request.cookies.get(REFRESH_TOKEN_COOKIE) or None


def set_token_cookies(response: Response, tokens: TokenPair, settings: AppSettings) -> None:
    """Attach both tokens to `response` as http-only, same-site cookies.

    Cookies are only marked `secure` in production so that local development over
    plain HTTP keeps working.

    Args:
        response (Response): The outgoing response.
        tokens (TokenPair): The tokens to send.
        settings (AppSettings): Settings providing lifetimes and the environment.
    """
    response.set_cookie(
        ACCESS_TOKEN_COOKIE,
        tokens.access_token,
        max_age=int(settings.tokens.access_ttl.total_seconds()),
        httponly=True,
        secure=settings.is_production,
        samesite="strict",
    )
    response.set_cookie(
        REFRESH_TOKEN_COOKIE,
        tokens.refresh_token,
        max_age=int(settings.tokens.refresh_ttl.total_seconds()),
        httponly=True,
        secure=settings.is_production,
        samesite="strict",
    )


def clear_token_cookies(response: Response, settings: AppSettings) -> None:
    """Expire both token cookies on the client."""
    for cookie in (ACCESS_TOKEN_COOKIE, REFRESH_TOKEN_COOKIE):
        response.delete_cookie(
            cookie,
            httponly=True,
            secure=settings.is_production,
            samesite="strict",
        )
