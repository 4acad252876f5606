"""
Auth router for handling registration, login, token refresh and logout.
"""

import logfire

from fastapi import APIRouter, Depends, Request, Response, status
from fastapi.responses import JSONResponse

from typing import Annotated

from models.users import User

from middleware.auth import require_user

from schema.security import AuthenticatedUser
from schema.users import AuthResponse, LoginRequest, MessageResponse, RegisterRequest, UserInDB

from security.cookies import clear_token_cookies, read_refresh_token, set_token_cookies
from security.errors import (
    AccountExists,
    AccountNotFound,
    InvalidCredentials,
    InvalidToken,
    MissingToken,
    ServiceUnavailable,
)
from security.settings import AppSettings, get_settings

from services.auth import AuthService, get_auth_service

router = APIRouter(
    prefix="/api/v1/auth",
    tags=["Auth"],
)


def to_user_in_db(user: User) -> UserInDB:
    return UserInDB(
        id=str(user.id),
        username=user.username,
        email=user.email,
        created_at=user.created_at,
    )


def service_unavailable_response() -> JSONResponse:
    return JSONResponse(
        status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
        content={"detail": ServiceUnavailable.default_message},
    )


@router.post("/register", response_model=AuthResponse, status_code=status.HTTP_201_CREATED)
async def register(
    payload: RegisterRequest,
    response: Response,
    auth_service: Annotated[AuthService, Depends(get_auth_service)],
    settings: Annotated[AppSettings, Depends(get_settings)],
):
    """This endpoint creates a new account and signs the user in.
    The access and refresh tokens are returned as http-only cookies.

    ## Possible Errors
    - 409 Conflict: If a user with the provided email or username already exists.
    - 422 Unprocessable Entity: If the request body is invalid.
    - 503 Service Unavailable: If there is a database connection issue.

    ## Error response structure
    ```json
    {
        "detail": "Sample error message"
    }
    ```
    """
    try:
        result = await auth_service.register(
            username=payload.username, email=payload.email, password=payload.password
        )
    except AccountExists as e:
        return JSONResponse(
            status_code=status.HTTP_409_CONFLICT,
            content={"detail": e.message},
        )
    except ServiceUnavailable:
        return service_unavailable_response()

    set_token_cookies(response, result.tokens, settings)

    return AuthResponse(user=to_user_in_db(result.account))


@router.post("/login", response_model=AuthResponse)
async def login(
    payload: LoginRequest,
    response: Response,
    auth_service: Annotated[AuthService, Depends(get_auth_service)],
    settings: Annotated[AppSettings, Depends(get_settings)],
):
    """Login endpoint that sets both access and refresh token cookies.

    ## Possible Errors
    - 401 Unauthorized: If the email or password is incorrect.
    - 503 Service Unavailable: If there is a database connection issue.
    """
    try:
        result = await auth_service.login(email=payload.email, password=payload.password)
    except InvalidCredentials as e:
        return JSONResponse(
            status_code=status.HTTP_401_UNAUTHORIZED,
            content={"detail": e.message},
        )
    except ServiceUnavailable:
        return service_unavailable_response()

    set_token_cookies(response, result.tokens, settings)

    return AuthResponse(user=to_user_in_db(result.account))


@router.post("/refresh", response_model=AuthResponse)
async def refresh(
    request: Request,
    response: Response,
    auth_service: Annotated[AuthService, Depends(get_auth_service)],
    settings: Annotated[AppSettings, Depends(get_settings)],
):
    """Refresh endpoint that exchanges the refresh token cookie for a new token pair.

    ## Possible Errors
    - 401 Unauthorized: If the refresh token is missing, invalid or expired, or its user no longer exists.
    - 503 Service Unavailable: If there is a database connection issue.
    """
    try:
        result = await auth_service.refresh(read_refresh_token(request))
    except (MissingToken, InvalidToken, AccountNotFound) as e:
        return JSONResponse(
            status_code=status.HTTP_401_UNAUTHORIZED,
            content={"detail": e.message},
        )
    except ServiceUnavailable:
        return service_unavailable_response()

    set_token_cookies(response, result.tokens, settings)

    return AuthResponse(user=to_user_in_db(result.account))


@router.delete("/logout", response_model=MessageResponse)
async def logout(
    response: Response,
    current_user: Annotated[AuthenticatedUser, Depends(require_user)],
    auth_service: Annotated[AuthService, Depends(get_auth_service)],
    settings: Annotated[AppSettings, Depends(get_settings)],
):
    """Logout endpoint that clears the token cookies."""
    await auth_service.logout()

    clear_token_cookies(response, settings)

    logfire.info(f"User {current_user.user_id} logged out")

    return MessageResponse(message="Successfully logged out")
