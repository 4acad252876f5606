""" User router for endpoints available to signed-in users.
"""

import logfire

from fastapi import APIRouter, status, Depends
from fastapi.responses import JSONResponse

from typing import Annotated

from middleware.auth import require_user

from schema.security import AuthenticatedUser
from schema.users import UserInDB

from security.errors import ServiceUnavailable

from services.accounts import AccountStore, get_account_store

from .auth import service_unavailable_response, to_user_in_db

router = APIRouter(
    prefix="/api/v1/users",
    tags=["Users"],
)


@router.get("/me", response_model=UserInDB)
async def get_user_details(
    current_user: Annotated[AuthenticatedUser, Depends(require_user)],
    store: Annotated[AccountStore, Depends(get_account_store)],
):
    """Get details of an authenticated user.

    ## Possible Errors
    - 401 Unauthorized: If the access token is missing, invalid or expired.
    - 404 Not Found: If the account no longer exists.
    - 503 Service Unavailable: If there is a database connection issue.
    """
    try:
        user = await store.find_by_id(current_user.user_id)
    except ServiceUnavailable:
        return service_unavailable_response()

    if user is None:
        logfire.warning(f"Valid access token for missing user {current_user.user_id}")
        return JSONResponse(
            status_code=status.HTTP_404_NOT_FOUND,
            content={"detail": "User not found"},
        )

    return to_user_in_db(user)


@router.get("/me/identity", response_model=AuthenticatedUser, response_model_by_alias=True)
async def get_identity(
    current_user: Annotated[AuthenticatedUser, Depends(require_user)],
):
    """Return the identity resolved from the access token, without a database lookup."""
    return current_user
