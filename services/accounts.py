"""Account store backed by MongoDB through beanie."""

import logfire

from bson.errors import InvalidId
from beanie import PydanticObjectId

from pymongo.errors import DuplicateKeyError, PyMongoError

from models.users import User

from security.errors import AccountExists, ServiceUnavailable
from security.passwords import get_password_hash


class AccountStore:
    """Looks up and creates accounts.

    Every database failure is reported as `ServiceUnavailable` so that callers never
    mistake an outage for an authentication failure.
    """

    async def find_by_email(self, email: str) -> User | None:
        """Fetch an account by email.

        Args:
            email (str): The email of the account to fetch.

        Raises:
            ServiceUnavailable: If the database call fails.

        Returns:
            User | None: The account if found, None otherwise.
        """
        try:
            return await User.find_one(User.email == email)
        except PyMongoError as e:
            logfire.error(f"Database error looking up user by email {email}: {str(e)}")
            raise ServiceUnavailable() from e

    async def find_by_id(self, user_id: str) -> User | None:
        """Fetch an account by ID. Malformed IDs resolve to None.

        Raises:
            ServiceUnavailable: If the database call fails.
        """
        if not user_id:
            return None

        try:
            object_id = PydanticObjectId(user_id)
        except (InvalidId, TypeError):
            return None

        try:
            return await User.get(object_id)
        except PyMongoError as e:
            logfire.error(f"Database error looking up user {user_id}: {str(e)}")
            raise ServiceUnavailable() from e

    async def create(self, username: str, email: str, password: str) -> User:
        """Create and persist a new account with a hashed password.

        Args:
            username (str): Unique username.
            email (str): Unique email address.
            password (str): The plain text password. Only its hash is stored.

        Raises:
            AccountExists: If the email or username is already taken.
            ServiceUnavailable: If the database call fails.

        Returns:
            User: The persisted account.
        """
        new_user = User(username=username, email=email, password=get_password_hash(password))

        try:
            await new_user.insert()
        except DuplicateKeyError as e:
            # keyPattern names the unique index that rejected the insert
            key_pattern = (e.details or {}).get("keyPattern") or {}
            field = "username" if "username" in key_pattern else "email"

            logfire.warning(f"Attempt to create duplicate user by {field}: {email}")
            raise AccountExists(f"A user with this {field} already exists") from e
        except PyMongoError as e:
            logfire.error(f"Database error creating user {email}: {str(e)}")
            raise ServiceUnavailable() from e

        logfire.info(f"Saved new user to database: {email}")
        return new_user

    def compare_password(self, account: User, plain_password: str) -> bool:
        """Check `plain_password` against the account's stored hash."""
        return account.verify_password(plain_password)


def get_account_store() -> AccountStore:
    """Get the account store."""
    return AccountStore()
