"""Hashing of account passwords. Only bcrypt hashes are ever stored on a `User`."""

from passlib.context import CryptContext


pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """Check a password typed at login against the hash stored on the account.

    Args:
        plain_password (str): Password supplied by the caller.
        hashed_password (str): bcrypt hash from `User.password`.

    Returns:
        bool: Whether the password belongs to the account.
    """
    return pwd_context.verify(plain_password, hashed_password)


def get_password_hash(password: str) -> str:
    # Called once per registration, before the account is inserted
    return pwd_context.hash(password)
