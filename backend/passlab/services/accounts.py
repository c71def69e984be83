"""Account operations: create, verify, list."""

import logging
from functools import lru_cache

from passlab.database import CredentialStore
from passlab.errors import InvalidCredentialsError, ValidationError
from passlab.hashing import MAX_PASSWORD_BYTES, hash_password, verify_password
from passlab.models.account import USERNAME_MAX_LENGTH, Account

logger = logging.getLogger(__name__)


@lru_cache(maxsize=1)
def _dummy_digest() -> str:
    """Digest checked against when the username is unknown."""
    return hash_password("not-a-real-password")


def warm_dummy_digest() -> None:
    """Build the dummy digest at the configured cost before serving requests."""
    _dummy_digest.cache_clear()
    _dummy_digest()


def _require_fields(username: str | None, password: str | None) -> None:
    if not username or not username.strip() or not password:
        raise ValidationError()


def create_account(store: CredentialStore, username: str | None, password: str | None) -> Account:
    _require_fields(username, password)
    if len(username) > USERNAME_MAX_LENGTH:
        raise ValidationError(
            f"Username must be {USERNAME_MAX_LENGTH} characters or fewer!"
        )
    if len(password.encode()) > MAX_PASSWORD_BYTES:
        raise ValidationError(
            f"Password must be {MAX_PASSWORD_BYTES} bytes or fewer!"
        )

    account = store.add_account(username, hash_password(password))
    logger.info(f"Created account {account.id} for {account.username!r}")
    return account


def verify_credentials(store: CredentialStore, username: str | None, password: str | None) -> Account:
    """Return the matching account or raise ``InvalidCredentialsError``.

    Unknown user and wrong password raise the same error, and both paths
    run one bcrypt check.
    """
    _require_fields(username, password)
    if len(password.encode()) > MAX_PASSWORD_BYTES:
        # Nothing that long can have been stored.
        raise InvalidCredentialsError()

    account = store.get_by_username(username)
    if account is None:
        verify_password(password, _dummy_digest())
        logger.info(f"Failed login for unknown user {username!r}")
        raise InvalidCredentialsError()
    if not verify_password(password, account.password_hash):
        logger.info(f"Failed login for {username!r}")
        raise InvalidCredentialsError()
    return account


def list_accounts(store: CredentialStore) -> list[Account]:
    return store.list_accounts()
