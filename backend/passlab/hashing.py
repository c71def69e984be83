import bcrypt

from passlab.config import settings
from passlab.errors import InternalHashingError

# bcrypt ignores everything past the first 72 bytes of input.
MAX_PASSWORD_BYTES = 72


def hash_password(password: str, rounds: int | None = None) -> str:
    try:
        salt = bcrypt.gensalt(rounds=rounds or settings.bcrypt_rounds)
        return bcrypt.hashpw(password.encode(), salt).decode()
    except ValueError as exc:
        raise InternalHashingError(f"bcrypt failed to hash: {exc}") from exc


def verify_password(plain: str, hashed: str) -> bool:
    try:
        return bcrypt.checkpw(plain.encode(), hashed.encode())
    except ValueError as exc:
        raise InternalHashingError(f"Malformed password digest: {exc}") from exc
