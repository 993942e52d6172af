"""bcrypt implementation of the password hasher port."""

import bcrypt

from stockopname.config import get_logger, get_settings
from stockopname.core.interfaces import IPasswordHasher

logger = get_logger(__name__)


class BcryptPasswordHasher(IPasswordHasher):
    """Salted bcrypt hashes; the cost factor is embedded in each hash."""

    def __init__(self, rounds: int = 12):
        self.rounds = rounds

    def hash(self, password: str) -> str:
        salt = bcrypt.gensalt(rounds=self.rounds)
        return bcrypt.hashpw(password.encode("utf-8"), salt).decode("utf-8")

    def verify(self, password: str, password_hash: str) -> bool:
        try:
            return bcrypt.checkpw(password.encode("utf-8"), password_hash.encode("utf-8"))
        except ValueError:
            # Stored value is not a bcrypt hash
            logger.warning("password_hash_unreadable")
            return False


_hasher: BcryptPasswordHasher | None = None


def get_password_hasher() -> BcryptPasswordHasher:
    """Get singleton hasher configured from settings."""
    global _hasher
    if _hasher is None:
        _hasher = BcryptPasswordHasher(rounds=get_settings().auth.bcrypt_rounds)
    return _hasher
