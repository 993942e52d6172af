"""
Account service: user registration and the credential gate.

Password hashes never leave this module; callers only ever see User.
"""

from email_validator import EmailNotValidError, validate_email

from stockopname.config import get_logger
from stockopname.core.clock import IClock, get_clock
from stockopname.core.entities import User
from stockopname.core.exceptions import InvalidCredentialsError, ValidationError
from stockopname.core.interfaces import IPasswordHasher, IUserStore

logger = get_logger(__name__)

DEFAULT_MIN_PASSWORD_LENGTH = 6


class AccountService:
    """Creates users and verifies their credentials."""

    def __init__(
        self,
        user_store: IUserStore,
        hasher: IPasswordHasher,
        clock: IClock | None = None,
        min_password_length: int = DEFAULT_MIN_PASSWORD_LENGTH,
    ):
        self._users = user_store
        self._hasher = hasher
        self._clock = clock or get_clock()
        self._min_password_length = min_password_length
        self._dummy_hash: str | None = None

    async def create_user(
        self,
        username: str,
        email: str,
        full_name: str,
        password: str,
    ) -> User:
        """
        Register a user.

        Raises:
            ValidationError: If a field is blank, the email is malformed or
                the password is too short
            ConstraintViolationError: If username or email is already taken
        """
        for field, value in (("username", username), ("full_name", full_name)):
            if not isinstance(value, str) or not value.strip():
                raise ValidationError(field, "must be a non-empty string", value)
        email = self._normalize_email(email)
        if not isinstance(password, str) or len(password) < self._min_password_length:
            # Never echo the password back
            raise ValidationError(
                "password",
                f"must be at least {self._min_password_length} characters",
            )

        now = self._clock.now()
        user = User(
            username=username,
            email=email,
            full_name=full_name,
            created_at=now,
            updated_at=now,
        )
        user = await self._users.create_user(user, self._hasher.hash(password))

        logger.info("user_created", user_id=user.id, username=username)
        return user

    async def login(self, username: str, password: str) -> User:
        """
        Verify a username/password pair.

        Raises:
            InvalidCredentialsError: For an unknown user or a wrong password alike
        """
        credentials = await self._users.get_credentials(username)

        if credentials is None:
            # Spend the same hashing work as a real check
            self._hasher.verify(password, self._get_dummy_hash())
            logger.info("login_failed", username=username)
            raise InvalidCredentialsError()

        if not self._hasher.verify(password, credentials.password_hash):
            logger.info("login_failed", username=username)
            raise InvalidCredentialsError()

        logger.info("login_succeeded", user_id=credentials.user.id)
        return credentials.user

    @staticmethod
    def _normalize_email(email: str) -> str:
        if not isinstance(email, str):
            raise ValidationError("email", "must be a valid email address", email)
        try:
            # Syntax only; no DNS lookups
            return validate_email(email, check_deliverability=False).normalized
        except EmailNotValidError as e:
            raise ValidationError("email", str(e), email) from e

    def _get_dummy_hash(self) -> str:
        if self._dummy_hash is None:
            self._dummy_hash = self._hasher.hash("not-a-real-password")
        return self._dummy_hash
