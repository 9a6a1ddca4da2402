"""Account registration and credential checks.

Passwords are hashed with bcrypt. Registration creates the user and then the
profile matching its type; the two steps are not transactional, so a failure
creating the profile leaves the user in place.
"""

import asyncio
from dataclasses import dataclass

import bcrypt

from advidly.db.storage import MemStorage
from advidly.domain.enums import UserType
from advidly.domain.models import NewCompanyProfile, NewCreatorProfile, NewUser, User
from advidly.logging import get_logger

logger = get_logger(__name__)

# bcrypt only looks at the first 72 bytes of a password
BCRYPT_MAX_BYTES = 72


class DuplicateUserError(Exception):
    """Raised when an email or username is already registered."""

    def __init__(self, field: str, message: str) -> None:
        super().__init__(message)
        self.field = field
        self.message = message


class InvalidCredentialsError(Exception):
    """Raised on unknown email or wrong password, without saying which."""

    pass


@dataclass
class Registration:
    """Validated registration input."""

    email: str
    username: str
    password: str
    full_name: str
    user_type: UserType


def _encode(password: str) -> bytes:
    return password.encode("utf-8")[:BCRYPT_MAX_BYTES]


def hash_password(password: str, rounds: int = 10) -> str:
    """Hash a plaintext password."""
    return bcrypt.hashpw(_encode(password), bcrypt.gensalt(rounds=rounds)).decode("ascii")


def verify_password(password: str, hashed: str) -> bool:
    """Check a plaintext password against a stored hash."""
    try:
        return bcrypt.checkpw(_encode(password), hashed.encode("ascii"))
    except ValueError:
        # Stored value is not a bcrypt hash
        return False


class AuthService:
    """Registers users and checks their credentials against storage."""

    def __init__(self, storage: MemStorage, bcrypt_rounds: int = 10) -> None:
        self.storage = storage
        self.bcrypt_rounds = bcrypt_rounds

    def _check_unique(self, registration: Registration) -> None:
        if self.storage.get_user_by_email(registration.email):
            raise DuplicateUserError("email", "Email already in use")
        if self.storage.get_user_by_username(registration.username):
            raise DuplicateUserError("username", "Username already taken")

    async def register(self, registration: Registration) -> User:
        """Create a user and its profile.

        Hashing runs in the default executor; storage is only touched on the
        event loop.

        Raises:
            DuplicateUserError: If the email or username is taken (case-insensitive).
        """
        self._check_unique(registration)
        loop = asyncio.get_running_loop()
        hashed = await loop.run_in_executor(
            None, hash_password, registration.password, self.bcrypt_rounds
        )
        # Another registration may have landed while hashing
        self._check_unique(registration)

        user = self.storage.create_user(
            NewUser(
                email=registration.email,
                username=registration.username,
                password=hashed,
                full_name=registration.full_name,
                user_type=registration.user_type,
            )
        )

        if user.user_type == UserType.COMPANY:
            # The company name starts out as the registrant's full name
            self.storage.create_company_profile(
                NewCompanyProfile(
                    user_id=user.id,
                    company_name=user.full_name,
                    industry="",
                    website="",
                    description="",
                )
            )
        else:
            self.storage.create_creator_profile(
                NewCreatorProfile(user_id=user.id, bio="", niche="", youtube_channel="")
            )

        logger.info("user_registered", user_id=user.id, user_type=user.user_type)
        return user

    async def authenticate(self, email: str, password: str) -> User:
        """Return the user owning these credentials.

        Raises:
            InvalidCredentialsError: For an unknown email and a wrong password alike.
        """
        user = self.storage.get_user_by_email(email)
        valid = False
        if user is not None:
            loop = asyncio.get_running_loop()
            valid = await loop.run_in_executor(None, verify_password, password, user.password)
        if user is None or not valid:
            logger.info("login_rejected")
            raise InvalidCredentialsError("Invalid credentials")
        return user
