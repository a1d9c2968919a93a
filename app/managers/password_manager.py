"""
Password hashing module using Argon2 with passlib's CryptContext.

Hashing and verification run in a thread pool so the event loop is not
blocked by the deliberately slow key derivation.
"""

from asyncio import get_event_loop
from concurrent.futures import ThreadPoolExecutor

from passlib.context import CryptContext
from passlib.exc import InternalBackendError

from app.errors.password_hasher import PasswordHashingError
from app.monitoring import get_logger

executor = ThreadPoolExecutor(max_workers=4)
logger = get_logger(__name__)


class PasswordHasher:
    """
    Password hashing and verification with Argon2id.

    pbkdf2_sha256 stays accepted for verification of older hashes.
    """

    def __init__(self) -> None:
        self.pwd_context = CryptContext(
            schemes=["argon2", "pbkdf2_sha256"],
            deprecated="pbkdf2_sha256",
        )

    def hash(self, password: str) -> str:
        """
        Hash a plaintext password using Argon2id.

        Raises:
            ValueError: If password is empty
            PasswordHashingError: If hashing fails
        """
        if not password:
            msg = "Password cannot be empty"
            raise ValueError(msg)

        try:
            return self.pwd_context.hash(password)
        except (ValueError, InternalBackendError, UnicodeError) as e:
            logger.exception("Error hashing password")
            mssg = "Failed to hash password"
            raise PasswordHashingError(mssg) from e

    def verify(self, password: str, hashed_password: str) -> bool:
        """
        Verify a plaintext password against a stored hash.

        A malformed stored hash counts as a mismatch.
        """
        if not isinstance(hashed_password, str) or not hashed_password.strip():
            logger.warning("Invalid hash format provided")
            return False

        try:
            return self.pwd_context.verify(password, hashed_password)
        except (ValueError, TypeError):
            logger.exception("Stored hash is corrupted or invalid format")
            return False

    def dummy_verify(self) -> None:
        """Spend the time of a real verification, for unknown usernames."""
        self.pwd_context.dummy_verify()


_default_hasher = PasswordHasher()


def get_password_hasher() -> PasswordHasher:
    return _default_hasher


async def hash_password(password: str) -> str:
    return await get_event_loop().run_in_executor(
        executor,
        get_password_hasher().hash,
        password,
    )


async def verify_password(password: str, hashed_password: str) -> bool:
    return await get_event_loop().run_in_executor(
        executor,
        get_password_hasher().verify,
        password,
        hashed_password,
    )


async def dummy_verify_password() -> None:
    await get_event_loop().run_in_executor(executor, get_password_hasher().dummy_verify)
