"""Authentication service for the single admin account."""

from app.clients.protocols import DocumentStoreProtocol
from app.errors.auth import AuthInvalidError, AuthMissingError, InvalidCredentialsError
from app.errors.store import DocumentStoreError
from app.managers.password_manager import dummy_verify_password, verify_password
from app.managers.token_manager import TokenManager
from app.monitoring import get_logger
from app.schemas.auth import TokenData
from app.schemas.document import Document, UserAccount

logger = get_logger(__name__)


class AuthService:
    """Service for checking credentials and session tokens."""

    def __init__(self, store: DocumentStoreProtocol, tokens: TokenManager) -> None:
        """
        Initialize the auth service.

        Args:
            store: Document store holding the ``users`` array
            tokens: Token manager used to sign and verify session tokens
        """
        self.store = store
        self.tokens = tokens

    async def _read(self) -> Document:
        try:
            return await self.store.load()
        except DocumentStoreError:
            logger.exception(f"Reading from the {self.store.name} store failed, no accounts available")
            return Document()

    async def authenticate_user(self, username: str, password: str) -> UserAccount:
        """
        Authenticate the admin by username and password.

        Unknown usernames and wrong passwords raise the same error, and
        unknown usernames still pay for a hash verification.

        Raises:
            InvalidCredentialsError: If authentication fails
        """
        document = await self._read()
        user = document.find_user(username)

        if user is None:
            await dummy_verify_password()
            logger.info("Login failed: unknown username")
            raise InvalidCredentialsError

        if not await verify_password(password, user.password):
            logger.info(f"Login failed: wrong password for user {user.id}")
            raise InvalidCredentialsError

        logger.info(f"User {user.id} logged in")
        return user

    def create_token_for_user(self, user: UserAccount) -> str:
        return self.tokens.create_access_token(user_id=user.id, username=user.username)

    def verify_token(self, token: str | None) -> TokenData:
        """
        Verify a session token taken from the cookie.

        Raises:
            AuthMissingError: No token was sent (401)
            AuthInvalidError: Bad signature, expired, or malformed (403)
        """
        if not token:
            raise AuthMissingError
        token_data = self.tokens.decode_access_token(token)
        if token_data is None:
            raise AuthInvalidError
        return token_data
