"""Token manager for the signed session cookie."""

from datetime import UTC, datetime, timedelta

from jose import JWTError, jwt

from app.configs.settings import Settings
from app.schemas.auth import TokenData


class TokenManager:
    """
    Issue and verify the admin session token.

    The token carries ``{id, username, iat, exp}`` and is signed with the
    configured secret. It is only ever transported in a cookie.
    """

    def __init__(
        self,
        secret_key: str,
        algorithm: str = "HS256",
        expire_minutes: int = 60,
    ) -> None:
        self._secret_key = secret_key
        self.algorithm = algorithm
        self.expires_delta = timedelta(minutes=expire_minutes)

    @classmethod
    def from_settings(cls, settings: Settings) -> "TokenManager":
        return cls(
            secret_key=settings.SECRET_KEY.get_secret_value(),
            algorithm=settings.ALGORITHM,
            expire_minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES,
        )

    @property
    def max_age(self) -> int:
        """Cookie lifetime in seconds, matching the token expiry."""
        return int(self.expires_delta.total_seconds())

    def create_access_token(
        self,
        user_id: int,
        username: str,
        expires_delta: timedelta | None = None,
    ) -> str:
        """
        Create a new session token.

        Args:
            user_id: Account id
            username: Account username
            expires_delta: Optional override of the one-hour lifetime

        Returns:
            str: Encoded JWT
        """
        now = datetime.now(UTC)
        expire = now + (expires_delta if expires_delta is not None else self.expires_delta)

        to_encode = {
            "id": user_id,
            "username": username,
            "iat": now,
            "exp": expire,
        }

        return jwt.encode(to_encode, self._secret_key, algorithm=self.algorithm)

    def decode_access_token(self, token: str) -> TokenData | None:
        """
        Decode and validate a session token.

        Args:
            token: JWT token string

        Returns:
            TokenData | None: Verified claims, or None if the signature is bad,
            the token has expired or the claims are incomplete
        """
        try:
            payload = jwt.decode(token, self._secret_key, algorithms=[self.algorithm])
        except JWTError:
            return None

        user_id = payload.get("id")
        username = payload.get("username")
        if not isinstance(user_id, int) or not username:
            return None

        return TokenData(id=user_id, username=username)
