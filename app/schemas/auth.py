from pydantic import BaseModel, ConfigDict, Field


class LoginRequest(BaseModel):
    """Credentials posted to ``/users/login``."""

    username: str = Field(..., examples=["admin"])
    password: str = Field(..., examples=["s3cret"])


class TokenData(BaseModel):
    """Verified claims carried by the session cookie."""

    id: int
    username: str


class AuthStatus(BaseModel):
    """Body of ``/check-auth``."""

    model_config = ConfigDict(populate_by_name=True)

    logged_in: bool = Field(..., alias="loggedIn")
    user: TokenData | None = None
    error: str | None = None
