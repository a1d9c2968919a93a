from app.managers.password_manager import (
    PasswordHasher,
    dummy_verify_password,
    hash_password,
    verify_password,
)
from app.managers.rate_limiter import limiter, rate_limit_exceeded_handler
from app.managers.token_manager import TokenManager

__all__ = [
    "PasswordHasher",
    "TokenManager",
    "dummy_verify_password",
    "hash_password",
    "limiter",
    "rate_limit_exceeded_handler",
    "verify_password",
]
