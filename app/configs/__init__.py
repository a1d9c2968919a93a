from app.configs.settings import (
    ALLOWED_IMAGE_TYPES,
    DEFAULT_ERROR_MESSAGE,
    LOGIN_RATE_LIMIT,
    RECENT_BLOGS_LIMIT,
    Settings,
    get_settings,
)

__all__ = [
    "ALLOWED_IMAGE_TYPES",
    "DEFAULT_ERROR_MESSAGE",
    "LOGIN_RATE_LIMIT",
    "RECENT_BLOGS_LIMIT",
    "Settings",
    "get_settings",
]
