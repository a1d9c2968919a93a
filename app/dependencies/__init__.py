# app/dependencies/__init__.py

from app.dependencies.dependencies import (
    AuthServiceDep,
    BlogServiceDep,
    CurrentUserDep,
    MediaDep,
    SettingsDep,
    StorageDep,
    StoreDep,
    TokenManagerDep,
    get_auth_service,
    get_blog_service,
    get_current_user,
)

__all__ = [
    "AuthServiceDep",
    "BlogServiceDep",
    "CurrentUserDep",
    "MediaDep",
    "SettingsDep",
    "StorageDep",
    "StoreDep",
    "TokenManagerDep",
    "get_auth_service",
    "get_blog_service",
    "get_current_user",
]
