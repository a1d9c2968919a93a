# app/dependencies/dependencies.py

"""
Application dependencies.

Components are built once in ``create_app`` and kept on ``app.state``;
these dependencies hand them to the routes.
"""

from typing import Annotated

from fastapi import Depends, Request

from app.clients.protocols import DocumentStoreProtocol
from app.configs.settings import Settings
from app.managers.token_manager import TokenManager
from app.schemas.auth import TokenData
from app.services import AuthService, BlogService, MediaService
from app.services.storage import StorageService


def get_app_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_document_store(request: Request) -> DocumentStoreProtocol:
    return request.app.state.document_store


def get_storage(request: Request) -> StorageService:
    return request.app.state.storage


def get_token_manager(request: Request) -> TokenManager:
    return request.app.state.token_manager


SettingsDep = Annotated[Settings, Depends(get_app_settings)]
StoreDep = Annotated[DocumentStoreProtocol, Depends(get_document_store)]
StorageDep = Annotated[StorageService, Depends(get_storage)]
TokenManagerDep = Annotated[TokenManager, Depends(get_token_manager)]


def get_media_service(storage: StorageDep, settings: SettingsDep) -> MediaService:
    return MediaService(storage, settings)


MediaDep = Annotated[MediaService, Depends(get_media_service)]


def get_blog_service(store: StoreDep, media: MediaDep) -> BlogService:
    return BlogService(store, media)


def get_auth_service(store: StoreDep, tokens: TokenManagerDep) -> AuthService:
    return AuthService(store, tokens)


BlogServiceDep = Annotated[BlogService, Depends(get_blog_service)]
AuthServiceDep = Annotated[AuthService, Depends(get_auth_service)]


def get_current_user(
    request: Request,
    auth_service: AuthServiceDep,
    settings: SettingsDep,
) -> TokenData:
    """
    Gate for protected routes.

    Reads the session cookie and returns its verified claims.

    Raises
    ------
    AuthMissingError
        No cookie was sent (401).
    AuthInvalidError
        The token is tampered with or expired (403).
    """
    return auth_service.verify_token(request.cookies.get(settings.COOKIE_NAME))


CurrentUserDep = Annotated[TokenData, Depends(get_current_user)]
