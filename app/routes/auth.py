"""Authentication routes: cookie login, logout and session check."""

from fastapi import APIRouter, Request
from fastapi.responses import ORJSONResponse

from app.configs.settings import LOGIN_RATE_LIMIT
from app.dependencies import AuthServiceDep, SettingsDep
from app.errors.auth import UserAuthenticationError
from app.managers import limiter
from app.schemas import AuthStatus, LoginRequest, MessageResponse

router = APIRouter(tags=["🔐 Auth"])


@router.post(
    "/users/login",
    response_class=ORJSONResponse,
    response_model=MessageResponse,
    summary="Log in as admin",
    description="Check admin credentials and set the session cookie. The token is never returned in the body.",
    responses={
        200: {"content": {"application/json": {"example": {"message": "Login successful"}}}},
        401: {
            "description": "Unauthorized",
            "content": {
                "application/json": {"example": {"error": "invalid username or password"}},
            },
        },
        429: {
            "description": "Rate limit exceeded",
            "content": {"application/json": {"example": {"error": "Rate limit exceeded"}}},
        },
    },
    operation_id="users_login",
)
@limiter.limit(LOGIN_RATE_LIMIT)
async def login(
    request: Request,
    credentials: LoginRequest,
    auth_service: AuthServiceDep,
    settings: SettingsDep,
) -> ORJSONResponse:
    """
    Login with username and password.

    Parameters
    ----------
    request : Request
        Current request context (used by the rate limiter).
    credentials : LoginRequest
        Username and password.
    auth_service : AuthService
        Authentication service dependency.
    settings : Settings
        Application settings (cookie name).

    Returns
    -------
    ORJSONResponse
        Acknowledgement, with the ``token`` cookie set (httpOnly, secure,
        ``SameSite=None``, one hour).

    Raises
    ------
    InvalidCredentialsError
        If the username is unknown or the password is wrong.
    """
    user = await auth_service.authenticate_user(credentials.username, credentials.password)
    token = auth_service.create_token_for_user(user)

    response = ORJSONResponse(content={"message": "Login successful"})
    response.set_cookie(
        key=settings.COOKIE_NAME,
        value=token,
        max_age=auth_service.tokens.max_age,
        httponly=True,
        secure=True,
        samesite="none",
    )
    return response


@router.post(
    "/users/logout",
    response_class=ORJSONResponse,
    response_model=MessageResponse,
    summary="Log out",
    operation_id="users_logout",
)
async def logout(settings: SettingsDep) -> ORJSONResponse:
    """Clear the session cookie. Always succeeds."""
    response = ORJSONResponse(content={"message": "Logout successful"})
    response.delete_cookie(
        key=settings.COOKIE_NAME,
        httponly=True,
        secure=True,
        samesite="none",
    )
    return response


@router.get(
    "/check-auth",
    response_class=ORJSONResponse,
    response_model=AuthStatus,
    response_model_by_alias=True,
    summary="Check the session cookie",
    responses={
        200: {
            "content": {
                "application/json": {
                    "example": {"loggedIn": True, "user": {"id": 1, "username": "admin"}},
                },
            },
        },
        401: {
            "content": {
                "application/json": {
                    "example": {"loggedIn": False, "error": "authentication token not found"},
                },
            },
        },
        403: {
            "content": {
                "application/json": {
                    "example": {
                        "loggedIn": False,
                        "error": "invalid or expired authentication token",
                    },
                },
            },
        },
    },
    operation_id="check_auth",
)
async def check_auth(
    request: Request,
    auth_service: AuthServiceDep,
    settings: SettingsDep,
) -> ORJSONResponse:
    """
    Report whether the caller holds a valid session, without side effects.

    Returns
    -------
    ORJSONResponse
        ``200 {"loggedIn": true, "user": {...}}``, or ``401``/``403``
        ``{"loggedIn": false, "error": ...}``.
    """
    try:
        user = auth_service.verify_token(request.cookies.get(settings.COOKIE_NAME))
    except UserAuthenticationError as e:
        status = AuthStatus(logged_in=False, error=e.detail)
        return ORJSONResponse(
            content=status.model_dump(by_alias=True, exclude_none=True),
            status_code=e.status_code,
        )

    status = AuthStatus(logged_in=True, user=user)
    return ORJSONResponse(content=status.model_dump(by_alias=True, exclude_none=True))
