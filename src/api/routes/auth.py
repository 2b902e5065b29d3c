from typing import Optional

from fastapi import APIRouter, Depends, Header, Request, Response, status
from pydantic import BaseModel, EmailStr, Field

from config import ApplicationConfig
from src.api.error import ClientError, ServerError
from src.app.services.email_sender import IEmailSender
from src.app.services.rate_limiter import IRateLimiter
from src.app.services.token_service import ITokenService
from src.app.services.unit_of_work import UnitOfWork
from src.app.use_cases.auth import (
    LoginUseCase,
    LogoutUseCase,
    RefreshTokenUseCase,
    UserContext,
    ValidateCredentialsUseCase,
)
from src.app.use_cases.registration import (
    ConfirmRegistrationUseCase,
    NewPasswordCommand,
    NewPasswordUseCase,
    PasswordRecoveryUseCase,
    RegistrationCommand,
    RegistrationUseCase,
    ResendConfirmationUseCase,
)
from src.app.use_cases.users import LoadMeUseCase, MeResponse
from src.depends import (
    REFRESH_TOKEN_COOKIE,
    get_current_user,
    get_email_sender,
    get_rate_limiter,
    get_token_service,
    get_unit_of_work,
    require_refresh_token,
)

router = APIRouter(prefix="/auth", tags=["Authentication"])

DEFAULT_DEVICE_NAME = "Unknown device"


class LoginRequest(BaseModel):
    """
    Login HTTP request payload

    Validates incoming login request.
    """

    login_or_email: str = Field(..., min_length=1, description="User login or email")
    password: str = Field(..., min_length=1, description="User password")


class RegistrationRequest(BaseModel):
    """
    Registration HTTP request payload
    """

    login: str = Field(..., min_length=3, max_length=10, pattern=r"^[a-zA-Z0-9_-]*$")
    email: EmailStr = Field(..., description="User email address")
    password: str = Field(..., min_length=6, max_length=20)


class ConfirmationRequest(BaseModel):
    code: str = Field(..., min_length=1)


class EmailRequest(BaseModel):
    email: EmailStr


class NewPasswordRequest(BaseModel):
    new_password: str = Field(..., min_length=6, max_length=20)
    recovery_code: str = Field(..., min_length=1)


class AccessTokenResponse(BaseModel):
    """Access token; the refresh token travels in the refreshToken cookie"""

    access_token: str


def _client_ip(request: Request) -> str:
    return request.client.host if request.client else "unknown"


def _set_refresh_cookie(response: Response, refresh_token: str) -> None:
    response.set_cookie(
        REFRESH_TOKEN_COOKIE,
        refresh_token,
        httponly=True,
        secure=ApplicationConfig.REFRESH_COOKIE_SECURE,
        samesite="strict",
        max_age=ApplicationConfig.REFRESH_TOKEN_EXPIRES_IN,
    )


@router.post("/login", status_code=status.HTTP_200_OK, response_model=AccessTokenResponse)
async def login(
    request: LoginRequest,
    http_request: Request,
    response: Response,
    user_agent: Optional[str] = Header(None),
    uow: UnitOfWork = Depends(get_unit_of_work),
    token_service: ITokenService = Depends(get_token_service),
    rate_limiter: IRateLimiter = Depends(get_rate_limiter),
):
    """
    User Login

    Validates credentials, registers a new device session and returns the
    access token. The refresh token is set as an httpOnly cookie.

    Raises:
        - 401 Unauthorized: Invalid credentials
        - 429 Too Many Requests: Too many failed attempts from this address
        - 500 Internal Server Error: Server error
    """
    ip = _client_ip(http_request)

    credentials = ValidateCredentialsUseCase(uow, rate_limiter)
    result = await credentials.execute(request.login_or_email, request.password, ip)

    if result.is_err():
        error = result.error
        if error.code == "INVALID_CREDENTIALS":
            raise ClientError(error, status_code=status.HTTP_401_UNAUTHORIZED)
        elif error.code == "TOO_MANY_REQUESTS":
            raise ClientError(error, status_code=status.HTTP_429_TOO_MANY_REQUESTS)
        raise ServerError(error)

    use_case = LoginUseCase(uow, token_service)
    login_result = await use_case.execute(
        result.value, user_agent or DEFAULT_DEVICE_NAME, ip
    )

    if login_result.is_err():
        raise ServerError(login_result.error)

    tokens = login_result.value
    _set_refresh_cookie(response, tokens.refresh_token)
    return AccessTokenResponse(access_token=tokens.access_token)


@router.post(
    "/refresh-token", status_code=status.HTTP_200_OK, response_model=AccessTokenResponse
)
async def refresh_token(
    response: Response,
    refresh_token: str = Depends(require_refresh_token),
    uow: UnitOfWork = Depends(get_unit_of_work),
    token_service: ITokenService = Depends(get_token_service),
):
    """
    Refresh Token Pair

    Rotates the refresh token from the cookie. The presented token stops
    working as soon as this call succeeds.

    Raises:
        - 401 Unauthorized: Missing, invalid, expired or already rotated token
    """
    use_case = RefreshTokenUseCase(uow, token_service)
    result = await use_case.execute(refresh_token)

    if result.is_err():
        error = result.error
        if error.code == "UNAUTHORIZED":
            raise ClientError(error, status_code=status.HTTP_401_UNAUTHORIZED)
        raise ServerError(error)

    tokens = result.value
    _set_refresh_cookie(response, tokens.refresh_token)
    return AccessTokenResponse(access_token=tokens.access_token)


@router.post("/logout", status_code=status.HTTP_204_NO_CONTENT)
async def logout(
    refresh_token: str = Depends(require_refresh_token),
    uow: UnitOfWork = Depends(get_unit_of_work),
    token_service: ITokenService = Depends(get_token_service),
):
    """
    Logout

    Terminates the session of the current device and clears the cookie.

    Raises:
        - 401 Unauthorized: Missing, invalid, expired or already rotated token
    """
    use_case = LogoutUseCase(uow, token_service)
    result = await use_case.execute(refresh_token)

    if result.is_err():
        error = result.error
        if error.code == "UNAUTHORIZED":
            raise ClientError(error, status_code=status.HTTP_401_UNAUTHORIZED)
        raise ServerError(error)

    response = Response(status_code=status.HTTP_204_NO_CONTENT)
    response.delete_cookie(REFRESH_TOKEN_COOKIE)
    return response


@router.get("/me", status_code=status.HTTP_200_OK, response_model=MeResponse)
async def get_me(
    current_user: UserContext = Depends(get_current_user),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    Current User

    Accepts a bearer access token or the refresh cookie.

    Raises:
        - 401 Unauthorized: Not authenticated
    """
    use_case = LoadMeUseCase(uow)
    result = await use_case.execute(current_user.user_id)

    if result.is_err():
        error = result.error
        if error.code == "UNAUTHORIZED":
            raise ClientError(error, status_code=status.HTTP_401_UNAUTHORIZED)
        raise ServerError(error)

    return result.value


@router.post("/registration", status_code=status.HTTP_204_NO_CONTENT)
async def registration(
    request: RegistrationRequest,
    uow: UnitOfWork = Depends(get_unit_of_work),
    email_sender: IEmailSender = Depends(get_email_sender),
):
    """
    Registration

    Creates an unconfirmed user and emails a confirmation code.

    Raises:
        - 400 Bad Request: Login or email already exists
        - 422 Unprocessable Entity: Invalid input (handled by FastAPI)
    """
    command = RegistrationCommand(
        login=request.login, email=request.email, password=request.password
    )
    use_case = RegistrationUseCase(uow, email_sender)
    result = await use_case.execute(command)

    if result.is_err():
        error = result.error
        if error.code in ("LOGIN_ALREADY_EXISTS", "EMAIL_ALREADY_EXISTS"):
            raise ClientError(error, status_code=status.HTTP_400_BAD_REQUEST)
        raise ServerError(error)

    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.post("/registration-confirmation", status_code=status.HTTP_204_NO_CONTENT)
async def registration_confirmation(
    request: ConfirmationRequest, uow: UnitOfWork = Depends(get_unit_of_work)
):
    """
    Confirm Registration

    Raises:
        - 400 Bad Request: Code incorrect, expired or already applied
    """
    use_case = ConfirmRegistrationUseCase(uow)
    result = await use_case.execute(request.code)

    if result.is_err():
        error = result.error
        if error.code == "INVALID_CONFIRMATION_CODE":
            raise ClientError(error, status_code=status.HTTP_400_BAD_REQUEST)
        raise ServerError(error)

    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.post("/registration-email-resending", status_code=status.HTTP_204_NO_CONTENT)
async def registration_email_resending(
    request: EmailRequest,
    uow: UnitOfWork = Depends(get_unit_of_work),
    email_sender: IEmailSender = Depends(get_email_sender),
):
    """
    Resend Confirmation Email

    Raises:
        - 400 Bad Request: Unknown email or already confirmed
    """
    use_case = ResendConfirmationUseCase(uow, email_sender)
    result = await use_case.execute(request.email)

    if result.is_err():
        error = result.error
        if error.code == "INVALID_EMAIL":
            raise ClientError(error, status_code=status.HTTP_400_BAD_REQUEST)
        raise ServerError(error)

    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.post("/password-recovery", status_code=status.HTTP_204_NO_CONTENT)
async def password_recovery(
    request: EmailRequest,
    uow: UnitOfWork = Depends(get_unit_of_work),
    email_sender: IEmailSender = Depends(get_email_sender),
):
    """
    Password Recovery

    Emails a recovery code. Answers 204 whether or not the email is registered.
    """
    use_case = PasswordRecoveryUseCase(uow, email_sender)
    result = await use_case.execute(request.email)

    if result.is_err():
        raise ServerError(result.error)

    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.post("/new-password", status_code=status.HTTP_204_NO_CONTENT)
async def new_password(
    request: NewPasswordRequest, uow: UnitOfWork = Depends(get_unit_of_work)
):
    """
    New Password

    Sets a new password with a recovery code and terminates every session.

    Raises:
        - 400 Bad Request: Recovery code incorrect or expired
    """
    command = NewPasswordCommand(
        recovery_code=request.recovery_code, new_password=request.new_password
    )
    use_case = NewPasswordUseCase(uow)
    result = await use_case.execute(command)

    if result.is_err():
        error = result.error
        if error.code == "INVALID_RECOVERY_CODE":
            raise ClientError(error, status_code=status.HTTP_400_BAD_REQUEST)
        raise ServerError(error)

    return Response(status_code=status.HTTP_204_NO_CONTENT)
