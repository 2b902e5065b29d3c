from typing import Optional

from fastapi import Cookie, Depends, Header, Request, status
from sqlalchemy.ext.asyncio import create_async_engine
from sqlalchemy.orm import sessionmaker
from sqlmodel.ext.asyncio.session import AsyncSession
from config import ApplicationConfig
from src.adapter.services.unit_of_work import SqlAlchemyUnitOfWork
from src.api.error import ClientError
from src.app.services.email_sender import IEmailSender
from src.app.services.rate_limiter import IRateLimiter
from src.app.services.token_service import ITokenService
from src.app.services.unit_of_work import UnitOfWork
from src.app.use_cases.auth import AuthenticateUseCase, UserContext
from src.libs.result import Error

REFRESH_TOKEN_COOKIE = "refreshToken"

engine = create_async_engine(ApplicationConfig.DB_URI, echo=False, future=True)

AsyncSessionLocal = sessionmaker(
    engine, class_=AsyncSession, expire_on_commit=False, autoflush=False
)


async def get_unit_of_work():
    async with AsyncSessionLocal() as session:
        yield SqlAlchemyUnitOfWork(session)


def get_token_service(request: Request) -> ITokenService:
    return request.app.state.token_service


def get_rate_limiter(request: Request) -> IRateLimiter:
    return request.app.state.rate_limiter


def get_email_sender(request: Request) -> IEmailSender:
    return request.app.state.email_sender


async def get_current_user(
    authorization: Optional[str] = Header(None),
    refresh_token: Optional[str] = Cookie(None, alias=REFRESH_TOKEN_COOKIE),
    uow: UnitOfWork = Depends(get_unit_of_work),
    token_service: ITokenService = Depends(get_token_service),
) -> UserContext:
    """
    Dependency for endpoints accepting a bearer token OR the refresh cookie.

    Args:
        authorization: Authorization header (Bearer <access token>)
        refresh_token: refreshToken cookie

    Returns:
        UserContext with user id and device id

    Raises:
        ClientError: 401 if neither credential authenticates
    """
    use_case = AuthenticateUseCase(uow, token_service)
    result = await use_case.execute(authorization, refresh_token)

    if result.is_err():
        raise ClientError(result.error, status_code=status.HTTP_401_UNAUTHORIZED)

    return result.value


async def require_refresh_token(
    refresh_token: Optional[str] = Cookie(None, alias=REFRESH_TOKEN_COOKIE),
    uow: UnitOfWork = Depends(get_unit_of_work),
    token_service: ITokenService = Depends(get_token_service),
) -> str:
    """
    Dependency for endpoints that only accept the refresh cookie.

    Returns:
        The refresh token, already checked against its session

    Raises:
        ClientError: 401 if the cookie is missing or does not authenticate
    """
    if not refresh_token:
        raise ClientError(
            Error("UNAUTHORIZED", "Refresh token not found"),
            status_code=status.HTTP_401_UNAUTHORIZED,
        )

    use_case = AuthenticateUseCase(uow, token_service)
    result = await use_case.authenticate_refresh_token(refresh_token)

    if result.is_err():
        raise ClientError(result.error, status_code=status.HTTP_401_UNAUTHORIZED)

    return refresh_token
