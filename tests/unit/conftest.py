import pytest
from unittest.mock import AsyncMock, MagicMock

from src.adapter.services.jwt_token_service import JwtTokenService

TEST_SECRET = "unit-test-secret"


@pytest.fixture
def mock_uow():
    uow = MagicMock()
    uow.__aenter__ = AsyncMock(return_value=uow)
    uow.__aexit__ = AsyncMock(return_value=False)  # Must return False to not suppress exceptions
    uow.commit = AsyncMock()
    uow.rollback = AsyncMock()

    uow.users = MagicMock()
    uow.users.get_by_id = AsyncMock()
    uow.users.get_by_login_or_email = AsyncMock()
    uow.users.get_by_email = AsyncMock()
    uow.users.get_by_confirmation_code = AsyncMock()
    uow.users.get_by_recovery_code_hash = AsyncMock()
    uow.users.create = AsyncMock()
    uow.users.update = AsyncMock()

    uow.sessions = MagicMock()
    uow.sessions.save = AsyncMock()
    uow.sessions.get_by_id = AsyncMock()
    uow.sessions.get_by_user_and_device = AsyncMock()
    uow.sessions.get_by_device_id = AsyncMock()
    uow.sessions.get_by_user_id = AsyncMock()
    uow.sessions.delete_by_user_and_device = AsyncMock(return_value=True)
    uow.sessions.delete_by_device_id = AsyncMock(return_value=True)
    uow.sessions.delete_by_user_id = AsyncMock(return_value=0)
    uow.sessions.delete_all_except_device = AsyncMock(return_value=0)
    uow.sessions.rotate = AsyncMock(return_value=True)
    return uow


@pytest.fixture
def token_service():
    return JwtTokenService(TEST_SECRET)


@pytest.fixture
def issue_session(token_service):
    """Build a stored Session plus the refresh token that is live for it"""
    from uuid import uuid4

    from src.domain.entities import Session

    def _issue(user_id=None, device_name="Chrome", ip="1.2.3.4"):
        user_id = user_id or uuid4()
        session_id = uuid4()
        device_id = str(uuid4())
        refresh = token_service.issue(
            str(user_id), device_id, 600, include_session_id=True, session_id=str(session_id)
        )
        session = Session(
            id=session_id,
            user_id=user_id,
            device_id=device_id,
            device_name=device_name,
            ip=ip,
            iat=refresh.claims.issued_at,
            exp=refresh.claims.expires_at,
        )
        return session, refresh.token

    return _issue


@pytest.fixture
def stale_token_service():
    """Same secret as token_service, clock one hour in the past"""
    import time

    return JwtTokenService(TEST_SECRET, clock=lambda: time.time() - 3600)


@pytest.fixture
def email_sender():
    sender = MagicMock()
    sender.send_confirmation_email = AsyncMock()
    sender.send_password_recovery_email = AsyncMock()
    return sender
