"""
Unit tests for Delete User Use Case
"""

from datetime import UTC, datetime
from uuid import uuid4

import pytest

from src.app.use_cases.users.delete_user_use_case import DeleteUserUseCase
from src.domain.entities import User


@pytest.mark.asyncio
async def test_delete_user(mock_uow):
    user = User(id=uuid4(), login="alice", email="alice@example.com", password_hash="x" * 60)
    mock_uow.users.get_by_id.return_value = user

    result = await DeleteUserUseCase(mock_uow).execute(user.id)

    assert result.is_ok()
    assert user.is_deleted
    mock_uow.users.update.assert_called_once_with(user)
    mock_uow.commit.assert_called_once()


@pytest.mark.asyncio
async def test_delete_missing_user(mock_uow):
    mock_uow.users.get_by_id.return_value = None

    result = await DeleteUserUseCase(mock_uow).execute(uuid4())

    assert result.is_err()
    assert result.error.code == "NOT_FOUND"


@pytest.mark.asyncio
async def test_delete_already_deleted_user(mock_uow):
    user = User(
        id=uuid4(),
        login="alice",
        email="alice@example.com",
        password_hash="x" * 60,
        deleted_at=datetime.now(UTC),
    )
    mock_uow.users.get_by_id.return_value = user

    result = await DeleteUserUseCase(mock_uow).execute(user.id)

    assert result.is_err()
    assert result.error.code == "NOT_FOUND"
    mock_uow.users.update.assert_not_called()
