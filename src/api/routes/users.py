from uuid import UUID

from fastapi import APIRouter, Depends, Response, status
from pydantic import BaseModel, EmailStr, Field

from src.api.error import ClientError, ServerError
from src.api.utils.admin_auth import verify_admin_api_key
from src.app.services.unit_of_work import UnitOfWork
from src.app.use_cases.users import (
    CreateUserCommand,
    CreateUserUseCase,
    DeleteUserUseCase,
    UserInfo,
)
from src.depends import get_unit_of_work

router = APIRouter(
    prefix="/sa/users",
    tags=["Users"],
    dependencies=[Depends(verify_admin_api_key)],
)


class CreateUserRequest(BaseModel):
    """
    Create user HTTP request payload
    """

    login: str = Field(..., min_length=3, max_length=10, pattern=r"^[a-zA-Z0-9_-]*$")
    email: EmailStr = Field(..., description="User email address")
    password: str = Field(..., min_length=6, max_length=20)


@router.post("", status_code=status.HTTP_201_CREATED, response_model=UserInfo)
async def create_user(
    request: CreateUserRequest, uow: UnitOfWork = Depends(get_unit_of_work)
):
    """
    Create User

    Creates an email-confirmed user. Requires X-Admin-API-Key.

    Raises:
        - 401 Unauthorized: Missing or invalid admin API key
        - 409 Conflict: Login or email already taken
        - 422 Unprocessable Entity: Invalid input (handled by FastAPI)
    """
    command = CreateUserCommand(
        login=request.login, email=request.email, password=request.password
    )

    use_case = CreateUserUseCase(uow)
    result = await use_case.execute(command)

    if result.is_err():
        error = result.error
        if error.code == "USER_ALREADY_EXISTS":
            raise ClientError(error, status_code=status.HTTP_409_CONFLICT)
        raise ServerError(error)

    return result.value


@router.delete("/{user_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_user(user_id: UUID, uow: UnitOfWork = Depends(get_unit_of_work)):
    """
    Delete User

    Soft-deletes a user. Requires X-Admin-API-Key.

    Raises:
        - 401 Unauthorized: Missing or invalid admin API key
        - 404 Not Found: Unknown or already deleted user
    """
    use_case = DeleteUserUseCase(uow)
    result = await use_case.execute(user_id)

    if result.is_err():
        error = result.error
        if error.code == "NOT_FOUND":
            raise ClientError(error, status_code=status.HTTP_404_NOT_FOUND)
        raise ServerError(error)

    return Response(status_code=status.HTTP_204_NO_CONTENT)
