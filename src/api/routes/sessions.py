from typing import List

from fastapi import APIRouter, Depends, Response, status

from src.api.error import ClientError, ServerError
from src.app.services.unit_of_work import UnitOfWork
from src.app.use_cases.auth import UserContext
from src.app.use_cases.sessions import ManageSessionsUseCase, SessionView
from src.depends import get_current_user, get_unit_of_work

router = APIRouter(prefix="/security", tags=["Sessions"])


@router.get(
    "/devices",
    status_code=status.HTTP_200_OK,
    response_model=List[SessionView],
)
async def get_active_sessions(
    current_user: UserContext = Depends(get_current_user),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    Active Sessions

    Returns all device sessions of the current user.
    Supports both Bearer token and refresh token authentication.
    """
    use_case = ManageSessionsUseCase(uow)
    result = await use_case.list_sessions(current_user.user_id)

    if result.is_err():
        raise ServerError(result.error)

    return result.value


@router.delete("/devices/{device_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_session(
    device_id: str,
    current_user: UserContext = Depends(get_current_user),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    Terminate Session

    Terminates the session of one device owned by the current user.

    Raises:
        - 401 Unauthorized: Not authenticated
        - 403 Forbidden: Session belongs to another user
        - 404 Not Found: No session for this device
    """
    use_case = ManageSessionsUseCase(uow)
    result = await use_case.delete_session(current_user.user_id, device_id)

    if result.is_err():
        error = result.error
        if error.code == "FORBIDDEN":
            raise ClientError(error, status_code=status.HTTP_403_FORBIDDEN)
        elif error.code == "NOT_FOUND":
            raise ClientError(error, status_code=status.HTTP_404_NOT_FOUND)
        raise ServerError(error)

    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.delete("/devices", status_code=status.HTTP_204_NO_CONTENT)
async def delete_all_other_sessions(
    current_user: UserContext = Depends(get_current_user),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    Terminate All Other Sessions

    Terminates every session of the current user except the current device.

    Raises:
        - 401 Unauthorized: Not authenticated
    """
    use_case = ManageSessionsUseCase(uow)
    result = await use_case.delete_all_except_current(
        current_user.user_id, current_user.device_id
    )

    if result.is_err():
        error = result.error
        if error.code == "VALIDATION_ERROR":
            raise ClientError(error, status_code=status.HTTP_400_BAD_REQUEST)
        raise ServerError(error)

    return Response(status_code=status.HTTP_204_NO_CONTENT)
