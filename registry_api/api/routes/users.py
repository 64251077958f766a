"""User management endpoints."""
from fastapi import APIRouter, Depends, Response, status

from registry_api.api.deps import get_user_service
from registry_api.schemas.errors import ErrorResponse
from registry_api.schemas.user import UserRequest, UserResponse
from registry_api.services.user_service import UserService

router = APIRouter()


@router.post("", response_model=UserResponse, status_code=status.HTTP_200_OK)
async def create_user(
    request: UserRequest,
    service: UserService = Depends(get_user_service),
):
    """Create a user.

    The plaintext password from the ``password_hash`` field is hashed before
    it is stored. The response never includes the hash.

    Args:
        request: User attributes
        service: User service

    Returns:
        Created user
    """
    user = await service.create_user(request)
    return UserResponse.model_validate(user)


@router.get("", response_model=list[UserResponse])
async def list_users(service: UserService = Depends(get_user_service)):
    """List all users."""
    users = await service.list_users()
    return [UserResponse.model_validate(user) for user in users]


@router.get(
    "/{user_id}",
    response_model=UserResponse,
    responses={status.HTTP_404_NOT_FOUND: {"model": ErrorResponse}},
)
async def get_user(user_id: int, service: UserService = Depends(get_user_service)):
    """Get a user by ID."""
    user = await service.get_user(user_id)
    return UserResponse.model_validate(user)


@router.put(
    "/{user_id}",
    response_model=UserResponse,
    responses={status.HTTP_404_NOT_FOUND: {"model": ErrorResponse}},
)
async def update_user(
    user_id: int,
    request: UserRequest,
    service: UserService = Depends(get_user_service),
):
    """Replace user information.

    Every attribute is overwritten and the password is re-hashed.

    Raises:
        404: If the user does not exist
    """
    user = await service.update_user(user_id, request)
    return UserResponse.model_validate(user)


@router.delete("/{user_id}", status_code=status.HTTP_204_NO_CONTENT, response_class=Response)
async def delete_user(user_id: int, service: UserService = Depends(get_user_service)):
    """Delete a user.

    Returns:
        204 No Content, also when no such user existed
    """
    await service.delete_user(user_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
