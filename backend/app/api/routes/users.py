"""User Routes — directory lookups and administration."""

from fastapi import APIRouter, Depends, Response, status

from app.api.dependencies import get_user_directory
from app.core.errors import ResourceNotFoundError
from app.schemas.training import OperationResult
from app.schemas.user import RoleResponse, UserCreate, UserResponse, UserUpdate
from app.services.user_directory import UserDirectory

router = APIRouter(prefix="/api/v1/users", tags=["users"])


@router.get("", response_model=list[UserResponse])
async def list_users(directory: UserDirectory = Depends(get_user_directory)):
    return await directory.list_all()


@router.post("", response_model=UserResponse, status_code=status.HTTP_201_CREATED)
async def create_user(
    body: UserCreate, directory: UserDirectory = Depends(get_user_directory),
):
    return await directory.create(body.name, body.email, body.department, body.role_id)


@router.get("/roles", response_model=list[RoleResponse])
async def list_roles(directory: UserDirectory = Depends(get_user_directory)):
    return await directory.list_roles()


@router.get("/email/{email}", response_model=UserResponse)
async def get_user_by_email(
    email: str, directory: UserDirectory = Depends(get_user_directory),
):
    return await directory.get_by_email(email)


@router.get("/role/{role}", response_model=list[UserResponse])
async def list_users_by_role(
    role: str, directory: UserDirectory = Depends(get_user_directory),
):
    """Active users holding the named role."""
    return await directory.list_by_role(role)


@router.get("/{user_id}", response_model=UserResponse)
async def get_user(user_id: int, directory: UserDirectory = Depends(get_user_directory)):
    return await directory.get(user_id)


@router.put("/{user_id}", response_model=UserResponse)
async def update_user(
    user_id: int,
    body: UserUpdate,
    directory: UserDirectory = Depends(get_user_directory),
):
    return await directory.update(
        user_id, body.name, body.email, body.department, body.role_id, body.is_active,
    )


@router.put("/{user_id}/deactivate", response_model=OperationResult)
async def deactivate_user(
    user_id: int, directory: UserDirectory = Depends(get_user_directory),
):
    if not await directory.deactivate(user_id):
        raise ResourceNotFoundError("User", user_id)
    return OperationResult(success=True, message="User deactivated")


@router.delete("/{user_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_user(user_id: int, directory: UserDirectory = Depends(get_user_directory)):
    if not await directory.delete(user_id):
        raise ResourceNotFoundError("User", user_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
