from uuid import UUID

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from accessguard.api.deps import get_db
from accessguard.api.guards import AccessGuard, GuardedCall
from accessguard.schemas.auth import MessageResponse
from accessguard.schemas.user import UserCreate, UserListResponse, UserRead, UserUpdate
from accessguard.services.user_service import UserService

router = APIRouter()


@router.get("", response_model=UserListResponse, summary="List users")
async def list_users(
    call: GuardedCall = Depends(AccessGuard("view_users", "users", permissions=["read:users"])),
    db: Session = Depends(get_db),
):
    def operation():
        users = UserService(db).list_users()
        return UserListResponse(
            count=len(users), users=[UserRead.model_validate(u) for u in users]
        )

    return call.run(operation)


@router.get("/{user_id}", response_model=UserRead, summary="Get one user")
async def get_user(
    user_id: UUID,
    call: GuardedCall = Depends(AccessGuard("view_user", "users", permissions=["read:users"])),
    db: Session = Depends(get_db),
):
    return call.run(lambda: UserRead.model_validate(UserService(db).get_user(user_id)))


@router.post(
    "",
    response_model=UserRead,
    status_code=status.HTTP_201_CREATED,
    summary="Create a user",
)
async def create_user(
    data: UserCreate,
    call: GuardedCall = Depends(AccessGuard("create_user", "users", permissions=["create:users"])),
    db: Session = Depends(get_db),
):
    return call.run(
        lambda: UserRead.model_validate(UserService(db).create_user(data)),
        success_status=status.HTTP_201_CREATED,
    )


@router.put("/{user_id}", response_model=UserRead, summary="Update a user")
async def update_user(
    user_id: UUID,
    data: UserUpdate,
    call: GuardedCall = Depends(AccessGuard("update_user", "users", permissions=["update:users"])),
    db: Session = Depends(get_db),
):
    """Setting ``is_active`` to false revokes the user's outstanding tokens."""
    return call.run(lambda: UserRead.model_validate(UserService(db).update_user(user_id, data)))


@router.delete("/{user_id}", response_model=MessageResponse, summary="Delete a user")
async def delete_user(
    user_id: UUID,
    call: GuardedCall = Depends(AccessGuard("delete_user", "users", permissions=["delete:users"])),
    db: Session = Depends(get_db),
):
    def operation():
        UserService(db).delete_user(user_id, acting_user_id=call.principal.id)
        return MessageResponse(message="User deleted successfully")

    return call.run(operation)
