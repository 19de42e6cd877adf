from uuid import UUID

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from accessguard.api.deps import get_db
from accessguard.api.guards import AccessGuard, GuardedCall
from accessguard.schemas.auth import MessageResponse
from accessguard.schemas.role import RoleCreate, RoleDetail, RoleListResponse, RoleRead, RoleUpdate
from accessguard.services.role_service import RoleService

router = APIRouter()


@router.get("", response_model=RoleListResponse, summary="List roles with their permissions")
async def list_roles(
    call: GuardedCall = Depends(AccessGuard("view_roles", "roles", permissions=["read:roles"])),
    db: Session = Depends(get_db),
):
    def operation():
        roles = RoleService(db).list_roles()
        return RoleListResponse(
            count=len(roles), roles=[RoleRead.model_validate(r) for r in roles]
        )

    return call.run(operation)


@router.get("/{role_id}", response_model=RoleDetail, summary="Get one role with its members")
async def get_role(
    role_id: UUID,
    call: GuardedCall = Depends(AccessGuard("view_role", "roles", permissions=["read:roles"])),
    db: Session = Depends(get_db),
):
    return call.run(lambda: RoleDetail.model_validate(RoleService(db).get_role(role_id)))


@router.post(
    "",
    response_model=RoleRead,
    status_code=status.HTTP_201_CREATED,
    summary="Create a role",
)
async def create_role(
    data: RoleCreate,
    call: GuardedCall = Depends(AccessGuard("create_role", "roles", permissions=["create:roles"])),
    db: Session = Depends(get_db),
):
    return call.run(
        lambda: RoleRead.model_validate(RoleService(db).create_role(data)),
        success_status=status.HTTP_201_CREATED,
    )


@router.put("/{role_id}", response_model=RoleRead, summary="Update a role")
async def update_role(
    role_id: UUID,
    data: RoleUpdate,
    call: GuardedCall = Depends(AccessGuard("update_role", "roles", permissions=["update:roles"])),
    db: Session = Depends(get_db),
):
    return call.run(lambda: RoleRead.model_validate(RoleService(db).update_role(role_id, data)))


@router.delete("/{role_id}", response_model=MessageResponse, summary="Delete a role")
async def delete_role(
    role_id: UUID,
    call: GuardedCall = Depends(AccessGuard("delete_role", "roles", permissions=["delete:roles"])),
    db: Session = Depends(get_db),
):
    def operation():
        RoleService(db).delete_role(role_id)
        return MessageResponse(message="Role deleted")

    return call.run(operation)
