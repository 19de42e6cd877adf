from uuid import UUID

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from accessguard.api.deps import get_db
from accessguard.api.guards import AccessGuard, GuardedCall
from accessguard.schemas.auth import MessageResponse
from accessguard.schemas.permission import (
    PermissionCreate,
    PermissionListResponse,
    PermissionRead,
    PermissionUpdate,
)
from accessguard.services.permission_service import PermissionService

router = APIRouter()


@router.get("", response_model=PermissionListResponse, summary="List permissions")
async def list_permissions(
    call: GuardedCall = Depends(
        AccessGuard("view_permissions", "permissions", permissions=["read:permissions"])
    ),
    db: Session = Depends(get_db),
):
    def operation():
        permissions = PermissionService(db).list_permissions()
        return PermissionListResponse(
            count=len(permissions),
            permissions=[PermissionRead.model_validate(p) for p in permissions],
        )

    return call.run(operation)


@router.get("/{permission_id}", response_model=PermissionRead, summary="Get one permission")
async def get_permission(
    permission_id: UUID,
    call: GuardedCall = Depends(
        AccessGuard("view_permission", "permissions", permissions=["read:permissions"])
    ),
    db: Session = Depends(get_db),
):
    return call.run(
        lambda: PermissionRead.model_validate(PermissionService(db).get_permission(permission_id))
    )


@router.post(
    "",
    response_model=PermissionRead,
    status_code=status.HTTP_201_CREATED,
    summary="Create a permission",
)
async def create_permission(
    data: PermissionCreate,
    call: GuardedCall = Depends(
        AccessGuard("create_permission", "permissions", permissions=["create:permissions"])
    ),
    db: Session = Depends(get_db),
):
    return call.run(
        lambda: PermissionRead.model_validate(PermissionService(db).create_permission(data)),
        success_status=status.HTTP_201_CREATED,
    )


@router.put("/{permission_id}", response_model=PermissionRead, summary="Update a permission")
async def update_permission(
    permission_id: UUID,
    data: PermissionUpdate,
    call: GuardedCall = Depends(
        AccessGuard("update_permission", "permissions", permissions=["update:permissions"])
    ),
    db: Session = Depends(get_db),
):
    return call.run(
        lambda: PermissionRead.model_validate(
            PermissionService(db).update_permission(permission_id, data)
        )
    )


@router.delete("/{permission_id}", response_model=MessageResponse, summary="Delete a permission")
async def delete_permission(
    permission_id: UUID,
    call: GuardedCall = Depends(
        AccessGuard("delete_permission", "permissions", permissions=["delete:permissions"])
    ),
    db: Session = Depends(get_db),
):
    def operation():
        PermissionService(db).delete_permission(permission_id)
        return MessageResponse(message="Permission deleted")

    return call.run(operation)
