"""
Resource descriptors. Guarded by role rather than permission: listing is open
to Admin or Manager, every other operation to Admin only.
"""
from uuid import UUID

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from accessguard.api.deps import get_db
from accessguard.api.guards import AccessGuard, GuardedCall
from accessguard.schemas.auth import MessageResponse
from accessguard.schemas.resource import (
    ResourceCreate,
    ResourceListResponse,
    ResourceRead,
    ResourceUpdate,
)
from accessguard.services.resource_service import ResourceService

router = APIRouter()

ADMIN_ONLY = ["Admin"]


@router.get("", response_model=ResourceListResponse, summary="List resources")
async def list_resources(
    call: GuardedCall = Depends(
        AccessGuard("view_resources", "resources", roles=["Admin", "Manager"])
    ),
    db: Session = Depends(get_db),
):
    def operation():
        resources = ResourceService(db).list_resources()
        return ResourceListResponse(
            count=len(resources),
            resources=[ResourceRead.model_validate(r) for r in resources],
        )

    return call.run(operation)


@router.get("/{resource_id}", response_model=ResourceRead, summary="Get one resource")
async def get_resource(
    resource_id: UUID,
    call: GuardedCall = Depends(AccessGuard("view_resource", "resources", roles=ADMIN_ONLY)),
    db: Session = Depends(get_db),
):
    return call.run(
        lambda: ResourceRead.model_validate(ResourceService(db).get_resource(resource_id))
    )


@router.post(
    "",
    response_model=ResourceRead,
    status_code=status.HTTP_201_CREATED,
    summary="Create a resource",
)
async def create_resource(
    data: ResourceCreate,
    call: GuardedCall = Depends(AccessGuard("create_resource", "resources", roles=ADMIN_ONLY)),
    db: Session = Depends(get_db),
):
    return call.run(
        lambda: ResourceRead.model_validate(ResourceService(db).create_resource(data)),
        success_status=status.HTTP_201_CREATED,
    )


@router.put("/{resource_id}", response_model=ResourceRead, summary="Update a resource")
async def update_resource(
    resource_id: UUID,
    data: ResourceUpdate,
    call: GuardedCall = Depends(AccessGuard("update_resource", "resources", roles=ADMIN_ONLY)),
    db: Session = Depends(get_db),
):
    return call.run(
        lambda: ResourceRead.model_validate(
            ResourceService(db).update_resource(resource_id, data)
        )
    )


@router.delete("/{resource_id}", response_model=MessageResponse, summary="Delete a resource")
async def delete_resource(
    resource_id: UUID,
    call: GuardedCall = Depends(AccessGuard("delete_resource", "resources", roles=ADMIN_ONLY)),
    db: Session = Depends(get_db),
):
    def operation():
        ResourceService(db).delete_resource(resource_id)
        return MessageResponse(message="Resource deleted")

    return call.run(operation)
