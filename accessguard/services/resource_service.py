from typing import List
from uuid import UUID

from sqlalchemy.orm import Session

from accessguard.core.exceptions import Conflict, NotFound
from accessguard.models import Resource
from accessguard.schemas.resource import ResourceCreate, ResourceUpdate


class ResourceService:
    """Resource descriptors backing the /resources endpoints."""

    def __init__(self, db: Session):
        self.db = db

    def list_resources(self) -> List[Resource]:
        return self.db.query(Resource).order_by(Resource.name).all()

    def get_resource(self, resource_id: UUID) -> Resource:
        resource = self.db.get(Resource, resource_id)
        if not resource:
            raise NotFound("Resource not found")
        return resource

    def create_resource(self, data: ResourceCreate) -> Resource:
        if self.db.query(Resource).filter(Resource.name == data.name).first():
            raise Conflict(f"Resource '{data.name}' already exists")
        resource = Resource(**data.model_dump())
        self.db.add(resource)
        self.db.commit()
        self.db.refresh(resource)
        return resource

    def update_resource(self, resource_id: UUID, data: ResourceUpdate) -> Resource:
        resource = self.get_resource(resource_id)
        changes = data.model_dump(exclude_unset=True)
        if "name" in changes and changes["name"] != resource.name:
            if self.db.query(Resource).filter(Resource.name == changes["name"]).first():
                raise Conflict(f"Resource '{changes['name']}' already exists")
        for field, value in changes.items():
            setattr(resource, field, value)
        self.db.commit()
        self.db.refresh(resource)
        return resource

    def delete_resource(self, resource_id: UUID) -> None:
        resource = self.get_resource(resource_id)
        self.db.delete(resource)
        self.db.commit()
