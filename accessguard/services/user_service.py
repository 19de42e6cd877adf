from typing import Iterable, List, Optional
from uuid import UUID

from sqlalchemy import or_
from sqlalchemy.orm import Session, selectinload

from accessguard.core.exceptions import Conflict, NotFound, PolicyViolation
from accessguard.core.security import hash_password
from accessguard.models import Role, User
from accessguard.schemas.user import UserCreate, UserUpdate


class UserService:
    """User administration backing the /users endpoints."""

    def __init__(self, db: Session):
        self.db = db

    def _roles(self, role_ids: Iterable[UUID]) -> List[Role]:
        wanted = set(role_ids)
        if not wanted:
            return []
        roles = self.db.query(Role).filter(Role.id.in_(wanted)).all()
        if len(roles) != len(wanted):
            raise NotFound("Role not found")
        return roles

    def list_users(self) -> List[User]:
        return (
            self.db.query(User)
            .options(selectinload(User.roles))
            .order_by(User.username)
            .all()
        )

    def get_user(self, user_id: UUID) -> User:
        user = (
            self.db.query(User)
            .options(selectinload(User.roles).selectinload(Role.permissions))
            .filter(User.id == user_id)
            .first()
        )
        if not user:
            raise NotFound("User not found")
        return user

    def create_user(self, data: UserCreate) -> User:
        existing = (
            self.db.query(User)
            .filter(or_(User.username == data.username, User.email == data.email))
            .first()
        )
        if existing:
            raise Conflict("Username or email already exists")

        user = User(
            username=data.username,
            email=data.email,
            password_hash=hash_password(data.password),
            full_name=data.full_name,
            is_active=True,
        )
        user.roles = self._roles(data.role_ids)
        self.db.add(user)
        self.db.commit()
        self.db.refresh(user)
        return user

    def update_user(self, user_id: UUID, data: UserUpdate) -> User:
        user = self.get_user(user_id)
        roles = self._roles(data.role_ids) if data.role_ids is not None else None

        if data.email and data.email != user.email:
            taken = self.db.query(User).filter(User.email == data.email).first()
            if taken:
                raise Conflict("Email already exists")
            user.email = data.email
        if data.full_name:
            user.full_name = data.full_name
        if data.is_active is not None:
            user.is_active = data.is_active
        if roles is not None:
            user.roles = roles

        self.db.commit()
        self.db.refresh(user)
        return user

    def delete_user(self, user_id: UUID, acting_user_id: Optional[UUID]) -> None:
        user = self.get_user(user_id)
        if acting_user_id is not None and user.id == acting_user_id:
            raise PolicyViolation("Cannot delete your own account")
        self.db.delete(user)
        self.db.commit()
