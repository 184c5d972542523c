# backend/classroom_scheduler/services/user_service.py
from typing import List, Optional

from sqlalchemy.orm import Session

from ..core.exceptions import ConflictException, NotFoundException
from ..models.user import User, UserRole
from ..repositories import RepositoryFactory
from ..repositories.user_repository import UserRepository
from ..schemas.user import UserCreate, UserResponse
from .base import BaseService


class UserService(BaseService):
    def __init__(self, db: Session, repository: Optional[UserRepository] = None):
        super().__init__(db)
        self.repository = repository or RepositoryFactory.create_user_repository(db)

    @BaseService.measure_operation("list_users")
    def list_users(self) -> List[UserResponse]:
        return [UserResponse.model_validate(u) for u in self.repository.get_all()]

    @BaseService.measure_operation("get_user")
    def get_user(self, user_id: int) -> UserResponse:
        user = self.repository.get_by_id(user_id)
        if not user:
            raise NotFoundException(f"User not found with id: {user_id}")
        return UserResponse.model_validate(user)

    @BaseService.measure_operation("get_user_by_email")
    def get_user_by_email(self, email: str) -> UserResponse:
        user = self.repository.get_by_email(email)
        if not user:
            raise NotFoundException(f"User not found with email: {email}")
        return UserResponse.model_validate(user)

    def find_by_email(self, email: str) -> Optional[User]:
        """Return the User entity for ``email`` or None."""
        return self.repository.get_by_email(email)

    @BaseService.measure_operation("create_user")
    def create_user(self, data: UserCreate) -> UserResponse:
        with self.transaction():
            if self.repository.get_by_email(data.email):
                raise ConflictException(f"User already exists with email: {data.email}")
            user = self.repository.create(
                name=data.name, email=data.email, role=UserRole(data.role).value
            )
        self.log_operation("create_user", user_id=user.id)
        return UserResponse.model_validate(user)
