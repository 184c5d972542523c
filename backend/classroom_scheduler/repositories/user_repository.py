# backend/classroom_scheduler/repositories/user_repository.py
import logging
from typing import Dict, Iterable, Optional, cast

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from ..core.exceptions import RepositoryException
from ..models.user import User
from .base_repository import BaseRepository

logger = logging.getLogger(__name__)


class UserRepository(BaseRepository[User]):
    def __init__(self, db: Session):
        super().__init__(db, User)

    def get_by_email(self, email: str) -> Optional[User]:
        try:
            return cast(
                Optional[User],
                self.db.query(User).filter(User.email == email).first(),
            )
        except SQLAlchemyError as e:
            self.logger.error(f"Error getting user by email {email}: {str(e)}")
            raise RepositoryException(f"Failed to get user by email: {str(e)}")

    def get_names_by_emails(self, emails: Iterable[str]) -> Dict[str, str]:
        """Map each known email to its user's name with a single query."""
        email_set = {email for email in emails if email}
        if not email_set:
            return {}

        try:
            rows = self.db.query(User.email, User.name).filter(User.email.in_(email_set)).all()
            return {email: name for email, name in rows}
        except SQLAlchemyError as e:
            self.logger.error(f"Error resolving user names: {str(e)}")
            raise RepositoryException(f"Failed to resolve user names: {str(e)}")
