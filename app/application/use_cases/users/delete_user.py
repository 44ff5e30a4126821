"""Use case for deleting a user."""

import logging

from sqlalchemy.orm import Session

from app.application.use_cases.notifications import purge_user_notifications
from app.domain.entities import User
from app.domain.errors import InvalidSpecError, NotFoundError
from app.infrastructure.repositories import UserRepository

logger = logging.getLogger(__name__)


def delete_user(session: Session, user_id: int, *, admin: User) -> None:
    """Delete the user together with everything that only makes sense with them.

    Blogs, comments and contest registrations go with the account through
    foreign key cascades; payments are kept without an owner.
    """

    if admin.id == user_id:
        raise InvalidSpecError("Cannot delete your own account")

    repository = UserRepository(session)
    if repository.get(user_id) is None:
        raise NotFoundError("User not found")

    try:
        purge_user_notifications(session, user_id, commit=False)
        repository.delete(user_id, commit=False)
        session.commit()
    except Exception:
        session.rollback()
        raise
    logger.info("User %s deleted by admin %s", user_id, admin.id)
