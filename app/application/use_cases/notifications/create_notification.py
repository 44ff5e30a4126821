"""Use case for persisting a fan-out notification."""

from collections.abc import Iterable

from sqlalchemy.orm import Session

from app.domain.entities import (
    ROLE_STUDENT,
    Notification,
    NotificationSpec,
    RecipientsMode,
    related_to_for,
)
from app.domain.errors import InvalidSpecError
from app.infrastructure.repositories import NotificationRepository, UserRepository
from app.utils import now_in_app_timezone


def create_notification(session: Session, spec: NotificationSpec) -> Notification:
    """Resolve the recipients of ``spec`` and store the notification.

    ``ALL`` expands to the students registered right now; users created later
    never see the record. ``SPECIFIC`` requires an explicit, known target list.
    """

    if not spec.title.strip() or not spec.message.strip():
        raise InvalidSpecError("Title and message are required")

    user_repository = UserRepository(session)
    if spec.recipients is RecipientsMode.SPECIFIC:
        if not spec.target_users:
            raise InvalidSpecError(
                "At least one target user is required for specific notifications"
            )
        target_users = _unique(spec.target_users)
    elif spec.target_users is None:
        target_users = user_repository.list_ids_by_role(ROLE_STUDENT)
    else:
        target_users = _unique(spec.target_users)

    unknown = set(target_users) - user_repository.existing_ids(target_users)
    if unknown:
        raise InvalidSpecError(
            f"Unknown target users: {', '.join(str(user_id) for user_id in sorted(unknown))}"
        )
    if not target_users:
        raise InvalidSpecError("The notification has no recipients")

    notification = Notification(
        id=None,
        title=spec.title.strip(),
        message=spec.message.strip(),
        sender_id=spec.sender_id,
        recipients=spec.recipients,
        target_users=target_users,
        urgency_level=spec.urgency_level,
        related_to=related_to_for(spec.relation, spec.related_to),
        relation=spec.relation,
        created_at=now_in_app_timezone(),
    )
    return NotificationRepository(session).create(notification)


def _unique(user_ids: Iterable[int]) -> list[int]:
    return list(dict.fromkeys(int(user_id) for user_id in user_ids))
