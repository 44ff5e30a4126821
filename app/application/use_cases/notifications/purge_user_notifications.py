"""Use case removing every trace of a user from stored notifications."""

import logging

from sqlalchemy.orm import Session

from app.infrastructure.repositories import NotificationRepository

logger = logging.getLogger(__name__)


def purge_user_notifications(
    session: Session, user_id: int, *, commit: bool = True
) -> None:
    """Clean up notifications before ``user_id`` is deleted.

    Records sent by the user are deleted, the user is dropped from every
    other target list, and records left without targets are deleted too.
    """

    repository = NotificationRepository(session)
    sent = repository.delete_sent_by(user_id)
    detached = repository.remove_recipient(user_id)
    orphaned = repository.delete_without_recipients()
    if commit:
        session.commit()
    logger.info(
        "Purged notifications of user %s: %s sent, %s detached, %s orphaned",
        user_id,
        sent,
        detached,
        orphaned,
    )
