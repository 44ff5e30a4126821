"""Utility helpers to generate and dispatch domain notifications."""

from __future__ import annotations

from collections.abc import Sequence

from app.domain.entities import (
    ROLE_ADMIN,
    ROLE_STUDENT,
    Blog,
    BlogRef,
    BlogStatus,
    Contest,
    ContestRef,
    Notification,
    NotificationRelation,
    Payment,
    PaymentRef,
    RecipientsMode,
    RelatedTo,
    UrgencyLevel,
    User,
)

from .dispatcher import (
    Broadcast,
    EventTag,
    Explicit,
    NotificationDispatcher,
    NotificationEvent,
)


def announce(
    dispatcher: NotificationDispatcher,
    *,
    sender: User,
    title: str,
    message: str,
    recipients: RecipientsMode = RecipientsMode.ALL,
    target_users: Sequence[int] | None = None,
    urgency_level: UrgencyLevel = UrgencyLevel.INFO,
    related_to: RelatedTo = RelatedTo.GENERAL,
    relation: NotificationRelation | None = None,
) -> Notification:
    """Send an administrator announcement."""

    if recipients is RecipientsMode.ALL:
        audience = Broadcast(ROLE_STUDENT)
    else:
        audience = Explicit(list(target_users or []))
    return dispatcher.notify(
        NotificationEvent(
            tag=EventTag.NEW_NOTIFICATION,
            title=title,
            message=message,
            sender_id=sender.id,
            audience=audience,
            urgency_level=urgency_level,
            related_to=related_to,
            relation=relation,
        )
    )


def notify_blog_submitted(dispatcher: NotificationDispatcher, blog: Blog) -> None:
    dispatcher.notify(
        NotificationEvent(
            tag=EventTag.NEW_BLOG,
            title="New Blog Submission",
            message=f'A new blog "{blog.title}" has been submitted for approval.',
            push_message=f'New blog "{blog.title}" submitted for approval',
            sender_id=blog.author_id,
            audience=Broadcast(ROLE_ADMIN),
            relation=BlogRef(blog.id),
            optional=True,
        )
    )


def notify_blog_resubmitted(
    dispatcher: NotificationDispatcher, blog: Blog, *, editor: User
) -> None:
    dispatcher.notify(
        NotificationEvent(
            tag=EventTag.BLOG_UPDATE,
            title="Blog Updated and Needs Review",
            message=f'Blog "{blog.title}" has been updated and needs review.',
            push_message=f'Blog "{blog.title}" updated and needs review',
            sender_id=editor.id,
            audience=Broadcast(ROLE_ADMIN),
            relation=BlogRef(blog.id),
            optional=True,
        )
    )


def notify_blog_status_changed(
    dispatcher: NotificationDispatcher, blog: Blog, *, reviewer: User
) -> None:
    if blog.status is BlogStatus.APPROVED:
        title = "Blog Approved"
        message = f'Your blog "{blog.title}" has been approved and published.'
        push_message = f'Your blog "{blog.title}" has been approved!'
    else:
        reason = blog.rejection_reason or "No reason provided"
        title = "Blog Rejected"
        message = f'Your blog "{blog.title}" has been rejected. Reason: {reason}'
        push_message = f'Your blog "{blog.title}" has been rejected'
    dispatcher.notify(
        NotificationEvent(
            tag=EventTag.BLOG_STATUS_CHANGE,
            title=title,
            message=message,
            push_message=push_message,
            sender_id=reviewer.id,
            audience=Explicit([blog.author_id]),
            urgency_level=UrgencyLevel.IMPORTANT,
            relation=BlogRef(blog.id),
        )
    )


def notify_new_comment(
    dispatcher: NotificationDispatcher, blog: Blog, *, commenter: User
) -> None:
    if commenter.id == blog.author_id:
        return
    dispatcher.notify(
        NotificationEvent(
            tag=EventTag.NEW_COMMENT,
            title="New Comment on Your Blog",
            message=f'{commenter.name} commented on your blog "{blog.title}"',
            push_message=f'New comment on your blog "{blog.title}"',
            sender_id=commenter.id,
            audience=Explicit([blog.author_id]),
            relation=BlogRef(blog.id),
        )
    )


def notify_contest_created(
    dispatcher: NotificationDispatcher, contest: Contest, *, creator: User
) -> None:
    dispatcher.notify(
        NotificationEvent(
            tag=EventTag.NEW_CONTEST,
            title="New Contest Announced",
            message=(
                f'A new contest "{contest.title}" has been announced. '
                f"Registration is open until {contest.registration_deadline:%Y-%m-%d}."
            ),
            push_message=f'New contest "{contest.title}" announced',
            sender_id=creator.id,
            audience=Broadcast(ROLE_STUDENT),
            urgency_level=UrgencyLevel.IMPORTANT,
            relation=ContestRef(contest.id),
            optional=True,
        )
    )


def notify_contest_updated(
    dispatcher: NotificationDispatcher, contest: Contest, *, editor: User
) -> None:
    participant_ids = [participant.user_id for participant in contest.participants]
    if not participant_ids:
        return
    dispatcher.notify(
        NotificationEvent(
            tag=EventTag.CONTEST_UPDATE,
            title="Contest Updated",
            message=f'The contest "{contest.title}" has been updated. Please check the details.',
            push_message=f'Contest "{contest.title}" has been updated',
            sender_id=editor.id,
            audience=Explicit(participant_ids),
            urgency_level=UrgencyLevel.IMPORTANT,
            relation=ContestRef(contest.id),
        )
    )


def notify_account_suspended(
    dispatcher: NotificationDispatcher, user: User, *, admin: User
) -> None:
    dispatcher.notify(
        NotificationEvent(
            tag=EventTag.ACCOUNT_SUSPENDED,
            title="Account Suspended",
            message=(
                "Your account has been suspended. Please contact administration "
                "for further information."
            ),
            push_message="Your account has been suspended",
            sender_id=admin.id,
            audience=Explicit([user.id]),
            urgency_level=UrgencyLevel.URGENT,
            related_to=RelatedTo.ACCOUNT,
        )
    )


def notify_role_changed(
    dispatcher: NotificationDispatcher, user: User, *, admin: User
) -> None:
    dispatcher.notify(
        NotificationEvent(
            tag=EventTag.ROLE_CHANGED,
            title="Role Upgraded to Admin",
            message="You have been granted administrator privileges on the platform.",
            push_message="You are now an admin",
            sender_id=admin.id,
            audience=Explicit([user.id]),
            urgency_level=UrgencyLevel.IMPORTANT,
            related_to=RelatedTo.ACCOUNT,
        )
    )


def notify_payment_success(dispatcher: NotificationDispatcher, payment: Payment) -> None:
    dispatcher.notify(
        NotificationEvent(
            tag=EventTag.PAYMENT_SUCCESS,
            title="Payment Successful",
            message=(
                f"Your payment of {payment.currency} {payment.amount} for "
                f"{payment.purpose.value} has been processed successfully."
            ),
            push_message=f"Payment of {payment.currency} {payment.amount} successful",
            sender_id=payment.user_id,
            audience=Explicit([payment.user_id]),
            urgency_level=UrgencyLevel.IMPORTANT,
            relation=PaymentRef(payment.id),
        )
    )
