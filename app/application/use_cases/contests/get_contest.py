"""Use case for retrieving a single contest."""

from sqlalchemy.orm import Session

from app.domain.entities import ContestDetail, User
from app.domain.errors import NotFoundError
from app.infrastructure.repositories import ContestRepository
from app.utils import now_in_app_timezone

from .refresh_status import refresh_contest_status


def get_contest(
    session: Session, contest_id: int, *, viewer: User | None = None
) -> ContestDetail:
    """Return the contest together with the viewer's registration state."""

    repository = ContestRepository(session)
    contest = repository.get(contest_id)
    if contest is None:
        raise NotFoundError("Contest not found")
    contest = refresh_contest_status(repository, contest, now_in_app_timezone())

    participant = contest.find_participant(viewer.id) if viewer else None
    return ContestDetail(
        contest=contest,
        is_registered=participant is not None,
        registration_status=participant.payment_status if participant else None,
    )
