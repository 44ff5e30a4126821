"""Lazy recomputation of contest lifecycle status."""

from dataclasses import replace
from datetime import datetime

from app.domain.entities import Contest, derive_status
from app.infrastructure.repositories import ContestRepository


def refresh_contest_status(
    repository: ContestRepository, contest: Contest, now: datetime
) -> Contest:
    """Persist the status implied by ``now`` when it differs from the stored one."""

    status = derive_status(now, contest)
    if status is contest.status:
        return contest
    repository.update_status(contest.id, status)
    return replace(contest, status=status)
