"""Persistence layer for contests and their embedded participant lists."""

from __future__ import annotations

from collections.abc import Sequence
from decimal import Decimal

from sqlalchemy import or_
from sqlalchemy.orm import Session

from app.domain.entities import (
    Contest,
    ContestStatus,
    Participant,
    ParticipantPaymentStatus,
)
from app.infrastructure.models import ContestModel, ContestParticipantModel
from app.utils import (
    ensure_app_naive_datetime,
    ensure_app_timezone,
    now_in_app_naive_datetime,
)


class ContestRepository:
    """Provide CRUD operations for :class:`Contest` aggregates."""

    def __init__(self, session: Session) -> None:
        self.session = session

    def get(self, contest_id: int, *, for_update: bool = False) -> Contest | None:
        query = self.session.query(ContestModel).filter(ContestModel.id == contest_id)
        if for_update:
            query = query.with_for_update()
        model = query.first()
        return self._to_entity(model) if model else None

    def exists(self, contest_id: int) -> bool:
        return (
            self.session.query(ContestModel.id)
            .filter(ContestModel.id == contest_id)
            .first()
            is not None
        )

    def list(
        self,
        *,
        status: str | None = None,
        category: str | None = None,
        search: str | None = None,
        skip: int = 0,
        limit: int | None = 10,
    ) -> Sequence[Contest]:
        query = self._filtered_query(status=status, category=category, search=search)
        query = query.order_by(ContestModel.created_at.desc(), ContestModel.id.desc())
        query = query.offset(skip)
        if limit is not None:
            query = query.limit(limit)
        return [self._to_entity(model) for model in query.all()]

    def count(
        self,
        *,
        status: str | None = None,
        category: str | None = None,
        search: str | None = None,
        include_inactive: bool = False,
    ) -> int:
        return self._filtered_query(
            status=status,
            category=category,
            search=search,
            include_inactive=include_inactive,
        ).count()

    def list_for_participant(
        self,
        user_id: int,
        *,
        status: str | None = None,
        skip: int = 0,
        limit: int | None = 10,
    ) -> Sequence[Contest]:
        query = self._participant_query(user_id, status=status)
        query = query.order_by(ContestModel.start_date.asc(), ContestModel.id.asc())
        query = query.offset(skip)
        if limit is not None:
            query = query.limit(limit)
        return [self._to_entity(model) for model in query.all()]

    def count_for_participant(self, user_id: int, *, status: str | None = None) -> int:
        return self._participant_query(user_id, status=status).count()

    def create(self, contest: Contest) -> Contest:
        model = ContestModel()
        self._apply_entity_to_model(model, contest)
        self.session.add(model)
        self.session.commit()
        self.session.refresh(model)
        return self._to_entity(model)

    def update(self, contest: Contest) -> Contest:
        """Persist the scalar fields of ``contest``; participants are untouched."""

        model = self.session.get(ContestModel, contest.id)
        if model is None:
            msg = f"Contest with id {contest.id} not found"
            raise ValueError(msg)
        self._apply_entity_to_model(model, contest)
        self.session.add(model)
        self.session.commit()
        self.session.refresh(model)
        return self._to_entity(model)

    def update_status(self, contest_id: int, status: ContestStatus) -> None:
        self.session.query(ContestModel).filter(ContestModel.id == contest_id).update(
            {ContestModel.status: status.value}, synchronize_session=False
        )
        self.session.commit()

    def add_participant(
        self, contest_id: int, participant: Participant, *, commit: bool = True
    ) -> None:
        self.session.add(
            ContestParticipantModel(
                contest_id=contest_id,
                user_id=participant.user_id,
                registered_at=(
                    ensure_app_naive_datetime(participant.registered_at)
                    or now_in_app_naive_datetime()
                ),
                payment_status=participant.payment_status.value,
                payment_id=participant.payment_id,
            )
        )
        if commit:
            self.session.commit()

    def update_participant_payment(
        self,
        contest_id: int,
        user_id: int,
        *,
        payment_status: ParticipantPaymentStatus,
        payment_id: int | None,
        commit: bool = True,
    ) -> bool:
        """Record the payment outcome on a participant entry.

        Returns ``False`` when the user is not registered for the contest.
        """

        updated = (
            self.session.query(ContestParticipantModel)
            .filter(
                ContestParticipantModel.contest_id == contest_id,
                ContestParticipantModel.user_id == user_id,
            )
            .update(
                {
                    ContestParticipantModel.payment_status: payment_status.value,
                    ContestParticipantModel.payment_id: payment_id,
                },
                synchronize_session=False,
            )
        )
        if commit:
            self.session.commit()
        return bool(updated)

    def _filtered_query(
        self,
        *,
        status: str | None,
        category: str | None,
        search: str | None,
        include_inactive: bool = False,
    ):
        query = self.session.query(ContestModel)
        if not include_inactive:
            query = query.filter(ContestModel.is_active.is_(True))
        if status:
            query = query.filter(ContestModel.status == status)
        if category:
            query = query.filter(ContestModel.category == category)
        if search:
            pattern = f"%{search}%"
            query = query.filter(
                or_(
                    ContestModel.title.ilike(pattern),
                    ContestModel.description.ilike(pattern),
                    ContestModel.category.ilike(pattern),
                )
            )
        return query

    def _participant_query(self, user_id: int, *, status: str | None):
        query = self.session.query(ContestModel).filter(
            ContestModel.participants.any(ContestParticipantModel.user_id == user_id)
        )
        if status:
            query = query.filter(ContestModel.status == status)
        return query

    @staticmethod
    def _apply_entity_to_model(model: ContestModel, contest: Contest) -> None:
        model.title = contest.title
        model.description = contest.description
        model.category = contest.category
        model.featured_image = contest.featured_image
        model.start_date = ensure_app_naive_datetime(contest.start_date)
        model.end_date = ensure_app_naive_datetime(contest.end_date)
        model.registration_deadline = ensure_app_naive_datetime(
            contest.registration_deadline
        )
        model.entry_fee = contest.entry_fee
        model.max_participants = contest.max_participants
        model.location = contest.location
        model.status = contest.status.value
        model.is_active = contest.is_active
        model.organizers = list(contest.organizers)

    @staticmethod
    def _to_entity(model: ContestModel) -> Contest:
        return Contest(
            id=model.id,
            title=model.title,
            description=model.description,
            category=model.category,
            start_date=ensure_app_timezone(model.start_date),
            end_date=ensure_app_timezone(model.end_date),
            registration_deadline=ensure_app_timezone(model.registration_deadline),
            entry_fee=Decimal(model.entry_fee or 0),
            max_participants=model.max_participants,
            location=model.location,
            featured_image=model.featured_image,
            status=ContestStatus(model.status),
            is_active=model.is_active,
            organizers=list(model.organizers or []),
            participants=[
                Participant(
                    user_id=participant.user_id,
                    registered_at=ensure_app_timezone(participant.registered_at),
                    payment_status=ParticipantPaymentStatus(participant.payment_status),
                    payment_id=participant.payment_id,
                )
                for participant in model.participants
            ],
            created_at=ensure_app_timezone(model.created_at),
            updated_at=ensure_app_timezone(model.updated_at),
        )


__all__ = ["ContestRepository"]
