"""Persistence layer for user data."""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from datetime import datetime

from sqlalchemy import func, or_
from sqlalchemy.orm import Session

from app.domain.entities import ROLE_ADMIN, ROLE_STUDENT, User, UserStats
from app.infrastructure.models import UserContestModel, UserModel
from app.utils import ensure_app_naive_datetime, ensure_app_timezone


class UserRepository:
    """Provide CRUD operations for user entities."""

    def __init__(self, session: Session) -> None:
        self.session = session

    def list(
        self,
        *,
        role: str | None = None,
        is_active: bool | None = None,
        search: str | None = None,
        skip: int = 0,
        limit: int = 100,
    ) -> Sequence[User]:
        query = self._filtered_query(role=role, is_active=is_active, search=search)
        query = query.order_by(UserModel.created_at.desc(), UserModel.id.desc())
        query = query.offset(skip).limit(limit)
        return [self._to_entity(model) for model in query.all()]

    def count(
        self,
        *,
        role: str | None = None,
        is_active: bool | None = None,
        search: str | None = None,
    ) -> int:
        return self._filtered_query(role=role, is_active=is_active, search=search).count()

    def stats(self) -> UserStats:
        return UserStats(
            total_students=self.count(role=ROLE_STUDENT),
            total_admins=self.count(role=ROLE_ADMIN),
            active_users=self.count(is_active=True),
            inactive_users=self.count(is_active=False),
        )

    def count_created_since(self, since: datetime) -> int:
        return (
            self.session.query(UserModel)
            .filter(UserModel.created_at >= ensure_app_naive_datetime(since))
            .count()
        )

    def get(self, user_id: int) -> User | None:
        model = self.session.get(UserModel, user_id)
        return self._to_entity(model) if model else None

    def get_by_email(self, email: str) -> User | None:
        model = (
            self.session.query(UserModel)
            .filter(func.lower(UserModel.email) == email.lower())
            .first()
        )
        return self._to_entity(model) if model else None

    def create(self, user: User) -> User:
        model = UserModel()
        self._apply_entity_to_model(model, user)
        self.session.add(model)
        self.session.commit()
        self.session.refresh(model)
        return self._to_entity(model)

    def update(self, user: User) -> User:
        model = self.session.get(UserModel, user.id)
        if not model:
            msg = f"User with id {user.id} not found"
            raise ValueError(msg)
        self._apply_entity_to_model(model, user)
        self.session.add(model)
        self.session.commit()
        self.session.refresh(model)
        return self._to_entity(model)

    def delete(self, user_id: int, *, commit: bool = True) -> None:
        model = self.session.get(UserModel, user_id)
        if not model:
            msg = f"User with id {user_id} not found"
            raise ValueError(msg)
        self.session.delete(model)
        if commit:
            self.session.commit()

    def list_ids_by_role(self, role: str) -> list[int]:
        query = (
            self.session.query(UserModel.id)
            .filter(func.lower(UserModel.role) == role.lower())
            .order_by(UserModel.id)
        )
        return [user_id for (user_id,) in query.all()]

    def existing_ids(self, user_ids: Iterable[int]) -> set[int]:
        """Return the subset of ``user_ids`` that belong to stored users."""

        unique_ids = {int(user_id) for user_id in user_ids}
        if not unique_ids:
            return set()
        query = self.session.query(UserModel.id).filter(UserModel.id.in_(unique_ids))
        return {user_id for (user_id,) in query.all()}

    def add_contest(self, user_id: int, contest_id: int, *, commit: bool = True) -> None:
        """Append ``contest_id`` to the user's contest list."""

        existing = self.session.get(UserContestModel, (user_id, contest_id))
        if existing is None:
            self.session.add(UserContestModel(user_id=user_id, contest_id=contest_id))
        if commit:
            self.session.commit()

    def _filtered_query(
        self,
        *,
        role: str | None,
        is_active: bool | None,
        search: str | None,
    ):
        query = self.session.query(UserModel)
        if role:
            query = query.filter(func.lower(UserModel.role) == role.lower())
        if is_active is not None:
            query = query.filter(UserModel.is_active.is_(is_active))
        if search:
            pattern = f"%{search}%"
            query = query.filter(
                or_(UserModel.name.ilike(pattern), UserModel.email.ilike(pattern))
            )
        return query

    @staticmethod
    def _to_entity(model: UserModel) -> User:
        return User(
            id=model.id,
            name=model.name,
            email=model.email,
            password=model.password,
            role=model.role,
            avatar=model.avatar,
            department=model.department,
            bio=model.bio,
            year=model.year,
            is_active=model.is_active,
            is_verified=model.is_verified,
            contests=[link.contest_id for link in model.contest_links],
            created_at=ensure_app_timezone(model.created_at),
            updated_at=ensure_app_timezone(model.updated_at),
        )

    @staticmethod
    def _apply_entity_to_model(model: UserModel, user: User) -> None:
        model.name = user.name
        model.email = user.email.lower()
        model.password = user.password
        model.role = user.role
        model.avatar = user.avatar
        model.department = user.department
        model.bio = user.bio
        model.year = user.year
        model.is_active = user.is_active
        model.is_verified = user.is_verified


__all__ = ["UserRepository"]
