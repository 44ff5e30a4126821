"""Routes for contests and contest registration."""

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from app.application.use_cases.contests import (
    create_contest as create_contest_uc,
    get_contest as get_contest_uc,
    list_contests as list_contests_uc,
    list_my_contests as list_my_contests_uc,
    register_for_contest as register_for_contest_uc,
    update_contest as update_contest_uc,
)
from app.application.use_cases.notifications import NotificationDispatcher
from app.domain.entities import Contest, User
from app.domain.errors import DomainError
from app.infrastructure.database import get_db
from app.interfaces.api.dependencies import (
    get_current_active_user,
    get_notification_dispatcher,
    get_optional_user,
    require_admin,
    require_student,
)
from app.interfaces.api.routes_helpers import to_http_exception
from app.interfaces.api.schemas import (
    ContestCreate,
    ContestDetailRead,
    ContestListResponse,
    ContestMutationResponse,
    ContestRead,
    ContestUpdate,
    MyContestListResponse,
    MyContestRead,
    PaginationRead,
    RegistrationPaymentRead,
    RegistrationResponse,
)

router = APIRouter(prefix="/contests", tags=["contests"])


def _to_read_model(contest: Contest) -> ContestRead:
    return ContestRead.model_validate(contest)


@router.post("/", response_model=ContestMutationResponse, status_code=status.HTTP_201_CREATED)
def create_contest(
    contest_in: ContestCreate,
    db: Session = Depends(get_db),
    dispatcher: NotificationDispatcher = Depends(get_notification_dispatcher),
    current_user: User = Depends(require_admin),
):
    """Create a contest and announce it to every student."""

    try:
        contest = create_contest_uc(
            db, dispatcher, creator=current_user, **contest_in.model_dump()
        )
    except DomainError as exc:
        raise to_http_exception(exc) from exc
    return ContestMutationResponse(
        message="Contest created successfully", contest=_to_read_model(contest)
    )


@router.get("/", response_model=ContestListResponse)
def list_contests(
    status_filter: str | None = Query(None, alias="status"),
    category: str | None = None,
    search: str | None = None,
    page: int = Query(1, ge=1),
    limit: int = Query(10, ge=1, le=100),
    db: Session = Depends(get_db),
):
    result = list_contests_uc(
        db, status=status_filter, category=category, search=search, page=page, limit=limit
    )
    return ContestListResponse(
        contests=[_to_read_model(contest) for contest in result.items],
        pagination=PaginationRead.from_page(result),
    )


@router.get("/my-contests", response_model=MyContestListResponse)
def list_my_contests(
    status_filter: str | None = Query(None, alias="status"),
    page: int = Query(1, ge=1),
    limit: int = Query(10, ge=1, le=100),
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_active_user),
):
    """Return the contests the caller registered for."""

    result = list_my_contests_uc(
        db, current_user.id, status=status_filter, page=page, limit=limit
    )
    return MyContestListResponse(
        contests=[
            MyContestRead(
                contest=_to_read_model(item.contest),
                registered_at=item.participant.registered_at,
                payment_status=item.participant.payment_status,
            )
            for item in result.items
        ],
        pagination=PaginationRead.from_page(result),
    )


@router.get("/{contest_id}", response_model=ContestDetailRead)
def read_contest(
    contest_id: int,
    db: Session = Depends(get_db),
    viewer: User | None = Depends(get_optional_user),
):
    try:
        detail = get_contest_uc(db, contest_id, viewer=viewer)
    except DomainError as exc:
        raise to_http_exception(exc) from exc
    return ContestDetailRead.model_validate(detail)


@router.put("/{contest_id}", response_model=ContestMutationResponse)
def update_contest(
    contest_id: int,
    contest_in: ContestUpdate,
    db: Session = Depends(get_db),
    dispatcher: NotificationDispatcher = Depends(get_notification_dispatcher),
    current_user: User = Depends(require_admin),
):
    update_data = contest_in.model_dump(exclude_unset=True)
    try:
        contest = update_contest_uc(
            db, dispatcher, contest_id, editor=current_user, **update_data
        )
    except DomainError as exc:
        raise to_http_exception(exc) from exc
    return ContestMutationResponse(
        message="Contest updated successfully", contest=_to_read_model(contest)
    )


@router.post("/{contest_id}/register", response_model=RegistrationResponse)
def register_for_contest(
    contest_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_student),
):
    """Register the caller; paid contests leave a pending payment to settle."""

    try:
        result = register_for_contest_uc(db, contest_id, user=current_user)
    except DomainError as exc:
        raise to_http_exception(exc) from exc

    if result.payment_required:
        message = "Registration initiated. Please complete the payment."
    else:
        message = "Successfully registered for the contest"
    return RegistrationResponse(
        message=message,
        contest_id=result.contest_id,
        payment_required=result.payment_required,
        payment_status=result.payment_status,
        payment=(
            RegistrationPaymentRead.model_validate(result.payment)
            if result.payment
            else None
        ),
    )
