"""Routes for payment orders and their reconciliation."""

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.orm import Session

from app.application.use_cases.notifications import NotificationDispatcher
from app.application.use_cases.payments import (
    create_payment_order,
    get_payment as get_payment_uc,
    list_all_payments as list_all_payments_uc,
    list_payment_history,
    verify_payment as verify_payment_uc,
)
from app.domain.entities import Payment, PaymentRelation, User, reference_from_columns
from app.domain.errors import DomainError
from app.infrastructure.database import get_db
from app.infrastructure.payment_gateway import RazorpayGateway
from app.interfaces.api.dependencies import (
    get_current_active_user,
    get_notification_dispatcher,
    get_payment_gateway,
    require_admin,
)
from app.interfaces.api.routes_helpers import to_http_exception
from app.interfaces.api.schemas import (
    AdminPaymentListResponse,
    CreateOrderRequest,
    CreateOrderResponse,
    OrderRead,
    PaginationRead,
    PaymentListResponse,
    PaymentRead,
    PaymentStatsRead,
    VerifyPaymentRequest,
    VerifyPaymentResponse,
)

router = APIRouter(prefix="/payments", tags=["payments"])


def _to_read_model(payment: Payment) -> PaymentRead:
    relation = payment.relation
    return PaymentRead(
        id=payment.id,
        user_id=payment.user_id,
        amount=payment.amount,
        currency=payment.currency,
        purpose=payment.purpose,
        status=payment.status,
        related_id=relation.id if relation else None,
        related_model=relation.model if relation else None,
        payment_method=payment.payment_method,
        provider_order_id=payment.provider_order_id,
        provider_payment_id=payment.provider_payment_id,
        receipt=payment.receipt,
        notes=payment.notes,
        created_at=payment.created_at,
        updated_at=payment.updated_at,
    )


def _relation_from_request(order_in: CreateOrderRequest) -> PaymentRelation | None:
    if order_in.related_model is None or order_in.related_id is None:
        return None
    return reference_from_columns(order_in.related_model, order_in.related_id)


@router.post("/create-order", response_model=CreateOrderResponse)
def create_order(
    order_in: CreateOrderRequest,
    db: Session = Depends(get_db),
    gateway: RazorpayGateway = Depends(get_payment_gateway),
    current_user: User = Depends(get_current_active_user),
):
    """Open a provider order the client completes at checkout."""

    if order_in.amount is None or order_in.purpose is None:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Amount and purpose are required",
        )
    try:
        summary = create_payment_order(
            db,
            gateway,
            user=current_user,
            amount=order_in.amount,
            purpose=order_in.purpose,
            relation=_relation_from_request(order_in),
        )
    except DomainError as exc:
        raise to_http_exception(exc) from exc
    return CreateOrderResponse(
        message="Order created successfully",
        order=OrderRead(
            id=summary.order_id,
            amount=summary.amount,
            currency=summary.currency,
            receipt=summary.receipt,
        ),
        payment_id=summary.payment_id,
        key_id=gateway.key_id,
    )


@router.post("/verify", response_model=VerifyPaymentResponse)
def verify_payment(
    verification: VerifyPaymentRequest,
    db: Session = Depends(get_db),
    gateway: RazorpayGateway = Depends(get_payment_gateway),
    dispatcher: NotificationDispatcher = Depends(get_notification_dispatcher),
    current_user: User = Depends(get_current_active_user),
):
    try:
        payment = verify_payment_uc(
            db,
            gateway,
            dispatcher,
            user=current_user,
            provider_payment_id=verification.razorpay_payment_id,
            provider_order_id=verification.razorpay_order_id,
            provider_signature=verification.razorpay_signature,
            payment_id=verification.payment_id,
        )
    except DomainError as exc:
        raise to_http_exception(exc) from exc
    return VerifyPaymentResponse(
        message="Payment verified successfully", payment=_to_read_model(payment)
    )


@router.get("/history", response_model=PaymentListResponse)
def read_payment_history(
    status_filter: str | None = Query(None, alias="status"),
    page: int = Query(1, ge=1),
    limit: int = Query(10, ge=1, le=100),
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_active_user),
):
    result = list_payment_history(
        db, current_user.id, status=status_filter, page=page, limit=limit
    )
    return PaymentListResponse(
        payments=[_to_read_model(payment) for payment in result.items],
        pagination=PaginationRead.from_page(result),
    )


@router.get("/all", response_model=AdminPaymentListResponse)
def list_all_payments(
    status_filter: str | None = Query(None, alias="status"),
    purpose: str | None = None,
    user_id: int | None = None,
    page: int = Query(1, ge=1),
    limit: int = Query(10, ge=1, le=100),
    db: Session = Depends(get_db),
    _: User = Depends(require_admin),
):
    """Return every payment with revenue figures."""

    listing = list_all_payments_uc(
        db,
        status=status_filter,
        purpose=purpose,
        user_id=user_id,
        page=page,
        limit=limit,
    )
    return AdminPaymentListResponse(
        payments=[_to_read_model(payment) for payment in listing.page.items],
        pagination=PaginationRead.from_page(listing.page),
        stats=PaymentStatsRead.model_validate(listing.stats),
    )


@router.get("/{payment_id}", response_model=PaymentRead)
def read_payment(
    payment_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_active_user),
):
    try:
        payment = get_payment_uc(db, payment_id, viewer=current_user)
    except DomainError as exc:
        raise to_http_exception(exc) from exc
    return _to_read_model(payment)
