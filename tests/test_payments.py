from __future__ import annotations

from decimal import Decimal

import httpx
import pytest

from app.application.use_cases.contests import register_for_contest
from app.application.use_cases.payments import (
    build_receipt,
    create_payment_order,
    get_payment,
    list_all_payments,
    list_payment_history,
    verify_payment,
)
from app.domain.entities import (
    ContestRef,
    ParticipantPaymentStatus,
    PaymentPurpose,
    PaymentRef,
    PaymentStatus,
    RelatedTo,
)
from app.domain.errors import (
    ConflictError,
    ForbiddenError,
    InvalidSignatureError,
    InvalidSpecError,
    NotFoundError,
    UpstreamFailureError,
)
from app.infrastructure.models import ContestParticipantModel
from app.infrastructure.payment_gateway import RazorpayGateway, sign_payment
from app.infrastructure.repositories import (
    ContestRepository,
    NotificationRepository,
    PaymentRepository,
)

SECRET = "test_secret"


@pytest.fixture()
def gateway() -> RazorpayGateway:
    return RazorpayGateway("rzp_key", SECRET, base_url="https://pay.example.com/v1")


@pytest.fixture()
def provider_orders(monkeypatch):
    """Answer order creation like the provider would, numbering orders sequentially."""

    orders = []

    def fake_post(url, *, json, **kwargs):
        order = {"id": f"order_{len(orders) + 1}", **json}
        orders.append(order)
        return httpx.Response(200, json=order, request=httpx.Request("POST", url))

    monkeypatch.setattr(httpx, "post", fake_post)
    return orders


def _verify(session, gateway, dispatcher, user, summary, *, payment_ref="pay_1", signature=None):
    return verify_payment(
        session,
        gateway,
        dispatcher,
        user=user,
        provider_payment_id=payment_ref,
        provider_order_id=summary.order_id,
        provider_signature=signature
        or sign_payment(SECRET, order_id=summary.order_id, payment_id=payment_ref),
        payment_id=summary.payment_id,
    )


def test_contest_payment_flow(
    session, gateway, dispatcher, push, provider_orders, make_contest, student
):
    contest = make_contest(entry_fee=Decimal("499.50"))
    registration = register_for_contest(session, contest.id, user=student)

    summary = create_payment_order(
        session,
        gateway,
        user=student,
        amount=Decimal("499.50"),
        purpose="contest",
        relation=ContestRef(contest.id),
    )

    assert provider_orders[0]["amount"] == 49950
    assert summary.payment_id == registration.payment.id
    assert summary.amount == Decimal("499.50")

    payment = _verify(session, gateway, dispatcher, student, summary)

    assert payment.status is PaymentStatus.COMPLETED
    assert payment.provider_payment_id == "pay_1"
    participant = ContestRepository(session).get(contest.id).find_participant(student.id)
    assert participant.payment_status is ParticipantPaymentStatus.COMPLETED
    assert push.events_for(student.id) == ["PAYMENT_SUCCESS"]
    stored = NotificationRepository(session).list_for_user(student.id)
    assert len(stored) == 1
    assert stored[0].title == "Payment Successful"
    assert stored[0].related_to is RelatedTo.PAYMENT
    assert stored[0].relation == PaymentRef(payment.id)


def test_forged_signature_changes_nothing(
    session, gateway, dispatcher, push, provider_orders, student
):
    summary = create_payment_order(
        session, gateway, user=student, amount=Decimal("100"), purpose="subscription"
    )

    with pytest.raises(InvalidSignatureError):
        _verify(session, gateway, dispatcher, student, summary, signature="deadbeef")

    assert PaymentRepository(session).get(summary.payment_id).status is PaymentStatus.PENDING
    assert push.sent == []


def test_gateway_failure_stores_nothing(monkeypatch, session, gateway, student):
    monkeypatch.setattr(
        httpx,
        "post",
        lambda url, **kwargs: httpx.Response(
            503, text="unavailable", request=httpx.Request("POST", url)
        ),
    )

    with pytest.raises(UpstreamFailureError):
        create_payment_order(
            session, gateway, user=student, amount=Decimal("100"), purpose="other"
        )

    assert PaymentRepository(session).count() == 0


@pytest.mark.parametrize(
    ("amount", "purpose"),
    [(Decimal("0"), "contest"), (Decimal("-5"), "other"), (Decimal("10"), None), (Decimal("10"), "gift")],
)
def test_invalid_orders_are_rejected(session, gateway, student, amount, purpose):
    with pytest.raises(InvalidSpecError):
        create_payment_order(session, gateway, user=student, amount=amount, purpose=purpose)


def test_order_for_unknown_contest(session, gateway, provider_orders, student):
    with pytest.raises(NotFoundError):
        create_payment_order(
            session,
            gateway,
            user=student,
            amount=Decimal("10"),
            purpose="contest",
            relation=ContestRef(404),
        )
    assert provider_orders == []


def test_only_the_owner_can_verify(session, gateway, dispatcher, provider_orders, make_user):
    owner = make_user()
    intruder = make_user()
    summary = create_payment_order(
        session, gateway, user=owner, amount=Decimal("10"), purpose="other"
    )

    with pytest.raises(ForbiddenError):
        _verify(session, gateway, dispatcher, intruder, summary)


def test_replayed_verification_is_idempotent(
    session, gateway, dispatcher, push, provider_orders, student
):
    summary = create_payment_order(
        session, gateway, user=student, amount=Decimal("10"), purpose="other"
    )
    first = _verify(session, gateway, dispatcher, student, summary)
    second = _verify(session, gateway, dispatcher, student, summary)

    assert first.id == second.id
    assert second.status is PaymentStatus.COMPLETED
    assert push.events_for(student.id) == ["PAYMENT_SUCCESS"]

    with pytest.raises(ConflictError):
        _verify(session, gateway, dispatcher, student, summary, payment_ref="pay_other")


def test_verification_for_another_order_is_rejected(
    session, gateway, dispatcher, provider_orders, student
):
    first = create_payment_order(
        session, gateway, user=student, amount=Decimal("10"), purpose="other"
    )
    second = create_payment_order(
        session, gateway, user=student, amount=Decimal("20"), purpose="other"
    )
    mixed = type(first)(
        order_id=second.order_id,
        amount=first.amount,
        currency=first.currency,
        receipt=first.receipt,
        payment_id=first.payment_id,
    )

    with pytest.raises(InvalidSpecError):
        _verify(session, gateway, dispatcher, student, mixed)


def test_history_and_admin_listing(
    session, gateway, dispatcher, provider_orders, admin, make_user
):
    payer = make_user()
    other = make_user()
    paid = create_payment_order(
        session, gateway, user=payer, amount=Decimal("30"), purpose="other"
    )
    create_payment_order(session, gateway, user=other, amount=Decimal("5"), purpose="other")
    _verify(session, gateway, dispatcher, payer, paid)

    history = list_payment_history(session, payer.id)
    listing = list_all_payments(session)

    assert [payment.id for payment in history.items] == [paid.payment_id]
    assert listing.page.total == 2
    assert listing.stats.total_revenue == Decimal("30")
    assert listing.stats.completed_count == 1
    assert listing.stats.pending_count == 1
    assert get_payment(session, paid.payment_id, viewer=admin).purpose is PaymentPurpose.OTHER
    with pytest.raises(ForbiddenError):
        get_payment(session, paid.payment_id, viewer=other)


def test_receipts_are_unique_and_short():
    receipts = {build_receipt(123456789) for _ in range(50)}

    assert len(receipts) == 50
    assert all(len(receipt) <= 40 for receipt in receipts)


def test_contest_order_must_charge_the_registration_fee(
    session, gateway, dispatcher, provider_orders, make_contest, student
):
    contest = make_contest(entry_fee=Decimal("500"))
    registration = register_for_contest(session, contest.id, user=student)

    with pytest.raises(InvalidSpecError):
        create_payment_order(
            session,
            gateway,
            user=student,
            amount=Decimal("1"),
            purpose="contest",
            relation=ContestRef(contest.id),
        )

    assert provider_orders == []
    pending = PaymentRepository(session).get(registration.payment.id)
    assert pending.amount == Decimal("500")
    assert pending.provider_order_id is None


def test_registration_payment_needs_its_own_order(
    session, gateway, dispatcher, push, provider_orders, make_contest, student
):
    contest = make_contest(entry_fee=Decimal("500"))
    registration = register_for_contest(session, contest.id, user=student)
    cheap = create_payment_order(
        session, gateway, user=student, amount=Decimal("1"), purpose="other"
    )
    borrowed = type(cheap)(
        order_id=cheap.order_id,
        amount=cheap.amount,
        currency=cheap.currency,
        receipt=cheap.receipt,
        payment_id=registration.payment.id,
    )

    with pytest.raises(InvalidSpecError):
        _verify(session, gateway, dispatcher, student, borrowed)

    assert PaymentRepository(session).get(registration.payment.id).status is PaymentStatus.PENDING
    participant = ContestRepository(session).get(contest.id).find_participant(student.id)
    assert participant.payment_status is ParticipantPaymentStatus.PENDING
    assert push.sent == []


def test_payment_completes_when_the_participant_is_gone(
    session, gateway, dispatcher, push, provider_orders, make_contest, student
):
    contest = make_contest(entry_fee=Decimal("75"))
    register_for_contest(session, contest.id, user=student)
    summary = create_payment_order(
        session,
        gateway,
        user=student,
        amount=Decimal("75"),
        purpose="contest",
        relation=ContestRef(contest.id),
    )
    session.query(ContestParticipantModel).filter_by(
        contest_id=contest.id, user_id=student.id
    ).delete()
    session.commit()

    payment = _verify(session, gateway, dispatcher, student, summary)

    assert payment.status is PaymentStatus.COMPLETED
    assert ContestRepository(session).get(contest.id).find_participant(student.id) is None
    assert push.events_for(student.id) == ["PAYMENT_SUCCESS"]
    stored = NotificationRepository(session).list_for_user(student.id)
    assert [notification.related_to for notification in stored] == [RelatedTo.PAYMENT]
