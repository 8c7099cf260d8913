from __future__ import annotations

from datetime import datetime, timezone
from decimal import Decimal

import pytest

from member_service.app.models.ids import MemberId, ReservationId, TransactionId
from member_service.app.models.member import CREDIT_MAX, Member
from member_service.app.models.reservation import Reservation
from member_service.app.models.transaction import Transaction
from member_service.app.services.balance import (
    BalanceUpdate,
    compute_credit,
    rebuild_with_transactions,
    recompute_balances,
)


_NOW = datetime(2026, 10, 18, 9, 30, tzinfo=timezone.utc)


def _txn(transaction_id: str, billing: str) -> Transaction:
    return Transaction(
        id=TransactionId(transaction_id), billing=Decimal(billing), timestamp=_NOW
    )


def _build_member(
    *, credit: int, point: int, transactions: tuple[Transaction, ...]
) -> Member:
    return Member(
        id=MemberId("10001"),
        name="Alex Yeoh",
        phone="87438807",
        email="alex@example.com",
        address="Blk 30 Geylang Street 29",
        timestamp=_NOW,
        credit=credit,
        point=point,
        transactions=transactions,
        reservations=(
            Reservation(
                id=ReservationId("100001"),
                date_time=datetime(2026, 12, 24, 19, 0),
                remark="window seat",
                timestamp=_NOW,
            ),
        ),
        tags=frozenset({"friends"}),
    )


def test_compute_credit_truncates_each_billing_before_summing() -> None:
    transactions = [_txn("100001", "10.99"), _txn("100002", "20.50")]

    assert compute_credit(transactions) == 30


def test_compute_credit_is_capped() -> None:
    transactions = [_txn("100001", "99999.99"), _txn("100002", "5.00")]

    assert compute_credit(transactions) == CREDIT_MAX
    assert compute_credit(transactions, credit_max=1000) == 1000


def test_compute_credit_of_empty_history_is_zero() -> None:
    assert compute_credit([]) == 0


def test_delete_transaction_recomputes_credit_and_point() -> None:
    fifty = _txn("100001", "50")
    seventy = _txn("100002", "70")
    member = _build_member(credit=120, point=30, transactions=(fifty, seventy))

    rebuilt = rebuild_with_transactions(member, (fifty,), credit_max=1000)

    assert rebuilt.credit == 50
    assert rebuilt.point == -40
    assert rebuilt.transactions == (fifty,)


def test_delete_transaction_below_cap_uses_capped_credit_delta() -> None:
    transactions = (
        _txn("100001", "700"),
        _txn("100002", "200"),
        _txn("100003", "300"),
    )
    # 실제 합계는 1200 이지만 크레딧은 상한 1000 에 묶여 있다
    member = _build_member(credit=1000, point=1000, transactions=transactions)

    rebuilt = rebuild_with_transactions(member, transactions[:2], credit_max=1000)

    assert rebuilt.credit == 900
    # 삭제된 거래 금액(300)이 아니라 상한 적용 크레딧의 차이(-100)만큼 줄어든다
    assert rebuilt.point == 900


def test_add_transaction_uses_the_same_formula() -> None:
    existing = _txn("100001", "50")
    member = _build_member(credit=50, point=10, transactions=(existing,))

    rebuilt = rebuild_with_transactions(
        member, (existing, _txn("100002", "23.45")), credit_max=1000
    )

    assert rebuilt.credit == 73
    assert rebuilt.point == 33


def test_add_transaction_at_cap_does_not_change_point() -> None:
    existing = _txn("100001", "1500")
    member = _build_member(credit=1000, point=1000, transactions=(existing,))

    rebuilt = rebuild_with_transactions(
        member, (existing, _txn("100002", "80")), credit_max=1000
    )

    assert rebuilt.credit == 1000
    assert rebuilt.point == 1000


def test_rebuild_carries_every_other_field_unchanged() -> None:
    fifty = _txn("100001", "50")
    member = _build_member(credit=50, point=50, transactions=(fifty,))

    rebuilt = rebuild_with_transactions(member, ())

    assert rebuilt is not member
    assert rebuilt.is_same_member(member)
    assert not rebuilt.is_identical_to(member)
    assert rebuilt.name == member.name
    assert rebuilt.phone == member.phone
    assert rebuilt.email == member.email
    assert rebuilt.address == member.address
    assert rebuilt.timestamp == member.timestamp
    assert rebuilt.reservations == member.reservations
    assert rebuilt.tags == member.tags


@pytest.mark.parametrize(
    ("credit", "point", "before", "after"),
    [
        (120, 30, ("50", "70"), ("50",)),
        (0, 0, (), ("0.99",)),
        (1000, -5, ("999.99", "600"), ("999.99",)),
        (1000, 1000, ("400", "400", "400"), ("400", "400", "400", "1")),
        (17, 3, ("17.80",), ()),
    ],
)
def test_point_delta_always_matches_credit_delta(
    credit: int, point: int, before: tuple[str, ...], after: tuple[str, ...]
) -> None:
    old_transactions = [_txn(f"1000{i:02d}", b) for i, b in enumerate(before, 1)]
    new_transactions = [_txn(f"1001{i:02d}", b) for i, b in enumerate(after, 1)]
    assert compute_credit(old_transactions, credit_max=1000) == credit

    update = recompute_balances(credit, point, new_transactions, credit_max=1000)

    assert isinstance(update, BalanceUpdate)
    assert update.credit == compute_credit(new_transactions, credit_max=1000)
    assert update.point - point == update.credit - credit
