"""크레딧/포인트 재계산.

거래 목록이 바뀔 때(추가/수정/삭제 모두) 같은 공식을 쓴다.

- credit = min(sum(소수점 이하를 버린 거래 금액), CREDIT_MAX)
- point  = 이전 point + (새 credit - 이전 credit)

포인트 증감은 실제 거래 금액이 아니라 상한이 적용된 credit 의 차이로 계산한다.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass

from ..models.member import CREDIT_MAX, Member
from ..models.transaction import Transaction


@dataclass(frozen=True, slots=True)
class BalanceUpdate:
    credit: int
    point: int


def compute_credit(
    transactions: Iterable[Transaction], credit_max: int = CREDIT_MAX
) -> int:
    total = sum(t.truncated_billing() for t in transactions)
    return min(total, credit_max)


def recompute_balances(
    credit: int,
    point: int,
    transactions: Iterable[Transaction],
    credit_max: int = CREDIT_MAX,
) -> BalanceUpdate:
    new_credit = compute_credit(transactions, credit_max)
    return BalanceUpdate(credit=new_credit, point=point + (new_credit - credit))


def rebuild_with_transactions(
    member: Member,
    transactions: Iterable[Transaction],
    credit_max: int = CREDIT_MAX,
) -> Member:
    """거래 목록을 바꾼 새 Member 를 만든다. 나머지 필드는 그대로 옮긴다."""
    updated_transactions = tuple(transactions)
    balance = recompute_balances(
        member.credit, member.point, updated_transactions, credit_max
    )
    return Member(
        id=member.id,
        name=member.name,
        phone=member.phone,
        email=member.email,
        address=member.address,
        timestamp=member.timestamp,
        credit=balance.credit,
        point=balance.point,
        transactions=updated_transactions,
        reservations=member.reservations,
        tags=member.tags,
    )
