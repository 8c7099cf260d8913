"""회원 도메인 모델.

회원은 값 객체로 다룬다. 거래 삭제, 태그 변경 등 모든 수정은 같은 ID 를 가진
새 Member 를 만들어 레지스트리에서 통째로 교체하는 방식으로 이뤄진다.

- is_same_member: 같은 회원인지 (ID 만 비교)
- is_identical_to: 완전히 같은 레코드인지 (모든 필드 비교)
"""

from __future__ import annotations

from typing import Annotated

from pydantic import BaseModel, ConfigDict, Field

from common.types.datetime import UtcDateTime

from .ids import MemberId
from .reservation import Reservation
from .transaction import Transaction


# 적립 크레딧 상한. 포인트에는 상한이 없다.
CREDIT_MAX = 99999

Name = Annotated[str, Field(pattern=r"^[A-Za-z0-9][A-Za-z0-9 ]*$", max_length=100)]
Phone = Annotated[str, Field(pattern=r"^\d{3,15}$")]
Email = Annotated[
    str, Field(pattern=r"^[A-Za-z0-9+_.\-]+@[A-Za-z0-9\-]+(\.[A-Za-z0-9\-]+)*$")
]
Address = Annotated[str, Field(min_length=1, pattern=r"\S")]
Tag = Annotated[str, Field(pattern=r"^[A-Za-z0-9]+$")]
Credit = Annotated[int, Field(ge=0, le=CREDIT_MAX)]


class Member(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: MemberId
    name: Name
    phone: Phone
    email: Email
    address: Address
    timestamp: UtcDateTime
    credit: Credit = 0
    point: int = 0
    transactions: tuple[Transaction, ...] = ()
    reservations: tuple[Reservation, ...] = ()
    tags: frozenset[Tag] = frozenset()

    def is_same_member(self, other: Member | None) -> bool:
        """ID 가 같으면 같은 회원으로 본다. 중복 검사는 항상 이 비교를 쓴다."""
        if other is self:
            return True
        return other is not None and other.id == self.id

    def is_identical_to(self, other: Member | None) -> bool:
        """모든 필드가 같은지 비교한다. 레지스트리의 교체/삭제 대상 탐색에 쓴다."""
        if other is self:
            return True
        return other is not None and self == other

    def find_transaction(self, transaction_id) -> Transaction | None:
        return next((t for t in self.transactions if t.id == transaction_id), None)

    def find_reservation(self, reservation_id) -> Reservation | None:
        return next((r for r in self.reservations if r.id == reservation_id), None)

    def __str__(self) -> str:
        tags = ", ".join(sorted(self.tags))
        return (
            f"Id: {self.id}; Name: {self.name}; Phone: {self.phone}; "
            f"Email: {self.email}; Address: {self.address}; "
            f"Timestamp: {self.timestamp:%Y-%m-%d %H:%M}; "
            f"Credit: {self.credit}; Point: {self.point}; Tags: [{tags}]"
        )


class MemberDetails(BaseModel):
    """add 명령어로 입력받는 회원 정보. ID, 잔액, 생성 시각은 등록 시점에 정해진다."""

    model_config = ConfigDict(frozen=True)

    name: Name
    phone: Phone
    email: Email
    address: Address
    tags: frozenset[Tag] = frozenset()


class MemberEdit(BaseModel):
    """edit 명령어로 바꿀 필드. None 인 필드는 기존 값을 유지한다."""

    model_config = ConfigDict(frozen=True)

    name: Name | None = None
    phone: Phone | None = None
    email: Email | None = None
    address: Address | None = None
    tags: frozenset[Tag] | None = None

    def is_any_field_edited(self) -> bool:
        return any(
            value is not None
            for value in (self.name, self.phone, self.email, self.address, self.tags)
        )
