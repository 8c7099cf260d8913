"""회원 저장 파일(JSON) 도큐먼트.

도메인 모델과 저장 형식을 분리해 두기 위한 pydantic 모델이다. 파일에서 읽을 때는
도큐먼트로 먼저 파싱한 뒤 to_domain 에서 도메인 제약을 다시 검증한다.
"""

from __future__ import annotations

from datetime import datetime
from decimal import Decimal

from pydantic import BaseModel, Field

from common.types.datetime import UtcDateTime

from ...models.ids import IdSequence, MemberId, ReservationId, TransactionId
from ...models.member import Member
from ...models.reservation import RESERVATION_DATE_TIME_FORMAT, Reservation
from ...models.snapshot import LedgerSnapshot
from ...models.transaction import Transaction


class TransactionDocument(BaseModel):
    id: str
    billing: Decimal
    timestamp: UtcDateTime

    @classmethod
    def from_domain(cls, transaction: Transaction) -> "TransactionDocument":
        return cls(
            id=str(transaction.id),
            billing=transaction.billing,
            timestamp=transaction.timestamp,
        )

    def to_domain(self) -> Transaction:
        return Transaction(
            id=TransactionId(self.id),
            billing=self.billing,
            timestamp=self.timestamp,
        )


class ReservationDocument(BaseModel):
    id: str
    date_time: str  # YYYY-MM-DD HH:MM
    remark: str
    timestamp: UtcDateTime

    @classmethod
    def from_domain(cls, reservation: Reservation) -> "ReservationDocument":
        return cls(
            id=str(reservation.id),
            date_time=reservation.date_time.strftime(RESERVATION_DATE_TIME_FORMAT),
            remark=reservation.remark,
            timestamp=reservation.timestamp,
        )

    def to_domain(self) -> Reservation:
        return Reservation(
            id=ReservationId(self.id),
            date_time=datetime.strptime(self.date_time, RESERVATION_DATE_TIME_FORMAT),
            remark=self.remark,
            timestamp=self.timestamp,
        )


class MemberDocument(BaseModel):
    id: str
    name: str
    phone: str
    email: str
    address: str
    timestamp: UtcDateTime
    credit: int
    point: int
    transactions: list[TransactionDocument] = Field(default_factory=list)
    reservations: list[ReservationDocument] = Field(default_factory=list)
    tags: list[str] = Field(default_factory=list)

    @classmethod
    def from_domain(cls, member: Member) -> "MemberDocument":
        return cls(
            id=str(member.id),
            name=member.name,
            phone=member.phone,
            email=member.email,
            address=member.address,
            timestamp=member.timestamp,
            credit=member.credit,
            point=member.point,
            transactions=[TransactionDocument.from_domain(t) for t in member.transactions],
            reservations=[ReservationDocument.from_domain(r) for r in member.reservations],
            tags=sorted(member.tags),
        )

    def to_domain(self) -> Member:
        return Member(
            id=MemberId(self.id),
            name=self.name,
            phone=self.phone,
            email=self.email,
            address=self.address,
            timestamp=self.timestamp,
            credit=self.credit,
            point=self.point,
            transactions=tuple(t.to_domain() for t in self.transactions),
            reservations=tuple(r.to_domain() for r in self.reservations),
            tags=frozenset(self.tags),
        )


class SequenceDocument(BaseModel):
    next_member_id: int
    next_transaction_id: int
    next_reservation_id: int


class LedgerDocument(BaseModel):
    """저장 파일 최상위 구조. sequence 가 없는 파일은 저장된 ID 로부터 다시 계산한다."""

    members: list[MemberDocument] = Field(default_factory=list)
    sequence: SequenceDocument | None = None

    @classmethod
    def from_domain(cls, snapshot: LedgerSnapshot) -> "LedgerDocument":
        return cls(
            members=[MemberDocument.from_domain(m) for m in snapshot.members],
            sequence=SequenceDocument(**snapshot.sequence.model_dump()),
        )

    def to_domain(self) -> LedgerSnapshot:
        members = [m.to_domain() for m in self.members]
        sequence = (
            IdSequence(**self.sequence.model_dump())
            if self.sequence is not None
            else IdSequence()
        )
        return LedgerSnapshot(members=members, sequence=sequence)
