from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel

from common.types.datetime import UtcDateTime

from ...models.member import Member
from ...models.reservation import Reservation
from ...models.transaction import Transaction


class TransactionResponse(BaseModel):
    id: str
    billing: str
    timestamp: UtcDateTime

    @classmethod
    def from_domain(cls, transaction: Transaction) -> "TransactionResponse":
        return cls(
            id=str(transaction.id),
            billing=f"{transaction.billing:.2f}",
            timestamp=transaction.timestamp,
        )


class ReservationResponse(BaseModel):
    id: str
    date_time: datetime
    remark: str
    timestamp: UtcDateTime

    @classmethod
    def from_domain(cls, reservation: Reservation) -> "ReservationResponse":
        return cls(
            id=str(reservation.id),
            date_time=reservation.date_time,
            remark=reservation.remark,
            timestamp=reservation.timestamp,
        )


class MemberResponse(BaseModel):
    """회원 목록 카드에 보여줄 요약 정보."""

    id: str
    name: str
    phone: str
    email: str
    address: str
    credit: int
    point: int
    tags: list[str]
    timestamp: UtcDateTime

    @classmethod
    def from_domain(cls, member: Member) -> "MemberResponse":
        return cls(
            id=str(member.id),
            name=member.name,
            phone=member.phone,
            email=member.email,
            address=member.address,
            credit=member.credit,
            point=member.point,
            tags=sorted(member.tags),
            timestamp=member.timestamp,
        )


class MemberDetailResponse(MemberResponse):
    """회원 상세 (거래/예약 목록 포함)."""

    transactions: list[TransactionResponse]
    reservations: list[ReservationResponse]

    @classmethod
    def from_domain(cls, member: Member) -> "MemberDetailResponse":
        summary = MemberResponse.from_domain(member)
        return cls(
            **summary.model_dump(),
            transactions=[TransactionResponse.from_domain(t) for t in member.transactions],
            reservations=[ReservationResponse.from_domain(r) for r in member.reservations],
        )


class MemberListResponse(BaseModel):
    """현재 화면 목록(필터/정렬 적용)의 한 페이지."""

    items: list[MemberResponse]
    total: int
    page: int
    page_size: int
