"""회원/거래/예약 식별자 도메인 모델.

- 세 종류의 ID 는 서로 다른 번호 공간을 가지며, 타입이 다르면 값이 같아도 동등하지 않다.
- 거래/예약은 "회원 ID + 거래(예약) ID" 11자리 복합 키로도 지정할 수 있다.
"""

from __future__ import annotations

from typing import Annotated

from pydantic import BaseModel, ConfigDict, Field, RootModel

from ..exceptions import IdSpaceExhaustedError


MEMBER_ID_LENGTH = 5
LEDGER_ID_LENGTH = 6
COMPOUND_KEY_LENGTH = MEMBER_ID_LENGTH + LEDGER_ID_LENGTH

MEMBER_ID_START = 10001
LEDGER_ID_START = 100001


class MemberId(RootModel):
    """5자리 숫자 회원 ID (예: 10001)."""

    model_config = ConfigDict(frozen=True)

    root: Annotated[str, Field(pattern=rf"^\d{{{MEMBER_ID_LENGTH}}}$")]

    def __str__(self) -> str:
        return self.root


class TransactionId(RootModel):
    """6자리 숫자 거래 ID (예: 100001)."""

    model_config = ConfigDict(frozen=True)

    root: Annotated[str, Field(pattern=rf"^\d{{{LEDGER_ID_LENGTH}}}$")]

    def __str__(self) -> str:
        return self.root


class ReservationId(RootModel):
    """6자리 숫자 예약 ID (예: 100001)."""

    model_config = ConfigDict(frozen=True)

    root: Annotated[str, Field(pattern=rf"^\d{{{LEDGER_ID_LENGTH}}}$")]

    def __str__(self) -> str:
        return self.root


def split_compound_key(value: str) -> tuple[str, str]:
    """11자리 복합 키를 (회원 ID, 거래/예약 ID) 문자열로 나눈다.

    형식 검증은 호출 측에서 MemberId / TransactionId 생성으로 처리한다.
    """
    if len(value) != COMPOUND_KEY_LENGTH or not value.isdecimal():
        raise ValueError(
            f"Compound ID must be {COMPOUND_KEY_LENGTH} digits "
            f"(member ID followed by a {LEDGER_ID_LENGTH}-digit ID)"
        )
    return value[:MEMBER_ID_LENGTH], value[MEMBER_ID_LENGTH:]


class IdSequence(BaseModel):
    """다음에 발급할 ID 번호.

    한 번 발급한 번호는 삭제 후에도 다시 쓰지 않도록 저장 파일에 함께 보관한다.
    """

    next_member_id: int = MEMBER_ID_START
    next_transaction_id: int = LEDGER_ID_START
    next_reservation_id: int = LEDGER_ID_START

    def allocate_member_id(self) -> MemberId:
        value = _format_id(self.next_member_id, MEMBER_ID_LENGTH, "member")
        self.next_member_id += 1
        return MemberId(value)

    def allocate_transaction_id(self) -> TransactionId:
        value = _format_id(self.next_transaction_id, LEDGER_ID_LENGTH, "transaction")
        self.next_transaction_id += 1
        return TransactionId(value)

    def allocate_reservation_id(self) -> ReservationId:
        value = _format_id(self.next_reservation_id, LEDGER_ID_LENGTH, "reservation")
        self.next_reservation_id += 1
        return ReservationId(value)


def _format_id(number: int, length: int, kind: str) -> str:
    value = str(number)
    if len(value) != length:
        raise IdSpaceExhaustedError(f"No more {kind} IDs are available")
    return value
