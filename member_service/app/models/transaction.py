"""거래(구매) 도메인 모델."""

from __future__ import annotations

import math
from decimal import Decimal
from typing import Annotated

from pydantic import BaseModel, ConfigDict, Field

from common.types.datetime import UtcDateTime

from .ids import TransactionId


BILLING_MAX = Decimal("99999.99")

Billing = Annotated[
    Decimal, Field(ge=0, le=BILLING_MAX, max_digits=7, decimal_places=2)
]


class Transaction(BaseModel):
    """회원 한 명에게만 속하는 구매 기록. 생성 후에는 바뀌지 않는다."""

    model_config = ConfigDict(frozen=True)

    id: TransactionId
    billing: Billing
    timestamp: UtcDateTime

    def truncated_billing(self) -> int:
        # 잔액 계산에는 소수점 이하를 버린 금액만 반영한다.
        return math.trunc(self.billing)

    def __str__(self) -> str:
        return (
            f"Id: {self.id}; Billing: {self.billing:.2f}; "
            f"Timestamp: {self.timestamp:%Y-%m-%d %H:%M}"
        )
