"""예약 도메인 모델.

잔액 계산과는 무관하며, 회원 레코드를 다시 만들 때 그대로 옮겨진다.
"""

from __future__ import annotations

from datetime import datetime
from typing import Annotated

from pydantic import BaseModel, ConfigDict, Field

from common.types.datetime import UtcDateTime

from .ids import ReservationId


RESERVATION_DATE_TIME_FORMAT = "%Y-%m-%d %H:%M"


class Reservation(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: ReservationId
    date_time: datetime
    remark: Annotated[str, Field(min_length=1, pattern=r"\S")]
    timestamp: UtcDateTime

    def __str__(self) -> str:
        return (
            f"Id: {self.id}; DateTime: {self.date_time:{RESERVATION_DATE_TIME_FORMAT}}; "
            f"Remark: {self.remark}"
        )
