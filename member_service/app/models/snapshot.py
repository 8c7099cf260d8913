from __future__ import annotations

from pydantic import BaseModel, Field

from .ids import IdSequence
from .member import Member


class LedgerSnapshot(BaseModel):
    """저장/복원 단위. 회원 목록과 ID 발급 상태를 함께 담는다."""

    members: list[Member] = Field(default_factory=list)
    sequence: IdSequence = Field(default_factory=IdSequence)
