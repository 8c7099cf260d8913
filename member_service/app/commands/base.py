from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import ClassVar

from ..exceptions import InvalidMemberIdError
from ..models.ids import MemberId
from ..models.member import Member
from ..services.ledger import LedgerModel


@dataclass(frozen=True, slots=True)
class CommandResult:
    """커맨드 실행 결과. feedback 은 사용자에게 그대로 보여주는 문자열이다."""

    feedback: str


class Command(ABC):
    """한 번 실행되고 끝나는 커맨드.

    - 생성 시점에 대상(인덱스, ID, 복합 키 등)이 정해진다.
    - execute 는 완전히 성공해 모델을 한 번 바꾸거나, 아무것도 바꾸지 않고 예외를 던진다.
    """

    COMMAND_WORD: ClassVar[str]
    MESSAGE_USAGE: ClassVar[str]

    @abstractmethod
    def execute(self, model: LedgerModel) -> CommandResult:  # pragma: no cover - abstract
        ...


def resolve_displayed_member(model: LedgerModel, member_id: MemberId) -> Member:
    """화면 목록에서 member_id 를 가진 회원을 찾는다. 없으면 InvalidMemberIdError."""
    member = model.find_displayed_member(member_id)
    if member is None:
        raise InvalidMemberIdError()
    return member
