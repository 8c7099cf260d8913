"""회원 레지스트리 변경 알림 정의."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable

from .models.member import Member


class RegistryChangeType:
    """레지스트리 변경 타입 상수."""

    ADDED = "added"
    REPLACED = "replaced"
    REMOVED = "removed"
    RESET = "reset"


@dataclass(frozen=True, slots=True)
class RegistryChange:
    """레지스트리 변경이 성공한 뒤에만 발행된다.

    - ADDED / REMOVED: member 가 대상 회원
    - REPLACED: previous 가 교체 전, member 가 교체 후 회원
    - RESET: 목록 전체 교체 (member / previous 없음)
    """

    type: str
    member: Member | None = None
    previous: Member | None = None


RegistryListener = Callable[[RegistryChange], None]
