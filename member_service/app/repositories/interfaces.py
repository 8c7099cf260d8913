from __future__ import annotations

from collections.abc import Iterable, Iterator
from typing import Protocol

from ..events import RegistryListener
from ..models.ids import MemberId
from ..models.member import Member
from ..models.predicates import MemberPredicate
from ..models.snapshot import LedgerSnapshot


class MemberRegistryInterface(Protocol):
    """MemberRegistry 가 따라야 할 최소한의 계약.

    Service / Command 레이어는 이 인터페이스에만 의존한다.
    """

    def __iter__(self) -> Iterator[Member]:  # pragma: no cover - Protocol
        ...

    def __len__(self) -> int:  # pragma: no cover - Protocol
        ...

    def as_list(self) -> list[Member]:  # pragma: no cover - Protocol
        ...

    def get_by_id(self, member_id: MemberId) -> Member:  # pragma: no cover - Protocol
        ...

    def contains(
        self, candidate: Member, predicate: MemberPredicate | None = None
    ) -> bool:  # pragma: no cover - Protocol
        ...

    def add(self, member: Member) -> None:  # pragma: no cover - Protocol
        ...

    def set_member(
        self, target: Member, replacement: Member
    ) -> None:  # pragma: no cover - Protocol
        ...

    def remove(self, member: Member) -> None:  # pragma: no cover - Protocol
        ...

    def set_members(
        self, members: Iterable[Member]
    ) -> None:  # pragma: no cover - Protocol
        ...

    def add_listener(
        self, listener: RegistryListener
    ) -> None:  # pragma: no cover - Protocol
        ...


class MemberStorageInterface(Protocol):
    """회원 저장소(저장 파일)가 따라야 할 최소한의 계약.

    - 처음 실행이라 저장된 데이터가 없으면 load 는 None 을 반환한다.
    - 저장된 데이터를 도메인 값으로 복원할 수 없으면 DataFormatError 를 발생시킨다.
    """

    def load(self) -> LedgerSnapshot | None:  # pragma: no cover - Protocol
        ...

    def save(self, snapshot: LedgerSnapshot) -> None:  # pragma: no cover - Protocol
        ...
