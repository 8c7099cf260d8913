"""회원 레지스트리 (인메모리).

중복 없는 회원 목록을 보관하는 단일 진실 공급원이다.

- 추가/교체 시 중복 판단은 Member.is_same_member (ID 비교)를 사용한다.
- 교체/삭제 대상 탐색은 Member.is_identical_to (전체 필드 비교)를 사용한다.
- 모든 연산은 검증을 마친 뒤에만 목록을 바꾸므로, 실패한 호출은 아무것도 바꾸지 않는다.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Iterator

from ..events import RegistryChange, RegistryChangeType, RegistryListener
from ..exceptions import DuplicateMemberError, MemberNotFoundError
from ..models.ids import MemberId
from ..models.member import Member
from ..models.predicates import MemberPredicate
from .interfaces import MemberRegistryInterface


logger = logging.getLogger(__name__)


class MemberRegistry(MemberRegistryInterface):
    def __init__(self, members: Iterable[Member] = ()) -> None:
        self._members: list[Member] = []
        self._listeners: list[RegistryListener] = []
        initial = list(members)
        if initial:
            self.set_members(initial)

    def __iter__(self) -> Iterator[Member]:
        return iter(list(self._members))

    def __len__(self) -> int:
        return len(self._members)

    def as_list(self) -> list[Member]:
        """현재 목록의 사본을 반환한다. 반환값을 수정해도 레지스트리는 바뀌지 않는다."""
        return list(self._members)

    def get_by_id(self, member_id: MemberId) -> Member:
        for member in self._members:
            if member.id == member_id:
                return member
        raise MemberNotFoundError(f"Member {member_id} not found")

    def contains(
        self, candidate: Member, predicate: MemberPredicate | None = None
    ) -> bool:
        """candidate 와 같은 회원(ID 기준)이 있는지 검사한다.

        predicate 가 주어지면 그 조건을 만족하는 회원들 사이에서만 찾는다.
        """
        members: Iterable[Member] = self._members
        if predicate is not None:
            members = (m for m in self._members if predicate.matches(m))
        return any(candidate.is_same_member(m) for m in members)

    def add(self, member: Member) -> None:
        if self.contains(member):
            raise DuplicateMemberError(f"Member {member.id} already exists")
        self._members.append(member)
        self._notify(RegistryChange(type=RegistryChangeType.ADDED, member=member))

    def set_member(self, target: Member, replacement: Member) -> None:
        """target 을 같은 위치에서 replacement 로 교체한다.

        같은 회원(ID)의 수정본으로 교체하는 것은 항상 허용되며,
        다른 회원의 ID 와 겹치는 경우에만 DuplicateMemberError 를 발생시킨다.
        """
        index = self._index_of(target)
        if index == -1:
            raise MemberNotFoundError(f"Member {target.id} not found")

        if not target.is_same_member(replacement) and self.contains(replacement):
            raise DuplicateMemberError(f"Member {replacement.id} already exists")

        self._members[index] = replacement
        self._notify(
            RegistryChange(
                type=RegistryChangeType.REPLACED, member=replacement, previous=target
            )
        )

    def remove(self, member: Member) -> None:
        index = self._index_of(member)
        if index == -1:
            raise MemberNotFoundError(f"Member {member.id} not found")
        del self._members[index]
        self._notify(RegistryChange(type=RegistryChangeType.REMOVED, member=member))

    def set_members(self, members: Iterable[Member]) -> None:
        """목록 전체를 교체한다. 중복이 하나라도 있으면 아무것도 바꾸지 않는다."""
        replacement = list(members)
        if not _members_are_unique(replacement):
            raise DuplicateMemberError()
        self._members = replacement
        self._notify(RegistryChange(type=RegistryChangeType.RESET))

    def add_listener(self, listener: RegistryListener) -> None:
        self._listeners.append(listener)

    def remove_listener(self, listener: RegistryListener) -> None:
        self._listeners.remove(listener)

    def _index_of(self, member: Member) -> int:
        for index, entry in enumerate(self._members):
            if entry.is_identical_to(member):
                return index
        return -1

    def _notify(self, change: RegistryChange) -> None:
        for listener in list(self._listeners):
            listener(change)


def _members_are_unique(members: list[Member]) -> bool:
    for i in range(len(members) - 1):
        for j in range(i + 1, len(members)):
            if members[i].is_same_member(members[j]):
                return False
    return True
