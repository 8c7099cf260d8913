"""화면에 보이는 회원 목록.

레지스트리를 직접 들고 있지 않고, 필터 조건과 정렬 순서만 보관한 채
요청될 때마다 레지스트리에서 목록을 다시 계산한다.
"""

from __future__ import annotations

from enum import Enum

from ..models.member import Member
from ..models.predicates import SHOW_ALL_MEMBERS, MemberPredicate
from ..repositories.interfaces import MemberRegistryInterface


class SortOrder(str, Enum):
    ASCENDING = "asc"
    DESCENDING = "desc"


class MemberListView:
    def __init__(self, registry: MemberRegistryInterface) -> None:
        self._registry = registry
        self._predicate: MemberPredicate = SHOW_ALL_MEMBERS
        self._credit_order: SortOrder | None = None

    @property
    def predicate(self) -> MemberPredicate:
        return self._predicate

    @property
    def credit_order(self) -> SortOrder | None:
        return self._credit_order

    def members(self) -> list[Member]:
        shown = [m for m in self._registry if self._predicate.matches(m)]
        if self._credit_order is not None:
            # sorted 는 안정 정렬이므로 크레딧이 같으면 등록 순서를 유지한다.
            shown = sorted(
                shown,
                key=lambda m: m.credit,
                reverse=self._credit_order is SortOrder.DESCENDING,
            )
        return shown

    def update_filter(self, predicate: MemberPredicate) -> None:
        self._predicate = predicate

    def sort_by_credit(self, order: SortOrder | None) -> None:
        self._credit_order = order

    def reset(self) -> None:
        """필터만 "전체 회원 보기"로 되돌린다. 정렬 순서는 유지한다."""
        self._predicate = SHOW_ALL_MEMBERS
