"""커맨드가 다루는 모델.

레지스트리, 화면 목록(MemberListView), ID 발급 상태를 한데 묶는다.
커맨드는 회원 필드를 직접 바꾸지 않고 항상 이 모델을 통해 회원을 통째로 교체한다.
"""

from __future__ import annotations

from ..events import RegistryListener
from ..models.ids import IdSequence, MemberId, ReservationId, TransactionId
from ..models.member import Member
from ..models.predicates import MemberPredicate
from ..models.snapshot import LedgerSnapshot
from ..repositories.interfaces import MemberRegistryInterface
from ..repositories.member_registry import MemberRegistry
from .member_view import MemberListView, SortOrder


class LedgerModel:
    def __init__(
        self,
        registry: MemberRegistryInterface | None = None,
        sequence: IdSequence | None = None,
    ) -> None:
        self._registry = registry if registry is not None else MemberRegistry()
        self._sequence = sequence if sequence is not None else IdSequence()
        self._view = MemberListView(self._registry)

    @classmethod
    def from_snapshot(cls, snapshot: LedgerSnapshot) -> "LedgerModel":
        return cls(
            registry=MemberRegistry(snapshot.members),
            sequence=snapshot.sequence.model_copy(),
        )

    def to_snapshot(self) -> LedgerSnapshot:
        return LedgerSnapshot(
            members=self._registry.as_list(),
            sequence=self._sequence.model_copy(),
        )

    @property
    def registry(self) -> MemberRegistryInterface:
        return self._registry

    @property
    def sequence(self) -> IdSequence:
        return self._sequence

    # -------- Registry --------

    def has_member(self, member: Member) -> bool:
        return self._registry.contains(member)

    def get_member_by_id(self, member_id: MemberId) -> Member:
        return self._registry.get_by_id(member_id)

    def add_member(self, member: Member) -> None:
        self._registry.add(member)

    def set_member(self, target: Member, edited: Member) -> None:
        self._registry.set_member(target, edited)

    def delete_member(self, target: Member) -> None:
        self._registry.remove(target)

    def clear_members(self) -> None:
        self._registry.set_members([])

    def add_registry_listener(self, listener: RegistryListener) -> None:
        self._registry.add_listener(listener)

    # -------- Displayed list --------

    def get_displayed_members(self) -> list[Member]:
        return self._view.members()

    def find_displayed_member(self, member_id: MemberId) -> Member | None:
        return next(
            (m for m in self._view.members() if m.id == member_id), None
        )

    def update_member_filter(self, predicate: MemberPredicate) -> None:
        self._view.update_filter(predicate)

    def sort_members_by_credit(self, order: SortOrder | None) -> None:
        self._view.sort_by_credit(order)

    def show_all_members(self) -> None:
        self._view.reset()

    # -------- Id allocation --------

    def next_member_id(self) -> MemberId:
        return self._sequence.allocate_member_id()

    def next_transaction_id(self) -> TransactionId:
        return self._sequence.allocate_transaction_id()

    def next_reservation_id(self) -> ReservationId:
        return self._sequence.allocate_reservation_id()
