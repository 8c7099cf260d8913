from __future__ import annotations

from datetime import datetime, timezone

import pytest

from member_service.app.commands import (
    AddMemberCommand,
    ClearCommand,
    DeleteMemberByIdCommand,
    DeleteMemberByIndexCommand,
    EditMemberCommand,
    FindMemberCommand,
    ListMembersCommand,
    RedeemPointsCommand,
    SortMembersCommand,
)
from member_service.app.exceptions import (
    DuplicateMemberCommandError,
    InsufficientPointsError,
    InvalidIndexError,
    InvalidMemberIdError,
)
from member_service.app.models.ids import IdSequence, MemberId
from member_service.app.models.index import Index
from member_service.app.models.member import Member, MemberDetails, MemberEdit
from member_service.app.models.predicates import (
    AnyOf,
    NameContainsKeywords,
    PhoneContainsKeywords,
)
from member_service.app.repositories.member_registry import MemberRegistry
from member_service.app.services.ledger import LedgerModel
from member_service.app.services.member_view import SortOrder


_CREATED_AT = datetime(2026, 10, 18, 9, 30, tzinfo=timezone.utc)


def _build_member(
    member_id: str,
    name: str,
    *,
    phone: str = "87438807",
    credit: int = 0,
    point: int = 0,
) -> Member:
    return Member(
        id=MemberId(member_id),
        name=name,
        phone=phone,
        email="member@example.com",
        address="Blk 30 Geylang Street 29",
        timestamp=_CREATED_AT,
        credit=credit,
        point=point,
    )


ALEX = _build_member("10001", "Alex Yeoh", phone="87438807", credit=0, point=30)
BERNICE = _build_member("10002", "Bernice Yu", phone="99272758", credit=0, point=0)
CHARLOTTE = _build_member("10003", "Charlotte Oliveiro", phone="93210283")


def _build_model(*members: Member) -> LedgerModel:
    return LedgerModel(
        registry=MemberRegistry(members),
        sequence=IdSequence(next_member_id=10004),
    )


def _names(model: LedgerModel) -> list[str]:
    return [m.name for m in model.get_displayed_members()]


# -------- delete by index --------


def test_delete_by_index_removes_second_member_and_keeps_order() -> None:
    model = _build_model(ALEX, BERNICE, CHARLOTTE)
    command = DeleteMemberByIndexCommand(index=Index(1))

    result = command.execute(model)

    assert result.feedback == f"Deleted Member: {BERNICE}"
    assert model.registry.as_list() == [ALEX, CHARLOTTE]

    # 같은 커맨드를 다시 실행하면 이제 1번 위치에 있는 다른 회원이 지워진다
    command.execute(model)
    assert model.registry.as_list() == [ALEX]

    with pytest.raises(InvalidIndexError):
        command.execute(model)
    assert model.registry.as_list() == [ALEX]


def test_delete_by_index_resolves_against_displayed_list() -> None:
    model = _build_model(ALEX, BERNICE, CHARLOTTE)
    model.update_member_filter(NameContainsKeywords(("charlotte",)))

    DeleteMemberByIndexCommand(index=Index(0)).execute(model)

    assert model.registry.as_list() == [ALEX, BERNICE]


def test_delete_by_index_uses_sorted_order() -> None:
    rich = _build_member("10004", "Rich Member", credit=500)
    model = _build_model(ALEX, rich, BERNICE)
    model.sort_members_by_credit(SortOrder.DESCENDING)

    DeleteMemberByIndexCommand(index=Index(0)).execute(model)

    assert model.registry.as_list() == [ALEX, BERNICE]


def test_delete_member_keeps_current_filter() -> None:
    model = _build_model(ALEX, BERNICE, CHARLOTTE)
    model.update_member_filter(NameContainsKeywords(("alex", "bernice")))

    DeleteMemberByIdCommand(member_id=MemberId("10002")).execute(model)

    assert _names(model) == ["Alex Yeoh"]


# -------- delete by id --------


def test_delete_by_id_succeeds_once_then_fails() -> None:
    model = _build_model(ALEX, BERNICE)
    command = DeleteMemberByIdCommand(member_id=MemberId("10001"))

    result = command.execute(model)
    assert result.feedback == f"Deleted Member: {ALEX}"
    assert model.registry.as_list() == [BERNICE]

    with pytest.raises(InvalidMemberIdError) as exc_info:
        command.execute(model)

    assert exc_info.value.message == "The member ID provided is invalid"
    assert model.registry.as_list() == [BERNICE]


def test_delete_by_id_ignores_members_hidden_by_filter() -> None:
    model = _build_model(ALEX, BERNICE)
    model.update_member_filter(NameContainsKeywords(("bernice",)))

    with pytest.raises(InvalidMemberIdError):
        DeleteMemberByIdCommand(member_id=MemberId("10001")).execute(model)

    assert model.registry.as_list() == [ALEX, BERNICE]


# -------- add / edit --------


def test_add_member_allocates_id_and_starts_with_zero_balances() -> None:
    model = _build_model(ALEX)
    model.update_member_filter(NameContainsKeywords(("alex",)))
    details = MemberDetails(
        name="David Li",
        phone="91031282",
        email="lidavid@example.com",
        address="Blk 436 Serangoon Gardens Street 26",
        tags=frozenset({"family"}),
    )

    result = AddMemberCommand(details=details).execute(model)

    added = model.get_member_by_id(MemberId("10004"))
    assert result.feedback == f"New member added: {added}"
    assert added.credit == 0
    assert added.point == 0
    assert added.transactions == ()
    assert added.reservations == ()
    assert added.tags == frozenset({"family"})
    # 필터가 "전체 보기"로 돌아간다
    assert _names(model) == ["Alex Yeoh", "David Li"]


def test_add_member_rejects_existing_identity() -> None:
    model = LedgerModel(registry=MemberRegistry([ALEX]), sequence=IdSequence())
    details = MemberDetails(
        name="Alex Clone",
        phone="87438807",
        email="alex@example.com",
        address="Blk 30",
    )

    with pytest.raises(DuplicateMemberCommandError):
        AddMemberCommand(details=details).execute(model)

    assert model.registry.as_list() == [ALEX]


def test_edit_member_by_index_keeps_balances() -> None:
    alex = _build_member("10001", "Alex Yeoh", credit=120, point=30)
    model = _build_model(alex, BERNICE)

    result = EditMemberCommand(
        edit=MemberEdit(phone="91234567", tags=frozenset({"vip"})), index=Index(0)
    ).execute(model)

    edited = model.get_member_by_id(MemberId("10001"))
    assert result.feedback == f"Edited Member: {edited}"
    assert edited.phone == "91234567"
    assert edited.tags == frozenset({"vip"})
    assert edited.name == "Alex Yeoh"
    assert edited.credit == 120
    assert edited.point == 30
    assert model.registry.as_list()[0] is edited


def test_edit_member_by_unknown_id_fails_without_change() -> None:
    model = _build_model(ALEX)

    with pytest.raises(InvalidMemberIdError):
        EditMemberCommand(
            edit=MemberEdit(name="Nobody"), member_id=MemberId("10009")
        ).execute(model)

    assert model.registry.as_list() == [ALEX]


def test_edit_member_requires_exactly_one_selector() -> None:
    with pytest.raises(ValueError):
        EditMemberCommand(edit=MemberEdit(name="Nobody"))
    with pytest.raises(ValueError):
        EditMemberCommand(
            edit=MemberEdit(name="Nobody"),
            index=Index(0),
            member_id=MemberId("10001"),
        )


# -------- redeem --------


def test_redeem_points_reduces_point_only() -> None:
    alex = _build_member("10001", "Alex Yeoh", credit=120, point=30)
    model = _build_model(alex)

    result = RedeemPointsCommand(member_id=MemberId("10001"), points=10).execute(model)

    edited = model.get_member_by_id(MemberId("10001"))
    assert result.feedback == f"Redeemed 10 points: {edited}"
    assert edited.point == 20
    assert edited.credit == 120


def test_redeem_more_than_balance_fails_without_change() -> None:
    model = _build_model(ALEX)

    with pytest.raises(InsufficientPointsError):
        RedeemPointsCommand(member_id=MemberId("10001"), points=31).execute(model)

    assert model.registry.as_list() == [ALEX]


# -------- find / list / sort / clear --------


def test_find_updates_filter_and_reports_count() -> None:
    model = _build_model(ALEX, BERNICE, CHARLOTTE)
    predicate = AnyOf(
        (NameContainsKeywords(("alex",)), PhoneContainsKeywords(("93210283",)))
    )

    result = FindMemberCommand(predicate=predicate).execute(model)

    assert result.feedback == "2 members listed!"
    assert _names(model) == ["Alex Yeoh", "Charlotte Oliveiro"]


def test_list_resets_filter() -> None:
    model = _build_model(ALEX, BERNICE)
    model.update_member_filter(NameContainsKeywords(("alex",)))

    result = ListMembersCommand().execute(model)

    assert result.feedback == "Listed all members"
    assert _names(model) == ["Alex Yeoh", "Bernice Yu"]


def test_sort_by_credit_orders_displayed_list() -> None:
    low = _build_member("10004", "Low Spender", credit=10)
    high = _build_member("10005", "High Spender", credit=900)
    model = _build_model(ALEX, high, low)

    result = SortMembersCommand(order=SortOrder.DESCENDING).execute(model)

    assert result.feedback == "Sorted all members by credit in descending order"
    assert _names(model) == ["High Spender", "Low Spender", "Alex Yeoh"]

    SortMembersCommand(order=SortOrder.ASCENDING).execute(model)
    assert _names(model) == ["Alex Yeoh", "Low Spender", "High Spender"]
    # 정렬은 화면 목록에만 적용되고 레지스트리 순서는 그대로다
    assert model.registry.as_list() == [ALEX, high, low]


def test_clear_removes_every_member() -> None:
    model = _build_model(ALEX, BERNICE)

    result = ClearCommand().execute(model)

    assert result.feedback == "Member list has been cleared!"
    assert len(model.registry) == 0
    assert model.get_displayed_members() == []
