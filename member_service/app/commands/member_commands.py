"""회원 단위 커맨드 (등록/수정/삭제/포인트 사용/검색/목록/정렬/초기화)."""

from __future__ import annotations

from dataclasses import dataclass

from common.types.datetime import utc_now

from ..exceptions import (
    DuplicateMemberCommandError,
    InsufficientPointsError,
    InvalidIndexError,
)
from ..models.ids import MemberId
from ..models.index import Index
from ..models.member import Member, MemberDetails, MemberEdit
from ..models.predicates import MemberPredicate
from ..parser.syntax import (
    PREFIX_ADDRESS,
    PREFIX_ASC,
    PREFIX_CREDIT,
    PREFIX_DESC,
    PREFIX_EMAIL,
    PREFIX_ID,
    PREFIX_INDEX,
    PREFIX_MEMBER,
    PREFIX_NAME,
    PREFIX_PHONE,
    PREFIX_REDEEM,
    PREFIX_TAG,
)
from ..services.ledger import LedgerModel
from ..services.member_view import SortOrder
from .base import Command, CommandResult, resolve_displayed_member


@dataclass(frozen=True)
class AddMemberCommand(Command):
    COMMAND_WORD = "add"
    MESSAGE_USAGE = (
        f"{COMMAND_WORD}: Adds a member.\n"
        f"Parameters: {PREFIX_MEMBER} {PREFIX_NAME}NAME {PREFIX_PHONE}PHONE "
        f"{PREFIX_EMAIL}EMAIL {PREFIX_ADDRESS}ADDRESS [{PREFIX_TAG}TAG]...\n"
        f"Example: {COMMAND_WORD} {PREFIX_MEMBER} {PREFIX_NAME}John Doe "
        f"{PREFIX_PHONE}98765432 {PREFIX_EMAIL}johnd@example.com "
        f"{PREFIX_ADDRESS}311, Clementi Ave 2, #02-25 {PREFIX_TAG}friends"
    )
    MESSAGE_SUCCESS = "New member added: {}"

    details: MemberDetails

    def execute(self, model: LedgerModel) -> CommandResult:
        member = Member(
            id=model.next_member_id(),
            name=self.details.name,
            phone=self.details.phone,
            email=self.details.email,
            address=self.details.address,
            timestamp=utc_now(),
            tags=self.details.tags,
        )
        if model.has_member(member):
            raise DuplicateMemberCommandError()

        model.add_member(member)
        model.show_all_members()
        return CommandResult(self.MESSAGE_SUCCESS.format(member))


@dataclass(frozen=True)
class EditMemberCommand(Command):
    COMMAND_WORD = "edit"
    MESSAGE_USAGE = (
        f"{COMMAND_WORD}: Edits the member identified by the displayed index or member ID. "
        "Existing values will be overwritten by the input values.\n"
        f"Parameters: {PREFIX_MEMBER} ({PREFIX_INDEX}INDEX | {PREFIX_ID}ID) "
        f"[{PREFIX_NAME}NAME] [{PREFIX_PHONE}PHONE] [{PREFIX_EMAIL}EMAIL] "
        f"[{PREFIX_ADDRESS}ADDRESS] [{PREFIX_TAG}TAG]...\n"
        f"Example: {COMMAND_WORD} {PREFIX_MEMBER} {PREFIX_ID}10001 "
        f"{PREFIX_PHONE}91234567 {PREFIX_EMAIL}johndoe@example.com"
    )
    MESSAGE_SUCCESS = "Edited Member: {}"

    edit: MemberEdit
    index: Index | None = None
    member_id: MemberId | None = None

    def __post_init__(self) -> None:
        if (self.index is None) == (self.member_id is None):
            raise ValueError("exactly one of index or member_id must be given")

    def execute(self, model: LedgerModel) -> CommandResult:
        if self.index is not None:
            target = _resolve_displayed_index(model, self.index)
        else:
            target = resolve_displayed_member(model, self.member_id)

        edited = Member(
            id=target.id,
            name=self.edit.name if self.edit.name is not None else target.name,
            phone=self.edit.phone if self.edit.phone is not None else target.phone,
            email=self.edit.email if self.edit.email is not None else target.email,
            address=(
                self.edit.address if self.edit.address is not None else target.address
            ),
            timestamp=target.timestamp,
            credit=target.credit,
            point=target.point,
            transactions=target.transactions,
            reservations=target.reservations,
            tags=self.edit.tags if self.edit.tags is not None else target.tags,
        )
        model.set_member(target, edited)
        model.show_all_members()
        return CommandResult(self.MESSAGE_SUCCESS.format(edited))


@dataclass(frozen=True)
class DeleteMemberByIndexCommand(Command):
    COMMAND_WORD = "delete"
    MESSAGE_USAGE = (
        f"{COMMAND_WORD}: Deletes the member identified by the index number used in "
        "the displayed member list or by member ID.\n"
        f"Parameters: {PREFIX_MEMBER} ({PREFIX_INDEX}INDEX | {PREFIX_ID}ID) "
        "(INDEX must be a positive integer)\n"
        f"Example: {COMMAND_WORD} {PREFIX_MEMBER} {PREFIX_INDEX}1\n"
        f"Example: {COMMAND_WORD} {PREFIX_MEMBER} {PREFIX_ID}10001"
    )
    MESSAGE_SUCCESS = "Deleted Member: {}"

    index: Index

    def execute(self, model: LedgerModel) -> CommandResult:
        target = _resolve_displayed_index(model, self.index)
        model.delete_member(target)
        return CommandResult(self.MESSAGE_SUCCESS.format(target))


@dataclass(frozen=True)
class DeleteMemberByIdCommand(Command):
    COMMAND_WORD = DeleteMemberByIndexCommand.COMMAND_WORD
    MESSAGE_USAGE = DeleteMemberByIndexCommand.MESSAGE_USAGE
    MESSAGE_SUCCESS = DeleteMemberByIndexCommand.MESSAGE_SUCCESS

    member_id: MemberId

    def execute(self, model: LedgerModel) -> CommandResult:
        target = resolve_displayed_member(model, self.member_id)
        model.delete_member(target)
        return CommandResult(self.MESSAGE_SUCCESS.format(target))


@dataclass(frozen=True)
class RedeemPointsCommand(Command):
    COMMAND_WORD = "redeem"
    MESSAGE_USAGE = (
        f"{COMMAND_WORD}: Redeems points of the member identified by member ID.\n"
        f"Parameters: {PREFIX_REDEEM}POINTS {PREFIX_ID}ID\n"
        f"Example: {COMMAND_WORD} {PREFIX_REDEEM}100 {PREFIX_ID}10001"
    )
    MESSAGE_SUCCESS = "Redeemed {} points: {}"

    member_id: MemberId
    points: int

    def __post_init__(self) -> None:
        if self.points <= 0:
            raise ValueError("points to redeem must be positive")

    def execute(self, model: LedgerModel) -> CommandResult:
        target = resolve_displayed_member(model, self.member_id)
        if self.points > target.point:
            raise InsufficientPointsError(
                f"Member {target.id} has only {target.point} points"
            )

        edited = Member(
            id=target.id,
            name=target.name,
            phone=target.phone,
            email=target.email,
            address=target.address,
            timestamp=target.timestamp,
            credit=target.credit,
            point=target.point - self.points,
            transactions=target.transactions,
            reservations=target.reservations,
            tags=target.tags,
        )
        model.set_member(target, edited)
        model.show_all_members()
        return CommandResult(self.MESSAGE_SUCCESS.format(self.points, edited))


@dataclass(frozen=True)
class FindMemberCommand(Command):
    COMMAND_WORD = "find"
    MESSAGE_USAGE = (
        f"{COMMAND_WORD}: Finds all members whose ID, phone or name contains any of "
        "the given keywords (case-insensitive, whole words).\n"
        f"Parameters: {PREFIX_MEMBER} ({PREFIX_ID} | {PREFIX_PHONE} | {PREFIX_NAME})"
        "KEYWORD [MORE_KEYWORDS]...\n"
        f"Example: {COMMAND_WORD} {PREFIX_MEMBER} {PREFIX_NAME}alice bob"
    )
    MESSAGE_SUCCESS = "{} members listed!"

    predicate: MemberPredicate

    def execute(self, model: LedgerModel) -> CommandResult:
        model.update_member_filter(self.predicate)
        shown = model.get_displayed_members()
        return CommandResult(self.MESSAGE_SUCCESS.format(len(shown)))


@dataclass(frozen=True)
class ListMembersCommand(Command):
    COMMAND_WORD = "list"
    MESSAGE_USAGE = (
        f"{COMMAND_WORD}: Lists all members.\n"
        f"Example: {COMMAND_WORD} {PREFIX_MEMBER}"
    )
    MESSAGE_SUCCESS = "Listed all members"

    def execute(self, model: LedgerModel) -> CommandResult:
        model.show_all_members()
        return CommandResult(self.MESSAGE_SUCCESS)


@dataclass(frozen=True)
class SortMembersCommand(Command):
    COMMAND_WORD = "sort"
    MESSAGE_USAGE = (
        f"{COMMAND_WORD}: Sorts the displayed members by credit.\n"
        f"Parameters: {PREFIX_MEMBER} {PREFIX_CREDIT} ({PREFIX_ASC} | {PREFIX_DESC})\n"
        f"Example: {COMMAND_WORD} {PREFIX_MEMBER} {PREFIX_CREDIT} {PREFIX_DESC}"
    )
    MESSAGE_SUCCESS = "Sorted all members by credit in {} order"

    order: SortOrder

    def execute(self, model: LedgerModel) -> CommandResult:
        model.sort_members_by_credit(self.order)
        label = "ascending" if self.order is SortOrder.ASCENDING else "descending"
        return CommandResult(self.MESSAGE_SUCCESS.format(label))


@dataclass(frozen=True)
class ClearCommand(Command):
    COMMAND_WORD = "clear"
    MESSAGE_USAGE = f"{COMMAND_WORD}: Removes every member.\nExample: {COMMAND_WORD}"
    MESSAGE_SUCCESS = "Member list has been cleared!"

    def execute(self, model: LedgerModel) -> CommandResult:
        model.clear_members()
        model.show_all_members()
        return CommandResult(self.MESSAGE_SUCCESS)


def _resolve_displayed_index(model: LedgerModel, index: Index) -> Member:
    shown = model.get_displayed_members()
    if index.zero_based >= len(shown):
        raise InvalidIndexError()
    return shown[index.zero_based]
