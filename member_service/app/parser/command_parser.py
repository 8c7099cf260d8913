"""입력창 텍스트를 Command 로 변환한다.

첫 단어가 명령어 키워드이고, 나머지는 prefix 인자다. 필드 값은 도메인 모델과 같은
pydantic 제약으로 검증하며, 실패하면 ParseError 로 바꿔 사용법과 함께 돌려준다.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from datetime import datetime
from decimal import Decimal

from pydantic import TypeAdapter, ValidationError

from ..commands import (
    AddMemberCommand,
    AddReservationCommand,
    AddTransactionCommand,
    ClearCommand,
    Command,
    DeleteMemberByIdCommand,
    DeleteMemberByIndexCommand,
    DeleteReservationCommand,
    DeleteTransactionCommand,
    EditMemberCommand,
    EditTransactionCommand,
    FindMemberCommand,
    ListMembersCommand,
    RedeemPointsCommand,
    SortMembersCommand,
)
from ..exceptions import ParseError
from ..models.ids import MemberId, ReservationId, TransactionId, split_compound_key
from ..models.index import Index
from ..models.member import MemberDetails, MemberEdit
from ..models.predicates import (
    AllOf,
    IdContainsKeywords,
    MemberPredicate,
    NameContainsKeywords,
    PhoneContainsKeywords,
)
from ..models.reservation import RESERVATION_DATE_TIME_FORMAT
from ..models.transaction import Billing
from ..services.member_view import SortOrder
from .syntax import (
    PREFIX_ADDRESS,
    PREFIX_ASC,
    PREFIX_BILLING,
    PREFIX_CREDIT,
    PREFIX_DATE_TIME,
    PREFIX_DESC,
    PREFIX_EMAIL,
    PREFIX_ID,
    PREFIX_INDEX,
    PREFIX_MEMBER,
    PREFIX_NAME,
    PREFIX_PHONE,
    PREFIX_REDEEM,
    PREFIX_REMARK,
    PREFIX_RESERVATION,
    PREFIX_TAG,
    PREFIX_TRANSACTION,
    Prefix,
)
from .tokenizer import ArgumentMultimap, tokenize


logger = logging.getLogger(__name__)

MESSAGE_UNKNOWN_COMMAND = "Unknown command"
MESSAGE_INVALID_COMMAND_FORMAT = "Invalid command format! \n{}"
MESSAGE_INVALID_INDEX = "Index is not a non-zero unsigned integer."

DELETE_ALIAS = "del"

_BILLING_ADAPTER = TypeAdapter(Billing)

_ADD_PREFIXES = (
    PREFIX_MEMBER,
    PREFIX_TRANSACTION,
    PREFIX_RESERVATION,
    PREFIX_NAME,
    PREFIX_PHONE,
    PREFIX_EMAIL,
    PREFIX_ADDRESS,
    PREFIX_TAG,
    PREFIX_BILLING,
    PREFIX_DATE_TIME,
    PREFIX_REMARK,
    PREFIX_ID,
)
_EDIT_PREFIXES = (
    PREFIX_MEMBER,
    PREFIX_TRANSACTION,
    PREFIX_INDEX,
    PREFIX_ID,
    PREFIX_NAME,
    PREFIX_PHONE,
    PREFIX_EMAIL,
    PREFIX_ADDRESS,
    PREFIX_TAG,
    PREFIX_BILLING,
)
_DELETE_PREFIXES = (
    PREFIX_MEMBER,
    PREFIX_TRANSACTION,
    PREFIX_RESERVATION,
    PREFIX_INDEX,
    PREFIX_ID,
)


class CommandParser:
    def __init__(self) -> None:
        self._parsers: dict[str, Callable[[str], Command]] = {
            "add": self._parse_add,
            "edit": self._parse_edit,
            "delete": self._parse_delete,
            DELETE_ALIAS: self._parse_delete,
            "redeem": self._parse_redeem,
            "find": self._parse_find,
            "list": self._parse_list,
            "sort": self._parse_sort,
            "clear": self._parse_clear,
        }

    def parse(self, user_input: str) -> Command:
        text = user_input.strip()
        if not text:
            raise ParseError(MESSAGE_UNKNOWN_COMMAND)

        command_word, _, arguments = text.partition(" ")
        parse_arguments = self._parsers.get(command_word)
        if parse_arguments is None:
            raise ParseError(MESSAGE_UNKNOWN_COMMAND)

        # prefix 는 공백 뒤에서만 인식되므로 인자 앞에 공백을 하나 붙여 둔다.
        return parse_arguments(" " + arguments)

    # -------- add --------

    def _parse_add(self, args: str) -> Command:
        argmap = tokenize(args, _ADD_PREFIXES)
        if argmap.contains(PREFIX_MEMBER):
            return self._parse_add_member(argmap)
        if argmap.contains(PREFIX_TRANSACTION):
            return self._parse_add_transaction(argmap)
        if argmap.contains(PREFIX_RESERVATION):
            return self._parse_add_reservation(argmap)
        raise _invalid_format(AddMemberCommand.MESSAGE_USAGE)

    def _parse_add_member(self, argmap: ArgumentMultimap) -> Command:
        usage = AddMemberCommand.MESSAGE_USAGE
        _require(argmap, usage, PREFIX_NAME, PREFIX_PHONE, PREFIX_EMAIL, PREFIX_ADDRESS)
        details = _validate(
            MemberDetails,
            usage,
            name=argmap.get_value(PREFIX_NAME),
            phone=argmap.get_value(PREFIX_PHONE),
            email=argmap.get_value(PREFIX_EMAIL),
            address=argmap.get_value(PREFIX_ADDRESS),
            tags=frozenset(argmap.get_all_values(PREFIX_TAG)),
        )
        return AddMemberCommand(details=details)

    def _parse_add_transaction(self, argmap: ArgumentMultimap) -> Command:
        usage = AddTransactionCommand.MESSAGE_USAGE
        _require(argmap, usage, PREFIX_BILLING, PREFIX_ID)
        return AddTransactionCommand(
            member_id=_parse_member_id(argmap.get_value(PREFIX_ID), usage),
            billing=_parse_billing(argmap.get_value(PREFIX_BILLING), usage),
        )

    def _parse_add_reservation(self, argmap: ArgumentMultimap) -> Command:
        usage = AddReservationCommand.MESSAGE_USAGE
        _require(argmap, usage, PREFIX_DATE_TIME, PREFIX_REMARK, PREFIX_ID)
        remark = argmap.get_value(PREFIX_REMARK) or ""
        if not remark:
            raise _invalid_format(usage)
        return AddReservationCommand(
            member_id=_parse_member_id(argmap.get_value(PREFIX_ID), usage),
            date_time=_parse_date_time(argmap.get_value(PREFIX_DATE_TIME), usage),
            remark=remark,
        )

    # -------- edit --------

    def _parse_edit(self, args: str) -> Command:
        argmap = tokenize(args, _EDIT_PREFIXES)
        if argmap.contains(PREFIX_MEMBER):
            return self._parse_edit_member(argmap)
        if argmap.contains(PREFIX_TRANSACTION):
            return self._parse_edit_transaction(argmap)
        raise _invalid_format(EditMemberCommand.MESSAGE_USAGE)

    def _parse_edit_member(self, argmap: ArgumentMultimap) -> Command:
        usage = EditMemberCommand.MESSAGE_USAGE
        if argmap.get_preamble():
            raise _invalid_format(usage)

        fields: dict[str, object] = {}
        for field_name, prefix in (
            ("name", PREFIX_NAME),
            ("phone", PREFIX_PHONE),
            ("email", PREFIX_EMAIL),
            ("address", PREFIX_ADDRESS),
        ):
            if argmap.contains(prefix):
                fields[field_name] = argmap.get_value(prefix)
        if argmap.contains(PREFIX_TAG):
            # "-tag/" 하나만 빈 값으로 주면 태그를 모두 지운다.
            fields["tags"] = frozenset(v for v in argmap.get_all_values(PREFIX_TAG) if v)

        edit = _validate(MemberEdit, usage, **fields)
        if not edit.is_any_field_edited():
            raise ParseError("At least one field to edit must be provided.")

        if argmap.contains(PREFIX_INDEX) == argmap.contains(PREFIX_ID):
            raise _invalid_format(usage)
        if argmap.contains(PREFIX_INDEX):
            return EditMemberCommand(
                edit=edit, index=_parse_index(argmap.get_value(PREFIX_INDEX))
            )
        return EditMemberCommand(
            edit=edit, member_id=_parse_member_id(argmap.get_value(PREFIX_ID), usage)
        )

    def _parse_edit_transaction(self, argmap: ArgumentMultimap) -> Command:
        usage = EditTransactionCommand.MESSAGE_USAGE
        _require(argmap, usage, PREFIX_BILLING, PREFIX_ID)
        member_id, transaction_id = _parse_transaction_key(
            argmap.get_value(PREFIX_ID), usage
        )
        return EditTransactionCommand(
            member_id=member_id,
            transaction_id=transaction_id,
            billing=_parse_billing(argmap.get_value(PREFIX_BILLING), usage),
        )

    # -------- delete --------

    def _parse_delete(self, args: str) -> Command:
        argmap = tokenize(args, _DELETE_PREFIXES)
        if argmap.get_preamble():
            raise _invalid_format(DeleteMemberByIndexCommand.MESSAGE_USAGE)

        if argmap.contains(PREFIX_MEMBER):
            usage = DeleteMemberByIndexCommand.MESSAGE_USAGE
            if argmap.contains(PREFIX_INDEX) == argmap.contains(PREFIX_ID):
                raise _invalid_format(usage)
            if argmap.contains(PREFIX_INDEX):
                return DeleteMemberByIndexCommand(
                    index=_parse_index(argmap.get_value(PREFIX_INDEX))
                )
            return DeleteMemberByIdCommand(
                member_id=_parse_member_id(argmap.get_value(PREFIX_ID), usage)
            )

        if argmap.contains(PREFIX_TRANSACTION):
            usage = DeleteTransactionCommand.MESSAGE_USAGE
            _require(argmap, usage, PREFIX_ID)
            member_id, transaction_id = _parse_transaction_key(
                argmap.get_value(PREFIX_ID), usage
            )
            return DeleteTransactionCommand(
                member_id=member_id, transaction_id=transaction_id
            )

        if argmap.contains(PREFIX_RESERVATION):
            usage = DeleteReservationCommand.MESSAGE_USAGE
            _require(argmap, usage, PREFIX_ID)
            member_part, reservation_part = _split_key(argmap.get_value(PREFIX_ID), usage)
            return DeleteReservationCommand(
                member_id=_parse_member_id(member_part, usage),
                reservation_id=_validate_root(ReservationId, reservation_part, usage),
            )

        raise _invalid_format(DeleteMemberByIndexCommand.MESSAGE_USAGE)

    # -------- others --------

    def _parse_redeem(self, args: str) -> Command:
        usage = RedeemPointsCommand.MESSAGE_USAGE
        argmap = tokenize(args, (PREFIX_REDEEM, PREFIX_ID))
        _require(argmap, usage, PREFIX_REDEEM, PREFIX_ID)
        raw_points = argmap.get_value(PREFIX_REDEEM) or ""
        if not raw_points.isdecimal() or int(raw_points) == 0:
            raise ParseError("Points to redeem must be a positive integer.")
        return RedeemPointsCommand(
            member_id=_parse_member_id(argmap.get_value(PREFIX_ID), usage),
            points=int(raw_points),
        )

    def _parse_find(self, args: str) -> Command:
        usage = FindMemberCommand.MESSAGE_USAGE
        argmap = tokenize(args, (PREFIX_MEMBER, PREFIX_ID, PREFIX_PHONE, PREFIX_NAME))
        if argmap.get_preamble() or not argmap.contains(PREFIX_MEMBER):
            raise _invalid_format(usage)

        predicates: list[MemberPredicate] = []
        for prefix, predicate_type in (
            (PREFIX_ID, IdContainsKeywords),
            (PREFIX_PHONE, PhoneContainsKeywords),
            (PREFIX_NAME, NameContainsKeywords),
        ):
            if not argmap.contains(prefix):
                continue
            keywords = tuple((argmap.get_value(prefix) or "").split())
            if not keywords:
                raise _invalid_format(usage)
            predicates.append(predicate_type(keywords))

        if not predicates:
            raise _invalid_format(usage)
        if len(predicates) == 1:
            return FindMemberCommand(predicate=predicates[0])
        return FindMemberCommand(predicate=AllOf(tuple(predicates)))

    def _parse_list(self, args: str) -> Command:
        argmap = tokenize(args, (PREFIX_MEMBER,))
        if argmap.get_preamble() or not argmap.contains(PREFIX_MEMBER):
            raise _invalid_format(ListMembersCommand.MESSAGE_USAGE)
        return ListMembersCommand()

    def _parse_sort(self, args: str) -> Command:
        usage = SortMembersCommand.MESSAGE_USAGE
        argmap = tokenize(args, (PREFIX_MEMBER, PREFIX_CREDIT, PREFIX_ASC, PREFIX_DESC))
        _require(argmap, usage, PREFIX_MEMBER, PREFIX_CREDIT)
        if argmap.contains(PREFIX_ASC) == argmap.contains(PREFIX_DESC):
            raise _invalid_format(usage)
        order = SortOrder.ASCENDING if argmap.contains(PREFIX_ASC) else SortOrder.DESCENDING
        return SortMembersCommand(order=order)

    def _parse_clear(self, args: str) -> Command:
        if args.strip():
            raise _invalid_format(ClearCommand.MESSAGE_USAGE)
        return ClearCommand()


# -------- helpers --------


def _invalid_format(usage: str) -> ParseError:
    return ParseError(MESSAGE_INVALID_COMMAND_FORMAT.format(usage))


def _require(argmap: ArgumentMultimap, usage: str, *prefixes: Prefix) -> None:
    if argmap.get_preamble() or not all(argmap.contains(p) for p in prefixes):
        raise _invalid_format(usage)


def _describe(exc: ValidationError) -> str:
    messages = []
    for error in exc.errors():
        location = ".".join(str(part) for part in error["loc"])
        messages.append(f"{location}: {error['msg']}" if location else error["msg"])
    return "; ".join(messages)


def _validate(model_type, usage: str, **fields):
    try:
        return model_type(**fields)
    except ValidationError as exc:
        logger.debug("field validation failed: %s", exc)
        raise ParseError(f"{_describe(exc)}\n{usage}") from exc


def _validate_root(id_type, value: str, usage: str):
    try:
        return id_type(value)
    except ValidationError as exc:
        raise ParseError(f"Invalid ID '{value}'\n{usage}") from exc


def _parse_index(value: str | None) -> Index:
    raw = (value or "").strip()
    if not raw.isdecimal() or int(raw) == 0:
        raise ParseError(MESSAGE_INVALID_INDEX)
    return Index.from_one_based(int(raw))


def _parse_member_id(value: str | None, usage: str) -> MemberId:
    return _validate_root(MemberId, (value or "").strip(), usage)


def _split_key(value: str | None, usage: str) -> tuple[str, str]:
    try:
        return split_compound_key((value or "").strip())
    except ValueError as exc:
        raise ParseError(f"{exc}\n{usage}") from exc


def _parse_transaction_key(
    value: str | None, usage: str
) -> tuple[MemberId, TransactionId]:
    member_part, transaction_part = _split_key(value, usage)
    return (
        _parse_member_id(member_part, usage),
        _validate_root(TransactionId, transaction_part, usage),
    )


def _parse_billing(value: str | None, usage: str) -> Decimal:
    try:
        return _BILLING_ADAPTER.validate_python((value or "").strip())
    except ValidationError as exc:
        raise ParseError(f"billing: {_describe(exc)}\n{usage}") from exc


def _parse_date_time(value: str | None, usage: str) -> datetime:
    try:
        return datetime.strptime((value or "").strip(), RESERVATION_DATE_TIME_FORMAT)
    except ValueError as exc:
        raise ParseError(
            f"Date time must be in the format YYYY-MM-DD HH:MM\n{usage}"
        ) from exc
