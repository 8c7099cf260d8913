"""예약 커맨드. 예약은 잔액에 영향을 주지 않는다."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime

from common.types.datetime import utc_now

from ..exceptions import InvalidReservationIdError
from ..models.ids import MemberId, ReservationId
from ..models.member import Member
from ..models.reservation import Reservation
from ..parser.syntax import (
    PREFIX_DATE_TIME,
    PREFIX_ID,
    PREFIX_REMARK,
    PREFIX_RESERVATION,
)
from ..services.ledger import LedgerModel
from .base import Command, CommandResult, resolve_displayed_member


@dataclass(frozen=True)
class AddReservationCommand(Command):
    COMMAND_WORD = "add"
    MESSAGE_USAGE = (
        f"{COMMAND_WORD}: Adds a reservation to the member identified by member ID.\n"
        f"Parameters: {PREFIX_RESERVATION} {PREFIX_DATE_TIME}YYYY-MM-DD HH:MM "
        f"{PREFIX_REMARK}REMARK {PREFIX_ID}MEMBER_ID\n"
        f"Example: {COMMAND_WORD} {PREFIX_RESERVATION} {PREFIX_DATE_TIME}2026-12-24 19:00 "
        f"{PREFIX_REMARK}2 adults {PREFIX_ID}10001"
    )
    MESSAGE_SUCCESS = "New reservation added: {}"

    member_id: MemberId
    date_time: datetime
    remark: str

    def execute(self, model: LedgerModel) -> CommandResult:
        target = resolve_displayed_member(model, self.member_id)
        reservation = Reservation(
            id=model.next_reservation_id(),
            date_time=self.date_time,
            remark=self.remark,
            timestamp=utc_now(),
        )
        edited = _with_reservations(target, (*target.reservations, reservation))
        model.set_member(target, edited)
        model.show_all_members()
        return CommandResult(self.MESSAGE_SUCCESS.format(edited))


@dataclass(frozen=True)
class DeleteReservationCommand(Command):
    COMMAND_WORD = "delete"
    MESSAGE_USAGE = (
        f"{COMMAND_WORD}: Deletes the reservation identified by the member ID and "
        "reservation ID.\n"
        f"Parameters: {PREFIX_RESERVATION} {PREFIX_ID}MEMBER_ID+RESERVATION_ID\n"
        f"Example: {COMMAND_WORD} {PREFIX_RESERVATION} {PREFIX_ID}10001100001"
    )
    MESSAGE_SUCCESS = "Deleted Reservation: {}"

    member_id: MemberId
    reservation_id: ReservationId

    def execute(self, model: LedgerModel) -> CommandResult:
        target = resolve_displayed_member(model, self.member_id)
        to_delete = target.find_reservation(self.reservation_id)
        if to_delete is None:
            raise InvalidReservationIdError()

        edited = _with_reservations(
            target, tuple(r for r in target.reservations if r is not to_delete)
        )
        model.set_member(target, edited)
        model.show_all_members()
        return CommandResult(self.MESSAGE_SUCCESS.format(edited))


def _with_reservations(member: Member, reservations: tuple[Reservation, ...]) -> Member:
    return Member(
        id=member.id,
        name=member.name,
        phone=member.phone,
        email=member.email,
        address=member.address,
        timestamp=member.timestamp,
        credit=member.credit,
        point=member.point,
        transactions=member.transactions,
        reservations=reservations,
        tags=member.tags,
    )
