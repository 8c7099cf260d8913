"""커맨드 패키지."""

from .base import Command, CommandResult
from .member_commands import (
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
from .reservation_commands import AddReservationCommand, DeleteReservationCommand
from .transaction_commands import (
    AddTransactionCommand,
    DeleteTransactionCommand,
    EditTransactionCommand,
)

__all__ = [
    "Command",
    "CommandResult",
    "AddMemberCommand",
    "EditMemberCommand",
    "DeleteMemberByIndexCommand",
    "DeleteMemberByIdCommand",
    "RedeemPointsCommand",
    "FindMemberCommand",
    "ListMembersCommand",
    "SortMembersCommand",
    "ClearCommand",
    "AddTransactionCommand",
    "EditTransactionCommand",
    "DeleteTransactionCommand",
    "AddReservationCommand",
    "DeleteReservationCommand",
]
