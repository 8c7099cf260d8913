"""거래 커맨드.

거래 목록이 바뀌면 항상 services.balance 의 같은 공식으로 credit/point 를 다시 계산하고,
새 Member 로 통째로 교체한다.
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal

from common.types.datetime import utc_now

from ..exceptions import InvalidTransactionIdError
from ..models.ids import MemberId, TransactionId
from ..models.member import Member
from ..models.transaction import Transaction
from ..parser.syntax import PREFIX_BILLING, PREFIX_ID, PREFIX_TRANSACTION
from ..services.balance import rebuild_with_transactions
from ..services.ledger import LedgerModel
from .base import Command, CommandResult, resolve_displayed_member


@dataclass(frozen=True)
class AddTransactionCommand(Command):
    COMMAND_WORD = "add"
    MESSAGE_USAGE = (
        f"{COMMAND_WORD}: Adds a transaction to the member identified by member ID.\n"
        f"Parameters: {PREFIX_TRANSACTION} {PREFIX_BILLING}BILLING {PREFIX_ID}MEMBER_ID\n"
        f"Example: {COMMAND_WORD} {PREFIX_TRANSACTION} {PREFIX_BILLING}23.45 {PREFIX_ID}10001"
    )
    MESSAGE_SUCCESS = "New transaction added: {}"

    member_id: MemberId
    billing: Decimal

    def execute(self, model: LedgerModel) -> CommandResult:
        target = resolve_displayed_member(model, self.member_id)
        transaction = Transaction(
            id=model.next_transaction_id(),
            billing=self.billing,
            timestamp=utc_now(),
        )
        edited = rebuild_with_transactions(target, (*target.transactions, transaction))
        return _replace(model, target, edited, self.MESSAGE_SUCCESS)


@dataclass(frozen=True)
class EditTransactionCommand(Command):
    COMMAND_WORD = "edit"
    MESSAGE_USAGE = (
        f"{COMMAND_WORD}: Edits the billing of the transaction identified by "
        "member ID and transaction ID.\n"
        f"Parameters: {PREFIX_TRANSACTION} {PREFIX_BILLING}BILLING "
        f"{PREFIX_ID}MEMBER_ID+TRANSACTION_ID\n"
        f"Example: {COMMAND_WORD} {PREFIX_TRANSACTION} {PREFIX_BILLING}10.00 "
        f"{PREFIX_ID}10001100001"
    )
    MESSAGE_SUCCESS = "Edited Transaction: {}"

    member_id: MemberId
    transaction_id: TransactionId
    billing: Decimal

    def execute(self, model: LedgerModel) -> CommandResult:
        target = resolve_displayed_member(model, self.member_id)
        old = _resolve_transaction(target, self.transaction_id)
        updated = Transaction(id=old.id, billing=self.billing, timestamp=old.timestamp)
        transactions = tuple(updated if t is old else t for t in target.transactions)
        edited = rebuild_with_transactions(target, transactions)
        return _replace(model, target, edited, self.MESSAGE_SUCCESS)


@dataclass(frozen=True)
class DeleteTransactionCommand(Command):
    COMMAND_WORD = "delete"
    MESSAGE_USAGE = (
        f"{COMMAND_WORD}: Deletes the transaction identified by the member ID and "
        "transaction ID.\n"
        f"Parameters: {PREFIX_TRANSACTION} {PREFIX_ID}MEMBER_ID+TRANSACTION_ID\n"
        f"Example: {COMMAND_WORD} {PREFIX_TRANSACTION} {PREFIX_ID}10001100001"
    )
    MESSAGE_SUCCESS = "Deleted Transaction: {}"

    member_id: MemberId
    transaction_id: TransactionId

    def execute(self, model: LedgerModel) -> CommandResult:
        target = resolve_displayed_member(model, self.member_id)
        to_delete = _resolve_transaction(target, self.transaction_id)
        transactions = tuple(t for t in target.transactions if t is not to_delete)
        edited = rebuild_with_transactions(target, transactions)
        return _replace(model, target, edited, self.MESSAGE_SUCCESS)


def _resolve_transaction(member: Member, transaction_id: TransactionId) -> Transaction:
    transaction = member.find_transaction(transaction_id)
    if transaction is None:
        raise InvalidTransactionIdError()
    return transaction


def _replace(
    model: LedgerModel, target: Member, edited: Member, message: str
) -> CommandResult:
    model.set_member(target, edited)
    model.show_all_members()
    return CommandResult(message.format(edited))
