from __future__ import annotations

import pytest

from member_service.app.exceptions import InvalidIndexError, ParseError
from member_service.app.models.ids import MemberId
from member_service.app.models.snapshot import LedgerSnapshot
from member_service.app.repositories.interfaces import MemberStorageInterface
from member_service.app.services.command_service import (
    MESSAGE_SAVE_FAILED,
    CommandService,
)
from member_service.app.services.ledger import LedgerModel


ADD_ALEX = (
    "add -mem/ -n/Alex Yeoh -p/87438807 -e/alexyeoh@example.com "
    "-a/Blk 30 Geylang Street 29 -tag/friends"
)
ADD_BERNICE = (
    "add -mem/ -n/Bernice Yu -p/99272758 -e/berniceyu@example.com "
    "-a/Blk 30 Lorong 3 Serangoon Gardens"
)


class FakeMemberStorage(MemberStorageInterface):
    """저장 호출만 기록하는 가짜 저장소."""

    def __init__(self) -> None:
        self.saved: list[LedgerSnapshot] = []
        self.fail_with: Exception | None = None

    def load(self) -> LedgerSnapshot | None:
        return None

    def save(self, snapshot: LedgerSnapshot) -> None:
        if self.fail_with is not None:
            raise self.fail_with
        self.saved.append(snapshot)


def _build_service() -> tuple[CommandService, FakeMemberStorage]:
    storage = FakeMemberStorage()
    return CommandService(model=LedgerModel(), storage=storage), storage


def test_execute_add_member_saves_snapshot() -> None:
    service, storage = _build_service()

    result = service.execute(ADD_ALEX)

    assert result.feedback.startswith("New member added: Id: 10001; Name: Alex Yeoh;")
    assert len(storage.saved) == 1
    snapshot = storage.saved[0]
    assert [str(m.id) for m in snapshot.members] == ["10001"]
    assert snapshot.sequence.next_member_id == 10002


def test_execute_view_only_command_does_not_save() -> None:
    service, storage = _build_service()
    service.execute(ADD_ALEX)
    service.execute(ADD_BERNICE)
    storage.saved.clear()

    result = service.execute("find -mem/ -n/bernice")

    assert result.feedback == "1 members listed!"
    assert storage.saved == []
    assert [m.name for m in service.displayed_members()] == ["Bernice Yu"]


def test_execute_transaction_flow_updates_balances() -> None:
    service, storage = _build_service()
    service.execute(ADD_ALEX)
    service.execute("add -txn/ -b/50 -id/10001")
    service.execute("add -txn/ -b/70.80 -id/10001")

    service.execute("delete -txn/ -id/10001100002")

    alex = service.get_member(MemberId("10001"))
    assert alex.credit == 50
    assert alex.point == 50
    assert [str(t.id) for t in alex.transactions] == ["100001"]
    assert storage.saved[-1].members[0].credit == 50


def test_failed_command_propagates_and_does_not_save() -> None:
    service, storage = _build_service()
    service.execute(ADD_ALEX)
    storage.saved.clear()
    before = service.model.registry.as_list()

    with pytest.raises(InvalidIndexError):
        service.execute("delete -mem/ -i/2")

    assert service.model.registry.as_list() == before
    assert storage.saved == []


def test_parse_error_propagates() -> None:
    service, storage = _build_service()

    with pytest.raises(ParseError):
        service.execute("remove everything")

    assert storage.saved == []


def test_save_failure_keeps_in_memory_change_and_warns() -> None:
    service, storage = _build_service()
    storage.fail_with = OSError("disk full")

    result = service.execute(ADD_ALEX)

    assert result.feedback.endswith(MESSAGE_SAVE_FAILED)
    assert len(service.model.registry) == 1


def test_execute_without_storage() -> None:
    service = CommandService(model=LedgerModel())

    result = service.execute(ADD_ALEX)

    assert result.feedback.startswith("New member added:")
