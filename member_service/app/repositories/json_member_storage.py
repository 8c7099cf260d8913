"""회원 저장 파일(JSON) 접근 레이어."""

from __future__ import annotations

import logging
import os
from pathlib import Path

from ..exceptions import DataFormatError
from ..models.ids import IdSequence
from ..models.member import Member
from ..models.snapshot import LedgerSnapshot
from ..services.balance import compute_credit
from .documents.member_document import LedgerDocument
from .interfaces import MemberStorageInterface


logger = logging.getLogger(__name__)


class JsonMemberStorage(MemberStorageInterface):
    def __init__(self, file_path: Path) -> None:
        self._file_path = Path(file_path)

    @property
    def file_path(self) -> Path:
        return self._file_path

    def load(self) -> LedgerSnapshot | None:
        """저장 파일을 읽어 스냅샷으로 복원한다.

        - 파일이 없으면 (첫 실행) None 을 반환한다.
        - JSON 형식 오류, 필드 제약 위반, 회원 ID 중복, 거래 내역과 맞지 않는 크레딧은
          모두 DataFormatError 로 보고한다. 데이터를 고쳐서 읽지는 않는다.
        """
        if not self._file_path.exists():
            logger.info("data file not found, starting empty (path=%s)", self._file_path)
            return None

        try:
            # UTF-8 로 읽을 수 없는 파일(UnicodeDecodeError)도 ValueError 로 함께 처리된다.
            raw = self._file_path.read_text(encoding="utf-8")
            document = LedgerDocument.model_validate_json(raw)
            snapshot = document.to_domain()
        except ValueError as exc:
            # pydantic ValidationError 도 ValueError 하위 타입이다.
            logger.info("illegal values found in %s: %s", self._file_path, exc)
            raise DataFormatError(f"invalid data file {self._file_path}: {exc}") from exc

        _verify_members(snapshot.members)
        _advance_sequence(snapshot.sequence, snapshot.members)
        return snapshot

    def save(self, snapshot: LedgerSnapshot) -> None:
        payload = LedgerDocument.from_domain(snapshot).model_dump_json(indent=2)

        self._file_path.parent.mkdir(parents=True, exist_ok=True)
        tmp_path = self._file_path.with_name(self._file_path.name + ".tmp")
        tmp_path.write_text(payload, encoding="utf-8")
        # 쓰는 도중 실패해도 기존 파일은 그대로 남도록 임시 파일을 교체한다.
        os.replace(tmp_path, self._file_path)
        logger.debug(
            "saved %d members to %s", len(snapshot.members), self._file_path
        )


def _verify_members(members: list[Member]) -> None:
    seen_ids = set()
    for member in members:
        if member.id in seen_ids:
            raise DataFormatError(f"duplicate member ID {member.id} in data file")
        seen_ids.add(member.id)

        transaction_ids = [t.id for t in member.transactions]
        if len(set(transaction_ids)) != len(transaction_ids):
            raise DataFormatError(f"duplicate transaction ID for member {member.id}")

        reservation_ids = [r.id for r in member.reservations]
        if len(set(reservation_ids)) != len(reservation_ids):
            raise DataFormatError(f"duplicate reservation ID for member {member.id}")

        expected_credit = compute_credit(member.transactions)
        if member.credit != expected_credit:
            raise DataFormatError(
                f"credit of member {member.id} is {member.credit}, "
                f"but its transactions add up to {expected_credit}"
            )


def _advance_sequence(sequence: IdSequence, members: list[Member]) -> None:
    """저장된 ID 중 가장 큰 값보다 작은 번호는 발급하지 않도록 맞춘다."""
    member_ids = [int(str(m.id)) for m in members]
    transaction_ids = [int(str(t.id)) for m in members for t in m.transactions]
    reservation_ids = [int(str(r.id)) for m in members for r in m.reservations]

    if member_ids:
        sequence.next_member_id = max(sequence.next_member_id, max(member_ids) + 1)
    if transaction_ids:
        sequence.next_transaction_id = max(
            sequence.next_transaction_id, max(transaction_ids) + 1
        )
    if reservation_ids:
        sequence.next_reservation_id = max(
            sequence.next_reservation_id, max(reservation_ids) + 1
        )
