"""입력창 명령어 실행 서비스.

- 명령어 한 건의 "파싱 → 화면 목록 조회 → 레지스트리 변경" 전체를 하나의 락으로 감싼다.
  (FastAPI 의 sync 엔드포인트는 스레드풀에서 동시에 실행될 수 있다.)
- 레지스트리 변경 알림을 받아, 무언가 바뀐 명령어 뒤에만 저장 파일을 다시 쓴다.
"""

from __future__ import annotations

import logging
import threading

from fastapi import Request

from ..commands import CommandResult
from ..events import RegistryChange
from ..exceptions import (
    CommandError,
    DataFormatError,
    DuplicateMemberError,
    MemberNotFoundError,
    ParseError,
)
from ..models.member import Member
from ..parser.command_parser import CommandParser
from ..repositories.interfaces import MemberStorageInterface
from .ledger import LedgerModel


logger = logging.getLogger(__name__)

MESSAGE_SAVE_FAILED = "Warning: the change could not be written to the data file."


class CommandService:
    def __init__(
        self,
        model: LedgerModel,
        storage: MemberStorageInterface | None = None,
        parser: CommandParser | None = None,
    ) -> None:
        self._model = model
        self._storage = storage
        self._parser = parser or CommandParser()
        self._lock = threading.Lock()
        self._registry_changed = False
        model.add_registry_listener(self._on_registry_change)

    @property
    def model(self) -> LedgerModel:
        return self._model

    def execute(self, command_text: str) -> CommandResult:
        """명령어 한 건을 실행한다.

        ParseError / CommandError 는 사용자 입력 오류이므로 그대로 전파한다.
        DuplicateMemberError / MemberNotFoundError 는 레지스트리 계약 위반으로,
        로그를 남기고 전파한다. 어느 경우에도 레지스트리는 호출 전 상태 그대로다.
        """
        with self._lock:
            self._registry_changed = False
            sequence_before = self._model.sequence.model_dump()

            try:
                command = self._parser.parse(command_text)
                result = command.execute(self._model)
            except (ParseError, CommandError) as exc:
                logger.info(
                    "command rejected: %s", exc, extra={"command": command_text}
                )
                raise
            except (DuplicateMemberError, MemberNotFoundError):
                logger.error(
                    "registry invariant violated", extra={"command": command_text}
                )
                raise

            logger.info("command executed", extra={"command": command_text})

            sequence_changed = self._model.sequence.model_dump() != sequence_before
            if self._registry_changed or sequence_changed:
                if not self._save():
                    return CommandResult(f"{result.feedback}\n{MESSAGE_SAVE_FAILED}")
            return result

    def displayed_members(self) -> list[Member]:
        with self._lock:
            return self._model.get_displayed_members()

    def get_member(self, member_id) -> Member:
        with self._lock:
            return self._model.get_member_by_id(member_id)

    def member_count(self) -> int:
        """필터와 무관한 레지스트리 전체 회원 수."""
        with self._lock:
            return len(self._model.registry.as_list())

    def _on_registry_change(self, change: RegistryChange) -> None:
        self._registry_changed = True
        logger.debug(
            "registry changed",
            extra={
                "change": change.type,
                "member_id": str(change.member.id) if change.member else None,
            },
        )

    def _save(self) -> bool:
        if self._storage is None:
            return True
        try:
            self._storage.save(self._model.to_snapshot())
        except (OSError, DataFormatError):
            logger.exception("failed to save member data")
            return False
        return True


def get_command_service(request: Request) -> CommandService:
    """FastAPI DI용 CommandService 팩토리. lifespan 에서 만든 인스턴스를 돌려준다."""

    return request.app.state.command_service
