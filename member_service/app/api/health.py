"""헬스 체크 라우터.

요청 로그 미들웨어는 /health 를 기록하지 않으므로, 주기적인 점검 요청이 로그를 채우지 않는다.
"""

from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Depends

from ..services.command_service import CommandService, get_command_service


router = APIRouter()


@router.get("/health", summary="헬스 체크")
def health(
    service: Annotated[CommandService, Depends(get_command_service)],
) -> dict[str, object]:
    """서비스 상태와 현재 레지스트리의 회원 수를 돌려준다."""
    return {"status": "ok", "members": service.member_count()}
