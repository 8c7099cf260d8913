"""입력창 명령어 API 라우터.

데스크톱 입력창 대신 명령어 한 줄을 받아 실행하고, 결과 문자열을 돌려준다.
"""

from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, status

from ...exceptions import (
    CommandError,
    DuplicateMemberError,
    MemberNotFoundError,
    ParseError,
)
from ...services.command_service import CommandService, get_command_service
from ..schemas.commands import CommandErrorResponse, CommandRequest, CommandResponse


router = APIRouter(prefix="/commands", tags=["commands"])


@router.post(
    "",
    summary="명령어 실행",
    responses={
        status.HTTP_400_BAD_REQUEST: {"model": CommandErrorResponse},
        status.HTTP_409_CONFLICT: {"model": CommandErrorResponse},
    },
)
def execute_command(
    req: CommandRequest,
    service: Annotated[CommandService, Depends(get_command_service)],
) -> CommandResponse:
    """명령어 실행. 입력 오류는 400, 레지스트리 계약 위반은 409."""
    try:
        result = service.execute(req.command)
    except ParseError as exc:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail={"code": "invalid_command", "message": str(exc)},
        ) from exc
    except CommandError as exc:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail={"code": exc.code, "message": exc.message},
        ) from exc
    except DuplicateMemberError as exc:
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail={"code": "duplicate_member", "message": str(exc)},
        ) from exc
    except MemberNotFoundError as exc:
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail={"code": "member_not_found", "message": str(exc)},
        ) from exc

    return CommandResponse(feedback=result.feedback)
