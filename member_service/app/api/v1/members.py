"""회원 목록/상세 조회 API 라우터 (읽기 전용).

목록은 현재 화면 필터/정렬이 적용된 회원 목록이다. 변경은 모두 /commands 로만 한다.
"""

from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, Query, status
from pydantic import ValidationError

from ...exceptions import MemberNotFoundError
from ...models.ids import MemberId
from ...services.command_service import CommandService, get_command_service
from ..schemas.members import MemberDetailResponse, MemberListResponse, MemberResponse


router = APIRouter(prefix="/members", tags=["members"])


@router.get("", summary="화면 회원 목록 조회")
def list_members(
    service: Annotated[CommandService, Depends(get_command_service)],
    page: Annotated[int, Query(ge=1)] = 1,
    page_size: Annotated[int, Query(ge=1, le=100)] = 20,
) -> MemberListResponse:
    members = service.displayed_members()
    start = (page - 1) * page_size
    return MemberListResponse(
        items=[MemberResponse.from_domain(m) for m in members[start : start + page_size]],
        total=len(members),
        page=page,
        page_size=page_size,
    )


@router.get("/{member_id}", summary="회원 상세 조회")
def get_member(
    member_id: str,
    service: Annotated[CommandService, Depends(get_command_service)],
) -> MemberDetailResponse:
    try:
        member = service.get_member(MemberId(member_id))
    except (ValidationError, MemberNotFoundError) as exc:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="member not found",
        ) from exc
    return MemberDetailResponse.from_domain(member)
