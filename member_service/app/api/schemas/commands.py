from __future__ import annotations

from pydantic import BaseModel, Field


class CommandRequest(BaseModel):
    """입력창에 입력한 명령어 한 줄."""

    command: str = Field(min_length=1)


class CommandResponse(BaseModel):
    feedback: str


class CommandErrorDetail(BaseModel):
    """실패한 명령어의 오류 코드와 사용자에게 보여줄 메시지."""

    code: str
    message: str


class CommandErrorResponse(BaseModel):
    detail: CommandErrorDetail
