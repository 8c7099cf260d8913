from fastapi import APIRouter

from .commands import router as commands_router
from .members import router as members_router

# prefix 는 각 router 파일 내부에서 정의되어 있음 (/commands, /members)
api_router = APIRouter()
api_router.include_router(commands_router)
api_router.include_router(members_router)
