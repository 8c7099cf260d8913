from __future__ import annotations

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI

from common.logger import setup_logger
from common.middleware.request_trace import RequestTraceMiddleware

from .api.health import router as health_router
from .api.v1 import api_router
from .config import AppConfig, load_config
from .exceptions import DataFormatError
from .repositories.json_member_storage import JsonMemberStorage
from .services.command_service import CommandService
from .services.ledger import LedgerModel


logger = logging.getLogger(__name__)


def build_command_service(config: AppConfig) -> CommandService:
    """저장 파일을 읽어 CommandService 를 만든다.

    저장 파일이 없거나 읽을 수 없으면 빈 회원 목록으로 시작한다.
    """
    storage = JsonMemberStorage(config.data_path)
    try:
        snapshot = storage.load()
    except DataFormatError:
        logger.warning(
            "data file is not in the correct format, starting with an empty member list",
            exc_info=True,
        )
        snapshot = None
    except OSError:
        logger.exception("failed to read data file, starting with an empty member list")
        snapshot = None

    if snapshot is None:
        model = LedgerModel()
    else:
        model = LedgerModel.from_snapshot(snapshot)
        logger.info("loaded %d members from %s", len(snapshot.members), storage.file_path)

    return CommandService(model=model, storage=storage)


def create_app(config: AppConfig | None = None) -> FastAPI:
    setup_logger()
    app_config = config or load_config()

    @asynccontextmanager
    async def lifespan(app: FastAPI):  # pragma: no cover - framework hook
        app.state.command_service = build_command_service(app_config)
        yield

    app = FastAPI(
        title="Member Ledger Service",
        version="0.1.0",
        lifespan=lifespan,
    )

    # 공통 요청 로그 미들웨어
    app.add_middleware(RequestTraceMiddleware)

    app.include_router(health_router, tags=["health"])
    app.include_router(api_router, prefix="/api/v1")

    return app


app = create_app()


def main() -> None:
    import uvicorn

    config = load_config()
    uvicorn.run(
        "member_service.app.main:app",
        host="0.0.0.0",
        port=config.port,
        reload=False,
        access_log=False,
    )


if __name__ == "__main__":  # pragma: no cover - CLI entrypoint
    main()
