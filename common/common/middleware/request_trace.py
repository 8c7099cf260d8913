import logging
import time

from fastapi import Request
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.responses import Response

from common.logger import get_logger


# 노이즈를 줄이기 위해 로그에서 제외할 엔드포인트 경로 목록
IGNORED_LOG_PATHS: set[str] = {"/health"}


class RequestTraceMiddleware(BaseHTTPMiddleware):
    """요청 단위 접근 로그 미들웨어.

    - 요청마다 method, path, status, duration 을 한 줄로 남긴다.
    - 처리 중 예외가 나면 스택 트레이스와 함께 남기고 다시 던진다.
    """

    def __init__(self, app, logger: logging.Logger | None = None) -> None:  # type: ignore[override]
        super().__init__(app)
        self._logger = logger or get_logger("request_trace")

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        if request.url.path in IGNORED_LOG_PATHS:
            return await call_next(request)

        start = time.monotonic()
        try:
            response = await call_next(request)
        except Exception:
            self._logger.exception(
                "request failed",
                extra=self._build_log_extra(request, duration=time.monotonic() - start),
            )
            raise

        self._logger.info(
            "completed request",
            extra=self._build_log_extra(
                request,
                status=response.status_code,
                duration=time.monotonic() - start,
            ),
        )
        return response

    def _build_log_extra(
        self,
        request: Request,
        status: int | None = None,
        duration: float | None = None,
    ) -> dict[str, object]:
        extra: dict[str, object] = {
            "method": request.method,
            "path": request.url.path,
        }
        if status is not None:
            extra["status"] = status
        if duration is not None:
            extra["duration"] = f"{duration * 1000:.3f}ms"
        return extra
