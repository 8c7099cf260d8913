import json
import logging
import os
import sys


DEFAULT_LOGGER_NAME = "member-ledger"

# extra 로 넘어오는 필드 중 로그에 그대로 싣는 키 목록
EXTRA_LOG_KEYS = (
    "command",
    "member_id",
    "change",
    "path",
    "method",
    "status",
    "duration",
)


def setup_logger(
    name: str = DEFAULT_LOGGER_NAME, level: str | None = None
) -> logging.Logger:
    """애플리케이션 전역 로거를 설정하고 반환한다.

    Args:
        name: 로거 이름 (SERVICE_NAME 환경변수가 있으면 그 값을 쓴다)
        level: 로그 레벨 (기본값: None -> 환경변수 LOG_LEVEL 또는 INFO 사용)

    LOG_FORMAT=text 이면 사람이 읽기 쉬운 한 줄 포맷을, 그 외에는 JSON 을 쓴다.
    """
    log_level = _resolve_level(level or os.getenv("LOG_LEVEL", "INFO"))
    handler = _build_handler(log_level, os.getenv("LOG_FORMAT", "json"))

    logger = logging.getLogger(os.getenv("SERVICE_NAME", name))
    logger.setLevel(log_level)
    # create_app 을 여러 번 호출해도 같은 줄이 중복 출력되지 않도록 교체한다.
    logger.handlers.clear()
    logger.addHandler(handler)

    # 모듈 로거(member_service.app.*, request_trace)는 루트로 전파된다.
    root_logger = logging.getLogger()
    if not root_logger.handlers:
        root_logger.addHandler(handler)
        root_logger.setLevel(log_level)

    return logger


def get_logger(name: str) -> logging.Logger:
    """모듈별 로거를 가져온다."""
    return logging.getLogger(name)


def _resolve_level(level: str) -> int:
    return getattr(logging, level.upper(), logging.INFO)


def _build_handler(log_level: int, log_format: str) -> logging.Handler:
    handler = logging.StreamHandler(sys.stdout)
    handler.setLevel(log_level)
    if log_format.lower() == "text":
        handler.setFormatter(TextFormatter())
    else:
        handler.setFormatter(JsonFormatter())
    return handler


def _collect_extra(record: logging.LogRecord) -> dict[str, object]:
    return {key: getattr(record, key) for key in EXTRA_LOG_KEYS if hasattr(record, key)}


class JsonFormatter(logging.Formatter):
    """한 줄짜리 JSON 로그 포맷터.

    - datetime, level, logger, message 필드를 기본으로 포함한다.
    - EXTRA_LOG_KEYS 에 해당하는 extra 값이 있으면 함께 기록한다.
    - 예외 정보가 있으면 exc_info 필드에 문자열로 추가한다.
    """

    def __init__(self) -> None:
        super().__init__(datefmt="%Y-%m-%dT%H:%M:%S")

    def format(self, record: logging.LogRecord) -> str:  # type: ignore[override]
        log_record: dict[str, object] = {
            "datetime": self.formatTime(record, self.datefmt),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        log_record.update(_collect_extra(record))

        service_name = getattr(record, "service_name", None) or os.getenv(
            "SERVICE_NAME"
        )
        if service_name:
            log_record["service_name"] = service_name

        if record.exc_info:
            log_record["exc_info"] = self.formatException(record.exc_info)

        # Decimal, Path 등은 문자열로 남긴다.
        return json.dumps(log_record, ensure_ascii=False, default=str)


class TextFormatter(logging.Formatter):
    """로컬 개발용 포맷터. extra 값은 key=value 로 메시지 뒤에 붙인다."""

    def __init__(self) -> None:
        super().__init__(
            fmt="%(asctime)s %(levelname)-7s %(name)s: %(message)s",
            datefmt="%H:%M:%S",
        )

    def format(self, record: logging.LogRecord) -> str:  # type: ignore[override]
        line = super().format(record)
        extra = _collect_extra(record)
        if not extra:
            return line
        pairs = " ".join(f"{key}={value}" for key, value in extra.items())
        first, sep, rest = line.partition("\n")
        return f"{first} [{pairs}]{sep}{rest}"
