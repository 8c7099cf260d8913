from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path


MEMBER_SERVICE_DATA_PATH = "MEMBER_SERVICE_DATA_PATH"
MEMBER_SERVICE_PORT = "MEMBER_SERVICE_PORT"

DEFAULT_DATA_PATH = "data/members.json"
DEFAULT_PORT = 8003


@dataclass(slots=True)
class AppConfig:
    """member-service 전체 설정 루트."""

    data_path: Path
    port: int = DEFAULT_PORT


def load_config() -> AppConfig:
    """환경 변수에서 member-service 설정을 로드하여 AppConfig 로 반환한다."""

    data_path = Path(os.getenv(MEMBER_SERVICE_DATA_PATH) or DEFAULT_DATA_PATH)

    port_raw = os.getenv(MEMBER_SERVICE_PORT)
    try:
        port = int(port_raw) if port_raw else DEFAULT_PORT
    except ValueError as exc:
        raise RuntimeError(
            f"{MEMBER_SERVICE_PORT} must be an integer, got {port_raw!r}",
        ) from exc

    return AppConfig(data_path=data_path, port=port)
