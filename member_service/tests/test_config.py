from __future__ import annotations

from pathlib import Path

import pytest

from member_service.app.config import (
    DEFAULT_DATA_PATH,
    DEFAULT_PORT,
    MEMBER_SERVICE_DATA_PATH,
    MEMBER_SERVICE_PORT,
    load_config,
)


def test_load_config_defaults(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv(MEMBER_SERVICE_DATA_PATH, raising=False)
    monkeypatch.delenv(MEMBER_SERVICE_PORT, raising=False)

    config = load_config()

    assert config.data_path == Path(DEFAULT_DATA_PATH)
    assert config.port == DEFAULT_PORT


def test_load_config_from_env(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    monkeypatch.setenv(MEMBER_SERVICE_DATA_PATH, str(tmp_path / "ledger.json"))
    monkeypatch.setenv(MEMBER_SERVICE_PORT, "9100")

    config = load_config()

    assert config.data_path == tmp_path / "ledger.json"
    assert config.port == 9100


def test_load_config_rejects_non_numeric_port(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv(MEMBER_SERVICE_PORT, "eighty")

    with pytest.raises(RuntimeError):
        load_config()
