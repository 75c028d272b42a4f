from __future__ import annotations

import sys

import pytest

from expandor_mcp.__main__ import main
from expandor_mcp.runtime.settings_loader import load_settings, validate_port
from expandor_mcp.config.timeouts import DEFAULT_ROUND_TRIP_TIMEOUT_S, DEFAULT_PEER_CONNECT_TIMEOUT_S

_ENV_NAMES = (
    "WS_HOST",
    "WS_PORT",
    "PEER_CONNECT_TIMEOUT_S",
    "PEER_POLL_INTERVAL_S",
    "ROUND_TRIP_TIMEOUT_S",
    "PEER_GRACE_S",
    "ENABLE_LOGGING",
    "LOG_LEVEL",
)


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    for name in _ENV_NAMES:
        monkeypatch.delenv(name, raising=False)


def test_defaults() -> None:
    settings = load_settings()
    assert settings.websocket.host == "localhost"
    assert settings.websocket.port == 8742
    assert settings.timeouts.peer_connect_timeout_s == 30.0
    assert settings.timeouts.peer_poll_interval_s == 0.5
    assert settings.timeouts.round_trip_timeout_s == 30.0
    assert settings.timeouts.peer_grace_s == 0.0
    assert settings.logging.enabled is False
    assert settings.logging.level == "INFO"


def test_env_overrides(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("WS_HOST", "0.0.0.0")
    monkeypatch.setenv("WS_PORT", "9000")
    monkeypatch.setenv("ROUND_TRIP_TIMEOUT_S", "2.5")
    monkeypatch.setenv("PEER_GRACE_S", "1")
    monkeypatch.setenv("ENABLE_LOGGING", "yes")
    monkeypatch.setenv("LOG_LEVEL", "debug")

    settings = load_settings()
    assert settings.websocket.host == "0.0.0.0"
    assert settings.websocket.port == 9000
    assert settings.timeouts.round_trip_timeout_s == 2.5
    assert settings.timeouts.peer_grace_s == 1.0
    assert settings.logging.enabled is True
    assert settings.logging.level == "DEBUG"


@pytest.mark.parametrize("port", ["0", "70000", "-1"])
def test_out_of_range_port_is_rejected(monkeypatch: pytest.MonkeyPatch, port: str) -> None:
    monkeypatch.setenv("WS_PORT", port)
    with pytest.raises(ValueError):
        load_settings()


def test_unparseable_or_non_positive_timeouts_fall_back(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("ROUND_TRIP_TIMEOUT_S", "soon")
    monkeypatch.setenv("PEER_CONNECT_TIMEOUT_S", "-5")
    monkeypatch.setenv("PEER_GRACE_S", "-2")

    settings = load_settings()
    assert settings.timeouts.round_trip_timeout_s == DEFAULT_ROUND_TRIP_TIMEOUT_S
    assert settings.timeouts.peer_connect_timeout_s == DEFAULT_PEER_CONNECT_TIMEOUT_S
    assert settings.timeouts.peer_grace_s == 0.0


def test_validate_port_names_its_source() -> None:
    assert validate_port(8742) == 8742
    with pytest.raises(ValueError, match="--port"):
        validate_port(65536, "--port")


@pytest.mark.parametrize("port", ["0", "65536"])
def test_cli_port_flag_is_range_checked(monkeypatch: pytest.MonkeyPatch, port: str) -> None:
    def _never_serve(_settings):
        raise AssertionError("server must not start with an invalid port")

    monkeypatch.setattr("expandor_mcp.__main__.serve", _never_serve)
    monkeypatch.setattr(sys, "argv", ["expandor-mcp", "--port", port])
    with pytest.raises(SystemExit) as exc:
        main()
    assert exc.value.code == 2
