from __future__ import annotations

import os

import pytest

from shared.protocol import ConfigError, InitiatorParams, ResponderParams, ValidationError, validate_port
from shared.settings import Settings, load_settings


def test_port_in_range_is_accepted():
    assert validate_port("8080") == 8080
    assert validate_port("65535") == 65535
    assert validate_port("1001") == 1001


@pytest.mark.parametrize("port", ["70000", "1000", "65536", "0"])
def test_port_out_of_range_is_rejected(port):
    with pytest.raises(ValidationError, match="outside of valid range"):
        validate_port(port)


@pytest.mark.parametrize("port", ["99ab", "-8080", "80.80", " 8080"])
def test_non_numeric_port_is_rejected(port):
    with pytest.raises(ValidationError, match="non-numeric"):
        validate_port(port)


def test_empty_port_is_rejected():
    with pytest.raises(ValidationError):
        validate_port("")


def test_responder_params():
    params = ResponderParams.parse(port="8080", display_name="Bob")
    assert params.port == 8080
    assert params.display_name == "Bob"


def test_initiator_params():
    params = InitiatorParams.parse(host="localhost", port="9000", display_name="Alice")
    assert (params.host, params.port, params.display_name) == ("localhost", 9000, "Alice")


def test_params_reject_bad_port_with_chat_error():
    with pytest.raises(ValidationError, match="port"):
        ResponderParams.parse(port="99ab", display_name="Bob")


def test_params_reject_empty_display_name():
    with pytest.raises(ValidationError, match="display_name"):
        InitiatorParams.parse(host="localhost", port="9000", display_name="")


def test_load_settings_reads_environment(monkeypatch, tmp_path):
    monkeypatch.setenv("CHAT_BYTE_ORDER", "big")
    monkeypatch.setenv("CHAT_PROMPT", ">> ")
    monkeypatch.setattr("shared.settings.SETTINGS", Settings())
    settings = load_settings(str(tmp_path / "missing.env"))
    assert settings.byte_order == "big"
    assert settings.prompt == ">> "


def test_load_settings_reads_env_file(monkeypatch, tmp_path):
    monkeypatch.delenv("CHAT_LOG_LEVEL", raising=False)
    env_file = tmp_path / ".env"
    env_file.write_text("CHAT_LOG_LEVEL=debug\n", encoding="utf-8")
    monkeypatch.setattr("shared.settings.SETTINGS", Settings())
    try:
        assert load_settings(str(env_file)).log_level == "DEBUG"
    finally:
        os.environ.pop("CHAT_LOG_LEVEL", None)


def test_load_settings_rejects_unknown_byte_order(monkeypatch, tmp_path):
    monkeypatch.setenv("CHAT_BYTE_ORDER", "sideways")
    monkeypatch.setattr("shared.settings.SETTINGS", Settings())
    with pytest.raises(ConfigError):
        load_settings(str(tmp_path / "missing.env"))
