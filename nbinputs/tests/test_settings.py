import socket

from nbinputs.config import Settings, get_settings, settings_public_summary


def test_defaults():
    s = Settings()
    assert s.bridge_url is None
    assert s.standalone is True
    assert s.bridge_timeout_seconds == 10.0
    assert s.persistent_id_length == 32
    assert s.subscription_manager == f"subscription_manager@{socket.gethostname()}"
    assert s.nonexistent_dir_name == "nonexistent"


def test_env_overrides(monkeypatch):
    monkeypatch.setenv("NBINPUTS_BRIDGE_URL", "http://host:9000/bridge/")
    monkeypatch.setenv("NBINPUTS_SUBSCRIPTION_MANAGER", "bus@node")
    monkeypatch.setenv("LOG_LEVEL", "debug")
    s = get_settings()
    assert s.bridge_url == "http://host:9000/bridge"
    assert s.standalone is False
    assert s.subscription_manager == "bus@node"
    assert s.log_level == "DEBUG"


def test_invalid_numbers_are_clamped(monkeypatch):
    monkeypatch.setenv("NBINPUTS_BRIDGE_TIMEOUT_SECONDS", "-5")
    monkeypatch.setenv("NBINPUTS_BRIDGE_CONNECT_TIMEOUT_SECONDS", "0")
    monkeypatch.setenv("NBINPUTS_PERSISTENT_ID_LENGTH", "500")
    s = Settings()
    assert s.bridge_timeout_seconds == 10.0
    assert s.bridge_connect_timeout_seconds == 3.0
    assert s.persistent_id_length == 64


def test_blank_url_means_standalone(monkeypatch):
    monkeypatch.setenv("NBINPUTS_BRIDGE_URL", "   ")
    assert Settings().standalone is True


def test_public_summary_redacts_token():
    summary = settings_public_summary(Settings(bridge_token="abc"))
    assert summary["bridge_token"] == "[redacted]"
    assert "abc" not in str(summary)
