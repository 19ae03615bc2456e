from whitelist_api.config import Settings, get_settings


def test_defaults(monkeypatch):
    monkeypatch.delenv("DATABASE_URL", raising=False)
    settings = Settings()
    assert settings.api_prefix == "/api"
    assert settings.not_authorized_status == 205
    assert settings.cors_origins == ["*"]


def test_yaml_values_are_loaded(tmp_path, monkeypatch):
    monkeypatch.delenv("API_PREFIX", raising=False)
    cfg = tmp_path / "config.yaml"
    cfg.write_text("api_prefix: /v1\nnot_authorized_status: 403\nunknown_key: 1\n")

    settings = get_settings(cfg)
    assert settings.api_prefix == "/v1"
    assert settings.not_authorized_status == 403


def test_environment_overrides_yaml(tmp_path, monkeypatch):
    cfg = tmp_path / "config.yaml"
    cfg.write_text("log_level: DEBUG\n")
    monkeypatch.setenv("LOG_LEVEL", "ERROR")

    assert get_settings(cfg).log_level == "ERROR"


def test_missing_yaml_uses_defaults(tmp_path):
    settings = get_settings(tmp_path / "absent.yaml")
    assert settings.store_timeout_seconds == 10.0


def test_dotenv_overrides_yaml(tmp_path, monkeypatch):
    monkeypatch.delenv("LOG_LEVEL", raising=False)
    monkeypatch.chdir(tmp_path)
    (tmp_path / ".env").write_text("LOG_LEVEL=ERROR\n")
    cfg = tmp_path / "config.yaml"
    cfg.write_text("log_level: DEBUG\napi_prefix: /v2\n")

    settings = get_settings(cfg)
    assert settings.log_level == "ERROR"
    assert settings.api_prefix == "/v2"
