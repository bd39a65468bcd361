from tasklist.config import Settings


def test_defaults(monkeypatch):
    for key in ["DATABASE_URL", "POOL_SIZE", "PORT", "CORS_ORIGINS", "API_URL", "LOG_LEVEL"]:
        monkeypatch.delenv(f"TASKLIST_{key}", raising=False)

    settings = Settings.from_env()
    assert settings.database_url == "sqlite:///tasks.db"
    assert settings.pool_size == 5
    assert settings.port == 3000
    assert settings.cors_origins == ["*"]
    assert settings.api_url == "http://localhost:3000/api/tasks"
    assert settings.log_level == "INFO"


def test_overrides(monkeypatch):
    monkeypatch.setenv("TASKLIST_DATABASE_URL", "mysql+pymysql://root@localhost/todo_app")
    monkeypatch.setenv("TASKLIST_POOL_SIZE", "20")
    monkeypatch.setenv("TASKLIST_CORS_ORIGINS", "http://a.test, http://b.test")
    monkeypatch.setenv("TASKLIST_LOG_LEVEL", "debug")

    settings = Settings.from_env()
    assert settings.database_url == "mysql+pymysql://root@localhost/todo_app"
    assert settings.pool_size == 20
    assert settings.cors_origins == ["http://a.test", "http://b.test"]
    assert settings.log_level == "DEBUG"


def test_malformed_integer_falls_back(monkeypatch):
    monkeypatch.setenv("TASKLIST_PORT", "not-a-port")
    assert Settings.from_env().port == 3000
