"""Unit tests for application settings."""

from datetime import timedelta

import pytest
import yaml

from commenttree.config import Settings


@pytest.fixture
def config_file(tmp_path, monkeypatch):
    """Write a YAML config document and point CONFIG_PATH at it."""

    def write(document: dict):
        path = tmp_path / "config.yaml"
        path.write_text(yaml.safe_dump(document))
        monkeypatch.setenv("CONFIG_PATH", str(path))
        return path

    return write


class TestSettings:
    def test_defaults_without_config_file(self):
        settings = Settings()

        assert settings.server.port == 8080
        assert settings.runtime.mode == "debug"
        assert settings.retry_strategy.attempts == 3
        assert settings.db.max_open_conns == 10
        assert settings.db.replicas == []

    def test_values_from_yaml(self, config_file):
        config_file(
            {
                "server": {"host": "0.0.0.0", "port": 9000},
                "runtime": {"mode": "release"},
                "db": {
                    "postgres": {"host": "db.internal", "db_name": "threads"},
                    "replicas": [{"host": "replica-1"}, {"host": "replica-2"}],
                    "conn_max_lifetime": 60,
                },
                "retry_strategy": {"attempts": 5, "delay": 0.5, "backoff": 3},
                "logger": {"level": "warning"},
            }
        )

        settings = Settings()

        assert settings.server.host == "0.0.0.0"
        assert settings.server.port == 9000
        assert not settings.debug
        assert settings.db.postgres.host == "db.internal"
        assert [r.host for r in settings.db.replicas] == ["replica-1", "replica-2"]
        assert settings.db.conn_max_lifetime == timedelta(seconds=60)
        assert settings.retry_strategy.backoff == 3
        assert settings.logger.level == "warning"

    def test_environment_overrides_yaml(self, config_file, monkeypatch):
        config_file({"server": {"port": 9000}})
        monkeypatch.setenv("SERVER__PORT", "9100")

        assert Settings().server.port == 9100

    def test_secrets_override_file_values(self, config_file, monkeypatch):
        """Secrets from the environment win over the config document."""
        config_file(
            {
                "db": {"postgres": {"user": "file-user", "password": "file-pass"}},
                "redis": {"password": "file-redis"},
            }
        )
        monkeypatch.setenv("POSTGRES_USER", "env-user")
        monkeypatch.setenv("POSTGRES_PASSWORD", "env-pass")
        monkeypatch.setenv("POSTGRES_DB", "env-db")
        monkeypatch.setenv("REDIS_PASSWORD", "env-redis")

        settings = Settings()

        assert settings.db.postgres.user == "env-user"
        assert settings.db.postgres.password == "env-pass"
        assert settings.db.postgres.db_name == "env-db"
        assert settings.redis.password == "env-redis"

    def test_invalid_mode_rejected(self, config_file):
        config_file({"runtime": {"mode": "turbo"}})

        with pytest.raises(ValueError):
            Settings()

    def test_postgres_url(self):
        url = Settings().db.postgres.url

        assert url.drivername == "postgresql+asyncpg"
        assert url.database == "comments"
        assert url.query["ssl"] == "disable"
