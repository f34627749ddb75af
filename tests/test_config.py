"""
Tests for environment-driven settings.
"""

from jobly.core.config import Settings


class TestSettings:
    def test_project_name_default(self, monkeypatch):
        monkeypatch.delenv("PROJECT_NAME", raising=False)

        assert Settings(_env_file=None).PROJECT_NAME == "Jobly"

    def test_project_name_from_env(self, monkeypatch):
        monkeypatch.setenv("PROJECT_NAME", "Jobly Staging")

        assert Settings(_env_file=None).PROJECT_NAME == "Jobly Staging"

    def test_database_url_override(self, monkeypatch):
        monkeypatch.setenv("SQLALCHEMY_DATABASE_URI", "sqlite:///./jobly.db")

        assert Settings(_env_file=None).DATABASE_URL == "sqlite:///./jobly.db"

    def test_database_url_from_parts(self, monkeypatch):
        for name in ("SQLALCHEMY_DATABASE_URI", "POSTGRES_USER", "POSTGRES_PASSWORD", "POSTGRES_PORT", "POSTGRES_DB"):
            monkeypatch.delenv(name, raising=False)
        monkeypatch.setenv("POSTGRES_SERVER", "db")

        settings = Settings(_env_file=None)

        assert settings.DATABASE_URL == "postgresql://user:password@db:5432/jobly"
