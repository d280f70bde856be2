from __future__ import annotations

import pytest
from pydantic import ValidationError

from app.core.config import Settings

PRODUCTION_DSN = "postgresql+asyncpg://fieldkit:s3cret@db:5432/fieldkit"


def test_placeholder_database_credentials_allowed_in_development() -> None:
    settings = Settings(_env_file=None, app_env="development")
    assert "postgres:postgres@" in settings.database_url


@pytest.mark.parametrize("app_env", ["production", "prod", " Production "])
def test_placeholder_database_credentials_rejected_in_production(app_env: str) -> None:
    with pytest.raises(ValidationError):
        Settings(_env_file=None, app_env=app_env)


def test_real_database_credentials_allowed_in_production() -> None:
    settings = Settings(_env_file=None, app_env="production", database_url=PRODUCTION_DSN)
    assert settings.database_url == PRODUCTION_DSN


def test_page_size_defaults() -> None:
    settings = Settings(_env_file=None)
    assert settings.default_page_size == 10
    assert settings.max_page_size == 100


def test_default_page_size_must_not_exceed_max() -> None:
    with pytest.raises(ValidationError):
        Settings(_env_file=None, default_page_size=50, max_page_size=20)


def test_log_level_is_normalized() -> None:
    assert Settings(_env_file=None, log_level=" debug ").log_level == "DEBUG"
