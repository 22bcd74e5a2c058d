from pathlib import Path

import pytest

from src.platform.config.core_setting import Settings


pytestmark = pytest.mark.unit

PROJECT_ROOT = Path(__file__).resolve().parents[3]


class TestSettingsLoading:
    def test_shipped_env_example_loads(self, monkeypatch):
        monkeypatch.delenv('BACKEND_CORS_ORIGINS', raising=False)

        settings = Settings(_env_file=str(PROJECT_ROOT / '.env.example'))  # type: ignore

        assert settings.BACKEND_CORS_ORIGINS == ['http://localhost:3000']
        assert settings.PROJECT_NAME == 'Holidays Planner'

    def test_cors_origins_accept_comma_list(self, monkeypatch):
        monkeypatch.setenv('BACKEND_CORS_ORIGINS', 'http://a.test, http://b.test,')

        settings = Settings(_env_file=None)  # type: ignore

        assert settings.BACKEND_CORS_ORIGINS == ['http://a.test', 'http://b.test']

    def test_cors_origins_accept_json_list(self, monkeypatch):
        monkeypatch.setenv('BACKEND_CORS_ORIGINS', '["http://a.test", "http://b.test"]')

        settings = Settings(_env_file=None)  # type: ignore

        assert settings.BACKEND_CORS_ORIGINS == ['http://a.test', 'http://b.test']

    def test_cors_origins_default_to_empty(self, monkeypatch):
        monkeypatch.delenv('BACKEND_CORS_ORIGINS', raising=False)

        settings = Settings(_env_file=None)  # type: ignore

        assert settings.BACKEND_CORS_ORIGINS == []
