"""
Unit tests for Settings loading from the environment and env files
"""

from pathlib import Path

import pytest

from src.platform.config.core_setting import Settings


pytestmark = pytest.mark.unit

ENV_EXAMPLE = Path(__file__).resolve().parents[2] / '.env.example'


class TestCorsOrigins:
    def test_comma_list_from_env_file(self, tmp_path: Path):
        env_file = tmp_path / '.env'
        env_file.write_text('BACKEND_CORS_ORIGINS=http://localhost:3000, https://app.test\n')

        settings = Settings(_env_file=env_file)  # type: ignore[call-arg]

        assert settings.BACKEND_CORS_ORIGINS == ['http://localhost:3000', 'https://app.test']

    def test_comma_list_from_environment(self, monkeypatch: pytest.MonkeyPatch):
        monkeypatch.setenv('BACKEND_CORS_ORIGINS', 'http://a.test,http://b.test')

        assert Settings().BACKEND_CORS_ORIGINS == ['http://a.test', 'http://b.test']

    def test_json_list_is_still_accepted(self, monkeypatch: pytest.MonkeyPatch):
        monkeypatch.setenv('BACKEND_CORS_ORIGINS', '["http://a.test"]')

        assert Settings().BACKEND_CORS_ORIGINS == ['http://a.test']

    def test_shipped_env_example_loads(self):
        settings = Settings(_env_file=ENV_EXAMPLE)  # type: ignore[call-arg]

        assert settings.BACKEND_CORS_ORIGINS == ['http://localhost:3000']
        assert settings.CANCELLATION_LEAD_TIME_MINUTES == 120
