from pathlib import Path

import pytest

from prestaclient.config import FORMAT_HEADERS, Settings, get_settings


class TestSettings:
    def test_defaults(self) -> None:
        settings = get_settings()

        assert settings.shop_url == ""
        assert settings.endpoint == "/api"
        assert settings.token == ""
        assert settings.shop_id is None
        assert settings.timeout == 30.0

    def test_environment_overrides(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("PRESTASHOP_SHOP_URL", "https://shop.example.com")
        monkeypatch.setenv("PRESTASHOP_TOKEN", "KEY")
        monkeypatch.setenv("PRESTASHOP_SHOP_ID", "2")
        monkeypatch.setenv("PRESTASHOP_TIMEOUT", "5")

        settings = Settings()

        assert settings.shop_url == "https://shop.example.com"
        assert settings.token == "KEY"
        assert settings.shop_id == 2
        assert settings.timeout == 5.0

    def test_dotenv_file(self, tmp_path: Path) -> None:
        # conftest chdirs into tmp_path
        (tmp_path / ".env").write_text("PRESTASHOP_TOKEN=FROMFILE\nUNRELATED=1\n")

        assert get_settings().token == "FROMFILE"

    def test_settings_are_read_on_each_call(self, monkeypatch: pytest.MonkeyPatch) -> None:
        assert get_settings().token == ""

        monkeypatch.setenv("PRESTASHOP_TOKEN", "LATER")

        assert get_settings().token == "LATER"


def test_format_headers() -> None:
    assert FORMAT_HEADERS == {"Io-Format": "JSON", "Output-Format": "JSON"}
