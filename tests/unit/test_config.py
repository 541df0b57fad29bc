"""Unit tests for configuration management."""

from pathlib import Path

import pytest

from src.utils.config import Config


class TestConfigInitialization:
    """Test Config class initialization and environment variable loading."""

    def test_config_loads_default_values(self, monkeypatch):
        """Test that Config uses default values when env vars not set."""
        for name in (
            "GEMINI_API_KEY",
            "GEMINI_MODEL",
            "TEMPERATURE_COMPLEX",
            "TEMPERATURE_DEFAULT",
            "MAX_OUTPUT_TOKENS",
            "BASE_URL",
            "SHARE_PARAM",
            "LEGACY_SHARE_PARAM",
            "PORT",
            "PANTRY_STORE_KEY",
        ):
            monkeypatch.delenv(name, raising=False)

        config = Config()

        assert config.GEMINI_API_KEY == ""
        assert config.GEMINI_MODEL == "gemini-2.5-flash"
        assert config.TEMPERATURE_COMPLEX == 0.5
        assert config.TEMPERATURE_DEFAULT == 0.6
        assert config.MAX_OUTPUT_TOKENS == 4096
        assert config.BASE_URL == ""
        assert config.SHARE_PARAM == "pantry"
        assert config.LEGACY_SHARE_PARAM == "share"
        assert config.PANTRY_STORE_KEY == "pantry"
        assert config.PORT == 7777

    def test_config_loads_from_environment(self, monkeypatch, tmp_path):
        """Test that Config loads values from environment variables."""
        monkeypatch.setenv("GEMINI_API_KEY", "test_gemini_key")
        monkeypatch.setenv("GEMINI_MODEL", "custom-model")
        monkeypatch.setenv("BASE_URL", "https://chef.example.org/")
        monkeypatch.setenv("PANTRY_STORE_PATH", str(tmp_path / "slot.json"))
        monkeypatch.setenv("CORS_ORIGINS", "http://a.test, http://b.test")
        monkeypatch.setenv("PORT", "8888")

        config = Config()

        assert config.GEMINI_API_KEY == "test_gemini_key"
        assert config.GEMINI_MODEL == "custom-model"
        assert config.BASE_URL == "https://chef.example.org"
        assert config.PANTRY_STORE_PATH == tmp_path / "slot.json"
        assert config.CORS_ORIGINS == ["http://a.test", "http://b.test"]
        assert config.PORT == 8888

    def test_config_converts_numeric_types(self, monkeypatch):
        """Test that Config properly converts numeric environment variables."""
        monkeypatch.setenv("TEMPERATURE_COMPLEX", "0.3")
        monkeypatch.setenv("MAX_OUTPUT_TOKENS", "2048")

        config = Config()

        assert isinstance(config.TEMPERATURE_COMPLEX, float)
        assert isinstance(config.MAX_OUTPUT_TOKENS, int)
        assert isinstance(config.PANTRY_STORE_PATH, Path)


class TestAICredentials:
    """The credential is the only switch between AI and fallback generation."""

    def test_missing_key_means_no_credentials(self, monkeypatch):
        monkeypatch.setenv("GEMINI_API_KEY", "")
        assert Config().has_ai_credentials is False

    def test_whitespace_key_means_no_credentials(self, monkeypatch):
        monkeypatch.setenv("GEMINI_API_KEY", "   ")
        assert Config().has_ai_credentials is False

    def test_present_key_means_credentials(self, monkeypatch):
        monkeypatch.setenv("GEMINI_API_KEY", "key")
        assert Config().has_ai_credentials is True


class TestConfigValidation:
    """Test Config validation logic."""

    def test_validate_succeeds_without_api_key(self, monkeypatch):
        """The service must run without a Gemini key (fallback generator)."""
        monkeypatch.setenv("GEMINI_API_KEY", "")
        Config().validate()  # Should not raise

    @pytest.mark.parametrize("name", ["TEMPERATURE_COMPLEX", "TEMPERATURE_DEFAULT"])
    def test_validate_rejects_temperature_out_of_range(self, monkeypatch, name):
        monkeypatch.setenv(name, "1.5")
        with pytest.raises(ValueError, match=name):
            Config().validate()

    def test_validate_rejects_small_output_cap(self, monkeypatch):
        monkeypatch.setenv("MAX_OUTPUT_TOKENS", "100")
        with pytest.raises(ValueError, match="MAX_OUTPUT_TOKENS"):
            Config().validate()

    def test_validate_rejects_bad_log_type(self, monkeypatch):
        monkeypatch.setenv("LOG_TYPE", "xml")
        with pytest.raises(ValueError, match="LOG_TYPE"):
            Config().validate()

    def test_validate_rejects_same_share_params(self, monkeypatch):
        monkeypatch.setenv("SHARE_PARAM", "share")
        monkeypatch.setenv("LEGACY_SHARE_PARAM", "share")
        with pytest.raises(ValueError, match="must differ"):
            Config().validate()

    def test_validate_rejects_bad_port(self, monkeypatch):
        monkeypatch.setenv("PORT", "70000")
        with pytest.raises(ValueError, match="PORT"):
            Config().validate()
