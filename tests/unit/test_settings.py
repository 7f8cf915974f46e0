"""Unit tests for DynaconfSettings."""

from platformsh_config.injection import get_platform_service
from platformsh_config.settings import DEFAULT_SETTINGS, ConfigService, DynaconfSettings


class TestDynaconfSettings:
    def test_defaults(self):
        settings = DynaconfSettings()

        assert settings.get("variable_prefix") == "PLATFORM_"
        assert settings.get("strict_decoding") is False
        assert settings.get("log_level") == ""
        assert settings.get("print_logging") is False

    def test_missing_key_default(self):
        assert DynaconfSettings().get("not_a_setting", "fallback") == "fallback"

    def test_environment_overrides(self, monkeypatch):
        monkeypatch.setenv("PLATFORMSH_CONFIG_STRICT_DECODING", "true")
        monkeypatch.setenv("PLATFORMSH_CONFIG_VARIABLE_PREFIX", "MY_")

        settings = DynaconfSettings()

        assert settings.get("strict_decoding") is True
        assert settings.get("variable_prefix") == "MY_"

    def test_initial_config_overrides(self):
        settings = DynaconfSettings()
        settings.initialize(initial_config={"log_level": "debug"})

        assert settings.get("log_level") == "debug"
        assert settings.get("variable_prefix") == "PLATFORM_", "Defaults should still apply"

    def test_settings_file(self, tmp_path):
        settings_file = tmp_path / "settings.toml"
        settings_file.write_text('variable_prefix = "FILE_"\nprint_logging = true\n')

        settings = DynaconfSettings()
        settings.initialize(settings_files=[str(settings_file)])

        assert settings.get("variable_prefix") == "FILE_"
        assert settings.get("print_logging") is True

    def test_set_and_get_all(self):
        settings = DynaconfSettings()
        settings.set("log_level", "warn")

        all_settings = settings.get_all()

        assert all_settings["log_level"] == "warn"
        assert set(DEFAULT_SETTINGS).issubset(all_settings)

    def test_bound_as_singleton(self):
        first = get_platform_service(ConfigService)

        assert isinstance(first, DynaconfSettings)
        assert get_platform_service(ConfigService) is first
