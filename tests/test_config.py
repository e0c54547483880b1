"""
Tests for option validation and loading.
"""

import pytest
import voluptuous as vol

from bread_converter.config import load_options, validate_options


pytestmark = pytest.mark.usefixtures("isolated_env")


class TestValidateOptions:
    def test_defaults(self):
        options = validate_options()
        assert options == {
            "starter_hydration": 100.0,
            "strict_unit_mode": False,
            "fill_missing_liquid": False,
            "levain_uses_starter_hydration": False,
            "use_ai": False,
            "api_key": "",
            "model": "gemini-2.5-flash-lite",
            "direction": None,
        }

    def test_coerces_values(self):
        options = validate_options({"starter_hydration": "75", "strict_unit_mode": "yes"})
        assert options["starter_hydration"] == 75.0
        assert options["strict_unit_mode"] is True

    @pytest.mark.parametrize("options", [
        {"starter_hydration": -5},
        {"starter_hydration": 900},
        {"model": "gpt-2"},
        {"direction": "sideways"},
        {"unknown": 1},
    ])
    def test_invalid(self, options):
        with pytest.raises(vol.Invalid):
            validate_options(options)


class TestLoadOptions:
    """Tests for environment and override layering."""

    def test_environment(self, monkeypatch):
        monkeypatch.setenv("LANGEXTRACT_API_KEY", "env-key")
        monkeypatch.setenv("BREAD_CONVERTER_STARTER_HYDRATION", "80")
        monkeypatch.setenv("BREAD_CONVERTER_STRICT_UNITS", "true")

        options = load_options()
        assert options["api_key"] == "env-key"
        assert options["starter_hydration"] == 80.0
        assert options["strict_unit_mode"] is True
        assert options["use_ai"] is False

    def test_overrides_win_and_none_is_ignored(self, monkeypatch):
        monkeypatch.setenv("BREAD_CONVERTER_STARTER_HYDRATION", "80")
        options = load_options({"starter_hydration": 60, "model": None})
        assert options["starter_hydration"] == 60.0
        assert options["model"] == "gemini-2.5-flash-lite"

    def test_dotenv_file(self, tmp_path):
        (tmp_path / ".env").write_text("BREAD_CONVERTER_MODEL=gemini-2.5-pro\n")
        assert load_options()["model"] == "gemini-2.5-pro"

    def test_invalid_environment(self, monkeypatch):
        monkeypatch.setenv("BREAD_CONVERTER_MODEL", "not-a-model")
        with pytest.raises(vol.Invalid):
            load_options()
