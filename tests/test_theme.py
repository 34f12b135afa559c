"""
Theme and settings tests

Tests built-in theme defaults, YAML overrides, theme loading errors and
environment-driven application settings.
"""

import pytest

from notedocx.config.settings import AppSettings
from notedocx.lib.theme import DEFAULT_THEME, Theme, ThemeError, config_merge


class TestThemeDefaults:
    """Theme without a file"""

    def test_default_values(self):
        """Built-in styling"""
        theme = Theme()
        assert theme.name == "default"
        assert theme.titleStyle_get() == "Heading 1"
        assert theme.headingStyle_get() == "Heading 2"
        assert theme.codeFont_get() == "Courier New"
        assert theme.codeBold_get() is True
        assert theme.linkColor_get() == "0563C1"
        assert theme.imageWidth_get() == 5.5

    def test_config_get_dotted(self):
        """Nested keys with dot notation"""
        theme = Theme()
        assert theme.config_get("code.font") == "Courier New"
        assert theme.config_get("code.missing", "fallback") == "fallback"
        assert theme.config_get("nothing.here") is None

    def test_defaults_not_shared(self):
        """Changing one theme's config leaves the defaults alone"""
        theme = Theme()
        theme.config["code"]["font"] = "Changed"
        assert DEFAULT_THEME["code"]["font"] == "Courier New"
        assert Theme().codeFont_get() == "Courier New"


class TestThemeFile:
    """Theme loaded from YAML"""

    def test_partial_override(self, tmp_path):
        """Keys left out keep their defaults"""
        theme_file = tmp_path / "print.yaml"
        theme_file.write_text("code:\n  font: Consolas\nlink:\n  color: '1F4E79'\n")
        theme = Theme(str(theme_file))
        assert theme.name == "print"
        assert theme.codeFont_get() == "Consolas"
        assert theme.codeBold_get() is True
        assert theme.linkColor_get() == "1F4E79"
        assert theme.titleStyle_get() == "Heading 1"

    def test_empty_file(self, tmp_path):
        """Empty theme is all defaults"""
        theme_file = tmp_path / "empty.yaml"
        theme_file.write_text("")
        assert Theme(str(theme_file)).config == DEFAULT_THEME

    def test_missing_file(self, tmp_path):
        with pytest.raises(ThemeError, match="not found"):
            Theme(str(tmp_path / "missing.yaml"))

    def test_invalid_yaml(self, tmp_path):
        theme_file = tmp_path / "bad.yaml"
        theme_file.write_text("code: [unclosed\n")
        with pytest.raises(ThemeError, match="Failed to parse"):
            Theme(str(theme_file))

    def test_not_a_mapping(self, tmp_path):
        theme_file = tmp_path / "list.yaml"
        theme_file.write_text("- one\n- two\n")
        with pytest.raises(ThemeError, match="mapping"):
            Theme(str(theme_file))


class TestThemeValidation:
    """Values rejected when the theme is loaded"""

    @pytest.mark.parametrize("color", ["blue", "#0563C1", "0563C", "'12345G'", "112233"])
    def test_bad_link_color(self, tmp_path, color):
        """Link colour must be a quoted 6-digit hex string"""
        theme_file = tmp_path / "theme.yaml"
        theme_file.write_text(f"link:\n  color: {color}\n")
        with pytest.raises(ThemeError, match="link.color"):
            Theme(str(theme_file))

    @pytest.mark.parametrize("width", ["wide", "0", "-2", "true"])
    def test_bad_image_width(self, tmp_path, width):
        theme_file = tmp_path / "theme.yaml"
        theme_file.write_text(f"image:\n  width_inches: {width}\n")
        with pytest.raises(ThemeError, match="image.width_inches"):
            Theme(str(theme_file))

    def test_lowercase_color_and_int_width(self, tmp_path):
        theme_file = tmp_path / "theme.yaml"
        theme_file.write_text("link:\n  color: 'aa00ff'\nimage:\n  width_inches: 3\n")
        theme = Theme(str(theme_file))
        assert theme.linkColor_get() == "aa00ff"
        assert theme.imageWidth_get() == 3.0


class TestConfigMerge:
    """Recursive dict merge"""

    def test_nested_merge(self):
        base = {"a": {"x": 1, "y": 2}, "b": 3}
        merged = config_merge(base, {"a": {"y": 20}, "c": 4})
        assert merged == {"a": {"x": 1, "y": 20}, "b": 3, "c": 4}
        assert base == {"a": {"x": 1, "y": 2}, "b": 3}

    def test_scalar_replaces_mapping(self):
        assert config_merge({"a": {"x": 1}}, {"a": 5}) == {"a": 5}


class TestAppSettings:
    """NOTEDOCX_ environment settings"""

    def test_defaults(self, monkeypatch, tmp_path):
        monkeypatch.chdir(tmp_path)
        for name in ("NOTEDOCX_OUTPUT_FILE", "NOTEDOCX_THEME_FILE", "NOTEDOCX_FILE_ENCODING"):
            monkeypatch.delenv(name, raising=False)
        settings = AppSettings()
        assert settings.output_file == "output.docx"
        assert settings.theme_file is None
        assert settings.file_encoding == "utf-8"

    def test_environment_override(self, monkeypatch, tmp_path):
        monkeypatch.chdir(tmp_path)
        monkeypatch.setenv("NOTEDOCX_OUTPUT_FILE", "journal.docx")
        monkeypatch.setenv("NOTEDOCX_FILE_ENCODING", "latin-1")
        settings = AppSettings()
        assert settings.output_file == "journal.docx"
        assert settings.file_encoding == "latin-1"

    def test_dotenv_file(self, monkeypatch, tmp_path):
        """.env in the working directory is read"""
        monkeypatch.chdir(tmp_path)
        monkeypatch.delenv("NOTEDOCX_THEME_FILE", raising=False)
        (tmp_path / ".env").write_text("NOTEDOCX_THEME_FILE=themes/print.yaml\n")
        assert AppSettings().theme_file == "themes/print.yaml"
