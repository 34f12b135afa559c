"""
Theme loader for notedocx documents.

A theme controls how assembled notes look in the output document:
  - styles: paragraph style names for page titles and headings
  - code: font family and weight of inline code runs
  - link: colour of hyperlink runs
  - image: fixed width of embedded images

Themes are YAML files; any key they leave out keeps its built-in default.

Example theme.yaml:
    styles:
      title: Title
    code:
      font: Consolas
    link:
      color: "1F4E79"
"""

import copy
import re
import yaml
from pathlib import Path
from typing import Dict, Any, Optional

from .errors import NotedocxError


class ThemeError(NotedocxError):
    """Raised when theme loading or validation fails"""
    pass


HEX_COLOR = re.compile(r"[0-9A-Fa-f]{6}")


DEFAULT_THEME: Dict[str, Any] = {
    'styles': {
        'title': 'Heading 1',
        'heading': 'Heading 2',
    },
    'code': {
        'font': 'Courier New',
        'bold': True,
    },
    'link': {
        'color': '0563C1',
    },
    'image': {
        'width_inches': 5.5,
    },
}


def config_merge(base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
    """Recursively merge override into a copy of base"""
    merged = copy.deepcopy(base)
    for key, value in override.items():
        if isinstance(value, dict) and isinstance(merged.get(key), dict):
            merged[key] = config_merge(merged[key], value)
        else:
            merged[key] = value
    return merged


class Theme:
    """
    Document styling for the Assembler.

    Built-in defaults, optionally overridden by a YAML theme file.
    """

    def __init__(self, theme_file: Optional[str] = None):
        """
        Load a theme.

        Args:
            theme_file: Path to a theme YAML file, or None for the defaults

        Raises:
            ThemeError: If the theme file doesn't exist or can't be parsed
        """
        self.theme_file = Path(theme_file) if theme_file else None
        self.name = self.theme_file.stem if self.theme_file else "default"

        if self.theme_file is not None and not self.theme_file.exists():
            raise ThemeError(
                f"Theme file not found: {self.theme_file}"
            )

        self.config = self._config_load()
        self._config_validate()

    def _config_load(self) -> Dict[str, Any]:
        """Load theme YAML and merge it over the defaults"""
        if self.theme_file is None:
            return copy.deepcopy(DEFAULT_THEME)
        try:
            with open(self.theme_file, 'r', encoding='utf-8') as f:
                config: Any = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise ThemeError(f"Failed to parse {self.theme_file.name}: {e}")
        except OSError as e:
            raise ThemeError(f"Failed to load {self.theme_file.name}: {e}")

        if config is None:
            config = {}
        if not isinstance(config, dict):
            raise ThemeError(f"{self.theme_file.name} must contain a mapping")
        return config_merge(DEFAULT_THEME, config)

    def _config_validate(self) -> None:
        """
        Check values python-docx would reject later

        Raises:
            ThemeError: link.color is not 6-digit hex RGB, or
                        image.width_inches is not a positive number
        """
        color = self.config_get('link.color')
        if not isinstance(color, str) or not HEX_COLOR.fullmatch(color):
            raise ThemeError(f"link.color must be 6-digit hex RGB like '0563C1', got {color!r}")

        width = self.config_get('image.width_inches')
        if isinstance(width, bool) or not isinstance(width, (int, float)) or width <= 0:
            raise ThemeError(f"image.width_inches must be a positive number, got {width!r}")

    def config_get(self, key: str, default: Any = None) -> Any:
        """
        Get a configuration value.

        Supports nested keys with dot notation:
          theme.config_get('link.color', '0563C1')

        Args:
            key: Configuration key (supports dot notation)
            default: Default value if key doesn't exist

        Returns:
            Configuration value or default
        """
        keys: list[str] = key.split('.')
        value: Any = self.config

        for k in keys:
            if isinstance(value, dict) and k in value:
                value = value[k]
            else:
                return default

        return value

    def titleStyle_get(self) -> str:
        """Paragraph style of the per-file page title"""
        return self.config_get('styles.title', 'Heading 1')

    def headingStyle_get(self) -> str:
        """Paragraph style of "# heading" lines"""
        return self.config_get('styles.heading', 'Heading 2')

    def codeFont_get(self) -> str:
        return self.config_get('code.font', 'Courier New')

    def codeBold_get(self) -> bool:
        return bool(self.config_get('code.bold', True))

    def linkColor_get(self) -> str:
        """Hyperlink colour as a 6-digit hex RGB string"""
        return str(self.config_get('link.color', '0563C1'))

    def imageWidth_get(self) -> float:
        """Fixed width of embedded images, in inches"""
        return float(self.config_get('image.width_inches', 5.5))

    def __repr__(self) -> str:
        return f"Theme(name='{self.name}', path='{self.theme_file}')"
