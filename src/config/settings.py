"""
Environment-driven settings for notedocx

Values come from NOTEDOCX_* environment variables, validated by pydantic-settings.
All settings use NOTEDOCX_ prefix (e.g., NOTEDOCX_OUTPUT_FILE=notes.docx).

Settings can also be loaded from a .env file in the working directory.
Command-line options take precedence over these settings.
"""

from typing import Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class AppSettings(BaseSettings):
    """
    Defaults for options the command line may leave out.

    Environment variables use NOTEDOCX_ prefix.

    Examples:
        NOTEDOCX_OUTPUT_FILE=journal.docx
        NOTEDOCX_THEME_FILE=themes/print.yaml
        NOTEDOCX_FILE_ENCODING=latin-1
    """

    model_config = SettingsConfigDict(
        env_prefix="NOTEDOCX_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
    )

    # Output configuration
    output_file: str = Field(
        default="output.docx",
        description="Document written to the working directory",
    )

    # Styling
    theme_file: Optional[str] = Field(
        default=None,
        description="YAML theme overriding the built-in fonts, colours, styles and image width",
    )

    # Input configuration
    file_encoding: str = Field(
        default="utf-8",
        description="Text encoding of note files",
    )


# Shared instance, read once at import
appsettings = AppSettings()
