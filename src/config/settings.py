"""
Application settings and configuration

Uses pydantic-settings for type-safe configuration via environment variables.
All settings use MDBOOK_KCL_ prefix (e.g., MDBOOK_KCL_STRICT_MODE=true).

Settings can also be loaded from a .env file in the book root, and the
strict flag can be overridden per book from the [preprocessor.kcl] table
of book.toml.
"""

from typing import Any, Dict, Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class AppSettings(BaseSettings):
    """
    Application configuration via environment variables.

    Environment variables use MDBOOK_KCL_ prefix.

    Examples:
        MDBOOK_KCL_STRICT_MODE=true
        MDBOOK_KCL_ENVIRONMENT_IMAGE=images/studio.hdr
    """

    model_config = SettingsConfigDict(
        env_prefix="MDBOOK_KCL_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
    )

    # Directive recognition
    directive_prefix: str = Field(
        default="<!-- KCL:",
        description="Literal that a raw HTML block must start with to be a KCL directive",
    )

    directive_suffix: str = Field(
        default="-->",
        description="Closing delimiter of a KCL directive",
    )

    # Chapter header
    header: str = Field(
        default='<script type="module" src="scripts/model-viewer.js"></script>\n',
        description="Literal prepended to every chapter before transformation",
    )

    # Emitter configuration
    environment_image: str = Field(
        default="images/moon_1k.hdr",
        description="Environment lighting image referenced by every <model-viewer>",
    )

    # Host configuration
    supported_renderer: str = Field(
        default="html",
        description="The only mdBook renderer this preprocessor runs for",
    )

    strict_mode: bool = Field(
        default=False,
        description="Strict mode: a directive without a name is an error instead of a warning",
    )

    def overrides_apply(self, table: Optional[Dict[str, Any]]) -> "AppSettings":
        """
        Merge a book.toml [preprocessor.kcl] table over these settings.

        Keys may be written kebab-case (as book.toml usually is) or
        snake_case. Keys that are not settings fields are ignored, as are
        the "command" and "renderers" keys mdBook itself consumes.

        Args:
            table: The preprocessor table from the book config, or None

        Returns:
            A new AppSettings instance (self is returned when nothing applies)

        Example:
            >>> AppSettings().overrides_apply({"strict-mode": True}).strict_mode
            True
        """
        if not table:
            return self

        updates: Dict[str, Any] = {}
        for key, value in table.items():
            field_name = key.replace("-", "_")
            if field_name in type(self).model_fields:
                updates[field_name] = value

        if not updates:
            return self
        return type(self)(**{**self.model_dump(), **updates})


# Singleton instance - import this in your code
appsettings = AppSettings()
