"""
Pydantic configuration for loading and running a screen.
"""

from pathlib import Path
from typing import Union

from pydantic import BaseModel, Field, ValidationError, field_validator

from dockscreen.controls import ScreenError, Vec2
from dockscreen.logging_config import get_logger

logger = get_logger(__name__)


class ConfigurationError(ScreenError):
    """Raised when configuration is invalid."""

    pass


class ScreenConfig(BaseModel):
    """
    Settings shared by the parser, the resolver, the spawn layer and the
    interaction system.
    """

    screen_width: float = Field(default=1920.0, gt=0.0)
    screen_height: float = Field(default=1080.0, gt=0.0)

    # Screen files are read from assets_dir; fonts from assets-relative fonts_dir
    assets_dir: str = "assets"
    fonts_dir: str = "fonts"

    click_cooldown_seconds: float = Field(default=0.5, ge=0.0)

    # Legacy behaviour: store controls without a name under the empty key
    allow_unnamed_controls: bool = False

    @field_validator("fonts_dir")
    @classmethod
    def validate_fonts_dir(cls, v):
        """Font paths are joined onto this, keep it relative."""
        if Path(v).is_absolute():
            raise ValueError(f"fonts_dir must be relative to the asset root, got '{v}'")
        return v

    @property
    def screen_size(self) -> Vec2:
        return Vec2(x=self.screen_width, y=self.screen_height)

    def font_path(self, font_name: str) -> str:
        """Asset path of a font, e.g. 'fonts/FiraSans-Bold.ttf'."""
        return f"{self.fonts_dir}/{font_name}" if self.fonts_dir else font_name

    @classmethod
    def from_json_file(cls, path: Union[str, Path]) -> "ScreenConfig":
        """
        Load configuration from a JSON file.

        Raises:
            ConfigurationError: If the file is unreadable or fails validation
        """
        try:
            text = Path(path).read_text(encoding="utf-8")
        except OSError as e:
            raise ConfigurationError(f"Unable to read configuration [{path}]: {e}") from e

        try:
            config = cls.model_validate_json(text)
        except ValidationError as e:
            raise ConfigurationError(f"Invalid configuration [{path}]: {e}") from e

        logger.debug(f"Loaded configuration from {path}")
        return config
