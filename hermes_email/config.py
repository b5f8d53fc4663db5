from __future__ import annotations

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from hermes_email.emails.generator import Hermes
from hermes_email.emails.models import Product
from hermes_email.emails.themes import list_themes
from hermes_email.log import logger


class HermesSettings(BaseSettings):
    """Generator defaults, read from HERMES_EMAIL_* environment variables.

    Nested product fields use a double underscore, e.g.
    HERMES_EMAIL_PRODUCT__NAME="Acme".
    """

    model_config = SettingsConfigDict(env_prefix="HERMES_EMAIL_", env_nested_delimiter="__")

    theme: str = "default"
    text_direction: str = "ltr"  # Anything but ltr/rtl falls back to ltr in Hermes
    disable_css_inlining: bool = False
    product: Product = Field(default_factory=Product)

    @field_validator("theme")
    @classmethod
    def _known_theme(cls, value: str) -> str:
        if value not in list_themes():
            msg = f"Unknown theme '{value}'. Available themes: {', '.join(list_themes())}"
            raise ValueError(msg)
        return value

    def build_hermes(self, theme: str | None = None) -> Hermes:
        """Create a generator from these settings, optionally with another theme."""
        return Hermes(
            theme=theme or self.theme,
            text_direction=self.text_direction,
            product=self.product,
            disable_css_inlining=self.disable_css_inlining,
        )


_settings: HermesSettings | None = None


def get_settings(reload: bool = False) -> HermesSettings:
    global _settings
    if not _settings or reload:
        logger.info("Loading hermes email settings")
        _settings = HermesSettings()
    return _settings
