import logging
from typing import Any, Literal

from jinja2 import Template
from markupsafe import Markup
from premailer import Premailer
from pydantic import BaseModel, ConfigDict, Field, field_validator

from hermes_email.emails import Theme
from hermes_email.emails.markdown_utils import html_to_plain_text
from hermes_email.emails.models import Email, Product
from hermes_email.emails.overrides import resolve_styles
from hermes_email.emails.stylesheet import breakpoint, serialize_styles, split_at_rules
from hermes_email.emails.themes import DefaultTheme, get_theme
from hermes_email.log import logger

TextDirection = Literal["ltr", "rtl"]

DEFAULT_TEXT_DIRECTION: TextDirection = "ltr"


def inline_css(html: str) -> str:
    """Copy stylesheet rules into the style attributes of matching elements.

    Rules that cannot be inlined (media queries, pseudo-classes) stay in a
    <style> block.
    """
    premailer = Premailer(
        html,
        disable_validation=True,
        strip_important=False,
        remove_classes=False,
        cssutils_logging_level=logging.CRITICAL,
    )
    return premailer.transform()


class Hermes(BaseModel):
    """Email generator: renders an Email with a theme into HTML or plain text"""

    model_config = ConfigDict(arbitrary_types_allowed=True)

    theme: Theme = Field(default_factory=DefaultTheme)
    text_direction: TextDirection = DEFAULT_TEXT_DIRECTION
    product: Product = Field(default_factory=Product)
    disable_css_inlining: bool = False

    @field_validator("theme", mode="before")
    @classmethod
    def _theme_by_name(cls, value: Any) -> Any:
        if isinstance(value, str):
            return get_theme(value)
        return value

    @field_validator("text_direction", mode="before")
    @classmethod
    def _fallback_text_direction(cls, value: Any) -> Any:
        if value in ("ltr", "rtl"):
            return value
        logger.warning(f"Invalid text direction {value!r}, using '{DEFAULT_TEXT_DIRECTION}'")
        return DEFAULT_TEXT_DIRECTION

    def generate_html(self, email: Email) -> str:
        """Generate the HTML body of an email, for modern email clients."""
        template = self.theme.parsed_html_template()
        html = self._render(email, template)
        if self.disable_css_inlining:
            return html
        return inline_css(html)

    def generate_plain_text(self, email: Email) -> str:
        """Generate the plain text body of an email, for old email clients."""
        template = self.theme.parsed_plain_text_template()
        return html_to_plain_text(self._render(email, template))

    def _render(self, email: Email, template: Template) -> str:
        email = email.model_copy(deep=True)
        body = email.body

        if body.table.data:
            logger.warning("Email.body.table is deprecated, please use Email.body.tables instead")
            body.tables.append(body.table)

        resolved = resolve_styles(self.theme.styles(), body.template_overrides)
        logger.debug(
            f"Rendering '{self.theme.name}' email with {len(resolved.styles)} selectors, "
            f"body width {resolved.body_width}"
        )

        rules, at_rules = split_at_rules(resolved.styles)
        return template.render(
            hermes=self,
            email=email,
            stylesheet=Markup(serialize_styles(rules)),
            at_rules=Markup(serialize_styles(at_rules)),
            breakpoint=Markup(breakpoint(resolved.body_width)),
        )
