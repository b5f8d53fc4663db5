from typing import Annotated, Any

from mcp.server.fastmcp import FastMCP
from pydantic import Field

from hermes_email.config import get_settings
from hermes_email.emails.models import (
    Email,
    GeneratedEmailResponse,
    StylesheetResponse,
    TemplateOverrides,
)
from hermes_email.emails.overrides import resolve_styles
from hermes_email.emails.stylesheet import breakpoint, serialize_styles
from hermes_email.emails.themes import base_styles
from hermes_email.emails.themes import list_themes as available_themes

mcp = FastMCP("hermes-email")


@mcp.tool(description="List the names of the available email themes.")
async def list_themes() -> list[str]:
    return available_themes()


@mcp.tool(
    description="Generate the HTML and plain text bodies of a transactional email from structured content. "
    "Style overrides go in email.body.template_overrides (body_width, css, additional_styles)."
)
async def generate_email(
    email: Annotated[Email, Field(description="The email content: name, intros, tables, actions, outros, ...")],
    theme: Annotated[
        str | None,
        Field(default=None, description="The theme to render with. Defaults to the configured theme."),
    ] = None,
    disable_css_inlining: Annotated[
        bool | None,
        Field(default=None, description="Keep styles in a <style> block instead of inlining them."),
    ] = None,
) -> GeneratedEmailResponse:
    settings = get_settings()
    hermes = settings.build_hermes(theme)
    if disable_css_inlining is not None:
        hermes.disable_css_inlining = disable_css_inlining

    return GeneratedEmailResponse(
        theme=hermes.theme.name,
        html=hermes.generate_html(email),
        plain_text=hermes.generate_plain_text(email),
    )


@mcp.tool(
    description="Resolve the stylesheet an email would be rendered with, after theme and override merging."
)
async def resolve_email_styles(
    theme: Annotated[
        str | None,
        Field(default=None, description="The theme whose base styles are used. Defaults to the configured theme."),
    ] = None,
    body_width: Annotated[
        str | None, Field(default=None, description="CSS width of the email body column, e.g. '800px'.")
    ] = None,
    css: Annotated[
        dict[str, dict[str, Any]] | str | None,
        Field(default=None, description="Structured overrides: selector -> property -> value, or raw CSS."),
    ] = None,
    additional_styles: Annotated[
        str | None, Field(default=None, description="Raw CSS merged last, winning over every other source.")
    ] = None,
) -> StylesheetResponse:
    theme_name = theme or get_settings().theme
    overrides = TemplateOverrides(body_width=body_width, css=css, additional_styles=additional_styles)
    resolved = resolve_styles(base_styles(theme_name), overrides)

    return StylesheetResponse(
        theme=theme_name,
        body_width=resolved.body_width,
        styles=resolved.styles,
        stylesheet=serialize_styles(resolved.styles),
        breakpoint=breakpoint(resolved.body_width),
    )


def main() -> None:
    mcp.run()
