"""Tests for the MCP tools."""

from unittest.mock import patch

import pytest

from hermes_email.app import generate_email, list_themes, resolve_email_styles
from hermes_email.config import HermesSettings
from hermes_email.emails.models import (
    Body,
    Email,
    GeneratedEmailResponse,
    Product,
    StylesheetResponse,
    TemplateOverrides,
)

# ============================================================================
# Themes
# ============================================================================


class TestListThemes:
    @pytest.mark.asyncio
    async def test_builtin_themes(self):
        """Test that both built-in themes are listed."""
        assert await list_themes() == ["default", "flat"]


# ============================================================================
# Email generation
# ============================================================================


class TestGenerateEmail:
    """Test the generate_email tool against configured settings."""

    @pytest.fixture
    def settings(self):
        return HermesSettings(theme="flat", disable_css_inlining=True, product=Product(name="Acme"))

    @pytest.mark.asyncio
    async def test_uses_configured_theme(self, settings):
        """Test that the configured theme and product are used."""
        email = Email(body=Body(name="Jon", intros=["Welcome!"]))

        with patch("hermes_email.app.get_settings", return_value=settings):
            result = await generate_email(email=email)

        assert isinstance(result, GeneratedEmailResponse)
        assert result.theme == "flat"
        assert "background-color: #2c3e50;" in result.html
        assert "Welcome!" in result.html
        assert "Welcome!" in result.plain_text
        assert "Acme" in result.plain_text

    @pytest.mark.asyncio
    async def test_theme_argument(self, settings):
        with patch("hermes_email.app.get_settings", return_value=settings):
            result = await generate_email(email=Email(), theme="default")

        assert result.theme == "default"
        assert "background-color: #F2F4F6;" in result.html

    @pytest.mark.asyncio
    async def test_overrides_applied(self, settings):
        """Test that template overrides in the email reach the stylesheet."""
        email = Email(body=Body(template_overrides=TemplateOverrides(body_width="800px")))

        with patch("hermes_email.app.get_settings", return_value=settings):
            result = await generate_email(email=email)

        assert "max-width: 800px" in result.html
        assert "570px" not in result.html

    @pytest.mark.asyncio
    async def test_inlining_argument(self, settings):
        with patch("hermes_email.app.get_settings", return_value=settings):
            result = await generate_email(email=Email(), disable_css_inlining=False)

        assert 'style="' in result.html

    @pytest.mark.asyncio
    async def test_unknown_theme(self, settings):
        with patch("hermes_email.app.get_settings", return_value=settings):
            with pytest.raises(ValueError) as exc_info:
                await generate_email(email=Email(), theme="neon")

        assert "Unknown theme 'neon'" in str(exc_info.value)


# ============================================================================
# Style resolution
# ============================================================================


class TestResolveEmailStyles:
    @pytest.mark.asyncio
    async def test_defaults(self):
        """Test resolution of the configured theme without overrides."""
        with patch("hermes_email.app.get_settings", return_value=HermesSettings()):
            result = await resolve_email_styles()

        assert isinstance(result, StylesheetResponse)
        assert result.theme == "default"
        assert result.body_width == "570px"
        assert result.styles["body"]["background-color"] == "#F2F4F6"
        assert "body {" in result.stylesheet
        assert "max-width: 570px" in result.breakpoint

    @pytest.mark.asyncio
    async def test_overrides(self):
        """Test that every override source is applied in order."""
        result = await resolve_email_styles(
            theme="flat",
            body_width="800px",
            css={"body": {"color": "#000000", "background-color": "#111111"}},
            additional_styles="body { background-color: #222222; }",
        )

        assert result.theme == "flat"
        assert result.body_width == "800px"
        assert result.styles[".email-footer"]["width"] == "800px"
        assert result.styles["body"]["color"] == "#000000"
        assert result.styles["body"]["background-color"] == "#222222"
        assert "max-width: 800px" in result.breakpoint

    @pytest.mark.asyncio
    async def test_raw_css_string(self):
        result = await resolve_email_styles(theme="default", css=".button { border-radius: 0; }")

        assert result.styles[".button"]["border-radius"] == "0"

    @pytest.mark.asyncio
    async def test_unknown_theme(self):
        with pytest.raises(ValueError, match="Unknown theme"):
            await resolve_email_styles(theme="neon")
