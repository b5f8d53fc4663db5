"""Markdown to HTML and HTML to plain text conversion for email bodies."""

import html2text
import markdown as md

# Extensions safe for email clients (no CSS class dependencies)
EMAIL_SAFE_EXTENSIONS = ["tables", "fenced_code", "nl2br", "sane_lists"]


def markdown_to_email_html(text: str) -> str:
    """Convert markdown text to an email-safe HTML fragment.

    Args:
        text: Markdown-formatted text

    Returns:
        HTML fragment, ready to be embedded in an email template
    """
    if not text:
        return ""

    return md.markdown(
        text,
        extensions=EMAIL_SAFE_EXTENSIONS,
        extension_configs={
            "fenced_code": {"lang_prefix": ""},  # No CSS classes
            "tables": {"use_align_attribute": True},  # align="..." instead of style
        },
    )


def html_to_plain_text(html: str) -> str:
    """Convert a rendered HTML email into readable plain text.

    Tables are padded so columns line up and images are dropped.
    """
    converter = html2text.HTML2Text()
    converter.body_width = 0  # No hard wrapping
    converter.ignore_images = True
    converter.ignore_emphasis = True
    converter.pad_tables = True
    converter.unicode_snob = True
    return converter.handle(html).strip() + "\n"
