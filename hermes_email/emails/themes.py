"""Built-in email themes and the theme registry.

The default stylesheet is a packaged JSON asset read once at import time. It is
never handed out directly: every theme builds its styles from a fresh copy, so
concurrent generations can mutate their own styles freely.
"""

import json
from collections.abc import Mapping
from importlib import resources
from typing import Any

from hermes_email.emails import Theme
from hermes_email.emails.models import StyleMap
from hermes_email.log import logger

DEFAULT_STYLES_ASSET = "default.css.json"


def clone_styles(styles: Mapping[str, Mapping[str, Any]]) -> StyleMap:
    """Copy a style map down to its property sets."""
    return {selector: dict(props) for selector, props in styles.items()}


def _load_default_styles() -> StyleMap:
    asset = resources.files("hermes_email.emails") / "templates" / DEFAULT_STYLES_ASSET
    styles = json.loads(asset.read_text(encoding="utf-8"))
    logger.debug(f"Loaded {len(styles)} default selectors from {DEFAULT_STYLES_ASSET}")
    return styles


_DEFAULT_STYLES: StyleMap = _load_default_styles()


def get_default_styles() -> StyleMap:
    """Return an independent copy of the default stylesheet."""
    return clone_styles(_DEFAULT_STYLES)


def _read_template(name: str) -> str:
    return (resources.files("hermes_email.emails") / "templates" / name).read_text(encoding="utf-8")


class DefaultTheme(Theme):
    html_template_name = "default.html.j2"
    plain_text_template_name = "plain.txt.j2"

    @property
    def name(self) -> str:
        return "default"

    def html_template(self) -> str:
        return _read_template(self.html_template_name)

    def plain_text_template(self) -> str:
        return _read_template(self.plain_text_template_name)

    def styles(self) -> StyleMap:
        return get_default_styles()


class FlatTheme(DefaultTheme):
    """Flat variant of the default theme: dark background, square teal buttons."""

    html_template_name = "flat.html.j2"

    # (selector, property, value) applied over the default styles
    STYLE_PATCHES: tuple[tuple[str, str, str], ...] = (
        ("body", "background-color", "#2c3e50"),
        (".email-wrapper", "background-color", "#2c3e50"),
        (".email-footer p", "color", "#eaeaea"),
        (".button", "background-color", "#00948d"),
        (".button", "border-radius", "0"),
    )

    @property
    def name(self) -> str:
        return "flat"

    def styles(self) -> StyleMap:
        styles = get_default_styles()
        for selector, prop, value in self.STYLE_PATCHES:
            styles.setdefault(selector, {})[prop] = value
        return styles


_THEMES: dict[str, type[Theme]] = {}


def register_theme(theme_cls: type[Theme]) -> type[Theme]:
    """Make a theme class selectable by name. Usable as a class decorator."""
    name = theme_cls().name
    if name in _THEMES and _THEMES[name] is not theme_cls:
        logger.warning(f"Replacing registered theme '{name}' with {theme_cls.__name__}")
    _THEMES[name] = theme_cls
    return theme_cls


register_theme(DefaultTheme)
register_theme(FlatTheme)


def list_themes() -> list[str]:
    return sorted(_THEMES)


def get_theme(name: str) -> Theme:
    try:
        theme_cls = _THEMES[name]
    except KeyError:
        msg = f"Unknown theme '{name}'. Available themes: {', '.join(list_themes())}"
        raise ValueError(msg) from None
    return theme_cls()


def base_styles(theme_name: str) -> StyleMap:
    """Base stylesheet of a registered theme, safe to mutate."""
    return get_theme(theme_name).styles()
