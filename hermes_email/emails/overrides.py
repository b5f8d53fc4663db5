"""Merge per-email style overrides into a theme's base stylesheet.

Resolution order, later steps winning on colliding (selector, property) pairs:

1. the theme's base styles (theme patches already applied),
2. the ``body_width`` directive, written to the body and footer columns,
3. the structured ``css`` override,
4. the raw ``additional_styles`` CSS.

Merges only add or replace properties, never remove them. Resolution never
raises: inputs it cannot use are logged and skipped.
"""

from collections.abc import Iterable, Mapping
from typing import Any

from pydantic import ValidationError

from hermes_email.emails.css_parser import parse_styles_definition
from hermes_email.emails.models import DEFAULT_BODY_WIDTH, ResolvedStyles, StyleMap, TemplateOverrides
from hermes_email.emails.stylesheet import BODY_WIDTH_SELECTORS
from hermes_email.emails.themes import clone_styles
from hermes_email.log import logger


class UnrecognizedStylesError(ValueError):
    """Raised internally when a structured override has an unsupported shape."""


def _normalize_value(value: Any) -> str:
    if isinstance(value, str):
        return value
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (int, float)):
        return str(value)
    msg = f"unsupported property value {value!r}"
    raise UnrecognizedStylesError(msg)


def _normalize_props(selector: Any, props: Any) -> dict[str, str]:
    if not isinstance(selector, str):
        msg = f"selector must be a string, got {type(selector).__name__}"
        raise UnrecognizedStylesError(msg)
    if not isinstance(props, Mapping):
        msg = f"properties of '{selector}' must be a mapping, got {type(props).__name__}"
        raise UnrecognizedStylesError(msg)

    normalized = {}
    for prop, value in props.items():
        if value is None:
            continue
        if not isinstance(prop, str):
            msg = f"property names of '{selector}' must be strings"
            raise UnrecognizedStylesError(msg)
        normalized[prop] = _normalize_value(value)
    return normalized


def _iter_pairs(styles: Any) -> Iterable[tuple[Any, Any]]:
    if isinstance(styles, Mapping):
        return styles.items()
    if isinstance(styles, (list, tuple)):
        pairs = []
        for item in styles:
            if not isinstance(item, (list, tuple)) or len(item) != 2:
                msg = "sequence overrides must hold (selector, properties) pairs"
                raise UnrecognizedStylesError(msg)
            pairs.append((item[0], item[1]))
        return pairs
    msg = f"unsupported override type {type(styles).__name__}"
    raise UnrecognizedStylesError(msg)


def normalize_styles(styles: Any) -> StyleMap | None:
    """Bring a caller-supplied style override into style map shape.

    Accepted shapes:
        - raw CSS text, parsed with :func:`parse_styles_definition`
        - a mapping of selector -> mapping of property -> scalar value
        - a list or tuple of ``(selector, properties)`` pairs

    Numbers and booleans are turned into strings, ``None`` values and blank
    selectors are dropped.
    Any other shape returns ``None``, meaning "no override".
    """
    if styles is None:
        return None
    if isinstance(styles, str):
        return parse_styles_definition(styles)

    try:
        normalized: StyleMap = {}
        for selector, props in _iter_pairs(styles):
            props = _normalize_props(selector, props)
            if not selector.strip():
                logger.debug("Skipping css override with a blank selector")
                continue
            normalized.setdefault(selector, {}).update(props)
    except UnrecognizedStylesError as e:
        logger.warning(f"Ignoring css override: {e}")
        return None
    return normalized


def merge_styles(target: StyleMap, overrides: Mapping[str, Mapping[str, Any]]) -> StyleMap:
    """Merge *overrides* into *target* in place, overriding per property."""
    for selector, props in overrides.items():
        if selector in target:
            target[selector].update(props)
        else:
            target[selector] = dict(props)
    return target


def _coerce_overrides(overrides: TemplateOverrides | Mapping[str, Any] | None) -> TemplateOverrides:
    if overrides is None:
        return TemplateOverrides()
    if isinstance(overrides, TemplateOverrides):
        return overrides
    if isinstance(overrides, Mapping):
        try:
            return TemplateOverrides.model_validate(dict(overrides))
        except ValidationError as e:
            logger.warning(f"Ignoring malformed template overrides: {e}")
            return TemplateOverrides()
    logger.warning(f"Ignoring template overrides of type {type(overrides).__name__}")
    return TemplateOverrides()


def resolve_styles(
    base: Mapping[str, Mapping[str, Any]],
    overrides: TemplateOverrides | Mapping[str, Any] | None = None,
) -> ResolvedStyles:
    """Compute the styles rendered for one email.

    *base* is copied before any change, so theme data passed in is never
    mutated. The returned ``body_width`` is the width the responsive
    breakpoint must use.
    """
    styles = clone_styles(base)
    payload = _coerce_overrides(overrides)

    body_width = payload.body_width.strip() if payload.body_width else ""
    if body_width:
        for selector in BODY_WIDTH_SELECTORS:
            if selector in styles:
                styles[selector]["width"] = body_width
            else:
                logger.debug(f"Body width not applied, selector '{selector}' missing from base styles")

    structured = normalize_styles(payload.css)
    if structured:
        merge_styles(styles, structured)

    if payload.additional_styles:
        merge_styles(styles, parse_styles_definition(payload.additional_styles))

    return ResolvedStyles(styles=styles, body_width=body_width or DEFAULT_BODY_WIDTH)
