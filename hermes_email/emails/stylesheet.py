"""Render style maps as stylesheet text for the email <style> block."""

from collections.abc import Mapping
from typing import Any

from hermes_email.emails.models import DEFAULT_BODY_WIDTH, StyleMap

# Selectors sized by the body width, collapsed to full width under the breakpoint
BODY_WIDTH_SELECTORS = (".email-body_inner", ".email-footer")


def serialize_styles(styles: Mapping[str, Mapping[str, Any]]) -> str:
    """Render one block per selector.

    Selectors and properties are emitted in sorted order so identical style maps
    always produce identical text. Selector text and values are written verbatim.
    """
    blocks = []
    for selector in sorted(styles):
        props = styles[selector]
        lines = [f"{selector} {{"]
        lines.extend(f"  {prop}: {props[prop]};" for prop in sorted(props))
        lines.append("}")
        blocks.append("\n".join(lines))
    return "\n".join(blocks)


def split_at_rules(styles: Mapping[str, Mapping[str, Any]]) -> tuple[StyleMap, StyleMap]:
    """Separate ordinary rules from at-rules such as @font-face.

    At-rules cannot be inlined into style attributes, so they are rendered in
    their own <style> block that the inliner leaves alone.
    """
    rules: StyleMap = {}
    at_rules: StyleMap = {}
    for selector, props in styles.items():
        target = at_rules if selector.lstrip().startswith("@") else rules
        target[selector] = dict(props)
    return rules, at_rules


def breakpoint(width: str | None = None) -> str:
    """Media query collapsing the body columns once the viewport is narrower than *width*."""
    width = width or DEFAULT_BODY_WIDTH
    selectors = ",\n  ".join(BODY_WIDTH_SELECTORS)
    return f"@media only screen and (max-width: {width}) {{\n  {selectors} {{\n    width: 100% !important;\n  }}\n}}"
