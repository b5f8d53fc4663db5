"""Parser for the small CSS subset accepted as email style overrides.

Syntax example:
    /* standalone comment lines are dropped */
    body { color: #111; background-color: #fff; }
    .a, .b { font-size: 14px; }
    @font-face /* v1 */ { font-family: MyFont; src: url("v1.woff2"); }

Comments inside a selector are kept as part of the selector text, so two rules
with otherwise identical selectors can be told apart. Nesting, media query
bodies and value syntax are not interpreted.
"""

import re

from hermes_email.emails.models import StyleMap

__all__ = ["parse_styles_definition"]

# Matches a complete rule: selector { declarations }
_BLOCK_RE = re.compile(
    r"""
    (?P<selector>[^{}]+)    # everything since the previous brace
    \{
    (?P<body>[^{}]+)        # declarations, may span lines
    \}
    """,
    re.VERBOSE | re.DOTALL,
)

_COMMENT_RE = re.compile(r"/\*.*?\*/", re.DOTALL)


def _strip_standalone_comments(css: str) -> str:
    """Drop lines holding nothing but a comment."""
    kept = []
    for line in css.splitlines():
        stripped = line.strip()
        if stripped.startswith("/*") and stripped.endswith("*/") and "{" not in stripped:
            continue
        kept.append(line)
    return "\n".join(kept)


def _parse_declarations(body: str) -> dict[str, str]:
    props: dict[str, str] = {}
    for declaration in _COMMENT_RE.sub("", body).split(";"):
        key, colon, value = declaration.partition(":")
        if not colon:
            continue
        key = key.strip()
        value = value.strip()
        if key and value:
            props[key] = value
    return props


def parse_styles_definition(css: str) -> StyleMap:
    """Parse raw CSS text into a style map.

    Malformed declarations are skipped, rules without any valid declaration
    are dropped, and comma-separated selectors each receive the full property
    set. A selector seen again later in the text gets the new properties
    merged into its existing entry.
    """
    styles: StyleMap = {}
    if not css:
        return styles

    for match in _BLOCK_RE.finditer(_strip_standalone_comments(css)):
        selector_text = match.group("selector").strip()
        body = match.group("body").strip()
        if not selector_text or not body:
            continue

        props = _parse_declarations(body)
        if not props:
            continue

        for selector in selector_text.split(","):
            selector = selector.strip()
            if not selector:
                continue
            styles.setdefault(selector, {}).update(props)
    return styles
