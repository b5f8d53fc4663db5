from typing import Any

from pydantic import BaseModel, ConfigDict, Field, ValidationInfo, field_validator

from hermes_email.log import logger

# selector -> property -> value
StyleMap = dict[str, dict[str, Any]]

DEFAULT_BODY_WIDTH = "570px"


class TemplateOverrides(BaseModel):
    """Per-email style directives supplied by the email author"""

    model_config = ConfigDict(extra="allow")

    body_width: str | None = None  # CSS length, e.g. "800px"
    css: Any = None  # Structured override, see overrides.normalize_styles
    additional_styles: str | None = None  # Raw CSS text

    @field_validator("body_width", "additional_styles", mode="before")
    @classmethod
    def _drop_non_string(cls, value: Any, info: ValidationInfo) -> str | None:
        if value is None or isinstance(value, str):
            return value
        logger.warning(f"Ignoring template override '{info.field_name}' of type {type(value).__name__}")
        return None


class ResolvedStyles(BaseModel):
    """Stylesheet data actually rendered for one email"""

    styles: StyleMap
    body_width: str = DEFAULT_BODY_WIDTH


class Product(BaseModel):
    """Company product (brand), shown in header and footer of emails"""

    name: str = "Hermes"
    link: str = ""  # e.g. https://matcornic.github.io
    logo: str = ""  # e.g. https://matcornic.github.io/img/logo.png
    copyright: str = "Copyright © 2025 Hermes. All rights reserved."
    # {ACTION} is replaced by the button text
    trouble_text: str = (
        "If you’re having trouble with the button '{ACTION}', copy and paste the URL below into your web browser."
    )


class Entry(BaseModel):
    """Key/value pair, used for dictionaries and table cells"""

    key: str
    value: str = ""
    unsafe_value: str = ""  # Raw HTML, rendered without escaping


class Columns(BaseModel):
    """Display metadata for table columns, keyed by column name"""

    custom_width: dict[str, str] = Field(default_factory=dict)
    custom_alignment: dict[str, str] = Field(default_factory=dict)


class Table(BaseModel):
    """Tabular data (pricing grid, a bill, and so on)"""

    title: str = ""
    title_unsafe: str = ""  # Raw HTML title, wins over title
    data: list[list[Entry]] = Field(default_factory=list)
    columns: Columns = Field(default_factory=Columns)


class Button(BaseModel):
    color: str = ""
    text_color: str = ""
    text: str = ""
    link: str = ""


class Action(BaseModel):
    """Something the user can act on: a button click or an invite code"""

    instructions: str = ""
    button: Button = Field(default_factory=Button)
    invite_code: str = ""


class Body(BaseModel):
    """Body of the email, containing all displayed content"""

    name: str = ""  # Name of the contacted person
    intros: list[str] = Field(default_factory=list)
    intros_markdown: str = ""  # Overrides intros
    intros_unsafe: list[str] = Field(default_factory=list)
    dictionary: list[Entry] = Field(default_factory=list)
    table: Table = Field(default_factory=Table)  # Deprecated, use tables
    tables: list[Table] = Field(default_factory=list)
    actions: list[Action] = Field(default_factory=list)
    outros_markdown: str = ""  # Overrides outros
    outros_unsafe: list[str] = Field(default_factory=list)
    outros: list[str] = Field(default_factory=list)
    greeting: str = "Hi"
    signature: str = "Yours truly"
    title: str = ""  # Replaces greeting + name when set
    free_markdown: str = ""  # Replaces everything between intros and outros
    template_overrides: TemplateOverrides = Field(default_factory=TemplateOverrides)


class Email(BaseModel):
    body: Body = Field(default_factory=Body)


class GeneratedEmailResponse(BaseModel):
    """Response for generate_email operation"""

    theme: str
    html: str
    plain_text: str


class StylesheetResponse(BaseModel):
    """Response for resolve_email_styles operation"""

    theme: str
    body_width: str
    styles: StyleMap
    stylesheet: str
    breakpoint: str
