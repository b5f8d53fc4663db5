import abc
from functools import cache
from typing import TYPE_CHECKING

from jinja2 import Environment, PackageLoader, Template
from markupsafe import Markup

from hermes_email.emails.markdown_utils import markdown_to_email_html

if TYPE_CHECKING:
    from hermes_email.emails.models import StyleMap


@cache
def template_environment() -> Environment:
    """Shared Jinja2 environment that loads the bundled email templates."""
    env = Environment(
        loader=PackageLoader("hermes_email.emails", "templates"),
        autoescape=True,
        keep_trailing_newline=True,
    )
    env.filters["markdown"] = lambda text: Markup(markdown_to_email_html(text))
    return env


class Theme(abc.ABC):
    @property
    @abc.abstractmethod
    def name(self) -> str:
        """
        The name of the theme, used to select it
        """

    @abc.abstractmethod
    def html_template(self) -> str:
        """
        Jinja2 source of the template generating HTML emails

        Rendered with hermes, email, stylesheet, at_rules and breakpoint. at_rules
        holds @font-face and similar rules that must stay out of CSS inlining.
        """

    @abc.abstractmethod
    def plain_text_template(self) -> str:
        """
        Jinja2 source of the template generating plain text emails (can be basic HTML)
        """

    @abc.abstractmethod
    def styles(self) -> "StyleMap":
        """
        Base stylesheet of the theme.

        Every call must return an independent copy: callers are free to mutate it.
        """

    def parsed_html_template(self) -> Template:
        """
        Compiled HTML template. Themes shipping pre-parsed templates override this.
        """
        return template_environment().from_string(self.html_template())

    def parsed_plain_text_template(self) -> Template:
        """
        Compiled plain text template. Themes shipping pre-parsed templates override this.
        """
        return template_environment().from_string(self.plain_text_template())
