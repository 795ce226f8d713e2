# lambdas/eventbridge_to_slack/rule.py
import re
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any, Callable, Optional, Protocol

from jinja2 import TemplateSyntaxError
from jinja2.sandbox import ImmutableSandboxedEnvironment

from .errors import CompilationError
from .template_funcs import HELPERS, field

DEFAULT_FILTER_PATTERN = ".+"
DEFAULT_MESSAGE = "Event seen"

Renderer = Callable[[Any], str]


class TemplateEngine(Protocol):
    """Anything that can turn template source into a renderer over an event."""
    def compile(self, source: str) -> Renderer:
        ...


def _finalize(value):
    # Render JSON scalars the way they appear in the event, not as Python reprs
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    return value


class JinjaTemplateEngine:
    """
    Compiles templates with a sandboxed Jinja2 environment.

    The whole event is always available as `event`, and its top-level keys are
    template variables too, except keys that share a name with a helper, a
    Jinja global or `event` itself. Those stay reachable with `field("upper")`
    or `field("event")`. Use `field("detail", "scan-status")` for keys that are
    not valid identifiers or may be missing.
    """

    def __init__(self, helpers: Optional[dict] = None):
        self.env = ImmutableSandboxedEnvironment(
            autoescape=False,
            keep_trailing_newline=True,
            finalize=_finalize,
        )
        helpers = HELPERS if helpers is None else helpers
        self.env.globals.update(helpers)
        self.env.globals["field"] = field
        self.env.filters.update(helpers)
        self.reserved = frozenset(self.env.globals) | {"event"}

    def template_variables(self, event) -> dict:
        """Event keys never shadow helpers, so lookups work whatever the event holds."""
        variables = {}
        if isinstance(event, Mapping):
            variables = {k: v for k, v in event.items() if k not in self.reserved}
        variables["event"] = event
        return variables

    def compile(self, source: str) -> Renderer:
        template = self.env.from_string(source)

        def render(event) -> str:
            return template.render(self.template_variables(event))

        return render


@dataclass(frozen=True)
class Rule:
    """
    The compiled filter template, filter pattern and message template.
    Built once at startup and only read afterwards.
    """
    filter_template: Optional[Renderer]
    filter_pattern: re.Pattern
    message_template: Renderer


def compile_rule(
    message_template: str,
    filter_template: str = "",
    filter_pattern: str = "",
    engine: Optional[TemplateEngine] = None,
    compile_pattern: Callable[[str], re.Pattern] = re.compile,
) -> Rule:
    """
    Compiles the three configured strings into a Rule.

    Raises:
        CompilationError: naming which of the three inputs is invalid.
    """
    engine = engine or JinjaTemplateEngine()

    try:
        message = engine.compile(message_template or DEFAULT_MESSAGE)
    except (TemplateSyntaxError, ValueError) as e:
        raise CompilationError("message_template", str(e)) from e

    filter_renderer = None
    if filter_template:
        try:
            filter_renderer = engine.compile(filter_template)
        except (TemplateSyntaxError, ValueError) as e:
            raise CompilationError("filter_template", str(e)) from e

    try:
        pattern = compile_pattern(filter_pattern or DEFAULT_FILTER_PATTERN)
    except re.error as e:
        raise CompilationError("filter_pattern", str(e)) from e

    return Rule(filter_template=filter_renderer, filter_pattern=pattern, message_template=message)
