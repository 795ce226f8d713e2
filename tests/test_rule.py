# tests/test_rule.py
import dataclasses
import re

import pytest
from jinja2.exceptions import SecurityError

from lambdas.eventbridge_to_slack.errors import CompilationError
from lambdas.eventbridge_to_slack.rule import (
    DEFAULT_FILTER_PATTERN,
    DEFAULT_MESSAGE,
    JinjaTemplateEngine,
    compile_rule,
)


def test_defaults_are_applied():
    rule = compile_rule("")

    assert rule.filter_template is None
    assert rule.filter_pattern.pattern == DEFAULT_FILTER_PATTERN
    assert rule.message_template({}) == DEFAULT_MESSAGE


def test_default_pattern_needs_non_empty_text():
    rule = compile_rule("x")
    assert rule.filter_pattern.search("a")
    assert not rule.filter_pattern.search("")


def test_rule_is_immutable():
    rule = compile_rule("x")
    with pytest.raises(dataclasses.FrozenInstanceError):
        rule.message_template = None


@pytest.mark.parametrize("kwargs, source", [
    ({"message_template": "{{ oops"}, "message_template"),
    ({"message_template": "{{ field('a') | no_such_filter }}"}, "message_template"),
    ({"message_template": "ok", "filter_template": "{% if x %}"}, "filter_template"),
    ({"message_template": "ok", "filter_template": "{{ x }}", "filter_pattern": "([a-z"}, "filter_pattern"),
])
def test_compilation_errors_name_the_source(kwargs: dict, source: str):
    with pytest.raises(CompilationError) as excinfo:
        compile_rule(**kwargs)

    assert excinfo.value.source == source
    assert excinfo.value.__cause__ is not None


def test_message_template_is_compiled_before_the_pattern():
    with pytest.raises(CompilationError) as excinfo:
        compile_rule("{{ broken", filter_pattern="([")
    assert excinfo.value.source == "message_template"


def test_custom_engine_and_matcher_are_used():
    compiled = []

    class UpperEngine:
        def compile(self, source):
            compiled.append(source)
            return lambda event: source.upper()

    rule = compile_rule("hi", filter_template="f", filter_pattern="F",
                        engine=UpperEngine(), compile_pattern=lambda p: re.compile(p, re.IGNORECASE))

    assert compiled == ["hi", "f"]
    assert rule.message_template({}) == "HI"
    assert rule.filter_pattern.flags & re.IGNORECASE


def test_engine_exposes_event_and_top_level_keys():
    render = JinjaTemplateEngine().compile('{{ region }}/{{ event["detail-type"] }}')
    assert render({"region": "eu-west-1", "detail-type": "Ping"}) == "eu-west-1/Ping"


def test_engine_renders_json_scalars():
    render = JinjaTemplateEngine().compile('{{ a }} {{ b }} [{{ c }}]')
    assert render({"a": True, "b": False, "c": None}) == "true false []"


def test_engine_cannot_mutate_the_event():
    event = {"a": 1}
    render = JinjaTemplateEngine().compile('{{ event.update({"a": 2}) }}')
    with pytest.raises(SecurityError):
        render(event)
    assert event == {"a": 1}
