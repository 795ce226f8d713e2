# lambdas/eventbridge_to_slack/template_funcs.py
"""
Helper functions available inside message and filter templates.

Every helper is registered twice, as a global function and as a filter, so
both `{{ upper(field("region")) }}` and `{{ field("region") | upper }}` work.
The value being transformed always comes first.
"""
import json
from collections.abc import Mapping
from typing import Any, Callable, Dict

from jinja2 import Undefined, pass_context
from jinja2.runtime import Context


@pass_context
def field(context: Context, *path):
    """
    Walks the event by key (or list index) and returns what it finds.
    A missing step gives an undefined value that renders as "" and is falsy.
    """
    current = context.get("event")
    for step in path:
        if isinstance(current, Mapping) and step in current:
            current = current[step]
        elif isinstance(current, list) and _is_index(step, len(current)):
            current = current[int(step)]
        else:
            return context.environment.undefined(name=".".join(str(p) for p in path))
    return current


def _is_index(step, length: int) -> bool:
    try:
        index = int(step)
    except (TypeError, ValueError):
        return False
    return -length <= index < length


def empty(value) -> bool:
    """Mirrors the usual "zero value" idea: undefined, None, "", 0, False and empty collections."""
    if isinstance(value, Undefined) or value is None:
        return True
    if isinstance(value, bool):
        return not value
    if isinstance(value, (int, float)):
        return value == 0
    if isinstance(value, (str, list, tuple, dict, set)):
        return len(value) == 0
    return False


def default(value, fallback):
    return fallback if empty(value) else value


def coalesce(*values):
    for value in values:
        if not empty(value):
            return value
    return None


def _as_list(value) -> list:
    if empty(value) and not isinstance(value, (bool, int, float)):
        return []
    if isinstance(value, (list, tuple, set)):
        return list(value)
    return [value]


def join(value, separator: str = "") -> str:
    return separator.join("" if item is None else str(item) for item in _as_list(value))


def _text(value) -> str:
    if isinstance(value, Undefined) or value is None:
        return ""
    return str(value)


def upper(value) -> str:
    return _text(value).upper()


def lower(value) -> str:
    return _text(value).lower()


def title(value) -> str:
    return _text(value).title()


def trim(value) -> str:
    return _text(value).strip()


def trim_prefix(value, prefix: str) -> str:
    text = _text(value)
    return text[len(prefix):] if prefix and text.startswith(prefix) else text


def trim_suffix(value, suffix: str) -> str:
    text = _text(value)
    return text[:-len(suffix)] if suffix and text.endswith(suffix) else text


def has_prefix(value, prefix: str) -> bool:
    return _text(value).startswith(prefix)


def has_suffix(value, suffix: str) -> bool:
    return _text(value).endswith(suffix)


def contains(value, needle: str) -> bool:
    return needle in _text(value)


def replace(value, old: str, new: str) -> str:
    return _text(value).replace(old, new)


def split(value, separator: str) -> list:
    text = _text(value)
    return text.split(separator) if text else []


def quote(value) -> str:
    return json.dumps(_text(value))


def first(value):
    items = _as_list(value)
    return items[0] if items else None


def last(value):
    items = _as_list(value)
    return items[-1] if items else None


def rest(value) -> list:
    return _as_list(value)[1:]


def initial(value) -> list:
    return _as_list(value)[:-1]


def uniq(value) -> list:
    seen = []
    for item in _as_list(value):
        if item not in seen:
            seen.append(item)
    return seen


def compact(value) -> list:
    return [item for item in _as_list(value) if not empty(item)]


def has(value, needle) -> bool:
    return needle in _as_list(value)


def sort_alpha(value) -> list:
    return sorted(str(item) for item in _as_list(value))


def to_json(value) -> str:
    # Undefined is not serialisable; treat it like a JSON null
    if isinstance(value, Undefined):
        value = None
    return json.dumps(value, sort_keys=True)


def keys(value) -> list:
    return sorted(value.keys()) if isinstance(value, Mapping) else []


HELPERS: Dict[str, Callable[..., Any]] = {
    "default": default,
    "empty": empty,
    "coalesce": coalesce,
    "join": join,
    "upper": upper,
    "lower": lower,
    "title": title,
    "trim": trim,
    "trim_prefix": trim_prefix,
    "trim_suffix": trim_suffix,
    "has_prefix": has_prefix,
    "has_suffix": has_suffix,
    "contains": contains,
    "replace": replace,
    "split": split,
    "quote": quote,
    "first": first,
    "last": last,
    "rest": rest,
    "initial": initial,
    "uniq": uniq,
    "compact": compact,
    "has": has,
    "sort_alpha": sort_alpha,
    "to_json": to_json,
    "keys": keys,
}
