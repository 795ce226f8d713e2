# lambdas/eventbridge_to_slack/evaluator.py
"""
The filter-and-render pipeline applied to every incoming event.

Nothing here keeps state between calls, so one Rule can serve any number of
concurrent invocations.
"""
from .errors import RenderError
from .logger import logger
from .models import EMPTY_MESSAGE, FILTER_NOT_MATCHED, EvaluationResult
from .rule import Rule


def evaluate_filter(rule: Rule, event: dict) -> bool:
    """
    Decides whether the event is worth a message.

    Without a filter template every event passes. Otherwise the filter template
    is rendered and the pattern is searched for anywhere in the output.

    Raises:
        RenderError: if the filter template fails on this event.
    """
    if rule.filter_template is None:
        return True

    try:
        rendered = rule.filter_template(event)
    except Exception as e:
        raise RenderError("filter", str(e)) from e

    if rule.filter_pattern.search(rendered):
        return True

    logger.info("msg filter does not match", extra={"filter_output": rendered})
    return False


def render_message(rule: Rule, event: dict) -> str:
    """
    Raises:
        RenderError: if the message template fails on this event.
    """
    try:
        return rule.message_template(event)
    except Exception as e:
        raise RenderError("message", str(e)) from e


def process(rule: Rule, event: dict) -> EvaluationResult:
    """Runs both stages and reports the outcome instead of raising."""
    try:
        if not evaluate_filter(rule, event):
            return EvaluationResult.suppressed(FILTER_NOT_MATCHED)
        message = render_message(rule, event)
    except RenderError as e:
        logger.warning("unable to execute template", extra={"stage": e.stage, "error": e.reason})
        return EvaluationResult.failure(e)

    if message == "":
        logger.debug("empty message is skipped")
        return EvaluationResult.suppressed(EMPTY_MESSAGE)

    logger.info("parsed a msg", extra={"rendered_message": message})
    return EvaluationResult.deliver(message)
