# lambdas/eventbridge_to_slack/app.py
"""
Lambda entry point: EventBridge event in, Slack message (or stdout line) out.
"""
from typing import Any, Dict

from .delivery import SlackClient, SlackConstructor, Sink, build_sink
from .errors import DeliveryError
from .evaluator import process
from .logger import logger, setup_logging
from .models import AppSettings, Outcome, get_settings
from .rule import Rule, compile_rule


class Server:
    """Holds the compiled Rule and the sink for the lifetime of the container."""

    def __init__(self, rule: Rule, sink: Sink):
        self.rule = rule
        self.sink = sink

    def handle_request(self, event: Dict[str, Any], context: object = None) -> Dict[str, Any]:
        """
        Processes one event. Template and delivery failures are raised so the
        Lambda runtime records the invocation as failed.
        """
        logger.info("Got an input")
        result = process(self.rule, event)

        if result.outcome is Outcome.FAILED:
            raise result.error
        if result.outcome is Outcome.SUPPRESSED:
            return {"statusCode": 200, "body": "Event suppressed."}

        try:
            self.sink.deliver(result.message)
        except DeliveryError as e:
            logger.warning("unable to post message", extra={"error": str(e)})
            raise
        return {"statusCode": 200, "body": "Message delivered."}


def setup_server(settings: AppSettings, slack_constructor: SlackConstructor = SlackClient) -> Server:
    """
    Compiles the Rule and builds the sink.

    Raises:
        CompilationError: a template or the filter regex is invalid.
        AuthCheckError: Slack credentials were rejected.
    """
    rule = compile_rule(
        message_template=settings.msg_to_send,
        filter_template=settings.filter_template,
        filter_pattern=settings.filter_regex,
    )
    sink = build_sink(settings, slack_constructor)
    return Server(rule, sink)


# Built during the Lambda init phase so a bad config fails before any event is accepted.
SETTINGS = get_settings()
setup_logging(SETTINGS.log_level)
logger.info("Starting", extra={"config": SETTINGS.redacted()})
try:
    SERVER = setup_server(SETTINGS)
except Exception as e:
    logger.exception("unable to setup server")
    raise e


def handler(event: Dict[str, Any], context: object) -> Dict[str, Any]:
    return SERVER.handle_request(event, context)
