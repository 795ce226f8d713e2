# lambdas/eventbridge_to_slack/delivery.py
import sys
from typing import Callable, Optional, Protocol, TextIO

import requests

from .errors import AuthCheckError, DeliveryError
from .logger import logger
from .models import AppSettings

SLACK_API_URL = "https://slack.com/api/"


class SlackApiError(Exception):
    """Slack answered with {"ok": false, "error": ...}."""
    def __init__(self, method: str, error: str):
        super().__init__(f"slack {method} failed: {error}")
        self.method = method
        self.error = error


class SlackClient:
    """
    Minimal Slack Web API client: just the two calls the notifier needs.
    """

    def __init__(self, token: str, session: Optional[requests.Session] = None,
                 base_url: str = SLACK_API_URL, timeout: float = 10):
        self.token = token
        self.session = session or requests.Session()
        self.base_url = base_url
        self.timeout = timeout

    def _call(self, method: str, payload: Optional[dict] = None) -> dict:
        response = self.session.post(
            self.base_url + method,
            json=payload or {},
            headers={"Authorization": f"Bearer {self.token}"},
            timeout=self.timeout,
        )
        response.raise_for_status()
        body = response.json()
        if not body.get("ok"):
            raise SlackApiError(method, body.get("error", "unknown_error"))
        return body

    def auth_test(self) -> dict:
        return self._call("auth.test")

    def send_message(self, channel: str, text: str) -> dict:
        return self._call("chat.postMessage", {"channel": channel, "text": text})


class Sink(Protocol):
    def deliver(self, text: str) -> None:
        ...


class StdoutSink:
    """Fallback used when Slack is not configured: the message is just printed."""

    def __init__(self, stream: Optional[TextIO] = None):
        self.stream = stream

    def deliver(self, text: str) -> None:
        try:
            print(text, file=self.stream or sys.stdout, flush=True)
        except (OSError, ValueError) as e:
            raise DeliveryError(f"unable to write message to stdout: {e}") from e


class SlackSink:
    def __init__(self, client: SlackClient, channel: str):
        self.client = client
        self.channel = channel

    def deliver(self, text: str) -> None:
        try:
            self.client.send_message(self.channel, text)
        except (requests.exceptions.RequestException, SlackApiError, ValueError) as e:
            raise DeliveryError(f"unable to post message to {self.channel}: {e}") from e


SlackConstructor = Callable[[str], SlackClient]


def build_sink(settings: AppSettings, slack_constructor: SlackConstructor = SlackClient) -> Sink:
    """
    Picks where messages go. Slack is only used when both the channel and the
    secret are set, and the credentials are checked once here.

    Raises:
        AuthCheckError: if Slack rejects the credentials.
    """
    if not settings.slack_channel:
        logger.warning("no slack channel set.  Just sending messages to stdout")
        return StdoutSink()
    if not settings.slack_client_secret:
        logger.warning("no slack API secret set.  Just sending messages to stdout")
        return StdoutSink()

    client = slack_constructor(settings.slack_client_secret)
    try:
        resp = client.auth_test()
    except (requests.exceptions.RequestException, SlackApiError, ValueError) as e:
        raise AuthCheckError(f"unable to verify slack auth: {e}") from e
    logger.info("slack setup", extra={"team": resp.get("team"), "user": resp.get("user")})
    return SlackSink(client, settings.slack_channel)
