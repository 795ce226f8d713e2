# tests/test_delivery.py
import io
from unittest.mock import MagicMock

import pytest
import requests

from lambdas.eventbridge_to_slack.delivery import (
    SlackApiError,
    SlackClient,
    SlackSink,
    StdoutSink,
    build_sink,
)
from lambdas.eventbridge_to_slack.errors import AuthCheckError, DeliveryError
from lambdas.eventbridge_to_slack.models import AppSettings


def fake_session(body: dict) -> MagicMock:
    """A requests.Session stand-in whose post() answers with `body`."""
    response = MagicMock()
    response.json.return_value = body
    session = MagicMock()
    session.post.return_value = response
    return session


def test_send_message_posts_to_chat_api():
    session = fake_session({"ok": True, "channel": "C123", "ts": "1.2"})
    client = SlackClient("xoxb-token", session=session)

    client.send_message("C123", "hello world")

    args, kwargs = session.post.call_args
    assert args[0] == "https://slack.com/api/chat.postMessage"
    assert kwargs['json'] == {"channel": "C123", "text": "hello world"}
    assert kwargs['headers'] == {"Authorization": "Bearer xoxb-token"}
    assert kwargs['timeout'] == 10


def test_slack_error_body_raises():
    client = SlackClient("xoxb-token", session=fake_session({"ok": False, "error": "channel_not_found"}))

    with pytest.raises(SlackApiError) as excinfo:
        client.send_message("C404", "hi")
    assert excinfo.value.error == "channel_not_found"


def test_http_error_propagates():
    session = fake_session({})
    session.post.return_value.raise_for_status.side_effect = requests.exceptions.HTTPError("500")
    client = SlackClient("xoxb-token", session=session)

    with pytest.raises(requests.exceptions.HTTPError):
        client.auth_test()


def test_slack_sink_wraps_failures():
    client = MagicMock()
    client.send_message.side_effect = SlackApiError("chat.postMessage", "not_in_channel")
    sink = SlackSink(client, "C123")

    with pytest.raises(DeliveryError) as excinfo:
        sink.deliver("hi")
    assert isinstance(excinfo.value.__cause__, SlackApiError)


def test_stdout_sink_prints_message():
    stream = io.StringIO()
    StdoutSink(stream).deliver("region us-east-1")
    assert stream.getvalue() == "region us-east-1\n"


@pytest.mark.parametrize("channel, secret", [("", "xoxb-token"), ("C123", ""), ("", "")])
def test_missing_slack_config_falls_back_to_stdout(channel: str, secret: str):
    constructor = MagicMock()
    settings = AppSettings(slack_channel=channel, slack_client_secret=secret)

    sink = build_sink(settings, constructor)

    assert isinstance(sink, StdoutSink)
    constructor.assert_not_called()


def test_slack_sink_checks_auth_once():
    client = MagicMock()
    client.auth_test.return_value = {"ok": True, "team": "acme", "user": "notifier"}
    constructor = MagicMock(return_value=client)
    settings = AppSettings(slack_channel="C123", slack_client_secret="xoxb-token")

    sink = build_sink(settings, constructor)

    constructor.assert_called_once_with("xoxb-token")
    client.auth_test.assert_called_once_with()
    assert isinstance(sink, SlackSink)
    assert sink.channel == "C123"


def test_failed_auth_check_is_fatal():
    client = MagicMock()
    client.auth_test.side_effect = SlackApiError("auth.test", "invalid_auth")
    settings = AppSettings(slack_channel="C123", slack_client_secret="bad")

    with pytest.raises(AuthCheckError):
        build_sink(settings, MagicMock(return_value=client))


def test_stdout_sink_wraps_write_failures():
    stream = MagicMock()
    stream.write.side_effect = BrokenPipeError("closed")

    with pytest.raises(DeliveryError) as excinfo:
        StdoutSink(stream).deliver("hi")
    assert isinstance(excinfo.value.__cause__, OSError)
