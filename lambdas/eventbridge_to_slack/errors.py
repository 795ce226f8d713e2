# lambdas/eventbridge_to_slack/errors.py


class NotifierError(Exception):
    """Base class for every error raised by the notifier."""
    pass


class CompilationError(NotifierError, ValueError):
    """
    A template or the filter pattern could not be compiled at startup.

    `source` names the setting that failed: "message_template",
    "filter_template" or "filter_pattern".
    """
    def __init__(self, source: str, reason: str):
        super().__init__(f"unable to compile {source.replace('_', ' ')}: {reason}")
        self.source = source
        self.reason = reason


class RenderError(NotifierError):
    """A template failed while rendering a single event."""
    def __init__(self, stage: str, reason: str):
        super().__init__(f"unable to execute {stage} template: {reason}")
        self.stage = stage
        self.reason = reason


class DeliveryError(NotifierError):
    """The destination rejected or never received the message."""
    pass


class AuthCheckError(NotifierError):
    """Slack credentials could not be verified during setup."""
    pass
