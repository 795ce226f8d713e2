# lambdas/eventbridge_to_slack/models.py
"""
Settings and result models for the EventBridge to Slack notifier.
"""
from dataclasses import dataclass
from enum import Enum
from functools import lru_cache
from typing import Optional

from pydantic import Field, ValidationInfo, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class AppSettings(BaseSettings):
    """
    Manages env vars using Pydantic BaseSettings.
    A .env file next to the process is read as well, which helps local runs.
    """
    model_config = SettingsConfigDict(
        env_file='.env', env_file_encoding='utf-8', extra='ignore', populate_by_name=True
    )

    log_level: str = Field("INFO", alias='LOG_LEVEL')
    slack_client_secret: str = Field("", alias='SLACK_CLIENT_SECRET')
    slack_channel: str = Field("", alias='SLACK_CHANNEL')
    filter_template: str = Field("", alias='FILTER_TEMPLATE')
    filter_regex: str = Field(".+", alias='FILTER_REGEX')
    msg_to_send: str = Field("Event seen", alias='MSG_TO_SEND')

    @field_validator('log_level', 'filter_regex', 'msg_to_send', mode='before')
    @classmethod
    def _empty_means_default(cls, value, info: ValidationInfo):
        # Lambda consoles tend to leave unset variables as empty strings
        if value is None or value == "":
            return cls.model_fields[info.field_name].default
        return value

    def redacted(self) -> dict:
        """Returns the settings as a dict that is safe to write to the logs."""
        data = self.model_dump()
        data['slack_client_secret'] = f"<hidden len={len(self.slack_client_secret)}>"
        return data


@lru_cache
def get_settings() -> AppSettings:
    return AppSettings()


class Outcome(str, Enum):
    DELIVER = "deliver"
    SUPPRESSED = "suppressed"
    FAILED = "failed"


# Reasons attached to a suppressed result
FILTER_NOT_MATCHED = "filter_not_matched"
EMPTY_MESSAGE = "empty_message"


@dataclass(frozen=True)
class EvaluationResult:
    """
    The outcome of running one event through the filter and render stages.

    Exactly one of these holds:
      * DELIVER: `message` is the non-empty text to send.
      * SUPPRESSED: nothing is sent, `reason` says which stage dropped it.
      * FAILED: a template blew up, `error` holds the RenderError.
    """
    outcome: Outcome
    message: str = ""
    reason: str = ""
    error: Optional[Exception] = None

    @classmethod
    def deliver(cls, message: str) -> "EvaluationResult":
        return cls(Outcome.DELIVER, message=message)

    @classmethod
    def suppressed(cls, reason: str) -> "EvaluationResult":
        return cls(Outcome.SUPPRESSED, reason=reason)

    @classmethod
    def failure(cls, error: Exception) -> "EvaluationResult":
        return cls(Outcome.FAILED, reason=str(error), error=error)

    def __bool__(self) -> bool:
        """Allows `if result:` to read as "should this be delivered"."""
        return self.outcome is Outcome.DELIVER

    def __repr__(self) -> str:
        return (f"EvaluationResult(outcome={self.outcome.value}, message={self.message!r}, "
                f"reason={self.reason!r}, error={self.error!r})")
