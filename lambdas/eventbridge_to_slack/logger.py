# lambdas/eventbridge_to_slack/logger.py
from aws_lambda_powertools import Logger

# Shared logger so every module writes the same structured JSON lines.
logger = Logger(service="eventbridge-to-slack")

_LEVEL_ALIASES = {
    "DEBUG": "DEBUG",
    "INFO": "INFO",
    "WARN": "WARNING",
    "WARNING": "WARNING",
    "ERROR": "ERROR",
    "CRITICAL": "CRITICAL",
    "DPANIC": "CRITICAL",
    "PANIC": "CRITICAL",
    "FATAL": "CRITICAL",
}


def parse_log_level(value: str) -> tuple[str, bool]:
    """Returns (level, parsed_ok). Unknown names fall back to INFO."""
    level = _LEVEL_ALIASES.get((value or "").strip().upper())
    if level is None:
        return "INFO", False
    return level, True


def setup_logging(log_level: str) -> Logger:
    level, ok = parse_log_level(log_level)
    logger.setLevel(level)
    if not ok:
        logger.warning("unable to parse log level", extra={"log_level": log_level})
    return logger
