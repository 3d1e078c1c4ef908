import contextvars
import logging
import os
import sys
from collections.abc import Sequence

import ddtrace
import json_log_formatter
from ddtrace.trace import tracer

# Datadog log correlation is only wired when an agent is reachable
_is_datadog_configured = bool(os.environ.get("DD_AGENT_HOST"))

if _is_datadog_configured:
    LOG_FORMAT: str = (
        "%(asctime)s %(levelname)s [%(name)s] [%(filename)s:%(lineno)d] "
        "[dd.trace_id=%(dd_trace_id)s dd.span_id=%(dd_span_id)s] - %(message)s"
    )
else:
    LOG_FORMAT: str = (
        "%(asctime)s %(levelname)s [%(name)s] [%(filename)s:%(lineno)d] - %(message)s"
    )

__all__: Sequence[str] = ("make_logger", "LOG_FORMAT", "ctx_var_request_id")

ctx_var_request_id = contextvars.ContextVar[str]("request_id")


def _resolve_log_level() -> int:
    level_name = os.environ.get("LOG_LEVEL", "INFO").upper()
    level = logging.getLevelName(level_name)
    return level if isinstance(level, int) else logging.INFO


class CustomJSONFormatter(json_log_formatter.JSONFormatter):
    def json_record(self, message: str, extra: dict, record: logging.LogRecord) -> dict:
        extra = super().json_record(message, extra, record)
        extra["level"] = record.levelname
        extra["name"] = record.name
        extra["lineno"] = record.lineno
        extra["pathname"] = record.pathname

        request_id = ctx_var_request_id.get(None)
        if request_id:
            extra["request_id"] = request_id

        correlation = tracer.get_log_correlation_context()
        extra["dd.trace_id"] = correlation.get("dd.trace_id", None) or getattr(
            record, "dd.trace_id", 0
        )
        extra["dd.span_id"] = correlation.get("dd.span_id", None) or getattr(
            record, "dd.span_id", 0
        )

        # Falls back to DD_SERVICE / DD_ENV / DD_VERSION when tracing is not set up
        for key, config_value in (
            ("service", ddtrace.config.service),
            ("env", ddtrace.config.env),
            ("version", ddtrace.config.version),
        ):
            value = config_value or os.getenv(f"DD_{key.upper()}")
            if value:
                extra[f"dd.{key}"] = value

        return extra


def make_logger(name: str) -> logging.Logger:
    if name is None or not isinstance(name, str) or len(name) == 0:
        raise ValueError("Name must be a non-empty string.")

    logger = logging.getLogger(name)
    if not logger.handlers:
        stream_handler = logging.StreamHandler()
        if _is_datadog_configured:
            stream_handler.setFormatter(CustomJSONFormatter())
        else:
            stream_handler.setFormatter(logging.Formatter(LOG_FORMAT))
        logger.addHandler(stream_handler)
    logger.setLevel(_resolve_log_level())

    def handle_exception(exc_type, exc_value, exc_traceback):
        if issubclass(exc_type, KeyboardInterrupt):
            sys.__excepthook__(exc_type, exc_value, exc_traceback)
            return

        logger.error(
            "Uncaught exception", exc_info=(exc_type, exc_value, exc_traceback)
        )

    sys.excepthook = handle_exception
    return logger
